from jsonmend.errors import JSONRepairError
from jsonmend.parser import DEFAULT_MAX_DEPTH, JSONRepairParser
from jsonmend.repair import JSONRepair, repair_json

__all__ = [
    "repair_json",
    "JSONRepair",
    "JSONRepairParser",
    "JSONRepairError",
    "DEFAULT_MAX_DEPTH",
]
