"""
Error raised when a document cannot be repaired.
"""


class JSONRepairError(ValueError):
    """Raised in strict mode when no heuristic can repair the input."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at position {position}")
        self.message = message
        self.position = position

    def to_dict(self) -> dict:
        return {
            "error": {
                "message": self.message,
                "type": self.__class__.__name__,
                "position": self.position,
            }
        }
