from typing import Iterable

from jsonmend.parser import DEFAULT_MAX_DEPTH, JSONRepairParser


def repair_json(text: str, strict: bool = False, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """
    Repair a string containing an invalid JSON document, for example the
    output of an LLM.

        >>> repair_json("{name: 'John'}")
        '{"name": "John"}'

    Args:
        text: The whole document.
        strict: Raise ``JSONRepairError`` for input no heuristic can repair
            (or trailing garbage after the document) instead of returning
            the best-effort output.
        max_depth: Maximum nesting of values. Exceeding it always raises.

    Returns:
        The repaired JSON text.
    """
    if not isinstance(text, str):
        raise TypeError(f"repair_json expects a str, got {type(text).__name__}")
    return JSONRepairParser(strict=strict, max_depth=max_depth).repair(text)


class JSONRepair:
    def __init__(self, strict=False, max_depth=DEFAULT_MAX_DEPTH):
        self.strict = strict
        self.max_depth = max_depth

    def repair(self, text: str) -> str:
        return repair_json(text, strict=self.strict, max_depth=self.max_depth)

    def repair_stream(self, stream: Iterable[str]) -> str:
        """Collect a stream of text chunks and repair them as one document."""
        chunks = []
        for chunk in stream:
            chunks.append(chunk)
        return self.repair("".join(chunks))
