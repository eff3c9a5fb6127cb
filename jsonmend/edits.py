import re

from jsonmend.chars import is_whitespace

# A comma or newline followed only by horizontal whitespace at the very end
_ENDS_WITH_COMMA_OR_NEWLINE = re.compile(r"[,\n][ \t\r]*$")


def strip_last_occurrence(text: str, text_to_strip: str, strip_remaining_text: bool = False) -> str:
    """
    Remove the last occurrence of ``text_to_strip`` from ``text``.

    With ``strip_remaining_text`` everything after the occurrence goes too.
    Returns ``text`` unchanged when the literal does not occur.
    """
    index = text.rfind(text_to_strip)
    if index == -1:
        return text
    if strip_remaining_text:
        return text[:index]
    return text[:index] + text[index + len(text_to_strip):]


def insert_before_last_whitespace(text: str, text_to_insert: str) -> str:
    """
    Insert ``text_to_insert`` in front of the trailing run of whitespace,
    so ``'[1 \\n'`` becomes ``'[1] \\n'`` instead of ``'[1 \\n]'``.
    """
    index = len(text)
    if index == 0 or not is_whitespace(text[index - 1]):
        # no trailing whitespace
        return text + text_to_insert

    while index > 0 and is_whitespace(text[index - 1]):
        index -= 1

    return text[:index] + text_to_insert + text[index:]


def remove_at_index(text: str, start: int, count: int) -> str:
    return text[:start] + text[start + count:]


def ends_with_comma_or_newline(text: str) -> bool:
    return _ENDS_WITH_COMMA_OR_NEWLINE.search(text) is not None
