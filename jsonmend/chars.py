import re

# Every predicate takes a single character. Past the end of the input the
# parser hands out "", which no predicate accepts.

WHITESPACE = frozenset(" \t\n\r")

# Unicode space separators that get normalized to a plain space
SPECIAL_WHITESPACE_RANGES = (
    (0x00A0, 0x00A0),  # no-break space
    (0x2000, 0x200A),  # en quad .. hair space
    (0x202F, 0x202F),  # narrow no-break space
    (0x205F, 0x205F),  # medium mathematical space
    (0x3000, 0x3000),  # ideographic space
)

DOUBLE_QUOTE = '"'
DOUBLE_QUOTE_LIKE = frozenset('"\u201c\u201d')  # " “ ”
SINGLE_QUOTE_LIKE = frozenset("'\u2018\u2019\u0060\u00b4")  # ' ‘ ’ ` ´

# Which characters may close a string, keyed by the opening quote
MATCHING_END_QUOTES = {DOUBLE_QUOTE: frozenset(DOUBLE_QUOTE)}
MATCHING_END_QUOTES.update({q: DOUBLE_QUOTE_LIKE for q in DOUBLE_QUOTE_LIKE - {DOUBLE_QUOTE}})
MATCHING_END_QUOTES.update({q: SINGLE_QUOTE_LIKE for q in SINGLE_QUOTE_LIKE})

# Raw control characters and the escape they are repaired into
CONTROL_CHARACTERS = {
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Characters allowed after a backslash inside a JSON string (besides "u")
ESCAPE_CHARACTERS = frozenset('"\\/bfnrt')

DELIMITERS = frozenset(",:[]{}()\n")
OPENING_AND_CLOSING_BRACKETS = frozenset("{}[]")

_WORD_CHARACTER = re.compile(r"\w")


def is_whitespace(char: str) -> bool:
    return char in WHITESPACE


def is_special_whitespace(char: str) -> bool:
    if len(char) != 1:
        return False
    code = ord(char)
    return any(low <= code <= high for low, high in SPECIAL_WHITESPACE_RANGES)


def is_double_quote_like(char: str) -> bool:
    return char in DOUBLE_QUOTE_LIKE


def is_single_quote_like(char: str) -> bool:
    return char in SINGLE_QUOTE_LIKE


def is_quote(char: str) -> bool:
    return is_double_quote_like(char) or is_single_quote_like(char)


def is_matching_end_quote(start_quote: str, char: str) -> bool:
    """True when ``char`` closes a string opened with ``start_quote``.

    Single-like quotes close each other. A curly double quote is closed by
    any double-like quote, while a plain ``"`` only by another ``"``.
    """
    closers = MATCHING_END_QUOTES.get(start_quote)
    return closers is not None and char in closers


def is_control_character(char: str) -> bool:
    return char in CONTROL_CHARACTERS


def is_digit(char: str) -> bool:
    return len(char) == 1 and "0" <= char <= "9"


def is_non_zero_digit(char: str) -> bool:
    return len(char) == 1 and "1" <= char <= "9"


def is_hex(char: str) -> bool:
    return len(char) == 1 and char in "0123456789abcdefABCDEF"


def is_valid_string_character(char: str) -> bool:
    """Anything from space upwards that is a Unicode scalar value."""
    if len(char) != 1:
        return False
    code = ord(char)
    return code >= 0x20 and not 0xD800 <= code <= 0xDFFF


def is_delimiter(char: str) -> bool:
    return char in DELIMITERS or is_quote(char)


def is_start_of_value(char: str) -> bool:
    if len(char) != 1:
        return False
    return (
        char in "[{-"
        or _WORD_CHARACTER.match(char) is not None
        or is_quote(char)
    )
