import re

from jsonmend.chars import (
    CONTROL_CHARACTERS,
    ESCAPE_CHARACTERS,
    OPENING_AND_CLOSING_BRACKETS,
    is_control_character,
    is_delimiter,
    is_digit,
    is_hex,
    is_matching_end_quote,
    is_non_zero_digit,
    is_quote,
    is_special_whitespace,
    is_start_of_value,
    is_valid_string_character,
    is_whitespace,
)
from jsonmend.edits import (
    ends_with_comma_or_newline,
    insert_before_last_whitespace,
    remove_at_index,
    strip_last_occurrence,
)
from jsonmend.errors import JSONRepairError

DEFAULT_MAX_DEPTH = 256

# (literal in the input, JSON keyword written to the output)
KEYWORDS = (
    ("true", "true"),
    ("false", "false"),
    ("null", "null"),
    # Python constants
    ("True", "true"),
    ("False", "false"),
    ("None", "null"),
)

JSON_WHITESPACE = " \t\n\r"

_UNSAFE_IN_STRING = re.compile(r"[\\\x00-\x1f]")
_WORD_CHARACTER = re.compile(r"\w")


def _escape_string_character(char: str) -> str:
    if char == "\\":
        return "\\\\"
    if char in CONTROL_CHARACTERS:
        return CONTROL_CHARACTERS[char]
    return f"\\u{ord(char):04x}"


def _quote_symbol(symbol: str) -> str:
    escaped = _UNSAFE_IN_STRING.sub(lambda m: _escape_string_character(m.group()), symbol)
    return f'"{escaped}"'


class JSONRepairParser:
    """
    Single pass recursive descent parser that writes a repaired copy of the
    input while it reads it.

    ``pos`` only moves forward and ``output`` is appended to, except for the
    handful of repairs that can only be recognized after the affected text
    was already written (see ``jsonmend.edits``).
    """

    def __init__(self, strict=False, max_depth=DEFAULT_MAX_DEPTH):
        self.strict = strict
        self.max_depth = max_depth
        self.text = ""
        self.pos = 0
        self.output = ""
        self.depth = 0

    def feed(self, text):
        self.text = text
        self.pos = 0
        self.output = ""
        self.depth = 0

    def peek(self, offset=0) -> str:
        idx = self.pos + offset
        if idx < len(self.text):
            return self.text[idx]
        return ""

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def fail(self, message, position=None):
        """Raise in strict mode, otherwise let the caller carry on best-effort."""
        if self.strict:
            raise JSONRepairError(message, self.pos if position is None else position)

    def repair(self, text: str) -> str:
        self.feed(text)
        try:
            return self.parse_root()
        except RecursionError:
            # max_depth set above what the interpreter stack can hold
            raise JSONRepairError("Maximum nesting depth exceeded", self.pos) from None

    def parse_root(self) -> str:
        processed = self.parse_value()
        if not processed:
            if self.at_end():
                self.fail("Unexpected end of json string", len(self.text))
            else:
                self.fail(f"Unexpected character {self.peek()!r}")

        processed_comma = self.parse_character(",")
        if processed_comma:
            self.parse_whitespace_and_skip_comments()

        if is_start_of_value(self.peek()) and ends_with_comma_or_newline(self.output):
            # another value after the root value: newline delimited JSON
            if not processed_comma:
                # repair missing comma
                self.output = insert_before_last_whitespace(self.output, ",")
            self.parse_newline_delimited_json()
        elif processed_comma:
            # repair: remove trailing comma
            self.output = strip_last_occurrence(self.output, ",")

        if not self.at_end():
            self.fail(f"Unexpected character {self.peek()!r}")

        return self.output

    def parse_value(self) -> bool:
        self.depth += 1
        if self.depth > self.max_depth:
            raise JSONRepairError(f"Maximum nesting depth of {self.max_depth} exceeded", self.pos)
        try:
            self.parse_whitespace_and_skip_comments()
            processed = (
                self.parse_object()
                or self.parse_array()
                or self.parse_string()
                or self.parse_number()
                or self.parse_keywords()
                or self.parse_unquoted_string()
            )
            self.parse_whitespace_and_skip_comments()
        finally:
            self.depth -= 1
        return processed

    def parse_whitespace_and_skip_comments(self) -> bool:
        start = self.pos
        changed = True
        while changed:
            changed = self.parse_whitespace()
            changed = self.skip_comment() or changed
        return self.pos > start

    def parse_whitespace(self) -> bool:
        whitespace = []
        while True:
            char = self.peek()
            if is_whitespace(char):
                whitespace.append(char)
            elif is_special_whitespace(char):
                # repair special whitespace
                whitespace.append(" ")
            else:
                break
            self.pos += 1

        if whitespace:
            self.output += "".join(whitespace)
            return True
        return False

    def skip_comment(self) -> bool:
        if self.peek() != "/":
            return False

        if self.peek(1) == "*":
            # block comment, possibly running to the end of the input
            end = self.text.find("*/", self.pos + 2)
            self.pos = len(self.text) if end == -1 else end + 2
            return True

        if self.peek(1) == "/":
            # line comment, the newline itself is kept
            end = self.text.find("\n", self.pos + 2)
            self.pos = len(self.text) if end == -1 else end
            return True

        return False

    def parse_character(self, char) -> bool:
        if self.peek() == char:
            self.output += char
            self.pos += 1
            return True
        return False

    def skip_character(self, char) -> bool:
        if self.peek() == char:
            self.pos += 1
            return True
        return False

    def parse_object(self) -> bool:
        if self.peek() != "{":
            return False

        self.output += "{"
        self.pos += 1
        self.parse_whitespace_and_skip_comments()

        initial = True
        while not self.at_end() and self.peek() != "}":
            if not initial:
                if not self.parse_character(","):
                    # repair missing comma
                    self.output = insert_before_last_whitespace(self.output, ",")
                self.parse_whitespace_and_skip_comments()

            processed_key = self.parse_string() or self.parse_unquoted_string()
            if not processed_key:
                char = self.peek()
                if char in OPENING_AND_CLOSING_BRACKETS or char == "":
                    if not initial:
                        # repair trailing comma
                        self.output = strip_last_occurrence(self.output, ",")
                else:
                    self.fail("Object key expected")
                break
            initial = False

            self.parse_whitespace_and_skip_comments()
            processed_colon = self.parse_character(":")
            if not processed_colon:
                if is_start_of_value(self.peek()):
                    # repair missing colon
                    self.output = insert_before_last_whitespace(self.output, ":")
                else:
                    self.fail("Colon expected")

            if not self.parse_value():
                if processed_colon:
                    # repair missing object value
                    self.output += "null"
                else:
                    self.fail("Colon expected")

        if self.peek() == "}":
            self.output += "}"
            self.pos += 1
        else:
            # repair missing end bracket
            self.output = insert_before_last_whitespace(self.output, "}")

        return True

    def parse_array(self) -> bool:
        if self.peek() != "[":
            return False

        self.output += "["
        self.pos += 1
        self.parse_whitespace_and_skip_comments()

        initial = True
        while not self.at_end() and self.peek() != "]":
            if not initial:
                if not self.parse_character(","):
                    # repair missing comma
                    self.output = insert_before_last_whitespace(self.output, ",")

            if not self.parse_value():
                if not initial:
                    # repair trailing comma
                    self.output = strip_last_occurrence(self.output, ",")
                break
            initial = False

        if self.peek() == "]":
            self.output += "]"
            self.pos += 1
        else:
            # repair missing closing array bracket
            self.output = insert_before_last_whitespace(self.output, "]")

        return True

    def parse_newline_delimited_json(self):
        """Wrap root level values separated by newlines (or commas) in an array."""
        first = self.output.rstrip(JSON_WHITESPACE)
        if first.endswith(","):
            first = first[:-1].rstrip(JSON_WHITESPACE)
        self.output = "[" + first

        while True:
            # the separator between two values turns into a single comma
            mark = len(self.output)
            self.parse_whitespace_and_skip_comments()
            self.output = self.output[:mark]
            if self.at_end():
                break

            self.output += ","
            if not self.parse_value():
                self.output = self.output[:mark]
                break
            self.output = self.output.rstrip(JSON_WHITESPACE)
            self.skip_character(",")

        self.output += "]"

    def parse_string(self, concatenate=True) -> bool:
        skip_escape_chars = False
        if self.peek() == "\\" and is_quote(self.peek(1)):
            # repair: a string inside stringified JSON like \"hello\"
            skip_escape_chars = True
            self.pos += 1
        elif not is_quote(self.peek()):
            return False

        start_quote = self.peek()
        self.output += '"'
        self.pos += 1

        while not self.at_end() and not is_matching_end_quote(start_quote, self.peek()):
            if self.peek() == "\\":
                self.parse_escape_sequence()
            else:
                self.parse_string_character(self.peek())

            if skip_escape_chars:
                self.skip_character("\\")

        # repair missing or non-normalized end quote
        self.output += '"'
        if not self.at_end():
            self.pos += 1

        if concatenate:
            self.parse_concatenated_string()

        return True

    def parse_escape_sequence(self):
        char = self.peek(1)
        if char in ESCAPE_CHARACTERS:
            self.output += self.text[self.pos:self.pos + 2]
            self.pos += 2
        elif char == "u":
            hex_digits = self.text[self.pos + 2:self.pos + 6]
            if len(hex_digits) == 4 and all(is_hex(c) for c in hex_digits):
                self.output += self.text[self.pos:self.pos + 6]
                self.pos += 6
            else:
                end = self.pos + 2
                while end < len(self.text) and _WORD_CHARACTER.match(self.text[end]):
                    end += 1
                self.fail(f'Invalid unicode character "{self.text[self.pos:end]}"')
                # lenient: keep the "u" without its backslash
                self.output += "u"
                self.pos += 2
        else:
            # repair invalid escape character: drop the backslash
            self.pos += 1
            if not self.at_end():
                self.parse_string_character(char)

    def parse_string_character(self, char):
        if char == '"':
            # repair unescaped double quote
            self.output += '\\"'
        elif is_control_character(char):
            # repair unescaped control character
            self.output += CONTROL_CHARACTERS[char]
        elif is_valid_string_character(char):
            self.output += char
        else:
            self.fail(f"Invalid character {char!r}")
            self.output += _escape_string_character(char)
        self.pos += 1

    def parse_concatenated_string(self) -> bool:
        """Splice ``"a" + "b"`` into ``"ab"``."""
        processed = False

        self.parse_whitespace_and_skip_comments()
        while self.peek() == "+":
            processed = True
            self.pos += 1
            self.parse_whitespace_and_skip_comments()

            # repair: remove the end quote of the first string
            self.output = strip_last_occurrence(self.output, '"', strip_remaining_text=True)
            start = len(self.output)
            if not self.parse_string(concatenate=False):
                self.output += '"'
                break

            # repair: remove the start quote of the second string
            self.output = remove_at_index(self.output, start, 1)
            self.parse_whitespace_and_skip_comments()

        return processed

    def parse_number(self) -> bool:
        start = self.pos
        if self.peek() == "-":
            self.pos += 1
            if self.expect_digit_or_repair(start):
                return True

        if self.peek() == "0":
            self.pos += 1
        elif is_non_zero_digit(self.peek()):
            self.pos += 1
            while is_digit(self.peek()):
                self.pos += 1
        else:
            # no integer part, so not a number
            self.pos = start
            return False

        if self.peek() == ".":
            self.pos += 1
            if self.expect_digit_or_repair(start):
                return True
            while is_digit(self.peek()):
                self.pos += 1

        if self.peek() in ("e", "E"):
            self.pos += 1
            if self.peek() in ("-", "+"):
                self.pos += 1
            if self.expect_digit_or_repair(start):
                return True
            while is_digit(self.peek()):
                self.pos += 1

        self.output += self.text[start:self.pos]
        return True

    def expect_digit_or_repair(self, start) -> bool:
        """
        Return False when the next character is the digit the number needs.
        Otherwise the number so far is completed with a "0" and True is
        returned; a number cut off at the end of the input is the expected
        case, anything else is an invalid number.
        """
        if is_digit(self.peek()):
            return False

        so_far = self.text[start:self.pos]
        if not self.at_end():
            self.fail(f"Invalid number '{so_far}', expecting a digit but got {self.peek()!r}")

        # repair numbers cut off at the end
        self.output += so_far + "0"
        return True

    def parse_keywords(self) -> bool:
        for name, value in KEYWORDS:
            if self.text.startswith(name, self.pos):
                self.output += value
                self.pos += len(name)
                return True
        return False

    def parse_unquoted_string(self) -> bool:
        # the symbol may contain spaces, it runs until the next delimiter
        start = self.pos
        while not self.at_end() and not is_delimiter(self.peek()):
            self.pos += 1

        if self.pos == start:
            return False

        if self.peek() == "(":
            # repair a function call like NumberLong("2") or callback({...});
            self.pos += 1
            if not self.parse_value():
                self.fail("Value expected")
                # repair a call without arguments like f()
                self.output += "null"
            if self.skip_character(")"):
                self.skip_character(";")
            return True

        # go back so trailing whitespace stays outside of the string
        while self.pos > start and is_whitespace(self.text[self.pos - 1]):
            self.pos -= 1

        symbol = self.text[start:self.pos]
        self.output += "null" if symbol == "undefined" else _quote_symbol(symbol)
        return True
