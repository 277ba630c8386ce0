"""
Character source for the JSON parser.

Wraps a text stream and adds a one-character pushback slot and line
counting. Apart from the pushback slot nothing is buffered here; the
underlying stream is advanced one character at a time.
"""

from typing import IO

from ._profile import ProfileContext
from .errors import InvalidValueError
from .errors import ParseTracker
from .errors import UnexpectedCharacterError
from .errors import UnexpectedEndError

NEW_LINE_CHAR = "\n"
CARRIAGE_RETURN_CHAR = "\r"
QUOTE_CHAR = '"'
BACKSLASH_CHAR = "\\"
SLASH_CHAR = "/"
ASTERISK_CHAR = "*"

# Characters that end a literal token and belong to the enclosing structure
VALUE_TERMINATORS = frozenset(",}]")

# Highest code point skipped as whitespace: control characters and space
WHITESPACE_LIMIT = 0x20

_ESCAPE_MAP = {
    "n": "\n",
    "f": "\f",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "\\": "\\",
    '"': '"',
    "/": "/",
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _is_whitespace(char: str) -> bool:
    return ord(char) <= WHITESPACE_LIMIT


def _is_surrogate(char: str) -> bool:
    return 0xD800 <= ord(char) <= 0xDFFF


class CharacterSource:
    """
    Reads JSON text one character at a time.

    The pushback slot holds at most one character. Pushing back while the
    slot is full replaces its content: the last pushback wins. Every newline
    taken from the stream advances the tracker exactly once, whichever read
    method consumed it.
    """

    def __init__(self, stream: IO[str], tracker: ParseTracker | None = None):
        self.stream = stream
        self.tracker = tracker if tracker is not None else ParseTracker()
        self._pushback: str | None = None

    def push_back(self, char: str) -> None:
        """Makes ``char`` the next character returned by a read call."""
        self._pushback = char

    def _next(self) -> str | None:
        """Returns the pushback slot or the next raw stream character."""
        if self._pushback is not None:
            char, self._pushback = self._pushback, None
            return char

        char = self.stream.read(1)
        if not char:
            return None
        if char == NEW_LINE_CHAR:
            self.tracker.next_line()
        return char

    def read_char(self) -> str | None:
        """Returns the next character without skipping anything."""
        return self._next()

    def read(self) -> str | None:
        """
        Returns the next character that is not whitespace.

        Space, tab, newline and all other control characters up to 0x20 are
        skipped. Returns None once the input is exhausted.
        """
        while (char := self._next()) is not None:
            if not _is_whitespace(char):
                return char
        return None

    def read_line(self) -> str:
        """
        Reads raw text up to the next newline or the end of input.

        The newline is consumed but not returned, and a trailing carriage
        return is dropped.
        """
        chars: list[str] = []
        while (char := self._next()) is not None:
            if char == NEW_LINE_CHAR:
                break
            chars.append(char)

        if chars and chars[-1] == CARRIAGE_RETURN_CHAR:
            chars.pop()
        return "".join(chars)

    def read_multiline_comment(self) -> str:
        """Reads raw text up to and excluding the closing ``*/``."""
        with ProfileContext("read_multiline_comment"):
            chars: list[str] = []
            asterisk = False

            while (char := self._next()) is not None:
                if asterisk and char == SLASH_CHAR:
                    chars.pop()
                    return "".join(chars)
                asterisk = char == ASTERISK_CHAR
                chars.append(char)

            raise UnexpectedEndError(self.tracker.line)

    def read_string(self, allow_newline: bool = True) -> str:
        """
        Reads a string body; the opening quote must already be consumed.

        Decodes the escapes ``\\n \\f \\r \\t \\b \\\\ \\" \\/`` and
        ``\\uXXXX``. Consecutive ``\\u`` escapes forming a UTF-16 surrogate
        pair are combined into one character.
        """
        with ProfileContext("read_string"):
            chars: list[str] = []
            has_surrogates = False

            while (char := self._next()) is not None:
                if char == QUOTE_CHAR:
                    result = "".join(chars)
                    if has_surrogates:
                        result = _combine_surrogates(result)
                    return result

                if char == BACKSLASH_CHAR:
                    decoded = self._read_escape()
                    has_surrogates = has_surrogates or _is_surrogate(decoded)
                    chars.append(decoded)
                elif char == NEW_LINE_CHAR and not allow_newline:
                    # The newline was already counted; report the string's line
                    raise UnexpectedCharacterError(char, self.tracker.line - 1)
                else:
                    chars.append(char)

            raise UnexpectedEndError(self.tracker.line)

    def _read_escape(self) -> str:
        char = self._next()
        if char is None:
            raise UnexpectedEndError(self.tracker.line)

        if char in _ESCAPE_MAP:
            return _ESCAPE_MAP[char]
        if char != "u":
            raise UnexpectedCharacterError(char, self.tracker.line)

        digits = []
        for _ in range(4):
            digit = self._next()
            if digit is None:
                raise UnexpectedEndError(self.tracker.line)
            digits.append(digit)

        hex_digits = "".join(digits)
        if not all(d in _HEX_DIGITS for d in hex_digits):
            raise InvalidValueError(f"\\u{hex_digits}", self.tracker.line)
        return chr(int(hex_digits, 16))

    def read_token(self, stop_at_slash: bool = False) -> str:
        """
        Reads a raw literal token such as a number, ``true`` or ``null``.

        The token ends at whitespace or at a structural character (``,``,
        ``}``, ``]`` and, with ``stop_at_slash``, ``/``). A structural
        terminator is pushed back for the caller. Leading whitespace is
        skipped. Returns an empty string if a terminator comes first.
        """
        with ProfileContext("read_token"):
            chars: list[str] = []

            char = self.read()
            while char is not None:
                if char in VALUE_TERMINATORS or (
                    stop_at_slash and char == SLASH_CHAR
                ):
                    self.push_back(char)
                    return "".join(chars)
                if _is_whitespace(char):
                    return "".join(chars)

                chars.append(char)
                char = self._next()

            raise UnexpectedEndError(self.tracker.line)

    def close(self) -> None:
        self.stream.close()


def _combine_surrogates(text: str) -> str:
    return text.encode("utf-16-le", "surrogatepass").decode(
        "utf-16-le", "surrogatepass"
    )


__all__ = ["CharacterSource"]
