"""
Line tracking and typed parse errors shared by the reader and the parser.

Every error raised while parsing carries the line at which it was detected,
taken from the ``ParseTracker`` owned by the current parse call.
"""

import logging

logger: logging.Logger = logging.getLogger("docjson")
logger.addHandler(logging.NullHandler())

type LineNumber = int


class ParseTracker:
    """
    Counts lines consumed during a single parse call.

    Starts at line 1 and only ever moves forward.
    """

    def __init__(self) -> None:
        self._line: LineNumber = 1

    @property
    def line(self) -> LineNumber:
        return self._line

    def next_line(self) -> None:
        self._line += 1

    def __repr__(self) -> str:
        return f"ParseTracker(line={self._line})"


class ParseError(ValueError):
    """
    Handles JSON parsing failures with the line they were detected on.

    Subclasses describe what went wrong; this base holds the message and
    position so callers can catch every parse failure in one place.
    """

    def __init__(self, msg: str, lineno: LineNumber = 1) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(lineno, int) or lineno < 1:
            raise ValueError("lineno must be a positive integer")

        self.msg = msg
        self.lineno = lineno

        super().__init__(f"{msg} in line {lineno}")


class UnexpectedCharacterError(ParseError):
    """Raised when the grammar expects a specific token and sees another."""

    def __init__(self, char: str, lineno: LineNumber) -> None:
        self.char = char
        super().__init__(f"Unexpected character {char!r}", lineno)


class UnexpectedEndError(ParseError):
    """Raised when input ends while a structure is still open."""

    def __init__(self, lineno: LineNumber) -> None:
        super().__init__("Unexpected end of input", lineno)


class InvalidValueError(ParseError):
    """
    Raised when a literal token cannot be converted to any value type.

    The underlying conversion failure, if any, is kept on ``cause`` and is
    also chained as ``__cause__`` by the raising code.
    """

    def __init__(
        self,
        value: str | None,
        lineno: LineNumber,
        cause: BaseException | None = None,
    ) -> None:
        self.value = value
        self.cause = cause

        msg = "Could not parse value"
        if value is not None:
            msg += f" {value!r}"
        if cause is not None:
            msg += f" ({type(cause).__name__}: {cause})"
        super().__init__(msg, lineno)


__all__ = [
    "InvalidValueError",
    "ParseError",
    "ParseTracker",
    "UnexpectedCharacterError",
    "UnexpectedEndError",
    "logger",
]
