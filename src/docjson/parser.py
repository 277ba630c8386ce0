"""
Recursive-descent JSON parser producing documents.

Grammar, starting at ``document``::

    document := ws* ( object | array ) ws*
    object   := '{' ws* ( member (',' ws* member)* )? ws* '}'
    member   := string ws* ':' ws* value
    array    := '[' ws* ( value (',' ws* value)* )? ws* ']'
    value    := string | object | array | number | true | false | null
    ws       := control characters up to 0x20 | comment (if enabled)
    comment  := '//' ... '\\n' | '/*' ... '*/'

A bare top-level array is wrapped into a document under
``ParseConfig.array_wrapper_key``; empty input yields an empty document.
The parser keeps no state besides the call stack of its methods and the
character source of the current call.
"""

import io
import math
import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import IO
from typing import Any
from typing import BinaryIO

from ._profile import ProfileContext
from .document import Document
from .document import DocumentFactory
from .document import Entry
from .document import SequentialDocument
from .errors import InvalidValueError
from .errors import ParseTracker
from .errors import UnexpectedCharacterError
from .errors import UnexpectedEndError
from .errors import logger
from .reader import SLASH_CHAR
from .reader import CharacterSource
from .values import NumberKind
from .values import TypedNumber
from .values import Value

CURLY_BRACKET_OPEN_CHAR = "{"
CURLY_BRACKET_CLOSE_CHAR = "}"
SQUARE_BRACKET_OPEN_CHAR = "["
SQUARE_BRACKET_CLOSE_CHAR = "]"
QUOTE_CHAR = '"'
COLON_CHAR = ":"
COMMA_CHAR = ","
ASTERISK_CHAR = "*"

TRUE = "true"
FALSE = "false"
NULL = "null"

DEFAULT_ARRAY_WRAPPER_KEY = "array"

# Locale independent: '.' as decimal point, no grouping separators
_INTEGER_RE = re.compile(r"[+-]?\d+")
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_NON_FINITE = {
    "NaN": math.nan,
    "Infinity": math.inf,
    "-Infinity": -math.inf,
}

CommentCallback = Callable[["JsonParser", str], None]


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing behavior with immutable settings.

    ``comment_callback`` receives the parser and each comment body (without
    its delimiters) when ``allow_comments`` is set; anything it raises
    aborts the parse. ``document_factory`` creates every parsed object.
    """

    array_wrapper_key: str = DEFAULT_ARRAY_WRAPPER_KEY
    allow_newline_in_strings: bool = True
    allow_comments: bool = False
    comment_callback: CommentCallback | None = None
    identify_number_values: bool = False
    document_factory: DocumentFactory = SequentialDocument

    def __post_init__(self) -> None:
        if not isinstance(self.array_wrapper_key, str):
            raise TypeError("array_wrapper_key must be a string")
        for name in (
            "allow_newline_in_strings",
            "allow_comments",
            "identify_number_values",
        ):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a boolean")
        if self.comment_callback is not None and not callable(
            self.comment_callback
        ):
            raise TypeError("comment_callback must be callable")
        if not callable(self.document_factory):
            raise TypeError("document_factory must be callable")


class JsonParser:
    """
    Parses JSON text into documents.

    A parser only holds its configuration and the character source of the
    call in progress, so one instance must not run two parses at once.
    """

    def __init__(self, config: ParseConfig | None = None) -> None:
        self.config = config if config is not None else ParseConfig()
        self.source: CharacterSource | None = None

    @property
    def tracker(self) -> ParseTracker:
        """Position tracker of the parse in progress."""
        if self.source is None:
            raise RuntimeError("No parse in progress")
        return self.source.tracker

    # Entry points

    def parse_string(self, text: str) -> Document:
        """Parses ``text``; empty or blank text yields an empty document."""
        if not isinstance(text, str):
            raise TypeError(
                f"the JSON text must be str, not {type(text).__name__}"
            )
        return self.parse(io.StringIO(text))

    def parse_reader(self, reader: IO[str]) -> Document:
        """Parses a text stream and closes it afterwards."""
        try:
            return self.parse(reader)
        finally:
            reader.close()

    def parse_stream(
        self, stream: BinaryIO, encoding: str = "utf-8"
    ) -> Document:
        """Parses a binary stream decoded with ``encoding`` and closes it."""
        return self.parse_reader(io.TextIOWrapper(stream, encoding=encoding))

    def parse_file(
        self, path: str | os.PathLike[str], encoding: str = "utf-8"
    ) -> Document:
        """Opens, parses and closes the file at ``path``."""
        with open(path, encoding=encoding) as fp:
            return self.parse(fp)

    def parse(self, stream: IO[str]) -> Document:
        """
        Parses one document from ``stream``, leaving the stream open.

        Raises a ``ParseError`` subclass carrying the line on malformed
        input. There is no partial result: the call either returns a
        complete document or raises.
        """
        with ProfileContext("parse"):
            self.source = CharacterSource(stream)
            logger.debug("Parsing document with %s", self.config)
            try:
                document = self._parse_document()
            finally:
                lines = self.source.tracker.line
                self.source = None
            logger.debug("Parsed %d entries over %d lines", len(document), lines)
            return document

    # Grammar

    def _parse_document(self) -> Document:
        char = self._read()
        if char is None:
            return self.config.document_factory()

        if char == CURLY_BRACKET_OPEN_CHAR:
            document = self._parse_object()
        elif char == SQUARE_BRACKET_OPEN_CHAR:
            document = self.config.document_factory()
            document.add_entry(
                Entry(self.config.array_wrapper_key, self._parse_array())
            )
        else:
            raise self._unexpected(char)

        trailing = self._read()
        if trailing is not None:
            raise self._unexpected(trailing)
        return document

    def _parse_object(self) -> Document:
        """Parses the members of an object whose '{' was consumed."""
        with ProfileContext("parse_object"):
            document = self.config.document_factory()

            char = self._read()
            if char == CURLY_BRACKET_CLOSE_CHAR:
                return document

            while char is not None:
                if char != QUOTE_CHAR:
                    raise self._unexpected(char)
                key = self._source.read_string(
                    self.config.allow_newline_in_strings
                )

                char = self._read()
                if char != COLON_CHAR:
                    raise self._unexpected(char)

                # Entries are added complete, never filled in afterwards
                document.add_entry(Entry(key, self._parse_value()))

                char = self._read()
                if char == COMMA_CHAR:
                    char = self._read()
                    continue
                if char == CURLY_BRACKET_CLOSE_CHAR:
                    return document
                raise self._unexpected(char)

            raise UnexpectedEndError(self.tracker.line)

    def _parse_array(self) -> list[Value]:
        """Parses the values of an array whose '[' was consumed."""
        with ProfileContext("parse_array"):
            values: list[Value] = []

            char = self._read()
            if char == SQUARE_BRACKET_CLOSE_CHAR:
                return values

            while char is not None:
                self._source.push_back(char)
                values.append(self._parse_value())

                char = self._read()
                if char == COMMA_CHAR:
                    char = self._read()
                    continue
                if char == SQUARE_BRACKET_CLOSE_CHAR:
                    return values
                raise self._unexpected(char)

            raise UnexpectedEndError(self.tracker.line)

    def _parse_value(self) -> Value:
        char = self._read()

        match char:
            case None:
                raise UnexpectedEndError(self.tracker.line)
            case '"':
                return self._source.read_string(
                    self.config.allow_newline_in_strings
                )
            case "{":
                return self._parse_object()
            case "[":
                return self._parse_array()
            case _:
                self._source.push_back(char)
                return self._parse_literal()

    def _parse_literal(self) -> Value:
        token = self._source.read_token(stop_at_slash=self.config.allow_comments)
        if not token:
            raise self._unexpected(self._read())

        lowered = token.lower()
        if lowered == TRUE:
            return True
        if lowered == FALSE:
            return False
        if lowered == NULL:
            return None

        return self._parse_number(token)

    def _parse_number(self, token: str) -> Value:
        with ProfileContext("parse_number", len(token)):
            kind = None
            if self.config.identify_number_values:
                kind = NumberKind.from_suffix(token[-1])

            try:
                if kind is None:
                    return parse_number(token)
                return _parse_typed_number(token[:-1], kind)
            except (ValueError, TypeError) as e:
                raise InvalidValueError(token, self.tracker.line, e) from e

    # Whitespace and comments

    @property
    def _source(self) -> CharacterSource:
        if self.source is None:
            raise RuntimeError("No parse in progress")
        return self.source

    def _read(self) -> str | None:
        """Returns the next significant character, consuming comments."""
        while True:
            char = self._source.read()
            if char != SLASH_CHAR or not self.config.allow_comments:
                return char
            self._read_comment()

    def _read_comment(self) -> None:
        """Reads a comment whose leading '/' was consumed."""
        char = self._source.read_char()
        if char == SLASH_CHAR:
            body = self._source.read_line()
        elif char == ASTERISK_CHAR:
            body = self._source.read_multiline_comment()
        elif char is None:
            raise UnexpectedEndError(self.tracker.line)
        else:
            raise self._unexpected(char)

        logger.debug("Comment at line %d: %r", self.tracker.line, body)
        if self.config.comment_callback is not None:
            self.config.comment_callback(self, body)

    def _unexpected(
        self, char: str | None
    ) -> UnexpectedCharacterError | UnexpectedEndError:
        if char is None:
            return UnexpectedEndError(self.tracker.line)
        return UnexpectedCharacterError(char, self.tracker.line)


def parse_number(token: str) -> int | float:
    """
    Parses an untyped numeric token.

    Tokens with a decimal point or exponent become ``float``, all others
    ``int``. ``NaN``, ``Infinity`` and ``-Infinity`` are accepted as floats.
    """
    if token in _NON_FINITE:
        return _NON_FINITE[token]
    if _INTEGER_RE.fullmatch(token):
        return int(token)
    if _DECIMAL_RE.fullmatch(token):
        return float(token)
    raise ValueError(f"not a number: {token!r}")


def _parse_typed_number(digits: str, kind: NumberKind) -> Any:
    value: int | float
    if kind.is_integral:
        if not _INTEGER_RE.fullmatch(digits):
            raise ValueError(f"not an integer: {digits!r}")
        value = int(digits)
    else:
        value = parse_number(digits)

    match kind:
        case NumberKind.LONG | NumberKind.DOUBLE:
            # Plain int and float already are the widest kinds
            return kind.coerce(value)
        case _:
            return TypedNumber(kind, value)


__all__ = [
    "DEFAULT_ARRAY_WRAPPER_KEY",
    "CommentCallback",
    "JsonParser",
    "ParseConfig",
    "parse_number",
]
