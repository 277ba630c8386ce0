"""
Pretty-printing JSON writer for documents and plain values.

The writer walks a value recursively and emits indented JSON text to any
object with a ``write(str)`` method. Writing into a string goes through the
same code path with an in-memory sink, so both produce identical text.
"""

import io
import math
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import IO

from ._profile import ProfileContext
from .document import Datable
from .document import Document
from .document import Simplifiable
from .document import WriteMode
from .errors import logger
from .values import NumberKind
from .values import TypedNumber
from .values import ValueLoose

DEFAULT_INDENT = "\t"

# Plain ints outside this range are written without the LONG suffix
_LONG_RANGE = range(-(1 << 63), 1 << 63)


def _build_escape_table() -> dict[int, str]:
    table = {
        ord('"'): '\\"',
        ord("\\"): "\\\\",
        ord("/"): "\\/",
        ord("\n"): "\\n",
        ord("\f"): "\\f",
        ord("\r"): "\\r",
        ord("\t"): "\\t",
        ord("\b"): "\\b",
    }
    for code in (*range(0x00, 0x20), *range(0x7F, 0xA0)):
        table.setdefault(code, f"\\u{code:04X}")
    return table


_ESCAPE_TABLE = _build_escape_table()


def escape(s: str) -> str:
    """
    Escapes a string for use between JSON quotes.

    ``" \\ / \\n \\f \\r \\t \\b`` get two-character escapes, the ranges
    0x00-0x1F and 0x7F-0x9F become uppercase ``\\uXXXX``; every other
    character is kept as is.
    """
    return s.translate(_ESCAPE_TABLE)


class IndentTracker:
    """Prefix that grows and shrinks by one indent unit per nesting level."""

    def __init__(self, unit: str) -> None:
        self.unit = unit
        self._prefix = ""

    def add(self) -> None:
        self._prefix += self.unit

    def remove(self) -> None:
        self._prefix = self._prefix[: len(self._prefix) - len(self.unit)]

    def __str__(self) -> str:
        return self._prefix


@dataclass(frozen=True)
class WriteConfig:
    """
    Configures JSON writing behavior with immutable settings.

    With ``identify_number_values`` every number is followed by the suffix
    letter of its kind, which the parser understands when configured the
    same way.
    """

    indent: str = DEFAULT_INDENT
    identify_number_values: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.indent, str):
            raise TypeError("indent must be a string")
        if not isinstance(self.identify_number_values, bool):
            raise TypeError("identify_number_values must be a boolean")


class JsonWriter:
    """
    Writes documents and values as indented JSON text.

    Never raises for unsupported values: anything outside the value union
    is written as its quoted ``str()``. Errors of the sink propagate.
    """

    def __init__(self, config: WriteConfig | None = None) -> None:
        self.config = config if config is not None else WriteConfig()

    def write_to_string(self, value: ValueLoose) -> str:
        sink = io.StringIO()
        self.write(value, sink)
        return sink.getvalue()

    def write(self, value: ValueLoose, sink: IO[str]) -> None:
        """Writes ``value`` to ``sink``; a None root is written as ``{}``."""
        with ProfileContext("write"):
            logger.debug("Writing %s with %s", type(value).__name__, self.config)
            offset = IndentTracker(self.config.indent)
            if value is None:
                sink.write("{}")
            else:
                self._write_value(sink, offset, value)

    def _write_document(
        self, sink: IO[str], offset: IndentTracker, document: Document
    ) -> None:
        if document.write_mode is WriteMode.CONTENT_ONLY:
            first = True
            for entry in document:
                if not first:
                    sink.write(", ")
                first = False
                self._write_value(sink, offset, entry.value)
            return

        self._write_members(
            sink, offset, ((entry.key, entry.value) for entry in document)
        )

    def _write_members(
        self,
        sink: IO[str],
        offset: IndentTracker,
        members: Iterable[tuple[object, ValueLoose]],
    ) -> None:
        sink.write("{")
        offset.add()

        first = True
        for key, value in members:
            if not first:
                sink.write(",")
            first = False
            sink.write(f'\n{offset}"{escape(str(key))}": ')
            self._write_value(sink, offset, value)

        offset.remove()
        if first:
            sink.write("}")
        else:
            sink.write(f"\n{offset}}}")

    def _write_array(
        self, sink: IO[str], offset: IndentTracker, values: Iterable[ValueLoose]
    ) -> None:
        sink.write("[")
        offset.add()

        first = True
        for value in values:
            sink.write("\n" if first else ",\n")
            first = False
            sink.write(str(offset))
            self._write_value(sink, offset, value)

        offset.remove()
        if first:
            sink.write("]")
        else:
            sink.write(f"\n{offset}]")

    def _write_number(
        self, sink: IO[str], value: int | float, kind: NumberKind
    ) -> None:
        sink.write(format_number(value))
        if self.config.identify_number_values:
            sink.write(kind.suffix)

    def _write_value(  # noqa: PLR0911
        self, sink: IO[str], offset: IndentTracker, value: ValueLoose
    ) -> None:
        match value:
            case None:
                sink.write("null")
            case bool():
                sink.write("true" if value else "false")
            case int() if value in _LONG_RANGE:
                self._write_number(sink, value, NumberKind.LONG)
            case int():
                sink.write(format_number(value))
            case float():
                self._write_number(sink, value, NumberKind.DOUBLE)
            case TypedNumber(kind=kind, value=number):
                self._write_number(sink, number, kind)
            case str():
                sink.write(f'"{escape(value)}"')
            case Document():
                self._write_document(sink, offset, value)
            case Mapping():
                self._write_members(sink, offset, value.items())
            case bytes() | bytearray():
                self._write_array(sink, offset, list(value))
            case list() | tuple() | set() | frozenset():
                self._write_array(sink, offset, value)
            case Datable():
                self._write_value(sink, offset, value.get_data())
            case Simplifiable():
                self._write_value(sink, offset, value.simplify())
            case Iterable():
                self._write_array(sink, offset, value)
            case _:
                # Outside the value union: best effort, written as a string
                sink.write(f'"{escape(str(value))}"')


def format_number(value: int | float) -> str:
    """Formats a number the way the parser reads it back."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return repr(value)
    return str(value)


__all__ = [
    "DEFAULT_INDENT",
    "IndentTracker",
    "JsonWriter",
    "WriteConfig",
    "escape",
    "format_number",
]
