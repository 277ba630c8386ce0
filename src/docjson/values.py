"""
Value union of the document model and explicitly sized numbers.

Plain ``int`` values belong to the 64-bit LONG family and plain ``float``
values to the 64-bit DOUBLE family. ``TypedNumber`` pins a value to one of
the narrower kinds so that it survives a round trip through text written
with numeric type suffixes.
"""

import math
import struct
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from .document import Document


class NumberKind(Enum):
    """
    Numeric widths distinguishable in text through a one-letter suffix.

    Each member's value is its suffix letter.
    """

    BYTE = "B"
    SHORT = "S"
    INT = "I"
    LONG = "L"
    FLOAT = "F"
    DOUBLE = "D"

    @property
    def suffix(self) -> str:
        return self.value

    @property
    def is_integral(self) -> bool:
        return self in _INTEGRAL_BITS

    @classmethod
    def from_suffix(cls, letter: str) -> "NumberKind | None":
        """Returns the kind for a suffix letter, or None if it is not one."""
        try:
            return cls(letter)
        except ValueError:
            return None

    def coerce(self, value: int | float) -> int | float:
        """
        Converts ``value`` to the representation of this kind.

        Integral kinds require an ``int`` inside their signed range. FLOAT
        rounds through IEEE-754 single precision, DOUBLE just converts.
        """
        if isinstance(value, bool):
            raise TypeError(f"{self.name} value must be a number, not bool")

        if self.is_integral:
            if not isinstance(value, int):
                raise TypeError(
                    f"{self.name} value must be an int, "
                    f"not {type(value).__name__}"
                )
            bits = _INTEGRAL_BITS[self]
            low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
            if not low <= value <= high:
                raise ValueError(
                    f"{value} is out of range for {self.name} "
                    f"({low} to {high})"
                )
            return value

        if not isinstance(value, int | float):
            raise TypeError(
                f"{self.name} value must be a number, "
                f"not {type(value).__name__}"
            )
        if self is NumberKind.FLOAT:
            try:
                result = struct.unpack("f", struct.pack("f", value))[0]
            except (OverflowError, struct.error) as e:
                raise ValueError(
                    f"{value} is out of range for {self.name}"
                ) from e
            # pack("f") rounds overflowing finite values to infinity
            if math.isfinite(value) and math.isinf(result):
                raise ValueError(f"{value} is out of range for {self.name}")
            return result
        return float(value)


_INTEGRAL_BITS: dict[NumberKind, int] = {
    NumberKind.BYTE: 8,
    NumberKind.SHORT: 16,
    NumberKind.INT: 32,
    NumberKind.LONG: 64,
}


@dataclass(frozen=True)
class TypedNumber:
    """
    A number pinned to an explicit width.

    The value is validated and normalized for its kind on construction, so
    ``TypedNumber(NumberKind.FLOAT, 0.1).value`` is the nearest 32-bit float.
    """

    kind: NumberKind
    value: int | float

    def __post_init__(self) -> None:
        if not isinstance(self.kind, NumberKind):
            raise TypeError("kind must be a NumberKind")
        object.__setattr__(self, "value", self.kind.coerce(self.value))

    def __str__(self) -> str:
        return f"{self.value}{self.kind.suffix}"


def byte(value: int) -> TypedNumber:
    return TypedNumber(NumberKind.BYTE, value)


def short(value: int) -> TypedNumber:
    return TypedNumber(NumberKind.SHORT, value)


def int32(value: int) -> TypedNumber:
    return TypedNumber(NumberKind.INT, value)


def float32(value: float) -> TypedNumber:
    return TypedNumber(NumberKind.FLOAT, value)


# Recursive value union accepted by the writer and produced by the parser
type Value = (
    None
    | bool
    | int
    | float
    | TypedNumber
    | str
    | list[Value]
    | tuple[Value, ...]
    | Mapping[str, Value]
    | Document
)

# Anything the writer will accept, including the string fallback
type ValueLoose = Value | Any

__all__ = [
    "NumberKind",
    "TypedNumber",
    "Value",
    "ValueLoose",
    "byte",
    "float32",
    "int32",
    "short",
]
