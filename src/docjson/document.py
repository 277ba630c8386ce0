"""
Key-value document model read and written by the JSON codec.

A ``Document`` is a mutable, iterable collection of entries. Two storage
strategies share one contract so the parser and writer never care which is
in use:

- ``SequentialDocument`` keeps entries in a list: insertion order is
  preserved, duplicate keys are kept and lookups return the first match.
- ``KeyedDocument`` keeps values in a dict: keys are unique, the last write
  wins and iteration order is not part of the contract.
"""

from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from .values import Value


class WriteMode(Enum):
    """How the writer renders a document."""

    NORMAL = "normal"
    # Entries are emitted comma separated without the enclosing braces
    CONTENT_ONLY = "content_only"


@dataclass
class Entry:
    """A key and its value, owned by at most one document."""

    key: str
    value: Value = None


class MapEntry(Entry):
    """
    Transient view of one slot of a dict-backed document.

    Reading ``value`` always returns what the backing dict holds now, and
    assigning it writes through to the dict.
    """

    def __init__(self, backing: dict[str, Value], key: str) -> None:
        self._backing = backing
        self.key = key

    @property  # type: ignore[override]
    def value(self) -> Value:
        return self._backing.get(self.key)

    @value.setter
    def value(self, value: Value) -> None:
        self._backing[self.key] = value

    def __repr__(self) -> str:
        return f"MapEntry(key={self.key!r}, value={self.value!r})"


@runtime_checkable
class Datable(Protocol):
    """Objects that can represent themselves as a document."""

    def get_data(self) -> "Document": ...


@runtime_checkable
class Simplifiable(Protocol):
    """Objects that can be replaced by a simpler value when written."""

    def simplify(self) -> Any: ...


class Document(ABC):
    """
    Read/write contract shared by every document storage strategy.

    Subclasses implement the storage primitives; lookups with defaults,
    ``compute_if_absent`` and the conversions are derived from them.
    """

    write_mode: WriteMode = WriteMode.NORMAL

    @abstractmethod
    def add(self, key: str, value: Value) -> "Document":
        """Adds an entry. Never fails on duplicate keys."""

    @abstractmethod
    def add_entry(self, entry: Entry) -> None:
        """Adds an already built entry."""

    @abstractmethod
    def get_entry(self, key: str) -> Entry | None:
        """Returns the entry for ``key`` or None if there is none."""

    @abstractmethod
    def remove(self, key: str) -> Entry | None:
        """Removes and returns the entry for ``key`` or None."""

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def __iter__(self) -> Iterator[Entry]: ...

    @abstractmethod
    def __len__(self) -> int: ...

    def size(self) -> int:
        return len(self)

    def is_empty(self) -> bool:
        return len(self) == 0

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get_entry(key) is not None

    def get(self, key: str, default: Value = None) -> Value:
        """Returns the value for ``key``, or ``default`` if no entry exists."""
        entry = self.get_entry(key)
        if entry is None:
            return default
        return entry.value

    def get_or_default(
        self, key: str, default: Value, default_if_none: Value
    ) -> Value:
        """
        Returns the value for ``key`` with separate fallbacks.

        ``default`` is returned when no entry exists, ``default_if_none``
        when the entry exists but holds None.
        """
        entry = self.get_entry(key)
        if entry is None:
            return default
        if entry.value is None:
            return default_if_none
        return entry.value

    def add_if_not_none(self, key: str, value: Value) -> bool:
        """Adds the entry only if ``value`` is not None."""
        if value is None:
            return False
        self.add(key, value)
        return True

    def add_or_replace(self, key: str, value: Value) -> Value:
        """
        Replaces the value of an existing entry or adds a new one.

        Returns the previous value, or None if the entry was added.
        """
        entry = self.get_entry(key)
        if entry is None:
            self.add(key, value)
            return None
        old = entry.value
        entry.value = value
        return old

    def compute_if_absent(
        self, key: str, supplier: Callable[[str], Value]
    ) -> Value:
        """
        Returns the value for ``key``, adding ``supplier(key)`` if missing.

        The supplier is not called when an entry exists, even one whose
        value is None.
        """
        entry = self.get_entry(key)
        if entry is not None:
            return entry.value
        value = supplier(key)
        self.add(key, value)
        return value

    def keys(self) -> list[str]:
        return [entry.key for entry in self]

    def items(self) -> list[tuple[str, Value]]:
        return [(entry.key, entry.value) for entry in self]

    def to_dict(self) -> dict[str, Value]:
        """Converts to a plain dict, recursing into nested documents."""
        return {key: _plain(value) for key, value in self.items()}

    def to_json_string(self, **kwargs: Any) -> str:
        """Writes this document as JSON text, see ``docjson.dumps``."""
        from . import dumps

        return dumps(self, **kwargs)

    def __eq__(self, other: object) -> bool:
        # Maps compare as dicts since they are read back as documents,
        # tuples compare as lists since they are read back as arrays
        if isinstance(other, Mapping):
            return dict(_plain_items(self)) == dict(_plain_items(other))
        if not isinstance(other, Document):
            return NotImplemented
        if isinstance(self, SequentialDocument) and isinstance(
            other, SequentialDocument
        ):
            return _plain_items(self) == _plain_items(other)
        return dict(_plain_items(self)) == dict(_plain_items(other))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.items()!r})"


def _plain(value: Value) -> Any:
    match value:
        case Document():
            return value.to_dict()
        case Mapping():
            return {key: _plain(item) for key, item in value.items()}
        case list() | tuple():
            return [_plain(item) for item in value]
        case _:
            return value


def _plain_items(
    members: "Document | Mapping[str, Value]",
) -> list[tuple[str, Any]]:
    return [(key, _plain(value)) for key, value in members.items()]


class SequentialDocument(Document):
    """
    List-backed document.

    ``add`` is O(1); ``get_entry`` and ``remove`` scan the list.
    """

    def __init__(self, entries: list[Entry] | None = None) -> None:
        self._entries: list[Entry] = entries if entries is not None else []

    def add(self, key: str, value: Value) -> "SequentialDocument":
        self._entries.append(Entry(key, value))
        return self

    def add_entry(self, entry: Entry) -> None:
        self._entries.append(entry)

    def get_entry(self, key: str) -> Entry | None:
        for entry in self._entries:
            if entry.key == key:
                return entry
        return None

    def remove(self, key: str) -> Entry | None:
        for i, entry in enumerate(self._entries):
            if entry.key == key:
                return self._entries.pop(i)
        return None

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class ContentOnlyDocument(SequentialDocument):
    """Sequential document written without its enclosing braces."""

    write_mode = WriteMode.CONTENT_ONLY


class KeyedDocument(Document):
    """
    Dict-backed document with unique keys.

    Entries handed out by ``get_entry`` and iteration are transient
    ``MapEntry`` views onto the dict, so no entry object is ever bound to
    the storage.
    """

    def __init__(self, values: dict[str, Value] | None = None) -> None:
        self._values: dict[str, Value] = values if values is not None else {}

    def add(self, key: str, value: Value) -> "KeyedDocument":
        self._values[key] = value
        return self

    def add_entry(self, entry: Entry) -> None:
        self._values[entry.key] = entry.value

    def get_entry(self, key: str) -> Entry | None:
        if key not in self._values:
            return None
        return MapEntry(self._values, key)

    def remove(self, key: str) -> Entry | None:
        if key not in self._values:
            return None
        return Entry(key, self._values.pop(key))

    def clear(self) -> None:
        self._values.clear()

    def __iter__(self) -> Iterator[Entry]:
        for key in list(self._values):
            yield MapEntry(self._values, key)

    def __len__(self) -> int:
        return len(self._values)


class WrapperDocument(Document):
    """
    Content-only document holding exactly one entry.

    Used for documents that logically represent a single wrapped value. The
    entry can be read and replaced but never added to or removed.
    """

    write_mode = WriteMode.CONTENT_ONLY

    def __init__(self, value: Value = None, key: str = "value") -> None:
        self._entry = Entry(key, value)

    @property
    def key(self) -> str:
        return self._entry.key

    def get(self, key: str | None = None, default: Value = None) -> Value:
        if key is None or key == self._entry.key:
            return self._entry.value
        return default

    def set(self, value: Value) -> None:
        self._entry.value = value

    def add(self, key: str, value: Value) -> "WrapperDocument":
        raise TypeError(
            "This document can only have a single entry, use set() instead"
        )

    def add_entry(self, entry: Entry) -> None:
        raise TypeError(
            "This document can only have a single entry, use set() instead"
        )

    def get_entry(self, key: str) -> Entry | None:
        return self._entry if key == self._entry.key else None

    def remove(self, key: str) -> Entry | None:
        raise TypeError("The single entry of this document cannot be removed")

    def clear(self) -> None:
        raise TypeError("The single entry of this document cannot be removed")

    def __iter__(self) -> Iterator[Entry]:
        yield self._entry

    def __len__(self) -> int:
        return 1


def new_ordered_document() -> SequentialDocument:
    """Creates an empty document that keeps insertion order."""
    return SequentialDocument()


def new_keyed_document() -> KeyedDocument:
    """Creates an empty document with unique keys and O(1) lookups."""
    return KeyedDocument()


type DocumentFactory = Callable[[], Document]

__all__ = [
    "ContentOnlyDocument",
    "Datable",
    "Document",
    "DocumentFactory",
    "Entry",
    "KeyedDocument",
    "MapEntry",
    "SequentialDocument",
    "Simplifiable",
    "WrapperDocument",
    "WriteMode",
    "new_keyed_document",
    "new_ordered_document",
]
