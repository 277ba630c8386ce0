"""
Key-value document model with a pretty-printing JSON codec.

Parses JSON text into ordered or keyed documents and writes documents back
as indented JSON. Two opt-in extensions are supported on top of standard
JSON: ``//`` and ``/* */`` comments, and one-letter numeric type suffixes
that preserve the width of a number across a round trip.
"""

import os
from typing import IO
from typing import Any

from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from .document import ContentOnlyDocument
from .document import Datable
from .document import Document
from .document import Entry
from .document import KeyedDocument
from .document import MapEntry
from .document import SequentialDocument
from .document import Simplifiable
from .document import WrapperDocument
from .document import WriteMode
from .document import new_keyed_document
from .document import new_ordered_document
from .errors import InvalidValueError
from .errors import ParseError
from .errors import ParseTracker
from .errors import UnexpectedCharacterError
from .errors import UnexpectedEndError
from .parser import DEFAULT_ARRAY_WRAPPER_KEY
from .parser import JsonParser
from .parser import ParseConfig
from .reader import CharacterSource
from .values import NumberKind
from .values import TypedNumber
from .values import Value
from .values import ValueLoose
from .values import byte
from .values import float32
from .values import int32
from .values import short
from .writer import IndentTracker
from .writer import JsonWriter
from .writer import WriteConfig

__version__ = "0.1.0"


def loads(s: str, **kwargs: Any) -> Document:
    """
    Parses JSON text into a document.

    Keyword arguments are the fields of ``ParseConfig``. A top-level array
    is wrapped under ``array_wrapper_key``; blank text gives an empty
    document.
    """
    if not isinstance(s, str):
        raise TypeError(
            f"the JSON object must be str, not {type(s).__name__}"
        )

    config = ParseConfig(**kwargs)
    return JsonParser(config).parse_string(s)


def load(fp: IO[str], **kwargs: Any) -> Document:
    """
    Parses JSON from a text file-like object, which is left open.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return JsonParser(ParseConfig(**kwargs)).parse(fp)


def parse_file(path: str | os.PathLike[str], **kwargs: Any) -> Document:
    """
    Opens, parses and closes the JSON file at ``path``.
    """
    return JsonParser(ParseConfig(**kwargs)).parse_file(path)


def dumps(obj: ValueLoose, **kwargs: Any) -> str:
    """
    Serializes a document or value to indented JSON text.

    Keyword arguments are the fields of ``WriteConfig``.
    """
    config = WriteConfig(**kwargs)
    return JsonWriter(config).write_to_string(obj)


def dump(obj: ValueLoose, fp: IO[str], **kwargs: Any) -> None:
    """
    Serializes a document or value into a text file-like object.

    The text written is identical to what ``dumps`` returns; errors raised
    by ``fp`` propagate unchanged.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    JsonWriter(WriteConfig(**kwargs)).write(obj, fp)


__all__ = [
    "DEFAULT_ARRAY_WRAPPER_KEY",
    "CharacterSource",
    "ContentOnlyDocument",
    "Datable",
    "Document",
    "Entry",
    "HotPathStats",
    "IndentTracker",
    "InvalidValueError",
    "JsonParser",
    "JsonWriter",
    "KeyedDocument",
    "MapEntry",
    "NumberKind",
    "ParseConfig",
    "ParseError",
    "ParseTracker",
    "SequentialDocument",
    "Simplifiable",
    "TypedNumber",
    "UnexpectedCharacterError",
    "UnexpectedEndError",
    "Value",
    "ValueLoose",
    "WrapperDocument",
    "WriteConfig",
    "WriteMode",
    "byte",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "float32",
    "get_hot_path_stats",
    "int32",
    "load",
    "loads",
    "new_keyed_document",
    "new_ordered_document",
    "parse_file",
    "short",
]
