"""
Classified cell values.

Every cell of a fetched row is classified exactly once into one of the closed
variants below. Rendering a literal is then a total function over these
types; no runtime shape inspection happens after classification.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple, Union


@dataclass(frozen=True)
class NullValue:
    """SQL NULL."""


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class NumberValue:
    value: Union[int, float, Decimal]


@dataclass(frozen=True)
class TextValue:
    value: str


@dataclass(frozen=True)
class TimestampText:
    """A string written as a timestamptz literal."""

    value: str


@dataclass(frozen=True)
class TextArray:
    """A text[] value; empty arrays are valid and stay typed as text[]."""

    items: Tuple[str, ...]


@dataclass(frozen=True)
class JsonValue:
    """A jsonb document, kept as its compact serialized text."""

    document: str


SqlValue = Union[
    NullValue,
    BoolValue,
    NumberValue,
    TextValue,
    TimestampText,
    TextArray,
    JsonValue,
]

NULL = NullValue()
