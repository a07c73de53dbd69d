"""Seed value classification and SQL literal encoding."""

from .classifier import classify_value, to_json_document
from .encoder import encode_value, render_literal
from .exceptions import UnsupportedValueError
from .models import (
    NULL,
    BoolValue,
    JsonValue,
    NullValue,
    NumberValue,
    SqlValue,
    TextArray,
    TextValue,
    TimestampText,
)

__all__ = [
    "classify_value",
    "to_json_document",
    "encode_value",
    "render_literal",
    "UnsupportedValueError",
    "NULL",
    "BoolValue",
    "JsonValue",
    "NullValue",
    "NumberValue",
    "SqlValue",
    "TextArray",
    "TextValue",
    "TimestampText",
]
