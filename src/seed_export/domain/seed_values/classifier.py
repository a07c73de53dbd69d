"""
Cell classification.

Maps one runtime value, in the context of its table and column, onto a
``SqlValue`` variant. Rules are applied in a fixed priority order because the
cases overlap (a ``bool`` is an ``int``, a key-value ``value`` column may hold
a bare string, an empty list carries no element type):

1. ``None`` is NULL.
2. The value column of a key-value table is always jsonb.
3. Lists: empty -> text[], all strings -> text[], anything else -> jsonb.
4. Dicts are jsonb.
5. Booleans.
6. Numbers (int, float, Decimal).
7. Strings in timestamp-named columns, and datetime/date objects, are
   timestamptz.
8. Remaining strings (and UUIDs) are text.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from seed_export.config.table_registry import EncoderOptions

from .exceptions import UnsupportedValueError
from .models import (
    NULL,
    BoolValue,
    JsonValue,
    NumberValue,
    SqlValue,
    TextArray,
    TextValue,
    TimestampText,
)

DEFAULT_OPTIONS = EncoderOptions()


def _json_default(value: Any) -> Any:
    """Serialize the Python-native values local row sources may produce."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Non-finite Decimal {value} has no JSON representation")
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, UUID):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json_document(value: Any) -> str:
    """Serialize ``value`` compactly, keeping non-ASCII characters as-is.

    NaN and infinities are rejected since jsonb cannot store them.
    """
    return json.dumps(
        value,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_json_default,
    )


def _json_value(table_name: str, column_name: str, value: Any) -> JsonValue:
    try:
        return JsonValue(to_json_document(value))
    except (TypeError, ValueError, ArithmeticError) as e:
        raise UnsupportedValueError(table_name, column_name, value) from e


def classify_value(
    table_name: str,
    column_name: str,
    value: Any,
    options: Optional[EncoderOptions] = None,
) -> SqlValue:
    """
    Classify a single cell value.

    Args:
        table_name: Destination table of the row
        column_name: Column holding the value
        value: Runtime value as produced by the row source
        options: Naming conventions; defaults to ``EncoderOptions()``

    Returns:
        The SqlValue variant for the cell

    Raises:
        UnsupportedValueError: If the value has no SQL literal encoding
    """
    options = options or DEFAULT_OPTIONS

    if value is None:
        return NULL

    # Schema override: not inferred from the value's shape
    if options.is_json_value_column(table_name, column_name):
        return _json_value(table_name, column_name, value)

    if isinstance(value, (list, tuple)):
        if all(isinstance(item, str) for item in value):
            return TextArray(tuple(value))
        return _json_value(table_name, column_name, value)

    if isinstance(value, dict):
        return _json_value(table_name, column_name, value)

    if isinstance(value, bool):
        return BoolValue(value)

    if isinstance(value, (int, float, Decimal)):
        return NumberValue(value)

    if isinstance(value, (datetime, date)):
        return TimestampText(value.isoformat())

    if isinstance(value, str):
        if options.is_timestamp_column(column_name):
            return TimestampText(value)
        return TextValue(value)

    if isinstance(value, UUID):
        return TextValue(str(value))

    raise UnsupportedValueError(table_name, column_name, value)
