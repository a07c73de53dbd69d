"""
SQL literal rendering for classified cell values.

``render_literal`` has one arm per ``SqlValue`` variant. ``encode_value`` is
the single entry point used by the statement compiler: classify, then render.
"""

import math
from decimal import Decimal
from typing import Any, Callable, Dict, Optional, Union

from seed_export.config.table_registry import EncoderOptions
from seed_export.infrastructure.sql import PostgreSQLDialect, array_literal, quote_literal

from .classifier import classify_value
from .models import (
    BoolValue,
    JsonValue,
    NullValue,
    NumberValue,
    SqlValue,
    TextArray,
    TextValue,
    TimestampText,
)

DEFAULT_DIALECT = PostgreSQLDialect()


def _format_number(number: Union[int, float, Decimal], dialect: PostgreSQLDialect) -> str:
    if isinstance(number, float) and not math.isfinite(number):
        if math.isnan(number):
            return quote_literal("NaN", cast=dialect.float_type)
        return quote_literal("Infinity" if number > 0 else "-Infinity", cast=dialect.float_type)
    if isinstance(number, Decimal) and not number.is_finite():
        return quote_literal("NaN" if number.is_nan() else str(number), cast="numeric")
    if isinstance(number, float):
        return repr(float(number))
    if isinstance(number, int):
        return str(int(number))
    return str(number)


_RENDERERS: Dict[type, Callable[[Any, PostgreSQLDialect], str]] = {
    NullValue: lambda value, dialect: "NULL",
    BoolValue: lambda value, dialect: "true" if value.value else "false",
    NumberValue: lambda value, dialect: _format_number(value.value, dialect),
    TextValue: lambda value, dialect: quote_literal(value.value),
    TimestampText: lambda value, dialect: quote_literal(
        value.value, cast=dialect.timestamp_type
    ),
    TextArray: lambda value, dialect: array_literal(value.items, dialect.text_type),
    JsonValue: lambda value, dialect: quote_literal(value.document, cast=dialect.json_type),
}


def render_literal(value: SqlValue, dialect: Optional[PostgreSQLDialect] = None) -> str:
    """
    Render a classified value as a SQL literal.

    Examples:
        >>> render_literal(TextArray(()))
        'ARRAY[]::text[]'
        >>> render_literal(BoolValue(False))
        'false'
    """
    return _RENDERERS[type(value)](value, dialect or DEFAULT_DIALECT)


def encode_value(
    table_name: str,
    column_name: str,
    value: Any,
    options: Optional[EncoderOptions] = None,
    dialect: Optional[PostgreSQLDialect] = None,
) -> str:
    """
    Convert one runtime value into a SQL literal string.

    Args:
        table_name: Destination table of the row
        column_name: Column holding the value
        value: Runtime value from the row source
        options: Naming conventions steering classification
        dialect: SQL dialect providing cast type names

    Returns:
        SQL literal, optionally suffixed with a ``::type`` cast

    Raises:
        UnsupportedValueError: If the value has no SQL literal encoding
    """
    return render_literal(classify_value(table_name, column_name, value, options), dialect)
