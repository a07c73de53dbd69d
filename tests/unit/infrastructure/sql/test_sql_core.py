"""
Unit tests for SQL core utilities: identifiers and literals.
"""

import pytest

from seed_export.infrastructure.sql.core.identifier import (
    format_identifier,
    needs_quoting,
    quote_identifier,
)
from seed_export.infrastructure.sql.core.literals import (
    array_literal,
    escape_string,
    quote_literal,
)


@pytest.mark.unit
class TestQuoteIdentifier:
    """Tests for quote_identifier and format_identifier."""

    def test_quote_always_double_quotes(self):
        assert quote_identifier("symbol") == '"symbol"'

    def test_quote_with_internal_quotes(self):
        """Internal double quotes should be doubled."""
        assert quote_identifier('column"name') == '"column""name"'

    def test_plain_identifier_stays_bare(self):
        assert format_identifier("created_at") == "created_at"
        assert format_identifier("kv_store_cbef71cf") == "kv_store_cbef71cf"

    def test_reserved_word_is_quoted(self):
        assert needs_quoting("order")
        assert format_identifier("user") == '"user"'

    def test_mixed_case_and_spaces_are_quoted(self):
        assert format_identifier("DisplayName") == '"DisplayName"'
        assert format_identifier("display name") == '"display name"'

    def test_leading_digit_is_quoted(self):
        assert format_identifier("1st_place") == '"1st_place"'


@pytest.mark.unit
class TestLiterals:
    def test_escape_doubles_single_quotes(self):
        assert escape_string("it's") == "it''s"

    def test_backslashes_untouched(self):
        assert escape_string("C:\\temp") == "C:\\temp"

    def test_quote_literal(self):
        assert quote_literal("O'Brien") == "'O''Brien'"

    def test_quote_literal_with_cast(self):
        assert quote_literal("2024-01-01", cast="timestamptz") == "'2024-01-01'::timestamptz"

    def test_array_literal(self):
        assert array_literal(["tech", "large-cap"]) == "ARRAY['tech', 'large-cap']::text[]"

    def test_array_literal_escapes_elements(self):
        assert array_literal(["rock 'n' roll"]) == "ARRAY['rock ''n'' roll']::text[]"

    def test_empty_array_keeps_type(self):
        assert array_literal([]) == "ARRAY[]::text[]"
