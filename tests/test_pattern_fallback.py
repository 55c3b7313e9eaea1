"""Unit tests for the keyword-rule query fallback."""

import pytest

from app.dtos import ColumnSchema, TableSchema
from app.pipeline.stages.pattern_fallback import fallback_query, resolve_columns


class TestResolveColumns:
    def test_fuzzy_matches_are_quoted(self, invoices_schema):
        cols = resolve_columns(invoices_schema)
        assert cols.table == "invoices"
        assert cols.amount == '"amount"'
        assert cols.date == '"due_date"'
        assert cols.status == '"status"'
        assert cols.name == '"vendor_name"'

    def test_defaults_without_schema(self):
        cols = resolve_columns([])
        assert (cols.table, cols.amount, cols.date) == ("table", "amount", "date")

    def test_unusual_table_name_is_quoted(self):
        cols = resolve_columns([TableSchema(table_name="my sheet", columns=[])])
        assert cols.table == '"my sheet"'


class TestFallbackQuery:
    def test_overdue(self, invoices_schema):
        result = fallback_query("Show me all OVERDUE invoices", invoices_schema)
        assert result.query == (
            'SELECT * FROM invoices WHERE "due_date" < CURRENT_DATE '
            'AND ("status" != \'paid\' OR "status" IS NULL) ORDER BY "due_date" ASC'
        )

    def test_top_uses_number_from_message(self, invoices_schema):
        result = fallback_query("show top 5 largest payments", invoices_schema)
        assert result.query.endswith("LIMIT 5")

    def test_top_defaults_to_ten(self, invoices_schema):
        result = fallback_query("highest payments", invoices_schema)
        assert result.query.endswith("LIMIT 10")

    def test_grouping_beats_total(self, invoices_schema):
        result = fallback_query("What is the total amount by vendor?", invoices_schema)
        assert "GROUP BY" in result.query

    def test_count(self, invoices_schema):
        result = fallback_query("How many invoices are there", invoices_schema)
        assert result.query == "SELECT COUNT(*) AS total_count FROM invoices"

    def test_average(self, invoices_schema):
        result = fallback_query("Calculate average invoice amount", invoices_schema)
        assert result.query == 'SELECT AVG("amount") AS average_amount FROM invoices'

    def test_keywords_match_at_word_start(self, invoices_schema):
        # "stop" contains "top", "recount" and "account" contain "count"
        assert fallback_query("stop the recount of this account", invoices_schema) is None

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("Show me the totals", 'SELECT SUM("amount") AS total_amount FROM invoices'),
            ("What are the averages?", 'SELECT AVG("amount") AS average_amount FROM invoices'),
            ("Give me invoice counts", "SELECT COUNT(*) AS total_count FROM invoices"),
        ],
    )
    def test_plural_phrasings_match(self, invoices_schema, message, expected):
        assert fallback_query(message, invoices_schema).query == expected

    def test_no_match(self, invoices_schema):
        assert fallback_query("asdf qwerty", invoices_schema) is None

    def test_column_without_match_uses_default(self):
        schemas = [TableSchema(table_name="t", columns=[ColumnSchema(name="x")])]
        result = fallback_query("total", schemas)
        assert result.query == "SELECT SUM(amount) AS total_amount FROM t"
