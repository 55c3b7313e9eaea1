"""Unit tests for result analysis and the deterministic summary."""

from unittest.mock import AsyncMock, patch

import pytest

from app.pipeline.llm.client import LLMUnavailableError
from app.pipeline.stages.result_analyzer import analyze_results, format_query_results

LLM = "app.pipeline.stages.result_analyzer.call_llm_async"

ROWS = [
    {"vendor": "Acme", "amount": 100},
    {"vendor": "Globex", "amount": 300},
]


class TestFormatQueryResults:
    def test_empty(self):
        assert format_query_results([]) == "No results found for your query."

    def test_statistics(self):
        text = format_query_results(ROWS)
        assert "Found **2 results**" in text
        assert "- vendor: Acme" in text
        assert "- Total: 400" in text
        assert "- Average: 200" in text
        assert "- Min: 100" in text
        assert "- Max: 300" in text

    def test_long_results_are_truncated(self):
        rows = [{"n": i} for i in range(8)]
        text = format_query_results(rows)
        assert "**Row 5:**" in text
        assert "**Row 6:**" not in text
        assert "*...and 3 more rows*" in text


class TestAnalyzeResults:
    @pytest.mark.asyncio
    async def test_llm_narrative(self, invoices_schema):
        with patch(LLM, AsyncMock(return_value="  Two vendors owe money.  ")):
            result = await analyze_results("overdue by vendor", ROWS, invoices_schema)

        assert result.content == "Two vendors owe money."
        assert result.llm_used
        assert [s.id for s in result.suggestions] == ["draft_reminders", "export_overdue"]

    @pytest.mark.asyncio
    async def test_fallback_summary(self, invoices_schema):
        with patch(LLM, AsyncMock(side_effect=LLMUnavailableError("off"))):
            result = await analyze_results("what is the weather", ROWS, invoices_schema)

        assert not result.llm_used
        assert result.content == format_query_results(ROWS)
        assert result.suggestions == []
