"""
Stage 2: Result Analysis
Narrative analysis of results the client already computed
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Sequence

import httpx

from app.dtos import AnalysisResult, TableSchema
from app.pipeline.llm.client import call_llm_async, LLMUnavailableError, LLMRefusalError
from app.pipeline.llm.prompts import build_analysis_prompt
from app.pipeline.stages.suggestions import suggest_tools

logger = logging.getLogger(__name__)

PREVIEW_ROWS = 5


def format_value(value: Any) -> str:
    """Format a value for display"""
    if value is None:
        return "N/A"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        if abs(value) >= 1000:
            return f"{value:,.2f}".rstrip("0").rstrip(".")
        return f"{value:g}" if isinstance(value, float) else str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_query_results(rows: Sequence[Dict[str, Any]]) -> str:
    """
    Deterministic markdown summary used when no narrative can be generated

    Row count, the first rows, and total/average/min/max per numeric column
    """
    if not rows:
        return "No results found for your query."

    lines: List[str] = [f"Found **{len(rows)} results**", "", "### Sample Results:", ""]

    for i, row in enumerate(rows[:PREVIEW_ROWS], 1):
        lines.append(f"**Row {i}:**")
        for key, value in row.items():
            if value is not None:
                lines.append(f"- {key}: {format_value(value)}")
        lines.append("")

    if len(rows) > PREVIEW_ROWS:
        lines.append(f"*...and {len(rows) - PREVIEW_ROWS} more rows*")

    numeric_columns = [key for key, value in rows[0].items() if _is_number(value)]
    if numeric_columns:
        lines.extend(["", "### Summary Statistics:", ""])
        for col in numeric_columns:
            values = [r.get(col) for r in rows if _is_number(r.get(col))]
            if not values:
                continue
            total = sum(values)
            lines.append(f"**{col}:**")
            lines.append(f"- Total: {format_value(total)}")
            lines.append(f"- Average: {format_value(total / len(values))}")
            lines.append(f"- Min: {format_value(min(values))}")
            lines.append(f"- Max: {format_value(max(values))}")
            lines.append("")

    return "\n".join(lines).rstrip() + "\n"


async def analyze_results(
    message: str,
    rows: Sequence[Dict[str, Any]],
    schemas: Sequence[TableSchema]
) -> AnalysisResult:
    """
    Produce narrative content plus tool suggestions

    Suggestions come from the message alone; content falls back to the
    deterministic summary when the completion service is unavailable.
    """
    suggestions = suggest_tools(message)

    try:
        messages = build_analysis_prompt(message, rows, schemas)
        content = await call_llm_async(messages, temperature=0.3, max_tokens=1500)
        logger.info("Analysis generated successfully")
        return AnalysisResult(content=content.strip(), suggestions=suggestions, llm_used=True)
    except LLMUnavailableError:
        logger.debug("Completion service not configured, formatting results")
    except (LLMRefusalError, httpx.HTTPError, KeyError, IndexError, ValueError) as e:
        logger.warning(f"Failed to generate analysis: {e}")

    return AnalysisResult(
        content=format_query_results(rows),
        suggestions=suggestions,
        llm_used=False
    )
