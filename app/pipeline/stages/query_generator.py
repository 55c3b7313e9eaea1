"""
Stage 1: Query Generation
Natural language → DuckDB query for client-side execution
"""
import logging
from typing import Dict, List, Optional, Sequence

import httpx

from app.core.config import settings
from app.dtos import QueryGenerationResult, TableSchema
from app.pipeline.llm.client import call_llm_async, LLMUnavailableError, LLMRefusalError
from app.pipeline.llm.prompts import build_query_generation_prompt
from app.pipeline.llm.parsers import parse_query_response, QueryParseError
from app.pipeline.stages.pattern_fallback import fallback_query

logger = logging.getLogger(__name__)

CANNED_GUIDANCE = """I'm having trouble understanding your question. Could you please rephrase it?

Here are some examples of questions I can help with:
- Show me all overdue invoices
- What is the total amount by vendor?
- Find transactions from last month
- Show top 10 largest payments
- Calculate average invoice amount

I can analyze your data, create summaries, and help identify patterns."""


async def _generate_with_llm(
    message: str,
    schemas: Sequence[TableSchema],
    history: Optional[List[Dict[str, str]]]
) -> QueryGenerationResult:
    """
    Simple 3-step process:
    1. Build query generation prompt
    2. Call LLM
    3. Parse and structurally validate
    """
    messages = build_query_generation_prompt(message, schemas, history)
    response = await call_llm_async(messages, temperature=0.0, max_tokens=1000)
    return parse_query_response(response)


async def generate_query(
    message: str,
    schemas: Sequence[TableSchema],
    history: Optional[List[Dict[str, str]]] = None
) -> QueryGenerationResult:
    """
    Generate a query from natural language

    Never raises: every failure becomes a result with `error` set.
    Order of attempts:
    1. Completion service (when configured)
    2. Deterministic keyword rules (when QUERY_PATTERN_FALLBACK is on)
    """
    logger.info(f"Generating query for: '{message[:50]}...'")

    reason: str
    try:
        result = await _generate_with_llm(message, schemas, history)
        logger.info(f"Generated query: {result.query[:100]}")
        return result
    except LLMUnavailableError as e:
        reason = str(e)
        logger.info("Completion service not configured, using pattern fallback")
    except LLMRefusalError as e:
        reason = f"Completion service refused: {e}"
        logger.warning(reason)
    except QueryParseError as e:
        reason = f"Invalid query generated: {e}"
        logger.warning(reason)
    except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
        reason = f"Completion service unreachable: {e}"
        logger.warning(reason)

    if settings.QUERY_PATTERN_FALLBACK:
        fallback = fallback_query(message, schemas)
        if fallback is not None:
            return fallback
        reason = f"{reason}; question did not match any supported pattern"

    return QueryGenerationResult(error=reason)
