"""
LLM utilities (client, prompts, parsers)
"""
from app.pipeline.llm.client import (
    call_llm_async,
    is_llm_available,
    LLMUnavailableError,
    LLMRefusalError,
)
from app.pipeline.llm.prompts import (
    build_query_generation_prompt,
    build_analysis_prompt,
    build_report_prompt,
    build_email_prompt,
    build_invoice_prompt,
)
from app.pipeline.llm.parsers import (
    parse_json,
    parse_query_response,
    validate_query,
    QueryParseError,
)

__all__ = [
    "call_llm_async",
    "is_llm_available",
    "LLMUnavailableError",
    "LLMRefusalError",
    "build_query_generation_prompt",
    "build_analysis_prompt",
    "build_report_prompt",
    "build_email_prompt",
    "build_invoice_prompt",
    "parse_json",
    "parse_query_response",
    "validate_query",
    "QueryParseError",
]
