"""
Pipeline stages

1. query_generator → NL to query (LLM, then keyword fallback)
2. result_analyzer → narrative over client-computed results
   suggestions     → keyword routing hints for follow-up tools
"""
from app.pipeline.stages.query_generator import generate_query, CANNED_GUIDANCE
from app.pipeline.stages.pattern_fallback import fallback_query, resolve_columns
from app.pipeline.stages.result_analyzer import analyze_results, format_query_results
from app.pipeline.stages.suggestions import suggest_tools, SUGGESTION_RULES

__all__ = [
    # Stage 1: Query generation
    "generate_query",
    "CANNED_GUIDANCE",
    "fallback_query",
    "resolve_columns",
    # Stage 2: Analysis
    "analyze_results",
    "format_query_results",
    "suggest_tools",
    "SUGGESTION_RULES",
]
