"""
Helpers shared by tool handlers
"""
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from app.pipeline.llm.client import call_llm_async, LLMUnavailableError, LLMRefusalError
from app.pipeline.llm.parsers import parse_json

logger = logging.getLogger(__name__)


async def generate_json(
    messages: List[Dict[str, str]],
    temperature: float = 0.3,
    max_tokens: int = 2000
) -> Optional[Dict[str, Any]]:
    """
    Structured content from the completion service

    Returns None when the service is unavailable or the answer is not a
    JSON object; callers then build their deterministic fallback.
    """
    try:
        response = await call_llm_async(messages, temperature=temperature, max_tokens=max_tokens)
        return parse_json(response)
    except LLMUnavailableError:
        logger.debug("Completion service not configured, using fallback content")
    except (LLMRefusalError, httpx.HTTPError, KeyError, IndexError, ValueError) as e:
        logger.warning(f"Structured generation failed, using fallback content: {e}")
    return None


def safe_filename(name: str, default: str = "report") -> str:
    """Reduce a title to a filesystem-safe stem"""
    stem = re.sub(r"[^A-Za-z0-9_-]+", "_", name).strip("_")
    return stem or default


def as_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(v) for v in value]
    if value:
        return [str(value)]
    return []
