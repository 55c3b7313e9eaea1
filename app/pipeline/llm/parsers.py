"""
LLM response parsers
"""
import re
import json
import logging
from typing import Any, Dict, List, Optional

from app.dtos import QueryGenerationResult

logger = logging.getLogger(__name__)

READ_ONLY_START = re.compile(r"^\s*(SELECT|WITH)\b", re.IGNORECASE)
UNSAFE_MARKERS = ("--", "/*", "*/")

# Tried in order when the response is not the requested JSON object
SQL_PATTERNS = [
    re.compile(r"```(?:sql)?\s*([\s\S]+?)\s*```", re.IGNORECASE),
    re.compile(r"WITH[\s\S]+?SELECT[\s\S]+?(?:;|\s*$)", re.IGNORECASE),
    re.compile(r"SELECT[\s\S]+?FROM[\s\S]+?(?:;|\s*$)", re.IGNORECASE),
]


class QueryParseError(ValueError):
    """LLM response did not contain a usable read-only query"""


def strip_code_fences(response: str) -> str:
    """Remove ```json / ```sql fences around a response"""
    content = response.strip()
    content = re.sub(r"^```[a-zA-Z]*\s*", "", content)
    content = re.sub(r"\s*```$", "", content)
    return content.strip()


def parse_json(response: str) -> Dict[str, Any]:
    """
    Parse a JSON object from an LLM response

    Accepts fenced output and prose around the object.

    Raises:
        ValueError: no JSON object could be decoded
    """
    content = strip_code_fences(response)

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        match = re.search(r"\{[\s\S]*\}", content)
        if not match:
            raise ValueError("No JSON object in LLM response")
        data = json.loads(match.group(0))

    if not isinstance(data, dict):
        raise ValueError("LLM response JSON is not an object")
    return data


def clean_query(query: str) -> str:
    """Collapse whitespace and drop trailing semicolons"""
    content = " ".join(query.replace("\r", " ").replace("\n", " ").split())
    return re.sub(r"[;\s]+$", "", content)


def validate_query(query: str) -> str:
    """
    Structural validation of a generated query

    Raises:
        QueryParseError: not a single read-only statement
    """
    cleaned = clean_query(query)

    if not cleaned:
        raise QueryParseError("Empty query")
    if not READ_ONLY_START.match(cleaned):
        raise QueryParseError("Invalid SQL query structure")
    if any(marker in cleaned for marker in UNSAFE_MARKERS):
        raise QueryParseError("Generated SQL contains potentially unsafe patterns")
    if ";" in cleaned:
        raise QueryParseError("Multiple statements are not allowed")

    return cleaned


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if isinstance(v, (str, int, float))]


def parse_query_response(response: str) -> QueryGenerationResult:
    """
    Extract query + explanation + suggestions from an LLM response

    1. JSON object with a "query" string
    2. SQL in a code fence or a bare SELECT/WITH statement

    Raises:
        QueryParseError: nothing structurally valid found
    """
    logger.debug(f"[parse_query_response] Original response: {response[:200]!r}")

    data: Optional[Dict[str, Any]]
    try:
        data = parse_json(response)
    except ValueError:
        data = None

    if data is not None and isinstance(data.get("query"), str):
        return QueryGenerationResult(
            query=validate_query(data["query"]),
            explanation=str(data.get("explanation") or "Generated SQL query"),
            suggestions=_string_list(data.get("suggestions"))
        )

    text = strip_code_fences(response) if data is None else response
    for pattern in SQL_PATTERNS:
        match = pattern.search(text) or pattern.search(response)
        if not match:
            continue
        candidate = match.group(1) if match.groups() else match.group(0)
        try:
            query = validate_query(candidate)
        except QueryParseError:
            continue
        return QueryGenerationResult(
            query=query,
            explanation="Extracted SQL query from response",
            suggestions=[]
        )

    raise QueryParseError("Could not find a valid SQL query in the LLM response")
