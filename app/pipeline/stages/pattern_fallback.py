"""
Deterministic NL→SQL fallback
Keyword rules used when the completion service is down or its output is unusable
"""
import re
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from app.dtos import QueryGenerationResult, TableSchema

logger = logging.getLogger(__name__)

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _quote(name: str) -> str:
    return name if IDENTIFIER.match(name) else '"' + name.replace('"', '""') + '"'


@dataclass(frozen=True)
class ColumnGuess:
    """Columns the rules refer to, resolved by fuzzy name match"""
    table: str
    amount: str
    date: str
    status: str
    name: str


def resolve_columns(schemas: Sequence[TableSchema]) -> ColumnGuess:
    table = schemas[0] if schemas else None
    columns = table.columns if table else []

    def find(patterns: Tuple[str, ...], default: str) -> str:
        for pattern in patterns:
            for col in columns:
                if pattern in col.name.lower():
                    return '"' + col.name.replace('"', '""') + '"'
        return default

    return ColumnGuess(
        table=_quote(table.table_name) if table else "table",
        amount=find(("amount", "total", "price", "cost", "value"), "amount"),
        date=find(("date", "created", "updated", "due"), "date"),
        status=find(("status", "state"), "status"),
        name=find(("vendor", "customer", "name", "company"), "name"),
    )


def _has(message: str, *keywords: str) -> bool:
    # Leading boundary only: "totals" and "counts" match, "stop" and "account" do not
    return any(re.search(rf"\b{re.escape(k)}", message) for k in keywords)


def _overdue(c: ColumnGuess, message: str) -> QueryGenerationResult:
    return QueryGenerationResult(
        query=(
            f"SELECT * FROM {c.table} WHERE {c.date} < CURRENT_DATE "
            f"AND ({c.status} != 'paid' OR {c.status} IS NULL) ORDER BY {c.date} ASC"
        ),
        explanation="Find all overdue items based on due date",
        suggestions=["Show overdue amounts by vendor", "Calculate total overdue amount"],
    )


def _summary(c: ColumnGuess, message: str) -> QueryGenerationResult:
    return QueryGenerationResult(
        query=(
            f"SELECT COUNT(*) AS total_records, COUNT(DISTINCT {c.name}) AS unique_entities, "
            f"SUM({c.amount}) AS total_amount, AVG({c.amount}) AS avg_amount FROM {c.table}"
        ),
        explanation="Generate summary statistics",
        suggestions=["Group by status", "Show monthly trends"],
    )


def _top(c: ColumnGuess, message: str) -> QueryGenerationResult:
    number = re.search(r"\d+", message)
    limit = int(number.group(0)) if number else 10
    return QueryGenerationResult(
        query=f"SELECT * FROM {c.table} ORDER BY {c.amount} DESC LIMIT {limit}",
        explanation=f"Show top {limit} records by amount",
        suggestions=["Group by vendor", "Filter by date range"],
    )


def _grouped(c: ColumnGuess, message: str) -> QueryGenerationResult:
    return QueryGenerationResult(
        query=(
            f"SELECT {c.name}, COUNT(*) AS count, SUM({c.amount}) AS total_amount, "
            f"AVG({c.amount}) AS avg_amount FROM {c.table} GROUP BY {c.name} ORDER BY total_amount DESC"
        ),
        explanation="Aggregate data by grouping",
        suggestions=["Filter by status", "Add date range"],
    )


def _count(c: ColumnGuess, message: str) -> QueryGenerationResult:
    return QueryGenerationResult(
        query=f"SELECT COUNT(*) AS total_count FROM {c.table}",
        explanation="Count total records",
        suggestions=["Count by status", "Count unique values"],
    )


def _total(c: ColumnGuess, message: str) -> QueryGenerationResult:
    return QueryGenerationResult(
        query=f"SELECT SUM({c.amount}) AS total_amount FROM {c.table}",
        explanation="Calculate total amount",
        suggestions=["Total by month", "Total by category"],
    )


def _average(c: ColumnGuess, message: str) -> QueryGenerationResult:
    return QueryGenerationResult(
        query=f"SELECT AVG({c.amount}) AS average_amount FROM {c.table}",
        explanation="Calculate average amount",
        suggestions=["Average by vendor", "Average by month"],
    )


# Evaluated top to bottom, first match wins
FALLBACK_RULES: List[Tuple[Tuple[str, ...], Callable[[ColumnGuess, str], QueryGenerationResult]]] = [
    (("overdue",), _overdue),
    (("summary", "overview"), _summary),
    (("top", "largest", "highest"), _top),
    (("by vendor", "per vendor", "group by"), _grouped),
    (("how many", "count"), _count),
    (("total", "sum"), _total),
    (("average", "avg"), _average),
]


def fallback_query(message: str, schemas: Sequence[TableSchema]) -> Optional[QueryGenerationResult]:
    """
    Build a query from keyword rules

    Returns None when no rule matches the message
    """
    lowered = message.lower()

    for keywords, build in FALLBACK_RULES:
        if _has(lowered, *keywords):
            logger.info(f"Pattern fallback matched {keywords[0]!r}")
            return build(resolve_columns(schemas), lowered)

    return None
