"""
Tool suggestions from keyword classification of the user message
Routing hints only - independent of the completion service
"""
from typing import Callable, List, Tuple

from app.dtos import ToolSuggestion


def _contains(*keywords: str) -> Callable[[str], bool]:
    return lambda message: any(k in message for k in keywords)


DRAFT_REMINDERS = ToolSuggestion(id="draft_reminders", label="Draft payment reminder emails", category="invoice")
EXPORT_OVERDUE = ToolSuggestion(id="export_overdue", label="Export overdue vendors to CSV", category="export")
GENERATE_REPORT = ToolSuggestion(id="generate_report", label="Generate PDF report", category="analysis")
EXPORT_RESULTS = ToolSuggestion(id="export_results", label="Export results to CSV", category="export")
EXPORT_GROUPED = ToolSuggestion(id="export_grouped", label="Export grouped totals to CSV", category="export")

# Evaluated top to bottom, first match wins
SUGGESTION_RULES: List[Tuple[Callable[[str], bool], List[ToolSuggestion]]] = [
    (_contains("overdue"), [DRAFT_REMINDERS, EXPORT_OVERDUE]),
    (_contains("summary", "overview"), [GENERATE_REPORT, EXPORT_RESULTS]),
    (_contains("pivot", "group"), [EXPORT_GROUPED, GENERATE_REPORT]),
]


def suggest_tools(message: str) -> List[ToolSuggestion]:
    """Return the suggestion set of the first matching rule (case-insensitive)"""
    lowered = message.lower()
    for matches, suggestions in SUGGESTION_RULES:
        if matches(lowered):
            return list(suggestions)
    return []
