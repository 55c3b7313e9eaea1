"""
generateReport: structured report rendered to PDF or HTML
"""
import logging
from html import escape
from typing import Any, Dict, List, Sequence, Tuple

from app.dtos import FileArtifact, ToolInvocationResult
from app.pipeline.llm.prompts import build_report_prompt
from app.schemas import GenerateReportParams
from app.services.tools.base import as_list, generate_json, safe_filename
from app.services.tools.rendering import html_list, html_table, render_pdf_async

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("pdf", "html")


def fallback_report(title: str, rows: Sequence[Dict[str, Any]], analysis: str = None) -> Dict[str, Any]:
    return {
        "title": title,
        "executiveSummary": analysis or f"Report generated from {len(rows)} records.",
        "keyFindings": [f"Total records analyzed: {len(rows)}"],
        "analysis": {
            "summary": "Data analysis completed",
            "metrics": [{"name": "Total Records", "value": str(len(rows)), "trend": "stable"}]
        },
        "insights": ["Review the data for detailed insights"],
        "recommendations": ["Further analysis recommended"],
        "nextSteps": ["Review findings with stakeholders"]
    }


def _metric_lines(content: Dict[str, Any]) -> List[str]:
    analysis = content.get("analysis") or {}
    if not isinstance(analysis, dict):
        return [str(analysis)]
    lines = []
    if analysis.get("summary"):
        lines.append(str(analysis["summary"]))
    for metric in analysis.get("metrics") or []:
        if isinstance(metric, dict):
            trend = f" ({metric['trend']})" if metric.get("trend") else ""
            lines.append(f"{metric.get('name', '')}: {metric.get('value', '')}{trend}")
    return lines


def report_sections(content: Dict[str, Any]) -> List[Tuple[str, List[str]]]:
    return [
        ("Executive Summary", as_list(content.get("executiveSummary"))),
        ("Key Findings", as_list(content.get("keyFindings"))),
        ("Analysis", _metric_lines(content)),
        ("Insights", as_list(content.get("insights"))),
        ("Recommendations", as_list(content.get("recommendations"))),
        ("Next Steps", as_list(content.get("nextSteps"))),
    ]


def render_report_html(title: str, content: Dict[str, Any], rows: Sequence[Dict[str, Any]]) -> str:
    parts = [f"<h1>{escape(title)}</h1>"]
    for heading, lines in report_sections(content):
        if not lines:
            continue
        parts.append(f"<h2>{escape(heading)}</h2>")
        if heading == "Executive Summary":
            parts.append("".join(f"<p>{escape(l)}</p>" for l in lines))
        else:
            parts.append(html_list(lines))
    if rows:
        parts.append("<h2>Data</h2>")
        parts.append(html_table(rows))

    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        f"<title>{escape(title)}</title></head>"
        "<body style=\"font-family: Arial, sans-serif;\">"
        + "".join(parts)
        + "</body></html>"
    )


async def generate_report(params: GenerateReportParams) -> ToolInvocationResult:
    fmt = params.format.lower()
    if fmt not in SUPPORTED_FORMATS:
        return ToolInvocationResult.fail("report", f"Unsupported report format: {params.format}")

    messages = build_report_prompt(params.title, params.user_query, params.data, params.analysis)
    content = await generate_json(messages, temperature=0.3, max_tokens=2000)
    if content is None:
        content = fallback_report(params.title, params.data, params.analysis)

    title = str(content.get("title") or params.title)
    stem = safe_filename(params.title)

    if fmt == "html":
        file = FileArtifact(
            filename=f"{stem}.html",
            mime_type="text/html",
            content=render_report_html(title, content, params.data)
        )
    else:
        file = FileArtifact(
            filename=f"{stem}.pdf",
            mime_type="application/pdf",
            content=await render_pdf_async(title, report_sections(content), params.data)
        )

    logger.info(f"Report '{title}' rendered as {fmt} ({len(params.data)} rows)")
    return ToolInvocationResult.ok("report", file=file)
