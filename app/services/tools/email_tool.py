"""
generateEmail: drafted email content, rendered to HTML, never sent
"""
import logging
from datetime import date
from html import escape
from typing import Any, Dict, Sequence

from app.dtos import ToolInvocationResult
from app.pipeline.llm.prompts import build_email_prompt
from app.schemas import GenerateEmailParams
from app.services.tools.base import generate_json
from app.services.tools.rendering import html_paragraphs, html_table

logger = logging.getLogger(__name__)

SIGNATURE = "Finance Team"
PREVIEW_ROWS = 5


def fallback_email(email_type: str, recipient: str) -> Dict[str, Any]:
    body = f"Please find the {email_type} information below."
    return {
        "subject": f"{email_type.capitalize()} - {date.today().isoformat()}",
        "greeting": f"Dear {recipient},",
        "body": body,
        "closing": "Best regards,",
        "signature": SIGNATURE,
        "plainText": f"Dear {recipient},\n\n{body}\n\nBest regards,\n{SIGNATURE}"
    }


def _amount_total(rows: Sequence[Dict[str, Any]]) -> float:
    total = 0.0
    for row in rows:
        amount = row.get("amount")
        if isinstance(amount, (int, float)) and not isinstance(amount, bool):
            total += amount
    return total


def render_email_html(email_type: str, content: Dict[str, Any], rows: Sequence[Dict[str, Any]]) -> str:
    heading = "INVOICE" if email_type == "invoice" else email_type.upper()
    parts = [
        f"<h1>{escape(heading)}</h1>",
        f"<p>{escape(str(content.get('greeting', '')))}</p>",
        html_paragraphs(str(content.get("body", ""))),
    ]

    if rows:
        columns = list(rows[0].keys())[:5]
        preview = [{c: r.get(c) for c in columns} for r in rows[:PREVIEW_ROWS]]
        parts.append("<h3>Details</h3>")
        parts.append(html_table(preview))
        if len(rows) > PREVIEW_ROWS:
            parts.append(f"<p><em>...and {len(rows) - PREVIEW_ROWS} more items</em></p>")
        if email_type == "invoice":
            parts.append(f"<p><strong>Total: ${_amount_total(rows):,.2f}</strong></p>")

    if content.get("attachmentNote"):
        parts.append(f"<p><em>{escape(str(content['attachmentNote']))}</em></p>")
    parts.append(f"<p>{escape(str(content.get('closing', '')))}</p>")
    parts.append(f"<p><strong>{escape(str(content.get('signature', '')))}</strong></p>")

    return (
        "<!DOCTYPE html><html><head><meta charset=\"UTF-8\">"
        f"<title>{escape(str(content.get('subject', '')))}</title></head>"
        "<body style=\"font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;\">"
        + "".join(parts)
        + "</body></html>"
    )


async def generate_email(params: GenerateEmailParams) -> ToolInvocationResult:
    messages = build_email_prompt(params.type, params.recipient, params.context, len(params.data))
    content = await generate_json(messages, temperature=0.5, max_tokens=1500)
    if content is None:
        content = fallback_email(params.type, params.recipient)

    fallback = fallback_email(params.type, params.recipient)
    for key in ("subject", "greeting", "body", "closing", "signature", "plainText"):
        content.setdefault(key, fallback[key])

    logger.info(f"Drafted {params.type} email for {params.recipient}")
    return ToolInvocationResult.ok("email", payload={
        "subject": content["subject"],
        "html": render_email_html(params.type, content, params.data),
        "content": content["plainText"]
    })
