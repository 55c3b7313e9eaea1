"""
sendEmail: message plus optional data table, delivered through the email service
"""
from html import escape

from app.dtos import EmailMessage, ToolInvocationResult
from app.schemas import SendEmailParams
from app.services.email_service import resolve_email_service
from app.services.tools.rendering import html_table


def render_message_html(message: str, rows) -> str:
    table = html_table(rows or [])
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">'
        f'<div style="white-space: pre-wrap;">{escape(message)}</div>'
        f"{table}"
        "</div>"
    )


async def send_email(params: SendEmailParams) -> ToolInvocationResult:
    # Raises EmailNotConfiguredError before any provider call
    service = resolve_email_service(params.mailgun_config)

    outcome = await service.send_email(EmailMessage(
        to=params.to,
        subject=params.subject,
        text=params.message,
        html=render_message_html(params.message, params.data)
    ))

    if not outcome.success:
        return ToolInvocationResult.fail("email", outcome.error or "Failed to send email")
    return ToolInvocationResult.ok("email", payload={
        "content": outcome.message,
        "message_id": outcome.message_id
    })
