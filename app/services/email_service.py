"""
Service for email delivery through Mailgun
Single sends and bulk invoice reminders with per-recipient outcomes
"""
import asyncio
import logging
from html import escape
from typing import List, Optional, Sequence

import httpx

from app.core.config import settings
from app.core.errors import EmailNotConfiguredError
from app.dtos import (
    BulkEmailResult,
    EmailConfig,
    EmailMessage,
    EmailSendOutcome,
    InvoiceReminderRecipient,
)

logger = logging.getLogger(__name__)


class EmailService:
    """
    Mail transport wrapper

    Every provider failure is returned as an unsuccessful EmailSendOutcome;
    nothing raised by the transport escapes send_email().
    """

    def __init__(self, config: EmailConfig, timeout: float = 15.0):
        self.config = config
        self.timeout = timeout

    @property
    def _messages_url(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/v3/{self.config.domain}/messages"

    async def send_email(self, message: EmailMessage) -> EmailSendOutcome:
        recipients = message.recipients
        recipient_label = ", ".join(recipients)

        data = {
            "from": self.config.from_address,
            "to": recipients,
            "subject": message.subject,
        }
        if message.text:
            data["text"] = message.text
        if message.html:
            data["html"] = message.html

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self._messages_url,
                    auth=("api", self.config.api_key),
                    data=data
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = _provider_error(e.response)
            logger.warning(f"Failed to send email to {recipient_label}: {error}")
            return EmailSendOutcome(success=False, recipient=recipient_label, error=error)
        except Exception as e:
            logger.warning(f"Failed to send email to {recipient_label}: {e}")
            return EmailSendOutcome(
                success=False,
                recipient=recipient_label,
                error=str(e) or "Failed to send email"
            )

        logger.info(f"Email sent to {recipient_label}")
        return EmailSendOutcome(
            success=True,
            recipient=recipient_label,
            message_id=_message_id(response),
            message=f"Email sent successfully to {recipient_label}"
        )

    async def send_invoice_reminder(
        self,
        recipient_email: str,
        recipient_name: str,
        invoice_number: str,
        amount_due: float,
        due_date: str
    ) -> EmailSendOutcome:
        subject = f"Invoice Reminder: #{invoice_number} - Payment Due"
        text, html = render_invoice_reminder(recipient_name, invoice_number, amount_due, due_date)

        return await self.send_email(EmailMessage(
            to=recipient_email,
            subject=subject,
            text=text,
            html=html
        ))

    async def send_bulk_invoice_reminders(
        self,
        recipients: Sequence[InvoiceReminderRecipient],
        concurrency: Optional[int] = None
    ) -> BulkEmailResult:
        """
        Attempt every recipient independently

        Each task writes only its own slot, so outcomes keep input order
        and one failure never stops the rest of the batch.
        """
        semaphore = asyncio.Semaphore(concurrency or settings.EMAIL_BULK_CONCURRENCY)
        slots: List[Optional[EmailSendOutcome]] = [None] * len(recipients)

        async def send_one(index: int, recipient: InvoiceReminderRecipient) -> None:
            async with semaphore:
                try:
                    outcome = await self.send_invoice_reminder(
                        recipient.email,
                        recipient.name,
                        recipient.invoice_number,
                        recipient.amount_due,
                        recipient.due_date
                    )
                except Exception as e:
                    logger.error(f"Reminder to {recipient.email} failed: {e}", exc_info=True)
                    outcome = EmailSendOutcome(success=False, recipient=recipient.email, error=str(e))
            # Report the recipient record, not the transport label
            slots[index] = outcome.model_copy(update={"recipient": recipient.email})

        await asyncio.gather(*(send_one(i, r) for i, r in enumerate(recipients)))

        result = BulkEmailResult()
        for outcome in slots:
            (result.succeeded if outcome.success else result.failed).append(outcome)

        logger.info(
            f"Bulk reminders: {result.total_succeeded}/{result.total_attempted} sent"
        )
        return result


def _message_id(response: httpx.Response) -> Optional[str]:
    # A 2xx without a readable body is still a sent message, only the id is lost
    try:
        body = response.json()
    except ValueError:
        logger.warning("Provider accepted the message but returned a non-JSON body")
        return None
    if isinstance(body, dict) and body.get("id"):
        return str(body["id"])
    return None


def _provider_error(response: httpx.Response) -> str:
    try:
        body = response.json()
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    except ValueError:
        pass
    return f"Provider returned HTTP {response.status_code}"


def render_invoice_reminder(
    recipient_name: str,
    invoice_number: str,
    amount_due: float,
    due_date: str
) -> tuple[str, str]:
    """Plain text and HTML bodies of an invoice reminder"""
    amount = f"${amount_due:.2f}"

    text = f"""Dear {recipient_name},

This is a friendly reminder that invoice #{invoice_number} with an amount of {amount} is due on {due_date}.

Please ensure payment is made by the due date to avoid any late fees.

If you have already made the payment, please disregard this message.

Thank you for your prompt attention to this matter.

Best regards,
Accounts Receivable"""

    name, number, due = escape(recipient_name), escape(invoice_number), escape(due_date)
    html = f"""
      <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h2 style="color: #333;">Invoice Payment Reminder</h2>
        <p>Dear {name},</p>
        <p>This is a friendly reminder that the following invoice requires your attention:</p>
        <div style="background-color: #f5f5f5; padding: 15px; border-radius: 5px; margin: 20px 0;">
          <p><strong>Invoice Number:</strong> #{number}</p>
          <p><strong>Amount Due:</strong> {amount}</p>
          <p><strong>Due Date:</strong> {due}</p>
        </div>
        <p>Please ensure payment is made by the due date to avoid any late fees.</p>
        <p style="color: #666; font-style: italic;">If you have already made the payment, please disregard this message.</p>
        <p>Thank you for your prompt attention to this matter.</p>
        <p>Best regards,<br>Accounts Receivable</p>
      </div>
    """
    return text, html


# Provider singleton, set at startup or by the first environment fallback
_email_service: Optional[EmailService] = None


def init_email_service(config: EmailConfig) -> EmailService:
    global _email_service
    _email_service = EmailService(config)
    logger.info(f"Email service initialized for domain {config.domain}")
    return _email_service


def get_email_service() -> Optional[EmailService]:
    return _email_service


def reset_email_service() -> None:
    global _email_service
    _email_service = None


def resolve_email_service(config: Optional[EmailConfig] = None) -> EmailService:
    """
    Pick the provider for one call

    Precedence: explicit per-call config > initialized singleton > environment.
    A per-call config is used for that call only.

    Raises:
        EmailNotConfiguredError: nothing resolvable, no provider call made
    """
    if config is not None:
        return EmailService(config)

    service = get_email_service()
    if service is not None:
        return service

    if settings.mailgun_configured:
        return init_email_service(EmailConfig(
            api_key=settings.MAILGUN_API_KEY,
            domain=settings.MAILGUN_DOMAIN,
            from_address=settings.MAILGUN_FROM,
            base_url=settings.MAILGUN_BASE_URL
        ))

    raise EmailNotConfiguredError()
