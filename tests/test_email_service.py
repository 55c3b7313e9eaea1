"""Unit tests for email delivery and bulk reminders."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from app.core.config import settings
from app.core.errors import EmailNotConfiguredError
from app.dtos import EmailConfig, EmailMessage, EmailSendOutcome, InvoiceReminderRecipient
from app.services import email_service
from app.services.email_service import EmailService, render_invoice_reminder, resolve_email_service

POST = "httpx.AsyncClient.post"


def _response(status, body):
    return httpx.Response(status, json=body, request=httpx.Request("POST", "https://api.mailgun.net"))


def _recipients(n):
    return [
        InvoiceReminderRecipient(
            email=f"vendor{i}@example.com",
            name=f"Vendor {i}",
            invoice_number=f"100{i}",
            amount_due=10 * i,
            due_date="2024-03-01",
        )
        for i in range(1, n + 1)
    ]


class TestSendEmail:
    @pytest.mark.asyncio
    async def test_success(self, mailgun_config):
        with patch(POST, new_callable=AsyncMock, return_value=_response(200, {"id": "<abc>"})) as post:
            outcome = await EmailService(mailgun_config).send_email(
                EmailMessage(to="a@example.com", subject="Hi", text="Hello")
            )

        assert outcome.success
        assert outcome.message_id == "<abc>"
        assert post.await_args.kwargs["auth"] == ("api", "key-test")
        assert "html" not in post.await_args.kwargs["data"]

    @pytest.mark.asyncio
    async def test_accepted_without_json_body_is_sent(self, mailgun_config):
        accepted = httpx.Response(200, text="Queued", request=httpx.Request("POST", "https://api.mailgun.net"))
        with patch(POST, new_callable=AsyncMock, return_value=accepted):
            outcome = await EmailService(mailgun_config).send_email(
                EmailMessage(to="a@example.com", subject="Hi", text="Hello")
            )

        assert outcome.success
        assert outcome.message_id is None
        assert outcome.message == "Email sent successfully to a@example.com"

    @pytest.mark.asyncio
    async def test_provider_rejection_is_returned(self, mailgun_config):
        with patch(POST, new_callable=AsyncMock, return_value=_response(401, {"message": "Forbidden"})):
            outcome = await EmailService(mailgun_config).send_email(
                EmailMessage(to="a@example.com", subject="Hi", text="Hello")
            )

        assert not outcome.success
        assert outcome.error == "Forbidden"

    @pytest.mark.asyncio
    async def test_transport_error_is_returned(self, mailgun_config):
        with patch(POST, new_callable=AsyncMock, side_effect=httpx.ConnectError("unreachable")):
            outcome = await EmailService(mailgun_config).send_email(
                EmailMessage(to="a@example.com", subject="Hi", text="Hello")
            )

        assert not outcome.success
        assert outcome.error == "unreachable"


class TestInvoiceReminder:
    def test_templates(self):
        text, html = render_invoice_reminder("Acme & Co", "42", 1234.5, "2024-03-01")
        assert "invoice #42 with an amount of $1234.50 is due on 2024-03-01" in text
        assert text.endswith("Best regards,\nAccounts Receivable")
        assert "Acme &amp; Co" in html

    @pytest.mark.asyncio
    async def test_subject(self, mailgun_config):
        service = EmailService(mailgun_config)
        with patch.object(service, "send_email", AsyncMock(return_value=EmailSendOutcome(success=True))) as send:
            await service.send_invoice_reminder("a@example.com", "A", "77", 5, "2024-01-01")

        message = send.await_args.args[0]
        assert message.subject == "Invoice Reminder: #77 - Payment Due"
        assert message.recipients == ["a@example.com"]


class TestBulkReminders:
    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_the_batch(self, mailgun_config):
        service = EmailService(mailgun_config)

        async def fake_send(message):
            if message.recipients == ["vendor2@example.com"]:
                return EmailSendOutcome(success=False, recipient=message.recipients[0], error="bounced")
            return EmailSendOutcome(success=True, recipient=message.recipients[0], message_id="id")

        with patch.object(service, "send_email", AsyncMock(side_effect=fake_send)):
            result = await service.send_bulk_invoice_reminders(_recipients(3))

        assert result.total_attempted == 3
        assert result.total_succeeded == 2
        assert result.success
        assert [o.recipient for o in result.succeeded] == ["vendor1@example.com", "vendor3@example.com"]
        assert [o.recipient for o in result.failed] == ["vendor2@example.com"]

    @pytest.mark.asyncio
    async def test_exception_in_one_send_is_isolated(self, mailgun_config):
        service = EmailService(mailgun_config)

        async def fake_send(message):
            if message.recipients == ["vendor1@example.com"]:
                raise RuntimeError("boom")
            return EmailSendOutcome(success=True, recipient=message.recipients[0])

        with patch.object(service, "send_email", AsyncMock(side_effect=fake_send)):
            result = await service.send_bulk_invoice_reminders(_recipients(4), concurrency=2)

        assert result.total_attempted == 4
        assert [o.recipient for o in result.failed] == ["vendor1@example.com"]
        assert result.failed[0].error == "boom"
        assert [o.recipient for o in result.succeeded] == [
            "vendor2@example.com", "vendor3@example.com", "vendor4@example.com"
        ]

    @pytest.mark.asyncio
    async def test_all_failed_is_overall_failure(self, mailgun_config):
        service = EmailService(mailgun_config)
        failed = EmailSendOutcome(success=False, error="down")
        with patch.object(service, "send_email", AsyncMock(return_value=failed)):
            result = await service.send_bulk_invoice_reminders(_recipients(2))

        assert not result.success
        assert result.total_succeeded == 0


class TestResolveEmailService:
    def test_nothing_configured(self):
        with pytest.raises(EmailNotConfiguredError):
            resolve_email_service()

    def test_explicit_config_does_not_replace_singleton(self, mailgun_config):
        singleton = email_service.init_email_service(mailgun_config)
        other = EmailConfig(api_key="k2", domain="other.example.com")

        service = resolve_email_service(other)

        assert service.config.domain == "other.example.com"
        assert resolve_email_service() is singleton

    def test_environment_fallback(self):
        with patch.object(settings, "MAILGUN_API_KEY", "env-key"), \
                patch.object(settings, "MAILGUN_DOMAIN", "env.example.com"):
            service = resolve_email_service()

        assert service.config.api_key == "env-key"
        assert email_service.get_email_service() is service
