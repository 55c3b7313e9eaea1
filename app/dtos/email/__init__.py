"""
Email DTOs
"""
from app.dtos.email.outcome import (
    EmailConfig,
    EmailMessage,
    InvoiceReminderRecipient,
    EmailSendOutcome,
    BulkEmailResult,
)

__all__ = [
    "EmailConfig",
    "EmailMessage",
    "InvoiceReminderRecipient",
    "EmailSendOutcome",
    "BulkEmailResult",
]
