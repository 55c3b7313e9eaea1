from pydantic import BaseModel, Field, RootModel
from typing import Optional, List, Literal, Union
from typing_extensions import Annotated

from app.dtos import EmailConfig, InvoiceReminderRecipient


class SendEmailRequest(BaseModel):
    """Send one email through the configured provider"""
    to: Union[str, List[str]]
    subject: str
    text: Optional[str] = None
    html: Optional[str] = None
    config: Optional[EmailConfig] = None  # Per-call provider configuration


class SingleReminderRequest(BaseModel):
    mode: Literal["single"]
    recipient: InvoiceReminderRecipient
    config: Optional[EmailConfig] = None


class BulkReminderRequest(BaseModel):
    mode: Literal["bulk"]
    recipients: List[InvoiceReminderRecipient] = Field(..., min_length=1)
    config: Optional[EmailConfig] = None


class InvoiceReminderRequest(RootModel[Annotated[
    Union[SingleReminderRequest, BulkReminderRequest],
    Field(discriminator="mode"),
]]):
    """Single or bulk reminder, selected by the explicit `mode` field"""
