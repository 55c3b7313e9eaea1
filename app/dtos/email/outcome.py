"""
Email delivery DTOs
"""
from typing import List, Optional, Union
from pydantic import BaseModel, Field, computed_field


class EmailConfig(BaseModel):
    """Mail transport provider configuration (Mailgun)"""
    api_key: str
    domain: str
    from_address: str = Field("noreply@example.com", alias="from")
    base_url: str = "https://api.mailgun.net"

    model_config = {"populate_by_name": True}


class EmailMessage(BaseModel):
    """Message handed to the transport"""
    to: Union[str, List[str]]
    subject: str
    text: Optional[str] = None
    html: Optional[str] = None

    @property
    def recipients(self) -> List[str]:
        return [self.to] if isinstance(self.to, str) else list(self.to)


class InvoiceReminderRecipient(BaseModel):
    """One recipient of an invoice reminder"""
    email: str
    name: str
    invoice_number: str
    amount_due: float
    due_date: str


class EmailSendOutcome(BaseModel):
    """Result of one provider call - never raised, always returned"""
    success: bool
    recipient: Optional[str] = None
    message_id: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None


class BulkEmailResult(BaseModel):
    """Per-recipient aggregation of a bulk send"""
    succeeded: List[EmailSendOutcome] = Field(default_factory=list)
    failed: List[EmailSendOutcome] = Field(default_factory=list)

    @computed_field
    @property
    def total_attempted(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @computed_field
    @property
    def total_succeeded(self) -> int:
        return len(self.succeeded)

    @computed_field
    @property
    def success(self) -> bool:
        # Only a batch where every attempted recipient failed is an overall failure
        return self.total_attempted == 0 or self.total_succeeded > 0
