"""Shared fixtures: no completion service and no mail provider unless a test opts in."""

import os

os.environ["DISABLE_AZURE_LLM"] = "1"
os.environ["MAILGUN_API_KEY"] = ""
os.environ["MAILGUN_DOMAIN"] = ""

import pytest  # noqa: E402

from app.dtos import ColumnSchema, EmailConfig, TableSchema  # noqa: E402
from app.repositories import InMemoryConversationRepository  # noqa: E402
from app.services import email_service  # noqa: E402


@pytest.fixture(autouse=True)
def reset_email_singleton():
    email_service.reset_email_service()
    yield
    email_service.reset_email_service()


@pytest.fixture
def invoices_schema():
    return [
        TableSchema(
            table_name="invoices",
            columns=[
                ColumnSchema(name="vendor_name", type="string"),
                ColumnSchema(name="amount", type="currency"),
                ColumnSchema(name="due_date", type="date"),
                ColumnSchema(name="status", type="string"),
            ],
            row_count=120,
        )
    ]


@pytest.fixture
def repo():
    return InMemoryConversationRepository(max_turns=10)


@pytest.fixture
def mailgun_config():
    return EmailConfig(api_key="key-test", domain="mg.example.com", from_address="billing@example.com")
