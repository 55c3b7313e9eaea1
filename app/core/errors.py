"""
Client-facing error types
"""
from typing import Any, Dict, Optional
from fastapi import HTTPException


class ClientError(HTTPException):
    """
    Request refused before any external call was attempted

    Rendered as {"error": detail, **extra} by the app exception handler.
    """

    def __init__(self, detail: str, status_code: int = 400, extra: Optional[Dict[str, Any]] = None):
        super().__init__(status_code=status_code, detail=detail)
        self.extra = extra or {}

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.detail, **self.extra}


class UnknownToolError(ClientError):
    def __init__(self, tool: str):
        super().__init__(f"Unknown tool: {tool}")
        self.tool = tool


class EmailNotConfiguredError(ClientError):
    REQUIRED_FIELDS = ["api_key", "domain", "from_address"]

    def __init__(self):
        super().__init__(
            "Email service not configured. Please provide Mailgun API credentials.",
            extra={"required": self.REQUIRED_FIELDS}
        )
