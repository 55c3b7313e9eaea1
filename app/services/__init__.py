"""
Service layer for business logic
"""
from app.services.chat_service import ChatService
from app.services.email_service import (
    EmailService,
    init_email_service,
    get_email_service,
    resolve_email_service,
)
from app.services.tool_service import ToolService, ToolName, get_tool_service

__all__ = [
    "ChatService",
    "EmailService",
    "init_email_service",
    "get_email_service",
    "resolve_email_service",
    "ToolService",
    "ToolName",
    "get_tool_service",
]
