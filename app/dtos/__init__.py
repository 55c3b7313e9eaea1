"""
DTOs (Data Transfer Objects)
Internal objects for passing data between layers
"""
from app.dtos.chat import (
    ConversationTurn,
    ColumnSchema,
    TableSchema,
    QueryGenerationResult,
    ToolSuggestion,
    AnalysisResult,
    QueryResultArtifact,
    FileArtifactRef,
    Artifact,
    ChatReply,
)
from app.dtos.tools import FileArtifact, ToolInvocationResult
from app.dtos.email import (
    EmailConfig,
    EmailMessage,
    InvoiceReminderRecipient,
    EmailSendOutcome,
    BulkEmailResult,
)

__all__ = [
    "ConversationTurn",
    "ColumnSchema",
    "TableSchema",
    "QueryGenerationResult",
    "ToolSuggestion",
    "AnalysisResult",
    "QueryResultArtifact",
    "FileArtifactRef",
    "Artifact",
    "ChatReply",
    "FileArtifact",
    "ToolInvocationResult",
    "EmailConfig",
    "EmailMessage",
    "InvoiceReminderRecipient",
    "EmailSendOutcome",
    "BulkEmailResult",
]
