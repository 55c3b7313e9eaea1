"""
Chat DTOs
"""
from app.dtos.chat.turn import ConversationTurn
from app.dtos.chat.generation import (
    ColumnSchema,
    TableSchema,
    QueryGenerationResult,
    ToolSuggestion,
    AnalysisResult,
)
from app.dtos.chat.reply import (
    QueryResultArtifact,
    FileArtifactRef,
    Artifact,
    ChatReply,
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
]
