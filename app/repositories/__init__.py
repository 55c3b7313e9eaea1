"""
Repository layer for data access
"""
from app.repositories.conversation_repository import (
    ConversationRepository,
    InMemoryConversationRepository,
    conversation_repo,
    get_conversation_repo,
)

__all__ = [
    "ConversationRepository",
    "InMemoryConversationRepository",
    "conversation_repo",
    "get_conversation_repo",
]
