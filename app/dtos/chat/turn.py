"""
Conversation turn DTO
"""
from datetime import datetime, timezone
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationTurn(BaseModel):
    """
    One user or assistant message in a dataset conversation

    Frozen: a turn is never modified after it is appended to the store.
    """
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=utcnow)

    def as_llm_message(self) -> dict:
        """Format for the chat completions messages array"""
        return {"role": self.role, "content": self.content}
