"""
Chat reply and artifact DTOs
"""
import uuid
from datetime import datetime
from typing import Any, Dict, List, Literal, Union
from pydantic import BaseModel, Field
from typing_extensions import Annotated

from app.dtos.chat.turn import utcnow
from app.dtos.chat.generation import ToolSuggestion


class QueryResultArtifact(BaseModel):
    """Tabular snippet returned alongside an analysis"""
    kind: Literal["query_result"] = "query_result"
    data: List[Dict[str, Any]]
    row_count: int


class FileArtifactRef(BaseModel):
    """Downloadable file attached to a reply"""
    kind: Literal["file"] = "file"
    filename: str
    mime_type: str
    content: Union[str, bytes]


Artifact = Annotated[
    Union[QueryResultArtifact, FileArtifactRef],
    Field(discriminator="kind"),
]


def new_message_id() -> str:
    return f"msg_{uuid.uuid4().hex[:16]}"


class ChatReply(BaseModel):
    """Unit returned to the caller for a chat turn"""
    id: str = Field(default_factory=new_message_id)
    role: Literal["assistant"] = "assistant"
    content: str
    timestamp: datetime = Field(default_factory=utcnow)
    tool_suggestions: List[ToolSuggestion] = Field(default_factory=list)
    artifacts: List[Artifact] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)
