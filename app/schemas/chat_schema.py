from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

from app.dtos import ChatReply, ConversationTurn, TableSchema


class ChatRequest(BaseModel):
    """One chat turn for a dataset"""
    dataset_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    table_schemas: List[TableSchema] = Field(default_factory=list)
    query_results: Optional[List[Dict[str, Any]]] = None  # Rows already computed client-side


class AnalysisResponse(BaseModel):
    """Reply to a chat turn that carried computed results"""
    messages: List[ChatReply]


class QueryGenerationResponse(BaseModel):
    """Reply to a chat turn without results: a query to run client-side, or guidance"""
    query: Optional[str] = None
    explanation: Optional[str] = None
    suggestions: List[str] = Field(default_factory=list)
    error: Optional[str] = None
    should_execute_client: bool = False
    messages: List[ChatReply] = Field(default_factory=list)  # Canned guidance when error is set


class ConversationContextResponse(BaseModel):
    """Conversation history for a dataset"""
    dataset_id: str
    context: List[ConversationTurn]
