"""
Service for chat orchestration
Routes a chat turn to query generation or result analysis
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from app.dtos import (
    ChatReply,
    ConversationTurn,
    QueryResultArtifact,
    TableSchema,
)
from app.repositories import ConversationRepository
from app.pipeline.stages import analyze_results, generate_query, CANNED_GUIDANCE
from app.schemas import AnalysisResponse, QueryGenerationResponse

logger = logging.getLogger(__name__)


class ChatService:
    """
    Orchestrates a chat turn for one dataset

    Two flows:
    1. Computed results supplied → analysis → reply appended to context
    2. No results → query generation → query for client-side execution,
       or canned guidance when generation failed
    """

    def __init__(self, conversation_repo: ConversationRepository):
        self.conversation_repo = conversation_repo

    async def submit_chat(
        self,
        dataset_id: str,
        message: str,
        schemas: Sequence[TableSchema],
        query_results: Optional[List[Dict[str, Any]]] = None
    ):
        """
        Main entry point for a chat turn

        Returns:
            AnalysisResponse when query_results is given (even if empty),
            QueryGenerationResponse otherwise
        """
        if query_results is not None:
            return await self._analyze(dataset_id, message, schemas, query_results)
        return await self._generate(dataset_id, message, schemas)

    def get_conversation(self, dataset_id: str) -> List[ConversationTurn]:
        return self.conversation_repo.get(dataset_id)

    def clear_conversation(self, dataset_id: str) -> None:
        self.conversation_repo.clear(dataset_id)

    async def _analyze(
        self,
        dataset_id: str,
        message: str,
        schemas: Sequence[TableSchema],
        rows: List[Dict[str, Any]]
    ) -> AnalysisResponse:
        analysis = await analyze_results(message, rows, schemas)

        # User message and answer land together so a concurrent turn for
        # the same dataset cannot interleave between them
        self.conversation_repo.extend(dataset_id, [
            ConversationTurn(role="user", content=message),
            ConversationTurn(role="assistant", content=analysis.content),
        ])
        logger.info(f"Saved analysis turn to dataset {dataset_id}")

        artifacts = []
        if rows:
            artifacts.append(QueryResultArtifact(data=rows, row_count=len(rows)))

        reply = ChatReply(
            content=analysis.content,
            tool_suggestions=analysis.suggestions,
            artifacts=artifacts,
            metadata={
                "row_count": len(rows),
                "llm_used": analysis.llm_used
            }
        )
        return AnalysisResponse(messages=[reply])

    async def _generate(
        self,
        dataset_id: str,
        message: str,
        schemas: Sequence[TableSchema]
    ) -> QueryGenerationResponse:
        history = self.conversation_repo.get_history_for_llm(dataset_id)
        result = await generate_query(message, schemas, history)

        if result.is_executable:
            return QueryGenerationResponse(
                query=result.query,
                explanation=result.explanation,
                suggestions=result.suggestions,
                should_execute_client=True
            )

        logger.info(f"Query generation failed for dataset {dataset_id}: {result.error}")
        return QueryGenerationResponse(
            error=result.error or "Query generation failed",
            should_execute_client=False,
            messages=[ChatReply(content=CANNED_GUIDANCE)]
        )
