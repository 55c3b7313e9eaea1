"""
Chat Controller - Query generation and result analysis per dataset
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.errors import ClientError
from app.schemas import ChatRequest, ConversationContextResponse
from app.repositories import ConversationRepository, get_conversation_repo
from app.services import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Chat"])


def get_chat_service(
    repo: ConversationRepository = Depends(get_conversation_repo)
) -> ChatService:
    return ChatService(repo)


@router.post("/chat")
async def chat(
    req: ChatRequest,
    service: ChatService = Depends(get_chat_service)
):
    """
    Submit a chat turn

    - With `query_results`: analyze them and return `{messages}`
    - Without: return a query for the client to execute, or guidance
    """
    try:
        response = await service.submit_chat(
            dataset_id=req.dataset_id,
            message=req.message,
            schemas=req.table_schemas,
            query_results=req.query_results
        )
        return response
    except ClientError:
        raise
    except Exception as e:
        logger.error(f"Chat error for dataset {req.dataset_id}: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process chat message", "details": str(e)}
        )


@router.get("/chat", response_model=ConversationContextResponse)
async def get_context(
    dataset_id: Optional[str] = None,
    service: ChatService = Depends(get_chat_service)
):
    """Conversation context for a dataset (empty when never seen)"""
    if not dataset_id:
        raise ClientError("Dataset ID required")

    return ConversationContextResponse(
        dataset_id=dataset_id,
        context=service.get_conversation(dataset_id)
    )


@router.delete("/chat/{dataset_id}")
async def clear_context(
    dataset_id: str,
    service: ChatService = Depends(get_chat_service)
):
    service.clear_conversation(dataset_id)
    return {"dataset_id": dataset_id, "cleared": True}
