"""
LLM client for Azure OpenAI
"""
import httpx
import asyncio
import logging
from typing import Optional
from app.core.config import settings

logger = logging.getLogger(__name__)

# 4xx statuses that will not get better on retry (429 is retried)
NON_RETRYABLE_STATUS = {400, 401, 403, 404}


class LLMUnavailableError(RuntimeError):
    """Completion service not configured or disabled"""


class LLMRefusalError(RuntimeError):
    """Completion service declined to answer (refusal or content filter)"""


def is_llm_available() -> bool:
    return settings.llm_configured


def _chat_url() -> str:
    return (
        f"{settings.AZURE_OPENAI_ENDPOINT}/openai/deployments/"
        f"{settings.AZURE_OPENAI_DEPLOYMENT}/chat/completions?"
        f"api-version={settings.AZURE_OPENAI_API_VERSION}"
    )


def _extract_content(data: dict) -> str:
    choice = data["choices"][0]
    message = choice.get("message") or {}

    if choice.get("finish_reason") == "content_filter":
        raise LLMRefusalError("Response blocked by content filter")
    if message.get("refusal"):
        raise LLMRefusalError(str(message["refusal"]))

    content = message.get("content")
    if not content or not content.strip():
        raise LLMRefusalError("Empty completion")
    return content


async def call_llm_async(
    messages: list[dict],
    temperature: float = 0.1,
    max_tokens: int = 800,
    max_retries: Optional[int] = None
) -> str:
    """
    Call Azure OpenAI chat completions with retry
    Returns content string directly

    Raises:
        LLMUnavailableError: service not configured or disabled
        LLMRefusalError: refusal, content filter or empty completion
        httpx.HTTPError: transport failure after retries
    """
    if not is_llm_available():
        raise LLMUnavailableError("Azure OpenAI credentials missing or LLM disabled")

    headers = {
        "Content-Type": "application/json",
        "api-key": settings.AZURE_OPENAI_API_KEY
    }

    payload = {
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens
    }

    attempts = max(1, max_retries or settings.LLM_MAX_RETRIES)

    for attempt in range(attempts):
        try:
            async with httpx.AsyncClient(timeout=settings.LLM_TIMEOUT_SECONDS) as client:
                response = await client.post(_chat_url(), headers=headers, json=payload)
                response.raise_for_status()
                return _extract_content(response.json())
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in NON_RETRYABLE_STATUS or attempt == attempts - 1:
                logger.error(f"LLM call failed with status {status}")
                raise
            wait_time = 2 ** attempt
            logger.warning(f"Error {status}, retrying in {wait_time}s...")
            await asyncio.sleep(wait_time)
        except httpx.TransportError as e:
            if attempt == attempts - 1:
                logger.error(f"LLM call failed after {attempts} attempts: {e}")
                raise
            wait_time = 2 ** attempt
            logger.warning(f"Attempt {attempt + 1} failed, retrying in {wait_time}s...")
            await asyncio.sleep(wait_time)

