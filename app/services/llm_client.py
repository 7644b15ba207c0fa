from typing import Optional

from openai import AsyncOpenAI

from app.config import (
    OPENAI_API_KEY,
    OPENAI_BASE_URL,
    OPENAI_MODEL,
    LLM_TIMEOUT_SECONDS,
)
from app.utils.logger import logger

_client: Optional[AsyncOpenAI] = None


def get_client() -> Optional[AsyncOpenAI]:
    """
    Shared async client, or None when no API key is configured.
    Callers treat None as "use the fallback path".
    """
    global _client

    if not OPENAI_API_KEY:
        return None

    if _client is None:
        _client = AsyncOpenAI(
            api_key=OPENAI_API_KEY,
            base_url=OPENAI_BASE_URL,
            timeout=LLM_TIMEOUT_SECONDS,
            max_retries=0,
        )
    return _client


async def run_chat_completion(
    client: AsyncOpenAI,
    prompt: str,
    temperature: float = 0.3,
    max_tokens: int = 4000,
) -> str:
    """
    Unified single-turn chat completion call. Never retried.
    """
    logger.info(f"[LLM] Request started (model={OPENAI_MODEL})")

    response = await client.chat.completions.create(
        model=OPENAI_MODEL,
        messages=[{"role": "user", "content": prompt}],
        temperature=temperature,
        max_tokens=max_tokens,
    )

    content = response.choices[0].message.content or ""
    logger.info(f"[LLM] Request completed ({len(content)} chars)")
    return content
