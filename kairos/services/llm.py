from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Sequence

from kairos.ai.factory import get_ai_client
from kairos.ai.types import AIClient, ChatMessage
from kairos.core.config import settings
from kairos.utils.json_extract import extract_json_array, extract_json_object

logger = logging.getLogger(__name__)


def resolve_ai_client(ai: AIClient | None = None) -> AIClient | None:
    """Return ``ai`` or the configured client; ``None`` when AI is unavailable."""
    if ai is not None:
        return ai
    try:
        return get_ai_client()
    except (RuntimeError, ValueError) as exc:
        logger.info("ai_client_unavailable: %s", exc)
        return None


def _messages(prompt: str | Sequence[ChatMessage], system_prompt: str | None) -> list[ChatMessage]:
    if isinstance(prompt, str):
        messages = [ChatMessage(role="user", content=prompt)]
    else:
        messages = list(prompt)
    if system_prompt:
        messages.insert(0, ChatMessage(role="system", content=system_prompt))
    return messages


async def text_completion(
    ai: AIClient | None,
    prompt: str | Sequence[ChatMessage],
    *,
    system_prompt: str | None = None,
    model: str | None = None,
    json_mode: bool = False,
    timeout_s: float | None = None,
    purpose: str = "unknown",
) -> str | None:
    """Run one completion bounded by a timeout. Every failure becomes ``None``."""
    client = resolve_ai_client(ai)
    if client is None:
        return None

    started = time.perf_counter()
    limit = settings.ai_request_timeout_s if timeout_s is None else timeout_s
    try:
        content = await asyncio.wait_for(
            client.complete(_messages(prompt, system_prompt), model=model, json_mode=json_mode),
            timeout=limit,
        )
    except asyncio.TimeoutError:
        logger.warning("llm_timeout purpose=%s timeout_s=%s", purpose, limit)
        return None
    except Exception as exc:  # noqa: BLE001 - local fallback is expected
        logger.warning("llm_request_failed purpose=%s: %s", purpose, exc)
        return None

    latency_ms = int((time.perf_counter() - started) * 1000)
    if not content or not content.strip():
        logger.warning("llm_empty_response purpose=%s latency_ms=%s", purpose, latency_ms)
        return None
    logger.debug("llm_response purpose=%s latency_ms=%s chars=%s", purpose, latency_ms, len(content))
    return content


async def json_object_completion(
    ai: AIClient | None,
    prompt: str | Sequence[ChatMessage],
    *,
    purpose: str = "unknown",
    **kwargs: Any,
) -> dict[str, Any] | None:
    content = await text_completion(ai, prompt, purpose=purpose, **kwargs)
    if content is None:
        return None
    parsed = extract_json_object(content)
    if parsed is None:
        logger.warning("llm_invalid_json purpose=%s expected=object chars=%s", purpose, len(content))
    return parsed


async def json_array_completion(
    ai: AIClient | None,
    prompt: str | Sequence[ChatMessage],
    *,
    purpose: str = "unknown",
    **kwargs: Any,
) -> list[Any] | None:
    content = await text_completion(ai, prompt, purpose=purpose, **kwargs)
    if content is None:
        return None
    parsed = extract_json_array(content)
    if parsed is None:
        logger.warning("llm_invalid_json purpose=%s expected=array chars=%s", purpose, len(content))
    return parsed
