from typing import AsyncGenerator, Sequence
import hashlib
import json
import logging
import time

from kairos.ai.types import AIClient, ChatMessage
from kairos.core import events
from kairos.schemas.chat import ChatTurn
from kairos.schemas.profile import Ikigai
from kairos.services.llm import resolve_ai_client
from kairos.utils.sse import sse

logger = logging.getLogger("kairos.chat")
_max_history = 12

_EDUCATION_CONTEXT = {
    "highSchool": "HIGH SCHOOL focus: foundational concepts, exam prep, college applications, study skills, time management.",
    "undergrad": "UNDERGRAD focus: coursework, assignments, projects, internships, networking, grad school prep.",
    "masters": "MASTER'S focus: research methodology, thesis writing, specialization, professional networking.",
    "phd": "PhD focus: dissertation, publications, academic networking, grant writing, career positioning.",
    "professional": "PROFESSIONAL focus: upskilling, career change, leadership, work-life balance and industry trends.",
}


def _short_hash(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return ""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:12]


def education_context(education_level: str | None) -> str:
    return _EDUCATION_CONTEXT.get(education_level or "", "Provide general student and career guidance.")


def build_system_prompt(ikigai: Ikigai | None) -> str:
    level = ikigai.education_level if ikigai else None
    profile = ikigai.to_narrative() if ikigai else "Not provided."
    return (
        "You are KAIROS, an empathetic and knowledgeable assistant for academic and career guidance. "
        "Give detailed, actionable and well-structured answers; use markdown lists and bold text where "
        "it helps readability.\n\n"
        f"USER'S EDUCATION LEVEL: {(level or 'not specified').upper()}\n"
        f"{education_context(level)}\n\n"
        f"USER'S PROFILE: {profile}\n\n"
        "Be proactive and encouraging."
    )


def build_chat_messages(turns: Sequence[ChatTurn], ikigai: Ikigai | None) -> list[ChatMessage]:
    history = [turn for turn in turns if turn.content.strip()][-_max_history:]
    messages = [ChatMessage(role="system", content=build_system_prompt(ikigai))]
    messages.extend(ChatMessage(role=turn.role, content=turn.content.strip()) for turn in history)
    return messages


async def stream_chat(
    turns: Sequence[ChatTurn],
    ikigai: Ikigai | None = None,
    ai: AIClient | None = None,
) -> AsyncGenerator[str, None]:
    started_at = time.perf_counter()
    try:
        yield sse(events.TRACE, "Thinking...")

        last_user = next((turn.content.strip() for turn in reversed(turns) if turn.role == "user"), "")
        if not last_user:
            yield sse(events.CHUNK, "Please type a message.")
            yield sse(events.DONE, "[DONE]")
            return

        messages = build_chat_messages(turns, ikigai)
        logger.info(
            json.dumps(
                {
                    "event": "chat_request",
                    "turns": len(messages) - 1,
                    "education_level": ikigai.education_level if ikigai else None,
                    "message_len": len(last_user),
                    "message_hash": _short_hash(last_user),
                }
            )
        )

        client = resolve_ai_client(ai)
        if client is None:
            raise RuntimeError("The assistant is not configured right now.")

        async for token in client.stream(messages):
            yield sse(events.CHUNK, token)

        yield sse(events.DONE, "[DONE]")

    except Exception as ex:
        logger.exception(
            json.dumps(
                {
                    "event": "chat_error",
                    "error": str(ex),
                    "duration_ms": int((time.perf_counter() - started_at) * 1000),
                }
            )
        )
        yield sse(events.ERROR, str(ex))
        yield sse(events.DONE, "[DONE]")
    else:
        logger.info(
            json.dumps(
                {
                    "event": "chat_complete",
                    "duration_ms": int((time.perf_counter() - started_at) * 1000),
                }
            )
        )
