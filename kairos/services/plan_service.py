from __future__ import annotations

import json
import logging
import time
from typing import AsyncGenerator

from pydantic import ValidationError

from kairos.ai.types import AIClient, ChatMessage
from kairos.core import events
from kairos.schemas.plan import ActionPlan
from kairos.services.llm import json_object_completion, resolve_ai_client
from kairos.utils.sse import sse

logger = logging.getLogger(__name__)

PLAN_PHASES: tuple[tuple[str, str], ...] = (
    ("Immediate Steps", "Next 30 days"),
    ("3-Month Goals", "Months 1-3"),
    ("6-Month Goals", "Months 4-6"),
    ("1-Year Goals", "Months 7-12"),
)

_EDUCATION_MARKERS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("high school", "highschool"), "High School"),
    (("phd", "doctorate"), "PhD"),
    (("master",), "Master's"),
    (("undergrad", "bachelor", "college"), "Undergraduate"),
    (("graduate",), "Master's"),
    (("professional", "working"), "Professional"),
)


class PlanGenerationError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable"):
        super().__init__(message)
        self.code = code


def extract_education_level(user_details: str) -> str:
    details = (user_details or "").lower()
    for markers, level in _EDUCATION_MARKERS:
        if any(marker in details for marker in markers):
            return level
    return "Not Specified"


def build_plan_prompt(career_goal: str, user_details: str) -> str:
    education_level = extract_education_level(user_details)
    example = {
        "careerTitle": career_goal,
        "educationLevel": education_level,
        "timeline": f"1-Year Plan to {career_goal}",
        "phases": [
            {
                "title": title,
                "duration": duration,
                "tasks": [
                    {"id": f"task-{idx}-1", "text": "Concrete task", "completed": False},
                    {"id": f"task-{idx}-2", "text": "Concrete task", "completed": False},
                ],
            }
            for idx, (title, duration) in enumerate(PLAN_PHASES, start=1)
        ],
    }
    return (
        f"Create a detailed, actionable plan for a user aiming to become a '{career_goal}'.\n\n"
        f'User Profile: "{user_details.strip()}"\n'
        f'Education Level: "{education_level}"\n\n'
        "Tailor the plan to the education level:\n"
        "- High School: foundational courses, extracurriculars and college prep\n"
        "- Undergraduate: major courses, internships and skill-building\n"
        "- Master's / PhD: specialization, research and networking\n"
        "- Professional: career transition, certification and portfolio building\n\n"
        "Use exactly four phases: Immediate, 3-Month, 6-Month and 1-Year, each with 3-5 concrete tasks.\n\n"
        f"Respond with ONLY valid JSON in this shape:\n{json.dumps(example, indent=2)}"
    )


def _plan_from_payload(payload: dict) -> ActionPlan:
    phases = payload.get("phases")
    return ActionPlan.model_validate(
        {
            "career_title": payload.get("careerTitle", payload.get("career_title")),
            "education_level": payload.get("educationLevel", payload.get("education_level")),
            "timeline": payload.get("timeline"),
            "phases": phases if isinstance(phases, list) else [],
        }
    )


async def generate_action_plan(
    career_goal: str,
    user_details: str,
    ai: AIClient | None = None,
) -> ActionPlan:
    """Ask the model for a structured plan; no local fallback exists for this path."""
    client = resolve_ai_client(ai)
    if client is None:
        raise PlanGenerationError("Action plans need a configured AI provider.", code="llm_unavailable")

    started = time.perf_counter()
    payload = await json_object_completion(
        client,
        build_plan_prompt(career_goal, user_details),
        json_mode=True,
        purpose="action_plan",
    )
    if payload is None:
        raise PlanGenerationError("The AI provider did not return a plan. Try again.", code="llm_invalid")

    try:
        plan = _plan_from_payload(payload)
    except ValidationError as exc:
        logger.warning("action_plan_schema_invalid: %s", exc.errors()[:3])
        raise PlanGenerationError("The AI provider returned a malformed plan. Try again.", code="llm_invalid") from exc

    logger.info(
        json.dumps(
            {
                "event": "action_plan",
                "career_goal": career_goal,
                "phases": len(plan.phases),
                "duration_ms": int((time.perf_counter() - started) * 1000),
            }
        )
    )
    return plan


async def stream_action_plan(
    career_goal: str,
    user_details: str,
    ai: AIClient | None = None,
) -> AsyncGenerator[str, None]:
    """Relay raw plan tokens as SSE; the consumer cancels by closing the stream."""
    started = time.perf_counter()
    try:
        yield sse(events.TRACE, "Drafting your plan...")
        client = resolve_ai_client(ai)
        if client is None:
            raise PlanGenerationError("Action plans need a configured AI provider.")
        messages = [ChatMessage(role="user", content=build_plan_prompt(career_goal, user_details))]
        async for token in client.stream(messages):
            yield sse(events.CHUNK, token)
        yield sse(events.DONE, "[DONE]")
    except Exception as ex:
        logger.exception(
            json.dumps(
                {
                    "event": "action_plan_stream_error",
                    "error": str(ex),
                    "duration_ms": int((time.perf_counter() - started) * 1000),
                }
            )
        )
        yield sse(events.ERROR, str(ex))
        yield sse(events.DONE, "[DONE]")
