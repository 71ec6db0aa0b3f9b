from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Sequence

from pydantic import ValidationError

from kairos.ai.types import AIClient
from kairos.core.config.scoring import get_scoring_int
from kairos.core.outcome import Outcome
from kairos.matching.explanation import render_explanation
from kairos.matching.mismatch import is_mismatch
from kairos.matching.scorer import cluster_group, score_career
from kairos.matching.themes import extract_themes
from kairos.schemas.catalog import Career
from kairos.schemas.match import MatchResult, RankedCareer, clamp
from kairos.services.llm import json_object_completion, resolve_ai_client

logger = logging.getLogger(__name__)

_SUB_SCORE_KEYS = ("skillMatch", "interestMatch", "valueAlignment")


def _specialization_hint(career_title: str) -> str:
    lowered = career_title.lower()
    if "physic" in lowered:
        return "PHYSICS SPECIALIZATION: focus on mathematical aptitude, problem-solving and interest in fundamental principles."
    if "chemi" in lowered:
        return "CHEMISTRY SPECIALIZATION: focus on lab skills, attention to detail, safety awareness and interest in molecular interactions."
    if "engineer" in lowered:
        return "ENGINEERING SPECIALIZATION: focus on practical application, design skills and problem-solving."
    return ""


def build_match_prompt(
    profile: str,
    themes: Sequence[str],
    career_title: str,
    career_details: str,
    base_score: int,
    career_cluster: str | None = None,
) -> str:
    theme_list = ", ".join(themes)
    example = {
        "explanation": "Detailed analysis...",
        "skillMatch": 80,
        "interestMatch": 85,
        "valueAlignment": 75,
        "overallScore": 81,
        "themeMismatch": False,
    }
    if cluster_group(career_cluster) == "science":
        header = "Analyze career fit for a SCIENCE/TECH oriented user."
        weights = "overallScore = (skillMatch * 0.5) + (interestMatch * 0.3) + (valueAlignment * 0.2)"
        criteria = (
            "1. skillMatch (0-100): technical, math or lab skills alignment\n"
            "2. interestMatch (0-100): scientific interests alignment\n"
            "3. valueAlignment (0-100): desire for discovery, innovation and impact"
        )
    else:
        header = "Analyze the career fit for a user."
        weights = "overallScore = (skillMatch * 0.4) + (interestMatch * 0.4) + (valueAlignment * 0.2)"
        criteria = (
            "1. skillMatch (0-100): how well current skills fit the role\n"
            "2. interestMatch (0-100): how well interests fit the role\n"
            "3. valueAlignment (0-100): how well personal values fit the work"
        )
    parts = [
        header,
        f"USER PROFILE (Themes: [{theme_list}]): {profile}",
        f"CAREER: {career_title}",
        f"CAREER DETAILS: {career_details or 'Not provided.'}",
        _specialization_hint(career_title),
        "IMPORTANT: Consider the user's education level and give stage-specific advice.",
        f"Calculate scores based on:\n{criteria}",
        f"BASE SCORE TO CONSIDER: {base_score}% (based on theme matching)",
        f"Calculate: {weights}",
        f"Respond with JSON only: {json.dumps(example)}",
    ]
    return "\n\n".join(part for part in parts if part)


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def accept_ai_scores(payload: dict[str, Any] | None) -> bool:
    """Reject missing, out-of-range or generic-midpoint AI scores."""
    if not isinstance(payload, dict):
        return False
    overall = _number(payload.get("overallScore"))
    if overall is None:
        return False
    if round(overall) == get_scoring_int("match.generic_ai_score", 50):
        return False
    if not (get_scoring_int("match.ai_min_overall", 10) <= overall <= get_scoring_int("match.ai_max_overall", 100)):
        return False
    for key in _SUB_SCORE_KEYS:
        value = _number(payload.get(key))
        if value is None or value < 0:
            return False
    return True


def _result_from_ai(
    payload: dict[str, Any],
    themes: Sequence[str],
    career_title: str,
    local_mismatch: bool,
    career_cluster: str | None,
) -> MatchResult:
    overall = clamp(payload["overallScore"], 0, 100)
    mismatch = payload.get("themeMismatch")
    if not isinstance(mismatch, bool):
        mismatch = local_mismatch
    explanation = payload.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        explanation = render_explanation(themes, career_title, overall, mismatch, career_cluster)
    return MatchResult(
        skill_match=payload["skillMatch"],
        interest_match=payload["interestMatch"],
        value_alignment=payload["valueAlignment"],
        overall_score=overall,
        theme_mismatch=mismatch,
        explanation=explanation,
    )


def local_scores(base_score: int, mismatch: bool) -> dict[str, int]:
    if mismatch:
        overall = max(
            get_scoring_int("match.mismatch.overall_floor", 10),
            base_score - get_scoring_int("match.mismatch.overall_penalty", 20),
        )
        skill = max(
            get_scoring_int("match.mismatch.skill_floor", 15),
            overall - get_scoring_int("match.mismatch.skill_penalty", 10),
        )
        interest = max(
            get_scoring_int("match.mismatch.interest_floor", 10),
            overall - get_scoring_int("match.mismatch.interest_penalty", 15),
        )
        value = max(
            get_scoring_int("match.mismatch.value_floor", 20),
            overall - get_scoring_int("match.mismatch.value_penalty", 5),
        )
    else:
        overall = base_score
        skill = overall + get_scoring_int("match.aligned.skill_offset", 5)
        interest = overall + get_scoring_int("match.aligned.interest_offset", 0)
        value = overall + get_scoring_int("match.aligned.value_offset", 10)
    return {
        "overall_score": clamp(overall, 0, 100),
        "skill_match": clamp(skill, 0, 100),
        "interest_match": clamp(interest, 0, 100),
        "value_alignment": clamp(value, 0, 100),
    }


def fallback_match_result(career_title: str) -> MatchResult:
    career = (career_title or "").strip() or "this career"
    overall = get_scoring_int("match.fallback.overall_score", 65)
    return MatchResult(
        overall_score=overall,
        skill_match=get_scoring_int("match.fallback.skill_match", 55),
        interest_match=get_scoring_int("match.fallback.interest_match", 65),
        value_alignment=get_scoring_int("match.fallback.value_alignment", 70),
        theme_mismatch=False,
        explanation=(
            f"Preliminary analysis: {career} shows about {overall}% potential alignment based on "
            "general trends. Add specific skills and interests to your profile for a more "
            "personalized result."
        ),
    )


async def _remote_scores(
    ai: AIClient | None,
    prompt: str,
) -> dict[str, Any] | None:
    try:
        return await json_object_completion(ai, prompt, json_mode=True, purpose="career_match")
    except Exception as exc:  # noqa: BLE001 - remote scoring is optional
        logger.warning("career_match_remote_failed: %s", exc)
        return None


async def match_career_outcome(
    profile: str,
    career_title: str,
    career_details: str = "",
    career_cluster: str | None = None,
    ai: AIClient | None = None,
    themes: Sequence[str] | None = None,
) -> Outcome[MatchResult]:
    started = time.perf_counter()
    try:
        ai = resolve_ai_client(ai)
        if themes is None:
            themes = await extract_themes(profile, ai)
        themes = list(themes)
        base_score = score_career(themes, career_title, career_cluster)
        mismatch = is_mismatch(themes, career_title, career_cluster)

        prompt = build_match_prompt(profile, themes, career_title, career_details, base_score, career_cluster)
        payload = await _remote_scores(ai, prompt)

        if accept_ai_scores(payload):
            try:
                result = _result_from_ai(payload, themes, career_title, mismatch, career_cluster)
                source = "ai"
            except ValidationError as exc:
                logger.warning("career_match_ai_schema_invalid: %s", exc.errors()[:3])
                result, source = None, "local"
        else:
            if payload is not None:
                logger.info("career_match_ai_rejected overall=%s", payload.get("overallScore"))
            result, source = None, "local"

        if result is None:
            scores = local_scores(base_score, mismatch)
            result = MatchResult(
                **scores,
                theme_mismatch=mismatch,
                explanation=render_explanation(
                    themes, career_title, scores["overall_score"], mismatch, career_cluster
                ),
            )

        logger.info(
            json.dumps(
                {
                    "event": "career_match",
                    "career": career_title,
                    "themes": themes,
                    "base_score": base_score,
                    "theme_mismatch": mismatch,
                    "overall_score": result.overall_score,
                    "source": source,
                    "duration_ms": int((time.perf_counter() - started) * 1000),
                }
            )
        )
        return Outcome(result, source)
    except Exception as exc:  # noqa: BLE001 - callers always receive a result
        logger.exception(
            json.dumps({"event": "career_match_error", "career": career_title, "error": str(exc)})
        )
        return Outcome(fallback_match_result(career_title), "fallback")


async def match_career(
    profile: str,
    career_title: str,
    career_details: str = "",
    career_cluster: str | None = None,
    ai: AIClient | None = None,
    themes: Sequence[str] | None = None,
) -> MatchResult:
    outcome = await match_career_outcome(profile, career_title, career_details, career_cluster, ai, themes)
    return outcome.value


async def rank_careers(
    profile: str,
    careers: Sequence[Career],
    limit: int = 10,
    ai: AIClient | None = None,
) -> tuple[list[str], list[RankedCareer]]:
    """Score every career for one profile; themes are extracted once and shared."""
    client = resolve_ai_client(ai)
    themes = await extract_themes(profile, client)
    outcomes = await asyncio.gather(
        *(
            match_career_outcome(
                profile,
                career.title,
                career.details_text(),
                career.cluster,
                client,
                themes,
            )
            for career in careers
        )
    )
    ranked = [
        RankedCareer(
            career=career.title,
            cluster=career.cluster,
            score=outcome.value.overall_score,
            confidence=outcome.value.confidence,
            explanation=outcome.value.explanation,
        )
        for career, outcome in zip(careers, outcomes)
    ]
    ranked.sort(key=lambda item: item.score, reverse=True)
    return themes, ranked[:limit]
