from __future__ import annotations

import json
import logging
import re
import time
from typing import Literal, Sequence

from kairos.ai.types import AIClient
from kairos.core.config import settings
from kairos.core.config.scoring import get_scoring_int
from kairos.core.outcome import Outcome
from kairos.schemas.journal import JournalAnalysisResult
from kairos.services.llm import json_object_completion

logger = logging.getLogger(__name__)

Tone = Literal["positive", "negative", "neutral"]

JOURNAL_THEME_KEYWORDS: dict[str, tuple[str, ...]] = {
    "creative": ("creat", "design", "draw", "paint", "writ", "imagin", "idea", "artwork", "artist", "music"),
    "technical": ("code", "coding", "program", "software", "computer", "technolog", "debug", "build", "website"),
    "analytical": ("analy", "data", "research", "math", "logic", "puzzle", "pattern", "statistic", "numbers"),
    "social": ("people", "team", "friend", "help", "talk", "communicat", "collaborat", "community", "volunteer"),
    "organized": ("plan", "organiz", "schedule", "routine", "structure", "deadline", "checklist", "tidy"),
    "outdoors": ("outside", "outdoor", "nature", "hike", "hiking", "garden", "environment", "animal", "park"),
    "detail": ("detail", "precise", "careful", "accura", "thorough", "double-check", "quality", "meticulous"),
    "leadership": ("lead", "manag", "decision", "responsib", "mentor", "initiative", "in charge", "delegat"),
    "independent": ("alone", "independen", "myself", "own pace", "freedom", "self-directed", "autonom", "solo"),
}

THEME_SUGGESTIONS: dict[str, tuple[str, ...]] = {
    "creative": ("Graphic Designer", "Content Writer", "UX Designer", "Art Director", "Video Producer"),
    "technical": ("Software Developer", "Data Engineer", "Systems Administrator", "Web Developer", "DevOps Engineer"),
    "analytical": ("Data Analyst", "Data Scientist", "Research Analyst", "Financial Analyst", "Actuary"),
    "social": ("Counselor", "Teacher", "Human Resources Specialist", "Social Worker", "Community Manager"),
    "organized": ("Project Manager", "Operations Coordinator", "Event Planner", "Logistics Analyst", "Office Manager"),
    "outdoors": ("Environmental Scientist", "Park Ranger", "Landscape Architect", "Wildlife Biologist", "Agricultural Specialist"),
    "detail": ("Quality Assurance Analyst", "Accountant", "Editor", "Lab Technician", "Auditor"),
    "leadership": ("Team Lead", "Product Manager", "Operations Manager", "Entrepreneur", "Project Manager"),
    "independent": ("Freelance Consultant", "Researcher", "Writer", "Software Developer", "Entrepreneur"),
}

THEME_LABELS: dict[str, str] = {
    "creative": "creative expression",
    "technical": "technical problem-solving",
    "analytical": "analytical thinking",
    "social": "working with people",
    "organized": "planning and organization",
    "outdoors": "time outdoors",
    "detail": "attention to detail",
    "leadership": "taking the lead",
    "independent": "independent work",
}

POSITIVE_WORDS: tuple[str, ...] = (
    "happy", "excited", "enjoy", "love", "proud", "grateful", "had fun", "energized", "satisfied",
    "great", "motivated", "fulfilled", "accomplished", "inspired", "calm",
)
NEGATIVE_WORDS: tuple[str, ...] = (
    "sad", "stress", "anxious", "tired", "bored", "frustrat", "overwhelm", "angry", "worried",
    "drained", "upset", "lonely", "i hate", "exhausted", "unhappy",
)
CHALLENGE_WORDS: tuple[str, ...] = ("difficult", "struggl", "challeng", "stuck", "obstacle", "hard time", "setback")
CAREER_INTEREST_KEYWORDS: tuple[str, ...] = (
    "career", "job", "profession", "become a", "work as", "interested in", "dream", "future",
)

GENERIC_SUGGESTIONS: tuple[str, ...] = (
    "Project Coordinator",
    "Customer Success Specialist",
    "Research Assistant",
    "Content Creator",
    "Operations Associate",
)

FALLBACK_SUGGESTIONS: tuple[str, ...] = (
    "Career Counselor",
    "Life Coach",
    "Human Resources Specialist",
    "Educator",
    "Nonprofit Program Coordinator",
)

FALLBACK_ANALYSIS = (
    "We couldn't complete a detailed analysis of your journal right now. Keep writing about the "
    "moments that energize or drain you; patterns across several entries make your strengths "
    "and interests much easier to spot."
)

_LIST_LINE = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s+\S", re.MULTILINE)


def _hits(text: str, keywords: Sequence[str]) -> int:
    return sum(1 for keyword in keywords if keyword in text)


def detect_journal_themes(text: str) -> list[str]:
    lowered = (text or "").lower()
    min_hits = get_scoring_int("journal.min_keyword_hits", 2)
    return [theme for theme, keywords in JOURNAL_THEME_KEYWORDS.items() if _hits(lowered, keywords) >= min_hits]


def detect_tone(text: str) -> Tone:
    lowered = (text or "").lower()
    positive = _hits(lowered, POSITIVE_WORDS)
    negative = _hits(lowered, NEGATIVE_WORDS)
    margin = get_scoring_int("journal.tone_margin", 2)
    if positive - negative > margin:
        return "positive"
    if negative - positive > margin:
        return "negative"
    return "neutral"


def suggest_careers(themes: Sequence[str]) -> list[str]:
    if not themes:
        return list(GENERIC_SUGGESTIONS)
    cap = get_scoring_int("journal.max_suggestions", 5)
    suggestions: list[str] = []
    for theme in themes:
        for career in THEME_SUGGESTIONS.get(theme, ()):
            if career not in suggestions:
                suggestions.append(career)
    return suggestions[:cap]


def format_suggestions(suggestions: Sequence[str]) -> str:
    return "\n".join(f"{idx}. {career}" for idx, career in enumerate(suggestions, start=1))


def _join_labels(labels: list[str]) -> str:
    if len(labels) <= 1:
        return "".join(labels)
    return ", ".join(labels[:-1]) + f" and {labels[-1]}"


def compose_analysis(themes: Sequence[str], tone: Tone, has_challenges: bool) -> str:
    if themes:
        labels = [THEME_LABELS.get(theme, theme) for theme in themes]
        sentences = [f"Your entries keep returning to {_join_labels(labels)}."]
    else:
        sentences = ["Your entries don't point to a single dominant theme yet."]

    if tone == "positive":
        sentences.append("The overall tone is positive, which suggests these activities energize you.")
    elif tone == "negative":
        sentences.append(
            "The overall tone is strained; notice which activities drain you so you can steer toward "
            "work that feels lighter."
        )
    else:
        sentences.append("The overall tone is fairly balanced.")

    if has_challenges:
        sentences.append(
            "You also wrote about challenges; how you worked through them points to resilience and "
            "problem-solving strengths worth building on."
        )

    sentences.append(
        "Try the suggested careers through informational interviews or small projects to see "
        "which ones feel right."
    )
    return " ".join(sentences)


def confidence_for_themes(themes: Sequence[str]) -> Literal["high", "medium", "low"]:
    if len(themes) >= 2:
        return "high"
    if len(themes) == 1:
        return "medium"
    return "low"


def career_interest_keywords(text: str) -> list[str]:
    lowered = (text or "").lower()
    return [keyword for keyword in CAREER_INTEREST_KEYWORDS if keyword in lowered]


def looks_like_list(text: str) -> bool:
    return len(_LIST_LINE.findall(text or "")) >= 2 or (text or "").count(",") >= 2


def build_journal_prompt(journal_text: str, feelings_text: str) -> str:
    return (
        "You are a career counselor. Analyze the following journal entries and feelings of the user "
        "to provide career suggestions.\n\n"
        f"Journal Entries: {journal_text.strip()}\n\n"
        f"Feelings: {feelings_text.strip() or 'Not provided.'}\n\n"
        "Suggest career paths the user might find fulfilling and explain why they could fit. "
        'Respond with JSON only: {"careerSuggestions": "1. ...\\n2. ...", "analysis": "..."}'
    )


def fallback_journal_result() -> JournalAnalysisResult:
    return JournalAnalysisResult(
        career_suggestions=format_suggestions(FALLBACK_SUGGESTIONS),
        analysis=FALLBACK_ANALYSIS,
        confidence="medium",
        themes=[],
        success=False,
    )


async def _remote_analysis(
    ai: AIClient | None,
    journal_text: str,
    feelings_text: str,
    local: JournalAnalysisResult,
) -> JournalAnalysisResult | None:
    try:
        payload = await json_object_completion(
            ai,
            build_journal_prompt(journal_text, feelings_text),
            json_mode=True,
            purpose="journal_analysis",
        )
    except Exception as exc:  # noqa: BLE001 - local result stands
        logger.warning("journal_remote_failed: %s", exc)
        return None
    if payload is None:
        return None

    suggestions = payload.get("careerSuggestions")
    if isinstance(suggestions, list):
        suggestions = format_suggestions([str(item).strip() for item in suggestions if str(item).strip()])
    analysis = payload.get("analysis")
    if not isinstance(suggestions, str) or not isinstance(analysis, str):
        return None
    suggestions, analysis = suggestions.strip(), analysis.strip()

    if len(suggestions) <= get_scoring_int("journal.ai_min_suggestions_chars", 10):
        return None
    if len(analysis) <= get_scoring_int("journal.ai_min_analysis_chars", 20):
        return None
    if not career_interest_keywords(f"{journal_text} {feelings_text}") and not looks_like_list(suggestions):
        return None

    return JournalAnalysisResult(
        career_suggestions=suggestions,
        analysis=analysis,
        confidence="medium",
        themes=list(local.themes),
        success=True,
    )


async def analyze_journal_outcome(
    journal_text: str,
    feelings_text: str = "",
    allow_remote_fallback: bool | None = None,
    ai: AIClient | None = None,
) -> Outcome[JournalAnalysisResult]:
    started = time.perf_counter()
    try:
        allow_remote = settings.journal_remote_fallback if allow_remote_fallback is None else allow_remote_fallback
        combined = f"{journal_text or ''} {feelings_text or ''}".lower()

        themes = detect_journal_themes(combined)
        tone = detect_tone(combined)
        has_challenges = _hits(combined, CHALLENGE_WORDS) > 0
        local = JournalAnalysisResult(
            career_suggestions=format_suggestions(suggest_careers(themes)),
            analysis=compose_analysis(themes, tone, has_challenges),
            confidence=confidence_for_themes(themes),
            themes=themes,
            success=True,
        )

        result, source = local, "local"
        if allow_remote and local.confidence == "low":
            remote = await _remote_analysis(ai, journal_text or "", feelings_text or "", local)
            if remote is not None:
                result, source = remote, "ai"

        logger.info(
            json.dumps(
                {
                    "event": "journal_analysis",
                    "themes": themes,
                    "tone": tone,
                    "confidence": result.confidence,
                    "source": source,
                    "text_len": len(combined),
                    "duration_ms": int((time.perf_counter() - started) * 1000),
                }
            )
        )
        return Outcome(result, source)
    except Exception as exc:  # noqa: BLE001 - callers always receive a result
        logger.exception(json.dumps({"event": "journal_analysis_error", "error": str(exc)}))
        return Outcome(fallback_journal_result(), "fallback")


async def analyze_journal(
    journal_text: str,
    feelings_text: str = "",
    allow_remote_fallback: bool | None = None,
    ai: AIClient | None = None,
) -> JournalAnalysisResult:
    outcome = await analyze_journal_outcome(journal_text, feelings_text, allow_remote_fallback, ai)
    return outcome.value
