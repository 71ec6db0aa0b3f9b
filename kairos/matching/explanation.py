from __future__ import annotations

from typing import Iterable

from kairos.core.config.scoring import get_scoring_int

_TEMPLATES = {
    "major_mismatch": (
        "Major Theme Mismatch: Your profile leans toward {themes}, while {career} calls for a "
        "different set of strengths ({score}% alignment). Consider exploring {themes}-focused "
        "careers for a stronger fit."
    ),
    "partial": (
        "Partial Theme Alignment: Your {themes} background overlaps with {career} in places "
        "({score}% alignment), but there may be better matches. Building additional skills for "
        "this field would strengthen the fit."
    ),
    "excellent": (
        "Excellent Match: Your strengths in {themes} line up closely with what {career} demands "
        "({score}% alignment). This is a path worth pursuing seriously."
    ),
    "good": (
        "Good Match: Your interest in {themes} fits {career} well ({score}% alignment). A few "
        "targeted skills would make you a strong candidate."
    ),
    "moderate": (
        "Moderate Match: Your {themes} profile shares some common ground with {career} "
        "({score}% alignment). Explore the field further to see if it matches your goals."
    ),
    "limited": (
        "Limited Match: Based on your {themes}, {career} shows limited alignment ({score}%). "
        "Careers closer to your core interests may be more fulfilling."
    ),
}


def _theme_phrase(themes: Iterable[str]) -> str:
    unique: list[str] = []
    for theme in themes or ():
        if theme and theme not in unique:
            unique.append(theme)
    return ", ".join(unique) if unique else "diverse interests"


def explanation_tier(score: int, mismatch: bool) -> str:
    if mismatch:
        if score < get_scoring_int("explanation.major_mismatch_below", 30):
            return "major_mismatch"
        return "partial"
    if score >= get_scoring_int("explanation.excellent", 80):
        return "excellent"
    if score >= get_scoring_int("explanation.good", 60):
        return "good"
    if score >= get_scoring_int("explanation.moderate", 40):
        return "moderate"
    return "limited"


def render_explanation(
    themes: Iterable[str],
    career_title: str,
    score: int,
    mismatch: bool,
    career_cluster: str | None = None,
) -> str:
    career = (career_title or "").strip() or "this career"
    if career_cluster:
        career = f"{career} in the {career_cluster.strip()} field"
    return _TEMPLATES[explanation_tier(score, mismatch)].format(
        themes=_theme_phrase(themes),
        career=career,
        score=score,
    )
