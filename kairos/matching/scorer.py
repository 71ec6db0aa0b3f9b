"""Deterministic career compatibility heuristic.

The score starts at a baseline and moves with:

* an exact-title table of required / incompatible themes, or, when the title
  has no table entry, keyword rules matched against the lowercased title;
* an optional cluster adjustment for science-group and arts-group clusters.

The result is clamped to [min_score, max_score] from ``config/scoring.yaml``
(10 and 95 by default), so heuristic scores never read as a perfect or zero
fit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from kairos.core.config.scoring import get_scoring_int

from .themes import ARTS_THEMES, HARD_SCIENCE_THEMES


@dataclass(frozen=True)
class CareerThemeRule:
    required: tuple[str, ...]
    incompatible: tuple[str, ...] = ()


@dataclass(frozen=True)
class TitleKeywordRule:
    keywords: tuple[str, ...]
    bonus_themes: tuple[str, ...]
    bonus: int
    penalty_themes: tuple[str, ...] = ()
    penalty: int = 0


CAREER_THEME_TABLE: dict[str, CareerThemeRule] = {
    "Software Engineer": CareerThemeRule(("Tech",), ("Music", "Arts")),
    "Cloud Architect": CareerThemeRule(("Tech",), ("Music", "Arts")),
    "Data Scientist": CareerThemeRule(("Tech", "Science"), ("Music",)),
    "Cybersecurity Analyst": CareerThemeRule(("Tech",), ("Arts",)),
    "AI Researcher": CareerThemeRule(("Tech", "Science"), ("Music",)),
    "Quantum Computing Engineer": CareerThemeRule(("Tech", "Physics"), ("Music", "Arts")),
    "Physicist": CareerThemeRule(("Physics", "Science"), ("Music", "Arts", "Business")),
    "Astrophysicist": CareerThemeRule(("Physics", "Science"), ("Music", "Arts", "Business")),
    "Medical Physicist": CareerThemeRule(("Physics", "Healthcare"), ("Music", "Arts")),
    "Engineering Physicist": CareerThemeRule(("Physics", "Tech"), ("Music", "Arts")),
    "Research Scientist (Physics)": CareerThemeRule(("Physics", "Science"), ("Music", "Business")),
    "Physics Teacher/Professor": CareerThemeRule(("Physics", "Education")),
    "Chemist": CareerThemeRule(("Chemistry", "Science"), ("Music", "Arts")),
    "Chemical Engineer": CareerThemeRule(("Chemistry", "Tech"), ("Music", "Arts")),
    "Pharmaceutical Researcher": CareerThemeRule(("Chemistry", "Healthcare"), ("Music", "Arts")),
    "Materials Scientist": CareerThemeRule(("Chemistry", "Physics"), ("Music", "Arts")),
    "Analytical Chemist": CareerThemeRule(("Chemistry", "Science"), ("Music", "Arts")),
    "Environmental Chemist": CareerThemeRule(("Chemistry", "Science"), ("Music", "Arts")),
    "Chemistry Teacher/Professor": CareerThemeRule(("Chemistry", "Education")),
    "Biologist": CareerThemeRule(("Science",), ("Music", "Arts")),
    "Geneticist": CareerThemeRule(("Science",), ("Music", "Arts")),
    "Microbiologist": CareerThemeRule(("Science",), ("Music", "Arts")),
    "Biomedical Researcher": CareerThemeRule(("Science", "Healthcare"), ("Music", "Arts")),
    "Environmental Scientist": CareerThemeRule(("Science",), ("Music", "Arts")),
    "Music Producer": CareerThemeRule(("Music",), ("Tech", "Science", "Physics", "Chemistry")),
    "Sound Engineer": CareerThemeRule(("Music", "Tech"), ("Science", "Physics", "Chemistry")),
    "Music Teacher": CareerThemeRule(("Music", "Education"), ("Tech", "Science", "Physics", "Chemistry")),
    "Composer": CareerThemeRule(("Music", "Arts"), ("Tech", "Science", "Physics", "Chemistry")),
    "Audio Programmer": CareerThemeRule(("Music", "Tech"), ("Science", "Physics", "Chemistry")),
    "Graphic Designer": CareerThemeRule(("Arts",), ("Science", "Physics", "Chemistry")),
    "UI/UX Designer": CareerThemeRule(("Arts", "Tech"), ("Science", "Physics", "Chemistry")),
    "Marketing Manager": CareerThemeRule(("Business",)),
    "Financial Analyst": CareerThemeRule(("Business",)),
    "Registered Nurse": CareerThemeRule(("Healthcare",)),
    "Physical Therapist": CareerThemeRule(("Healthcare",)),
    "High School Teacher": CareerThemeRule(("Education",)),
}

TITLE_KEYWORD_RULES: tuple[TitleKeywordRule, ...] = (
    TitleKeywordRule(("software", "engineer", "developer", "programmer"), ("Tech",), 30, ("Music", "Arts"), 20),
    TitleKeywordRule(("data", "analyst"), ("Tech", "Science"), 25, ("Music", "Arts"), 15),
    TitleKeywordRule(("physics", "physicist", "scientist"), ("Physics", "Science"), 30, ("Music", "Arts"), 25),
    TitleKeywordRule(("chemist", "chemical", "lab"), ("Chemistry", "Science"), 30, ("Music", "Arts"), 25),
    TitleKeywordRule(("music", "audio", "sound"), ("Music",), 30, ("Physics", "Chemistry", "Science"), 20),
    TitleKeywordRule(("art", "design", "illustrat"), ("Arts",), 30, ("Physics", "Chemistry", "Science"), 20),
    TitleKeywordRule(("business", "marketing", "finance", "financial", "sales"), ("Business",), 25),
    TitleKeywordRule(("nurse", "medical", "health", "therap", "doctor"), ("Healthcare",), 25),
    TitleKeywordRule(("teacher", "professor", "tutor", "educat"), ("Education",), 25),
)

SCIENCE_CLUSTERS = frozenset({"tech", "science", "physics", "chemistry"})
ARTS_CLUSTERS = frozenset({"arts", "music", "design", "creative"})
SCIENCE_CLUSTER_THEMES = frozenset({"Tech", "Science", "Physics", "Chemistry"})


def cluster_group(career_cluster: str | None) -> str | None:
    key = (career_cluster or "").strip().lower()
    if key in SCIENCE_CLUSTERS:
        return "science"
    if key in ARTS_CLUSTERS:
        return "arts"
    return None


def _overlaps(themes: set[str], group: Iterable[str]) -> bool:
    return not themes.isdisjoint(group)


def _table_adjustment(themes: set[str], rule: CareerThemeRule) -> int:
    bonus = get_scoring_int("heuristic.required_theme_bonus", 25)
    penalty = get_scoring_int("heuristic.incompatible_theme_penalty", 30)
    delta = bonus * sum(1 for theme in rule.required if theme in themes)
    delta -= penalty * sum(1 for theme in rule.incompatible if theme in themes)
    return delta


def _title_adjustment(themes: set[str], career_title: str) -> int:
    lowered = career_title.lower()
    delta = 0
    for rule in TITLE_KEYWORD_RULES:
        if not any(keyword in lowered for keyword in rule.keywords):
            continue
        if _overlaps(themes, rule.bonus_themes):
            delta += rule.bonus
        if rule.penalty_themes and _overlaps(themes, rule.penalty_themes):
            delta -= rule.penalty
    return delta


def _cluster_adjustment(themes: set[str], career_cluster: str | None) -> int:
    group = cluster_group(career_cluster)
    if group is None:
        return 0
    bonus = get_scoring_int("heuristic.cluster_bonus", 15)
    penalty = get_scoring_int("heuristic.cluster_penalty", 25)
    if group == "science":
        aligned, opposed = SCIENCE_CLUSTER_THEMES, ARTS_THEMES
    else:
        aligned, opposed = ARTS_THEMES, HARD_SCIENCE_THEMES
    delta = 0
    if _overlaps(themes, aligned):
        delta += bonus
    if _overlaps(themes, opposed):
        delta -= penalty
    return delta


def score_career(themes: Iterable[str], career_title: str, career_cluster: str | None = None) -> int:
    user_themes = set(themes or ())
    title = (career_title or "").strip()
    score = get_scoring_int("heuristic.baseline", 50)

    rule = CAREER_THEME_TABLE.get(title)
    if rule is not None:
        score += _table_adjustment(user_themes, rule)
    else:
        score += _title_adjustment(user_themes, title)

    if career_cluster:
        score += _cluster_adjustment(user_themes, career_cluster)

    low = get_scoring_int("heuristic.min_score", 10)
    high = get_scoring_int("heuristic.max_score", 95)
    return max(low, min(high, score))
