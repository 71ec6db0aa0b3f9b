from __future__ import annotations

from typing import Iterable

from .scorer import cluster_group
from .themes import ARTS_THEMES, HARD_SCIENCE_THEMES

HARD_SCIENCE_TITLE_KEYWORDS: tuple[str, ...] = ("physics", "physicist", "chemist", "scientist")
ARTS_TITLE_KEYWORDS: tuple[str, ...] = ("music", "art", "design")


def is_mismatch(themes: Iterable[str], career_title: str, career_cluster: str | None = None) -> bool:
    """True when the user's themes pull against the career's science/arts orientation.

    Title keywords decide first; the cluster hint is only consulted when the
    title is neutral.
    """
    user_themes = set(themes or ())
    has_arts = not user_themes.isdisjoint(ARTS_THEMES)
    has_hard_science = not user_themes.isdisjoint(HARD_SCIENCE_THEMES)
    lowered = (career_title or "").lower()

    if any(keyword in lowered for keyword in HARD_SCIENCE_TITLE_KEYWORDS):
        return has_arts
    if any(keyword in lowered for keyword in ARTS_TITLE_KEYWORDS):
        return has_hard_science

    group = cluster_group(career_cluster)
    if group == "science":
        return has_arts
    if group == "arts":
        return has_hard_science
    return False
