from .explanation import explanation_tier, render_explanation
from .mismatch import is_mismatch
from .scorer import CAREER_THEME_TABLE, TITLE_KEYWORD_RULES, cluster_group, score_career
from .themes import (
    ARTS_THEMES,
    HARD_SCIENCE_THEMES,
    THEME_VOCABULARY,
    detect_themes_from_keywords,
    extract_themes,
    normalize_themes,
)

__all__ = [
    "explanation_tier",
    "render_explanation",
    "is_mismatch",
    "CAREER_THEME_TABLE",
    "TITLE_KEYWORD_RULES",
    "cluster_group",
    "score_career",
    "ARTS_THEMES",
    "HARD_SCIENCE_THEMES",
    "THEME_VOCABULARY",
    "detect_themes_from_keywords",
    "extract_themes",
    "normalize_themes",
]
