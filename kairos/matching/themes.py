from __future__ import annotations

import json
import logging

from kairos.ai.config import load_ai_config
from kairos.ai.types import AIClient
from kairos.core.config import settings
from kairos.core.config.scoring import get_scoring_int
from kairos.services.llm import json_array_completion

logger = logging.getLogger(__name__)

THEME_VOCABULARY: tuple[str, ...] = (
    "Tech",
    "Physics",
    "Chemistry",
    "Science",
    "Music",
    "Business",
    "Arts",
    "Healthcare",
    "Education",
)

HARD_SCIENCE_THEMES = frozenset({"Physics", "Chemistry", "Science"})
ARTS_THEMES = frozenset({"Music", "Arts"})

_CANONICAL = {theme.lower(): theme for theme in THEME_VOCABULARY}

_THEME_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Tech": (
        "code", "programming", "computer", "software", "developer", "engineer", "python",
        "java", "tech", "machine learning", "data", "algorithm", "web", "app", "mobile",
    ),
    "Physics": (
        "physics", "quantum", "relativity", "astronomy", "space", "energy", "force", "motion",
        "thermodynamics", "particle", "nuclear", "mechanics", "electromagnetism",
    ),
    "Chemistry": (
        "chemistry", "chemical", "molecule", "atom", "reaction", "lab", "organic", "compound",
        "element", "periodic table", "synthesis",
    ),
    "Science": (
        "biology", "research", "experiment", "scientific", "analysis", "genetics",
        "microbiology", "environmental", "biomedical", "neuroscience",
    ),
    "Music": (
        "music", "song", "instrument", "guitar", "piano", "producer", "sound", "audio", "band",
        "concert", "sing", "compose", "melody", "rhythm", "recording",
    ),
    "Business": (
        "business", "market", "finance", "management", "entrepreneur", "startup", "sales",
        "investment", "strategy", "consulting",
    ),
    "Arts": (
        "art", "design", "creative", "drawing", "painting", "visual", "graphic", "ui/ux",
        "illustration", "photography", "animation",
    ),
    "Education": (
        "teach", "education", "learn", "student", "professor", "tutor", "instruction", "curriculum",
    ),
    "Healthcare": (
        "health", "medical", "doctor", "nurse", "patient", "therapy", "medicine", "hospital",
        "clinic", "wellness",
    ),
}

_STRONG_INDICATORS = frozenset({"doctor", "engineer", "programming", "physics", "chemistry", "nurse", "piano"})


def normalize_themes(raw: object) -> list[str]:
    """Keep known theme labels (case-insensitive), first occurrence wins."""
    if not isinstance(raw, list):
        return []
    themes: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            continue
        canonical = _CANONICAL.get(item.strip().lower())
        if canonical and canonical not in themes:
            themes.append(canonical)
    return themes


def detect_themes_from_keywords(profile: str) -> list[str]:
    lowered = (profile or "").lower()
    min_hits = get_scoring_int("themes.min_keyword_hits", 2)
    counts: dict[str, int] = {}
    themes: list[str] = []
    for theme, keywords in _THEME_KEYWORDS.items():
        matched = [keyword for keyword in keywords if keyword in lowered]
        counts[theme] = len(matched)
        if len(matched) >= min_hits or _STRONG_INDICATORS.intersection(matched):
            themes.append(theme)

    has_hard_science = any(theme in HARD_SCIENCE_THEMES for theme in themes)
    if has_hard_science and any(theme in ARTS_THEMES for theme in themes):
        keep_hits = get_scoring_int("themes.arts_keep_hits", 3)
        themes = [t for t in themes if t not in ARTS_THEMES or counts[t] >= keep_hits]
    return themes


def build_theme_prompt(profile: str) -> str:
    return (
        "Analyze this user's profile for career themes.\n"
        f'User Profile: "{profile.strip()}"\n\n'
        f"Available themes: {json.dumps(list(THEME_VOCABULARY))}\n\n"
        "Education level guidance:\n"
        "- High School: focus on interests and basic skills\n"
        "- Undergraduate: consider major and coursework\n"
        "- Master's: focus on specialization areas\n"
        "- PhD: consider research focus and expertise\n\n"
        'Respond ONLY with a JSON array of theme names, e.g. ["Physics", "Tech"] or ["Chemistry"].'
    )


async def extract_themes(
    profile: str,
    ai: AIClient | None = None,
    *,
    strategy: str | None = None,
) -> list[str]:
    """Infer theme labels for a profile narrative. Returns [] whenever inference fails."""
    resolved = strategy or settings.theme_strategy
    if resolved == "keywords":
        return detect_themes_from_keywords(profile)

    if not (profile or "").strip():
        return []

    raw = await json_array_completion(
        ai,
        build_theme_prompt(profile),
        model=load_ai_config().theme_model,
        purpose="theme_extraction",
    )
    if raw is None:
        return []
    themes = normalize_themes(raw)
    if raw and not themes:
        logger.info("theme_extraction_out_of_vocabulary items=%s", len(raw))
    return themes
