import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from kairos.matching.explanation import explanation_tier, render_explanation  # noqa: E402


@pytest.mark.parametrize(
    "score,mismatch,tier",
    [
        (29, True, "major_mismatch"),
        (30, True, "partial"),
        (90, True, "partial"),
        (80, False, "excellent"),
        (79, False, "good"),
        (60, False, "good"),
        (59, False, "moderate"),
        (40, False, "moderate"),
        (39, False, "limited"),
    ],
)
def test_explanation_tiers(score, mismatch, tier):
    assert explanation_tier(score, mismatch) == tier


def test_explanation_names_themes_career_and_score():
    text = render_explanation(["Tech", "Science"], "Data Scientist", 85, False)
    assert text.startswith("Excellent Match:")
    assert "Tech, Science" in text
    assert "Data Scientist" in text
    assert "85%" in text


def test_explanation_without_themes():
    text = render_explanation([], "Chemist", 20, True)
    assert text.startswith("Major Theme Mismatch:")
    assert "diverse interests" in text


def test_explanation_mentions_cluster_inline():
    text = render_explanation(["Arts"], "Graphic Designer", 65, False, "Arts")
    assert "fits Graphic Designer in the Arts field well" in text
    assert text.endswith("strong candidate.")
