import json
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fakes import FakeAI, failing_ai  # noqa: E402

from kairos.catalog import get_default_catalog  # noqa: E402
from kairos.schemas.match import MatchResult  # noqa: E402
from kairos.services.match_service import (  # noqa: E402
    accept_ai_scores,
    build_match_prompt,
    local_scores,
    match_career,
    match_career_outcome,
    rank_careers,
)

PROFILE = (
    "Passions: building apps. Skills: Python, algorithms. Values: innovation. "
    "Interests: machine learning. Current Education Level: undergrad."
)


def ai_scores(**overrides) -> str:
    payload = {
        "explanation": "Strong fit for backend engineering work.",
        "skillMatch": 88,
        "interestMatch": 90,
        "valueAlignment": 70,
        "overallScore": 86,
        "themeMismatch": False,
    }
    payload.update(overrides)
    return json.dumps(payload)


class MatchServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_tech_user_and_software_engineer_without_ai(self):
        outcome = await match_career_outcome(PROFILE, "Software Engineer", ai=failing_ai(), themes=["Tech"])
        result = outcome.value
        self.assertEqual(outcome.source, "local")
        self.assertEqual(result.overall_score, 75)
        self.assertEqual(result.confidence, "high")
        self.assertFalse(result.theme_mismatch)
        self.assertTrue(result.explanation.startswith("Good Match"))
        self.assertIn("Software Engineer", result.explanation)
        self.assertEqual((result.skill_match, result.interest_match, result.value_alignment), (80, 75, 85))

    async def test_arts_user_and_physicist_without_ai(self):
        outcome = await match_career_outcome(PROFILE, "Physicist", ai=failing_ai(), themes=["Arts"])
        result = outcome.value
        self.assertEqual(result.overall_score, 10)
        self.assertEqual(result.confidence, "low")
        self.assertTrue(result.theme_mismatch)
        self.assertIn("Major Theme Mismatch", result.explanation)
        self.assertEqual((result.skill_match, result.interest_match, result.value_alignment), (15, 10, 20))

    async def test_generic_midpoint_score_is_rejected(self):
        ai = FakeAI(ai_scores(overallScore=50))
        outcome = await match_career_outcome(PROFILE, "Software Engineer", ai=ai, themes=["Tech"])
        self.assertEqual(outcome.source, "local")
        self.assertEqual(outcome.value.overall_score, 75)
        self.assertEqual(len(ai.calls), 1)

    async def test_out_of_range_score_is_rejected(self):
        outcome = await match_career_outcome(
            PROFILE, "Software Engineer", ai=FakeAI(ai_scores(overallScore=140)), themes=["Tech"]
        )
        self.assertEqual(outcome.source, "local")

    async def test_accepted_ai_scores(self):
        ai = FakeAI("Here is my analysis:\n```json\n" + ai_scores(confidence="low") + "\n```")
        outcome = await match_career_outcome(PROFILE, "Software Engineer", ai=ai, themes=["Tech"])
        result = outcome.value
        self.assertEqual(outcome.source, "ai")
        self.assertEqual(result.overall_score, 86)
        self.assertEqual(result.confidence, "high")
        self.assertEqual(result.explanation, "Strong fit for backend engineering work.")

    async def test_ai_scores_without_explanation_use_template(self):
        ai = FakeAI(ai_scores(explanation="   ", overallScore=62))
        result = await match_career(PROFILE, "Software Engineer", ai=ai, themes=["Tech"])
        self.assertEqual(result.overall_score, 62)
        self.assertTrue(result.explanation.startswith("Good Match"))

    async def test_never_raises_when_ai_always_fails(self):
        for title in ("Software Engineer", "Physicist", "Unknown Role", ""):
            outcome = await match_career_outcome(PROFILE, title, ai=failing_ai())
            self.assertIsInstance(outcome.value, MatchResult)
            self.assertIn(outcome.source, {"local", "fallback"})
            self.assertGreaterEqual(outcome.value.overall_score, 0)
            self.assertLessEqual(outcome.value.overall_score, 100)

    async def test_internal_fault_returns_fallback(self):
        with patch("kairos.services.match_service.score_career", side_effect=RuntimeError("boom")):
            outcome = await match_career_outcome(PROFILE, "Chemist", ai=failing_ai(), themes=["Chemistry"])
        self.assertEqual(outcome.source, "fallback")
        self.assertTrue(outcome.degraded)
        self.assertEqual(outcome.value.overall_score, 65)
        self.assertEqual(outcome.value.confidence, "medium")
        self.assertIn("Chemist", outcome.value.explanation)

    async def test_rank_careers_orders_by_score(self):
        ai = FakeAI("not json", themes=["Tech"])
        themes, ranked = await rank_careers(PROFILE, get_default_catalog().all(), limit=5, ai=ai)
        self.assertEqual(themes, ["Tech"])
        self.assertEqual(len(ranked), 5)
        self.assertEqual(ranked[0].score, 90)
        self.assertEqual(ranked[0].cluster, "Tech")
        scores = [item.score for item in ranked]
        self.assertEqual(scores, sorted(scores, reverse=True))


class MatchHelpersTests(unittest.TestCase):
    def test_accept_ai_scores(self):
        self.assertTrue(accept_ai_scores(json.loads(ai_scores())))
        self.assertFalse(accept_ai_scores(None))
        self.assertFalse(accept_ai_scores({"skillMatch": 80}))
        self.assertFalse(accept_ai_scores(json.loads(ai_scores(overallScore=5))))
        self.assertFalse(accept_ai_scores(json.loads(ai_scores(skillMatch=-1))))
        self.assertFalse(accept_ai_scores(json.loads(ai_scores(overallScore="80"))))
        self.assertFalse(accept_ai_scores(json.loads(ai_scores(overallScore=50.4))))
        self.assertFalse(accept_ai_scores(json.loads(ai_scores(overallScore=49.6))))
        self.assertTrue(accept_ai_scores(json.loads(ai_scores(overallScore=50.6))))

    def test_local_scores_are_bounded(self):
        for base in (10, 50, 95):
            for mismatch in (True, False):
                for value in local_scores(base, mismatch).values():
                    self.assertGreaterEqual(value, 0)
                    self.assertLessEqual(value, 100)

    def test_science_prompt_uses_science_weights(self):
        prompt = build_match_prompt(PROFILE, ["Physics"], "Physicist", "", 75, "Physics")
        self.assertIn("SCIENCE/TECH", prompt)
        self.assertIn("PHYSICS SPECIALIZATION", prompt)
        self.assertIn("BASE SCORE TO CONSIDER: 75%", prompt)

    def test_general_prompt(self):
        prompt = build_match_prompt(PROFILE, [], "Marketing Manager", "Brand work.", 50, "Business")
        self.assertIn("(skillMatch * 0.4)", prompt)
        self.assertNotIn("SPECIALIZATION", prompt)


if __name__ == "__main__":
    unittest.main()
