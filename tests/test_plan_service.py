import json
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fakes import VALID_PLAN, FakeAI, failing_ai  # noqa: E402

from kairos.services.plan_service import (  # noqa: E402
    PlanGenerationError,
    build_plan_prompt,
    extract_education_level,
    generate_action_plan,
    stream_action_plan,
)


async def collect(gen) -> list[str]:
    return [frame async for frame in gen]


class ActionPlanTests(unittest.IsolatedAsyncioTestCase):
    async def test_valid_plan_passes_through(self):
        ai = FakeAI(json.dumps(VALID_PLAN))
        plan = await generate_action_plan("Data Scientist", "Undergraduate in statistics", ai=ai)
        self.assertEqual(plan.career_title, "Data Scientist")
        self.assertEqual(plan.education_level, "Undergraduate")
        self.assertEqual([phase.title for phase in plan.phases][0], "Immediate Steps")
        self.assertEqual(len(plan.phases), 4)
        self.assertFalse(plan.phases[0].tasks[0].completed)

    async def test_unparseable_reply_raises(self):
        with self.assertRaises(PlanGenerationError) as ctx:
            await generate_action_plan("Chemist", "PhD student", ai=FakeAI("I cannot help with that."))
        self.assertEqual(ctx.exception.code, "llm_invalid")

    async def test_schema_violation_raises(self):
        broken = dict(VALID_PLAN, phases=[{"title": "Immediate Steps", "duration": "Now", "tasks": []}])
        with self.assertRaises(PlanGenerationError) as ctx:
            await generate_action_plan("Chemist", "PhD student", ai=FakeAI(json.dumps(broken)))
        self.assertEqual(ctx.exception.code, "llm_invalid")

    async def test_provider_failure_raises(self):
        with self.assertRaises(PlanGenerationError):
            await generate_action_plan("Nurse", "Working professional", ai=failing_ai())

    async def test_missing_provider_raises_unavailable(self):
        with patch("kairos.services.plan_service.resolve_ai_client", return_value=None):
            with self.assertRaises(PlanGenerationError) as ctx:
                await generate_action_plan("Nurse", "Working professional")
        self.assertEqual(ctx.exception.code, "llm_unavailable")

    async def test_stream_relays_tokens(self):
        ai = FakeAI(tokens=['{"careerTitle": ', '"Chemist"}'])
        frames = await collect(stream_action_plan("Chemist", "Master's student", ai=ai))
        self.assertTrue(frames[0].startswith("event: trace"))
        self.assertEqual(frames[1], 'event: chunk\ndata: {"careerTitle": \n\n')
        self.assertEqual(frames[-1], "event: done\ndata: [DONE]\n\n")
        self.assertIn("Master's", ai.streams[0][0].content)

    async def test_stream_reports_errors_then_done(self):
        frames = await collect(stream_action_plan("Chemist", "Master's student", ai=failing_ai()))
        self.assertTrue(frames[-2].startswith("event: error"))
        self.assertEqual(frames[-1], "event: done\ndata: [DONE]\n\n")


class EducationLevelTests(unittest.TestCase):
    def test_extract_education_level(self):
        cases = {
            "I'm a high school senior": "High School",
            "Finishing my bachelor's degree": "Undergraduate",
            "undergraduate student in physics": "Undergraduate",
            "graduate student in chemistry": "Master's",
            "PhD candidate": "PhD",
            "working professional in retail": "Professional",
            "": "Not Specified",
        }
        for details, expected in cases.items():
            self.assertEqual(extract_education_level(details), expected, details)

    def test_prompt_lists_four_phases(self):
        prompt = build_plan_prompt("Teacher", "college sophomore")
        for phase in ("Immediate Steps", "3-Month Goals", "6-Month Goals", "1-Year Goals"):
            self.assertIn(phase, prompt)
        self.assertIn('Education Level: "Undergraduate"', prompt)


if __name__ == "__main__":
    unittest.main()
