import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fakes import FakeAI, failing_ai  # noqa: E402

from kairos.schemas.chat import ChatTurn  # noqa: E402
from kairos.schemas.profile import Ikigai  # noqa: E402
from kairos.services.chat_service import build_chat_messages, stream_chat  # noqa: E402


async def collect(gen) -> list[str]:
    return [frame async for frame in gen]


class ChatServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_empty_transcript_prompts_for_input(self):
        ai = FakeAI(tokens=["unused"])
        frames = await collect(stream_chat([], ai=ai))
        self.assertIn("event: chunk\ndata: Please type a message.\n\n", frames)
        self.assertEqual(frames[-1], "event: done\ndata: [DONE]\n\n")
        self.assertEqual(ai.streams, [])

    async def test_streams_tokens_with_profile_context(self):
        ai = FakeAI(tokens=["Start ", "with a thesis outline."])
        ikigai = Ikigai(passions="research", skills="writing", values="rigor", interests="biology", education_level="phd")
        turns = [ChatTurn(role="user", content="How do I plan my dissertation?")]

        frames = await collect(stream_chat(turns, ikigai=ikigai, ai=ai))

        self.assertEqual(frames[0], "event: trace\ndata: Thinking...\n\n")
        self.assertEqual(frames[1:3], ["event: chunk\ndata: Start \n\n", "event: chunk\ndata: with a thesis outline.\n\n"])
        self.assertEqual(frames[-1], "event: done\ndata: [DONE]\n\n")
        system = ai.streams[0][0]
        self.assertEqual(system.role, "system")
        self.assertIn("PhD focus", system.content)
        self.assertIn("Passions: research.", system.content)

    async def test_errors_are_streamed_not_raised(self):
        turns = [ChatTurn(role="user", content="hello")]
        frames = await collect(stream_chat(turns, ai=failing_ai()))
        self.assertEqual(frames[-2], "event: error\ndata: provider unavailable\n\n")
        self.assertEqual(frames[-1], "event: done\ndata: [DONE]\n\n")


class ChatMessagesTests(unittest.TestCase):
    def test_history_is_trimmed_and_blank_turns_dropped(self):
        turns = [ChatTurn(role="user" if i % 2 == 0 else "assistant", content=f"message {i}") for i in range(30)]
        turns.append(ChatTurn(role="user", content="   "))
        messages = build_chat_messages(turns, None)
        self.assertEqual(messages[0].role, "system")
        self.assertIn("general student and career guidance", messages[0].content)
        self.assertEqual(len(messages), 13)
        self.assertEqual(messages[-1].content, "message 29")


if __name__ == "__main__":
    unittest.main()
