import asyncio
import json
from typing import Callable, Sequence

from kairos.ai.types import ChatMessage


class FakeAI:
    """In-memory AIClient: canned completions, canned stream tokens, optional failure."""

    def __init__(
        self,
        reply: str | Callable[[Sequence[ChatMessage]], str] = "",
        *,
        themes: list | None = None,
        tokens: Sequence[str] = (),
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        self.reply = reply
        self.themes = themes
        self.tokens = tuple(tokens)
        self.error = error
        self.delay = delay
        self.models: list[str | None] = []
        self.calls: list[list[ChatMessage]] = []
        self.streams: list[list[ChatMessage]] = []

    async def complete(self, messages, *, model=None, json_mode=False):
        self.calls.append(list(messages))
        self.models.append(model)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        prompt = messages[-1].content
        if self.themes is not None and "Available themes" in prompt:
            return json.dumps(self.themes)
        if callable(self.reply):
            return self.reply(messages)
        return self.reply

    async def stream(self, messages, *, model=None):
        self.streams.append(list(messages))
        if self.error is not None:
            raise self.error
        for token in self.tokens:
            yield token


def failing_ai() -> FakeAI:
    return FakeAI(error=RuntimeError("provider unavailable"))


VALID_PLAN = {
    "careerTitle": "Data Scientist",
    "educationLevel": "Undergraduate",
    "timeline": "1-Year Plan to Data Scientist",
    "phases": [
        {
            "title": title,
            "duration": duration,
            "tasks": [
                {"id": f"task-{idx}-1", "text": "Finish an applied statistics course", "completed": False},
                {"id": f"task-{idx}-2", "text": "Publish one notebook project", "completed": False},
            ],
        }
        for idx, (title, duration) in enumerate(
            [
                ("Immediate Steps", "Next 30 days"),
                ("3-Month Goals", "Months 1-3"),
                ("6-Month Goals", "Months 4-6"),
                ("1-Year Goals", "Months 7-12"),
            ],
            start=1,
        )
    ],
}
