from typing import Literal

from pydantic import BaseModel, Field

from kairos.schemas.profile import Ikigai


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(max_length=8000)


class ChatRequest(BaseModel):
    messages: list[ChatTurn] = Field(default_factory=list, max_length=40)
    ikigai: Ikigai | None = None
