from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

Confidence = Literal["high", "medium", "low"]


class JournalAnalysisResult(BaseModel):
    career_suggestions: str = Field(min_length=1)
    analysis: str = Field(min_length=1)
    confidence: Confidence
    themes: list[str] = Field(default_factory=list)
    success: bool = True


class JournalAnalyzeRequest(BaseModel):
    journal_text: str = Field(max_length=20000)
    feelings: str = Field(default="", max_length=5000)
    allow_remote_fallback: bool | None = None

    @field_validator("journal_text")
    @classmethod
    def _long_enough(cls, value: str) -> str:
        if len(value.strip()) < 10:
            raise ValueError("journal_text must contain at least 10 characters")
        return value


class JournalAnalyzeResponse(JournalAnalysisResult):
    source: Literal["ai", "local", "fallback"]
