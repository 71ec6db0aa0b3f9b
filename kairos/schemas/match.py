from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from kairos.core.config.scoring import get_scoring_int
from kairos.schemas.profile import Ikigai

Confidence = Literal["high", "medium", "low"]


def clamp(value: float, low: int, high: int) -> int:
    return int(max(low, min(high, round(value))))


def confidence_for(overall_score: int) -> Confidence:
    if overall_score >= get_scoring_int("confidence.high", 70):
        return "high"
    if overall_score >= get_scoring_int("confidence.medium", 40):
        return "medium"
    return "low"


class MatchResult(BaseModel):
    skill_match: int
    interest_match: int
    value_alignment: int
    overall_score: int
    theme_mismatch: bool = False
    confidence: Confidence = "medium"
    explanation: str = Field(min_length=1)

    @field_validator("skill_match", "interest_match", "value_alignment", "overall_score", mode="before")
    @classmethod
    def _clamp_score(cls, value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("score must be a number")
        return clamp(value, 0, 100)

    @field_validator("explanation")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("explanation must not be blank")
        return value

    @model_validator(mode="after")
    def _derive_confidence(self) -> "MatchResult":
        self.confidence = confidence_for(self.overall_score)
        return self


class CareerMatchRequest(BaseModel):
    profile: Ikigai
    career_title: str = Field(min_length=1, max_length=200)
    career_details: str | None = Field(default=None, max_length=4000)
    career_cluster: str | None = Field(default=None, max_length=100)


class CareerMatchResponse(MatchResult):
    career_title: str
    themes: list[str] = Field(default_factory=list)
    source: Literal["ai", "local", "fallback"]


class CareerRankRequest(BaseModel):
    profile: Ikigai
    limit: int = Field(default=10, ge=1, le=50)


class RankedCareer(BaseModel):
    career: str
    cluster: str | None = None
    score: int = Field(ge=0, le=100)
    confidence: Confidence
    explanation: str


class CareerRankResponse(BaseModel):
    themes: list[str] = Field(default_factory=list)
    careers: list[RankedCareer] = Field(default_factory=list)
