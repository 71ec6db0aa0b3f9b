from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from kairos.schemas.profile import Ikigai


class PlanTask(BaseModel):
    id: str = Field(min_length=1)
    text: str = Field(min_length=1)
    completed: bool = False


class PlanPhase(BaseModel):
    title: str = Field(min_length=1)
    duration: str
    tasks: list[PlanTask] = Field(min_length=1)


class ActionPlan(BaseModel):
    career_title: str
    education_level: str
    timeline: str
    phases: list[PlanPhase] = Field(min_length=1)


class ActionPlanRequest(BaseModel):
    career_goal: str = Field(min_length=2, max_length=200)
    user_details: str | None = Field(default=None, max_length=8000)
    profile: Ikigai | None = None

    @model_validator(mode="after")
    def _requires_details(self) -> "ActionPlanRequest":
        if not (self.user_details or "").strip() and self.profile is None:
            raise ValueError("Provide either user_details or profile.")
        return self

    def details_text(self) -> str:
        if (self.user_details or "").strip():
            return self.user_details.strip()
        return self.profile.to_narrative() if self.profile else ""
