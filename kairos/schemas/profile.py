from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

EducationLevel = Literal["highSchool", "undergrad", "masters", "phd", "professional"]


class Ikigai(BaseModel):
    passions: str = Field(default="", max_length=4000)
    skills: str = Field(default="", max_length=4000)
    values: str = Field(default="", max_length=4000)
    interests: str = Field(default="", max_length=4000)
    education_level: EducationLevel | None = None

    def is_complete(self) -> bool:
        return all(part.strip() for part in (self.passions, self.skills, self.values, self.interests))

    def to_narrative(self) -> str:
        return (
            f"Passions: {self.passions.strip() or 'N/A'}. "
            f"Skills: {self.skills.strip() or 'N/A'}. "
            f"Values: {self.values.strip() or 'N/A'}. "
            f"Interests: {self.interests.strip() or 'N/A'}. "
            f"Current Education Level: {self.education_level or 'N/A'}."
        )


class ThemesRequest(BaseModel):
    profile: Ikigai


class ThemesResponse(BaseModel):
    themes: list[str] = Field(default_factory=list)
