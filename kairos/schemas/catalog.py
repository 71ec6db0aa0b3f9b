from pydantic import BaseModel, Field


class Career(BaseModel):
    id: str
    title: str
    description: str
    required_skills: list[str] = Field(default_factory=list)
    cluster: str
    market_demand: int = Field(ge=0, le=100)

    def details_text(self) -> str:
        skills = ", ".join(self.required_skills)
        return f"{self.description} Required skills: {skills}." if skills else self.description
