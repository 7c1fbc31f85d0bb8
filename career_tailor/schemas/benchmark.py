from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict, Field, field_validator

from .base import WireModel

SkillCriticality = Literal["must-have", "nice-to-have", "bonus"]

ROLE_LEVELS = ("entry", "mid", "senior", "staff", "principal", "executive")


class ExperienceRange(WireModel):
    min: float = Field(default=0, ge=0)
    max: float = Field(default=0, ge=0)
    median: float = Field(default=0, ge=0)
    reasoning: str = ""


class BenchmarkSkill(WireModel):
    skill: str
    criticality: SkillCriticality
    why_matters: str = ""
    evidence_of_mastery: str = ""


class ExpectedAccomplishment(WireModel):
    type: str
    description: str = ""
    example_bullet: str = ""
    metrics_to_include: list[str] = Field(default_factory=list)


class BenchmarkCandidate(WireModel):
    model_config = ConfigDict(frozen=True)

    role_title: str
    level: str = "mid"
    industry: str = ""
    synthesis_reasoning: str = ""
    years_of_experience: ExperienceRange = Field(default_factory=ExperienceRange)
    core_skills: list[BenchmarkSkill] = Field(default_factory=list)
    expected_accomplishments: list[ExpectedAccomplishment] = Field(default_factory=list)
    typical_metrics: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in ROLE_LEVELS:
            raise ValueError(f"level must be one of {', '.join(ROLE_LEVELS)}")
        return normalized

    def find_skill(self, name: str) -> BenchmarkSkill | None:
        wanted = name.strip().lower()
        for skill in self.core_skills:
            if skill.skill.strip().lower() == wanted:
                return skill
        return None

    def find_accomplishment(self, accomplishment_type: str) -> ExpectedAccomplishment | None:
        for item in self.expected_accomplishments:
            if item.type == accomplishment_type:
                return item
        return None
