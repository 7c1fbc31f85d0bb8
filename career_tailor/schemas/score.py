from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict, Field

from career_tailor.core.tailoring_rules import get_rule_value

from .base import WireModel
from .benchmark import ExperienceRange, SkillCriticality

LevelMatch = Literal["below", "aligned", "above"]


class MissingKeyword(WireModel):
    keyword: str
    criticality: SkillCriticality


class KeywordCategory(WireModel):
    score: int = Field(ge=0, le=100)
    matched: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    missing_by_priority: list[MissingKeyword] = Field(default_factory=list)
    summary: str = ""


class ExperienceCategory(WireModel):
    score: int = Field(ge=0, le=100)
    user_years_of_experience: float = Field(default=0, ge=0)
    benchmark_years_of_experience: ExperienceRange = Field(default_factory=ExperienceRange)
    level_match: LevelMatch = "aligned"
    gaps: list[str] = Field(default_factory=list)
    summary: str = ""


class AccomplishmentTypeFinding(WireModel):
    type: str
    found: bool
    evidence: str | None = None


class AccomplishmentsCategory(WireModel):
    score: int = Field(ge=0, le=100)
    user_has_metrics: bool = False
    user_metrics: list[str] = Field(default_factory=list)
    benchmark_metrics: list[str] = Field(default_factory=list)
    missing_metrics: list[str] = Field(default_factory=list)
    accomplishment_types: list[AccomplishmentTypeFinding] = Field(default_factory=list)
    summary: str = ""


class AtsComplianceCategory(WireModel):
    score: int = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    sections_found: list[str] = Field(default_factory=list)
    sections_missing: list[str] = Field(default_factory=list)
    summary: str = ""


class ScoreCategories(WireModel):
    keywords: KeywordCategory
    experience: ExperienceCategory
    accomplishments: AccomplishmentsCategory
    ats_compliance: AtsComplianceCategory


def _rule_weight(name: str, fallback: float):
    def factory() -> float:
        return float(get_rule_value(f"scoring.weights.{name}", fallback))

    return factory


class ScoreWeights(WireModel):
    keywords: float = Field(default_factory=_rule_weight("keywords", 0.40))
    experience: float = Field(default_factory=_rule_weight("experience", 0.25))
    accomplishments: float = Field(default_factory=_rule_weight("accomplishments", 0.20))
    ats_compliance: float = Field(default_factory=_rule_weight("ats_compliance", 0.15))


class MatchScoreBreakdown(WireModel):
    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(ge=0, le=100)
    score_explanation: str = ""
    categories: ScoreCategories
    strengths: list[str] = Field(default_factory=list)
    gaps: list[str] = Field(default_factory=list)
    weights: ScoreWeights = Field(default_factory=ScoreWeights)
