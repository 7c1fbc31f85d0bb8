from __future__ import annotations

from typing import Any

from pydantic import Field

from .base import WireModel
from .benchmark import BenchmarkCandidate
from .gaps import GapAction
from .score import MatchScoreBreakdown


class AnalyzeBenchmarkPayload(WireModel):
    job_description: str
    job_title: str | None = None
    company_name: str | None = None
    industry: str | None = None


class ScoreVsBenchmarkPayload(WireModel):
    resume_text: str
    benchmark: BenchmarkCandidate


class GapChecklistPayload(WireModel):
    score_breakdown: MatchScoreBreakdown | None = None
    benchmark: BenchmarkCandidate | None = None
    resume_text: str | None = None


class GapChecklistResponse(WireModel):
    success: bool
    checklist: list[GapAction] | None = None
    total_gaps: int = 0
    high_priority_count: int = 0
    error: str | None = None
    metrics: dict[str, Any] = Field(default_factory=dict)
