from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import WireModel

GapType = Literal["keyword", "accomplishment", "experience", "format"]
GapSeverity = Literal["high", "medium", "low"]
GapActionType = Literal["add", "strengthen", "reorganize", "remove", "add-new-bullet"]
ResumeSection = Literal["summary", "experience", "skills", "education"]


class GapAlternative(WireModel):
    type: str
    description: str


class GapAction(WireModel):
    id: str
    gap_type: GapType
    severity: GapSeverity
    issue: str
    impact: str = ""
    action: GapActionType
    action_description: str = ""
    suggested_keyword: str | None = None
    section: str | None = None
    affected_bullet_indices: list[int] | None = None
    improvement_type: str | None = None
    suggested_bullet: str | None = None
    alternatives: list[GapAlternative] | None = None
    ui_order: int = 0


class GapChecklist(WireModel):
    items: list[GapAction] = Field(default_factory=list)
    total_gaps: int = Field(default=0, ge=0)
    high_priority_count: int = Field(default=0, ge=0)

    def find(self, gap_id: str) -> GapAction | None:
        for item in self.items:
            if item.id == gap_id:
                return item
        return None
