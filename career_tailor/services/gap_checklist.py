from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass

from career_tailor.core.tailoring_rules import get_rule_value
from career_tailor.schemas import (
    BenchmarkCandidate,
    GapAction,
    GapAlternative,
    GapChecklist,
    MatchScoreBreakdown,
)

logger = logging.getLogger(__name__)

_SEVERITY_ORDER = {"high": 0, "medium": 1, "low": 2}


@dataclass
class ChecklistResult:
    checklist: GapChecklist
    execution_time_ms: int


def _gap_id() -> str:
    return f"gap_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _limit(path: str, default: int) -> int:
    return int(get_rule_value(f"checklist.{path}", default))


def is_accomplishment_keyword(keyword: str) -> bool:
    verbs = get_rule_value("accomplishment_verbs", []) or []
    lower = keyword.lower()
    return any(verb in lower for verb in verbs)


def format_accomplishment_type(value: str) -> str:
    labels = get_rule_value("accomplishment_type_labels", {}) or {}
    if value in labels:
        return str(labels[value])
    return value.replace("_", " ").title()


def _keyword_gaps(score: MatchScoreBreakdown, benchmark: BenchmarkCandidate, start: int) -> list[GapAction]:
    gaps: list[GapAction] = []
    missing = score.categories.keywords.missing_by_priority
    must_haves = [item for item in missing if item.criticality == "must-have"]
    nice_to_haves = [item for item in missing if item.criticality == "nice-to-have"]

    for index, item in enumerate(must_haves[: _limit("keywords.must_have_limit", 4)]):
        skill = benchmark.find_skill(item.keyword)
        section = "experience" if is_accomplishment_keyword(item.keyword) else "skills"
        if skill is not None and skill.evidence_of_mastery:
            description = f'Add "{item.keyword}" to your {section} section. {skill.evidence_of_mastery}'
        else:
            description = f'Add "{item.keyword}" to your {section} section with concrete examples of usage.'
        gaps.append(
            GapAction(
                id=_gap_id(),
                gap_type="keyword",
                severity="high",
                issue=f'Missing "{item.keyword}" (required for this role)',
                impact="Adding this could increase match score by ~3-5%",
                action="add",
                action_description=description,
                suggested_keyword=item.keyword,
                section=section,
                ui_order=start + index,
                alternatives=(
                    [GapAlternative(type="context", description=skill.why_matters)]
                    if skill is not None and skill.why_matters
                    else None
                ),
            )
        )

    offset = _limit("keywords.nice_to_have_order_offset", 10)
    for index, item in enumerate(nice_to_haves[: _limit("keywords.nice_to_have_limit", 2)]):
        gaps.append(
            GapAction(
                id=_gap_id(),
                gap_type="keyword",
                severity="medium",
                issue=f'Missing "{item.keyword}" (nice-to-have skill)',
                impact="Adding this could increase match score by ~1-2%",
                action="add",
                action_description=f'Consider adding "{item.keyword}" to strengthen your application.',
                suggested_keyword=item.keyword,
                section="skills",
                ui_order=start + len(must_haves) + index + offset,
            )
        )
    return gaps


def _accomplishment_gaps(score: MatchScoreBreakdown, benchmark: BenchmarkCandidate, start: int) -> list[GapAction]:
    gaps: list[GapAction] = []
    accomplishments = score.categories.accomplishments

    if accomplishments.score < _limit("accomplishments.strengthen_below", 75):
        severity = "high" if accomplishments.score < _limit("accomplishments.high_severity_below", 50) else "medium"
        examples = benchmark.typical_metrics[: _limit("accomplishments.example_metrics_limit", 3)]
        gaps.append(
            GapAction(
                id=_gap_id(),
                gap_type="accomplishment",
                severity=severity,
                issue="Your accomplishments lack quantified results. Add metrics to show impact.",
                impact="Adding metrics to 3-4 bullets could increase score by 15-20%",
                action="strengthen",
                action_description=(
                    "Review your experience bullets and add specific numbers: revenue generated, "
                    "users impacted, percentage improvements, team sizes, etc."
                ),
                section="experience",
                improvement_type="add-metrics",
                ui_order=start,
                alternatives=[GapAlternative(type="example-metric", description=metric) for metric in examples],
            )
        )

        missing_types = [finding for finding in accomplishments.accomplishment_types if not finding.found]
        for index, finding in enumerate(missing_types[: _limit("accomplishments.missing_types_limit", 2)]):
            expected = benchmark.find_accomplishment(finding.type)
            if expected is None:
                continue
            gaps.append(
                GapAction(
                    id=_gap_id(),
                    gap_type="accomplishment",
                    severity="medium",
                    issue=f'Missing "{format_accomplishment_type(finding.type)}" accomplishment',
                    impact="Adding this type of accomplishment demonstrates breadth of impact",
                    action="add-new-bullet",
                    action_description=expected.description,
                    section="experience",
                    improvement_type=finding.type,
                    suggested_bullet=expected.example_bullet or None,
                    ui_order=start + 1 + index,
                )
            )

    offset = _limit("accomplishments.missing_metrics_order_offset", 25)
    for index, metric in enumerate(accomplishments.missing_metrics[: _limit("accomplishments.missing_metrics_limit", 2)]):
        gaps.append(
            GapAction(
                id=_gap_id(),
                gap_type="accomplishment",
                severity="low",
                issue=f"Consider adding metric: {metric}",
                impact="This metric type is commonly expected for this role",
                action="strengthen",
                action_description=f"Look for opportunities to quantify your work with {metric.lower()}.",
                section="experience",
                improvement_type="add-specific-metric",
                ui_order=start + index + offset,
            )
        )
    return gaps


def _experience_gaps(score: MatchScoreBreakdown, start: int) -> list[GapAction]:
    experience = score.categories.experience
    if experience.level_match != "below":
        return []

    gaps = [
        GapAction(
            id=_gap_id(),
            gap_type="experience",
            severity="medium",
            issue="Your experience level is below benchmark median. Emphasize impact and breadth.",
            impact="Reframing your work could improve perceived seniority by 10-15 points",
            action="reorganize",
            action_description=(
                f"You have {_years(experience.user_years_of_experience)} years vs. the expected "
                f"{_years(experience.benchmark_years_of_experience.median)}. Focus on: "
                "(1) Highlighting scope and scale of your work, (2) Emphasizing leadership and ownership, "
                "(3) Showing progression and growth."
            ),
            section="experience",
            ui_order=start,
            alternatives=[
                GapAlternative(
                    type="strategy",
                    description='Use strong action verbs that show ownership: "Led", "Architected", "Drove"',
                ),
                GapAlternative(type="strategy", description="Quantify team sizes, budgets, or user counts to show scope"),
            ],
        )
    ]

    offset = _limit("experience.detail_gaps_order_offset", 16)
    for index, detail in enumerate(experience.gaps[: _limit("experience.detail_gaps_limit", 2)]):
        gaps.append(
            GapAction(
                id=_gap_id(),
                gap_type="experience",
                severity="low",
                issue=detail,
                impact="Addressing this could strengthen your overall experience narrative",
                action="strengthen",
                action_description="Consider how to better highlight relevant experience in this area.",
                section="experience",
                ui_order=start + index + offset,
            )
        )
    return gaps


def classify_format_action(issue: str) -> str:
    lower = issue.lower()
    if any(word in lower for word in ("remove", "delete", "graphic")):
        return "remove"
    if any(word in lower for word in ("reorder", "move", "structure")):
        return "reorganize"
    if any(word in lower for word in ("add", "include", "missing")):
        return "add"
    return "reorganize"


_FORMAT_DESCRIPTIONS = {
    "remove": "Remove this element to improve ATS compatibility and focus on content.",
    "add": "Add this element to ensure your resume has all expected sections.",
    "reorganize": "Reorganize this section to improve readability and ATS parsing.",
}


def _format_gaps(score: MatchScoreBreakdown, start: int) -> list[GapAction]:
    gaps: list[GapAction] = []
    ats = score.categories.ats_compliance

    for index, issue in enumerate(ats.issues[: _limit("format.issues_limit", 3)]):
        action = classify_format_action(issue)
        gaps.append(
            GapAction(
                id=_gap_id(),
                gap_type="format",
                severity="medium",
                issue=issue,
                impact="Fixing this improves ATS parsing and readability",
                action=action,
                action_description=_FORMAT_DESCRIPTIONS[action],
                ui_order=start + index,
            )
        )

    offset = _limit("format.missing_sections_order_offset", 13)
    for index, section in enumerate(ats.sections_missing[: _limit("format.missing_sections_limit", 2)]):
        gaps.append(
            GapAction(
                id=_gap_id(),
                gap_type="format",
                severity="medium" if "summary" in section.lower() else "low",
                issue=f"Missing section: {section}",
                impact="Adding standard sections improves ATS compatibility",
                action="add",
                action_description=f"Add a {section} section to your resume.",
                section=section.lower(),
                ui_order=start + index + offset,
            )
        )

    offset = _limit("format.warnings_order_offset", 25)
    for index, warning in enumerate(ats.warnings[: _limit("format.warnings_limit", 2)]):
        gaps.append(
            GapAction(
                id=_gap_id(),
                gap_type="format",
                severity="low",
                issue=warning,
                impact="Minor improvement for readability",
                action="reorganize",
                action_description="Consider addressing this formatting concern.",
                ui_order=start + index + offset,
            )
        )
    return gaps


def _years(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def generate_gap_checklist(score: MatchScoreBreakdown, benchmark: BenchmarkCandidate) -> ChecklistResult:
    """Build the prioritized checklist: keyword, accomplishment, experience, then format gaps.

    Gaps are sorted by severity and then ``ui_order``, truncated to
    ``checklist.max_gaps``, and renumbered.
    """
    started = time.perf_counter()
    gaps: list[GapAction] = []

    gaps.extend(_keyword_gaps(score, benchmark, len(gaps)))
    gaps.extend(_accomplishment_gaps(score, benchmark, len(gaps)))
    gaps.extend(_experience_gaps(score, len(gaps)))
    gaps.extend(_format_gaps(score, len(gaps)))

    ordered = sorted(gaps, key=lambda gap: (_SEVERITY_ORDER[gap.severity], gap.ui_order))
    checklist = [
        gap.model_copy(update={"ui_order": index})
        for index, gap in enumerate(ordered[: _limit("max_gaps", 10)])
    ]
    high_priority = sum(1 for gap in checklist if gap.severity == "high")
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    logger.info(
        "gap_checklist_generated role=%s total=%s returned=%s high=%s",
        benchmark.role_title,
        len(gaps),
        len(checklist),
        high_priority,
    )
    return ChecklistResult(
        checklist=GapChecklist(items=checklist, total_gaps=len(gaps), high_priority_count=high_priority),
        execution_time_ms=elapsed_ms,
    )
