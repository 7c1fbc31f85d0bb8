import logging
from typing import Any

from fastapi import APIRouter, Body, Header, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from career_tailor.core.rate_limit import rate_limit
from career_tailor.core.security import require_session
from career_tailor.schemas import BenchmarkCandidate, MatchScoreBreakdown
from career_tailor.schemas.functions import GapChecklistResponse
from career_tailor.services.gap_checklist import generate_gap_checklist

router = APIRouter()
logger = logging.getLogger(__name__)


def _failure(message: str, status_code: int) -> JSONResponse:
    body = GapChecklistResponse(success=False, checklist=None, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


def _parse_score(raw: Any) -> MatchScoreBreakdown | None:
    if not isinstance(raw, dict) or not raw.get("categories"):
        return None
    try:
        return MatchScoreBreakdown.model_validate(raw)
    except ValidationError as exc:
        logger.info("gap_checklist_invalid_score errors=%s", exc.error_count())
        return None


def _parse_benchmark(raw: Any) -> BenchmarkCandidate | None:
    if not isinstance(raw, dict) or not raw:
        return None
    try:
        return BenchmarkCandidate.model_validate(raw)
    except ValidationError as exc:
        logger.info("gap_checklist_invalid_benchmark errors=%s", exc.error_count())
        return None


@router.post("/functions/generate-gap-checklist", response_model=GapChecklistResponse)
@rate_limit()
async def gap_checklist(
    request: Request,
    payload: dict[str, Any] | None = Body(default=None),
    authorization: str | None = Header(default=None),
):
    _ = request
    require_session(authorization)

    payload = payload or {}
    score_breakdown = _parse_score(payload.get("scoreBreakdown"))
    if score_breakdown is None:
        return _failure("Valid scoreBreakdown is required", status.HTTP_400_BAD_REQUEST)
    benchmark = _parse_benchmark(payload.get("benchmark"))
    if benchmark is None:
        return _failure("Benchmark candidate is required", status.HTTP_400_BAD_REQUEST)

    try:
        result = generate_gap_checklist(score_breakdown, benchmark)
    except Exception as exc:  # noqa: BLE001 - callers expect the failure envelope
        logger.exception("gap_checklist_failed: %s", exc)
        return _failure(str(exc) or "An unexpected error occurred", status.HTTP_500_INTERNAL_SERVER_ERROR)

    body = GapChecklistResponse(
        success=True,
        checklist=result.checklist.items,
        total_gaps=result.checklist.total_gaps,
        high_priority_count=result.checklist.high_priority_count,
        metrics={"executionTimeMs": result.execution_time_ms},
    )
    return JSONResponse(content=body.model_dump(mode="json", by_alias=True, exclude_none=True))
