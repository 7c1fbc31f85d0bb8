from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from career_tailor.client.errors import TailoringError, TailoringValidationError
from career_tailor.client.functions import (
    ANALYZE_BENCHMARK,
    GENERATE_GAP_CHECKLIST,
    SCORE_VS_BENCHMARK,
    FunctionsClient,
)
from career_tailor.core.config import settings
from career_tailor.schemas import BenchmarkCandidate, GapAction, GapChecklist, MatchScoreBreakdown
from career_tailor.schemas.functions import AnalyzeBenchmarkPayload, GapChecklistPayload, ScoreVsBenchmarkPayload

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RemoteRequest(Generic[T]):
    """Loading/error/result holder around one remote analysis call.

    ``run`` never raises: validation, auth, remote and unexpected failures are
    normalized into ``error`` and ``None`` is returned.
    """

    fallback_error = "Request failed"

    def __init__(self, functions: FunctionsClient):
        self._functions = functions
        self.result: T | None = None
        self.loading = False
        self.error: str | None = None

    async def _execute(self, call: Callable[[], Awaitable[T]]) -> T | None:
        self.loading = True
        self.error = None
        try:
            result = await call()
        except TailoringError as exc:
            self.result = None
            self.error = str(exc)
            logger.warning("%s_failed code=%s: %s", type(self).__name__, exc.code, exc)
            return None
        except Exception:  # noqa: BLE001 - leaf wrappers never raise
            self.result = None
            self.error = self.fallback_error
            logger.exception("%s_unexpected_error", type(self).__name__)
            return None
        finally:
            self.loading = False
        self.result = result
        return result

    def reset(self) -> None:
        self.result = None
        self.loading = False
        self.error = None


class BenchmarkRequest(RemoteRequest[BenchmarkCandidate]):
    fallback_error = "Failed to analyze job description"

    async def run(
        self,
        job_description: str,
        *,
        job_title: str | None = None,
        company_name: str | None = None,
        industry: str | None = None,
    ) -> BenchmarkCandidate | None:
        async def call() -> BenchmarkCandidate:
            if len((job_description or "").strip()) < settings.min_job_description_chars:
                raise TailoringValidationError(
                    f"Job description must be at least {settings.min_job_description_chars} characters"
                )
            body = AnalyzeBenchmarkPayload(
                job_description=job_description,
                job_title=job_title,
                company_name=company_name,
                industry=industry,
            ).to_wire()
            payload = await self._functions.invoke(ANALYZE_BENCHMARK, body)
            return BenchmarkCandidate.model_validate(_required(payload, "benchmark"))

        return await self._execute(call)


class ScoreRequest(RemoteRequest[MatchScoreBreakdown]):
    fallback_error = "Failed to score resume"

    async def run(self, resume_text: str, benchmark: BenchmarkCandidate | None) -> MatchScoreBreakdown | None:
        async def call() -> MatchScoreBreakdown:
            if len((resume_text or "").strip()) < settings.min_resume_chars:
                raise TailoringValidationError(f"Resume text must be at least {settings.min_resume_chars} characters")
            if benchmark is None or not benchmark.core_skills:
                raise TailoringValidationError("A benchmark with core skills is required to score a resume")
            body = ScoreVsBenchmarkPayload(resume_text=resume_text, benchmark=benchmark).to_wire()
            payload = await self._functions.invoke(SCORE_VS_BENCHMARK, body)
            return MatchScoreBreakdown.model_validate(_required(payload, "score"))

        return await self._execute(call)


class GapChecklistRequest(RemoteRequest[GapChecklist]):
    fallback_error = "Failed to generate gap checklist"

    async def run(
        self,
        score_breakdown: MatchScoreBreakdown | None,
        benchmark: BenchmarkCandidate | None,
        resume_text: str | None = None,
    ) -> GapChecklist | None:
        async def call() -> GapChecklist:
            if score_breakdown is None:
                raise TailoringValidationError("A score breakdown is required to generate gaps")
            if benchmark is None:
                raise TailoringValidationError("A benchmark is required to generate gaps")
            body = GapChecklistPayload(
                score_breakdown=score_breakdown,
                benchmark=benchmark,
                resume_text=resume_text or None,
            ).to_wire()
            payload = await self._functions.invoke(GENERATE_GAP_CHECKLIST, body)
            items = [GapAction.model_validate(item) for item in _required(payload, "checklist")]
            return GapChecklist(
                items=items,
                total_gaps=int(payload.get("totalGaps") or len(items)),
                high_priority_count=int(
                    payload.get("highPriorityCount") or sum(1 for item in items if item.severity == "high")
                ),
            )

        return await self._execute(call)


def _required(payload: dict[str, Any], key: str) -> Any:
    value = payload.get(key)
    if value is None:
        raise TailoringError(f"Response did not include '{key}'", code="remote")
    return value
