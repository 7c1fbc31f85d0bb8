from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from career_tailor.client.functions import FunctionsClient
from career_tailor.core.config import settings
from career_tailor.schemas import BenchmarkCandidate, GapChecklist, MatchScoreBreakdown
from career_tailor.tailoring.export import write_resume
from career_tailor.tailoring.requests import BenchmarkRequest, GapChecklistRequest, ScoreRequest
from career_tailor.tailoring.resume_edits import apply_gap
from career_tailor.tailoring.scheduler import DebounceScheduler, LatestValue

logger = logging.getLogger(__name__)


class LoadingPhase(str, Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    SCORING = "scoring"
    GENERATING_GAPS = "generating-gaps"


@dataclass
class SessionState:
    resume_text: str = ""
    job_description: str = ""
    benchmark: BenchmarkCandidate | None = None
    score_breakdown: MatchScoreBreakdown | None = None
    gap_checklist: GapChecklist | None = None
    phase: LoadingPhase = LoadingPhase.IDLE
    error: str | None = None


PhaseListener = Callable[[LoadingPhase], None]


class TailoringSession:
    """Runs benchmark -> score -> gap checklist for one resume/job pair.

    Stage failures never raise: the failing request's message lands in
    ``state.error``, the phase returns to idle, and results of the stages that
    already completed are kept. Every run takes a new epoch; a run whose epoch
    is no longer current when its call returns (after ``reset`` or a newer
    run) drops its result without touching the state.
    """

    def __init__(
        self,
        functions: FunctionsClient,
        *,
        debounce_s: float | None = None,
        scheduler: DebounceScheduler | None = None,
    ):
        self.state = SessionState()
        self.benchmark_request = BenchmarkRequest(functions)
        self.score_request = ScoreRequest(functions)
        self.gap_request = GapChecklistRequest(functions)
        self._debounce_s = settings.rescore_debounce_ms / 1000 if debounce_s is None else debounce_s
        self._rescore = scheduler or DebounceScheduler()
        self._latest_resume: LatestValue[str] = LatestValue("")
        self._epoch = 0
        self._listeners: list[PhaseListener] = []

    def add_listener(self, listener: PhaseListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    @property
    def rescore_pending(self) -> bool:
        return self._rescore.pending

    async def analyze_job(
        self,
        resume_text: str,
        job_description: str,
        *,
        job_title: str | None = None,
        company_name: str | None = None,
        industry: str | None = None,
    ) -> bool:
        self._rescore.cancel_pending()
        epoch = self._next_epoch()

        self.state.resume_text = resume_text
        self.state.job_description = job_description
        self._latest_resume.set(resume_text)
        self.state.benchmark = None
        self.state.score_breakdown = None
        self.state.gap_checklist = None
        self.state.error = None
        self.benchmark_request.reset()
        self.score_request.reset()
        self.gap_request.reset()

        self._transition(LoadingPhase.ANALYZING)
        benchmark = await self.benchmark_request.run(
            job_description,
            job_title=job_title,
            company_name=company_name,
            industry=industry,
        )
        if epoch != self._epoch:
            return False
        if benchmark is None:
            self._fail(self.benchmark_request.error)
            return False

        self.state.benchmark = benchmark
        return await self._score_and_generate_gaps(resume_text, epoch)

    def update_resume(self, text: str) -> None:
        self.state.resume_text = text
        self._latest_resume.set(text)
        if self.state.benchmark is None:
            return
        self._rescore.schedule(self._debounce_s, self._debounced_rescore)

    async def apply_gap_action(self, gap_id: str) -> bool:
        checklist = self.state.gap_checklist
        if checklist is None or self.state.benchmark is None:
            logger.warning("apply_gap_action_skipped reason=no_analysis gap_id=%s", gap_id)
            return False

        gap = checklist.find(gap_id)
        if gap is None:
            logger.warning("apply_gap_action_skipped reason=unknown_gap gap_id=%s", gap_id)
            return False

        updated = apply_gap(self.state.resume_text, gap)
        logger.info(
            "gap_action_applied gap_id=%s action=%s changed=%s",
            gap_id,
            gap.action,
            updated != self.state.resume_text,
        )
        self.state.resume_text = updated
        self._latest_resume.set(updated)
        self._rescore.cancel_pending()
        return await self._rescore_now(updated)

    def export_resume(self, directory: str | Path | None = None) -> Path:
        role_title = self.state.benchmark.role_title if self.state.benchmark else None
        return write_resume(self.state.resume_text, role_title, directory)

    def reset(self) -> None:
        self._rescore.cancel_pending()
        self._next_epoch()
        previous = self.state.phase
        self.state = SessionState()
        self._latest_resume.set("")
        self.benchmark_request.reset()
        self.score_request.reset()
        self.gap_request.reset()
        if previous is not LoadingPhase.IDLE:
            self._notify(LoadingPhase.IDLE)

    async def wait_for_rescore(self) -> None:
        await self._rescore.wait()

    def close(self) -> None:
        self._rescore.close()

    async def __aenter__(self) -> TailoringSession:
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    async def _debounced_rescore(self) -> None:
        await self._rescore_now(self._latest_resume.get())

    async def _rescore_now(self, resume_text: str) -> bool:
        epoch = self._next_epoch()
        self.state.error = None
        return await self._score_and_generate_gaps(resume_text, epoch)

    async def _score_and_generate_gaps(self, resume_text: str, epoch: int) -> bool:
        benchmark = self.state.benchmark
        if benchmark is None:
            logger.warning("rescore_skipped reason=no_benchmark")
            return False

        self._transition(LoadingPhase.SCORING)
        score = await self.score_request.run(resume_text, benchmark)
        if epoch != self._epoch:
            return False
        if score is None:
            self._fail(self.score_request.error)
            return False
        self.state.score_breakdown = score

        self._transition(LoadingPhase.GENERATING_GAPS)
        checklist = await self.gap_request.run(score, benchmark, resume_text)
        if epoch != self._epoch:
            return False
        if checklist is None:
            self._fail(self.gap_request.error)
            return False
        self.state.gap_checklist = checklist

        logger.info(
            "tailoring_complete role=%s score=%s gaps=%s",
            benchmark.role_title,
            score.overall_score,
            len(checklist.items),
        )
        self._transition(LoadingPhase.IDLE)
        return True

    def _next_epoch(self) -> int:
        self._epoch += 1
        return self._epoch

    def _fail(self, message: str | None) -> None:
        self.state.error = message or "Something went wrong. Please try again."
        logger.warning("tailoring_stage_failed phase=%s error=%s", self.state.phase.value, self.state.error)
        self._transition(LoadingPhase.IDLE)

    def _transition(self, phase: LoadingPhase) -> None:
        logger.debug("tailoring_phase from=%s to=%s", self.state.phase.value, phase.value)
        self.state.phase = phase
        self._notify(phase)

    def _notify(self, phase: LoadingPhase) -> None:
        for listener in list(self._listeners):
            try:
                listener(phase)
            except Exception:
                logger.exception("phase_listener_failed phase=%s", phase.value)
