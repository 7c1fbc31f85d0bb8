from .requests import BenchmarkRequest, GapChecklistRequest, ScoreRequest
from .scheduler import DebounceScheduler, LatestValue
from .session import LoadingPhase, SessionState, TailoringSession

__all__ = [
    "BenchmarkRequest",
    "ScoreRequest",
    "GapChecklistRequest",
    "DebounceScheduler",
    "LatestValue",
    "LoadingPhase",
    "SessionState",
    "TailoringSession",
]
