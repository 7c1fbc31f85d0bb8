from .benchmark import (
    BenchmarkCandidate,
    BenchmarkSkill,
    ExpectedAccomplishment,
    ExperienceRange,
)
from .gaps import GapAction, GapAlternative, GapChecklist
from .score import (
    AccomplishmentsCategory,
    AccomplishmentTypeFinding,
    AtsComplianceCategory,
    ExperienceCategory,
    KeywordCategory,
    MatchScoreBreakdown,
    MissingKeyword,
    ScoreCategories,
    ScoreWeights,
)

__all__ = [
    "BenchmarkCandidate",
    "BenchmarkSkill",
    "ExpectedAccomplishment",
    "ExperienceRange",
    "GapAction",
    "GapAlternative",
    "GapChecklist",
    "AccomplishmentsCategory",
    "AccomplishmentTypeFinding",
    "AtsComplianceCategory",
    "ExperienceCategory",
    "KeywordCategory",
    "MatchScoreBreakdown",
    "MissingKeyword",
    "ScoreCategories",
    "ScoreWeights",
]
