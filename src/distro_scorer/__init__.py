"""Distro Scorer: deterministic distro fit scoring from profile signals."""

from .categorizer import categorize
from .engine import ScoringEngine, evaluate, load_signals, score, validate_signals
from .eligibility_filter import NoEligibleDistrosError, ScoringError
from .schema import (
    ExperienceLevel,
    FitCategory,
    MatchResult,
    ScoreResult,
    ScoringResult,
    Sentiment,
    Signals,
    UserVector,
)

__version__ = "1.0.0"

__all__ = [
    "ExperienceLevel",
    "FitCategory",
    "MatchResult",
    "NoEligibleDistrosError",
    "ScoreResult",
    "ScoringEngine",
    "ScoringError",
    "ScoringResult",
    "Sentiment",
    "Signals",
    "UserVector",
    "categorize",
    "evaluate",
    "load_signals",
    "score",
    "validate_signals",
]
