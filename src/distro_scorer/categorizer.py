"""Categorizer - maps a final score to a qualitative fit category."""

from typing import Optional

from .config import ScorerConfig, get_config
from .schema import FitCategory


def categorize(score: int, config: Optional[ScorerConfig] = None) -> FitCategory:
    """Return the fit category for a 0-100 score.

    With default thresholds: 75 and above is strong, 50-74 potential,
    anything lower none.
    """
    thresholds = (config or get_config()).category_thresholds
    if score >= thresholds.strong:
        return FitCategory.STRONG
    if score >= thresholds.potential:
        return FitCategory.POTENTIAL
    return FitCategory.NONE
