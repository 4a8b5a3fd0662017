"""Eligibility Filter - Phase 2 of the Scoring Engine.

Removes distros a profile should never be matched with before any scoring
happens. Filtering is a separate pass from selection so that an empty
candidate set is visible and handled instead of falling through to an
undefined best match.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from distro_catalog.schema import DistroEntry

from .config import ScorerConfig, get_config
from .schema import ExperienceLevel, Signals

logger = logging.getLogger(__name__)


class ScoringError(Exception):
    """Base error for scoring failures."""


class NoEligibleDistrosError(ScoringError):
    """Raised when no distro survives eligibility and fallback is disabled."""


@dataclass(frozen=True)
class EligibilityOutcome:
    """Result of the eligibility pass."""
    eligible: tuple[DistroEntry, ...]
    excluded: tuple[DistroEntry, ...] = field(default_factory=tuple)
    fallback_applied: bool = False


class EligibilityFilter:
    """Filters distros based on hard eligibility rules.

    Exclusion is complete, not a penalty: an excluded distro is never scored.
    Currently the only rule drops obscure distros for senior profiles.
    """

    def __init__(self, config: Optional[ScorerConfig] = None):
        """Initialize filter with optional explicit configuration."""
        cfg = (config or get_config()).eligibility
        self.senior_min_popularity = cfg.senior_min_popularity
        self.fallback_to_full_catalog = cfg.fallback_to_full_catalog

    def filter(self, distros: Sequence[DistroEntry], signals: Signals) -> EligibilityOutcome:
        """Split distros into eligible and excluded, preserving catalog order.

        Args:
            distros: All distros in catalog order
            signals: Profile signals

        Returns:
            EligibilityOutcome; when every distro was excluded and fallback is
            enabled, the full list is returned as eligible with
            ``fallback_applied`` set.

        Raises:
            NoEligibleDistrosError: If nothing is eligible and fallback is disabled.
        """
        eligible = []
        excluded = []

        for distro in distros:
            if self._is_eligible(distro, signals):
                eligible.append(distro)
            else:
                excluded.append(distro)

        if eligible:
            return EligibilityOutcome(eligible=tuple(eligible), excluded=tuple(excluded))

        if not self.fallback_to_full_catalog:
            raise NoEligibleDistrosError(
                f"All {len(excluded)} distros were excluded for a "
                f"{signals.experience.value} profile"
            )

        logger.warning(
            "All %d distros excluded by eligibility rules; falling back to the full catalog",
            len(excluded),
        )
        return EligibilityOutcome(eligible=tuple(distros), excluded=(), fallback_applied=True)

    def _is_eligible(self, distro: DistroEntry, signals: Signals) -> bool:
        if signals.experience == ExperienceLevel.SENIOR:
            return distro.popularity >= self.senior_min_popularity
        return True
