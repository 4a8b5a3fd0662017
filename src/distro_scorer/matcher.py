"""Matcher - Phase 3 of the Scoring Engine.

Scores every eligible distro against the user vector and selects the best.

composite = (similarity_weight * similarity + popularity_weight * popNorm) * trend

where similarity is 1 minus the normalized Euclidean distance over the four
axes and popNorm is log-scaled popularity relative to a fixed reference.
"""

import logging
import math
from typing import Optional, Sequence, Union

from distro_catalog.schema import DistroCatalog, DistroEntry, Trend

from .config import ScorerConfig, get_config
from .eligibility_filter import EligibilityFilter, ScoringError
from .schema import (
    CandidateScore,
    ExperienceLevel,
    MatchPenalty,
    MatchResult,
    Signals,
    UserVector,
)

logger = logging.getLogger(__name__)

CatalogLike = Union[DistroCatalog, Sequence[DistroEntry]]


class DistroMatcher:
    """Selects the best-fitting distro for a user vector.

    Selection principles:
    - Eligibility filtering happens first, as its own pass
    - Highest composite wins; exact ties keep catalog order
    - Senior penalties only touch the winner, after selection
    """

    # Senior post-selection penalty triggers
    GENERIC_USER_DEV_FOCUS_MIN = 8
    GENERIC_DISTRO_DEV_FOCUS_MAX = 7
    TOO_EASY_USER_DIY_MIN = 8
    TOO_EASY_DISTRO_EASY_MIN = 9

    def __init__(self, config: Optional[ScorerConfig] = None):
        """Initialize matcher with optional explicit configuration."""
        cfg = config or get_config()
        self.weights = cfg.matching
        self.penalties = cfg.senior_penalties
        self.eligibility = EligibilityFilter(cfg)
        self.trend_multipliers = {
            Trend.RISING: self.weights.rising_multiplier,
            Trend.STABLE: self.weights.stable_multiplier,
            Trend.DECLINING: self.weights.declining_multiplier,
        }

    def match(self, vector: UserVector, catalog: CatalogLike, signals: Signals) -> MatchResult:
        """Select the best distro for the vector.

        Args:
            vector: Derived user vector
            catalog: Catalog (or ordered distro sequence) to match against
            signals: Profile signals (experience drives eligibility and penalties)

        Returns:
            MatchResult with the winner and its post-penalty quality
        """
        distros = _distros_of(catalog)
        outcome = self.eligibility.filter(distros, signals)

        candidates = [self.score_candidate(vector, d) for d in outcome.eligible]
        best_index = _select_best(candidates)
        winner = outcome.eligible[best_index]
        best = candidates[best_index]

        logger.debug("Best match: %s (composite: %.4f)", winner.name, best.composite)

        penalties = self._senior_penalties(vector, winner, signals)
        quality = best.composite
        for penalty in penalties:
            quality *= penalty.multiplier
            logger.debug("Penalizing %s: %s (x%.2f)", winner.name, penalty.rule, penalty.multiplier)

        return MatchResult(
            distro=winner,
            quality=_clamp(quality, 0.0, 1.0),
            raw_composite=best.composite,
            adjusted_composite=quality,
            candidate=best,
            penalties=penalties,
            eligible_count=len(outcome.eligible),
            excluded_count=len(outcome.excluded),
            eligibility_fallback=outcome.fallback_applied,
        )

    def rank(self, vector: UserVector, catalog: CatalogLike, signals: Signals) -> list[CandidateScore]:
        """Score every eligible distro, in catalog order (diagnostics)."""
        outcome = self.eligibility.filter(_distros_of(catalog), signals)
        return [self.score_candidate(vector, d) for d in outcome.eligible]

    def score_candidate(self, vector: UserVector, distro: DistroEntry) -> CandidateScore:
        """Compute the composite metric for a single distro."""
        distance = math.sqrt(sum(
            (user - attr) ** 2 for user, attr in zip(vector.as_tuple(), distro.attributes())
        ))
        similarity = 1.0 - _clamp(distance / self.weights.max_distance, 0.0, 1.0)

        popularity_norm = _clamp(
            math.log(distro.popularity + 1) / math.log(self.weights.reference_max_popularity + 1),
            0.0,
            1.0,
        )

        trend_multiplier = self.trend_multipliers[distro.trend]
        composite = (
            self.weights.similarity_weight * similarity
            + self.weights.popularity_weight * popularity_norm
        ) * trend_multiplier

        return CandidateScore(
            distro_id=distro.distro_id,
            distance=distance,
            similarity=similarity,
            popularity_norm=popularity_norm,
            trend_multiplier=trend_multiplier,
            composite=composite,
        )

    def _senior_penalties(
        self, vector: UserVector, winner: DistroEntry, signals: Signals
    ) -> list[MatchPenalty]:
        """Penalties for seniors whose winner is too generic or too easy. Both may apply."""
        if signals.experience != ExperienceLevel.SENIOR:
            return []

        penalties = []

        if (vector.dev_focus >= self.GENERIC_USER_DEV_FOCUS_MIN
                and winner.dev_focus <= self.GENERIC_DISTRO_DEV_FOCUS_MAX):
            penalties.append(MatchPenalty(
                rule="senior_generic_distro",
                multiplier=self.penalties.generic_distro_multiplier,
                reason=f"Developer profile ({vector.dev_focus}) matched a generic distro ({winner.dev_focus})",
            ))

        if (vector.diy >= self.TOO_EASY_USER_DIY_MIN
                and winner.easy >= self.TOO_EASY_DISTRO_EASY_MIN):
            penalties.append(MatchPenalty(
                rule="senior_too_easy_distro",
                multiplier=self.penalties.too_easy_multiplier,
                reason=f"DIY profile ({vector.diy}) matched a very easy distro ({winner.easy})",
            ))

        return penalties


def _select_best(candidates: list[CandidateScore]) -> int:
    """Index of the strictly greatest composite; the first one wins ties."""
    if not candidates:
        raise ScoringError("No candidates to select from")
    best_index = 0
    for index in range(1, len(candidates)):
        if candidates[index].composite > candidates[best_index].composite:
            best_index = index
    return best_index


def _distros_of(catalog: CatalogLike) -> tuple[DistroEntry, ...]:
    if isinstance(catalog, DistroCatalog):
        return catalog.distros
    distros = tuple(catalog)
    if not distros:
        raise ScoringError("Cannot match against an empty catalog")
    return distros


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
