"""Score Normalizer - Phase 4 of the Scoring Engine.

Converts the winning match into an integer 0-100 score. The base is the
rounded post-penalty composite, which a rising winner can push above 100;
contextual rules add integer deltas on top and only the final sum is
clamped. Every rule that fires is returned as a ScoreAdjustment so callers
can explain the score without re-deriving it.
"""

import math

from distro_catalog.schema import DistroEntry, Trend

from .schema import (
    AXES,
    ExperienceLevel,
    MatchResult,
    ScoreAdjustment,
    Signals,
    UserVector,
)


class ScoreNormalizer:
    """Applies contextual adjustments to a match.

    Adjustment groups:
    - Experience: juniors want easy distros, seniors want developer control
    - Coherence: strong needs the winner does not serve
    - Perfect match: axes where user and distro are within one point
    - Popularity risk: niche or declining distros
    """

    # Perfect-match bonus by number of close axes
    CLOSE_AXIS_TOLERANCE = 1
    PERFECT_MATCH_BONUS = {4: 8, 3: 8, 2: 4}

    NICHE_POPULARITY = 150
    DECLINING_RISK_POPULARITY = 300

    def normalize(self, match: MatchResult, vector: UserVector, signals: Signals) -> int:
        """Return the final 0-100 score."""
        _, _, score = self.normalize_with_adjustments(match, vector, signals)
        return score

    def normalize_with_adjustments(
        self, match: MatchResult, vector: UserVector, signals: Signals
    ) -> tuple[int, list[ScoreAdjustment], int]:
        """Compute the score along with the facts behind it.

        Returns:
            Tuple of (base score, adjustments that fired, final clamped score)
        """
        distro = match.distro
        base = round_half_up(match.adjusted_composite * 100)

        adjustments: list[ScoreAdjustment] = []
        adjustments.extend(self._experience_adjustments(distro, signals))
        adjustments.extend(self._coherence_adjustments(distro, vector))
        adjustments.extend(self._perfect_match_adjustments(distro, vector))
        adjustments.extend(self._popularity_risk_adjustments(distro))

        score = max(0, min(100, base + sum(a.delta for a in adjustments)))
        return base, adjustments, score

    def _experience_adjustments(self, distro: DistroEntry, signals: Signals) -> list[ScoreAdjustment]:
        adjustments = []

        if signals.experience == ExperienceLevel.JUNIOR:
            if distro.easy >= 8:
                adjustments.append(ScoreAdjustment(
                    rule="junior_easy_distro", delta=5,
                    reason=f"{distro.name} is easy to use ({distro.easy}/10)",
                ))
            if distro.diy >= 9:
                adjustments.append(ScoreAdjustment(
                    rule="junior_extreme_diy", delta=-10,
                    reason=f"{distro.name} expects heavy DIY ({distro.diy}/10)",
                ))

        elif signals.experience == ExperienceLevel.SENIOR:
            if distro.dev_focus >= 9:
                adjustments.append(ScoreAdjustment(
                    rule="senior_dev_focus", delta=5,
                    reason=f"{distro.name} is strongly developer oriented ({distro.dev_focus}/10)",
                ))
            if distro.diy >= 7:
                adjustments.append(ScoreAdjustment(
                    rule="senior_diy_control", delta=3,
                    reason=f"{distro.name} offers control ({distro.diy}/10 DIY)",
                ))
            if distro.easy >= 10 and distro.diy <= 2:
                adjustments.append(ScoreAdjustment(
                    rule="senior_too_simple", delta=-3,
                    reason=f"{distro.name} is very simple with little control",
                ))

        return adjustments

    def _coherence_adjustments(self, distro: DistroEntry, vector: UserVector) -> list[ScoreAdjustment]:
        adjustments = []

        if vector.dev_focus >= 8 and distro.dev_focus <= 5:
            adjustments.append(ScoreAdjustment(
                rule="dev_focus_mismatch", delta=-5,
                reason=f"Developer focus {vector.dev_focus} vs distro {distro.dev_focus}",
            ))

        if vector.performance >= 8 and distro.performance <= 5:
            adjustments.append(ScoreAdjustment(
                rule="performance_mismatch", delta=-5,
                reason=f"Performance need {vector.performance} vs distro {distro.performance}",
            ))

        return adjustments

    def _perfect_match_adjustments(self, distro: DistroEntry, vector: UserVector) -> list[ScoreAdjustment]:
        close_axes = [
            axis for axis, user, attr in zip(AXES, vector.as_tuple(), distro.attributes())
            if abs(user - attr) <= self.CLOSE_AXIS_TOLERANCE
        ]
        bonus = self.PERFECT_MATCH_BONUS.get(len(close_axes), 0)
        if not bonus:
            return []
        return [ScoreAdjustment(
            rule="perfect_match", delta=bonus,
            reason=f"Close on {len(close_axes)} axes: {', '.join(close_axes)}",
        )]

    def _popularity_risk_adjustments(self, distro: DistroEntry) -> list[ScoreAdjustment]:
        adjustments = []

        if distro.popularity < self.NICHE_POPULARITY:
            adjustments.append(ScoreAdjustment(
                rule="niche_distro", delta=-3,
                reason=f"{distro.name} has a small community ({distro.popularity})",
            ))

        if distro.trend == Trend.DECLINING and distro.popularity < self.DECLINING_RISK_POPULARITY:
            adjustments.append(ScoreAdjustment(
                rule="declining_niche_distro", delta=-5,
                reason=f"{distro.name} is declining with low popularity ({distro.popularity})",
            ))

        return adjustments


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (non-negative input)."""
    return int(math.floor(value + 0.5))
