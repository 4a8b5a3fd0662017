"""Explainer - Phase 5 of the Scoring Engine.

Collects the structured facts behind a match. The engine never builds
prose; text rendering is left to callers (the CLI's ``summarize`` below
is the only built-in renderer).
"""

from .schema import (
    FitCategory,
    MatchReason,
    MatchResult,
    ScoringResult,
    Trend,
    UserVector,
)


class MatchExplainer:
    """Generates explanation facts for a match.

    Principles:
    - Facts, not sentences: callers decide how to phrase them
    - Only dimensions where both sides are high are reported as reasons
    """

    HIGH_CONFIDENCE = 0.80
    MODERATE_CONFIDENCE = 0.60

    def build_reasons(self, match: MatchResult, vector: UserVector) -> list[MatchReason]:
        """Extract the reasons the winning distro fits the user."""
        distro = match.distro
        reasons = []

        if vector.rolling >= 7 and distro.rolling >= 7:
            reasons.append(MatchReason(
                dimension="rolling",
                user_value=vector.rolling,
                distro_value=distro.rolling,
                reason="Prefers current software and the distro is rolling release",
            ))

        if vector.diy >= 7 and distro.diy >= 7:
            reasons.append(MatchReason(
                dimension="diy",
                user_value=vector.diy,
                distro_value=distro.diy,
                reason="Likes to customize and the distro offers full control",
            ))

        if vector.performance >= 7 and distro.performance >= 8:
            reasons.append(MatchReason(
                dimension="performance",
                user_value=vector.performance,
                distro_value=distro.performance,
                reason="Needs high performance and the distro is optimized for it",
            ))

        if distro.trend == Trend.RISING:
            reasons.append(MatchReason(
                dimension="trend",
                reason="Distro is actively growing",
            ))

        return reasons

    def confidence_band(self, confidence: float) -> str:
        """Bucket a match confidence into high, moderate or low."""
        if confidence >= self.HIGH_CONFIDENCE:
            return "high"
        if confidence >= self.MODERATE_CONFIDENCE:
            return "moderate"
        return "low"


def summarize(result: ScoringResult) -> list[str]:
    """Render short human-readable lines for a scoring result."""
    score = result.result
    intro = {
        FitCategory.STRONG: "Excellent match",
        FitCategory.POTENTIAL: "Moderate match",
        FitCategory.NONE: "Weak match",
    }[score.category]

    lines = [f"{intro}: {score.distro_name} (score: {score.score}/100)."]
    lines.extend(f"{r.reason}." for r in result.reasons)
    lines.append(
        f"Confidence {result.confidence_band} ({int(score.confidence * 100)}%)."
    )
    if result.match.eligibility_fallback:
        lines.append("No distro met the eligibility rules; the full catalog was considered.")
    return lines
