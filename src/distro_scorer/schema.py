"""Pydantic models for the Distro Scoring Engine.

Input schema for extracted profile signals, intermediate artifacts
(user vector, match) and output schemas for the final score.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Re-export catalog models for convenience
from distro_catalog.schema import DistroEntry, Trend  # noqa: F401


AXES = ("rolling", "diy", "performance", "dev_focus")


# =============================================================================
# Signal Enums
# =============================================================================


class ExperienceLevel(str, Enum):
    """Coarse experience estimate produced by the signal extractor."""
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "ExperienceLevel":
        """Parse experience from string.

        Extractors sometimes answer with several levels joined by pipes
        ("mid|senior"); the last, highest one wins. Unknown values are mid.
        """
        if not value:
            return cls.MID
        if "|" in value:
            value = value.split("|")[-1]
        mapping = {
            "junior": cls.JUNIOR,
            "mid": cls.MID,
            "senior": cls.SENIOR,
        }
        return mapping.get(value.strip().lower(), cls.MID)


class Sentiment(str, Enum):
    """Overall sentiment of the analyzed profile. Not used for scoring."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Sentiment":
        if not value:
            return cls.NEUTRAL
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.NEUTRAL


class FitCategory(str, Enum):
    """Qualitative fit derived from the final score."""
    STRONG = "strong"
    POTENTIAL = "potential"
    NONE = "none"


# =============================================================================
# Input Models
# =============================================================================


class Signals(BaseModel):
    """Structured signals extracted upstream from a profile.

    Collections have set semantics: blanks are dropped and duplicates are
    removed, keeping first-seen order (sets are sorted first). Empty
    collections mean no evidence.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    topics: tuple[str, ...] = Field(default_factory=tuple)
    sentiment: Sentiment = Sentiment.NEUTRAL
    experience: ExperienceLevel = Field(default=ExperienceLevel.MID, alias="experience_level")
    keywords: tuple[str, ...] = Field(default_factory=tuple)
    tech_stack: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("topics", "keywords", "tech_stack", mode="before")
    @classmethod
    def _as_term_set(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError("expected a list of strings")
        if isinstance(value, (set, frozenset)):
            # No inherent order; sort so diagnostics do not depend on hashing
            value = sorted(str(v) for v in value)
        terms = (str(v).strip() for v in value)
        return tuple(dict.fromkeys(t for t in terms if t))

    @field_validator("experience", mode="before")
    @classmethod
    def _parse_experience(cls, value):
        if value is None or isinstance(value, str):
            return ExperienceLevel.from_string(value)
        return value

    @field_validator("sentiment", mode="before")
    @classmethod
    def _parse_sentiment(cls, value):
        if value is None or isinstance(value, str):
            return Sentiment.from_string(value)
        return value


# =============================================================================
# Intermediate Models
# =============================================================================


class UserVector(BaseModel):
    """User preferences on the same 0-10 axes as catalog attributes."""

    model_config = ConfigDict(frozen=True)

    rolling: int = Field(..., ge=0, le=10)
    diy: int = Field(..., ge=0, le=10)
    performance: int = Field(..., ge=0, le=10)
    dev_focus: int = Field(..., ge=0, le=10)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.rolling, self.diy, self.performance, self.dev_focus)


class DimensionContribution(BaseModel):
    """One additive contribution to a user axis."""
    axis: str
    rule: str
    term: Optional[str] = None
    delta: int


class CandidateScore(BaseModel):
    """Composite metric breakdown for one eligible distro."""
    distro_id: str
    distance: float
    similarity: float = Field(..., ge=0, le=1)
    popularity_norm: float = Field(..., ge=0, le=1)
    trend_multiplier: float
    composite: float


class MatchPenalty(BaseModel):
    """A multiplicative penalty applied to the winning composite."""
    rule: str
    multiplier: float
    reason: str


class MatchResult(BaseModel):
    """The winning distro and its match quality."""
    distro: DistroEntry
    quality: float = Field(..., ge=0, le=1, description="Composite after penalties, clamped to [0, 1]")
    raw_composite: float = Field(..., description="Winning composite before penalties")
    adjusted_composite: float = Field(..., description="Composite after penalties, not clamped; the score base")
    candidate: CandidateScore
    penalties: list[MatchPenalty] = Field(default_factory=list)

    # Eligibility audit info
    eligible_count: int = 0
    excluded_count: int = 0
    eligibility_fallback: bool = False


# =============================================================================
# Output Models
# =============================================================================


class ScoreAdjustment(BaseModel):
    """An integer delta added to the base score, with the rule that fired."""
    rule: str
    delta: int
    reason: str


class MatchReason(BaseModel):
    """A structured fact explaining why the winner fits the profile."""
    dimension: str
    user_value: Optional[int] = None
    distro_value: Optional[int] = None
    reason: str


class ScoreResult(BaseModel):
    """Final score for a profile."""
    score: int = Field(..., ge=0, le=100)
    category: FitCategory
    confidence: float = Field(..., ge=0, le=1, description="Match quality used to produce the score")
    distro_id: str
    distro_name: str


class ScoringResult(BaseModel):
    """Complete output from the scoring engine, including diagnostics."""
    # Metadata
    scoring_version: str = Field(default="1.0.0")
    catalog_version: str

    # Final result
    result: ScoreResult

    # Intermediate artifacts (for transparency)
    vector: UserVector
    contributions: list[DimensionContribution] = Field(default_factory=list)
    match: MatchResult

    # Score breakdown
    base_score: int
    adjustments: list[ScoreAdjustment] = Field(default_factory=list)

    # Explanation facts
    reasons: list[MatchReason] = Field(default_factory=list)
    confidence_band: str = "low"
