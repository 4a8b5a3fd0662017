"""Pydantic models for the distro catalog schema."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Trend(str, Enum):
    """Directional popularity momentum."""
    RISING = "rising"
    STABLE = "stable"
    DECLINING = "declining"

    @classmethod
    def from_string(cls, value: str) -> "Trend":
        """Parse trend from string (accepts up/down shorthands)."""
        if not value:
            return cls.STABLE
        mapping = {
            "rising": cls.RISING,
            "up": cls.RISING,
            "stable": cls.STABLE,
            "declining": cls.DECLINING,
            "down": cls.DECLINING,
        }
        return mapping.get(value.strip().lower(), cls.STABLE)


class DistroEntry(BaseModel):
    """A single scorable distribution.

    The four matching axes are ``rolling``, ``diy``, ``performance`` and
    ``dev_focus``. ``easy`` is only consulted by contextual adjustments.
    """

    model_config = ConfigDict(frozen=True)

    # Identity
    distro_id: str = Field(..., min_length=1, description="Unique identifier")
    name: str = Field(..., min_length=1, description="Display name")

    # Attributes (0-10)
    rolling: int = Field(..., ge=0, le=10, description="Release cadence: LTS(0) to rolling(10)")
    easy: int = Field(..., ge=0, le=10, description="Ease of use out of the box")
    diy: int = Field(..., ge=0, le=10, description="Expected customization and control")
    performance: int = Field(..., ge=0, le=10, description="Optimization focus")
    dev_focus: int = Field(..., ge=0, le=10, description="Developer orientation")

    # Community metadata
    popularity: int = Field(..., ge=0, description="Hits-per-day style popularity proxy")
    trend: Trend = Field(default=Trend.STABLE, description="Popularity momentum")

    @field_validator("trend", mode="before")
    @classmethod
    def _parse_trend(cls, value):
        if isinstance(value, str):
            return Trend.from_string(value)
        return value

    def attributes(self) -> tuple[int, int, int, int]:
        """Return the matching axes in (rolling, diy, performance, dev_focus) order."""
        return (self.rolling, self.diy, self.performance, self.dev_focus)


class DistroCatalog(BaseModel):
    """Immutable, ordered catalog of distributions.

    Entry order is author-defined and is the tie-break order used by the
    matcher, so it is kept as a tuple and never re-sorted.
    """

    model_config = ConfigDict(frozen=True)

    version: str = Field(default="1.0.0", description="Catalog data version")
    source: str = Field(default="builtin", description="Where the catalog was loaded from")
    distros: tuple[DistroEntry, ...] = Field(..., description="Distro entries in declared order")

    @field_validator("distros")
    @classmethod
    def _check_distros(cls, value: tuple[DistroEntry, ...]) -> tuple[DistroEntry, ...]:
        if not value:
            raise ValueError("catalog must contain at least one distro")
        seen: set[str] = set()
        for entry in value:
            if entry.distro_id in seen:
                raise ValueError(f"duplicate distro_id: {entry.distro_id}")
            seen.add(entry.distro_id)
        return value

    @property
    def total_distros(self) -> int:
        return len(self.distros)

    def get(self, distro_id: str) -> Optional[DistroEntry]:
        """Look up an entry by id."""
        return next((d for d in self.distros if d.distro_id == distro_id), None)
