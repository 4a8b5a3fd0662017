"""Shared fixtures for the distro scorer test suite."""

import pytest

from distro_catalog.catalog import load_default_catalog
from distro_catalog.schema import DistroCatalog, DistroEntry
from distro_scorer.config import reset_config
from distro_scorer.schema import CandidateScore, MatchResult


@pytest.fixture(autouse=True)
def _default_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="session")
def default_catalog() -> DistroCatalog:
    return load_default_catalog()


def make_distro(distro_id: str = "test", **overrides) -> DistroEntry:
    """Build a distro with neutral attributes, overridable per test."""
    data = {
        "distro_id": distro_id,
        "name": distro_id.title(),
        "rolling": 5,
        "easy": 5,
        "diy": 5,
        "performance": 5,
        "dev_focus": 5,
        "popularity": 1000,
        "trend": "stable",
    }
    data.update(overrides)
    return DistroEntry(**data)


def make_catalog(*distros: DistroEntry) -> DistroCatalog:
    return DistroCatalog(version="test", source="tests", distros=distros)


def make_match(distro: DistroEntry, quality: float) -> MatchResult:
    """A match with a fixed quality, bypassing the matcher."""
    return MatchResult(
        distro=distro,
        quality=quality,
        raw_composite=quality,
        adjusted_composite=quality,
        candidate=CandidateScore(
            distro_id=distro.distro_id,
            distance=0.0,
            similarity=1.0,
            popularity_norm=1.0,
            trend_multiplier=1.0,
            composite=quality,
        ),
        eligible_count=1,
    )
