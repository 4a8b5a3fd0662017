"""Scoring Engine - orchestrates the scoring pipeline.

Pipeline:
1. Dimension extraction: signals -> user vector
2. Eligibility filtering + matching: vector -> best distro
3. Score normalization: match -> 0-100 score
4. Categorization: score -> fit category
5. Explanation facts

Every step is a pure function of (signals, catalog, config); the catalog
is loaded once and shared read-only across calls.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from distro_catalog.catalog import load_catalog, load_default_catalog
from distro_catalog.schema import DistroCatalog

from .categorizer import categorize
from .config import ScorerConfig, get_config
from .dimension_extractor import DimensionExtractor
from .explainer import MatchExplainer
from .matcher import DistroMatcher
from .normalizer import ScoreNormalizer
from .schema import ScoreResult, ScoringResult, Signals

logger = logging.getLogger(__name__)

SignalsInput = Union[Signals, dict[str, Any], str, Path]


class ScoringEngine:
    """Scores profile signals against a distro catalog.

    Usage:
        engine = ScoringEngine()
        engine.load_catalog("distros.json")  # optional, defaults to the shipped catalog
        result = engine.score({"keywords": ["hyprland"], "tech_stack": ["rust"]})
    """

    def __init__(
        self,
        config: Optional[ScorerConfig] = None,
        catalog: Optional[DistroCatalog] = None,
    ):
        """Initialize engine with optional explicit configuration and catalog.

        Without a catalog the shipped one is loaded here, so a broken
        packaged catalog fails at construction rather than on first score.
        """
        self.config = config or get_config()
        self._catalog: DistroCatalog = catalog if catalog is not None else load_default_catalog()

        self.extractor = DimensionExtractor(self.config)
        self.matcher = DistroMatcher(self.config)
        self.normalizer = ScoreNormalizer()
        self.explainer = MatchExplainer()

    @property
    def catalog(self) -> DistroCatalog:
        """The active catalog."""
        return self._catalog

    def load_catalog(self, path: Union[str, Path]) -> DistroCatalog:
        """Load the catalog from a JSON file. Fails fast on bad catalogs."""
        self._catalog = load_catalog(path)
        return self._catalog

    def use_catalog(self, catalog: DistroCatalog) -> None:
        """Use an already-built catalog."""
        self._catalog = catalog

    def score(self, signals: SignalsInput) -> ScoringResult:
        """Score signals against the active catalog.

        Args:
            signals: A Signals model, a dict in signal JSON shape, or a path
                to a signals JSON file.

        Returns:
            Complete ScoringResult with diagnostics.
        """
        return self.evaluate(_coerce_signals(signals))

    def evaluate(self, signals: Signals) -> ScoringResult:
        """Run the full pipeline for already-parsed signals."""
        catalog = self.catalog

        # Phase 1: User vector
        vector, contributions = self.extractor.extract_with_contributions(signals)

        # Phase 2-3: Eligibility and matching
        match = self.matcher.match(vector, catalog, signals)

        # Phase 4: Score and category
        base, adjustments, final_score = self.normalizer.normalize_with_adjustments(
            match, vector, signals
        )
        category = categorize(final_score, self.config)

        # Phase 5: Explanation facts
        reasons = self.explainer.build_reasons(match, vector)

        logger.debug(
            "Scored %s: base=%d adjustments=%d final=%d category=%s",
            match.distro.distro_id, base, sum(a.delta for a in adjustments),
            final_score, category.value,
        )

        return ScoringResult(
            catalog_version=catalog.version,
            result=ScoreResult(
                score=final_score,
                category=category,
                confidence=match.quality,
                distro_id=match.distro.distro_id,
                distro_name=match.distro.name,
            ),
            vector=vector,
            contributions=contributions,
            match=match,
            base_score=base,
            adjustments=adjustments,
            reasons=reasons,
            confidence_band=self.explainer.confidence_band(match.quality),
        )


def evaluate(
    signals: Signals,
    catalog: DistroCatalog,
    config: Optional[ScorerConfig] = None,
) -> ScoringResult:
    """Score signals against a catalog, exposing vector, match and adjustments."""
    return ScoringEngine(config, catalog).evaluate(signals)


def score(
    signals: Signals,
    catalog: DistroCatalog,
    config: Optional[ScorerConfig] = None,
) -> ScoreResult:
    """Score signals against a catalog."""
    return evaluate(signals, catalog, config).result


def load_signals(path: Union[str, Path]) -> Signals:
    """Load signals from a JSON file.

    The file holds one signals object; a single-item array is accepted too.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, list):
        if len(data) != 1:
            raise ValueError(f"Expected one signals object, found {len(data)}")
        data = data[0]
    return Signals.model_validate(data)


def validate_signals(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Validate a signals file without raising.

    Returns:
        Tuple of (is_valid, list of issues).
    """
    try:
        load_signals(path)
    except (OSError, ValueError) as e:
        # ValidationError and JSONDecodeError are both ValueErrors
        if isinstance(e, ValidationError):
            return False, [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        return False, [str(e)]
    return True, []


def _coerce_signals(signals: SignalsInput) -> Signals:
    if isinstance(signals, Signals):
        return signals
    if isinstance(signals, dict):
        return Signals.model_validate(signals)
    return load_signals(signals)
