"""End-to-end tests for the scoring engine."""

import json

import pytest

from conftest import make_catalog, make_distro
from distro_catalog import CatalogLoadError
from distro_scorer import ScoringEngine, evaluate, load_signals, score, validate_signals
from distro_scorer.config import ScorerConfig
from distro_scorer.eligibility_filter import NoEligibleDistrosError
from distro_scorer.schema import FitCategory, ScoreResult, Signals

PROFILES = [
    {},
    {"experience_level": "junior", "keywords": ["beginner", "easy"]},
    {"experience_level": "senior", "keywords": ["DevOps", "backend"], "tech_stack": ["go", "docker"]},
    {"experience_level": "mid|senior", "keywords": ["hyprland", "dotfiles"], "tech_stack": ["rust", "zig"]},
    {"keywords": ["gaming", "gpu", "vulkan"], "tech_stack": ["cuda"]},
    {"keywords": ["production", "enterprise", "stable"]},
]


class TestDefaultCatalog:
    """Scoring against the shipped catalog."""

    def test_empty_signals(self, default_catalog):
        result = evaluate(Signals(), default_catalog)

        assert result.vector.as_tuple() == (5, 5, 3, 5)
        assert result.result.distro_id == "mx"
        assert result.base_score == 82
        assert [a.rule for a in result.adjustments] == ["perfect_match"]
        assert result.result.score == 86
        assert result.result.category == FitCategory.STRONG
        assert result.confidence_band == "high"
        assert result.catalog_version == "2025.1"

    def test_score_returns_only_result(self, default_catalog):
        result = score(Signals(), default_catalog)
        assert isinstance(result, ScoreResult)
        assert result.score == 86

    def test_deterministic(self, default_catalog):
        signals = Signals.model_validate(PROFILES[2])
        first = evaluate(signals, default_catalog)
        second = evaluate(signals, default_catalog)
        assert first.model_dump() == second.model_dump()

    @pytest.mark.parametrize("profile", PROFILES)
    def test_result_ranges(self, default_catalog, profile):
        result = evaluate(Signals.model_validate(profile), default_catalog)

        assert 0 <= result.result.score <= 100
        assert 0.0 <= result.result.confidence <= 1.0
        assert all(0 <= v <= 10 for v in result.vector.as_tuple())
        assert default_catalog.get(result.result.distro_id) is not None

    def test_trend_bonus_survives_negative_adjustments(self, default_catalog):
        signals = Signals(
            experience="junior",
            keywords=["dotfiles", "hyprland", "gaming", "gpu", "devops", "kubernetes"],
            tech_stack=["rust", "zig", "deno"],
        )
        result = evaluate(signals, default_catalog)

        assert result.vector.as_tuple() == (10, 10, 9, 10)
        assert result.result.distro_id == "nixos"
        assert result.match.adjusted_composite > 1.0
        assert result.base_score == 105
        assert [a.rule for a in result.adjustments] == ["junior_extreme_diy", "perfect_match"]
        assert result.result.score == 100
        assert result.result.confidence == 1.0

    def test_set_input_gives_stable_contributions(self, default_catalog):
        keywords = ["tiling", "backend", "gaming", "DevOps", "production", "hyprland"]
        first = evaluate(Signals(keywords=set(keywords)), default_catalog)
        second = evaluate(Signals(keywords=frozenset(reversed(keywords))), default_catalog)

        assert first.contributions == second.contributions
        assert Signals(keywords=set(keywords)).keywords == tuple(sorted(keywords))

    def test_senior_only_matches_popular_distros(self, default_catalog):
        result = evaluate(Signals(experience="senior"), default_catalog)

        assert result.match.distro.popularity >= 500
        assert result.match.eligible_count == 15
        assert result.match.excluded_count == 18
        assert not result.match.eligibility_fallback


class TestCustomCatalog:
    """Scoring against hand-built catalogs."""

    def test_perfect_match_is_capped(self):
        twin = make_distro("twin", rolling=5, diy=5, performance=3, dev_focus=5, popularity=3790)
        result = evaluate(Signals(), make_catalog(twin))

        assert result.match.quality == pytest.approx(1.0)
        assert result.base_score == 100
        assert result.result.score == 100
        assert result.result.category == FitCategory.STRONG

    def test_rising_winner_base_exceeds_hundred(self):
        twin = make_distro("twin", rolling=5, diy=5, performance=3, dev_focus=5,
                           popularity=3790, trend="rising")
        result = evaluate(Signals(), make_catalog(twin))

        assert result.base_score == 108
        assert result.result.score == 100
        assert result.result.confidence == 1.0

    def test_senior_fallback(self):
        catalog = make_catalog(
            make_distro("small", popularity=100),
            make_distro("tiny", popularity=50, rolling=0, diy=0, performance=10, dev_focus=0),
        )
        result = evaluate(Signals(experience="senior"), catalog)

        assert result.match.eligibility_fallback
        assert result.result.distro_id == "small"
        assert result.match.eligible_count == 2

    def test_senior_without_fallback_raises(self):
        config = ScorerConfig.model_validate({"eligibility": {"fallback_to_full_catalog": False}})
        catalog = make_catalog(make_distro("small", popularity=100))
        with pytest.raises(NoEligibleDistrosError):
            evaluate(Signals(experience="senior"), catalog, config)

    def test_custom_thresholds_change_category(self, default_catalog):
        config = ScorerConfig.model_validate({"category_thresholds": {"strong": 90, "potential": 80}})
        result = evaluate(Signals(), default_catalog, config)
        assert result.result.score == 86
        assert result.result.category == FitCategory.POTENTIAL


class TestEngineCatalog:
    """Tests for catalog loading at construction."""

    def test_default_catalog_loaded_at_construction(self, monkeypatch):
        def broken():
            raise CatalogLoadError("Catalog contains no distros.")

        monkeypatch.setattr("distro_scorer.engine.load_default_catalog", broken)
        with pytest.raises(CatalogLoadError):
            ScoringEngine()

    def test_explicit_catalog_skips_default(self, monkeypatch):
        def broken():
            raise CatalogLoadError("should not load")

        monkeypatch.setattr("distro_scorer.engine.load_default_catalog", broken)
        catalog = make_catalog(make_distro("only"))
        engine = ScoringEngine(catalog=catalog)
        assert engine.catalog is catalog
        assert engine.score({}).result.distro_id == "only"


class TestSignalsInput:
    """Tests for the accepted signals shapes."""

    def test_dict_input(self):
        engine = ScoringEngine()
        result = engine.score({"experience_level": "junior", "keywords": ["beginner"]})
        assert result.vector.diy == 3

    def test_path_input(self, tmp_path):
        path = tmp_path / "signals.json"
        path.write_text(json.dumps({"keywords": ["gaming"]}), encoding="utf-8")

        result = ScoringEngine().score(path)
        assert result.vector.performance == 5

    def test_single_item_list_file(self, tmp_path):
        path = tmp_path / "signals.json"
        path.write_text(json.dumps([{"experience_level": "senior"}]), encoding="utf-8")
        assert load_signals(path).experience.value == "senior"

    def test_multi_item_list_file_rejected(self, tmp_path):
        path = tmp_path / "signals.json"
        path.write_text(json.dumps([{}, {}]), encoding="utf-8")
        with pytest.raises(ValueError):
            load_signals(path)

    def test_validate_signals_reports_field(self, tmp_path):
        path = tmp_path / "signals.json"
        path.write_text(json.dumps({"tech_stack": 5}), encoding="utf-8")

        is_valid, issues = validate_signals(path)
        assert not is_valid
        assert issues[0].startswith("tech_stack")

    def test_validate_signals_bad_json(self, tmp_path):
        path = tmp_path / "signals.json"
        path.write_text("{not json", encoding="utf-8")
        is_valid, issues = validate_signals(path)
        assert not is_valid
        assert len(issues) == 1

    def test_validate_signals_ok(self, tmp_path):
        path = tmp_path / "signals.json"
        path.write_text(json.dumps({"topics": ["linux"]}), encoding="utf-8")
        assert validate_signals(path) == (True, [])
