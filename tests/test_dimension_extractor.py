"""Tests for the dimension extractor."""

import pytest

from distro_scorer.config import ScorerConfig
from distro_scorer.dimension_extractor import AXIS_RULES, DimensionExtractor
from distro_scorer.schema import Signals, UserVector


@pytest.fixture
def extractor() -> DimensionExtractor:
    return DimensionExtractor(ScorerConfig())


class TestBaseline:
    """Tests for signals without evidence."""

    def test_empty_signals_yield_baseline(self, extractor: DimensionExtractor):
        vector = extractor.extract(Signals())
        assert vector == UserVector(rolling=5, diy=5, performance=3, dev_focus=5)

    def test_topics_and_sentiment_do_not_move_axes(self, extractor: DimensionExtractor):
        signals = Signals(topics=["gaming", "kernel"], sentiment="positive")
        assert extractor.extract(signals).as_tuple() == (5, 5, 3, 5)

    def test_custom_baselines(self):
        config = ScorerConfig.model_validate({"baselines": {"performance": 6}})
        vector = DimensionExtractor(config).extract(Signals())
        assert vector.performance == 6


class TestRolling:
    """Tests for the rolling axis."""

    def test_bleeding_edge_tech_and_stability_keywords(self, extractor: DimensionExtractor):
        signals = Signals(tech_stack=["zig", "deno"], keywords=["production"])
        assert extractor.extract(signals).rolling == 5 + 2 + 2 - 2

    def test_senior_bonus(self, extractor: DimensionExtractor):
        assert extractor.extract(Signals(experience="senior")).rolling == 6
        assert extractor.extract(Signals(experience="junior")).rolling == 5

    def test_exact_match_is_case_sensitive(self, extractor: DimensionExtractor):
        assert extractor.extract(Signals(tech_stack=["Zig"])).rolling == 5

    def test_clamped_at_zero(self, extractor: DimensionExtractor):
        signals = Signals(keywords=["production", "enterprise", "stable", "lts"])
        assert extractor.extract(signals).rolling == 0


class TestDIY:
    """Tests for the diy axis."""

    def test_customization_keywords_clamp_at_ten(self, extractor: DimensionExtractor):
        signals = Signals(keywords=["hyprland", "dotfiles"])
        assert extractor.extract(signals).diy == 10

    def test_simplicity_keywords(self, extractor: DimensionExtractor):
        signals = Signals(keywords=["beginner", "easy"])
        assert extractor.extract(signals).diy == 1

    def test_two_scripting_languages_bonus(self, extractor: DimensionExtractor):
        assert extractor.extract(Signals(tech_stack=["bash", "lua"])).diy == 7

    def test_single_scripting_language_no_bonus(self, extractor: DimensionExtractor):
        assert extractor.extract(Signals(tech_stack=["bash"])).diy == 5

    def test_duplicate_scripting_language_counts_once(self, extractor: DimensionExtractor):
        assert extractor.extract(Signals(tech_stack=["bash", "bash"])).diy == 5


class TestPerformance:
    """Tests for the performance axis."""

    def test_gaming_keyword(self, extractor: DimensionExtractor):
        assert extractor.extract(Signals(keywords=["gaming"])).performance == 5

    def test_performance_tech(self, extractor: DimensionExtractor):
        signals = Signals(tech_stack=["cuda", "opencl"])
        assert extractor.extract(signals).performance == 5

    def test_clamped_at_ten(self, extractor: DimensionExtractor):
        signals = Signals(keywords=["gaming", "gpu", "vulkan", "shader"])
        assert extractor.extract(signals).performance == 10


class TestDevFocus:
    """Tests for the dev_focus axis."""

    def test_critical_keyword_is_case_insensitive(self, extractor: DimensionExtractor):
        # "DevOps" hits the critical set (+2) and the dev-process set (+1)
        assert extractor.extract(Signals(keywords=["DevOps"])).dev_focus == 8

    def test_critical_substring(self, extractor: DimensionExtractor):
        # "kernel-hacking" contains "kernel"; no dev-process entry matches
        assert extractor.extract(Signals(keywords=["kernel-hacking"])).dev_focus == 7

    def test_tooling_exact_match(self, extractor: DimensionExtractor):
        assert extractor.extract(Signals(tech_stack=["Go"])).dev_focus == 6

    def test_tooling_counts_every_contained_entry(self, extractor: DimensionExtractor):
        # "docker" contains both "docker" and "c"
        assert extractor.extract(Signals(tech_stack=["docker"])).dev_focus == 7

    def test_dev_process_keyword(self, extractor: DimensionExtractor):
        assert extractor.extract(Signals(keywords=["backend"])).dev_focus == 6


class TestAccumulation:
    """Tests for order independence and diagnostics."""

    def test_order_does_not_matter(self, extractor: DimensionExtractor):
        keywords = ["hyprland", "production", "gaming", "DevOps", "beginner"]
        tech = ["rust", "bash", "python", "docker", "cuda"]
        forward = extractor.extract(Signals(keywords=keywords, tech_stack=tech, experience="senior"))
        backward = extractor.extract(Signals(
            keywords=list(reversed(keywords)),
            tech_stack=list(reversed(tech)),
            experience="senior",
        ))
        assert forward == backward

    def test_contributions_sum_to_vector(self, extractor: DimensionExtractor):
        signals = Signals(keywords=["tiling", "backend"], tech_stack=["rust"], experience="senior")
        vector, contributions = extractor.extract_with_contributions(signals)

        rolling = 5 + sum(c.delta for c in contributions if c.axis == "rolling")
        assert vector.rolling == rolling
        assert {c.rule for c in contributions} >= {
            "bleeding_edge_tech", "customization_keyword", "dev_process_keyword", "senior_experience",
        }

    def test_rule_tables_are_immutable_sequences(self):
        for rules in AXIS_RULES.values():
            assert isinstance(rules, tuple)
            for rule in rules:
                assert isinstance(rule.terms, tuple)
