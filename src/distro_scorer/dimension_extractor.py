"""Dimension Extractor - Phase 1 of the Scoring Engine.

Maps extracted profile signals onto the four user axes (rolling, diy,
performance, dev_focus). Every axis starts at a configured baseline and
accumulates independent additive contributions, then is clamped to 0-10.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .config import ScorerConfig, get_config
from .schema import (
    DimensionContribution,
    ExperienceLevel,
    Signals,
    UserVector,
)

logger = logging.getLogger(__name__)


class MatchMode(str, Enum):
    """How a signal term is compared to a vocabulary entry."""
    EXACT = "exact"  # Case-sensitive equality
    CONTAINS = "contains"  # Lowercased term contains the entry


@dataclass(frozen=True)
class TermRule:
    """A curated vocabulary and the delta each hit contributes to an axis."""
    name: str
    axis: str
    source: str  # "keywords" or "tech_stack"
    terms: tuple[str, ...]
    delta: int
    mode: MatchMode = MatchMode.EXACT

    def hits(self, values: Iterable[str]) -> list[tuple[str, str]]:
        """Return every (value, vocabulary entry) pair that matches."""
        pairs = []
        for value in values:
            if self.mode == MatchMode.CONTAINS:
                lowered = value.lower()
                pairs.extend((value, term) for term in self.terms if term in lowered)
            else:
                pairs.extend((value, term) for term in self.terms if value == term)
        return pairs


# =============================================================================
# Curated vocabularies (declaration order is kept for diagnostics)
# =============================================================================

BLEEDING_EDGE_TECH = ("rust", "mojo", "zig", "deno", "bun")

STABILITY_KEYWORDS = ("production", "enterprise", "stable", "lts")

CUSTOMIZATION_KEYWORDS = (
    "dotfiles", "rice", "customization", "tiling", "window manager",
    "kernel", "arch", "gentoo", "nixos", "low-level", "assembly",
    # tiling window managers
    "hyprland", "sway", "i3", "awesome", "dwm", "qtile", "bspwm",
    # bars, launchers, display stack
    "wayland", "x11", "compositor", "eww", "polybar", "waybar", "rofi", "wofi",
    # minimal distros
    "minimal", "minimalism", "void", "artix", "crux", "alpine", "kiss",
    "lfs", "linux from scratch", "custom kernel", "musl", "glibc hardening",
    # atomic desktops
    "immutable", "atomic", "silverblue", "kinoite", "bazzite", "ublue",
    # declarative config
    "home-manager", "flakes", "nix", "guix",
    # ricing culture
    "ricing", "unixporn", "gruvbox", "catppuccin", "tokyonight",
)

SIMPLICITY_KEYWORDS = ("beginner", "simple", "easy", "user-friendly")

SCRIPTING_LANGUAGES = ("bash", "lua", "python")

PERFORMANCE_KEYWORDS = ("gaming", "performance", "gpu", "vulkan", "shader", "godot", "unreal")

PERFORMANCE_TECH = (
    "c", "c++", "rust", "vulkan", "opengl", "gpu",
    # compute / GPGPU
    "cuda", "rocm", "opencl", "metal",
    "directx", "dx12", "webgpu",
    # low-level
    "assembly", "asm", "x86", "arm", "riscv",
    # HPC
    "hpc", "mpi", "openmp", "simd", "avx", "avx512",
    "zig", "c++20", "c++23", "cpp",
    "ispc", "halide",
    # game engines
    "game dev", "godot", "unreal", "unity",
)

CRITICAL_DEV_KEYWORDS = ("kernel", "ansible", "kubernetes", "k8s", "docker", "devops")

DEVELOPER_TOOLING = (
    "c", "c++", "go", "rust", "python", "ruby", "javascript", "typescript",
    "java", "kotlin", "swift", "php", "perl", "shell", "bash", "lua",
    "docker", "kubernetes", "terraform", "ansible", "vagrant", "chef", "puppet",
    "jenkins", "gitlab", "github actions", "circleci",
    "aws", "gcp", "azure", "cloud",
    "git", "make", "cmake", "gradle", "maven", "npm", "yarn", "pip",
)

DEV_PROCESS_KEYWORDS = (
    "devops", "backend", "infrastructure", "sre", "platform",
    "rails", "web", "api", "microservices", "containers", "orchestration",
    "automation", "ci/cd", "deployment", "ansible", "kubernetes", "k8s",
)


AXIS_RULES: dict[str, tuple[TermRule, ...]] = {
    "rolling": (
        TermRule("bleeding_edge_tech", "rolling", "tech_stack", BLEEDING_EDGE_TECH, 2),
        TermRule("stability_keyword", "rolling", "keywords", STABILITY_KEYWORDS, -2),
    ),
    "diy": (
        TermRule("customization_keyword", "diy", "keywords", CUSTOMIZATION_KEYWORDS, 3),
        TermRule("simplicity_keyword", "diy", "keywords", SIMPLICITY_KEYWORDS, -2),
    ),
    "performance": (
        TermRule("performance_keyword", "performance", "keywords", PERFORMANCE_KEYWORDS, 2),
        TermRule("performance_tech", "performance", "tech_stack", PERFORMANCE_TECH, 1),
    ),
    "dev_focus": (
        TermRule("critical_dev_keyword", "dev_focus", "keywords", CRITICAL_DEV_KEYWORDS, 2, MatchMode.CONTAINS),
        TermRule("developer_tooling", "dev_focus", "tech_stack", DEVELOPER_TOOLING, 1, MatchMode.CONTAINS),
        TermRule("dev_process_keyword", "dev_focus", "keywords", DEV_PROCESS_KEYWORDS, 1, MatchMode.CONTAINS),
    ),
}


class DimensionExtractor:
    """Derives a UserVector from profile signals.

    Contributions are summed, so the order in which signals or rules are
    visited never changes the result.
    """

    SENIOR_ROLLING_BONUS = 1
    SCRIPTING_BONUS = 2
    SCRIPTING_MIN_LANGUAGES = 2

    def __init__(self, config: Optional[ScorerConfig] = None):
        """Initialize extractor with optional explicit configuration."""
        self.baselines = (config or get_config()).baselines

    def extract(self, signals: Signals) -> UserVector:
        """Derive the user vector from signals."""
        vector, _ = self.extract_with_contributions(signals)
        return vector

    def extract_with_contributions(
        self, signals: Signals
    ) -> tuple[UserVector, list[DimensionContribution]]:
        """Derive the user vector and the contributions that produced it.

        Returns:
            Tuple of (vector, contributions in rule declaration order)
        """
        contributions: list[DimensionContribution] = []

        for axis, rules in AXIS_RULES.items():
            for rule in rules:
                values = signals.keywords if rule.source == "keywords" else signals.tech_stack
                for value, term in rule.hits(values):
                    contributions.append(DimensionContribution(
                        axis=axis,
                        rule=rule.name,
                        term=value if value == term else f"{value} ~ {term}",
                        delta=rule.delta,
                    ))

        contributions.extend(self._context_contributions(signals))

        totals = {
            "rolling": self.baselines.rolling,
            "diy": self.baselines.diy,
            "performance": self.baselines.performance,
            "dev_focus": self.baselines.dev_focus,
        }
        for contribution in contributions:
            totals[contribution.axis] += contribution.delta

        vector = UserVector(**{axis: _clamp(value, 0, 10) for axis, value in totals.items()})

        logger.debug(
            "User dimensions: rolling=%d diy=%d performance=%d dev_focus=%d",
            vector.rolling, vector.diy, vector.performance, vector.dev_focus,
        )
        return vector, contributions

    def _context_contributions(self, signals: Signals) -> list[DimensionContribution]:
        """Contributions that depend on the profile as a whole rather than single terms."""
        contributions = []

        # Senior profiles tolerate more churn
        if signals.experience == ExperienceLevel.SENIOR:
            contributions.append(DimensionContribution(
                axis="rolling",
                rule="senior_experience",
                delta=self.SENIOR_ROLLING_BONUS,
            ))

        # Several scripting languages hint at a tinkerer
        scripting = [t for t in SCRIPTING_LANGUAGES if t in signals.tech_stack]
        if len(scripting) >= self.SCRIPTING_MIN_LANGUAGES:
            contributions.append(DimensionContribution(
                axis="diy",
                rule="scripting_languages",
                term=", ".join(scripting),
                delta=self.SCRIPTING_BONUS,
            ))

        return contributions


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
