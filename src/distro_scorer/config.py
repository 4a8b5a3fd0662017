"""Centralized configuration management for the distro scorer."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class DimensionBaselinesConfig(BaseModel):
    """Starting value of each user axis before any signal evidence."""
    rolling: int = Field(5, ge=0, le=10, description="Baseline rolling-release preference")
    diy: int = Field(5, ge=0, le=10, description="Baseline customization preference")
    performance: int = Field(3, ge=0, le=10, description="Baseline performance need")
    dev_focus: int = Field(5, ge=0, le=10, description="Baseline developer orientation")


class MatchingConfig(BaseModel):
    """Weights for the composite match metric.

    The similarity and popularity weights should sum to 1.0.
    """
    similarity_weight: float = Field(
        0.90,
        description="Weight for geometric similarity between user and distro axes"
    )
    popularity_weight: float = Field(
        0.10,
        description="Weight for log-normalized popularity"
    )
    max_distance: float = Field(
        20.0,
        gt=0,
        description="Theoretical max Euclidean distance: sqrt(4 * 10^2)"
    )
    reference_max_popularity: int = Field(
        3790,
        ge=1,
        description="Reference popularity of the most popular distro, used for normalization"
    )
    rising_multiplier: float = Field(1.08, description="Multiplier for rising distros")
    stable_multiplier: float = Field(1.0, description="Multiplier for stable distros")
    declining_multiplier: float = Field(0.97, description="Multiplier for declining distros")


class EligibilityConfig(BaseModel):
    """Hard eligibility rules applied before matching."""
    senior_min_popularity: int = Field(
        500,
        ge=0,
        description="Senior profiles only consider distros at or above this popularity"
    )
    fallback_to_full_catalog: bool = Field(
        True,
        description="When every distro is excluded, score against the full catalog instead of failing"
    )


class SeniorPenaltiesConfig(BaseModel):
    """Multiplicative penalties applied to a senior profile's winning match."""
    generic_distro_multiplier: float = Field(
        0.85,
        description="Applied when a strong developer profile lands on a generic distro"
    )
    too_easy_multiplier: float = Field(
        0.90,
        description="Applied when a strong DIY profile lands on a very easy distro"
    )


class CategoryThresholdsConfig(BaseModel):
    """Score thresholds for the qualitative fit category."""
    strong: int = Field(75, ge=0, le=100, description="Minimum score for a strong fit")
    potential: int = Field(50, ge=0, le=100, description="Minimum score for a potential fit")


class ScorerConfig(BaseModel):
    """Complete configuration for the distro scorer."""
    baselines: DimensionBaselinesConfig = Field(default_factory=DimensionBaselinesConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    eligibility: EligibilityConfig = Field(default_factory=EligibilityConfig)
    senior_penalties: SeniorPenaltiesConfig = Field(default_factory=SeniorPenaltiesConfig)
    category_thresholds: CategoryThresholdsConfig = Field(default_factory=CategoryThresholdsConfig)


# Global config instance
_config: Optional[ScorerConfig] = None


def get_config() -> ScorerConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = ScorerConfig()
    return _config


def load_config(path: Path) -> ScorerConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded ScorerConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = ScorerConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = ScorerConfig()


def find_config_file() -> Optional[Path]:
    """Find a scorer configuration file.

    Looks in (order of priority):
    1. DISTRO_SCORER_CONFIG environment variable
    2. ./scorer-config.yaml
    3. ./scorer-config.yml
    4. ~/.config/distro-scorer/config.yaml
    """
    env_path = os.environ.get("DISTRO_SCORER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["scorer-config.yaml", "scorer-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "distro-scorer" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    data = ScorerConfig().model_dump()

    yaml_content = """# Distro Scorer Configuration
# ===========================
#
# Tunes axis baselines, match weights, eligibility and category thresholds.
#
# Copy this file to one of these locations:
#   - ./scorer-config.yaml (current directory)
#   - ~/.config/distro-scorer/config.yaml (user config)
#
# Or set the DISTRO_SCORER_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
