"""
Global Configuration and Layout Defaults.

This module centralizes the tunables of the force layout and the viewport.
Defaults can be overridden per project through a ``flowlens.toml`` file:

    [layout]
    link_distance = 220
    charge_strength = -650

    [viewport]
    max_scale = 6
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.exceptions import FlowlensError

logger = logging.getLogger(__name__)

# --- Forces ---
LINK_DISTANCE = 180.0
CHARGE_STRENGTH = -500.0
COLLISION_RADIUS = 80.0

# --- Simulation clock (d3-force conventions) ---
ALPHA_MIN = 0.001
ALPHA_DECAY = 1 - ALPHA_MIN ** (1 / 300)
VELOCITY_DECAY = 0.4

# Reheat applied on resize (partial, keeps the existing layout)
RESIZE_ALPHA = 0.3
# Alpha target held while a node is being dragged
DRAG_ALPHA_TARGET = 0.3

# --- Viewport ---
MIN_SCALE = 0.1
MAX_SCALE = 4.0

# Smallest distance used for link curvature (self loops)
CURVE_EPSILON = 1e-6

DEFAULT_CONFIG_NAME = "flowlens.toml"


class LayoutSettings(BaseModel):
    """Force-simulation tunables."""
    link_distance: float = Field(default=LINK_DISTANCE, gt=0)
    charge_strength: float = CHARGE_STRENGTH
    collision_radius: float = Field(default=COLLISION_RADIUS, ge=0)
    alpha_min: float = Field(default=ALPHA_MIN, gt=0, lt=1)
    alpha_decay: float = Field(default=ALPHA_DECAY, ge=0, lt=1)
    velocity_decay: float = Field(default=VELOCITY_DECAY, ge=0, le=1)
    resize_alpha: float = Field(default=RESIZE_ALPHA, ge=0, le=1)
    drag_alpha_target: float = Field(default=DRAG_ALPHA_TARGET, ge=0, le=1)
    seed: int = 0

    model_config = ConfigDict(extra="forbid")


class ViewportSettings(BaseModel):
    """Pan/zoom bounds."""
    min_scale: float = Field(default=MIN_SCALE, gt=0)
    max_scale: float = Field(default=MAX_SCALE, gt=0)

    model_config = ConfigDict(extra="forbid")


class Settings(BaseModel):
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    viewport: ViewportSettings = Field(default_factory=ViewportSettings)

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """
        Load settings from a TOML file.

        Raises:
            FlowlensError: If the file cannot be parsed or holds invalid values.
        """
        try:
            with open(path, "rb") as f:
                raw: Dict[str, Any] = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise FlowlensError(f"Cannot read settings from {path}: {e}") from e

        try:
            settings = cls.model_validate(raw)
        except ValidationError as e:
            raise FlowlensError(f"Invalid settings in {path}: {e}") from e

        if settings.viewport.min_scale > settings.viewport.max_scale:
            raise FlowlensError(f"Invalid settings in {path}: min_scale exceeds max_scale")
        return settings


def find_settings(start: Path | None = None) -> Settings:
    """Load ``flowlens.toml`` from ``start`` (default cwd) if present."""
    candidate = (start or Path.cwd()) / DEFAULT_CONFIG_NAME
    if candidate.exists():
        logger.debug(f"Using settings from {candidate}")
        return Settings.load(candidate)
    return Settings()
