"""
Defaults and environment-driven settings for the axis demo.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

# ==================== Config ====================
IMG_WIDTH         = 320     # size of the synthetic / expected input images
IMG_HEIGHT        = 240
IMG_SPACER        = 10      # gap between the three panels

MAJOR_AXIS_RADIUS = 100     # half-length of the drawn major axis (px)
MINOR_AXIS_RADIUS = 50      # half-length of the drawn minor axis (px)
CENTROID_RADIUS   = 7       # filled circle at the centroid
LINE_THICKNESS    = 2

INITIAL_THRESHOLD = 0.2     # background subtraction threshold, [0, 1]
THRESHOLD_STEP    = 0.01    # up / down key increment
FRAME_RATE        = 60.0
SYNTHETIC_PAIRS   = 5       # pairs generated when no image dir is given


def _to_bool(value: str, default: bool) -> bool:
    if not value:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _to_number(name: str, default, cast=float):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    image_dir: Optional[str]
    threshold: float
    threshold_step: float
    frame_rate: float
    major_axis_radius: int
    minor_axis_radius: int
    synthetic_pairs: int
    show_hud: bool
    log_level: str

    @property
    def frame_delay_ms(self) -> int:
        """waitKey delay matching the configured frame rate (at least 1 ms)."""
        if self.frame_rate <= 0:
            return 1
        return max(1, int(round(1000.0 / self.frame_rate)))


def get_settings() -> Settings:
    return Settings(
        image_dir=os.getenv("AXIS_IMAGE_DIR") or None,
        threshold=_to_number("AXIS_THRESHOLD", INITIAL_THRESHOLD),
        threshold_step=_to_number("AXIS_THRESHOLD_STEP", THRESHOLD_STEP),
        frame_rate=_to_number("AXIS_FRAME_RATE", FRAME_RATE),
        major_axis_radius=_to_number("AXIS_MAJOR_RADIUS", MAJOR_AXIS_RADIUS, int),
        minor_axis_radius=_to_number("AXIS_MINOR_RADIUS", MINOR_AXIS_RADIUS, int),
        synthetic_pairs=_to_number("AXIS_SYNTHETIC_PAIRS", SYNTHETIC_PAIRS, int),
        show_hud=_to_bool(os.getenv("AXIS_SHOW_HUD", "true"), True),
        log_level=os.getenv("AXIS_LOG_LEVEL", "INFO"),
    )
