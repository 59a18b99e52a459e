"""
Presenter-owned state: the available image pairs, which one is selected,
and the current background subtraction threshold.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from config import INITIAL_THRESHOLD, THRESHOLD_STEP

logger = logging.getLogger(__name__)


def clamp_threshold(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


@dataclass(frozen=True)
class ImagePair:
    name: str
    background: np.ndarray
    foreground: np.ndarray


@dataclass
class Session:
    pairs: List[ImagePair]
    threshold: float = INITIAL_THRESHOLD
    threshold_step: float = THRESHOLD_STEP
    pair_index: int = 0

    def __post_init__(self):
        if not self.pairs:
            raise ValueError("Session needs at least one image pair")
        self.pairs = list(self.pairs)
        self.threshold = clamp_threshold(self.threshold)
        if not 0 <= self.pair_index < len(self.pairs):
            raise ValueError(f"pair_index {self.pair_index} out of range")

    @property
    def current_pair(self) -> ImagePair:
        return self.pairs[self.pair_index]

    def select_pair(self, index: int) -> ImagePair:
        if not 0 <= index < len(self.pairs):
            raise ValueError(f"No image pair {index} (have {len(self.pairs)})")
        self.pair_index = index
        logger.info("Selected pair %d (%s)", index + 1, self.current_pair.name)
        return self.current_pair

    def set_threshold(self, value: float) -> float:
        self.threshold = clamp_threshold(value)
        logger.info("Threshold %.2f", self.threshold)
        return self.threshold

    def raise_threshold(self) -> float:
        return self.set_threshold(self.threshold + self.threshold_step)

    def lower_threshold(self) -> float:
        return self.set_threshold(self.threshold - self.threshold_step)
