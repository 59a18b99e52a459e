import math
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple, Optional, Tuple

import numpy as np

if TYPE_CHECKING:
    from session import Session

logger = logging.getLogger(__name__)

# Value written to the mask for foreground pixels (background is 0)
FOREGROUND = 255


class AxisError(Exception):
    """Base class for segmentation / moment analysis errors."""


class DimensionMismatchError(AxisError, ValueError):
    """The two images handed to the segmenter differ in shape."""


class DegenerateInputError(AxisError, ValueError):
    """The mask has no foreground pixels, so there is no blob to measure."""


class Point2D(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class AxisResult:
    centroid: Point2D
    major_axis_angle: float   # radians
    pixel_count: int

    @property
    def minor_axis_angle(self) -> float:
        return self.major_axis_angle + 0.5 * math.pi

    @property
    def major_axis_degrees(self) -> float:
        return math.degrees(self.major_axis_angle)

    @property
    def minor_axis_degrees(self) -> float:
        return math.degrees(self.minor_axis_angle)

    def axis_endpoints(self, radius: float, minor: bool = False) -> Tuple[Point2D, Point2D]:
        """End points of the axis line through the centroid, `radius` px each way."""
        angle = self.minor_axis_angle if minor else self.major_axis_angle
        ox = math.cos(angle) * radius
        oy = math.sin(angle) * radius
        cx, cy = self.centroid
        return Point2D(cx + ox, cy + oy), Point2D(cx - ox, cy - oy)


class FrameAnalysis(NamedTuple):
    mask: np.ndarray
    result: Optional[AxisResult]   # None when no object was detected


class AxisDetector:
    def __init__(self, foreground: int = FOREGROUND) -> None:
        # Value written for pixels that differ from the background
        self.foreground = int(foreground)

    def subtract_background(self, image_a: np.ndarray, image_b: np.ndarray,
                            threshold: float) -> np.ndarray:
        """Binary mask (uint8 0/foreground): foreground where |a - b| >= threshold."""
        a = np.asarray(image_a)
        b = np.asarray(image_b)
        if a.ndim != 2 or b.ndim != 2:
            raise DimensionMismatchError(
                f"expected two grayscale images, got shapes {a.shape} and {b.shape}")
        if a.shape != b.shape:
            raise DimensionMismatchError(
                f"image shapes differ: {a.shape} vs {b.shape}")

        # float64 so uint8 inputs cannot wrap around
        diff = np.abs(a.astype(np.float64) - b.astype(np.float64))
        mask = np.where(diff < threshold, 0, self.foreground).astype(np.uint8)
        return mask

    def compute_centroid(self, mask: np.ndarray) -> Tuple[Point2D, int]:
        """Mean (x, y) of all foreground pixels, plus how many there are."""
        ys, xs = np.nonzero(np.asarray(mask) > 0)
        pixel_count = int(xs.size)
        if pixel_count == 0:
            raise DegenerateInputError("mask has no foreground pixels")

        sum_x = float(xs.sum(dtype=np.float64))
        sum_y = float(ys.sum(dtype=np.float64))
        return Point2D(sum_x / pixel_count, sum_y / pixel_count), pixel_count

    def compute_axis_angle(self, mask: np.ndarray, centroid: Point2D,
                           pixel_count: int) -> float:
        """
        Major axis orientation (radians) from summed squared displacements.

        Displacements run from each pixel to the centroid. DY2 is negated when
        the summed cross term DXDY is negative, then the angle is
        atan2(DY2 / n, DX2 / n). The minor axis is this angle + pi/2.
        """
        if pixel_count <= 0:
            raise DegenerateInputError("pixel count must be positive")

        ys, xs = np.nonzero(np.asarray(mask) > 0)
        cx, cy = centroid
        dx = cx - xs.astype(np.float64)
        dy = cy - ys.astype(np.float64)

        dx2 = float(np.sum(dx * dx))
        dy2 = float(np.sum(dy * dy))
        dxdy = float(np.sum(dx * dy))

        # Tie the quadrant to the sign of the cross term
        if dxdy < 0:
            dy2 = -dy2

        return math.atan2(dy2 / pixel_count, dx2 / pixel_count)

    def analyze(self, mask: np.ndarray) -> Optional[AxisResult]:
        """Centroid + major axis of the mask, or None if the mask is empty."""
        try:
            centroid, pixel_count = self.compute_centroid(mask)
            angle = self.compute_axis_angle(mask, centroid, pixel_count)
        except DegenerateInputError as exc:
            logger.debug("No object detected: %s", exc)
            return None
        return AxisResult(centroid=centroid, major_axis_angle=angle, pixel_count=pixel_count)

    def process(self, background: np.ndarray, foreground: np.ndarray,
                threshold: float) -> FrameAnalysis:
        """
        Full recompute for one frame:
        1) Background subtraction 2) Centroid 3) Major axis angle
        """
        mask = self.subtract_background(background, foreground, threshold)
        return FrameAnalysis(mask=mask, result=self.analyze(mask))

    def process_session(self, session: "Session") -> FrameAnalysis:
        pair = session.current_pair
        return self.process(pair.background, pair.foreground, session.threshold)
