"""
Image sources: grayscale loading from disk and synthetic background/object pairs.
"""
import re
import logging
from pathlib import Path

import cv2
import numpy as np

from axis_detector import DimensionMismatchError
from config import IMG_WIDTH, IMG_HEIGHT
from session import ImagePair

logger = logging.getLogger(__name__)

BACKGROUND_STEM = "image-bg"
OBJECT_STEM_RE = re.compile(r"^image(\d+)$")

# (center as fraction of the frame, half-axes in px, rotation in degrees)
SYNTHETIC_BLOBS = [
    ((0.50, 0.50), (70, 25), 0),
    ((0.45, 0.55), (60, 20), 30),
    ((0.55, 0.45), (65, 30), 60),
    ((0.50, 0.50), (50, 18), 90),
    ((0.40, 0.50), (75, 22), 135),
]


def load_grayscale(path):
    """Read an image file as float32 grayscale in [0, 1]."""
    img = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
    if img is None:
        raise FileNotFoundError(f"Could not read image {path}")
    return img.astype(np.float32) / 255.0


def load_image_pairs(image_dir):
    """
    Load `image-bg.*` plus every `image<k>.*` from a directory.
    Each object image is paired with the shared background, ordered by k.
    Every object image must have the background's shape.
    """
    root = Path(image_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Image directory not found: {root}")

    background_path = None
    objects = {}
    for path in sorted(root.iterdir()):
        if not path.is_file():
            continue
        if path.stem == BACKGROUND_STEM:
            if background_path is not None:
                raise ValueError(
                    f"More than one background image: {background_path.name}, {path.name}")
            background_path = path
            continue
        m = OBJECT_STEM_RE.match(path.stem)
        if m:
            k = int(m.group(1))
            if k in objects:
                raise ValueError(
                    f"More than one object image {k}: {objects[k].name}, {path.name}")
            objects[k] = path

    if background_path is None:
        raise FileNotFoundError(f"No {BACKGROUND_STEM}.* image in {root}")
    if not objects:
        raise FileNotFoundError(f"No image<k>.* object images in {root}")

    background = load_grayscale(background_path)
    pairs = []
    for k, path in sorted(objects.items()):
        foreground = load_grayscale(path)
        if foreground.shape != background.shape:
            raise DimensionMismatchError(
                f"{path.name} is {foreground.shape}, background is {background.shape}")
        pairs.append(ImagePair(name=path.name, background=background,
                               foreground=foreground))
    logger.info("Loaded %d image pairs from %s", len(pairs), root)
    return pairs


def create_synthetic_background(size=(IMG_HEIGHT, IMG_WIDTH)):
    """Smooth left-to-right gradient, 0.2 .. 0.4."""
    h, w = size
    row = np.linspace(0.2, 0.4, w, dtype=np.float32)
    return np.tile(row, (h, 1))


def create_synthetic_pair(index, size=(IMG_HEIGHT, IMG_WIDTH), intensity=0.9):
    """Background plus one bright rotated ellipse (blob `index` of SYNTHETIC_BLOBS)."""
    h, w = size
    (fx, fy), axes, angle = SYNTHETIC_BLOBS[index % len(SYNTHETIC_BLOBS)]
    background = create_synthetic_background(size)
    foreground = background.copy()
    center = (int(round(fx * w)), int(round(fy * h)))
    cv2.ellipse(foreground, center, axes, angle, 0, 360, float(intensity), -1)
    return ImagePair(name=f"synthetic-{index + 1}", background=background,
                     foreground=foreground)


def create_synthetic_pairs(count, size=(IMG_HEIGHT, IMG_WIDTH)):
    return [create_synthetic_pair(i, size) for i in range(count)]
