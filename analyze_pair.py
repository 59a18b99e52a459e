"""
One-shot analysis of a single background / object pair.
Logs centroid, axis angles and pixel count; optionally shows the overlay.
"""
import sys
import logging
import argparse

import cv2
import matplotlib.pyplot as plt

from axis_detector import AxisDetector
from config import get_settings
from logging_utils import setup_logging
from overlay import compose_frame
from viewer import build_session

logger = logging.getLogger(__name__)


def report(analysis):
    result = analysis.result
    if result is None:
        logger.info("No object detected")
        return
    cx, cy = result.centroid
    logger.info("Pixel count: %d", result.pixel_count)
    logger.info("Centroid: (%.2f, %.2f)", cx, cy)
    logger.info("Major axis: %.4f rad (%.1f deg)",
                result.major_axis_angle, result.major_axis_degrees)
    logger.info("Minor axis: %.4f rad (%.1f deg)",
                result.minor_axis_angle, result.minor_axis_degrees)


def main(argv=None):
    settings = get_settings()
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument('--image-dir', metavar='path')
    p.add_argument('--pair', type=int, default=1, help='1-based pair number')
    p.add_argument('--threshold', type=float)
    p.add_argument('--show', action='store_true', help='display the overlay with matplotlib')
    p.add_argument('--log-level', default=settings.log_level)
    args = p.parse_args(argv)

    setup_logging(args.log_level)
    try:
        session = build_session(settings, args.image_dir, args.threshold)
        session.select_pair(args.pair - 1)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    analysis = AxisDetector().process_session(session)
    report(analysis)

    if args.show:
        final_vis = compose_frame(session.current_pair, analysis, session.threshold,
                                  major_radius=settings.major_axis_radius,
                                  minor_radius=settings.minor_axis_radius,
                                  show_hud=settings.show_hud)
        plt.imshow(cv2.cvtColor(final_vis, cv2.COLOR_BGR2RGB)); plt.axis("off")
        plt.tight_layout(); plt.show()
    return 0


if __name__ == '__main__':
    sys.exit(main())
