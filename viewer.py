"""
Interactive major / minor axis viewer.

Keys:
  1..9        pick an image pair
  Up / +      raise the threshold
  Down / -    lower the threshold
  q / Esc     quit
"""
import sys
import time
import logging
import argparse

import cv2

from axis_detector import AxisDetector
from config import get_settings, IMG_SPACER
from images import load_image_pairs, create_synthetic_pairs
from logging_utils import setup_logging
from overlay import compose_frame
from session import Session

logger = logging.getLogger(__name__)

WINDOW = "Major / Minor Axis"

# cv2.waitKeyEx codes differ per HighGUI backend (GTK, Qt, Win32, Cocoa)
KEY_UP   = {65362, 16777235, 2490368, 63232, ord('+'), ord('=')}
KEY_DOWN = {65364, 16777237, 2621440, 63233, ord('-'), ord('_')}
KEY_QUIT = {27, ord('q')}


def handle_key(session, key):
    """Apply one key press to the session. Returns False when the viewer should close."""
    if key < 0:
        return True
    if key in KEY_QUIT:
        return False
    if key in KEY_UP:
        session.raise_threshold()
    elif key in KEY_DOWN:
        session.lower_threshold()
    elif ord('1') <= key <= ord('9'):
        index = key - ord('1')
        if index < len(session.pairs):
            session.select_pair(index)
    return True


def build_session(settings, image_dir=None, threshold=None):
    image_dir = image_dir or settings.image_dir
    if image_dir:
        pairs = load_image_pairs(image_dir)
    else:
        logger.info("No image directory given, using %d synthetic pairs",
                    settings.synthetic_pairs)
        pairs = create_synthetic_pairs(settings.synthetic_pairs)
    return Session(pairs=pairs,
                   threshold=settings.threshold if threshold is None else threshold,
                   threshold_step=settings.threshold_step)


def run(session, settings):
    det = AxisDetector()
    cv2.namedWindow(WINDOW, cv2.WINDOW_AUTOSIZE)
    delay = settings.frame_delay_ms
    try:
        while True:
            loop_start = time.perf_counter()

            analysis = det.process_session(session)
            canvas = compose_frame(session.current_pair, analysis, session.threshold,
                                   spacer=IMG_SPACER,
                                   major_radius=settings.major_axis_radius,
                                   minor_radius=settings.minor_axis_radius,
                                   show_hud=settings.show_hud)
            cv2.imshow(WINDOW, canvas)

            # keep roughly to the frame rate, but always poll the keyboard
            spent_ms = int((time.perf_counter() - loop_start) * 1000)
            key = cv2.waitKeyEx(max(1, delay - spent_ms))
            if not handle_key(session, key):
                break
    finally:
        cv2.destroyAllWindows()


def main(argv=None):
    settings = get_settings()
    p = argparse.ArgumentParser(description='''Background subtraction on an
    image pair, then centroid and major / minor axes from image moments.''')
    p.add_argument('--image-dir', metavar='path', help='''directory holding
    image-bg.* and image1.*, image2.*, ... (default: synthetic pairs)''')
    p.add_argument('--threshold', type=float, help='initial threshold in [0, 1]')
    p.add_argument('--log-level', default=settings.log_level)
    args = p.parse_args(argv)

    setup_logging(args.log_level)
    try:
        session = build_session(settings, args.image_dir, args.threshold)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    logger.info("%d pairs, threshold %.2f", len(session.pairs), session.threshold)
    run(session, settings)
    return 0


if __name__ == '__main__':
    sys.exit(main())
