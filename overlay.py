import cv2
import numpy as np

from config import (IMG_SPACER, MAJOR_AXIS_RADIUS, MINOR_AXIS_RADIUS,
                    CENTROID_RADIUS, LINE_THICKNESS)

CENTROID_COLOR   = (0, 0, 255)      # BGR red
MAJOR_AXIS_COLOR = (255, 0, 255)    # magenta
MINOR_AXIS_COLOR = (0, 255, 0)      # green

font = cv2.FONT_HERSHEY_SIMPLEX
txt_scale = 0.5
txt_th = 1
txt_color = (255, 255, 255)
txt_shadow = (0, 0, 0)


def to_bgr8(img):
    """Grayscale float [0,1] or uint8 image -> uint8 BGR for display."""
    if img.dtype != np.uint8:
        img = (np.clip(img, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
    return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)


def _pt(p):
    return int(round(p[0])), int(round(p[1]))


def draw_axes(dst, result, offset=(0, 0),
              major_radius=MAJOR_AXIS_RADIUS, minor_radius=MINOR_AXIS_RADIUS):
    """Centroid marker plus major and minor axis lines, shifted by `offset` (x, y)."""
    ox, oy = offset
    cx, cy = result.centroid
    cv2.circle(dst, _pt((cx + ox, cy + oy)), CENTROID_RADIUS, CENTROID_COLOR, -1)

    for radius, minor, color in ((major_radius, False, MAJOR_AXIS_COLOR),
                                 (minor_radius, True, MINOR_AXIS_COLOR)):
        p0, p1 = result.axis_endpoints(radius, minor=minor)
        cv2.line(dst, _pt((p0.x + ox, p0.y + oy)), _pt((p1.x + ox, p1.y + oy)),
                 color, LINE_THICKNESS, cv2.LINE_AA)
    return dst


def draw_hud(img, text):
    # shadow
    cv2.putText(img, text, (10, 24), font, txt_scale, txt_shadow, txt_th + 2, cv2.LINE_AA)
    # main
    cv2.putText(img, text, (10, 24), font, txt_scale, txt_color, txt_th, cv2.LINE_AA)


def hud_text(pair_name, threshold, result):
    txt = f"{pair_name} | threshold {threshold:.2f}"
    if result is None:
        return txt + " | no object"
    return txt + f" | {result.pixel_count} px | major {result.major_axis_degrees:.1f} deg"


def compose_frame(pair, analysis, threshold, spacer=IMG_SPACER,
                  major_radius=MAJOR_AXIS_RADIUS, minor_radius=MINOR_AXIS_RADIUS,
                  show_hud=True):
    """
    Background | object | mask, side by side, with the axis overlay on the mask.
    No centroid / axes are drawn when `analysis.result` is None.
    """
    panels = [to_bgr8(pair.background), to_bgr8(pair.foreground), to_bgr8(analysis.mask)]
    h = max(p.shape[0] for p in panels)
    w = max(p.shape[1] for p in panels)
    canvas = np.zeros((h, w * 3 + spacer * 2, 3), dtype=np.uint8)

    for i, panel in enumerate(panels):
        x0 = (w + spacer) * i
        canvas[:panel.shape[0], x0:x0 + panel.shape[1]] = panel

    if analysis.result is not None:
        draw_axes(canvas, analysis.result, offset=((w + spacer) * 2, 0),
                  major_radius=major_radius, minor_radius=minor_radius)

    if show_hud:
        draw_hud(canvas, hud_text(pair.name, threshold, analysis.result))
    return canvas
