"""Scene features computed from packed YUYV camera frames."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

EDGE_THRESHOLD = 20
OBJECT_SCALE = 25


@dataclass(frozen=True)
class Features:
    """Brightness, warmth, texture and a rough object count of one frame."""

    brightness: float = 0.0
    warmth: float = 0.0
    texture: float = 0.0
    obj_count: int = 0


def _rgb(y, u, v):
    ur = u - 128
    vr = v - 128
    r = np.clip(y + ((1436 * vr) >> 10), 0, 255)
    g = np.clip(y - ((352 * ur + 731 * vr) >> 10), 0, 255)
    b = np.clip(y + ((1814 * ur) >> 10), 0, 255)
    return r, g, b


def yuyv_to_rgb(y: int, u: int, v: int) -> tuple[int, int, int]:
    """Convert one luma/chroma triple to 8-bit RGB with fixed-point math."""
    r, g, b = _rgb(int(y), int(u), int(v))
    return int(r), int(g), int(b)


def _as_bytes_array(data) -> np.ndarray:
    if isinstance(data, np.ndarray):
        return np.asarray(data, dtype=np.uint8).reshape(-1)
    return np.frombuffer(data, dtype=np.uint8)


def extract_features(data, width: int, height: int, both_pixels: bool = True) -> Features:
    """Compute features of a YUYV frame.

    With ``both_pixels`` false only the first pixel of each pair feeds the
    colour sums. Warmth is returned unclamped.
    """
    if width <= 0 or height <= 0:
        raise ValueError("frame size must be positive")
    pixels = width * height
    if pixels % 2:
        raise ValueError("a YUYV frame needs an even number of pixels")
    buf = _as_bytes_array(data)
    needed = pixels * 2
    if buf.size < needed:
        raise ValueError(f"frame holds {buf.size} bytes, {needed} needed")

    macro = buf[:needed].astype(np.int64).reshape(-1, 4)
    y0, u, y1, v = macro.T

    sum_y = int(y0.sum() + y1.sum())
    r0, g0, b0 = _rgb(y0, u, v)
    sum_r = int(r0.sum())
    sum_gb = int(g0.sum() + b0.sum())
    if both_pixels:
        r1, g1, b1 = _rgb(y1, u, v)
        sum_r += int(r1.sum())
        sum_gb += int(g1.sum() + b1.sum())

    # Horizontal luma edges against the preceding bytes of the stream.
    edges = int(np.count_nonzero(np.abs(y0[1:] - y1[:-1]) > EDGE_THRESHOLD))
    edges += int(np.count_nonzero(np.abs(y1[1:] - v[:-1]) > EDGE_THRESHOLD))

    brightness = min(max(sum_y / (pixels * 255), 0.0), 1.0)
    warmth = (2.0 * (sum_r / pixels)) / ((sum_gb / pixels) + 1.0)
    texture = min(max(edges / (2 * pixels), 0.0), 1.0)
    return Features(
        brightness=float(brightness),
        warmth=float(warmth),
        texture=float(texture),
        obj_count=int(texture * OBJECT_SCALE),
    )