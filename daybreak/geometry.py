from __future__ import annotations

from typing import Tuple

Vec2 = Tuple[float, float]


def bezier_point_at(t: float, p0: Vec2, p_control: Vec2, p2: Vec2) -> Vec2:
    """
    Evaluate a quadratic Bezier curve at t:

        B(t) = (1-t)^2 * p0 + 2(1-t)t * p_control + t^2 * p2
    """
    u = 1.0 - t
    a = u * u
    b = 2.0 * u * t
    c = t * t
    return (
        a * p0[0] + b * p_control[0] + c * p2[0],
        a * p0[1] + b * p_control[1] + c * p2[1],
    )


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
