from __future__ import annotations

import logging
from typing import Tuple

from daybreak.geometry import Vec2, bezier_point_at, clamp
from daybreak.render.canvas import Canvas, Color
from daybreak.state.scenery import SunState

logger = logging.getLogger(__name__)

PROGRESS_STEP = 0.001
# x the sun snaps to when it crosses the top/bottom threshold
EDGE_INSET = 75.0


class SunCycle:
    """
    Sun travelling a quadratic Bezier arc once per day, plus the sky tint
    derived from its height.

    The arc is anchored below the bottom corners of the scene with the
    control point far above the sky, so the visible portion is a high
    parabola. Crossing thresholds flips `rising` and snaps x to a fixed
    inset; the curve alone is not symmetric enough to land there.
    """

    def __init__(
        self,
        width: float,
        height: float,
        sky_height: float,
        *,
        radius: float = 50.0,
        sky_rgb: Color = (0, 206, 250),
        color: Color = (255, 255, 0),
        initial_opacity: float = 0.8,
    ) -> None:
        self.width = width
        self.height = height
        self.sky_height = sky_height
        self.color = color
        self.sky_rgb = tuple(sky_rgb[:3])
        self.state = SunState(x=width - EDGE_INSET, y=EDGE_INSET, radius=radius)
        self.opacity = clamp(initial_opacity, 0.0, 1.0)

    # ------------------------------------------------------------------ #
    # Curve

    def anchors(self) -> Tuple[Vec2, Vec2, Vec2]:
        start = (-100.0, self.height * 1.5)
        control = (self.width / 2, -self.sky_height * 2)
        end = (self.width + 100.0, self.height * 1.5)
        return start, control, end

    def advance(self) -> None:
        sun = self.state
        sun.progress += PROGRESS_STEP
        if sun.progress >= 1.0:
            sun.progress = 0.0

        sun.x, sun.y = bezier_point_at(sun.progress, *self.anchors())

        if sun.rising and sun.y < -sun.radius - 5:
            sun.rising = False
            sun.x = self.width - EDGE_INSET
            logger.debug("sun crossed the top edge at progress %.3f", sun.progress)
        elif not sun.rising and sun.y > self.sky_height + sun.radius * 2:
            sun.rising = True
            sun.x = EDGE_INSET
            logger.debug("sun dropped below the horizon at progress %.3f", sun.progress)

        self.update_sky_color()

    # ------------------------------------------------------------------ #
    # Sky tint

    def sky_opacity(self, y: float) -> float:
        return clamp(1 - y / (self.sky_height + self.state.radius * 2), 0.0, 1.0)

    def update_sky_color(self) -> None:
        self.opacity = self.sky_opacity(self.state.y)

    @property
    def sky_color(self) -> Color:
        r, g, b = self.sky_rgb
        return (r, g, b, int(round(self.opacity * 255)))

    # ------------------------------------------------------------------ #

    def render(self, canvas: Canvas) -> None:
        sun = self.state
        canvas.fill_circle(sun.x, sun.y, sun.radius, self.color)

    def render_sky(self, canvas: Canvas) -> None:
        canvas.fill_rect(0, 0, self.width, self.sky_height, self.sky_color)
