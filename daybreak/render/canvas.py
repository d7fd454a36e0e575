"""Drawing capability used by every scene component.

Components never touch pygame directly; they draw through a Canvas. The
pygame implementation composites translucent colors through SRCALPHA
scratch layers, the same way the renderer's pattern layers work.
"""
from __future__ import annotations

import math
from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

import pygame

from daybreak.errors import UnsupportedSurfaceError

Color = Tuple[int, ...]
Point = Tuple[float, float]

# segments per full turn when approximating arcs with polygons
ARC_STEPS = 48


@runtime_checkable
class Canvas(Protocol):
    width: int
    height: int

    def clear(self, color: Optional[Color] = None) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...

    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None: ...

    def fill_circles(self, centers: Sequence[Point], radius: float, color: Color) -> None: ...

    def fill_arc(self, cx: float, cy: float, radius: float, start: float, end: float, color: Color) -> None: ...

    def stroke_arc(
        self, cx: float, cy: float, radius: float, start: float, end: float, color: Color, width: float = 1
    ) -> None: ...

    def line(self, p1: Point, p2: Point, color: Color, width: float = 1) -> None: ...

    def overlay(self, other: "Canvas") -> None: ...

    def new_layer(self) -> "Canvas": ...


def arc_points(cx: float, cy: float, radius: float, start: float, end: float) -> List[Point]:
    """
    Points along an arc, clockwise in screen space (y grows downward), from
    angle start to end in radians. (pi, 2*pi) is the upper half circle.
    """
    span = end - start
    steps = max(2, int(ARC_STEPS * abs(span) / (2 * math.pi)))
    return [
        (cx + radius * math.cos(start + span * i / steps), cy + radius * math.sin(start + span * i / steps))
        for i in range(steps + 1)
    ]


def _alpha(color: Color) -> int:
    return color[3] if len(color) == 4 else 255


def _line_px(width: float) -> int:
    return max(1, int(round(width)))


class PygameCanvas:
    """Canvas over a pygame.Surface."""

    def __init__(self, surface: pygame.Surface, background: Color = (0, 0, 0, 0)) -> None:
        self.surface = surface
        self.width, self.height = surface.get_size()
        self.background = background

    @classmethod
    def layer(cls, width: int, height: int) -> "PygameCanvas":
        """Transparent off-screen canvas, e.g. for drawing that accumulates."""
        return cls(pygame.Surface((width, height), pygame.SRCALPHA), background=(0, 0, 0, 0))

    def _scratch(self) -> pygame.Surface:
        return pygame.Surface((self.width, self.height), pygame.SRCALPHA)

    def _composite(self, layer: pygame.Surface, alpha: int) -> None:
        if alpha < 255:
            layer.set_alpha(alpha)
        self.surface.blit(layer, (0, 0))

    # ------------------------------------------------------------------ #

    def clear(self, color: Optional[Color] = None) -> None:
        self.surface.fill(color if color is not None else self.background)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        rect = pygame.Rect(int(round(x)), int(round(y)), int(round(w)), int(round(h)))
        alpha = _alpha(color)
        if alpha >= 255:
            self.surface.fill(color[:3], rect)
            return
        layer = self._scratch()
        layer.fill(color[:3], rect)
        self._composite(layer, alpha)

    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None:
        self.fill_circles([(cx, cy)], radius, color)

    def fill_circles(self, centers: Sequence[Point], radius: float, color: Color) -> None:
        """Fill the union of several discs with one uniform alpha."""
        alpha = _alpha(color)
        target = self.surface if alpha >= 255 else self._scratch()
        for cx, cy in centers:
            pygame.draw.circle(target, color[:3], (cx, cy), radius)
        if target is not self.surface:
            self._composite(target, alpha)

    def fill_arc(self, cx: float, cy: float, radius: float, start: float, end: float, color: Color) -> None:
        points = [(cx, cy)] + arc_points(cx, cy, radius, start, end)
        alpha = _alpha(color)
        target = self.surface if alpha >= 255 else self._scratch()
        pygame.draw.polygon(target, color[:3], points)
        if target is not self.surface:
            self._composite(target, alpha)

    def stroke_arc(
        self, cx: float, cy: float, radius: float, start: float, end: float, color: Color, width: float = 1
    ) -> None:
        pygame.draw.lines(self.surface, color[:3], False, arc_points(cx, cy, radius, start, end), _line_px(width))

    def line(self, p1: Point, p2: Point, color: Color, width: float = 1) -> None:
        pygame.draw.line(self.surface, color[:3], p1, p2, _line_px(width))

    def new_layer(self) -> "PygameCanvas":
        return PygameCanvas.layer(self.width, self.height)

    def overlay(self, other: "Canvas") -> None:
        surface = getattr(other, "surface", None)
        if surface is None:
            raise UnsupportedSurfaceError(f"cannot overlay {type(other).__name__} onto a pygame canvas")
        self.surface.blit(surface, (0, 0))


def canvas_for(surface: object, background: Color = (0, 0, 0, 0)) -> Canvas:
    """
    Wrap a host surface in a Canvas. Objects that already implement the
    Canvas protocol are used as-is; anything else must be a pygame.Surface.
    """
    if isinstance(surface, Canvas):
        return surface
    if isinstance(surface, pygame.Surface):
        w, h = surface.get_size()
        if w <= 0 or h <= 0:
            raise UnsupportedSurfaceError(f"surface has no drawable area ({w}x{h})")
        return PygameCanvas(surface, background=background)
    raise UnsupportedSurfaceError(f"{type(surface).__name__} has no 2-D drawing capability")
