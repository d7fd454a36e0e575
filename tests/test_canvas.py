import math

import pygame
import pytest

from daybreak.errors import UnsupportedSurfaceError
from daybreak.render.canvas import Canvas, PygameCanvas, arc_points, canvas_for


@pytest.fixture
def surface():
    return pygame.Surface((100, 80))


def test_canvas_for_wraps_pygame_surface(surface):
    canvas = canvas_for(surface)
    assert isinstance(canvas, PygameCanvas)
    assert (canvas.width, canvas.height) == (100, 80)


def test_canvas_for_passes_through_existing_canvas(canvas):
    assert canvas_for(canvas) is canvas
    assert isinstance(canvas, Canvas)


@pytest.mark.parametrize("bad", [object(), None, "surface", 42])
def test_canvas_for_rejects_non_surfaces(bad):
    with pytest.raises(UnsupportedSurfaceError):
        canvas_for(bad)


def test_opaque_fill_rect(surface):
    canvas = PygameCanvas(surface)
    canvas.clear((0, 0, 0))
    canvas.fill_rect(10, 10, 20, 20, (0, 206, 250))
    assert surface.get_at((15, 15))[:3] == (0, 206, 250)
    assert surface.get_at((50, 50))[:3] == (0, 0, 0)


def test_translucent_fill_blends(surface):
    canvas = PygameCanvas(surface)
    canvas.clear((0, 0, 0))
    canvas.fill_rect(0, 0, 100, 80, (200, 200, 200, 128))
    r, g, b = surface.get_at((50, 40))[:3]
    assert 90 <= r <= 110


def test_fill_circle_and_line(surface):
    canvas = PygameCanvas(surface)
    canvas.clear((0, 0, 0))
    canvas.fill_circle(50, 40, 10, (255, 255, 0))
    canvas.line((0, 0), (99, 0), (255, 0, 0), 1)
    assert surface.get_at((50, 40))[:3] == (255, 255, 0)
    assert surface.get_at((50, 0))[:3] == (255, 0, 0)


def test_upper_half_disc(surface):
    canvas = PygameCanvas(surface)
    canvas.clear((0, 0, 0))
    canvas.fill_arc(50, 50, 20, math.pi, 2 * math.pi, (0, 255, 0))
    assert surface.get_at((50, 40))[:3] == (0, 255, 0)
    assert surface.get_at((50, 60))[:3] == (0, 0, 0)


def test_layer_overlay_keeps_transparent_pixels():
    base = PygameCanvas(pygame.Surface((40, 40)))
    base.clear((10, 20, 30))
    layer = base.new_layer()
    layer.line((0, 20), (39, 20), (130, 82, 1), 3)
    base.overlay(layer)
    assert base.surface.get_at((5, 5))[:3] == (10, 20, 30)
    assert base.surface.get_at((20, 20))[:3] == (130, 82, 1)


def test_arc_points_run_over_the_top():
    points = arc_points(0, 0, 10, math.pi, 2 * math.pi)
    assert points[0] == pytest.approx((-10, 0), abs=1e-9)
    assert points[-1] == pytest.approx((10, 0), abs=1e-9)
    assert min(y for _, y in points) == pytest.approx(-10)
