from typing import Any, List, Optional, Tuple

import pytest

from daybreak.config import SceneConfig
from daybreak.rng import new_rng
from daybreak.scheduler import FrameScheduler


class RecordingCanvas:
    """Canvas stand-in that remembers every draw call in order."""

    def __init__(self, width: int = 800, height: int = 500) -> None:
        self.width = width
        self.height = height
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.layers: List["RecordingCanvas"] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def clear(self, color: Optional[tuple] = None) -> None:
        self._record("clear", color)

    def fill_rect(self, x, y, w, h, color) -> None:
        self._record("fill_rect", x, y, w, h, color)

    def fill_circle(self, cx, cy, radius, color) -> None:
        self._record("fill_circle", cx, cy, radius, color)

    def fill_circles(self, centers, radius, color) -> None:
        self._record("fill_circles", tuple(centers), radius, color)

    def fill_arc(self, cx, cy, radius, start, end, color) -> None:
        self._record("fill_arc", cx, cy, radius, start, end, color)

    def stroke_arc(self, cx, cy, radius, start, end, color, width=1) -> None:
        self._record("stroke_arc", cx, cy, radius, start, end, color, width)

    def line(self, p1, p2, color, width=1) -> None:
        self._record("line", p1, p2, color, width)

    def overlay(self, other) -> None:
        self._record("overlay", other)

    def new_layer(self) -> "RecordingCanvas":
        layer = RecordingCanvas(self.width, self.height)
        self.layers.append(layer)
        return layer

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def reset(self) -> None:
        self.calls.clear()


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def scheduler() -> FrameScheduler:
    return FrameScheduler()


@pytest.fixture
def rng():
    return new_rng(1234)


@pytest.fixture
def cfg() -> SceneConfig:
    return SceneConfig(width=800, height=500, seed=1234)
