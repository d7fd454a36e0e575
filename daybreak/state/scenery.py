# daybreak/state/scenery.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CloudLayer(Enum):
    """Depth tag: BACK clouds are drawn before the hills, FRONT after."""
    FRONT = "front"
    BACK = "back"


@dataclass
class CloudParticle:
    x: float
    y: float
    velocity: float  # px per tick, always > 0
    layer: CloudLayer = CloudLayer.BACK


@dataclass
class SunState:
    x: float
    y: float
    radius: float = 50.0
    # position along the day arc, in [0, 1)
    progress: float = 0.0
    rising: bool = False


@dataclass(frozen=True)
class HillLobe:
    """One rounded bump of the hill silhouette."""
    full: float      # height of the lobe's filled body
    relative: float  # baseline offset from the previous lobe


@dataclass(frozen=True)
class HillProfile:
    base_x: float
    segment_width: float
    small: float
    med: float
    large: float
    lobes: Tuple[HillLobe, ...]

    @property
    def half_width(self) -> float:
        return self.segment_width / 2

    @property
    def midway(self) -> int:
        """Index of the lobe where the profile turns from rising to falling."""
        return len(self.lobes) // 2
