# daybreak/state/tree.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class GrowthState(Enum):
    GROWING = "growing"
    STOPPED = "stopped"
    # branch bookkeeping broke; growth was abandoned
    ABORTED = "aborted"


@dataclass
class Branch:
    x: float
    y: float
    # latched on the first tick the branch receives; reset on every split
    start_time: Optional[float] = None


@dataclass
class GrowthParams:
    """Process-wide parameters for one tree; shrink at every split."""
    base_width: float
    current_stroke_width: float
    branch_length: float
    rate_of_growth: float
    branch_spread: float

    @property
    def end_time(self) -> float:
        """Growth budget per generation (ms), also the taper horizon."""
        return self.base_width * self.branch_length
