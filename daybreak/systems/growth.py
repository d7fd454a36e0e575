from __future__ import annotations

import logging
import random
from typing import List, Optional, Set

from daybreak.config import GrowthConfig
from daybreak.errors import GrowthInvariantError
from daybreak.render.canvas import Canvas, Color
from daybreak.rng import coin_flip, random_in_range
from daybreak.scheduler import FrameScheduler
from daybreak.state.tree import Branch, GrowthParams, GrowthState

logger = logging.getLogger(__name__)


class BranchGrowth:
    """
    Recursively branching tree grown one frame at a time.

    Every live branch owns one pending frame token. A branch tick pushes
    its tip upward (and sideways, away from the middle of the branch list)
    and strokes the new piece onto `canvas`. When a generation has used
    `split_fraction` of its time budget, every branch splits at once: all
    outstanding tokens are cancelled, each branch gets a twin at the same
    tip, and growth restarts for the doubled set with thinner, shorter
    strokes. Growth stops for good once strokes get too thin or the branch
    cap is reached.

    Branches are only ever appended, so a scheduled index stays valid for
    as long as its token is live.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        canvas: Canvas,
        origin_x: float,
        origin_y: float,
        rng: random.Random,
        *,
        growth: Optional[GrowthConfig] = None,
        color: Color = (130, 82, 1),
    ) -> None:
        self.scheduler = scheduler
        self.canvas = canvas
        self.rng = rng
        self.cfg = growth or GrowthConfig()
        self.color = color
        self.params = GrowthParams(
            base_width=self.cfg.base_width,
            current_stroke_width=self.cfg.base_width,
            branch_length=self.cfg.branch_length,
            rate_of_growth=self.cfg.rate_of_growth,
            branch_spread=self.cfg.branch_spread,
        )
        self.branches: List[Branch] = [Branch(origin_x, origin_y)]
        self.branch_count = 1
        self.splits = 0
        self.state = GrowthState.GROWING
        self.pending: Set[int] = set()

    # ------------------------------------------------------------------ #
    # Scheduling

    def start(self) -> None:
        """Schedule the trunk's first tick."""
        if self.state is not GrowthState.GROWING or self.pending:
            return
        self._schedule(0)

    def _schedule(self, index: int) -> None:
        token: int = 0

        def tick(now_ms: float) -> None:
            self.pending.discard(token)
            self.tick(index, now_ms)

        token = self.scheduler.request_frame(tick)
        self.pending.add(token)

    def cancel_all(self) -> None:
        for token in self.pending:
            self.scheduler.cancel(token)
        self.pending.clear()

    def stop(self) -> None:
        self.cancel_all()
        if self.state is GrowthState.GROWING:
            self.state = GrowthState.STOPPED

    @property
    def done(self) -> bool:
        return self.state is not GrowthState.GROWING

    # ------------------------------------------------------------------ #
    # Growth

    def _should_terminate(self) -> bool:
        return (
            self.params.current_stroke_width < self.cfg.min_stroke_width
            or self.branch_count >= self.cfg.max_branches
        )

    def _drift(self, index: int) -> float:
        if index == 0 and self.branch_count == 1:
            wiggle = random_in_range(self.rng, 0, self.cfg.trunk_wiggle)
            return wiggle if coin_flip(self.rng) else -wiggle
        spread = random_in_range(self.rng, 0, self.params.branch_spread)
        if index < self.branch_count / 2:
            return -spread
        return spread

    def stroke_width(self, elapsed: float) -> float:
        """Stroke tapers linearly from the current width as the budget runs out."""
        end_time = self.params.end_time
        return self.params.current_stroke_width - (elapsed / end_time) * self.cfg.taper

    def tick(self, index: int, now_ms: float) -> None:
        """Grow branch `index` by one frame, then split, stop or continue."""
        if self.state is not GrowthState.GROWING:
            return
        if not 0 <= index < len(self.branches) or self.branch_count != len(self.branches):
            self.cancel_all()
            self.state = GrowthState.ABORTED
            logger.error(
                "branch index %d out of step with %d branches (count=%d); aborting growth",
                index, len(self.branches), self.branch_count,
            )
            raise GrowthInvariantError(f"no branch at index {index} (have {len(self.branches)})")

        branch = self.branches[index]
        if branch.start_time is None:
            branch.start_time = now_ms
        elapsed = now_ms - branch.start_time
        end_time = self.params.end_time

        start = (branch.x, branch.y)
        branch.y -= random_in_range(self.rng, 0, self.params.rate_of_growth)
        branch.x += self._drift(index)
        width = self.stroke_width(elapsed)
        if width > 0:
            self.canvas.line(start, (branch.x, branch.y), self.color, width)

        if self._should_terminate():
            self.cancel_all()
            self.state = GrowthState.STOPPED
            logger.info(
                "tree finished: %d branches after %d splits (stroke %.2f)",
                self.branch_count, self.splits, self.params.current_stroke_width,
            )
        elif elapsed >= end_time * self.cfg.split_fraction:
            self.split_branch()
        else:
            self._schedule(index)

    def split_branch(self) -> None:
        """Double every live branch and restart growth with smaller strokes."""
        self.cancel_all()

        # walk backwards so each twin lands mirrored across the middle
        for branch in reversed(self.branches[: self.branch_count]):
            branch.start_time = None
            self.branches.append(Branch(branch.x, branch.y))

        self.branch_count = len(self.branches)
        self.params.current_stroke_width *= self.cfg.shrink
        self.params.branch_length *= self.cfg.shrink
        self.splits += 1
        logger.info(
            "split %d: %d branches, stroke %.2f, length %.1f",
            self.splits, self.branch_count, self.params.current_stroke_width, self.params.branch_length,
        )

        for index in range(self.branch_count - 1, -1, -1):
            self._schedule(index)
