from __future__ import annotations

import logging
import random
from typing import List, Optional, Set

from daybreak.render.canvas import Canvas, Color, Point
from daybreak.rng import coin_flip, random_in_range
from daybreak.scheduler import FrameScheduler
from daybreak.state.scenery import CloudLayer, CloudParticle

logger = logging.getLogger(__name__)

PUFFS = 5
PUFF_RADIUS = 20.0
PUFF_STEP = 15.0
PUFF_LIFT = 15.0

SPAWN_X = -80.0
SPAWN_Y = (50.0, 100.0)
VELOCITY = (0.2, 0.6)
RESPAWN_DELAY_MS = (1000.0, 4000.0)
# a cloud is gone once its left puff clears the right edge
EXIT_MARGIN = 20.0


def puff_centers(cloud: CloudParticle) -> List[Point]:
    """Centers of the overlapping discs that make up one cloud."""
    centers: List[Point] = []
    x = cloud.x
    for i in range(PUFFS):
        y = cloud.y if i % 2 == 0 else cloud.y - PUFF_LIFT
        centers.append((x, y))
        x += PUFF_STEP
    return centers


class CloudField:
    """
    Drifting clouds. Each tick every cloud moves right by its velocity;
    clouds that leave the scene are dropped at once and a replacement is
    scheduled to drift in from the left after a random delay.
    """

    def __init__(
        self,
        width: float,
        rng: random.Random,
        scheduler: FrameScheduler,
        *,
        color: Color = (255, 255, 255, 230),
        max_clouds: int = 12,
    ) -> None:
        self.width = width
        self.rng = rng
        self.scheduler = scheduler
        self.color = color
        self.max_clouds = max_clouds
        self.clouds: List[CloudParticle] = []
        self._respawns: Set[int] = set()

    def _random_layer(self) -> CloudLayer:
        return CloudLayer.BACK if coin_flip(self.rng) else CloudLayer.FRONT

    # ------------------------------------------------------------------ #
    # Population

    def seed(self, n: int = 3) -> List[CloudParticle]:
        """Initial spread: left, middle and right of the sky."""
        fixed = [
            (25.0, 50.0, 0.2),
            (self.width / 2, 80.0, 0.4),
            (self.width - 70.0, 50.0, 0.6),
        ]
        seeded: List[CloudParticle] = []
        for i in range(n):
            if i < len(fixed):
                x, y, velocity = fixed[i]
            else:
                # past the fixed three, spread the rest evenly across the sky
                x = self.width * (i + 0.5) / n
                y = random_in_range(self.rng, *SPAWN_Y)
                velocity = random_in_range(self.rng, *VELOCITY)
            seeded.append(CloudParticle(x=x, y=y, velocity=velocity, layer=self._random_layer()))
        self.clouds.extend(seeded)
        return seeded

    def spawn(self) -> Optional[CloudParticle]:
        """Add a cloud just off the left edge, unless the field is full."""
        if len(self.clouds) >= self.max_clouds:
            logger.info("cloud field at capacity (%d); respawn dropped", self.max_clouds)
            return None
        cloud = CloudParticle(
            x=SPAWN_X,
            y=random_in_range(self.rng, *SPAWN_Y),
            velocity=random_in_range(self.rng, *VELOCITY),
            layer=self._random_layer(),
        )
        self.clouds.append(cloud)
        return cloud

    def _schedule_respawn(self) -> float:
        delay = random_in_range(self.rng, *RESPAWN_DELAY_MS)
        token: int = 0

        def respawn() -> None:
            self._respawns.discard(token)
            self.spawn()

        token = self.scheduler.call_later(delay, respawn)
        self._respawns.add(token)
        return delay

    @property
    def pending_respawns(self) -> int:
        return len(self._respawns)

    # ------------------------------------------------------------------ #
    # Tick

    def advance(self) -> List[CloudParticle]:
        """Move every cloud; returns the clouds that left the scene this tick."""
        departed: List[CloudParticle] = []
        for cloud in self.clouds:
            cloud.x += cloud.velocity
            if cloud.x - EXIT_MARGIN > self.width:
                departed.append(cloud)

        for cloud in departed:
            self.clouds.remove(cloud)
            delay = self._schedule_respawn()
            logger.debug("cloud left at y=%.0f; respawn in %.0f ms", cloud.y, delay)
        return departed

    def render(self, canvas: Canvas, layer: CloudLayer) -> None:
        for cloud in self.clouds:
            if cloud.layer is layer:
                canvas.fill_circles(puff_centers(cloud), PUFF_RADIUS, self.color)

    def release(self) -> None:
        """Drop every cloud and cancel outstanding respawns."""
        for token in self._respawns:
            self.scheduler.cancel(token)
        self._respawns.clear()
        self.clouds.clear()
