from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from daybreak.config import SceneConfig
from daybreak.errors import GrowthInvariantError, SceneDestroyedError, SceneError
from daybreak.render.canvas import Canvas, canvas_for
from daybreak.scheduler import FrameScheduler
from daybreak.state.scenery import CloudLayer
from daybreak.systems import hills
from daybreak.systems.clouds import CloudField
from daybreak.systems.growth import BranchGrowth
from daybreak.systems.hills import HillSilhouette
from daybreak.systems.sun import SunCycle

from .base import Scene

if TYPE_CHECKING:
    from .manager import SceneManager

logger = logging.getLogger(__name__)


class Lifecycle(Enum):
    CREATED = "created"
    ENABLED = "enabled"
    DISABLED = "disabled"
    DESTROYED = "destroyed"


@dataclass(frozen=True)
class Composition:
    """Which parts of the scenery a scene owns and whether they move."""
    land: bool = True
    clouds: bool = True
    hills: bool = True
    animate: bool = True
    random_hills: bool = True
    tree: bool = False
    sky_opacity: Optional[float] = None


def composition_for(cfg: SceneConfig) -> Composition:
    if cfg.mode == "sun":
        return Composition(land=False, clouds=False, hills=False)
    if cfg.mode == "tree":
        # still scenery with the tree growing on top
        return Composition(animate=False, random_hills=False, tree=True, sky_opacity=1.0)
    return Composition(tree=cfg.grow_tree)


class LandscapeScene(Scene):
    """
    Sky, sun, land, clouds, hills and optionally a growing tree.

    Per tick, in draw order: clear, sky, sun, land, back clouds, hills,
    front clouds, tree. The tree is grown by its own frame callbacks on the
    shared scheduler and drawn onto a layer that is composited last, so
    disabling the scene does not stop it growing.
    """

    def __init__(
        self,
        cfg: SceneConfig,
        scheduler: FrameScheduler,
        rng: random.Random,
        composition: Optional[Composition] = None,
    ) -> None:
        self.cfg = cfg
        self.scheduler = scheduler
        self.rng = rng
        self.composition = composition or composition_for(cfg)
        self.lifecycle = Lifecycle.CREATED
        self.elapsed_ms = 0.0
        self.ticks = 0

        self.canvas: Optional[Canvas] = None
        self.width = 0
        self.height = 0
        self.sky_height = 0
        self.sun: Optional[SunCycle] = None
        self.clouds: Optional[CloudField] = None
        self.hills: Optional[HillSilhouette] = None
        self.tree: Optional[BranchGrowth] = None
        self.tree_layer: Optional[Canvas] = None
        self._loop_token: Optional[int] = None

    # ------------------------------------------------------------------ #
    # Setup

    def initialize(self, surface: object) -> "LandscapeScene":
        """
        Bind the scene to a drawing surface and build its components. Size is
        read once here; later host resizes are not picked up.
        """
        if self.lifecycle is Lifecycle.DESTROYED:
            raise SceneDestroyedError("cannot initialize a destroyed scene")
        if self.canvas is not None:
            raise SceneError("scene is already initialized")

        cfg = self.cfg
        comp = self.composition
        canvas = canvas_for(surface, background=cfg.background)
        self.canvas = canvas
        self.width, self.height = canvas.width, canvas.height
        self.sky_height = self.height - cfg.land_height

        self.sun = SunCycle(
            self.width,
            self.height,
            self.sky_height,
            sky_rgb=cfg.sky,
            color=cfg.sun,
            initial_opacity=comp.sky_opacity if comp.sky_opacity is not None else cfg.initial_sky_opacity,
        )

        if comp.clouds:
            self.clouds = CloudField(
                self.width, self.rng, self.scheduler, color=cfg.cloud, max_clouds=cfg.max_clouds
            )
            self.clouds.seed()

        if comp.hills:
            profile = (
                hills.generate(self.rng, self.width, self.sky_height)
                if comp.random_hills
                else hills.fixed_profile(self.sky_height)
            )
            self.hills = HillSilhouette(profile, self.sky_height, color=cfg.hill, outline=cfg.hill_outline)

        if comp.tree:
            growth = cfg.growth
            self.tree_layer = canvas.new_layer()
            self.tree = BranchGrowth(
                self.scheduler,
                self.tree_layer,
                (self.width - growth.base_width) / 2,
                self.height - cfg.land_height / 2,
                self.rng,
                growth=growth,
                color=cfg.bark,
            )

        logger.debug(
            "scene initialized: %dx%d mode=%s tree=%s", self.width, self.height, cfg.mode, comp.tree
        )
        self.draw_frame()
        return self

    # ------------------------------------------------------------------ #
    # Lifecycle

    @property
    def is_enabled(self) -> bool:
        return self.lifecycle is Lifecycle.ENABLED

    def enable(self) -> "LandscapeScene":
        if self.lifecycle is Lifecycle.DESTROYED:
            raise SceneDestroyedError("cannot enable a destroyed scene")
        if self.canvas is None:
            raise SceneError("initialize() the scene before enabling it")
        if self.is_enabled:
            return self

        self.lifecycle = Lifecycle.ENABLED
        self._loop_token = self.scheduler.request_frame(self._draw_loop)
        if self.tree is not None:
            self.tree.start()
        logger.debug("scene enabled")
        return self

    def disable(self) -> "LandscapeScene":
        if not self.is_enabled:
            return self

        self.lifecycle = Lifecycle.DISABLED
        if self._loop_token is not None:
            self.scheduler.cancel(self._loop_token)
            self._loop_token = None
        logger.debug("scene disabled")
        return self

    def destroy(self) -> None:
        if self.lifecycle is Lifecycle.DESTROYED:
            return
        self.disable()
        if self.tree is not None:
            self.tree.stop()
        if self.clouds is not None:
            self.clouds.release()
        self.sun = None
        self.clouds = None
        self.hills = None
        self.tree = None
        self.tree_layer = None
        self.canvas = None
        self.lifecycle = Lifecycle.DESTROYED
        logger.debug("scene destroyed after %d ticks", self.ticks)

    # ------------------------------------------------------------------ #
    # Frame loop

    def _draw_loop(self, now_ms: float) -> None:
        self._loop_token = None
        if not self.is_enabled:
            return
        self.draw_frame()
        self._loop_token = self.scheduler.request_frame(self._draw_loop)

    def draw_frame(self) -> None:
        """One tick of the scenery; order matters, later draws cover earlier ones."""
        canvas = self.canvas
        comp = self.composition
        if canvas is None or self.sun is None:
            return

        canvas.clear()
        self.sun.render_sky(canvas)
        if comp.animate:
            self.sun.advance()
        self.sun.render(canvas)

        if comp.land:
            canvas.fill_rect(0, self.sky_height, self.width, self.cfg.land_height, self.cfg.land)

        if self.clouds is not None:
            if comp.animate:
                self.clouds.advance()
            self.clouds.render(canvas, CloudLayer.BACK)

        if self.hills is not None:
            self.hills.render(canvas)

        if self.clouds is not None:
            self.clouds.render(canvas, CloudLayer.FRONT)

        if self.tree_layer is not None:
            canvas.overlay(self.tree_layer)

        self.ticks += 1

    def pump(self, now_ms: float) -> None:
        """Run one scheduler frame at now_ms."""
        try:
            self.scheduler.run_frame(now_ms)
        except GrowthInvariantError:
            # the tree has already cancelled itself; keep the scenery going
            logger.exception("tree growth aborted")

    # ------------------------------------------------------------------ #
    # Live-loop hooks

    def update(self, dt_ms: int, manager: "SceneManager") -> None:
        self.elapsed_ms += dt_ms
        self.pump(self.elapsed_ms)


def build_scene(cfg: SceneConfig, scheduler: FrameScheduler, rng: random.Random) -> LandscapeScene:
    return LandscapeScene(cfg, scheduler, rng, composition_for(cfg))
