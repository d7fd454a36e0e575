# manager.py
from __future__ import annotations

import logging
from typing import List, Optional

import pygame

from daybreak.config import SceneConfig
from daybreak.scheduler import FrameScheduler

from .base import Scene

logger = logging.getLogger(__name__)


class SceneManager:
    def __init__(self, cfg: SceneConfig, display: pygame.Surface, scheduler: FrameScheduler) -> None:
        self.cfg = cfg
        self.display = display
        self.scheduler = scheduler
        self.scene_stack: List[Scene] = []

    # ------------------------------------------------------------------ #
    # Stack operations

    def push_scene(self, scene: Scene) -> None:
        self.scene_stack.append(scene)

    def pop_scene(self) -> None:
        if not self.scene_stack:
            return
        scene = self.scene_stack.pop()
        scene.destroy()

    def set_scene(self, scene: Optional[Scene]) -> None:
        for old in self.scene_stack:
            if old is not scene:
                old.destroy()
        if scene is None:
            self.scene_stack.clear()
        else:
            self.scene_stack = [scene]

    # ------------------------------------------------------------------ #

    def run(self) -> None:
        """Drive whichever scene is on top until the stack is empty."""
        while self.scene_stack:
            self._run_live_scene(self.scene_stack[-1])

    def _run_live_scene(self, scene: Scene) -> None:
        clock = pygame.time.Clock()

        # Drive events/update/render until the scene stack changes or the
        # app is quit.
        while self.scene_stack and self.scene_stack[-1] is scene:
            dt = clock.tick(self.cfg.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.set_scene(None)
                    return

                # Scene size is fixed at setup; a resized window just shows
                # more (or less) background.
                if event.type == pygame.VIDEORESIZE:
                    logger.debug("ignoring resize to %dx%d", event.w, event.h)
                    continue

                scene.handle_event(event, self)

            scene.update(dt, self)
            scene.render(self.display, self)
            pygame.display.flip()
