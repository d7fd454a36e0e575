from __future__ import annotations

"""
Engine entry point: owns pygame, the display window and the loop.

The engine builds the scene described by the config, binds it to the
display surface and hands it to the SceneManager, which pumps events and
frame callbacks until the window is closed.
"""

import logging

import pygame

from daybreak import config
from daybreak.rng import new_rng
from daybreak.scenes import SceneManager, build_scene
from daybreak.scheduler import FrameScheduler

logger = logging.getLogger(__name__)


class Engine:
    def __init__(self, cfg: config.SceneConfig) -> None:
        pygame.init()
        self.cfg = cfg
        self.display = pygame.display.set_mode((cfg.width, cfg.height))
        pygame.display.set_caption(cfg.caption)
        self.scheduler = FrameScheduler()
        self.rng = new_rng(cfg.seed)
        self.manager = SceneManager(cfg, self.display, self.scheduler)

        scene = build_scene(cfg, self.scheduler, self.rng)
        scene.initialize(self.display)
        scene.enable()
        self.manager.set_scene(scene)
        logger.info("engine ready: %dx%d, mode=%s, seed=%s", cfg.width, cfg.height, cfg.mode, cfg.seed)

    def run(self) -> None:
        try:
            self.manager.run()
        finally:
            self.teardown()

    def teardown(self) -> None:
        self.manager.set_scene(None)
        self.scheduler.clear()
        pygame.quit()
