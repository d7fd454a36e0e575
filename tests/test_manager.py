import pygame
import pytest

from daybreak.config import SceneConfig
from daybreak.scenes import Lifecycle, Scene, SceneManager, build_scene


class CountingScene(Scene):
    def __init__(self):
        self.updates = 0
        self.destroyed = False

    def update(self, dt_ms, manager):
        self.updates += 1

    def destroy(self):
        self.destroyed = True


@pytest.fixture
def display(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.display.init()
    surface = pygame.display.set_mode((200, 120))
    yield surface
    pygame.display.quit()


@pytest.fixture
def manager(scheduler):
    return SceneManager(SceneConfig(width=200, height=120), pygame.Surface((200, 120)), scheduler)


def test_set_scene_replaces_and_destroys(manager):
    first, second = CountingScene(), CountingScene()
    manager.set_scene(first)
    manager.set_scene(second)
    assert manager.scene_stack == [second]
    assert first.destroyed and not second.destroyed


def test_push_and_pop(manager):
    base, top = CountingScene(), CountingScene()
    manager.set_scene(base)
    manager.push_scene(top)
    manager.pop_scene()
    assert manager.scene_stack == [base]
    assert top.destroyed
    manager.pop_scene()
    manager.pop_scene()
    assert manager.scene_stack == []


def test_quit_event_ends_the_loop(display, scheduler, rng):
    cfg = SceneConfig(width=200, height=120, fps=1000)
    manager = SceneManager(cfg, display, scheduler)
    scene = build_scene(cfg, scheduler, rng).initialize(display).enable()
    manager.set_scene(scene)

    pygame.event.post(pygame.event.Event(pygame.QUIT))
    manager.run()

    assert manager.scene_stack == []
    assert scene.lifecycle is Lifecycle.DESTROYED


def test_loop_updates_until_scene_leaves(display, scheduler):
    manager = SceneManager(SceneConfig(fps=1000), display, scheduler)
    scene = CountingScene()

    def update(dt_ms, mgr):
        scene.updates += 1
        if scene.updates == 3:
            mgr.set_scene(None)

    scene.update = update
    manager.set_scene(scene)
    manager.run()

    assert scene.updates == 3
    assert scene.destroyed
