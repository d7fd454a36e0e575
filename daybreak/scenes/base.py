from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame

    from .manager import SceneManager


# ---------------------------------------------------------------------------
# Base Scene
# ---------------------------------------------------------------------------


class Scene:
    """
    Abstract base for all scenes.

    The SceneManager drives the scene on top of its stack through the
    live-loop hooks: handle_event for each pygame event, then update with
    the milliseconds since the last frame, then render.
    """

    uses_live_loop: bool = True

    def handle_event(self, event: "pygame.event.Event", manager: "SceneManager") -> None:
        """Process a single pygame event."""
        return None

    def update(self, dt_ms: int, manager: "SceneManager") -> None:
        """Advance scene state by dt_ms."""
        return None

    def render(self, surface: "pygame.Surface", manager: "SceneManager") -> None:
        """Draw anything not already drawn during update."""
        return None

    def destroy(self) -> None:
        """Release everything the scene owns. Called when it leaves the stack."""
        return None
