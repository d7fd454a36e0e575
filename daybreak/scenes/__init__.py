from .base import Scene
from .landscape import Composition, LandscapeScene, Lifecycle, build_scene, composition_for
from .manager import SceneManager

__all__ = [
    "Composition",
    "LandscapeScene",
    "Lifecycle",
    "Scene",
    "SceneManager",
    "build_scene",
    "composition_for",
]
