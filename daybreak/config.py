from __future__ import annotations

import pathlib
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple

import yaml

from daybreak.errors import ConfigError

Color = Tuple[int, ...]

DEFAULT_CONFIG_PATH = pathlib.Path(__file__).resolve().parent / "content" / "scene.yaml"

SCENE_MODES = ("landscape", "sun", "tree")


@dataclass
class GrowthConfig:
    base_width: float = 20.0
    # How long a branch grows with respect to the time spent growing it.
    branch_length: float = 250.0
    # Upward velocity per tick.
    rate_of_growth: float = 1.0
    # Higher spreads branches wider.
    branch_spread: float = 1.0
    taper: float = 4.0
    trunk_wiggle: float = 0.5
    split_fraction: float = 5 / 8
    shrink: float = 2 / 3
    min_stroke_width: float = 0.2
    max_branches: int = 64


@dataclass
class SceneConfig:
    width: int = 1180
    height: int = 500
    land_height: int = 100
    fps: int = 60
    seed: Optional[int] = None
    mode: str = "landscape"
    grow_tree: bool = False
    max_clouds: int = 12
    initial_sky_opacity: float = 0.8
    caption: str = "Daybreak"
    debug_log_path: str = "daybreak_debug.log"
    # palette
    background: Color = (10, 10, 20)
    sky: Color = (0, 206, 250)
    land: Color = (255, 148, 28)
    sun: Color = (255, 255, 0)
    hill: Color = (6, 150, 17)
    hill_outline: Color = (0, 0, 0)
    cloud: Color = (255, 255, 255, 230)
    bark: Color = (130, 82, 1)
    growth: GrowthConfig = field(default_factory=GrowthConfig)

    @property
    def sky_height(self) -> int:
        return self.height - self.land_height


_COLOR_KEYS = {"background", "sky", "land", "sun", "hill", "hill_outline", "cloud", "bark"}


def _known(cls) -> set:
    return {f.name for f in fields(cls)}


def _coerce_color(key: str, value: Any) -> Color:
    if not isinstance(value, (list, tuple)) or len(value) not in (3, 4):
        raise ConfigError(f"{key}: expected an RGB or RGBA list, got {value!r}")
    return tuple(int(c) for c in value)


def config_from_dict(data: Dict[str, Any], base: Optional[SceneConfig] = None) -> SceneConfig:
    """Overlay a plain mapping (as read from YAML) onto a SceneConfig."""
    cfg = base or SceneConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"scene config must be a mapping, got {type(data).__name__}")

    unknown = set(data) - _known(SceneConfig)
    if unknown:
        raise ConfigError(f"unknown scene config keys: {sorted(unknown)}")

    overrides: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "growth":
            if not isinstance(value, dict):
                raise ConfigError("growth: expected a mapping")
            bad = set(value) - _known(GrowthConfig)
            if bad:
                raise ConfigError(f"unknown growth config keys: {sorted(bad)}")
            overrides[key] = replace(cfg.growth, **value)
        elif key in _COLOR_KEYS:
            overrides[key] = _coerce_color(key, value)
        else:
            overrides[key] = value

    cfg = replace(cfg, **overrides)
    if cfg.mode not in SCENE_MODES:
        raise ConfigError(f"mode must be one of {SCENE_MODES}, got {cfg.mode!r}")
    if cfg.land_height >= cfg.height:
        raise ConfigError("land_height must be smaller than height")
    return cfg


def load_config(path: Optional[str | pathlib.Path] = None) -> SceneConfig:
    """
    Load a SceneConfig from YAML. With no path the packaged defaults in
    content/scene.yaml are used; missing keys fall back to the dataclass.
    """
    yaml_path = pathlib.Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        with yaml_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigError(f"config file not found: {yaml_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"could not parse {yaml_path}: {e}") from e
    return config_from_dict(data)
