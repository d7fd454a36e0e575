"""Exceptions raised by the scene engine."""


class SceneError(Exception):
    """Base class for scene engine failures."""


class UnsupportedSurfaceError(SceneError):
    """The host surface has no 2-D drawing capability."""


class GrowthInvariantError(SceneError):
    """Branch bookkeeping and scheduled ticks fell out of sync."""


class SceneDestroyedError(SceneError):
    """A destroyed scene was asked to start again."""


class ConfigError(SceneError):
    """The scene configuration file could not be understood."""
