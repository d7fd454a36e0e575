"""Procedural day/night landscape: sun, clouds, hills and a growing tree."""

__version__ = "0.3.0"
