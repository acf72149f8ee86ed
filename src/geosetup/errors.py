"""Error and warning types raised while building a model setup."""

from __future__ import annotations


class ConfigError(ValueError):
    """Invalid or inconsistent model configuration."""


class GeometryWarning(UserWarning):
    """A region does not intersect the grid it is painted on."""
