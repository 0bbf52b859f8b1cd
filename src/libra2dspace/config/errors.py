"""Errors raised while reading libra2dspace settings from the environment."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A setting such as ``DSPACE_API`` or a collection name is unusable."""


class MissingConfigurationError(ConfigurationError):
    """A required setting (``DSPACE_API`` for live lookups) is unset or blank."""
