"""Exceptions raised while loading configuration."""


class ConfigLoadError(Exception):
    """Raised when a config file or settings file cannot be loaded."""
    pass
