"""Warren error hierarchy.

All warren-specific errors inherit from WarrenError for easy catching.
"""


class WarrenError(Exception):
    """Base error for all warren operations."""


class ConfigError(WarrenError):
    """Invalid or missing configuration."""


class DiscoveryError(WarrenError):
    """A page file could not be enumerated or stat'd during discovery."""


class GenerationError(WarrenError):
    """The code-generation sink failed while consuming a cycle's result."""
