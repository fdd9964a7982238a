"""Custom exceptions for beat catalog."""


class BeatCatalogError(Exception):
    """Base exception for beat catalog errors."""
    pass


class ConfigurationError(BeatCatalogError):
    """Raised when there's an error in configuration."""
    pass
