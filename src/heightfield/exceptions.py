"""Custom exceptions for heightfield generation."""


class HeightfieldError(Exception):
    """Base exception for heightfield errors."""

    pass


class InvalidConfigurationError(HeightfieldError):
    """Raised when a generation or calibration parameter is out of range."""

    pass


class FieldNotGeneratedError(HeightfieldError):
    """Raised when a grid-backed field is sampled before it is generated."""

    pass
