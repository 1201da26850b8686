"""Graticule-specific exceptions for consistent error handling."""

from typing import Any, Optional


class GraticuleError(Exception):
    """Base graticule error."""
    pass


class InvalidCoordinateError(GraticuleError):
    """Raised when cubic coordinates do not sum to zero."""

    def __init__(self, coordinate: Any, message: Optional[str] = None):
        super().__init__(
            message or f"Cubic coordinates {tuple(coordinate)} are not valid (sum is non-zero)"
        )
        self.coordinate = coordinate


class OutOfBoundsError(GraticuleError, IndexError):
    """Raised when a valid coordinate falls outside the graticule dimensions."""

    def __init__(self, coordinate: Any, message: Optional[str] = None):
        super().__init__(message or f"Coordinates {tuple(coordinate)} are outside the graticule")
        self.coordinate = coordinate


class UninitializedStorageError(GraticuleError):
    """Raised when cells are accessed before init_storage() was called."""
    pass


class DegenerateDimensionError(GraticuleError, ArithmeticError):
    """Raised when a map dimension has min greater than max."""

    def __init__(self, dimension: Any):
        super().__init__(f"{dimension!r}: min must be less than or equal to max")
        self.dimension = dimension


class ConfigurationError(GraticuleError):
    """Raised when config.yaml holds values that cannot be used."""
    pass
