class GeometryError(ValueError):
    """Base class for invalid geometry handed to the flattener."""


class InvalidArgumentError(GeometryError):
    """Wrong control point count, malformed point or bad tolerance value."""


class InvalidNumericError(GeometryError):
    """A coordinate is NaN or infinite."""
