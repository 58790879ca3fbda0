import math
from dataclasses import dataclass, fields, replace

from geometry.GeometryError import InvalidArgumentError

MAX_DEPTH_LIMIT = 64
MAX_SEGMENTS_LIMIT = 1 << 22


@dataclass(frozen=True)
class FlattenTolerance:
    """Precision knobs for Bezier flattening.

    collinearity_epsilon:
        If the (unnormalised) distance of an interior control point from the
        chord line is at most this value the point is considered on the line.
    distance_tolerance_square:
        Used when the chord is well defined. A segment is flat enough when the
        summed distances of both interior control points from the chord line,
        squared, are at most this value.
    distance_tolerance_manhattan:
        Used when both interior control points are on the chord line or the
        chord has zero length. Measures how far the interior control points
        are from being evenly spaced between the end points.
    max_depth:
        Subdivision depth at which a segment is accepted regardless of the
        tests above.
    max_segments:
        Upper bound on the number of accepted segments of one curve. Once
        splitting another segment would exceed it, every remaining segment is
        accepted as it is.
    """
    collinearity_epsilon: float = 1.0e-30
    distance_tolerance_square: float = 0.025
    distance_tolerance_manhattan: float = 0.4
    max_depth: int = 32
    max_segments: int = 1 << 16

    def __post_init__(self):
        for f in fields(self):
            if f.name in ("max_depth", "max_segments"):
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidArgumentError(f"{f.name} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise InvalidArgumentError(f"{f.name} must be finite and >= 0, got {value!r}")

        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise InvalidArgumentError(f"max_depth must be an int, got {self.max_depth!r}")
        if not 0 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise InvalidArgumentError(f"max_depth must be in [0, {MAX_DEPTH_LIMIT}], got {self.max_depth}")
        if isinstance(self.max_segments, bool) or not isinstance(self.max_segments, int):
            raise InvalidArgumentError(f"max_segments must be an int, got {self.max_segments!r}")
        if not 1 <= self.max_segments <= MAX_SEGMENTS_LIMIT:
            raise InvalidArgumentError(f"max_segments must be in [1, {MAX_SEGMENTS_LIMIT}], got {self.max_segments}")

    def with_overrides(self, **kwargs) -> "FlattenTolerance":
        """Copy with the given knobs replaced. None values are ignored."""
        known = {f.name for f in fields(self)}
        unknown = set(kwargs) - known
        if unknown:
            raise InvalidArgumentError(f"Unknown tolerance setting(s): {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})

    def is_flat(self, x1: float, y1: float, x2: float, y2: float,
                x3: float, y3: float, x4: float, y4: float) -> bool:
        """True if the segment can be replaced by its midpoint."""
        dx = x4 - x1
        dy = y4 - y1

        # |A*x + B*y + C| for the line through (x1, y1) and (x4, y4)
        d2 = abs((x2 - x4) * dy - (y2 - y4) * dx)
        d3 = abs((x3 - x4) * dy - (y3 - y4) * dx)

        if d2 > self.collinearity_epsilon or d3 > self.collinearity_epsilon:
            return (d2 + d3) * (d2 + d3) <= self.distance_tolerance_square * (dx * dx + dy * dy)

        # Chord is degenerate: point 2 should sit halfway between 1 and 3, point 3 halfway between 2 and 4
        manhattan = (abs(x1 + x3 - x2 - x2) + abs(y1 + y3 - y2 - y2)
                     + abs(x2 + x4 - x3 - x3) + abs(y2 + y4 - y3 - y3))
        return manhattan <= self.distance_tolerance_manhattan


DEFAULT_TOLERANCE = FlattenTolerance()
