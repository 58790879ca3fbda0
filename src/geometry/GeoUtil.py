from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np

from geometry.GeometryError import InvalidArgumentError
from geometry.PointFloat import PointFloat


@dataclass(frozen=True)
class GeoUtil:
    @staticmethod
    def point_line_dist(p: PointFloat, a: PointFloat, b: PointFloat) -> float:
        """Distance from point p to line segment ab."""
        ab = b - a
        ab2 = ab.length_squared()
        if ab2 == 0.0:
            return abs(p - a)
        t = max(0.0, min(1.0, (p - a).dot(ab) / ab2))
        return abs(p - (a + ab * t))

    @staticmethod
    def to_point(pt: Any) -> PointFloat:
        """Coerce a PointFloat, an (x, y) pair or an {"x", "y"} mapping."""
        if isinstance(pt, PointFloat):
            return pt
        if isinstance(pt, dict) and "x" in pt and "y" in pt:
            x, y = pt["x"], pt["y"]
        elif isinstance(pt, (list, tuple)) and len(pt) == 2:
            x, y = pt
        elif hasattr(pt, "x") and hasattr(pt, "y"):
            x, y = pt.x, pt.y
        else:
            raise InvalidArgumentError(f"Unsupported point format: {pt!r}")

        try:
            return PointFloat(float(x), float(y))
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Unsupported point format: {pt!r}") from e

    @staticmethod
    def parse_point(s: str) -> PointFloat:
        """Parse 'x,y' into a point."""
        parts = s.split(",")
        if len(parts) != 2:
            raise InvalidArgumentError(f"Expected 'x,y', got {s!r}")
        try:
            return PointFloat(float(parts[0]), float(parts[1]))
        except ValueError as e:
            raise InvalidArgumentError(f"Expected 'x,y', got {s!r}") from e

    @staticmethod
    def equal_with_tolerance(a: PointFloat, b: PointFloat, abs_tol: float) -> bool:
        if a is None or b is None:
            return False
        d = abs(a - b)
        m = max(abs(a), abs(b), 1.0)
        return d <= max(abs_tol, 1e-6 * m)

    @staticmethod
    def polyline_length(points: Sequence[PointFloat]) -> float:
        return sum(abs(b - a) for a, b in zip(points, points[1:]))

    @staticmethod
    def bounds(points: Iterable[PointFloat]) -> Tuple[float, float, float, float]:
        """(minx, miny, maxx, maxy), all zero for no points"""
        pts: List[PointFloat] = list(points)
        if not pts:
            return 0.0, 0.0, 0.0, 0.0
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return min(xs), min(ys), max(xs), max(ys)

    @staticmethod
    def to_array(points: Iterable[PointFloat]) -> np.ndarray:
        """Points as a float array of shape (n, 2)."""
        arr = np.array([p.as_tuple() for p in points], dtype=float)
        return arr.reshape(-1, 2)
