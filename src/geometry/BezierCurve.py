import logging
from typing import Any, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from geometry.FlattenTolerance import DEFAULT_TOLERANCE, FlattenTolerance
from geometry.GeoUtil import GeoUtil
from geometry.GeometryError import InvalidArgumentError, InvalidNumericError
from geometry.PointFloat import PointFloat
from geometry.Shape import Shape

logger = logging.getLogger(__name__)

Coords = Tuple[float, float, float, float, float, float, float, float]

# Largest coordinate magnitude whose squared cross products stay finite
MAX_COORDINATE = 1e75


class _Leaf(NamedTuple):
    coords: Coords
    mid: PointFloat
    forced: bool


class BezierCurve(Shape):
    """Cubic Bezier curve given by its start point, two control points and end point.

    The curve is immutable. Use flatten() to get a polyline approximation.
    """

    def __init__(self, control_points: Iterable[Any]):
        raw = list(control_points) if control_points is not None else []
        if len(raw) != 4:
            raise InvalidArgumentError(f"A cubic Bezier curve needs exactly 4 control points, got {len(raw)}")

        points = tuple(GeoUtil.to_point(p) for p in raw)
        for i, p in enumerate(points):
            if not p.is_finite():
                raise InvalidNumericError(f"Control point {i} is not finite: ({p.x}, {p.y})")
            if abs(p.x) > MAX_COORDINATE or abs(p.y) > MAX_COORDINATE:
                raise InvalidNumericError(f"Control point {i} is out of range (|x|, |y| <= {MAX_COORDINATE:g}): ({p.x}, {p.y})")
        self._points: Tuple[PointFloat, ...] = points

    @staticmethod
    def from_quadratic(p0: Any, c: Any, p1: Any) -> "BezierCurve":
        """Exact cubic equivalent of the quadratic curve p0, c, p1."""
        p0, c, p1 = GeoUtil.to_point(p0), GeoUtil.to_point(c), GeoUtil.to_point(p1)
        c1 = p0 + (c - p0) * (2.0 / 3.0)
        c2 = p1 + (c - p1) * (2.0 / 3.0)
        return BezierCurve([p0, c1, c2, p1])

    def get_control_points(self) -> List[PointFloat]:
        return list(self._points)

    def get_base_points(self) -> List[PointFloat]:
        return self.get_control_points()

    @property
    def start(self) -> PointFloat:
        return self._points[0]

    @property
    def end(self) -> PointFloat:
        return self._points[3]

    def split(self) -> Tuple["BezierCurve", "BezierCurve"]:
        """De Casteljau split at t = 0.5."""
        p1, p2, p3, p4 = self._points
        p12, p23, p34 = p1.midpoint(p2), p2.midpoint(p3), p3.midpoint(p4)
        p123, p234 = p12.midpoint(p23), p23.midpoint(p34)
        p1234 = p123.midpoint(p234)
        return BezierCurve([p1, p12, p123, p1234]), BezierCurve([p1234, p234, p34, p4])

    def flatten(self, tolerance: Optional[FlattenTolerance] = None) -> List[PointFloat]:
        """Piecewise linear approximation of the curve.

        The first and last points are the curve's own start and end points.
        Every interior point is the midpoint of a segment that passed the
        flatness test of the given tolerance (DEFAULT_TOLERANCE if None).
        """
        points: List[PointFloat] = [self._points[0]]
        points.extend(leaf.mid for leaf in self._collect(tolerance))
        points.append(self._points[3])
        return points

    def subdivide(self, tolerance: Optional[FlattenTolerance] = None) -> List["BezierCurve"]:
        """Accepted segments of the subdivision, from start to end."""
        return [BezierCurve(_as_points(leaf.coords)) for leaf in self._collect(tolerance)]

    def _collect(self, tolerance: Optional[FlattenTolerance]) -> List[_Leaf]:
        tol = DEFAULT_TOLERANCE if tolerance is None else tolerance
        if not isinstance(tol, FlattenTolerance):
            raise InvalidArgumentError(f"tolerance must be a FlattenTolerance, got {type(tol).__name__}")

        p1, p2, p3, p4 = self._points
        leaves = list(self._approximate((p1.x, p1.y, p2.x, p2.y, p3.x, p3.y, p4.x, p4.y), tol))

        forced = sum(1 for leaf in leaves if leaf.forced)
        if forced:
            logger.debug("Subdivision limit reached on %d of %d segment(s) of %r (max_depth=%d, max_segments=%d)",
                         forced, len(leaves), self, tol.max_depth, tol.max_segments)
        return leaves

    # Based on De Casteljau's algorithm, left to right with a stack of pending segments
    @staticmethod
    def _approximate(coords: Coords, tol: FlattenTolerance) -> Iterator[_Leaf]:
        pending: List[Tuple[Coords, int]] = [(coords, 0)]
        emitted = 0
        while pending:
            coords, depth = pending.pop()
            x1, y1, x2, y2, x3, y3, x4, y4 = coords

            # Subdivision at t = 0.5
            x12, y12 = (x1 + x2) / 2, (y1 + y2) / 2
            x23, y23 = (x2 + x3) / 2, (y2 + y3) / 2
            x34, y34 = (x3 + x4) / 2, (y3 + y4) / 2
            x123, y123 = (x12 + x23) / 2, (y12 + y23) / 2
            x234, y234 = (x23 + x34) / 2, (y23 + y34) / 2
            x1234, y1234 = (x123 + x234) / 2, (y123 + y234) / 2

            flat = tol.is_flat(*coords)
            # Splitting turns one pending segment into two
            forced = not flat and (depth >= tol.max_depth or emitted + len(pending) + 2 > tol.max_segments)
            if flat or forced:
                emitted += 1
                yield _Leaf(coords, PointFloat(x1234, y1234), forced)
                continue

            pending.append(((x1234, y1234, x234, y234, x34, y34, x4, y4), depth + 1))
            pending.append(((x1, y1, x12, y12, x123, y123, x1234, y1234), depth + 1))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BezierCurve):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        pts = ", ".join(f"({p.x:g}, {p.y:g})" for p in self._points)
        return f"BezierCurve([{pts}])"


def _as_points(coords: Coords) -> List[PointFloat]:
    return [PointFloat(coords[i], coords[i + 1]) for i in range(0, 8, 2)]
