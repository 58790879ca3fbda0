import logging
from typing import Any, Iterator, List, Optional

from svgelements import SVG, Arc, CubicBezier, Linear, Move, QuadraticBezier, Shape as SvgShape
from geometry.BezierCurve import BezierCurve
from geometry.FlattenTolerance import FlattenTolerance
from geometry.GeoUtil import GeoUtil
from geometry.Geometry import Geometry
from geometry.PointFloat import PointFloat
from geometry.Polyline import Polyline

logger = logging.getLogger(__name__)


class SvgConverter:
    """SVG -> float polylines (Geometry), curves flattened with BezierCurve."""

    @staticmethod
    def _iter_shapes(doc: SVG) -> Iterator[SvgShape]:
        for elem in doc.elements():
            if isinstance(elem, SvgShape):
                yield elem

    @staticmethod
    def _segment_points(seg: Any, tolerance: Optional[FlattenTolerance]) -> List[PointFloat]:
        if isinstance(seg, CubicBezier):
            return BezierCurve([seg.start, seg.control1, seg.control2, seg.end]).flatten(tolerance)

        if isinstance(seg, QuadraticBezier):
            return BezierCurve.from_quadratic(seg.start, seg.control, seg.end).flatten(tolerance)

        if isinstance(seg, Arc):
            pts: List[PointFloat] = []
            for cubic in seg.as_cubic_curves():
                flat = SvgConverter._segment_points(cubic, tolerance)
                # Consecutive cubics share their joint
                pts.extend(flat[1:] if pts else flat)
            return pts

        if isinstance(seg, Linear):
            return [GeoUtil.to_point(seg.start), GeoUtil.to_point(seg.end)]

        return []

    @staticmethod
    def path_to_polylines(segments: Any, tolerance: Optional[FlattenTolerance] = None) -> List[Polyline]:
        """Flatten a path (or any iterable of svgelements segments) into polylines.

        A Move starts a new polyline; any other segment whose start matches
        the previous end is appended without repeating the joint.
        """
        polylines: List[Polyline] = []
        current: List[PointFloat] = []
        last_end: Optional[PointFloat] = None

        def flush(pts: List[PointFloat]) -> None:
            polyline = Polyline(points=list(pts))
            polyline.drop_duplicates()
            if len(polyline.points) >= 2:
                polylines.append(polyline)

        for seg in segments:
            if isinstance(seg, Move):
                flush(current)
                current = []
                last_end = GeoUtil.to_point(seg.end) if seg.end is not None else None
                continue

            if getattr(seg, "start", None) is None:
                continue

            pts = SvgConverter._segment_points(seg, tolerance)
            if len(pts) < 2:
                continue

            if current and GeoUtil.equal_with_tolerance(last_end, pts[0], 1e-9):
                current.extend(pts[1:])
            else:
                flush(current)
                current = list(pts)
            last_end = pts[-1]

        flush(current)
        return polylines

    @staticmethod
    def svg_to_geometry(svg_path: Any, tolerance: Optional[FlattenTolerance] = None) -> Geometry:
        """Parse an SVG file (path or file object) and flatten every shape in it.

        Shape transforms are applied before flattening, so the tolerance is
        in document units.
        """
        doc = SVG.parse(svg_path)

        polylines: List[Polyline] = []
        for shape in SvgConverter._iter_shapes(doc):
            found = SvgConverter.path_to_polylines(shape.segments(), tolerance)
            logger.debug("%s: %d polyline(s)", type(shape).__name__, len(found))
            polylines.extend(found)

        geom = Geometry(polylines=polylines)
        logger.info("Flattened %s into %d polyline(s), %d point(s)",
                    svg_path, len(geom.polylines), geom.point_count())
        return geom
