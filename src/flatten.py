from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt

from export.JsonExporter import JsonExporter
from export.TxtExporter import TxtExporter
from geometry.BezierCurve import BezierCurve
from geometry.FlattenTolerance import DEFAULT_TOLERANCE, FlattenTolerance
from geometry.GeoUtil import GeoUtil
from geometry.Geometry import Geometry
from geometry.GeometryError import GeometryError
from geometry.PointFloat import PointFloat
from geometry.Polyline import Polyline
from svg.SvgConverter import SvgConverter

logger = logging.getLogger(__name__)


def _set_axes_equal_2d(ax, geom: Geometry):
    """Equal scale with a small margin so curves aren't distorted."""
    minx, miny, maxx, maxy = geom.bounds()
    pad = 0.05 * max(maxx - minx, maxy - miny, 1e-9)
    ax.set_xlim(minx - pad, maxx + pad)
    ax.set_ylim(miny - pad, maxy + pad)
    ax.set_aspect("equal", adjustable="datalim")


def visualize_geometry(geom: Geometry, control_points: Optional[List[PointFloat]] = None):
    """Plot the polylines (and the control polygon, if given)."""
    fig, ax = plt.subplots(figsize=(8, 6))
    for pl in geom.polylines:
        xy = GeoUtil.to_array(pl.points)
        ax.plot(xy[:, 0], xy[:, 1], linewidth=1.0, marker=".", markersize=3)

    if control_points:
        cp = GeoUtil.to_array(control_points)
        ax.plot(cp[:, 0], cp[:, 1], linestyle="--", color="grey", marker="o", linewidth=0.8)

    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.grid(True)
    _set_axes_equal_2d(ax, geom)
    plt.tight_layout()
    plt.show()


def tolerance_from_args(args: argparse.Namespace) -> FlattenTolerance:
    return DEFAULT_TOLERANCE.with_overrides(
        collinearity_epsilon=args.epsilon,
        distance_tolerance_square=args.tol_square,
        distance_tolerance_manhattan=args.tol_manhattan,
        max_depth=args.max_depth,
        max_segments=args.max_segments,
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Flatten cubic Bezier curves (or every shape of an SVG) into polylines")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--curve", nargs=4, metavar="X,Y", help="Four control points: start, control 1, control 2, end")
    src.add_argument("--input", dest="svg", help="Input SVG file")
    ap.add_argument("--epsilon", type=float, help=f"Collinearity epsilon (default: {DEFAULT_TOLERANCE.collinearity_epsilon:g})")
    ap.add_argument("--tol-square", type=float, help=f"Squared distance tolerance (default: {DEFAULT_TOLERANCE.distance_tolerance_square:g})")
    ap.add_argument("--tol-manhattan", type=float, help=f"Manhattan distance tolerance (default: {DEFAULT_TOLERANCE.distance_tolerance_manhattan:g})")
    ap.add_argument("--max-depth", type=int, help=f"Subdivision depth limit (default: {DEFAULT_TOLERANCE.max_depth})")
    ap.add_argument("--max-segments", type=int, help=f"Segment budget per curve (default: {DEFAULT_TOLERANCE.max_segments})")
    ap.add_argument("--view", action="store_true", help="Plot the result with matplotlib")
    ap.add_argument("--export-json", metavar="PATH", help="Write polylines to JSON (use '-' for stdout)")
    ap.add_argument("--export-txt", metavar="PATH", help="Write polylines to TXT (use '-' for stdout)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)-5s %(name)s: %(message)s")

    control_points: Optional[List[PointFloat]] = None
    try:
        tol = tolerance_from_args(args)
        if args.curve:
            curve = BezierCurve([GeoUtil.parse_point(s) for s in args.curve])
            control_points = curve.get_control_points()
            geom = Geometry(polylines=[Polyline(points=curve.flatten(tol))])
        else:
            geom = SvgConverter.svg_to_geometry(args.svg, tolerance=tol)
    except GeometryError as e:
        logger.debug("Flattening failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2

    # Summary goes to stdout only when no export uses it
    to_stdout = "-" in (args.export_json, args.export_txt) or "stdout" in (args.export_json, args.export_txt)
    if not to_stdout:
        minx, miny, maxx, maxy = geom.bounds()
        print(f"Polylines: {len(geom.polylines)}")
        print(f"Total points: {geom.point_count()}")
        print(f"Bounds: min=({minx:g},{miny:g}) max=({maxx:g},{maxy:g})")
        print(f"Total length: {sum(pl.length() for pl in geom.polylines):g}")

    if args.export_json:
        JsonExporter.export(geom, args.export_json)
    if args.export_txt:
        TxtExporter.export(geom, args.export_txt)

    if args.view:
        visualize_geometry(geom, control_points)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
