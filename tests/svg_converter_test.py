import math
import os
import sys

import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from geometry.BezierCurve import BezierCurve
from geometry.FlattenTolerance import FlattenTolerance
from svg.SvgConverter import SvgConverter


def as_xy(points):
    return [(p.x, p.y) for p in points]


@pytest.fixture
def svg_file(tmp_path):
    def write(body: str) -> str:
        path = tmp_path / "drawing.svg"
        path.write_text(
            '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200">' + body + "</svg>",
            encoding="utf-8")
        return str(path)
    return write


def test_lines_only(svg_file):
    geom = SvgConverter.svg_to_geometry(svg_file('<path d="M0,0 L10,0 L10,10"/>'))
    assert len(geom.polylines) == 1
    assert as_xy(geom.polylines[0].points) == [(0, 0), (10, 0), (10, 10)]


def test_cubic_uses_bezier_flattening(svg_file):
    geom = SvgConverter.svg_to_geometry(svg_file('<path d="M0,0 C0,50 50,50 50,0"/>'))
    expected = BezierCurve([(0, 0), (0, 50), (50, 50), (50, 0)]).flatten()
    assert len(geom.polylines) == 1
    got = geom.polylines[0].points
    assert len(got) == len(expected)
    for a, b in zip(got, expected):
        assert a.x == pytest.approx(b.x)
        assert a.y == pytest.approx(b.y)


def test_tolerance_is_passed_through(svg_file):
    path = svg_file('<path d="M0,0 C0,50 50,50 50,0"/>')
    coarse = SvgConverter.svg_to_geometry(path, FlattenTolerance(distance_tolerance_square=1.0))
    fine = SvgConverter.svg_to_geometry(path, FlattenTolerance(distance_tolerance_square=0.0001))
    assert fine.point_count() > coarse.point_count()


def test_quadratic(svg_file):
    geom = SvgConverter.svg_to_geometry(svg_file('<path d="M0,0 Q10,20 20,0"/>'))
    pts = geom.polylines[0].points
    assert as_xy([pts[0], pts[-1]]) == [(0, 0), (20, 0)]
    assert len(pts) > 2
    # Every point lies on the parabola y = 2x(1 - x/20)
    for p in pts:
        assert p.y == pytest.approx(2 * p.x * (1 - p.x / 20), abs=1e-9)


def test_subpaths_split_polylines(svg_file):
    geom = SvgConverter.svg_to_geometry(svg_file('<path d="M0,0 L1,0 M5,5 L6,5 L6,6"/>'))
    assert [len(pl.points) for pl in geom.polylines] == [2, 3]


def test_close_returns_to_start(svg_file):
    geom = SvgConverter.svg_to_geometry(svg_file('<path d="M0,0 L10,0 L10,10 Z"/>'))
    assert len(geom.polylines) == 1
    pl = geom.polylines[0]
    assert as_xy(pl.points) == [(0, 0), (10, 0), (10, 10), (0, 0)]
    assert pl.is_closed()


def test_group_transform_applied(svg_file):
    geom = SvgConverter.svg_to_geometry(svg_file('<g transform="translate(100,0)"><path d="M0,0 L10,0"/></g>'))
    assert as_xy(geom.polylines[0].points) == [(100, 0), (110, 0)]


def test_rect(svg_file):
    geom = SvgConverter.svg_to_geometry(svg_file('<rect x="0" y="0" width="10" height="5"/>'))
    assert len(geom.polylines) == 1
    assert geom.polylines[0].is_closed()
    assert geom.bounds() == pytest.approx((0, 0, 10, 5))


def test_circle_points_on_circle(svg_file):
    geom = SvgConverter.svg_to_geometry(svg_file('<circle cx="50" cy="50" r="20"/>'))
    assert geom.point_count() > 8
    for pl in geom.polylines:
        for p in pl.points:
            assert math.hypot(p.x - 50, p.y - 50) == pytest.approx(20, abs=0.05)
    minx, miny, maxx, maxy = geom.bounds()
    assert (minx, miny, maxx, maxy) == pytest.approx((30, 30, 70, 70), abs=0.2)


def test_no_consecutive_duplicates(svg_file):
    geom = SvgConverter.svg_to_geometry(svg_file('<path d="M0,0 L10,0 L10,0 C10,10 0,10 0,0 Z"/>'))
    for pl in geom.polylines:
        for a, b in zip(pl.points, pl.points[1:]):
            assert a != b


def test_empty_document(svg_file):
    geom = SvgConverter.svg_to_geometry(svg_file(""))
    assert geom.polylines == []
