"""Tests for the ellipse entity."""

import logging
import pytest
from math import radians, sin, sqrt

import dxfgeom.ellipse as ellipse_module
from dxfgeom.conic import EllipseFit
from dxfgeom.ellipse import Ellipse
from dxfgeom.entity import HasNormal, Tessellable, Transformable
from dxfgeom.errors import (AxisFlooredWarning, DegenerateNumeric,
                            InvalidArgument, TransformNotApplicable)
from dxfgeom.geom import Vector2, Vector3
from dxfgeom.ocs import CoordinateSystem, transform
from dxfgeom.polyline import Polyline
from dxfgeom.settings import Tessellation, epsilon
from dxfgeom.xform import Matrix3, Mirror, Rotation, Scale

WCS = CoordinateSystem.WORLD
OCS = CoordinateSystem.OBJECT


def world_points(e, precision):
    return transform(e.tessellate(Tessellation(precision=precision)), e.normal, OCS, WCS)


def implicit_value(e, p):
    """``(x/a)^2 + (y/b)^2`` of world point ``p`` in the frame of ``e``"""
    o = transform(p, e.normal, WCS, OCS)
    c = e.ocs_center()
    q = Vector2(o.x - c.x, o.y - c.y).rotate(-radians(e.rotation))
    a = 0.5 * e.major_axis
    b = 0.5 * e.minor_axis
    return (q.x / a) ** 2 + (q.y / b) ** 2


def same_direction_mod_180(angle, expected):
    return abs(sin(radians(angle - expected))) < 1e-6


class TestEllipseConstruction:
    """Test ellipse construction and validation."""

    def test_defaults(self):
        e = Ellipse()
        assert e.center == Vector3(0.0, 0.0, 0.0)
        assert e.major_axis == 1.0
        assert e.minor_axis == 0.5
        assert e.rotation == 0.0
        assert e.normal == Vector3(0.0, 0.0, 1.0)
        assert e.is_full_ellipse()

    def test_protocols(self):
        e = Ellipse()
        assert isinstance(e, HasNormal)
        assert isinstance(e, Transformable)
        assert isinstance(e, Tessellable)

    def test_bad_axes(self):
        with pytest.raises(InvalidArgument):
            Ellipse(major_axis=0.0)
        with pytest.raises(InvalidArgument):
            Ellipse(minor_axis=-1.0)
        with pytest.raises(InvalidArgument):
            Ellipse(normal=(0, 0, 0))

    def test_angles_normalized(self):
        e = Ellipse(rotation=-30.0, start_angle=370.0, end_angle=-10.0)
        assert e.rotation == pytest.approx(330.0)
        assert e.start_angle == pytest.approx(10.0)
        assert e.end_angle == pytest.approx(350.0)
        assert not e.is_full_ellipse()

    def test_full_ellipse(self):
        assert Ellipse(start_angle=45.0, end_angle=405.0).is_full_ellipse()

    def test_copy(self):
        e = Ellipse(center=(1, 2, 3), major_axis=4.0, minor_axis=2.0, rotation=10.0)
        f = e.copy()
        assert e == f
        f.rotation = 20.0
        assert e.rotation == 10.0


class TestEllipseSampling:
    """polar coordinates and polygonal vertexes"""

    def test_polar_coordinate(self):
        e = Ellipse(major_axis=4.0, minor_axis=2.0)
        assert tuple(e.polar_coordinate_relative_to_center(0.0)) == pytest.approx((2.0, 0.0))
        assert tuple(e.polar_coordinate_relative_to_center(90.0)) == pytest.approx((0.0, 1.0), abs=1e-12)
        p = e.polar_coordinate_relative_to_center(45.0)
        assert p.x == pytest.approx(p.y)
        assert p.x * p.x / 4.0 + p.y * p.y == pytest.approx(1.0)
        assert p.magnitude() == pytest.approx(2.0 / sqrt(2.5))

    def test_full(self):
        e = Ellipse(major_axis=4.0, minor_axis=2.0)
        pts = e.polygonal_vertexes(4)
        assert len(pts) == 4
        expected = [(2.0, 0.0), (0.0, 1.0), (-2.0, 0.0), (0.0, -1.0)]
        for p, q in zip(pts, expected):
            assert tuple(p) == pytest.approx(q, abs=1e-12)

    def test_full_rotated(self):
        e = Ellipse(major_axis=4.0, minor_axis=2.0, rotation=90.0)
        pts = e.polygonal_vertexes(4)
        assert tuple(pts[0]) == pytest.approx((0.0, 2.0), abs=1e-12)
        assert tuple(pts[1]) == pytest.approx((-1.0, 0.0), abs=1e-12)

    def test_arc(self):
        e = Ellipse(major_axis=4.0, minor_axis=2.0, start_angle=0.0, end_angle=90.0)
        pts = e.polygonal_vertexes(3)
        assert len(pts) == 3
        assert tuple(pts[0]) == pytest.approx((2.0, 0.0))
        assert tuple(pts[1]) == pytest.approx((sqrt(2.0), sqrt(2.0) / 2.0))
        assert tuple(pts[2]) == pytest.approx((0.0, 1.0), abs=1e-12)

    def test_arc_through_zero(self):
        e = Ellipse(major_axis=4.0, minor_axis=2.0, start_angle=270.0, end_angle=90.0)
        pts = e.polygonal_vertexes(3)
        assert tuple(pts[0]) == pytest.approx((0.0, -1.0), abs=1e-12)
        assert tuple(pts[1]) == pytest.approx((2.0, 0.0), abs=1e-12)
        assert tuple(pts[2]) == pytest.approx((0.0, 1.0), abs=1e-12)

    def test_arc_end_points_are_polar(self):
        e = Ellipse(major_axis=6.0, minor_axis=2.0, rotation=20.0,
                    start_angle=45.0, end_angle=200.0)
        pts = e.polygonal_vertexes(9)
        assert len(pts) == 9
        assert pts[0].angle() == pytest.approx(radians(65.0))
        assert pts[-1].angle() == pytest.approx(radians(220.0))

    def test_points_on_ellipse(self):
        e = Ellipse(center=(1.0, -2.0, 0.5), major_axis=6.0, minor_axis=2.0, rotation=35.0,
                    start_angle=300.0, end_angle=120.0, normal=(0.3, 0.2, 1.0))
        for p in world_points(e, 16):
            assert implicit_value(e, p) == pytest.approx(1.0)

    def test_bad_precision(self):
        with pytest.raises(InvalidArgument):
            Ellipse().polygonal_vertexes(1)
        with pytest.raises(InvalidArgument):
            Ellipse(start_angle=0.0, end_angle=90.0).polygonal_vertexes(1)
        with pytest.raises(InvalidArgument):
            Ellipse().polygonal_vertexes(8.0)
        assert len(Ellipse(start_angle=0.0, end_angle=90.0).polygonal_vertexes(2)) == 2

    def test_full_precision_two(self):
        pts = Ellipse(major_axis=4.0, minor_axis=2.0).polygonal_vertexes(2)
        assert len(pts) == 2
        assert tuple(pts[0]) == pytest.approx((2.0, 0.0))
        assert tuple(pts[1]) == pytest.approx((-2.0, 0.0), abs=1e-12)

    def test_tessellate(self):
        e = Ellipse(center=(1.0, 2.0, 3.0), major_axis=4.0, minor_axis=2.0)
        pts = e.tessellate(Tessellation(precision=4))
        assert tuple(pts[0]) == pytest.approx((3.0, 2.0, 3.0))
        assert all(p.z == pytest.approx(3.0) for p in pts)

    def test_to_polyline(self):
        full = Ellipse(major_axis=4.0, minor_axis=2.0).to_polyline(12)
        assert isinstance(full, Polyline)
        assert full.is_closed
        assert len(full) == 12
        part = Ellipse(major_axis=4.0, minor_axis=2.0, end_angle=90.0).to_polyline(12)
        assert not part.is_closed
        assert len(part) == 12


class TestEllipseTransform:
    """affine transforms of ellipses"""

    def test_identity(self):
        e = Ellipse(center=(1.0, 2.0, 0.0), major_axis=4.0, minor_axis=2.0, rotation=30.0,
                    start_angle=10.0, end_angle=100.0)
        assert e.transform_by(Matrix3.identity())
        assert tuple(e.center) == pytest.approx((1.0, 2.0, 0.0))
        assert e.major_axis == pytest.approx(4.0)
        assert e.minor_axis == pytest.approx(2.0)
        assert e.rotation == pytest.approx(30.0)
        assert e.start_angle == pytest.approx(10.0)
        assert e.end_angle == pytest.approx(100.0)

    @pytest.mark.parametrize('size', [1e-3, 1e-4])
    def test_identity_small(self, size):
        e = Ellipse(center=(size, 0.0, 0.0), major_axis=2.0 * size, minor_axis=size,
                    rotation=30.0, start_angle=10.0, end_angle=100.0)
        assert e.transform_by(Matrix3.identity())
        assert tuple(e.center) == pytest.approx((size, 0.0, 0.0), abs=1e-9 * size)
        assert e.major_axis == pytest.approx(2.0 * size)
        assert e.minor_axis == pytest.approx(size)
        assert e.rotation == pytest.approx(30.0)
        assert e.start_angle == pytest.approx(10.0)
        assert e.end_angle == pytest.approx(100.0)

    def test_uniform_scale_small(self):
        e = Ellipse(major_axis=2e-4, minor_axis=1e-4, rotation=45.0)
        assert e.transform_by(Scale(0.5, 0.5, 1.0))
        assert e.major_axis == pytest.approx(1e-4)
        assert e.minor_axis == pytest.approx(5e-5)
        assert e.rotation == pytest.approx(45.0)

    def test_translation(self):
        e = Ellipse(center=(1.0, 2.0, 0.0), major_axis=4.0, minor_axis=2.0)
        assert e.transform_by(Matrix3.identity(), (1.0, 1.0, 1.0))
        assert tuple(e.center) == pytest.approx((2.0, 3.0, 1.0))
        assert e.major_axis == pytest.approx(4.0)
        assert e.is_full_ellipse()

    def test_uniform_scale(self):
        e = Ellipse(center=(1.0, -1.0, 0.0), major_axis=4.0, minor_axis=2.0, rotation=15.0)
        assert e.transform_by(Scale(2.0, 2.0, 1.0))
        assert tuple(e.center) == pytest.approx((2.0, -2.0, 0.0))
        assert e.major_axis == pytest.approx(8.0)
        assert e.minor_axis == pytest.approx(4.0)
        assert e.rotation == pytest.approx(15.0)

    def test_rotation_about_normal(self):
        e = Ellipse(major_axis=4.0, minor_axis=2.0, start_angle=10.0, end_angle=100.0)
        assert e.transform_by(Rotation([0, 0, 1], 90))
        assert e.rotation == pytest.approx(90.0)
        assert e.start_angle == pytest.approx(10.0)
        assert e.end_angle == pytest.approx(100.0)

    def test_rotation_out_of_plane(self):
        e = Ellipse(major_axis=4.0, minor_axis=2.0)
        assert e.transform_by(Rotation([1, 0, 0], 90))
        assert tuple(e.normal) == pytest.approx((0.0, -1.0, 0.0), abs=1e-12)
        assert e.major_axis == pytest.approx(4.0)
        assert e.minor_axis == pytest.approx(2.0)

    def test_non_uniform_scale(self):
        e = Ellipse(major_axis=4.0, minor_axis=2.0)
        assert e.transform_by(Scale(1.0, 3.0, 1.0))
        assert e.major_axis == pytest.approx(6.0)
        assert e.minor_axis == pytest.approx(4.0)
        assert same_direction_mod_180(e.rotation, 90.0)

    def test_axes_ordered(self):
        e = Ellipse(major_axis=4.0, minor_axis=2.0, rotation=25.0)
        assert e.transform_by(Scale(0.2, 5.0, 1.0))
        assert e.major_axis >= e.minor_axis

    @pytest.mark.parametrize('matrix, normal', [
        (Matrix3([[1.0, 0.5, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]), (0.0, 0.0, 1.0)),
        (Scale(3.0, 0.5, 2.0), (0.0, 0.0, 1.0)),
        (Rotation([1, 2, 3], 40).mul(Scale(1.5)), (0.2, -0.4, 1.0)),
        (Rotation([0, 1, 0], 120), (1.0, 1.0, 0.0)),
    ])
    def test_image_lies_on_mapped_curve(self, matrix, normal):
        translation = Vector3(0.5, -1.0, 2.0)
        e = Ellipse(center=(1.0, 2.0, -1.0), major_axis=5.0, minor_axis=2.0, rotation=35.0,
                    normal=normal)
        f = e.transformed(matrix, translation)
        inverse = matrix.inverse()
        for p in world_points(f, 24):
            assert implicit_value(e, inverse * (p - translation)) == pytest.approx(1.0, abs=1e-6)

    @pytest.mark.parametrize('matrix, normal', [
        (Matrix3([[1.0, 0.5, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]), (0.0, 0.0, 1.0)),
        (Rotation([1, 2, 3], 40).mul(Scale(1.5)), (0.2, -0.4, 1.0)),
    ])
    def test_arc_end_points_map(self, matrix, normal):
        translation = Vector3(0.5, -1.0, 2.0)
        e = Ellipse(center=(1.0, 2.0, -1.0), major_axis=5.0, minor_axis=2.0, rotation=35.0,
                    start_angle=20.0, end_angle=250.0, normal=normal)
        before = world_points(e, 8)
        after = world_points(e.transformed(matrix, translation), 8)
        assert tuple(after[0]) == pytest.approx(tuple(matrix * before[0] + translation), abs=1e-6)
        assert tuple(after[-1]) == pytest.approx(tuple(matrix * before[-1] + translation), abs=1e-6)

    def test_mirror_adds_half_turn(self):
        ## a reflection reverses the winding; the measured boundary
        ## angles are turned by 180 degrees
        e = Ellipse(major_axis=4.0, minor_axis=2.0, start_angle=10.0, end_angle=100.0)
        assert e.transform_by(Mirror('yz'))
        assert tuple(e.normal) == pytest.approx((0.0, 0.0, 1.0))
        assert e.rotation == pytest.approx(180.0)
        assert e.start_angle == pytest.approx(170.0)
        assert e.end_angle == pytest.approx(80.0)

    def test_full_ellipse_stays_full(self):
        e = Ellipse(major_axis=4.0, minor_axis=2.0, rotation=10.0)
        assert e.transform_by(Matrix3([[1.0, 0.3, 0.0], [0.0, 2.0, 0.0], [0.0, 0.0, 1.0]]))
        assert e.is_full_ellipse()

    def test_collapse_rejected(self, caplog):
        e = Ellipse(center=(1.0, 1.0, 0.0), major_axis=4.0, minor_axis=2.0,
                    start_angle=10.0, end_angle=100.0)
        before = e.copy()
        with pytest.raises(TransformNotApplicable) as info:
            e.transformed(Scale(1.0, 0.0, 1.0))
        assert isinstance(info.value.__cause__, DegenerateNumeric)
        with caplog.at_level(logging.WARNING, logger='dxfgeom'):
            assert not e.transform_by(Scale(1.0, 0.0, 1.0))
        assert e == before
        assert 'ellipse transform rejected' in caplog.text

    def test_axis_floored(self, monkeypatch):
        def collapsed_fit(*points, **kwargs):
            return EllipseFit(Vector2(0.0, 0.0), 2.0, 0.0, 0.0)

        monkeypatch.setattr(ellipse_module, 'fit_ellipse', collapsed_fit)
        e = Ellipse(major_axis=4.0, minor_axis=2.0)
        with pytest.warns(AxisFlooredWarning):
            assert e.transform_by(Matrix3.identity())
        assert e.major_axis == pytest.approx(4.0)
        assert e.minor_axis == epsilon
