## ellipse entity for dxfgeom

## Copyright (c) 2020 Richard W. DeVaul
## Copyright (c) 2020 dxfgeom contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""ellipse and elliptical arc entity

An ``Ellipse`` is a center in world coordinates, full major and minor
axis lengths, a rotation of the major axis in degrees measured from
the OCS x axis, start and end angles in degrees, a thickness and the
unit normal of its plane.

Start and end angles are *polar* angles measured from the major axis
about the center, not the parametric angle of the ellipse equation.
When they are equal (to within tolerance) the ellipse is full.

affine transforms
=================

The image of an ellipse under an affine map is an ellipse, but its
center, axes and rotation can not be mapped directly.
``transform_by()`` maps the rectangle circumscribing the ellipse
instead.  The image of the rectangle is a parallelogram circumscribing
the new ellipse, which touches it at the midpoints of its four sides.
A fifth point on the new ellipse is found by a parallel-line
construction inside the parallelogram, and the new parameters are
recovered by fitting a conic through the five points
(``dxfgeom.conic.fit_ellipse``).

All new values are computed before any field is written, so a
transform that fails part way leaves the ellipse exactly as it was.
"""

import logging
import warnings
from copy import deepcopy
from math import atan2, cos, pi, sin, sqrt

from dxfgeom.conic import fit_ellipse
from dxfgeom.entity import transformed_normal, validated_normal, validated_positive
from dxfgeom.errors import (AxisFlooredWarning, DegenerateNumeric,
                            InvalidArgument, TransformNotApplicable)
from dxfgeom.geom import (Vector2, Vector3, degrees_to_radians, find_intersection,
                          is_equal, is_zero, normalize_angle, radians_to_degrees,
                          vect3)
from dxfgeom.ocs import CoordinateSystem, is_orientation_reversing, transform, transform_2d
from dxfgeom.polyline import Polyline, PolylineVertex
from dxfgeom.settings import Tessellation, epsilon

logger = logging.getLogger(__name__)

## tolerance, in degrees, for start == end meaning a full ellipse
full_ellipse_threshold = 1e-9


class Ellipse:
    """ellipse or elliptical arc in the plane of ``normal``"""

    def __init__(self, center=(0.0, 0.0, 0.0), major_axis=1.0, minor_axis=0.5,
                 rotation=0.0, start_angle=0.0, end_angle=0.0, thickness=0.0,
                 normal=(0.0, 0.0, 1.0)):
        self.center = center
        self.major_axis = major_axis
        self.minor_axis = minor_axis
        self.rotation = rotation
        self.start_angle = start_angle
        self.end_angle = end_angle
        self.thickness = thickness
        self.normal = normal

    def __repr__(self):
        return (f"Ellipse(center={tuple(self._center)}, major_axis={self._major_axis}, "
                f"minor_axis={self._minor_axis}, rotation={self._rotation}, "
                f"start_angle={self._start_angle}, end_angle={self._end_angle}, "
                f"normal={tuple(self._normal)})")

    def __eq__(self, other):
        if not isinstance(other, Ellipse):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None

    def copy(self):
        return deepcopy(self)

    @property
    def center(self):
        """ellipse center in world coordinates"""
        return self._center

    @center.setter
    def center(self, value):
        self._center = vect3(value)

    @property
    def major_axis(self):
        """full length of the major axis"""
        return self._major_axis

    @major_axis.setter
    def major_axis(self, value):
        self._major_axis = validated_positive('major axis', value)

    @property
    def minor_axis(self):
        """full length of the minor axis"""
        return self._minor_axis

    @minor_axis.setter
    def minor_axis(self, value):
        self._minor_axis = validated_positive('minor axis', value)

    @property
    def rotation(self):
        """major axis rotation in degrees about the normal, in [0, 360)"""
        return self._rotation

    @rotation.setter
    def rotation(self, value):
        self._rotation = normalize_angle(float(value))

    @property
    def start_angle(self):
        return self._start_angle

    @start_angle.setter
    def start_angle(self, value):
        self._start_angle = normalize_angle(float(value))

    @property
    def end_angle(self):
        return self._end_angle

    @end_angle.setter
    def end_angle(self, value):
        self._end_angle = normalize_angle(float(value))

    @property
    def thickness(self):
        return self._thickness

    @thickness.setter
    def thickness(self, value):
        self._thickness = float(value)

    @property
    def normal(self):
        return self._normal

    @normal.setter
    def normal(self, value):
        self._normal = validated_normal(value)

    def is_full_ellipse(self):
        return is_equal(self._start_angle, self._end_angle, full_ellipse_threshold)

    def polar_coordinate_relative_to_center(self, angle):
        """point of the (unrotated) ellipse on the ray at ``angle``
        degrees from the major axis, relative to the center"""
        return _polar_point(0.5 * self._major_axis, 0.5 * self._minor_axis, angle)

    def polygonal_vertexes(self, precision):
        """Sample the ellipse into ``precision`` points relative to the
        center, in the ellipse OCS.

        A full ellipse is sampled evenly in parametric angle over
        [0, 2*pi), without repeating the first point.  An elliptical
        arc is sampled from its start point to its end point, both
        included.
        """
        if isinstance(precision, bool) or not isinstance(precision, int):
            raise InvalidArgument(f'ellipse precision must be an integer, got {precision!r}')
        if precision < 2:
            raise InvalidArgument(f'ellipse precision must be at least two, got {precision}')

        a = 0.5 * self._major_axis
        b = 0.5 * self._minor_axis
        beta = degrees_to_radians(self._rotation)

        if self.is_full_ellipse():
            start = 0.0
            end = 2.0 * pi
            steps = precision
        else:
            start_point = _polar_point(a, b, self._start_angle)
            end_point = _polar_point(a, b, self._end_angle)
            ## polar angle to the parametric angle of the same point
            start = atan2(start_point.y / b, start_point.x / a)
            end = atan2(end_point.y / b, end_point.x / a)
            if end < start:
                end += 2.0 * pi
            steps = precision - 1

        delta = (end - start) / steps
        return [Vector2(a * cos(start + delta * i), b * sin(start + delta * i)).rotate(beta)
                for i in range(precision)]

    def ocs_center(self):
        """center in object coordinates; its z is the ellipse elevation"""
        return transform(self._center, self._normal,
                         CoordinateSystem.WORLD, CoordinateSystem.OBJECT)

    def tessellate(self, settings=None):
        """points sampled at ``settings.precision`` in the ellipse OCS, with
        the elevation as z"""
        if settings is None:
            settings = Tessellation()
        c = self.ocs_center()
        return [Vector3(v.x + c.x, v.y + c.y, c.z)
                for v in self.polygonal_vertexes(settings.precision)]

    def to_polyline(self, precision):
        """straight-segment ``Polyline`` approximating the ellipse,
        closed when the ellipse is full"""
        c = self.ocs_center()
        vertexes = [PolylineVertex((v.x + c.x, v.y + c.y))
                    for v in self.polygonal_vertexes(precision)]
        return Polyline(vertexes, is_closed=self.is_full_ellipse(), elevation=c.z,
                        thickness=self._thickness, normal=self._normal)

    def _transformed_state(self, matrix, translation):
        """compute the new field values; raises ``DegenerateNumeric``
        without touching the ellipse"""
        t = vect3(translation)
        old_normal = self._normal
        old_rotation = degrees_to_radians(self._rotation)
        semi_major = 0.5 * self._major_axis
        semi_minor = 0.5 * self._minor_axis

        ## rectangle that circumscribes the ellipse
        corners = transform_2d([Vector2(-semi_major, semi_minor),
                                Vector2(semi_major, semi_minor),
                                Vector2(-semi_major, -semi_minor),
                                Vector2(semi_major, -semi_minor)],
                               old_rotation,
                               CoordinateSystem.OBJECT, CoordinateSystem.WORLD)
        wcs = transform([p.to_3d() for p in corners], old_normal,
                        CoordinateSystem.OBJECT, CoordinateSystem.WORLD)
        wcs = [matrix * (p + self._center) + t for p in wcs]

        new_normal = transformed_normal(matrix, old_normal)
        rect = [p.xy for p in transform(wcs, new_normal,
                                        CoordinateSystem.WORLD, CoordinateSystem.OBJECT)]
        point_a, point_b, point_c, point_d = rect

        ## the new ellipse touches the parallelogram at its side midpoints
        point_m = point_a.midpoint(point_b)
        point_n = point_c.midpoint(point_d)
        point_h = point_a.midpoint(point_c)
        point_k = point_b.midpoint(point_d)

        ## fifth point: X lies on the segment from H to the center, Y
        ## is where the parallel to BC through X meets AC, and Z is
        ## where MX meets NY
        origin = point_h.midpoint(point_k)
        point_x = point_h.midpoint(origin)
        point_y = find_intersection(point_a, point_c - point_a, point_x, point_c - point_b)
        point_z = find_intersection(point_m, point_x - point_m, point_n, point_y - point_n)

        fit = fit_ellipse(point_m, point_n, point_h, point_k, point_z)

        major = 2.0 * fit.semi_major
        minor = 2.0 * fit.semi_minor
        if is_zero(major):
            warnings.warn('transformed ellipse major axis collapsed, floored to epsilon',
                          AxisFlooredWarning, stacklevel=4)
            major = epsilon
        if is_zero(minor):
            warnings.warn('transformed ellipse minor axis collapsed, floored to epsilon',
                          AxisFlooredWarning, stacklevel=4)
            minor = epsilon

        ## the fit only knows the major axis direction modulo pi; pick
        ## the one closest to the mapped old major axis
        old_axis = transform([Vector3(cos(old_rotation), sin(old_rotation), 0.0)],
                             old_normal, CoordinateSystem.OBJECT, CoordinateSystem.WORLD)
        mapped_axis = transform([matrix * p for p in old_axis], new_normal,
                                CoordinateSystem.WORLD, CoordinateSystem.OBJECT)[0].xy
        rotation = fit.rotation
        if Vector2.from_polar(1.0, rotation).dot(mapped_axis) < 0.0:
            rotation += pi
        rotation = normalize_angle(radians_to_degrees(rotation))

        state = {
            '_center': matrix * self._center + t,
            '_major_axis': major,
            '_minor_axis': minor,
            '_rotation': rotation,
            '_normal': new_normal,
        }
        if self.is_full_ellipse():
            return state

        ## carry the old boundary points through the map and measure
        ## their polar angles from the new major axis
        boundary = [_polar_point(semi_major, semi_minor, angle).rotate(old_rotation).to_3d()
                    for angle in (self._start_angle, self._end_angle)]
        wcs = transform(boundary, old_normal,
                        CoordinateSystem.OBJECT, CoordinateSystem.WORLD)
        ocs = transform([matrix * p for p in wcs], new_normal,
                        CoordinateSystem.WORLD, CoordinateSystem.OBJECT)

        invert = 180.0 if is_orientation_reversing(matrix) else 0.0
        state['_start_angle'] = normalize_angle(
            invert + radians_to_degrees(ocs[0].xy.angle()) - rotation)
        state['_end_angle'] = normalize_angle(
            invert + radians_to_degrees(ocs[1].xy.angle()) - rotation)
        return state

    def transformed(self, matrix, translation=(0.0, 0.0, 0.0)):
        """Return a new ``Ellipse``, the image of this one under
        ``matrix`` followed by ``translation``.

        Raises ``TransformNotApplicable``, chained to the underlying
        numeric failure, when the construction breaks down.
        """
        try:
            state = self._transformed_state(matrix, translation)
        except DegenerateNumeric as exc:
            raise TransformNotApplicable(f'the transformation cannot be applied: {exc}') from exc
        result = self.copy()
        vars(result).update(state)
        return result

    def transform_by(self, matrix, translation=(0.0, 0.0, 0.0)):
        """Apply ``matrix`` followed by ``translation`` in place.

        Returns False and leaves the ellipse unchanged if the transform
        is not applicable.
        """
        try:
            result = self.transformed(matrix, translation)
        except TransformNotApplicable as exc:
            logger.warning('ellipse transform rejected: %s', exc)
            return False
        vars(self).update(vars(result))
        return True


def _polar_point(a, b, angle):
    """point on the axis-aligned ellipse with semi-axes ``a``, ``b`` at
    polar angle ``angle`` degrees"""
    radians = degrees_to_radians(angle)
    a1 = a * sin(radians)
    b1 = b * cos(radians)
    radius = (a * b) / sqrt(b1 * b1 + a1 * a1)
    return Vector2.from_polar(radius, radians)
