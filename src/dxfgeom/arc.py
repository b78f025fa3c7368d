## circular arc entity for dxfgeom

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

"""circular arc entity

An ``Arc`` is a center in world coordinates, a radius, start and end
angles in degrees measured counterclockwise from the OCS x axis, a
thickness, and the unit normal of its plane.  Equal start and end
angles describe a full circle.
"""

import logging
from copy import deepcopy
from math import cos, sin

from dxfgeom.entity import (mapped_plane_normal, planar_scale,
                            validated_normal, validated_positive)
from dxfgeom.errors import (DegenerateNumeric, InvalidArgument,
                            TransformNotApplicable)
from dxfgeom.geom import (Vector2, Vector3, degrees_to_radians,
                          normalize_angle, radians_to_degrees, vect3)
from dxfgeom.ocs import CoordinateSystem, transform
from dxfgeom.polyline import Polyline, PolylineVertex
from dxfgeom.settings import Tessellation, conformal_threshold

logger = logging.getLogger(__name__)


class Arc:
    """circular arc in the plane of ``normal``"""

    def __init__(self, center=(0.0, 0.0, 0.0), radius=1.0, start_angle=0.0,
                 end_angle=180.0, thickness=0.0, normal=(0.0, 0.0, 1.0)):
        self.center = center
        self.radius = radius
        self.start_angle = start_angle
        self.end_angle = end_angle
        self.thickness = thickness
        self.normal = normal

    def __repr__(self):
        return (f"Arc(center={tuple(self._center)}, radius={self._radius}, "
                f"start_angle={self._start_angle}, end_angle={self._end_angle}, "
                f"normal={tuple(self._normal)})")

    def __eq__(self, other):
        if not isinstance(other, Arc):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None

    def copy(self):
        return deepcopy(self)

    @property
    def center(self):
        """arc center in world coordinates"""
        return self._center

    @center.setter
    def center(self, value):
        self._center = vect3(value)

    @property
    def radius(self):
        return self._radius

    @radius.setter
    def radius(self, value):
        self._radius = validated_positive('radius', value)

    @property
    def start_angle(self):
        """start angle in degrees, in [0, 360)"""
        return self._start_angle

    @start_angle.setter
    def start_angle(self, value):
        self._start_angle = normalize_angle(float(value))

    @property
    def end_angle(self):
        """end angle in degrees, in [0, 360)"""
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

    def sweep(self):
        """counterclockwise angular extent in degrees, in (0, 360]"""
        end = self._end_angle
        if end <= self._start_angle:
            end += 360.0
        return end - self._start_angle

    def is_circle(self):
        return self._start_angle == self._end_angle

    def polygonal_vertexes(self, precision):
        """Sample the arc into ``precision`` equal angular steps.

        Returns ``precision + 1`` points, both end points included,
        relative to the arc center in the arc OCS.
        """
        if isinstance(precision, bool) or not isinstance(precision, int):
            raise InvalidArgument(f'arc precision must be an integer, got {precision!r}')
        if precision < 2:
            raise InvalidArgument(f'the arc precision must be greater or equal to two, got {precision}')

        start = degrees_to_radians(self._start_angle)
        delta = degrees_to_radians(self.sweep()) / precision
        r = self._radius
        return [Vector2(r * cos(start + delta * i), r * sin(start + delta * i))
                for i in range(precision + 1)]

    def ocs_center(self):
        """center in object coordinates; its z is the arc elevation"""
        return transform(self._center, self._normal,
                         CoordinateSystem.WORLD, CoordinateSystem.OBJECT)

    def tessellate(self, settings=None):
        """points sampled at ``settings.precision`` in the arc OCS, with
        the elevation as z"""
        if settings is None:
            settings = Tessellation()
        c = self.ocs_center()
        return [Vector3(v.x + c.x, v.y + c.y, c.z)
                for v in self.polygonal_vertexes(settings.precision)]

    def to_polyline(self, precision):
        """open straight-segment ``Polyline`` approximating the arc"""
        c = self.ocs_center()
        vertexes = [PolylineVertex((v.x + c.x, v.y + c.y))
                    for v in self.polygonal_vertexes(precision)]
        return Polyline(vertexes, is_closed=False, elevation=c.z,
                        thickness=self._thickness, normal=self._normal)

    def _transformed_state(self, matrix, translation):
        scale = planar_scale(matrix, self._normal, conformal_threshold)
        if scale is None:
            raise TransformNotApplicable('an arc does not survive non-uniform scaling of its plane')
        new_normal = mapped_plane_normal(matrix, self._normal)

        ## carry the boundary directions through the map and measure
        ## them again in the new OCS
        boundary = [Vector3(cos(a), sin(a), 0.0)
                    for a in (degrees_to_radians(self._start_angle),
                              degrees_to_radians(self._end_angle))]
        wcs = transform(boundary, self._normal,
                        CoordinateSystem.OBJECT, CoordinateSystem.WORLD)
        ocs = transform([matrix * p for p in wcs], new_normal,
                        CoordinateSystem.WORLD, CoordinateSystem.OBJECT)

        return {
            '_center': matrix * self._center + vect3(translation),
            '_radius': self._radius * scale,
            '_start_angle': normalize_angle(radians_to_degrees(ocs[0].xy.angle())),
            '_end_angle': normalize_angle(radians_to_degrees(ocs[1].xy.angle())),
            '_normal': new_normal,
        }

    def transformed(self, matrix, translation=(0.0, 0.0, 0.0)):
        """Return a new ``Arc``, the image of this one under ``matrix``
        followed by ``translation``.  Raises ``TransformNotApplicable``
        when the image is not a circular arc."""
        try:
            state = self._transformed_state(matrix, translation)
        except TransformNotApplicable:
            raise
        except DegenerateNumeric as exc:
            raise TransformNotApplicable(str(exc)) from exc
        result = self.copy()
        vars(result).update(state)
        if self.is_circle():
            result._end_angle = result._start_angle
        return result

    def transform_by(self, matrix, translation=(0.0, 0.0, 0.0)):
        """Apply ``matrix`` followed by ``translation`` in place.

        Returns False and leaves the arc unchanged if the transform is
        not applicable.
        """
        try:
            result = self.transformed(matrix, translation)
        except TransformNotApplicable as exc:
            logger.warning('arc transform rejected: %s', exc)
            return False
        vars(self).update(vars(result))
        return True
