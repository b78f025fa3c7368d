## bulge polyline entity for dxfgeom

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

"""polylines with bulge-encoded arc segments

=====================
polyline vertexes
=====================

A ``PolylineVertex`` holds a location in the polyline OCS (only x and
y are significant; the polyline ``elevation`` supplies z), a bulge, and
the begin and end widths of the segment that starts at the vertex.

The bulge describes the segment from this vertex to the next one:

- ``bulge == 0`` is a straight segment,
- ``abs(bulge) == tan(theta/4)`` where theta is the included angle of
  the arc, so a bulge of 1 is a semicircle,
- positive bulges turn counterclockwise, negative clockwise.

=====================
flattening
=====================

``Polyline.polygonal_vertexes()`` replaces every bulged segment by
``bulge_precision`` points on its arc.  For a chord ``p1 -> p2`` of
length ``c``::

   s     = (c/2)*|bulge|                 (sagitta)
   r     = ((c/2)^2 + s^2) / (2*s)       (radius)
   theta = 4*atan(|bulge|)               (included angle)
   gamma = (pi - theta)/2
   phi   = angle(p2 - p1) +/- gamma      (+ for positive bulge)
   center = p1 + r*(cos(phi), sin(phi))

and the points are ``p1 - center`` rotated about the center in steps
of ``4*atan(bulge)/(bulge_precision + 1)``.

Segments shorter than ``weld_threshold`` are dropped, chords shorter
than ``bulge_threshold`` are drawn straight, and generated points that
weld to the previously emitted point or to the segment end are
skipped.  None of these are errors.
"""

import logging
from copy import deepcopy
from math import atan, cos, pi, sin

from dxfgeom.entity import (mapped_plane_normal, planar_scale,
                            validated_normal)
from dxfgeom.errors import (DegenerateNumeric, InvalidArgument,
                            TransformNotApplicable)
from dxfgeom.geom import Vector2, Vector3, isgoodnum, vect3
from dxfgeom.ocs import CoordinateSystem, arbitrary_axis, transform
from dxfgeom.settings import (Tessellation, conformal_threshold,
                              default_bulge_precision,
                              default_bulge_threshold,
                              default_weld_threshold)

logger = logging.getLogger(__name__)


class PolylineVertex:
    """vertex of a ``Polyline``"""

    def __init__(self, location=(0.0, 0.0, 0.0), bulge=0.0,
                 begin_width=0.0, end_width=0.0):
        self.location = location
        self.bulge = bulge
        self.begin_width = begin_width
        self.end_width = end_width

    def __repr__(self):
        return (f"PolylineVertex({tuple(self._location)}, bulge={self._bulge}, "
                f"begin_width={self._begin_width}, end_width={self._end_width})")

    def __eq__(self, other):
        if not isinstance(other, PolylineVertex):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None

    @property
    def location(self):
        return self._location

    @location.setter
    def location(self, value):
        self._location = vect3(value)

    @property
    def bulge(self):
        return self._bulge

    @bulge.setter
    def bulge(self, value):
        if not isgoodnum(value):
            raise InvalidArgument(f'bulge must be a number, got {value!r}')
        self._bulge = float(value)

    @property
    def begin_width(self):
        return self._begin_width

    @begin_width.setter
    def begin_width(self, value):
        self._begin_width = _width(value)

    @property
    def end_width(self):
        return self._end_width

    @end_width.setter
    def end_width(self, value):
        self._end_width = _width(value)


def _width(value):
    if not isgoodnum(value) or value < 0:
        raise InvalidArgument(f'width must be a non-negative number, got {value!r}')
    return float(value)


class Polyline:
    """ordered list of ``PolylineVertex`` in the plane of ``normal``"""

    def __init__(self, vertexes=None, is_closed=False, elevation=0.0,
                 thickness=0.0, normal=(0.0, 0.0, 1.0)):
        self.vertexes = [] if vertexes is None else vertexes
        self.is_closed = is_closed
        self.elevation = elevation
        self.thickness = thickness
        self.normal = normal

    def __repr__(self):
        return (f"Polyline({len(self._vertexes)} vertexes, is_closed={self._is_closed}, "
                f"elevation={self._elevation}, normal={tuple(self._normal)})")

    def __eq__(self, other):
        if not isinstance(other, Polyline):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None

    def __len__(self):
        return len(self._vertexes)

    def copy(self):
        return deepcopy(self)

    @property
    def vertexes(self):
        return self._vertexes

    @vertexes.setter
    def vertexes(self, value):
        if value is None:
            raise InvalidArgument('vertexes can not be None')
        vertexes = list(value)
        for v in vertexes:
            if not isinstance(v, PolylineVertex):
                raise InvalidArgument(f'bad polyline vertex: {v!r}')
        self._vertexes = vertexes

    @property
    def is_closed(self):
        return self._is_closed

    @is_closed.setter
    def is_closed(self, value):
        self._is_closed = bool(value)

    @property
    def elevation(self):
        return self._elevation

    @elevation.setter
    def elevation(self, value):
        self._elevation = float(value)

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

    def set_constant_width(self, width):
        """give every segment the same begin and end width"""
        width = _width(width)
        for v in self._vertexes:
            v.begin_width = width
            v.end_width = width

    def reverse(self):
        """Reverse the drawing order in place without changing the
        drawn geometry: bulges move to the new segment start vertex and
        change sign, and begin/end widths swap."""
        n = len(self._vertexes)
        if n < 2:
            return
        old = self._vertexes
        segments = [(v.bulge, v.begin_width, v.end_width) for v in old]
        new = []
        for j in range(n):
            bulge, begin, end = segments[(n - 2 - j) % n]
            new.append(PolylineVertex(old[n - 1 - j].location, -bulge, end, begin))
        self._vertexes = new

    def polygonal_vertexes(self, bulge_precision=default_bulge_precision,
                           weld_threshold=default_weld_threshold,
                           bulge_threshold=default_bulge_threshold):
        """Flatten the polyline into a list of OCS points.

        ``bulge_precision`` points are inserted along every bulged
        segment; 0 draws every segment straight.  The returned points
        are ``Vector3`` with the polyline elevation as z.  The closing
        segment is flattened only when the polyline is closed.
        """
        if isinstance(bulge_precision, bool) or not isinstance(bulge_precision, int) \
           or bulge_precision < 0:
            raise InvalidArgument(f'bulge precision must be an integer >= 0, got {bulge_precision!r}')

        points = []
        n = len(self._vertexes)
        for index, vertex in enumerate(self._vertexes):
            p1 = vertex.location.xy
            if index == n - 1 and not self._is_closed:
                points.append(p1)
                break
            p2 = self._vertexes[(index + 1) % n].location.xy

            if p1.is_close(p2, weld_threshold):
                logger.debug('skipping zero-length polyline segment at vertex %d', index)
                continue

            bulge = vertex.bulge
            points.append(p1)
            if bulge == 0 or bulge_precision == 0:
                continue

            c = p1.distance(p2)
            if c < bulge_threshold:
                continue

            points.extend(_bulge_points(p1, p2, bulge, c, bulge_precision,
                                        weld_threshold))

        z = self._elevation
        return [Vector3(p.x, p.y, z) for p in points]

    def tessellate(self, settings=None):
        """``polygonal_vertexes()`` driven by a ``Tessellation`` instance"""
        if settings is None:
            settings = Tessellation()
        return self.polygonal_vertexes(settings.precision,
                                       settings.weld_threshold,
                                       settings.bulge_threshold)

    def world_vertexes(self, bulge_precision=default_bulge_precision,
                       weld_threshold=default_weld_threshold,
                       bulge_threshold=default_bulge_threshold):
        """``polygonal_vertexes()`` mapped to world coordinates"""
        m = arbitrary_axis(self._normal)
        return [m * p for p in self.polygonal_vertexes(bulge_precision,
                                                       weld_threshold,
                                                       bulge_threshold)]

    def _transformed_state(self, matrix, translation):
        scale = planar_scale(matrix, self._normal, conformal_threshold)
        if scale is None and any(v.bulge != 0 for v in self._vertexes):
            raise TransformNotApplicable('bulged segments do not survive non-uniform scaling')
        new_normal = mapped_plane_normal(matrix, self._normal)
        t = vect3(translation)

        ocs = [Vector3(v.location.x, v.location.y, self._elevation)
               for v in self._vertexes]
        wcs = transform(ocs, self._normal,
                        CoordinateSystem.OBJECT, CoordinateSystem.WORLD)
        mapped = transform([matrix * p + t for p in wcs], new_normal,
                           CoordinateSystem.WORLD, CoordinateSystem.OBJECT)

        w = 1.0 if scale is None else scale
        vertexes = [PolylineVertex((p.x, p.y), v.bulge,
                                   v.begin_width * w, v.end_width * w)
                    for p, v in zip(mapped, self._vertexes)]
        elevation = mapped[0].z if mapped else self._elevation
        return {
            '_vertexes': vertexes,
            '_elevation': elevation,
            '_normal': new_normal,
        }

    def transformed(self, matrix, translation=(0.0, 0.0, 0.0)):
        """Return a new ``Polyline``, the image of this one under
        ``matrix`` followed by ``translation``."""
        try:
            state = self._transformed_state(matrix, translation)
        except TransformNotApplicable:
            raise
        except DegenerateNumeric as exc:
            raise TransformNotApplicable(str(exc)) from exc
        result = self.copy()
        vars(result).update(state)
        return result

    def transform_by(self, matrix, translation=(0.0, 0.0, 0.0)):
        """Apply ``matrix`` followed by ``translation`` in place.
        Returns False and leaves the polyline unchanged if the
        transform is not applicable."""
        try:
            result = self.transformed(matrix, translation)
        except TransformNotApplicable as exc:
            logger.warning('polyline transform rejected: %s', exc)
            return False
        vars(self).update(vars(result))
        return True


def _bulge_points(p1, p2, bulge, chord, precision, weld_threshold):
    """intermediate points of the bulged segment ``p1 -> p2``, without
    either end point"""
    s = 0.5 * chord * abs(bulge)
    r = ((0.5 * chord) ** 2 + s * s) / (2.0 * s)
    theta = 4.0 * atan(abs(bulge))
    gamma = 0.5 * (pi - theta)
    chord_angle = (p2 - p1).angle()
    if bulge > 0:
        phi = chord_angle + gamma
    else:
        phi = chord_angle - gamma

    center = Vector2(p1.x + r * cos(phi), p1.y + r * sin(phi))
    a1 = p1 - center
    step = 4.0 * atan(bulge) / (precision + 1)

    points = []
    previous = p1
    for i in range(1, precision + 1):
        curve_point = center + a1.rotate(i * step)
        if curve_point.is_close(previous, weld_threshold) or \
           curve_point.is_close(p2, weld_threshold):
            continue
        points.append(curve_point)
        previous = curve_point
    return points
