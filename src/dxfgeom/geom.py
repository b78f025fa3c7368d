## foundational vector math for dxfgeom

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

"""foundational vector and scalar operations for **dxfgeom**

scalars
=======

Scalar numbers are ordinary Python3 ``int`` or ``float`` numbers.
Zero and equality tests are absolute, against
``dxfgeom.settings.epsilon`` unless the caller passes a ``threshold``.

Angles crossing the public interface are in degrees;
``normalize_angle()`` folds them into the half-open interval [0, 360).
Internal trigonometry is done in radians.

vectors
=======

``Vector2`` and ``Vector3`` are immutable named tuples, so they can be
unpacked, indexed and hashed like any tuple: ::

   p = Vector3(1.0, 2.0, 3.0)
   x, y, z = p
   q = p + Vector3.unit_z() * 2.0

Arithmetic operators are element-wise for vector-vector operations and
scale for vector-scalar operations.  Note that this replaces tuple
concatenation and repetition.

``normalize()`` raises ``DegenerateVector`` when the magnitude is
within epsilon of zero, since such a vector has no direction.

lines
=====

``find_intersection()`` intersects two parametric 2D lines
``p + t*d``.  It is evaluated with ``mpmath`` extended precision, the
way the rest of the kernel's intersection math is, and raises
``ParallelLines`` when the directions are parallel.
"""

from math import acos, atan2, cos, pi, sin, sqrt
from typing import NamedTuple

import mpmath as mpm

from dxfgeom.errors import DegenerateVector, ParallelLines
from dxfgeom.settings import epsilon

pi2 = 2.0 * pi

## operations on scalars
## -----------------------

## booleans are ints for python arithmetic, but never count as
## numbers for our purposes
def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float))


def is_zero(x, threshold=epsilon):
    """ is scalar ``x`` zero to within ``threshold``"""
    return -threshold <= x <= threshold


def is_equal(a, b, threshold=epsilon):
    """ are two scalars the same to within ``threshold``"""
    return is_zero(a - b, threshold)


def normalize_angle(angle):
    """fold an angle in degrees into the interval [0, 360)"""
    normalized = angle % 360.0
    # -1e-17 % 360.0 == 360.0 in floating point
    if normalized >= 360.0:
        normalized = 0.0
    return normalized


def degrees_to_radians(angle):
    return angle * pi / 180.0


def radians_to_degrees(angle):
    return angle * 180.0 / pi


## operations on vectors
## ------------------------

class Vector2(NamedTuple):
    """Immutable 2D vector ``(x, y)``."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0)

    @classmethod
    def unit_x(cls):
        return cls(1.0, 0.0)

    @classmethod
    def unit_y(cls):
        return cls(0.0, 1.0)

    @classmethod
    def from_polar(cls, radius, angle):
        """point at ``radius`` from the origin along ``angle`` radians"""
        return cls(radius * cos(angle), radius * sin(angle))

    def __add__(self, other):
        return Vector2(self.x + other[0], self.y + other[1])

    def __sub__(self, other):
        return Vector2(self.x - other[0], self.y - other[1])

    def __neg__(self):
        return Vector2(-self.x, -self.y)

    def __mul__(self, c):
        return Vector2(self.x * c, self.y * c)

    __rmul__ = __mul__

    def __truediv__(self, c):
        return Vector2(self.x / c, self.y / c)

    def dot(self, other):
        return self.x * other[0] + self.y * other[1]

    def cross(self, other):
        """z component of the 3D cross product of the two vectors"""
        return self.x * other[1] - self.y * other[0]

    def magnitude(self):
        return sqrt(self.x * self.x + self.y * self.y)

    def distance(self, other):
        return (self - other).magnitude()

    def is_zero(self, threshold=epsilon):
        return is_zero(self.x, threshold) and is_zero(self.y, threshold)

    def is_close(self, other, threshold=epsilon):
        """are the two points no further than ``threshold`` apart"""
        return self.distance(other) <= threshold

    def normalize(self, threshold=epsilon):
        m = self.magnitude()
        if is_zero(m, threshold):
            raise DegenerateVector(f'cannot normalize zero-length vector {tuple(self)}')
        return Vector2(self.x / m, self.y / m)

    def angle(self):
        """polar angle of the vector in radians, in [0, 2*pi)"""
        a = atan2(self.y, self.x)
        if a < 0.0:
            a += pi2
            if a >= pi2:
                a = 0.0
        return a

    def angle_between(self, other):
        """unsigned angle in radians between two vectors, in [0, pi]"""
        return _angle_between(self, other, self.magnitude(), _mag(other))

    def rotate(self, angle):
        """rotate counterclockwise about the origin by ``angle`` radians"""
        c = cos(angle)
        s = sin(angle)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def midpoint(self, other):
        return Vector2((self.x + other[0]) * 0.5, (self.y + other[1]) * 0.5)

    def to_3d(self, z=0.0):
        return Vector3(self.x, self.y, z)


class Vector3(NamedTuple):
    """Immutable 3D vector ``(x, y, z)``."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def unit_x(cls):
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def unit_y(cls):
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def unit_z(cls):
        return cls(0.0, 0.0, 1.0)

    def __add__(self, other):
        return Vector3(self.x + other[0], self.y + other[1], self.z + other[2])

    def __sub__(self, other):
        return Vector3(self.x - other[0], self.y - other[1], self.z - other[2])

    def __neg__(self):
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, c):
        return Vector3(self.x * c, self.y * c, self.z * c)

    __rmul__ = __mul__

    def __truediv__(self, c):
        return Vector3(self.x / c, self.y / c, self.z / c)

    def dot(self, other):
        return self.x * other[0] + self.y * other[1] + self.z * other[2]

    def cross(self, other):
        return Vector3(self.y * other[2] - self.z * other[1],
                       self.z * other[0] - self.x * other[2],
                       self.x * other[1] - self.y * other[0])

    def magnitude(self):
        return sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance(self, other):
        return (self - other).magnitude()

    def is_zero(self, threshold=epsilon):
        return (is_zero(self.x, threshold) and is_zero(self.y, threshold)
                and is_zero(self.z, threshold))

    def is_close(self, other, threshold=epsilon):
        return self.distance(other) <= threshold

    def normalize(self, threshold=epsilon):
        m = self.magnitude()
        if is_zero(m, threshold):
            raise DegenerateVector(f'cannot normalize zero-length vector {tuple(self)}')
        return Vector3(self.x / m, self.y / m, self.z / m)

    def angle_between(self, other):
        """unsigned angle in radians between two vectors, in [0, pi]"""
        return _angle_between(self, other, self.magnitude(), _mag(other))

    def midpoint(self, other):
        return Vector3((self.x + other[0]) * 0.5,
                       (self.y + other[1]) * 0.5,
                       (self.z + other[2]) * 0.5)

    @property
    def xy(self):
        return Vector2(self.x, self.y)


def _mag(v):
    return sqrt(sum(c * c for c in v))


def _angle_between(a, b, ma, mb):
    if is_zero(ma) or is_zero(mb):
        raise DegenerateVector('angle between vectors is undefined for a zero-length vector')
    c = sum(p * q for p, q in zip(a, b)) / (ma * mb)
    # round-off can push |c| a hair past one
    c = max(-1.0, min(1.0, c))
    return acos(c)


def vect2(v):
    """Convenience function for making a ``Vector2`` out of any 2+ sequence"""
    if isinstance(v, Vector2):
        return v
    return Vector2(float(v[0]), float(v[1]))


def vect3(v):
    """Convenience function for making a ``Vector3`` out of practically
    anything: 2-sequences get z=0
    """
    if isinstance(v, Vector3):
        return v
    if len(v) == 2:
        return Vector3(float(v[0]), float(v[1]), 0.0)
    return Vector3(float(v[0]), float(v[1]), float(v[2]))


## line intersection
## -----------------

def find_intersection(point0, direction0, point1, direction1, threshold=epsilon):
    """Compute the intersection of the line through ``point0`` along
    ``direction0`` with the line through ``point1`` along ``direction1``.

    Raises ``ParallelLines`` if the directions are parallel to within
    ``threshold``, measured as the sine of the angle between them.
    """

    ## solve  p0 + s*d0 = p1 + t*d1  for s by crossing both sides with d1
    mpd0x = mpm.mpf(direction0[0])
    mpd0y = mpm.mpf(direction0[1])
    mpd1x = mpm.mpf(direction1[0])
    mpd1y = mpm.mpf(direction1[1])

    denom = mpd0x * mpd1y - mpd0y * mpd1x
    scale = mpm.sqrt(mpd0x * mpd0x + mpd0y * mpd0y) * mpm.sqrt(mpd1x * mpd1x + mpd1y * mpd1y)
    if mpm.fabs(denom) <= mpm.mpf(threshold) * scale:
        raise ParallelLines('lines are parallel, no unique intersection')

    dx = mpm.mpf(point1[0]) - mpm.mpf(point0[0])
    dy = mpm.mpf(point1[1]) - mpm.mpf(point0[1])
    s = (dx * mpd1y - dy * mpd1x) / denom

    return Vector2(float(point0[0] + s * mpd0x),
                   float(point0[1] + s * mpd0y))
