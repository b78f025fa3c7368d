## object coordinate systems for dxfgeom

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

"""world and object coordinate systems

Planar entities (arcs, ellipses, polylines) store their geometry in an
object coordinate system (OCS) whose z axis is the entity normal.  The
OCS x and y axes are not stored; they are derived from the normal by
the *arbitrary axis* construction:

- if both ``|Nx|`` and ``|Ny|`` are below 1/64 the normal is close to
  the world z axis, and world Y is used as the reference axis;
  otherwise world Z is used,
- ``Ax = normalize(reference x N)``,
- ``Ay = normalize(N x Ax)``.

The matrix with columns ``(Ax, Ay, N)`` maps object coordinates to
world coordinates.  It is orthonormal, so its transpose maps world to
object.  Conversion between the two frames is a pure rotation: a
point's elevation along the normal is its object z coordinate.

The normal handed to these functions must already be a unit vector;
the entity setters guarantee that.
"""

from enum import Enum

import numpy as np

from dxfgeom.errors import InvalidArgument
from dxfgeom.geom import Vector2, Vector3, vect3
from dxfgeom.settings import arbitrary_axis_threshold, epsilon
from dxfgeom.xform import Matrix3


class CoordinateSystem(Enum):
    WORLD = "world"
    OBJECT = "object"


def arbitrary_axis(normal, threshold=arbitrary_axis_threshold):
    """return the object to world rotation matrix for the unit vector ``normal``"""
    n = vect3(normal)
    if abs(n.x) < threshold and abs(n.y) < threshold:
        reference = Vector3.unit_y()
    else:
        reference = Vector3.unit_z()
    ax = reference.cross(n).normalize()
    ay = n.cross(ax).normalize()
    return Matrix3.from_columns(ax, ay, n)


def _rotation_for(normal, from_cs, to_cs):
    if from_cs == to_cs:
        return None
    m = arbitrary_axis(normal)
    if from_cs == CoordinateSystem.WORLD:
        return m.transpose()
    return m


def transform(points, normal, from_cs, to_cs):
    """convert a ``Vector3`` or an iterable of them between the world
    and object frames of ``normal``.  A single point returns a single
    point, anything else returns a list.
    """
    single = isinstance(points, Vector3) or (
        isinstance(points, (tuple, list)) and len(points) == 3
        and all(isinstance(c, (int, float)) for c in points))
    m = _rotation_for(normal, from_cs, to_cs)
    if single:
        p = vect3(points)
        return p if m is None else m * p
    if m is None:
        return [vect3(p) for p in points]
    return [m * vect3(p) for p in points]


def transform_2d(points, rotation, from_cs, to_cs):
    """rotate 2D points in plane by ``rotation`` radians going from
    object to world, or by ``-rotation`` going from world to object"""
    if from_cs == to_cs:
        return [Vector2(p[0], p[1]) for p in points]
    if from_cs == CoordinateSystem.WORLD:
        rotation = -rotation
    return [Vector2(p[0], p[1]).rotate(rotation) for p in points]


def transform_array(points, normal, from_cs, to_cs):
    """batched variant of ``transform()`` for an ``(N, 3)`` numpy array"""
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise InvalidArgument('expected an (N, 3) array of points, got shape {}'.format(pts.shape))
    m = _rotation_for(normal, from_cs, to_cs)
    if m is None:
        return pts.copy()
    return pts @ m.to_array().T


def is_orientation_reversing(matrix, threshold=epsilon):
    """does the linear map flip handedness (negative determinant)"""
    return matrix.determinant() < -threshold
