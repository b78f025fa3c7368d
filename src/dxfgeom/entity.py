## entity capabilities shared by the dxfgeom curved entities

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

"""capabilities shared by the planar entities

Arcs, ellipses and polylines do not share a base class.  What they have
in common is described by three protocols:

``HasNormal``
    a validated unit ``normal`` that defines the entity OCS,
``Transformable``
    ``transform_by(matrix, translation)`` applying an affine map
    and reporting whether it was applied,
``Tessellable``
    ``tessellate(settings=None)`` producing an ordered list of OCS points
    from a ``Tessellation``; ``None`` means the default settings.

The helpers below implement the pieces of these capabilities that the
entities would otherwise each repeat: normal validation, mapping the
normal through a linear map, and measuring how a linear map scales the
entity plane.
"""

from typing import List, Protocol, runtime_checkable

from dxfgeom.errors import InvalidArgument, TransformNotApplicable
from dxfgeom.geom import Vector3, is_equal, is_zero, vect3
from dxfgeom.ocs import arbitrary_axis


@runtime_checkable
class HasNormal(Protocol):
    normal: Vector3


@runtime_checkable
class Transformable(Protocol):
    def transform_by(self, matrix, translation) -> bool: ...


@runtime_checkable
class Tessellable(Protocol):
    def tessellate(self, settings=None) -> List[Vector3]: ...


def validated_normal(value):
    """return ``value`` as a unit ``Vector3``; raise ``InvalidArgument``
    for the zero vector"""
    try:
        n = vect3(value)
    except (TypeError, IndexError, ValueError) as exc:
        raise InvalidArgument('bad normal vector: {!r}'.format(value)) from exc
    if n.is_zero():
        raise InvalidArgument('the normal can not be the zero vector')
    return n.normalize()


def validated_positive(name, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgument('{} must be a number, got {!r}'.format(name, value))
    if value <= 0:
        raise InvalidArgument('{} must be greater than zero, got {}'.format(name, value))
    return float(value)


def transformed_normal(matrix, normal):
    """image of ``normal`` under the linear part of a transform, falling
    back to the old normal when the map collapses it"""
    n = matrix * normal
    if n.is_zero():
        return normal
    return n.normalize()


def planar_scale(matrix, normal, threshold):
    """Return the uniform scale the linear map applies to the plane of
    ``normal``, or ``None`` if it scales the plane non-uniformly
    (circles would not stay circles).

    ``threshold`` is relative to the measured scale.
    """
    ocs = arbitrary_axis(normal)
    ax = matrix * Vector3(*ocs.getcol(0))
    ay = matrix * Vector3(*ocs.getcol(1))
    sx = ax.magnitude()
    sy = ay.magnitude()
    if is_zero(sx) or is_zero(sy):
        return None
    tol = threshold * max(sx, sy)
    if not is_equal(sx, sy, tol) or not is_zero(ax.dot(ay) / max(sx, sy), tol):
        return None
    return 0.5 * (sx + sy)


def mapped_plane_normal(matrix, normal):
    """Unit normal of the image of the plane of ``normal``.

    Computed from the images of the OCS x and y axes so that the
    mapped OCS keeps the winding of the entity: a mirrored entity
    flips its normal rather than its angles.  Raises
    ``TransformNotApplicable`` when the map collapses the plane.
    """
    ocs = arbitrary_axis(normal)
    ax = matrix * Vector3(*ocs.getcol(0))
    ay = matrix * Vector3(*ocs.getcol(1))
    n = ax.cross(ay)
    if n.is_zero():
        raise TransformNotApplicable('the transformation collapses the entity plane')
    return n.normalize()
