## conic through five points for dxfgeom

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

"""reconstruct an ellipse from five points on it

A general conic is ``A*x^2 + B*x*y + C*y^2 + D*x + E*y + F = 0``.  Five
points in general position determine it.  The construction used here
avoids a 5x5 solve by way of a pencil of conics:

- the line pairs ``(p1p2)(p3p4)`` and ``(p1p3)(p2p4)`` are two
  degenerate conics through p1..p4,
- every conic of the pencil ``conic1 + lambda*conic2`` also passes
  through p1..p4,
- evaluating at p5 fixes ``lambda``.

If the discriminant ``B^2 - 4AC`` of the result is negative the conic
is an ellipse and its center, semi-axes and rotation follow in closed
form.

The pencil denominator grows with the fourth power of the point
spacing, so ``fit_ellipse()`` first moves the points to their centroid
and scales them to unit extent.  Its thresholds then apply to a shape
of size one whatever the size of the input, and the recovered center
and axes are mapped back at the end.
"""

from math import atan, pi, sqrt
from typing import NamedTuple

from dxfgeom.errors import DegenerateConic, NotAnEllipse
from dxfgeom.geom import Vector2, is_equal, is_zero, vect2
from dxfgeom.settings import epsilon


class EllipseFit(NamedTuple):
    """ellipse parameters recovered by ``fit_ellipse()``; rotation is
    the angle of the major axis in radians"""
    center: Vector2
    semi_major: float
    semi_minor: float
    rotation: float


def line_coefficients(p1, p2):
    """coefficients ``(A, B, C)`` of the line ``A*x + B*y + C = 0`` through two points"""
    return (p1[1] - p2[1],
            p2[0] - p1[0],
            p1[0] * p2[1] - p2[0] * p1[1])


def product_of_lines(l1, l2):
    """conic coefficients ``(A, B, C, D, E, F)`` of the line pair ``l1*l2``"""
    return (l1[0] * l2[0],
            l1[0] * l2[1] + l1[1] * l2[0],
            l1[1] * l2[1],
            l1[0] * l2[2] + l1[2] * l2[0],
            l1[1] * l2[2] + l1[2] * l2[1],
            l1[2] * l2[2])


def evaluate_conic(conic, p):
    """value of the conic's implicit polynomial at point ``p``"""
    x = p[0]
    y = p[1]
    a, b, c, d, e, f = conic
    return a * x * x + b * x * y + c * y * y + d * x + e * y + f


def pencil_parameter(conic1, conic2, p5, threshold=epsilon):
    """return ``lambda`` such that ``conic1 + lambda*conic2`` passes
    through ``p5``.  Raises ``DegenerateConic`` when ``conic2``
    vanishes at ``p5``, which happens for duplicate or collinear
    input points.
    """
    denom = evaluate_conic(conic2, p5)
    if is_zero(denom, threshold):
        raise DegenerateConic('conic coefficients cannot be found, duplicate or collinear points')
    return -evaluate_conic(conic1, p5) / denom


def conic_through_points(p1, p2, p3, p4, p5, threshold=epsilon):
    """coefficients ``(A, B, C, D, E, F)`` of the conic through five points"""
    alpha_beta = product_of_lines(line_coefficients(p1, p2),
                                  line_coefficients(p3, p4))
    gamma_delta = product_of_lines(line_coefficients(p1, p3),
                                   line_coefficients(p2, p4))
    lam = pencil_parameter(alpha_beta, gamma_delta, p5, threshold)
    return tuple(ab + lam * gd for ab, gd in zip(alpha_beta, gamma_delta))


def fit_ellipse(p1, p2, p3, p4, p5, threshold=epsilon):
    """Fit an ellipse through five points.

    Returns an ``EllipseFit`` whose ``semi_major`` is never smaller
    than ``semi_minor``.  Raises ``DegenerateConic`` if no conic can be
    found and ``NotAnEllipse`` if the conic is a parabola, hyperbola or
    line pair.  Nothing is returned in either failure case.

    ``threshold`` applies to the points after they are scaled to unit
    extent, so it is relative to the size of the input.
    """
    pts = [vect2(p) for p in (p1, p2, p3, p4, p5)]
    origin = Vector2(sum(p.x for p in pts) / 5.0, sum(p.y for p in pts) / 5.0)
    extent = max(p.distance(origin) for p in pts)
    if is_zero(extent):
        raise DegenerateConic('conic coefficients cannot be found, all points coincide')
    pts = [(p - origin) / extent for p in pts]

    a, b, c, d, e, f = conic_through_points(*pts, threshold=threshold)

    q = b * b - 4.0 * a * c
    if q >= 0.0:
        raise NotAnEllipse(q)

    center = Vector2((2.0 * c * d - b * e) / q,
                     (2.0 * a * e - b * d) / q)

    m = sqrt((a - c) * (a - c) + b * b)
    n = 2.0 * (a * e * e + c * d * d - b * d * e + q * f)
    ## tiny negative radicands are round-off on a (nearly) collapsed axis
    axis1 = -sqrt(max(n * (a + c + m), 0.0)) / q
    axis2 = -sqrt(max(n * (a + c - m), 0.0)) / q

    if is_zero(b, threshold):
        ## ellipse parallel to the axes
        if is_equal(a, c, threshold):
            rotation = 0.0
        else:
            rotation = 0.0 if a < c else pi / 2.0
    else:
        rotation = atan((c - a - m) / b)

    ## back to the input frame; rotation is unchanged by the scaling
    center = center * extent + origin
    axis1 *= extent
    axis2 *= extent

    if axis1 >= axis2:
        return EllipseFit(center, axis1, axis2, rotation)
    return EllipseFit(center, axis2, axis1, rotation + pi / 2.0)
