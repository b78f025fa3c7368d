## exception taxonomy for dxfgeom

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

"""
Exceptions and warnings raised by the dxfgeom kernel.

Two families of failure exist:

- ``InvalidArgument``: a caller handed a constructor, setter or
  tessellation routine a value it can never accept (non-positive
  radius, precision below the entity minimum, zero normal).  These are
  raised before any state is touched.
- ``DegenerateNumeric``: the inputs were acceptable but the numerics
  broke down (zero-length vector, singular matrix, conic fit through
  degenerate points, parallel construction lines).  A transform that
  hits one of these is aborted as a whole.

Both families also derive from the matching builtin (``ValueError`` and
``ArithmeticError``) so callers that only know the standard library can
still catch them.
"""


class GeometryError(Exception):
    """Base exception for dxfgeom errors."""
    pass


class InvalidArgument(GeometryError, ValueError):
    """A value was rejected at the call boundary."""
    pass


class DegenerateNumeric(GeometryError, ArithmeticError):
    """Base exception for numeric degeneracies."""
    pass


class DegenerateVector(DegenerateNumeric):
    """Normalization of a (near) zero-length vector."""
    pass


class SingularMatrix(DegenerateNumeric):
    """Inversion of a matrix whose determinant is (near) zero."""
    pass


class DegenerateConic(DegenerateNumeric):
    """No conic passes through the given points (duplicate or collinear input)."""
    pass


class NotAnEllipse(DegenerateNumeric):
    """The fitted conic is a parabola, hyperbola or line pair."""

    def __init__(self, discriminant: float):
        self.discriminant = discriminant
        super().__init__(f"conic is not an ellipse (discriminant {discriminant:g} >= 0)")


class ParallelLines(DegenerateNumeric):
    """Two construction lines have no single intersection point."""
    pass


class TransformNotApplicable(DegenerateNumeric):
    """An affine transform was rejected and the entity left untouched.

    The numeric failure that caused the rejection is available as
    ``__cause__``.
    """
    pass


class AxisFlooredWarning(UserWarning):
    """A recomputed ellipse axis collapsed to zero and was floored to epsilon."""
    pass
