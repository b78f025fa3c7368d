## generalized 3x3 matrix operations for linear maps in dxfgeom

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

from math import cos, sin

import numpy as np

import dxfgeom.geom as geom
from dxfgeom.errors import InvalidArgument, SingularMatrix
from dxfgeom.settings import epsilon

## a matrix is represented as a list of three three-element rows.
## Vectors represent rows unless the transpose property is true.
## Because the kernel transforms points as column vectors, Mx implies
## a column vector: the columns of a rotation matrix are the images of
## the world axes.

## Matrix3 describes only the linear part of an affine map.  Entity
## transforms take the translation as a separate vector, applied after
## the matrix.


class Matrix3:
    """3x3 matrix class for linear transformations of 3D coordinates"""

    def __init__(self, a=None, trans=False):
        self.m = [[1.0, 0.0, 0.0],
                  [0.0, 1.0, 0.0],
                  [0.0, 0.0, 1.0]]
        self.trans = False

        if isinstance(a, Matrix3):
            for i in range(3):
                self.setrow(i, a.getrow(i))

        elif isinstance(a, (tuple, list)):
            if len(a) == 3:
                if not all(isinstance(r, (tuple, list)) and len(r) == 3 for r in a):
                    raise InvalidArgument('bad rows in matrix initialization: {}'.format(a))
                for i in range(3):
                    for j in range(3):
                        self.m[i][j] = _checked(a[i][j])
            elif len(a) == 9:
                for i in range(3):
                    for j in range(3):
                        self.m[i][j] = _checked(a[i * 3 + j])
            else:
                raise InvalidArgument('bad thing used in attempt to initialize matrix: {}'.format(a))
        elif a is not None:
            raise InvalidArgument('bad thing used in attempt to initialize matrix: {}'.format(a))
        self.trans = trans

    def __repr__(self):
        return "Matrix3({},{},{},{})".format(self.m[0], self.m[1],
                                            self.m[2], self.trans)

    def __eq__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return self.rows() == other.rows()

    __hash__ = None

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def zero(cls):
        return cls([0.0] * 9)

    @classmethod
    def from_columns(cls, a, b, c):
        """build the matrix whose columns are the vectors ``a``, ``b`` and ``c``"""
        return cls([[a[0], b[0], c[0]],
                    [a[1], b[1], c[1]],
                    [a[2], b[2], c[2]]])

    @classmethod
    def from_array(cls, arr):
        """build a matrix from a 3x3 numpy array (or anything
        ``numpy.asarray`` accepts)"""
        arr = np.asarray(arr, dtype=float)
        if arr.shape != (3, 3):
            raise InvalidArgument('expected a 3x3 array, got shape {}'.format(arr.shape))
        return cls([float(x) for x in arr.ravel()])

    def to_array(self):
        """return the matrix as a 3x3 numpy array"""
        return np.array(self.rows(), dtype=float)

    def rows(self):
        return [list(self.getrow(i)) for i in range(3)]

    #return value indexed by i,j
    def get(self, i, j):
        if i < 0 or i > 2 or j < 0 or j > 2:
            raise InvalidArgument('bad index passed to get: {},{}'.format(i, j))
        if self.trans:
            return self.m[j][i]
        else:
            return self.m[i][j]

    #set value indexed by i,j
    def set(self, i, j, x):
        if i < 0 or i > 2 or j < 0 or j > 2:
            raise InvalidArgument('bad index passed to set: {},{}'.format(i, j))
        x = _checked(x)
        if self.trans:
            self.m[j][i] = x
        else:
            self.m[i][j] = x

    def getrow(self, i):
        if i < 0 or i > 2:
            raise InvalidArgument('bad row passed to getrow: {}'.format(i))
        if self.trans:
            return [self.m[0][i],
                    self.m[1][i],
                    self.m[2][i]]
        else:
            return self.m[i]

    def getcol(self, j):
        if j < 0 or j > 2:
            raise InvalidArgument('bad column passed to getcol: {}'.format(j))
        if not self.trans:
            return [self.m[0][j],
                    self.m[1][j],
                    self.m[2][j]]
        else:
            return self.m[j]

    def setrow(self, i, x):
        if i < 0 or i > 2:
            raise InvalidArgument('bad row index passed to setrow: {}'.format(i))
        x = [_checked(v) for v in _three(x)]
        if self.trans:
            self.m[0][i] = x[0]
            self.m[1][i] = x[1]
            self.m[2][i] = x[2]
        else:
            self.m[i] = x

    def setcol(self, j, x):
        if j < 0 or j > 2:
            raise InvalidArgument('bad column index passed to setcol: {}'.format(j))
        x = [_checked(v) for v in _three(x)]
        if not self.trans:
            self.m[0][j] = x[0]
            self.m[1][j] = x[1]
            self.m[2][j] = x[2]
        else:
            self.m[j] = x

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # vector, compute Mx. If x is a scalar, compute xM.  Respects
    # transpose flag.
    def mul(self, x):
        if isinstance(x, Matrix3):
            result = Matrix3()
            for i in range(3):
                for j in range(3):
                    result.set(i, j, _dot3(self.getrow(i), x.getcol(j)))
            return result
        elif geom.isgoodnum(x):
            result = Matrix3()
            for i in range(3):
                result.setrow(i, [v * x for v in self.getrow(i)])
            return result
        elif isinstance(x, (tuple, list)) and len(x) == 3:
            return geom.Vector3(_dot3(self.getrow(0), x),
                                _dot3(self.getrow(1), x),
                                _dot3(self.getrow(2), x))

        raise InvalidArgument('bad thing passed to mul(): {}'.format(x))

    def __mul__(self, x):
        return self.mul(x)

    def __rmul__(self, x):
        if geom.isgoodnum(x):
            return self.mul(x)
        return NotImplemented

    def __add__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3([[self.get(i, j) + other.get(i, j) for j in range(3)]
                        for i in range(3)])

    def __sub__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3([[self.get(i, j) - other.get(i, j) for j in range(3)]
                        for i in range(3)])

    def __neg__(self):
        return self.mul(-1.0)

    def determinant(self):
        a = self.rows()
        return (a[0][0] * a[1][1] * a[2][2]
                + a[0][1] * a[1][2] * a[2][0]
                + a[0][2] * a[1][0] * a[2][1]
                - a[0][2] * a[1][1] * a[2][0]
                - a[0][0] * a[1][2] * a[2][1]
                - a[0][1] * a[1][0] * a[2][2])

    def inverse(self, threshold=epsilon):
        """return the inverse matrix, computed from the adjugate.  Raises
        ``SingularMatrix`` when the determinant is within ``threshold``
        of zero."""
        det = self.determinant()
        if geom.is_zero(det, threshold):
            raise SingularMatrix('matrix is not invertible (determinant {})'.format(det))
        a = self.rows()
        d = 1.0 / det
        return Matrix3([
            [d * (a[1][1] * a[2][2] - a[1][2] * a[2][1]),
             d * (a[0][2] * a[2][1] - a[0][1] * a[2][2]),
             d * (a[0][1] * a[1][2] - a[0][2] * a[1][1])],
            [d * (a[1][2] * a[2][0] - a[1][0] * a[2][2]),
             d * (a[0][0] * a[2][2] - a[0][2] * a[2][0]),
             d * (a[0][2] * a[1][0] - a[0][0] * a[1][2])],
            [d * (a[1][0] * a[2][1] - a[1][1] * a[2][0]),
             d * (a[0][1] * a[2][0] - a[0][0] * a[2][1]),
             d * (a[0][0] * a[1][1] - a[0][1] * a[1][0])]])

    def transpose(self):
        return Matrix3(self, True)

    def isclose(self, other, threshold=epsilon):
        """are all elements of the two matrices within ``threshold``"""
        return all(geom.is_equal(self.get(i, j), other.get(i, j), threshold)
                   for i in range(3) for j in range(3))


def _checked(x):
    if not geom.isgoodnum(x):
        raise InvalidArgument('bad element in matrix: {}'.format(x))
    return x


def _three(x):
    if not isinstance(x, (tuple, list)) or len(x) != 3:
        raise InvalidArgument('bad non-vector passed as matrix row or column: {}'.format(x))
    return x


def _dot3(a, b):
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


# return the generalized 3x3 arbitrary axis rotation matrix, angle in degrees
def Rotation(axis, angle, inverse=False):
    u = geom.vect3(axis)
    m = u.magnitude()
    if m < epsilon:
        raise InvalidArgument('zero-length rotation axis not allowed')
    if not geom.is_equal(m, 1.0):
        u = u / m

    if inverse:
        angle *= -1.0
    rad = geom.degrees_to_radians(geom.normalize_angle(angle))

    ux = u.x
    uy = u.y
    uz = u.z

    cang = cos(rad)
    cmin = 1.0 - cang
    sang = sin(rad)

    # see http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    R = [[cang + ux * ux * cmin, ux * uy * cmin - uz * sang, ux * uz * cmin + uy * sang],
         [uy * ux * cmin + uz * sang, cang + uy * uy * cmin, uy * uz * cmin - ux * sang],
         [uz * ux * cmin - uy * sang, uz * uy * cmin + ux * sang, cang + uz * uz * cmin]]

    return Matrix3(R)


def Scale(x, y=None, z=None, inverse=False):
    if geom.isgoodnum(x):
        sx = x
        if geom.isgoodnum(y) and geom.isgoodnum(z):
            sy = y
            sz = z
        else:
            sy = sz = x
    elif isinstance(x, (tuple, list)) and len(x) == 3:
        sx, sy, sz = x
    else:
        raise InvalidArgument('bad scaling values passed to Scale')

    if inverse:
        if geom.is_zero(sx) or geom.is_zero(sy) or geom.is_zero(sz):
            raise SingularMatrix('cannot invert a scale with a zero factor')
        sx = 1.0 / sx
        sy = 1.0 / sy
        sz = 1.0 / sz

    return Matrix3([[sx, 0, 0],
                    [0, sy, 0],
                    [0, 0, sz]])


def Mirror(plane):
    """reflection through one of the cardinal planes, ``'xy'``,
    ``'yz'`` or ``'xz'``"""
    if plane == 'xy':
        return Scale(1.0, 1.0, -1.0)
    elif plane == 'yz':
        return Scale(-1.0, 1.0, 1.0)
    elif plane == 'xz':
        return Scale(1.0, -1.0, 1.0)
    raise InvalidArgument('bad plane passed to Mirror: {}'.format(plane))
