import pytest
import numpy as np

from dxfgeom.errors import InvalidArgument, SingularMatrix
from dxfgeom.geom import Vector3
from dxfgeom.xform import Matrix3, Mirror, Rotation, Scale
## unit tests for dxfgeom xform.py


class TestXform:
    """unit tests for dxfgeom matrix operations"""

    def test_matrix(self):
        foo = Matrix3([1, 2, 3, 4, 5, 6, 7, 8, 9])
        fooT = Matrix3(foo, True)
        bar = Matrix3([[1, 0, 1], [0, 1, 1], [0, 0, 1]])
        baz = Vector3(1, 2, 3)
        I = Matrix3()
        a = 10.0
        assert(I.mul(bar) == bar)
        assert(I.mul(foo) == foo)
        assert(I.mul(fooT) == fooT.mul(I))
        assert(I.mul(I) == I)
        assert(foo.mul(bar).rows() == [[1, 2, 6], [4, 5, 15], [7, 8, 24]])
        assert(foo.mul(baz) == Vector3(14, 32, 50))
        assert(foo.mul(a).rows() == [[10.0, 20.0, 30.0],
                                     [40.0, 50.0, 60.0],
                                     [70.0, 80.0, 90.0]])
        assert(I.mul(baz) == baz)
        assert(foo * baz == foo.mul(baz))
        assert(2.0 * foo == foo * 2.0)

    def test_transpose(self):
        foo = Matrix3([1, 2, 3, 4, 5, 6, 7, 8, 9])
        fooT = foo.transpose()
        assert(fooT.rows() == [[1, 4, 7], [2, 5, 8], [3, 6, 9]])
        assert(fooT.getrow(0) == foo.getcol(0))
        assert(fooT.transpose() == foo)
        fooT.set(0, 1, 20)
        assert(fooT.get(0, 1) == 20)
        assert(fooT.m[1][0] == 20)

    def test_rows_and_columns(self):
        m = Matrix3()
        m.setrow(1, [4, 5, 6])
        m.setcol(2, [7, 8, 9])
        assert(m.rows() == [[1, 0, 7], [4, 5, 8], [0, 0, 9]])
        with pytest.raises(InvalidArgument):
            m.get(3, 0)
        with pytest.raises(InvalidArgument):
            m.setrow(0, [1, 2])

    def test_bad_construction(self):
        with pytest.raises(InvalidArgument):
            Matrix3([1, 2, 3, 4])
        with pytest.raises(InvalidArgument):
            Matrix3([[1, 2, 3], [4, 5, 6], [7, 8, 'nine']])
        with pytest.raises(InvalidArgument):
            Matrix3('matrix')

    def test_add_sub_neg(self):
        foo = Matrix3([1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert((foo + foo) == foo * 2)
        assert((foo - foo) == Matrix3.zero())
        assert(-foo == foo * -1)

    def test_determinant(self):
        assert(Matrix3.identity().determinant() == 1.0)
        assert(Matrix3([1, 2, 3, 4, 5, 6, 7, 8, 9]).determinant() == pytest.approx(0.0))
        assert(Scale(2, 3, 4).determinant() == pytest.approx(24.0))
        assert(Mirror('yz').determinant() == pytest.approx(-1.0))

    def test_inverse(self):
        m = Matrix3([[2, 1, 0], [0, 1, 3], [1, 0, 1]])
        assert(m.mul(m.inverse()).isclose(Matrix3.identity(), 1e-12))
        assert(m.inverse().mul(m).isclose(Matrix3.identity(), 1e-12))

    def test_singular_inverse(self):
        with pytest.raises(SingularMatrix):
            Matrix3([1, 2, 3, 4, 5, 6, 7, 8, 9]).inverse()
        with pytest.raises(SingularMatrix):
            Matrix3.zero().inverse()

    def test_numpy(self):
        m = Matrix3([[2, 1, 0], [0, 1, 3], [1, 0, 1]])
        arr = m.to_array()
        assert(arr.shape == (3, 3))
        assert(np.allclose(arr @ np.array([1.0, 2.0, 3.0]), list(m * (1, 2, 3))))
        assert(Matrix3.from_array(arr) == m)
        with pytest.raises(InvalidArgument):
            Matrix3.from_array(np.zeros((2, 2)))

    def test_rotation(self):
        z90 = Rotation([0, 0, 1], 90)
        assert(z90.mul(Vector3(1, 0, 0)) == pytest.approx((0, 1, 0), abs=1e-12))
        assert(Rotation([0, 0, 1], 90, inverse=True).mul(z90).isclose(Matrix3(), 1e-12))
        assert(z90.mul(z90.transpose()).isclose(Matrix3(), 1e-12))
        assert(z90.determinant() == pytest.approx(1.0))
        with pytest.raises(InvalidArgument):
            Rotation([0, 0, 0], 45)

    def test_scale(self):
        assert(Scale(2).mul(Vector3(1, 2, 3)) == Vector3(2, 4, 6))
        assert(Scale(1, 2, 3).mul(Scale(1, 2, 3, inverse=True)).isclose(Matrix3()))
        assert(Scale([2, 2, 2]) == Scale(2))
        with pytest.raises(SingularMatrix):
            Scale(0, 1, 1, inverse=True)

    def test_mirror(self):
        assert(Mirror('xz').mul(Vector3(1, 2, 3)) == Vector3(1, -2, 3))
        with pytest.raises(InvalidArgument):
            Mirror('ab')
