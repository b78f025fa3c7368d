"""Tests for the exception hierarchy."""

import pytest

import dxfgeom
from dxfgeom.errors import (AxisFlooredWarning, DegenerateConic,
                            DegenerateNumeric, DegenerateVector,
                            GeometryError, InvalidArgument, NotAnEllipse,
                            ParallelLines, SingularMatrix,
                            TransformNotApplicable)


class TestErrors:
    """exception hierarchy"""

    def test_families(self):
        assert issubclass(InvalidArgument, GeometryError)
        assert issubclass(InvalidArgument, ValueError)
        assert issubclass(DegenerateNumeric, GeometryError)
        assert issubclass(DegenerateNumeric, ArithmeticError)
        for cls in (DegenerateVector, SingularMatrix, DegenerateConic,
                    NotAnEllipse, ParallelLines, TransformNotApplicable):
            assert issubclass(cls, DegenerateNumeric)
        assert not issubclass(InvalidArgument, DegenerateNumeric)
        assert issubclass(AxisFlooredWarning, UserWarning)

    def test_not_an_ellipse(self):
        err = NotAnEllipse(0.5)
        assert err.discriminant == 0.5
        assert 'not an ellipse' in str(err)

    def test_builtin_catch(self):
        with pytest.raises(ValueError):
            dxfgeom.Arc(radius=-1.0)
        with pytest.raises(ArithmeticError):
            dxfgeom.Vector3.zero().normalize()


class TestPackage:
    """package surface"""

    def test_version(self):
        assert isinstance(dxfgeom.__version__, str)

    def test_exports(self):
        for name in dxfgeom.__all__:
            assert hasattr(dxfgeom, name)
