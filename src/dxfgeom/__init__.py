# -*- coding: utf-8 -*-
"""dxfgeom: planar CAD geometry kernel

Vectors, 3x3 matrices, the arbitrary axis object coordinate system,
five point ellipse fitting, and arc, ellipse and bulge polyline
entities that can be transformed and tessellated.
"""
import logging

try:  # Python >= 3.8
    from importlib.metadata import PackageNotFoundError, version
except ModuleNotFoundError:  # pragma: no cover - for Python < 3.8
    from importlib_metadata import PackageNotFoundError, version

from dxfgeom.arc import Arc
from dxfgeom.conic import EllipseFit, fit_ellipse
from dxfgeom.ellipse import Ellipse
from dxfgeom.entity import HasNormal, Tessellable, Transformable
from dxfgeom.errors import (AxisFlooredWarning, DegenerateConic,
                            DegenerateNumeric, DegenerateVector,
                            GeometryError, InvalidArgument, NotAnEllipse,
                            ParallelLines, SingularMatrix,
                            TransformNotApplicable)
from dxfgeom.geom import Vector2, Vector3, find_intersection
from dxfgeom.ocs import CoordinateSystem, arbitrary_axis, transform, transform_2d
from dxfgeom.polyline import Polyline, PolylineVertex
from dxfgeom.settings import Tessellation
from dxfgeom.xform import Matrix3, Mirror, Rotation, Scale

try:
    __version__ = version("dxfgeom")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Arc', 'AxisFlooredWarning', 'CoordinateSystem', 'DegenerateConic',
    'DegenerateNumeric', 'DegenerateVector', 'Ellipse', 'EllipseFit',
    'GeometryError', 'HasNormal', 'InvalidArgument', 'Matrix3', 'Mirror',
    'NotAnEllipse', 'ParallelLines', 'Polyline', 'PolylineVertex',
    'Rotation', 'Scale', 'SingularMatrix', 'Tessellable', 'Tessellation',
    'TransformNotApplicable', 'Transformable', 'Vector2', 'Vector3',
    'arbitrary_axis', 'find_intersection', 'fit_ellipse', 'transform',
    'transform_2d',
]
