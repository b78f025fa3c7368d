## tolerance constants and tessellation configuration for dxfgeom

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

"""tolerances and tessellation settings for **dxfgeom**

constants
=========

``epsilon`` is the threshold under which a scalar is treated as zero.
It is absolute for vector magnitudes before normalization and matrix
determinants before inversion.  It is relative for the conic pencil
denominator, which is taken on points scaled to unit extent, and for
line intersection, where it bounds the sine of the angle between the
directions.  It is also the length an ellipse axis is floored to when
a transform collapses it.

``arbitrary_axis_threshold`` (1/64) is the bound on the x and y
components of a normal below which the arbitrary axis construction
switches its reference axis from world Z to world Y.

Redefine these at your peril; every routine that consults them also
accepts a ``threshold`` keyword for per-call overrides.
"""

from dataclasses import dataclass

from dxfgeom.errors import InvalidArgument

## constants
epsilon = 1e-12
arbitrary_axis_threshold = 1.0 / 64.0
## relative tolerance when deciding whether a linear map scales a plane uniformly
conformal_threshold = 1e-9

## defaults for polyline bulge flattening
default_bulge_precision = 10
default_weld_threshold = 1e-6
default_bulge_threshold = 1e-6


@dataclass(frozen=True)
class Tessellation:
    """Tessellation parameters shared by the curved entities.

    ``precision`` is the sampling precision handed to the
    ``polygonal_vertexes()`` of arcs and ellipses, or the number of
    intermediate points inserted per bulged segment (polylines).
    ``weld_threshold`` is the distance below which two points are
    considered identical.  ``bulge_threshold`` is the chord length below
    which a bulged segment is drawn straight.
    """
    precision: int = default_bulge_precision
    weld_threshold: float = default_weld_threshold
    bulge_threshold: float = default_bulge_threshold

    def __post_init__(self):
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise InvalidArgument(f'tessellation precision must be an integer, got {self.precision!r}')
        if self.precision < 0:
            raise InvalidArgument(f'tessellation precision must be >= 0, got {self.precision}')
        if self.weld_threshold < 0:
            raise InvalidArgument(f'weld threshold must be >= 0, got {self.weld_threshold}')
        if self.bulge_threshold < 0:
            raise InvalidArgument(f'bulge threshold must be >= 0, got {self.bulge_threshold}')
