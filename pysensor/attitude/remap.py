# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Coordinate system remapping of rotation matrices"""

import logging
from typing import Union

import numpy as np
from numba import njit

from ..core.constants import MATRIX_LENGTHS
from ..core.data_structures import AxisSpec
from ..core.errors import ParameterError
from ..core.validation import as_float_array

logger = logging.getLogger(__name__)


def resolve_axes(x_axis: int, y_axis: int) -> tuple[int, int, int, bool, bool, bool]:
    """
    Resolve the column permutation and signs for an axis pair.

    Parameters
    ----------
    x_axis, y_axis : int
        World axes receiving the device X and Y axes (``AXIS_*`` constants)

    Returns
    -------
    tuple
        (x, y, z, sx, sy, sz): destination column of each device axis and
        whether it is negated

    Raises
    ------
    ParameterError
        If an identifier is invalid or both name the same axis
    """
    if (x_axis & 0x7C) != 0 or (y_axis & 0x7C) != 0:
        raise ParameterError(f"Invalid axis identifiers: x={x_axis}, y={y_axis}")
    if x_axis > 0xFF or y_axis > 0xFF or x_axis < 0 or y_axis < 0:
        raise ParameterError(f"Invalid axis identifiers: x={x_axis}, y={y_axis}")
    if (x_axis & 0x3) == 0 or (y_axis & 0x3) == 0:
        raise ParameterError(f"Invalid axis identifiers: x={x_axis}, y={y_axis}")
    if (x_axis & 0x3) == (y_axis & 0x3):
        raise ParameterError(f"x and y must map to different axes: x={x_axis}, y={y_axis}")

    # Z is the axis not named by X and Y
    z_axis = x_axis ^ y_axis

    x = (x_axis & 0x3) - 1
    y = (y_axis & 0x3) - 1
    z = (z_axis & 0x3) - 1

    # Keep the frame right handed
    axis_y = (z + 1) % 3
    axis_z = (z + 2) % 3
    if ((x ^ axis_y) | (y ^ axis_z)) != 0:
        z_axis ^= 0x80

    return x, y, z, x_axis >= 0x80, y_axis >= 0x80, z_axis >= 0x80


@njit(cache=True, error_model='numpy')
def _remap(R, x, y, z, sx, sy, sz):
    n = R.shape[0]
    row_length = 4 if n == 16 else 3
    out = np.zeros(n, dtype=np.double)
    for j in range(3):
        offset = j * row_length
        for i in range(3):
            if x == i:
                out[offset + i] = -R[offset] if sx else R[offset]
            if y == i:
                out[offset + i] = -R[offset + 1] if sy else R[offset + 1]
            if z == i:
                out[offset + i] = -R[offset + 2] if sz else R[offset + 2]
    if n == 16:
        out[15] = 1.0
    return out


def transform_rotation_matrix(rotation_matrix, axes: Union[AxisSpec, dict]) -> np.ndarray:
    """Rotate the supplied rotation matrix so it is expressed in a different coordinate system.

    Typical use is a device mounted sideways (e.g. a car dock) where the
    screen X axis should be treated as world Y.

    Parameters
    ----------
    rotation_matrix : array_like
        Row-major rotation matrix with 9 or 16 elements
    axes : AxisSpec or dict
        Target axes for the device X and Y axes, e.g.
        ``{'x': AXIS_X, 'y': AXIS_Z}``

    Returns
    -------
    np.ndarray
        Remapped rotation matrix with the same length as the input. For 16
        elements the last row and column are those of the identity.

    Raises
    ------
    ParameterError
        If the matrix length is not 9 or 16, or the axis pair is invalid
    """
    R = as_float_array(rotation_matrix, 'rotation_matrix', lengths=MATRIX_LENGTHS)
    spec = AxisSpec.parse(axes)
    x, y, z, sx, sy, sz = resolve_axes(spec.x, spec.y)
    logger.debug("Remapping %d-element matrix: x->%d y->%d z->%d", R.size, x, y, z)
    return _remap(R, x, y, z, sx, sy, sz)
