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

"""
Orientation angles from rotation and inclination matrices.

Matrices are flat row-major arrays of 9 (3x3) or 16 (4x4) elements. For
4x4 input only the leading 3x3 block is read.
"""

import numpy as np
from numba import njit

from ..core.constants import MATRIX3_LENGTH, MATRIX4_LENGTH, MATRIX_LENGTHS, R2D
from ..core.validation import as_float_array


@njit(cache=True, error_model='numpy')
def dcm2orientation(R):
    """
    Convert a rotation matrix to azimuth, pitch and roll.

    Parameters
    ----------
    R : ndarray, shape (9,) or (16,)
        Row-major rotation matrix

    Returns
    -------
    angles : ndarray, shape (3,)
        [azimuth, pitch, roll] in radians

    Notes
    -----
    Pitch is computed as atan2(-R21, hypot(R01, R11)), which equals
    asin(-R21) for an orthonormal matrix and stays finite for
    non-orthonormal input.
    """
    if R.shape[0] == 16:
        r01, r11, r21, r20, r22 = R[1], R[5], R[9], R[8], R[10]
    else:
        r01, r11, r21, r20, r22 = R[1], R[4], R[7], R[6], R[8]

    azimuth = np.arctan2(r01, r11)
    pitch = np.arctan2(-r21, np.hypot(r01, r11))
    roll = np.arctan2(-r20, r22)
    return np.array([azimuth, pitch, roll], dtype=np.double)


def get_orientation(rotation_matrix) -> np.ndarray:
    """Compute device orientation from a rotation matrix.

    Parameters
    ----------
    rotation_matrix : array_like
        Row-major rotation matrix with 9 or 16 elements

    Returns
    -------
    np.ndarray, shape (3,)
        [azimuth, pitch, roll] in radians. NaN input propagates.

    Raises
    ------
    ParameterError
        If the matrix does not have 9 or 16 elements
    """
    R = as_float_array(rotation_matrix, 'rotation_matrix', lengths=MATRIX_LENGTHS)
    return dcm2orientation(R)


def get_inclination(inclination_matrix, degrees: bool = False) -> float:
    """Compute the geomagnetic inclination (dip) angle.

    Parameters
    ----------
    inclination_matrix : array_like
        Inclination matrix as returned by ``get_rotation_matrix``.
        At least 9 elements; 16 elements are read as a 4x4 matrix.
    degrees : bool, optional
        Return degrees instead of radians (default False)

    Returns
    -------
    float
        Inclination angle

    Raises
    ------
    ParameterError
        If fewer than 9 elements are given
    """
    I = as_float_array(inclination_matrix, 'inclination_matrix', min_length=MATRIX3_LENGTH)
    if I.size == MATRIX4_LENGTH:
        angle = float(np.arctan2(I[6], I[5]))
    else:
        angle = float(np.arctan2(I[5], I[4]))
    return angle * R2D if degrees else angle
