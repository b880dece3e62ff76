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

"""Angle change between two rotation matrices"""

import numpy as np
from numba import njit

from ..core.constants import MATRIX3_LENGTH, MATRIX4_LENGTH
from ..core.validation import as_float_array


@njit(cache=True, error_model='numpy')
def _block3(R):
    """Leading 3x3 block of a 9 or 16 element row-major matrix"""
    if R.shape[0] == 16:
        return np.array([R[0], R[1], R[2], R[4], R[5], R[6], R[8], R[9], R[10]],
                        dtype=np.double)
    return R[:9].copy()


@njit(cache=True, error_model='numpy')
def angle_change(current, previous):
    """
    Angle change of the relative rotation previous^T * current.

    Parameters
    ----------
    current : ndarray, shape (9,) or (16,)
        Current rotation matrix
    previous : ndarray, shape (9,) or (16,)
        Previous rotation matrix

    Returns
    -------
    angles : ndarray, shape (3,)
        [z, x, y] angle change in radians. The x term uses asin and is NaN
        when its argument leaves [-1, 1].
    """
    r = _block3(current)
    p = _block3(previous)

    rd1 = p[0]*r[1] + p[3]*r[4] + p[6]*r[7]
    rd4 = p[1]*r[1] + p[4]*r[4] + p[7]*r[7]
    rd6 = p[2]*r[0] + p[5]*r[3] + p[8]*r[6]
    rd7 = p[2]*r[1] + p[5]*r[4] + p[8]*r[7]
    rd8 = p[2]*r[2] + p[5]*r[5] + p[8]*r[8]

    return np.array([np.arctan2(rd1, rd4),
                     np.arcsin(-rd7),
                     np.arctan2(-rd6, rd8)], dtype=np.double)


def _as_matrix(values, name):
    arr = as_float_array(values, name, min_length=MATRIX3_LENGTH)
    if arr.size != MATRIX4_LENGTH:
        arr = arr[:MATRIX3_LENGTH].copy()
    return arr


def get_angle_variation(current_rotation_matrix, previous_rotation_matrix) -> np.ndarray:
    """Compute the angle change between two rotation matrices.

    Parameters
    ----------
    current_rotation_matrix : array_like
        Current rotation matrix, at least 9 elements (16 are read as 4x4)
    previous_rotation_matrix : array_like
        Previous rotation matrix, same layout rules

    Returns
    -------
    np.ndarray, shape (3,)
        Angle change around the z, x and y axes in radians

    Raises
    ------
    ParameterError
        If either matrix has fewer than 9 elements
    """
    current = _as_matrix(current_rotation_matrix, 'current_rotation_matrix')
    previous = _as_matrix(previous_rotation_matrix, 'previous_rotation_matrix')
    return angle_change(current, previous)
