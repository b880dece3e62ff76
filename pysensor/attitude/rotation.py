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
Rotation matrices from sensor measurements.

The device frame is mapped to a local East-North-Up world frame:
row 0 points east, row 1 points towards magnetic north in the horizontal
plane and row 2 points up (opposite to gravity). All matrices are returned
as flat row-major arrays of 9 elements.

Degenerate input (gravity parallel to the geomagnetic vector, or either one
zero) is not rejected. The affected entries come back as NaN.
"""

import logging

import numpy as np
from numba import njit

from ..core.constants import VECTOR_LENGTH
from ..core.data_structures import RotationInclination
from ..core.validation import as_float_array
from .quaternion import rotation_vector_scalar
from .vector import cross3, dot3, norm3

logger = logging.getLogger(__name__)


@njit(cache=True, error_model='numpy')
def rotation_inclination(gravity, geomagnetic):
    """
    Build rotation and inclination matrices.

    Parameters
    ----------
    gravity : ndarray, shape (3,)
        Gravity vector in device frame
    geomagnetic : ndarray, shape (3,)
        Geomagnetic vector in device frame

    Returns
    -------
    R : ndarray, shape (9,)
        Rotation matrix rows [H; M; A]
    I : ndarray, shape (9,)
        Inclination matrix
    """
    # East: geomagnetic x gravity
    H = cross3(geomagnetic, gravity)
    H = H * (1.0 / norm3(H))
    A = gravity * (1.0 / norm3(gravity))
    # North: up x east
    M = cross3(A, H)

    R = np.empty(9, dtype=np.double)
    R[0:3] = H
    R[3:6] = M
    R[6:9] = A

    inv_e = 1.0 / norm3(geomagnetic)
    c = dot3(geomagnetic, M) * inv_e
    s = dot3(geomagnetic, A) * inv_e
    I = np.array([1.0, 0.0, 0.0,
                  0.0, c, s,
                  0.0, -s, c], dtype=np.double)
    return R, I


@njit(cache=True, error_model='numpy')
def rotvec2dcm(v):
    """
    Rotation matrix from a rotation vector.

    Parameters
    ----------
    v : ndarray, shape (3,)
        Rotation vector (axis * sin(angle/2))

    Returns
    -------
    R : ndarray, shape (9,)
        Row-major rotation matrix
    """
    q1, q2, q3 = v[0], v[1], v[2]
    q0 = rotation_vector_scalar(v)

    sq_q1 = 2.0 * q1 * q1
    sq_q2 = 2.0 * q2 * q2
    sq_q3 = 2.0 * q3 * q3
    q1_q2 = 2.0 * q1 * q2
    q3_q0 = 2.0 * q3 * q0
    q1_q3 = 2.0 * q1 * q3
    q2_q0 = 2.0 * q2 * q0
    q2_q3 = 2.0 * q2 * q3
    q1_q0 = 2.0 * q1 * q0

    R = np.array([1.0 - sq_q2 - sq_q3, q1_q2 - q3_q0, q1_q3 + q2_q0,
                  q1_q2 + q3_q0, 1.0 - sq_q1 - sq_q3, q2_q3 - q1_q0,
                  q1_q3 - q2_q0, q2_q3 + q1_q0, 1.0 - sq_q1 - sq_q2],
                 dtype=np.double)
    return R


def get_rotation_matrix(gravity, geomagnetic) -> RotationInclination:
    """Compute the rotation and inclination matrices.

    The rotation matrix transforms a vector from the device frame to the
    world frame (East, North, Up). The inclination matrix is a rotation
    about the world X axis by the magnetic dip angle.

    Parameters
    ----------
    gravity : array_like, shape (3,)
        Gravity vector in device frame (m/s^2)
    geomagnetic : array_like, shape (3,)
        Geomagnetic vector in device frame (uT)

    Returns
    -------
    RotationInclination
        Rotation and inclination matrices (9 elements each, row-major).
        Entries undefined because of degenerate input are NaN.

    Raises
    ------
    ParameterError
        If either argument is not a 3-element numeric sequence

    Examples
    --------
    >>> result = get_rotation_matrix([9, 9, 9], [30, 25, 41])
    >>> result.rotation[6:]
    array([0.57735027, 0.57735027, 0.57735027])
    """
    g = as_float_array(gravity, 'gravity', lengths=(VECTOR_LENGTH,))
    m = as_float_array(geomagnetic, 'geomagnetic', lengths=(VECTOR_LENGTH,))

    R, I = rotation_inclination(g, m)
    result = RotationInclination(R, I)
    if result.is_degenerate:
        logger.trace("Degenerate gravity %s / geomagnetic %s, rotation undefined", g, m)
    return result


def get_rotation_matrix_from_vector(rotation_vector) -> np.ndarray:
    """Convert a rotation vector to a rotation matrix.

    Parameters
    ----------
    rotation_vector : array_like
        At least 3 elements (x, y, z); further elements are ignored

    Returns
    -------
    np.ndarray, shape (9,)
        Row-major rotation matrix

    Raises
    ------
    ParameterError
        If fewer than 3 elements are given
    """
    v = as_float_array(rotation_vector, 'rotation_vector', min_length=VECTOR_LENGTH)
    return rotvec2dcm(v[:VECTOR_LENGTH].copy())
