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
Quaternion conversion from rotation vectors.

A rotation vector holds axis * sin(angle/2), i.e. the vector part of a
unit quaternion. Quaternions are returned scalar first, [w, x, y, z].
"""

import numpy as np
from numba import njit

from ..core.constants import VECTOR_LENGTH
from ..core.validation import as_float_array


@njit(cache=True, error_model='numpy')
def rotation_vector_scalar(v):
    """
    Scalar part of the quaternion implied by a rotation vector.

    Parameters
    ----------
    v : ndarray, shape (3,)
        Rotation vector

    Returns
    -------
    w : float
        sqrt(1 - |v|^2), or 0 when |v| >= 1 (no renormalization)
    """
    w = 1.0 - v[0]*v[0] - v[1]*v[1] - v[2]*v[2]
    if w > 0.0:
        return np.sqrt(w)
    return 0.0


@njit(cache=True, error_model='numpy')
def rotvec2quat(v):
    """
    Convert rotation vector to quaternion.

    Parameters
    ----------
    v : array_like, shape (3,)
        Rotation vector

    Returns
    -------
    q : ndarray, shape (4,)
        Quaternion [w, x, y, z]
    """
    q = np.array([rotation_vector_scalar(v), v[0], v[1], v[2]], dtype=np.double)
    return q


def create_quaternion(rotation_vector) -> np.ndarray:
    """Derive a quaternion from a rotation vector.

    Parameters
    ----------
    rotation_vector : array_like
        At least 3 elements (x, y, z); a 4th element is ignored

    Returns
    -------
    np.ndarray, shape (4,)
        Quaternion [w, x, y, z]

    Raises
    ------
    ParameterError
        If fewer than 3 elements are given

    Notes
    -----
    The vector part is returned unchanged. When |v| > 1 the scalar part
    is 0 and the result is not a unit quaternion.
    """
    v = as_float_array(rotation_vector, 'rotation_vector', min_length=VECTOR_LENGTH)
    return rotvec2quat(v[:VECTOR_LENGTH].copy())
