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
Vector primitives for 3-element float arrays.

Kernels are compiled with ``error_model='numpy'`` so that a division by
zero yields ±inf or NaN instead of raising, and without ``fastmath`` so
that NaN and infinity propagate exactly.
"""

import numpy as np
from numba import njit


@njit(cache=True, error_model='numpy')
def cross3(a, b):
    """
    Cross product of two 3-vectors.

    Parameters
    ----------
    a, b : ndarray, shape (3,)
        Input vectors

    Returns
    -------
    c : ndarray, shape (3,)
        a x b
    """
    c = np.empty(3, dtype=np.double)
    c[0] = a[1]*b[2] - a[2]*b[1]
    c[1] = a[2]*b[0] - a[0]*b[2]
    c[2] = a[0]*b[1] - a[1]*b[0]
    return c


@njit(cache=True, error_model='numpy')
def dot3(a, b):
    """Dot product of two 3-vectors"""
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


@njit(cache=True, error_model='numpy')
def norm3(a):
    """Euclidean norm of a 3-vector"""
    return np.sqrt(a[0]*a[0] + a[1]*a[1] + a[2]*a[2])


@njit(cache=True, error_model='numpy')
def normalize3(a):
    """
    Scale a 3-vector to unit length.

    A zero vector is not special-cased: the result is NaN in every
    component.

    Parameters
    ----------
    a : ndarray, shape (3,)
        Input vector

    Returns
    -------
    u : ndarray, shape (3,)
        a / |a|
    """
    inv = 1.0 / norm3(a)
    u = np.empty(3, dtype=np.double)
    u[0] = a[0] * inv
    u[1] = a[1] * inv
    u[2] = a[2] * inv
    return u
