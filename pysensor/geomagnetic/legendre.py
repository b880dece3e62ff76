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
Associated Legendre functions for spherical harmonic field models.

References:
    Heiskanen, W.A. and Moritz, H. (1967), Physical Geodesy
"""

import numpy as np
from numba import njit


@njit(cache=True, error_model='numpy')
def legendre_table(max_n, theta):
    """
    Gauss-normalized associated Legendre functions and their derivatives.

    Parameters
    ----------
    max_n : int
        Maximum degree
    theta : float
        Colatitude in radians

    Returns
    -------
    P : ndarray, shape (max_n+1, max_n+1)
        P[n, m] for m <= n
    dP : ndarray, shape (max_n+1, max_n+1)
        Derivative of P[n, m] with respect to theta
    """
    cos_t = np.cos(theta)
    sin_t = np.sin(theta)
    P = np.zeros((max_n + 1, max_n + 1), dtype=np.double)
    dP = np.zeros((max_n + 1, max_n + 1), dtype=np.double)
    P[0, 0] = 1.0

    for n in range(1, max_n + 1):
        for m in range(n + 1):
            if n == m:
                P[n, m] = sin_t * P[n-1, m-1]
                dP[n, m] = cos_t * P[n-1, m-1] + sin_t * dP[n-1, m-1]
            elif n == 1 or m == n - 1:
                P[n, m] = cos_t * P[n-1, m]
                dP[n, m] = -sin_t * P[n-1, m] + cos_t * dP[n-1, m]
            else:
                k = ((n-1)*(n-1) - m*m) / ((2*n - 1) * (2*n - 3))
                P[n, m] = cos_t * P[n-1, m] - k * P[n-2, m]
                dP[n, m] = -sin_t * P[n-1, m] + cos_t * dP[n-1, m] - k * dP[n-2, m]
    return P, dP


def schmidt_quasi_norm_factors(max_n: int) -> np.ndarray:
    """
    Factors converting Gauss-normalized to Schmidt quasi-normalized functions.

    Parameters
    ----------
    max_n : int
        Maximum degree

    Returns
    -------
    S : ndarray, shape (max_n+1, max_n+1)
        Multiplicative factor for P[n, m]
    """
    S = np.zeros((max_n + 1, max_n + 1), dtype=np.double)
    S[0, 0] = 1.0
    for n in range(1, max_n + 1):
        S[n, 0] = S[n-1, 0] * (2*n - 1) / n
        for m in range(1, n + 1):
            alpha = 2 if m == 1 else 1
            S[n, m] = S[n, m-1] * np.sqrt((n - m + 1) * alpha / (n + m))
    return S
