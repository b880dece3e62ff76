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

"""Barometric altitude"""

import numpy as np

from ..core.constants import FLT_MAX_BOUND, RECIPROCAL_COEFFICIENT, ZERO_PRESSURE_ALTITUDE
from ..core.validation import as_number


def pressure2altitude(pressure, sea_pressure):
    """
    Convert pressure to altitude with the international barometric formula.

    Parameters
    ----------
    pressure : float or array_like
        Measured pressure (hPa)
    sea_pressure : float or array_like
        Reference pressure at sea level (hPa)

    Returns
    -------
    altitude : float or ndarray
        Altitude above the reference level (m)

    Notes
    -----
    An infinite pressure ratio (zero reference pressure) saturates at the
    single precision overflow bound, so the result is large but finite.
    Negative ratios give NaN.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = np.asarray(pressure, dtype=np.double) / np.asarray(sea_pressure, dtype=np.double)
        ratio = np.nan_to_num(ratio, nan=np.nan, posinf=FLT_MAX_BOUND, neginf=-FLT_MAX_BOUND)
        altitude = ZERO_PRESSURE_ALTITUDE * (1.0 - np.power(ratio, 1.0 / RECIPROCAL_COEFFICIENT))
    return altitude


def get_altitude(sea_pressure, current_pressure) -> float:
    """Compute altitude from atmospheric pressure.

    Parameters
    ----------
    sea_pressure : float
        Sea-level pressure (hPa)
    current_pressure : float
        Measured pressure (hPa)

    Returns
    -------
    float
        Altitude (m)

    Raises
    ------
    ParameterError
        If either argument is missing or not a number
    """
    p0 = as_number(sea_pressure, 'sea_pressure')
    p = as_number(current_pressure, 'current_pressure')
    return float(pressure2altitude(p, p0))
