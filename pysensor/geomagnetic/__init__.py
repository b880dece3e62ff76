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

"""Geomagnetic field model based on the World Magnetic Model"""

from .coefficients import DELTA_G, DELTA_H, G_COEFF, H_COEFF, WMM2020, coefficient_tables
from .field import (
    GeomagneticField,
    field_components,
    geodetic2geocentric,
    get_geomagnetic_field,
    years_since_epoch,
)
from .legendre import legendre_table, schmidt_quasi_norm_factors

__all__ = [
    'WMM2020', 'coefficient_tables',
    'G_COEFF', 'H_COEFF', 'DELTA_G', 'DELTA_H',
    'legendre_table', 'schmidt_quasi_norm_factors',
    'geodetic2geocentric', 'field_components', 'years_since_epoch',
    'GeomagneticField', 'get_geomagnetic_field',
]
