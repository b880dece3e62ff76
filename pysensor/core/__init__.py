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

"""Core Sensor Processing Module.

This module provides the fundamental components shared by every other
subpackage:

- **Constants**: barometric and geodetic constants, axis identifiers,
  sampling interval modes and error codes
- **Errors**: the ``SensorError`` hierarchy carrying numeric error codes
- **Data Structures**: immutable value types for coordinates, geomagnetic
  samples, axis specifications and rotation/inclination pairs
- **Validation**: argument checks raising ``ParameterError``

Example Usage:
    >>> from pysensor.core import GeoCoordinate, ParameterError
    >>> coord = GeoCoordinate.from_dict({'latitude': 80, 'longitude': 0, 'altitude': 0})
    >>> GeoCoordinate.from_dict({'lat': 80})
    Traceback (most recent call last):
        ...
    pysensor.core.errors.ParameterError: coordinate has unknown fields: ['lat']
"""

from .constants import *
from .data_structures import *
from .errors import *
from .validation import as_float_array, as_number, check_fields
