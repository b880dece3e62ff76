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

"""Sensor Constants and Model Parameters"""

import numpy as np

# Physical Constants
GRAVITATIONAL_ACCELERATION = 9.81  # standard gravity (m/s^2)

# Barometric altitude model
ZERO_PRESSURE_ALTITUDE = 44330.0   # altitude scale of the barometric formula (m)
RECIPROCAL_COEFFICIENT = 5.255     # exponent is 1/5.255
FLT_MAX_BOUND = 2.0 ** 128         # single precision overflow bound

# Matrix layouts
VECTOR_LENGTH = 3
QUATERNION_LENGTH = 4
MATRIX3_LENGTH = 9
MATRIX4_LENGTH = 16
MATRIX_LENGTHS = (MATRIX3_LENGTH, MATRIX4_LENGTH)

# Coordinate system axes for remapping
AXIS_X = 1
AXIS_Y = 2
AXIS_Z = 3
AXIS_MINUS_X = AXIS_X | 0x80
AXIS_MINUS_Y = AXIS_Y | 0x80
AXIS_MINUS_Z = AXIS_Z | 0x80
AXIS_NAMES = {
    'x': AXIS_X, 'y': AXIS_Y, 'z': AXIS_Z,
    '-x': AXIS_MINUS_X, '-y': AXIS_MINUS_Y, '-z': AXIS_MINUS_Z,
}

# WGS84 ellipsoid (km)
EARTH_SEMI_MAJOR_AXIS_KM = 6378.137
EARTH_SEMI_MINOR_AXIS_KM = 6356.7523142
EARTH_REFERENCE_RADIUS_KM = 6371.2

# Geomagnetic model epoch
WMM_BASE_TIME_MS = 1580486400000          # 2020-02-01 00:00:00 UTC+8
MILLIS_PER_YEAR = 365.0 * 24 * 3600 * 1000
WMM_MAX_DEGREE = 12

# Sampling interval modes (ns)
SAMPLING_INTERVAL_MODES = {
    'normal': 200000000,
    'ui': 60000000,
    'game': 20000000,
}
DEFAULT_SAMPLING_INTERVAL = SAMPLING_INTERVAL_MODES['normal']

# Error codes
PARAMETER_ERROR = 401
SERVICE_EXCEPTION = 14500101
SENSOR_NOT_SUPPORTED = 14500102

ERROR_MESSAGES = {
    PARAMETER_ERROR: "Parameter error",
    SERVICE_EXCEPTION: "Service exception",
    SENSOR_NOT_SUPPORTED: "The sensor is not supported by the device",
}

# Conversion factors
D2R = np.pi / 180.0
R2D = 180.0 / np.pi
