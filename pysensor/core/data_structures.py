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

"""Core data structures for sensor processing"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional, Union

import numpy as np

from .constants import AXIS_NAMES, MATRIX3_LENGTH
from .errors import ParameterError
from .validation import as_float_array, as_number, check_fields


class SensorType(IntEnum):
    """Enumeration of sensor type identifiers.

    Physical sensors occupy ids below 0xFF, fused (virtual) sensors start
    at 256.
    """
    ACCELEROMETER = 1
    GYROSCOPE = 2
    AMBIENT_LIGHT = 5
    MAGNETIC_FIELD = 6
    BAROMETER = 8
    HALL = 10
    PROXIMITY = 12
    HUMIDITY = 13
    ORIENTATION = 256
    GRAVITY = 257
    LINEAR_ACCELERATION = 258
    ROTATION_VECTOR = 259
    AMBIENT_TEMPERATURE = 260
    MAGNETIC_FIELD_UNCALIBRATED = 261
    GAME_ROTATION_VECTOR = 262
    GYROSCOPE_UNCALIBRATED = 263
    SIGNIFICANT_MOTION = 264
    PEDOMETER_DETECTION = 265
    PEDOMETER = 266
    GEOMAGNETIC_ROTATION_VECTOR = 277
    HEART_RATE = 278
    WEAR_DETECTION = 280
    ACCELEROMETER_UNCALIBRATED = 281

    @classmethod
    def parse(cls, value) -> 'SensorType':
        """Resolve an integer id or enum member, raising ParameterError otherwise"""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ParameterError(f"Sensor type must be an integer id, got {value!r}")
        try:
            return cls(int(value))
        except ValueError as e:
            raise ParameterError(f"Unknown sensor type id: {value}") from e


@dataclass(frozen=True)
class GeoCoordinate:
    """Geographic position.

    Latitude and longitude are in degrees and are not range checked;
    callers may pass out-of-range or non-finite values. Altitude is in
    meters above the WGS84 ellipsoid.
    """
    latitude: float
    longitude: float
    altitude: float = 0.0

    def __post_init__(self):
        for name in ('latitude', 'longitude', 'altitude'):
            object.__setattr__(self, name, as_number(getattr(self, name), name))

    @classmethod
    def from_dict(cls, data: dict) -> 'GeoCoordinate':
        """Build from a mapping with exactly latitude, longitude and altitude"""
        fields = check_fields(data, ('latitude', 'longitude', 'altitude'), 'coordinate')
        return cls(fields['latitude'], fields['longitude'], fields['altitude'])

    @classmethod
    def parse(cls, value: Union['GeoCoordinate', dict]) -> 'GeoCoordinate':
        if isinstance(value, cls):
            return value
        return cls.from_dict(value)


@dataclass(frozen=True)
class GeomagneticSample:
    """Geomagnetic field at a point.

    Attributes
    ----------
    x, y, z : float
        North, east and down field components (nT)
    declination : float
        Angle between magnetic and true north (deg)
    inclination : float
        Dip angle below the horizontal plane (deg)
    horizontal_intensity : float
        Norm of the horizontal component (nT)
    total_intensity : float
        Norm of the field vector (nT)
    """
    x: float
    y: float
    z: float
    declination: float
    inclination: float
    horizontal_intensity: float
    total_intensity: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z, self.declination, self.inclination,
                         self.horizontal_intensity, self.total_intensity])

    def to_dict(self) -> dict[str, float]:
        return {
            'x': self.x,
            'y': self.y,
            'z': self.z,
            'declination': self.declination,
            'inclination': self.inclination,
            'horizontal_intensity': self.horizontal_intensity,
            'total_intensity': self.total_intensity,
        }


@dataclass(frozen=True)
class AxisSpec:
    """Target world axes for the device X and Y axes.

    Axis identifiers are the ``AXIS_*`` constants or one of the names
    ``'x'``, ``'y'``, ``'z'``, ``'-x'``, ``'-y'``, ``'-z'``. The Z axis
    is implied.
    """
    x: int
    y: int

    def __post_init__(self):
        for name in ('x', 'y'):
            object.__setattr__(self, name, self._resolve(getattr(self, name), name))

    @staticmethod
    def _resolve(axis, name: str) -> int:
        if isinstance(axis, str):
            try:
                return AXIS_NAMES[axis.strip().lower()]
            except KeyError as e:
                raise ParameterError(f"Unknown axis name for {name}: {axis!r}") from e
        if isinstance(axis, bool) or not isinstance(axis, (int, np.integer)):
            raise ParameterError(f"Axis {name} must be an integer identifier")
        return int(axis)

    @classmethod
    def from_dict(cls, data: dict) -> 'AxisSpec':
        fields = check_fields(data, ('x', 'y'), 'coordinates')
        return cls(fields['x'], fields['y'])

    @classmethod
    def parse(cls, value: Union['AxisSpec', dict]) -> 'AxisSpec':
        if isinstance(value, cls):
            return value
        return cls.from_dict(value)


def _nullable(values: np.ndarray) -> list[Optional[float]]:
    return [None if np.isnan(v) else float(v) for v in values]


@dataclass(frozen=True)
class RotationInclination:
    """Rotation matrix and inclination matrix pair (row-major, 9 elements each).

    Entries that are undefined because of degenerate input are NaN in the
    arrays and ``None`` in :meth:`to_dict` / :meth:`to_list`.
    """
    rotation: np.ndarray
    inclination: np.ndarray

    def __post_init__(self):
        for name in ('rotation', 'inclination'):
            arr = as_float_array(getattr(self, name), name, lengths=(MATRIX3_LENGTH,))
            arr.flags.writeable = False
            object.__setattr__(self, name, arr)

    @property
    def is_degenerate(self) -> bool:
        """True when the rotation matrix could not be determined"""
        return bool(np.any(np.isnan(self.rotation)))

    def to_list(self) -> tuple[list[Optional[float]], list[Optional[float]]]:
        return _nullable(self.rotation), _nullable(self.inclination)

    def to_dict(self) -> dict[str, list[Optional[float]]]:
        rotation, inclination = self.to_list()
        return {'rotation': rotation, 'inclination': inclination}


@dataclass
class SensorInfo:
    """Description of a sensor available on the device"""
    sensor_name: str
    vendor_name: str
    sensor_type: SensorType
    firmware_version: str = ""
    hardware_version: str = ""
    max_range: float = 0.0
    resolution: float = 0.0
    power: float = 0.0
    min_sampling_period: int = 0   # ns
    max_sampling_period: int = 0   # ns

    def __post_init__(self):
        self.sensor_type = SensorType.parse(self.sensor_type)


@dataclass
class SensorEvent:
    """Sample delivered to subscribers"""
    sensor_type: SensorType
    timestamp: int  # ns
    data: np.ndarray
    accuracy: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_valid(self) -> bool:
        """True if every value in the sample is finite"""
        return self.data is not None and bool(np.all(np.isfinite(self.data)))
