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

"""Catalog of sensors available on a device"""

import logging
import threading
from typing import Iterable, Optional

from ..core.data_structures import SensorInfo, SensorType
from ..core.errors import ParameterError, SensorNotSupportedError

logger = logging.getLogger(__name__)


class SensorCatalog:
    """Registry of sensor descriptions keyed by sensor type.

    Parameters
    ----------
    sensors : iterable of SensorInfo, optional
        Sensors initially present
    """

    def __init__(self, sensors: Optional[Iterable[SensorInfo]] = None):
        self._lock = threading.RLock()
        self._sensors: dict[SensorType, SensorInfo] = {}
        for info in sensors or ():
            self.register(info)

    def register(self, info: SensorInfo):
        """Add or replace a sensor description"""
        if not isinstance(info, SensorInfo):
            raise ParameterError("info must be a SensorInfo")
        with self._lock:
            self._sensors[info.sensor_type] = info
        logger.debug("Registered sensor %s (%s)", info.sensor_name, info.sensor_type.name)

    def unregister(self, sensor_type) -> bool:
        """Remove a sensor. Returns False if it was not registered."""
        sensor_type = SensorType.parse(sensor_type)
        with self._lock:
            return self._sensors.pop(sensor_type, None) is not None

    def get_sensor_list(self) -> list[SensorInfo]:
        """All registered sensors ordered by type id"""
        with self._lock:
            return [self._sensors[k] for k in sorted(self._sensors)]

    def get_single_sensor(self, sensor_type) -> SensorInfo:
        """
        Look up one sensor.

        Raises
        ------
        ParameterError
            If ``sensor_type`` is not a known type id
        SensorNotSupportedError
            If the device has no sensor of that type
        """
        sensor_type = SensorType.parse(sensor_type)
        with self._lock:
            info = self._sensors.get(sensor_type)
        if info is None:
            raise SensorNotSupportedError(f"Sensor {sensor_type.name} is not supported")
        return info

    def is_supported(self, sensor_type) -> bool:
        with self._lock:
            return SensorType.parse(sensor_type) in self._sensors

    def __len__(self):
        return len(self._sensors)
