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

"""Sensor boundary: barometric altitude, sensor catalog and event subscription"""

from .barometer import get_altitude, pressure2altitude
from .catalog import SensorCatalog
from .events import SensorEventRegistry, Subscription, resolve_interval

__all__ = [
    'get_altitude', 'pressure2altitude',
    'SensorCatalog',
    'SensorEventRegistry', 'Subscription', 'resolve_interval',
]
