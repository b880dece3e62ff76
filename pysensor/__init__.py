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
PySensor - Sensor Orientation and Geomagnetic Mathematics Library

A Python library turning accelerometer, magnetometer and barometer samples
and geographic coordinates into rotation matrices, quaternions, orientation
angles, geomagnetic field components and altitude.
"""

__version__ = "1.0.0"
__author__ = "PySensor Development Team"
__title__ = "pysensor"
__description__ = "Sensor orientation and geomagnetic mathematics library"

from .logger import get_logger, setup_logger, setup_logger_from_config
from .core import *
from .attitude import *
from .geomagnetic import *
from .sensors import *
from . import api
