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

"""Request/response interface for the sensor math functions

Every operation can be used in three ways::

    value = api.get_altitude(1013.25, 900.0)                  # direct
    api.get_altitude(1013.25, 900.0, callback=on_done)        # on_done(error, value)
    fut = api.get_altitude(1013.25, 900.0, future=True)       # concurrent.futures.Future

Arguments are validated before anything is scheduled, so a
``ParameterError`` is always raised at the call site and never delivered
through a callback or future. Callbacks and futures run on a shared thread
pool; call :func:`shutdown` to release it. A ``callback`` that is not
callable is ignored and a Future is returned instead.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Union

import numpy as np

from . import attitude
from .core.constants import MATRIX3_LENGTH, MATRIX_LENGTHS, VECTOR_LENGTH
from .core.data_structures import AxisSpec, GeoCoordinate, GeomagneticSample, RotationInclination
from .core.errors import SensorError, ServiceException
from .core.validation import as_float_array, as_number
from .geomagnetic import get_geomagnetic_field
from .sensors import barometer

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[SensorError], Any], None]

MAX_WORKERS = 4

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=MAX_WORKERS, thread_name_prefix="pysensor")
        return _executor


def shutdown(wait: bool = True):
    """Stop the worker pool. It is recreated on the next asynchronous request."""
    global _executor
    with _executor_lock:
        executor, _executor = _executor, None
    if executor is not None:
        executor.shutdown(wait=wait)


def _run(name: str, fn: Callable, args: tuple):
    try:
        return fn(*args)
    except SensorError:
        raise
    except Exception as e:
        logger.exception("%s failed", name)
        raise ServiceException(f"{name} failed: {e}") from e


def _dispatch(name: str, fn: Callable, args: tuple,
              callback: Optional[Callback], future: bool):
    """Run ``fn`` directly or deliver its result asynchronously.

    A ``callback`` that is not callable is ignored and a Future is returned
    instead, the same as ``future=True``.
    """
    if callback is not None and not callable(callback):
        logger.debug("%s: ignoring non-callable callback %r, returning a Future", name, callback)
        callback = None
        future = True
    if callback is None and not future:
        return _run(name, fn, args)

    fut = _get_executor().submit(_run, name, fn, args)
    if callback is None:
        return fut

    def _deliver(done: Future):
        error = done.exception()
        if error is not None:
            callback(error, None)
        else:
            callback(None, done.result())

    fut.add_done_callback(_deliver)
    return None


def get_rotation_matrix(gravity, geomagnetic, callback: Optional[Callback] = None,
                        future: bool = False) -> Union[RotationInclination, Future, None]:
    """Rotation and inclination matrices from gravity and geomagnetic vectors"""
    g = as_float_array(gravity, 'gravity', lengths=(VECTOR_LENGTH,))
    m = as_float_array(geomagnetic, 'geomagnetic', lengths=(VECTOR_LENGTH,))
    return _dispatch('get_rotation_matrix', attitude.get_rotation_matrix, (g, m), callback, future)


def create_rotation_matrix(rotation_vector, callback: Optional[Callback] = None,
                           future: bool = False) -> Union[np.ndarray, Future, None]:
    """Rotation matrix from a rotation vector"""
    v = as_float_array(rotation_vector, 'rotation_vector', min_length=VECTOR_LENGTH)
    return _dispatch('create_rotation_matrix', attitude.get_rotation_matrix_from_vector,
                     (v,), callback, future)


def get_orientation(rotation_matrix, callback: Optional[Callback] = None,
                    future: bool = False) -> Union[np.ndarray, Future, None]:
    """[azimuth, pitch, roll] in radians"""
    R = as_float_array(rotation_matrix, 'rotation_matrix', lengths=MATRIX_LENGTHS)
    return _dispatch('get_orientation', attitude.get_orientation, (R,), callback, future)


def create_quaternion(rotation_vector, callback: Optional[Callback] = None,
                      future: bool = False) -> Union[np.ndarray, Future, None]:
    """Quaternion [w, x, y, z] from a rotation vector"""
    v = as_float_array(rotation_vector, 'rotation_vector', min_length=VECTOR_LENGTH)
    return _dispatch('create_quaternion', attitude.create_quaternion, (v,), callback, future)


def transform_rotation_matrix(rotation_matrix, axes: Union[AxisSpec, dict],
                              callback: Optional[Callback] = None,
                              future: bool = False) -> Union[np.ndarray, Future, None]:
    """Rotation matrix expressed in a remapped coordinate system"""
    R = as_float_array(rotation_matrix, 'rotation_matrix', lengths=MATRIX_LENGTHS)
    spec = AxisSpec.parse(axes)
    attitude.resolve_axes(spec.x, spec.y)
    return _dispatch('transform_rotation_matrix', attitude.transform_rotation_matrix,
                     (R, spec), callback, future)


def get_angle_variation(current_rotation_matrix, previous_rotation_matrix,
                        callback: Optional[Callback] = None,
                        future: bool = False) -> Union[np.ndarray, Future, None]:
    """Angle change between two rotation matrices (radians)"""
    current = as_float_array(current_rotation_matrix, 'current_rotation_matrix',
                             min_length=MATRIX3_LENGTH)
    previous = as_float_array(previous_rotation_matrix, 'previous_rotation_matrix',
                              min_length=MATRIX3_LENGTH)
    return _dispatch('get_angle_variation', attitude.get_angle_variation,
                     (current, previous), callback, future)


def get_geomagnetic_info(coordinate: Union[GeoCoordinate, dict], time_millis,
                         callback: Optional[Callback] = None,
                         future: bool = False) -> Union[GeomagneticSample, Future, None]:
    """Geomagnetic field at a location and UNIX time in milliseconds"""
    coord = GeoCoordinate.parse(coordinate)
    t = as_number(time_millis, 'time_millis')
    return _dispatch('get_geomagnetic_info', get_geomagnetic_field,
                     (coord, t), callback, future)


def get_altitude(sea_pressure, current_pressure, callback: Optional[Callback] = None,
                 future: bool = False) -> Union[float, Future, None]:
    """Altitude (m) from sea-level and current pressure"""
    p0 = as_number(sea_pressure, 'sea_pressure')
    p = as_number(current_pressure, 'current_pressure')
    return _dispatch('get_altitude', barometer.get_altitude, (p0, p), callback, future)


def get_inclination(inclination_matrix, callback: Optional[Callback] = None,
                    future: bool = False) -> Union[float, Future, None]:
    """Inclination angle (radians) from an inclination matrix"""
    I = as_float_array(inclination_matrix, 'inclination_matrix', min_length=MATRIX3_LENGTH)
    return _dispatch('get_inclination', attitude.get_inclination, (I,), callback, future)
