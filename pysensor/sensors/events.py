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

"""Sensor event subscription

Handlers are kept per sensor type. Dispatch iterates over a snapshot of the
handler list, so handlers may subscribe or unsubscribe from inside a
callback. Removing a handler that is not registered is a no-op.
"""

import logging
import threading
import time
from dataclasses import dataclass
from numbers import Real
from typing import Callable, Optional, Union

import numpy as np

from ..core.constants import DEFAULT_SAMPLING_INTERVAL, SAMPLING_INTERVAL_MODES
from ..core.data_structures import SensorEvent, SensorType
from ..core.errors import ParameterError, ServiceException
from ..core.validation import as_float_array
from .catalog import SensorCatalog

logger = logging.getLogger(__name__)

SensorCallback = Callable[[SensorEvent], None]


def resolve_interval(interval: Union[int, str, None]) -> int:
    """
    Resolve a sampling interval to nanoseconds.

    Parameters
    ----------
    interval : int, str or None
        Interval in nanoseconds, a mode name ('normal', 'ui', 'game'),
        or None for the default mode

    Returns
    -------
    int
        Interval in nanoseconds

    Raises
    ------
    ParameterError
        If the interval has the wrong type or names an unknown mode
    ServiceException
        If the interval is negative
    """
    if interval is None:
        return DEFAULT_SAMPLING_INTERVAL
    if isinstance(interval, str):
        try:
            return SAMPLING_INTERVAL_MODES[interval]
        except KeyError as e:
            raise ParameterError(f"Unknown interval mode: {interval!r}") from e
    if isinstance(interval, bool) or not isinstance(interval, Real):
        raise ParameterError("interval must be a number or a mode name")
    if not np.isfinite(interval) or interval < 0:
        raise ServiceException(f"Invalid sampling interval: {interval}")
    return int(interval)


@dataclass
class Subscription:
    """Registered handler"""
    callback: SensorCallback
    interval: int = DEFAULT_SAMPLING_INTERVAL
    once: bool = False


class SensorEventRegistry:
    """Observer registry for sensor events.

    Parameters
    ----------
    catalog : SensorCatalog, optional
        When given, subscribing to a sensor type missing from the catalog
        raises ``SensorNotSupportedError``
    """

    def __init__(self, catalog: Optional[SensorCatalog] = None):
        self.catalog = catalog
        self._lock = threading.RLock()
        self._subscriptions: dict[SensorType, list[Subscription]] = {}

    def _add(self, sensor_type, callback, interval, once: bool):
        sensor_type = SensorType.parse(sensor_type)
        if not callable(callback):
            raise ParameterError("callback must be callable")
        interval_ns = resolve_interval(interval)
        if self.catalog is not None:
            self.catalog.get_single_sensor(sensor_type)

        with self._lock:
            subs = self._subscriptions.setdefault(sensor_type, [])
            for sub in subs:
                if sub.callback == callback:
                    sub.interval = interval_ns
                    sub.once = once
                    logger.debug("Updated subscription to %s (interval %d ns)",
                                 sensor_type.name, interval_ns)
                    return
            subs.append(Subscription(callback, interval_ns, once))
        logger.debug("Subscribed to %s (interval %d ns, once=%s)", sensor_type.name, interval_ns, once)

    def on(self, sensor_type, callback: SensorCallback, interval: Union[int, str, None] = None):
        """Register ``callback`` for every event of ``sensor_type``.

        Registering the same callback again only updates its interval.
        """
        self._add(sensor_type, callback, interval, once=False)

    def once(self, sensor_type, callback: SensorCallback):
        """Register ``callback`` for the next event of ``sensor_type`` only"""
        self._add(sensor_type, callback, None, once=True)

    def off(self, sensor_type, callback: Optional[SensorCallback] = None) -> int:
        """
        Unregister handlers.

        Parameters
        ----------
        sensor_type : SensorType or int
            Sensor type
        callback : callable, optional
            Handler to remove. All handlers of the type are removed when
            omitted.

        Returns
        -------
        int
            Number of handlers removed
        """
        sensor_type = SensorType.parse(sensor_type)
        if callback is not None and not callable(callback):
            raise ParameterError("callback must be callable")

        with self._lock:
            subs = self._subscriptions.get(sensor_type, [])
            if callback is None:
                removed = len(subs)
                self._subscriptions.pop(sensor_type, None)
            else:
                kept = [s for s in subs if s.callback != callback]
                removed = len(subs) - len(kept)
                if kept:
                    self._subscriptions[sensor_type] = kept
                else:
                    self._subscriptions.pop(sensor_type, None)
        if removed:
            logger.debug("Unsubscribed %d handler(s) from %s", removed, sensor_type.name)
        return removed

    def emit(self, sensor_type, data, timestamp: Optional[int] = None) -> int:
        """
        Deliver a sample to every handler of ``sensor_type``.

        A handler that raises is logged and does not prevent delivery to the
        remaining handlers.

        Returns
        -------
        int
            Number of handlers called

        Raises
        ------
        ParameterError
            If the sensor type is unknown or a sample value is not a real number
        """
        sensor_type = SensorType.parse(sensor_type)
        samples = [data] if data is None or np.isscalar(data) else data
        event = SensorEvent(
            sensor_type=sensor_type,
            timestamp=time.time_ns() if timestamp is None else int(timestamp),
            data=as_float_array(samples, 'data'),
        )

        with self._lock:
            snapshot = list(self._subscriptions.get(sensor_type, []))
            if any(s.once for s in snapshot):
                remaining = [s for s in self._subscriptions[sensor_type] if not s.once]
                if remaining:
                    self._subscriptions[sensor_type] = remaining
                else:
                    del self._subscriptions[sensor_type]

        for sub in snapshot:
            try:
                sub.callback(event)
            except Exception:
                logger.exception("Handler %r failed on %s event", sub.callback, sensor_type.name)
        logger.trace("Dispatched %s event to %d handler(s)", sensor_type.name, len(snapshot))
        return len(snapshot)

    def handler_count(self, sensor_type) -> int:
        sensor_type = SensorType.parse(sensor_type)
        with self._lock:
            return len(self._subscriptions.get(sensor_type, []))

    def interval_for(self, sensor_type) -> Optional[int]:
        """Smallest requested interval for a sensor type, None if unsubscribed"""
        sensor_type = SensorType.parse(sensor_type)
        with self._lock:
            subs = self._subscriptions.get(sensor_type, [])
            return min((s.interval for s in subs), default=None)
