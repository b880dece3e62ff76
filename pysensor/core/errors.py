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

"""Error taxonomy for sensor requests

Every error carries a numeric ``code`` and a human readable ``message``.
Parameter errors are raised synchronously before any computation; service
errors only come from the event boundary.
"""

from typing import Optional

from .constants import ERROR_MESSAGES, PARAMETER_ERROR, SENSOR_NOT_SUPPORTED, SERVICE_EXCEPTION


class SensorError(Exception):
    """Base class for all sensor errors"""

    code = -1

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is not None:
            self.code = code
        self.message = message or ERROR_MESSAGES.get(self.code, "Unknown error")
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Error object as delivered to asynchronous callers"""
        return {'code': self.code, 'message': self.message}

    def __repr__(self):
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"


class ParameterError(SensorError, ValueError):
    """Missing argument, wrong length, wrong shape or unknown field name"""

    code = PARAMETER_ERROR


class ServiceException(SensorError, RuntimeError):
    """Well-formed request the event service cannot honour"""

    code = SERVICE_EXCEPTION


class SensorNotSupportedError(SensorError, LookupError):
    """Requested sensor type is not present in the catalog"""

    code = SENSOR_NOT_SUPPORTED
