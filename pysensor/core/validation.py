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

"""Argument validation helpers"""

import logging
from collections.abc import Mapping
from numbers import Real
from typing import Iterable, Optional

import numpy as np

from .errors import ParameterError

logger = logging.getLogger(__name__)


def as_float_array(values, name: str,
                   min_length: Optional[int] = None,
                   lengths: Optional[Iterable[int]] = None) -> np.ndarray:
    """
    Convert a numeric sequence into a flat float64 array

    Parameters
    ----------
    values : array_like
        List, tuple or ndarray of numbers. 2-D arrays are flattened row-major.
    name : str
        Argument name used in error messages
    min_length : int, optional
        Minimum number of elements
    lengths : iterable of int, optional
        Exact lengths accepted

    Returns
    -------
    np.ndarray
        Flat copy of the input as float64

    Raises
    ------
    ParameterError
        If the argument is missing, has an element that is not a real
        number (None, bool and str included), or has an invalid length
    """
    if values is None:
        raise ParameterError(f"{name} is required")
    if isinstance(values, (str, bytes, Mapping)) or np.isscalar(values):
        raise ParameterError(f"{name} must be a sequence of numbers")

    if isinstance(values, np.ndarray):
        if values.dtype.kind not in 'iuf':
            logger.debug("Rejected %s with dtype %s", name, values.dtype)
            raise ParameterError(f"{name} must be a sequence of numbers")
    else:
        try:
            items = np.asarray(values, dtype=object).reshape(-1)
        except (TypeError, ValueError) as e:
            raise ParameterError(f"{name} must be a sequence of numbers") from e
        for item in items:
            # bool is an int subclass; None and numeric strings would convert silently
            if isinstance(item, (bool, np.bool_)) or not isinstance(item, Real):
                logger.debug("Rejected %s element %r", name, item)
                raise ParameterError(f"{name} must be a sequence of numbers, got {item!r}")

    try:
        arr = np.array(values, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as e:
        raise ParameterError(f"{name} must be a sequence of numbers") from e

    if min_length is not None and arr.size < min_length:
        logger.debug("Rejected %s with %d elements (min %d)", name, arr.size, min_length)
        raise ParameterError(f"{name} must have at least {min_length} elements, got {arr.size}")
    if lengths is not None:
        lengths = tuple(lengths)
        if arr.size not in lengths:
            logger.debug("Rejected %s with %d elements (allowed %s)", name, arr.size, lengths)
            allowed = " or ".join(str(n) for n in lengths)
            raise ParameterError(f"{name} must have {allowed} elements, got {arr.size}")
    return arr


def as_number(value, name: str) -> float:
    """Convert a real number argument to float, rejecting bools and strings"""
    if value is None:
        raise ParameterError(f"{name} is required")
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ParameterError(f"{name} must be a number")
    return float(value)


def check_fields(mapping, required: Iterable[str], name: str) -> dict:
    """Check that a mapping has exactly the required keys"""
    if not isinstance(mapping, Mapping):
        raise ParameterError(f"{name} must be a mapping")
    required = tuple(required)
    keys = set(mapping.keys())
    unknown = keys - set(required)
    missing = [k for k in required if k not in keys]
    if unknown:
        raise ParameterError(f"{name} has unknown fields: {sorted(str(k) for k in unknown)}")
    if missing:
        raise ParameterError(f"{name} is missing fields: {missing}")
    return dict(mapping)
