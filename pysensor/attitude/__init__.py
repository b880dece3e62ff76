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

"""Attitude computations from gravity, geomagnetic and rotation vector data"""

from .angle_variation import angle_change, get_angle_variation
from .orientation import dcm2orientation, get_inclination, get_orientation
from .quaternion import create_quaternion, rotation_vector_scalar, rotvec2quat
from .remap import resolve_axes, transform_rotation_matrix
from .rotation import (
    get_rotation_matrix,
    get_rotation_matrix_from_vector,
    rotation_inclination,
    rotvec2dcm,
)
from .vector import cross3, dot3, norm3, normalize3

__all__ = [
    # Vector primitives
    'cross3', 'dot3', 'norm3', 'normalize3',
    # Rotation matrices
    'rotation_inclination', 'rotvec2dcm',
    'get_rotation_matrix', 'get_rotation_matrix_from_vector',
    # Orientation
    'dcm2orientation', 'get_orientation', 'get_inclination',
    # Quaternion
    'rotation_vector_scalar', 'rotvec2quat', 'create_quaternion',
    # Remapping
    'resolve_axes', 'transform_rotation_matrix',
    # Angle change
    'angle_change', 'get_angle_variation',
]
