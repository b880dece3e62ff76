import unittest
import numpy as np

from pysensor.attitude.remap import resolve_axes, transform_rotation_matrix
from pysensor.attitude.rotation import get_rotation_matrix
from pysensor.core.constants import (
    AXIS_MINUS_X, AXIS_MINUS_Y, AXIS_MINUS_Z, AXIS_X, AXIS_Y, AXIS_Z
)
from pysensor.core.data_structures import AxisSpec
from pysensor.core.errors import ParameterError

ALL_AXES = [AXIS_X, AXIS_Y, AXIS_Z, AXIS_MINUS_X, AXIS_MINUS_Y, AXIS_MINUS_Z]


class TestTransformRotationMatrix(unittest.TestCase):
    """Test coordinate system remapping"""

    def setUp(self):
        self.R = get_rotation_matrix([9, 9, 9], [30, 25, 41]).rotation

    def test_identity_mapping(self):
        """Test identity mapping"""
        R = np.full(9, 1.5)
        np.testing.assert_array_equal(
            transform_rotation_matrix(R, {'x': AXIS_X, 'y': AXIS_Y}), R)
        big = np.full(9, 3.40282e38)
        np.testing.assert_array_equal(
            transform_rotation_matrix(big, {'x': AXIS_X, 'y': AXIS_Y}), big)

    def test_x_to_x_y_to_z(self):
        """Test mapping x to x and y to z"""
        out = transform_rotation_matrix(np.full(9, np.inf), {'x': AXIS_X, 'y': AXIS_Z})
        np.testing.assert_array_equal(out, [np.inf, -np.inf, np.inf] * 3)

    def test_columns_permuted(self):
        """Test columns permuted"""
        out = transform_rotation_matrix(self.R, AxisSpec(AXIS_X, AXIS_Z)).reshape(3, 3)
        R = self.R.reshape(3, 3)
        np.testing.assert_array_equal(out[:, 0], R[:, 0])
        np.testing.assert_array_equal(out[:, 2], R[:, 1])
        np.testing.assert_array_equal(out[:, 1], -R[:, 2])

    def test_every_pair_stays_a_rotation(self):
        """Test every pair stays a rotation"""
        for x_axis in ALL_AXES:
            for y_axis in ALL_AXES:
                if (x_axis & 0x3) == (y_axis & 0x3):
                    continue
                out = transform_rotation_matrix(self.R, {'x': x_axis, 'y': y_axis}).reshape(3, 3)
                np.testing.assert_allclose(out @ out.T, np.eye(3), atol=1e-12)
                self.assertAlmostEqual(np.linalg.det(out), 1.0, places=12)

    def test_4x4(self):
        """Test 4x4 matrix remapping"""
        R4 = np.eye(4)
        R4[:3, :3] = self.R.reshape(3, 3)
        R4[:3, 3] = 7.0
        out = transform_rotation_matrix(R4.ravel(), {'x': AXIS_Y, 'y': AXIS_MINUS_X}).reshape(4, 4)
        expected3 = transform_rotation_matrix(self.R, {'x': AXIS_Y, 'y': AXIS_MINUS_X}).reshape(3, 3)
        np.testing.assert_array_equal(out[:3, :3], expected3)
        np.testing.assert_array_equal(out[3], [0, 0, 0, 1])
        np.testing.assert_array_equal(out[:3, 3], [0, 0, 0])

    def test_axis_names(self):
        """Test axis names"""
        np.testing.assert_array_equal(
            transform_rotation_matrix(self.R, {'x': 'y', 'y': '-x'}),
            transform_rotation_matrix(self.R, {'x': AXIS_Y, 'y': AXIS_MINUS_X}))

    def test_same_axis_rejected(self):
        """Test same axis rejected"""
        with self.assertRaises(ParameterError):
            transform_rotation_matrix(np.full(9, 1.5), {'x': 1, 'y': 1})
        with self.assertRaises(ParameterError):
            transform_rotation_matrix(np.full(9, 1.5), {'x': AXIS_X, 'y': AXIS_MINUS_X})

    def test_invalid_identifiers(self):
        """Test invalid identifiers"""
        for x_axis in [0, 4, -1, 0x100, 0x81 | 0x04]:
            with self.assertRaises(ParameterError):
                resolve_axes(x_axis, AXIS_Y)

    def test_invalid_fields(self):
        """Test invalid fields"""
        with self.assertRaises(ParameterError):
            transform_rotation_matrix(self.R, {'x': AXIS_X})
        with self.assertRaises(ParameterError):
            transform_rotation_matrix(self.R, {'x': AXIS_X, 'y': AXIS_Y, 'z': AXIS_Z})
        with self.assertRaises(ParameterError):
            transform_rotation_matrix(self.R, {'x': 'up', 'y': AXIS_Y})

    def test_invalid_length(self):
        """Test invalid length"""
        with self.assertRaises(ParameterError):
            transform_rotation_matrix(np.ones(10), {'x': AXIS_X, 'y': AXIS_Y})

    def test_resolve_axes_handedness(self):
        """Test handedness of resolved axes"""
        self.assertEqual(resolve_axes(AXIS_X, AXIS_Y), (0, 1, 2, False, False, False))
        self.assertEqual(resolve_axes(AXIS_Y, AXIS_X), (1, 0, 2, False, False, True))
        self.assertEqual(resolve_axes(AXIS_MINUS_X, AXIS_Y), (0, 1, 2, True, False, True))


if __name__ == '__main__':
    unittest.main()
