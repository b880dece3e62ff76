import unittest
import numpy as np

from pysensor.attitude.angle_variation import angle_change, get_angle_variation
from pysensor.attitude.rotation import get_rotation_matrix
from pysensor.core.errors import ParameterError


class TestGetAngleVariation(unittest.TestCase):
    """Test angle change between two rotation matrices"""

    def test_golden(self):
        """Test golden angle variation"""
        out = get_angle_variation([1, 2, 3, 1, 2, 3, 1, 2, 3], [2] * 9)
        self.assertAlmostEqual(out[0], 0.78539816, places=7)
        self.assertTrue(np.isnan(out[1]))
        self.assertAlmostEqual(out[2], -0.32175055, places=7)

    def test_extreme_values(self):
        """Test extreme values"""
        big = [3.40282e38] * 9
        out = get_angle_variation(big, big)
        self.assertAlmostEqual(out[0], np.pi / 4, places=7)
        self.assertTrue(np.isnan(out[1]))
        self.assertAlmostEqual(out[2], -np.pi / 4, places=7)

    def test_nan(self):
        """Test NaN input"""
        self.assertTrue(np.all(np.isnan(get_angle_variation([np.nan] * 9, [np.nan] * 9))))

    def test_same_matrix_is_zero(self):
        """Test same matrix is zero"""
        R = get_rotation_matrix([9, 9, 9], [30, 25, 41]).rotation
        np.testing.assert_allclose(get_angle_variation(R, R), [0, 0, 0], atol=1e-12)

    def test_rotation_about_z(self):
        """Test rotation about z"""
        a = 0.3
        Rz = np.array([[np.cos(a), -np.sin(a), 0],
                       [np.sin(a), np.cos(a), 0],
                       [0, 0, 1]])
        out = get_angle_variation(Rz.ravel(), np.eye(3).ravel())
        np.testing.assert_allclose(out, [-a, 0, 0], atol=1e-12)

    def test_4x4(self):
        """Test 4x4 matrices"""
        R = get_rotation_matrix([9, 9, 9], [30, 25, 41]).rotation
        R4 = np.eye(4)
        R4[:3, :3] = R.reshape(3, 3)
        np.testing.assert_allclose(get_angle_variation(R4.ravel(), np.eye(4).ravel()),
                                   get_angle_variation(R, np.eye(3).ravel()), atol=1e-15)

    def test_extra_elements_ignored(self):
        """Test extra elements ignored"""
        cur = list(range(1, 10))
        prev = [2] * 9
        np.testing.assert_array_equal(get_angle_variation(cur + [100, 200], prev + [5]),
                                      get_angle_variation(cur, prev))

    def test_too_short(self):
        """Test too short matrices"""
        with self.assertRaises(ParameterError):
            get_angle_variation([1] * 8, [1] * 9)
        with self.assertRaises(ParameterError):
            get_angle_variation([1] * 9, [1] * 8)

    def test_kernel(self):
        """Test kernel matches wrapper"""
        out = angle_change(np.eye(3).ravel(), np.eye(3).ravel())
        np.testing.assert_array_equal(out, [0, -0.0, 0])


if __name__ == '__main__':
    unittest.main()
