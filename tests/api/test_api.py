import threading
import unittest
from concurrent.futures import Future

import numpy as np

from pysensor import api
from pysensor.core.constants import AXIS_X, AXIS_Z
from pysensor.core.data_structures import GeomagneticSample, RotationInclination
from pysensor.core.errors import ParameterError, ServiceException


class CallbackRecorder:
    """Collects a single (error, value) callback invocation"""

    def __init__(self):
        self.done = threading.Event()
        self.error = None
        self.value = None

    def __call__(self, error, value):
        self.error = error
        self.value = value
        self.done.set()

    def wait(self, test):
        test.assertTrue(self.done.wait(timeout=30), "callback was not invoked")


class TestDirectCalls(unittest.TestCase):
    """Test direct api calls"""

    def test_get_rotation_matrix(self):
        """Test get rotation matrix"""
        result = api.get_rotation_matrix([9, 9, 9], [30, 25, 41])
        self.assertIsInstance(result, RotationInclination)
        np.testing.assert_allclose(result.rotation[6:], [0.5773503] * 3, atol=1e-6)

    def test_create_rotation_matrix(self):
        """Test create rotation matrix"""
        np.testing.assert_array_equal(api.create_rotation_matrix([0, 0, 0]), np.eye(3).ravel())

    def test_get_orientation(self):
        """Test get orientation"""
        np.testing.assert_allclose(api.get_orientation(list(range(1, 10))),
                                   [0.38050640, -0.97832173, -0.66104317], atol=1e-7)

    def test_create_quaternion(self):
        """Test create quaternion"""
        np.testing.assert_allclose(api.create_quaternion([0.52, -0.336, -0.251]),
                                   [0.74411225, 0.52, -0.336, -0.251], atol=1e-7)

    def test_transform_rotation_matrix(self):
        """Test transform rotation matrix"""
        out = api.transform_rotation_matrix([np.inf] * 9, {'x': AXIS_X, 'y': AXIS_Z})
        np.testing.assert_array_equal(out, [np.inf, -np.inf, np.inf] * 3)

    def test_get_angle_variation(self):
        """Test get angle variation"""
        out = api.get_angle_variation([1, 2, 3] * 3, [2] * 9)
        self.assertAlmostEqual(out[0], np.pi / 4)

    def test_get_geomagnetic_info(self):
        """Test get geomagnetic info"""
        sample = api.get_geomagnetic_info({'latitude': 80, 'longitude': 0, 'altitude': 0},
                                          1580486400000)
        self.assertIsInstance(sample, GeomagneticSample)
        self.assertAlmostEqual(sample.total_intensity, 55000.0703, delta=0.05)

    def test_get_altitude(self):
        """Test get altitude"""
        self.assertEqual(api.get_altitude(5, 0), 44330.0)

    def test_get_inclination(self):
        """Test get inclination"""
        self.assertAlmostEqual(api.get_inclination(list(range(1, 10))), np.arctan2(6, 5))


class TestAsyncCalls(unittest.TestCase):
    """Test callback and future api calls"""

    @classmethod
    def tearDownClass(cls):
        api.shutdown()

    def test_callback_success(self):
        """Test callback receives the result"""
        recorder = CallbackRecorder()
        self.assertIsNone(api.get_altitude(5, 0, callback=recorder))
        recorder.wait(self)
        self.assertIsNone(recorder.error)
        self.assertEqual(recorder.value, 44330.0)

    def test_callback_rotation(self):
        """Test callback receives a degenerate rotation"""
        recorder = CallbackRecorder()
        api.get_rotation_matrix([1, 2, 3], [2, 4, 6], callback=recorder)
        recorder.wait(self)
        self.assertIsNone(recorder.error)
        self.assertTrue(recorder.value.is_degenerate)

    def test_future(self):
        """Test future resolves"""
        fut = api.get_orientation(np.eye(4).ravel(), future=True)
        self.assertIsInstance(fut, Future)
        np.testing.assert_allclose(fut.result(timeout=30), [0, 0, 0], atol=1e-15)

    def test_parameter_error_is_synchronous(self):
        """Test parameter error is synchronous"""
        recorder = CallbackRecorder()
        with self.assertRaises(ParameterError):
            api.get_orientation([1] * 10, callback=recorder)
        with self.assertRaises(ParameterError):
            api.get_angle_variation([1] * 8, [1] * 9, future=True)
        with self.assertRaises(ParameterError):
            api.transform_rotation_matrix([1.5] * 9, {'x': 1, 'y': 1}, callback=recorder)
        with self.assertRaises(ParameterError):
            api.get_geomagnetic_info({'latitude': 0, 'longitude': 0}, 0, callback=recorder)
        with self.assertRaises(ParameterError):
            api.get_altitude(None, 100, future=True)
        self.assertFalse(recorder.done.is_set())

    def test_non_callable_callback_returns_future(self):
        """Test a non-callable callback falls back to a future"""
        fut = api.create_quaternion([0.52, -0.336, -0.251], -1)
        self.assertIsInstance(fut, Future)
        np.testing.assert_allclose(fut.result(timeout=30),
                                   [0.74411225, 0.52, -0.336, -0.251], atol=1e-7)

        fut = api.get_rotation_matrix([9, 9, 9], [30, 25, 41], -1)
        self.assertIsInstance(fut, Future)
        result = fut.result(timeout=30)
        self.assertIsInstance(result, RotationInclination)
        np.testing.assert_allclose(result.rotation[6:], [0.5773503] * 3, atol=1e-6)

        fut = api.get_altitude(5, 0, callback="not callable")
        self.assertEqual(fut.result(timeout=30), 44330.0)

    def test_zero_sea_level_altitude_callback(self):
        """Test altitude for zero sea-level pressure through a callback"""
        recorder = CallbackRecorder()
        self.assertIsNone(api.get_altitude(0, 100, callback=recorder))
        recorder.wait(self)
        self.assertIsNone(recorder.error)
        np.testing.assert_allclose(recorder.value, -953042337792.0, rtol=1e-5)

    def test_zero_sea_level_altitude_future(self):
        """Test altitude for zero sea-level pressure through a future"""
        fut = api.get_altitude(0, 100, future=True)
        np.testing.assert_allclose(fut.result(timeout=30), -953042337792.0, rtol=1e-5)

    def test_unexpected_failure_becomes_service_exception(self):
        """Test unexpected failure becomes service exception"""
        def broken(*args):
            raise ZeroDivisionError("boom")

        fut = api._dispatch('broken', broken, (), None, True)
        with self.assertRaises(ServiceException):
            fut.result(timeout=30)

        recorder = CallbackRecorder()
        api._dispatch('broken', broken, (), recorder, False)
        recorder.wait(self)
        self.assertIsInstance(recorder.error, ServiceException)
        self.assertIsNone(recorder.value)
        self.assertEqual(recorder.error.code, 14500101)

    def test_shutdown_recreates_pool(self):
        """Test shutdown recreates pool"""
        api.shutdown()
        fut = api.get_altitude(5, 0, future=True)
        self.assertEqual(fut.result(timeout=30), 44330.0)


if __name__ == '__main__':
    unittest.main()
