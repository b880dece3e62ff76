import unittest
import numpy as np

from pysensor.core.data_structures import SensorInfo, SensorType
from pysensor.core.errors import ParameterError, SensorNotSupportedError, ServiceException
from pysensor.sensors.catalog import SensorCatalog
from pysensor.sensors.events import SensorEventRegistry, resolve_interval


class TestResolveInterval(unittest.TestCase):
    """Test sampling interval resolution"""

    def test_modes(self):
        """Test sampling modes"""
        self.assertEqual(resolve_interval(None), 200000000)
        self.assertEqual(resolve_interval('normal'), 200000000)
        self.assertEqual(resolve_interval('ui'), 60000000)
        self.assertEqual(resolve_interval('game'), 20000000)
        self.assertEqual(resolve_interval(5000000), 5000000)
        self.assertEqual(resolve_interval(0), 0)

    def test_invalid(self):
        """Test invalid intervals"""
        with self.assertRaises(ParameterError):
            resolve_interval('fastest')
        with self.assertRaises(ParameterError):
            resolve_interval(True)
        with self.assertRaises(ParameterError):
            resolve_interval([1])
        with self.assertRaises(ServiceException):
            resolve_interval(-1)
        with self.assertRaises(ServiceException):
            resolve_interval(float('inf'))


class TestSensorEventRegistry(unittest.TestCase):
    """Test sensor event subscription and dispatch"""

    def setUp(self):
        self.registry = SensorEventRegistry()
        self.received = []

    def record(self, event):
        self.received.append(event)

    def test_on_emit(self):
        """Test emit to a subscribed handler"""
        self.registry.on(SensorType.ACCELEROMETER, self.record)
        n = self.registry.emit(SensorType.ACCELEROMETER, [0.0, 0.0, 9.81], timestamp=42)

        self.assertEqual(n, 1)
        self.assertEqual(len(self.received), 1)
        event = self.received[0]
        self.assertIs(event.sensor_type, SensorType.ACCELEROMETER)
        self.assertEqual(event.timestamp, 42)
        np.testing.assert_array_equal(event.data, [0.0, 0.0, 9.81])

    def test_other_type_not_delivered(self):
        """Test other type not delivered"""
        self.registry.on(SensorType.ACCELEROMETER, self.record)
        self.assertEqual(self.registry.emit(SensorType.GYROSCOPE, [1, 2, 3]), 0)
        self.assertEqual(self.received, [])

    def test_scalar_sample(self):
        """Test scalar sample"""
        self.registry.on(SensorType.BAROMETER, self.record)
        self.registry.emit(SensorType.BAROMETER, 1013.25)
        self.assertEqual(self.received[0].data.shape, (1,))
        self.assertGreater(self.received[0].timestamp, 0)

    def test_once(self):
        """Test once handler fires a single time"""
        self.registry.once(SensorType.GRAVITY, self.record)
        self.registry.emit(SensorType.GRAVITY, [0, 0, 9.81])
        self.registry.emit(SensorType.GRAVITY, [0, 0, 9.81])
        self.assertEqual(len(self.received), 1)
        self.assertEqual(self.registry.handler_count(SensorType.GRAVITY), 0)

    def test_resubscribe_updates_interval(self):
        """Test resubscribe updates interval"""
        self.registry.on(1, self.record, 'game')
        self.registry.on(1, self.record, 'ui')
        self.assertEqual(self.registry.handler_count(1), 1)
        self.assertEqual(self.registry.interval_for(1), 60000000)

    def test_interval_is_minimum(self):
        """Test interval is minimum"""
        self.registry.on(1, self.record, 'normal')
        self.registry.on(1, lambda e: None, 1000)
        self.assertEqual(self.registry.interval_for(1), 1000)
        self.assertIsNone(self.registry.interval_for(2))

    def test_off(self):
        """Test unsubscribe"""
        other = []
        self.registry.on(1, self.record)
        self.registry.on(1, other.append)
        self.assertEqual(self.registry.off(1, self.record), 1)
        self.assertEqual(self.registry.off(1, self.record), 0)
        self.registry.emit(1, [1, 2, 3])
        self.assertEqual(len(self.received), 0)
        self.assertEqual(len(other), 1)
        self.assertEqual(self.registry.off(1), 1)
        self.assertEqual(self.registry.off(1), 0)

    def test_unsubscribe_inside_handler(self):
        """Test unsubscribe inside handler"""
        def handler(event):
            self.received.append(event)
            self.registry.off(event.sensor_type, handler)

        self.registry.on(1, handler)
        self.registry.on(1, self.record)
        self.assertEqual(self.registry.emit(1, [0, 0, 1]), 2)
        self.assertEqual(self.registry.emit(1, [0, 0, 1]), 1)
        self.assertEqual(len(self.received), 3)

    def test_failing_handler_does_not_stop_dispatch(self):
        """Test failing handler does not stop dispatch"""
        def broken(event):
            raise RuntimeError("boom")

        self.registry.on(1, broken)
        self.registry.on(1, self.record)
        with self.assertLogs('pysensor.sensors.events', level='ERROR'):
            self.assertEqual(self.registry.emit(1, [0, 0, 1]), 2)
        self.assertEqual(len(self.received), 1)

    def test_invalid_arguments(self):
        """Test invalid arguments"""
        with self.assertRaises(ParameterError):
            self.registry.on(1, "not callable")
        with self.assertRaises(ParameterError):
            self.registry.on(9999, self.record)
        with self.assertRaises(ParameterError):
            self.registry.off(1, 42)
        with self.assertRaises(ServiceException):
            self.registry.on(1, self.record, -5)

    def test_emit_rejects_non_numeric_data(self):
        """Test emit raises ParameterError for samples that are not numbers"""
        self.registry.on(1, self.record)
        for data in [['a', 'b'], None, [True], [None, 1.0], 'abc']:
            with self.assertRaises(ParameterError):
                self.registry.emit(1, data)
        self.assertEqual(self.received, [])

    def test_catalog_checked(self):
        """Test sensor catalog is checked"""
        catalog = SensorCatalog([SensorInfo("accel", "acme", SensorType.ACCELEROMETER)])
        registry = SensorEventRegistry(catalog)
        registry.on(SensorType.ACCELEROMETER, self.record)
        with self.assertRaises(SensorNotSupportedError):
            registry.on(SensorType.HEART_RATE, self.record)


if __name__ == '__main__':
    unittest.main()
