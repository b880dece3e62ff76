import os
import tempfile
import unittest
import numpy as np
import pandas as pd

from pysensor.core.errors import ParameterError
from pysensor.io.sensor_log_reader import SensorLogReader, load_sensor_log


class TestSensorLogReader(unittest.TestCase):
    """Test sensor log reader"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write_csv(self, text, name='log.csv'):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, 'w') as f:
            f.write(text)
        return path

    def test_read_sorts_and_maps_columns(self):
        """Test read sorts and maps columns"""
        path = self.write_csv(
            "Timestamp,ax,ay,az,mx,my,mz,baro\n"
            "0.2,0,0,9.81,0,22,-40,1000.0\n"
            "0.1,9,9,9,30,25,41,1013.25\n"
        )
        df = load_sensor_log(path)

        self.assertEqual(list(df['time']), [0.1, 0.2])
        for col in ['accel_x', 'accel_y', 'accel_z', 'mag_x', 'mag_y', 'mag_z', 'pressure']:
            self.assertIn(col, df.columns)
        self.assertEqual(df['accel_x'].iloc[0], 9)

    def test_read_is_cached(self):
        """Test read is cached"""
        path = self.write_csv("time,accel_x,accel_y,accel_z,mag_x,mag_y,mag_z\n0,0,0,9.81,0,22,-40\n")
        reader = SensorLogReader(path)
        self.assertIs(reader.read(), reader.read())

    def test_orientation_table(self):
        """Test orientation table"""
        path = self.write_csv(
            "time,accel_x,accel_y,accel_z,mag_x,mag_y,mag_z\n"
            "0.0,0,0,9.81,0,22,-40\n"
            "0.1,9,9,9,30,25,41\n"
            "0.2,1,2,3,2,4,6\n"
        )
        table = SensorLogReader(path).orientation_table()

        self.assertIsInstance(table, pd.DataFrame)
        self.assertEqual(list(table.columns), ['time', 'azimuth', 'pitch', 'roll', 'inclination'])
        np.testing.assert_allclose(table.loc[0, ['azimuth', 'pitch', 'roll']].to_numpy(dtype=float),
                                   [0, 0, 0], atol=1e-12)
        self.assertAlmostEqual(table.loc[0, 'inclination'], np.arctan2(-40, 22), places=12)
        self.assertAlmostEqual(table.loc[1, 'azimuth'], np.arctan2(0.54863013, -0.60470790), places=6)
        self.assertAlmostEqual(table.loc[1, 'inclination'], np.arctan2(0.97887863, 0.20444224), places=6)
        # Parallel gravity and geomagnetic vectors
        self.assertTrue(np.isnan(table.loc[2, 'azimuth']))

    def test_altitude_table(self):
        """Test altitude table"""
        path = self.write_csv(
            "time,accel_x,accel_y,accel_z,mag_x,mag_y,mag_z,pressure\n"
            "0.0,0,0,9.81,0,22,-40,1013.25\n"
            "1.0,0,0,9.81,0,22,-40,900.0\n"
        )
        table = SensorLogReader(path).altitude_table(1013.25)
        self.assertAlmostEqual(table['altitude'].iloc[0], 0.0)
        self.assertGreater(table['altitude'].iloc[1], 900.0)

    def test_altitude_requires_pressure(self):
        """Test altitude requires pressure"""
        path = self.write_csv("time,accel_x,accel_y,accel_z,mag_x,mag_y,mag_z\n0,0,0,9.81,0,22,-40\n")
        with self.assertRaises(ParameterError):
            SensorLogReader(path).altitude_table(1013.25)

    def test_missing_columns(self):
        """Test missing columns"""
        path = self.write_csv("time,accel_x,accel_y,accel_z\n0,0,0,9.81\n")
        with self.assertRaises(ParameterError) as context:
            SensorLogReader(path).read()
        self.assertIn("mag_x", str(context.exception))

    def test_missing_file(self):
        """Test missing file"""
        with self.assertRaises(FileNotFoundError):
            SensorLogReader(os.path.join(self.tmpdir.name, 'absent.csv'))


if __name__ == '__main__':
    unittest.main()
