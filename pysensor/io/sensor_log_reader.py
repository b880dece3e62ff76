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

"""Sensor log reading utilities"""

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from ..attitude.orientation import dcm2orientation
from ..attitude.rotation import rotation_inclination
from ..core.errors import ParameterError
from ..sensors.barometer import pressure2altitude

logger = logging.getLogger(__name__)

ACCEL_COLUMNS = ['accel_x', 'accel_y', 'accel_z']
MAG_COLUMNS = ['mag_x', 'mag_y', 'mag_z']

ALT_COLUMN_NAMES = {
    'timestamp': 'time',
    'ax': 'accel_x', 'ay': 'accel_y', 'az': 'accel_z',
    'acc_x': 'accel_x', 'acc_y': 'accel_y', 'acc_z': 'accel_z',
    'gravity_x': 'accel_x', 'gravity_y': 'accel_y', 'gravity_z': 'accel_z',
    'mx': 'mag_x', 'my': 'mag_y', 'mz': 'mag_z',
    'magnetic_x': 'mag_x', 'magnetic_y': 'mag_y', 'magnetic_z': 'mag_z',
    'baro': 'pressure', 'pressure_hpa': 'pressure',
}


class SensorLogReader:
    """Reader for CSV logs of accelerometer, magnetometer and barometer samples.

    The file needs a ``time`` column plus ``accel_*`` and ``mag_*`` columns;
    ``pressure`` is optional. Common alternative column names are mapped to
    these (see ``ALT_COLUMN_NAMES``).
    """

    def __init__(self, file_path: str):
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"Sensor log not found: {file_path}")
        self._data: Optional[pd.DataFrame] = None

    def read(self) -> pd.DataFrame:
        """
        Read the log sorted by time.

        Returns
        -------
        pd.DataFrame
            Columns time, accel_x, accel_y, accel_z, mag_x, mag_y, mag_z and
            pressure when present

        Raises
        ------
        ParameterError
            If required columns are missing after name mapping
        """
        if self._data is not None:
            return self._data

        logger.info(f"Reading sensor log from CSV: {self.file_path}")
        df = pd.read_csv(self.file_path)
        df.columns = [str(c).strip().lower() for c in df.columns]
        df = df.rename(columns={k: v for k, v in ALT_COLUMN_NAMES.items() if v not in df.columns})

        required = ['time'] + ACCEL_COLUMNS + MAG_COLUMNS
        missing = [col for col in required if col not in df.columns]
        if missing:
            raise ParameterError(f"Missing required sensor log columns: {missing}")

        df = df.sort_values('time').reset_index(drop=True)
        logger.info(f"Loaded {len(df)} sensor samples")
        if len(df) > 1:
            dt = df['time'].diff().median()
            logger.info(f"  Time range: {df['time'].iloc[0]:.3f} - {df['time'].iloc[-1]:.3f}")
            logger.info(f"  Sampling rate: ~{1.0 / dt if dt > 0 else 0:.1f} Hz")

        self._data = df
        return df

    def orientation_table(self) -> pd.DataFrame:
        """
        Orientation of every sample.

        Returns
        -------
        pd.DataFrame
            Columns time, azimuth, pitch, roll (rad) and inclination (rad,
            magnetic dip from the inclination matrix). Degenerate samples
            give NaN.
        """
        df = self.read()
        accel = df[ACCEL_COLUMNS].to_numpy(dtype=np.double)
        mag = df[MAG_COLUMNS].to_numpy(dtype=np.double)

        angles = np.empty((len(df), 4), dtype=np.double)
        for i in range(len(df)):
            R, I = rotation_inclination(accel[i], mag[i])
            angles[i, :3] = dcm2orientation(R)
            angles[i, 3] = np.arctan2(I[5], I[4])

        n_bad = int(np.isnan(angles[:, 0]).sum())
        if n_bad:
            logger.warning(f"{n_bad} of {len(df)} samples have undefined orientation")

        return pd.DataFrame({
            'time': df['time'].to_numpy(),
            'azimuth': angles[:, 0],
            'pitch': angles[:, 1],
            'roll': angles[:, 2],
            'inclination': angles[:, 3],
        })

    def altitude_table(self, sea_pressure: float) -> pd.DataFrame:
        """
        Barometric altitude of every sample.

        Parameters
        ----------
        sea_pressure : float
            Reference sea-level pressure, same unit as the pressure column

        Returns
        -------
        pd.DataFrame
            Columns time, pressure, altitude (m)
        """
        df = self.read()
        if 'pressure' not in df.columns:
            raise ParameterError("Sensor log has no pressure column")
        pressure = df['pressure'].to_numpy(dtype=np.double)
        return pd.DataFrame({
            'time': df['time'].to_numpy(),
            'pressure': pressure,
            'altitude': pressure2altitude(pressure, sea_pressure),
        })


def load_sensor_log(file_path: str) -> pd.DataFrame:
    """Read a sensor log file into a DataFrame"""
    return SensorLogReader(file_path).read()
