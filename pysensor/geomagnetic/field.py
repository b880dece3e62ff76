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

"""Geomagnetic field model

Evaluates the World Magnetic Model spherical harmonic expansion at a
geodetic position and time. Secular variation is applied linearly from the
model epoch, both forwards and backwards in time.

Latitude is not clamped to [-90, 90] and no argument is range checked;
non-finite coordinates propagate as NaN through every output.
"""

import logging
from typing import Union

import numpy as np
from numba import njit

from ..core.constants import (
    D2R,
    EARTH_REFERENCE_RADIUS_KM,
    EARTH_SEMI_MAJOR_AXIS_KM,
    EARTH_SEMI_MINOR_AXIS_KM,
    MILLIS_PER_YEAR,
    R2D,
    WMM_BASE_TIME_MS,
    WMM_MAX_DEGREE,
)
from ..core.data_structures import GeoCoordinate, GeomagneticSample
from ..core.validation import as_number
from .coefficients import DELTA_G, DELTA_H, G_COEFF, H_COEFF
from .legendre import legendre_table, schmidt_quasi_norm_factors

logger = logging.getLogger(__name__)

SCHMIDT_QUASI_NORM_FACTORS = schmidt_quasi_norm_factors(WMM_MAX_DEGREE)


@njit(cache=True, error_model='numpy')
def geodetic2geocentric(lat, alt_km):
    """
    Convert geodetic latitude and height to geocentric latitude and radius.

    Parameters
    ----------
    lat : float
        Geodetic latitude (rad)
    alt_km : float
        Height above the ellipsoid (km)

    Returns
    -------
    gc_lat : float
        Geocentric latitude (rad)
    gc_radius : float
        Distance from the earth center (km)
    """
    a2 = EARTH_SEMI_MAJOR_AXIS_KM * EARTH_SEMI_MAJOR_AXIS_KM
    b2 = EARTH_SEMI_MINOR_AXIS_KM * EARTH_SEMI_MINOR_AXIS_KM
    clat = np.cos(lat)
    slat = np.sin(lat)
    tlat = slat / clat
    lat_rad = np.sqrt(a2 * clat * clat + b2 * slat * slat)

    gc_lat = np.arctan(tlat * (lat_rad * alt_km + b2) / (lat_rad * alt_km + a2))

    rad_sq = (alt_km * alt_km + 2.0 * alt_km * lat_rad
              + (a2 * a2 * clat * clat + b2 * b2 * slat * slat)
              / (a2 * clat * clat + b2 * slat * slat))
    return gc_lat, np.sqrt(rad_sq)


@njit(cache=True, error_model='numpy')
def field_components(lat_deg, lon_deg, alt_m, years, G, H, DG, DH, S):
    """
    Field components in the local geodetic frame.

    Parameters
    ----------
    lat_deg, lon_deg : float
        Geodetic latitude and longitude (deg)
    alt_m : float
        Height above the ellipsoid (m)
    years : float
        Years elapsed since the model epoch (negative before it)
    G, H, DG, DH : ndarray
        Model coefficients and their secular variation indexed [n, m]
    S : ndarray
        Schmidt quasi-normalization factors indexed [n, m]

    Returns
    -------
    x, y, z : float
        North, east and down components (nT)
    """
    max_n = G.shape[0]
    lat = lat_deg * D2R
    gc_lat, gc_radius = geodetic2geocentric(lat, alt_m / 1000.0)
    gc_lon = lon_deg * D2R

    P, dP = legendre_table(max_n - 1, 0.5 * np.pi - gc_lat)

    # (a / r)^(n + 2)
    rel_radius_power = np.empty(max_n + 2, dtype=np.double)
    rel_radius_power[0] = 1.0
    rel_radius_power[1] = EARTH_REFERENCE_RADIUS_KM / gc_radius
    for i in range(2, max_n + 2):
        rel_radius_power[i] = rel_radius_power[i-1] * rel_radius_power[1]

    sin_m_lon = np.empty(max_n, dtype=np.double)
    cos_m_lon = np.empty(max_n, dtype=np.double)
    sin_m_lon[0] = 0.0
    cos_m_lon[0] = 1.0
    sin_m_lon[1] = np.sin(gc_lon)
    cos_m_lon[1] = np.cos(gc_lon)
    for m in range(2, max_n):
        k = m >> 1
        sin_m_lon[m] = sin_m_lon[m-k] * cos_m_lon[k] + cos_m_lon[m-k] * sin_m_lon[k]
        cos_m_lon[m] = cos_m_lon[m-k] * cos_m_lon[k] - sin_m_lon[m-k] * sin_m_lon[k]

    inv_cos_lat = 1.0 / np.cos(gc_lat)

    gc_x = 0.0
    gc_y = 0.0
    gc_z = 0.0
    for n in range(1, max_n):
        for m in range(n + 1):
            g = G[n, m] + years * DG[n, m]
            h = H[n, m] + years * DH[n, m]
            gh_cos = g * cos_m_lon[m] + h * sin_m_lon[m]
            gh_sin = g * sin_m_lon[m] - h * cos_m_lon[m]
            rrp = rel_radius_power[n + 2]

            gc_x += rrp * gh_cos * dP[n, m] * S[n, m]
            gc_y += rrp * m * gh_sin * P[n, m] * S[n, m] * inv_cos_lat
            gc_z -= (n + 1) * rrp * gh_cos * P[n, m] * S[n, m]

    # Rotate from geocentric to geodetic frame
    lat_diff = lat - gc_lat
    x = gc_x * np.cos(lat_diff) + gc_z * np.sin(lat_diff)
    y = gc_y
    z = -gc_x * np.sin(lat_diff) + gc_z * np.cos(lat_diff)
    return x, y, z


def years_since_epoch(time_millis: float) -> float:
    """Years (of 365 days) between the model epoch and a UNIX time in ms"""
    return (time_millis - WMM_BASE_TIME_MS) / MILLIS_PER_YEAR


class GeomagneticField:
    """Estimated magnetic field at a given point on Earth.

    Parameters
    ----------
    latitude : float
        Geodetic latitude (deg)
    longitude : float
        Longitude (deg)
    altitude : float
        Height above the WGS84 ellipsoid (m)
    time_millis : float
        UNIX time in milliseconds

    Examples
    --------
    >>> field = GeomagneticField(80.0, 0.0, 0.0, 1580486400000)
    >>> round(field.inclination, 2)
    83.14
    """

    def __init__(self, latitude: float, longitude: float, altitude: float, time_millis: float):
        self.latitude = latitude
        self.longitude = longitude
        self.altitude = altitude
        self.time_millis = time_millis

        years = years_since_epoch(time_millis)
        x, y, z = field_components(latitude, longitude, altitude, years,
                                   G_COEFF, H_COEFF, DELTA_G, DELTA_H,
                                   SCHMIDT_QUASI_NORM_FACTORS)
        self._x = float(x)
        self._y = float(y)
        self._z = float(z)

    @property
    def x(self) -> float:
        """North component (nT)"""
        return self._x

    @property
    def y(self) -> float:
        """East component (nT)"""
        return self._y

    @property
    def z(self) -> float:
        """Down component (nT)"""
        return self._z

    @property
    def declination(self) -> float:
        """Declination, positive east of true north (deg)"""
        return float(np.arctan2(self._y, self._x) * R2D)

    @property
    def inclination(self) -> float:
        """Inclination, positive below the horizontal (deg)"""
        return float(np.arctan2(self._z, self.horizontal_intensity) * R2D)

    @property
    def horizontal_intensity(self) -> float:
        """Horizontal field strength (nT)"""
        return float(np.hypot(self._x, self._y))

    @property
    def total_intensity(self) -> float:
        """Total field strength (nT)"""
        return float(np.sqrt(self._x * self._x + self._y * self._y + self._z * self._z))

    def sample(self) -> GeomagneticSample:
        return GeomagneticSample(
            x=self.x,
            y=self.y,
            z=self.z,
            declination=self.declination,
            inclination=self.inclination,
            horizontal_intensity=self.horizontal_intensity,
            total_intensity=self.total_intensity,
        )

    def __repr__(self):
        return (f"GeomagneticField(lat={self.latitude}, lon={self.longitude}, "
                f"alt={self.altitude}, time_millis={self.time_millis})")


def get_geomagnetic_field(coordinate: Union[GeoCoordinate, dict], time_millis) -> GeomagneticSample:
    """Compute the geomagnetic field at a location and time.

    Parameters
    ----------
    coordinate : GeoCoordinate or dict
        Position with exactly the fields latitude, longitude (deg) and
        altitude (m)
    time_millis : int or float
        UNIX time in milliseconds

    Returns
    -------
    GeomagneticSample
        Field components, declination, inclination and intensities

    Raises
    ------
    ParameterError
        If the coordinate has missing or unknown fields or a value is not
        a number
    """
    coord = GeoCoordinate.parse(coordinate)
    t = as_number(time_millis, 'time_millis')

    with np.errstate(invalid='ignore', divide='ignore', over='ignore'):
        sample = GeomagneticField(coord.latitude, coord.longitude, coord.altitude, t).sample()

    if not np.isfinite(sample.total_intensity):
        logger.debug("Non-finite geomagnetic field at %s, t=%s", coord, t)
    return sample
