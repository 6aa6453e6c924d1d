"""
Conversions between geodetic (latitude, longitude, height above ellipsoid) and
ECEF (earth-centered, earth-fixed) coordinates.

The forward transform is closed-form. The inverse is the iterative refinement
used by the Stanford WAAS toolset (MAAST): latitude and height are refined
alternately until the height settles.
"""

__all__ = ['ECEFConverter']

import math
from typing import Any, Mapping, Tuple, Union

import numpy as np

from geoecef._const import (
    DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE_METERS, LATITUDE_SEED_DENOMINATOR
)
from geoecef.coordinates import ECEFCoordinate, GeodeticCoordinate
from geoecef.ellipsoids import Ellipsoid, resolve_ellipsoid
from geoecef.exceptions import NonConvergenceError
from geoecef.utils.logging import LOGGER, warn_once


EllipsoidDescriptor = Union[None, str, Mapping[str, Any], Ellipsoid]


class ECEFConverter:
    """
    Converts between geodetic and ECEF coordinates on a reference ellipsoid.

    Latitudes and longitudes are in degrees unless the method name says
    otherwise; lengths are always in meters.

        >>> converter = ECEFConverter()  # WGS84
        >>> x, y, z = converter.ecef(39.197807, -77.108574, 55)
        >>> lat, lon, hae = converter.geodetic(x, y, z)

    Args:
        ellipsoid: (Default WGS84)
            An Ellipsoid, an ellipsoid name (e.g. 'Clarke 1866') or a mapping
            of parameters (e.g. {'a': 1} for a unit sphere)

        max_iterations: (int) (Default 50)
            The maximum number of refinements the geodetic conversion may use
            before raising NonConvergenceError

        tolerance: (float) (Default 1e-4)
            The change in height (meters) between refinements below which the
            geodetic conversion is considered converged
    """

    def __init__(
        self,
        ellipsoid: EllipsoidDescriptor = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        tolerance: float = DEFAULT_TOLERANCE_METERS,
    ):
        if max_iterations < 1:
            raise ValueError(f'max_iterations must be at least 1, got {max_iterations}')
        if not tolerance > 0:
            raise ValueError(f'tolerance must be positive, got {tolerance}')

        self._ellipsoid = resolve_ellipsoid(ellipsoid)
        self.max_iterations = int(max_iterations)
        self.tolerance = float(tolerance)

    def __repr__(self):
        return f'<ECEFConverter({self._ellipsoid!r})>'

    @property
    def ellipsoid(self) -> Ellipsoid:
        """The bound ellipsoid"""
        return self._ellipsoid

    @ellipsoid.setter
    def ellipsoid(self, descriptor: EllipsoidDescriptor):
        """
        Rebinds the ellipsoid for subsequent calls. Calls already running keep
        the ellipsoid they started with. Rebinding a converter shared between
        threads must be synchronized by the caller; prefer with_ellipsoid().
        """
        self._ellipsoid = resolve_ellipsoid(descriptor)

    def with_ellipsoid(self, descriptor: EllipsoidDescriptor) -> 'ECEFConverter':
        """Returns a new converter bound to another ellipsoid, with the same iteration settings"""
        return ECEFConverter(
            resolve_ellipsoid(descriptor),
            max_iterations=self.max_iterations,
            tolerance=self.tolerance,
        )

    def ecef(
        self,
        latitude: float = 0.0,
        longitude: float = 0.0,
        hae: float = 0.0,
    ) -> Tuple[float, float, float]:
        """
        Converts a geodetic position to ECEF.

        Args:
            latitude:
                Geodetic latitude, in degrees

            longitude:
                Longitude, in degrees

            hae:
                Height above the ellipsoid, in meters

        Returns:
            (x, y, z) in meters
        """
        return self.ecef_from_radians(
            math.radians(latitude),
            math.radians(longitude),
            hae,
        )

    def ecef_from_radians(
        self,
        latitude: float = 0.0,
        longitude: float = 0.0,
        hae: float = 0.0,
    ) -> Tuple[float, float, float]:
        """
        Converts a geodetic position, with angles in radians, to ECEF.

        Non-finite input produces non-finite output rather than an error.

        Returns:
            (x, y, z) in meters
        """
        x, y, z = _geodetic_to_ecef(
            self._ellipsoid, float(latitude), float(longitude), float(hae)
        )
        return float(x), float(y), float(z)

    def ecef_array(self, latitudes, longitudes, heights=0.0) -> Tuple[np.ndarray, ...]:
        """
        Vectorized version of ecef(). Inputs are broadcast against each other.

        Args:
            latitudes:
                Geodetic latitudes, in degrees

            longitudes:
                Longitudes, in degrees

            heights: (Default 0.0)
                Heights above the ellipsoid, in meters

        Returns:
            Tuple of arrays (x, y, z) in meters, each with the broadcast shape
        """
        latitudes, longitudes, heights = np.broadcast_arrays(
            np.deg2rad(np.asarray(latitudes, dtype=float)),
            np.deg2rad(np.asarray(longitudes, dtype=float)),
            np.asarray(heights, dtype=float),
        )
        return _geodetic_to_ecef(self._ellipsoid, latitudes, longitudes, heights)

    def geodetic(
        self,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
    ) -> Tuple[float, float, float]:
        """
        Converts an ECEF position to geodetic latitude, longitude and height.

        Points on the polar axis get longitude 0 and latitude +/-90.

        Args:
            x:
                ECEF x, in meters

            y:
                ECEF y, in meters

            z:
                ECEF z, in meters

        Returns:
            (latitude, longitude, height above ellipsoid), in degrees, degrees, meters

        Raises:
            NonConvergenceError: the iteration did not settle within max_iterations
        """
        latitude, longitude, hae = self.geodetic_radians(x, y, z)
        return math.degrees(latitude), math.degrees(longitude), hae

    def geodetic_radians(
        self,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
    ) -> Tuple[float, float, float]:
        """
        Same as geodetic(), but returns latitude and longitude in radians.
        """
        latitude, longitude, hae = self._ecef_to_geodetic(
            np.array([float(x)]), np.array([float(y)]), np.array([float(z)])
        )
        return float(latitude[0]), float(longitude[0]), float(hae[0])

    def geodetic_array(self, x, y, z) -> Tuple[np.ndarray, ...]:
        """
        Vectorized version of geodetic(). Inputs are broadcast against each
        other and each point is iterated until it converges on its own.

        Returns:
            Tuple of arrays (latitude, longitude, height above ellipsoid), in
            degrees, degrees, meters, each with the broadcast shape

        Raises:
            NonConvergenceError: any point did not settle within max_iterations
        """
        x, y, z = np.broadcast_arrays(
            np.asarray(x, dtype=float),
            np.asarray(y, dtype=float),
            np.asarray(z, dtype=float),
        )
        shape = x.shape
        latitude, longitude, hae = self._ecef_to_geodetic(x.ravel(), y.ravel(), z.ravel())
        return (
            np.rad2deg(latitude).reshape(shape),
            np.rad2deg(longitude).reshape(shape),
            hae.reshape(shape),
        )

    def to_ecef(self, coord: GeodeticCoordinate) -> ECEFCoordinate:
        """Converts a GeodeticCoordinate to an ECEFCoordinate"""
        return ECEFCoordinate(*self.ecef(coord.latitude, coord.longitude, coord.height))

    def to_geodetic(self, coord: ECEFCoordinate) -> GeodeticCoordinate:
        """Converts an ECEFCoordinate to a GeodeticCoordinate"""
        return GeodeticCoordinate(*self.geodetic(coord.x, coord.y, coord.z))

    def _ecef_to_geodetic(self, x: np.ndarray, y: np.ndarray, z: np.ndarray):
        """
        Iterative ECEF -> geodetic conversion over flat arrays. Latitude and
        longitude are returned in radians.
        """
        ellipsoid = self._ellipsoid
        max_iterations, tolerance = self.max_iterations, self.tolerance
        e2 = ellipsoid.e2

        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            p = np.hypot(x, y)
            longitude = np.arctan2(y, x)
            latitude = np.empty_like(p)
            hae = np.empty_like(p)

            # Points on the polar axis: longitude is undefined, use 0
            on_axis = p == 0
            if on_axis.any():
                if np.any(z[on_axis] == 0):
                    warn_once(
                        'ECEF origin is not a meaningful geodetic position; '
                        'it is reported as a pole at depth b.'
                    )
                longitude[on_axis] = 0.0
                latitude[on_axis] = np.copysign(np.pi / 2, z[on_axis])
                hae[on_axis] = np.abs(z[on_axis]) - ellipsoid.b

            off_axis = ~on_axis
            p, z = p[off_axis], z[off_axis]
            num = z / p
            lat = np.arctan2(num, LATITUDE_SEED_DENOMINATOR)
            n = ellipsoid.prime_vertical_radius(lat)
            h = _height(p, z, lat, n, e2)

            pending = np.arange(p.size)
            residual = np.empty(0)
            iterations = 0
            while pending.size:
                if iterations == max_iterations:
                    raise NonConvergenceError(iterations, tolerance, float(residual.max()))

                iterations += 1
                previous = h[pending]
                den = 1 - e2 * n[pending] / (n[pending] + previous)
                lat[pending] = np.arctan2(num[pending], den)
                n[pending] = ellipsoid.prime_vertical_radius(lat[pending])
                h[pending] = _height(p[pending], z[pending], lat[pending], n[pending], e2)

                # NaN residuals compare False and drop out, so NaN input passes through
                residual = np.abs(h[pending] - previous)
                unsettled = residual > tolerance
                pending, residual = pending[unsettled], residual[unsettled]

        LOGGER.debug('Geodetic conversion converged after %d iterations', iterations)
        latitude[off_axis] = lat
        hae[off_axis] = h
        return latitude, longitude, hae


def _height(p, z, latitude, n, e2):
    """
    Height above the ellipsoid at a latitude. Above 45 degrees the height is
    taken from z, since p / cos(latitude) loses all precision near the poles.
    """
    return np.where(
        np.abs(latitude) > np.pi / 4,
        z / np.sin(latitude) - n * (1 - e2),
        p / np.cos(latitude) - n,
    )


def _geodetic_to_ecef(ellipsoid: Ellipsoid, latitude, longitude, hae):
    """Closed-form geodetic -> ECEF on floats or arrays. Angles in radians."""
    with np.errstate(invalid='ignore', over='ignore'):
        n = ellipsoid.prime_vertical_radius(latitude)
        cos_lat = np.cos(latitude)
        x = (n + hae) * cos_lat * np.cos(longitude)
        y = (n + hae) * cos_lat * np.sin(longitude)
        z = ((ellipsoid.b ** 2 / ellipsoid.a ** 2) * n + hae) * np.sin(latitude)
    return x, y, z
