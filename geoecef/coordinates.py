"""
Representations of a position in geodetic and ECEF terms
"""

__all__ = ['ECEFCoordinate', 'GeodeticCoordinate']

import math
from typing import Tuple

import numpy as np

from geoecef.utils.logging import warn_once


class GeodeticCoordinate:
    """
    A geodetic position: latitude and longitude in degrees, height above the
    ellipsoid in meters.

    Values are stored as given. A latitude outside [-90, 90] is allowed but
    converts to a physically meaningless ECEF position.
    """

    def __init__(
        self,
        latitude: float = 0.0,
        longitude: float = 0.0,
        height: float = 0.0,
    ):
        self.latitude = float(latitude)
        self.longitude = float(longitude)
        self.height = float(height)

        if abs(self.latitude) > 90:
            warn_once(
                'Latitude %s is outside [-90, 90] and does not describe a real position; '
                'conversions will not be meaningful.',
                self.latitude,
            )

    def __eq__(self, other):
        if not isinstance(other, GeodeticCoordinate):
            return False

        return (
            self.latitude == other.latitude and
            self.longitude == other.longitude and
            self.height == other.height
        )

    def __hash__(self):
        return hash((self.latitude, self.longitude, self.height))

    def __repr__(self):
        return f'<GeodeticCoordinate({self.latitude}, {self.longitude}, {self.height})>'

    @classmethod
    def from_radians(cls, latitude: float = 0.0, longitude: float = 0.0, height: float = 0.0):
        """Creates a GeodeticCoordinate from a latitude and longitude in radians"""
        return cls(math.degrees(latitude), math.degrees(longitude), height)

    def to_float(self, reverse: bool = False) -> Tuple[float, float, float]:
        """
        Converts the coordinate to a tuple of floats (latitude, longitude, height).

        Args:
            reverse: (bool)
                (Default False) If True, reverses the angle order to (longitude, latitude, height)

        Returns:
            Tuple of length 3
        """
        if reverse:
            return self.longitude, self.latitude, self.height

        return self.latitude, self.longitude, self.height

    def to_radians(self) -> Tuple[float, float, float]:
        """Returns (latitude, longitude, height) with the angles in radians"""
        return math.radians(self.latitude), math.radians(self.longitude), self.height


class ECEFCoordinate:
    """An earth-centered, earth-fixed cartesian position, in meters"""

    def __init__(self, x: float, y: float, z: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __eq__(self, other):
        if not isinstance(other, ECEFCoordinate):
            return False

        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __repr__(self):
        return f'<ECEFCoordinate({self.x}, {self.y}, {self.z})>'

    def distance_to(self, other: 'ECEFCoordinate') -> float:
        """
        The straight-line (chord) distance to another ECEF position.

        Args:
            other:
                A second ECEFCoordinate

        Returns:
            (float) the distance in meters
        """
        return math.dist(self.to_float(), other.to_float())

    def to_float(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z

    def to_numpy(self) -> np.ndarray:
        """Returns the position as a numpy array [x, y, z]"""
        return np.array(self.to_float())
