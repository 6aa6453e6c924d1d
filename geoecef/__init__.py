from geoecef._version import __version__  # noqa: F401
from geoecef.utils.logging import LOGGER
from geoecef.coordinates import ECEFCoordinate, GeodeticCoordinate
from geoecef.ellipsoids import WGS84, Ellipsoid, resolve_ellipsoid
from geoecef.exceptions import InvalidEllipsoidError, NonConvergenceError
from geoecef.converter import ECEFConverter


__all__ = [
    'ECEFConverter',
    'ECEFCoordinate',
    'Ellipsoid',
    'GeodeticCoordinate',
    'InvalidEllipsoidError',
    'NonConvergenceError',
    'WGS84',
    'resolve_ellipsoid',
    'LOGGER',
]
