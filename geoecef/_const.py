"""
Constants declarations for geoecef
"""

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_F = 1 / 298.257223563  # Flattening
WGS84_B = (1 - WGS84_F) * WGS84_A
WGS84_E2 = WGS84_F * (2 - WGS84_F)  # First eccentricity squared

# Geodetic (inverse) iteration
DEFAULT_MAX_ITERATIONS = 50
DEFAULT_TOLERANCE_METERS = 1e-4  # Change in height between refinements
LATITUDE_SEED_DENOMINATOR = 0.01
