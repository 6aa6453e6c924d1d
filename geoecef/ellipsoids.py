"""
Reference ellipsoid models used by the ECEF conversions
"""

__all__ = ['Ellipsoid', 'WGS84', 'resolve_ellipsoid']

import math
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np
from pydantic import validate_call

from geoecef._const import WGS84_A, WGS84_F
from geoecef.exceptions import InvalidEllipsoidError


_SHAPE_PARAMETERS = ('b', 'f', 'rf', 'e2')

# Alternate spellings accepted in custom descriptors
_PARAMETER_ALIASES = {
    'i': 'rf',
    'es': 'e2',
}


class Ellipsoid:
    """
    An oblate ellipsoid of revolution, defined by its semi-major axis `a` and
    semi-minor axis `b` (both in meters).

    Instances are immutable; build a new one to change the shape.
    """

    @validate_call
    def __init__(self, a: float, b: float, name: Optional[str] = None):
        if not (math.isfinite(a) and math.isfinite(b)):
            raise InvalidEllipsoidError(f'Ellipsoid axes must be finite, got a={a}, b={b}')
        if a <= 0:
            raise InvalidEllipsoidError(f'Semi-major axis must be positive, got a={a}')
        if b <= 0:
            raise InvalidEllipsoidError(f'Semi-minor axis must be positive, got b={b}')
        if b > a:
            raise InvalidEllipsoidError(
                f'Semi-minor axis must not exceed semi-major axis, got a={a}, b={b}'
            )

        self._a = a
        self._b = b
        self._name = name

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ellipsoid):
            return False

        return self.a == other.a and self.b == other.b

    def __hash__(self):
        return hash((self.a, self.b))

    def __repr__(self):
        if self.name:
            return f'<Ellipsoid {self.name!r} (a={self.a}, b={self.b})>'
        return f'<Ellipsoid(a={self.a}, b={self.b})>'

    @property
    def a(self) -> float:
        """Semi-major axis, in meters"""
        return self._a

    @property
    def b(self) -> float:
        """Semi-minor axis, in meters"""
        return self._b

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def f(self) -> float:
        """Flattening"""
        return 1 - self.b / self.a

    @property
    def e2(self) -> float:
        """First eccentricity squared"""
        return 1 - (self.b / self.a) ** 2

    @property
    def is_sphere(self) -> bool:
        return self.a == self.b

    def prime_vertical_radius(self, latitude):
        """
        The radius of curvature in the prime vertical (N) at a geodetic latitude.

        Accepts a float or a numpy array; arrays are evaluated element-wise.

        Args:
            latitude:
                The geodetic latitude, in radians

        Returns:
            N, in meters
        """
        return self.a / np.sqrt(1 - self.e2 * np.sin(latitude) ** 2)

    @classmethod
    def from_params(
        cls,
        a: float,
        b: Optional[float] = None,
        f: Optional[float] = None,
        rf: Optional[float] = None,
        e2: Optional[float] = None,
        name: Optional[str] = None,
    ) -> 'Ellipsoid':
        """
        Creates an Ellipsoid from its semi-major axis plus at most one shape
        parameter. If no shape parameter is given the result is a sphere of
        radius `a`.

        Args:
            a:
                Semi-major axis, in meters

            b:
                Semi-minor axis, in meters

            f:
                Flattening

            rf:
                Inverse flattening (1/f)

            e2:
                First eccentricity squared

            name: (Optional)
                A display name

        Returns:
            Ellipsoid
        """
        given = {
            key: value for key, value in zip(_SHAPE_PARAMETERS, (b, f, rf, e2))
            if value is not None
        }
        if len(given) > 1:
            raise InvalidEllipsoidError(
                f'Ellipsoid must be defined by at most one of {_SHAPE_PARAMETERS}, '
                f'got {sorted(given)}'
            )

        if b is not None:
            return cls(a, b, name=name)

        if rf is not None:
            if rf == 0:
                raise InvalidEllipsoidError('Inverse flattening must be non-zero')
            f = 1 / float(rf)

        if f is not None:
            if not 0 <= f < 1:
                raise InvalidEllipsoidError(f'Flattening must be in [0, 1), got f={f}')
            return cls(a, (1 - f) * a, name=name)

        if e2 is not None:
            if not 0 <= e2 < 1:
                raise InvalidEllipsoidError(
                    f'Eccentricity squared must be in [0, 1), got e2={e2}'
                )
            return cls(a, a * math.sqrt(1 - e2), name=name)

        return cls(a, a, name=name)

    @classmethod
    def from_dict(cls, descriptor: Mapping[str, Any]) -> 'Ellipsoid':
        """
        Creates an Ellipsoid from a mapping such as {'a': 6378137.0, 'rf': 298.257223563}.

        Accepted keys are 'a', 'b', 'f', 'rf' (alias 'i'), 'e2' (alias 'es') and 'name'.
        """
        params: Dict[str, Any] = {}
        for key, value in descriptor.items():
            key = _PARAMETER_ALIASES.get(key, key)
            if key not in ('a', 'name', *_SHAPE_PARAMETERS):
                raise InvalidEllipsoidError(f'Unrecognized ellipsoid parameter: {key!r}')
            if key in params:
                raise InvalidEllipsoidError(f'Ellipsoid parameter {key!r} given more than once')
            params[key] = value

        if 'a' not in params:
            raise InvalidEllipsoidError('Ellipsoid descriptor must define a semi-major axis (a)')

        return cls.from_params(**params)

    @classmethod
    def from_name(cls, name: str) -> 'Ellipsoid':
        """
        Looks up a named ellipsoid, e.g. 'WGS84', 'GRS80', 'clrk66' or 'Clarke 1866'.

        Matching ignores case, whitespace, hyphens and underscores, and checks both
        the PROJ identifier and its description. Anything other than WGS84 requires
        pyproj (pip install geoecef[proj]).
        """
        target = _normalize_name(name)
        if target == 'wgs84':
            return WGS84

        from pyproj.list import get_ellps_map  # pylint: disable=import-outside-toplevel

        for key, params in get_ellps_map().items():
            description = params.get('description', '')
            if target not in (_normalize_name(key), _normalize_name(description)):
                continue

            shape = {k: v for k, v in params.items() if k not in ('a', 'description')}
            try:
                return cls.from_dict({'a': params['a'], 'name': description or key, **shape})
            except KeyError as e:
                raise InvalidEllipsoidError(f'Ellipsoid {name!r} has no semi-major axis') from e

        raise InvalidEllipsoidError(f'Unknown ellipsoid: {name!r}')


def _normalize_name(name: str) -> str:
    return ''.join(ch for ch in name.lower() if ch not in ' -_')


WGS84 = Ellipsoid.from_params(WGS84_A, f=WGS84_F, name='WGS 84')


def resolve_ellipsoid(descriptor: Union[None, str, Mapping[str, Any], Ellipsoid] = None) -> Ellipsoid:
    """
    Turns an ellipsoid descriptor into an Ellipsoid.

    Args:
        descriptor:
            None (WGS84), an Ellipsoid, an ellipsoid name, or a mapping of
            parameters (see Ellipsoid.from_dict)

    Returns:
        Ellipsoid
    """
    if descriptor is None:
        return WGS84

    if isinstance(descriptor, Ellipsoid):
        return descriptor

    if isinstance(descriptor, str):
        return Ellipsoid.from_name(descriptor)

    if isinstance(descriptor, Mapping):
        return Ellipsoid.from_dict(descriptor)

    raise TypeError(
        f'Ellipsoid must be described by a name, mapping or Ellipsoid, not {type(descriptor)}'
    )
