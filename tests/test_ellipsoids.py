import math

import numpy as np
import pytest
from pytest import approx

from geoecef import WGS84, Ellipsoid, InvalidEllipsoidError, resolve_ellipsoid
from geoecef._const import WGS84_A, WGS84_B, WGS84_E2, WGS84_F


def test_wgs84():
    assert WGS84.a == WGS84_A
    assert WGS84.b == approx(WGS84_B, abs=1e-9)
    assert WGS84.b == approx(6356752.314245, abs=1e-6)
    assert WGS84.f == approx(WGS84_F, rel=1e-12)
    assert WGS84.e2 == approx(WGS84_E2, rel=1e-12)
    assert WGS84.e2 == approx(0.00669437999014, abs=1e-14)
    assert not WGS84.is_sphere


def test_ellipsoid_eq():
    assert Ellipsoid(2., 1.) == Ellipsoid(2., 1.)
    assert Ellipsoid(2., 1., name='foo') == Ellipsoid(2., 1., name='bar')
    assert Ellipsoid(2., 1.) != Ellipsoid(2., 1.5)
    assert Ellipsoid(2., 1.) != (2., 1.)


def test_ellipsoid_hash():
    ellipsoids = [
        Ellipsoid(2., 1.),
        Ellipsoid(2., 1.),
        Ellipsoid(3., 1.),
    ]
    assert len(set(ellipsoids)) == 2


def test_ellipsoid_repr():
    assert repr(Ellipsoid(2., 1.)) == '<Ellipsoid(a=2.0, b=1.0)>'
    assert repr(Ellipsoid(2., 1., name='test')) == "<Ellipsoid 'test' (a=2.0, b=1.0)>"


def test_ellipsoid_immutable():
    ellipsoid = Ellipsoid(2., 1.)
    with pytest.raises(AttributeError):
        ellipsoid.a = 3.

    with pytest.raises(AttributeError):
        ellipsoid.e2 = 0.


def test_ellipsoid_invalid():
    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid(0., 0.)

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid(-1., -1.)

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid(1., 2.)

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid(1., 0.)

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid(float('nan'), 1.)

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid(float('inf'), 1.)

    # Rejected by argument validation
    with pytest.raises(ValueError):
        Ellipsoid('not a number', 1.)


def test_prime_vertical_radius():
    # Equal to a on the equator, a^2/b at the poles
    assert WGS84.prime_vertical_radius(0.) == WGS84.a
    assert WGS84.prime_vertical_radius(math.pi / 2) == approx(WGS84.a ** 2 / WGS84.b, abs=1e-6)

    # Sphere has a constant radius
    sphere = Ellipsoid(5., 5.)
    assert sphere.prime_vertical_radius(0.7) == approx(5.)

    # Element-wise over arrays
    radii = WGS84.prime_vertical_radius(np.array([0., math.pi / 2]))
    assert radii.shape == (2,)
    assert radii[0] == WGS84.a


def test_from_params():
    assert Ellipsoid.from_params(1.) == Ellipsoid(1., 1.)
    assert Ellipsoid.from_params(1.).is_sphere
    assert Ellipsoid.from_params(2., b=1.) == Ellipsoid(2., 1.)
    assert Ellipsoid.from_params(2., f=0.5) == Ellipsoid(2., 1.)
    assert Ellipsoid.from_params(2., rf=2.) == Ellipsoid(2., 1.)
    assert Ellipsoid.from_params(2., e2=0.75).b == approx(1., abs=1e-12)
    assert Ellipsoid.from_params(2., name='test').name == 'test'

    grs80 = Ellipsoid.from_params(6378137.0, rf=298.257222101)
    assert grs80.b == approx(6356752.314140, abs=1e-6)


def test_from_params_invalid():
    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_params(0.)

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_params(1., b=2.)

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_params(1., f=1.)

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_params(1., f=-0.1)

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_params(1., rf=0.)

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_params(1., e2=1.)

    # Over-specified
    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_params(2., b=1., f=0.5)


def test_from_dict():
    assert Ellipsoid.from_dict({'a': 1.}) == Ellipsoid(1., 1.)
    assert Ellipsoid.from_dict({'a': 2., 'b': 1.}) == Ellipsoid(2., 1.)
    assert Ellipsoid.from_dict({'a': 2., 'f': 0.5}) == Ellipsoid(2., 1.)
    assert Ellipsoid.from_dict({'a': 2., 'i': 2.}) == Ellipsoid(2., 1.)
    assert Ellipsoid.from_dict({'a': 2., 'es': 0.}) == Ellipsoid(2., 2.)
    assert Ellipsoid.from_dict({'a': 2., 'name': 'test'}).name == 'test'

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_dict({'b': 1.})

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_dict({'a': 1., 'foo': 1.})

    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_dict({'a': 2., 'rf': 2., 'i': 2.})


def test_from_name():
    # WGS84 does not require a lookup
    assert Ellipsoid.from_name('WGS84') is WGS84
    assert Ellipsoid.from_name('wgs 84') is WGS84
    assert Ellipsoid.from_name('WGS-84') is WGS84

    clarke = Ellipsoid.from_name('Clarke 1866')
    assert clarke.a == 6378206.4
    assert clarke.b == 6356583.8
    assert clarke.name == 'Clarke 1866'
    assert Ellipsoid.from_name('clrk66') == clarke

    grs80 = Ellipsoid.from_name('GRS80')
    assert grs80.a == 6378137.0
    assert grs80.f == approx(1 / 298.257222101, rel=1e-9)


def test_from_name_unknown():
    with pytest.raises(InvalidEllipsoidError):
        Ellipsoid.from_name('Not An Ellipsoid')


def test_resolve_ellipsoid():
    assert resolve_ellipsoid() is WGS84
    assert resolve_ellipsoid(None) is WGS84

    ellipsoid = Ellipsoid(2., 1.)
    assert resolve_ellipsoid(ellipsoid) is ellipsoid
    assert resolve_ellipsoid({'a': 2., 'b': 1.}) == ellipsoid
    assert resolve_ellipsoid('WGS84') is WGS84
    assert resolve_ellipsoid('clrk66').a == 6378206.4

    with pytest.raises(TypeError):
        resolve_ellipsoid(6378137.0)
