import numpy as np
import pytest
from sdfmarch import sdb
from sdfmarch.functions import normalize


def test_Sphere():
    s = sdb.Sphere(1.0)
    assert np.isclose(s.getsdb(np.array((1.0, 1.0, 1.0))), 3**0.5 - 1)

    s = sdb.Sphere(1.0, (1.0, 1.0, 1.0))
    assert np.isclose(s.getsdb(np.array((2.0, 2.0, 2.0))), 3**0.5 - 1)
    assert np.isclose(s.getsdb(np.array((1.0, 1.0, 1.0))), -1)


def test_Cuboid():
    s = sdb.Cuboid((1, 2, 3))
    assert np.isclose(s.getsdb(np.array((2.0, 0.0, 0.0))), 1)
    assert np.isclose(s.getsdb(np.array((0.0, 0.0, 0.0))), -1)
    assert np.isclose(s.getsdb(np.array((2.0, 3.0, 4.0))), 3**0.5)

    s = sdb.Cuboid((1, 2, 3), (1, 1, 1))
    assert np.isclose(s.getsdb(np.array((3.0, 1.0, 1.0))), 1)


def test_Torus():
    s = sdb.Torus(1, 0.25, (0, 0, 1))
    assert np.isclose(s.getsdb(np.array((1.0, 0.0, 1.0))), -0.25)
    assert np.isclose(s.getsdb(np.array((0.0, 0.0, 1.0))), 0.75)
    assert np.isclose(s.getsdb(np.array((0.0, 0.0, 3.0))), 0.75)


def test_Plane():
    s = sdb.Plane((0, 2, 0), 1)
    assert np.array_equal(s.n, normalize(np.array((0., 2., 0.))))
    assert np.isclose(s.getsdb(np.array((5.0, 3.0, -2.0))), 4)

    s = sdb.Plane((1, 1, 0), 0)
    assert np.isclose(s.getsdb(np.array((1.0, 1.0, 7.0))), 2**0.5)


def test_Julia():
    c = (-0.2, 0.6, 0.5, -0.3)

    # No iterations gives the estimate of the starting point.
    s = sdb.Julia(c, max_iterations=0)
    assert np.isclose(s.getsdb(np.array((2.0, 0.0, 0.0))), np.log(2))

    # Starts at origin - derivative vanishes.
    s = sdb.Julia(c, (1, 2, 3))
    assert s.getsdb(np.array((1.0, 2.0, 3.0))) == 0

    # Escapes immediately.
    s = sdb.Julia(c)
    assert np.isclose(s.getsdb(np.array((20.0, 0.0, 0.0))), 0.25*np.log(400)*20)

    s = sdb.Julia(c, max_iterations=0, clip=True, clip_height=0.)
    assert s.getsdb(np.array((0.0, 5.0, 0.0))) == 5

    # z = 1 is a fixed point of z**3. Distance to trap circle is -0.5.
    s = sdb.Julia((0, 0, 0, 0), max_iterations=1, trap=True, trap_center=(1, 0), trap_radius=0.5)
    assert np.isclose(s.getsdb(np.array((1.0, 0.0, 0.0))), -0.5)

    with pytest.raises(ValueError):
        sdb.Julia(c, max_iterations=-1)

    with pytest.raises(NotImplementedError):
        sdb.Julia(c).scale(2)


def test_UnionOp():
    s = sdb.UnionOp((sdb.Sphere(1.0), sdb.Sphere(1.0, (1.0, 0, 0))))
    assert np.isclose(s.getsdb(np.array((3.0, 0.0, 0.0))), 1.0)
    assert np.isclose(s.getsdb(np.array((-2.0, 0.0, 0.0))), 1.0)

    with pytest.raises(AssertionError):
        sdb.UnionOp((sdb.Sphere(1.0),))


def test_IntersectionOp():
    s = sdb.IntersectionOp((sdb.Sphere(1.0), sdb.Sphere(1.0, (1.0, 0, 0))))
    assert np.isclose(s.getsdb(np.array((3.0, 0.0, 0.0))), 2.0)
    assert np.isclose(s.getsdb(np.array((0.5, 0.0, 0.0))), -0.5)


def test_SubtractionOp():
    s = sdb.SubtractionOp(sdb.Sphere(0.5), sdb.Sphere(1.0))
    assert np.isclose(s.getsdb(np.array((0.0, 0.0, 0.25))), 0.25)
    assert np.isclose(s.getsdb(np.array((0.0, 0.0, 1.25))), 0.25)
    assert np.isclose(s.getsdb(np.array((0.0, 0.0, 0.75))), -0.25)


def test_Surface():
    s0 = sdb.Sphere(1.0)
    s1 = sdb.Sphere(1.0)
    s2 = sdb.UnionOp((s0, s1))
    s3 = sdb.Sphere(1.0)
    s4 = sdb.IntersectionOp((s2, s3))
    assert s0.get_ancestors() == [s0, s2, s4]
    assert list(s4.descendants()) == [s0, s1, s2, s3, s4]

    # A surface can only belong to one tree.
    with pytest.raises(AssertionError):
        sdb.UnionOp((s0, sdb.Sphere(1.0)))

    with pytest.raises(NotImplementedError):
        sdb.Surface().getsdb(np.zeros(3))


def test_scale():
    s0 = sdb.UnionOp((sdb.Sphere(1.0, (1, 0, 0)), sdb.SubtractionOp(sdb.Cuboid((1, 1, 1)), sdb.Torus(2, 0.5))))
    f = 2.
    s1 = s0.scale(f)
    assert s1.surfaces[0].r == 2
    assert np.array_equal(s1.surfaces[0].center, (2, 0, 0))
    for x in (np.array((3.0, 0.5, -0.5)), np.array((0.0, 0.25, 1.0)), np.array((-2.0, 1.0, 0.0))):
        assert np.isclose(s1.getsdb(x*f), s0.getsdb(x)*f)
