import numpy as np
import pytest
from itertools import product
from sdfmarch import sdb
from sdfmarch.sdb import demoscenes
from sdfmarch.sdb import numba as sdbn


def test_make_scene():
    scenes = demoscenes.make_all_scenes()
    assert set(scenes) == {'sphere_cuboid', 'julia', 'csg'}
    for name in scenes:
        assert isinstance(demoscenes.make_scene(name), sdb.Surface)

    with pytest.raises(ValueError):
        demoscenes.make_scene('teapot')


def test_backends_agree():
    for surface in demoscenes.make_all_scenes().values():
        getsdb_numba = sdbn.gen_getsdb(surface)
        for x, y, z in product(np.linspace(-1.5, 1.5, 4), np.linspace(-1, 1, 3), np.linspace(-3, -1, 3)):
            r = np.array((x, y, z))
            assert np.isclose(surface.getsdb(r), getsdb_numba(r))


def test_purity():
    points = [np.array(p) for p in ((0., 0., 0.), (0.3, -0.2, -2.4), (-1., 0.1, -2.5), (1.1, 0., -2.5))]
    for surface in demoscenes.make_all_scenes().values():
        getsdb_numba = sdbn.get_cached_getsdb(surface)
        for x in points:
            assert surface.getsdb(x) == surface.getsdb(x)
            assert getsdb_numba(x) == getsdb_numba(x)

        marcher = sdb.RayMarcher(surface, sdb.MarchConfig(max_iterations=500))
        ray = sdb.Ray.make((0, 0, 0), (0.1, -0.2, -1))
        assert np.array_equal(marcher.march(ray), marcher.march(ray))


def test_render_scenes():
    viewport = sdb.Viewport()
    for surface in demoscenes.make_all_scenes().values():
        marcher = sdb.RayMarcher(surface, sdb.MarchConfig(max_iterations=500))
        image = sdb.render(marcher, viewport, 4, 3, 1)
        assert np.all((image >= 0) & (image <= 1))
        # Something is in view.
        assert np.any(image > 0)
