import pytest
from matplotlib import image as mpimage
from sdfmarch.sdb import cli


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('HOME', str(tmp_path))
    return tmp_path


def test_render_scene(workdir):
    cli.render_scene(['--width', '8', '--height', '4', '--processes', '1', '-o', 'scene.png'])
    assert mpimage.imread(str(workdir/'scene.png')).shape[:2] == (4, 8)

    # Height from aspect ratio is at least one pixel.
    cli.render_scene(['--width', '1', '--processes', '1', '-o', 'narrow.png'])
    assert mpimage.imread(str(workdir/'narrow.png')).shape[:2] == (1, 1)


def test_render_scene_config(workdir):
    (workdir/'sdfmarch.yml').write_text('march:\n  max_iterations: 100\nrender:\n  width: 6\n  height: 2\n  processes: 1\n')
    cli.render_scene(['--scene', 'csg', '--debug', '--backend', 'numba'])
    assert mpimage.imread(str(workdir/'out.png')).shape[:2] == (2, 6)


def test_render_scene_errors(workdir, capsys):
    with pytest.raises(SystemExit) as e:
        cli.render_scene(['--scene', 'teapot'])
    assert e.value.code == 1
    assert 'teapot' in capsys.readouterr().out

    (workdir/'sdfmarch.yml').write_text('march:\n  max_iteration: 100\n')
    with pytest.raises(SystemExit) as e:
        cli.render_scene([])
    assert e.value.code == 1

    (workdir/'sdfmarch.yml').unlink()
    with pytest.raises(SystemExit) as e:
        cli.render_scene(['--width', '0', '--processes', '1'])
    assert e.value.code == 1
    assert 'size' in capsys.readouterr().out

    # Rejected by argparse.
    with pytest.raises(SystemExit) as e:
        cli.render_scene(['--backend', 'glsl'])
    assert e.value.code == 2
