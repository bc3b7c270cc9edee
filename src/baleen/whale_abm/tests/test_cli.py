import numpy as np
import pytest

from baleen.whale_abm import cli
from baleen.whale_abm.tests.fixtures.grids import EQUATORIAL_BOUNDS

BOUNDS_ARGS = ['--bounds', str(EQUATORIAL_BOUNDS['minx']), str(EQUATORIAL_BOUNDS['miny']),
               str(EQUATORIAL_BOUNDS['maxx']), str(EQUATORIAL_BOUNDS['maxy']), '--km-per-cell', '5']


def write_mask(tmp_path, water):
    path = tmp_path / 'mask.npy'
    np.save(path, water)
    return str(path)


def run(tmp_path, water, start, end, extra=()):
    argv = BOUNDS_ARGS + ['--mask', write_mask(tmp_path, water),
                          '--from', *map(str, start), '--to', *map(str, end), *extra]
    return cli.main(argv)


def test_open_water_path(tmp_path, capsys):
    code = run(tmp_path, np.ones((12, 12), dtype=bool), (10.05, 0.05), (10.45, 0.45))
    out = capsys.readouterr().out
    assert code == 0
    assert 'distance:' in out
    assert 'result:' in out and 'cells' in out
    assert out.strip().splitlines()[-1].startswith('1,1')


def test_blocked_by_land(tmp_path, capsys):
    water = np.ones((12, 12), dtype=bool)
    water[:, 5] = False
    code = run(tmp_path, water, (10.05, 0.05), (10.45, 0.45))
    out = capsys.readouterr().out
    assert code == 1
    assert 'no water path' in out
    assert out.strip().splitlines()[-1].startswith('land: 5,')


def test_depth_grid_with_threshold(tmp_path, capsys):
    depth = np.full((12, 12), 20.0)
    depth[:, 5] = 3.0
    assert run(tmp_path, depth, (10.05, 0.05), (10.45, 0.45)) == 0
    assert run(tmp_path, depth, (10.05, 0.05), (10.45, 0.45), extra=['--min-depth', '5']) == 1


def test_out_of_bounds(tmp_path, capsys):
    code = run(tmp_path, np.ones((12, 12), dtype=bool), (10.05, 0.05), (12.0, 0.25))
    out = capsys.readouterr().out
    assert code == 2
    assert 'OUT_OF_BOUNDS' in out
    assert 'out of bounds' in out


def test_invalid_extent(tmp_path, capsys):
    argv = ['--bounds', '10.5', '0.0', '10.0', '0.5', '--mask', write_mask(tmp_path, np.ones((2, 2), dtype=bool)),
            '--from', '10.1', '0.1', '--to', '10.2', '0.2']
    assert cli.main(argv) == 2
    assert 'invalid grid extent' in capsys.readouterr().err


def test_region_preset(tmp_path, capsys):
    argv = ['--region', 'Stellwagen Bank', '--km-per-cell', '2',
            '--mask', write_mask(tmp_path, np.ones((40, 26), dtype=bool)),
            '--from', '-70.5', '42.2', '--to', '-70.1', '42.6']
    assert cli.main(argv) == 0


def test_region_and_bounds_are_exclusive(tmp_path):
    with pytest.raises(SystemExit):
        cli.main(['--region', 'Cape Cod Bay', *BOUNDS_ARGS, '--mask', 'x.npy',
                  '--from', '0', '0', '--to', '1', '1'])
