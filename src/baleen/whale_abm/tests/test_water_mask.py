import numpy as np
import pytest

from baleen.whale_abm.water_mask import WaterMask
from baleen.whale_abm.tests.fixtures.grids import mask_from_ascii


def test_row_zero_is_south():
    water = np.array([[True, False, False],
                      [False, False, True]])
    mask = WaterMask(water)
    assert mask(0, 0) is True
    assert mask(2, 1) is True
    assert mask(1, 0) is False
    assert mask.shape == (2, 3)


def test_north_up_flips_rows():
    mask = mask_from_ascii([
        "~#",
        "##",
    ])
    assert mask(0, 1) is True
    assert mask(0, 0) is False


def test_off_grid_cells_are_land():
    mask = WaterMask(np.ones((3, 4), dtype=bool))
    for col, row in [(-1, 0), (0, -1), (4, 0), (0, 3), (100, 100)]:
        assert mask(col, row) is False


def test_mask_is_a_snapshot():
    water = np.ones((2, 2), dtype=bool)
    mask = WaterMask(water)
    water[0, 0] = False
    assert mask(0, 0) is True
    with pytest.raises(ValueError):
        mask.as_array()[0, 0] = False


def test_from_depth():
    depth = np.array([[-5.0, 0.0, 2.0],
                      [np.nan, 10.0, 0.5]])
    mask = WaterMask.from_depth(depth)
    assert [mask(c, 0) for c in range(3)] == [False, False, True]
    assert [mask(c, 1) for c in range(3)] == [False, True, True]
    deep = WaterMask.from_depth(depth, min_depth=1.0)
    assert deep(2, 1) is False
    assert deep.n_water == 2


def test_water_fraction():
    mask = WaterMask(np.array([[True, False], [True, True]]))
    assert mask.n_water == 3
    assert mask.water_fraction == pytest.approx(0.75)


def test_rejects_non_2d():
    with pytest.raises(ValueError):
        WaterMask(np.ones(5, dtype=bool))


def test_load_bool_and_depth(tmp_path):
    bool_path = tmp_path / 'mask.npy'
    np.save(bool_path, np.array([[True, False]]))
    assert WaterMask.load(bool_path)(0, 0) is True
    assert WaterMask.load(bool_path)(1, 0) is False

    depth_path = tmp_path / 'depth.npy'
    np.save(depth_path, np.array([[3.0, -1.0], [0.2, 8.0]]))
    mask = WaterMask.load(depth_path, min_depth=0.5)
    assert mask(0, 0) is True
    assert mask(0, 1) is False
    assert mask(1, 1) is True
