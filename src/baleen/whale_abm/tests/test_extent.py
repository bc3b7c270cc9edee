import dataclasses
import logging
import math
import pytest

from baleen.whale_abm.geodesy import GeoPoint, GridExtent, grid_to_geo
from baleen.whale_abm.results import ExtentConfigurationError
from baleen.whale_abm.tests.fixtures.grids import EQUATORIAL_BOUNDS, equatorial_extent


def test_from_bounds_measures_sides():
    extent = equatorial_extent()
    assert extent.lower_left == GeoPoint(10.0, 0.0)
    assert extent.lower_right == GeoPoint(10.5, 0.0)
    assert extent.upper_left == GeoPoint(10.0, 0.5)
    assert extent.width_km == pytest.approx(0.5 * math.pi / 180.0 * 6367.5)
    assert extent.height_km == pytest.approx(55.2872, abs=1e-3)
    assert extent.n_cols == 12
    assert extent.n_rows == 12


def test_corners_coerced_to_geopoints():
    extent = GridExtent((0.0, 0.0), (0.5, 0.0), (0.0, 0.5), 55.0, 55.0, 5.0)
    assert isinstance(extent.lower_right, GeoPoint)
    assert extent.upper_left.latitude == 0.5


def test_extent_is_immutable():
    extent = equatorial_extent()
    with pytest.raises(dataclasses.FrozenInstanceError):
        extent.km_per_cell = 1.0


def test_transform_maps_corners():
    extent = equatorial_extent()
    assert grid_to_geo(0, 0, extent) == pytest.approx((10.0, 0.0))
    assert grid_to_geo(extent.width_km / extent.km_per_cell, 0, extent) == pytest.approx((10.5, 0.0))
    assert grid_to_geo(0, extent.height_km / extent.km_per_cell, extent) == pytest.approx((10.0, 0.5))


@pytest.mark.parametrize("km_per_cell", [0.0, -1.0, float('nan'), float('inf')])
def test_bad_cell_size_rejected(km_per_cell):
    with pytest.raises(ExtentConfigurationError):
        GridExtent.from_bounds(EQUATORIAL_BOUNDS, km_per_cell)


def test_zero_width_rejected():
    bounds = dict(EQUATORIAL_BOUNDS, maxx=EQUATORIAL_BOUNDS['minx'])
    with pytest.raises(ExtentConfigurationError):
        GridExtent.from_bounds(bounds, 1.0)


def test_negative_height_rejected():
    with pytest.raises(ExtentConfigurationError):
        GridExtent((0.0, 0.0), (0.5, 0.0), (0.0, 0.5), 55.0, -55.0, 5.0)


def test_coincident_corners_rejected():
    with pytest.raises(ExtentConfigurationError):
        GridExtent((0.0, 0.0), (0.0, 0.0), (0.0, 0.5), 55.0, 55.0, 5.0)


def test_skewed_corners_rejected(caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(ExtentConfigurationError):
            GridExtent.from_corners((0.0, 0.0), (0.5, 0.0), (0.2, 0.5), 1.0)
    assert 'Invalid grid extent' in caplog.text


def test_small_skew_within_tolerance():
    extent = GridExtent.from_corners((0.0, 0.0), (0.5, 0.0), (0.001, 0.5), 1.0)
    assert extent.height_km > 0


def test_configuration_error_is_value_error():
    assert issubclass(ExtentConfigurationError, ValueError)


def test_reversed_bounds_rejected():
    bounds = dict(EQUATORIAL_BOUNDS, minx=10.5, maxx=10.0)
    with pytest.raises(ExtentConfigurationError):
        GridExtent.from_bounds(bounds, 1.0)


@pytest.mark.parametrize("corners", [
    ((float('nan'), 0.0), (0.5, 0.0), (0.0, 0.5)),
    ((0.0, 0.0), (0.5, float('inf')), (0.0, 0.5)),
    ((0.0, 0.0), (0.5, 0.0), (0.0, float('nan'))),
])
def test_non_finite_corner_rejected(corners):
    with pytest.raises(ExtentConfigurationError):
        GridExtent(*corners, 55.0, 55.0, 5.0)


def test_mirrored_corners_rejected():
    # upper_left south of lower_left would make grid y grow southward
    with pytest.raises(ExtentConfigurationError):
        GridExtent.from_corners((0.0, 0.5), (0.5, 0.5), (0.0, 0.0), 5.0)


def test_southern_hemisphere_extent_accepted():
    extent = GridExtent.from_bounds({'minx': 150.0, 'maxx': 150.5, 'miny': -34.5, 'maxy': -34.0}, 5.0)
    assert extent.n_rows > 1
