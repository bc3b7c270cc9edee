"""
geodesy.py

Flat-Earth geodesy for sub-degree study areas, and the projection of
geographic points onto the simulation grid.

Public functions:
- `degrees_longitude_to_km(span, avg_lat)` / `degrees_latitude_to_km(span, avg_lat)`
- `distance_between_km(p1, p2)` -> km (local approximation)
- `reference_distance_km(p1, p2)` -> km (WGS84 geodesic via pyproj)
- `project(point, extent)` -> GridCoord or OUT_OF_BOUNDS
- `cell_for_point(point, extent)` -> (col, row) or OUT_OF_BOUNDS
- `grid_to_geo(x, y, extent)` -> GeoPoint
- `km_to_cells(km, extent)` -> grid units

Grid coordinates put cell centres on integers. Cell (0, 0) is centred on the
lower-left corner of the extent, x grows toward the lower-right corner and y
toward the upper-left corner.
"""
import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Union

import numpy as np
from affine import Affine
from pyproj import Geod

from baleen.whale_abm import config
from baleen.whale_abm.results import OUT_OF_BOUNDS, ExtentConfigurationError, Failure
from baleen.whale_abm.utils import Cell, round_half_up

logger = logging.getLogger(__name__)

_GEOD = Geod(ellps='WGS84')


class GeoPoint(NamedTuple):
    longitude: float
    latitude: float


class GridCoord(NamedTuple):
    x: float
    y: float


def degrees_longitude_to_km(degree_span, avg_latitude_deg):
    """Convert a span of longitude (degrees) to km at ``avg_latitude_deg``.

    Uses km per degree = (pi/180) * R * cos(lat). Accepts scalars or numpy
    arrays and returns the same shape.
    """
    km_per_degree = (math.pi / 180.0) * config.EARTH_RADIUS_KM * np.cos(np.radians(avg_latitude_deg))
    return np.asarray(degree_span, dtype=float) * km_per_degree


def degrees_latitude_to_km(degree_span, avg_latitude_deg):
    """Convert a span of latitude (degrees) to km at ``avg_latitude_deg``.

    Uses the WGS84 meridian arc series in cos(2*lat) and cos(4*lat).
    """
    c0, c2, c4 = config.MERIDIAN_M_PER_DEGREE
    lat = np.radians(avg_latitude_deg)
    m_per_degree = c0 + c2 * np.cos(2.0 * lat) + c4 * np.cos(4.0 * lat)
    return np.asarray(degree_span, dtype=float) * m_per_degree / config.M_PER_KM


def distance_between_km(p1, p2):
    """Local flat-Earth distance in km between two (lon, lat) points.

    Good to well under a percent for points within about a degree of each
    other; it is not a geodesic. Longitudes and latitudes may be numpy arrays,
    in which case distances are computed element-wise.
    """
    lon1, lat1 = p1
    lon2, lat2 = p2
    avg_lat = (np.asarray(lat1, dtype=float) + lat2) / 2.0
    dx = degrees_longitude_to_km(np.subtract(lon2, lon1), avg_lat)
    dy = degrees_latitude_to_km(np.subtract(lat2, lat1), avg_lat)
    return np.hypot(dx, dy)


def reference_distance_km(p1, p2) -> float:
    """WGS84 geodesic distance in km, for checking the local approximation."""
    _, _, dist_m = _GEOD.inv(p1[0], p1[1], p2[0], p2[1])
    return dist_m / config.M_PER_KM


def _corner_angle_deg(corner, a, b) -> Optional[float]:
    """Angle at ``corner`` between the edges to ``a`` and ``b`` in the local km frame."""
    edges = []
    for p in (a, b):
        avg_lat = (corner.latitude + p.latitude) / 2.0
        edges.append((float(degrees_longitude_to_km(p.longitude - corner.longitude, avg_lat)),
                      float(degrees_latitude_to_km(p.latitude - corner.latitude, avg_lat))))
    (ax, ay), (bx, by) = edges
    if math.hypot(ax, ay) == 0.0 or math.hypot(bx, by) == 0.0:
        return None
    # signed: negative when upper_left lies clockwise of lower_right
    return math.degrees(math.atan2(ax * by - ay * bx, ax * bx + ay * by))


def _reject(msg):
    logger.error('Invalid grid extent: %s', msg)
    raise ExtentConfigurationError(msg)


@dataclass(frozen=True)
class GridExtent:
    """Geometry of the rectangular world, fixed for the whole run.

    The three corners must form a right angle at the lower-left corner, turning
    counterclockwise from lower_right to upper_left, so grid y increases
    northward when x increases eastward. The physical size and cell size must
    be positive. Violations raise `ExtentConfigurationError`.
    """
    lower_left: GeoPoint
    lower_right: GeoPoint
    upper_left: GeoPoint
    width_km: float
    height_km: float
    km_per_cell: float

    def __post_init__(self):
        for name in ('lower_left', 'lower_right', 'upper_left'):
            object.__setattr__(self, name, GeoPoint(*map(float, getattr(self, name))))
            if not all(map(math.isfinite, getattr(self, name))):
                _reject(f'{name} must have finite coordinates, got {getattr(self, name)!r}')
        for name in ('width_km', 'height_km', 'km_per_cell'):
            value = float(getattr(self, name))
            if not (math.isfinite(value) and value > 0.0):
                _reject(f'{name} must be a finite positive number, got {value!r}')
            object.__setattr__(self, name, value)

        angle = _corner_angle_deg(self.lower_left, self.lower_right, self.upper_left)
        if angle is None:
            _reject('corners must be distinct points')
        if not abs(angle - 90.0) <= config.RIGHT_ANGLE_TOLERANCE_DEG:
            _reject(f'corners meet at {angle:.3f} deg at the lower-left corner, expected 90')

    @classmethod
    def from_corners(cls, lower_left, lower_right, upper_left, km_per_cell):
        """Build an extent whose width and height are measured from its corners."""
        ll, lr, ul = GeoPoint(*lower_left), GeoPoint(*lower_right), GeoPoint(*upper_left)
        return cls(ll, lr, ul,
                   width_km=float(distance_between_km(ll, lr)),
                   height_km=float(distance_between_km(ll, ul)),
                   km_per_cell=km_per_cell)

    @classmethod
    def from_bounds(cls, bounds, km_per_cell):
        """Build an axis-aligned extent from a ``{'minx','maxx','miny','maxy'}`` box."""
        minx, maxx = bounds['minx'], bounds['maxx']
        miny, maxy = bounds['miny'], bounds['maxy']
        if not (maxx > minx and maxy > miny):
            _reject(f'bounds must satisfy minx < maxx and miny < maxy, got {dict(bounds)!r}')
        return cls.from_corners((minx, miny), (maxx, miny), (minx, maxy), km_per_cell)

    @property
    def n_cols(self) -> int:
        return round_half_up(self.width_km / self.km_per_cell) + 1

    @property
    def n_rows(self) -> int:
        return round_half_up(self.height_km / self.km_per_cell) + 1

    @property
    def transform(self) -> Affine:
        """Affine mapping grid (x, y) to (lon, lat), linear between the corners."""
        ll, lr, ul = self.lower_left, self.lower_right, self.upper_left
        sx = self.km_per_cell / self.width_km
        sy = self.km_per_cell / self.height_km
        return Affine((lr.longitude - ll.longitude) * sx, (ul.longitude - ll.longitude) * sy, ll.longitude,
                      (lr.latitude - ll.latitude) * sx, (ul.latitude - ll.latitude) * sy, ll.latitude)


def _foot_offset(base, near, far):
    """Signed distance along ``base`` from its ``near`` end to the foot of the height."""
    return (near * near + base * base - far * far) / (2.0 * base)


def _triangle_height(base, side_a, side_b, tolerance_km):
    """Height over ``base`` of the triangle with sides (base, side_a, side_b).

    Heron's formula in the cancellation-safe ordering. Returns None when the
    radicand is negative by more than ``tolerance_km`` allows.
    """
    a, b, c = sorted((base, side_a, side_b), reverse=True)
    radicand = (a + (b + c)) * (c - (a - b)) * (c + (a - b)) * (a + (b - c))
    # radicand == 16 * area**2 and height == 2 * area / base
    height_sq = radicand / (4.0 * base * base)
    if height_sq < -tolerance_km * tolerance_km:
        return None
    return math.sqrt(max(height_sq, 0.0))


def project(point, extent: GridExtent) -> Union[GridCoord, Failure]:
    """Project a (lon, lat) point into grid coordinates of ``extent``.

    The distance from the bottom edge is the height of triangle (P, LL, LR)
    and the distance from the left edge is the height of triangle (P, LL, UL).
    Each is taken as a fraction of the perpendicular side and scaled to the
    extent's km size, then to cells.

    Returns OUT_OF_BOUNDS when the point falls outside the rectangle by more
    than `PROJECTION_EDGE_TOLERANCE_CELLS`, or when a triangle degenerates.
    """
    p = GeoPoint(*point)
    ll, lr, ul = extent.lower_left, extent.lower_right, extent.upper_left
    tol_km = config.PROJECTION_EDGE_TOLERANCE_CELLS * extent.km_per_cell

    bottom = float(distance_between_km(ll, lr))
    left = float(distance_between_km(ll, ul))
    to_ll = float(distance_between_km(p, ll))
    to_lr = float(distance_between_km(p, lr))
    to_ul = float(distance_between_km(p, ul))

    # Heights are unsigned, so the footprint is checked with the signed feet.
    along_bottom = _foot_offset(bottom, to_ll, to_lr)
    along_left = _foot_offset(left, to_ll, to_ul)
    if not (-tol_km < along_bottom < bottom + tol_km and -tol_km < along_left < left + tol_km):
        logger.debug('(%.5f, %.5f) lies outside the grid extent', p.longitude, p.latitude)
        return OUT_OF_BOUNDS

    rise = _triangle_height(bottom, to_ll, to_lr, tol_km)
    run = _triangle_height(left, to_ll, to_ul, tol_km)
    if rise is None or run is None:
        logger.debug('(%.5f, %.5f) gives a degenerate projection triangle', p.longitude, p.latitude)
        return OUT_OF_BOUNDS

    x = math.copysign(run, along_bottom) / bottom * extent.width_km / extent.km_per_cell
    y = math.copysign(rise, along_left) / left * extent.height_km / extent.km_per_cell
    return GridCoord(x, y)


def cell_for_point(point, extent: GridExtent) -> Union[Cell, Failure]:
    """Integer (col, row) of the cell containing a (lon, lat) point."""
    coord = project(point, extent)
    if coord is OUT_OF_BOUNDS:
        return OUT_OF_BOUNDS
    return round_half_up(coord.x), round_half_up(coord.y)


def grid_to_geo(x, y, extent: GridExtent) -> GeoPoint:
    """(lon, lat) of grid coordinate (x, y); inverse of `project` inside the extent."""
    lon, lat = extent.transform * (x, y)
    return GeoPoint(lon, lat)


def km_to_cells(km, extent: GridExtent):
    """Convert a physical distance to grid units."""
    return np.asarray(km, dtype=float) / extent.km_per_cell
