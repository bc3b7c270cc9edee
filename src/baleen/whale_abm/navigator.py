"""Geographic query surface for whale movement.

`WaterNavigator` binds one `GridExtent` and one water predicate for a run and
answers movement queries in longitude/latitude. It adds no state of its own.
The projection and tracing functions it wraps stay usable directly.
"""
import logging
from typing import List, Union

from baleen.whale_abm import geodesy, tracer
from baleen.whale_abm.geodesy import GeoPoint, GridCoord, GridExtent
from baleen.whale_abm.results import OUT_OF_BOUNDS, Failure
from baleen.whale_abm.utils import Cell

logger = logging.getLogger(__name__)


class WaterNavigator:
    """Projection plus water-only line of sight for one world.

    Parameters
    ----------
    extent : GridExtent
        World geometry, fixed for the run.
    is_water : callable
        ``is_water(col, row) -> bool``, e.g. a `WaterMask`.
    """

    def __init__(self, extent: GridExtent, is_water: tracer.IsWater):
        self.extent = extent
        self.is_water = is_water
        shape = getattr(is_water, 'shape', None)
        if shape is not None and tuple(shape) != (extent.n_rows, extent.n_cols):
            logger.warning('water mask shape %s differs from the extent grid (%d rows, %d cols); '
                           'cells outside the mask are land', tuple(shape), extent.n_rows, extent.n_cols)

    def project(self, longitude, latitude) -> Union[GridCoord, Failure]:
        return geodesy.project(GeoPoint(longitude, latitude), self.extent)

    def cell_for_point(self, longitude, latitude) -> Union[Cell, Failure]:
        return geodesy.cell_for_point(GeoPoint(longitude, latitude), self.extent)

    def cell_center(self, col, row) -> GeoPoint:
        """(lon, lat) of the centre of a cell."""
        return geodesy.grid_to_geo(col, row, self.extent)

    def trace_line(self, x1, y1, x2, y2) -> Union[List[Cell], Failure]:
        return tracer.trace_line(x1, y1, x2, y2, self.is_water)

    def segment_on_water(self, x1, y1, x2, y2) -> bool:
        return tracer.segment_on_water(x1, y1, x2, y2, self.is_water)

    def distance_between_km(self, long1, lat1, long2, lat2) -> float:
        return float(geodesy.distance_between_km((long1, lat1), (long2, lat2)))

    def trace_between(self, start, end) -> Union[List[Cell], Failure]:
        """Water path between two (lon, lat) points.

        Returns OUT_OF_BOUNDS if either point is off the grid, NO_PATH if the
        straight segment crosses land, otherwise the cell path.
        """
        a = self.project(*start)
        b = self.project(*end)
        if a is OUT_OF_BOUNDS or b is OUT_OF_BOUNDS:
            return OUT_OF_BOUNDS
        return self.trace_line(a.x, a.y, b.x, b.y)

    def land_crossed(self, start, end) -> Union[List[Cell], Failure]:
        """Land cells on the straight segment between two (lon, lat) points, in travel order."""
        a = self.project(*start)
        b = self.project(*end)
        if a is OUT_OF_BOUNDS or b is OUT_OF_BOUNDS:
            return OUT_OF_BOUNDS
        return [cell for cell in tracer.cells_along_segment(a.x, a.y, b.x, b.y)
                if not self.is_water(*cell)]
