"""Geodetic projection and water-only line of sight for whale movement."""
from baleen.whale_abm.geodesy import (GeoPoint, GridCoord, GridExtent, cell_for_point,
                                      distance_between_km, grid_to_geo, project)
from baleen.whale_abm.navigator import WaterNavigator
from baleen.whale_abm.results import NO_PATH, OUT_OF_BOUNDS, ExtentConfigurationError, Failure
from baleen.whale_abm.tracer import segment_on_water, trace_line
from baleen.whale_abm.water_mask import WaterMask
