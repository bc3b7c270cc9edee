# -*- coding: utf-8 -*-

"""
whale_abm/config.py

Constants and presets for the whale navigation core. Projection, tracing and
the command-line runner all read their numbers from here, so every part of a
run uses the same Earth model and tolerances.

Contents:
---------
1. EARTH MODEL:
   - Mean Earth radius for the longitude small-circle approximation.
   - WGS84 meridian-arc coefficients for the latitude conversion.

2. TOLERANCES:
   - How far outside the rectangle (in cells) a point may sit and still project.
   - How far from 90 degrees the lower-left corner may be.

3. WHALE_REGIONS (EPSG:4326)
   - Sub-degree bounding boxes for foraging grounds, in the same
     minx/maxx/miny/maxy layout as the ship model's SIMULATION_BOUNDS.

    Usage example:
        from baleen.whale_abm.config import WHALE_REGIONS
        from baleen.whale_abm.geodesy import GridExtent

        extent = GridExtent.from_bounds(WHALE_REGIONS["Stellwagen Bank"], km_per_cell=1.0)

4. LOGGING:
   - `configure_logging()` attaches one console handler to the package logger.
"""
import logging
import sys

# ───────────────────────────────────────────────────────────────────────────────
# 1) EARTH MODEL
# ───────────────────────────────────────────────────────────────────────────────
EARTH_RADIUS_KM = 6367.5        # mean radius used for km per degree of longitude

# metres per degree of latitude = c0 + c2*cos(2*lat) + c4*cos(4*lat)
MERIDIAN_M_PER_DEGREE = (111132.954, -559.822, 1.175)

M_PER_KM = 1000.0

# ───────────────────────────────────────────────────────────────────────────────
# 2) TOLERANCES
# ───────────────────────────────────────────────────────────────────────────────
# A point may lie up to half a cell outside an edge: edge cells are centred on it.
PROJECTION_EDGE_TOLERANCE_CELLS = 0.5

# Allowed deviation of the lower-left corner from a right angle (degrees)
RIGHT_ANGLE_TOLERANCE_DEG = 0.5

DEFAULT_KM_PER_CELL = 1.0

# ───────────────────────────────────────────────────────────────────────────────
# 3) WHALE_REGIONS (lon/lat degrees)
# ───────────────────────────────────────────────────────────────────────────────
WHALE_REGIONS = {
    "Stellwagen Bank": {
        "minx": -70.60, "maxx": -70.00,
        "miny": 42.05, "maxy": 42.75
    },
    "Cape Cod Bay": {
        "minx": -70.60, "maxx": -69.95,
        "miny": 41.70, "maxy": 42.10
    },
    "Great South Channel": {
        "minx": -69.70, "maxx": -68.90,
        "miny": 41.00, "maxy": 41.70
    },
    "Grand Manan Basin": {
        "minx": -66.90, "maxx": -66.10,
        "miny": 44.40, "maxy": 45.00
    },
}

# ───────────────────────────────────────────────────────────────────────────────
# 4) LOGGING
# ───────────────────────────────────────────────────────────────────────────────
LOG_FORMAT = "[%(levelname)s] %(message)s"


def configure_logging(level=logging.INFO):
    """Attach a stdout handler to the ``baleen`` logger and set its level.

    Calling this more than once only updates the level.
    """
    log = logging.getLogger("baleen")
    if not log.handlers:                                # avoid dupes on re-entry
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(h)
    for h in log.handlers:
        h.setLevel(level)
    log.setLevel(level)
    return log
