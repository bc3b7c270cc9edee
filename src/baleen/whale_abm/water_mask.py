"""Land/water classification backed by a numpy grid.

`WaterMask` is a ready-made ``is_water(col, row)`` for the tracer. The array
is indexed ``[row, col]`` with row 0 along the southern edge, matching grid y.
Rasters stored north-up (row 0 = north, as GeoTIFFs are) can be passed with
``north_up=True``.

The mask is copied and frozen on construction, so a trace always reads a
consistent snapshot even if the caller keeps editing its own array.
"""
import logging

import numpy as np

logger = logging.getLogger(__name__)


class WaterMask:
    """Callable water predicate over a 2-D boolean grid. Cells off the grid are land."""

    def __init__(self, water, north_up=False):
        arr = np.array(water, dtype=bool)
        if arr.ndim != 2:
            raise ValueError(f'water mask must be a 2-D array, got shape {arr.shape}')
        if north_up:
            arr = np.flipud(arr).copy()
        arr.setflags(write=False)
        self._water = arr

    def __call__(self, col, row) -> bool:
        n_rows, n_cols = self._water.shape
        if 0 <= row < n_rows and 0 <= col < n_cols:
            return bool(self._water[row, col])
        return False

    @classmethod
    def from_depth(cls, depth, min_depth=0.0, north_up=False):
        """Water wherever ``depth > min_depth``; NaN depths count as land."""
        d = np.asarray(depth, dtype=float)
        water = np.zeros(d.shape, dtype=bool)
        finite = np.isfinite(d)
        water[finite] = d[finite] > min_depth
        return cls(water, north_up=north_up)

    @classmethod
    def load(cls, path, min_depth=0.0, north_up=False):
        """Load a ``.npy`` file holding either a boolean mask or a depth grid."""
        arr = np.load(path, allow_pickle=False)
        logger.debug('loaded %s grid %s from %s', arr.dtype, arr.shape, path)
        if arr.dtype == bool:
            return cls(arr, north_up=north_up)
        return cls.from_depth(arr, min_depth=min_depth, north_up=north_up)

    @property
    def shape(self):
        return self._water.shape

    @property
    def n_water(self) -> int:
        return int(self._water.sum())

    @property
    def water_fraction(self) -> float:
        return self.n_water / self._water.size if self._water.size else 0.0

    def as_array(self) -> np.ndarray:
        """Read-only view of the underlying ``[row, col]`` mask."""
        return self._water
