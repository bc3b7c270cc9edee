"""Small grid helpers shared by projection, tracing and the water mask."""
import math
from typing import Tuple

Cell = Tuple[int, int]


def round_half_up(v: float) -> int:
    """Round to the nearest integer, with halves going up (-0.5 -> 0, 2.5 -> 3).

    Cell ``i`` covers ``[i - 0.5, i + 0.5)``, so this is the cell index of a
    grid coordinate.
    """
    f = math.floor(v)
    return f + 1 if v - f >= 0.5 else f

