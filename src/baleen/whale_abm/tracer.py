"""
tracer.py

Water-only line of sight over the simulation grid.

`trace_line` lists, in travel order, every cell whose area the straight
segment between two grid coordinates passes through, or returns NO_PATH if
any of them is land. `segment_on_water` answers the same question without
building the list.

The walk always runs left to right in x. Queries given right to left are
flipped on the way in and the path is reversed once on the way out, so both
directions give mirror-image results.

Where the segment passes exactly through the corner shared by four cells, it
steps diagonally. The step is allowed when at most one of the two cells beside
the corner is land.
"""
import logging
import math
from typing import Callable, Iterator, List, Optional, Tuple, Union

from baleen.whale_abm.results import NO_PATH, Failure
from baleen.whale_abm.utils import Cell, round_half_up

logger = logging.getLogger(__name__)

IsWater = Callable[[int, int], bool]
Flanks = Optional[Tuple[Cell, Cell]]


def _canonical(x1, y1, x2, y2):
    for v in (x1, y1, x2, y2):
        if not math.isfinite(v):
            raise ValueError(f'segment endpoints must be finite, got {(x1, y1, x2, y2)!r}')
    if x1 > x2:
        return x2, y2, x1, y1, True
    return x1, y1, x2, y2, False


def _cells_along(x1, y1, x2, y2) -> Iterator[Tuple[Cell, Flanks]]:
    """Yield ``(cell, flanks)`` for each cell entered, for ``x1 <= x2``.

    ``flanks`` holds the two cells beside a corner the segment passes exactly
    through on its way into ``cell``, and is None for edge crossings.
    """
    cx, cy = round_half_up(x1), round_half_up(y1)
    end_col, end_row = round_half_up(x2), round_half_up(y2)
    yield (cx, cy), None

    if cx == end_col:
        step = 1 if end_row >= cy else -1
        while cy != end_row:
            cy += step
            yield (cx, cy), None
        return

    dx = x2 - x1
    dy = y2 - y1
    rising = dy >= 0.0
    while cx < end_col:
        boundary = cx + 0.5
        # y where the segment leaves column cx, clamped so round-off cannot overshoot the end
        if boundary >= x2:
            y_b = y2
        elif rising:
            y_b = min(y1 + dy * (boundary - x1) / dx, y2)
        else:
            y_b = max(y1 + dy * (boundary - x1) / dx, y2)

        if rising:
            while y_b > cy + 0.5:
                cy += 1
                yield (cx, cy), None
            if y_b == cy + 0.5:
                flanks = ((cx + 1, cy), (cx, cy + 1))
                cx, cy = cx + 1, cy + 1
                yield (cx, cy), flanks
                continue
        else:
            while y_b < cy - 0.5:
                cy -= 1
                yield (cx, cy), None
            # ending on the corner itself rounds into (cx + 1, cy): no crossing
            if y_b == cy - 0.5 and y_b > y2:
                flanks = ((cx + 1, cy), (cx, cy - 1))
                cx, cy = cx + 1, cy - 1
                yield (cx, cy), flanks
                continue
        cx += 1
        yield (cx, cy), None

    if rising:
        while cy < end_row:
            cy += 1
            yield (cx, cy), None
    else:
        while cy > end_row:
            cy -= 1
            yield (cx, cy), None


def _blocked(cell: Cell, flanks: Flanks, is_water: IsWater) -> bool:
    if flanks is not None and not (is_water(*flanks[0]) or is_water(*flanks[1])):
        return True
    return not is_water(*cell)


def trace_line(x1, y1, x2, y2, is_water: IsWater) -> Union[List[Cell], Failure]:
    """Cells crossed by the segment (x1, y1) -> (x2, y2), or NO_PATH.

    Parameters
    ----------
    x1, y1, x2, y2 : float
        Endpoints in grid units; integers are cell centres.
    is_water : callable
        ``is_water(col, row) -> bool``. It is only read, never modified.

    Returns
    -------
    list of (col, row)
        From the cell of the first endpoint to the cell of the second, with
        every consecutive pair adjacent and every cell water.
    NO_PATH
        If an endpoint cell or any cell in between is land, or the segment
        slips through a corner with land on both sides.
    """
    ax, ay, bx, by, swapped = _canonical(x1, y1, x2, y2)
    path = []
    for cell, flanks in _cells_along(ax, ay, bx, by):
        if _blocked(cell, flanks, is_water):
            logger.debug('no water path (%.3f, %.3f) -> (%.3f, %.3f): blocked entering %s',
                         x1, y1, x2, y2, cell)
            return NO_PATH
        path.append(cell)
    if swapped:
        path.reverse()
    return path


def segment_on_water(x1, y1, x2, y2, is_water: IsWater) -> bool:
    """True iff `trace_line` would return a path; stops at the first land cell."""
    ax, ay, bx, by, _ = _canonical(x1, y1, x2, y2)
    return not any(_blocked(cell, flanks, is_water) for cell, flanks in _cells_along(ax, ay, bx, by))


def cells_along_segment(x1, y1, x2, y2) -> List[Cell]:
    """Every cell the segment passes through, in travel order, ignoring land."""
    ax, ay, bx, by, swapped = _canonical(x1, y1, x2, y2)
    cells = [cell for cell, _ in _cells_along(ax, ay, bx, by)]
    if swapped:
        cells.reverse()
    return cells
