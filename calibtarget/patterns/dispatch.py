import inspect
import logging
from typing import Callable, Mapping, Tuple

from .common import PatternKind
from .drawers import draw_aprilgrid, draw_charuco, draw_checkerboard, draw_dots, draw_grid_lines


_logger = logging.getLogger('calibtarget.dispatch')


# One drawer per pattern kind (checked for completeness below)
DEFAULT_DRAWERS = {
    PatternKind.CHECKERBOARD: draw_checkerboard,
    PatternKind.GRID: draw_grid_lines,
    PatternKind.DOTS: draw_dots,
    PatternKind.CHARUCO: draw_charuco,
    PatternKind.APRILTAG: draw_aprilgrid,
}


def _check_complete(drawers: Mapping[PatternKind, Callable]) -> None:
    missing = [kind.value for kind in PatternKind if kind not in drawers]
    if missing:
        raise ValueError(f'No drawer registered for pattern(s): {", ".join(missing)}')


_check_complete(DEFAULT_DRAWERS)


def drawer_grid_size(params) -> Tuple[int, int]:
    """Returns the (rows, cols) passed to the drawer.

    Cell-based patterns expect the number of squares (inner + 1), the
    AprilTag grid expects the number of tags.
    """
    rows, cols = params.inner_rows, params.inner_cols
    if params.kind.is_cell_based:
        return rows + 1, cols + 1
    return rows, cols


class PatternDispatcher(object):
    """Invokes the drawer matching the pattern kind."""
    def __init__(self, drawers: Mapping[PatternKind, Callable] = None):
        drawers = dict(DEFAULT_DRAWERS if drawers is None else drawers)
        _check_complete(drawers)
        self._drawers = drawers

    def drawer(self, kind: PatternKind) -> Callable:
        return self._drawers[kind]

    def replace(self, kind: PatternKind, drawer: Callable) -> 'PatternDispatcher':
        """Returns a dispatcher which uses `drawer` for the given kind."""
        drawers = dict(self._drawers)
        drawers[kind] = drawer
        return PatternDispatcher(drawers)

    async def dispatch(self, surface, width: int, height: int, params) -> None:
        rows, cols = drawer_grid_size(params)
        _logger.debug(f'Dispatching {params.kind.value} drawer: {rows}x{cols} on {width}x{height}')
        result = self._drawers[params.kind](surface, width, height, rows, cols, params)
        if inspect.isawaitable(result):
            await result
