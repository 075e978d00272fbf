import asyncio
import pytest
from calibtarget.patterns import PatternDispatcher, PatternKind, PatternParameters, RasterSurface
from calibtarget.patterns.dispatch import DEFAULT_DRAWERS, drawer_grid_size


def test_grid_size():
    params = PatternParameters.from_controls({'pattern': 'checkerboard', 'rows': 1, 'cols': 4})
    assert drawer_grid_size(params) == (3, 5)
    params = PatternParameters.from_controls({'pattern': 'apriltag', 'rows': 1, 'cols': 4})
    assert drawer_grid_size(params) == (1, 4)


def test_replace():
    calls = list()

    def sync_drawer(surface, width, height, rows, cols, params):
        calls.append(('sync', width, height, rows, cols))

    async def async_drawer(surface, width, height, rows, cols, params):
        calls.append(('async', width, height, rows, cols))

    default = PatternDispatcher()
    dispatcher = default.replace(PatternKind.GRID, sync_drawer).replace(PatternKind.APRILTAG, async_drawer)
    assert default.drawer(PatternKind.GRID) is DEFAULT_DRAWERS[PatternKind.GRID]
    assert dispatcher.drawer(PatternKind.GRID) is sync_drawer

    surface = RasterSurface(400, 300)
    asyncio.run(dispatcher.dispatch(surface, 400, 300, PatternParameters.from_controls({'pattern': 'grid'})))
    asyncio.run(dispatcher.dispatch(surface, 400, 300, PatternParameters.from_controls({'pattern': 'apriltag', 'rows': 2, 'cols': 3})))
    assert calls == [('sync', 400, 300, 3, 3), ('async', 400, 300, 2, 3)]


def test_incomplete_mapping():
    with pytest.raises(ValueError):
        PatternDispatcher({PatternKind.CHECKERBOARD: DEFAULT_DRAWERS[PatternKind.CHECKERBOARD]})
