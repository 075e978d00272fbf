"""Render pipeline for previews and raster exports.

:class:`RenderCoordinator` owns the preview surface. A preview redraw which
is triggered while another one is still in flight is dropped (not queued),
i.e. the preview always shows the most recently completed draw.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Tuple, Union

from . import footer
from .dispatch import PatternDispatcher
from .geometry import ExportSize
from .parameters import PatternParameters
from .surface import RasterSurface


_logger = logging.getLogger('calibtarget.render')

ERROR_LABEL = 'Draw Error'
ERROR_COLOR = 'red'
ERROR_FONT_SIZE = 20


class DrawOutcome(enum.Enum):
    DRAWN = 'drawn'
    FAILED = 'failed'         # Error placeholder has been rendered
    DROPPED = 'dropped'       # Another draw was in flight
    NOT_READY = 'not-ready'   # Zero-sized preview/export


@dataclass(frozen=True)
class DrawSession:
    seq: int
    scale: float


async def draw_export(surface: RasterSurface, width: int, height: int,
                      params: PatternParameters, dispatcher: PatternDispatcher = None) -> None:
    """Renders the target at `width` x `height` (logical pixels) onto the
    surface: clear, draw the pattern, then stamp the footer."""
    if dispatcher is None:
        dispatcher = PatternDispatcher()
    surface.fill_rect(0, 0, width, height, 'white')
    await dispatcher.dispatch(surface, width, height, params)
    footer.stamp_raster(surface, width, height, params)


def render_error_placeholder(surface: RasterSurface) -> None:
    """Replaces the surface content by a centered error label."""
    surface.reset_transform()
    surface.clear()
    surface.text(surface.width / 2, surface.height / 2, ERROR_LABEL,
                 ERROR_FONT_SIZE, ERROR_COLOR, anchor='mm')


ControlProvider = Union[Callable[[], Mapping], Mapping, PatternParameters]


class RenderCoordinator(object):
    """Draws the preview and full resolution exports.

    Args:
        controls: Provides the current control state. Either a callable which
            returns a control mapping (or `PatternParameters`), a mapping, or
            `PatternParameters`. It is read exactly once per draw.
        surface: The preview surface, see :meth:`resize_preview`.
        dispatcher: Maps pattern kinds to drawers.
    """
    def __init__(self, controls: ControlProvider, surface: RasterSurface = None,
                 dispatcher: PatternDispatcher = None):
        self._controls = controls
        self.surface = surface
        self.dispatcher = PatternDispatcher() if dispatcher is None else dispatcher
        self._drawing = False
        self._draw_count = 0
        self._session = None

    @property
    def is_drawing(self) -> bool:
        return self._drawing

    @property
    def session(self) -> DrawSession:
        """The currently open draw session (None if idle)."""
        return self._session

    @property
    def draw_count(self) -> int:
        """Number of started preview draws."""
        return self._draw_count

    def snapshot(self) -> PatternParameters:
        """Takes a snapshot of the current control state."""
        controls = self._controls() if callable(self._controls) else self._controls
        if isinstance(controls, PatternParameters):
            return controls
        return PatternParameters.from_controls(controls)

    def resize_preview(self, width: int, height: int) -> RasterSurface:
        """Allocates a new (blank) preview surface."""
        self.surface = RasterSurface(width, height)
        return self.surface

    async def draw_preview(self) -> DrawOutcome:
        """Renders the current configuration onto the preview surface.

        Errors are not propagated: the preview shows an error placeholder
        instead of a partial frame.
        """
        if self._drawing:
            _logger.debug('Preview draw already in progress, skipping this one.')
            return DrawOutcome.DROPPED

        self._drawing = True
        surface = self.surface
        try:
            params = self.snapshot()
            size = params.export_size
            if surface is None or surface.width == 0 or size.width == 0:
                _logger.debug('Preview is not ready yet.')
                return DrawOutcome.NOT_READY

            self._draw_count += 1
            self._session = DrawSession(seq=self._draw_count, scale=surface.width / size.width)
            _logger.info(f'[Draw #{self._session.seq}] Start: drawing pattern `{params.kind.value}`')
            surface.set_transform(self._session.scale)
            await self.draw_export(surface, size.width, size.height, params)
            return DrawOutcome.DRAWN
        except Exception as e:
            _logger.error('Error during preview draw:', exc_info=e)
            if surface is not None:
                render_error_placeholder(surface)
            return DrawOutcome.FAILED
        finally:
            if surface is not None:
                surface.reset_transform()
            if self._session is not None:
                _logger.info(f'[Draw #{self._session.seq}] End: drawing finished.')
            self._session = None
            self._drawing = False

    async def draw_export(self, surface: RasterSurface, width: int, height: int,
                          params: PatternParameters = None) -> None:
        """Renders the target onto the given surface, see :func:`draw_export`."""
        if params is None:
            params = self.snapshot()
        await draw_export(surface, width, height, params, self.dispatcher)

    async def render_export(self, params: PatternParameters = None) -> Tuple[RasterSurface, ExportSize, PatternParameters]:
        """Renders the target at full export resolution onto a new offscreen
        surface (independent of the preview surface)."""
        if params is None:
            params = self.snapshot()
        size = params.export_size
        surface = RasterSurface(size.width, size.height)
        _logger.info(f'Rendering {params.kind.value} export at {size.label}')
        await self.draw_export(surface, size.width, size.height, params)
        return surface, size, params
