import logging

from .. import families
from ..geometry import cell_geometry, is_dark_cell
from ..surface import RasterSurface
from .traversal import assign_ids, traversal_sequence


_logger = logging.getLogger('calibtarget.charuco')

ID_COLOR = '#d00000'


async def draw_charuco(surface: RasterSurface, width: int, height: int, rows: int, cols: int, params) -> None:
    """Draws a ChArUco board of `rows` x `cols` squares.

    The markers are placed within the squares of color `params.charuco.on`
    and enumerated along the configured traversal.
    """
    opts = params.charuco
    family = await families.load_family(opts.dictionary)
    if family.fallback:
        _logger.warning(f'Rendering ChArUco board with fallback markers (dictionary `{opts.dictionary}` unavailable).')

    g = cell_geometry(width, height, rows, cols, params.cell_size)
    marker_on_dark = opts.on == 'black'
    for row in range(rows):
        for col in range(cols):
            if is_dark_cell(row, col, params.top_left):
                surface.fill_rect(g.cell_left(col), g.cell_top(row), g.cell, g.cell, 'black')

    marker_cells = [cell for cell in traversal_sequence(rows, cols, opts.origin, opts.order)
                    if is_dark_cell(cell[0], cell[1], params.top_left) == marker_on_dark]
    ids = assign_ids(marker_cells, opts.start_id, opts.step, family.num_markers)

    marker_size = g.cell * min(1.0, max(0.0, opts.marker_ratio))
    inset = (g.cell - marker_size) / 2
    for (row, col), marker_id in ids.items():
        left = g.cell_left(col) + inset
        top = g.cell_top(row) + inset
        modules = family.modules(marker_id)
        if marker_on_dark:
            # Quiet zone of one module around the marker
            quiet = marker_size / modules.shape[0]
            surface.fill_rect(left - quiet, top - quiet, marker_size + 2 * quiet, marker_size + 2 * quiet, 'white')
        surface.draw_image(modules, left, top, marker_size, marker_size)
        if opts.show_ids:
            surface.text(g.cell_left(col) + g.cell / 2, g.cell_top(row) + g.cell - inset / 2,
                         str(marker_id), size=max(8, inset * 0.8), color=ID_COLOR, anchor='mm')
