import logging
from typing import List, Tuple

from .. import families
from ..geometry import grid_boxes
from ..surface import RasterSurface
from .traversal import assign_ids, traversal_sequence


_logger = logging.getLogger('calibtarget.aprilgrid')

ID_COLOR = '#d00000'


def aprilgrid_origin(width: float, height: float, rows: int, cols: int,
                     tag_size: float, gap_size: float) -> Tuple[float, float]:
    """Returns the top left corner of the tag grid, centered on the canvas."""
    grid_width = cols * tag_size + (cols - 1) * gap_size
    grid_height = rows * tag_size + (rows - 1) * gap_size
    return (width - grid_width) / 2, (height - grid_height) / 2


def intersection_centers(start: float, count: int, tag_size: float, gap_size: float) -> List[float]:
    """Centers of the gaps along one dimension, including the two outer
    gaps (which lie outside of the tag grid)."""
    return [start + k * (tag_size + gap_size) - gap_size / 2 for k in range(count + 1)]


async def draw_aprilgrid(surface: RasterSurface, width: int, height: int, rows: int, cols: int, params) -> None:
    """Draws a `rows` x `cols` grid of AprilTags, separated by gaps of
    `spacing_ratio` times the tag size."""
    opts = params.apriltag
    family = await families.load_family(opts.family)
    if family.fallback:
        _logger.warning(f'Rendering AprilTag grid with fallback tags (family `{opts.family}` unavailable).')

    tag = float(opts.tag_size)
    gap = tag * opts.spacing_ratio
    start_x, start_y = aprilgrid_origin(width, height, rows, cols, tag, gap)
    boxes = grid_boxes(start_x, start_y, rows, cols, tag, gap)

    if opts.show_intersections:
        half = opts.intersection_size / 2
        for cy in intersection_centers(start_y, rows, tag, gap):
            for cx in intersection_centers(start_x, cols, tag, gap):
                surface.fill_rect(cx - half, cy - half, opts.intersection_size, opts.intersection_size, 'black')

    ids = assign_ids(traversal_sequence(rows, cols, opts.origin, opts.order),
                     opts.start_id, 1, family.num_markers)
    for (row, col), tag_id in ids.items():
        left, right = boxes.col_lefts[col], boxes.col_rights[col]
        top, bottom = boxes.row_tops[row], boxes.row_bottoms[row]
        surface.draw_image(family.modules(tag_id), left, top, right - left, bottom - top)
        if opts.show_ids and gap > 0:
            surface.text((left + right) / 2, bottom + gap / 2, str(tag_id),
                         size=max(8, gap * 0.6), color=ID_COLOR, anchor='mm')
