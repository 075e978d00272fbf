"""Pattern-specific drawers.

Each drawer follows the signature `draw(surface, width, height, rows, cols,
params)` and may be a coroutine function. Drawers can rely on a cleared
(white) `width` x `height` target.
"""
from .cells import draw_checkerboard, draw_grid_lines, draw_dots
from .charuco import draw_charuco
from .aprilgrid import draw_aprilgrid
from .aprilgrid_svg import AprilGridSvgGenerator
from .traversal import traversal_sequence, assign_ids
