"""Drawers for the cell-based patterns (checkerboard, grid lines and dots).

Each drawer receives the number of squares along each dimension, i.e. the
number of inner rows/columns + 1.
"""
from ..geometry import cell_geometry, is_dark_cell
from ..surface import RasterSurface


GRID_LINE_WIDTH = 2


def draw_checkerboard(surface: RasterSurface, width: int, height: int, rows: int, cols: int, params) -> None:
    g = cell_geometry(width, height, rows, cols, params.cell_size)
    for row in range(rows):
        for col in range(cols):
            if is_dark_cell(row, col, params.top_left):
                surface.fill_rect(g.cell_left(col), g.cell_top(row), g.cell, g.cell, 'black')


def draw_grid_lines(surface: RasterSurface, width: int, height: int, rows: int, cols: int, params) -> None:
    """Draws the inner cell boundaries (no outer border)."""
    g = cell_geometry(width, height, rows, cols, params.cell_size)
    for col in range(1, cols):
        x = g.cell_left(col)
        surface.line(x, g.origin_y, x, g.origin_y + g.grid_height, GRID_LINE_WIDTH, 'black')
    for row in range(1, rows):
        y = g.cell_top(row)
        surface.line(g.origin_x, y, g.origin_x + g.grid_width, y, GRID_LINE_WIDTH, 'black')


def draw_dots(surface: RasterSurface, width: int, height: int, rows: int, cols: int, params) -> None:
    """Draws a dot at each inner intersection."""
    g = cell_geometry(width, height, rows, cols, params.cell_size)
    radius = params.dot_radius * g.cell
    for row in range(1, rows):
        for col in range(1, cols):
            surface.fill_circle(g.cell_left(col), g.cell_top(row), radius, 'black')
