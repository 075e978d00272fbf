"""Pixel geometry of the calibration targets.

All functions within this module are pure: they map the logical parameters
(output width, aspect ratio, cell size, row/column counts) to pixel
coordinates. Both the raster drawers and the vector exporter derive their
layout from these functions, so identical inputs always result in identical
geometry.
"""
from dataclasses import dataclass
from typing import List, Tuple

from .common import parse_int, round_half_up


# Fallback values for unparsable inputs (full HD, 16:9)
DEFAULT_OUTPUT_WIDTH = 1920
DEFAULT_ASPECT_W = 16
DEFAULT_ASPECT_H = 9
DEFAULT_CELL_SIZE = 50
MIN_OUTPUT_WIDTH = 320


@dataclass(frozen=True)
class ExportSize:
    """Pixel dimensions of an exported image."""
    width: int
    height: int
    label: str


@dataclass(frozen=True)
class CellGeometry:
    """Layout of a contiguous grid of square cells, centered within the
    `width` x `height` canvas."""
    width: int
    height: int
    cell: int
    grid_width: int
    grid_height: int
    origin_x: float
    origin_y: float

    def cell_left(self, col: int) -> float:
        return self.origin_x + col * self.cell

    def cell_top(self, row: int) -> float:
        return self.origin_y + row * self.cell


@dataclass(frozen=True)
class GridBoxes:
    """Edge coordinates of a grid of boxes which are separated by gaps."""
    col_lefts: List[int]
    col_rights: List[int]
    row_tops: List[int]
    row_bottoms: List[int]


def export_size(output_width, aspect_w, aspect_h) -> ExportSize:
    """Returns the export image size for the requested width and aspect ratio.

    The width is at least 320px, each aspect component at least 1. Invalid
    inputs fall back to 1920px and 16:9.
    """
    width = max(MIN_OUTPUT_WIDTH, parse_int(output_width, DEFAULT_OUTPUT_WIDTH))
    aw = max(1, parse_int(aspect_w, DEFAULT_ASPECT_W))
    ah = max(1, parse_int(aspect_h, DEFAULT_ASPECT_H))
    height = round_half_up(width * (ah / aw))
    return ExportSize(width=width, height=height, label=f'{width}x{height}')


def cell_geometry(width: int, height: int, rows: int, cols: int, cell_size) -> CellGeometry:
    """Centers a `rows` x `cols` grid of square cells within the canvas.

    The origin may be fractional; the cell size is at least 1px.
    """
    cell = max(1, parse_int(cell_size, DEFAULT_CELL_SIZE))
    grid_width = cols * cell
    grid_height = rows * cell
    return CellGeometry(width=width, height=height, cell=cell,
                        grid_width=grid_width, grid_height=grid_height,
                        origin_x=(width - grid_width) / 2,
                        origin_y=(height - grid_height) / 2)


def grid_boxes(start_x: float, start_y: float, rows: int, cols: int,
               box_size: float, gap_size: float) -> GridBoxes:
    """Computes the pixel edges of a grid of boxes (e.g. the tags of an
    AprilTag grid) separated by `gap_size`.

    Each left/top edge is rounded independently and the right/bottom edge is
    rounded from the already rounded left/top edge. Thus, boxes may differ by
    up to one pixel in size.
    """
    col_lefts, col_rights = list(), list()
    for c in range(cols):
        left = round_half_up(start_x + c * (box_size + gap_size))
        col_lefts.append(left)
        col_rights.append(round_half_up(left + box_size))
    row_tops, row_bottoms = list(), list()
    for r in range(rows):
        top = round_half_up(start_y + r * (box_size + gap_size))
        row_tops.append(top)
        row_bottoms.append(round_half_up(top + box_size))
    return GridBoxes(col_lefts=col_lefts, col_rights=col_rights,
                     row_tops=row_tops, row_bottoms=row_bottoms)


def is_dark_cell(row: int, col: int, top_left: str = 'black') -> bool:
    """Checkerboard parity: the top-left cell has the `top_left` color and
    the colors alternate from there."""
    return ((row + col) % 2 == 0) == (top_left != 'white')


def preview_size(holder_width: float, holder_height: float, aspect_w, aspect_h,
                 device_pixel_ratio: float = 1.0) -> Tuple[int, int]:
    """Returns the largest preview canvas (in device pixels) with the given
    aspect ratio which fits into the holder."""
    aw = max(1, parse_int(aspect_w, DEFAULT_ASPECT_W))
    ah = max(1, parse_int(aspect_h, DEFAULT_ASPECT_H))
    dpr = max(1.0, device_pixel_ratio)
    width = max(0.0, holder_width)
    height = width * ah / aw
    if height > holder_height:
        height = max(0.0, holder_height)
        width = height * aw / ah
    return max(1, round_half_up(width * dpr)), max(1, round_half_up(height * dpr))
