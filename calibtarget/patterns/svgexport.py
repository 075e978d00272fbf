import logging

import svgwrite

from .common import ExportError, PatternKind
from .drawers.aprilgrid_svg import AprilGridSvgGenerator
from .drawers.cells import GRID_LINE_WIDTH
from .footer import stamp_svg
from .geometry import CellGeometry, cell_geometry, is_dark_cell


_logger = logging.getLogger('calibtarget.svg')


class VectorExporter(object):
    """Renders a pattern as SVG.

    The cell-based patterns use pixel units and the same geometry as the
    raster drawers (see `geometry.cell_geometry`), so the SVG matches the PNG
    export. AprilTag grids are delegated to the millimeter-accurate
    :class:`AprilGridSvgGenerator`. ChArUco boards cannot be exported.
    """
    def __init__(self, params):
        self.params = params

    def svg(self) -> svgwrite.Drawing:
        """Returns the SVG drawing.

        Raises:
            ExportError: If the pattern does not support vector export.
        """
        params = self.params
        kind = params.kind
        if not kind.supports_vector:
            raise ExportError(f'SVG export is not supported for {kind.value} patterns.')
        if kind is PatternKind.APRILTAG:
            return AprilGridSvgGenerator(params).svg()

        size = params.export_size
        width, height = size.width, size.height
        _logger.info(f'Drawing {kind.value} SVG at {size.label}')
        dwg = svgwrite.Drawing(profile='full', debug=False)
        dwg.attribs['width'] = width
        dwg.attribs['height'] = height
        dwg.viewbox(0, 0, width, height)
        # Background should not be transparent
        dwg.add(dwg.rect(insert=(0, 0), size=('100%', '100%'), fill='white'))

        rows, cols = params.inner_rows + 1, params.inner_cols + 1
        g = cell_geometry(width, height, rows, cols, params.cell_size)
        if kind is PatternKind.CHECKERBOARD:
            self._checkerboard(dwg, g, rows, cols)
        elif kind is PatternKind.GRID:
            self._grid(dwg, g, rows, cols)
        elif kind is PatternKind.DOTS:
            self._dots(dwg, g, rows, cols)

        stamp_svg(dwg, width, height, params)
        return dwg

    def _checkerboard(self, dwg: svgwrite.Drawing, g: CellGeometry, rows: int, cols: int) -> None:
        cb = dwg.add(dwg.g(id='checkerboard', fill='black'))
        for row in range(rows):
            for col in range(cols):
                if is_dark_cell(row, col, self.params.top_left):
                    cb.add(dwg.rect(insert=(g.cell_left(col), g.cell_top(row)), size=(g.cell, g.cell)))

    def _grid(self, dwg: svgwrite.Drawing, g: CellGeometry, rows: int, cols: int) -> None:
        grid = dwg.add(dwg.g(id='grid', stroke='black', stroke_width=GRID_LINE_WIDTH))
        for col in range(1, cols):
            x = g.cell_left(col)
            grid.add(dwg.line(start=(x, g.origin_y), end=(x, g.origin_y + g.grid_height)))
        for row in range(1, rows):
            y = g.cell_top(row)
            grid.add(dwg.line(start=(g.origin_x, y), end=(g.origin_x + g.grid_width, y)))

    def _dots(self, dwg: svgwrite.Drawing, g: CellGeometry, rows: int, cols: int) -> None:
        radius = self.params.dot_radius * g.cell
        dots = dwg.add(dwg.g(id='dots', fill='black'))
        for row in range(1, rows):
            for col in range(1, cols):
                dots.add(dwg.circle(center=(g.cell_left(col), g.cell_top(row)), r=radius))

    def tostring(self) -> str:
        """Returns the SVG document text."""
        return self.svg().tostring()
