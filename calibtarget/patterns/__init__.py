"""This module encapsulates the supported calibration targets.
Provides functionality to render targets for on-screen previews and to
export them for print (PNG, SVG and PDF).

The pipeline consists of:
* PatternParameters - immutable snapshot of the target configuration
* geometry - pure functions mapping the parameters to pixel geometry
* PatternDispatcher - invokes the pattern-specific drawer
* RenderCoordinator - preview/export rendering, footer annotation and error
  recovery
* VectorExporter - SVG rendering which matches the raster output
"""
# Import common utils and export functionality for convenience
from .common import ExportError, PatternKind, SpecificationError
from .dispatch import PatternDispatcher
from .export import export_board, export_filename, render_png, render_svg, render_pdf
from .footer import config_string, config_summary
from .geometry import cell_geometry, export_size, grid_boxes, preview_size
from .parameters import AprilTagOptions, CharucoOptions, PatternParameters
from .render import DrawOutcome, RenderCoordinator, draw_export
from .surface import RasterSurface
from .svgexport import VectorExporter
