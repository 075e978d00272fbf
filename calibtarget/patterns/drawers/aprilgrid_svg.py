import logging

import numpy as np
import svgwrite

from .. import families
from ..footer import stamp_svg
from .aprilgrid import ID_COLOR, aprilgrid_origin, intersection_centers
from .traversal import assign_ids, traversal_sequence


_logger = logging.getLogger('calibtarget.aprilgrid')

# CSS reference pixel
DEFAULT_DPI = 96.0


class AprilGridSvgGenerator(object):
    """Print-accurate SVG of an AprilTag grid.

    In contrast to the raster drawer, tag edges are not snapped to pixels:
    the drawing uses millimeters as user units and places each tag exactly.
    The pixel parameters are converted via `dpi`. The intersection squares
    span the full gap width.
    """
    def __init__(self, params, dpi: float = DEFAULT_DPI):
        self.params = params
        self.dpi = dpi

    @property
    def mm_per_px(self) -> float:
        return 25.4 / self.dpi

    def _tag_modules(self, dwg: svgwrite.Drawing, group, modules: np.ndarray,
                     left: float, top: float, tag_mm: float) -> None:
        # Merge horizontally adjacent black modules into a single rect
        module = tag_mm / modules.shape[1]
        for r in range(modules.shape[0]):
            c = 0
            while c < modules.shape[1]:
                if modules[r, c] >= 128:
                    c += 1
                    continue
                run = 1
                while c + run < modules.shape[1] and modules[r, c + run] < 128:
                    run += 1
                group.add(dwg.rect(insert=(left + c * module, top + r * module),
                                   size=(run * module, module)))
                c += run

    def svg(self) -> svgwrite.Drawing:
        """Returns the SVG drawing of the tag grid."""
        params = self.params
        opts = params.apriltag
        size = params.export_size
        to_mm = self.mm_per_px
        width_mm, height_mm = size.width * to_mm, size.height * to_mm
        _logger.info(f'Generating AprilTag grid SVG: {params.inner_rows}x{params.inner_cols} {opts.family}, {width_mm:.1f}mm x {height_mm:.1f}mm')

        family = families.get_family(opts.family)
        rows, cols = params.inner_rows, params.inner_cols
        tag_mm = opts.tag_size * to_mm
        gap_mm = tag_mm * opts.spacing_ratio
        start_x, start_y = aprilgrid_origin(width_mm, height_mm, rows, cols, tag_mm, gap_mm)

        dwg = svgwrite.Drawing(profile='full', debug=False)
        dwg.attribs['width'] = f'{width_mm}mm'
        dwg.attribs['height'] = f'{height_mm}mm'
        dwg.viewbox(0, 0, width_mm, height_mm)
        dwg.add(dwg.rect(insert=(0, 0), size=(width_mm, height_mm), fill='white'))

        if opts.show_intersections and gap_mm > 0:
            ix = dwg.add(dwg.g(id='intersections', fill='black'))
            for cy in intersection_centers(start_y, rows, tag_mm, gap_mm):
                for cx in intersection_centers(start_x, cols, tag_mm, gap_mm):
                    ix.add(dwg.rect(insert=(cx - gap_mm / 2, cy - gap_mm / 2), size=(gap_mm, gap_mm)))

        tags = dwg.add(dwg.g(id='tags', fill='black', stroke='none'))
        ids = assign_ids(traversal_sequence(rows, cols, opts.origin, opts.order),
                         opts.start_id, 1, family.num_markers)
        labels = dwg.g(id='tag-ids', font_family='Roboto Mono', fill=ID_COLOR, text_anchor='middle')
        for (row, col), tag_id in ids.items():
            left = start_x + col * (tag_mm + gap_mm)
            top = start_y + row * (tag_mm + gap_mm)
            self._tag_modules(dwg, tags, family.modules(tag_id), left, top, tag_mm)
            if opts.show_ids and gap_mm > 0:
                labels.add(dwg.text(str(tag_id), insert=(left + tag_mm / 2, top + tag_mm + gap_mm * 0.7),
                                    font_size=gap_mm * 0.6))
        if opts.show_ids and gap_mm > 0:
            dwg.add(labels)

        stamp_svg(dwg, size.width, size.height, params, scale=to_mm)
        return dwg

    def generate(self) -> str:
        """Returns the SVG document text."""
        return self.svg().tostring()
