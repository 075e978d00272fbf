"""Footer annotation of rendered targets.

The footer consists of the site label (bottom left) and a summary of the
pattern configuration (bottom right). Raster and vector outputs use the same
layout and text, see :func:`stamp_raster` and :func:`stamp_svg`.
"""
from dataclasses import dataclass
from typing import List

import svgwrite

from .common import PatternKind, round_half_up
from .surface import RasterSurface


SITE_LABEL = 'icvfxtools.com'
FOOTER_COLOR = '#888'
FOOTER_FONT = 'Roboto Mono'
# Font sizes are specified w.r.t. a full HD output
REFERENCE_WIDTH = 1920

TRAVERSAL_LABELS = {
    'row-major-ltr': 'Row-major L→R',
    'row-major-rtl': 'Row-major R→L',
    'snake-ltr-first': 'Snake (L→R first)',
    'snake-rtl-first': 'Snake (R→L first)',
}


@dataclass(frozen=True)
class FooterLayout:
    font_size: float
    padding: int


def footer_layout(width: int) -> FooterLayout:
    """Scales the footer font and padding with the output width."""
    font_size = max(12, 16 * (width / REFERENCE_WIDTH))
    padding = max(15, round_half_up(font_size * 1.2))
    return FooterLayout(font_size=font_size, padding=padding)


def traversal_label(code: str) -> str:
    """Display label of a traversal order code (unknown codes pass through)."""
    return TRAVERSAL_LABELS.get(code, code)


def config_summary(params) -> List[str]:
    """Returns the human-readable 'Label: value' recap of the parameters."""
    kind = params.kind
    parts = [f'Pattern: {kind.value}', f'Grid: {params.rows}x{params.cols} (inner)']
    if kind is not PatternKind.APRILTAG:
        parts.append(f'Cell: {params.display_value("cell_size", params.cell_size)}px')
    if kind in (PatternKind.CHECKERBOARD, PatternKind.CHARUCO):
        parts.append(f'Top-Left: {params.top_left}')

    if kind is PatternKind.DOTS:
        parts.append(f'Radius: {params.display_value("dot_radius", params.dot_radius)}x')
    elif kind is PatternKind.CHARUCO:
        opts = params.charuco
        parts.extend([f'Dict: {opts.dictionary}',
                      f'Ratio: {params.display_value("charuco_ratio", opts.marker_ratio)}',
                      f'Start: {params.display_value("charuco_start", opts.start_id)}',
                      f'On: {opts.on}',
                      f'Origin: {opts.origin}',
                      f'Traversal: {traversal_label(opts.order)}'])
        if opts.show_ids:
            parts.append('Show IDs')
    elif kind is PatternKind.APRILTAG:
        opts = params.apriltag
        parts.extend([f'Family: {opts.family}',
                      f'Tag Size: {params.display_value("apriltag_tag_size", opts.tag_size)}px',
                      f'Spacing Ratio: {params.display_value("apriltag_spacing_ratio", opts.spacing_ratio)}',
                      f'Start: {params.display_value("apriltag_start", opts.start_id)}',
                      f'Origin: {opts.origin}',
                      f'Traversal: {traversal_label(opts.order)}'])
        if opts.show_ids:
            parts.append('Show IDs')
        if opts.show_intersections:
            parts.append(f'Ix Square: {params.display_value("apriltag_intersection_px", opts.intersection_size)}px')
    return parts


def config_string(params) -> str:
    return ' | '.join(config_summary(params))


def stamp_raster(surface: RasterSurface, width: int, height: int, params) -> None:
    """Draws the footer onto a `width` x `height` raster target."""
    layout = footer_layout(width)
    baseline = height - layout.padding
    surface.text(layout.padding, baseline, SITE_LABEL, layout.font_size, FOOTER_COLOR, anchor='ls')
    surface.text(width - layout.padding, baseline, config_string(params), layout.font_size, FOOTER_COLOR, anchor='rs')


def stamp_svg(dwg: svgwrite.Drawing, width: int, height: int, params, scale: float = 1.0) -> None:
    """Appends the footer to the SVG drawing.

    The layout is computed for a `width` x `height` pixel target. Use `scale`
    to convert these pixel coordinates to the drawing's user units (e.g.
    millimeters).
    """
    layout = footer_layout(width)
    baseline = (height - layout.padding) * scale
    footer = dwg.add(dwg.g(id='footer', font_family=FOOTER_FONT,
                           font_size=layout.font_size * scale, fill=FOOTER_COLOR))
    footer.add(dwg.text(SITE_LABEL, insert=(layout.padding * scale, baseline), text_anchor='start'))
    footer.add(dwg.text(config_string(params), insert=((width - layout.padding) * scale, baseline),
                        text_anchor='end'))
