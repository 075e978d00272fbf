import xml.etree.ElementTree as ET
import pytest
from calibtarget.patterns import PatternParameters, VectorExporter, config_string, config_summary
from calibtarget.patterns.footer import SITE_LABEL, footer_layout, traversal_label


SVG_NS = '{http://www.w3.org/2000/svg}'


def test_layout():
    layout = footer_layout(1920)
    assert layout.font_size == 16
    assert layout.padding == 19
    # Small outputs are clamped
    layout = footer_layout(400)
    assert layout.font_size == 12
    assert layout.padding == 15
    layout = footer_layout(3840)
    assert layout.font_size == 32
    assert layout.padding == 38


def test_traversal_labels():
    assert traversal_label('row-major-ltr') == 'Row-major L→R'
    assert traversal_label('snake-rtl-first') == 'Snake (R→L first)'
    assert traversal_label('foo') == 'foo'


def test_summary_cell_patterns():
    params = PatternParameters.from_controls({'pattern': 'dots', 'rows': 4, 'cols': 5, 'dot_radius': 0.15})
    parts = config_summary(params)
    assert parts[0] == 'Pattern: dots'
    assert 'Grid: 4x5 (inner)' in parts
    assert 'Radius: 0.15x' in parts
    assert 'Cell: 50px' in parts
    assert not any(p.startswith('Top-Left') for p in parts)

    params = PatternParameters.from_controls({'pattern': 'checkerboard', 'rows': 6, 'cols': 9, 'top_left': 'white'})
    assert config_string(params) == 'Pattern: checkerboard | Grid: 6x9 (inner) | Cell: 50px | Top-Left: white'


def test_summary_marker_patterns():
    params = PatternParameters.from_controls({
        'pattern': 'charuco', 'rows': 5, 'cols': 7, 'charuco_order': 'snake-rtl-first',
        'charuco_show_id': True})
    parts = config_summary(params)
    assert 'Dict: DICT_4X4_50' in parts
    assert 'Ratio: 0.7' in parts
    assert 'Traversal: Snake (R→L first)' in parts
    assert parts[-1] == 'Show IDs'

    params = PatternParameters.from_controls({
        'pattern': 'apriltag', 'rows': 3, 'cols': 4, 'apriltag_order': 'snake-rtl-first',
        'apriltag_show_intersections': True, 'apriltag_intersection_px': 12})
    parts = config_summary(params)
    assert not any(p.startswith('Cell') for p in parts)
    assert 'Family: tag36h11' in parts
    assert 'Tag Size: 160px' in parts
    assert 'Traversal: Snake (R→L first)' in parts
    assert 'Show IDs' not in parts
    assert parts[-1] == 'Ix Square: 12px'


@pytest.mark.parametrize('pattern', ['checkerboard', 'grid', 'dots', 'apriltag'])
def test_svg_footer_text(pattern):
    params = PatternParameters.from_controls({'pattern': pattern, 'rows': 3, 'cols': 4})
    root = ET.fromstring(VectorExporter(params).tostring())
    footer = [g for g in root.iter(SVG_NS + 'g') if g.get('id') == 'footer']
    assert len(footer) == 1
    texts = [t.text for t in footer[0].iter(SVG_NS + 'text')]
    assert texts == [SITE_LABEL, config_string(params)]
    anchors = [t.get('text-anchor') for t in footer[0].iter(SVG_NS + 'text')]
    assert anchors == ['start', 'end']


def test_summary_shows_entered_values():
    params = PatternParameters.from_controls({'pattern': 'dots', 'rows': 3, 'cols': 3, 'cell_size': '0',
                                              'dot_radius': '0.10'})
    parts = config_summary(params)
    assert 'Cell: 0px' in parts
    assert 'Radius: 0.10x' in parts

    params = PatternParameters.from_controls({
        'pattern': 'apriltag', 'apriltag_tag_size': '120', 'apriltag_spacing_ratio': '0.25',
        'apriltag_start': '-2', 'apriltag_show_intersections': True, 'apriltag_intersection_px': '08'})
    parts = config_summary(params)
    assert 'Tag Size: 120px' in parts
    assert 'Spacing Ratio: 0.25' in parts
    assert 'Start: -2' in parts
    assert params.apriltag.start_id == 0
    assert parts[-1] == 'Ix Square: 08px'
