import asyncio
import xml.etree.ElementTree as ET
import numpy as np
import pytest
from calibtarget.patterns import ExportError, PatternParameters, RenderCoordinator, VectorExporter
from calibtarget.patterns.drawers import AprilGridSvgGenerator


SVG_NS = '{http://www.w3.org/2000/svg}'


def parse_svg(params):
    return ET.fromstring(VectorExporter(params).tostring())


def find_group(root, group_id):
    groups = [g for g in root.iter(SVG_NS + 'g') if g.get('id') == group_id]
    assert len(groups) == 1
    return groups[0]


def test_checkerboard_parity():
    params = PatternParameters.from_controls({
        'pattern': 'checkerboard', 'rows': 2, 'cols': 2, 'cell_size': 50,
        'output_width': 400, 'aspect_w': 4, 'aspect_h': 3})
    root = parse_svg(params)
    assert root.get('width') == '400'
    assert root.get('height') == '300'
    assert root.get('viewBox') == '0,0,400,300'

    rects = list(find_group(root, 'checkerboard').iter(SVG_NS + 'rect'))
    # 3x3 squares, 5 of them are black
    assert len(rects) == 5
    centers = sorted((float(r.get('x')) + float(r.get('width')) / 2,
                      float(r.get('y')) + float(r.get('height')) / 2) for r in rects)
    assert centers == [(150, 100), (150, 200), (200, 150), (250, 100), (250, 200)]

    # The raster export has black squares at exactly these positions
    surface, _, _ = asyncio.run(RenderCoordinator(params).render_export())
    img = surface.to_ndarray()
    for cx in [150, 200, 250]:
        for cy in [100, 150, 200]:
            is_black = bool(np.all(img[cy, cx] == 0))
            assert is_black == ((cx, cy) in centers)


def test_top_left_white():
    params = PatternParameters.from_controls({
        'pattern': 'checkerboard', 'rows': 2, 'cols': 2, 'top_left': 'white',
        'output_width': 400, 'aspect_w': 4, 'aspect_h': 3})
    rects = list(find_group(parse_svg(params), 'checkerboard').iter(SVG_NS + 'rect'))
    assert len(rects) == 4


def test_grid_lines():
    params = PatternParameters.from_controls({'pattern': 'grid', 'rows': 3, 'cols': 5})
    lines = list(find_group(parse_svg(params), 'grid').iter(SVG_NS + 'line'))
    # Only the inner boundaries
    assert len(lines) == 3 + 5


def test_dots():
    params = PatternParameters.from_controls({'pattern': 'dots', 'rows': 4, 'cols': 5, 'dot_radius': 0.2,
                                              'cell_size': 40})
    circles = list(find_group(parse_svg(params), 'dots').iter(SVG_NS + 'circle'))
    assert len(circles) == 20
    assert all(float(c.get('r')) == pytest.approx(8) for c in circles)


def test_charuco_not_supported():
    params = PatternParameters.from_controls({'pattern': 'charuco'})
    with pytest.raises(ExportError):
        VectorExporter(params).tostring()


def test_aprilgrid_mm():
    params = PatternParameters.from_controls({
        'pattern': 'apriltag', 'rows': 2, 'cols': 3, 'apriltag_show_intersections': True,
        'apriltag_show_id': True})
    root = parse_svg(params)
    assert root.get('width').endswith('mm')
    assert float(root.get('width')[:-2]) == pytest.approx(1920 * 25.4 / 96)
    assert float(root.get('height')[:-2]) == pytest.approx(1080 * 25.4 / 96)

    ix = list(find_group(root, 'intersections').iter(SVG_NS + 'rect'))
    assert len(ix) == 3 * 4
    gap_mm = 160 * 0.3 * 25.4 / 96
    assert all(float(r.get('width')) == pytest.approx(gap_mm) for r in ix)
    assert len(list(find_group(root, 'tags').iter(SVG_NS + 'rect'))) > 6
    labels = [t.text for t in find_group(root, 'tag-ids').iter(SVG_NS + 'text')]
    assert sorted(int(l) for l in labels) == list(range(6))


def test_aprilgrid_dpi():
    params = PatternParameters.from_controls({'pattern': 'apriltag', 'rows': 1, 'cols': 1})
    gen = AprilGridSvgGenerator(params, dpi=300)
    assert gen.mm_per_px == pytest.approx(25.4 / 300)
    root = ET.fromstring(gen.generate())
    assert float(root.get('width')[:-2]) == pytest.approx(1920 * 25.4 / 300)
