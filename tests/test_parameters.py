import pytest
from tests.calibtarget_test_config import EXAMPLE_DATA_DIR, TEST_DATA_DIR
from calibtarget.patterns import PatternKind, PatternParameters, SpecificationError
from calibtarget.patterns.common import parse_bool, parse_float, parse_int


def test_parsing():
    assert parse_int('12', 3) == 12
    assert parse_int('12.7', 3) == 12
    assert parse_int('0', 3) == 3
    assert parse_int('', 3) == 3
    assert parse_int(None, 3) == 3
    assert parse_int('foo', 3) == 3
    assert parse_int(float('inf'), 3) == 3
    assert parse_int(-4, 3) == -4
    assert parse_float('0.25', 0.1) == 0.25
    assert parse_float('nan', 0.1) == 0.1
    assert parse_float(0, 0.1) == 0.1
    assert parse_bool('on')
    assert parse_bool(True)
    assert not parse_bool('false')
    assert parse_bool(None, True)


def test_defaults():
    params = PatternParameters()
    assert params.kind is PatternKind.CHECKERBOARD
    assert params.export_size.label == '1920x1080'
    assert params.charuco.dictionary == 'DICT_4X4_50'
    assert params.apriltag.family == 'tag36h11'


def test_from_controls():
    params = PatternParameters.from_controls({
        'pattern': 'Dots', 'rows': '4', 'cols': 'x', 'cell-size': '80',
        'dot_radius': '0.15', 'output_width': '1280', 'aspect_w': 4, 'aspect_h': 3,
        'unknown_control': 42})
    assert params.kind is PatternKind.DOTS
    assert params.rows == 4
    # Unparsable inputs take the minimum
    assert params.cols == 2
    assert params.cell_size == 80
    assert params.dot_radius == 0.15
    assert params.export_size.label == '1280x960'

    with pytest.raises(SpecificationError):
        PatternParameters.from_controls({'pattern': 'spirograph'})


def test_inner_counts_are_clamped():
    params = PatternParameters.from_controls({'pattern': 'checkerboard', 'rows': 1, 'cols': -3})
    # As entered
    assert (params.rows, params.cols) == (1, -3)
    # Used for the geometry
    assert (params.inner_rows, params.inner_cols) == (2, 2)

    params = PatternParameters.from_controls({'pattern': 'apriltag', 'rows': 1, 'cols': 1})
    assert (params.inner_rows, params.inner_cols) == (1, 1)


def test_marker_options():
    params = PatternParameters.from_controls({
        'pattern': 'charuco', 'charuco_dict': 'DICT_5X5_100', 'charuco_start': '-5',
        'charuco_step': '0', 'charuco_on': 'Black', 'charuco_show_id': 'true',
        'apriltag_tag_size': '-3', 'apriltag_spacing_ratio': '-1'})
    assert params.charuco.dictionary == 'DICT_5X5_100'
    assert params.charuco.start_id == 0
    assert params.charuco.step == 1
    assert params.charuco.on == 'black'
    assert params.charuco.show_ids
    assert params.apriltag.tag_size == 1
    assert params.apriltag.spacing_ratio == 0.0


def test_load_toml():
    params = PatternParameters.load_toml(EXAMPLE_DATA_DIR / 'apriltag.toml')
    assert params.kind is PatternKind.APRILTAG
    assert (params.rows, params.cols) == (4, 6)
    assert params.apriltag.show_intersections
    assert params.apriltag.intersection_size == 12

    params = PatternParameters.load_toml(TEST_DATA_DIR / 'grid-hyphenated.toml')
    assert params.kind is PatternKind.GRID
    assert params.cell_size == 60
    assert params.export_size.label == '800x600'

    with pytest.raises(SpecificationError):
        PatternParameters.load_toml(TEST_DATA_DIR / 'no-pattern-table.toml')


def test_invalid_choices_fall_back():
    params = PatternParameters.from_controls({
        'pattern': 'apriltag', 'top_left': 'grey', 'apriltag_order': 'column-major',
        'apriltag_origin': 'center', 'charuco_on': 'red', 'charuco_origin': 'Bottom-Right',
        'charuco_order': 'spiral'})
    assert params.top_left == 'black'
    assert params.apriltag.order == 'row-major-ltr'
    assert params.apriltag.origin == 'top-left'
    assert params.charuco.on == 'white'
    # Codes are case insensitive
    assert params.charuco.origin == 'bottom-right'
    assert params.charuco.order == 'row-major-ltr'


def test_entered_values():
    params = PatternParameters.from_controls({'pattern': 'dots', 'cell_size': '0', 'dot_radius': '0.10'})
    assert params.cell_size == 50
    assert params.dot_radius == 0.1
    assert params.display_value('cell_size', params.cell_size) == '0'
    assert params.display_value('dot_radius', params.dot_radius) == '0.10'
    assert params.display_value('charuco_ratio', params.charuco.marker_ratio) == '0.7'
    # Raw values do not affect equality
    assert params == PatternParameters.from_controls({'pattern': 'dots', 'cell_size': 50, 'dot_radius': 0.1})
