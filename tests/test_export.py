import asyncio
import io
import os
import numpy as np
import pytest
from PIL import Image
from tests.calibtarget_test_config import EXAMPLE_DATA_DIR
from calibtarget.patterns import ExportError, PatternParameters, export_board, export_filename, render_pdf, render_png, render_svg


def board(pattern='checkerboard', **kwargs):
    controls = {'pattern': pattern, 'rows': 3, 'cols': 4, 'output_width': 640, 'aspect_w': 4, 'aspect_h': 3}
    controls.update(kwargs)
    return PatternParameters.from_controls(controls)


def test_filenames():
    assert export_filename(board(), 'png') == 'calibration-checkerboard-3x4-640x480.png'
    assert export_filename(board('apriltag'), 'svg') == 'calibration-apriltag-3x4-640x480.svg'
    # Entered (not clamped) counts
    assert export_filename(board('dots', rows=1), 'pdf') == 'calibration-dots-1x4-640x480.pdf'
    assert export_filename(PatternParameters(), 'png') == 'calibration-checkerboard-6x9-1920x1080.png'


def test_render_formats():
    params = board()
    png = asyncio.run(render_png(params))
    img = Image.open(io.BytesIO(png))
    assert img.size == (640, 480)
    # Background must not be transparent
    assert np.all(np.array(img.convert('RGB'))[0, 0] == 255)

    svg = render_svg(params)
    assert svg.startswith('<svg')
    pdf = render_pdf(svg)
    assert pdf.startswith(b'%PDF')

    with pytest.raises(ExportError):
        render_svg(board('charuco'))


def test_export_board(tmp_path):
    params = board('grid')
    written = asyncio.run(export_board(params, output_folder=str(tmp_path / 'out')))
    expected = [str(tmp_path / 'out' / f'calibration-grid-3x4-640x480.{ext}') for ext in ['png', 'svg', 'pdf']]
    assert written == expected
    for fn in expected:
        assert os.path.getsize(fn) > 0

    with pytest.raises(FileExistsError):
        asyncio.run(export_board(params, output_folder=str(tmp_path / 'out')))
    written = asyncio.run(export_board(params, output_folder=str(tmp_path / 'out'), prevent_overwrite=False,
                                       export_pdf=False, export_svg=False))
    assert written == expected[:1]


def test_export_selection(tmp_path):
    with pytest.raises(ValueError):
        asyncio.run(export_board(board(), output_folder=str(tmp_path), export_pdf=False,
                                 export_png=False, export_svg=False))

    written = asyncio.run(export_board(board(), output_basename='My Board', output_folder=str(tmp_path),
                                       export_pdf=False, export_png=False))
    assert len(written) == 1
    assert written[0].endswith('.svg')
    assert ' ' not in os.path.basename(written[0])


def test_export_failure_writes_nothing(tmp_path):
    with pytest.raises(ExportError):
        asyncio.run(export_board(board('charuco'), output_folder=str(tmp_path)))
    assert os.listdir(tmp_path) == []

    written = asyncio.run(export_board(board('charuco'), output_folder=str(tmp_path),
                                       export_pdf=False, export_svg=False))
    assert len(written) == 1


@pytest.mark.parametrize('config', ['checkerboard.toml', 'dots.toml', 'apriltag.toml'])
def test_example_configs(config, tmp_path):
    params = PatternParameters.load_toml(EXAMPLE_DATA_DIR / config)
    written = asyncio.run(export_board(params, output_folder=str(tmp_path)))
    assert len(written) == 3


def test_draw_failure_is_export_error(tmp_path):
    from calibtarget.patterns import PatternDispatcher, PatternKind

    def broken_drawer(surface, width, height, rows, cols, params):
        raise ValueError('Drawer failed')

    dispatcher = PatternDispatcher().replace(PatternKind.GRID, broken_drawer)
    with pytest.raises(ExportError):
        asyncio.run(render_png(board('grid'), dispatcher))
    with pytest.raises(ExportError):
        asyncio.run(export_board(board('grid'), output_folder=str(tmp_path), dispatcher=dispatcher))
    assert os.listdir(tmp_path) == []
