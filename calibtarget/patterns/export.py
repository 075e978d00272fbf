import io
import logging
import os

from reportlab.graphics import renderPDF
from svglib.svglib import svg2rlg
from vito import pyutils

from .common import ExportError
from .dispatch import PatternDispatcher
from .geometry import ExportSize
from .parameters import PatternParameters
from .render import draw_export
from .surface import RasterSurface
from .svgexport import VectorExporter


_logger = logging.getLogger('calibtarget.export')


def export_basename(params: PatternParameters, size: ExportSize = None) -> str:
    """Returns the default file name (without extension), i.e.
    `calibration-<kind>-<rows>x<cols>-<width>x<height>`."""
    if size is None:
        size = params.export_size
    return f'calibration-{params.kind.value}-{params.rows}x{params.cols}-{size.label}'


def export_filename(params: PatternParameters, extension: str, size: ExportSize = None) -> str:
    return f'{export_basename(params, size)}.{extension}'


async def render_png(params: PatternParameters, dispatcher: PatternDispatcher = None) -> bytes:
    """Renders the target at full export resolution and encodes it as PNG.

    Raises:
        ExportError: If drawing the target fails.
    """
    size = params.export_size
    surface = RasterSurface(size.width, size.height)
    try:
        await draw_export(surface, size.width, size.height, params, dispatcher)
    except ExportError:
        raise
    except Exception as e:
        raise ExportError(f'Failed to draw the {params.kind.value} target: {e}') from e
    return surface.to_png()


def render_svg(params: PatternParameters) -> str:
    """Returns the SVG document of the target.

    Raises:
        ExportError: If the pattern cannot be exported as SVG or if the
            generation fails.
    """
    try:
        return VectorExporter(params).tostring()
    except ExportError:
        raise
    except Exception as e:
        raise ExportError(f'Failed to generate the {params.kind.value} SVG: {e}') from e


def render_pdf(svg_text: str) -> bytes:
    """Converts the SVG document to PDF."""
    drawing = svg2rlg(io.StringIO(svg_text))
    if drawing is None:
        raise ExportError('Cannot convert the SVG document to PDF.')
    return renderPDF.drawToString(drawing)


async def export_board(params: PatternParameters, output_basename: str = None, output_folder: str = '.',
                       export_pdf: bool = True, export_png: bool = True, export_svg: bool = True,
                       prevent_overwrite: bool = True, dispatcher: PatternDispatcher = None) -> list:
    """Saves the given calibration target to disk.

:params:            The pattern parameters.

:output_basename:   If None, the default export name (see `export_basename`)
                    will be used. Otherwise, the (slugified) basename will
                    be used, i.e. the file(s) will be stored as
                    <basename>.<extension>

:output_folder:     Folder where to save the files

:export_pdf, export_png, export_svg: Flags to select the desired output
                    format(s).

:prevent_overwrite: If True and the output file(s) already exist(s), a
                    FileExistsError will be raised

Returns the list of written files. All outputs are rendered before anything
is written, i.e. if an export fails (ExportError), no file is written.
    """
    if all([f is False for f in [export_pdf, export_png, export_svg]]):
        raise ValueError('You must enable at least one export format!')

    if output_basename is None:
        output_basename = export_basename(params)
    else:
        output_basename = pyutils.slugify(output_basename)

    # Prevent overwrite if requested:
    fn_svg = os.path.join(output_folder, output_basename + '.svg')
    fn_pdf = os.path.join(output_folder, output_basename + '.pdf')
    fn_png = os.path.join(output_folder, output_basename + '.png')
    outputs = list()
    if export_png:
        outputs.append((fn_png, 'PNG'))
    if export_svg:
        outputs.append((fn_svg, 'SVG'))
    if export_pdf:
        outputs.append((fn_pdf, 'PDF'))
    if prevent_overwrite:
        _logger.info('Checking existing files at output location to prevent overwriting.')
        for fn, tp in outputs:
            if os.path.exists(fn):
                raise FileExistsError(f'{tp} file already exists: {fn}')

    payloads = dict()
    if export_svg or export_pdf:
        svg_text = render_svg(params)
        if export_svg:
            payloads[fn_svg] = svg_text.encode('utf-8')
        if export_pdf:
            payloads[fn_pdf] = render_pdf(svg_text)
    if export_png:
        payloads[fn_png] = await render_png(params, dispatcher)

    if not os.path.exists(output_folder):
        _logger.info(f'Creating output folder: {output_folder}')
        os.makedirs(output_folder)

    written = list()
    for fn, tp in outputs:
        _logger.info(f'Exporting {params.kind.value} target as {tp} to {fn}')
        with open(fn, 'wb') as fp:
            fp.write(payloads[fn])
        written.append(fn)
    return written
