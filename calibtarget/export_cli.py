import argparse
import asyncio
import logging
import sys
from pathlib import Path

from calibtarget import patterns


_logger = logging.getLogger('calibtarget.cli')


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Renders a calibration target configured via TOML to PNG/SVG/PDF.')
    parser.add_argument(
        'pattern_config', action='store', type=Path,
        help="The TOML file containing the pattern specification ([pattern] table)."
    )
    parser.add_argument(
        '-o', '--output-folder', dest='output_folder', action='store',
        type=Path, default=Path('.'),
        help='Folder to store the exported file(s) in.')
    parser.add_argument(
        '--basename', dest='basename', action='store', default=None,
        help='Custom file name (without extension). Defaults to calibration-<pattern>-<rows>x<cols>-<size>.')
    parser.add_argument('--png', action='store_true', help='Export PNG.')
    parser.add_argument('--svg', action='store_true', help='Export SVG.')
    parser.add_argument('--pdf', action='store_true', help='Export PDF.')
    parser.add_argument(
        '--overwrite', action='store_true',
        help='Overwrite existing files.')
    return parser.parse_args(argv)


def export_cli(argv=None) -> int:
    """Exports the configured target. If no format is selected, all
    formats supported by the pattern are exported."""
    args = parse_args(argv)
    try:
        params = patterns.PatternParameters.load_toml(args.pattern_config)
    except (OSError, patterns.SpecificationError) as e:
        _logger.error(f'Cannot load pattern configuration: {e}')
        return 1

    export_png, export_svg, export_pdf = args.png, args.svg, args.pdf
    if not any([export_png, export_svg, export_pdf]):
        export_png = True
        export_svg = export_pdf = params.kind.supports_vector

    try:
        written = asyncio.run(patterns.export_board(
            params, output_basename=args.basename, output_folder=str(args.output_folder),
            export_pdf=export_pdf, export_png=export_png, export_svg=export_svg,
            prevent_overwrite=not args.overwrite))
    except (patterns.ExportError, OSError) as e:
        _logger.error(f'Export failed: {e}')
        return 1
    for fn in written:
        print(fn)
    return 0


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    sys.exit(export_cli())
