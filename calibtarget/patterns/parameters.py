import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import toml

from .common import ORIGINS, TRAVERSAL_ORDERS, PatternKind, SpecificationError, TOP_LEFT_COLORS, parse_bool, parse_float, parse_int
from .geometry import ExportSize, export_size, DEFAULT_ASPECT_H, DEFAULT_ASPECT_W, DEFAULT_CELL_SIZE, DEFAULT_OUTPUT_WIDTH


_logger = logging.getLogger('calibtarget.parameters')


# Names of all controls which are read from a control snapshot. Hyphenated
# variants (e.g. `cell-size`) are accepted, too.
CONTROL_KEYS = (
    'pattern', 'rows', 'cols', 'cell_size', 'dot_radius', 'top_left',
    'output_width', 'aspect_w', 'aspect_h',
    'charuco_dict', 'charuco_ratio', 'charuco_start', 'charuco_on',
    'charuco_origin', 'charuco_order', 'charuco_step', 'charuco_show_id',
    'apriltag_family', 'apriltag_start', 'apriltag_tag_size', 'apriltag_origin',
    'apriltag_order', 'apriltag_spacing_ratio', 'apriltag_show_id',
    'apriltag_show_intersections', 'apriltag_intersection_px'
)

# Numeric controls which are summarized in the footer exactly as entered
DISPLAY_KEYS = (
    'cell_size', 'dot_radius', 'charuco_ratio', 'charuco_start',
    'apriltag_tag_size', 'apriltag_spacing_ratio', 'apriltag_start', 'apriltag_intersection_px'
)


def _choice(key: str, value, choices, default: str) -> str:
    code = str(value).strip().lower() if value is not None else default
    if code not in choices:
        _logger.warning(f'Invalid value `{value}` for `{key}`, using `{default}` instead.')
        return default
    return code


@dataclass(frozen=True)
class CharucoOptions:
    """ChArUco specific parameters.

    dictionary:     Name of the ArUco dictionary, e.g. DICT_4X4_50
    marker_ratio:   Marker side length relative to the square size
    start_id:       Id of the first marker (w.r.t. the traversal order)
    on:             Color of the squares which hold the markers
    origin:         Corner at which the id assignment starts
    order:          Traversal order code, see `TRAVERSAL_ORDERS`
    step:           Id increment between subsequent markers
    show_ids:       Print the marker ids onto the board
    """
    dictionary: str = 'DICT_4X4_50'
    marker_ratio: float = 0.7
    start_id: int = 0
    on: str = 'white'
    origin: str = 'top-left'
    order: str = 'row-major-ltr'
    step: int = 1
    show_ids: bool = False


@dataclass(frozen=True)
class AprilTagOptions:
    """AprilTag grid specific parameters.

    family:             AprilTag family, e.g. tag36h11
    start_id:           Id of the first tag (w.r.t. the traversal order)
    tag_size:           Side length of a tag in [px]
    origin, order:      Id assignment, see `CharucoOptions`
    spacing_ratio:      Gap between neighboring tags relative to the tag size
    show_ids:           Print the tag ids below the tags
    show_intersections: Draw squares at the gap intersections
    intersection_size:  Side length of the intersection squares in [px]
    """
    family: str = 'tag36h11'
    start_id: int = 0
    tag_size: int = 160
    origin: str = 'top-left'
    order: str = 'row-major-ltr'
    spacing_ratio: float = 0.3
    show_ids: bool = False
    show_intersections: bool = False
    intersection_size: int = 10


@dataclass(frozen=True)
class PatternParameters:
    """Immutable snapshot of all parameters required to render a target.

    `rows` and `cols` hold the number of inner rows/columns as entered by the
    user. Any geometry computation must use the clamped `inner_rows` and
    `inner_cols` instead.
    """
    kind: PatternKind = PatternKind.CHECKERBOARD
    rows: int = 6
    cols: int = 9
    cell_size: int = DEFAULT_CELL_SIZE
    top_left: str = 'black'
    dot_radius: float = 0.1

    output_width: int = DEFAULT_OUTPUT_WIDTH
    aspect_w: int = DEFAULT_ASPECT_W
    aspect_h: int = DEFAULT_ASPECT_H

    charuco: CharucoOptions = field(default_factory=CharucoOptions)
    apriltag: AprilTagOptions = field(default_factory=AprilTagOptions)
    # Raw control values (see `DISPLAY_KEYS`), not used for rendering
    entered: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def display_value(self, key: str, value) -> str:
        """Returns the control value as entered (or the formatted `value` if
        the control was not given)."""
        if key in self.entered:
            return str(self.entered[key]).strip()
        return f'{value:g}' if isinstance(value, float) else str(value)

    @property
    def inner_rows(self) -> int:
        return max(self.kind.min_inner, self.rows)

    @property
    def inner_cols(self) -> int:
        return max(self.kind.min_inner, self.cols)

    @property
    def export_size(self) -> ExportSize:
        return export_size(self.output_width, self.aspect_w, self.aspect_h)

    @classmethod
    def from_controls(cls, controls: Mapping[str, Any]) -> 'PatternParameters':
        """Builds the parameters from a (read-only) control snapshot.

        Missing or unparsable values take their defaults.

        Raises:
            SpecificationError: If the pattern type is unknown.
        """
        values = {str(k).replace('-', '_'): v for k, v in controls.items()}
        unknown = [k for k in values if k not in CONTROL_KEYS]
        if unknown:
            _logger.debug(f'Ignoring unknown controls: {unknown}')

        def _get(key, default=None):
            value = values.get(key, default)
            return default if value is None else value

        kind = PatternKind.parse(_get('pattern', PatternKind.CHECKERBOARD))
        top_left = _choice('top_left', _get('top_left'), TOP_LEFT_COLORS, 'black')

        charuco_defaults = CharucoOptions()
        charuco = CharucoOptions(
            dictionary=str(_get('charuco_dict', charuco_defaults.dictionary)),
            marker_ratio=parse_float(_get('charuco_ratio'), charuco_defaults.marker_ratio),
            start_id=max(0, parse_int(_get('charuco_start'), charuco_defaults.start_id)),
            on=_choice('charuco_on', _get('charuco_on'), TOP_LEFT_COLORS, charuco_defaults.on),
            origin=_choice('charuco_origin', _get('charuco_origin'), ORIGINS, charuco_defaults.origin),
            order=_choice('charuco_order', _get('charuco_order'), TRAVERSAL_ORDERS, charuco_defaults.order),
            step=max(1, parse_int(_get('charuco_step'), charuco_defaults.step)),
            show_ids=parse_bool(_get('charuco_show_id'), charuco_defaults.show_ids))

        april_defaults = AprilTagOptions()
        apriltag = AprilTagOptions(
            family=str(_get('apriltag_family', april_defaults.family)),
            start_id=max(0, parse_int(_get('apriltag_start'), april_defaults.start_id)),
            tag_size=max(1, parse_int(_get('apriltag_tag_size'), april_defaults.tag_size)),
            origin=_choice('apriltag_origin', _get('apriltag_origin'), ORIGINS, april_defaults.origin),
            order=_choice('apriltag_order', _get('apriltag_order'), TRAVERSAL_ORDERS, april_defaults.order),
            spacing_ratio=max(0.0, parse_float(_get('apriltag_spacing_ratio'), april_defaults.spacing_ratio)),
            show_ids=parse_bool(_get('apriltag_show_id'), april_defaults.show_ids),
            show_intersections=parse_bool(_get('apriltag_show_intersections'), april_defaults.show_intersections),
            intersection_size=max(1, parse_int(_get('apriltag_intersection_px'), april_defaults.intersection_size)))

        return cls(kind=kind,
                   rows=parse_int(_get('rows'), kind.min_inner),
                   cols=parse_int(_get('cols'), kind.min_inner),
                   cell_size=max(1, parse_int(_get('cell_size'), DEFAULT_CELL_SIZE)),
                   top_left=top_left,
                   dot_radius=parse_float(_get('dot_radius'), 0.1),
                   output_width=parse_int(_get('output_width'), DEFAULT_OUTPUT_WIDTH),
                   aspect_w=parse_int(_get('aspect_w'), DEFAULT_ASPECT_W),
                   aspect_h=parse_int(_get('aspect_h'), DEFAULT_ASPECT_H),
                   charuco=charuco, apriltag=apriltag,
                   entered={k: values[k] for k in DISPLAY_KEYS if values.get(k) is not None})

    @classmethod
    def load_toml(cls, filename) -> 'PatternParameters':
        """Loads the parameters from the `[pattern]` table of a TOML file.

        The table entries use the same names as the control snapshot, see
        `CONTROL_KEYS`.
        """
        _logger.info(f'Loading the pattern configuration from `{filename}`')
        config = toml.load(filename)
        table = config.get('pattern')
        if not isinstance(table, dict):
            raise SpecificationError(f'Configuration `{filename}` has no [pattern] table.')
        return cls.from_controls(table)
