import enum
import math


class PatternKind(enum.Enum):
    """Supported calibration target types.

    The enum value is the lower-case code which is used in control snapshots,
    configuration files, footers and export filenames.
    """
    CHECKERBOARD = 'checkerboard'
    GRID = 'grid'
    DOTS = 'dots'
    CHARUCO = 'charuco'
    APRILTAG = 'apriltag'

    @property
    def min_inner(self) -> int:
        """Minimum number of inner rows/columns."""
        return 1 if self is PatternKind.APRILTAG else 2

    @property
    def supports_vector(self) -> bool:
        """Whether the pattern can be exported as SVG (and thus PDF)."""
        return self is not PatternKind.CHARUCO

    @property
    def is_cell_based(self) -> bool:
        """Cell-based patterns are laid out on a contiguous grid of squares
        (as opposed to the AprilTag grid, which places tags with gaps)."""
        return self is not PatternKind.APRILTAG

    @classmethod
    def parse(cls, value) -> 'PatternKind':
        """Looks up the pattern kind by its code (or returns the given kind).

        Raises:
            SpecificationError: If the code is unknown.
        """
        if isinstance(value, cls):
            return value
        code = str(value).strip().lower()
        for kind in cls:
            if kind.value == code:
                return kind
        raise SpecificationError(f'Unknown pattern type `{value}`.')


# Corner at which the id assignment of marker-based boards starts
ORIGINS = ('top-left', 'top-right', 'bottom-left', 'bottom-right')

# Order in which marker ids are assigned, see `drawers.traversal`
TRAVERSAL_ORDERS = ('row-major-ltr', 'row-major-rtl', 'snake-ltr-first', 'snake-rtl-first')

TOP_LEFT_COLORS = ('black', 'white')


class SpecificationError(Exception):
    """Raised for invalid pattern specifications."""
    pass


class ExportError(Exception):
    """Raised if a pattern cannot be exported to the requested format."""
    pass


def round_half_up(value: float) -> int:
    """Rounds to the nearest integer, halves are rounded up.

    Python's built-in `round` rounds halves to even, which would shift every
    other grid edge by a pixel.
    """
    return int(math.floor(value + 0.5))


def parse_int(value, default: int) -> int:
    """Parses an integer input value the way form fields are interpreted:
    missing, unparsable and zero values yield the `default`. Floating point
    inputs are truncated."""
    try:
        parsed = int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            parsed = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return default
    return parsed if parsed != 0 else default


def parse_float(value, default: float) -> float:
    """Float counterpart of :func:`parse_int`."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(parsed) or parsed == 0:
        return default
    return parsed


def parse_bool(value, default: bool = False) -> bool:
    """Interprets checkbox-like values (bools, numbers, 'true'/'on'/...)."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on', 'checked')
    return bool(value)
