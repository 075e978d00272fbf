"""Assignment of marker ids to grid cells.

The traversal is defined relative to the origin corner: the rows are visited
starting at the origin's row, and "left to right" denotes the direction away
from the origin's side (i.e. for a right-hand origin, the visual direction is
mirrored).
"""
from typing import List, Sequence, Tuple

from ..common import ORIGINS, TRAVERSAL_ORDERS


def traversal_sequence(rows: int, cols: int, origin: str = 'top-left',
                       order: str = 'row-major-ltr') -> List[Tuple[int, int]]:
    """Returns all (row, col) cells in visiting order.

    Raises:
        ValueError: For unknown origin or order codes.
    """
    if origin not in ORIGINS:
        raise ValueError(f'Unknown traversal origin `{origin}`.')
    if order not in TRAVERSAL_ORDERS:
        raise ValueError(f'Unknown traversal order `{order}`.')
    first_ltr = order in ('row-major-ltr', 'snake-ltr-first')
    snake = order.startswith('snake')
    flip_rows = origin.startswith('bottom')
    flip_cols = origin.endswith('right')

    sequence = list()
    for r in range(rows):
        ltr = first_ltr if not snake or r % 2 == 0 else not first_ltr
        cols_visited = range(cols) if ltr else range(cols - 1, -1, -1)
        for c in cols_visited:
            sequence.append((rows - 1 - r if flip_rows else r,
                             cols - 1 - c if flip_cols else c))
    return sequence


def assign_ids(cells: Sequence[Tuple[int, int]], start_id: int, step: int = 1,
               num_ids: int = None) -> dict:
    """Maps each cell (in the given order) to its marker id.

    Ids exceeding the family size `num_ids` wrap around.
    """
    ids = dict()
    for idx, cell in enumerate(cells):
        marker_id = start_id + idx * step
        if num_ids:
            marker_id %= num_ids
        ids[cell] = marker_id
    return ids
