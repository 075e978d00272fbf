import pytest
from calibtarget.patterns.drawers import assign_ids, traversal_sequence


def test_row_major():
    assert traversal_sequence(2, 3) == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]
    assert traversal_sequence(2, 3, 'top-left', 'row-major-rtl') == [(0, 2), (0, 1), (0, 0), (1, 2), (1, 1), (1, 0)]


def test_snake():
    assert traversal_sequence(3, 2, 'top-left', 'snake-ltr-first') == [(0, 0), (0, 1), (1, 1), (1, 0), (2, 0), (2, 1)]
    assert traversal_sequence(3, 2, 'top-left', 'snake-rtl-first') == [(0, 1), (0, 0), (1, 0), (1, 1), (2, 1), (2, 0)]


def test_origins():
    # Directions are relative to the origin corner
    assert traversal_sequence(2, 3, 'bottom-right', 'row-major-ltr') == [(1, 2), (1, 1), (1, 0), (0, 2), (0, 1), (0, 0)]
    assert traversal_sequence(2, 2, 'bottom-left', 'snake-ltr-first') == [(1, 0), (1, 1), (0, 1), (0, 0)]
    assert traversal_sequence(2, 2, 'top-right', 'row-major-ltr') == [(0, 1), (0, 0), (1, 1), (1, 0)]


@pytest.mark.parametrize('origin', ['top-left', 'top-right', 'bottom-left', 'bottom-right'])
@pytest.mark.parametrize('order', ['row-major-ltr', 'row-major-rtl', 'snake-ltr-first', 'snake-rtl-first'])
def test_complete(origin, order):
    seq = traversal_sequence(4, 5, origin, order)
    assert len(seq) == 20
    assert set(seq) == {(r, c) for r in range(4) for c in range(5)}


def test_invalid_codes():
    with pytest.raises(ValueError):
        traversal_sequence(2, 2, 'center')
    with pytest.raises(ValueError):
        traversal_sequence(2, 2, 'top-left', 'spiral')


def test_assign_ids():
    cells = [(0, 0), (0, 1), (0, 2)]
    assert assign_ids(cells, 3) == {(0, 0): 3, (0, 1): 4, (0, 2): 5}
    assert assign_ids(cells, 0, 2) == {(0, 0): 0, (0, 1): 2, (0, 2): 4}
    # Ids wrap around
    assert assign_ids(cells, 48, 1, 50) == {(0, 0): 48, (0, 1): 49, (0, 2): 0}
