# selection.py
# Matches a dragged straight-line selection against placed words
from typing import Iterable, List, Optional, Set, Tuple

from ..config import MIN_SELECTION_LENGTH
from .wordsearch import WordPlacement

Cell = Tuple[int, int]


def _sign(value):
    return (value > 0) - (value < 0)


def _as_placement(p):
    return p if isinstance(p, WordPlacement) else WordPlacement.from_dict(p)


def build_path(start: Cell, end: Cell) -> List[Cell]:
    # steps follow the sign of each axis, so off-angle drags snap to the nearest diagonal
    dr = end[0] - start[0]
    dc = end[1] - start[1]
    steps = max(abs(dr), abs(dc))
    step_r, step_c = _sign(dr), _sign(dc)
    return [(start[0] + step_r * i, start[1] + step_c * i) for i in range(steps + 1)]


def match_path(placements, path: List[Cell], found_words: Iterable[str] = ()) -> Optional[WordPlacement]:
    """Return the placement whose cells equal ``path`` read forward or backward.

    Words listed in ``found_words`` are skipped.
    """
    if len(path) < MIN_SELECTION_LENGTH:
        return None

    path = [tuple(cell) for cell in path]
    reversed_path = path[::-1]
    found = set(found_words)

    for placement in map(_as_placement, placements):
        if placement.word in found or len(placement.word) != len(path):
            continue
        cells = placement.cells()
        if cells == path or cells == reversed_path:
            return placement
    return None


def cells_for_words(placements, words: Iterable[str]) -> Set[Cell]:
    wanted = set(words)
    covered = set()
    for placement in map(_as_placement, placements):
        if placement.word in wanted:
            covered.update(placement.cells())
    return covered
