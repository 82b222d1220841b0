# wordsearch.py
import logging
import random
import string
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import DEFAULT_GRID_SIZE, MAX_PLACEMENT_ATTEMPTS

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_uppercase

# (name, dr, dc) clockwise from north
DIRECTIONS = (
    ('N', -1, 0),
    ('NE', -1, 1),
    ('E', 0, 1),
    ('SE', 1, 1),
    ('S', 1, 0),
    ('SW', 1, -1),
    ('W', 0, -1),
    ('NW', -1, -1),
)


class InvalidGridSize(ValueError):
    pass


@dataclass(frozen=True)
class WordPlacement:
    word: str
    row: int
    col: int
    dr: int
    dc: int

    def cells(self) -> List[Tuple[int, int]]:
        return [(self.row + self.dr * i, self.col + self.dc * i) for i in range(len(self.word))]

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "WordPlacement":
        return cls(
            word=str(data["word"]),
            row=int(data["row"]),
            col=int(data["col"]),
            dr=int(data["dr"]),
            dc=int(data["dc"]),
        )


@dataclass
class WordSearchResult:
    grid: List[List[str]]
    words: List[str]
    placements: List[WordPlacement]

    def rows(self) -> List[str]:
        return ["".join(row) for row in self.grid]

    def missing_words(self, requested: Iterable[str]) -> List[str]:
        """Requested words (normalized) that did not make it into the grid."""
        placed = set(self.words)
        return [w for w in normalize_words(requested) if w not in placed]

    def to_dict(self) -> Dict[str, object]:
        return {
            "grid": self.rows(),
            "words": list(self.words),
            "placements": [p.to_dict() for p in self.placements],
        }


def normalize_words(words: Iterable[str]) -> List[str]:
    """Uppercase, dedupe and order words longest first.

    The sort is stable, so words of equal length keep their first-seen order.
    """
    unique = dict.fromkeys(str(w).upper() for w in words)
    return sorted((w for w in unique if w), key=len, reverse=True)


class WordSearchGenerator:
    """Greedy word search packer.

    Words are tried longest first. Each word gets ``max_attempts`` random
    (direction, row, col) draws; a word that never fits is dropped and earlier
    placements are never undone. ``rng`` only needs ``randrange(k)``.
    """

    def __init__(self, size=DEFAULT_GRID_SIZE, max_attempts=MAX_PLACEMENT_ATTEMPTS, rng=None):
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise InvalidGridSize(f"Grid size must be a positive integer, got: {size!r}")
        if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts <= 0:
            raise ValueError(f"max_attempts must be a positive integer, got: {max_attempts!r}")
        self.size = size
        self.max_attempts = max_attempts
        self.rng = rng if rng is not None else random.Random()
        self.matrix: List[List[Optional[str]]] = self._empty_matrix()
        self.placements: List[WordPlacement] = []

    def _empty_matrix(self):
        return [[None for _ in range(self.size)] for _ in range(self.size)]

    def in_bounds(self, r, c):
        return 0 <= r < self.size and 0 <= c < self.size

    def fits(self, word, row, col, dr, dc):
        for i in range(len(word)):
            r = row + dr * i
            c = col + dc * i
            if not self.in_bounds(r, c):
                return False
            cell = self.matrix[r][c]
            if cell is not None and cell != word[i]:
                return False
        return True

    def place_at(self, word, row, col, dr, dc) -> WordPlacement:
        for i, letter in enumerate(word):
            self.matrix[row + dr * i][col + dc * i] = letter
        placement = WordPlacement(word, row, col, dr, dc)
        self.placements.append(placement)
        return placement

    def place_word(self, word) -> Optional[WordPlacement]:
        for _ in range(self.max_attempts):
            _, dr, dc = DIRECTIONS[self.rng.randrange(len(DIRECTIONS))]
            row = self.rng.randrange(self.size)
            col = self.rng.randrange(self.size)
            if self.fits(word, row, col, dr, dc):
                return self.place_at(word, row, col, dr, dc)
        logger.debug(f"Could not place {word!r} in {self.size}x{self.size} grid after {self.max_attempts} attempts")
        return None

    def fill_random_letters(self):
        for r in range(self.size):
            for c in range(self.size):
                if self.matrix[r][c] is None:
                    self.matrix[r][c] = ALPHABET[self.rng.randrange(len(ALPHABET))]

    def generate(self, words) -> WordSearchResult:
        self.matrix = self._empty_matrix()
        self.placements = []

        placed = []
        for word in normalize_words(words):
            if self.place_word(word):
                placed.append(word)

        self.fill_random_letters()
        return WordSearchResult(
            grid=[list(row) for row in self.matrix],
            words=placed,
            placements=list(self.placements),
        )


def generate_word_search(words, grid_size=DEFAULT_GRID_SIZE, rng=None,
                         max_attempts=MAX_PLACEMENT_ATTEMPTS) -> WordSearchResult:
    return WordSearchGenerator(grid_size, max_attempts=max_attempts, rng=rng).generate(words)
