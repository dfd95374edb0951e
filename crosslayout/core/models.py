"""Data models supporting the layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple, Union

from .constants import BOUNDARY_GLYPH, CellType, Direction
from .exceptions import InvalidCharacterError

Coord = Tuple[int, int]


@dataclass(frozen=True)
class CellValue:
    """Value stored in an occupied grid cell."""

    type: CellType
    letter: Optional[str] = None

    @classmethod
    def of_letter(cls, char: str) -> CellValue:
        if not isinstance(char, str) or len(char) != 1:
            raise InvalidCharacterError(char)
        return cls(CellType.LETTER, char)

    @property
    def is_letter(self) -> bool:
        return self.type == CellType.LETTER

    @property
    def is_boundary(self) -> bool:
        return self.type == CellType.BOUNDARY

    @property
    def glyph(self) -> str:
        return self.letter if self.letter is not None else BOUNDARY_GLYPH


BOUNDARY = CellValue(CellType.BOUNDARY)


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive extent of the occupied cells."""

    row_min: int
    row_max: int
    col_min: int
    col_max: int

    @property
    def width(self) -> int:
        return self.col_max - self.col_min

    @property
    def height(self) -> int:
        return self.row_max - self.row_min

    @property
    def rows(self) -> int:
        return self.height + 1

    @property
    def cols(self) -> int:
        return self.width + 1

    def contains(self, row: int, col: int) -> bool:
        return self.row_min <= row <= self.row_max and self.col_min <= col <= self.col_max


@dataclass(frozen=True)
class WordLocation:
    """Origin of a padded word (its leading boundary cell) and its direction."""

    row: int
    col: int
    direction: Direction

    def coord_at(self, offset: int) -> Coord:
        dr, dc = self.direction.step
        return self.row + dr * offset, self.col + dc * offset


@dataclass(frozen=True)
class PlacedCell:
    row: int
    col: int
    char: str

    @property
    def coord(self) -> Coord:
        return self.row, self.col


@dataclass(frozen=True)
class Owner:
    """The placed word that first wrote a cell."""

    word_index: int
    direction: Direction


@dataclass(frozen=True)
class NotPlaced:
    pass


@dataclass(frozen=True)
class Placed:
    """A committed placement.

    ``cells`` lists every letter of the word, shared letters included.
    ``written`` lists only the padded cells this word wrote itself, so
    boundaries may appear there and letters found already in place do not.
    """

    location: WordLocation
    cells: Tuple[PlacedCell, ...]
    written: Tuple[Tuple[Coord, CellValue], ...]


WordState = Union[NotPlaced, Placed]


@dataclass
class Word:
    """A word to lay out. ``index`` identifies it, so duplicate texts are fine."""

    index: int
    text: str
    state: WordState = field(default_factory=NotPlaced)
    _padded: Optional[Tuple[CellValue, ...]] = field(default=None, repr=False, compare=False)

    @property
    def padded(self) -> Tuple[CellValue, ...]:
        if self._padded is None:
            letters = tuple(CellValue.of_letter(char) for char in self.text)
            self._padded = (BOUNDARY,) + letters + (BOUNDARY,)
        return self._padded

    @property
    def is_placed(self) -> bool:
        return isinstance(self.state, Placed)

    @property
    def placement(self) -> Placed:
        if not isinstance(self.state, Placed):
            raise ValueError(f"Word {self.text!r} is not placed")
        return self.state

    def padded_cells(self, location: WordLocation) -> Iterator[Tuple[Coord, CellValue]]:
        for offset, value in enumerate(self.padded):
            yield location.coord_at(offset), value
