"""Sparse, unbounded grid storage."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from ..core.constants import BLANK_MARKER
from ..core.exceptions import ConflictError, InvalidCharacterError
from ..core.models import BoundingBox, CellValue, Coord


class CrosswordGrid:
    """Maps occupied coordinates to cell values. Untouched cells are empty.

    The grid has no notion of words: it only guarantees that an occupied cell
    is never overwritten with a different value.
    """

    def __init__(self, cells: Optional[Dict[Coord, CellValue]] = None) -> None:
        self._cells: Dict[Coord, CellValue] = dict(cells or {})

    # ------------------------------------------------------------------
    # Cell manipulation
    # ------------------------------------------------------------------
    def get(self, coord: Coord) -> Optional[CellValue]:
        return self._cells.get(coord)

    def set(self, coord: Coord, value: CellValue) -> None:
        if value.is_letter and (value.letter is None or len(value.letter) != 1):
            raise InvalidCharacterError(value.letter)
        existing = self._cells.get(coord)
        if existing is None:
            self._cells[coord] = value
            return
        if existing != value:
            raise ConflictError(
                f"Cannot write {value.glyph!r} at {coord}: holds {existing.glyph!r}"
            )

    def unset(self, coord: Coord) -> None:
        """Drop a cell. Only used to revert trial writes."""
        self._cells.pop(coord, None)

    def clone(self) -> CrosswordGrid:
        # CellValue is frozen, a shallow copy of the mapping is independent.
        return CrosswordGrid(self._cells)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return not self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coord: object) -> bool:
        return coord in self._cells

    def coords(self) -> List[Coord]:
        """Occupied coordinates in row-major scan order."""
        return sorted(self._cells)

    def items(self) -> Iterator[Tuple[Coord, CellValue]]:
        for coord in self.coords():
            yield coord, self._cells[coord]

    def find_letter(self, char: str) -> List[Coord]:
        if not isinstance(char, str) or len(char) != 1:
            raise InvalidCharacterError(char)
        return [
            coord
            for coord in self.coords()
            if self._cells[coord].is_letter and self._cells[coord].letter == char
        ]

    def letter_count(self) -> int:
        return sum(1 for value in self._cells.values() if value.is_letter)

    def bounding_box(self) -> Optional[BoundingBox]:
        if not self._cells:
            return None
        rows = [row for row, _ in self._cells]
        cols = [col for _, col in self._cells]
        return BoundingBox(
            row_min=min(rows), row_max=max(rows), col_min=min(cols), col_max=max(cols)
        )

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def render(self, blank: str = BLANK_MARKER) -> List[List[str]]:
        """Rectangular letter matrix over the bounding box.

        Holes and boundary cells are both rendered as ``blank``.
        """
        box = self.bounding_box()
        if box is None:
            return []
        out: List[List[str]] = []
        for r in range(box.row_min, box.row_max + 1):
            row: List[str] = []
            for c in range(box.col_min, box.col_max + 1):
                value = self._cells.get((r, c))
                row.append(value.letter if value is not None and value.is_letter else blank)
            out.append(row)
        return out

    def to_jsonable(self) -> List[dict]:
        return [
            {"row": row, "col": col, "type": value.type.value, "letter": value.letter}
            for (row, col), value in self.items()
        ]
