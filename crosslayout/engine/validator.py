"""Deterministic rule validation for finished layouts."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Set

from ..core.constants import Direction
from ..core.exceptions import ValidationError
from ..core.models import Coord, Word
from ..utils.logger import get_logger
from .grid import CrosswordGrid

if TYPE_CHECKING:
    from .placement import PlacementEngine


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class LayoutValidator:
    """Runs deterministic validation over the final grid."""

    def __init__(self, forbid_squares: bool = False) -> None:
        self.forbid_squares = forbid_squares

    def validate(
        self,
        grid: CrosswordGrid,
        words: Sequence[Word],
        engine: Optional[PlacementEngine] = None,
    ) -> ValidationResult:
        messages: List[str] = []
        placed = [word for word in words if word.is_placed]
        try:
            self._check_words_match_grid(grid, placed)
            coverage = self._coverage(placed)
            self._check_letters_covered(grid, coverage)
            self._check_parallel_adjacency(coverage)
            if self.forbid_squares:
                self._check_no_squares(grid)
            if engine is not None:
                self._check_owners(grid, engine)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _coverage(placed: Sequence[Word]) -> Dict[Coord, Set[Direction]]:
        coverage: Dict[Coord, Set[Direction]] = defaultdict(set)
        for word in placed:
            direction = word.placement.location.direction
            for cell in word.placement.cells:
                coverage[cell.coord].add(direction)
        return coverage

    def _check_words_match_grid(self, grid: CrosswordGrid, placed: Sequence[Word]) -> None:
        for word in placed:
            placement = word.placement
            for cell in placement.cells:
                value = grid.get(cell.coord)
                if value is None or not value.is_letter or value.letter != cell.char:
                    raise ValidationError(
                        f"Word {word.text!r} expects {cell.char!r} at {cell.coord}"
                    )
            location = placement.location
            for offset in (0, len(word.text) + 1):
                end = grid.get(location.coord_at(offset))
                if end is None or not end.is_boundary:
                    raise ValidationError(
                        f"Word {word.text!r} is missing its boundary at {location.coord_at(offset)}"
                    )

    def _check_letters_covered(
        self, grid: CrosswordGrid, coverage: Dict[Coord, Set[Direction]]
    ) -> None:
        for coord, value in grid.items():
            if value.is_letter and coord not in coverage:
                raise ValidationError(f"Letter {value.letter!r} at {coord} belongs to no word")

    def _check_parallel_adjacency(self, coverage: Dict[Coord, Set[Direction]]) -> None:
        # Letters touching across a word are fine only when one of them is a crossing.
        for (row, col), directions in coverage.items():
            if len(directions) != 1:
                continue
            (direction,) = directions
            for dr, dc in direction.perpendicular_steps:
                neighbor = (row + dr, col + dc)
                if coverage.get(neighbor) == {direction}:
                    raise ValidationError(
                        f"Parallel {direction.value} words touch at {(row, col)} and {neighbor}"
                    )

    def _check_no_squares(self, grid: CrosswordGrid) -> None:
        def is_letter(coord: Coord) -> bool:
            value = grid.get(coord)
            return value is not None and value.is_letter

        for (row, col), value in grid.items():
            if not value.is_letter:
                continue
            if is_letter((row, col + 1)) and is_letter((row + 1, col)) and is_letter((row + 1, col + 1)):
                raise ValidationError(f"2x2 letter block anchored at {(row, col)}")

    def _check_owners(self, grid: CrosswordGrid, engine: PlacementEngine) -> None:
        for coord in grid.coords():
            if engine.owner_of(coord) is None:
                raise ValidationError(f"Occupied cell {coord} has no owning word")
