"""Candidate search, validity checks and scoring for single word placement."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from ..core.constants import DIRECTIONS, SQUARE_CORNERS, TRIAL_CLONE, TRIAL_MODES, TRIAL_ROLLBACK, Direction
from ..core.exceptions import ConflictError, InternalConsistencyError
from ..core.models import CellValue, Coord, NotPlaced, Owner, Placed, PlacedCell, Word, WordLocation
from ..utils.logger import get_logger
from .grid import CrosswordGrid
from .scoring import ScoreWeights, score_grid


LOGGER = get_logger(__name__)

Written = List[Tuple[Coord, CellValue]]


class PlacementEngine:
    """Places words one at a time onto a shared grid.

    Every word after the first must cross a letter that is already on the
    board. Among the valid locations the one giving the lowest
    :func:`score_grid` wins, ties going to the first location generated.
    """

    def __init__(
        self,
        weights: Optional[ScoreWeights] = None,
        forbid_squares: bool = False,
        trial_mode: str = TRIAL_ROLLBACK,
    ) -> None:
        if trial_mode not in TRIAL_MODES:
            raise ValueError(f"Unknown trial mode {trial_mode!r}; expected one of {TRIAL_MODES}")
        self.weights = weights or ScoreWeights()
        self.forbid_squares = forbid_squares
        self.trial_mode = trial_mode
        self.grid = CrosswordGrid()
        self.words: List[Word] = []
        self._owners: Dict[Coord, Owner] = {}

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def reset(self, words: Sequence[Word] = ()) -> None:
        self.grid = CrosswordGrid()
        self.words = list(words)
        self._owners = {}
        for word in self.words:
            word.state = NotPlaced()

    def owner_of(self, coord: Coord) -> Optional[Owner]:
        return self._owners.get(coord)

    @property
    def placed(self) -> List[Word]:
        return [word for word in self.words if word.is_placed]

    @property
    def not_placed(self) -> List[Word]:
        return [word for word in self.words if not word.is_placed]

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def place_word(self, word: Word) -> bool:
        """Commit ``word`` at its best location. Returns whether it is placed."""

        if word.is_placed:
            return True
        if not word.text:
            LOGGER.debug("Skipping empty word #%s", word.index)
            return False

        if self.grid.is_empty:
            self.commit(word, WordLocation(0, 0, Direction.RIGHT))
            LOGGER.debug("Seeded layout with %r at origin", word.text)
            return True

        scored = self.scored_candidates(word)
        if not scored:
            LOGGER.debug("No valid location for %r in current grid", word.text)
            return False

        best_location, best_score = scored[0]
        for location, score in scored[1:]:
            if score < best_score:
                best_location, best_score = location, score

        self.commit(word, best_location)
        LOGGER.debug(
            "Placed %r at (%s,%s) %s, score %.3f among %d candidates",
            word.text,
            best_location.row,
            best_location.col,
            best_location.direction.value,
            best_score,
            len(scored),
        )
        return True

    def commit(self, word: Word, location: WordLocation) -> Placed:
        written = self._apply(self.grid, word, location)
        for coord, _ in written:
            self._owners[coord] = Owner(word.index, location.direction)
        cells = tuple(
            PlacedCell(row, col, value.letter)
            for (row, col), value in word.padded_cells(location)
            if value.is_letter and value.letter is not None
        )
        placement = Placed(location=location, cells=cells, written=tuple(written))
        word.state = placement
        return placement

    # ------------------------------------------------------------------
    # Candidate search
    # ------------------------------------------------------------------
    def candidate_locations(self, word: Word) -> List[WordLocation]:
        """Every location aligning a letter of ``word`` with the same letter on the grid.

        Order: letter offset in the word, then grid scan order, then
        direction. Repeats are collapsed onto their first occurrence.
        """
        locations: Dict[WordLocation, None] = {}
        for offset, value in enumerate(word.padded):
            if not value.is_letter or value.letter is None:
                continue
            for row, col in self.grid.find_letter(value.letter):
                for direction in DIRECTIONS:
                    dr, dc = direction.step
                    locations.setdefault(
                        WordLocation(row - dr * offset, col - dc * offset, direction), None
                    )
        return list(locations)

    def candidates(self, word: Word) -> List[WordLocation]:
        return [loc for loc in self.candidate_locations(word) if self.can_place(word, loc)]

    def scored_candidates(self, word: Word) -> List[Tuple[WordLocation, float]]:
        scored: List[Tuple[WordLocation, float]] = []
        for location in self.candidates(word):
            try:
                score = self.score_candidate(word, location)
            except ConflictError as exc:
                LOGGER.debug("Candidate rejected during trial write: %s", exc)
                continue
            scored.append((location, score))
        return scored

    def score_candidate(self, word: Word, location: WordLocation) -> float:
        """Score the grid as it would look with ``word`` at ``location``.

        The live grid is left exactly as it was found.
        """
        if self.trial_mode == TRIAL_CLONE:
            trial = self.grid.clone()
            self._apply(trial, word, location)
            return score_grid(trial, self.weights)

        written = self._apply(self.grid, word, location)
        try:
            return score_grid(self.grid, self.weights)
        finally:
            self._revert(self.grid, written)

    # ------------------------------------------------------------------
    # Validity
    # ------------------------------------------------------------------
    def can_place(self, word: Word, location: WordLocation) -> bool:
        cells = list(word.padded_cells(location))

        for coord, value in cells:
            existing = self.grid.get(coord)
            if existing is None:
                continue
            # A boundary is never shared, even with another boundary.
            if existing.is_boundary or existing != value:
                return False

        for coord, _ in cells[1:-1]:
            if not self._neighbors_allow(coord, location.direction):
                return False

        if self.forbid_squares and self._completes_square(cells):
            return False
        return True

    def _neighbors_allow(self, coord: Coord, direction: Direction) -> bool:
        row, col = coord
        for dr, dc in direction.perpendicular_steps:
            neighbor = (row + dr, col + dc)
            existing = self.grid.get(neighbor)
            if existing is None:
                continue
            owner = self._owners.get(neighbor)
            if owner is None:
                raise InternalConsistencyError(
                    f"Unable to find placed word containing {existing.glyph!r} at {neighbor}"
                )
            if owner.direction == direction:
                return False
        return True

    def _completes_square(self, cells: Sequence[Tuple[Coord, CellValue]]) -> bool:
        planned = {coord for coord, value in cells if value.is_letter}

        def occupied(coord: Coord) -> bool:
            if coord in planned:
                return True
            existing = self.grid.get(coord)
            return existing is not None and existing.is_letter

        for row, col in planned:
            if (row, col) in self.grid:
                continue
            for corners in SQUARE_CORNERS:
                if all(occupied((row + dr, col + dc)) for dr, dc in corners):
                    return True
        return False

    # ------------------------------------------------------------------
    # Grid writes
    # ------------------------------------------------------------------
    @staticmethod
    def _apply(grid: CrosswordGrid, word: Word, location: WordLocation) -> Written:
        """Write the padded word, returning only the cells that were empty."""
        written: Written = []
        try:
            for coord, value in word.padded_cells(location):
                if grid.get(coord) == value:
                    continue
                grid.set(coord, value)
                written.append((coord, value))
        except ConflictError:
            PlacementEngine._revert(grid, written)
            raise
        return written

    @staticmethod
    def _revert(grid: CrosswordGrid, written: Written) -> None:
        for coord, _ in written:
            grid.unset(coord)

