"""Crossword layout orchestration.

A run rebuilds the word list and grid from scratch, optionally shuffles the
words, then makes ``placement_passes`` passes over them. Words that found no
crossing early on get another chance once more letters are on the board.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..core.constants import BLANK_MARKER, TRIAL_MODES, TRIAL_ROLLBACK
from ..core.exceptions import ValidationError
from ..core.models import Word
from ..data.normalization import clean_word
from ..utils.logger import get_logger
from .grid import CrosswordGrid
from .placement import PlacementEngine
from .scoring import ScoreWeights, score_grid
from .validator import LayoutValidator


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    """Inputs of a layout run.

    ``weights`` are linear penalties and the lowest score wins. A positive
    ``maximize_intersections`` penalises each letter on the grid, so layouts
    sharing more letters win; a negative one spreads words out. See
    :class:`ScoreWeights`.
    """

    words: Sequence[str] = field(default_factory=list)
    randomize_order: bool = True
    placement_passes: int = 2
    weights: ScoreWeights = field(default_factory=ScoreWeights)
    forbid_squares: bool = False
    trial_mode: str = TRIAL_ROLLBACK
    normalize_words: bool = False
    validate: bool = True
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.placement_passes, bool) or not isinstance(self.placement_passes, int):
            raise ValueError("placement_passes must be an integer")
        if self.placement_passes < 1:
            raise ValueError("placement_passes must be at least 1")
        if self.trial_mode not in TRIAL_MODES:
            raise ValueError(f"trial_mode must be one of {TRIAL_MODES}")

    def to_engine(self) -> PlacementEngine:
        return PlacementEngine(
            weights=self.weights,
            forbid_squares=self.forbid_squares,
            trial_mode=self.trial_mode,
        )


@dataclass
class CrosswordResult:
    grid: CrosswordGrid
    words: List[Word]
    validation_messages: List[str] = field(default_factory=list)
    seed: Optional[int] = None

    @property
    def placed(self) -> List[Word]:
        return [word for word in self.words if word.is_placed]

    @property
    def not_placed(self) -> List[Word]:
        return [word for word in self.words if not word.is_placed]

    @property
    def rendered(self) -> List[List[str]]:
        return self.grid.render(BLANK_MARKER)

    def score(self, weights: ScoreWeights) -> float:
        return score_grid(self.grid, weights)

    def to_jsonable(self) -> Dict[str, Any]:
        box = self.grid.bounding_box()
        return {
            "grid": self.rendered,
            "bounding_box": None
            if box is None
            else {
                "row_min": box.row_min,
                "row_max": box.row_max,
                "col_min": box.col_min,
                "col_max": box.col_max,
            },
            "placed": [
                {
                    "index": word.index,
                    "text": word.text,
                    "origin": [word.placement.location.row, word.placement.location.col],
                    "direction": word.placement.location.direction.value,
                    "cells": [[cell.row, cell.col, cell.char] for cell in word.placement.cells],
                }
                for word in self.placed
            ],
            "not_placed": [{"index": word.index, "text": word.text} for word in self.not_placed],
            "validation": list(self.validation_messages),
            "seed": self.seed,
        }


class CrosswordGenerator:
    """High-level orchestrator: word setup, placement passes, validation."""

    def __init__(self, config: GeneratorConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.engine = config.to_engine()
        self.validator = LayoutValidator(forbid_squares=config.forbid_squares)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self) -> CrosswordResult:
        words = self._setup()
        LOGGER.info(
            "Laying out %d words in up to %d passes", len(words), self.config.placement_passes
        )

        for attempt in range(1, self.config.placement_passes + 1):
            pending = self.engine.not_placed
            if not pending:
                break
            placed_now = sum(1 for word in pending if self.engine.place_word(word))
            LOGGER.info(
                "Pass %s/%s placed %d of %d pending words",
                attempt,
                self.config.placement_passes,
                placed_now,
                len(pending),
            )

        for word in self.engine.not_placed:
            LOGGER.warning("Unable to place %r", word.text)

        messages: List[str] = []
        if self.config.validate:
            validation = self.validator.validate(self.engine.grid, self.engine.words, self.engine)
            if not validation.ok:
                raise ValidationError(f"Layout validation failed: {validation.messages}")
            messages = validation.messages

        result = CrosswordResult(
            grid=self.engine.grid,
            words=list(self.engine.words),
            validation_messages=messages,
            seed=self.config.seed,
        )
        LOGGER.info(
            "Layout completed: %d placed, %d not placed",
            len(result.placed),
            len(result.not_placed),
        )
        return result

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def _setup(self) -> List[Word]:
        texts = [clean_word(raw) if self.config.normalize_words else raw for raw in self.config.words]
        words = [Word(index=index, text=text) for index, text in enumerate(texts)]
        if self.config.randomize_order:
            self.rng.shuffle(words)
        self.engine.reset(words)
        return words
