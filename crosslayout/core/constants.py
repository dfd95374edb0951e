"""Shared constants and enumerations for the layout engine."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class CellType(str, Enum):
    """Kinds of values a grid cell can hold. Empty cells are simply absent."""

    LETTER = "LETTER"
    BOUNDARY = "BOUNDARY"


class Direction(str, Enum):
    """Word directions supported by the grid."""

    RIGHT = "RIGHT"
    DOWN = "DOWN"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.RIGHT else (1, 0)

    @property
    def perpendicular_steps(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Offsets of the two neighbours lying across the word."""
        if self is Direction.RIGHT:
            return ((-1, 0), (1, 0))
        return ((0, -1), (0, 1))

    @property
    def opposite(self) -> "Direction":
        return Direction.DOWN if self is Direction.RIGHT else Direction.RIGHT


# Candidate generation order: RIGHT is tried before DOWN.
DIRECTIONS: Tuple[Direction, ...] = (Direction.RIGHT, Direction.DOWN)

ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

# Each entry lists the three other corners of a 2x2 square anchored on a cell.
SQUARE_CORNERS: Tuple[Tuple[Tuple[int, int], ...], ...] = (
    ((-1, -1), (-1, 0), (0, -1)),
    ((-1, 0), (-1, 1), (0, 1)),
    ((0, -1), (1, -1), (1, 0)),
    ((0, 1), (1, 0), (1, 1)),
)

# Glyph used for boundary cells in debug dumps. Never part of rendered output.
BOUNDARY_GLYPH = "#"

BLANK_MARKER = ""

TRIAL_ROLLBACK = "rollback"
TRIAL_CLONE = "clone"
TRIAL_MODES: Tuple[str, ...] = (TRIAL_ROLLBACK, TRIAL_CLONE)
