"""Linear layout objective. Lower scores are better."""

from __future__ import annotations

from dataclasses import dataclass

from .grid import CrosswordGrid


@dataclass(frozen=True)
class ScoreWeights:
    """Coefficients of the layout score.

    The engine keeps the candidate with the *lowest* score, so each positive
    weight penalises its term. ``maximize_intersections`` multiplies the total
    letter count and is not sign-corrected: a positive value penalises
    letters, which rewards overlap between words, while a negative value
    rewards letters and so pushes words apart. No weight is range-checked.
    """

    minimize_width: float = 0.45
    minimize_height: float = 0.45
    maximize_intersections: float = 0.1


def score_grid(grid: CrosswordGrid, weights: ScoreWeights) -> float:
    """``width * w + height * h + letters * i`` over the grid's bounding box.

    Width and height are ``max - min`` along each axis, so a single row has
    zero height. Boundary cells widen the box but are not counted as letters.
    """
    box = grid.bounding_box()
    if box is None:
        return 0.0
    return (
        box.width * weights.minimize_width
        + box.height * weights.minimize_height
        + grid.letter_count() * weights.maximize_intersections
    )
