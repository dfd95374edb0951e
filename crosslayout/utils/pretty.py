"""Pretty-print helpers for layout grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, Optional

from ..core.constants import BOUNDARY_GLYPH

if TYPE_CHECKING:
    from ..engine.generator import CrosswordResult
    from ..engine.grid import CrosswordGrid
    from ..engine.scoring import ScoreWeights


EMPTY_SYMBOL = "."


def format_grid(grid: CrosswordGrid, *, show_boundaries: bool = False) -> str:
    box = grid.bounding_box()
    if box is None:
        return "(empty grid)"
    header_cells = [f"{c:>2}" for c in range(box.col_min, box.col_max + 1)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * box.cols - 1))
    for r in range(box.row_min, box.row_max + 1):
        symbols = []
        for c in range(box.col_min, box.col_max + 1):
            value = grid.get((r, c))
            if value is not None and value.is_letter:
                symbols.append(value.letter or "?")
            elif value is not None and show_boundaries:
                symbols.append(BOUNDARY_GLYPH)
            else:
                symbols.append(EMPTY_SYMBOL)
        row_render = " ".join(f"{symbol:>2}" for symbol in symbols)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(grid: CrosswordGrid, *, label: str | None = None, stream=None) -> None:
    """Print the layout grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_layout_stats(
    result: CrosswordResult,
    weights: Optional[ScoreWeights] = None,
    *,
    stream=None,
) -> None:
    """Print grid + placement stats for a finished layout."""

    stream = stream or sys.stdout
    print(format_grid(result.grid), file=stream)

    grid = result.grid
    box = grid.bounding_box()
    letters = grid.letter_count()
    total_letters = sum(len(word.text) for word in result.placed)

    print(file=stream)
    print("--- Grid ---", file=stream)
    if box is not None:
        area = box.rows * box.cols
        print(f"  Size:          {box.rows} x {box.cols} ({area} cells)", file=stream)
        print(f"  Letters:       {letters} ({letters / area * 100:.0f}%)", file=stream)
    print(f"  Crossings:     {total_letters - letters}", file=stream)
    if weights is not None:
        print(f"  Score:         {result.score(weights):.3f}", file=stream)

    directions = Counter(word.placement.location.direction.value for word in result.placed)
    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {len(result.placed)}/{len(result.words)}", file=stream)
    print(f"  Directions:    {' '.join(f'{d}:{n}' for d, n in sorted(directions.items()))}", file=stream)
    if result.not_placed:
        print(f"  Not placed:    {', '.join(word.text for word in result.not_placed)}", file=stream)

    if result.validation_messages:
        print(file=stream)
        print("--- Validation ---", file=stream)
        for msg in result.validation_messages:
            print(f"  {msg}", file=stream)

    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed}", file=stream)
