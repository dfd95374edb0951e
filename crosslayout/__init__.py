"""Crossword layout engine: lays a word list onto a grid of intersecting words.

This package exposes the public API surface via:

- ``crosslayout.engine.generator.CrosswordGenerator``: runs placement passes.
- ``crosslayout.engine.generator.GeneratorConfig``: word list, order and weights.
- ``crosslayout.engine.placement.PlacementEngine``: per-word candidate search.
- ``crosslayout.engine.scoring.ScoreWeights``: layout objective (lower wins).
"""

from .engine.generator import CrosswordGenerator, CrosswordResult, GeneratorConfig
from .engine.grid import CrosswordGrid
from .engine.placement import PlacementEngine
from .engine.scoring import ScoreWeights

__all__ = [
    "CrosswordGenerator",
    "CrosswordResult",
    "CrosswordGrid",
    "GeneratorConfig",
    "PlacementEngine",
    "ScoreWeights",
]

__version__ = "0.1.0"
