"""Convenience entrypoint with predefined generator settings for debugging.

Usage in a Python console (Jupyter-style)::

    import debug_main
    state = debug_main.prepare_state(words=["cat", "car", "art"])
    debug_main.step_place(state)      # one word, printing its candidates
    debug_main.step_pass(state)       # the rest of the current pass
    debug_main.step_validate(state)
    result = debug_main.build_result(state)

Call :func:`run_debug` for a one-liner, or execute the functions above one by
one to inspect intermediate state.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

from crosslayout.core.exceptions import ValidationError
from crosslayout.core.models import Word
from crosslayout.engine.generator import CrosswordGenerator, CrosswordResult, GeneratorConfig
from crosslayout.engine.scoring import ScoreWeights
from crosslayout.utils.logger import configure_logging
from crosslayout.utils.pretty import pretty_print_grid, print_layout_stats

DEFAULT_DEBUG_ARGS: Dict[str, Any] = {
    "words": ["python", "grid", "letter", "across", "down", "puzzle", "cross", "word"],
    "randomize_order": True,
    "placement_passes": 2,
    "weights": ScoreWeights(minimize_width=0.45, minimize_height=0.45, maximize_intersections=0.1),
    "forbid_squares": False,
    "seed": None,
}

LOGGER = logging.getLogger(__name__)


def prepare_state(**overrides: Any) -> Dict[str, Any]:
    """Return a mutable state dictionary used by the step helpers."""

    args = {**DEFAULT_DEBUG_ARGS, **overrides}
    configure_logging(logging.DEBUG if args.pop("verbose", False) else logging.INFO)
    config = GeneratorConfig(**args)
    generator = CrosswordGenerator(config)
    words = generator._setup()
    LOGGER.info("Word order: %s", ", ".join(word.text for word in words))
    return {
        "config": config,
        "generator": generator,
        "words": words,
        "pass": 1,
        "cursor": 0,
        "validation": None,
    }


def _pending(state: Dict[str, Any]) -> List[Word]:
    return [word for word in state["words"][state["cursor"]:] if not word.is_placed]


def step_place(state: Dict[str, Any]) -> Optional[Word]:
    """Place the next pending word of the current pass and show what was considered."""

    generator: CrosswordGenerator = state["generator"]
    engine = generator.engine
    while state["cursor"] < len(state["words"]):
        word = state["words"][state["cursor"]]
        state["cursor"] += 1
        if word.is_placed:
            continue
        scored = engine.scored_candidates(word) if not engine.grid.is_empty else []
        for location, score in scored:
            print(f"  {word.text}: ({location.row},{location.col}) {location.direction.value} -> {score:.3f}")
        placed = engine.place_word(word)
        pretty_print_grid(
            engine.grid,
            label=f"Pass {state['pass']}: {word.text!r} {'placed' if placed else 'not placed'}",
        )
        return word
    return None


def step_pass(state: Dict[str, Any]) -> List[Word]:
    """Finish the current pass and move on to the next one."""

    engine = state["generator"].engine
    for word in _pending(state):
        engine.place_word(word)
    state["cursor"] = 0
    state["pass"] += 1
    pretty_print_grid(engine.grid, label=f"After pass {state['pass'] - 1}")
    return engine.not_placed


def step_validate(state: Dict[str, Any]):
    generator: CrosswordGenerator = state["generator"]
    engine = generator.engine
    state["validation"] = generator.validator.validate(engine.grid, engine.words, engine)
    return state["validation"]


def build_result(state: Dict[str, Any]) -> CrosswordResult:
    engine = state["generator"].engine
    messages = state["validation"].messages if state["validation"] else []
    return CrosswordResult(
        grid=engine.grid,
        words=list(engine.words),
        validation_messages=messages,
        seed=state["config"].seed,
    )


def run_debug(**overrides: Any) -> CrosswordResult:
    """Try several shuffles and return the first layout placing every word.

    Falls back to the attempt that left the fewest words unplaced.
    """

    max_runs = int(overrides.pop("max_runs", 10))
    if max_runs < 1:
        raise ValueError("max_runs must be at least 1")
    requested_seed = overrides.pop("seed", DEFAULT_DEBUG_ARGS.get("seed"))
    best: Optional[CrosswordResult] = None

    for attempt in range(1, max_runs + 1):
        attempt_seed = (
            requested_seed
            if requested_seed is not None and attempt == 1
            else random.randint(0, 1_000_000)
        )
        state = prepare_state(seed=attempt_seed, **overrides)
        for _ in range(state["config"].placement_passes):
            step_pass(state)
        validation = step_validate(state)
        if not validation.ok:
            raise ValidationError(f"Validation failed: {validation.messages}")
        result = build_result(state)
        if best is None or len(result.not_placed) < len(best.not_placed):
            best = result
        if not result.not_placed:
            LOGGER.info("All words placed on attempt %s/%s (seed %s)", attempt, max_runs, attempt_seed)
            break
        LOGGER.warning(
            "Attempt %s/%s left %d words unplaced (seed %s)",
            attempt,
            max_runs,
            len(result.not_placed),
            attempt_seed,
        )

    print_layout_stats(best, state["config"].weights)
    return best


def main() -> None:  # pragma: no cover - manual helper
    result = run_debug()
    print(f"Placed {len(result.placed)}/{len(result.words)} words")
    print(f"Validation: {result.validation_messages or 'ok'}")


if __name__ == "__main__":
    main()
