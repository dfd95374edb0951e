"""CLI entrypoint for the crossword layout generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from crosslayout.core.constants import TRIAL_MODES, TRIAL_ROLLBACK
from crosslayout.data.wordlist import parse_words_file
from crosslayout.engine.generator import CrosswordGenerator, GeneratorConfig
from crosslayout.engine.scoring import ScoreWeights
from crosslayout.utils.logger import configure_logging
from crosslayout.utils.pretty import print_layout_stats


def build_parser() -> argparse.ArgumentParser:
    defaults = ScoreWeights()
    parser = argparse.ArgumentParser(
        description="Lay out a list of words as a grid of intersecting words",
    )
    parser.add_argument("--words", nargs="+", metavar="WORD", help="Words to place")
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments and blank lines ignored)",
    )
    parser.add_argument(
        "--passes",
        type=int,
        default=2,
        help="Number of placement passes over the unplaced words (default 2)",
    )
    parser.add_argument(
        "--no-randomize",
        action="store_true",
        help="Keep the given word order instead of shuffling",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--width-weight",
        type=float,
        default=defaults.minimize_width,
        help=f"Penalty per column of width (default {defaults.minimize_width})",
    )
    parser.add_argument(
        "--height-weight",
        type=float,
        default=defaults.minimize_height,
        help=f"Penalty per row of height (default {defaults.minimize_height})",
    )
    parser.add_argument(
        "--intersection-weight",
        type=float,
        default=defaults.maximize_intersections,
        help=(
            "Weight per letter on the grid; lower scores win, so positive values "
            f"favour overlap and negative values spread words out (default {defaults.maximize_intersections})"
        ),
    )
    parser.add_argument(
        "--forbid-squares",
        action="store_true",
        help="Reject placements that complete a 2x2 block of letters",
    )
    parser.add_argument(
        "--trial-mode",
        choices=TRIAL_MODES,
        default=TRIAL_ROLLBACK,
        help="How candidates are scored: in place with rollback, or on a cloned grid",
    )
    parser.add_argument(
        "--normalize",
        action="store_true",
        help="Uppercase words and strip accents, spaces and punctuation",
    )
    parser.add_argument("--format", choices=["json", "text"], default="json", help="Output format")
    parser.add_argument("--output", type=Path, help="Optional path to write the output to")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    words: List[str] = []
    if args.words:
        words.extend(args.words)
    if args.words_file:
        words.extend(parse_words_file(args.words_file))
    if not words:
        parser.error("provide at least one word via --words or --words-file")
    if args.passes < 1:
        parser.error("--passes must be at least 1")

    weights = ScoreWeights(
        minimize_width=args.width_weight,
        minimize_height=args.height_weight,
        maximize_intersections=args.intersection_weight,
    )
    config = GeneratorConfig(
        words=words,
        randomize_order=not args.no_randomize,
        placement_passes=args.passes,
        weights=weights,
        forbid_squares=args.forbid_squares,
        trial_mode=args.trial_mode,
        normalize_words=args.normalize,
        seed=args.seed,
    )
    result = CrosswordGenerator(config).generate()

    if args.format == "text":
        if args.output:
            with args.output.open("w", encoding="utf-8") as stream:
                print_layout_stats(result, weights, stream=stream)
        else:
            print_layout_stats(result, weights, stream=sys.stdout)
        return

    output_text = json.dumps(result.to_jsonable(), ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


if __name__ == "__main__":  # pragma: no cover
    main()
