import unittest

from crosslayout.core.constants import TRIAL_CLONE, TRIAL_ROLLBACK, Direction
from crosslayout.core.exceptions import InternalConsistencyError
from crosslayout.core.models import CellValue, NotPlaced, Owner, PlacedCell, Word, WordLocation
from crosslayout.engine.placement import PlacementEngine
from crosslayout.engine.scoring import ScoreWeights, score_grid


NEGATIVE_LETTER_WEIGHT = ScoreWeights(minimize_width=0, minimize_height=0, maximize_intersections=-1)


def _engine(words, **kwargs) -> PlacementEngine:
    engine = PlacementEngine(**kwargs)
    engine.reset([Word(index=i, text=text) for i, text in enumerate(words)])
    return engine


class SeedPlacementTests(unittest.TestCase):
    def test_first_word_lands_at_origin(self) -> None:
        engine = _engine(["cat"])
        self.assertTrue(engine.place_word(engine.words[0]))
        placement = engine.words[0].placement
        self.assertEqual(placement.location, WordLocation(0, 0, Direction.RIGHT))
        self.assertEqual(
            placement.cells,
            (PlacedCell(0, 1, "c"), PlacedCell(0, 2, "a"), PlacedCell(0, 3, "t")),
        )
        self.assertTrue(engine.grid.get((0, 0)).is_boundary)
        self.assertTrue(engine.grid.get((0, 4)).is_boundary)
        self.assertEqual(len(placement.written), 5)

    def test_replacing_a_placed_word_is_noop(self) -> None:
        engine = _engine(["cat", "car"])
        for word in engine.words:
            engine.place_word(word)
        before = engine.grid.to_jsonable()
        state = engine.words[1].state
        self.assertTrue(engine.place_word(engine.words[1]))
        self.assertEqual(engine.grid.to_jsonable(), before)
        self.assertIs(engine.words[1].state, state)

    def test_empty_word_is_skipped(self) -> None:
        engine = _engine(["", "cat"])
        self.assertFalse(engine.place_word(engine.words[0]))
        self.assertTrue(engine.grid.is_empty)
        self.assertIsInstance(engine.words[0].state, NotPlaced)

    def test_reset_clears_grid_and_states(self) -> None:
        engine = _engine(["cat"])
        engine.place_word(engine.words[0])
        engine.reset(engine.words)
        self.assertTrue(engine.grid.is_empty)
        self.assertFalse(engine.words[0].is_placed)
        self.assertIsNone(engine.owner_of((0, 1)))


class CandidateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = _engine(["cat", "car", "art"], weights=NEGATIVE_LETTER_WEIGHT)
        self.cat, self.car, self.art = self.engine.words
        self.engine.place_word(self.cat)

    def test_candidates_are_filtered_locations(self) -> None:
        raw = self.engine.candidate_locations(self.car)
        # "c" and "a" both yield (0, 0) RIGHT; only the first is kept.
        self.assertEqual(
            raw,
            [
                WordLocation(0, 0, Direction.RIGHT),
                WordLocation(-1, 1, Direction.DOWN),
                WordLocation(-2, 2, Direction.DOWN),
            ],
        )
        self.assertEqual(
            self.engine.candidates(self.car),
            [WordLocation(-1, 1, Direction.DOWN), WordLocation(-2, 2, Direction.DOWN)],
        )

    def test_ties_keep_first_candidate(self) -> None:
        self.engine.place_word(self.car)
        self.assertEqual(self.car.placement.location, WordLocation(-1, 1, Direction.DOWN))
        # The shared "c" is part of the word but was not written by it.
        self.assertIn(PlacedCell(0, 1, "c"), self.car.placement.cells)
        self.assertNotIn((0, 1), [coord for coord, _ in self.car.placement.written])

    def test_cat_car_art_scenario(self) -> None:
        self.engine.place_word(self.car)
        self.engine.place_word(self.art)
        self.assertTrue(all(word.is_placed for word in self.engine.words))
        self.assertEqual(self.art.placement.location, WordLocation(2, -1, Direction.RIGHT))
        self.assertEqual(self.engine.grid.letter_count(), 7)

        def coords(word):
            return {cell.coord for cell in word.placement.cells}

        self.assertTrue(coords(self.car) & coords(self.cat))
        self.assertTrue(coords(self.art) & (coords(self.cat) | coords(self.car)))

    def test_word_without_shared_letters_is_not_placed(self) -> None:
        engine = _engine(["cat", "dog"])
        engine.place_word(engine.words[0])
        before = engine.grid.to_jsonable()
        self.assertFalse(engine.place_word(engine.words[1]))
        self.assertFalse(engine.words[1].is_placed)
        self.assertEqual(engine.grid.to_jsonable(), before)

    def test_duplicate_words_are_tracked_independently(self) -> None:
        engine = _engine(["cat", "cat"])
        for word in engine.words:
            self.assertTrue(engine.place_word(word))
        first, second = engine.words
        self.assertNotEqual(first.placement.location, second.placement.location)
        self.assertEqual(second.placement.location.direction, Direction.DOWN)


class ValidityTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = _engine(["cat"])
        self.engine.place_word(self.engine.words[0])

    def test_parallel_neighbor_is_rejected(self) -> None:
        self.assertFalse(self.engine.can_place(Word(1, "ab"), WordLocation(1, 1, Direction.RIGHT)))

    def test_perpendicular_crossing_is_accepted(self) -> None:
        self.assertTrue(self.engine.can_place(Word(1, "ax"), WordLocation(-1, 2, Direction.DOWN)))

    def test_conflicting_letter_is_rejected(self) -> None:
        self.assertFalse(self.engine.can_place(Word(1, "ox"), WordLocation(-1, 2, Direction.DOWN)))

    def test_boundaries_are_never_shared(self) -> None:
        # Trailing boundary of "cat" would be reused as a boundary.
        self.assertFalse(self.engine.can_place(Word(1, "xy"), WordLocation(0, 4, Direction.RIGHT)))
        # A letter written over the leading boundary of "cat".
        self.assertFalse(self.engine.can_place(Word(1, "q"), WordLocation(0, -1, Direction.RIGHT)))

    def test_unowned_neighbor_fails_loudly(self) -> None:
        self.engine.grid.set((1, 3), CellValue.of_letter("z"))
        with self.assertRaises(InternalConsistencyError):
            self.engine.can_place(Word(1, "ax"), WordLocation(-1, 2, Direction.DOWN))

    def test_owner_index_records_first_writer(self) -> None:
        self.assertEqual(self.engine.owner_of((0, 2)), Owner(0, Direction.RIGHT))
        self.assertEqual(self.engine.owner_of((0, 4)), Owner(0, Direction.RIGHT))
        crossing = Word(1, "ax")
        self.engine.commit(crossing, WordLocation(-1, 2, Direction.DOWN))
        self.assertEqual(self.engine.owner_of((0, 2)), Owner(0, Direction.RIGHT))
        self.assertEqual(self.engine.owner_of((1, 2)), Owner(1, Direction.DOWN))


class SquareRuleTests(unittest.TestCase):
    def _three_corners(self, forbid: bool) -> PlacementEngine:
        engine = PlacementEngine(forbid_squares=forbid)
        engine.commit(Word(0, "ab"), WordLocation(0, -1, Direction.RIGHT))
        engine.commit(Word(1, "ac"), WordLocation(-1, 0, Direction.DOWN))
        return engine

    def test_fourth_corner_completes_square(self) -> None:
        engine = self._three_corners(forbid=True)
        word = Word(2, "cd")
        cells = list(word.padded_cells(WordLocation(1, -1, Direction.RIGHT)))
        self.assertTrue(engine._completes_square(cells))
        self.assertFalse(engine.can_place(word, WordLocation(1, -1, Direction.RIGHT)))

    def test_boundary_cells_do_not_count(self) -> None:
        engine = self._three_corners(forbid=True)
        word = Word(2, "xc")
        cells = list(word.padded_cells(WordLocation(1, -2, Direction.RIGHT)))
        self.assertFalse(engine._completes_square(cells))

    def test_down_word_completes_square(self) -> None:
        engine = self._three_corners(forbid=True)
        cells = list(Word(2, "bz").padded_cells(WordLocation(-1, 1, Direction.DOWN)))
        self.assertTrue(engine._completes_square(cells))

    def test_distant_word_is_fine(self) -> None:
        engine = self._three_corners(forbid=True)
        cells = list(Word(2, "qq").padded_cells(WordLocation(5, 5, Direction.DOWN)))
        self.assertFalse(engine._completes_square(cells))

    def test_rule_is_off_by_default(self) -> None:
        engine = self._three_corners(forbid=False)
        self.assertFalse(engine.forbid_squares)


class ScoringTests(unittest.TestCase):
    WORDS = ["python", "typing", "notion", "option", "pint", "honey", "tiny"]

    def _run(self, trial_mode: str, weights: ScoreWeights) -> PlacementEngine:
        engine = _engine(self.WORDS, weights=weights, trial_mode=trial_mode)
        for word in engine.words:
            engine.place_word(word)
        return engine

    def test_committed_candidate_has_lowest_score(self) -> None:
        weights = ScoreWeights(minimize_width=1.0, minimize_height=0.7, maximize_intersections=0.2)
        engine = _engine(self.WORDS, weights=weights)
        engine.place_word(engine.words[0])
        for word in engine.words[1:]:
            scored = engine.scored_candidates(word)
            engine.place_word(word)
            if not scored:
                self.assertFalse(word.is_placed)
                continue
            best = min(score for _, score in scored)
            first_best = next(location for location, score in scored if score == best)
            self.assertEqual(word.placement.location, first_best)

    def test_scoring_leaves_live_grid_untouched(self) -> None:
        engine = _engine(self.WORDS)
        engine.place_word(engine.words[0])
        before = engine.grid.to_jsonable()
        for location in engine.candidates(engine.words[1]):
            engine.score_candidate(engine.words[1], location)
            self.assertEqual(engine.grid.to_jsonable(), before)

    def test_rollback_and_clone_agree(self) -> None:
        for weights in (ScoreWeights(), NEGATIVE_LETTER_WEIGHT, ScoreWeights(2.0, -1.0, 0.5)):
            rollback = self._run(TRIAL_ROLLBACK, weights)
            clone = self._run(TRIAL_CLONE, weights)
            self.assertEqual(
                [word.state for word in rollback.words],
                [word.state for word in clone.words],
            )
            self.assertEqual(rollback.grid.to_jsonable(), clone.grid.to_jsonable())

    def test_score_formula(self) -> None:
        engine = _engine(["cat"])
        engine.place_word(engine.words[0])
        weights = ScoreWeights(minimize_width=2.0, minimize_height=5.0, maximize_intersections=-1.0)
        # Width spans both boundaries (0..4), single row, three letters.
        self.assertEqual(score_grid(engine.grid, weights), 4 * 2.0 + 0 * 5.0 - 3)
        self.assertEqual(score_grid(PlacementEngine().grid, weights), 0.0)

    def _crossing_choice(self, weights: ScoreWeights) -> WordLocation:
        # "axc" can run DOWN through both "ab" and "cd", or RIGHT through "ec" alone.
        engine = PlacementEngine(weights=weights)
        engine.commit(Word(0, "ab"), WordLocation(0, 0, Direction.RIGHT))
        engine.commit(Word(1, "cd"), WordLocation(2, 0, Direction.RIGHT))
        engine.commit(Word(2, "ec"), WordLocation(5, 5, Direction.DOWN))
        word = Word(3, "axc")
        self.assertEqual(
            engine.candidates(word),
            [WordLocation(-1, 1, Direction.DOWN), WordLocation(7, 2, Direction.RIGHT)],
        )
        self.assertTrue(engine.place_word(word))
        return word.placement.location

    def test_positive_letter_weight_prefers_more_crossings(self) -> None:
        weights = ScoreWeights(minimize_width=0, minimize_height=0, maximize_intersections=1)
        self.assertEqual(self._crossing_choice(weights), WordLocation(-1, 1, Direction.DOWN))

    def test_negative_letter_weight_prefers_fewer_crossings(self) -> None:
        self.assertEqual(
            self._crossing_choice(NEGATIVE_LETTER_WEIGHT), WordLocation(7, 2, Direction.RIGHT)
        )

    def test_unknown_trial_mode_rejected(self) -> None:
        with self.assertRaises(ValueError):
            PlacementEngine(trial_mode="guess")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
