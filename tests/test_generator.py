import itertools
import random
import unittest
from unittest.mock import MagicMock, patch

from letterpuzzle.core.constants import SUPPORTED_DIFFICULTIES
from letterpuzzle.core.exceptions import (
    GenerationExhaustedError,
    InvalidDifficultyError,
    NotFoundError,
)
from letterpuzzle.core.models import PuzzleCandidate
from letterpuzzle.data.lexicon import LexiconIndex
from letterpuzzle.data.normalization import signature
from letterpuzzle.engine import generator as generator_module
from letterpuzzle.engine.generator import GeneratorConfig, PuzzleGenerator
from letterpuzzle.engine.recency import RecencyCache
from letterpuzzle.engine.scoring import (
    LexiconLetterWeighting,
    PuzzleScorer,
    UniformLetterWeighting,
)
from letterpuzzle.engine.validator import PuzzleValidator

from tests.fixtures import KALEM_FAMILY, kalem_lexicon, two_family_lexicon


class PuzzleGeneratorTests(unittest.TestCase):
    def test_generated_puzzles_satisfy_invariants(self) -> None:
        lexicon = two_family_lexicon()
        validator = PuzzleValidator(lexicon=lexicon)
        produced = 0
        for seed in range(10):
            generator = PuzzleGenerator(lexicon, GeneratorConfig(seed=seed))
            for difficulty in SUPPORTED_DIFFICULTIES:
                with self.subTest(seed=seed, difficulty=difficulty):
                    try:
                        puzzle = generator.generate(difficulty)
                    except (NotFoundError, GenerationExhaustedError):
                        continue
                    produced += 1
                    self.assertEqual(len(puzzle.letters), difficulty)
                    self.assertIn(puzzle.seed_word, lexicon.words_of_length(difficulty))
                    validation = validator.validate(puzzle)
                    self.assertTrue(validation.ok, validation.messages)
        self.assertGreaterEqual(produced, 10)

    def test_kalem_family_word_list(self) -> None:
        generator = PuzzleGenerator(kalem_lexicon(), GeneratorConfig(seed=1))
        puzzle = generator.generate(5)
        self.assertEqual(puzzle.words, ["MAL", "ELMA", "KALEM", "KELAM", "MELAK"])
        self.assertEqual(sorted(puzzle.letters), sorted("KALEM"))

    def test_same_seed_reproduces_puzzle(self) -> None:
        first = PuzzleGenerator(two_family_lexicon(), GeneratorConfig(seed=42)).generate(5)
        second = PuzzleGenerator(two_family_lexicon(), GeneratorConfig(seed=42)).generate(5)
        self.assertEqual(first.letters, second.letters)
        self.assertEqual(first.words, second.words)

    def test_injected_rng_drives_draws(self) -> None:
        lexicon = two_family_lexicon()
        first = PuzzleGenerator(lexicon, rng=random.Random(3)).generate(5)
        second = PuzzleGenerator(lexicon, rng=random.Random(3)).generate(5)
        self.assertEqual(first.seed_word, second.seed_word)

    def test_recency_avoids_immediate_repeat(self) -> None:
        recency = RecencyCache(capacity=10)
        generator = PuzzleGenerator(two_family_lexicon(), GeneratorConfig(seed=5), recency=recency)
        first = generator.generate(5)
        second = generator.generate(5)
        self.assertNotEqual(signature(first.seed_word), signature(second.seed_word))
        self.assertEqual(recency.size(5), 2)

    def test_recent_seeds_are_tried_after_fresh_ones_fail(self) -> None:
        recency = RecencyCache(capacity=10)
        generator = PuzzleGenerator(kalem_lexicon(), GeneratorConfig(seed=5), recency=recency)
        generator.generate(5)
        # every KALEM anagram is now recent; MELEK never yields a puzzle
        puzzle = generator.generate(5)
        self.assertEqual(signature(puzzle.seed_word), "AEKLM")
        self.assertEqual(puzzle.attempts, 2)
        self.assertEqual(recency.snapshot(5), ["AEKLM"])

    def test_recency_resets_when_pool_is_spent(self) -> None:
        recency = RecencyCache(capacity=10)
        config = GeneratorConfig(seed=5, recency_reset_fraction=0.5)
        generator = PuzzleGenerator(kalem_lexicon(), config, recency=recency)
        generator.generate(5)
        with self.assertLogs("letterpuzzle.engine.generator", level="WARNING") as logs:
            puzzle = generator.generate(5)
        self.assertTrue(any("resetting recency cache" in line for line in logs.output))
        self.assertEqual(signature(puzzle.seed_word), "AEKLM")
        self.assertEqual(recency.snapshot(5), ["AEKLM"])

    def test_shuffle_letters_keeps_multiset(self) -> None:
        config = GeneratorConfig(seed=11, shuffle_letters=True)
        puzzle = PuzzleGenerator(kalem_lexicon(), config).generate(5)
        self.assertEqual(sorted(puzzle.letters), sorted(puzzle.seed_word))

    def test_empty_length_raises_not_found(self) -> None:
        generator = PuzzleGenerator(kalem_lexicon())
        with self.assertRaises(NotFoundError):
            generator.generate(6)

    def test_no_four_letter_words_raises_not_found(self) -> None:
        generator = PuzzleGenerator(LexiconIndex.from_words(["kalem", "mal"]))
        with self.assertRaises(NotFoundError):
            generator.generate(4)

    def test_unsupported_difficulty(self) -> None:
        generator = PuzzleGenerator(kalem_lexicon())
        with self.assertRaises(InvalidDifficultyError):
            generator.generate(9)

    def test_exhaustion_when_nothing_is_admissible(self) -> None:
        generator = PuzzleGenerator(LexiconIndex.from_words(["borsa", "kapı", "ev"]))
        with self.assertRaises(GenerationExhaustedError):
            generator.generate(5)

    def test_attempt_budget_is_respected(self) -> None:
        words = ["borsa", "kitap", "bulut", "deniz"]
        config = GeneratorConfig(max_attempts=2, seed=0)
        generator = PuzzleGenerator(LexiconIndex.from_words(words), config)
        with self.assertRaises(GenerationExhaustedError) as ctx:
            generator.generate(5)
        self.assertIn("within 2 attempts", str(ctx.exception))

    def test_spent_time_budget_stops_search(self) -> None:
        clock = MagicMock()
        # deadline is computed at 0.0; every later reading is past it
        clock.monotonic.side_effect = itertools.chain([0.0], itertools.repeat(5.0))
        config = GeneratorConfig(seed=0, time_budget_seconds=1.0)
        generator = PuzzleGenerator(two_family_lexicon(), config)
        with patch.object(generator_module, "time", clock):
            with self.assertRaises(GenerationExhaustedError) as ctx:
                generator.generate(5)
        self.assertIn("within 0 attempts", str(ctx.exception))

    def test_time_budget_allows_attempts_before_deadline(self) -> None:
        clock = MagicMock()
        clock.monotonic.side_effect = itertools.chain([0.0, 0.5], itertools.repeat(5.0))
        config = GeneratorConfig(seed=0, time_budget_seconds=1.0)
        lexicon = LexiconIndex.from_words(w for w in KALEM_FAMILY if w != "melek")
        generator = PuzzleGenerator(lexicon, config)
        with patch.object(generator_module, "time", clock):
            puzzle = generator.generate(5)
        self.assertEqual(puzzle.attempts, 1)
        self.assertEqual(signature(puzzle.seed_word), "AEKLM")


class SelectionTests(unittest.TestCase):
    def _generator(self, **overrides) -> PuzzleGenerator:
        return PuzzleGenerator(kalem_lexicon(), GeneratorConfig(seed=0, **overrides))

    def test_top_one_picks_best_score(self) -> None:
        generator = self._generator(top_k=1)
        low = PuzzleCandidate(list("ABCD"), ["ABC", "BCD"], "ABCD", score=3.0)
        high = PuzzleCandidate(list("EFGH"), ["EFG", "FGH"], "EFGH", score=9.0)
        self.assertIs(generator._select([low, high]), high)

    def test_near_ties_prefer_length_diversity(self) -> None:
        generator = self._generator(top_k=1, tie_tolerance=0.5)
        flat = PuzzleCandidate(list("ABCD"), ["ABCD", "BCDA", "CDAB"], "ABCD", score=10.4)
        varied = PuzzleCandidate(list("EFGH"), ["EFG", "EFGH", "FGHEX"], "EFGH", score=10.1)
        self.assertIs(generator._select([flat, varied]), varied)


class ScorerTests(unittest.TestCase):
    def test_more_and_longer_words_score_higher(self) -> None:
        scorer = PuzzleScorer(letter_weighting=UniformLetterWeighting())
        rich = PuzzleCandidate(list("KALEM"), ["MAL", "ELMA", "KALEM", "KELAM", "MELAK"], "KALEM")
        poor = PuzzleCandidate(list("KALEM"), ["MAL", "ELMA", "KALEM", "MELAK"], "KALEM")
        self.assertGreater(scorer.score(rich), scorer.score(poor))

    def test_empty_candidate_scores_zero(self) -> None:
        scorer = PuzzleScorer()
        self.assertEqual(scorer.score(PuzzleCandidate([], [], "")), 0.0)

    def test_lexicon_weighting_rewards_rare_letters(self) -> None:
        weighting = LexiconLetterWeighting(LexiconIndex.from_words(["aaaz"]))
        self.assertAlmostEqual(weighting.weight(["A"]), 0.0)
        self.assertAlmostEqual(weighting.weight(["Z"]), 2 / 3)
        self.assertAlmostEqual(weighting.weight(["A", "Z", "A"]), 1 / 3)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
