import tempfile
import unittest
from pathlib import Path

from letterpuzzle.core.exceptions import LexiconLoadError
from letterpuzzle.data.lexicon import LexiconConfig, LexiconIndex
from letterpuzzle.data.normalization import clean_word, signature, sort_words, to_upper

from tests.fixtures import KALEM_FAMILY, kalem_lexicon


class NormalizationTests(unittest.TestCase):
    def test_turkish_dotted_and_dotless_i(self) -> None:
        self.assertEqual(to_upper("istanbul"), "İSTANBUL")
        self.assertEqual(to_upper("ılık"), "ILIK")

    def test_clean_word_strips_foreign_characters(self) -> None:
        self.assertEqual(clean_word("  kale-m1 "), "KALEM")
        self.assertEqual(clean_word("çiğdem"), "ÇİĞDEM")
        self.assertEqual(clean_word(""), "")

    def test_english_case_rules(self) -> None:
        config = LexiconConfig.english()
        self.assertEqual(clean_word("quiz", config.alphabet, config.case_map), "QUIZ")
        self.assertEqual(clean_word("çay", config.alphabet, config.case_map), "AY")

    def test_signature_is_shared_by_anagrams(self) -> None:
        self.assertEqual(signature("KALEM"), "AEKLM")
        self.assertEqual(signature("MELAK"), signature("KELAM"))

    def test_sort_words_follows_alphabet_order(self) -> None:
        self.assertEqual(sort_words(["ÇAY", "CAN", "DAL", "AT"]), ["AT", "CAN", "ÇAY", "DAL"])


class LexiconIndexTests(unittest.TestCase):
    def test_short_and_duplicate_words_are_dropped(self) -> None:
        index = LexiconIndex.from_words(["ev", "Kalem", "KALEM", "kalem ", "at"])
        self.assertEqual(len(index), 1)
        self.assertTrue(index.contains("kalem"))
        self.assertFalse(index.contains("ev"))

    def test_lookup_by_signature_returns_all_anagrams(self) -> None:
        index = kalem_lexicon()
        self.assertEqual(index.lookup_by_signature("AEKLM"), {"KALEM", "KELAM", "MELAK"})
        self.assertEqual(index.lookup_by_signature("XYZ"), set())

    def test_words_of_length(self) -> None:
        index = kalem_lexicon()
        self.assertEqual(index.words_of_length(5), ["KALEM", "KELAM", "MELAK", "MELEK"])
        self.assertEqual(index.words_of_length(7), [])

    def test_signatures_for_letter_set(self) -> None:
        index = kalem_lexicon()
        self.assertIn("EEKL", index.signatures_for_letter_set("EKL"))
        self.assertIn("EKL", index.signatures_for_letter_set("EKL"))

    def test_letter_frequency_sums_to_one(self) -> None:
        index = kalem_lexicon()
        total = sum(index.letter_frequency(char) for char in "ABCDEFGHIJKLMNOPRSTUVYZ")
        self.assertAlmostEqual(total, 1.0)
        self.assertEqual(index.letter_frequency("Ş"), 0.0)

    def test_from_path_skips_comments_and_reads_first_column(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "words.txt"
            source.write_text(
                "# sample list\n\nkalem\tisim\nelma\n" + "\n".join(KALEM_FAMILY) + "\n",
                encoding="utf-8",
            )
            index = LexiconIndex.from_path(source)
            self.assertTrue(index.contains("KALEM"))
            self.assertFalse(index.contains("ISIM"))
            self.assertEqual(len(index), len(KALEM_FAMILY))

    def test_missing_path_raises(self) -> None:
        with self.assertRaises(LexiconLoadError):
            LexiconIndex.from_path("does/not/exist.txt")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
