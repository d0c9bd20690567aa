"""Small lexicons shared by the test modules."""

from letterpuzzle.data.lexicon import LexiconIndex

# Seed family KALEM/KELAM/MELAK yields KALEM, KELAM, MELAK, ELMA, MAL once
# KALE, LAM and KEL are absorbed by longer words.
KALEM_FAMILY = [
    "kalem", "kelam", "melak", "elma", "kale", "mal", "kel", "lam",
    "leke", "melek", "kamp",
]

# Seed family BALTA/TABLA yields BALTA, TABLA, ATLA, BALA, TAL.
BALTA_FAMILY = ["balta", "tabla", "atla", "bala", "tal", "tab", "alt"]


def kalem_lexicon() -> LexiconIndex:
    return LexiconIndex.from_words(KALEM_FAMILY)


def two_family_lexicon() -> LexiconIndex:
    return LexiconIndex.from_words(KALEM_FAMILY + BALTA_FAMILY)
