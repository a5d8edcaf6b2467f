"""
Answer Matcher

Decides whether free-text input matches a cell's answer under
normalization, pluralization and a fixed edit-distance ceiling.

All functions are total over strings: they never raise for any input.
"""

import re
from typing import Iterable, Optional, Set

from ..config.game_settings import EDIT_DISTANCE_CEILING, MIN_LENGTH_RATIO
from ..models.puzzle import Category

_PUNCTUATION = re.compile(r"[^\w\s']")
_WHITESPACE = re.compile(r"\s+")
_VOWELS = set("aeiou")


def normalize(text: str) -> str:
    """
    Normalizes a string for comparison.

    Lowercases, strips punctuation except apostrophes, collapses whitespace
    runs to one space and trims. Idempotent.
    """
    text = _PUNCTUATION.sub('', text.lower())
    return _WHITESPACE.sub(' ', text).strip()


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance (single-character insert, delete, substitute).

    Keeps two rows of the DP table, sized to the shorter string.
    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(
                    previous[j - 1],  # substitution
                    current[j - 1],   # insertion
                    previous[j],      # deletion
                ))
        previous = current

    return previous[-1]


def plural_variants(word: str) -> Set[str]:
    """
    Generates singular/plural inflections of a word from suffix rules.

    Args:
        word: Word to inflect (expected normalized)

    Returns:
        Set of variants, always including the word itself
    """
    variants = {word}

    if word.endswith('ies'):
        variants.add(word[:-3] + 'y')
    if word.endswith('es'):
        variants.add(word[:-2])
        variants.add(word[:-1])
    if word.endswith('s') and not word.endswith('ss'):
        variants.add(word[:-1])

    if not word.endswith('s'):
        variants.add(word + 's')
        if len(word) >= 2 and word.endswith('y') and word[-2] not in _VOWELS:
            variants.add(word[:-1] + 'ies')
        if word.endswith(('ch', 'sh', 'x', 'o')):
            variants.add(word + 'es')

    return variants


def _inflections(word: str) -> Set[str]:
    """plural_variants plus the f/fe <-> ves forms (knife/knives, leaf/leaves)."""
    variants = plural_variants(word)

    if word.endswith('ves'):
        variants.add(word[:-3] + 'f')
        variants.add(word[:-3] + 'fe')
    elif word.endswith('fe'):
        variants.add(word[:-2] + 'ves')
    elif word.endswith('f'):
        variants.add(word[:-1] + 'ves')

    return variants


def _is_inflection_of(guess: str, candidate: str) -> bool:
    return not _inflections(guess).isdisjoint(_inflections(candidate))


def _matches_candidate(guess: str, candidate: str, category: Optional[Category]) -> bool:
    candidate = normalize(candidate)

    # Short guesses must not slip through on the distance ceiling
    if not guess or len(guess) < MIN_LENGTH_RATIO * len(candidate):
        return False

    if guess == candidate:
        return True

    if category is Category.THINGS and _is_inflection_of(guess, candidate):
        return True

    distance = edit_distance(guess, candidate)
    if category is not Category.THINGS and distance > 1 and _is_inflection_of(guess, candidate):
        # Reinflecting a person or place (knife/knives) is not a typo;
        # a single dropped or added letter still falls to the ceiling
        return False

    return distance <= EDIT_DISTANCE_CEILING


def is_correct_answer(
    guess: str,
    answer: str,
    acceptable_answers: Optional[Iterable[str]] = None,
    category: Optional[Category] = None,
) -> bool:
    """
    Checks a guess against the canonical answer and each accepted alternate.

    Args:
        guess: Raw player input
        answer: Canonical answer
        acceptable_answers: Accepted alternates, tried in order after the answer
        category: Column category; plural equivalence only applies to THINGS

    Returns:
        bool: True if any candidate accepts the guess
    """
    normalized_guess = normalize(guess)
    candidates = [answer, *(acceptable_answers or ())]
    return any(_matches_candidate(normalized_guess, candidate, category) for candidate in candidates)
