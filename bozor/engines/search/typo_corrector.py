"""
Typo Corrector

Edit-distance similarity and dictionary-based correction of misspelled
queries ("mashna" -> "mashina").
"""
import logging
from typing import Iterable, Optional

from bozor.vocabulary import Vocabulary, default_vocabulary

from .text_normalizer import normalize_text

logger = logging.getLogger(__name__)

# A close match shorter than this share of the word is treated as a truncated typo
SHORT_QUERY_RATIO = 0.7
# Above this similarity a close match is always accepted
CONFIDENT_SIMILARITY = 0.8
# Whole-query edit distance allowed for a "did you mean" suggestion
MAX_SUGGESTION_DISTANCE = 2


def levenshtein(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions and substitutions"""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Case-insensitive 1 - distance / longer length; two empty strings are identical"""
    a, b = a.lower(), b.lower()
    longer = max(len(a), len(b))
    if longer == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / longer


class TypoCorrector:
    """Dictionary lookup of the first word close enough to the query"""

    def __init__(self, vocabulary: Optional[Vocabulary] = None, threshold: float = 0.7):
        self.vocabulary = vocabulary or default_vocabulary()
        self.threshold = threshold

    def correct_typo(
        self,
        query: Optional[str],
        vocabulary: Optional[Iterable[str]] = None,
        threshold: Optional[float] = None,
    ) -> Optional[str]:
        """
        Correct a query against a dictionary of known words.

        The first word whose similarity meets the threshold decides the
        outcome: it is returned when the query is much shorter than it or the
        similarity is above 0.8, otherwise no correction is made. Later, closer
        words are never considered.
        """
        normalized = normalize_text(query)
        if not normalized:
            return None

        words = self.vocabulary.common_words if vocabulary is None else vocabulary
        threshold = self.threshold if threshold is None else threshold

        for word in words:
            candidate = normalize_text(word)
            score = similarity(normalized, candidate)
            if score < threshold:
                continue
            if len(normalized) < SHORT_QUERY_RATIO * len(candidate) or score > CONFIDENT_SIMILARITY:
                logger.debug(f"Typo correction: '{normalized}' -> '{word}'")
                return word
            return None
        return None

    def suggest(self, query: Optional[str]) -> Optional[str]:
        """
        "Did you mean" suggestion for a whole query.

        Each token is corrected through the known-typo table first and the
        fuzzy dictionary second. A suggestion is made only when the result
        differs from the query by at most two edits.
        """
        normalized = normalize_text(query)
        if not normalized:
            return None

        corrected_tokens = []
        for token in normalized.split(" "):
            fixed = self.vocabulary.common_typos.get(token) or self.correct_typo(token)
            corrected_tokens.append(normalize_text(fixed) if fixed else token)

        corrected = " ".join(corrected_tokens)
        if corrected != normalized and levenshtein(corrected, normalized) <= MAX_SUGGESTION_DISTANCE:
            return corrected
        return None
