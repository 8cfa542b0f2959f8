"""
Query Variation Builder

Turns one raw query into the full set of strings a listing may match:
the trimmed original, its normalized and transliterated forms, a typo
correction and every synonym expansion.
"""
import logging
import re
from typing import List, Optional

from .synonym_expander import SynonymExpander
from .text_normalizer import TextNormalizer, normalize_text
from .typo_corrector import TypoCorrector

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r"^\d+$")


def extract_keywords(query: Optional[str]) -> List[str]:
    """Normalized words longer than one character, pure numbers dropped"""
    return [
        word
        for word in normalize_text(query).split(" ")
        if len(word) > 1 and not NUMBER_PATTERN.match(word)
    ]


class QueryVariationBuilder:
    """Builds the ordered, deduplicated variation list for a query"""

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        expander: Optional[SynonymExpander] = None,
        corrector: Optional[TypoCorrector] = None,
    ):
        self.normalizer = normalizer or TextNormalizer()
        self.expander = expander or SynonymExpander(self.normalizer.vocabulary)
        self.corrector = corrector or TypoCorrector(self.normalizer.vocabulary)

    def build(self, query: Optional[str]) -> List[str]:
        """
        All search variations for a query.

        Args:
            query: Raw user query in any supported script

        Returns:
            Non-empty variations in insertion order: trimmed original,
            normalized, transliterated, typo correction, synonyms, keywords
        """
        if not query or not query.strip():
            return []

        normalized = normalize_text(query)
        transliterated = self.normalizer.transliterate(query)

        variations = {query.strip(): None, normalized: None}
        if transliterated != normalized:
            variations[transliterated] = None

        corrected = self.corrector.correct_typo(normalized)
        if corrected:
            variations[normalize_text(corrected)] = None

        for synonym in self.expander.expand(query):
            variations[synonym] = None
            variations[normalize_text(synonym)] = None

        for keyword in extract_keywords(query):
            variations[keyword] = None

        result = [v for v in variations if v]
        logger.debug(f"Built {len(result)} variations for query '{query}'")
        return result
