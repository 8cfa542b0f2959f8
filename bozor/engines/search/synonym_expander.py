"""
Synonym Expander

Widens a query with equivalent terms (Uzbek synonyms and Russian to Uzbek
mappings) and looks up category-specific related terms.
"""
import logging
from typing import List, Optional

from bozor.vocabulary import Vocabulary, default_vocabulary

from .text_normalizer import normalize_text

logger = logging.getLogger(__name__)


class SynonymExpander:
    """Query expansion over the synonym table"""

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or default_vocabulary()

    def expand(self, query: Optional[str]) -> List[str]:
        """
        Expand a query into itself plus all synonym variants.

        Matching is by substring in both directions: a synonym key inside the
        query or the query inside a key both pull in that key's synonyms. For
        each word that is itself a key, the query with that word replaced by
        each synonym is added too.

        Returns:
            Deduplicated variants in discovery order; [] for an empty query
        """
        normalized = normalize_text(query)
        if not normalized:
            return []

        synonyms = self.vocabulary.synonyms
        variants = {normalized: None}

        for synonym in synonyms.get(normalized, ()):
            variants[synonym.lower()] = None

        for key, values in synonyms.items():
            if key in normalized or normalized in key:
                for synonym in values:
                    variants[synonym.lower()] = None

        for word in normalized.split(" "):
            for synonym in synonyms.get(word, ()):
                synonym = synonym.lower()
                variants[synonym] = None
                replaced = normalized.replace(word, synonym, 1)
                if replaced != normalized:
                    variants[replaced] = None

        logger.debug(f"Expanded '{normalized}' into {len(variants)} variants")
        return list(variants)

    def get_synonyms(self, word: Optional[str]) -> List[str]:
        if not word:
            return []
        return list(self.vocabulary.synonyms.get(word.lower().strip(), ()))

    def are_synonyms(self, first: str, second: str) -> bool:
        a, b = first.lower(), second.lower()
        return a == b or b in self.get_synonyms(a) or a in self.get_synonyms(b)

    def related_terms(self, word: str, category: str) -> List[str]:
        """
        All terms related to a word within one category.

        Every synonym, brand and attribute group whose key or one of whose
        values equals the word contributes its key and all values.
        """
        config = self.vocabulary.category(category)
        if config is None:
            return []

        target = word.lower().strip()
        related = {}
        for groups in (config.synonyms, config.brands, config.attributes):
            for key, values in groups.items():
                if key == target or any(v.lower() == target for v in values):
                    related[key] = None
                    for value in values:
                        related[value] = None
        return list(related)
