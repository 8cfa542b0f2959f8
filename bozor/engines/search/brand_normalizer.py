"""
Brand Normalizer

Maps brand spellings from any script ("NIKE", "nayk", "найк") to one
canonical brand name.
"""
import logging
from typing import Dict, List, Optional, Tuple

from bozor.vocabulary import Vocabulary, default_vocabulary

from .text_normalizer import TextNormalizer, normalize_text
from .typo_corrector import similarity

logger = logging.getLogger(__name__)

# Fuzzy match threshold against known brand spellings
BRAND_SIMILARITY_THRESHOLD = 0.8


class BrandNormalizer:
    """Canonical brand lookup with exact, transliterated and fuzzy matching"""

    def __init__(self, vocabulary: Optional[Vocabulary] = None, normalizer: Optional[TextNormalizer] = None):
        self.vocabulary = vocabulary or default_vocabulary()
        self.normalizer = normalizer or TextNormalizer(self.vocabulary)
        # Spellings are normalized once so Cyrillic "й" variants compare equal
        self._variations: Dict[str, Tuple[str, ...]] = {
            canonical: tuple(normalize_text(v) for v in variations)
            for canonical, variations in self.vocabulary.brands.items()
        }

    def normalize_brand(self, brand: Optional[str]) -> str:
        """
        Canonical brand name for any spelling, or the normalized input when
        no known brand matches.
        """
        if not brand:
            return ""

        normalized = normalize_text(brand)
        transliterated = self.normalizer.transliterate(brand)

        for canonical, variations in self._variations.items():
            if normalized == canonical or transliterated == canonical:
                return canonical
            for variation in variations:
                if normalized == variation or transliterated == variation:
                    return canonical
                if similarity(normalized, variation) > BRAND_SIMILARITY_THRESHOLD:
                    return canonical

        return normalized

    def is_known_brand(self, brand: Optional[str]) -> bool:
        return self.normalize_brand(brand) in self._variations

    def same_brand(self, first: Optional[str], second: Optional[str]) -> bool:
        if not first or not second:
            return False
        return self.normalize_brand(first) == self.normalize_brand(second)

    def brand_variations(self, brand: str) -> List[str]:
        """Every known spelling of a brand, canonical name first"""
        canonical = self.normalize_brand(brand)
        variations = {canonical: None, brand.lower(): None}
        for variation in self.vocabulary.brands.get(canonical, ()):
            variations[variation] = None
        return list(variations)

    def detect_brand(self, query: Optional[str]) -> Optional[str]:
        """First query token that resolves to a known canonical brand"""
        for word in normalize_text(query).split(" "):
            if len(word) <= 1:
                continue
            canonical = self.normalize_brand(word)
            if canonical in self._variations:
                logger.debug(f"Detected brand '{canonical}' in query '{query}'")
                return canonical
        return None
