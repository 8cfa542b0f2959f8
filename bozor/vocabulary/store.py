"""
Immutable vocabulary tables and the store that hands them out.

A ``Vocabulary`` is never mutated after construction. Reloading builds a new
object and swaps the store's reference, so a request that already holds the
old tables keeps a consistent view until it finishes.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationError

from bozor.core.exceptions import VocabularyError
from bozor.vocabulary import defaults

logger = logging.getLogger(__name__)


class CategoryVocabulary(BaseModel):
    """Synonym, brand and attribute groups for one category"""

    synonyms: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)
    brands: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)
    attributes: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)

    class Config:
        frozen = True


class Vocabulary(BaseModel):
    """All lookup tables used by normalization, expansion and correction"""

    cyrillic_to_latin: Dict[str, str] = Field(default_factory=dict)
    russian_keywords: Dict[str, str] = Field(default_factory=dict)
    synonyms: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)
    brands: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)
    common_words: Tuple[str, ...] = ()
    common_typos: Dict[str, str] = Field(default_factory=dict)
    categories: Dict[str, CategoryVocabulary] = Field(default_factory=dict)
    category_aliases: Dict[str, str] = Field(default_factory=dict)

    class Config:
        frozen = True

    def category(self, name: str) -> Optional[CategoryVocabulary]:
        """Resolve a category name or alias to its synonym groups"""
        key = self.category_aliases.get(name.lower().strip(), name.lower().strip())
        return self.categories.get(key)


def default_vocabulary() -> Vocabulary:
    """Build the vocabulary from the built-in tables"""
    return Vocabulary(
        cyrillic_to_latin=defaults.CYRILLIC_TO_LATIN,
        russian_keywords=defaults.RUSSIAN_TO_UZBEK_KEYWORDS,
        synonyms=defaults.SYNONYMS,
        brands=defaults.BRAND_MAPPINGS,
        common_words=defaults.COMMON_WORDS,
        common_typos=defaults.COMMON_TYPOS,
        categories=defaults.CATEGORY_SYNONYMS,
        category_aliases=defaults.CATEGORY_ALIASES,
    )


def load_vocabulary(path: Union[str, Path]) -> Vocabulary:
    """
    Load vocabulary tables from a JSON file.

    Tables missing from the file fall back to the built-in defaults, so a file
    may override only the synonyms or only the brands.

    Raises:
        VocabularyError: if the file cannot be read or fails validation
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise VocabularyError(f"Cannot read vocabulary file {path}: {e}") from e

    if not isinstance(data, dict):
        raise VocabularyError(f"Vocabulary file {path} must contain a JSON object")

    base = default_vocabulary().model_dump()
    base.update(data)
    try:
        vocabulary = Vocabulary.model_validate(base)
    except ValidationError as e:
        raise VocabularyError(f"Invalid vocabulary file {path}: {e}") from e

    logger.info(
        f"Loaded vocabulary from {path}: {len(vocabulary.synonyms)} synonym keys, "
        f"{len(vocabulary.brands)} brands, {len(vocabulary.common_words)} common words"
    )
    return vocabulary


class VocabularyStore:
    """Holds the current vocabulary and swaps it atomically on reload"""

    def __init__(self, vocabulary: Optional[Vocabulary] = None, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None
        if vocabulary is None:
            vocabulary = load_vocabulary(self.path) if self.path else default_vocabulary()
        self._current = vocabulary
        logger.info("VocabularyStore initialized")

    @property
    def current(self) -> Vocabulary:
        return self._current

    def swap(self, vocabulary: Vocabulary) -> Vocabulary:
        """Replace the current vocabulary, returning the previous one"""
        previous = self._current
        self._current = vocabulary
        return previous

    def reload(self, path: Optional[Union[str, Path]] = None) -> Vocabulary:
        """
        Rebuild the vocabulary and swap it in.

        The new tables are fully loaded and validated before the swap; on
        failure the current vocabulary stays in place and the error propagates.
        """
        if path is not None:
            self.path = Path(path)
        vocabulary = load_vocabulary(self.path) if self.path else default_vocabulary()
        self.swap(vocabulary)
        logger.info("Vocabulary reloaded")
        return vocabulary
