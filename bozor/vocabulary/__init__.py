"""
Vocabulary tables: transliteration, synonyms, brands and typo dictionary
"""
from bozor.vocabulary.store import (
    CategoryVocabulary,
    Vocabulary,
    VocabularyStore,
    default_vocabulary,
    load_vocabulary,
)

__all__ = [
    "CategoryVocabulary",
    "Vocabulary",
    "VocabularyStore",
    "default_vocabulary",
    "load_vocabulary",
]
