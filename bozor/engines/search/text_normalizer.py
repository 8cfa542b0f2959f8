"""
Text Normalizer

Canonical forms for multi-script text: Uzbek Latin, Uzbek Cyrillic and
Russian queries and listing text all reduce to the same lowercase Latin
tokens so they can be compared directly.
"""
import re
import unicodedata
from typing import List, Optional

from bozor.vocabulary import Vocabulary, default_vocabulary

CYRILLIC_PATTERN = re.compile(r"[А-Яа-яЁёҒғҚқҢңӨөҲҳЎў]")
WHITESPACE_PATTERN = re.compile(r"\s+")
TAG_SEPARATORS = re.compile(r"[\s,;|]+")


def normalize_text(text: Optional[str]) -> str:
    """
    Lowercase, trim, strip diacritics and collapse whitespace.

    Combining marks in U+0300-U+036F are removed after NFD decomposition, so
    Cyrillic "й" becomes "и". Idempotent; never raises.
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower().strip())
    stripped = "".join(ch for ch in decomposed if not 0x0300 <= ord(ch) <= 0x036F)
    return WHITESPACE_PATTERN.sub(" ", stripped).strip()


def normalize_tag(tag: Optional[str]) -> str:
    """Slug form of a tag: lowercase ASCII letters, digits and single hyphens"""
    if not tag:
        return ""
    slug = WHITESPACE_PATTERN.sub("-", tag.lower().strip())
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def extract_tags(query: Optional[str]) -> List[str]:
    """Split a free-text query on whitespace and , ; | into normalized tags"""
    if not query:
        return []
    tags = [normalize_tag(part) for part in TAG_SEPARATORS.split(query)]
    return [tag for tag in tags if tag]


def is_cyrillic(text: Optional[str]) -> bool:
    return bool(text) and CYRILLIC_PATTERN.search(text) is not None


class TextNormalizer:
    """Normalization and Cyrillic/Russian to Uzbek Latin transliteration"""

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or default_vocabulary()

    def normalize(self, text: Optional[str]) -> str:
        return normalize_text(text)

    def is_cyrillic(self, text: Optional[str]) -> bool:
        return is_cyrillic(text)

    def has_russian_keywords(self, text: Optional[str]) -> bool:
        if not text:
            return False
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.vocabulary.russian_keywords)

    def convert_russian_keywords(self, text: str) -> str:
        """
        Replace known Russian words with their Uzbek equivalents.

        Plain substring replacement in table order; word boundaries are not
        respected, so "домашний" becomes "uyашний".
        """
        result = text.lower()
        for russian, uzbek in self.vocabulary.russian_keywords.items():
            result = result.replace(russian, uzbek)
        return result

    def transliterate_cyrillic(self, text: str) -> str:
        table = self.vocabulary.cyrillic_to_latin
        return "".join(table.get(ch, ch) for ch in text)

    def transliterate(self, text: Optional[str]) -> str:
        """
        Convert any supported script to normalized Uzbek Latin.

        Args:
            text: Query or listing text in Latin, Cyrillic or Russian

        Returns:
            Normalized Latin text; "" for empty input
        """
        if not text:
            return ""
        result = self.convert_russian_keywords(text)
        if is_cyrillic(result):
            result = self.transliterate_cyrillic(result)
        return normalize_text(result)
