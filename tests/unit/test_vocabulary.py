"""
Unit tests for vocabulary loading and hot reload
"""
import json

import pytest
from pydantic import ValidationError

from bozor.core.exceptions import VocabularyError
from bozor.vocabulary import Vocabulary, VocabularyStore, default_vocabulary, load_vocabulary


@pytest.fixture
def vocabulary_file(tmp_path):
    path = tmp_path / "vocabulary.json"
    path.write_text(
        json.dumps({"common_words": ["kitob", "daftar"], "synonyms": {"kitob": ["китоб", "book"]}}),
        encoding="utf-8",
    )
    return path


class TestDefaultVocabulary:
    """Test the built-in vocabulary"""

    @pytest.mark.unit
    def test_tables_present(self, vocabulary):
        """Test every table is populated"""
        assert vocabulary.cyrillic_to_latin["ш"] == "sh"
        assert vocabulary.russian_keywords["машина"] == "mashina"
        assert "avtomobil" in vocabulary.synonyms["mashina"]
        assert "nayk" in vocabulary.brands["nike"]
        assert vocabulary.common_words[0] == "kamaz"
        assert vocabulary.common_typos["krosovka"] == "krossovka"

    @pytest.mark.unit
    def test_longer_russian_keywords_first(self, vocabulary):
        """Test 'автомобиль' is replaced before its prefix 'авто'"""
        keys = list(vocabulary.russian_keywords)
        assert keys.index("автомобиль") < keys.index("авто")

    @pytest.mark.unit
    def test_category_aliases(self, vocabulary):
        """Test aliases resolve to category groups"""
        assert vocabulary.category("Transport") is vocabulary.category("automotive")
        assert "nexia" in vocabulary.category("transport").brands
        assert vocabulary.category("kitoblar") is None

    @pytest.mark.unit
    def test_immutable(self, vocabulary):
        """Test vocabularies cannot be modified in place"""
        with pytest.raises(ValidationError):
            vocabulary.common_words = ("kitob",)


class TestLoadVocabulary:
    """Test load_vocabulary"""

    @pytest.mark.unit
    def test_file_overrides_defaults(self, vocabulary_file):
        """Test tables in the file replace defaults and the rest are kept"""
        loaded = load_vocabulary(vocabulary_file)
        assert loaded.common_words == ("kitob", "daftar")
        assert loaded.synonyms == {"kitob": ("китоб", "book")}
        assert loaded.brands == default_vocabulary().brands

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        """Test a missing file raises VocabularyError"""
        with pytest.raises(VocabularyError):
            load_vocabulary(tmp_path / "missing.json")

    @pytest.mark.unit
    @pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"common_words": 5}'])
    def test_invalid_content(self, tmp_path, content):
        """Test malformed files raise VocabularyError"""
        path = tmp_path / "bad.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(VocabularyError):
            load_vocabulary(path)


class TestVocabularyStore:
    """Test VocabularyStore"""

    @pytest.mark.unit
    def test_defaults_without_path(self):
        """Test the built-in tables are used when no file is configured"""
        store = VocabularyStore()
        assert store.current.common_words == default_vocabulary().common_words

    @pytest.mark.unit
    def test_reload_swaps_reference(self, vocabulary, vocabulary_file):
        """Test reload replaces the vocabulary without touching the old one"""
        store = VocabularyStore(vocabulary)
        held = store.current

        reloaded = store.reload(vocabulary_file)

        assert store.current is reloaded
        assert held is vocabulary
        assert held.common_words[0] == "kamaz"
        assert reloaded.common_words[0] == "kitob"

    @pytest.mark.unit
    def test_failed_reload_keeps_current(self, vocabulary, tmp_path):
        """Test a bad file leaves the current vocabulary in place"""
        store = VocabularyStore(vocabulary)
        with pytest.raises(VocabularyError):
            store.reload(tmp_path / "missing.json")
        assert store.current is vocabulary

    @pytest.mark.unit
    def test_swap_returns_previous(self, vocabulary):
        """Test swap hands back the replaced vocabulary"""
        store = VocabularyStore(vocabulary)
        replacement = Vocabulary()
        assert store.swap(replacement) is vocabulary
        assert store.current is replacement
