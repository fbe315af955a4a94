"""Unit tests for the closed-class word filter."""

import json

import pytest

from champollion.base import InvalidConfiguration
from champollion.closed_class import ClosedClassFilter
from champollion.config import ClosedClassConfig


class TestClosedClassFilter:
    """Test ClosedClassFilter behavior."""

    def test_articles_are_closed_class(self, german_filter) -> None:
        """German articles are excluded."""
        assert all(german_filter.is_closed_class(w) for w in ["der", "die", "das", "eine"])

    def test_prepositions_and_contractions_are_closed_class(self, german_filter) -> None:
        """Prepositions and preposition+article contractions are excluded."""
        assert all(german_filter.is_closed_class(w) for w in ["für", "über", "während", "im", "zur"])

    def test_content_words_pass(self, german_filter) -> None:
        """Content words are not closed-class."""
        assert not german_filter.is_closed_class("mitgliedstaaten")

    def test_match_is_exact(self, german_filter) -> None:
        """Words containing a function word are not closed-class."""
        assert not german_filter.is_closed_class("dienen")

    def test_match_is_case_sensitive(self, german_filter) -> None:
        """Only the lower-case form is listed."""
        assert not german_filter.is_closed_class("Der")

    def test_unknown_language_rejected(self) -> None:
        """Languages without a built-in list raise InvalidConfiguration."""
        with pytest.raises(InvalidConfiguration):
            ClosedClassFilter.for_language("xx")


class TestLoadingLists:
    """Test loading closed-class lists from files."""

    def test_word_per_line_file(self, tmp_path) -> None:
        """Comments and blank lines are ignored."""
        path = tmp_path / "words.txt"
        path.write_text("# articles\nthe\n\na  # indefinite\n", encoding="utf-8")
        assert ClosedClassFilter.from_file(str(path)).words == frozenset(["the", "a"])

    def test_json_file(self, tmp_path) -> None:
        """A JSON list of strings is accepted."""
        path = tmp_path / "words.json"
        path.write_text(json.dumps(["le", "la"]), encoding="utf-8")
        assert ClosedClassFilter.from_file(str(path)).words == frozenset(["le", "la"])

    def test_malformed_json_rejected(self, tmp_path) -> None:
        """A JSON file that is not a list of strings raises InvalidConfiguration."""
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"le": 1}), encoding="utf-8")
        with pytest.raises(InvalidConfiguration):
            ClosedClassFilter.from_file(str(path))

    def test_missing_file_rejected(self, tmp_path) -> None:
        """An unreadable file raises InvalidConfiguration."""
        with pytest.raises(InvalidConfiguration):
            ClosedClassFilter.from_file(str(tmp_path / "missing.txt"))

    def test_config_file_overrides_language(self, tmp_path) -> None:
        """A configured words file replaces the built-in list."""
        path = tmp_path / "words.txt"
        path.write_text("foo\n", encoding="utf-8")
        closed = ClosedClassFilter.from_config(ClosedClassConfig(language="de", words_file=str(path)))
        assert not closed.is_closed_class("der")
