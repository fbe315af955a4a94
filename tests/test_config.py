"""Tests for configuration loading and request validation."""

import pytest

from champollion.base import InvalidConfiguration, Phrase, Side, TranslationRequest
from champollion.config import AppConfig, PerformanceConfig, TranslationDefaults


class TestAppConfig:
    """Test AppConfig.load behavior."""

    def test_defaults(self) -> None:
        """Tf 5, Td 0.1, German closed-class list, substring containment."""
        config = AppConfig.load()
        assert config.get_translation_settings() == {'tf': 5, 'td': 0.1, 'containment': 'substring'}
        assert config.closed_class.language == 'de'

    def test_environment_overrides(self, monkeypatch) -> None:
        """Thresholds and paths come from the environment."""
        monkeypatch.setenv("CHAMPOLLION_TF", "7")
        monkeypatch.setenv("CHAMPOLLION_TD", "0.25")
        monkeypatch.setenv("CHAMPOLLION_INDEX_DIR", "/srv/index")
        config = AppConfig.load()
        assert (config.translation_defaults.frequency_threshold,
                config.translation_defaults.dice_threshold,
                config.index.index_dir) == (7, 0.25, "/srv/index")

    def test_malformed_number_rejected(self, monkeypatch) -> None:
        """Non-numeric thresholds raise InvalidConfiguration."""
        monkeypatch.setenv("CHAMPOLLION_TF", "many")
        with pytest.raises(InvalidConfiguration):
            TranslationDefaults.from_env()

    def test_unknown_containment_rejected(self, monkeypatch) -> None:
        """Only word and substring containment exist."""
        monkeypatch.setenv("CHAMPOLLION_CONTAINMENT", "fuzzy")
        with pytest.raises(InvalidConfiguration):
            TranslationDefaults.from_env()

    def test_worker_count_must_be_positive(self, monkeypatch) -> None:
        """Zero workers is rejected."""
        monkeypatch.setenv("CHAMPOLLION_MAX_WORKERS", "0")
        with pytest.raises(InvalidConfiguration):
            PerformanceConfig.from_env()

    def test_overrides_skip_none(self) -> None:
        """Unset overrides keep the defaults."""
        settings = AppConfig().get_translation_settings({'tf': 9, 'td': None})
        assert (settings['tf'], settings['td']) == (9, 0.1)


class TestTranslationRequest:
    """Test boundary validation of translation requests."""

    def test_from_dict_parses_strings(self) -> None:
        """Query-string values are converted."""
        request = TranslationRequest.from_dict({'co': 'member states', 'tf': '3', 'td': '0.2'})
        assert (request.collocation, request.tf, request.td) == ('member states', 3, 0.2)

    def test_from_dict_uses_defaults(self) -> None:
        """Missing thresholds fall back to the supplied defaults."""
        request = TranslationRequest.from_dict({'collocation': 'x'}, defaults={'tf': 8, 'td': 0.3})
        assert (request.tf, request.td) == (8, 0.3)

    @pytest.mark.parametrize("data", [
        {'co': 'x', 'tf': 'five'},
        {'co': 'x', 'td': 'low'},
        {'co': 'x', 'tf': 0},
        {'co': 'x', 'td': 0},
        {'co': 'x', 'td': 1},
        {'co': 'x', 'containment': 'fuzzy'},
        {'co': ''},
        {},
    ])
    def test_invalid_requests_rejected(self, data) -> None:
        """Every malformed request raises InvalidConfiguration."""
        with pytest.raises(InvalidConfiguration):
            TranslationRequest.from_dict(data)


class TestPhrase:
    """Test the Phrase value type."""

    def test_from_text_normalizes_whitespace(self) -> None:
        """Words are split on any whitespace run."""
        assert Phrase.from_text("  member   states ", Side.SOURCE).text == "member states"

    def test_extend_returns_new_phrase(self) -> None:
        """Extending leaves the original untouched."""
        phrase = Phrase.from_text("menschen", Side.TARGET)
        longer = phrase.extend("rechte")
        assert (phrase.text, longer.text) == ("menschen", "menschen rechte")

    def test_containment_modes(self) -> None:
        """Word mode compares whole words, substring mode also matches word prefixes."""
        phrase = Phrase.from_text("dienen dem", Side.TARGET)
        assert not phrase.contains_word("die", "word")
        assert phrase.contains_word("die", "substring")

    def test_unknown_containment_mode(self) -> None:
        """Unknown modes raise InvalidConfiguration."""
        with pytest.raises(InvalidConfiguration):
            Phrase.from_text("a", Side.TARGET).contains_word("a", "fuzzy")
