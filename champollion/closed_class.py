"""
Champollion - Closed-Class Filter

Function words (articles, prepositions and their contractions) co-occur
with almost every collocation and swamp the Dice statistics, so they are
never proposed as translation candidates. Lists are per target language
and can be replaced from a file.

File Format:
    One word per line, blank lines and '#' comments ignored, or a JSON
    list of strings.
"""
import json
import os
from typing import Iterable

from champollion.base import InvalidConfiguration
from champollion.logging_config import get_logger

logger = get_logger('closed_class')

DEFAULT_GERMAN_CLOSED_CLASS_LIST = [
    # Definite articles
    'der', 'die', 'das', 'den', 'dem', 'des',
    # Indefinite articles
    'ein', 'eine', 'einer', 'einen', 'einem', 'eines',
    # Prepositions (accusative)
    'bis', 'durch', 'entlang', 'für', 'gegen', 'ohne', 'um',
    # Prepositions (two-way)
    'an', 'auf', 'hinter', 'in', 'neben', 'über', 'unter', 'vor', 'zwischen',
    # Prepositions (dative)
    'aus', 'ausser', 'außer', 'bei', 'gegenüber', 'mit', 'nach', 'seit', 'von', 'zu',
    # Prepositions (genitive)
    'anstatt', 'statt', 'außerhalb', 'innerhalb', 'trotz', 'während', 'wegen',
    # Preposition + article contractions
    'am', 'im', 'zur',
]

DEFAULT_FRENCH_CLOSED_CLASS_LIST = [
    'le', 'la', 'les', 'l', 'un', 'une', 'des', 'du', 'de', 'd',
    'à', 'au', 'aux', 'en', 'dans', 'par', 'pour', 'sur', 'sous', 'avec',
    'sans', 'entre', 'vers', 'chez', 'contre', 'depuis', 'pendant',
]

DEFAULT_CLOSED_CLASS = {
    'de': DEFAULT_GERMAN_CLOSED_CLASS_LIST,
    'fr': DEFAULT_FRENCH_CLOSED_CLASS_LIST,
}


class ClosedClassFilter:
    """Exact, case-sensitive membership test against a set of function words"""

    def __init__(self, words: Iterable[str]):
        self.words = frozenset(words)

    @classmethod
    def for_language(cls, language: str) -> 'ClosedClassFilter':
        if language not in DEFAULT_CLOSED_CLASS:
            raise InvalidConfiguration(
                f"No built-in closed-class list for {language!r}; "
                f"available: {', '.join(sorted(DEFAULT_CLOSED_CLASS))}"
            )
        return cls(DEFAULT_CLOSED_CLASS[language])

    @classmethod
    def from_file(cls, path: str) -> 'ClosedClassFilter':
        """Load a closed-class list from a word-per-line or JSON file"""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise InvalidConfiguration(f"Cannot read closed-class file {path}: {e}") from e

        if path.endswith('.json'):
            try:
                words = json.loads(content)
            except json.JSONDecodeError as e:
                raise InvalidConfiguration(f"Malformed closed-class file {path}: {e}") from e
            if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
                raise InvalidConfiguration(f"{path} must contain a JSON list of strings")
        else:
            words = []
            for line in content.splitlines():
                line = line.split('#', 1)[0].strip()
                if line:
                    words.append(line)

        logger.info(f"Loaded {len(words)} closed-class words from {os.path.basename(path)}")
        return cls(words)

    @classmethod
    def from_config(cls, closed_class_config) -> 'ClosedClassFilter':
        if closed_class_config.words_file:
            return cls.from_file(closed_class_config.words_file)
        return cls.for_language(closed_class_config.language)

    def is_closed_class(self, word: str) -> bool:
        return word in self.words

    def __contains__(self, word: str) -> bool:
        return self.is_closed_class(word)

    def __len__(self) -> int:
        return len(self.words)
