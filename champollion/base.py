"""
Champollion - Base Classes and Interfaces
Data model shared by the index, the scorer and the translation search,
the CorpusIndex interface the algorithm queries, and the error taxonomy.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple
from enum import Enum


CONTAINMENT_MODES = ('substring', 'word')


# =============================================================================
# ERRORS
# =============================================================================

class ChampollionError(Exception):
    """Base class for all translation errors"""
    pass


class InvalidConfiguration(ChampollionError, ValueError):
    """Thresholds, collocation or corpus layout rejected before the algorithm runs"""
    pass


class IndexUnavailable(ChampollionError):
    """A corpus index query or open failed (missing files, corrupt database, I/O)"""
    pass


class TranslationTimeout(ChampollionError):
    """The refinement loop ran past its deadline"""
    pass


# =============================================================================
# DATA MODEL
# =============================================================================

class Side(Enum):
    """Corpus side a phrase or sentence belongs to"""
    SOURCE = 'source'
    TARGET = 'target'

    @classmethod
    def from_string(cls, value: str) -> 'Side':
        try:
            return cls(value.lower())
        except (ValueError, AttributeError):
            raise InvalidConfiguration(f"Unknown corpus side: {value!r}")


@dataclass(frozen=True)
class Phrase:
    """An ordered sequence of words on one corpus side"""
    words: Tuple[str, ...]
    side: Side

    @classmethod
    def from_text(cls, text: str, side: Side) -> 'Phrase':
        return cls(tuple(text.split()), side)

    @classmethod
    def empty(cls, side: Side) -> 'Phrase':
        return cls((), side)

    @property
    def text(self) -> str:
        return ' '.join(self.words)

    @property
    def is_empty(self) -> bool:
        return not self.words

    def __len__(self) -> int:
        return len(self.words)

    def __str__(self) -> str:
        return self.text

    def contains_word(self, word: str, mode: str = 'substring') -> bool:
        """Check whether a word already occurs in this phrase.

        'substring' tests the joined text for the word as a prefix, a
        suffix or a space-delimited infix, so it also matches partial words
        ("die" inside "dienen"). 'word' compares whole tokens only.
        """
        if mode == 'word':
            return word in self.words
        if mode == 'substring':
            text = self.text
            return text.startswith(word) or text.endswith(word) or f' {word} ' in text
        raise InvalidConfiguration(f"Unknown containment mode: {mode!r}")

    def extend(self, word: str) -> 'Phrase':
        return Phrase(self.words + (word,), self.side)


@dataclass(frozen=True)
class WordFrequency:
    """A target word and the number of aligned sentences' tokens it accounts for"""
    word: str
    freq: int


@dataclass
class ScoredPhrase:
    """A target phrase with its Dice score against the collocation"""
    phrase: Phrase
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {'phrase': self.phrase.text, 'dice': round(self.score, 6)}


@dataclass
class TranslationRequest:
    """Translation request parameters, validated at the boundary"""
    collocation: str
    tf: int = 5
    td: float = 0.1
    containment: str = 'substring'

    @classmethod
    def from_dict(cls, data: Dict[str, Any], defaults: Optional[Dict[str, Any]] = None) -> 'TranslationRequest':
        """Create from dictionary (e.g., from JSON request or query string)"""
        defaults = defaults or {}
        collocation = data.get('co', data.get('collocation', ''))
        tf = data.get('tf', defaults.get('tf', 5))
        td = data.get('td', defaults.get('td', 0.1))
        containment = data.get('containment', defaults.get('containment', 'substring'))
        try:
            tf = int(tf)
        except (TypeError, ValueError):
            raise InvalidConfiguration(f"Tf must be an integer, got {tf!r}")
        try:
            td = float(td)
        except (TypeError, ValueError):
            raise InvalidConfiguration(f"Td must be a number, got {td!r}")
        request = cls(collocation=collocation, tf=tf, td=td, containment=containment)
        request.validate()
        return request

    def validate(self) -> 'TranslationRequest':
        """Reject malformed requests before any index query is issued"""
        if not isinstance(self.collocation, str) or not self.collocation.strip():
            raise InvalidConfiguration("Collocation must be a non-empty string")
        if isinstance(self.tf, bool) or not isinstance(self.tf, int) or self.tf < 1:
            raise InvalidConfiguration(f"Tf must be a positive integer, got {self.tf!r}")
        if isinstance(self.td, bool) or not isinstance(self.td, (int, float)) or not 0 < self.td < 1:
            raise InvalidConfiguration(f"Td must lie strictly between 0 and 1, got {self.td!r}")
        if self.containment not in CONTAINMENT_MODES:
            raise InvalidConfiguration(f"Unknown containment mode: {self.containment!r}")
        return self


@dataclass
class TranslationResult:
    """Outcome of one translation request"""
    collocation: str
    translation: str
    source_count: int
    candidates: List[str] = field(default_factory=list)
    finalists: List[ScoredPhrase] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def found(self) -> bool:
        return bool(self.translation)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'collocation': self.collocation,
            'translation': self.translation,
            'found': self.found,
            'source_count': self.source_count,
            'candidates': self.candidates,
            'finalists': [f.to_dict() for f in self.finalists],
            'elapsed': round(self.elapsed, 3),
        }


# =============================================================================
# CORPUS INDEX INTERFACE
# =============================================================================

class CorpusIndex(ABC):
    """Read-only sentence index over a line-aligned bilingual corpus.

    Sentence identifiers are 1-based line numbers; identifier i on the
    source side is aligned to identifier i on the target side. Failures
    surface as IndexUnavailable, never as an empty answer.
    """

    @abstractmethod
    def ids_containing(self, phrase: Phrase) -> List[int]:
        """Ascending ids of sentences on phrase.side containing every word of phrase"""
        pass

    def count_containing(self, phrase: Phrase) -> int:
        """Number of sentences on phrase.side containing every word of phrase"""
        return len(self.ids_containing(phrase))

    @abstractmethod
    def text_of(self, snum: int, side: Side) -> str:
        """Raw text of sentence snum on the given side"""
        pass

    @abstractmethod
    def sentence_count(self, side: Side) -> int:
        """Total number of sentences indexed on the given side"""
        pass
