"""
Champollion - Translation Search

Grows single-word candidates into the multi-word phrase that best
translates a source collocation.

Search Flow:
    1. Seed: single-word candidates from the CandidateGenerator
    2. Prune: drop working phrases whose Dice score does not exceed Td
    3. Stop when nothing survives
    4. Select: the best surviving phrase of the round becomes a finalist
    5. Expand: append every candidate word not already in a phrase
    6. Repeat from 2; the answer is the best finalist

Ties always go to the phrase seen first. Phrases never repeat a word and
cannot be longer than the candidate list, so the loop terminates.
"""
import time
from typing import List, Optional, Sequence, Tuple

from champollion.base import (
    CorpusIndex, Phrase, ScoredPhrase, Side, TranslationRequest, TranslationResult,
    TranslationTimeout
)
from champollion.candidates import CandidateGenerator
from champollion.closed_class import ClosedClassFilter
from champollion.logging_config import get_logger
from champollion.scorer import DiceScorer

logger = get_logger('translator')


def local_best(scored: Sequence[ScoredPhrase]) -> Optional[ScoredPhrase]:
    """Highest-scoring phrase; only a strictly greater score replaces the current best"""
    best = None
    best_score = 0.0
    for item in scored:
        if item.score > best_score:
            best = item
            best_score = item.score
    return best


def cartesian_product(phrases: Sequence[Phrase], words: Sequence[Phrase],
                      containment: str = 'substring') -> List[Phrase]:
    """Extend every phrase by every single word it does not already contain"""
    expanded = []
    for phrase in phrases:
        for word_phrase in words:
            word = word_phrase.text
            if not phrase.contains_word(word, containment):
                expanded.append(phrase.extend(word))
    return expanded


class TranslationSearch:
    """Iterative refinement of translation candidates for one collocation at a time"""

    def __init__(
        self,
        index: CorpusIndex,
        closed_class: ClosedClassFilter,
        containment: str = 'substring',
        max_workers: int = 1,
        timeout_seconds: float = 0
    ):
        self.index = index
        self.scorer = DiceScorer(index, max_workers=max_workers)
        self.generator = CandidateGenerator(index, closed_class, scorer=self.scorer)
        self.containment = containment
        self.timeout_seconds = timeout_seconds

    def remove_low_dice(self, collocation: Phrase, phrases: Sequence[Phrase], td: float) -> List[ScoredPhrase]:
        """Score phrases and keep those strictly above the Dice threshold"""
        scores = self.scorer.dice_many(collocation, phrases)
        return [ScoredPhrase(phrase, score) for phrase, score in zip(phrases, scores) if score > td]

    def search(self, collocation: Phrase, tf: int, td: float) -> Tuple[Phrase, List[Phrase], List[ScoredPhrase]]:
        """
        Run the full search.

        Returns:
            Tuple of (best phrase or empty phrase, seed candidates, finalists)
        """
        with self.scorer.pool():
            deadline = time.monotonic() + self.timeout_seconds if self.timeout_seconds else None

            candidates = tuple(self.generator.candidates(collocation, tf, td))
            finalists = []
            working = list(candidates)

            round_num = 0
            while True:
                if deadline is not None and time.monotonic() > deadline:
                    raise TranslationTimeout(
                        f"Translation of '{collocation}' exceeded {self.timeout_seconds}s "
                        f"after {round_num} rounds"
                    )
                round_num += 1

                survivors = self.remove_low_dice(collocation, working, td)
                if not survivors:
                    break

                best = local_best(survivors)
                if best is not None:
                    finalists.append(best)
                    logger.debug(
                        f"Round {round_num}: {len(survivors)}/{len(working)} phrases above Td, "
                        f"best {best.phrase.text!r} ({best.score:.4f})"
                    )

                working = cartesian_product([s.phrase for s in survivors], candidates, self.containment)

            winner = local_best(finalists)
            translation = winner.phrase if winner else Phrase.empty(Side.TARGET)
            return translation, list(candidates), finalists

    def translate(self, collocation: Phrase, tf: int, td: float) -> Phrase:
        """Best target phrase for the collocation, empty if no candidate clears Td"""
        translation, _, _ = self.search(collocation, tf, td)
        return translation


def translate_collocation(collocation, index: CorpusIndex, tf=5, td=0.1, config=None,
                          closed_class: Optional[ClosedClassFilter] = None,
                          containment=None) -> TranslationResult:
    """
    Translate one collocation against a ready corpus index.

    Args:
        collocation: Source-language words separated by spaces
        index: CorpusIndex over the aligned corpus
        tf: Frequency threshold (>= 1)
        td: Dice threshold, strictly between 0 and 1
        config: Optional AppConfig for closed-class, worker and timeout settings
        closed_class: Overrides the closed-class filter from config
        containment: Overrides the word-containment mode from config

    Returns:
        TranslationResult; translation is '' when nothing clears the thresholds
    """
    if containment is None:
        containment = config.translation_defaults.containment if config else 'substring'
    request = TranslationRequest(collocation=collocation, tf=tf, td=td, containment=containment).validate()

    if closed_class is None:
        closed_class = (ClosedClassFilter.from_config(config.closed_class) if config
                        else ClosedClassFilter.for_language('de'))
    max_workers = config.performance.max_workers if config else 1
    timeout_seconds = config.performance.search_timeout_seconds if config else 0

    start_time = time.time()
    phrase = Phrase.from_text(request.collocation, Side.SOURCE)
    source_count = index.count_containing(phrase)
    logger.debug(f"Finding translation for \"{phrase}\".  Found {source_count} times in source corpus.")

    search = TranslationSearch(index, closed_class, containment=request.containment,
                               max_workers=max_workers, timeout_seconds=timeout_seconds)
    translation, candidates, finalists = search.search(phrase, request.tf, request.td)

    if translation.is_empty:
        logger.info(f"No translation found for \"{phrase}\" (Tf={request.tf}, Td={request.td})")

    return TranslationResult(
        collocation=phrase.text,
        translation=translation.text,
        source_count=source_count,
        candidates=[c.text for c in candidates],
        finalists=finalists,
        elapsed=time.time() - start_time
    )
