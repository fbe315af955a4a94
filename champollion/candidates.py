"""
Champollion - Candidate Generator

Step 1 of the translation search: proposes single target words that may
belong to the translation of a source collocation.

Algorithm:
    1. Collect the target sentences aligned to every source sentence that
       contains the collocation.
    2. Count the words of those sentences and sort the histogram by
       descending count. Bare punctuation tokens are dropped and each other
       token is reduced to its index terms ("Staaten," becomes "staaten").
       The count of a word is therefore at least the number of aligned
       sentences containing it.
    3. Walk the histogram from the top. A word is a candidate when its
       count exceeds Tf, it is not a closed-class word, and its Dice score
       against the collocation exceeds Td.

Early Termination:
    A word counted f times can score at most
    2f / (|S(collocation)| + f), which shrinks as f shrinks. The walk stops
    at the first word whose count is at or below Tf or whose bound is at or
    below Td: every later word would fail the same test, so the result
    equals scoring the whole histogram.
"""
from typing import List, Optional

from champollion.base import CorpusIndex, Phrase, Side, WordFrequency
from champollion.closed_class import ClosedClassFilter
from champollion.logging_config import get_logger
from champollion.scorer import DiceScorer
from champollion.text_processor import TextProcessor

logger = get_logger('candidates')


def dice_upper_bound(freq: int, collocation_freq: int) -> float:
    """Highest Dice score a word seen freq times can reach against the collocation"""
    if collocation_freq + freq == 0:
        return 0.0
    return 2.0 * freq / (collocation_freq + freq)


class CandidateGenerator:
    """Proposes single-word target candidates from co-occurrence statistics"""

    def __init__(
        self,
        index: CorpusIndex,
        closed_class: ClosedClassFilter,
        scorer: Optional[DiceScorer] = None,
        text_processor: Optional[TextProcessor] = None
    ):
        self.index = index
        self.closed_class = closed_class
        self.scorer = scorer or DiceScorer(index)
        self.text_processor = text_processor or TextProcessor()

    def related_words_by_frequency(self, collocation: Phrase) -> List[WordFrequency]:
        """
        Words of the target sentences aligned with the collocation's source
        sentences, in descending order of count. Equal counts keep the order
        in which the words were first seen.
        """
        snums = self.index.ids_containing(collocation)
        sentences = [self.index.text_of(snum, Side.TARGET) for snum in snums]
        counts = self.text_processor.count_words(sentences)
        return [WordFrequency(word, freq) for word, freq in counts.most_common()]

    def candidates(self, collocation: Phrase, tf: int, td: float) -> List[Phrase]:
        """
        Single-word target candidates for a source collocation.

        Args:
            collocation: Source phrase to translate
            tf: Frequency threshold; a word must be counted more than tf times
            td: Dice threshold; a word must score more than td

        Returns:
            Candidate target phrases (one word each), most frequent first
        """
        collocation_freq = self.index.count_containing(collocation)
        if collocation_freq == 0:
            logger.info(f"'{collocation}' does not occur in the source corpus")
            return []

        related = self.related_words_by_frequency(collocation)

        visited = []
        for wf in related:
            if wf.freq <= tf:
                break
            dice_ub = dice_upper_bound(wf.freq, collocation_freq)
            if dice_ub <= td:
                break
            if self.closed_class.is_closed_class(wf.word):
                continue
            visited.append(Phrase((wf.word,), Side.TARGET))

        scores = self.scorer.dice_many(collocation, visited)

        result = []
        for phrase, score in zip(visited, scores):
            if score > td:
                result.append(phrase)
            logger.debug(f"Candidate {phrase.text!r}: dice={score:.4f} {'kept' if score > td else 'dropped'}")

        logger.debug(
            f"Walked {len(visited)} of {len(related)} co-occurring words for '{collocation}', "
            f"kept {len(result)}"
        )
        return result
