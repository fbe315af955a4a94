"""
Champollion - Scorer

Association strength between a source phrase and a target phrase,
measured on a sentence-aligned corpus with the Dice coefficient.

Scoring Formula:
    dice(X, Y) = 2 * |S(X) ∩ T(Y)| / (|S(X)| + |T(Y)|)

    Where:
    - S(X) = source sentences containing every word of X
    - T(Y) = target sentences containing every word of Y
    - the intersection pairs sentence i of the source with sentence i
      of the target

The denominator is the sum of the two independent counts, not the size
of their union. Empty operands and an all-zero denominator score 0.

Reference:
    Smadja, McKeown and Hatzivassiloglou (1996), "Translating
    Collocations for Bilingual Lexicons: A Statistical Approach"
"""
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import List, Sequence

from champollion.base import CorpusIndex, Phrase, Side
from champollion.logging_config import get_logger

logger = get_logger('scorer')


def count_intersections(source_ids: Sequence[int], target_ids: Sequence[int]) -> int:
    """Count sentence numbers present in both ascending id sequences (linear merge)"""
    count = 0
    i = j = 0
    while i < len(source_ids) and j < len(target_ids):
        if source_ids[i] == target_ids[j]:
            count += 1
            i += 1
            j += 1
        elif source_ids[i] > target_ids[j]:
            j += 1
        else:
            i += 1
    return count


class DiceScorer:
    """Dice association scorer backed by a CorpusIndex"""

    def __init__(self, index: CorpusIndex, max_workers: int = 1):
        self.index = index
        self.max_workers = max_workers
        self._executor = None

    @contextmanager
    def pool(self):
        """
        Share one worker pool across every dice_many call inside the block.

        The pool is shut down on exit, so its threads end and release the
        per-thread index connections they opened. Nested blocks reuse the
        outer pool.
        """
        if self.max_workers <= 1 or self._executor is not None:
            yield self
            return
        self._executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            yield self
        finally:
            executor, self._executor = self._executor, None
            executor.shutdown(wait=True)

    def dice(self, source: Phrase, target: Phrase) -> float:
        """
        Dice score between a source phrase and a target phrase.

        Args:
            source: Phrase counted in the source corpus
            target: Phrase counted in the target corpus

        Returns:
            Score in [0, 1]; 0 if either phrase is empty or neither occurs
        """
        if source.is_empty or target.is_empty:
            return 0.0
        if source.side is not Side.SOURCE or target.side is not Side.TARGET:
            raise ValueError("dice() takes a source phrase and a target phrase")

        source_ids = self.index.ids_containing(source)
        target_ids = self.index.ids_containing(target)

        denominator = len(source_ids) + len(target_ids)
        if denominator == 0:
            return 0.0

        return 2.0 * count_intersections(source_ids, target_ids) / denominator

    def dice_many(self, source: Phrase, targets: Sequence[Phrase]) -> List[float]:
        """Score many target phrases against one source phrase, in input order"""
        if self.max_workers <= 1 or len(targets) < 2:
            return [self.dice(source, target) for target in targets]

        with self.pool():
            return list(self._executor.map(lambda target: self.dice(source, target), targets))
