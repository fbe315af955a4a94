"""
Champollion - Text Processor

Tokenization and corpus reading shared by index building and the
candidate search.

Key Responsibilities:
    - Corpus reading: one sentence per line, from a file or a directory
    - Index analysis: letter-run tokens, lower-cased, used identically when
      building the index and when querying it
    - Word splitting: whitespace split of aligned target sentences for the
      co-occurrence histogram, each token reduced to its index terms so a
      histogram key is always a term the index can look up
    - Punctuation filtering: bare punctuation tokens never become candidates

Corpus Format:
    Plain UTF-8 text, one sentence per line. Line N of the source corpus
    is the translation of line N of the target corpus.
"""

# =============================================================================
# IMPORTS
# =============================================================================
import os
import re
from collections import Counter
from typing import Iterable, Iterator, List, Tuple


# =============================================================================
# TOKEN PATTERNS
# =============================================================================
# Runs of Unicode letters; digits, underscores and punctuation split tokens
LETTER_RUN = re.compile(r'[^\W\d_]+')

PUNCTUATION_TOKENS = frozenset(['.', '!', '?', ',', ';', ':', '-', '(', ')', '"', '%', '#'])


class TextProcessor:
    """Analyzer and tokenizer for sentence-aligned corpora"""

    def analyze(self, text: str) -> List[str]:
        """Split text into lower-cased index terms"""
        return [token.lower() for token in LETTER_RUN.findall(text)]

    def analyze_unique(self, text: str) -> List[str]:
        """Index terms of a sentence, each once, in first-seen order"""
        return list(dict.fromkeys(self.analyze(text)))

    def split_words(self, sentence: str) -> List[str]:
        """Whitespace tokenization used for co-occurrence counting"""
        return sentence.split()

    def is_punctuation(self, token: str) -> bool:
        return token in PUNCTUATION_TOKENS

    def histogram_terms(self, sentence: str) -> List[str]:
        """
        Terms of one sentence for co-occurrence counting.

        Bare punctuation tokens are dropped and every other token is reduced
        to its index terms: "Staaten," counts as "staaten" and "nord-süd" as
        "nord" and "süd". A term's count is then never below the number of
        indexed sentences holding it, which the candidate walk relies on.
        """
        terms = []
        for token in self.split_words(sentence):
            if not self.is_punctuation(token):
                terms.extend(self.analyze(token))
        return terms

    def count_words(self, sentences: Iterable[str]) -> Counter:
        """Build the term histogram over sentences"""
        counts = Counter()
        for sentence in sentences:
            counts.update(self.histogram_terms(sentence))
        return counts

    # =========================================================================
    # CORPUS READING
    # =========================================================================

    def iter_corpus_files(self, path: str) -> Iterator[str]:
        """Yield readable files under path in sorted order (path itself if it is a file)"""
        if os.path.isdir(path):
            for name in sorted(os.listdir(path)):
                yield from self.iter_corpus_files(os.path.join(path, name))
        elif os.path.isfile(path):
            yield path
        else:
            raise FileNotFoundError(f"Corpus path not found: {path}")

    def read_lines(self, filepath: str) -> List[str]:
        """Read a corpus file as a list of sentences"""
        with open(filepath, 'r', encoding='utf-8') as f:
            return [line.rstrip('\r\n') for line in f]

    def process_corpus(self, path: str) -> List[Tuple[str, List[str]]]:
        """Read every file of a corpus as (filename, sentences) pairs"""
        return [(filepath, self.read_lines(filepath)) for filepath in self.iter_corpus_files(path)]
