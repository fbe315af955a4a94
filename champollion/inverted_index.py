"""
Champollion - Inverted Index

Sentence-level inverted index over a line-aligned bilingual corpus.
Answers "which sentences on this side contain all of these words" and
"what is the text of sentence N" for the translation search.

Structure:
    term → [snum, ...]   (one posting per sentence containing the term)
    snum → sentence text

Index Files:
    - <index_dir>/source_index.db: source-language corpus
    - <index_dir>/target_index.db: target-language corpus

Sentence numbers are 1-based line numbers, continuous across the files of
a corpus directory, so that source sentence N is aligned to target
sentence N.

Usage:
    from champollion.inverted_index import build_index, SqliteCorpusIndex

    build_index('europarl.en', 'europarl.de', 'data/index')
    index = SqliteCorpusIndex('data/index')
    index.count_containing(Phrase.from_text('member states', Side.SOURCE))
"""
import os
import sqlite3
import threading
import time
from collections import defaultdict
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from champollion.base import CorpusIndex, IndexUnavailable, InvalidConfiguration, Phrase, Side
from champollion.logging_config import get_logger
from champollion.text_processor import TextProcessor

logger = get_logger('inverted_index')


def get_index_path(index_dir, side):
    """Path of the SQLite database holding one side of the corpus"""
    return os.path.join(index_dir, f'{side.value}_index.db')

def is_index_available(index_dir):
    """Check if both sides of the index have been built"""
    return all(os.path.exists(get_index_path(index_dir, side)) for side in Side)


# =============================================================================
# INDEX BUILDING
# =============================================================================

def load_aligned_corpora(source_path, target_path, text_processor=None):
    """
    Read both corpora and check that they are line-aligned.

    Returns:
        Tuple of (source_files, target_files), each a list of
        (filename, sentences) pairs
    """
    text_processor = text_processor or TextProcessor()
    corpora = []
    for path in (source_path, target_path):
        try:
            corpora.append(text_processor.process_corpus(path))
        except FileNotFoundError as e:
            raise InvalidConfiguration(str(e)) from e
    source_files, target_files = corpora

    source_total = sum(len(lines) for _, lines in source_files)
    target_total = sum(len(lines) for _, lines in target_files)
    if source_total != target_total:
        raise InvalidConfiguration(
            f"Corpora are not line-aligned: source has {source_total} sentences, "
            f"target has {target_total}"
        )
    return source_files, target_files

def _write_side(db_path, files, text_processor):
    """Write one side of the corpus to a fresh SQLite database"""
    tmp_path = db_path + '.tmp'
    if os.path.exists(tmp_path):
        os.remove(tmp_path)

    conn = sqlite3.connect(tmp_path)
    try:
        cursor = conn.cursor()
        cursor.execute('''
            CREATE TABLE files (
                file_id INTEGER PRIMARY KEY,
                filename TEXT,
                first_snum INTEGER,
                line_count INTEGER
            )
        ''')
        cursor.execute('''
            CREATE TABLE sentences (
                snum INTEGER PRIMARY KEY,
                content TEXT
            )
        ''')
        cursor.execute('''
            CREATE TABLE postings (
                term TEXT,
                snum INTEGER,
                FOREIGN KEY (snum) REFERENCES sentences(snum)
            )
        ''')

        snum = 0
        total_postings = 0
        for filename, lines in files:
            cursor.execute(
                'INSERT INTO files (filename, first_snum, line_count) VALUES (?, ?, ?)',
                (filename, snum + 1, len(lines))
            )
            for line in lines:
                snum += 1
                cursor.execute('INSERT INTO sentences (snum, content) VALUES (?, ?)', (snum, line))
                terms = text_processor.analyze_unique(line)
                cursor.executemany(
                    'INSERT INTO postings (term, snum) VALUES (?, ?)',
                    [(term, snum) for term in terms]
                )
                total_postings += len(terms)
            logger.info(f"Indexed {len(lines)} sentences from {filename}")

        cursor.execute('CREATE INDEX idx_term ON postings(term, snum)')
        conn.commit()
    finally:
        conn.close()

    os.replace(tmp_path, db_path)
    return snum, total_postings

def build_index(source_path, target_path, index_dir, text_processor=None):
    """
    (Re)build the source and target sentence indexes.

    Args:
        source_path: Source corpus file or directory
        target_path: Target corpus file or directory
        index_dir: Directory receiving source_index.db and target_index.db
        text_processor: Analyzer shared with query time

    Returns:
        Dict with per-side sentence and posting counts
    """
    text_processor = text_processor or TextProcessor()
    start = time.time()
    source_files, target_files = load_aligned_corpora(source_path, target_path, text_processor)

    os.makedirs(index_dir, exist_ok=True)
    stats = {}
    for side, files in ((Side.SOURCE, source_files), (Side.TARGET, target_files)):
        db_path = get_index_path(index_dir, side)
        try:
            sentences, postings = _write_side(db_path, files, text_processor)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to write {side.value} index at {db_path}: {e}")
            raise IndexUnavailable(f"Could not build {side.value} index: {e}") from e
        stats[side.value] = {'sentences': sentences, 'postings': postings, 'path': db_path}

    elapsed_ms = int((time.time() - start) * 1000)
    logger.info(
        f"Built index in {elapsed_ms} ms: {stats['source']['sentences']} aligned sentences, "
        f"{stats['source']['postings']} source / {stats['target']['postings']} target postings"
    )
    return stats


# =============================================================================
# QUERYING
# =============================================================================

class SqliteCorpusIndex(CorpusIndex):
    """
    Query side of the on-disk index.

    Connections are opened read-only, one per thread, so independent
    translations and batched Dice scoring can share an instance.
    """

    def __init__(self, index_dir: str, max_cache_size: int = 10000,
                 text_processor: Optional[TextProcessor] = None):
        self.index_dir = index_dir
        self.text_processor = text_processor or TextProcessor()
        self._local = threading.local()
        for side in Side:
            db_path = get_index_path(index_dir, side)
            if not os.path.exists(db_path):
                logger.error(f"Index file missing: {db_path}")
                raise IndexUnavailable(f"No {side.value} index at {db_path}; build the index first")
        self._cached_ids = lru_cache(maxsize=max_cache_size)(self._query_ids)

    def _connection(self, side: Side) -> sqlite3.Connection:
        connections = getattr(self._local, 'connections', None)
        if connections is None:
            connections = self._local.connections = {}
        if side not in connections:
            db_path = get_index_path(self.index_dir, side)
            try:
                connections[side] = sqlite3.connect(f'file:{db_path}?mode=ro', uri=True)
            except sqlite3.Error as e:
                logger.error(f"Failed to open {side.value} index: {e}")
                raise IndexUnavailable(f"Could not open {side.value} index: {e}") from e
        return connections[side]

    def _query_ids(self, side: Side, terms: Tuple[str, ...]) -> Tuple[int, ...]:
        placeholders = ','.join(['?' for _ in terms])
        query = f'''
            SELECT snum FROM postings
            WHERE term IN ({placeholders})
            GROUP BY snum
            HAVING COUNT(DISTINCT term) = ?
            ORDER BY snum
        '''
        try:
            cursor = self._connection(side).execute(query, list(terms) + [len(terms)])
            return tuple(row[0] for row in cursor.fetchall())
        except sqlite3.Error as e:
            logger.error(f"Index lookup error on {side.value} side for {terms}: {e}")
            raise IndexUnavailable(f"{side.value} index query failed: {e}") from e

    def ids_containing(self, phrase: Phrase) -> List[int]:
        terms = tuple(sorted(set(self.text_processor.analyze(phrase.text))))
        if not terms:
            return []
        return list(self._cached_ids(phrase.side, terms))

    def text_of(self, snum: int, side: Side) -> str:
        try:
            row = self._connection(side).execute(
                'SELECT content FROM sentences WHERE snum = ?', (snum,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Sentence lookup error for {side.value} #{snum}: {e}")
            raise IndexUnavailable(f"{side.value} index query failed: {e}") from e
        if row is None:
            raise IndexUnavailable(f"Sentence {snum} missing from {side.value} index")
        return row[0]

    def sentence_count(self, side: Side) -> int:
        try:
            return self._connection(side).execute('SELECT COUNT(*) FROM sentences').fetchone()[0]
        except sqlite3.Error as e:
            raise IndexUnavailable(f"{side.value} index query failed: {e}") from e

    def get_index_stats(self, side: Side) -> Dict[str, object]:
        """Get statistics about one side of the index"""
        conn = self._connection(side)
        try:
            files = conn.execute('SELECT COUNT(*) FROM files').fetchone()[0]
            sentences = conn.execute('SELECT COUNT(*) FROM sentences').fetchone()[0]
            terms = conn.execute('SELECT COUNT(DISTINCT term) FROM postings').fetchone()[0]
            postings = conn.execute('SELECT COUNT(*) FROM postings').fetchone()[0]
        except sqlite3.Error as e:
            raise IndexUnavailable(f"{side.value} index query failed: {e}") from e

        size_mb = os.path.getsize(get_index_path(self.index_dir, side)) / (1024 * 1024)
        return {
            'files': files,
            'sentences': sentences,
            'unique_terms': terms,
            'total_postings': postings,
            'size_mb': round(size_mb, 1)
        }

    def close(self):
        """Close this thread's connections"""
        for conn in getattr(self._local, 'connections', {}).values():
            conn.close()
        self._local.connections = {}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class MemoryCorpusIndex(CorpusIndex):
    """In-memory index over two lists of aligned sentences"""

    def __init__(self, source_lines: Sequence[str], target_lines: Sequence[str],
                 text_processor: Optional[TextProcessor] = None):
        if len(source_lines) != len(target_lines):
            raise InvalidConfiguration(
                f"Corpora are not line-aligned: source has {len(source_lines)} sentences, "
                f"target has {len(target_lines)}"
            )
        self.text_processor = text_processor or TextProcessor()
        self._sentences = {Side.SOURCE: list(source_lines), Side.TARGET: list(target_lines)}
        self._postings = {side: self._build_postings(lines) for side, lines in self._sentences.items()}

    @classmethod
    def from_files(cls, source_path, target_path, text_processor=None):
        """Load both corpora (files or directories) into memory"""
        source_files, target_files = load_aligned_corpora(source_path, target_path, text_processor)
        return cls(
            [line for _, lines in source_files for line in lines],
            [line for _, lines in target_files for line in lines],
            text_processor
        )

    def _build_postings(self, lines):
        postings = defaultdict(list)
        for snum, line in enumerate(lines, 1):
            for term in self.text_processor.analyze_unique(line):
                postings[term].append(snum)
        return dict(postings)

    def ids_containing(self, phrase: Phrase) -> List[int]:
        terms = set(self.text_processor.analyze(phrase.text))
        if not terms:
            return []
        postings = self._postings[phrase.side]
        matching = None
        for term in terms:
            snums = set(postings.get(term, ()))
            matching = snums if matching is None else matching & snums
            if not matching:
                return []
        return sorted(matching)

    def text_of(self, snum: int, side: Side) -> str:
        if not 1 <= snum <= len(self._sentences[side]):
            raise IndexUnavailable(f"Sentence {snum} missing from {side.value} index")
        return self._sentences[side][snum - 1]

    def sentence_count(self, side: Side) -> int:
        return len(self._sentences[side])
