"""Shared fixtures: toy aligned corpora and indexes built over them."""

import pytest

from champollion.base import CorpusIndex, IndexUnavailable
from champollion.closed_class import ClosedClassFilter
from champollion.inverted_index import MemoryCorpusIndex, SqliteCorpusIndex, build_index

MEMBER_STATES_SOURCE = ["member states", "member states support"]
MEMBER_STATES_TARGET = ["mitgliedstaaten", "mitgliedstaaten unterstützen"]

HUMAN_RIGHTS_SOURCE = [
    "human rights matter",
    "human rights now",
    "human beings",
    "civil rights",
]
HUMAN_RIGHTS_TARGET = [
    "menschen rechte zählen",
    "menschen rechte jetzt",
    "menschen wesen",
    "bürger rechte",
]

CLOSED_CLASS_SOURCE = ["the house", "the house ."]
CLOSED_CLASS_TARGET = ["der die", "die der ."]


class FailingIndex(CorpusIndex):
    """Index double whose every query fails like a corrupted database."""

    def ids_containing(self, phrase):
        raise IndexUnavailable("disk I/O error")

    def text_of(self, snum, side):
        raise IndexUnavailable("disk I/O error")

    def sentence_count(self, side):
        raise IndexUnavailable("disk I/O error")


@pytest.fixture
def member_states_index():
    return MemoryCorpusIndex(MEMBER_STATES_SOURCE, MEMBER_STATES_TARGET)


@pytest.fixture
def human_rights_index():
    return MemoryCorpusIndex(HUMAN_RIGHTS_SOURCE, HUMAN_RIGHTS_TARGET)


@pytest.fixture
def closed_class_index():
    return MemoryCorpusIndex(CLOSED_CLASS_SOURCE, CLOSED_CLASS_TARGET)


@pytest.fixture
def failing_index():
    return FailingIndex()


@pytest.fixture
def german_filter():
    return ClosedClassFilter.for_language('de')


@pytest.fixture
def corpus_files(tmp_path):
    """Write the human-rights corpus to disk as two aligned files."""
    source = tmp_path / "corpus.en"
    target = tmp_path / "corpus.de"
    source.write_text("\n".join(HUMAN_RIGHTS_SOURCE) + "\n", encoding="utf-8")
    target.write_text("\n".join(HUMAN_RIGHTS_TARGET) + "\n", encoding="utf-8")
    return str(source), str(target)


@pytest.fixture
def sqlite_index(tmp_path, corpus_files):
    index_dir = str(tmp_path / "index")
    build_index(corpus_files[0], corpus_files[1], index_dir)
    index = SqliteCorpusIndex(index_dir)
    yield index
    index.close()


CHAMPOLLION_ENV_VARS = [
    "CHAMPOLLION_TF", "CHAMPOLLION_TD", "CHAMPOLLION_CONTAINMENT", "CHAMPOLLION_LANGUAGE",
    "CHAMPOLLION_CLOSED_CLASS_FILE", "CHAMPOLLION_INDEX_DIR", "CHAMPOLLION_SOURCE",
    "CHAMPOLLION_TARGET", "CHAMPOLLION_MAX_WORKERS", "CHAMPOLLION_CACHE_SIZE", "CHAMPOLLION_TIMEOUT",
    "DEBUG",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of configuration tests."""
    for name in CHAMPOLLION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
