"""
Read-only vocabulary content.

Vocabulary comes from an ordered list of providers. Each provider returns a
possibly-empty list of Words; the first non-empty result wins. A missing or
empty table is just an empty result, never an exception the caller has to
interpret.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol, Sequence

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from vocab_srs import config
from vocab_srs.schemas import Sentence, SourceTag, Word

logger = logging.getLogger(__name__)

# Collection names in the content database
VOCABULARY_COLLECTION = "vocabulary"
STORY_PARAGRAPHS_COLLECTION = "story_paragraphs"
DIALOGUES_COLLECTION = "dialogues"

# Global connection pool (reused across requests)
_client: Optional[MongoClient] = None


# ---- Connection Management ----

def get_client() -> MongoClient:
    """
    Shared MongoClient, created on first use.
    """
    global _client

    if _client is not None:
        return _client

    _client = MongoClient(
        config.get_mongo_uri(),
        maxPoolSize=10,  # Connection pool size
        minPoolSize=1,   # Keep at least 1 connection alive
        maxIdleTimeMS=60000  # Keep connections alive for 60 seconds
    )
    return _client


def get_collection(name: str) -> Collection:
    return get_client()[config.get_content_db_name()][name]


# ---- Providers ----

class ContentProvider(Protocol):
    """A source of vocabulary. May return an empty list."""

    name: str

    def fetch_words(self) -> list[Word]:
        ...


class StaticVocabularyProvider:
    """
    Vocabulary held in memory (course topic word lists, fixtures).
    """

    def __init__(self, words: Iterable[Word], name: str = "static"):
        self.name = name
        self._words = list(words)

    def fetch_words(self) -> list[Word]:
        return list(self._words)


class MongoVocabularyProvider:
    """
    Curated vocabulary documents: {term, translation, pronunciation}.
    """

    name = "vocabulary"

    def __init__(self, collection: Optional[Collection] = None):
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = get_collection(VOCABULARY_COLLECTION)
        return self._collection

    def fetch_words(self) -> list[Word]:
        try:
            docs = list(self.collection.find(
                {}, {"_id": 0, "term": 1, "translation": 1, "pronunciation": 1}
            ))
        except PyMongoError as exc:
            logger.warning("Vocabulary collection unavailable: %s", exc)
            return []

        words = []
        for doc in docs:
            term = (doc.get("term") or "").strip()
            translation = (doc.get("translation") or "").strip()
            if not term or not translation:
                continue
            words.append(Word(
                term=term,
                translation=translation,
                pronunciation=doc.get("pronunciation") or None,
                source_tag=SourceTag.CURATED,
            ))
        return words


class MongoStoryVocabularyProvider:
    """
    Words highlighted in story paragraphs: {highlight_words: [{word, translation}]}.
    """

    name = "story"

    def __init__(self, collection: Optional[Collection] = None):
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = get_collection(STORY_PARAGRAPHS_COLLECTION)
        return self._collection

    def fetch_words(self) -> list[Word]:
        try:
            docs = list(self.collection.find({}, {"_id": 0, "highlight_words": 1}))
        except PyMongoError as exc:
            logger.warning("Story paragraphs unavailable: %s", exc)
            return []

        words = []
        for doc in docs:
            for item in doc.get("highlight_words") or []:
                term = (item.get("word") or "").strip()
                translation = (item.get("translation") or "").strip()
                if term and translation:
                    words.append(Word(term=term, translation=translation, source_tag=SourceTag.STORY))
        return dedupe_words(words)


def dedupe_words(words: Iterable[Word]) -> list[Word]:
    """Keep the first Word for each natural key."""
    seen: set[str] = set()
    unique = []
    for word in words:
        if word.key in seen:
            continue
        seen.add(word.key)
        unique.append(word)
    return unique


def first_available(providers: Sequence[ContentProvider]) -> list[Word]:
    """
    Consult providers in order and return the first non-empty vocabulary.
    """
    for provider in providers:
        words = provider.fetch_words()
        if words:
            logger.debug("Using %d words from provider %s", len(words), provider.name)
            return dedupe_words(words)
        logger.debug("Provider %s returned no words", provider.name)
    return []


def default_providers(course_words: Iterable[Word] = ()) -> list[ContentProvider]:
    """
    Production order: curated vocabulary, then story vocabulary, then any
    course word lists the caller ships with.
    """
    return [
        MongoVocabularyProvider(),
        MongoStoryVocabularyProvider(),
        StaticVocabularyProvider(course_words, name="course"),
    ]


# ---- Sentences ----

def fetch_sentences(collection: Optional[Collection] = None) -> list[Sentence]:
    """
    Dialogue lines used for sentence-building drills, in sort order.
    """
    collection = collection if collection is not None else get_collection(DIALOGUES_COLLECTION)
    try:
        docs = list(collection.find({}, {"_id": 0, "text": 1, "english": 1}).sort("sort_order", 1))
    except PyMongoError as exc:
        logger.warning("Dialogues unavailable: %s", exc)
        return []

    return [
        Sentence(text=doc["text"].strip(), english=doc["english"].strip())
        for doc in docs
        if (doc.get("text") or "").strip() and (doc.get("english") or "").strip()
    ]
