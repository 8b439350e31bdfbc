"""
Pydantic models for vocabulary content.

Words are owned by the external content store and are read-only here.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SourceTag(str, Enum):
    """Where a word entered the vocabulary."""
    CURATED = "curated"     # Vocabulary table
    STORY = "story"         # Highlighted in a story paragraph
    COURSE = "course"       # Topic vocabulary of a course level


def normalize_key(term: str) -> str:
    """Natural key for a term: trimmed, case-insensitive."""
    return term.strip().casefold()


class Word(BaseModel):
    """
    A single vocabulary entry.

    Identity is the source-language term, compared case-insensitively.
    """
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    term: str = Field(..., min_length=1, description="Source-language term")
    translation: str = Field(..., description="Translation shown as the answer")
    pronunciation: Optional[str] = Field(default=None, description="Pronunciation guide")
    source_tag: SourceTag = Field(default=SourceTag.CURATED)

    @property
    def key(self) -> str:
        return normalize_key(self.term)


class Sentence(BaseModel):
    """A short sentence used for sentence-building drills."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Source-language sentence")
    english: str = Field(..., description="Translation")

    @property
    def words(self) -> list[str]:
        return self.text.split()
