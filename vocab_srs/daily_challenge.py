"""
Daily challenge builder.

Every learner sees the same challenge on a given calendar date: all
shuffling and distractor picks use a random source seeded with the date.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Optional, Sequence

from vocab_srs.content_repo import dedupe_words
from vocab_srs.distractors import build_options
from vocab_srs.random_source import for_day, randbelow, shuffled
from vocab_srs.schemas import Sentence, Word

MIN_VOCABULARY = 10
EXERCISE_POOL_SIZE = 19   # Words after the word of the day
OPTION_COUNT = 3

ExerciseType = Literal["mc", "fill", "listen-pick"]


@dataclass(frozen=True)
class DailyExercise:
    type: ExerciseType
    word: Word
    correct_answer: str
    options: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SentenceBuild:
    english: str
    words: list[str]
    scrambled: list[str]


@dataclass(frozen=True)
class DailyChallenge:
    day: date
    word_of_day: Word
    exercises: list[DailyExercise]
    sentence_build: SentenceBuild

    @property
    def completion_key(self) -> str:
        """Topic id under which completion of this challenge is stored."""
        return f"daily-{self.day.isoformat()}"


def build_daily_challenge(
    vocabulary: Sequence[Word],
    sentences: Sequence[Sentence],
    day: date
) -> Optional[DailyChallenge]:
    """
    Build the challenge for ``day``.

    Returns None when there is too little content (fewer than ten words or
    no sentences).
    """
    vocabulary = dedupe_words(vocabulary)
    if len(vocabulary) < MIN_VOCABULARY or not sentences:
        return None

    rng = for_day(day)
    ordered = shuffled(vocabulary, rng)
    word_of_day = ordered[0]
    exercise_words = ordered[1:1 + EXERCISE_POOL_SIZE]

    mc_word, fill_word, listen_word, translate_word = exercise_words[:4]
    others = exercise_words[4:]

    exercises = [
        DailyExercise(
            type="mc",
            word=mc_word,
            correct_answer=mc_word.translation,
            options=build_options(mc_word, others, OPTION_COUNT, rng),
        ),
        DailyExercise(type="fill", word=fill_word, correct_answer=fill_word.term),
        DailyExercise(
            type="listen-pick",
            word=listen_word,
            correct_answer=listen_word.translation,
            options=build_options(listen_word, others, OPTION_COUNT, rng),
        ),
        DailyExercise(type="fill", word=translate_word, correct_answer=translate_word.term),
    ]

    sentence = sentences[randbelow(rng, len(sentences))]
    sentence_build = SentenceBuild(
        english=sentence.english,
        words=sentence.words,
        scrambled=shuffled(sentence.words, rng),
    )

    return DailyChallenge(
        day=day,
        word_of_day=word_of_day,
        exercises=exercises,
        sentence_build=sentence_build,
    )
