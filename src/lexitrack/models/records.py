"""Plain record types shared by the sorting, statistics and selection code.

Records are frozen snapshots. Everything that computes on them returns new
values and leaves its arguments untouched.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional


class Level(Enum):
    """CEFR-style proficiency level, ordered from A1 to C2."""
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"

    @property
    def rank(self) -> int:
        """Position of the level on the A1..C2 scale, starting at 0."""
        return LEVEL_ORDER.index(self)


LEVEL_ORDER = tuple(Level)


class PartOfSpeech(Enum):
    """Closed set of word categories."""
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PREPOSITION = "preposition"
    PHRASE = "phrase"
    PHRASAL_VERB = "phrasal_verb"
    IDIOM = "idiom"
    PRONOUN = "pronoun"
    CONJUNCTION = "conjunction"
    INTERJECTION = "interjection"
    SLANG = "slang"
    ABBREVIATION = "abbreviation"
    FIXED_EXPRESSION = "fixed_expression"


class LanguageCode(Enum):
    """Supported word languages."""
    EN_US = "en-us"
    EN_GB = "en-gb"
    UK_UA = "uk-ua"


@dataclass(frozen=True)
class VocabularyItem:
    """A word together with its review progress.

    Attributes:
        id: Stable integer identity.
        guid: Globally unique string identity.
        word: Headword text.
        part_of_speech: Word category.
        level: Proficiency level.
        language: Language of the headword.
        review_count: Number of reviews so far, 0 for a new word.
        rate: Mastery score from 0 (not mastered) to 5 (mastered).
        last_review_date: Time of the last review, None if never reviewed.
    """

    id: int
    guid: str
    word: str
    part_of_speech: PartOfSpeech = PartOfSpeech.NOUN
    level: Level = Level.A1
    language: LanguageCode = LanguageCode.EN_US
    transcription: Optional[str] = None
    translation: Optional[str] = None
    explanation: Optional[str] = None
    definition: Optional[str] = None
    is_irregular: bool = False
    dictionary_id: Optional[int] = None
    review_count: int = 0
    rate: int = 0
    last_review_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_reviewed(self) -> bool:
        """True once the word has been reviewed at least once."""
        return self.review_count > 0 and self.last_review_date is not None


@dataclass(frozen=True)
class DailyActivityRecord:
    """Learning activity for one calendar day."""

    date: date
    words_studied: int = 0
    tests_completed: int = 0
    time_spent: int = 0  # in minutes
    accuracy: float = 0.0  # percentage

    @property
    def is_active(self) -> bool:
        return self.words_studied > 0 or self.tests_completed > 0


@dataclass(frozen=True)
class WeeklyProgress:
    """Per-day averages over a set of activity records."""

    words_per_day: int = 0
    tests_per_day: int = 0
    time_per_day: int = 0
    average_accuracy: float = 0.0


@dataclass(frozen=True)
class LearningSummary:
    """Overall statistics for a word collection and its activity history."""

    total_words: int
    learned_words: int
    current_streak: int
    longest_streak: int
    total_time_spent: int
    average_accuracy: float
    average_rate: float
    level_distribution: Dict[Level, int] = field(default_factory=dict)
    part_of_speech_distribution: Dict[PartOfSpeech, int] = field(default_factory=dict)
