"""Database models for dictionaries, words, sets and daily progress."""
import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import relationship

from lexitrack.models.base import Base
from lexitrack.models.records import (
    DailyActivityRecord,
    LanguageCode,
    Level,
    PartOfSpeech,
    VocabularyItem,
)


def new_guid() -> str:
    return str(uuid.uuid4())


class TimestampMixin:
    """Mixin for adding created_at and updated_at timestamps."""

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )


class ProgressMixin:
    """Review progress columns of a word."""

    last_review_date = Column(DateTime(timezone=True), nullable=True)
    review_count = Column(Integer, default=0, nullable=False)
    rate = Column(Integer, default=0, nullable=False)  # 0-5


set_words = Table(
    "set_words",
    Base.metadata,
    Column("set_id", Integer, ForeignKey("sets.id", ondelete="CASCADE"), primary_key=True),
    Column("word_id", Integer, ForeignKey("words.id", ondelete="CASCADE"), primary_key=True),
)


class Dictionary(Base, TimestampMixin):
    """Dictionary model."""

    __tablename__ = "dictionaries"

    id = Column(Integer, primary_key=True)
    guid = Column(String, unique=True, nullable=False, default=new_guid)
    title = Column(String, nullable=False)

    # Relationships
    words = relationship("Word", back_populates="dictionary", cascade="all, delete-orphan")


class Word(Base, TimestampMixin, ProgressMixin):
    """Word model."""

    __tablename__ = "words"

    id = Column(Integer, primary_key=True)
    guid = Column(String, unique=True, nullable=False, default=new_guid)
    word = Column(String, nullable=False, index=True)
    transcription = Column(String)
    translation = Column(String)
    explanation = Column(Text)
    definition = Column(Text)
    part_of_speech = Column(String, nullable=False, default=PartOfSpeech.NOUN.value)
    language = Column(String, nullable=False, default=LanguageCode.EN_US.value)
    level = Column(String, nullable=False, default=Level.A1.value)
    is_irregular = Column(Boolean, default=False, nullable=False)
    dictionary_id = Column(Integer, ForeignKey("dictionaries.id"), nullable=False)

    # Relationships
    dictionary = relationship("Dictionary", back_populates="words")
    examples = relationship("Example", back_populates="word", cascade="all, delete-orphan")
    sets = relationship("WordSet", secondary=set_words, back_populates="words")

    def to_record(self) -> VocabularyItem:
        """Snapshot of the row for the pure computations."""
        return VocabularyItem(
            id=self.id,
            guid=self.guid,
            word=self.word,
            part_of_speech=PartOfSpeech(self.part_of_speech),
            level=Level(self.level),
            language=LanguageCode(self.language),
            transcription=self.transcription,
            translation=self.translation,
            explanation=self.explanation,
            definition=self.definition,
            is_irregular=bool(self.is_irregular),
            dictionary_id=self.dictionary_id,
            review_count=self.review_count or 0,
            rate=self.rate or 0,
            last_review_date=self.last_review_date,
            created_at=self.created_at,
        )


class Example(Base, TimestampMixin):
    """Example sentence model; the word is marked with ``**`` in the sentence."""

    __tablename__ = "examples"

    id = Column(Integer, primary_key=True)
    guid = Column(String, unique=True, nullable=False, default=new_guid)
    word_id = Column(Integer, ForeignKey("words.id"), nullable=False)
    sentence = Column(String, nullable=False)
    translation = Column(String, nullable=True)

    # Relationships
    word = relationship("Word", back_populates="examples")


class WordSet(Base, TimestampMixin):
    """User-defined set of words picked from any dictionary."""

    __tablename__ = "sets"

    id = Column(Integer, primary_key=True)
    guid = Column(String, unique=True, nullable=False, default=new_guid)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)

    # Relationships
    words = relationship("Word", secondary=set_words, back_populates="sets")


class DailyProgress(Base, TimestampMixin):
    """Learning activity for one calendar day."""

    __tablename__ = "daily_progress"

    id = Column(Integer, primary_key=True)
    date = Column(Date, unique=True, nullable=False, index=True)
    words_studied = Column(Integer, default=0, nullable=False)
    tests_completed = Column(Integer, default=0, nullable=False)
    time_spent = Column(Integer, default=0, nullable=False)  # in minutes
    accuracy = Column(Float, default=0.0, nullable=False)  # percentage

    def to_record(self) -> DailyActivityRecord:
        return DailyActivityRecord(
            date=self.date,
            words_studied=self.words_studied or 0,
            tests_completed=self.tests_completed or 0,
            time_spent=self.time_spent or 0,
            accuracy=self.accuracy or 0.0,
        )
