"""Service for managing words, sets and learning progress in the database."""
import logging
import random
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lexitrack.config import settings
from lexitrack.errors import ErrorCode, LexitrackError, NotFoundError
from lexitrack.models.models import DailyProgress, Dictionary, Example, Word, WordSet
from lexitrack.models.records import (
    DailyActivityRecord,
    LanguageCode,
    LearningSummary,
    Level,
    PartOfSpeech,
    VocabularyItem,
    WeeklyProgress,
)
from lexitrack.services import progress, statistics
from lexitrack.services.flashcards import QuizCard, build_choice_card, build_fill_blank_card
from lexitrack.services.randomness import random_items
from lexitrack.services.selection import weighted_random_items
from lexitrack.services.sorting import WordQuery, filter_difficult, query_items
from lexitrack.validation import validate_item

logger = logging.getLogger(__name__)


class WordService:
    """Loads snapshots for the pure computations and persists review results."""

    def __init__(self, db: Session):
        """Initialize the service with a database session."""
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while trying to {action}: {e}")
            raise LexitrackError(
                f"Failed to {action}", code=ErrorCode.DATABASE_ERROR, details=str(e)
            ) from e

    def create_dictionary(self, title: str) -> Dictionary:
        """Create a new dictionary."""
        dictionary = Dictionary(title=title)
        self.db.add(dictionary)
        self._commit("create dictionary")
        self.db.refresh(dictionary)
        logger.info(f"Created dictionary {dictionary.id} '{title}'")
        return dictionary

    def get_dictionary(self, dictionary_id: int) -> Optional[Dictionary]:
        """Get a dictionary by its ID."""
        return self.db.query(Dictionary).filter(Dictionary.id == dictionary_id).first()

    def add_word(
        self,
        dictionary_id: int,
        text: str,
        part_of_speech: PartOfSpeech = PartOfSpeech.NOUN,
        level: Level = Level.A1,
        language: LanguageCode = LanguageCode.EN_US,
        **fields,
    ) -> Word:
        """Add a word to a dictionary.

        Extra keyword arguments set optional columns such as ``translation``
        or ``explanation``.

        Raises:
            NotFoundError: for an unknown dictionary.
            ValidationError: for an empty word or out-of-range progress values.
        """
        if not self.get_dictionary(dictionary_id):
            raise NotFoundError(f"Dictionary {dictionary_id} not found")

        word = Word(
            dictionary_id=dictionary_id,
            word=text,
            part_of_speech=PartOfSpeech(part_of_speech).value,
            level=Level(level).value,
            language=LanguageCode(language).value,
            **fields,
        )
        validate_item(word.to_record(), settings.learning.max_rate)
        self.db.add(word)
        self._commit("add word")
        self.db.refresh(word)
        logger.info(f"Added word {word.id} '{text}' to dictionary {dictionary_id}")
        return word

    def get_word(self, word_id: int) -> Optional[Word]:
        """Get a word by its ID."""
        return self.db.query(Word).filter(Word.id == word_id).first()

    def _require_word(self, word_id: int) -> Word:
        word = self.get_word(word_id)
        if not word:
            raise NotFoundError(f"Word {word_id} not found")
        return word

    def create_set(
        self, title: str, description: Optional[str] = None, word_ids: Iterable[int] = ()
    ) -> WordSet:
        """Create a word set, optionally filled with existing words."""
        word_set = WordSet(title=title, description=description)
        for word_id in word_ids:
            word_set.words.append(self._require_word(word_id))
        self.db.add(word_set)
        self._commit("create set")
        self.db.refresh(word_set)
        logger.info(f"Created set {word_set.id} '{title}' with {len(word_set.words)} words")
        return word_set

    def get_set(self, set_id: int) -> Optional[WordSet]:
        """Get a set by its ID."""
        return self.db.query(WordSet).filter(WordSet.id == set_id).first()

    def add_word_to_set(self, set_id: int, word_id: int) -> WordSet:
        """Add a word to a set; adding it twice has no effect."""
        word_set = self.get_set(set_id)
        if not word_set:
            raise NotFoundError(f"Set {set_id} not found")
        word = self._require_word(word_id)
        if word not in word_set.words:
            word_set.words.append(word)
            self._commit("add word to set")
        return word_set

    def get_items(
        self, dictionary_id: Optional[int] = None, set_id: Optional[int] = None
    ) -> List[VocabularyItem]:
        """Snapshot of the words of a dictionary, a set, or all words."""
        if set_id is not None:
            word_set = self.get_set(set_id)
            if not word_set:
                raise NotFoundError(f"Set {set_id} not found")
            words = sorted(word_set.words, key=lambda w: w.id)
            if dictionary_id is not None:
                words = [w for w in words if w.dictionary_id == dictionary_id]
        else:
            query = self.db.query(Word)
            if dictionary_id is not None:
                query = query.filter(Word.dictionary_id == dictionary_id)
            words = query.order_by(Word.id).all()

        return [word.to_record() for word in words]

    def query_words(self, query: WordQuery) -> Tuple[List[VocabularyItem], int]:
        """Search, filter, sort and page words.

        Returns:
            The page of words and the total number of matches.
        """
        return query_items(
            self.get_items(query.dictionary_id), query, settings.learning.query_limit
        )

    def difficult_words(
        self, dictionary_id: Optional[int] = None, set_id: Optional[int] = None
    ) -> List[VocabularyItem]:
        """Reviewed words rated at most DIFFICULT_MAX_RATE."""
        return filter_difficult(
            self.get_items(dictionary_id, set_id), settings.learning.difficult_max_rate
        )

    def add_example(
        self, word_id: int, sentence: str, translation: Optional[str] = None
    ) -> Example:
        """Add an example sentence; mark the word in it as ``**word**``."""
        word = self._require_word(word_id)
        example = Example(word_id=word.id, sentence=sentence, translation=translation)
        self.db.add(example)
        self._commit("add example")
        self.db.refresh(example)
        logger.info(f"Added example {example.id} to word {word_id}")
        return example

    def build_cards(
        self,
        word_id: int,
        distractors: int = 3,
        rng: Optional[random.Random] = None,
    ) -> List[QuizCard]:
        """Quiz cards for a word.

        A single choice card takes its wrong options from translations of other
        words in the same dictionary; every stored example marking the word
        gives a fill in the blank card.
        """
        word = self._require_word(word_id)
        item = word.to_record()

        cards = []
        if item.translation:
            others = (
                self.db.query(Word.translation)
                .filter(
                    Word.dictionary_id == word.dictionary_id,
                    Word.id != word.id,
                    Word.translation.isnot(None),
                )
                .order_by(Word.id)
                .all()
            )
            candidates = list(dict.fromkeys(
                text for (text,) in others if text and text != item.translation
            ))
            cards.append(
                build_choice_card(item, random_items(candidates, distractors, rng), rng)
            )

        examples = sorted(word.examples, key=lambda e: e.id)
        for index, example in enumerate(examples):
            card = build_fill_blank_card(item, example.sentence, example.translation, index)
            if card:
                cards.append(card)
        return cards

    def _store_progress(self, word: Word, item: VocabularyItem, action: str) -> VocabularyItem:
        word.rate = item.rate
        word.review_count = item.review_count
        word.last_review_date = item.last_review_date
        self._commit(action)
        logger.info(
            f"Word {word.id}: rate={item.rate}, review_count={item.review_count}"
        )
        return item

    def update_progress(
        self, word_id: int, correct: bool, now: Optional[datetime] = None
    ) -> VocabularyItem:
        """Record a test answer for a word."""
        word = self._require_word(word_id)
        updated = progress.apply_answer(
            word.to_record(), correct, now, settings.learning.max_rate
        )
        return self._store_progress(word, updated, "update word progress")

    def update_review_stats(
        self, word_id: int, rate: int, now: Optional[datetime] = None
    ) -> VocabularyItem:
        """Record a review with an explicit rate, clamped to the rate scale."""
        word = self._require_word(word_id)
        updated = progress.apply_rating(
            word.to_record(), rate, now, settings.learning.max_rate
        )
        return self._store_progress(word, updated, "update review statistics")

    def reset_progress(self, word_id: int) -> VocabularyItem:
        """Forget all review history of a word."""
        word = self._require_word(word_id)
        updated = progress.reset_progress(word.to_record())
        return self._store_progress(word, updated, "reset word progress")

    def record_activity(
        self,
        day: Optional[date] = None,
        words_studied: int = 0,
        tests_completed: int = 0,
        time_spent: int = 0,
        accuracy: Optional[float] = None,
    ) -> DailyActivityRecord:
        """Add activity to the record of a day, creating it when missing.

        Counts accumulate. Accuracy is averaged, weighted by the number of
        tests behind each value, so an accuracy given with no tests leaves a
        day that already has tests unchanged. On a day without tests it
        replaces the stored accuracy.
        """
        day = day or date.today()
        entry = self.db.query(DailyProgress).filter(DailyProgress.date == day).first()
        if not entry:
            entry = DailyProgress(
                date=day, words_studied=0, tests_completed=0, time_spent=0, accuracy=0.0
            )
            self.db.add(entry)

        if accuracy is not None:
            previous_tests = entry.tests_completed or 0
            total_tests = previous_tests + tests_completed
            if total_tests > 0:
                entry.accuracy = (
                    (entry.accuracy or 0.0) * previous_tests + accuracy * tests_completed
                ) / total_tests
            else:
                entry.accuracy = accuracy

        entry.words_studied = (entry.words_studied or 0) + words_studied
        entry.tests_completed = (entry.tests_completed or 0) + tests_completed
        entry.time_spent = (entry.time_spent or 0) + time_spent
        self._commit("record daily activity")
        logger.info(f"Recorded activity for {day}")
        return entry.to_record()

    def get_daily_progress(
        self, days: Optional[int] = None, today: Optional[date] = None
    ) -> List[DailyActivityRecord]:
        """Activity records, newest first, limited to the last ``days`` days."""
        query = self.db.query(DailyProgress)
        if days is not None:
            since = (today or date.today()) - timedelta(days=days - 1)
            query = query.filter(DailyProgress.date >= since)
        return [entry.to_record() for entry in query.order_by(DailyProgress.date.desc()).all()]

    def practice_words(
        self,
        count: Optional[int] = None,
        dictionary_id: Optional[int] = None,
        set_id: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> List[VocabularyItem]:
        """Pick words for a practice session, favouring words that need practice."""
        count = settings.learning.practice_size if count is None else count
        items = self.get_items(dictionary_id, set_id)
        selected = weighted_random_items(
            items,
            count,
            rng,
            max_rate=settings.learning.max_rate,
            unreviewed_boost=settings.learning.unreviewed_boost,
            weight_floor=settings.learning.weight_floor,
        )
        logger.info(f"Practice session: {len(selected)} of {len(items)} words")
        return selected

    def get_statistics(
        self,
        dictionary_id: Optional[int] = None,
        set_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> LearningSummary:
        """Learning summary for a word collection and the full activity history."""
        return statistics.summarize(
            self.get_items(dictionary_id, set_id),
            self.get_daily_progress(),
            today=today,
            learned_min_rate=settings.learning.learned_min_rate,
        )

    def get_weekly_progress(self, today: Optional[date] = None) -> WeeklyProgress:
        """Per-day averages over the configured recent period."""
        records = self.get_daily_progress(settings.learning.progress_days, today)
        return statistics.weekly_progress(records)
