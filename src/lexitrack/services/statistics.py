"""Statistics over word collections and daily activity history.

Pure computation, no I/O. Empty inputs give zero results instead of
raising.
"""
import math
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Union

from lexitrack.config import LEARNED_MIN_RATE
from lexitrack.models.records import (
    DailyActivityRecord,
    LearningSummary,
    Level,
    PartOfSpeech,
    VocabularyItem,
    WeeklyProgress,
)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positive values (2.5 -> 3)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def as_date(value: Union[date, datetime, str]) -> date:
    """Calendar day of a date, datetime or ISO formatted string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def average_rate(items: Sequence[VocabularyItem]) -> float:
    """Mean rate rounded to two decimals, 0 for no items."""
    if not items:
        return 0
    total = sum(item.rate or 0 for item in items)
    return round_half_up(total / len(items), 2)


def level_distribution(items: Iterable[VocabularyItem]) -> Dict[Level, int]:
    """Count of items per level, every level present."""
    distribution = {level: 0 for level in Level}
    for item in items:
        distribution[item.level] += 1
    return distribution


def part_of_speech_distribution(
    items: Iterable[VocabularyItem],
) -> Dict[PartOfSpeech, int]:
    """Count of items per part of speech, every part of speech present."""
    distribution = {pos: 0 for pos in PartOfSpeech}
    for item in items:
        distribution[item.part_of_speech] += 1
    return distribution


def current_streak(
    records: Iterable[DailyActivityRecord], today: Optional[date] = None
) -> int:
    """Number of consecutive active days ending today (or yesterday).

    Records are walked newest first. Each one must fall on the running day
    or the day before it and show activity; the first gap of more than one
    day or the first inactive day ends the streak. Records dated after
    today are ignored.
    """
    cursor = today or date.today()
    ordered = sorted(records, key=lambda record: as_date(record.date), reverse=True)

    streak = 0
    for record in ordered:
        day = as_date(record.date)
        gap = (cursor - day).days
        if gap < 0:
            continue
        if gap > 1:
            break
        if not record.is_active:
            break
        streak += 1
        cursor = day
    return streak


def longest_streak(records: Iterable[DailyActivityRecord]) -> int:
    """Longest run of consecutive active days anywhere in the history."""
    days = sorted({as_date(record.date) for record in records if record.is_active})

    longest = 0
    run = 0
    previous = None
    for day in days:
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def weekly_progress(records: Sequence[DailyActivityRecord]) -> WeeklyProgress:
    """Per-record averages of words, tests and minutes, plus mean accuracy.

    The divisor is the number of records given, not the number of calendar
    days they span. Counts are rounded to whole numbers and accuracy to two
    decimals.
    """
    if not records:
        return WeeklyProgress()

    days_count = len(records)
    total_words = sum(record.words_studied for record in records)
    total_tests = sum(record.tests_completed for record in records)
    total_time = sum(record.time_spent for record in records)
    total_accuracy = sum(record.accuracy for record in records)

    return WeeklyProgress(
        words_per_day=int(round_half_up(total_words / days_count)),
        tests_per_day=int(round_half_up(total_tests / days_count)),
        time_per_day=int(round_half_up(total_time / days_count)),
        average_accuracy=round_half_up(total_accuracy / days_count, 2),
    )


def learned_items(
    items: Iterable[VocabularyItem], min_rate: int = LEARNED_MIN_RATE
) -> List[VocabularyItem]:
    """Reviewed items rated at least ``min_rate``."""
    return [
        item for item in items
        if item.review_count > 0 and (item.rate or 0) >= min_rate
    ]


def summarize(
    items: Sequence[VocabularyItem],
    records: Sequence[DailyActivityRecord],
    today: Optional[date] = None,
    learned_min_rate: int = LEARNED_MIN_RATE,
) -> LearningSummary:
    """Build the overall learning summary for a word collection."""
    accuracy = round_half_up(
        sum(record.accuracy for record in records) / len(records), 2
    ) if records else 0.0

    return LearningSummary(
        total_words=len(items),
        learned_words=len(learned_items(items, learned_min_rate)),
        current_streak=current_streak(records, today),
        longest_streak=longest_streak(records),
        total_time_spent=sum(record.time_spent for record in records),
        average_accuracy=accuracy,
        average_rate=average_rate(items),
        level_distribution=level_distribution(items),
        part_of_speech_distribution=part_of_speech_distribution(items),
    )
