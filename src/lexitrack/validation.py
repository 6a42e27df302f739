"""Opt-in validation of records before they reach the computations."""
from typing import Any, List

from lexitrack.config import MAX_RATE
from lexitrack.errors import ValidationError
from lexitrack.models.records import (
    DailyActivityRecord,
    LanguageCode,
    Level,
    PartOfSpeech,
    VocabularyItem,
)


def _is_member(enum_cls, value: Any) -> bool:
    if isinstance(value, enum_cls):
        return True
    return value in {member.value for member in enum_cls}


def is_valid_level(value: Any) -> bool:
    return _is_member(Level, value)


def is_valid_part_of_speech(value: Any) -> bool:
    return _is_member(PartOfSpeech, value)


def is_valid_language(value: Any) -> bool:
    return _is_member(LanguageCode, value)


def validate_item(item: VocabularyItem, max_rate: int = MAX_RATE) -> VocabularyItem:
    """Check a word record and return it unchanged.

    Raises:
        ValidationError: with the list of bad fields in ``details``.
    """
    errors: List[str] = []
    if not item.word or not item.word.strip():
        errors.append("word")
    if not is_valid_part_of_speech(item.part_of_speech):
        errors.append("part_of_speech")
    if not is_valid_level(item.level):
        errors.append("level")
    if not is_valid_language(item.language):
        errors.append("language")
    if item.review_count < 0:
        errors.append("review_count")
    if item.rate is not None and not 0 <= item.rate <= max_rate:
        errors.append("rate")

    if errors:
        raise ValidationError(
            f"Invalid word {item.id}: {', '.join(errors)}", details=errors
        )
    return item


def validate_activity(records: List[DailyActivityRecord]) -> List[DailyActivityRecord]:
    """Check activity records, including at most one record per date."""
    errors: List[str] = []
    seen = set()
    for record in records:
        if record.date in seen:
            errors.append(f"{record.date}: duplicate date")
        seen.add(record.date)
        for name in ("words_studied", "tests_completed", "time_spent"):
            if getattr(record, name) < 0:
                errors.append(f"{record.date}: {name}")
        if not 0 <= record.accuracy <= 100:
            errors.append(f"{record.date}: accuracy")

    if errors:
        raise ValidationError("Invalid activity records", details=errors)
    return records
