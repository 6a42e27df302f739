"""Review progress transitions.

Each function returns an updated copy of the word and leaves the original
untouched.
"""
from dataclasses import replace
from datetime import UTC, datetime
from typing import Optional

from lexitrack.config import MAX_RATE
from lexitrack.models.records import VocabularyItem


def clamp_rate(rate: int, max_rate: int = MAX_RATE) -> int:
    """Limit a rate to the 0..max_rate scale."""
    return max(0, min(max_rate, rate))


def apply_answer(
    item: VocabularyItem,
    correct: bool,
    now: Optional[datetime] = None,
    max_rate: int = MAX_RATE,
) -> VocabularyItem:
    """Record a test answer: a correct answer raises the rate by one, a wrong one lowers it."""
    step = 1 if correct else -1
    return apply_rating(item, (item.rate or 0) + step, now, max_rate)


def apply_rating(
    item: VocabularyItem,
    rate: int,
    now: Optional[datetime] = None,
    max_rate: int = MAX_RATE,
) -> VocabularyItem:
    """Record a review with an explicit rate."""
    return replace(
        item,
        rate=clamp_rate(rate, max_rate),
        review_count=item.review_count + 1,
        last_review_date=now or datetime.now(UTC),
    )


def reset_progress(item: VocabularyItem) -> VocabularyItem:
    """Forget all review history of a word."""
    return replace(item, rate=0, review_count=0, last_review_date=None)
