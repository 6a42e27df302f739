"""Sorting and filtering of vocabulary items.

All functions are pure: they return new lists and never reorder or modify
the collection they were given. Sorts are stable, so items that compare
equal keep their input order.
"""
import locale
import unicodedata
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from lexitrack.config import DIFFICULT_MAX_RATE, QUERY_LIMIT
from lexitrack.models.records import LanguageCode, Level, PartOfSpeech, VocabularyItem

SORT_FIELDS = ("word", "created_at", "review_count", "rate")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def collation_key(text: str) -> Tuple[str, str, str]:
    """Key for locale-aware, case-insensitive ordering of words.

    Accents and case are ignored on the first pass; the casefolded and the
    raw text break ties so the order stays total.
    """
    folded = unicodedata.normalize("NFKD", text).casefold()
    base = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return locale.strxfrm(base), folded, text


def sort_by_difficulty(items: Iterable[VocabularyItem]) -> List[VocabularyItem]:
    """Order items from A1 to C2."""
    return sorted(items, key=lambda item: item.level.rank)


def sort_by_progress(items: Iterable[VocabularyItem]) -> List[VocabularyItem]:
    """Order items worst rate first, then least reviewed first."""
    return sorted(items, key=lambda item: (item.rate or 0, item.review_count))


def sort_by_alphabet(items: Iterable[VocabularyItem]) -> List[VocabularyItem]:
    return sorted(items, key=lambda item: collation_key(item.word))


def filter_by_levels(
    items: Iterable[VocabularyItem], levels: Iterable[Level]
) -> List[VocabularyItem]:
    """Keep items whose level is one of ``levels``."""
    wanted = set(levels)
    return [item for item in items if item.level in wanted]


def filter_by_parts_of_speech(
    items: Iterable[VocabularyItem], parts_of_speech: Iterable[PartOfSpeech]
) -> List[VocabularyItem]:
    """Keep items whose part of speech is one of ``parts_of_speech``."""
    wanted = set(parts_of_speech)
    return [item for item in items if item.part_of_speech in wanted]


def filter_unreviewed(items: Iterable[VocabularyItem]) -> List[VocabularyItem]:
    """Keep items never reviewed: zero reviews or no last review date."""
    return [
        item for item in items
        if item.review_count == 0 or item.last_review_date is None
    ]


def filter_difficult(
    items: Iterable[VocabularyItem], max_rate: int = DIFFICULT_MAX_RATE
) -> List[VocabularyItem]:
    """Keep reviewed items rated at most ``max_rate``.

    Never reviewed items are left out, they belong to the unreviewed group.
    """
    return [
        item for item in items
        if (item.rate or 0) <= max_rate and item.review_count > 0
    ]


def search_items(items: Iterable[VocabularyItem], text: str) -> List[VocabularyItem]:
    """Keep items whose word, translation or explanation contains ``text``.

    Matching is case-insensitive. An empty search keeps everything.
    """
    needle = text.casefold()
    if not needle:
        return list(items)

    def matches(item: VocabularyItem) -> bool:
        fields = (item.word, item.translation, item.explanation)
        return any(value and needle in value.casefold() for value in fields)

    return [item for item in items if matches(item)]


@dataclass(frozen=True)
class WordQuery:
    """Search, filter, sort and paging options for a word list."""

    search: Optional[str] = None
    dictionary_id: Optional[int] = None
    levels: Optional[Sequence[Level]] = None
    parts_of_speech: Optional[Sequence[PartOfSpeech]] = None
    language: Optional[LanguageCode] = None
    is_irregular: Optional[bool] = None
    sort_by: str = "created_at"
    descending: bool = False
    offset: int = 0
    limit: Optional[int] = None  # page size, the default limit when None

    def __post_init__(self):
        if self.sort_by not in SORT_FIELDS:
            raise ValueError(
                f"Unknown sort field {self.sort_by!r}, expected one of {SORT_FIELDS}"
            )


def _as_utc(value: Optional[datetime]) -> datetime:
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _sort_key(sort_by: str):
    if sort_by == "word":
        return lambda item: collation_key(item.word)
    if sort_by == "review_count":
        return lambda item: item.review_count
    if sort_by == "rate":
        return lambda item: item.rate or 0
    return lambda item: _as_utc(item.created_at)


def query_items(
    items: Iterable[VocabularyItem],
    query: WordQuery,
    default_limit: int = QUERY_LIMIT,
) -> Tuple[List[VocabularyItem], int]:
    """Run the full search pipeline.

    ``default_limit`` is the page size for a query that sets no limit.

    Returns:
        The requested page and the number of matches before paging.
    """
    result = list(items)

    if query.dictionary_id is not None:
        result = [item for item in result if item.dictionary_id == query.dictionary_id]
    if query.search:
        result = search_items(result, query.search)
    # An empty selection means "no restriction" here, unlike filter_by_levels
    if query.levels:
        result = filter_by_levels(result, query.levels)
    if query.parts_of_speech:
        result = filter_by_parts_of_speech(result, query.parts_of_speech)
    if query.language is not None:
        result = [item for item in result if item.language == query.language]
    if query.is_irregular is not None:
        result = [item for item in result if item.is_irregular == query.is_irregular]

    result.sort(key=_sort_key(query.sort_by), reverse=query.descending)

    total = len(result)
    offset = max(query.offset, 0)
    limit = default_limit if query.limit is None else query.limit
    return result[offset:offset + max(limit, 0)], total
