"""Tests for sorting and filtering."""
from datetime import UTC, datetime, timedelta

import pytest

from lexitrack.config import QUERY_LIMIT
from lexitrack.models.records import LanguageCode, Level, PartOfSpeech
from lexitrack.services.sorting import (
    WordQuery,
    filter_by_levels,
    filter_by_parts_of_speech,
    filter_difficult,
    filter_unreviewed,
    query_items,
    search_items,
    sort_by_alphabet,
    sort_by_difficulty,
    sort_by_progress,
)


def test_sort_by_difficulty(make_item) -> None:
    """Test ordering from A1 to C2."""
    items = [make_item(level=level) for level in (Level.C2, Level.A2, Level.B1, Level.A1, Level.C1, Level.B2)]

    result = sort_by_difficulty(items)

    assert [item.level for item in result] == list(Level)


def test_sort_by_difficulty_is_stable(make_item) -> None:
    """Test that words with equal level keep their input order."""
    first = make_item(level=Level.B1)
    second = make_item(level=Level.A1)
    third = make_item(level=Level.B1)

    assert sort_by_difficulty([first, second, third]) == [second, first, third]


def test_sort_by_progress(make_item) -> None:
    """Test worst rate first, then fewest reviews first."""
    items = [
        make_item(rate=3, review_count=2),
        make_item(rate=1, review_count=7),
        make_item(rate=1, review_count=2),
        make_item(rate=0, review_count=0),
        make_item(rate=5, review_count=1),
    ]

    result = sort_by_progress(items)

    assert [(item.rate, item.review_count) for item in result] == [
        (0, 0), (1, 2), (1, 7), (3, 2), (5, 1),
    ]
    for a, b in zip(result, result[1:]):
        assert a.rate < b.rate or (a.rate == b.rate and a.review_count <= b.review_count)


def test_sort_by_alphabet_ignores_case_and_accents(make_item) -> None:
    """Test locale-aware ordering of headwords."""
    items = [make_item(word=text) for text in ("zebra", "Apple", "éclair", "banana", "apple")]

    result = [item.word for item in sort_by_alphabet(items)]

    assert result.index("Apple") < result.index("banana")
    assert result.index("apple") < result.index("banana")
    assert result.index("banana") < result.index("éclair") < result.index("zebra")


def test_sorting_does_not_mutate_input(make_item) -> None:
    """Test that sorts return new lists."""
    items = [make_item(rate=5, review_count=1), make_item(rate=0)]
    original = list(items)

    sort_by_progress(items)
    sort_by_difficulty(items)
    sort_by_alphabet(items)

    assert items == original


def test_filter_by_levels(make_item) -> None:
    """Test keeping only the requested levels."""
    items = [make_item(level=level) for level in Level]

    result = filter_by_levels(items, [Level.B1, Level.C2])

    assert [item.level for item in result] == [Level.B1, Level.C2]
    assert filter_by_levels(items, []) == []


def test_filter_by_parts_of_speech(make_item) -> None:
    """Test keeping only the requested parts of speech."""
    noun = make_item(part_of_speech=PartOfSpeech.NOUN)
    verb = make_item(part_of_speech=PartOfSpeech.VERB)
    idiom = make_item(part_of_speech=PartOfSpeech.IDIOM)

    assert filter_by_parts_of_speech([noun, verb, idiom], {PartOfSpeech.VERB, PartOfSpeech.IDIOM}) == [verb, idiom]
    assert filter_by_parts_of_speech([noun, verb, idiom], []) == []


def test_filter_unreviewed(make_item) -> None:
    """Test that either zero reviews or a missing review date qualifies."""
    new = make_item()
    counted_without_date = make_item(review_count=3, last_review_date=None)
    dated_without_count = make_item(review_count=0, last_review_date=datetime.now(UTC))
    reviewed = make_item(review_count=2, rate=1)

    result = filter_unreviewed([new, counted_without_date, dated_without_count, reviewed])

    assert result == [new, counted_without_date, dated_without_count]


def test_filter_difficult_excludes_unreviewed(make_item) -> None:
    """Test that a never reviewed word is not difficult, whatever its rate."""
    new = make_item(rate=0, review_count=0)
    weak = make_item(rate=1, review_count=4)
    borderline = make_item(rate=2, review_count=1)
    strong = make_item(rate=3, review_count=4)

    assert filter_difficult([new, weak, borderline, strong]) == [weak, borderline]
    assert filter_difficult([new, weak, borderline, strong], max_rate=1) == [weak]
    assert new in filter_unreviewed([new, weak])


@pytest.mark.parametrize(
    "apply",
    [
        filter_unreviewed,
        filter_difficult,
        lambda items: filter_by_levels(items, [Level.A1]),
        lambda items: filter_by_parts_of_speech(items, [PartOfSpeech.NOUN]),
    ],
)
def test_filters_are_idempotent(make_item, apply) -> None:
    """Test that filtering twice equals filtering once."""
    items = [
        make_item(rate=rate, review_count=reviews, level=level)
        for rate, reviews, level in [(0, 0, Level.A1), (2, 3, Level.B1), (5, 1, Level.A1), (1, 1, Level.C1)]
    ]

    once = apply(items)

    assert apply(once) == once


def test_empty_input(make_item) -> None:
    """Test that every operation accepts an empty collection."""
    assert sort_by_difficulty([]) == []
    assert sort_by_progress([]) == []
    assert sort_by_alphabet([]) == []
    assert filter_unreviewed([]) == []
    assert filter_difficult([]) == []
    assert filter_by_levels([], list(Level)) == []


def test_search_items(make_item) -> None:
    """Test case-insensitive search over word, translation and explanation."""
    by_word = make_item(word="Butterfly", translation="метелик")
    by_translation = make_item(word="moth", translation="butter moth")
    by_explanation = make_item(word="insect", translation="комаха", explanation="Like a BUTTERfly")
    other = make_item(word="dog", translation="пес")

    result = search_items([by_word, by_translation, by_explanation, other], "butter")

    assert result == [by_word, by_translation, by_explanation]
    assert search_items([other], "") == [other]


def test_query_items_filters_sorts_and_pages(make_item) -> None:
    """Test the full query pipeline."""
    now = datetime.now(UTC)
    items = [
        make_item(word="cat", translation=None, dictionary_id=1, rate=3, created_at=now - timedelta(days=3)),
        make_item(word="car", translation=None, dictionary_id=1, rate=1, created_at=now - timedelta(days=1)),
        make_item(word="cap", translation=None, dictionary_id=2, rate=0, created_at=now - timedelta(days=2)),
        make_item(word="dog", translation=None, dictionary_id=1, rate=0, created_at=now),
        make_item(word="cab", translation=None, dictionary_id=1, rate=5, language=LanguageCode.EN_GB),
    ]

    page, total = query_items(items, WordQuery(search="ca", dictionary_id=1, sort_by="rate"))
    assert total == 3
    assert [item.word for item in page] == ["car", "cat", "cab"]

    page, total = query_items(items, WordQuery(sort_by="word", descending=True, offset=1, limit=2))
    assert total == 5
    assert [item.word for item in page] == ["cat", "car"]

    page, _ = query_items(items, WordQuery(language=LanguageCode.EN_GB))
    assert [item.word for item in page] == ["cab"]


def test_query_items_defaults_to_created_at(make_item) -> None:
    """Test the default sort by creation time with missing times first."""
    now = datetime.now(UTC)
    late = make_item(created_at=now)
    early = make_item(created_at=now - timedelta(days=1))
    unknown = make_item(created_at=None)

    page, total = query_items([late, early, unknown], WordQuery())

    assert total == 3
    assert page == [unknown, early, late]


def test_query_items_empty_levels_means_no_restriction(make_item) -> None:
    """Test that an empty level list in a query does not filter."""
    items = [make_item(level=Level.B2), make_item(level=Level.C1)]

    page, total = query_items(items, WordQuery(levels=[], parts_of_speech=[]))

    assert total == 2


def test_query_items_default_limit(make_item) -> None:
    """Test that a query without a limit gets the default page size."""
    items = [make_item() for _ in range(QUERY_LIMIT + 5)]

    assert WordQuery().limit is None
    page, total = query_items(items, WordQuery())
    assert (len(page), total) == (QUERY_LIMIT, QUERY_LIMIT + 5)

    page, _ = query_items(items, WordQuery(), default_limit=3)
    assert len(page) == 3
    page, _ = query_items(items, WordQuery(limit=0), default_limit=3)
    assert page == []

def test_word_query_rejects_unknown_sort_field() -> None:
    """Test sort field validation."""
    with pytest.raises(ValueError):
        WordQuery(sort_by="length")
