"""Tests for review progress transitions."""
from datetime import UTC, datetime

import pytest

from lexitrack.services.progress import apply_answer, apply_rating, clamp_rate, reset_progress

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=UTC)


def test_correct_answer_raises_rate(make_item) -> None:
    """Test a correct answer."""
    item = make_item(rate=2, review_count=3)

    updated = apply_answer(item, True, NOW)

    assert updated.rate == 3
    assert updated.review_count == 4
    assert updated.last_review_date == NOW
    assert item.rate == 2
    assert item.review_count == 3


def test_wrong_answer_lowers_rate(make_item) -> None:
    """Test a wrong answer."""
    assert apply_answer(make_item(rate=2), False, NOW).rate == 1


def test_answer_rate_limits(make_item) -> None:
    """Test that the rate stays within 0..5."""
    assert apply_answer(make_item(rate=5), True, NOW).rate == 5
    assert apply_answer(make_item(rate=0), False, NOW).rate == 0


@pytest.mark.parametrize("rate, expected", [(-3, 0), (0, 0), (4, 4), (5, 5), (11, 5)])
def test_apply_rating_clamps(make_item, rate, expected) -> None:
    """Test explicit ratings are clamped."""
    updated = apply_rating(make_item(), rate, NOW)

    assert updated.rate == expected
    assert updated.review_count == 1
    assert updated.is_reviewed


def test_apply_rating_defaults_to_now(make_item) -> None:
    """Test that the review time defaults to the current time."""
    updated = apply_rating(make_item(), 3)

    assert updated.last_review_date is not None
    assert updated.last_review_date.tzinfo is not None


def test_reset_progress(make_item) -> None:
    """Test forgetting review history."""
    item = make_item(rate=4, review_count=7)

    updated = reset_progress(item)

    assert (updated.rate, updated.review_count, updated.last_review_date) == (0, 0, None)
    assert not updated.is_reviewed
    assert item.rate == 4


def test_clamp_rate() -> None:
    """Test clamping with a custom scale."""
    assert clamp_rate(12, max_rate=10) == 10
