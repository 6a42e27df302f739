"""Weighted practice selection.

Words that need more practice get a larger weight: a low rate raises the
weight and a never reviewed word gets an extra boost. Picking is weighted
sampling without replacement, so one call never returns a word twice.
"""
import logging
import random
from typing import List, Optional, Sequence

from lexitrack.config import MAX_RATE, UNREVIEWED_BOOST, WEIGHT_FLOOR
from lexitrack.models.records import VocabularyItem
from lexitrack.services.randomness import shuffle

logger = logging.getLogger(__name__)


def item_weight(
    item: VocabularyItem,
    max_rate: int = MAX_RATE,
    unreviewed_boost: int = UNREVIEWED_BOOST,
    weight_floor: int = WEIGHT_FLOOR,
) -> int:
    """Selection weight of a word.

    ``(max_rate + 1 - rate)``, multiplied by ``unreviewed_boost`` for a word
    with no reviews, and never below ``weight_floor``.
    """
    base_weight = max_rate + 1 - (item.rate or 0)
    multiplier = unreviewed_boost if item.review_count == 0 else 1
    return max(base_weight * multiplier, weight_floor)


def weighted_random_items(
    items: Sequence[VocabularyItem],
    count: int,
    rng: Optional[random.Random] = None,
    **weight_options,
) -> List[VocabularyItem]:
    """Draw up to ``count`` words, favouring words that need practice.

    The result is in draw order. Asking for the whole pool (or more) returns
    every word once, uniformly shuffled.

    Args:
        items: Candidate words, left untouched.
        count: Number of words wanted.
        rng: Random source; the module level generator when omitted.
        **weight_options: Overrides for :func:`item_weight` constants.
    """
    if count <= 0 or not items:
        return []

    if count >= len(items):
        return shuffle(items, rng)

    rng = rng or random
    remaining = list(items)
    weights = [item_weight(item, **weight_options) for item in remaining]

    selected = []
    for _ in range(count):
        total = sum(weights)
        point = rng.random() * total
        # Last index is the fallback for float rounding at the upper edge
        index = len(remaining) - 1
        for j, weight in enumerate(weights):
            point -= weight
            if point < 0:
                index = j
                break
        selected.append(remaining.pop(index))
        weights.pop(index)

    logger.debug(f"Selected {len(selected)} of {len(items)} words for practice")
    return selected

