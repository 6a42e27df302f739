"""Random permutation helpers."""
import random
from typing import Iterable, List, Optional, TypeVar

T = TypeVar("T")


def shuffle(items: Iterable[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly shuffled copy of ``items`` (Fisher-Yates).

    Args:
        items: Source collection, left untouched.
        rng: Random source; the module level generator when omitted.
    """
    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def random_items(
    items: Iterable[T], count: int, rng: Optional[random.Random] = None
) -> List[T]:
    """Pick up to ``count`` distinct items uniformly at random."""
    if count <= 0:
        return []
    return shuffle(items, rng)[:count]
