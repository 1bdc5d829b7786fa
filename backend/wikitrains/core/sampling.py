"""Index Sampling: random slot draws for initGame and link sampling.

Invariants:
    - draw_unique_indices returns `count` pairwise-distinct ints in [0, size)
    - draw_game_indices returns 1 tierTwo slot and `end_count` distinct tierOne slots;
      the two index spaces are independent and may coincide numerically
    - Randomness comes from the injected random.Random (deterministic in tests)
"""

import random


def draw_unique_indices(count: int, size: int, rng: random.Random) -> list[int]:
    """Draw `count` distinct indices from range(size)."""
    if count > size:
        raise ValueError(f"cannot draw {count} unique indices from {size}")
    return rng.sample(range(size), count)


def draw_game_indices(
    tier_one_size: int, tier_two_size: int, end_count: int, rng: random.Random,
) -> tuple[int, list[int]]:
    """Draw (start slot in tierTwo, end candidate slots in tierOne)."""
    start = rng.randrange(tier_two_size)
    ends = draw_unique_indices(end_count, tier_one_size, rng)
    return start, ends


def shuffled(items: list[str], rng: random.Random) -> list[str]:
    """Copy of items in random order: sampling without replacement by iteration."""
    result = list(items)
    rng.shuffle(result)
    return result
