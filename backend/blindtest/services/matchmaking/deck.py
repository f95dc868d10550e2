import random


def generate_deck(size: int, catalog_size: int, rng=random) -> list:
    """Deal `size` catalog indices for a match.

    Each entry is drawn independently and uniformly from [0, catalog_size),
    so the same item may come up twice in one match.
    """
    return [rng.randrange(catalog_size) for _ in range(size)]


def pick_seek_offset(low: int, high: int, rng=random) -> int:
    """Playback offset for a round, inclusive on both ends."""
    return rng.randint(low, high)
