"""Random helpers used by the card game."""

import random
import string

ALPHABET = string.ascii_lowercase

_rng = random.Random()


def rand_alphabet_str(n):
    """Return a string of ``n`` random lower-case ASCII letters."""
    if n < 0:
        raise ValueError(f"length must not be negative: {n}")
    return "".join(_rng.choice(ALPHABET) for _ in range(n))


def rand_num(n):
    """Return a random integer in ``[0, n)``."""
    if n <= 0:
        raise ValueError(f"upper bound must be positive: {n}")
    return _rng.randrange(n)