"""The interpreter's own percentile random number generator.

A fixed linear congruential recurrence, so a seeded game replays exactly.
"""

import time

PRNG_MULTIPLIER = 75
PRNG_PRIME = 65537
VALUES_IN_16_BITS = 65536
PERCENT_UNITS = 100


class LinearCongruentialRandom:
    """Yields values in 0..99."""

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = int(time.time())
        self.state = seed % VALUES_IN_16_BITS

    def percent(self) -> int:
        self.state = (PRNG_MULTIPLIER * (self.state + 1) % PRNG_PRIME) % VALUES_IN_16_BITS
        return self.state % PERCENT_UNITS
