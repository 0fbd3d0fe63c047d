"""Domain service: identifiers for new products.

An id is nine random base-36 characters followed by the current epoch
time in milliseconds, also base 36. Uniqueness is probabilistic; ids are
not checked against the existing collection.
"""

from __future__ import annotations

import random
import time
from typing import Callable

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_RANDOM_WIDTH = 9


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value} in base 36")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


class IdGenerator:

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ) -> None:
        self._clock = clock
        self._rng = rng or random.SystemRandom()

    def generate(self) -> str:
        random_part = to_base36(self._rng.randrange(36 ** _RANDOM_WIDTH))
        time_part = to_base36(int(self._clock() * 1000))
        return random_part.rjust(_RANDOM_WIDTH, "0") + time_part
