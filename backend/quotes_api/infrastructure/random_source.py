"""Default RandomSource backed by the standard library's PRNG."""

import random
from collections.abc import Sequence
from typing import TypeVar

from quotes_api.application.interfaces import RandomSource

T = TypeVar("T")


class StdlibRandomSource(RandomSource):

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def choice(self, items: Sequence[T]) -> T:
        return self._rng.choice(items)
