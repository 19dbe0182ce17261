"""Abstract random source — lets tests force the probabilistic branches."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class RandomSource(ABC):

    @abstractmethod
    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""
        ...

    @abstractmethod
    def choice(self, items: Sequence[T]) -> T:
        """Return one element of a non-empty sequence, uniformly."""
        ...
