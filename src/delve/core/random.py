from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Protocol, Union

logger = logging.getLogger(__name__)


class RandomLike(Protocol):
    """The slice of the ``random.Random`` API that level generation consumes."""

    def randint(self, a: int, b: int) -> int: ...

    def randrange(self, stop: int) -> int: ...

    def uniform(self, a: float, b: float) -> float: ...


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random to:
    - keep randomness owned by a single generation call
    - support optional deterministic seeding for tests and the CLI
    - never touch the module-level ``random`` state

    Any ``random.Random`` instance is an equally valid source; this class only
    adds seed bookkeeping and logging.
    """

    seed: Optional[Union[int, str]] = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def randrange(self, stop: int) -> int:
        return self._rng.randrange(stop)

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)


__all__ = ["RandomSource", "RandomLike"]
