from .random import RandomSource, RandomLike

__all__ = [
    "RandomSource",
    "RandomLike",
]
