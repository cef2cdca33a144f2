"""Uniform random sources consumed by the sampler.

Anything with a ``random()`` method returning a float in [0, 1) can drive
sampling, which includes ``random.Random`` and its subclasses. When no
source is supplied, a single process-wide generator is shared.
"""

import random
from typing import Protocol, runtime_checkable

_default: random.Random | None = None


@runtime_checkable
class RandomSource(Protocol):
    """A source of uniform floats in [0, 1)."""

    def random(self) -> float: ...


def default_random() -> random.Random:
    """Return the shared generator, creating it on first use.

    The shared generator is not safe to share between threads that need
    reproducible draws; give each of those its own ``seeded_random``.
    """
    global _default
    if _default is None:
        _default = random.Random()
    return _default


def seeded_random(seed: int | str | bytes | None = None) -> random.Random:
    """Create an independent generator, deterministic when seeded."""
    return random.Random(seed)
