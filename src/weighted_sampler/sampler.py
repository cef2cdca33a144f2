"""Weighted random selection over a caller-owned sequence.

A ``WeightedSampler`` keeps a snapshot of per-element weights and their sum.
Sampling walks the snapshot, subtracting each weight from a uniform roll
until the roll falls inside an element's share. The snapshot only changes
when ``refresh_weights`` is called (or when the caller edits it directly),
so any mutation of the source sequence must be followed by a refresh.
"""

import logging
from collections import Counter
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from weighted_sampler.errors import EmptySamplerError, InvalidArgumentError
from weighted_sampler.random_source import RandomSource, default_random
from weighted_sampler.stats import ChiSquaredResult, chi_squared_conformance

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _select(weights: Sequence[float], total: float, rng: RandomSource) -> int:
    """Cumulative selection; falls back to the last index if the roll survives."""
    roll = rng.random() * total
    for index, weight in enumerate(weights):
        if weight > roll:
            return index
        roll -= weight
    return len(weights) - 1


class WeightedSampler(Generic[T]):
    """Draws elements of ``source`` with probability proportional to their weight.

    ``weight_fn`` maps an element to its weight; negative weights count as
    zero. Without a ``weight_fn`` the sampler is in manual mode: ``weights``
    starts zero-filled and the caller is responsible for keeping ``weights``
    and ``weight_sum`` in agreement.

    Sampling does not check the snapshot against the source. After the
    source grows or shrinks, call ``refresh_weights`` before sampling again.
    """

    def __init__(
        self,
        source: Sequence[T],
        weight_fn: Callable[[T], float] | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        if source is None:
            raise InvalidArgumentError("source must not be None")
        self.source = source
        self.weight_fn = weight_fn
        self.weights: list[float] = [0.0] * len(source)
        self.weight_sum = 0.0
        self.rng = rng if rng is not None else default_random()
        if weight_fn is not None:
            self.refresh_weights()

    def __len__(self) -> int:
        return len(self.weights)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={len(self.weights)}, "
            f"weight_sum={self.weight_sum!r}, "
            f"manual={self.weight_fn is None})"
        )

    @property
    def is_stale(self) -> bool:
        """True when the snapshot length no longer matches the source."""
        return len(self.weights) != len(self.source)

    def refresh_weights(self) -> "WeightedSampler[T]":
        """Recompute every weight from the current contents of ``source``.

        Returns the sampler itself so calls can be chained. If ``weight_fn``
        raises, the error propagates with ``weight_sum`` reset to 0 and
        ``weights`` only partly rewritten; refresh again before sampling.
        """
        if self.weight_fn is None:
            raise InvalidArgumentError(
                "refresh_weights requires a weight function; "
                "update weights and weight_sum directly in manual mode"
            )
        size = len(self.source)
        if len(self.weights) != size:
            logger.debug(
                "Reallocating weight snapshot from %d to %d entries",
                len(self.weights),
                size,
            )
            self.weights = [0.0] * size

        weights = self.weights
        self.weight_sum = 0.0
        total = 0.0
        for i in range(size):
            weight = self.weight_fn(self.source[i])
            if weight < 0.0:
                weight = 0.0
            weights[i] = weight
            total += weight
        self.weight_sum = total
        return self

    def sample_index(self) -> int:
        """Draw an index with probability ``weights[i] / weight_sum``.

        If every weight is zero the draw degenerates to a fixed index: the last
        one for a refreshed snapshot, the first one for an untouched manual
        snapshot.
        """
        if not self.weights:
            raise EmptySamplerError("cannot sample from an empty weight snapshot")
        if self.weight_fn is None and self.weight_sum == 0.0:
            return 0
        return _select(self.weights, self.weight_sum, self.rng)

    def sample(self) -> T:
        """Draw an element of ``source``; equivalent to ``source[sample_index()]``."""
        return self.source[self.sample_index()]

    def sample_indices(self, count: int) -> list[int]:
        """Draw ``count`` indices from the same snapshot."""
        if count < 0:
            raise InvalidArgumentError(f"count must be non-negative, got {count}")
        return [self.sample_index() for _ in range(count)]

    def sample_many(self, count: int) -> list[T]:
        """Draw ``count`` elements from the same snapshot."""
        return [self.source[i] for i in self.sample_indices(count)]

    def probability(self, index: int) -> float:
        """Chance that ``sample_index`` returns ``index`` under the snapshot.

        A zero total puts all of the probability on the fixed index that
        ``sample_index`` falls back to.
        """
        if self.weight_sum == 0.0:
            index = range(len(self.weights))[index]
            fixed = 0 if self.weight_fn is None else len(self.weights) - 1
            return 1.0 if index == fixed else 0.0
        return self.weights[index] / self.weight_sum

    def test_distribution(self, num_samples: int) -> ChiSquaredResult:
        """Sample ``num_samples`` times and chi-squared test the result."""
        counts = Counter(self.sample_indices(num_samples))
        return chi_squared_conformance(self.weights, counts)


def weighted_choice_index(
    source: Sequence[T],
    weight_fn: Callable[[T], float],
    rng: RandomSource | None = None,
) -> int:
    """Draw one index from ``source`` without keeping a snapshot."""
    if source is None:
        raise InvalidArgumentError("source must not be None")
    if weight_fn is None:
        raise InvalidArgumentError("weight_fn must not be None")
    if len(source) == 0:
        raise EmptySamplerError("cannot sample from an empty source")
    weights = [max(weight_fn(element), 0.0) for element in source]
    return _select(weights, sum(weights), rng if rng is not None else default_random())


def weighted_choice(
    source: Sequence[T],
    weight_fn: Callable[[T], float],
    rng: RandomSource | None = None,
) -> T:
    """Draw one element from ``source`` without keeping a snapshot."""
    return source[weighted_choice_index(source, weight_fn, rng)]
