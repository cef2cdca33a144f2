"""Statistical conformance checks for weighted sampling.

A Pearson chi-squared goodness-of-fit test compares how often each index was
drawn against how often its weight says it should have been drawn.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from scipy.stats import chisquare

from weighted_sampler.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChiSquaredResult:
    """Outcome of a chi-squared conformance test."""

    chi_squared: float
    degrees_of_freedom: int
    p_value: float
    num_samples: int

    def passes(self, alpha: float = 0.05) -> bool:
        """Whether the observed counts are consistent with the weights at ``alpha``."""
        return self.p_value >= alpha


def chi_squared_conformance(
    weights: Sequence[float], counts: Sequence[int] | Mapping[int, int]
) -> ChiSquaredResult:
    """Test observed per-index ``counts`` against the distribution ``weights``.

    ``counts`` is either a sequence aligned with ``weights`` or a mapping from
    index to count (such as a ``Counter`` of sampled indices). Indices with
    zero weight are left out of the statistic, but observing one at all is an
    outright failure.
    """
    n = len(weights)
    if isinstance(counts, Mapping):
        if any(not 0 <= i < n for i in counts):
            raise InvalidArgumentError("counts contain an index outside weights")
        observed = [counts.get(i, 0) for i in range(n)]
    else:
        if len(counts) != n:
            raise InvalidArgumentError(
                f"counts has length {len(counts)} but weights has length {n}"
            )
        observed = list(counts)

    if any(c < 0 for c in observed):
        raise InvalidArgumentError("counts must be non-negative")
    if any(w < 0 for w in weights):
        raise InvalidArgumentError("weights must be non-negative")

    total_weight = math.fsum(weights)
    if total_weight <= 0:
        raise InvalidArgumentError("weights must have a positive total")

    num_samples = sum(observed)
    positive = [i for i, w in enumerate(weights) if w > 0]

    if any(observed[i] > 0 for i, w in enumerate(weights) if w <= 0):
        result = ChiSquaredResult(math.inf, max(len(positive) - 1, 0), 0.0, num_samples)
    elif len(positive) < 2 or num_samples == 0:
        result = ChiSquaredResult(0.0, max(len(positive) - 1, 0), 1.0, num_samples)
    else:
        f_obs = [observed[i] for i in positive]
        f_exp = [num_samples * weights[i] / total_weight for i in positive]
        statistic, p_value = chisquare(f_obs, f_exp)
        result = ChiSquaredResult(
            float(statistic), len(positive) - 1, float(p_value), num_samples
        )

    logger.debug(
        "chi-squared conformance over %d samples: chi2=%.4f dof=%d p=%.6f",
        result.num_samples,
        result.chi_squared,
        result.degrees_of_freedom,
        result.p_value,
    )
    return result
