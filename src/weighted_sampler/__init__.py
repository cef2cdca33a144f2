"""Package initialization for weighted-sampler.

Weighted random selection over an ordered collection, driven by a cached
snapshot of per-element weights that is refreshed on demand.
"""

from weighted_sampler.errors import (
    EmptySamplerError,
    InvalidArgumentError,
    WeightedSamplerError,
)
from weighted_sampler.random_source import RandomSource, default_random, seeded_random
from weighted_sampler.sampler import (
    WeightedSampler,
    weighted_choice,
    weighted_choice_index,
)
from weighted_sampler.stats import ChiSquaredResult, chi_squared_conformance

__version__ = "0.1.0"
__all__ = [
    "ChiSquaredResult",
    "EmptySamplerError",
    "InvalidArgumentError",
    "RandomSource",
    "WeightedSampler",
    "WeightedSamplerError",
    "chi_squared_conformance",
    "default_random",
    "seeded_random",
    "weighted_choice",
    "weighted_choice_index",
]
