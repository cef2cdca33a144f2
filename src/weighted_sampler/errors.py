"""Exceptions raised by the weighted sampler."""


class WeightedSamplerError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgumentError(WeightedSamplerError, ValueError):
    """A required collaborator is missing or an argument is out of range."""


class EmptySamplerError(WeightedSamplerError, IndexError):
    """Sampling was attempted against an empty weight snapshot."""
