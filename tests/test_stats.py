"""Tests for the chi-squared conformance check."""

import math
from collections import Counter

import pytest


def test_exact_counts_pass_perfectly() -> None:
    """Counts equal to their expectation give a zero statistic."""
    from weighted_sampler import chi_squared_conformance

    result = chi_squared_conformance([1.0, 2.0, 3.0], [100, 200, 300])
    assert result.chi_squared == 0.0
    assert result.degrees_of_freedom == 2
    assert abs(result.p_value - 1.0) < 1e-12
    assert result.num_samples == 600
    assert result.passes(0.001)


def test_grossly_skewed_counts_fail() -> None:
    """Counts far from the weights are rejected."""
    from weighted_sampler import chi_squared_conformance

    result = chi_squared_conformance([1.0, 1.0], [1000, 0])
    assert result.chi_squared == pytest.approx(1000.0)
    assert result.p_value < 1e-10
    assert not result.passes(0.001)


def test_mapping_counts_accepted() -> None:
    """A Counter of sampled indices can be passed directly."""
    from weighted_sampler import chi_squared_conformance

    result = chi_squared_conformance([1.0, 1.0, 2.0], Counter({0: 25, 1: 25, 2: 50}))
    assert result.chi_squared == 0.0
    assert result.num_samples == 100


def test_observed_zero_weight_is_a_failure() -> None:
    """Drawing an index with zero weight can never conform."""
    from weighted_sampler import chi_squared_conformance

    result = chi_squared_conformance([0.0, 1.0, 1.0], [1, 50, 50])
    assert math.isinf(result.chi_squared)
    assert result.p_value == 0.0
    assert not result.passes(1e-12)


def test_zero_weight_categories_excluded() -> None:
    """Unobserved zero-weight indices do not count as degrees of freedom."""
    from weighted_sampler import chi_squared_conformance

    result = chi_squared_conformance([0.0, 1.0, 1.0], [0, 50, 50])
    assert result.degrees_of_freedom == 1
    assert result.chi_squared == 0.0


def test_single_positive_category_trivially_passes() -> None:
    from weighted_sampler import chi_squared_conformance

    result = chi_squared_conformance([0.0, 5.0], [0, 10])
    assert result.chi_squared == 0.0
    assert result.p_value == 1.0
    assert result.degrees_of_freedom == 0


def test_invalid_inputs_rejected() -> None:
    """Verify malformed inputs raise InvalidArgumentError."""
    from weighted_sampler import InvalidArgumentError, chi_squared_conformance

    with pytest.raises(InvalidArgumentError):
        chi_squared_conformance([1.0, 1.0], [1])
    with pytest.raises(InvalidArgumentError):
        chi_squared_conformance([1.0, 1.0], [1, -1])
    with pytest.raises(InvalidArgumentError):
        chi_squared_conformance([0.0, 0.0], [0, 0])
    with pytest.raises(InvalidArgumentError):
        chi_squared_conformance([1.0, -1.0], [1, 1])
    with pytest.raises(InvalidArgumentError):
        chi_squared_conformance([1.0], {3: 1})


def test_sampler_distribution_conforms() -> None:
    """A seeded sampler over A(200), B(600), C(400) passes the test."""
    from weighted_sampler import WeightedSampler, seeded_random

    sampler = WeightedSampler(
        [200.0, 600.0, 400.0], weight_fn=float, rng=seeded_random(12345)
    )
    result = sampler.test_distribution(12000)
    assert result.num_samples == 12000
    assert result.degrees_of_freedom == 2
    assert result.passes(0.0001)


def test_conformance_logs_result(caplog: pytest.LogCaptureFixture) -> None:
    """Conformance results are reported at debug level."""
    from weighted_sampler import chi_squared_conformance

    with caplog.at_level("DEBUG", logger="weighted_sampler.stats"):
        chi_squared_conformance([1.0, 1.0], [5, 5])
    assert "chi-squared conformance over 10 samples" in caplog.text
