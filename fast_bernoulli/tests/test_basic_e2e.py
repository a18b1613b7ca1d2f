"""Basic smoke tests for fast_bernoulli.

Quick sanity checks that the public surface imports and works end to end.
For detailed behaviour, see test_sampler.py and test_processors.py.
"""

import random

import pytest

import fast_bernoulli
from fast_bernoulli import FastBernoulli


def test_version_exposed():
    """Smoke test: version is accessible."""
    assert hasattr(fast_bernoulli, '__version__')
    assert isinstance(fast_bernoulli.__version__, str)
    assert len(fast_bernoulli.__version__) > 0


def test_sample_one_in_a_hundred():
    """Smoke test: sample events and check the documented skip-count contract."""
    rng = random.Random(2023)
    bernoulli = FastBernoulli(0.01, rng)

    skip_count = bernoulli.skip_count
    for _ in range(skip_count):
        assert not bernoulli.trial(rng)
    assert bernoulli.trial(rng)


def test_byte_sampling():
    """Smoke test: size-weighted sampling of allocations."""
    rng = random.Random(5)
    byte_sampler = FastBernoulli(0.05, rng)

    sampled = [size for size in (10, 1024, 8, 4096) if byte_sampler.multi_trial(size, rng)]
    # Each 1 KiB+ allocation misses with probability below 1e-22.
    assert 1024 in sampled and 4096 in sampled


def test_public_exports():
    """Smoke test: integration points can be imported from the top level."""
    from fast_bernoulli import (
        FastBernoulliTraceSampler,
        Sampler,
        SamplingLogFilter,
        SamplingSpanProcessor,
        config,
    )

    assert Sampler(sample_rate=1.0).should_sample().sampled
    assert FastBernoulliTraceSampler(0.5).get_description()
    assert SamplingLogFilter(0.5).probability == 0.5
    assert SamplingSpanProcessor(None).force_flush()
    assert config.validate_config({}).sampling.probability == 1.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
