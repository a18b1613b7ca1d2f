"""Constant-time Bernoulli sampling for high-frequency instrumentation."""

from fast_bernoulli.errors import (
    ConfigError,
    FastBernoulliError,
    InvalidProbabilityError,
    ValidationError,
)
from fast_bernoulli.random_source import RandomSource, as_random_source, new_random_source
from fast_bernoulli.sampler import MAX_SKIP_COUNT, FastBernoulli
from fast_bernoulli.processors import (
    FastBernoulliTraceSampler,
    Sampler,
    SamplingLogFilter,
    SamplingResult,
    SamplingSpanProcessor,
    parent_based_fast_bernoulli,
)
from fast_bernoulli import config

__version__ = "0.1.0"

__all__ = [
    "FastBernoulli",
    "MAX_SKIP_COUNT",
    "RandomSource",
    "as_random_source",
    "new_random_source",
    "Sampler",
    "SamplingResult",
    "FastBernoulliTraceSampler",
    "parent_based_fast_bernoulli",
    "SamplingSpanProcessor",
    "SamplingLogFilter",
    "FastBernoulliError",
    "ConfigError",
    "ValidationError",
    "InvalidProbabilityError",
    "config",
    "__version__",
]
