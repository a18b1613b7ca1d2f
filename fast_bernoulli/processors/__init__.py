"""Samplers, span processors and filters built on FastBernoulli."""

from fast_bernoulli.processors.sampler import Sampler, SamplingResult
from fast_bernoulli.processors.otel_sampler import (
    FastBernoulliTraceSampler,
    parent_based_fast_bernoulli,
)
from fast_bernoulli.processors.sampling_processor import SamplingSpanProcessor, SpanSampler
from fast_bernoulli.processors.logging_filter import SamplingLogFilter

__all__ = [
    "Sampler",
    "SamplingResult",
    "FastBernoulliTraceSampler",
    "parent_based_fast_bernoulli",
    "SamplingSpanProcessor",
    "SpanSampler",
    "SamplingLogFilter",
]
