"""Head-based sampling decisions shared across threads."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Optional, Tuple

from fast_bernoulli.errors import check_probability
from fast_bernoulli.random_source import RandomSource, new_random_source
from fast_bernoulli.sampler import FastBernoulli


@dataclass
class SamplingResult:
    sampled: bool


class Sampler:
    """
    Head-based sampler using a fixed probability.

    FastBernoulli instances must not be shared between threads, so each thread
    lazily gets its own shard: a sampler plus an independent random source.
    With a seed, shard ``i`` (in order of first use) is seeded from
    ``(seed, i)``, which makes single-threaded runs reproducible.
    """

    def __init__(self, sample_rate: float = 1.0, seed: Optional[int] = None) -> None:
        self.sample_rate = check_probability(sample_rate, "sample_rate")
        self.seed = seed
        self._local = threading.local()
        self._shard_ids = itertools.count()

    def should_sample(self) -> SamplingResult:
        bernoulli, source = self._shard()
        return SamplingResult(sampled=bernoulli.trial(source))

    def should_sample_n(self, n: int) -> SamplingResult:
        """Sample an event made of ``n`` units, each trialled independently."""
        bernoulli, source = self._shard()
        return SamplingResult(sampled=bernoulli.multi_trial(n, source))

    def _shard(self) -> Tuple[FastBernoulli, RandomSource]:
        shard = getattr(self._local, "shard", None)
        if shard is None:
            # itertools.count is atomic under the GIL.
            shard_id = next(self._shard_ids)
            seed = None if self.seed is None else hash((self.seed, shard_id))
            source = new_random_source(seed)
            shard = (FastBernoulli(self.sample_rate, source), source)
            self._local.shard = shard
        return shard
