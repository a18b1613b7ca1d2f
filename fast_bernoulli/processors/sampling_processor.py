"""Sampling processor for span export."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from opentelemetry.sdk.trace import ReadableSpan

from fast_bernoulli.errors import check_trial_count
from fast_bernoulli.random_source import new_random_source
from fast_bernoulli.sampler import FastBernoulli

logger = logging.getLogger(__name__)

SpanWeight = Callable[[ReadableSpan], int]


def _unit_weight(span: ReadableSpan) -> int:
    return 1


class SpanSampler:
    """
    Weighted Bernoulli sampler shared by every thread ending spans.

    A single FastBernoulli is serialized behind a lock; each span counts as
    ``weight(span)`` independent unit trials, so heavier spans are
    proportionally more likely to be kept.

    Features:
    - O(1) decision per span regardless of weight
    - Thread-safe implementation
    - Kept/total statistics
    """

    def __init__(
        self,
        sample_rate: float = 1.0,
        weight: Optional[SpanWeight] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize span sampler.

        Args:
            sample_rate: Probability of keeping each unit of weight
            weight: Callable returning a span's weight (default: 1 per span)
            seed: Seed for the random source (None = OS entropy)
        """
        self._random_source = new_random_source(seed)
        self._bernoulli = FastBernoulli(sample_rate, self._random_source)
        self.sample_rate = self._bernoulli.probability
        self.weight = weight or _unit_weight
        self._lock = threading.Lock()

        # Stats
        self._total_spans = 0
        self._sampled_spans = 0
        self._total_weight = 0

    def acquire(self, span: Optional[ReadableSpan] = None) -> bool:
        """
        Decide whether a span should be kept.

        Args:
            span: The ended span; only used to compute its weight

        Returns:
            True if span should be processed, False if it should be dropped

        Raises:
            ValidationError: If the weight callable returns anything but a
                non-negative int
        """
        weight = check_trial_count(self.weight(span) if span is not None else 1, "weight")

        with self._lock:
            sampled = self._bernoulli.multi_trial(weight, self._random_source)
            self._total_spans += 1
            self._total_weight += weight
            if sampled:
                self._sampled_spans += 1
            return sampled

    def get_stats(self) -> dict:
        """Get sampling statistics."""
        with self._lock:
            sampled_rate = (
                self._sampled_spans / self._total_spans * 100
            ) if self._total_spans > 0 else 0
            return {
                "sample_rate": self.sample_rate,
                "total_spans": self._total_spans,
                "sampled_spans": self._sampled_spans,
                "dropped_spans": self._total_spans - self._sampled_spans,
                "total_weight": self._total_weight,
                "sampled_rate_percent": round(sampled_rate, 2),
                "skip_count": self._bernoulli.skip_count,
            }

    def reset_stats(self) -> None:
        """Reset statistics counters."""
        with self._lock:
            self._total_spans = 0
            self._sampled_spans = 0
            self._total_weight = 0


class SamplingSpanProcessor:
    """
    Span processor that forwards a random subset of ended spans to the next processor.

    This should be added early in the processor chain so unsampled spans are
    dropped before they consume resources in downstream processors.
    """

    def __init__(
        self,
        next_processor,
        sample_rate: float = 1.0,
        weight: Optional[SpanWeight] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize sampling processor.

        Args:
            next_processor: Next processor in the chain
            sample_rate: Probability of keeping each unit of span weight
            weight: Callable returning a span's weight (default: 1 per span)
            seed: Seed for the random source (None = OS entropy)
        """
        self.next_processor = next_processor
        self.span_sampler = SpanSampler(
            sample_rate=sample_rate,
            weight=weight,
            seed=seed,
        )

    def on_start(self, span, parent_context=None):
        """Called when span starts - pass through to next processor."""
        if self.next_processor and hasattr(self.next_processor, 'on_start'):
            self.next_processor.on_start(span, parent_context)

    def on_end(self, span):
        """
        Called when span ends - sample before passing to next processor.

        Unsampled spans are dropped and not passed to the next processor.
        """
        if not self.span_sampler.acquire(span):
            return

        if self.next_processor and hasattr(self.next_processor, 'on_end'):
            self.next_processor.on_end(span)

    def shutdown(self):
        """Shutdown processor and log final stats."""
        stats = self.span_sampler.get_stats()
        if stats["total_spans"] > 0:
            logger.info(
                f"Sampling processor shutdown. Final stats: "
                f"{stats['sampled_spans']}/{stats['total_spans']} spans sampled "
                f"({stats['sampled_rate_percent']}%, rate={stats['sample_rate']})"
            )

        if self.next_processor and hasattr(self.next_processor, 'shutdown'):
            self.next_processor.shutdown()

    def force_flush(self, timeout_millis: int = 30000):
        """Force flush - pass through to next processor."""
        if self.next_processor and hasattr(self.next_processor, 'force_flush'):
            return self.next_processor.force_flush(timeout_millis)
        return True
