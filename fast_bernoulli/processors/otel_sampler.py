"""OpenTelemetry SDK trace sampler backed by FastBernoulli."""

from __future__ import annotations

from typing import Optional, Sequence

from opentelemetry.context import Context
from opentelemetry.sdk.trace.sampling import (
    Decision,
    ParentBased,
    Sampler as OTelSampler,
    SamplingResult as OTelSamplingResult,
)
from opentelemetry.trace import Link, SpanKind, get_current_span
from opentelemetry.trace.span import TraceState
from opentelemetry.util.types import Attributes

from fast_bernoulli.processors.sampler import Sampler


def _parent_trace_state(parent_context: Optional[Context]) -> Optional[TraceState]:
    parent_span_context = get_current_span(parent_context).get_span_context()
    if parent_span_context is None or not parent_span_context.is_valid:
        return None
    return parent_span_context.trace_state


class FastBernoulliTraceSampler(OTelSampler):
    """
    Samples root spans with a fixed probability without a random draw per span.

    Unlike ``TraceIdRatioBased`` the decision does not depend on the trace id,
    so it is not consistent across services; wrap it in ``ParentBased`` (see
    ``parent_based_fast_bernoulli``) to make children follow their parent.
    """

    def __init__(self, rate: float, seed: Optional[int] = None) -> None:
        self._sampler = Sampler(sample_rate=rate, seed=seed)

    @property
    def rate(self) -> float:
        return self._sampler.sample_rate

    def should_sample(
        self,
        parent_context: Optional[Context],
        trace_id: int,
        name: str,
        kind: Optional[SpanKind] = None,
        attributes: Attributes = None,
        links: Optional[Sequence[Link]] = None,
        trace_state: Optional[TraceState] = None,
    ) -> OTelSamplingResult:
        if self._sampler.should_sample().sampled:
            decision = Decision.RECORD_AND_SAMPLE
        else:
            decision = Decision.DROP
            attributes = None
        return OTelSamplingResult(
            decision,
            attributes,
            _parent_trace_state(parent_context),
        )

    def get_description(self) -> str:
        return f"FastBernoulliSampler{{{self.rate}}}"


def parent_based_fast_bernoulli(rate: float, seed: Optional[int] = None) -> ParentBased:
    """Sample root spans with ``rate``; children inherit their parent's decision."""
    return ParentBased(root=FastBernoulliTraceSampler(rate, seed=seed))
