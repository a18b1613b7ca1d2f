"""Constant-time Bernoulli sampling with geometric skip counts.

Instead of drawing a fresh random number for every event, the sampler draws
a *skip count*: how many upcoming events to reject before the next one is
accepted. For trials of probability ``P`` skip counts follow a geometric
distribution, and if ``X`` is uniform on ``[0, 1)`` then
``floor(log(X) / log(1 - P))`` has exactly that distribution. The likelihood
of the next ``n`` trials all failing is ``(1 - P) ** n``, so picking the
largest ``n`` with ``(1 - P) ** n >= X`` gives results indistinguishable from
rolling the dice on every trial.

Because trials are independent the skip count is memoryless: it may be
redrawn at any point without biasing later results. ``multi_trial`` relies on
this to decide a run of ``n`` unit trials in O(1), ignoring by how much ``n``
overshoots the remaining skip count.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from fast_bernoulli import runtime_config
from fast_bernoulli.errors import ValidationError, check_probability, check_trial_count
from fast_bernoulli.random_source import as_random_source

logger = logging.getLogger(__name__)

# Skip counts saturate at the range of an unsigned 32-bit counter.
MAX_SKIP_COUNT = 2**32 - 1


class FastBernoulli:
    """
    Fast Bernoulli sampling: each event has equal probability of being sampled.

    The random source is passed to every trial rather than stored, and is only
    called when the skip count runs out. Instances are plain values owned by a
    single thread; see ``fast_bernoulli.processors.Sampler`` for a sharded
    wrapper suitable for concurrent producers.

    Example::

        rng = random.Random()
        bernoulli = FastBernoulli(0.05, rng)
        if bernoulli.trial(rng):
            record_sample(event)
    """

    def __init__(
        self,
        probability: float,
        random_source: Any,
        *,
        warn_on_clamp: Optional[bool] = None,
    ) -> None:
        """
        Create a sampler that accepts events with the given probability.

        Args:
            probability: Target fraction of accepted events, ``0.0 <= p <= 1.0``
            random_source: Callable or generator yielding uniforms in [0, 1)
            warn_on_clamp: Log a warning when a skip count saturates at
                ``MAX_SKIP_COUNT`` (None = use runtime_config default)

        Raises:
            InvalidProbabilityError: If probability is outside [0.0, 1.0]
        """
        self._probability = check_probability(probability)
        self._skip_count = 0
        if warn_on_clamp is None:
            warn_on_clamp = runtime_config.get_warn_on_clamp()
        self._warn_on_clamp = warn_on_clamp
        # log(1 - P), only defined away from the edge cases.
        self._log_complement = (
            math.log1p(-self._probability) if 0.0 < self._probability < 1.0 else None
        )
        self._reset_skip_count(random_source)

    def __repr__(self) -> str:
        return (
            f"FastBernoulli(probability={self._probability!r}, "
            f"skip_count={self._skip_count!r})"
        )

    @property
    def probability(self) -> float:
        """The probability events are sampled with, as given at construction."""
        return self._probability

    @property
    def skip_count(self) -> int:
        """
        How many events will be skipped until the next event is sampled.

        Inaccurate when ``probability == 0.0``: logically this is infinite,
        but it reads as ``MAX_SKIP_COUNT``.
        """
        return self._skip_count

    def trial(self, random_source: Any) -> bool:
        """
        Perform one Bernoulli trial, returning True with the configured probability.

        Call this each time an event occurs to decide whether to sample it. The
        random source is only consulted when the skip count is exhausted.
        """
        if self._skip_count > 0:
            self._skip_count -= 1
            return False

        self._reset_skip_count(random_source)
        return self._probability != 0.0

    def multi_trial(self, n: int, random_source: Any) -> bool:
        """
        Perform ``n`` Bernoulli trials at once.

        Semantically equivalent to calling ``trial()`` ``n`` times and returning
        True if any call did, but runs in O(1). Useful when some events are
        "bigger" than others, e.g. sampling allocations per byte by passing the
        allocation size. Analysis of such samples must account for the size,
        since large events are far more likely to be picked.

        With a skip count of ``s`` the first ``s`` units fail and unit ``s + 1``
        succeeds, so a run of ``n <= s`` units only consumes skip count. In
        particular ``multi_trial(1)`` behaves exactly like ``trial()`` and
        ``multi_trial(0)`` never succeeds. ``multi_trial(skip_count)`` returns
        False on purpose: those units all fall inside the guaranteed-false run.

        Raises:
            ValidationError: If n is not a non-negative int
        """
        n = check_trial_count(n)
        if n <= self._skip_count:
            self._skip_count -= n
            return False

        self._reset_skip_count(random_source)
        return self._probability != 0.0

    def _reset_skip_count(self, random_source: Any) -> None:
        if self._probability == 0.0:
            # Never sample; the trials report False explicitly.
            self._skip_count = MAX_SKIP_COUNT
            return
        if self._probability == 1.0:
            self._skip_count = 0
            return

        x = as_random_source(random_source)()
        if not 0.0 <= x < 1.0:
            raise ValidationError(
                "random source returned a value outside [0.0, 1.0)", {"value": x}
            )
        # log(0) is -inf, so a zero draw is an infinite skip.
        skip = math.log(x) / self._log_complement if x > 0.0 else math.inf
        if skip <= MAX_SKIP_COUNT:
            self._skip_count = int(skip)
            return

        # Saturate. Very low probabilities sample slightly too often.
        self._skip_count = MAX_SKIP_COUNT
        if self._warn_on_clamp:
            logger.warning(
                f"Skip count {skip:.3g} exceeds {MAX_SKIP_COUNT}; clamped "
                f"(probability={self._probability!r})"
            )
        else:
            logger.debug(f"Skip count clamped to {MAX_SKIP_COUNT}")
