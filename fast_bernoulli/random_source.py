"""Uniform random sources consumed by the samplers.

A random source is any zero-argument callable returning a float uniformly
distributed in ``[0.0, 1.0)``. The samplers treat it as an opaque capability:
they never seed, reseed or otherwise configure a source they are handed.
"""

from __future__ import annotations

import random
from typing import Any, Callable, Optional

from fast_bernoulli.errors import ValidationError

RandomSource = Callable[[], float]


def as_random_source(source: Any) -> RandomSource:
    """
    Normalize ``source`` into a zero-argument callable.

    Accepts plain callables (``random.random``) as well as generator objects
    exposing a ``random()`` method (``random.Random``, ``random.SystemRandom``,
    ``numpy.random.Generator``).
    """
    draw = getattr(source, "random", None)
    if callable(draw):
        return draw
    if callable(source):
        return source
    raise ValidationError(
        "random source must be callable or expose a random() method",
        {"type": type(source).__name__},
    )


def new_random_source(seed: Optional[int] = None) -> RandomSource:
    """
    Create an independent source backed by its own ``random.Random``.

    With ``seed`` the sequence is reproducible; without it the generator is
    seeded from OS entropy.
    """
    return random.Random(seed).random
