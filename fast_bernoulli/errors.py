"""fast_bernoulli error hierarchy and exceptions."""

from __future__ import annotations

import operator


class FastBernoulliError(Exception):
    """Base exception for all fast_bernoulli errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(FastBernoulliError):
    """Raised when configuration is invalid or conflicting."""
    pass


class ValidationError(FastBernoulliError):
    """Raised when an argument fails validation."""
    pass


class InvalidProbabilityError(ValidationError, ValueError):
    """Raised when a probability lies outside ``0.0 <= p <= 1.0``."""

    def __init__(self, probability, name: str = "probability"):
        super().__init__(
            f"`{name}` must be in the range `0.0 <= {name} <= 1.0`",
            {name: probability},
        )
        self.probability = probability


def check_probability(value, name: str = "probability") -> float:
    """Return ``value`` as a float, raising if it is not a valid probability."""
    try:
        probability = float(value)
    except (TypeError, ValueError):
        raise InvalidProbabilityError(value, name) from None
    # NaN fails both comparisons.
    if not 0.0 <= probability <= 1.0:
        raise InvalidProbabilityError(value, name)
    return probability


def check_trial_count(value, name: str = "n") -> int:
    """Return ``value`` as an int, raising unless it is a non-negative integer."""
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a non-negative int", {name: value})
    try:
        count = operator.index(value)
    except TypeError:
        raise ValidationError(f"{name} must be a non-negative int", {name: value}) from None
    if count < 0:
        raise ValidationError(f"{name} must be a non-negative int", {name: value})
    return count
