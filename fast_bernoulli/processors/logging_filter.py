"""Logging filter that samples low-severity records."""

from __future__ import annotations

import logging
from typing import Optional, Union

from fast_bernoulli.errors import ValidationError
from fast_bernoulli.processors.sampler import Sampler


class SamplingLogFilter(logging.Filter):
    """
    Passes records at or above ``always_pass_level``; samples the rest.

    Attach it to a handler (or logger) emitting high-volume debug/info output
    to keep roughly ``probability`` of those records.
    """

    def __init__(
        self,
        probability: float,
        always_pass_level: Union[int, str] = logging.WARNING,
        seed: Optional[int] = None,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self.sampler = Sampler(sample_rate=probability, seed=seed)
        if isinstance(always_pass_level, str):
            always_pass_level = logging.getLevelName(always_pass_level.upper())
        if not isinstance(always_pass_level, int):
            raise ValidationError("unknown logging level", {"level": always_pass_level})
        self.always_pass_level = always_pass_level

    @property
    def probability(self) -> float:
        return self.sampler.sample_rate

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return False
        if record.levelno >= self.always_pass_level:
            return True
        return self.sampler.should_sample().sampled
