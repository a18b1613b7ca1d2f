"""Configuration loading from TOML files and environment variables.

Priority, lowest to highest:
1. Model defaults
2. Config file (``fast_bernoulli.toml`` in the working directory, then
   ``~/.config/fast_bernoulli/fast_bernoulli.toml``)
3. Environment variables (``FAST_BERNOULLI_*``)
4. Explicit overrides passed to ``load_config``

Example file::

    [sampling]
    probability = 0.01
    seed = 42
    warn_on_clamp = true

    [logging]
    probability = 0.1
    always_pass_level = "WARNING"
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from fast_bernoulli import runtime_config
from fast_bernoulli.errors import ConfigError
from fast_bernoulli.processors.logging_filter import SamplingLogFilter
from fast_bernoulli.processors.sampler import Sampler

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "fast_bernoulli.toml"

ENV_VARS = {
    "FAST_BERNOULLI_PROBABILITY": ("sampling", "probability"),
    "FAST_BERNOULLI_SEED": ("sampling", "seed"),
    "FAST_BERNOULLI_WARN_ON_CLAMP": ("sampling", "warn_on_clamp"),
    "FAST_BERNOULLI_DEBUG": (None, "debug"),
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class SamplingConfig(BaseModel):
    """Settings for the default event sampler."""

    probability: float = Field(1.0, ge=0.0, le=1.0, description="Probability an event is sampled")
    seed: Optional[int] = Field(None, description="Random seed; None draws from OS entropy")
    model_config = {"extra": "forbid"}

    warn_on_clamp: bool = Field(False, description="Warn when a skip count saturates")


class LoggingConfig(BaseModel):
    """Settings for SamplingLogFilter."""

    model_config = {"extra": "forbid"}

    probability: float = Field(1.0, ge=0.0, le=1.0, description="Probability a low-level record passes")
    always_pass_level: Union[int, str] = Field(logging.WARNING, description="Records at or above pass unsampled")

    @field_validator("always_pass_level")
    @classmethod
    def validate_level(cls, v):
        if isinstance(v, str):
            level = logging.getLevelName(v.upper())
            if not isinstance(level, int):
                raise ValueError(f"Unknown logging level: {v}")
            return level
        return v


class FastBernoulliConfig(BaseModel):
    """Top-level configuration."""

    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    debug: bool = False

    model_config = {"extra": "forbid"}


def find_config_file() -> Optional[str]:
    """
    Locate a config file.

    Returns:
        Path of the first existing candidate, or None
    """
    candidates = [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.home() / ".config" / "fast_bernoulli" / CONFIG_FILE_NAME,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return str(candidate)
    return None


def load_toml_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a TOML config file.

    Returns:
        Parsed mapping, or an empty dict when the file does not exist

    Raises:
        ConfigError: If the file is not valid TOML
    """
    path = Path(path)
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError("Invalid TOML config file", {"path": str(path), "error": str(e)}) from e
    logger.debug(f"Loaded config from {path}")
    return data


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError("Invalid boolean environment variable", {"name": name, "value": raw})


def load_env_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect ``FAST_BERNOULLI_*`` environment variables into a nested dict."""
    environ = os.environ if environ is None else environ
    result: Dict[str, Any] = {}
    for name, (section, key) in ENV_VARS.items():
        raw = environ.get(name)
        if raw is None:
            continue
        if key in ("warn_on_clamp", "debug"):
            value: Any = _parse_bool(name, raw)
        else:
            value = raw.strip()
        target = result.setdefault(section, {}) if section else result
        target[key] = value
    return result


def _merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(data: Mapping[str, Any]) -> FastBernoulliConfig:
    """
    Validate a raw config mapping.

    Raises:
        ConfigError: If any value is missing, mistyped or out of range
    """
    try:
        return FastBernoulliConfig.model_validate(dict(data))
    except PydanticValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError("Invalid configuration", {"errors": errors}) from e


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> FastBernoulliConfig:
    """
    Load configuration from file, environment and explicit overrides.

    Args:
        config_file: Explicit file path (None = search with find_config_file)
        overrides: Nested mapping applied last
        environ: Environment mapping (None = os.environ)
    """
    path = config_file if config_file is not None else find_config_file()
    data: Dict[str, Any] = load_toml_config(path) if path else {}
    data = _merge(data, load_env_config(environ))
    if overrides:
        data = _merge(data, overrides)
    return validate_config(data)


def apply_config(config: FastBernoulliConfig) -> None:
    """Push loaded settings into the process-wide runtime configuration."""
    runtime_config.set_default_probability(config.sampling.probability)
    runtime_config.set_seed(config.sampling.seed)
    runtime_config.set_warn_on_clamp(config.sampling.warn_on_clamp)
    runtime_config.set_debug(config.debug)
    if config.debug:
        logging.getLogger("fast_bernoulli").setLevel(logging.DEBUG)


def build_sampler(config: Optional[FastBernoulliConfig] = None) -> Sampler:
    """Create a thread-sharded Sampler for the configured probability and seed."""
    if config is None:
        return Sampler(
            sample_rate=runtime_config.get_default_probability(),
            seed=runtime_config.get_seed(),
        )
    return Sampler(sample_rate=config.sampling.probability, seed=config.sampling.seed)


def build_log_filter(config: FastBernoulliConfig) -> SamplingLogFilter:
    """Create a SamplingLogFilter from the logging section."""
    return SamplingLogFilter(
        probability=config.logging.probability,
        always_pass_level=config.logging.always_pass_level,
        seed=config.sampling.seed,
    )
