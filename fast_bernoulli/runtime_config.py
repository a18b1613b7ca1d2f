"""Runtime configuration state management."""

from typing import Optional

# Global runtime configuration state
_config = {
    "default_probability": 1.0,
    "warn_on_clamp": False,
    "seed": None,
    "debug": False,
}


def set_default_probability(value: float) -> None:
    _config["default_probability"] = value


def get_default_probability() -> float:
    return _config["default_probability"]


def set_warn_on_clamp(value: bool) -> None:
    _config["warn_on_clamp"] = value


def get_warn_on_clamp() -> bool:
    return _config["warn_on_clamp"]


def set_seed(value: Optional[int]) -> None:
    _config["seed"] = value


def get_seed() -> Optional[int]:
    return _config["seed"]


def set_debug(value: bool) -> None:
    _config["debug"] = value


def get_debug() -> bool:
    return _config["debug"]


def reset() -> None:
    """Restore every runtime setting to its default."""
    _config.update(
        default_probability=1.0,
        warn_on_clamp=False,
        seed=None,
        debug=False,
    )
