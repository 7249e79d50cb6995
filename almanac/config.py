"""Process-wide engine configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import json
import logging
import os
from threading import Lock
from typing import Mapping, Optional

from .solar import compute_sidereal_start

__all__ = ["EngineConfig", "get_config", "load_config"]

LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "ALMANAC_"

_CONFIG: Optional["EngineConfig"] = None
_CONFIG_LOCK = Lock()


@dataclass(frozen=True)
class EngineConfig:
    """Immutable values shared by every computation.

    ``sidereal_start`` is the sidereal-zodiac offset derived from the 1956
    spring equinox; the remaining fields bound the iterative searches.
    """

    sidereal_start: float
    max_depression_iterations: int = 32
    max_bisection_steps: int = 64
    max_new_moon_scan: int = 8
    max_phasis_scan_days: int = 90


_LIMIT_FIELDS = (
    "max_depression_iterations",
    "max_bisection_steps",
    "max_new_moon_scan",
    "max_phasis_scan_days",
)


def _positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """Build an :class:`EngineConfig`, applying ``ALMANAC_*`` overrides from *environ*.

    Raises
    ------
    ValueError
        If an override is not a positive integer.
    """

    if environ is None:
        environ = os.environ
    overrides = {}
    for field in _LIMIT_FIELDS:
        name = ENV_PREFIX + field.upper()
        raw = environ.get(name)
        if raw:
            overrides[field] = _positive_int(name, raw)
    return EngineConfig(sidereal_start=compute_sidereal_start(), **overrides)


def get_config() -> EngineConfig:
    """Return the process-wide configuration, loading it on first use."""

    global _CONFIG

    if _CONFIG is not None:
        return _CONFIG

    with _CONFIG_LOCK:
        if _CONFIG is not None:
            return _CONFIG
        config = load_config()
        _CONFIG = config
        LOGGER.info(json.dumps({"event": "engine_config_loaded", **asdict(config)}))
        return config
