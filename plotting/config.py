from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging
import numbers
import os

logger = logging.getLogger(__name__)

DEFAULT_MAX_RENDER_CYCLES = 100
MAX_RENDER_CYCLES_ENV = "FRACTAL_MAX_RENDER_CYCLES"


def env_int(name: str, default: int, *, min_value: Optional[int] = None) -> int:
    """
    Integer environment variable; unset or malformed values give 'default',
    values below 'min_value' are clamped.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        val = int(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not an integer", name, raw)
        return default
    if min_value is not None and val < min_value:
        val = min_value
    return val


def _check_cycles(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise ValueError(f"maximum render cycles must be an integer, got {n!r}")
    n = int(n)
    if n < 0:
        raise ValueError("maximum render cycles must be >= 0")
    return n


_maximum_render_cycles = env_int(MAX_RENDER_CYCLES_ENV, DEFAULT_MAX_RENDER_CYCLES, min_value=0)


def get_maximum_render_cycles() -> int:
    return _maximum_render_cycles


def set_maximum_render_cycles(n: int) -> None:
    global _maximum_render_cycles
    _maximum_render_cycles = _check_cycles(n)


def reload_from_env() -> None:
    global _maximum_render_cycles
    _maximum_render_cycles = env_int(MAX_RENDER_CYCLES_ENV, DEFAULT_MAX_RENDER_CYCLES, min_value=0)


@dataclass(frozen=True)
class RenderConfig:
    max_render_cycles: int = DEFAULT_MAX_RENDER_CYCLES
    pen_color: str = "black"
    pen_width: float = 1.0
    brush_color: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "max_render_cycles", _check_cycles(self.max_render_cycles))


def current_config(**overrides) -> RenderConfig:
    """
    Snapshot of the process-wide cycle budget, with optional style overrides.
    """
    overrides.setdefault("max_render_cycles", get_maximum_render_cycles())
    return RenderConfig(**overrides)
