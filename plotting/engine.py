from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional
import logging

from shapes import IDENTITY, Renderer, Shape

from .backend import DrawingBackend
from .config import RenderConfig, current_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderStats:
    cycles: int
    pending: int

    @property
    def truncated(self) -> bool:
        return self.pending > 0


def render_shape(shape: Shape, backend: DrawingBackend, config: Optional[RenderConfig] = None) -> RenderStats:
    """
    Bounded breadth-first expansion of 'shape' from the identity transform.

    Each cycle pops one renderer, invokes it against 'backend' and queues its
    children in order. Stops when the queue is empty or once more than
    'max_render_cycles' cycles would run. Running out of budget only
    truncates the drawing.
    """
    cfg = config if config is not None else current_config()
    max_cycles = cfg.max_render_cycles
    backend.set_pen(cfg.pen_color, cfg.pen_width)
    backend.set_brush(cfg.brush_color)

    queue: Deque[Renderer] = deque([shape(IDENTITY)])
    cycles = 0
    while queue and cycles <= max_cycles:
        renderer = queue.popleft()
        queue.extend(renderer(backend))
        cycles += 1

    stats = RenderStats(cycles=cycles, pending=len(queue))
    if stats.truncated:
        logger.info("render budget of %d cycles exhausted, %d renderers left unexpanded", max_cycles, stats.pending)
    else:
        logger.debug("render finished in %d cycles", cycles)
    return stats
