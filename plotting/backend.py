from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Protocol, Tuple
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import hsv_to_rgb


DrawKind = Literal["polygon", "path"]


class DrawingBackend(Protocol):
    """
    Device context the render engine draws into. Vertices are (N, 2) arrays;
    'color' is the resolved (dh, ds, db) delta, which backends may ignore.
    """
    def draw_polygon(self, vertices: np.ndarray, color: Optional[np.ndarray] = None) -> None: ...

    def draw_path(self, vertices: np.ndarray, color: Optional[np.ndarray] = None) -> None: ...

    def set_pen(self, color: str, width: float) -> None: ...

    def set_brush(self, color: Optional[str]) -> None: ...


@dataclass(frozen=True, eq=False)
class DrawCall:
    kind: DrawKind
    vertices: np.ndarray
    color: Optional[np.ndarray] = None


@dataclass
class RecordingBackend:
    """
    Keeps every draw call in order; useful for tests, bounds and replays.
    """
    calls: List[DrawCall] = field(default_factory=list)
    pen: Optional[Tuple[str, float]] = None
    brush: Optional[str] = None
    style_changes: int = 0

    def draw_polygon(self, vertices: np.ndarray, color: Optional[np.ndarray] = None) -> None:
        self.calls.append(DrawCall("polygon", np.array(vertices, dtype=float), color))

    def draw_path(self, vertices: np.ndarray, color: Optional[np.ndarray] = None) -> None:
        self.calls.append(DrawCall("path", np.array(vertices, dtype=float), color))

    def set_pen(self, color: str, width: float) -> None:
        self.pen = (color, float(width))
        self.style_changes += 1

    def set_brush(self, color: Optional[str]) -> None:
        self.brush = color
        self.style_changes += 1

    @property
    def kinds(self) -> List[DrawKind]:
        return [c.kind for c in self.calls]

    def replay(self, backend: DrawingBackend) -> None:
        if self.pen is not None:
            backend.set_pen(*self.pen)
        backend.set_brush(self.brush)
        for call in self.calls:
            if call.kind == "polygon":
                backend.draw_polygon(call.vertices, color=call.color)
            else:
                backend.draw_path(call.vertices, color=call.color)


def delta_to_rgb(delta: Optional[np.ndarray], base_hsv: Tuple[float, float, float]) -> np.ndarray:
    """
    Add a (dh, ds, db) delta to a base HSV color. Hue delta is in degrees and
    wraps; saturation and brightness are clamped to [0, 1].
    """
    h, s, v = base_hsv
    if delta is not None:
        dh, ds, db = (float(x) for x in np.asarray(delta, dtype=float).reshape(3,))
        h = (h + dh / 360.0) % 1.0
        s = float(np.clip(s + ds, 0.0, 1.0))
        v = float(np.clip(v + db, 0.0, 1.0))
    return hsv_to_rgb(np.array([h, s, v], dtype=float))


class MatplotlibBackend:
    """
    Draws onto a matplotlib Axes. Color deltas are only honored with
    use_color=True; otherwise the pen/brush set at render start are used.
    """
    def __init__(
        self,
        ax: plt.Axes,
        use_color: bool = False,
        base_hsv: Tuple[float, float, float] = (0.6, 0.7, 0.8),
    ):
        self.ax = ax
        self.use_color = use_color
        self.base_hsv = base_hsv
        self.pen_color: str = "black"
        self.pen_width: float = 1.0
        self.brush_color: Optional[str] = None

    def set_pen(self, color: str, width: float) -> None:
        self.pen_color = color
        self.pen_width = float(width)

    def set_brush(self, color: Optional[str]) -> None:
        self.brush_color = color

    def _stroke(self, color: Optional[np.ndarray]):
        if self.use_color:
            return delta_to_rgb(color, self.base_hsv)
        return self.pen_color

    def draw_polygon(self, vertices: np.ndarray, color: Optional[np.ndarray] = None) -> None:
        x, y = vertices[:, 0], vertices[:, 1]
        ec = self._stroke(color)
        if self.brush_color is None:
            self.ax.fill(x, y, fill=False, ec=ec, linewidth=self.pen_width, joinstyle="round")
        else:
            fc = ec if self.use_color else self.brush_color
            self.ax.fill(x, y, fc=fc, ec=ec, linewidth=self.pen_width, joinstyle="round")

    def draw_path(self, vertices: np.ndarray, color: Optional[np.ndarray] = None) -> None:
        self.ax.plot(vertices[:, 0], vertices[:, 1], color=self._stroke(color), linewidth=self.pen_width)
