from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Sequence, Tuple, Union
import functools
import itertools
import math
import numpy as np

from .transform import (
    Transform,
    compose,
    rotate,
    scale,
    translate,
    hue,
    saturation,
    brightness,
)

if TYPE_CHECKING:
    from plotting.backend import DrawingBackend


# A Renderer draws what it is directly responsible for and returns its children.
Renderer = Callable[["DrawingBackend"], List["Renderer"]]

CIRCLE_ANGLE_STEP = 0.1

UNIT_SQUARE_VERTICES = np.array(
    [
        [-0.5, -0.5],
        [0.5, -0.5],
        [0.5, 0.5],
        [-0.5, 0.5],
    ],
    dtype=float,
)


def _unit_circle_vertices(step: float = CIRCLE_ANGLE_STEP) -> np.ndarray:
    angles = np.arange(0.0, 2.0 * math.pi, step)
    pts = np.stack([np.cos(angles), np.sin(angles)], axis=1)
    # repeat the starting point so the path closes
    return np.vstack([pts, pts[:1]])


UNIT_CIRCLE_VERTICES = _unit_circle_vertices()


class Shape:
    transforms: Tuple[Transform, ...] = ()

    def resolve(self, accumulated: Transform) -> Renderer:
        raise NotImplementedError

    def __call__(self, accumulated: Transform) -> Renderer:
        return self.resolve(accumulated)

    def resolved_transform(self, accumulated: Transform) -> Transform:
        # ambient transform outermost, local transforms applied to points first
        return compose(accumulated, *self.transforms)

    # ---- Composition DSL ----
    def union(self, other: "Shape") -> "UnionShape":
        return UnionShape(shapes=(self, other))

    def __or__(self, other: "Shape") -> "UnionShape":
        return self.union(other)

    # ---- Transform helpers ----
    def transformed(self, *outer: Transform) -> "Shape":
        """
        Copy of this shape with 'outer' applied after its own local transforms.
        """
        return replace(self, transforms=tuple(outer) + tuple(self.transforms))

    def translate(self, dx: float, dy: float) -> "Shape":
        return self.transformed(translate(dx, dy))

    def scale(self, sx: float, sy: float | None = None) -> "Shape":
        return self.transformed(scale(sx, sy))

    def rotate(self, theta_radians: float) -> "Shape":
        return self.transformed(rotate(theta_radians))

    def hue(self, h: float) -> "Shape":
        return self.transformed(hue(h))

    def saturation(self, s: float) -> "Shape":
        return self.transformed(saturation(s))

    def brightness(self, b: float) -> "Shape":
        return self.transformed(brightness(b))


@dataclass(frozen=True)
class Primitive(Shape):
    """
    Terminal shape: resolves the final transform and draws a unit outline.
    """
    transforms: Tuple[Transform, ...] = ()

    def unit_vertices(self) -> np.ndarray:
        raise NotImplementedError

    def draw(self, backend: "DrawingBackend", vertices: np.ndarray, color: np.ndarray) -> None:
        raise NotImplementedError

    def resolve(self, accumulated: Transform) -> Renderer:
        final = self.resolved_transform(accumulated)

        def render(backend: "DrawingBackend") -> List[Renderer]:
            self.draw(backend, final.apply(self.unit_vertices()), final.color)
            return []

        return render


@dataclass(frozen=True)
class Square(Primitive):
    """
    Axis-aligned square centered at origin with side length 1.
    """
    def unit_vertices(self) -> np.ndarray:
        return UNIT_SQUARE_VERTICES

    def draw(self, backend: "DrawingBackend", vertices: np.ndarray, color: np.ndarray) -> None:
        backend.draw_polygon(vertices, color=color)


@dataclass(frozen=True)
class Circle(Primitive):
    """
    Unit circle centered at origin, drawn as a closed polyline.
    """
    def unit_vertices(self) -> np.ndarray:
        return UNIT_CIRCLE_VERTICES

    def draw(self, backend: "DrawingBackend", vertices: np.ndarray, color: np.ndarray) -> None:
        backend.draw_path(vertices, color=color)


@dataclass(frozen=True)
class UnionShape(Shape):
    shapes: Tuple[Shape, ...] = ()
    transforms: Tuple[Transform, ...] = ()

    def members(self) -> Sequence[Shape]:
        return self.shapes

    def resolve(self, accumulated: Transform) -> Renderer:
        t = self.resolved_transform(accumulated)

        def render(backend: "DrawingBackend") -> List[Renderer]:
            # members are only evaluated here so recursive definitions unfold one level per call
            return [s(t) for s in self.members()]

        return render


@dataclass(frozen=True)
class DefinedShape(UnionShape):
    """
    Named union whose body is evaluated lazily, so it may refer to itself.
    """
    body: Optional[Callable[[], Sequence[Shape]]] = None
    name: str = ""

    def members(self) -> Sequence[Shape]:
        return list(self.body()) if self.body is not None else []

    def __repr__(self) -> str:
        return f"DefinedShape({self.name}, transforms={len(self.transforms)})"


IndexRange = Union[int, range, Iterable[int]]


@dataclass(frozen=True)
class LoopShape(UnionShape):
    """
    Union generated by evaluating 'body' once per tuple of the Cartesian
    product of 'index_ranges' (lexicographic order).
    """
    index_ranges: Tuple[Sequence[int], ...] = ()
    body: Optional[Callable[..., Sequence[Shape]]] = None

    def members(self) -> Sequence[Shape]:
        if self.body is None:
            return []
        out: List[Shape] = []
        for indices in itertools.product(*self.index_ranges):
            out.extend(self.body(*indices))
        return out


def _as_range(r: IndexRange) -> Sequence[int]:
    if isinstance(r, int):
        return range(r)
    if isinstance(r, range):
        return r
    return tuple(r)


# ---- Public constructors ----
def make_square(*transforms: Transform) -> Square:
    return Square(transforms=tuple(transforms))


def make_circle(*transforms: Transform) -> Circle:
    return Circle(transforms=tuple(transforms))


def union(shapes: Iterable[Shape], *transforms: Transform) -> UnionShape:
    return UnionShape(shapes=tuple(shapes), transforms=tuple(transforms))


def define_shape(body: Callable[[], Sequence[Shape]]) -> Callable[..., DefinedShape]:
    """
    Turn a function returning a list of sub-shapes into a named shape
    constructor accepting local transforms. The body runs at render time,
    so it can use the constructor it defines:

        @define_shape
        def spiral():
            return [make_square(), spiral(translate(1.0, 0.0), rotate(0.3), scale(0.9))]
    """
    @functools.wraps(body)
    def constructor(*transforms: Transform) -> DefinedShape:
        return DefinedShape(transforms=tuple(transforms), body=body, name=body.__name__)

    return constructor


def loop_shape(
    index_ranges: Sequence[IndexRange],
    body: Callable[..., Sequence[Shape]],
    *transforms: Transform,
) -> LoopShape:
    """
    Generated union. Integers in 'index_ranges' mean range(n); 'body' receives
    one index per range and returns the sub-shapes for that iteration.
    """
    ranges = tuple(_as_range(r) for r in index_ranges)
    return LoopShape(transforms=tuple(transforms), index_ranges=ranges, body=body)


def define_shape_prob(*args, **kwargs):
    raise NotImplementedError(
        "define_shape_prob: probability-weighted shape selection is not implemented"
    )
