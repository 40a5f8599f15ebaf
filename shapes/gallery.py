from __future__ import annotations

from typing import Callable, Dict

from .geometry import Shape, define_shape, loop_shape, make_circle, make_square
from .transform import brightness, hue, rotate, scale, translate


@define_shape
def sierpinski_carpet():
    # the middle ninth is left open, the other eight cells recurse
    return [
        make_square(scale(1.0 / 3.0)),
        loop_shape(
            [3, 3],
            lambda i, j: []
            if (i, j) == (1, 1)
            else [sierpinski_carpet(translate((i - 1) / 3.0, (j - 1) / 3.0), scale(1.0 / 3.0))],
        ),
    ]


@define_shape
def square_spiral():
    return [
        make_square(),
        square_spiral(rotate(0.25), translate(0.0, 0.95), scale(0.9), hue(12.0)),
    ]


@define_shape
def circle_tree():
    return [
        make_circle(scale(0.5)),
        circle_tree(translate(-0.6, 1.1), rotate(0.45), scale(0.6), brightness(-0.08)),
        circle_tree(translate(0.6, 1.1), rotate(-0.45), scale(0.6), brightness(-0.08)),
    ]


def checkerboard(n: int = 8) -> Shape:
    """
    n x n board of unit squares, dark cells only.
    """
    return loop_shape(
        [n, n],
        lambda i, j: [make_square(translate(float(i), float(j)))] if (i + j) % 2 == 0 else [],
        translate(-(n - 1) / 2.0, -(n - 1) / 2.0),
    )


GALLERY: Dict[str, Callable[[], Shape]] = {
    "sierpinski_carpet": sierpinski_carpet,
    "square_spiral": square_spiral,
    "circle_tree": circle_tree,
    "checkerboard": checkerboard,
}


def get_shape(name: str) -> Shape:
    try:
        factory = GALLERY[name]
    except KeyError:
        raise ValueError(f"unknown gallery shape: {name!r} (choose from {', '.join(sorted(GALLERY))})") from None
    return factory()
