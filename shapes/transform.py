from __future__ import annotations

from dataclasses import dataclass
import math
import numpy as np


@dataclass(frozen=True, eq=False)
class Transform:
    """
    Homogeneous 2D affine transform paired with an additive color delta.

    geometric: 3x3 matrix acting on column vectors (x, y, 1)
    color: (dh, ds, db) added component-wise on composition
    """
    geometric: np.ndarray  # shape (3, 3)
    color: np.ndarray  # shape (3,)

    def __post_init__(self):
        g = np.array(self.geometric, dtype=float)
        c = np.array(self.color, dtype=float).reshape(-1)
        if g.shape != (3, 3):
            raise ValueError("geometric must be 3x3")
        if c.shape != (3,):
            raise ValueError("color must be length-3")
        g.setflags(write=False)
        c.setflags(write=False)
        object.__setattr__(self, "geometric", g)
        object.__setattr__(self, "color", c)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return bool(np.array_equal(self.geometric, other.geometric) and np.array_equal(self.color, other.color))

    def __hash__(self) -> int:
        # +0.0 folds -0.0 so equal transforms hash alike
        return hash(((self.geometric + 0.0).tobytes(), (self.color + 0.0).tobytes()))

    def __repr__(self) -> str:
        return f"Transform(geometric={self.geometric.tolist()}, color={self.color.tolist()})"

    def isclose(self, other: "Transform", atol: float = 1e-9) -> bool:
        return bool(
            np.allclose(self.geometric, other.geometric, atol=atol)
            and np.allclose(self.color, other.color, atol=atol)
        )

    def apply(self, points_xy: np.ndarray) -> np.ndarray:
        """
        Map a single (x, y) point or an (N, 2) array of points.
        """
        pts = np.asarray(points_xy, dtype=float)
        flat = pts.reshape(-1, 2)
        homogeneous = np.hstack([flat, np.ones((flat.shape[0], 1))])
        mapped = (self.geometric @ homogeneous.T).T[:, :2]
        return mapped.reshape(pts.shape)

    def then(self, after: "Transform") -> "Transform":
        """
        First apply self, then apply 'after'.
        y = after.apply(self.apply(x))
        """
        return compose(after, self)


IDENTITY = Transform(geometric=np.eye(3), color=np.zeros(3))


def _geometric(matrix: np.ndarray) -> Transform:
    return Transform(geometric=matrix, color=np.zeros(3))


def _color(dh: float = 0.0, ds: float = 0.0, db: float = 0.0) -> Transform:
    return Transform(geometric=np.eye(3), color=np.array([dh, ds, db], dtype=float))


def rotate(theta_radians: float) -> Transform:
    c = math.cos(theta_radians)
    s = math.sin(theta_radians)
    return _geometric(np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=float))


def scale(sx: float, sy: float | None = None) -> Transform:
    if sy is None:
        sy = sx
    return _geometric(np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]], dtype=float))


def translate(dx: float, dy: float) -> Transform:
    return _geometric(np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]], dtype=float))


def hue(h: float) -> Transform:
    return _color(dh=h)


def saturation(s: float) -> Transform:
    return _color(ds=s)


def brightness(b: float) -> Transform:
    return _color(db=b)


def compose(*transforms: Transform) -> Transform:
    """
    Left fold from IDENTITY: acc = acc ∘ T_i.

    The first transform is the outermost one: a point p is mapped as
    T1(T2(...Tn(p))).
    """
    acc = IDENTITY
    for t in transforms:
        acc = Transform(geometric=acc.geometric @ t.geometric, color=acc.color + t.color)
    return acc
