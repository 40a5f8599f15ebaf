import math

import numpy as np
import pytest

from shapes import (
    IDENTITY,
    Transform,
    brightness,
    compose,
    hue,
    rotate,
    saturation,
    scale,
    translate,
)


SAMPLES = [
    translate(1.5, -2.0),
    rotate(0.7),
    scale(2.0, 0.5),
    hue(30.0),
    compose(translate(3.0, 1.0), rotate(-1.2), scale(0.3), saturation(0.2), brightness(-0.1)),
]


@pytest.mark.parametrize("t", SAMPLES)
def test_identity_is_two_sided(t):
    assert compose(IDENTITY, t) == t
    assert compose(t, IDENTITY) == t


def test_compose_without_arguments_is_identity():
    assert compose() == IDENTITY


@pytest.mark.parametrize("x,y", [(0.0, 0.0), (1.0, 2.0), (-3.25, 7.5), (1e6, -1e-6)])
def test_translate_inverse_is_identity(x, y):
    assert compose(translate(x, y), translate(-x, -y)) == IDENTITY


@pytest.mark.parametrize("theta", [0.0, 0.3, math.pi / 2, 2.5, -4.0])
def test_rotate_inverse_is_identity(theta):
    t = compose(rotate(theta), rotate(-theta))
    np.testing.assert_allclose(t.geometric, IDENTITY.geometric, atol=1e-12)


@pytest.mark.parametrize("x,y", [(2.0, 2.0), (3.0, 0.25), (-1.5, 7.0)])
def test_scale_inverse_is_identity(x, y):
    t = compose(scale(x, y), scale(1.0 / x, 1.0 / y))
    assert t.isclose(IDENTITY)


def test_neutral_constructors_equal_identity():
    assert translate(0, 0) == IDENTITY
    assert rotate(0) == IDENTITY
    assert scale(1, 1) == IDENTITY
    assert hue(0) == IDENTITY


def test_uniform_scale_default():
    assert scale(3.0) == scale(3.0, 3.0)


def test_local_transform_applies_first():
    # scale is innermost: no effect at the origin, translate then shifts it
    t = compose(translate(1, 0), scale(2, 1))
    np.testing.assert_allclose(t.apply((0.0, 0.0)), [1.0, 0.0])
    np.testing.assert_allclose(t.apply((1.0, 0.0)), [3.0, 0.0])


def test_composition_is_not_commutative_geometrically():
    a = compose(translate(1, 0), rotate(math.pi / 2))
    b = compose(rotate(math.pi / 2), translate(1, 0))
    np.testing.assert_allclose(a.apply((1.0, 0.0)), [1.0, 1.0], atol=1e-12)
    np.testing.assert_allclose(b.apply((1.0, 0.0)), [0.0, 2.0], atol=1e-12)


def test_composition_is_associative():
    a, b, c = translate(1, 2), rotate(0.4), scale(2, 3)
    left = compose(compose(a, b), c)
    right = compose(a, compose(b, c))
    assert left.isclose(right)
    assert compose(a, b, c).isclose(left)


def test_color_deltas_add():
    t = compose(hue(10.0), saturation(0.2), brightness(-0.3), hue(5.0))
    np.testing.assert_array_equal(t.color, [15.0, 0.2, -0.3])
    np.testing.assert_array_equal(t.geometric, np.eye(3))
    assert compose(hue(1.0), brightness(2.0)) == compose(brightness(2.0), hue(1.0))


def test_geometric_constructors_have_no_color():
    for t in (rotate(1.0), scale(2.0), translate(3.0, 4.0)):
        np.testing.assert_array_equal(t.color, np.zeros(3))


def test_then_applies_self_first():
    t = scale(2.0).then(translate(1.0, 0.0))
    np.testing.assert_allclose(t.apply((1.0, 1.0)), [3.0, 2.0])


def test_apply_maps_point_arrays():
    pts = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
    out = compose(translate(1.0, 1.0), rotate(math.pi / 2)).apply(pts)
    np.testing.assert_allclose(out, [[1.0, 1.0], [1.0, 2.0], [0.0, 1.0]], atol=1e-12)


def test_zero_scale_collapses_geometry():
    out = scale(0.0).apply(np.array([[1.0, 2.0], [-3.0, 4.0]]))
    np.testing.assert_array_equal(out, np.zeros((2, 2)))


def test_transforms_are_hashable_and_immutable():
    assert hash(translate(1, 2)) == hash(translate(1, 2))
    assert len({rotate(0), IDENTITY, scale(1)}) == 1
    with pytest.raises(ValueError):
        translate(1, 2).geometric[0, 0] = 5.0


def test_invalid_shapes_rejected():
    with pytest.raises(ValueError):
        Transform(geometric=np.eye(2), color=np.zeros(3))
    with pytest.raises(ValueError):
        Transform(geometric=np.eye(3), color=np.zeros(2))
