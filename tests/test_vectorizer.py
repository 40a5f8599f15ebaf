import numpy as np
import pytest
from shapely.geometry import LineString, Polygon

from shapes import make_circle, make_square, scale, translate, union
from plotting import RecordingBackend, RenderConfig, render_shape
from plotting.backend import DrawCall
from plotting.vectorizer import DEFAULT_FRAME, call_to_shapely, calls_to_shapely, drawing_bounds


def _record(shape):
    backend = RecordingBackend()
    render_shape(shape, backend, RenderConfig())
    return backend.calls


def test_calls_become_shapely_geometries():
    calls = _record(union([make_square(), make_circle()]))
    geoms = calls_to_shapely(calls)
    assert isinstance(geoms[0], Polygon)
    assert isinstance(geoms[1], LineString)
    assert geoms[0].area == pytest.approx(1.0)
    assert geoms[1].is_ring


def test_unknown_kind_rejected():
    with pytest.raises(ValueError):
        call_to_shapely(DrawCall("spline", np.zeros((3, 2))))


def test_bounds_are_square_and_padded():
    calls = _record(union([make_square(), make_square(translate(3.0, 0.0))]))
    xlim, ylim = drawing_bounds(calls, margin=0.5)
    assert xlim == pytest.approx((-1.0, 4.0))
    assert ylim == pytest.approx((-2.5, 2.5))


def test_collapsed_geometry_is_ignored():
    calls = _record(union([make_square(scale(0.0)), make_circle(scale(0.0))]))
    assert calls_to_shapely(calls) == []
    assert drawing_bounds(calls) == DEFAULT_FRAME


def test_empty_drawing_uses_default_frame():
    assert drawing_bounds([]) == DEFAULT_FRAME


def test_polygon_flattened_on_one_axis_stays_in_frame():
    calls = _record(union([make_square(scale(0.1)), make_square(translate(5.0, 0.0), scale(4.0, 0.0))]))
    geoms = calls_to_shapely(calls)
    assert len(geoms) == 2
    assert isinstance(geoms[1], LineString)
    xlim, ylim = drawing_bounds(calls, margin=0.0)
    assert xlim == pytest.approx((-0.05, 7.0))
    assert ylim[0] <= -0.05 and ylim[1] >= 0.05
