import numpy as np
import pytest

from shapes.gallery import GALLERY, checkerboard, get_shape, sierpinski_carpet
from plotting import RecordingBackend, RenderConfig, render_shape


@pytest.mark.parametrize("name", sorted(GALLERY))
def test_gallery_shapes_render_within_budget(name):
    backend = RecordingBackend()
    stats = render_shape(get_shape(name), backend, RenderConfig(max_render_cycles=60))
    assert stats.cycles <= 61
    assert backend.calls


def test_unknown_gallery_name():
    with pytest.raises(ValueError, match="unknown gallery shape"):
        get_shape("mandelbrot")


def test_checkerboard_is_finite_and_centered():
    backend = RecordingBackend()
    stats = render_shape(checkerboard(4), backend, RenderConfig())
    assert not stats.truncated
    assert len(backend.calls) == 8
    centers = np.array([c.vertices.mean(axis=0) for c in backend.calls])
    np.testing.assert_allclose(centers.mean(axis=0), [0.0, 0.0], atol=1e-12)


def test_sierpinski_carpet_first_level():
    backend = RecordingBackend()
    # root, then its hole square, then the loop that yields the eight cells
    render_shape(sierpinski_carpet(), backend, RenderConfig(max_render_cycles=2))
    assert backend.kinds == ["polygon"]
    np.testing.assert_allclose(np.ptp(backend.calls[0].vertices, axis=0), [1.0 / 3.0, 1.0 / 3.0])
