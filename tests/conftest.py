import matplotlib

matplotlib.use("Agg")

import pytest

from plotting import config


@pytest.fixture(autouse=True)
def _restore_render_cycles():
    saved = config.get_maximum_render_cycles()
    yield
    config.set_maximum_render_cycles(saved)
