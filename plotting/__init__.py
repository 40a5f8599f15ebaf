from .backend import DrawingBackend, DrawCall, RecordingBackend, MatplotlibBackend
from .config import (
    DEFAULT_MAX_RENDER_CYCLES,
    RenderConfig,
    current_config,
    get_maximum_render_cycles,
    set_maximum_render_cycles,
)
from .engine import RenderStats, render_shape
from .renderer import draw_shape_on_axis, render_to_file, render_gallery_grid
