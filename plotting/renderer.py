from __future__ import annotations

from typing import Optional, Sequence, Tuple
import io
import logging
import os

import matplotlib.pyplot as plt
from PIL import Image

from shapes import Shape

from .backend import MatplotlibBackend, RecordingBackend
from .config import RenderConfig
from .engine import RenderStats, render_shape
from .vectorizer import drawing_bounds

logger = logging.getLogger(__name__)


def draw_shape_on_axis(
    ax: plt.Axes,
    shape: Shape,
    config: Optional[RenderConfig] = None,
    use_color: bool = False,
    margin: float = 0.1,
    title: Optional[str] = None,
) -> RenderStats:
    """
    Expands the shape once into a recording, frames the axis around the
    recorded geometry, then replays the calls onto matplotlib.
    """
    recording = RecordingBackend()
    stats = render_shape(shape, recording, config)
    xlim, ylim = drawing_bounds(recording.calls, margin=margin)

    ax.set_aspect("equal")
    ax.set_xlim(*xlim)
    ax.set_ylim(*ylim)
    ax.axis("off")
    if title:
        ax.set_title(title, fontsize=10, color="black")

    recording.replay(MatplotlibBackend(ax, use_color=use_color))
    logger.debug("drew %d calls on axis (%d cycles)", len(recording.calls), stats.cycles)
    return stats


def render_to_file(
    shape: Shape,
    out_path: Optional[str],
    config: Optional[RenderConfig] = None,
    figsize: Tuple[float, float] = (6.0, 6.0),
    title: Optional[str] = None,
    use_color: bool = False,
    dpi: int = 220,
    format: str = "png",
    transparent: bool = False,
    return_image: bool = False,
) -> Optional[Image.Image]:
    """
    Render to a PNG/SVG file, or to an in-memory Pillow image when
    return_image is set (PNG only).
    """
    if format not in ("png", "svg"):
        raise ValueError(f"Unsupported format {format!r}; use 'png' or 'svg'.")
    if return_image and format != "png":
        raise ValueError("In-memory rendering is only available for PNG.")
    if out_path is None and not return_image:
        raise ValueError(f"{format.upper()} rendering requires an output path (out_path).")

    fig, ax = plt.subplots(figsize=figsize)
    draw_shape_on_axis(ax, shape, config=config, use_color=use_color, title=title)

    savefig_kwargs = dict(
        format=format,
        dpi=dpi,
        bbox_inches="tight",
        pad_inches=0,
        transparent=transparent,
        facecolor="white",
    )
    if return_image:
        buffer = io.BytesIO()
        fig.savefig(buffer, **savefig_kwargs)
        plt.close(fig)
        buffer.seek(0)
        image = Image.open(buffer)
        image.load()
        return image

    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    fig.savefig(out_path, **savefig_kwargs)
    plt.close(fig)
    return None


def render_gallery_grid(
    shapes: Sequence[Shape],
    out_path: str,
    cols: int = 4,
    titles: Optional[Sequence[str]] = None,
    config: Optional[RenderConfig] = None,
    figsize_per_cell: Tuple[float, float] = (3.0, 3.0),
    use_color: bool = False,
) -> None:
    """
    Renders a grid of shapes, one per cell, and saves it as PNG or SVG
    depending on the file extension.
    """
    n = len(shapes)
    cols = max(1, cols)
    rows = max(1, (n + cols - 1) // cols)
    fig_w = figsize_per_cell[0] * cols
    fig_h = figsize_per_cell[1] * rows

    fig, axes = plt.subplots(rows, cols, figsize=(fig_w, fig_h), constrained_layout=True, squeeze=False)
    fig.patch.set_facecolor("white")

    for idx, shape in enumerate(shapes):
        ax = axes[idx // cols, idx % cols]
        title = titles[idx] if titles is not None else f"{idx}"
        draw_shape_on_axis(ax, shape, config=config, use_color=use_color, title=title)

    for idx in range(n, rows * cols):
        axes[idx // cols, idx % cols].axis("off")

    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    fmt = "svg" if out_path.endswith(".svg") else "png"
    fig.savefig(out_path, dpi=200, format=fmt, transparent=False, facecolor="white")
    plt.close(fig)
