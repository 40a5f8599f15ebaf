from __future__ import annotations

import argparse
import logging
import os
from typing import Optional, Sequence

from shapes.gallery import GALLERY, get_shape
from plotting import RenderConfig, get_maximum_render_cycles, render_gallery_grid, render_to_file


def setup_default_logging(level: str = "INFO") -> None:
    """
    Apply a minimal logging setup once; no-op when the root logger already
    has handlers.
    """
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render self-similar gallery shapes under a cycle budget.")
    p.add_argument(
        "--shape",
        type=str,
        default="all",
        choices=sorted(GALLERY) + ["all"],
        help="gallery shape to render, or 'all' for a grid (default: all)",
    )
    p.add_argument(
        "--cycles",
        type=non_negative_int,
        default=None,
        help="maximum render cycles (default: process-wide setting, 100 unless FRACTAL_MAX_RENDER_CYCLES is set)",
    )
    p.add_argument("--outdir", type=str, default="plots/fractals", help="output directory")
    p.add_argument("--format", type=str, default="png", choices=["png", "svg"], help="output file format")
    p.add_argument("--dpi", type=int, default=220, help="DPI for single-shape renders")
    p.add_argument("--cols", type=int, default=2, help="columns in the grid")
    p.add_argument("--color", action="store_true", help="use accumulated color deltas for stroke/fill")
    p.add_argument("--fill", type=str, default=None, help="brush color for polygons (default: outline only)")
    p.add_argument("--log-level", type=str, default="INFO", help="logging level")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    setup_default_logging(args.log_level)
    cycles = args.cycles if args.cycles is not None else get_maximum_render_cycles()
    cfg = RenderConfig(max_render_cycles=cycles, brush_color=args.fill)
    os.makedirs(args.outdir, exist_ok=True)

    if args.shape == "all":
        names = sorted(GALLERY)
        out_path = os.path.join(args.outdir, f"gallery_{cycles:05d}.{args.format}")
        print(f"Rendering {len(names)} shapes ({cycles} cycles each) -> {out_path}")
        render_gallery_grid(
            [get_shape(n) for n in names],
            out_path=out_path,
            cols=args.cols,
            titles=names,
            config=cfg,
            use_color=args.color,
        )
    else:
        out_path = os.path.join(args.outdir, f"{args.shape}_{cycles:05d}.{args.format}")
        print(f"Rendering {args.shape} ({cycles} cycles) -> {out_path}")
        render_to_file(
            get_shape(args.shape),
            out_path=out_path,
            config=cfg,
            title=args.shape,
            use_color=args.color,
            dpi=args.dpi,
            format=args.format,
        )
    print(f"Saved: {out_path}")


if __name__ == "__main__":
    main()
