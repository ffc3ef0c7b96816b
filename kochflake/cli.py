from __future__ import annotations
import argparse
import logging
from dataclasses import replace
from typing import Sequence

from .config import FlakeConfig, load_config
from .generator import measure_snowflake
from .geometry import Point
from .logging_config import setup_logging
from .render import exporter_for

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

# CLI flag -> FlakeConfig field; flags left unset keep the config value
OVERRIDES = {
    "length": "length",
    "density": "density",
    "stroke_color": "stroke_color",
    "stroke_width": "stroke_width",
    "fill_start": "fill_start",
    "fill_end": "fill_end",
    "export": "export_path",
}


def build_parser() -> argparse.ArgumentParser:
    defaults = FlakeConfig()
    p = argparse.ArgumentParser(
        prog="kochflake",
        description="Generate a Koch snowflake and export it.",
    )
    p.add_argument("--config", type=str, default=None,
                   help="JSON file with FlakeConfig fields")
    p.add_argument("--length", type=float, default=None,
                   help=f"length of the flake strokes (default {defaults.length})")
    p.add_argument("--density", type=int, default=None,
                   help=f"recursion depth (default {defaults.density})")
    p.add_argument("--stroke-color", type=str, default=None)
    p.add_argument("--stroke-width", type=float, default=None)
    p.add_argument("--fill-start", type=str, default=None)
    p.add_argument("--fill-end", type=str, default=None)
    p.add_argument("--export", type=str, default=None,
                   help="write the flake to .svg, .npz, .png or .pdf")
    p.add_argument("--render", type=str, default=None,
                   help="write the framed image (legacy centering) to this file")
    p.add_argument("--log-level", type=str.upper, default="INFO", choices=LOG_LEVELS)
    p.add_argument("--log-file", type=str, default=None)
    return p


def parse_args(argv: Sequence[str] | None = None) -> tuple[FlakeConfig, argparse.Namespace]:
    p = build_parser()
    a = p.parse_args(argv)

    try:
        cfg = load_config(a.config) if a.config else FlakeConfig()
        changes = {
            field: getattr(a, flag)
            for flag, field in OVERRIDES.items()
            if getattr(a, flag) is not None
        }
        cfg = replace(cfg, **changes)
    except (OSError, TypeError, ValueError) as e:
        p.error(str(e))

    return cfg, a


def run(cfg: FlakeConfig, render_path: str | None = None) -> int:
    request = cfg.request()
    path, elapsed = measure_snowflake(request.origin, request.depth, request.length,
                                      request.base_angle)
    logger.info("Flake: %d segments, depth %d, length %g, area %.1f, %.3fs",
                len(path), cfg.density, cfg.length, path.area, elapsed)

    b = path.bounds
    frame = cfg.frame
    if not (frame.contains(Point(b.x, b.y)) and frame.contains(Point(b.max_x, b.max_y))):
        logger.warning("Flake bounds %s leave the %gx%g frame", b, frame.width, frame.height)

    status = 0
    if render_path:
        # Framed render keeps the legacy start point inside the 4L x 4L frame
        if not exporter_for(render_path, cfg.style, frame=frame).export_to_file(path, render_path):
            status = 1

    if cfg.export_path:
        if not exporter_for(cfg.export_path, cfg.style).export_to_file(path, cfg.export_path):
            status = 1

    return status


def main(argv: Sequence[str] | None = None) -> int:
    cfg, a = parse_args(argv)
    setup_logging(getattr(logging, a.log_level), a.log_file)
    logger.debug("Config: %s", cfg)

    # Fail on an unsupported export suffix before spending time generating
    for target in (a.render, cfg.export_path):
        if target:
            try:
                exporter_for(target, cfg.style)
            except ValueError as e:
                build_parser().error(str(e))

    return run(cfg, a.render)
