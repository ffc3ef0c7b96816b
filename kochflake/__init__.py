"""
kochflake

Koch snowflake outline generator with thin render/export collaborators.

Typical usage:
    from kochflake import FlakeConfig, generate

    cfg = FlakeConfig(length=175.0, density=5)
    path = generate(cfg.request())
    print(len(path))   # 3 * 4**5 segments
"""

from __future__ import annotations

from .geometry import (
    Point,
    Segment,
    Path,
    Rect,
)
from .generator import (
    MAX_DEPTH,
    extend_koch_edge,
    generate_koch_edge,
    generate_snowflake,
    generate,
    measure_snowflake,
    compute_flake_frame,
    compute_flake_start,
)
from .config import (
    GenerationRequest,
    FlakeStyle,
    FlakeConfig,
    load_config,
)

__all__ = [
    # geometry
    "Point",
    "Segment",
    "Path",
    "Rect",
    # generation
    "MAX_DEPTH",
    "extend_koch_edge",
    "generate_koch_edge",
    "generate_snowflake",
    "generate",
    "measure_snowflake",
    "compute_flake_frame",
    "compute_flake_start",
    # configuration
    "GenerationRequest",
    "FlakeStyle",
    "FlakeConfig",
    "load_config",
]
