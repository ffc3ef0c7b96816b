"""
Flake configuration objects.

FlakeConfig carries the appearance options of one render (segment length,
density, stroke and fill colours, optional export path). It is frozen and
passed explicitly to the generator and the render/export collaborators.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path as FilePath

from matplotlib.colors import is_color_like

from .generator import (
    compute_flake_frame,
    compute_flake_start,
    is_real_number,
    validate_angle,
    validate_depth,
    validate_length,
)
from .geometry import Point, Rect


@dataclass(frozen=True)
class GenerationRequest:
    """Inputs for one flake generation."""
    origin: Point
    depth: int
    length: float
    base_angle: float = 0.0

    def __post_init__(self):
        validate_depth(self.depth)
        validate_length(self.length)
        validate_angle(self.base_angle)


@dataclass(frozen=True)
class FlakeStyle:
    """Stroke and gradient fill handed to a renderer."""
    stroke_color: str = "darkgray"
    stroke_width: float = 3.0
    fill_start: str = "blue"
    fill_end: str = "cyan"

    def __post_init__(self):
        for name in ("stroke_color", "fill_start", "fill_end"):
            value = getattr(self, name)
            if not is_color_like(value):
                raise ValueError(f"{name} is not a recognised colour: {value!r}")
        if not is_real_number(self.stroke_width) or not math.isfinite(self.stroke_width) \
                or self.stroke_width < 0:
            raise ValueError(f"stroke_width must be a non-negative finite number, got {self.stroke_width!r}")


@dataclass(frozen=True)
class FlakeConfig:
    """Configuration for rendering one snowflake.

    Attributes:
        length: Length of the outermost flake strokes
        density: Recursion depth; increase to make it 'flakier'
        stroke_color: Border colour
        stroke_width: Border width
        fill_start: First colour of the fill gradient
        fill_end: Second colour of the fill gradient
        export_path: Optional file the flake is exported to
    """
    length: float = 175.0
    density: int = 5
    stroke_color: str = "darkgray"
    stroke_width: float = 3.0
    fill_start: str = "blue"
    fill_end: str = "cyan"
    export_path: str | None = None

    def __post_init__(self):
        validate_length(self.length)
        validate_depth(self.density)
        # Raises on bad colours / width
        self.style

    @property
    def style(self) -> FlakeStyle:
        return FlakeStyle(
            stroke_color=self.stroke_color,
            stroke_width=self.stroke_width,
            fill_start=self.fill_start,
            fill_end=self.fill_end,
        )

    @property
    def frame(self) -> Rect:
        return compute_flake_frame(self.length)

    def request(self, base_angle: float = 0.0) -> GenerationRequest:
        """Build the generation request for this config, centred in its frame."""
        return GenerationRequest(
            origin=compute_flake_start(self.length, self.frame),
            depth=self.density,
            length=self.length,
            base_angle=base_angle,
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> FlakeConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)


def load_config(path: str | FilePath) -> FlakeConfig:
    """Read a FlakeConfig from a JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return FlakeConfig.from_dict(data)
