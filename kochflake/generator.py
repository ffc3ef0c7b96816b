"""
Koch Snowflake Curve Generator
==============================

Builds the outline of a Koch snowflake as an ordered sequence of segments.

Each side of the outer triangle is drawn as a Koch "bump" (_/\\_): four
strokes of equal length turning at base, base+60, base-60 and base degrees.
Above depth 1 every stroke is itself replaced by a bump a third the size.
Positions are accumulated relatively from the pen position, so the vertex
count of one flake is 3 * 4**depth.

Mathematical Properties:
- A bump of segment length L spans a chord of 3L at any depth
- Boundary length grows as (4/3)**depth, the enclosed area stays finite
"""

from __future__ import annotations

import logging
import math
import numbers
import time
from typing import TYPE_CHECKING

from .geometry import Path, Point, Rect, Segment

if TYPE_CHECKING:
    from .config import GenerationRequest

logger = logging.getLogger(__name__)


# Turns applied to the base angle for the four strokes of one bump
BUMP_TURNS = (0.0, 60.0, -60.0, 0.0)

# Headings of the three sides of the outer triangle
SIDE_ANGLES = (0.0, -120.0, -240.0)

# Beyond this the vertex count (3 * 4**depth) is no longer practical
MAX_DEPTH = 10


# =============================================================================
# Preconditions
# =============================================================================

def is_real_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_depth(depth: int) -> int:
    if isinstance(depth, bool) or not isinstance(depth, numbers.Integral):
        raise ValueError(f"depth must be an integer, got {depth!r}")
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")
    if depth > MAX_DEPTH:
        raise ValueError(f"depth > {MAX_DEPTH} produces excessive segments (got {depth})")
    return int(depth)


def validate_length(length: float) -> float:
    if not is_real_number(length) or not math.isfinite(length) or length <= 0:
        raise ValueError(f"length must be a positive finite number, got {length!r}")
    return float(length)


def validate_angle(angle: float) -> float:
    if not is_real_number(angle) or not math.isfinite(angle):
        raise ValueError(f"angle must be finite, got {angle!r}")
    return float(angle)


# =============================================================================
# Edge generation
# =============================================================================

def _extend_koch_edge(sink: list[Segment], cursor: Point, depth: int,
                      length: float, base_angle: float) -> Point:
    if depth == 0:
        # Plain edge: the chord a bump of this segment length would span
        end = cursor.moved(3 * length, base_angle)
        sink.append(Segment(cursor, end))
        return end

    if depth == 1:
        for turn in BUMP_TURNS:
            end = cursor.moved(length, base_angle + turn)
            sink.append(Segment(cursor, end))
            cursor = end
        return cursor

    for turn in BUMP_TURNS:
        cursor = _extend_koch_edge(sink, cursor, depth - 1, length / 3, base_angle + turn)
    return cursor


def extend_koch_edge(sink: list[Segment], cursor: Point, depth: int,
                     length: float, base_angle: float) -> Point:
    """Append one Koch edge to `sink`, starting at `cursor`.

    Returns the pen position after the last appended segment.
    """
    depth = validate_depth(depth)
    length = validate_length(length)
    base_angle = validate_angle(base_angle)
    return _extend_koch_edge(sink, cursor, depth, length, base_angle)


def generate_koch_edge(start: Point, depth: int, length: float,
                       base_angle: float = 0.0) -> tuple[Segment, ...]:
    """Return the segments of one Koch edge beginning at `start`."""
    segments: list[Segment] = []
    extend_koch_edge(segments, start, depth, length, base_angle)
    return tuple(segments)


# =============================================================================
# Flake assembly
# =============================================================================

def generate_snowflake(origin: Point, depth: int, length: float,
                       base_angle: float = 0.0) -> Path:
    """Generate a closed Koch snowflake starting (and ending) at `origin`.

    Args:
        origin: Pen position before the first stroke; no segment is emitted
            for moving there
        depth: Recursion depth; 0 gives the plain outer triangle
        length: Stroke length of the outermost bump
        base_angle: Rotation of the whole flake in degrees

    Returns:
        Closed Path with 3 * 4**depth segments
    """
    validate_depth(depth)
    validate_length(length)
    validate_angle(base_angle)

    segments: list[Segment] = []
    cursor = origin
    for side in SIDE_ANGLES:
        cursor = _extend_koch_edge(segments, cursor, depth, length, base_angle + side)

    return Path(segments, closed=True)


def generate(request: GenerationRequest) -> Path:
    return generate_snowflake(request.origin, request.depth, request.length, request.base_angle)


def measure_snowflake(origin: Point, depth: int, length: float,
                      base_angle: float = 0.0) -> tuple[Path, float]:
    """Generate a flake and report the wall-clock seconds it took."""
    start = time.perf_counter()
    path = generate_snowflake(origin, depth, length, base_angle)
    elapsed = time.perf_counter() - start

    logger.debug("Generated %d segments (depth=%d, length=%g) in %.4fs",
                 len(path), depth, length, elapsed)
    return path, elapsed


# =============================================================================
# Framing
# =============================================================================

def compute_flake_frame(length: float) -> Rect:
    """Frame of 4 * length on each side, anchored at the origin."""
    validate_length(length)
    return Rect(0.0, 0.0, 4 * length, 4 * length)


def compute_flake_start(length: float, rect: Rect) -> Point:
    """Legacy centering of the flake's first point inside `rect`.

    The horizontal offset length / sqrt(2 * length / 50) is an empirical
    formula kept for compatibility with existing renders; it is not the
    flake's geometric centroid.
    """
    validate_length(length)
    return Point(length / math.sqrt(2 * length / 50), rect.max_y - length)
