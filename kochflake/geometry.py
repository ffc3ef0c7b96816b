"""
Flake Geometry Types
====================

Immutable 2D primitives consumed and produced by the Koch curve generator:

- Point:   a coordinate pair, able to take a polar step (angle in degrees)
- Segment: an ordered (start, end) pair, the atomic drawing unit
- Path:    a connected sequence of segments, optionally closed
- Rect:    an axis-aligned frame used to size and place a flake

Path also offers the numpy views used by the render/export collaborators:
vertex array, bounding box, perimeter and shoelace area.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np


# Absolute tolerance used for connectivity and closure checks
DEFAULT_TOLERANCE = 1e-9


# =============================================================================
# Primitives
# =============================================================================

@dataclass(frozen=True)
class Point:
    """A 2D point."""
    x: float
    y: float

    def moved(self, length: float, angle: float) -> Point:
        """Return the point reached by stepping `length` along `angle` degrees."""
        theta = math.radians(angle)
        return Point(self.x + length * math.cos(theta),
                     self.y + length * math.sin(theta))

    def isclose(self, other: Point, tol: float = DEFAULT_TOLERANCE) -> bool:
        # Tolerance grows with magnitude so long flakes don't trip on drift
        scale = max(1.0, abs(self.x), abs(self.y), abs(other.x), abs(other.y))
        return abs(self.x - other.x) <= tol * scale and abs(self.y - other.y) <= tol * scale

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Segment:
    """An ordered pair of points."""
    start: Point
    end: Point

    @property
    def length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)

    @property
    def angle(self) -> float:
        """Heading in degrees, in (-180, 180]."""
        return math.degrees(math.atan2(self.end.y - self.start.y, self.end.x - self.start.x))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle anchored at (x, y)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def contains(self, point: Point) -> bool:
        return self.x <= point.x <= self.max_x and self.y <= point.y <= self.max_y


# =============================================================================
# Path
# =============================================================================

class Path:
    """Connected polyline built from segments.

    The closing segment of a closed path is implicit: it is not stored in
    `segments` and is not counted by `len()`. For a well-formed flake it
    is degenerate, since the last end already coincides with the start.
    """

    def __init__(self, segments: Iterable[Segment], closed: bool = False,
                 tol: float = DEFAULT_TOLERANCE):
        self._segments = tuple(segments)
        self.closed = closed

        for i in range(1, len(self._segments)):
            prev_end = self._segments[i - 1].end
            start = self._segments[i].start
            if not prev_end.isclose(start, tol):
                raise ValueError(
                    f"segment {i} starts at {start} but segment {i - 1} ends at {prev_end}"
                )

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __getitem__(self, idx: int) -> Segment:
        return self._segments[idx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.closed == other.closed and self._segments == other._segments

    def __repr__(self) -> str:
        return f"Path(n_segments={len(self)}, closed={self.closed})"

    @property
    def start(self) -> Point:
        if not self._segments:
            raise ValueError("empty path has no start point")
        return self._segments[0].start

    @property
    def end(self) -> Point:
        if not self._segments:
            raise ValueError("empty path has no end point")
        return self._segments[-1].end

    @property
    def points(self) -> tuple[Point, ...]:
        """Segment starts followed by the final end point."""
        if not self._segments:
            return ()
        return tuple(seg.start for seg in self._segments) + (self.end,)

    @property
    def closing_segment(self) -> Segment:
        return Segment(self.end, self.start)

    def is_closed_within(self, tol: float = DEFAULT_TOLERANCE) -> bool:
        return bool(self._segments) and self.end.isclose(self.start, tol)

    # -------------------------------------------------------------------------
    # numpy views
    # -------------------------------------------------------------------------

    @property
    def vertices(self) -> np.ndarray:
        """Vertex array of shape (n_segments + 1, 2)."""
        if not self._segments:
            return np.zeros((0, 2))
        return np.array([tuple(p) for p in self.points], dtype=float)

    @property
    def n_vertices(self) -> int:
        return len(self._segments) + 1 if self._segments else 0

    @property
    def bounds(self) -> Rect:
        verts = self.vertices
        if len(verts) == 0:
            raise ValueError("empty path has no bounds")
        lo = verts.min(axis=0)
        hi = verts.max(axis=0)
        return Rect(float(lo[0]), float(lo[1]), float(hi[0] - lo[0]), float(hi[1] - lo[1]))

    @property
    def perimeter(self) -> float:
        diffs = np.diff(self.vertices, axis=0)
        total = float(np.sum(np.linalg.norm(diffs, axis=1)))
        if self.closed and self._segments:
            total += self.closing_segment.length
        return total

    @property
    def area(self) -> float:
        """Shoelace area of the closed polygon (always non-negative)."""
        verts = self.vertices
        if len(verts) < 3:
            return 0.0
        x, y = verts[:, 0], verts[:, 1]
        return float(0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))
