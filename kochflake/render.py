"""
Render / export collaborators for generated flakes.

The generator only produces geometry. Drawing and writing files go
through two small capabilities:

    Renderer.stroke_and_fill(path, style)
    Exporter.export_to_file(path, file_path) -> bool

Implementations here use matplotlib for raster/PDF output, hand-built SVG
markup for vector output and numpy .npz archives for raw vertices.
"""

from __future__ import annotations

import logging
from pathlib import Path as FilePath
from typing import Protocol

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import LinearSegmentedColormap, to_hex
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath

from .config import FlakeStyle
from .geometry import Path, Rect

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def stroke_and_fill(self, path: Path, style: FlakeStyle) -> None: ...


class Exporter(Protocol):
    def export_to_file(self, path: Path, file_path: str | FilePath) -> bool: ...


def _require_drawable(path: Path) -> np.ndarray:
    verts = path.vertices
    if len(verts) < 2:
        raise ValueError("path has no segments to draw")
    return verts


def to_mpl_path(path: Path) -> MplPath:
    """Convert a flake Path into a matplotlib Path (closed paths end in CLOSEPOLY)."""
    verts = _require_drawable(path)
    codes = [MplPath.MOVETO] + [MplPath.LINETO] * (len(verts) - 1)
    if path.closed:
        verts = np.vstack([verts, verts[:1]])
        codes.append(MplPath.CLOSEPOLY)
    return MplPath(verts, codes)


# =============================================================================
# matplotlib
# =============================================================================

class MatplotlibRenderer:
    """Draws flakes into a matplotlib figure showing `frame`.

    The image's longer side is `size_px` pixels whatever the flake's
    coordinate size; the frame is mapped onto it through the axis limits.
    """

    def __init__(self, frame: Rect, size_px: int = 700, dpi: int = 100):
        if size_px < 1:
            raise ValueError(f"size_px must be at least 1, got {size_px}")
        self.frame = frame
        self.dpi = dpi
        self.size_px = size_px
        self.fig, self.ax = plt.subplots(figsize=self.figsize, dpi=dpi)
        self.fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
        self.ax.set_aspect("equal")
        self.ax.axis("off")
        self._reset_limits()

    @property
    def figsize(self) -> tuple[float, float]:
        """Figure size in inches, keeping the frame's aspect ratio."""
        longest = max(self.frame.width, self.frame.height)
        width_px = max(1, round(self.size_px * self.frame.width / longest))
        height_px = max(1, round(self.size_px * self.frame.height / longest))
        return width_px / self.dpi, height_px / self.dpi

    def _reset_limits(self) -> None:
        self.ax.set_xlim(self.frame.x, self.frame.max_x)
        self.ax.set_ylim(self.frame.y, self.frame.max_y)

    def stroke_and_fill(self, path: Path, style: FlakeStyle) -> None:
        mpl_path = to_mpl_path(path)
        b = path.bounds

        # Vertical gradient from fill_start (bottom) to fill_end (top), clipped to the flake
        clip = PathPatch(mpl_path, facecolor="none", edgecolor="none")
        self.ax.add_patch(clip)
        cmap = LinearSegmentedColormap.from_list("flake_fill", [style.fill_start, style.fill_end])
        gradient = np.linspace(0.0, 1.0, 256).reshape(-1, 1)
        image = self.ax.imshow(
            gradient, cmap=cmap, origin="lower", aspect="auto",
            extent=(b.x, b.max_x, b.y, b.max_y),
        )
        image.set_clip_path(clip)

        self.ax.add_patch(PathPatch(
            mpl_path, facecolor="none", edgecolor=style.stroke_color,
            linewidth=style.stroke_width, joinstyle="round",
        ))
        self._reset_limits()

    def save(self, file_path: str | FilePath) -> None:
        self.fig.savefig(file_path, dpi=self.dpi)

    def close(self) -> None:
        plt.close(self.fig)


class ImageExporter:
    """Exports a rendered flake to any format matplotlib can save (png, pdf)."""

    def __init__(self, style: FlakeStyle, frame: Rect | None = None,
                 size_px: int = 700, dpi: int = 100):
        self.style = style
        self.frame = frame
        self.size_px = size_px
        self.dpi = dpi

    def export_to_file(self, path: Path, file_path: str | FilePath) -> bool:
        frame = self.frame or _padded_frame(path.bounds)
        renderer = MatplotlibRenderer(frame, size_px=self.size_px, dpi=self.dpi)
        try:
            renderer.stroke_and_fill(path, self.style)
            renderer.save(file_path)
        except OSError as e:
            logger.error("Could not write image to %s: %s", file_path, e)
            return False
        finally:
            renderer.close()

        logger.info("Saved: %s", file_path)
        return True


def _padded_frame(bounds: Rect, pad_fraction: float = 0.05) -> Rect:
    pad = max(bounds.width, bounds.height) * pad_fraction
    return Rect(bounds.x - pad, bounds.y - pad, bounds.width + 2 * pad, bounds.height + 2 * pad)


# =============================================================================
# SVG
# =============================================================================

def create_flake_svg(path: Path, style: FlakeStyle, padding: float = 20.0) -> str:
    """Create an SVG document of the flake with a vertical gradient fill.

    Args:
        path: Flake outline
        style: Stroke and gradient colours
        padding: Margin around the flake's bounding box, in SVG units

    Returns:
        SVG string
    """
    verts = _require_drawable(path)
    b = path.bounds
    width = b.width + 2 * padding
    height = b.height + 2 * padding

    # Shift into the viewBox and flip Y (SVG grows downwards)
    transformed = verts - np.array([b.x, b.y]) + padding
    transformed[:, 1] = height - transformed[:, 1]

    path_data = f"M {transformed[0, 0]:.3f} {transformed[0, 1]:.3f}"
    for x, y in transformed[1:]:
        path_data += f" L {x:.3f} {y:.3f}"
    if path.closed:
        path_data += " Z"

    svg_parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width:.3f} {height:.3f}">',
        '  <defs>',
        '    <linearGradient id="flake-fill" x1="0" y1="1" x2="0" y2="0">',
        f'      <stop offset="0" stop-color="{to_hex(style.fill_start)}"/>',
        f'      <stop offset="1" stop-color="{to_hex(style.fill_end)}"/>',
        '    </linearGradient>',
        '  </defs>',
        f'  <path d="{path_data}" fill="url(#flake-fill)" stroke="{to_hex(style.stroke_color)}" '
        f'stroke-width="{style.stroke_width}" stroke-linejoin="round"/>',
        '</svg>',
    ]
    return '\n'.join(svg_parts)


class SvgExporter:
    def __init__(self, style: FlakeStyle):
        self.style = style

    def export_to_file(self, path: Path, file_path: str | FilePath) -> bool:
        svg = create_flake_svg(path, self.style)
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                f.write(svg)
        except OSError as e:
            logger.error("Could not write SVG to %s: %s", file_path, e)
            return False

        logger.info("Saved: %s", file_path)
        return True


# =============================================================================
# NPZ
# =============================================================================

class NpzExporter:
    """Saves the vertex array, closed flag, perimeter and area with numpy.savez."""

    def export_to_file(self, path: Path, file_path: str | FilePath) -> bool:
        try:
            np.savez(
                file_path,
                vertices=path.vertices,
                closed=np.array(path.closed),
                perimeter=np.array(path.perimeter),
                area=np.array(path.area),
            )
        except OSError as e:
            logger.error("Could not write vertices to %s: %s", file_path, e)
            return False

        logger.info("Saved: %s", file_path)
        return True


IMAGE_SUFFIXES = (".png", ".pdf")


def exporter_for(file_path: str | FilePath, style: FlakeStyle,
                 frame: Rect | None = None) -> Exporter:
    """Pick an exporter from the file suffix."""
    suffix = FilePath(file_path).suffix.lower()
    if suffix == ".svg":
        return SvgExporter(style)
    if suffix == ".npz":
        return NpzExporter()
    if suffix in IMAGE_SUFFIXES:
        return ImageExporter(style, frame)
    raise ValueError(
        f"Unsupported export format {suffix!r}; expected one of "
        f"{['.svg', '.npz', *IMAGE_SUFFIXES]}"
    )
