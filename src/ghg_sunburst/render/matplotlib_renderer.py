"""
Service for rendering a sunburst scene with matplotlib.

Responsible for raster and PDF output. The axes are set up in chart
coordinates with the y axis pointing down, so scene points are used as-is;
only rotations change sign, since matplotlib turns counter-clockwise.
"""

import logging
import math
from pathlib import Path
from typing import Optional

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath

from ghg_sunburst.core.application.arc_geometry import polar_to_point
from ghg_sunburst.core.application.text_layout import FontTextMeasurer
from ghg_sunburst.core.theme import split_font_family
from ghg_sunburst.core.view_models import (
    CurvedLabel,
    HorizontalLabel,
    RadialLabel,
    SegmentView,
    SunburstScene,
)

logger = logging.getLogger(__name__)

HORIZONTAL_ALIGNMENT = {"start": "left", "middle": "center", "end": "right"}
SPACE_WIDTH_FACTOR = 0.3

class ChartRenderingService:
    """Service for rendering sunburst chart."""

    # One point per pixel, so font sizes match the SVG output.
    DPI = 72

    def __init__(self):
        self.figure: Optional[Figure] = None
        self.axes = None
        self.canvas: Optional[FigureCanvasAgg] = None
        self._measurer: Optional[FontTextMeasurer] = None
        self.EDGE_WIDTH = 1

    def create_canvas(self, scene: SunburstScene) -> FigureCanvasAgg:
        """Creates a figure sized to the scene."""
        self.figure = Figure(figsize=(scene.width / self.DPI, scene.height / self.DPI), dpi=self.DPI)
        self.canvas = FigureCanvasAgg(self.figure)
        self.figure.patch.set_facecolor(scene.background)

        self.axes = self.figure.add_axes((0, 0, 1, 1))
        self.axes.set_aspect("equal")
        self.axes.axis("off")
        self.axes.set_xlim(-scene.width / 2, scene.width / 2)
        self.axes.set_ylim(scene.height / 2, -scene.height / 2)

        return self.canvas

    def render(self, scene: SunburstScene) -> Figure:
        """Paints every wedge and label of the scene."""
        self.create_canvas(scene)
        self._measurer = FontTextMeasurer(family=scene.font_family)

        segments = list(scene.iter_segments())
        for segment in segments:
            self._render_segment(segment, scene.edge_color)

        for segment in segments:
            if segment.label is not None:
                self._render_label(segment.label, scene.font_family)

        self.canvas.draw()
        return self.figure

    def save(self, scene: SunburstScene, output_path, fmt: Optional[str] = None,
             dpi: Optional[float] = None) -> Path:
        """Renders the scene and writes it as PNG, PDF or SVG."""
        path = Path(output_path)
        figure = self.render(scene)
        fmt = fmt or path.suffix.lstrip(".") or "png"
        figure.savefig(str(path), format=fmt, dpi=dpi or self.DPI,
                       facecolor=scene.background)
        logger.debug("Saved %s to %s", fmt.upper(), path)
        return path

    def _render_segment(self, segment: SegmentView, edge_color: str):
        """Renders one wedge."""
        if segment.wedge.is_empty:
            return

        vertices = []
        codes = []
        for ring in segment.wedge.rings:
            vertices.extend(ring)
            vertices.append(ring[0])
            codes.append(MplPath.MOVETO)
            codes.extend([MplPath.LINETO] * (len(ring) - 1))
            codes.append(MplPath.CLOSEPOLY)

        patch = PathPatch(
            MplPath(vertices, codes),
            facecolor=segment.color,
            edgecolor=edge_color,
            linewidth=self.EDGE_WIDTH,
        )
        self.axes.add_patch(patch)

    def _render_label(self, label, font_family: str):
        if isinstance(label, HorizontalLabel):
            for line in label.lines:
                self._draw_text(line.text, line.x, line.y, label, 0.0, font_family)
        elif isinstance(label, RadialLabel):
            for line in label.lines:
                self._draw_text(line.text, line.x, line.y, label, label.rotation, font_family)
        elif isinstance(label, CurvedLabel):
            self._render_curved(label, font_family)

    def _draw_text(self, text: str, x: float, y: float, label, rotation: float,
                   font_family: str, ha: Optional[str] = None, va: str = "center"):
        self.axes.text(
            x,
            y,
            text,
            ha=ha or HORIZONTAL_ALIGNMENT.get(label.text_anchor, "center"),
            va=va,
            rotation=-rotation,
            rotation_mode="anchor",
            fontsize=label.font_size,
            fontweight=label.font_weight,
            family=split_font_family(font_family),
            color=label.color,
        )

    def _glyph_width(self, char: str, font_size: float) -> float:
        if char.isspace():
            return font_size * SPACE_WIDTH_FACTOR
        return self._measurer.width(char, font_size)

    def _render_curved(self, label: CurvedLabel, font_family: str):
        """
        Places a curved label glyph by glyph along its guide arc.

        Each glyph sits at its centre's distance along the guide, rotated to
        the tangent there; the baseline shift moves it off the guide radius
        the same way ``dy`` does on an SVG textPath.
        """
        guide = label.guide
        widths = [self._glyph_width(char, label.font_size) for char in label.text]
        total = sum(widths)

        if label.text_anchor == "end":
            distance = guide.length - total
        elif label.text_anchor == "middle":
            distance = (guide.length - total) / 2
        else:
            distance = 0.0

        shift = label.baseline_shift_em * label.font_size
        radius = guide.radius + shift if guide.reversed else guide.radius - shift

        for char, width in zip(label.text, widths):
            angle = guide.angle_at(distance + width / 2)
            distance += width
            if char.isspace():
                continue

            x, y = polar_to_point(radius, angle)
            rotation = math.degrees(angle) + (180 if guide.reversed else 0)
            self._draw_text(char, x, y, label, rotation, font_family, ha="center", va="baseline")
