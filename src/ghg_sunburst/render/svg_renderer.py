"""
Service for painting a sunburst scene as SVG.

Wedges become ``<path>`` elements, radial and horizontal labels become
``<text>`` elements and curved labels bind a ``<textPath>`` to a hidden
guide path in ``<defs>``.
"""

import logging
from pathlib import Path

import svgwrite

from ghg_sunburst.core.view_models import (
    CurvedLabel,
    HorizontalLabel,
    RadialLabel,
    SegmentView,
    SunburstScene,
)

logger = logging.getLogger(__name__)

def _num(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")

class SvgRenderingService:
    """Service for rendering a sunburst scene with svgwrite."""

    EDGE_WIDTH = 1

    def create_drawing(self, scene: SunburstScene, filename: str = "noname.svg") -> svgwrite.Drawing:
        """Builds the full SVG document for a scene."""
        width, height = scene.width, scene.height
        dwg = svgwrite.Drawing(filename, size=(width, height), profile="full")
        dwg.attribs["viewBox"] = f"0 0 {_num(width)} {_num(height)}"

        dwg.add(dwg.rect(insert=(0, 0), size=(width, height), fill=scene.background))

        cx, cy = scene.center
        chart = dwg.g(
            id="sunburst",
            transform=f"translate({_num(cx)},{_num(cy)})",
            font_family=scene.font_family,
        )
        wedges = chart.add(dwg.g(id="wedges"))
        labels = chart.add(dwg.g(id="labels"))

        for index, segment in enumerate(scene.iter_segments()):
            self._render_wedge(dwg, wedges, segment, scene.edge_color)
            if segment.label is not None:
                self._render_label(dwg, labels, segment.label, index)

        dwg.add(chart)
        return dwg

    def to_string(self, scene: SunburstScene) -> str:
        return self.create_drawing(scene).tostring()

    def save(self, scene: SunburstScene, output_path) -> Path:
        """Writes the scene to ``output_path`` and returns the path."""
        path = Path(output_path)
        dwg = self.create_drawing(scene, str(path))
        dwg.saveas(str(path))
        logger.debug("Saved SVG to %s", path)
        return path

    def _render_wedge(self, dwg, parent, segment: SegmentView, edge_color: str):
        if segment.wedge.is_empty:
            return

        path = dwg.path(
            d=segment.wedge.path_data,
            fill=segment.color,
            fill_rule="evenodd",
            stroke=edge_color,
            stroke_width=self.EDGE_WIDTH,
            class_=f"depth-{segment.depth}",
        )
        parent.add(path)

    def _render_label(self, dwg, parent, label, index: int):
        if isinstance(label, HorizontalLabel):
            self._render_horizontal(dwg, parent, label)
        elif isinstance(label, RadialLabel):
            self._render_radial(dwg, parent, label)
        elif isinstance(label, CurvedLabel):
            self._render_curved(dwg, parent, label, index)

    def _text_style(self, label):
        return {
            "font_size": _num(label.font_size),
            "font_weight": label.font_weight,
            "fill": label.color,
            "text_anchor": label.text_anchor,
        }

    def _render_horizontal(self, dwg, parent, label: HorizontalLabel):
        text = dwg.text("", dominant_baseline="middle", **self._text_style(label))
        for line in label.lines:
            text.add(dwg.tspan(line.text, x=[_num(line.x)], y=[_num(line.y)]))
        parent.add(text)

    def _render_radial(self, dwg, parent, label: RadialLabel):
        style = self._text_style(label)
        for line in label.lines:
            x, y = _num(line.x), _num(line.y)
            parent.add(dwg.text(
                line.text,
                x=[x],
                y=[y],
                transform=f"rotate({_num(label.rotation)},{x},{y})",
                dominant_baseline="middle",
                **style,
            ))

    def _render_curved(self, dwg, parent, label: CurvedLabel, index: int):
        guide = dwg.path(d=label.guide.path_data, id=f"guide-{index}", fill="none")
        dwg.defs.add(guide)

        text = dwg.text(
            "",
            dy=[f"{label.baseline_shift_em:g}em"],
            **self._text_style(label),
        )
        text.add(dwg.textPath(guide, label.text, startOffset=label.start_offset))
        parent.add(text)
