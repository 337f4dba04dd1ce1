"""
Service for laying out label text.

- Word wrapping against an available width
- Keeping the trailing percentage with the last word when it fits
- Hemisphere flipping so text never reads upside-down
- Positioning of horizontal, radial and curved labels
"""

import math
import re
from typing import Callable, List

from matplotlib.font_manager import FontProperties
from matplotlib.textpath import TextPath

from ghg_sunburst.core.application.arc_geometry import RingLayout, polar_to_point
from ghg_sunburst.core.domain.models import ArcNode
from ghg_sunburst.core.theme import split_font_family
from ghg_sunburst.core.view_models import CurvedLabel, HorizontalLabel, RadialLabel, TextLine

TOKEN_PATTERN = re.compile(r"&|,|[^\s&,]+,?")

class HeuristicTextMeasurer:
    """Estimates text width as a fixed fraction of the font size per character."""

    def __init__(self, char_width_factor: float = 0.6):
        self.char_width_factor = char_width_factor

    def char_width(self, font_size: float) -> float:
        return font_size * self.char_width_factor

    def width(self, text: str, font_size: float) -> float:
        return len(text) * self.char_width(font_size)

    def max_chars(self, available_width: float, font_size: float) -> int:
        return max(0, math.floor(available_width / self.char_width(font_size)))

    def fits(self, text: str, available_width: float, font_size: float) -> bool:
        return len(text) <= self.max_chars(available_width, font_size)

class FontTextMeasurer:
    """Measures text with real glyph outlines from matplotlib's font machinery."""

    def __init__(self, family: str = "DejaVu Sans", weight: str = "normal"):
        self._prop = FontProperties(family=split_font_family(family), weight=weight)
        self._cache = {}

    def width(self, text: str, font_size: float) -> float:
        if not text.strip():
            return 0.0

        key = (text, font_size)
        if key not in self._cache:
            path = TextPath((0, 0), text, size=font_size, prop=self._prop)
            self._cache[key] = path.get_extents().width
        return self._cache[key]

    def fits(self, text: str, available_width: float, font_size: float) -> bool:
        return self.width(text, font_size) <= available_width

def create_text_measurer(kind: str, char_width_factor: float = 0.6,
                         font_family: str = "DejaVu Sans"):
    if kind == "font":
        return FontTextMeasurer(family=font_family)
    return HeuristicTextMeasurer(char_width_factor)

def tokenize(text: str) -> List[str]:
    """
    Splits label text at whitespace, ``&`` and ``,``.

    Separators stay in the tokens ("Agriculture," "Forestry" "&" ...) so
    joining the tokens with spaces gives the original text back.
    """
    return TOKEN_PATTERN.findall(text)

def wrap_text(text: str, fits: Callable[[str], bool]) -> List[str]:
    """
    Greedily packs tokens into lines accepted by ``fits``.

    A single token that never fits is emitted on its own line as-is.
    """
    lines = []
    current = ""
    for token in tokenize(text):
        candidate = f"{current} {token}" if current else token
        if fits(candidate):
            current = candidate
        elif current:
            lines.append(current)
            current = token
        else:
            lines.append(token)

    if current:
        lines.append(current)
    return lines

def wrap_with_suffix(text: str, suffix: str, fits: Callable[[str], bool]) -> List[str]:
    """Wraps ``text`` and joins ``suffix`` to the last line if it still fits."""
    lines = wrap_text(text, fits)
    if not lines:
        return [suffix]

    joined = f"{lines[-1]} {suffix}"
    if fits(joined):
        lines[-1] = joined
    else:
        lines.append(suffix)
    return lines

def is_bottom_half(angle_deg: float) -> bool:
    """True for angles strictly inside (90°, 270°) after normalisation."""
    normalized = angle_deg % 360
    return 90 < normalized < 270

def baseline_angle(mid_angle: float) -> float:
    """Ray direction of a mid-angle as an SVG rotation in degrees."""
    return math.degrees(mid_angle) - 90

class TextLayoutService:
    """Positions label text for each label strategy."""

    def __init__(self, settings, ring_layout: RingLayout, measurer=None):
        self.settings = settings
        self.ring_layout = ring_layout
        self.measurer = measurer or HeuristicTextMeasurer(settings.char_width_factor)
        canvas_width, canvas_height = settings.canvas_size
        self.half_width = canvas_width / 2 - settings.canvas_margin
        self.half_height = canvas_height / 2 - settings.canvas_margin

    def _fits(self, available_width: float, font_size: float) -> Callable[[str], bool]:
        return lambda line: self.measurer.fits(line, available_width, font_size)

    def line_overflows(self, line: str, available_width: float, font_size: float) -> bool:
        return not self.measurer.fits(line, available_width, font_size)

    def layout_horizontal(self, arc: ArcNode, font_size: float, color: str) -> HorizontalLabel:
        """
        Centred block of lines for a wide centre wedge.

        The block sits at half the centre radius along the mid-angle, which
        keeps it inside the visually large part of the sector.
        """
        center_radius = self.ring_layout.ring_bounds(1)[1]
        label_radius = center_radius / 2
        cx, cy = polar_to_point(label_radius, arc.mid_angle)
        available = arc.span * label_radius * self.settings.horizontal_width_factor

        texts = wrap_text(arc.name, self._fits(available, font_size))
        texts.append(arc.percentage_text)

        line_height = font_size * self.settings.horizontal_line_height
        total_span = (len(texts) - 1) * line_height
        lines = [
            TextLine(text, cx, cy - total_span / 2 + i * line_height)
            for i, text in enumerate(texts)
        ]

        return HorizontalLabel(
            node_id=arc.id,
            lines=lines,
            font_size=font_size,
            color=color,
            available_width=available,
        )

    def layout_center_radial(self, arc: ArcNode, font_size: float, color: str) -> RadialLabel:
        """Radial label inside a narrow centre wedge, near its outer edge."""
        center_radius = self.ring_layout.ring_bounds(1)[1]
        anchor_radius = center_radius * self.settings.center_radial_radius_factor
        available = center_radius * self.settings.center_radial_width_factor

        texts = wrap_text(arc.name, self._fits(available, font_size))
        texts.append(arc.percentage_text)

        return self._build_radial(
            arc, texts, anchor_radius, available, font_size, color,
            anchor_kind="middle", font_weight="bold",
        )

    def layout_ring_radial(self, arc: ArcNode, font_size: float, color: str) -> RadialLabel:
        """Radial label extending outward from the ring's outer edge."""
        anchor_radius = arc.outer_radius + self.settings.label_extension
        available = self.radial_available_width(arc.mid_angle, anchor_radius)

        texts = wrap_with_suffix(arc.name, arc.percentage_text, self._fits(available, font_size))

        return self._build_radial(
            arc, texts, anchor_radius, available, font_size, color, anchor_kind="outward",
        )

    def radial_available_width(self, mid_angle: float, anchor_radius: float) -> float:
        """Distance along the ray from the anchor to the canvas margin."""
        ux, uy = math.sin(mid_angle), -math.cos(mid_angle)
        limits = []
        if abs(ux) > 1e-12:
            limits.append(self.half_width / abs(ux))
        if abs(uy) > 1e-12:
            limits.append(self.half_height / abs(uy))
        reach = min(limits) if limits else 0.0
        return max(0.0, reach - anchor_radius)

    def _build_radial(
        self,
        arc: ArcNode,
        texts: List[str],
        anchor_radius: float,
        available: float,
        font_size: float,
        color: str,
        anchor_kind: str,
        font_weight: str = "normal",
    ) -> RadialLabel:
        mid = arc.mid_angle
        base_rotation = baseline_angle(mid)
        flipped = is_bottom_half(base_rotation)
        rotation = base_rotation + 180 if flipped else base_rotation

        if anchor_kind == "middle":
            text_anchor = "middle"
        else:
            text_anchor = "end" if flipped else "start"

        ax, ay = polar_to_point(anchor_radius, mid)
        # Unit vector perpendicular to the ray; lines stack along it.
        px, py = math.cos(mid), math.sin(mid)
        line_height = font_size * self.settings.radial_line_height
        count = len(texts)

        lines = []
        for i, text in enumerate(texts):
            index = count - 1 - i if flipped else i
            offset = (index - (count - 1) / 2) * line_height
            lines.append(TextLine(text, ax + px * offset, ay + py * offset))

        return RadialLabel(
            node_id=arc.id,
            lines=lines,
            font_size=font_size,
            color=color,
            rotation=rotation,
            base_rotation=base_rotation,
            flipped=flipped,
            text_anchor=text_anchor,
            anchor=(ax, ay),
            available_width=available,
            font_weight=font_weight,
        )

    def layout_curved(self, arc: ArcNode, font_size: float, color: str) -> CurvedLabel:
        """
        Text following an arc just outside the wedge's ring.

        Bottom-half labels run the guide arc backwards, so glyphs stay
        upright; start offset and anchor swap so the text still hugs the
        wedge's starting edge.
        """
        flipped = is_bottom_half(math.degrees(arc.mid_angle))
        radius = self.ring_layout.curved_label_radius(arc.depth) + self.settings.label_extension
        guide = self.ring_layout.build_guide_arc(
            radius, arc.start_angle, arc.end_angle, reversed=flipped
        )

        return CurvedLabel(
            node_id=arc.id,
            text=arc.label_text,
            guide=guide,
            font_size=font_size,
            color=color,
            flipped=flipped,
            start_offset="100%" if flipped else "0%",
            text_anchor="end" if flipped else "start",
            baseline_shift_em=-0.3 if flipped else 1.0,
        )

    def radial_overflows(self, label: RadialLabel) -> bool:
        return any(
            self.line_overflows(line.text, label.available_width, label.font_size)
            for line in label.lines
        )
