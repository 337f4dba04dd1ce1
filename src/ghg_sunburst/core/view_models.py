"""
ViewModels for the sunburst chart.

These classes contain only data for painting,
without any layout or labelling logic.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ghg_sunburst.core.application.arc_geometry import (
    FULL_CIRCLE,
    GuideArc,
    Point,
    WedgeShape,
    point_to_polar,
)
from ghg_sunburst.core.domain.models import ArcNode, BudgetWarning, LabelStrategy

@dataclass
class TextLine:
    """One line of label text positioned in chart coordinates."""

    text: str
    x: float
    y: float

@dataclass
class HorizontalLabel:
    """Unrotated, centre-anchored block of lines."""

    node_id: str
    lines: List[TextLine]
    font_size: float
    color: str
    available_width: float
    font_weight: str = "bold"
    text_anchor: str = "middle"
    rotation: float = 0.0
    flipped: bool = False

    @property
    def kind(self) -> LabelStrategy:
        return LabelStrategy.HORIZONTAL

    @property
    def line_texts(self) -> List[str]:
        return [line.text for line in self.lines]

@dataclass
class RadialLabel:
    """
    Lines running along the wedge's mid-angle ray.

    ``rotation`` is the transform applied to every line (SVG degrees,
    clockwise); ``base_rotation`` is the ray direction before any flip.
    """

    node_id: str
    lines: List[TextLine]
    font_size: float
    color: str
    rotation: float
    base_rotation: float
    flipped: bool
    text_anchor: str
    anchor: Point
    available_width: float
    font_weight: str = "normal"

    @property
    def kind(self) -> LabelStrategy:
        return LabelStrategy.RADIAL

    @property
    def line_texts(self) -> List[str]:
        return [line.text for line in self.lines]

@dataclass
class CurvedLabel:
    """Single line of text bound to an invisible guide arc."""

    node_id: str
    text: str
    guide: GuideArc
    font_size: float
    color: str
    flipped: bool
    start_offset: str
    text_anchor: str
    baseline_shift_em: float
    font_weight: str = "normal"

    @property
    def kind(self) -> LabelStrategy:
        return LabelStrategy.CURVED

    @property
    def line_texts(self) -> List[str]:
        return [self.text]

    @property
    def available_width(self) -> float:
        return self.guide.length

Label = Union[HorizontalLabel, RadialLabel, CurvedLabel]

@dataclass
class SegmentView:
    """Segment of the chart: one wedge plus its label."""

    arc: ArcNode
    wedge: WedgeShape
    color: str
    arc_length: float
    strategy: LabelStrategy = LabelStrategy.NONE
    label: Optional[Label] = None
    children: List["SegmentView"] = field(default_factory=list)

    @property
    def node_id(self) -> str:
        return self.arc.id

    @property
    def depth(self) -> int:
        return self.arc.depth

@dataclass
class SunburstScene:
    """ViewModel for one complete render pass."""

    width: float
    height: float
    radius: float
    background: str
    theme: str
    edge_color: str
    font_family: str
    segments: List[SegmentView] = field(default_factory=list)
    warnings: List[BudgetWarning] = field(default_factory=list)
    # (sector name, colour) from the theme's categorical ramp
    legend: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2, self.height / 2

    def iter_segments(self) -> Iterator[SegmentView]:
        """Depth-first, in paint order."""
        stack = list(reversed(self.segments))
        while stack:
            segment = stack.pop()
            yield segment
            stack.extend(reversed(segment.children))

    def segments_at_depth(self, depth: int) -> List[SegmentView]:
        return [s for s in self.iter_segments() if s.depth == depth]

    def get_segment(self, node_id: str) -> Optional[SegmentView]:
        """Returns the first segment drawn for a node id."""
        for segment in self.iter_segments():
            if segment.node_id == node_id:
                return segment
        return None

    def labels(self) -> List[Label]:
        return [s.label for s in self.iter_segments() if s.label is not None]

    def get_segment_at_position(self, x: float, y: float) -> Optional[SegmentView]:
        """Returns the segment under a point given in chart coordinates."""
        radius, angle = point_to_polar(x, y)
        for segment in self.iter_segments():
            arc = segment.arc
            if not (arc.inner_radius <= radius <= arc.outer_radius):
                continue
            if arc.start_angle <= angle <= arc.end_angle:
                return segment
            if arc.start_angle <= angle + FULL_CIRCLE <= arc.end_angle:
                return segment
        return None

    def is_empty(self) -> bool:
        return not self.segments

    def get_statistics(self) -> Dict[str, Any]:
        """Returns counts of wedges per depth and labels per strategy."""
        segments = list(self.iter_segments())
        by_strategy = {strategy.value: 0 for strategy in LabelStrategy}
        for segment in segments:
            by_strategy[segment.strategy.value] += 1

        return {
            "total_segments": len(segments),
            "segments_by_depth": {
                depth: sum(1 for s in segments if s.depth == depth) for depth in (1, 2, 3)
            },
            "labels_by_strategy": by_strategy,
            "budget_warnings": len(self.warnings),
        }
