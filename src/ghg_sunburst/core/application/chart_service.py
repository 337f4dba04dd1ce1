"""
Service for building sunburst scenes.

- Partitioning the hierarchy into wedges
- Padded wedge outlines for every ring
- Colour lookup by ancestor sector
- Label strategy selection and text layout
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ghg_sunburst.core.application.arc_geometry import RingLayout
from ghg_sunburst.core.application.color_service import ColorService
from ghg_sunburst.core.application.label_strategy import LabelStrategyService
from ghg_sunburst.core.application.partition_service import PartitionService
from ghg_sunburst.core.application.text_layout import TextLayoutService, create_text_measurer
from ghg_sunburst.core.domain.models import ArcNode, LabelStrategy, ProportionNode
from ghg_sunburst.core.settings import ChartSettings
from ghg_sunburst.core.theme import ChartTheme, get_theme
from ghg_sunburst.core.view_models import SegmentView, SunburstScene

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class _RenderContext:
    settings: ChartSettings
    theme: ChartTheme
    ring_layout: RingLayout
    colors: ColorService
    strategies: LabelStrategyService
    text_layout: TextLayoutService

class ChartService:
    """Service for working with charts."""

    def __init__(self, settings: Optional[ChartSettings] = None):
        self.settings = settings or ChartSettings()
        # Read by find_segment_at_position only, never by a layout pass.
        self._last_scene: Optional[SunburstScene] = None

    def calculate_sunburst_data(
        self,
        forest: Sequence[ProportionNode],
        settings: Optional[ChartSettings] = None,
        label_overrides: Optional[Mapping[str, str]] = None,
        theme_name: Optional[str] = None,
    ) -> SunburstScene:
        """
        Lays out a complete chart for a hierarchy.

        Args:
            forest: Depth-1 nodes in display order
            settings: Settings for this pass, defaults to the service's own
            label_overrides: Node id to "curved" or "radial"
            theme_name: Theme to paint with, defaults to settings.theme

        Returns:
            SunburstScene: Everything a painter needs, in chart coordinates
        """
        settings = settings or self.settings
        theme = get_theme(theme_name or settings.theme)
        ring_layout = RingLayout(settings.radius, settings)

        measurer = create_text_measurer(
            settings.text_measurer, settings.char_width_factor, theme.font_family
        )
        ctx = _RenderContext(
            settings=settings,
            theme=theme,
            ring_layout=ring_layout,
            colors=ColorService(settings.sector_colors, theme.categorical),
            strategies=LabelStrategyService(settings, label_overrides),
            text_layout=TextLayoutService(settings, ring_layout, measurer),
        )

        partition = PartitionService(
            ring_layout, settings.share_basis, settings.budget_tolerance
        ).partition(forest)

        width, height = settings.canvas_size
        scene = SunburstScene(
            width=width,
            height=height,
            radius=settings.radius,
            background=theme.background,
            theme=theme.name,
            edge_color=theme.wedge_edge_color,
            font_family=theme.font_family,
            segments=[self._build_segment(arc, ctx) for arc in partition.arcs],
            warnings=list(partition.warnings),
            legend=[
                (arc.name, ctx.colors.get_sector_color(index))
                for index, arc in enumerate(partition.arcs)
            ],
        )

        logger.debug("Built scene: %s", scene.get_statistics())
        self._last_scene = scene
        return scene

    def _build_segment(self, arc: ArcNode, ctx: _RenderContext) -> SegmentView:
        wedge = ctx.ring_layout.build_wedge(
            arc.start_angle, arc.end_angle, arc.inner_radius, arc.outer_radius
        )
        arc_length = ctx.ring_layout.arc_length(arc.depth, arc.start_angle, arc.end_angle)
        segment = SegmentView(
            arc=arc,
            wedge=wedge,
            color=ctx.colors.get_color(arc.depth, arc.ancestor_sector_id),
            arc_length=arc_length,
        )

        self._attach_label(segment, ctx)
        segment.children = [self._build_segment(child, ctx) for child in arc.children]
        return segment

    def _attach_label(self, segment: SegmentView, ctx: _RenderContext):
        arc = segment.arc
        settings = ctx.settings
        layout = ctx.text_layout
        strategy = ctx.strategies.select(arc.depth, segment.arc_length, arc.label_text, arc.id)

        if arc.depth == 1:
            color = ctx.theme.center_label_color
            if strategy is LabelStrategy.HORIZONTAL:
                segment.label = layout.layout_horizontal(arc, settings.center_large_font, color)
            elif strategy is LabelStrategy.RADIAL:
                segment.label = layout.layout_center_radial(arc, settings.center_small_font, color)
            segment.strategy = strategy
            return

        color = ctx.theme.ring_label_color
        font_size = settings.middle_font if arc.depth == 2 else settings.outer_font

        if strategy is LabelStrategy.RADIAL:
            label = layout.layout_ring_radial(arc, font_size, color)
            strategy = ctx.strategies.apply_overflow_fallback(
                arc.depth, strategy, layout.radial_overflows(label), arc.id
            )
            if strategy is LabelStrategy.RADIAL:
                segment.label = label

        if strategy is LabelStrategy.CURVED:
            segment.label = layout.layout_curved(arc, font_size, color)

        segment.strategy = strategy

    def find_segment_at_position(self, x: float, y: float) -> Optional[SegmentView]:
        """Hit-tests the last scene with canvas coordinates."""
        if self._last_scene is None:
            return None
        cx, cy = self._last_scene.center
        return self._last_scene.get_segment_at_position(x - cx, y - cy)
