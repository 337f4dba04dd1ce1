"""
Service for choosing how a wedge is labelled.

Bigger wedges with shorter text get curved labels, smaller wedges or
longer text get radial ones, and wedges too thin to hold text get none.
"""

import logging
from typing import Mapping, Optional

from ghg_sunburst.core.domain.models import LabelStrategy

logger = logging.getLogger(__name__)

OVERRIDE_CHOICES = ("curved", "radial")

class LabelStrategyService:
    """Label strategy selector."""

    def __init__(self, settings, overrides: Optional[Mapping[str, str]] = None):
        self.settings = settings
        self.overrides = dict(overrides or {})

    def use_curved(self, depth: int, arc_length: float, text_length: int) -> bool:
        """
        Checks whether a ring label qualifies for curved text.

        Each rule is a (minimum arc length, maximum text length) pair; any
        satisfied rule qualifies. Only ``>=`` on arc length is used, so a
        longer arc never disqualifies a label.
        """
        if depth == 2:
            rules = self.settings.middle_curved_rules
        elif depth == 3:
            rules = self.settings.outer_curved_rules
        else:
            return False

        return any(
            arc_length >= min_length and text_length <= max_chars
            for min_length, max_chars in rules
        )

    def select(self, depth: int, arc_length: float, text: str,
               node_id: Optional[str] = None) -> LabelStrategy:
        """
        Chooses the label strategy for a wedge.

        Args:
            depth: Ring depth of the wedge
            arc_length: Arc length of the wedge in pixels at its label radius
            text: Fully formatted label text, e.g. "Transport (16.2%)"
            node_id: Wedge id, used to look up a per-node override

        Returns:
            LabelStrategy: Chosen strategy (NONE when nothing fits)
        """
        settings = self.settings

        if depth == 1:
            if arc_length >= settings.min_arc_center_horizontal:
                return LabelStrategy.HORIZONTAL
            if arc_length >= settings.min_arc_center_radial:
                return LabelStrategy.RADIAL
            return LabelStrategy.NONE

        if depth not in (2, 3):
            return LabelStrategy.NONE

        override = self.overrides.get(node_id) if node_id else None
        if override is not None and override not in OVERRIDE_CHOICES:
            logger.warning("Ignoring unknown label override %r for %s", override, node_id)
            override = None

        if override == "curved":
            return LabelStrategy.CURVED if arc_length > 0 else LabelStrategy.NONE
        if override is None and self.use_curved(depth, arc_length, len(text)):
            return LabelStrategy.CURVED
        if arc_length > settings.min_arc_ring_radial:
            return LabelStrategy.RADIAL
        return LabelStrategy.NONE

    def apply_overflow_fallback(self, depth: int, strategy: LabelStrategy,
                                radial_overflows: bool, node_id: Optional[str] = None) -> LabelStrategy:
        """Outer-ring radial labels that cannot fit the canvas go curved instead."""
        if (
            depth == 3
            and strategy is LabelStrategy.RADIAL
            and radial_overflows
            and self.settings.curved_fallback_on_overflow
            and self.overrides.get(node_id) != "radial"
        ):
            logger.debug("Radial label for %s overflows the canvas, using curved", node_id)
            return LabelStrategy.CURVED
        return strategy
