"""
Service for partitioning a proportion hierarchy into angular spans.

Shares are accumulated in input order and scaled to radians. Siblings
that do not add up to their budget are reported, never renormalised.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ghg_sunburst.core.domain.models import (
    MAX_DEPTH,
    ArcNode,
    BudgetWarning,
    ProportionNode,
    ShareBasis,
)

logger = logging.getLogger(__name__)

FULL_CIRCLE = 2 * math.pi

@dataclass
class PartitionResult:
    arcs: List[ArcNode] = field(default_factory=list)
    warnings: List[BudgetWarning] = field(default_factory=list)

class PartitionService:
    """Turns a ProportionNode forest into an ArcNode forest."""

    def __init__(self, ring_layout, share_basis: ShareBasis = ShareBasis.PARENT,
                 budget_tolerance: float = 0.05):
        self.ring_layout = ring_layout
        self.share_basis = ShareBasis(share_basis)
        self.budget_tolerance = budget_tolerance

    def partition(
        self,
        forest: Sequence[ProportionNode],
        start_angle: float = 0.0,
        budget: float = FULL_CIRCLE,
    ) -> PartitionResult:
        """
        Lays out the forest starting at ``start_angle``.

        Args:
            forest: Depth-1 nodes in display order
            start_angle: Angle of the first wedge, clockwise from 12 o'clock
            budget: Angular budget of the root, 2π for a full chart

        Returns:
            PartitionResult: Arc trees and budget warnings
        """
        result = PartitionResult()
        result.arcs = self._partition_level(
            nodes=forest,
            depth=1,
            start_angle=start_angle,
            budget=budget,
            parent=None,
            ancestor_sector_id=None,
            warnings=result.warnings,
        )

        for warning in result.warnings:
            logger.warning(warning.message)

        return result

    def _partition_level(
        self,
        nodes: Sequence[ProportionNode],
        depth: int,
        start_angle: float,
        budget: float,
        parent: Optional[ProportionNode],
        ancestor_sector_id: Optional[str],
        warnings: List[BudgetWarning],
    ) -> List[ArcNode]:
        if depth > MAX_DEPTH:
            logger.debug(
                "Ignoring %d node(s) deeper than %d under %s",
                len(nodes), MAX_DEPTH, parent.id if parent else "<root>",
            )
            return []

        self._check_budget(nodes, depth, parent, warnings)

        inner_radius, outer_radius = self.ring_layout.ring_bounds(depth)
        scale = FULL_CIRCLE if self.share_basis is ShareBasis.ABSOLUTE else budget

        arcs = []
        cursor = start_angle
        for node in nodes:
            share = node.share
            if share < 0:
                logger.warning("Negative share %g for %s treated as 0", share, node.id)
                share = 0.0

            end_angle = cursor + share / 100.0 * scale
            sector_id = node.id if depth == 1 else ancestor_sector_id

            arc = ArcNode(
                id=node.id,
                name=node.name,
                share=node.share,
                depth=depth,
                start_angle=cursor,
                end_angle=end_angle,
                inner_radius=inner_radius,
                outer_radius=outer_radius,
                ancestor_sector_id=sector_id,
            )

            if node.children:
                arc.children = self._partition_level(
                    nodes=node.children,
                    depth=depth + 1,
                    start_angle=cursor,
                    budget=end_angle - cursor,
                    parent=node,
                    ancestor_sector_id=sector_id,
                    warnings=warnings,
                )

            arcs.append(arc)
            cursor = end_angle

        return arcs

    def _check_budget(
        self,
        nodes: Sequence[ProportionNode],
        depth: int,
        parent: Optional[ProportionNode],
        warnings: List[BudgetWarning],
    ):
        if not nodes:
            return

        share_total = sum(node.share for node in nodes)
        if self.share_basis is ShareBasis.ABSOLUTE and parent is not None:
            expected_total = parent.share
        else:
            expected_total = 100.0

        if abs(share_total - expected_total) > self.budget_tolerance:
            warnings.append(
                BudgetWarning(
                    parent_id=parent.id if parent else None,
                    depth=depth,
                    share_total=round(share_total, 6),
                    expected_total=expected_total,
                )
            )
