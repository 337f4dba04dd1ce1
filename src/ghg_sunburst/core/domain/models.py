"""
Domain models for ghg-sunburst.

These models represent the hierarchy being charted and do not depend on
matplotlib, svgwrite or any other rendering framework.
They contain only data and simple validation logic.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

MAX_DEPTH = 3

class ShareBasis(str, Enum):
    """What a node's ``share`` is a percentage of."""

    PARENT = "parent"
    ABSOLUTE = "absolute"

class LabelStrategy(str, Enum):
    """How a wedge gets labelled."""

    HORIZONTAL = "horizontal"
    RADIAL = "radial"
    CURVED = "curved"
    NONE = "none"

@dataclass(frozen=True)
class ProportionNode:
    """One level of a proportional breakdown, as supplied by the caller."""

    id: str
    name: str
    share: float
    children: Tuple["ProportionNode", ...] = ()

    def __post_init__(self):
        if not isinstance(self.id, str):
            raise ValueError(f"Node id must be a string, got {type(self.id).__name__}")
        if not self.id:
            raise ValueError("Node id cannot be empty")
        if not isinstance(self.name, str):
            raise ValueError(f"Node name must be a string (node {self.id!r})")
        if isinstance(self.share, bool) or not isinstance(self.share, (int, float)):
            raise ValueError(f"Node share must be a number (node {self.id!r})")
        if not math.isfinite(self.share):
            raise ValueError(f"Node share must be finite (node {self.id!r})")

    @property
    def label_text(self) -> str:
        return f"{self.name} {format_share(self.share)}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProportionNode":
        """Builds a node (and its subtree) from a plain mapping."""
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object for a node, got {type(data).__name__}")

        children = data.get("children") or []
        if not isinstance(children, list):
            raise ValueError(f"'children' must be a list (node {data.get('id')!r})")

        share = data.get("share", 0)
        if isinstance(share, str):
            try:
                share = float(share)
            except ValueError:
                raise ValueError(f"Invalid share {share!r} (node {data.get('id')!r})")

        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            share=share,
            children=tuple(cls.from_dict(child) for child in children),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"id": self.id, "name": self.name, "share": self.share}
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result

@dataclass
class ArcNode:
    """A node placed on the chart. Rebuilt on every render pass."""

    id: str
    name: str
    share: float
    depth: int
    start_angle: float
    end_angle: float
    inner_radius: float
    outer_radius: float
    ancestor_sector_id: str
    children: List["ArcNode"] = field(default_factory=list)

    @property
    def span(self) -> float:
        return abs(self.end_angle - self.start_angle)

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2

    @property
    def label_text(self) -> str:
        return f"{self.name} {format_share(self.share)}"

    @property
    def percentage_text(self) -> str:
        return format_share(self.share)

    def iter_subtree(self):
        yield self
        for child in self.children:
            yield from child.iter_subtree()

@dataclass(frozen=True)
class BudgetWarning:
    """A sibling set whose shares do not add up to what their parent offers."""

    parent_id: Optional[str]
    depth: int
    share_total: float
    expected_total: float

    @property
    def message(self) -> str:
        parent = self.parent_id or "<root>"
        return (
            f"Shares at depth {self.depth} under {parent} sum to "
            f"{self.share_total:g}% (expected {self.expected_total:g}%)"
        )

def format_share(share: float) -> str:
    """Formats a share as the ``(NN%)`` suffix used in labels."""
    return f"({share:g}%)"
