"""
Arc geometry for the three chart rings.

Angles are radians measured clockwise from 12 o'clock and points are in
chart coordinates: origin at the chart centre, y growing downwards (the
SVG convention). Painters translate to canvas coordinates themselves.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ghg_sunburst.core.domain.models import MAX_DEPTH

Point = Tuple[float, float]

FULL_CIRCLE = 2 * math.pi
ANGLE_EPSILON = 1e-9
ARC_SAMPLES_PER_RADIAN = 24

def polar_to_point(radius: float, angle: float) -> Point:
    """Chart coordinates of ``radius`` along ``angle``."""
    return radius * math.sin(angle), -radius * math.cos(angle)

def point_to_polar(x: float, y: float) -> Tuple[float, float]:
    """Inverse of polar_to_point; the angle is normalised to [0, 2π)."""
    radius = math.hypot(x, y)
    angle = math.atan2(x, -y)
    if angle < 0:
        angle += FULL_CIRCLE
    return radius, angle

def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text

def _sample_arc(radius: float, start: float, end: float) -> List[Point]:
    count = max(2, int(abs(end - start) * ARC_SAMPLES_PER_RADIAN) + 1)
    return [polar_to_point(radius, a) for a in np.linspace(start, end, count)]

@dataclass
class WedgeShape:
    """Closed outline of one wedge, padded away from its neighbours."""

    start_angle: float
    end_angle: float
    inner_radius: float
    outer_radius: float
    path_data: str = ""
    rings: List[List[Point]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rings

@dataclass
class GuideArc:
    """Invisible path that curved text is bound to."""

    radius: float
    start_angle: float
    end_angle: float
    reversed: bool = False

    @property
    def from_angle(self) -> float:
        return self.end_angle if self.reversed else self.start_angle

    @property
    def to_angle(self) -> float:
        return self.start_angle if self.reversed else self.end_angle

    @property
    def length(self) -> float:
        return abs(self.end_angle - self.start_angle) * self.radius

    def angle_at(self, distance: float) -> float:
        """Angle reached after travelling ``distance`` along the path."""
        if self.radius <= 0:
            return self.from_angle
        step = distance / self.radius
        return self.from_angle - step if self.reversed else self.from_angle + step

    @property
    def path_data(self) -> str:
        x0, y0 = polar_to_point(self.radius, self.from_angle)
        x1, y1 = polar_to_point(self.radius, self.to_angle)
        large_arc = 1 if abs(self.end_angle - self.start_angle) > math.pi else 0
        sweep = 0 if self.reversed else 1
        r = _fmt(self.radius)
        return (
            f"M{_fmt(x0)},{_fmt(y0)}"
            f"A{r},{r} 0 {large_arc} {sweep} {_fmt(x1)},{_fmt(y1)}"
        )

class RingLayout:
    """Fixed radii of the three rings for a given chart radius."""

    def __init__(self, radius: float, settings):
        self.radius = radius
        self.settings = settings
        self.pad_angle = settings.pad_angle

    def ring_bounds(self, depth: int) -> Tuple[float, float]:
        """Returns inner and outer radius in pixels for the depth."""
        depth = max(1, min(depth, MAX_DEPTH))
        inner, outer = self.settings.ring_fractions(depth)
        return inner * self.radius, outer * self.radius

    def label_radius(self, depth: int) -> float:
        """Radius at which a wedge's arc length is measured for labelling."""
        return self.ring_bounds(depth)[1]

    def arc_length(self, depth: int, start_angle: float, end_angle: float) -> float:
        return abs(end_angle - start_angle) * self.label_radius(depth)

    def curved_label_radius(self, depth: int) -> float:
        """Radius just outside the ring, in the gap reserved for ring labels."""
        outer = self.ring_bounds(depth)[1]
        if depth == 2:
            return outer + self.settings.middle_curved_gap
        return outer + self.settings.outer_curved_gap * self.radius

    def depth_at_radius(self, radius: float) -> Optional[int]:
        for depth in range(1, MAX_DEPTH + 1):
            inner, outer = self.ring_bounds(depth)
            if inner <= radius <= outer:
                return depth
        return None

    def build_wedge(self, start_angle: float, end_angle: float,
                    inner_radius: float, outer_radius: float) -> WedgeShape:
        """
        Builds the padded outline of a wedge.

        The padding is a constant pixel gap (pad angle at the chart radius),
        so the angular inset grows towards the centre. A wedge too thin to
        survive its padding collapses onto its mid-angle.
        """
        shape = WedgeShape(start_angle, end_angle, inner_radius, outer_radius)
        span = end_angle - start_angle
        if span <= ANGLE_EPSILON or outer_radius <= 0:
            return shape

        if span >= FULL_CIRCLE - ANGLE_EPSILON:
            return self._build_full_ring(shape)

        a0_outer, a1_outer = self._inset(start_angle, end_angle, outer_radius)
        outline = _sample_arc(outer_radius, a0_outer, a1_outer)

        x0, y0 = outline[0]
        x1, y1 = outline[-1]
        r = _fmt(outer_radius)
        large_outer = 1 if a1_outer - a0_outer > math.pi else 0
        parts = [f"M{_fmt(x0)},{_fmt(y0)}", f"A{r},{r} 0 {large_outer} 1 {_fmt(x1)},{_fmt(y1)}"]

        if inner_radius > 0:
            a0_inner, a1_inner = self._inset(start_angle, end_angle, inner_radius)
            inner_outline = _sample_arc(inner_radius, a1_inner, a0_inner)
            outline.extend(inner_outline)
            xi1, yi1 = inner_outline[0]
            xi0, yi0 = inner_outline[-1]
            ri = _fmt(inner_radius)
            large_inner = 1 if a1_inner - a0_inner > math.pi else 0
            parts.append(f"L{_fmt(xi1)},{_fmt(yi1)}")
            parts.append(f"A{ri},{ri} 0 {large_inner} 0 {_fmt(xi0)},{_fmt(yi0)}")
        else:
            outline.append((0.0, 0.0))
            parts.append("L0,0")

        parts.append("Z")
        shape.path_data = "".join(parts)
        shape.rings = [outline]
        return shape

    def _inset(self, start_angle: float, end_angle: float, radius: float) -> Tuple[float, float]:
        half_pad = self.pad_angle / 2
        if half_pad <= 0:
            return start_angle, end_angle

        ratio = min(1.0, self.radius / radius * math.sin(half_pad))
        inset = math.asin(ratio)
        if end_angle - start_angle > 2 * inset:
            return start_angle + inset, end_angle - inset

        mid = (start_angle + end_angle) / 2
        return mid, mid

    def _build_full_ring(self, shape: WedgeShape) -> WedgeShape:
        outer = shape.outer_radius
        inner = shape.inner_radius
        r = _fmt(outer)
        parts = [
            f"M0,{_fmt(-outer)}",
            f"A{r},{r} 0 1 1 0,{_fmt(outer)}",
            f"A{r},{r} 0 1 1 0,{_fmt(-outer)}",
            "Z",
        ]
        rings = [_sample_arc(outer, 0.0, FULL_CIRCLE)]

        if inner > 0:
            ri = _fmt(inner)
            parts.extend([
                f"M0,{_fmt(-inner)}",
                f"A{ri},{ri} 0 1 0 0,{_fmt(inner)}",
                f"A{ri},{ri} 0 1 0 0,{_fmt(-inner)}",
                "Z",
            ])
            rings.append(_sample_arc(inner, FULL_CIRCLE, 0.0))

        shape.path_data = "".join(parts)
        shape.rings = rings
        return shape

    def build_guide_arc(self, radius: float, start_angle: float, end_angle: float,
                        reversed: bool = False) -> GuideArc:
        # An SVG arc whose endpoints coincide draws nothing.
        if end_angle - start_angle >= FULL_CIRCLE:
            end_angle = start_angle + FULL_CIRCLE - 1e-4
        return GuideArc(radius, start_angle, end_angle, reversed)
