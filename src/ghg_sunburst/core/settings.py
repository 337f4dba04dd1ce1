"""
Chart settings.

Every geometric constant, font size and label threshold the chart uses
lives here so that a JSON config file or CLI flag can tune it.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Tuple

from ghg_sunburst.core.domain.models import ShareBasis

CurvedRule = Tuple[float, int]

@dataclass
class ChartSettings:
    chart_diameter: float = 800.0
    canvas_padding: float = 50.0
    canvas_margin: float = 20.0

    # Ring bounds as fractions of the chart radius.
    center_radius: float = 0.58
    middle_ring_start: float = 0.68
    middle_ring_end: float = 0.78
    outer_ring_start: float = 0.88
    outer_ring_end: float = 0.98
    pad_angle: float = 0.01

    center_large_font: float = 20.0
    center_small_font: float = 14.0
    middle_font: float = 14.0
    outer_font: float = 12.0

    char_width_factor: float = 0.6
    horizontal_line_height: float = 1.1
    radial_line_height: float = 1.2
    horizontal_width_factor: float = 0.8
    center_radial_radius_factor: float = 0.8
    center_radial_width_factor: float = 0.4
    label_extension: float = 10.0
    middle_curved_gap: float = 5.0
    outer_curved_gap: float = 0.02

    min_arc_center_horizontal: float = 80.0
    min_arc_center_radial: float = 20.0
    min_arc_ring_radial: float = 20.0
    middle_curved_rules: List[CurvedRule] = field(
        default_factory=lambda: [(250.0, 35), (150.0, 25)]
    )
    outer_curved_rules: List[CurvedRule] = field(default_factory=lambda: [(200.0, 20)])
    curved_fallback_on_overflow: bool = True

    share_basis: ShareBasis = ShareBasis.PARENT
    budget_tolerance: float = 0.05
    text_measurer: str = "heuristic"
    theme: str = "climate-watch"
    sector_colors: Dict[str, str] = field(default_factory=dict)

    @property
    def radius(self) -> float:
        return self.chart_diameter / 2

    @property
    def canvas_size(self) -> Tuple[float, float]:
        side = self.chart_diameter + 2 * self.canvas_padding
        return side, side

    def ring_fractions(self, depth: int) -> Tuple[float, float]:
        """Returns (inner, outer) radius fractions for a depth."""
        if depth == 1:
            return 0.0, self.center_radius
        if depth == 2:
            return self.middle_ring_start, self.middle_ring_end
        return self.outer_ring_start, self.outer_ring_end

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["share_basis"] = self.share_basis.value
        data["middle_curved_rules"] = [list(rule) for rule in self.middle_curved_rules]
        data["outer_curved_rules"] = [list(rule) for rule in self.outer_curved_rules]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChartSettings":
        """
        Builds settings from a mapping, ignoring unknown keys.

        Raises:
            ValueError: If a value cannot be converted or the result is invalid
        """
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}

        try:
            if "share_basis" in values:
                values["share_basis"] = ShareBasis(values["share_basis"])
            for key in ("middle_curved_rules", "outer_curved_rules"):
                if key in values:
                    values[key] = [(float(length), int(chars)) for length, chars in values[key]]
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid chart settings: {e}")

        settings = cls(**values)
        issues = validate_settings(settings)
        if issues:
            raise ValueError("Invalid chart settings: " + "; ".join(issues))
        return settings

def validate_settings(settings: ChartSettings) -> List[str]:
    """
    Validates chart settings.

    Returns:
        List[str]: List of validation issues (empty if valid)
    """
    issues = []

    numeric_fields = [f.name for f in fields(ChartSettings) if f.type is float]
    for name in numeric_fields:
        value = getattr(settings, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            issues.append(f"Field {name} must be a number")

    if issues:
        return issues

    if settings.chart_diameter <= 0:
        issues.append("Field chart_diameter must be positive")

    bounds = [
        settings.center_radius,
        settings.middle_ring_start,
        settings.middle_ring_end,
        settings.outer_ring_start,
        settings.outer_ring_end,
    ]
    if any(b <= 0 for b in bounds) or bounds != sorted(bounds) or len(set(bounds)) != len(bounds):
        issues.append("Ring fractions must be positive and strictly increasing")
    if settings.outer_ring_end > 1.0:
        issues.append("Field outer_ring_end must not exceed 1.0")

    for name in ("center_large_font", "center_small_font", "middle_font", "outer_font"):
        if getattr(settings, name) <= 0:
            issues.append(f"Field {name} must be positive")

    if settings.char_width_factor <= 0:
        issues.append("Field char_width_factor must be positive")

    if settings.text_measurer not in ("heuristic", "font"):
        issues.append(
            f"Unsupported text_measurer: {settings.text_measurer}. Supported: heuristic, font"
        )

    if not isinstance(settings.sector_colors, dict):
        issues.append("Field sector_colors must be an object")

    return issues
