"""
Chart themes.

A theme carries paint the sector palette does not decide: background,
label text colours, the font family and a categorical ramp for legends.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

@dataclass(frozen=True)
class ChartTheme:
    name: str
    title: str
    background: str
    center_label_color: str
    ring_label_color: str
    wedge_edge_color: str
    font_family: str
    categorical: Tuple[str, ...] = ()

    @property
    def font_families(self) -> List[str]:
        return split_font_family(self.font_family)

def split_font_family(font_family: str) -> List[str]:
    """"Lato, sans-serif" -> ["Lato", "sans-serif"]."""
    families = [part.strip().strip("'\"") for part in font_family.split(",")]
    return [family for family in families if family] or ["sans-serif"]

CLIMATE_WATCH_THEME = ChartTheme(
    name="climate-watch",
    title="Climate Watch",
    background="#FFFFFF",
    center_label_color="#FFFFFF",
    ring_label_color="#0A2239",
    wedge_edge_color="#FFFFFF",
    font_family="Lato, sans-serif",
    categorical=(
        "#FF8500", "#FFC52F", "#13CB81", "#00C3F6", "#FF6CD0", "#6D40EA",
        "#D01367", "#53AF5C", "#0A97D9", "#CEA041", "#869FF4", "#007DAD",
    ),
)

# No published ramp: primary, secondary, accent, then the status colours.
SYSTEM_CHANGE_LAB_THEME = ChartTheme(
    name="system-change-lab",
    title="System Change Lab",
    background="#FFFFFF",
    center_label_color="#FFFFFF",
    ring_label_color="#212121",
    wedge_edge_color="#FFFFFF",
    font_family="Roboto, sans-serif",
    categorical=("#2E7D32", "#388E3C", "#FF6D00", "#43A047", "#FFA000", "#D32F2F"),
)

OUR_WORLD_IN_DATA_THEME = ChartTheme(
    name="our-world-in-data",
    title="Our World in Data",
    background="#FFFFFF",
    center_label_color="#FFFFFF",
    ring_label_color="#1F2937",
    wedge_edge_color="#FFFFFF",
    font_family="Inter, sans-serif",
    categorical=("#3B82F6", "#60A5FA", "#F59E0B", "#10B981", "#EF4444"),
)

DEFAULT_THEME = CLIMATE_WATCH_THEME

THEMES: Dict[str, ChartTheme] = {
    theme.name: theme
    for theme in (CLIMATE_WATCH_THEME, SYSTEM_CHANGE_LAB_THEME, OUR_WORLD_IN_DATA_THEME)
}

def available_themes() -> List[str]:
    return sorted(THEMES)

def get_theme(name: str) -> ChartTheme:
    """Returns the named theme, falling back to Climate Watch for unknown names."""
    return THEMES.get(name, DEFAULT_THEME)
