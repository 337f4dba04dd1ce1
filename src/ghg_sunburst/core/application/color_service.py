"""
Service for wedge colours.

A depth-1 sector owns a hue family; its descendants take lighter tints
of the same family. Unknown sectors fall back to neutral grays.
"""

from typing import Dict, Mapping, Optional, Sequence, Tuple

from matplotlib.colors import to_hex, to_rgb

# (depth 1, depth 2, depth 3)
SECTOR_PALETTE: Dict[str, Tuple[str, str, str]] = {
    "energy": ("#F59E0B", "#FCD34D", "#FEF3C7"),
    "agriculture-forestry-land-use": ("#10B981", "#6EE7B7", "#D1FAE5"),
    "industry": ("#06B6D4", "#67E8F9", "#CFFAFE"),
    "waste": ("#8B5CF6", "#C4B5FD", "#EDE9FE"),
}

NEUTRAL_TIERS: Tuple[str, str, str] = ("#94A3B8", "#CBD5E1", "#F1F5F9")

MIDDLE_TINT = 0.45
OUTER_TINT = 0.85

def lighten_color(color: str, amount: float) -> str:
    """Mixes ``color`` toward white by ``amount`` (0 keeps it, 1 is white)."""
    amount = max(0.0, min(1.0, amount))
    rgb = to_rgb(color)
    mixed = tuple(c + (1.0 - c) * amount for c in rgb)
    return to_hex(mixed).upper()

def derive_tiers(base_color: str) -> Tuple[str, str, str]:
    """Builds a three-tier hue family from one saturated colour."""
    return (
        to_hex(to_rgb(base_color)).upper(),
        lighten_color(base_color, MIDDLE_TINT),
        lighten_color(base_color, OUTER_TINT),
    )

class ColorService:
    """Resolves (depth, ancestor sector id) to a fill colour."""

    def __init__(self, extra_sectors: Optional[Mapping[str, str]] = None,
                 categorical: Sequence[str] = ()):
        self._palette: Dict[str, Tuple[str, str, str]] = dict(SECTOR_PALETTE)
        self._categorical = tuple(categorical)
        for sector_id, base_color in (extra_sectors or {}).items():
            self._palette[sector_id] = derive_tiers(base_color)

    def get_color(self, depth: int, sector_id: Optional[str]) -> str:
        """
        Returns the fill colour for a wedge.

        Args:
            depth: Ring depth (1 = centre)
            sector_id: Id of the wedge's depth-1 ancestor (its own id at depth 1)

        Returns:
            str: Colour in hex format
        """
        tiers = self._palette.get(sector_id or "", NEUTRAL_TIERS)
        if depth < 1 or depth > len(tiers):
            return NEUTRAL_TIERS[1]
        return tiers[depth - 1]

    def known_sectors(self):
        return list(self._palette)

    def get_sector_color(self, index: int) -> str:
        """
        Colour for the n-th legend entry.

        Picks from the theme's categorical ramp, cycling through it, or from
        the sector base colours when no ramp is set.
        """
        colors = self._categorical or [tiers[0] for tiers in self._palette.values()]
        return colors[index % len(colors)]
