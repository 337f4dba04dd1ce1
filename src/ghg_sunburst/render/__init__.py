"""
Painters that turn a SunburstScene into SVG, PNG or PDF.
"""

from .matplotlib_renderer import ChartRenderingService
from .svg_renderer import SvgRenderingService

__all__ = ["ChartRenderingService", "SvgRenderingService"]
