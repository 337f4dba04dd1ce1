"""
ghg-sunburst: three-ring sunburst charts with automatic wedge labels.
"""

__version__ = "1.0.0"
