"""
Pygame-based live view of trait histograms.

Provides:
    - COLORS (shared color palette)
    - ChartData (dataclass for charts)
    - draw_histogram_lattice (renders a flat 2D histogram as a square lattice)
    - HistogramMonitor (main visualization class)
"""

from .colors import COLORS
from .chart_data import ChartData
from .grid_renderer import draw_histogram_lattice
from .monitor import HistogramMonitor

__all__ = ["COLORS", "ChartData", "draw_histogram_lattice", "HistogramMonitor"]
