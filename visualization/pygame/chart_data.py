from typing import List, Tuple
from dataclasses import dataclass

@dataclass
class ChartData:
    """Histogram (or series) prepared for one chart panel"""
    values: List[float]
    min_value: float      # left edge of the first bin / lower y bound
    max_value: float      # right edge of the last bin / upper y bound
    color: Tuple[int, int, int]
    title: str
