"""
Statistics of evolving populations with continuous traits.

Provides:
    - ContinuousStats (trait ranges, monomorphic score bounds, trait histograms)
    - SpeciesConfig / SpeciesRegistry (per-species configuration records)
    - TraitPayoff, Costs, Benefits (separable payoff functions)
    - the TraitStatsError hierarchy
"""

from .entities import Accounting, Scan, SpeciesConfig, Topology
from .errors import (BufferShapeError, ConfigurationError, TraitDimensionError,
                     TraitIndexError, TraitStatsError, TraitValueError,
                     UnknownSpeciesError)
from .histogram import TraitHistogramBinner
from .payoffs import Benefits, Costs, TraitPayoff
from .ranges import TraitRangeProvider
from .registry import SpeciesRegistry
from .scores import MonoScoreEvaluator
from .stats import ContinuousStats

__all__ = [
    "Accounting", "Scan", "SpeciesConfig", "Topology",
    "TraitStatsError", "ConfigurationError", "UnknownSpeciesError", "BufferShapeError",
    "TraitIndexError", "TraitDimensionError", "TraitValueError",
    "TraitHistogramBinner", "TraitRangeProvider", "MonoScoreEvaluator", "ContinuousStats",
    "SpeciesRegistry", "TraitPayoff", "Costs", "Benefits",
]
