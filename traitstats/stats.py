from typing import Optional, Tuple

import numpy as np

from .entities import Scan
from .histogram import TraitHistogramBinner
from .ranges import TraitRangeProvider
from .registry import SpeciesRegistry
from .scores import MonoScoreEvaluator


class ContinuousStats:
    """Statistics of populations with continuous traits, keyed by species id.

    Wraps trait ranges, monomorphic score bounds and trait histograms behind one
    object. ``source`` provides the current trait values (see
    :func:`traitstats.histogram.trait_reader`); ``facts`` provides degree bounds
    and payoff accounting and defaults to the registry.
    """

    def __init__(self, registry: SpeciesRegistry, source, facts=None,
                 scan: Scan = Scan.TRAIT1_ROWS, normalized: bool = False):
        self.registry = registry
        self.ranges = TraitRangeProvider(registry)
        self.scores = MonoScoreEvaluator(registry, facts)
        self.binner = TraitHistogramBinner(registry, source, scan=scan, normalized=normalized)

    # ----- ranges -----

    def trait_min(self, species_id: int) -> np.ndarray:
        return self.ranges.trait_min(species_id)

    def trait_max(self, species_id: int) -> np.ndarray:
        return self.ranges.trait_max(species_id)

    def trait_names(self, species_id: int):
        return self.ranges.trait_names(species_id)

    def n_traits(self, species_id: int) -> int:
        return self.ranges.n_traits(species_id)

    def bin_edges(self, species_id: int, trait: int, n_bins: int) -> np.ndarray:
        return self.ranges.bin_edges(species_id, trait, n_bins)

    # ----- scores -----

    def min_mono_score(self, species_id: int) -> float:
        return self.scores.min_mono_score(species_id)

    def max_mono_score(self, species_id: int) -> float:
        return self.scores.max_mono_score(species_id)

    def min_score(self, species_id: int) -> float:
        return self.scores.min_score(species_id)

    def max_score(self, species_id: int) -> float:
        return self.scores.max_score(species_id)

    def is_neutral(self, species_id: int) -> bool:
        return self.scores.is_neutral(species_id)

    # ----- histograms -----

    def trait_histogram(self, species_id: int, bins, normalized: Optional[bool] = None):
        return self.binner.trait_histogram(species_id, bins, normalized=normalized)

    def trait_2d_histogram(self, species_id: int, bins, trait1: int = 0, trait2: int = 1,
                           shape: Optional[Tuple[int, int]] = None, normalized: Optional[bool] = None):
        return self.binner.trait_2d_histogram(species_id, bins, trait1, trait2,
                                              shape=shape, normalized=normalized)

    def new_histogram(self, species_id: int, n_bins: int) -> np.ndarray:
        """Zeroed (n_traits, n_bins) buffer for :meth:`trait_histogram`."""
        return np.zeros((self.n_traits(species_id), n_bins))
