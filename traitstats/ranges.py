import numpy as np

from .errors import ConfigurationError, TraitIndexError
from .registry import SpeciesRegistry


class TraitRangeProvider:
    """Legal trait ranges per species, straight from configuration."""

    def __init__(self, registry: SpeciesRegistry):
        self.registry = registry

    def trait_min(self, species_id: int) -> np.ndarray:
        return np.array(self.registry.get(species_id).trait_min, dtype=float)

    def trait_max(self, species_id: int) -> np.ndarray:
        return np.array(self.registry.get(species_id).trait_max, dtype=float)

    def trait_names(self, species_id: int):
        return list(self.registry.get(species_id).trait_names)

    def n_traits(self, species_id: int) -> int:
        return self.registry.get(species_id).n_traits

    def bin_edges(self, species_id: int, trait: int, n_bins: int) -> np.ndarray:
        """The ``n_bins + 1`` edges of the bins used for ``trait``."""
        cfg = self.registry.get(species_id)
        if not 0 <= trait < cfg.n_traits:
            raise TraitIndexError(f"{cfg.name}: trait {trait} out of range [0, {cfg.n_traits})")
        if n_bins < 1:
            raise ConfigurationError(f"n_bins must be >= 1, got {n_bins}")
        return np.linspace(cfg.trait_min[trait], cfg.trait_max[trait], n_bins + 1)
