import logging
from typing import Dict, Iterator, Mapping, Tuple

from .entities import Accounting, SpeciesConfig
from .errors import ConfigurationError, UnknownSpeciesError

logger = logging.getLogger(__name__)


class SpeciesRegistry:
    """Maps species ids to their immutable configuration records.

    Also answers the interaction facts (degree bounds, payoff accounting)
    that score evaluation needs, so a registry can stand in for the model
    layer when no other source is wired up.
    """

    def __init__(self, species: Mapping[int, SpeciesConfig] = ()):
        self._species: Dict[int, SpeciesConfig] = {}
        for sid, cfg in dict(species).items():
            self.add(sid, cfg)

    def add(self, species_id: int, cfg: SpeciesConfig) -> None:
        if not isinstance(cfg, SpeciesConfig):
            raise ConfigurationError(f"species {species_id}: expected SpeciesConfig, got {type(cfg).__name__}")
        if species_id in self._species:
            raise ConfigurationError(f"species id {species_id} already registered")
        self._species[species_id] = cfg
        logger.info("registered species id=%s name=%s traits=%s payoff=%r",
                    species_id, cfg.name, list(cfg.trait_names), cfg.payoff)

    def get(self, species_id: int) -> SpeciesConfig:
        try:
            return self._species[species_id]
        except (KeyError, TypeError):
            raise UnknownSpeciesError(species_id) from None

    def degree_bounds(self, species_id: int) -> Tuple[int, int]:
        topo = self.get(species_id).topology
        return topo.min_degree, topo.max_degree

    def accounting_mode(self, species_id: int) -> Accounting:
        return self.get(species_id).accounting

    def population_size(self, species_id: int) -> int:
        return self.get(species_id).topology.population_size

    def ids(self):
        return list(self._species)

    def __contains__(self, species_id) -> bool:
        try:
            return species_id in self._species
        except TypeError:
            return False

    def __iter__(self) -> Iterator[int]:
        return iter(self._species)

    def __len__(self) -> int:
        return len(self._species)
