import logging
from typing import Dict, List

import numpy as np

from .config import CFG
from .registry import SpeciesRegistry

logger = logging.getLogger(__name__)

# selection temperature of the imitation update
FERMI_K = 0.1


class EvolvingPopulation:
    """Reference trait store: imitation of better-scoring partners plus mutation.

    Only here to drive the statistics in demos and tests. Individuals meet
    random partners (well-mixed), compare payoffs with a random role model and
    copy it with Fermi probability. Mutations are Gaussian with a stdev of
    ``MUT_PCT`` of the trait range, clamped to the range, plus a tiny
    ``DRIFT`` noise term that may leave values just outside the bounds.
    """

    def __init__(self, registry: SpeciesRegistry, cfg: CFG, rng: np.random.Generator = None):
        self.registry = registry
        self.cfg = cfg
        self.rng = rng if rng is not None else np.random.default_rng(cfg.SEED)
        self.traits: Dict[int, np.ndarray] = {sid: self._random_traits(sid) for sid in registry}
        self.steps = 0

        # Metrics
        self.mean_series: Dict[int, List[np.ndarray]] = {sid: [] for sid in registry}

    # ----- initialization -----

    def _random_traits(self, species_id: int) -> np.ndarray:
        species = self.registry.get(species_id)
        n = species.topology.population_size
        lo = np.array(species.trait_min)
        hi = np.array(species.trait_max)
        traits = self.rng.uniform(lo, hi, size=(n, species.n_traits))
        logger.info("[0] SPAWN species=%s n=%d mean=%s", species.name, n, np.round(traits.mean(axis=0), 3).tolist())
        return traits

    def _mutate(self, species_id: int, traits: np.ndarray) -> np.ndarray:
        species = self.registry.get(species_id)
        lo = np.array(species.trait_min)
        hi = np.array(species.trait_max)
        stdev = (hi - lo) * self.cfg.MUT_PCT
        mutated = np.clip(traits + self.rng.normal(0.0, 1.0, traits.shape) * stdev, lo, hi)
        return mutated + self.rng.normal(0.0, 1.0, traits.shape) * (hi - lo) * self.cfg.DRIFT

    # ----- accessor -----

    def current_trait_values(self, species_id: int) -> np.ndarray:
        """Read-only view of the (N, n_traits) trait array of ``species_id``."""
        self.registry.get(species_id)
        view = self.traits[species_id].view()
        view.flags.writeable = False
        return view

    # ----- dynamics -----

    def _scores(self, species_id: int, traits: np.ndarray) -> np.ndarray:
        payoff = self.registry.get(species_id).payoff
        n = len(traits)
        partners = self.rng.integers(0, n, size=n)
        return np.array([payoff(traits[i], traits[j]) for i, j in enumerate(partners)])

    def step(self):
        for sid, traits in self.traits.items():
            n = len(traits)
            if n == 0:
                continue
            scores = self._scores(sid, traits)
            models = self.rng.integers(0, n, size=n)
            gain = np.clip((scores[models] - scores) / FERMI_K, -50.0, 50.0)
            p_adopt = 1.0 / (1.0 + np.exp(-gain))
            adopt = self.rng.random(n) < p_adopt
            new = traits.copy()
            new[adopt] = traits[models[adopt]]

            mutants = self.rng.random(n) < self.cfg.MUT_PROB
            if np.any(mutants):
                new[mutants] = self._mutate(sid, new[mutants])
            self.traits[sid] = new
            self.mean_series[sid].append(new.mean(axis=0))
            logger.debug("[%d] STEP species=%s adopted=%d mutated=%d",
                         self.steps, sid, int(adopt.sum()), int(mutants.sum()))
        self.steps += 1
