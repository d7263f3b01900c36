"""
Extremal scores of populations with continuous traits.

The game scores are found numerically with a brute force hill climber: every
trait interval is cut into MINMAX_STEPS cells, the payoff is evaluated on all
grid nodes, and the intervals then shrink around the best node. After
MINMAX_ITER rounds the best payoff seen is returned. The raw game score is then
adjusted for payoff accounting, since accumulated scores scale with the number
of interactions an individual takes part in.
"""

import itertools
import logging
from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from .entities import Accounting
from .registry import SpeciesRegistry

logger = logging.getLogger(__name__)

# grid cells per trait and round
MINMAX_STEPS = 10
# rounds of interval refinement
MINMAX_ITER = 5
# tolerance below which min and max scores count as identical
NEUTRAL_EPS = 1e-8


def hill_climb(score: Callable[[np.ndarray], float], lo: Sequence[float], hi: Sequence[float],
               maximum: bool = True) -> Tuple[float, np.ndarray]:
    """Extremum of ``score`` over the box [lo, hi]; returns (value, argument)."""
    lo = np.array(lo, dtype=float)
    hi = np.array(hi, dtype=float)
    sign = 1.0 if maximum else -1.0
    best = -np.inf
    best_x = lo.copy()
    for _ in range(MINMAX_ITER):
        scale = (hi - lo) / MINMAX_STEPS
        round_best = -np.inf
        round_idx = None
        for idx in itertools.product(range(MINMAX_STEPS + 1), repeat=lo.size):
            x = lo + np.array(idx) * scale
            val = sign * score(x)
            if val > round_best:
                round_best = val
                round_idx = idx
                if val > best:
                    best = val
                    best_x = x
        if round_idx is None:
            # payoff undefined (NaN) on the whole grid
            break
        # shrink each interval to the cells adjacent to the best node
        for d, i in enumerate(round_idx):
            if i == 0:
                hi[d] = lo[d] + scale[d]
            elif i == MINMAX_STEPS:
                lo[d] += (MINMAX_STEPS - 1) * scale[d]
            else:
                lo[d] += (i - 1) * scale[d]
                hi[d] = lo[d] + 2.0 * scale[d]
    return sign * best, best_x


class MonoScoreEvaluator:
    """Minimum and maximum scores of monomorphic populations.

    ``facts`` supplies ``degree_bounds(id)`` and ``accounting_mode(id)``; by
    default the registry records are used.
    """

    def __init__(self, registry: SpeciesRegistry, facts: Optional[object] = None):
        self.registry = registry
        self.facts = facts if facts is not None else registry

    # ----- raw game scores -----

    def _mono_game_score(self, species_id: int, maximum: bool) -> float:
        cfg = self.registry.get(species_id)
        value, x = hill_climb(lambda t: cfg.payoff(t, t), cfg.trait_min, cfg.trait_max, maximum)
        logger.debug("mono %s species=%s score=%.6g at traits=%s",
                     "max" if maximum else "min", species_id, value, np.round(x, 6).tolist())
        return float(value)

    def _pair_game_score(self, species_id: int, maximum: bool) -> float:
        cfg = self.registry.get(species_id)
        n = cfg.n_traits
        value, x = hill_climb(lambda z: cfg.payoff(z[:n], z[n:]),
                              cfg.trait_min + cfg.trait_min, cfg.trait_max + cfg.trait_max, maximum)
        logger.debug("pair %s species=%s score=%.6g resident=%s mutant=%s",
                     "max" if maximum else "min", species_id, value,
                     np.round(x[:n], 6).tolist(), np.round(x[n:], 6).tolist())
        return float(value)

    def min_mono_game_score(self, species_id: int) -> float:
        return self._mono_game_score(species_id, False)

    def max_mono_game_score(self, species_id: int) -> float:
        return self._mono_game_score(species_id, True)

    # ----- accounting -----

    def _process(self, species_id: int, score: float, maximum: bool) -> float:
        mode = Accounting(self.facts.accounting_mode(species_id))
        if mode is Accounting.AVERAGED:
            return score
        kmin, kmax = self.facts.degree_bounds(species_id)
        # negative scores accumulate fastest on the best connected nodes
        if maximum:
            degree = kmin if score < 0.0 else kmax
        else:
            degree = kmax if score < 0.0 else kmin
        topo = self.registry.get(species_id).topology
        return topo.interactions(degree) * score

    # ----- public surface -----

    def min_mono_score(self, species_id: int) -> float:
        return self._process(species_id, self.min_mono_game_score(species_id), False)

    def max_mono_score(self, species_id: int) -> float:
        return self._process(species_id, self.max_mono_game_score(species_id), True)

    def mono_score_range(self, species_id: int) -> Tuple[float, float]:
        return self.min_mono_score(species_id), self.max_mono_score(species_id)

    def min_score(self, species_id: int) -> float:
        """Lowest score of any resident/mutant pairing."""
        return self._process(species_id, self._pair_game_score(species_id, False), False)

    def max_score(self, species_id: int) -> float:
        """Highest score of any resident/mutant pairing."""
        return self._process(species_id, self._pair_game_score(species_id, True), True)

    def is_neutral(self, species_id: int) -> bool:
        lo = self.min_mono_game_score(species_id)
        hi = self.max_mono_game_score(species_id)
        return abs(hi - lo) < NEUTRAL_EPS
