from dataclasses import dataclass, field
from typing import Dict, Tuple

from .entities import Accounting, Scan, SpeciesConfig, Topology
from .payoffs import Benefits, Costs, TraitPayoff
from .registry import SpeciesRegistry


@dataclass
class CFG:
    # Run
    SEED: int = 7
    N_STEPS: int = 500
    LOG_LEVEL: str = "INFO"

    # Population (reference store only)
    N0: int = 400                 # individuals per species
    MUT_PCT: float = 0.02         # mutation stdev as fraction of trait range
    MUT_PROB: float = 0.1         # per individual and step
    DRIFT: float = 1e-9           # numerical noise allowed past the bounds

    # Continuous snowdrift game (one trait): B(x+y), C(x)
    CSD_RANGE: Tuple[float, float] = (0.0, 1.0)
    CSD_BENEFIT: Tuple[float, ...] = (6.0, -1.4)
    CSD_COST: Tuple[float, ...] = (4.56, -1.6)
    CSD_DEGREE: int = 4           # von Neumann lattice

    # Two-trait investment game: (effort, sharing)
    INV_RANGES: Tuple[Tuple[float, float], ...] = ((0.0, 2.0), (0.0, 1.0))
    INV_BENEFIT: Tuple[Tuple[float, ...], ...] = ((3.0, -0.5), (1.0,))
    INV_COST: Tuple[Tuple[float, ...], ...] = ((1.0, 0.25), (0.5,))
    INV_ACCOUNTING: Accounting = Accounting.ACCUMULATED
    INV_DEGREES: Tuple[int, int] = (2, 8)

    # Histograms
    HIST_BINS: int = 20
    HIST2D_SIDE: int = 30
    HIST_SCAN: Scan = Scan.TRAIT1_ROWS
    HIST_NORMALIZED: bool = False

    # Charts
    OUTPUT_DIR: str = "simulation_results"
    UI_FIGSIZE: Tuple[float, float] = (10, 6)
    UI_DPI: int = 150
    TRAIT_COLORS: Dict[str, str] = field(default_factory=lambda: {
        "investment": "#ff7f0e",
        "effort": "#1f77b4",
        "sharing": "#2ca02c",
    })


def default_registry(cfg: CFG) -> SpeciesRegistry:
    """The two demo species: a one-trait snowdrift game and a two-trait game."""
    csd = SpeciesConfig(
        name="snowdrift",
        trait_min=(cfg.CSD_RANGE[0],),
        trait_max=(cfg.CSD_RANGE[1],),
        trait_names=("investment",),
        payoff=TraitPayoff([Costs.ME_QUAD], [cfg.CSD_COST],
                           [Benefits.WE_QUAD], [cfg.CSD_BENEFIT]),
        accounting=Accounting.AVERAGED,
        topology=Topology.regular(cfg.CSD_DEGREE, cfg.N0),
    )
    inv = SpeciesConfig(
        name="investors",
        trait_min=tuple(lo for lo, _ in cfg.INV_RANGES),
        trait_max=tuple(hi for _, hi in cfg.INV_RANGES),
        trait_names=("effort", "sharing"),
        payoff=TraitPayoff([Costs.ME_QUAD, Costs.ME_LINEAR], cfg.INV_COST,
                           [Benefits.WE_QUAD, Benefits.YOU_LINEAR], cfg.INV_BENEFIT),
        accounting=cfg.INV_ACCOUNTING,
        topology=Topology(cfg.INV_DEGREES[0], cfg.INV_DEGREES[1], cfg.N0),
    )
    return SpeciesRegistry({0: csd, 1: inv})
