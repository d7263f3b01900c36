import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from .errors import ConfigurationError
from .payoffs import TraitPayoff


class Accounting(Enum):
    AVERAGED = "averaged"        # score = mean payoff per interaction
    ACCUMULATED = "accumulated"  # score = sum of payoffs over all interactions


class Scan(Enum):
    """Flattening order of a 2D histogram: which trait runs along the rows."""
    TRAIT1_ROWS = "trait1_rows"  # idx = bin(trait1) * cols + bin(trait2)
    TRAIT2_ROWS = "trait2_rows"  # idx = bin(trait2) * cols + bin(trait1)


@dataclass(frozen=True)
class Topology:
    """Degree statistics of the interaction graph.

    A degree of 0 stands for a well-mixed population where every individual
    may interact with all ``population_size - 1`` others.
    """
    min_degree: int
    max_degree: int
    population_size: int

    def __post_init__(self):
        if self.population_size < 1:
            raise ConfigurationError(f"population_size must be >= 1, got {self.population_size}")
        if not 0 <= self.min_degree <= self.max_degree:
            raise ConfigurationError(
                f"degree bounds must satisfy 0 <= min <= max, got ({self.min_degree}, {self.max_degree})")

    @classmethod
    def well_mixed(cls, population_size: int) -> "Topology":
        return cls(0, 0, population_size)

    @classmethod
    def complete(cls, population_size: int) -> "Topology":
        k = population_size - 1
        return cls(k, k, population_size)

    @classmethod
    def regular(cls, degree: int, population_size: int) -> "Topology":
        return cls(degree, degree, population_size)

    def interactions(self, degree: int) -> int:
        return self.population_size - 1 if degree == 0 else degree


def _as_tuple(values: Sequence, cast) -> tuple:
    return tuple(cast(v) for v in values)


@dataclass(frozen=True)
class SpeciesConfig:
    """Immutable per-species record: trait bounds, payoff and interaction facts."""
    name: str
    trait_min: Tuple[float, ...]
    trait_max: Tuple[float, ...]
    trait_names: Tuple[str, ...] = ()
    payoff: Optional[Callable] = None
    accounting: Accounting = Accounting.AVERAGED
    topology: Topology = field(default_factory=lambda: Topology.well_mixed(100))

    def __post_init__(self):
        tmin = _as_tuple(self.trait_min, float)
        tmax = _as_tuple(self.trait_max, float)
        if not tmin or len(tmin) != len(tmax):
            raise ConfigurationError(
                f"{self.name}: trait_min and trait_max need the same non-zero length "
                f"(got {len(tmin)} and {len(tmax)})")
        for t, (lo, hi) in enumerate(zip(tmin, tmax)):
            if not (math.isfinite(lo) and math.isfinite(hi)) or lo >= hi:
                raise ConfigurationError(f"{self.name}: trait {t} needs finite bounds with min < max, got [{lo}, {hi}]")
        names = _as_tuple(self.trait_names, str) or tuple(f"trait{t}" for t in range(len(tmin)))
        if len(names) != len(tmin):
            raise ConfigurationError(f"{self.name}: expected {len(tmin)} trait names, got {len(names)}")
        payoff = self.payoff if self.payoff is not None else TraitPayoff.constant(0.0, len(tmin))
        if not callable(payoff):
            raise ConfigurationError(f"{self.name}: payoff must be callable")
        if getattr(payoff, "n_traits", len(tmin)) != len(tmin):
            raise ConfigurationError(f"{self.name}: payoff covers {payoff.n_traits} traits, species has {len(tmin)}")
        # frozen dataclass: normalise fields through object.__setattr__
        object.__setattr__(self, "trait_min", tmin)
        object.__setattr__(self, "trait_max", tmax)
        object.__setattr__(self, "trait_names", names)
        object.__setattr__(self, "payoff", payoff)
        object.__setattr__(self, "accounting", Accounting(self.accounting))

    @property
    def n_traits(self) -> int:
        return len(self.trait_min)
