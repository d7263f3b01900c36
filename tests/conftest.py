import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import matplotlib

matplotlib.use("Agg")

import pytest

from traitstats import (Accounting, SpeciesConfig, SpeciesRegistry, Topology,
                        TraitPayoff)


@pytest.fixture
def registry():
    """Species 0: one trait on [0, 10]; species 1: two traits on [0, 1] x [-1, 1]."""
    return SpeciesRegistry({
        0: SpeciesConfig(name="single", trait_min=(0.0,), trait_max=(10.0,), trait_names=("x",)),
        1: SpeciesConfig(name="pair", trait_min=(0.0, -1.0), trait_max=(1.0, 1.0), trait_names=("a", "b")),
    })


@pytest.fixture
def population():
    return {
        0: [[0.0], [2.0], [4.9], [5.0], [9.99], [10.0]],
        1: [[0.0, -1.0], [0.5, 0.0], [1.0, 1.0], [0.99, -0.99]],
    }


@pytest.fixture
def constant_species():
    def make(value=2.5, accounting=Accounting.AVERAGED, topology=None, n_traits=1):
        return SpeciesConfig(
            name="flat",
            trait_min=(0.0,) * n_traits,
            trait_max=(1.0,) * n_traits,
            payoff=TraitPayoff.constant(value, n_traits),
            accounting=accounting,
            topology=topology or Topology.complete(50),
        )
    return make
