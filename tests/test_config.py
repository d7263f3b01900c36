import math

import numpy as np
import pytest

from traitstats import (Accounting, Benefits, ConfigurationError, ContinuousStats, Costs,
                        SpeciesConfig, SpeciesRegistry, Topology, TraitIndexError, TraitPayoff,
                        TraitRangeProvider, UnknownSpeciesError)
from traitstats.config import CFG, default_registry
from traitstats.payoffs import _pad


# ----- species records -----

def test_species_defaults():
    species = SpeciesConfig(name="s", trait_min=[0, 1], trait_max=[1, 3])
    assert species.trait_min == (0.0, 1.0)
    assert species.trait_max == (1.0, 3.0)
    assert species.trait_names == ("trait0", "trait1")
    assert species.n_traits == 2
    assert species.accounting is Accounting.AVERAGED
    assert species.payoff([0.5, 2.0], [0.1, 1.0]) == 0.0


def test_accounting_from_string():
    species = SpeciesConfig(name="s", trait_min=(0,), trait_max=(1,), accounting="accumulated")
    assert species.accounting is Accounting.ACCUMULATED


@pytest.mark.parametrize("tmin, tmax", [
    ((), ()),                      # no traits
    ((0.0, 0.0), (1.0,)),          # length mismatch
    ((1.0,), (1.0,)),              # empty range
    ((2.0,), (1.0,)),              # reversed
    ((0.0,), (math.inf,)),         # unbounded
    ((math.nan,), (1.0,)),
])
def test_invalid_trait_bounds(tmin, tmax):
    with pytest.raises(ConfigurationError):
        SpeciesConfig(name="bad", trait_min=tmin, trait_max=tmax)


def test_payoff_must_match_trait_count():
    with pytest.raises(ConfigurationError):
        SpeciesConfig(name="bad", trait_min=(0, 0), trait_max=(1, 1), payoff=TraitPayoff.constant(1.0, 1))
    with pytest.raises(ConfigurationError):
        SpeciesConfig(name="bad", trait_min=(0,), trait_max=(1,), payoff=3.0)
    with pytest.raises(ConfigurationError):
        SpeciesConfig(name="bad", trait_min=(0,), trait_max=(1,), trait_names=("a", "b"))


def test_plain_callable_payoff():
    species = SpeciesConfig(name="f", trait_min=(0,), trait_max=(1,), payoff=lambda me, you: me[0] * you[0])
    assert species.payoff([0.5], [0.5]) == 0.25


def test_species_is_immutable():
    species = SpeciesConfig(name="s", trait_min=(0,), trait_max=(1,))
    with pytest.raises(AttributeError):
        species.name = "t"


def test_topology():
    assert Topology.well_mixed(10).interactions(0) == 9
    assert Topology.complete(10).interactions(9) == 9
    assert Topology.regular(4, 100).interactions(4) == 4
    with pytest.raises(ConfigurationError):
        Topology(5, 3, 10)
    with pytest.raises(ConfigurationError):
        Topology(-1, 3, 10)
    with pytest.raises(ConfigurationError):
        Topology(0, 0, 0)


# ----- registry -----

def test_registry_lookup(registry):
    assert len(registry) == 2
    assert list(registry) == [0, 1]
    assert registry.ids() == [0, 1]
    assert 1 in registry
    assert 7 not in registry
    assert [] not in registry
    assert registry.get(1).name == "pair"
    assert registry.degree_bounds(0) == (0, 0)
    assert registry.accounting_mode(0) is Accounting.AVERAGED
    assert registry.population_size(1) == 100


def test_registry_rejects_duplicates_and_junk(registry):
    with pytest.raises(ConfigurationError):
        registry.add(0, registry.get(1))
    with pytest.raises(ConfigurationError):
        registry.add(5, {"name": "dict"})


def test_unknown_species_message():
    reg = SpeciesRegistry()
    with pytest.raises(UnknownSpeciesError, match="unknown species id 4"):
        reg.get(4)
    with pytest.raises(KeyError):
        reg.degree_bounds(4)


# ----- ranges -----

def test_trait_ranges(registry):
    ranges = TraitRangeProvider(registry)
    assert ranges.trait_min(1).tolist() == [0.0, -1.0]
    assert ranges.trait_max(1).tolist() == [1.0, 1.0]
    assert (ranges.trait_min(1) < ranges.trait_max(1)).all()
    assert ranges.trait_names(1) == ["a", "b"]
    assert ranges.n_traits(0) == 1


def test_trait_ranges_are_copies(registry):
    ranges = TraitRangeProvider(registry)
    lo = ranges.trait_min(0)
    lo[0] = 99.0
    assert ranges.trait_min(0)[0] == 0.0


def test_bin_edges(registry):
    ranges = TraitRangeProvider(registry)
    assert ranges.bin_edges(0, 0, 5).tolist() == [0.0, 2.0, 4.0, 6.0, 8.0, 10.0]
    assert ranges.bin_edges(1, 1, 2) == pytest.approx([-1.0, 0.0, 1.0])
    with pytest.raises(TraitIndexError):
        ranges.bin_edges(0, 1, 5)
    with pytest.raises(ConfigurationError):
        ranges.bin_edges(0, 0, 0)
    with pytest.raises(UnknownSpeciesError):
        ranges.trait_max(9)


# ----- payoffs -----

def test_pad_repeats_parameters():
    assert _pad([1.0], 3) == (1.0, 1.0, 1.0)
    assert _pad([1.0, 2.0], 3) == (1.0, 2.0, 1.0)
    assert _pad([1, 2, 3], 2) == (1.0, 2.0)
    with pytest.raises(ConfigurationError):
        _pad([], 2)


def test_cost_and_benefit_functions():
    assert Costs.ME_QUAD.evaluate((1.0, 2.0), 3.0, 0.0) == pytest.approx(21.0)
    assert Costs.WE_LINEAR.evaluate((2.0,), 1.0, 0.5) == pytest.approx(3.0)
    assert Costs.MEYOU_LINEAR.evaluate((1.0, 2.0, 3.0), 1.0, 2.0) == pytest.approx(11.0)
    assert Benefits.YOU_SQRT.evaluate((2.0,), 9.0, 4.0) == pytest.approx(4.0)
    assert Benefits.WE_EXP.evaluate((1.0, 1.0), 0.0, 0.0) == pytest.approx(0.0)
    assert Benefits.ME_CUBIC.evaluate((1.0, 1.0, 1.0), 2.0, 0.0) == pytest.approx(14.0)
    assert str(Costs.ME_LINEAR) == "0: C(x,y)=c0*x"


def test_snowdrift_payoff():
    payoff = TraitPayoff([Costs.ME_QUAD], [(4.56, -1.6)], [Benefits.WE_QUAD], [(6.0, -1.4)])
    x, y = 0.3, 0.5
    expected = 6.0 * (x + y) - 1.4 * (x + y) ** 2 - (4.56 * x - 1.6 * x ** 2)
    assert payoff([x], [y]) == pytest.approx(expected)
    assert payoff.n_traits == 1
    assert "WE_QUAD" in repr(payoff)


def test_payoff_sums_over_traits():
    payoff = TraitPayoff([Costs.ME_LINEAR, Costs.ME_LINEAR], [(1.0,), (2.0,)],
                         [Benefits.YOU_LINEAR, Benefits.YOU_LINEAR], [(3.0,), (4.0,)], offset=0.5)
    assert payoff([1.0, 1.0], [1.0, 2.0]) == pytest.approx(3.0 + 8.0 - 1.0 - 2.0 + 0.5)


def test_payoff_shape_errors():
    with pytest.raises(ConfigurationError):
        TraitPayoff([], [], [], [])
    with pytest.raises(ConfigurationError):
        TraitPayoff([Costs.ME_LINEAR], [(1.0,)], [Benefits.ME_LINEAR, Benefits.ME_LINEAR], [(1.0,)])


# ----- demo configuration -----

def test_default_registry():
    cfg = CFG()
    reg = default_registry(cfg)
    assert reg.ids() == [0, 1]
    snowdrift, investors = reg.get(0), reg.get(1)
    assert snowdrift.trait_names == ("investment",)
    assert snowdrift.topology.population_size == cfg.N0
    assert investors.n_traits == 2
    assert investors.accounting is Accounting.ACCUMULATED
    assert reg.degree_bounds(1) == cfg.INV_DEGREES


def test_stats_facade(registry, population):
    stats = ContinuousStats(registry, population)
    assert stats.trait_min(0).tolist() == [0.0]
    assert stats.trait_max(0).tolist() == [10.0]
    assert stats.trait_names(1) == ["a", "b"]
    assert stats.bin_edges(0, 0, 2).tolist() == [0.0, 5.0, 10.0]

    bins = stats.new_histogram(1, 4)
    assert bins.shape == (2, 4)
    stats.trait_histogram(1, bins)
    assert bins.sum(axis=1).tolist() == [4, 4]

    flat = np.zeros(4)
    stats.trait_2d_histogram(1, flat)
    assert flat.sum() == 4

    # default payoff is zero everywhere
    assert stats.min_mono_score(1) == stats.max_mono_score(1) == 0.0
    assert stats.min_score(0) == stats.max_score(0) == 0.0
    assert stats.is_neutral(0)


def test_payoff_repr_lists_function_keys():
    payoff = TraitPayoff([Costs.ME_QUAD], [(4.56, -1.6)], [Benefits.WE_QUAD], [(6.0, -1.4)])
    text = repr(payoff)
    assert "ME_QUAD (1: C(x,y)=c0*x+c1*x^2)" in text
    assert "WE_QUAD (11: B(x,y)=b0*(x+y)+b1*(x+y)^2)" in text


def test_registration_logs_payoff(caplog):
    reg = SpeciesRegistry()
    with caplog.at_level("INFO", logger="traitstats"):
        reg.add(3, SpeciesConfig(name="logged", trait_min=(0,), trait_max=(1,)))
    assert "ME_LINEAR (0: C(x,y)=c0*x)" in caplog.text
