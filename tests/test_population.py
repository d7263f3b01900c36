import numpy as np
import pytest

from traitstats import ContinuousStats, UnknownSpeciesError
from traitstats.config import CFG, default_registry
from traitstats.population import EvolvingPopulation


def test_initial_traits_within_bounds(registry):
    pop = EvolvingPopulation(registry, CFG())
    values = pop.current_trait_values(1)
    assert values.shape == (100, 2)
    assert (values >= [0.0, -1.0]).all() and (values <= [1.0, 1.0]).all()
    assert pop.current_trait_values(0).shape == (100, 1)


def test_trait_view_is_read_only(registry):
    pop = EvolvingPopulation(registry, CFG())
    view = pop.current_trait_values(0)
    with pytest.raises(ValueError):
        view[0, 0] = 5.0


def test_unknown_species(registry):
    pop = EvolvingPopulation(registry, CFG())
    with pytest.raises(UnknownSpeciesError):
        pop.current_trait_values(2)


def test_steps_record_means_and_stay_near_bounds(registry):
    pop = EvolvingPopulation(registry, CFG(MUT_PROB=1.0, MUT_PCT=0.5))
    for _ in range(10):
        pop.step()
    assert pop.steps == 10
    assert len(pop.mean_series[1]) == 10
    values = pop.current_trait_values(1)
    # mutations are clamped, only the drift term may cross a bound
    assert (values >= np.array([0.0, -1.0]) - 1e-6).all()
    assert (values <= np.array([1.0, 1.0]) + 1e-6).all()


def test_same_seed_same_history(registry):
    a = EvolvingPopulation(registry, CFG(SEED=11))
    b = EvolvingPopulation(registry, CFG(SEED=11))
    for _ in range(5):
        a.step()
        b.step()
    assert np.array_equal(a.current_trait_values(1), b.current_trait_values(1))


def test_histograms_count_the_whole_population():
    cfg = CFG(N0=150, MUT_PROB=0.5)
    registry = default_registry(cfg)
    pop = EvolvingPopulation(registry, cfg)
    stats = ContinuousStats(registry, pop)
    for _ in range(3):
        pop.step()
    for sid in registry:
        bins = stats.new_histogram(sid, cfg.HIST_BINS)
        stats.trait_histogram(sid, bins)
        assert (bins.sum(axis=1) == 150).all()
        flat = np.zeros(cfg.HIST2D_SIDE ** 2)
        stats.trait_2d_histogram(sid, flat)
        assert flat.sum() == 150
