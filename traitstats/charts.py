import logging
import os
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np

from .config import CFG
from .entities import Scan
from .population import EvolvingPopulation
from .stats import ContinuousStats

logger = logging.getLogger(__name__)


def _slug(name: str) -> str:
    return name.strip().lower().replace(" ", "_")


def _value_label(stats: ContinuousStats) -> str:
    return "Density" if stats.binner.normalized else "Frequency"


def trait_histogram_charts(stats: ContinuousStats, species_id: int, cfg: CFG, output_dir: str) -> List[str]:
    """One bar chart per trait of the current trait distribution."""
    species = stats.registry.get(species_id)
    bins = stats.new_histogram(species_id, cfg.HIST_BINS)
    stats.trait_histogram(species_id, bins)
    total = int(round(bins[0].sum())) if not stats.binner.normalized else None

    paths = []
    for t, name in enumerate(species.trait_names):
        edges = stats.bin_edges(species_id, t, cfg.HIST_BINS)
        color = cfg.TRAIT_COLORS.get(name, "#ff7f0e")
        fig, ax = plt.subplots(figsize=cfg.UI_FIGSIZE, dpi=cfg.UI_DPI)
        ax.bar(edges[:-1], bins[t], width=np.diff(edges), align="edge",
               alpha=0.7, color=color, edgecolor="black")
        title = f"{species.name}: {name} distribution"
        if total is not None:
            title += f" (n={total})"
        ax.set_title(title, fontsize=16, fontweight="bold")
        ax.set_xlabel(name, fontsize=12)
        ax.set_ylabel(_value_label(stats), fontsize=12)
        ax.set_xlim(edges[0], edges[-1])
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        path = os.path.join(output_dir, f"{_slug(species.name)}_{_slug(name)}_histogram.png")
        fig.savefig(path, dpi=cfg.UI_DPI, bbox_inches="tight")
        plt.close(fig)
        paths.append(path)
    return paths


def trait_2d_chart(stats: ContinuousStats, species_id: int, cfg: CFG, output_dir: str,
                   trait1: int = 0, trait2: int = 1) -> Optional[str]:
    """Heat map of the joint distribution of two traits; None for single-trait species."""
    species = stats.registry.get(species_id)
    if species.n_traits < 2:
        return None
    side = cfg.HIST2D_SIDE
    buf = np.zeros(side * side)
    stats.trait_2d_histogram(species_id, buf, trait1, trait2)

    # rows run along the first axis of the lattice
    row_t, col_t = (trait1, trait2) if stats.binner.scan is Scan.TRAIT1_ROWS else (trait2, trait1)
    extent = (species.trait_min[col_t], species.trait_max[col_t], species.trait_min[row_t], species.trait_max[row_t])
    fig, ax = plt.subplots(figsize=cfg.UI_FIGSIZE, dpi=cfg.UI_DPI)
    im = ax.imshow(buf.reshape(side, side), origin="lower", extent=extent, aspect="auto",
                   cmap="viridis", interpolation="nearest")
    fig.colorbar(im, ax=ax, label=_value_label(stats))
    ax.set_title(f"{species.name}: {species.trait_names[row_t]} vs {species.trait_names[col_t]}",
                 fontsize=16, fontweight="bold")
    ax.set_xlabel(species.trait_names[col_t], fontsize=12)
    ax.set_ylabel(species.trait_names[row_t], fontsize=12)
    fig.tight_layout()
    path = os.path.join(output_dir, f"{_slug(species.name)}_2d_histogram.png")
    fig.savefig(path, dpi=cfg.UI_DPI, bbox_inches="tight")
    plt.close(fig)
    return path


def mean_trait_chart(population: EvolvingPopulation, species_id: int, cfg: CFG, output_dir: str) -> Optional[str]:
    """Mean of every trait over time, scaled to the trait range."""
    series = population.mean_series.get(species_id)
    if not series:
        return None
    species = population.registry.get(species_id)
    means = np.array(series)
    lo = np.array(species.trait_min)
    hi = np.array(species.trait_max)
    steps = np.arange(len(means))

    fig, ax = plt.subplots(figsize=cfg.UI_FIGSIZE, dpi=cfg.UI_DPI)
    for t, name in enumerate(species.trait_names):
        ax.plot(steps, (means[:, t] - lo[t]) / (hi[t] - lo[t]), lw=3,
                color=cfg.TRAIT_COLORS.get(name), label=name)
    ax.set_title(f"{species.name}: mean traits - {len(means)} steps", fontsize=16, fontweight="bold")
    ax.set_xlabel("Step", fontsize=12)
    ax.set_ylabel("Mean trait (fraction of range)", fontsize=12)
    ax.set_ylim(0.0, 1.0)
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    path = os.path.join(output_dir, f"{_slug(species.name)}_mean_traits.png")
    fig.savefig(path, dpi=cfg.UI_DPI, bbox_inches="tight")
    plt.close(fig)
    return path


def final_charts(stats: ContinuousStats, cfg: CFG, population: Optional[EvolvingPopulation] = None,
                 output_dir: Optional[str] = None) -> List[str]:
    """Generate and save the trait charts of every species; returns the file paths."""
    output_dir = output_dir or cfg.OUTPUT_DIR
    os.makedirs(output_dir, exist_ok=True)

    paths: List[str] = []
    for sid in stats.registry:
        paths.extend(trait_histogram_charts(stats, sid, cfg, output_dir))
        for extra in (trait_2d_chart(stats, sid, cfg, output_dir),
                      mean_trait_chart(population, sid, cfg, output_dir) if population else None):
            if extra:
                paths.append(extra)

    logger.info("=== TRAIT SUMMARY ===")
    for sid in stats.registry:
        species = stats.registry.get(sid)
        lo, hi = stats.min_mono_score(sid), stats.max_mono_score(sid)
        logger.info("%s: traits=%s mono scores=[%.3f, %.3f]%s", species.name, list(species.trait_names),
                    lo, hi, " (neutral)" if stats.is_neutral(sid) else "")
    logger.info("Charts saved to '%s/' (%d files)", output_dir, len(paths))
    return paths
