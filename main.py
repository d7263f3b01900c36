import argparse
import logging
import time

from traitstats.charts import final_charts
from traitstats.config import CFG, default_registry
from traitstats.population import EvolvingPopulation
from traitstats.stats import ContinuousStats

logger = logging.getLogger("traitstats")


def run(cfg: CFG, headless: bool = False):
    registry = default_registry(cfg)
    population = EvolvingPopulation(registry, cfg)
    stats = ContinuousStats(registry, population, scan=cfg.HIST_SCAN, normalized=cfg.HIST_NORMALIZED)

    if headless:
        for _ in range(cfg.N_STEPS):
            population.step()
        logger.info("Simulation completed normally after %d steps", population.steps)
        return final_charts(stats, cfg, population)

    from visualization.pygame.monitor import HistogramMonitor
    monitor = HistogramMonitor(stats, population, cfg)
    ticks_per_second = 20.0
    last_tick_time = time.time()
    try:
        while population.steps < cfg.N_STEPS:
            if monitor.should_stop:
                logger.info("Simulation stopped by user")
                break
            now = time.time()
            if not monitor.is_paused and now - last_tick_time >= 1.0 / ticks_per_second:
                last_tick_time = now
                population.step()
            # histograms are read between steps, never during one
            if not monitor.render():
                break
        else:
            logger.info("Simulation completed normally")
        return final_charts(stats, cfg, population)
    finally:
        monitor.cleanup()


def main():
    ap = argparse.ArgumentParser(description="Trait histograms of evolving continuous-trait populations")
    ap.add_argument("--steps", type=int, default=CFG.N_STEPS)
    ap.add_argument("--seed", type=int, default=CFG.SEED)
    ap.add_argument("--bins", type=int, default=CFG.HIST_BINS)
    ap.add_argument("--side", type=int, default=CFG.HIST2D_SIDE, help="side of the 2D histogram lattice")
    ap.add_argument("--normalized", action="store_true", help="densities instead of counts")
    ap.add_argument("--output-dir", default=CFG.OUTPUT_DIR)
    ap.add_argument("--headless", action="store_true", help="skip the pygame monitor")
    ap.add_argument("--log-level", default=CFG.LOG_LEVEL)
    args = ap.parse_args()

    cfg = CFG(
        SEED=args.seed,
        N_STEPS=args.steps,
        HIST_BINS=args.bins,
        HIST2D_SIDE=args.side,
        HIST_NORMALIZED=args.normalized,
        OUTPUT_DIR=args.output_dir,
        LOG_LEVEL=args.log_level.upper(),
    )
    logging.basicConfig(level=cfg.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(cfg, headless=args.headless)


if __name__ == "__main__":
    main()
