import itertools

import numpy as np
import pygame

from traitstats.entities import Scan
from .colors import COLORS
from .chart_data import ChartData
from .grid_renderer import draw_grid
from .chart_renderer import update_chart_data, draw_charts
from .ui_renderer import draw_legend, draw_buttons, draw_status
from .event_handler import handle_events


class HistogramMonitor:
    def __init__(self, stats, population, cfg, species_id=None):
        self.stats = stats
        self.population = population
        self.cfg = cfg

        # --- Initialize pygame ---
        pygame.init()
        self.width, self.height = 1280, 900
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption("Trait Histograms - Pygame Monitor")

        # Fonts
        self.fonts = {
            "small": pygame.font.Font(None, 18),
            "medium": pygame.font.Font(None, 22),
            "large": pygame.font.Font(None, 28),
        }

        # Lattice layout
        self.grid_size = 720
        self.grid_x, self.grid_y = 50, 50

        # UI state
        self.is_paused = False
        self.should_stop = False
        self.mouse_pos = (0, 0)
        self.charts = {}

        self.buttons = self._init_buttons()
        self.legend = {"x": self.grid_x + self.grid_size + 40, "y": 50, "width": 300, "height": 190}

        ids = list(stats.registry)
        self.species_id = ids[0] if species_id is None else species_id
        self.select_species(self.species_id)

        # FPS control
        self.fps_clock = pygame.time.Clock()
        self.fps = 30

    # ---------- Initialization helpers ----------

    def _init_buttons(self):
        button_width, button_height = 120, 40
        button_y = self.height - 60
        return {
            "pause_play": {
                "rect": pygame.Rect(self.width // 2 - button_width - 20, button_y, button_width, button_height),
                "text": "⏸ Pause",
                "color": COLORS["UI_BUTTON"],
                "hover_color": COLORS["UI_BUTTON_HOVER"],
                "action": "toggle_pause",
            },
            "stop": {
                "rect": pygame.Rect(self.width // 2 + 20, button_y, button_width, button_height),
                "text": "⏹ Stop",
                "color": COLORS["UI_STOP"],
                "hover_color": (255, 150, 150),
                "action": "stop",
            },
            "species": {
                "rect": pygame.Rect(self.width // 2 + button_width + 60, button_y, button_width, button_height),
                "text": "Species ⇥",
                "color": COLORS["UI_BUTTON"],
                "hover_color": COLORS["UI_BUTTON_HOVER"],
                "action": "next_species",
            },
        }

    @staticmethod
    def make_chart(values, lo, hi, color, title):
        return ChartData(values, lo, hi, color, title)

    # ---------- Species / trait selection ----------

    def select_species(self, species_id):
        self.species_id = species_id
        n = self.stats.n_traits(species_id)
        names = self.stats.trait_names(species_id)
        self.trait_pairs = list(itertools.combinations(range(n), 2)) or [(0, 0)]
        self.trait_pair = self.trait_pairs[0]
        self.hist1d = self.stats.new_histogram(species_id, self.cfg.HIST_BINS)

        side = self.cfg.HIST2D_SIDE
        if n == 1:
            # single trait: the 2D buffer is an N x 1 lattice
            self.lattice_rows, self.lattice_cols = side, 1
            self.lattice_axes = (names[0], "")
        else:
            self.lattice_rows = self.lattice_cols = side
            self._set_axes(names)
        self.hist2d = np.zeros(self.lattice_rows * self.lattice_cols)
        self.cell_size = self.grid_size // max(self.lattice_rows, self.lattice_cols)

        # score bounds do not change during a run; compute once per selection
        self.score_range = (self.stats.min_mono_score(species_id), self.stats.max_mono_score(species_id))
        self.neutral = self.stats.is_neutral(species_id)

    def _set_axes(self, names):
        t1, t2 = self.trait_pair
        if self.stats.binner.scan is Scan.TRAIT1_ROWS:
            self.lattice_axes = (names[t1], names[t2])
        else:
            self.lattice_axes = (names[t2], names[t1])

    def next_species(self):
        ids = list(self.stats.registry)
        self.select_species(ids[(ids.index(self.species_id) + 1) % len(ids)])

    def next_trait_pair(self):
        if self.stats.n_traits(self.species_id) < 2:
            return
        self.trait_pair = self.trait_pairs[(self.trait_pairs.index(self.trait_pair) + 1) % len(self.trait_pairs)]
        self._set_axes(self.stats.trait_names(self.species_id))

    # ---------- Main loop ----------

    def render(self):
        """Render one frame"""
        if not handle_events(self):
            return False

        update_chart_data(self)

        self.screen.fill(COLORS["UI_BACKGROUND"])
        draw_grid(self)
        draw_legend(self)
        draw_charts(self)
        draw_buttons(self)
        draw_status(self)

        pygame.display.flip()
        self.fps_clock.tick(self.fps)
        return True

    def cleanup(self):
        pygame.quit()
