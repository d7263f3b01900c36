import numpy as np
import pygame
import pytest

from visualization.pygame.colors import COLORS, trait_color
from visualization.pygame.grid_renderer import draw_histogram_lattice, heat_color


def test_heat_color_scale():
    assert heat_color(0, 10) == COLORS['HEAT_EMPTY']
    assert heat_color(5, 0) == COLORS['HEAT_EMPTY']
    assert heat_color(10, 10) == COLORS['HEAT_HIGH']
    assert heat_color(5, 10) == COLORS['HEAT_MID']
    assert heat_color(1e-9, 10) == COLORS['HEAT_LOW']
    # values above the scale saturate
    assert heat_color(50, 10) == COLORS['HEAT_HIGH']


def test_trait_colors_cycle():
    assert trait_color(0) == trait_color(4) == COLORS['TRAIT_0']


@pytest.fixture
def surface():
    return pygame.Surface((40, 40))


def test_lattice_row_zero_is_drawn_at_the_bottom(surface):
    # 2 x 2 lattice: only cell (row 0, col 1) is occupied
    bins = np.array([0.0, 3.0, 0.0, 0.0])
    draw_histogram_lattice(surface, bins, 2, 2, pygame.Rect(0, 0, 40, 40), grid_lines=False)
    assert tuple(surface.get_at((30, 30)))[:3] == COLORS['HEAT_HIGH']
    assert tuple(surface.get_at((10, 30)))[:3] == COLORS['HEAT_EMPTY']
    assert tuple(surface.get_at((30, 10)))[:3] == COLORS['HEAT_EMPTY']


def test_single_trait_column(surface):
    bins = [1.0, 0.0, 2.0, 4.0]
    draw_histogram_lattice(surface, bins, 4, 1, pygame.Rect(0, 0, 40, 40), grid_lines=False)
    assert tuple(surface.get_at((20, 35)))[:3] == heat_color(1.0, 4.0)
    assert tuple(surface.get_at((20, 25)))[:3] == COLORS['HEAT_EMPTY']
    assert tuple(surface.get_at((20, 5)))[:3] == COLORS['HEAT_HIGH']


def test_grid_lines(surface):
    draw_histogram_lattice(surface, np.zeros(4), 2, 2, pygame.Rect(0, 0, 40, 40))
    assert tuple(surface.get_at((0, 0)))[:3] == COLORS['UI_GRID_LINE']
    assert tuple(surface.get_at((10, 10)))[:3] == COLORS['HEAT_EMPTY']
