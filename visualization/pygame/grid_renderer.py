import pygame
import numpy as np
from .colors import COLORS, HEAT_STOPS


def heat_color(value, vmax):
    """Color of a histogram cell holding ``value`` on a scale topping out at ``vmax``"""
    if value <= 0 or vmax <= 0:
        return COLORS['HEAT_EMPTY']
    pos = min(value / vmax, 1.0) * (len(HEAT_STOPS) - 1)
    i = min(int(pos), len(HEAT_STOPS) - 2)
    f = pos - i
    a, b = HEAT_STOPS[i], HEAT_STOPS[i + 1]
    return tuple(int(round(a[k] + (b[k] - a[k]) * f)) for k in range(3))


def draw_histogram_lattice(surface, bins, rows, cols, rect, grid_lines=True):
    """Draw a flat 2D histogram as a rows x cols square lattice inside ``rect``.

    Cell ``(row, col)`` is read from ``bins[row * cols + col]``; row 0 is drawn
    at the bottom so the row trait increases upwards.
    """
    data = np.asarray(bins, dtype=float).reshape(rows, cols)
    vmax = float(data.max()) if data.size else 0.0
    cell_w = rect.width / cols
    cell_h = rect.height / rows
    for r in range(rows):
        y_top = rect.bottom - int(round((r + 1) * cell_h))
        y_bot = rect.bottom - int(round(r * cell_h))
        for c in range(cols):
            x_left = rect.x + int(round(c * cell_w))
            x_right = rect.x + int(round((c + 1) * cell_w))
            cell = pygame.Rect(x_left, y_top, x_right - x_left, y_bot - y_top)
            pygame.draw.rect(surface, heat_color(data[r, c], vmax), cell)
            if grid_lines:
                pygame.draw.rect(surface, COLORS['UI_GRID_LINE'], cell, 1)


def draw_grid(monitor):
    """Draw the 2D trait histogram of the monitored species"""
    rect = pygame.Rect(monitor.grid_x, monitor.grid_y, monitor.grid_size, monitor.grid_size)
    pygame.draw.rect(monitor.screen, COLORS['UI_CHART_BG'], rect)
    draw_histogram_lattice(
        monitor.screen,
        monitor.hist2d,
        monitor.lattice_rows,
        monitor.lattice_cols,
        rect,
        grid_lines=monitor.cell_size >= 6,
    )
    pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], rect, 2)

    # Axis labels: rows follow the row trait, columns the column trait
    row_name, col_name = monitor.lattice_axes
    col_label = monitor.fonts['small'].render(f"{col_name} →", True, COLORS['UI_TEXT'])
    monitor.screen.blit(col_label, (rect.right - col_label.get_width(), rect.bottom + 5))
    row_label = monitor.fonts['small'].render(f"↑ {row_name}", True, COLORS['UI_TEXT'])
    monitor.screen.blit(row_label, (rect.x, rect.y - row_label.get_height() - 5))
