import pygame
from .colors import COLORS, trait_color


def update_chart_data(monitor):
    """Refresh histogram buffers and chart data from the statistics core"""
    sid = monitor.species_id
    species = monitor.stats.registry.get(sid)

    monitor.stats.trait_histogram(sid, monitor.hist1d)
    monitor.stats.trait_2d_histogram(sid, monitor.hist2d, *monitor.trait_pair,
                                     shape=(monitor.lattice_rows, monitor.lattice_cols))

    monitor.charts = {}
    for t, name in enumerate(species.trait_names):
        monitor.charts[f'hist_{t}'] = monitor.make_chart(
            list(monitor.hist1d[t]), species.trait_min[t], species.trait_max[t], trait_color(t), f"{name} distribution")

    # Mean traits as fraction of their range
    series = monitor.population.mean_series.get(sid, [])
    for t, name in enumerate(species.trait_names):
        lo, hi = species.trait_min[t], species.trait_max[t]
        values = [(m[t] - lo) / (hi - lo) for m in series[-200:]]
        monitor.charts[f'mean_{t}'] = monitor.make_chart(values, 0.0, 1.0, trait_color(t), f"mean {name}")


# ========== Drawing helpers ==========

def _draw_line_chart(monitor, x, y, width, height, data, title):
    rect = pygame.Rect(x, y, width, height)
    pygame.draw.rect(monitor.screen, COLORS['UI_CHART_BG'], rect)
    pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], rect, 2)

    title_surface = monitor.fonts['small'].render(title, True, COLORS['UI_TEXT'])
    monitor.screen.blit(title_surface, (x + 5, y + 5))

    if len(data.values) < 2:
        return

    # Grid lines
    for i in range(5):
        grid_y = y + 20 + (i * (height - 40) // 4)
        pygame.draw.line(monitor.screen, COLORS['UI_CHART_GRID'], (x, grid_y), (x + width, grid_y), 1)

    # Data line
    points = []
    span = data.max_value - data.min_value
    for i, value in enumerate(data.values):
        norm = (value - data.min_value) / span if span > 0 else 0.5
        norm = min(max(norm, 0.0), 1.0)
        px = x + 10 + (i * (width - 20) / max(1, len(data.values) - 1))
        py = y + height - 20 - (norm * (height - 40))
        points.append((px, py))
    pygame.draw.lines(monitor.screen, data.color, False, points, 2)


def _draw_histogram_chart(monitor, x, y, width, height, data, title):
    """Bars of a precomputed histogram; the bins span [min_value, max_value]"""
    rect = pygame.Rect(x, y, width, height)
    pygame.draw.rect(monitor.screen, COLORS['UI_CHART_BG'], rect)
    pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], rect, 2)

    title_surface = monitor.fonts['small'].render(title, True, COLORS['UI_TEXT'])
    monitor.screen.blit(title_surface, (x + 5, y + 5))

    bins = data.values
    if not bins:
        return

    bin_width = (width - 20) / len(bins)
    max_count = max(bins) or 1
    for i, count in enumerate(bins):
        if count > 0:
            bar_height = (count / max_count) * (height - 40)
            bar_rect = pygame.Rect(int(x + 10 + i * bin_width), int(y + height - 20 - bar_height),
                                   max(1, int(bin_width) - 1), int(bar_height))
            pygame.draw.rect(monitor.screen, data.color, bar_rect)
            pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], bar_rect, 1)

    # Range labels
    lo = monitor.fonts['small'].render(f"{data.min_value:g}", True, COLORS['UI_TEXT'])
    hi = monitor.fonts['small'].render(f"{data.max_value:g}", True, COLORS['UI_TEXT'])
    monitor.screen.blit(lo, (x + 5, y + height - 17))
    monitor.screen.blit(hi, (x + width - hi.get_width() - 5, y + height - 17))


# ========== Main drawing orchestrator ==========

def draw_charts(monitor):
    chart_x = monitor.legend['x']
    chart_y = monitor.legend['y'] + monitor.legend['height'] + 20
    w, h = 300, 120

    n = monitor.stats.n_traits(monitor.species_id)
    for t in range(n):
        top = chart_y + 2 * t * (h + 15)
        data = monitor.charts[f'hist_{t}']
        _draw_histogram_chart(monitor, chart_x, top, w, h, data, data.title)
        data = monitor.charts[f'mean_{t}']
        _draw_line_chart(monitor, chart_x, top + h + 15, w, h, data, data.title)
