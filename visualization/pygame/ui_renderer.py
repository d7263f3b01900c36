import pygame
from .colors import COLORS
from .grid_renderer import heat_color


def draw_legend(monitor):
    legend = monitor.legend
    rect = pygame.Rect(legend['x'], legend['y'], legend['width'], legend['height'])
    pygame.draw.rect(monitor.screen, COLORS['UI_CHART_BG'], rect)
    pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], rect, 2)

    title_surface = monitor.fonts['medium'].render("Lattice Legend", True, COLORS['UI_TEXT'])
    monitor.screen.blit(title_surface, (legend['x'] + 10, legend['y'] + 10))

    # Heat scale from empty to the fullest cell
    steps = 10
    vmax = max(monitor.hist2d) if len(monitor.hist2d) else 0
    bar_x, bar_y, bar_w = legend['x'] + 10, legend['y'] + 45, legend['width'] - 20
    for i in range(steps + 1):
        color = heat_color(i / steps, 1.0)
        patch = pygame.Rect(bar_x + i * bar_w // (steps + 1), bar_y, bar_w // (steps + 1) + 1, 20)
        pygame.draw.rect(monitor.screen, color, patch)
    pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], (bar_x, bar_y, bar_w, 20), 1)
    lo = monitor.fonts['small'].render("0", True, COLORS['UI_TEXT'])
    hi = monitor.fonts['small'].render(f"{vmax:g}", True, COLORS['UI_TEXT'])
    monitor.screen.blit(lo, (bar_x, bar_y + 25))
    monitor.screen.blit(hi, (bar_x + bar_w - hi.get_width(), bar_y + 25))

    row_name, col_name = monitor.lattice_axes
    lines = [
        f"Rows: {row_name}",
        f"Columns: {col_name}",
        f"Lattice: {monitor.lattice_rows} x {monitor.lattice_cols}",
        "TAB species | T trait pair",
    ]
    y_offset = 95
    for line in lines:
        label = monitor.fonts['small'].render(line, True, COLORS['UI_TEXT'])
        monitor.screen.blit(label, (legend['x'] + 10, legend['y'] + y_offset))
        y_offset += 22


def draw_buttons(monitor):
    for button in monitor.buttons.values():
        color = button['hover_color'] if button['rect'].collidepoint(monitor.mouse_pos) else button['color']
        pygame.draw.rect(monitor.screen, color, button['rect'])
        pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], button['rect'], 2)
        text_surface = monitor.fonts['medium'].render(button['text'], True, COLORS['UI_TEXT'])
        text_rect = text_surface.get_rect(center=button['rect'].center)
        monitor.screen.blit(text_surface, text_rect)


def draw_status(monitor):
    status_x = monitor.grid_x
    status_y = monitor.grid_y + monitor.grid_size + 30
    status_rect = pygame.Rect(status_x, status_y, monitor.grid_size, 100)
    pygame.draw.rect(monitor.screen, COLORS['UI_CHART_BG'], status_rect)
    pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], status_rect, 2)

    step = monitor.population.steps
    if monitor.should_stop:
        status_text, status_color = f"Stopped - Step {step}", COLORS['UI_STOP']
    elif monitor.is_paused:
        status_text, status_color = f"Paused - Step {step}", COLORS['UI_PAUSE']
    else:
        status_text, status_color = f"Running - Step {step}", COLORS['UI_BUTTON']
    status_surface = monitor.fonts['medium'].render(status_text, True, status_color)
    monitor.screen.blit(status_surface, (status_x + 10, status_y + 10))

    species = monitor.stats.registry.get(monitor.species_id)
    lo, hi = monitor.score_range
    lines = [
        f"Species {monitor.species_id}: {species.name} | Population {species.topology.population_size} "
        f"| Accounting {species.accounting.value}",
        f"Monomorphic scores: [{lo:.3f}, {hi:.3f}]" + (" (neutral)" if monitor.neutral else ""),
    ]
    y_offset = 40
    for line in lines:
        surf = monitor.fonts['small'].render(line, True, COLORS['UI_TEXT'])
        monitor.screen.blit(surf, (status_x + 10, status_y + y_offset))
        y_offset += 20
