COLORS = {
    # Heat scale for histogram cells (viridis-like stops)
    'HEAT_EMPTY': (39, 39, 47),        # no individuals
    'HEAT_LOW': (68, 1, 84),           # Dark purple
    'HEAT_MID': (33, 145, 140),        # Teal
    'HEAT_HIGH': (253, 231, 37),       # Yellow

    # Trait bars
    'TRAIT_0': (255, 127, 14),         # Orange
    'TRAIT_1': (31, 119, 180),         # Blue
    'TRAIT_2': (44, 160, 44),          # Green
    'TRAIT_3': (148, 103, 189),        # Purple

    # UI elements
    'UI_BACKGROUND': (245, 245, 245), # Light gray
    'UI_BORDER': (200, 200, 200),     # Medium gray
    'UI_GRID_LINE': (150, 150, 150),  # Darker gray for lattice cells
    'UI_TEXT': (50, 50, 50),          # Dark gray
    'UI_BUTTON': (100, 149, 237),     # Cornflower blue
    'UI_BUTTON_HOVER': (70, 130, 180), # Steel blue
    'UI_PAUSE': (144, 238, 144),       # Light green
    'UI_STOP': (255, 182, 193),        # Light pink
    'UI_CHART_BG': (255, 255, 255),    # White
    'UI_CHART_GRID': (230, 230, 230),  # Light gray
}

HEAT_STOPS = (COLORS['HEAT_LOW'], COLORS['HEAT_MID'], COLORS['HEAT_HIGH'])


def trait_color(trait: int):
    return COLORS[f'TRAIT_{trait % 4}']
