import pygame
from .colors import COLORS

# keyboard shortcuts, named like the button actions
KEY_ACTIONS = {
    pygame.K_SPACE: "toggle_pause",
    pygame.K_s: "stop",
    pygame.K_TAB: "next_species",
    pygame.K_t: "next_trait_pair",
    pygame.K_ESCAPE: "quit",
}


def handle_events(monitor):
    """Process pending input; False once the window should close"""
    for event in pygame.event.get():
        action = None
        if event.type == pygame.QUIT:
            action = "quit"
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            action = next((b['action'] for b in monitor.buttons.values() if b['rect'].collidepoint(event.pos)), None)
        elif event.type == pygame.KEYDOWN:
            action = KEY_ACTIONS.get(event.key)
        elif event.type == pygame.MOUSEMOTION:
            monitor.mouse_pos = event.pos
        if action and not run_action(monitor, action):
            return False
    return True


def run_action(monitor, action):
    if action == "quit":
        monitor.should_stop = True
        return False
    if action == "toggle_pause":
        monitor.is_paused = not monitor.is_paused
        button = monitor.buttons['pause_play']
        button['text'] = '▶ Play' if monitor.is_paused else '⏸ Pause'
        button['color'] = COLORS['UI_PAUSE'] if monitor.is_paused else COLORS['UI_BUTTON']
    elif action == "stop":
        monitor.should_stop = True
        monitor.buttons['stop']['text'] = '⏹ Stopped'
        monitor.buttons['stop']['color'] = (255, 100, 100)
    elif action == "next_species":
        monitor.next_species()
    elif action == "next_trait_pair":
        monitor.next_trait_pair()
    return True
