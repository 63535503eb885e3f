"""Top-down pygame renderer for a local match.

The canvas only reads snapshots and forwards intents; it never touches the
match state directly.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import pygame

from . import config, keymap
from .clock import format_storm_timer
from .engine import SimulationLoop
from .intents import Attack
from .models import Vec3
from .snapshot import Snapshot

logger = logging.getLogger(__name__)

SCREEN_WIDTH = 800
SCREEN_HEIGHT = 700
ARENA_PIXELS = 560
ARENA_OFFSET = ((SCREEN_WIDTH - ARENA_PIXELS) // 2, 20)
HUD_TOP = ARENA_OFFSET[1] + ARENA_PIXELS + 10

BACKGROUND = (10, 10, 15)
GRID = (14, 165, 233)
PLAYER_COLOR = (14, 165, 233)
ENEMY_COLOR = (239, 68, 68)
TEXT_COLOR = (255, 255, 255)

RESOURCE_COLORS: Dict[str, Tuple[int, int, int]] = {
    "wood": (217, 119, 6),
    "stone": (107, 114, 128),
    "metal": (148, 163, 184),
}

RARITY_COLORS: Dict[str, Tuple[int, int, int]] = {
    "common": (156, 163, 175),
    "rare": (59, 130, 246),
    "epic": (168, 85, 247),
    "legendary": (234, 179, 8),
}


def world_to_screen(position: Vec3) -> Tuple[int, int]:
    scale = ARENA_PIXELS / (2 * config.ARENA_HALF_SIZE)
    x = ARENA_OFFSET[0] + (position.x + config.ARENA_HALF_SIZE) * scale
    y = ARENA_OFFSET[1] + (position.z + config.ARENA_HALF_SIZE) * scale
    return int(round(x)), int(round(y))


def screen_to_world(pixel: Tuple[int, int]) -> Optional[Vec3]:
    """Map a click back onto the ground plane. ``None`` outside the arena."""

    px = pixel[0] - ARENA_OFFSET[0]
    py = pixel[1] - ARENA_OFFSET[1]
    if not (0 <= px <= ARENA_PIXELS and 0 <= py <= ARENA_PIXELS):
        return None
    scale = (2 * config.ARENA_HALF_SIZE) / ARENA_PIXELS
    return Vec3(px * scale - config.ARENA_HALF_SIZE, 0.0, py * scale - config.ARENA_HALF_SIZE)


class CanvasClient:
    """Runs a match in a pygame window until it is closed."""

    def __init__(self, loop: SimulationLoop) -> None:
        self.loop = loop
        self._held: Dict[int, str] = {}
        self._clock_elapsed = 0.0

    def run(self) -> None:
        pygame.init()
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(config.GAME_NAME)
        font = pygame.font.Font(None, 24)
        frame_clock = pygame.time.Clock()
        running = True
        try:
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    else:
                        self.handle_event(event)
                movement = keymap.movement_intent(self._held.values())
                if movement is not None:
                    self.loop.submit(movement)
                snapshot = self.loop.step()
                self._clock_elapsed += frame_clock.tick(config.FRAME_RATE) / 1000.0
                while self._clock_elapsed >= config.CLOCK_INTERVAL:
                    self._clock_elapsed -= config.CLOCK_INTERVAL
                    self.loop.advance()
                render(screen, font, snapshot)
                pygame.display.flip()
        finally:
            pygame.quit()

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            name = event.unicode.lower() if event.unicode.strip() else pygame.key.name(event.key)
            self._held[event.key] = name
            intent = keymap.intent_for_key(name) or keymap.intent_for_key(pygame.key.name(event.key))
            if intent is not None:
                self.loop.submit(intent)
        elif event.type == pygame.KEYUP:
            self._held.pop(event.key, None)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            point = screen_to_world(event.pos)
            if point is not None:
                self.loop.submit(Attack(point=point))


def render(screen: pygame.Surface, font: pygame.font.Font, snapshot: Snapshot) -> None:
    screen.fill(BACKGROUND)
    arena = pygame.Rect(ARENA_OFFSET[0], ARENA_OFFSET[1], ARENA_PIXELS, ARENA_PIXELS)
    for i in range(11):
        offset = i * ARENA_PIXELS // 10
        pygame.draw.line(screen, GRID, (arena.left + offset, arena.top), (arena.left + offset, arena.bottom), 1)
        pygame.draw.line(screen, GRID, (arena.left, arena.top + offset), (arena.right, arena.top + offset), 1)

    for resource in snapshot.resources:
        if resource.collected:
            continue
        x, y = world_to_screen(resource.position)
        pygame.draw.rect(screen, RESOURCE_COLORS[resource.type], (x - 5, y - 5, 10, 10))

    for enemy in snapshot.enemies:
        if not enemy.alive:
            continue
        x, y = world_to_screen(enemy.position)
        pygame.draw.circle(screen, ENEMY_COLOR, (x, y), 8)
        bar = int(16 * enemy.health / enemy.max_health)
        pygame.draw.rect(screen, (34, 197, 94), (x - 8, y - 14, bar, 3))

    pygame.draw.circle(screen, PLAYER_COLOR, world_to_screen(snapshot.player.position), 9)
    _render_hud(screen, font, snapshot)


def _render_hud(screen: pygame.Surface, font: pygame.font.Font, snapshot: Snapshot) -> None:
    counters = snapshot.counters
    if snapshot.phase == "lobby":
        status = "Press Enter to drop in"
    elif snapshot.phase == "ended":
        status = "Match over"
    else:
        status = f"Storm {format_storm_timer(snapshot.storm_timer)}"
    lines = [
        f"HP {snapshot.player.health}  Shield {snapshot.player.shield}  "
        f"Kills {counters.kills}  Alive {counters.players_left}  {status}",
        f"Wood {counters.wood}  Stone {counters.stone}  Metal {counters.metal}",
    ]
    for row, text in enumerate(lines):
        screen.blit(font.render(text, True, TEXT_COLOR), (20, HUD_TOP + row * 22))

    slot_top = HUD_TOP + 50
    for index in range(config.INVENTORY_CAPACITY):
        rect = pygame.Rect(20 + index * 70, slot_top, 60, 50)
        if index >= len(snapshot.inventory):
            pygame.draw.rect(screen, (60, 60, 60), rect, 1)
            continue
        slot = snapshot.inventory[index]
        pygame.draw.rect(screen, RARITY_COLORS[slot.rarity], rect, 3 if index == snapshot.selected_slot else 1)
        label = slot.name.split()[-1] if slot.ammo is None else f"{slot.ammo}/{slot.max_ammo}"
        screen.blit(font.render(label, True, TEXT_COLOR), (rect.left + 4, rect.top + 16))
        screen.blit(font.render(str(index + 1), True, TEXT_COLOR), (rect.left + 2, rect.top + 1))


__all__ = ["CanvasClient", "render", "screen_to_world", "world_to_screen"]
