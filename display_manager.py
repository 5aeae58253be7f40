"""Display management for the shield rhythm game."""
import math
import random
from typing import List, Optional, Tuple

import pygame
from pygame import Color

from game_constants import *
from music_timing import MusicTiming
from particles import ParticleSystem
from simulation import SimulationEngine


class DisplayManager:
    """Draws a run with pygame.

    Simulation coordinates are centred on the heart with y pointing down,
    so drawing only needs to translate by the screen centre plus shake.
    """

    def __init__(self, screen_width: int = SCREEN_WIDTH, screen_height: int = SCREEN_HEIGHT) -> None:
        """Initialize the display manager.

        Args:
            screen_width: Window width in pixels
            screen_height: Window height in pixels
        """
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.display_surface = pygame.display.set_mode((screen_width, screen_height))
        pygame.display.set_caption("Shield rhythm game")
        self.font = pygame.font.Font(None, FONT_SIZE)
        self.menu_font = pygame.font.Font(None, MENU_FONT_SIZE)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.screen_width / 2, self.screen_height / 2)

    def shake_offset(self, camera_shake: float) -> Tuple[float, float]:
        """Random camera offset; shake is a fraction of half the screen."""
        half_width = self.screen_width / 2
        half_height = self.screen_height / 2
        return (random.uniform(-camera_shake, camera_shake) * half_width,
                random.uniform(-camera_shake, camera_shake) * half_height)

    @staticmethod
    def rotated_rect(center: Tuple[float, float], angle: float,
                     length: float, width: float) -> List[Tuple[float, float]]:
        """Corners of a rectangle whose long side is perpendicular to ``angle``."""
        cx, cy = center
        # Unit vector along the long side
        tx, ty = -math.sin(angle), math.cos(angle)
        nx, ny = math.cos(angle), math.sin(angle)
        hl, hw = length / 2, width / 2
        return [
            (cx + tx * hl + nx * hw, cy + ty * hl + ny * hw),
            (cx - tx * hl + nx * hw, cy - ty * hl + ny * hw),
            (cx - tx * hl - nx * hw, cy - ty * hl - ny * hw),
            (cx + tx * hl - nx * hw, cy + ty * hl - ny * hw),
        ]

    def draw_game(self, engine: SimulationEngine, particles: ParticleSystem) -> None:
        """Draw one frame of a run and flip the display."""
        state = engine.state
        shake_x, shake_y = self.shake_offset(state.camera_shake)
        origin = (self.center[0] + shake_x, self.center[1] + shake_y)

        self.display_surface.fill(BACKGROUND_COLOR)
        particles.draw(self.display_surface, origin)

        for event, (x, y), angle in engine.projectile_positions():
            corners = self.rotated_rect((origin[0] + x, origin[1] + y), angle,
                                        PROJECTILE_SIZE, PROJECTILE_SIZE)
            pygame.draw.polygon(self.display_surface, PROJECTILE_COLOR, corners)

        pygame.draw.circle(self.display_surface, HEART_COLOR, origin, HEART_SIZE)

        if state.shield_direction is not None:
            angle = state.shield_direction.angle
            shield_center = (origin[0] + math.cos(angle) * SHIELD_DRAW_RADIUS,
                             origin[1] + math.sin(angle) * SHIELD_DRAW_RADIUS)
            corners = self.rotated_rect(shield_center, angle, SHIELD_WIDTH, 4)
            pygame.draw.polygon(self.display_surface, SHIELD_COLOR, corners)

        if state.is_dying:
            self._draw_death_overlay(state.death_progress)

        self._draw_text(f"Score: {state.score}", (15, 15))
        self._draw_text(MusicTiming.beat_label(state.elapsed_time, engine.chart.tempo),
                        (self.screen_width - 200, 15))
        pygame.display.update()

    def _draw_death_overlay(self, death_progress: float) -> None:
        alpha = int(DEATH_OVERLAY_EASE.ease(min(death_progress, DEATH_RAMP_DURATION_S)))
        overlay = pygame.Surface((self.screen_width, self.screen_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, alpha))
        self.display_surface.blit(overlay, (0, 0))

    def _draw_text(self, text: str, position: Tuple[int, int],
                   color: Color = TEXT_COLOR, font: Optional[pygame.font.Font] = None) -> None:
        rendered = (font or self.font).render(text, True, color)
        self.display_surface.blit(rendered, position)

    def draw_menu(self, level_names: List[str], selected: int, message: Optional[str] = None) -> None:
        """Draw the level list with the selected entry highlighted."""
        self.display_surface.fill(BACKGROUND_COLOR)
        self._draw_text("Levels", (15, 15))
        for i, name in enumerate(level_names):
            color = MENU_HIGHLIGHT_COLOR if i == selected else TEXT_COLOR
            self._draw_text(name, (30, 70 + i * (MENU_FONT_SIZE + 4)), color, self.menu_font)
        if not level_names:
            self._draw_text("No levels found", (30, 70), TEXT_COLOR, self.menu_font)
        if message:
            self._draw_text(message, (15, self.screen_height - MENU_FONT_SIZE - 10),
                            PROJECTILE_COLOR, self.menu_font)
        pygame.display.update()
