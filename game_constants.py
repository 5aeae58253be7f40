"""Game constants for the shield rhythm game."""

import math
from enum import Enum
from pygame import Color
import pygame
import easing_functions

# Ring radii, in virtual pixels from the heart
SHIELD_RADIUS = 48.0  # Projectiles cross this ring exactly at their arrival time
HURT_RADIUS = 16.0    # Reaching this ring unblocked kills the player
SHIELD_DRAW_RADIUS = 32.0

# Approach speed
INITIAL_APPROACH_SPEED = 128.0
APPROACH_SPEED_RAMP = 2.0  # Speed gained per real second while alive

# Camera shake
CAMERA_SHAKE_IMPULSE = 0.01
CAMERA_SHAKE_DECAY = 0.9  # Per frame

# Seconds of real time for the death slow-motion to reach a full stop
DEATH_RAMP_DURATION_S = 1.0

# Block explosion
EXPLOSION_PARTICLE_COUNT = 10
EXPLOSION_ANGLE_SPREAD = 0.2
EXPLOSION_SPEED_RANGE = (128.0, 338.0)
EXPLOSION_LIFE_TIME_S = 5.0
EXPLOSION_PARTICLE_SIZE = 10.0
EXPLOSION_ROTATION_RANGE = (0.0, math.tau)
EXPLOSION_ANGULAR_VELOCITY_RANGE = (-math.pi, math.pi)

# Display constants
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
DEFAULT_FPS = 60
BACKGROUND_COLOR = Color(0, 0, 0)
PROJECTILE_COLOR = Color(255, 80, 80)
PROJECTILE_SIZE = 8
HEART_COLOR = Color(230, 40, 70)
HEART_SIZE = 10
SHIELD_COLOR = Color(120, 200, 255)
SHIELD_WIDTH = 24
PARTICLE_COLOR = Color(255, 255, 255)
TEXT_COLOR = Color(255, 255, 255)
MENU_HIGHLIGHT_COLOR = Color(255, 210, 0)
FONT_SIZE = 50
MENU_FONT_SIZE = 32

# Death overlay fades in over the slow-motion ramp
DEATH_OVERLAY_EASE = easing_functions.QuadEaseIn(start=0.0, end=160.0, duration=DEATH_RAMP_DURATION_S)

# Level layout
SONGS_DIR = "songs"
CHART_FILE = "sheet.sht"
SONG_FILE = "song.wav"
DEATH_SOUND = "assets/death.wav"
KICK_SOUND = "assets/kick.wav"


class Direction(Enum):
    """Approach direction of a projectile, and the side the shield covers."""
    UP = "U"
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"

    @property
    def angle(self) -> float:
        """Screen angle in radians; y grows downwards."""
        return DIRECTION_ANGLES[self]


DIRECTION_ANGLES = {
    Direction.RIGHT: 0.0,
    Direction.DOWN: math.pi / 2,
    Direction.LEFT: math.pi,
    Direction.UP: -math.pi / 2,
}

# Evaluation order for shield input; a later direction overrides an earlier one
DIRECTION_INPUT_ORDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

DIRECTION_KEYS = {
    Direction.UP: (pygame.K_w, pygame.K_UP),
    Direction.DOWN: (pygame.K_s, pygame.K_DOWN),
    Direction.LEFT: (pygame.K_a, pygame.K_LEFT),
    Direction.RIGHT: (pygame.K_d, pygame.K_RIGHT),
}
RESTART_KEY = pygame.K_r
BACK_KEY = pygame.K_ESCAPE
SELECT_KEYS = (pygame.K_RETURN, pygame.K_SPACE)


class EventKind(Enum):
    NORMAL = "norm"


class SoundId(Enum):
    SONG = "song"
    KICK = "kick"
    DEATH = "death"
