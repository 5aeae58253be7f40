"""Particle effects for blocked projectiles."""
import math
from typing import Optional, Tuple

import numpy as np
import pygame
from pygame import Color

from game_constants import PARTICLE_COLOR
from simulation import ExplosionRequest


class ParticleSystem:
    """Keeps every live particle in parallel numpy arrays.

    Rows are particles; positions and velocities are (n, 2) in the same
    heart-centred coordinates the simulation uses.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()
        self.clear()

    def __len__(self) -> int:
        return len(self.life)

    def clear(self) -> None:
        """Remove every particle."""
        self.positions = np.zeros((0, 2))
        self.velocities = np.zeros((0, 2))
        self.rotations = np.zeros(0)
        self.angular_velocities = np.zeros(0)
        self.life = np.zeros(0)
        self.life_times = np.zeros(0)
        self.sizes = np.zeros(0)

    def spawn(self, request: ExplosionRequest) -> None:
        """Add the particles of one directional explosion."""
        n = request.particle_count
        directions = self.rng.uniform(*request.angle_range, size=n)
        speeds = self.rng.uniform(*request.speed_range, size=n)
        velocities = np.stack([np.cos(directions), np.sin(directions)], axis=1) * speeds[:, None]

        self.positions = np.concatenate([self.positions, np.tile(request.origin_position, (n, 1))])
        self.velocities = np.concatenate([self.velocities, velocities])
        self.rotations = np.concatenate([self.rotations, self.rng.uniform(*request.rotation_range, size=n)])
        self.angular_velocities = np.concatenate(
            [self.angular_velocities, self.rng.uniform(*request.angular_velocity_range, size=n)])
        self.life = np.concatenate([self.life, np.zeros(n)])
        self.life_times = np.concatenate([self.life_times, np.full(n, request.life_time)])
        self.sizes = np.concatenate([self.sizes, np.full(n, request.size)])

    def update(self, dt: float) -> None:
        """Advance every particle by ``dt`` and drop the expired ones."""
        self.positions += self.velocities * dt
        self.rotations += self.angular_velocities * dt
        self.life += dt

        alive = self.life < self.life_times
        self.positions = self.positions[alive]
        self.velocities = self.velocities[alive]
        self.rotations = self.rotations[alive]
        self.angular_velocities = self.angular_velocities[alive]
        self.life = self.life[alive]
        self.life_times = self.life_times[alive]
        self.sizes = self.sizes[alive]

    def alphas(self) -> np.ndarray:
        """Opacity per particle, fading from 1 to 0 over its life."""
        return 1.0 - self.life / self.life_times

    def draw(self, surface: pygame.Surface, center: Tuple[float, float]) -> None:
        """Draw particles as rotated squares faded towards black."""
        for (x, y), rotation, size, alpha in zip(self.positions, self.rotations, self.sizes, self.alphas()):
            color = Color(
                int(PARTICLE_COLOR.r * alpha),
                int(PARTICLE_COLOR.g * alpha),
                int(PARTICLE_COLOR.b * alpha),
            )
            half = size / 2
            corners = []
            for k in range(4):
                angle = rotation + math.pi / 4 + k * math.pi / 2
                corners.append((center[0] + x + math.cos(angle) * half * math.sqrt(2),
                                center[1] + y + math.sin(angle) * half * math.sqrt(2)))
            pygame.draw.polygon(surface, color, corners)
