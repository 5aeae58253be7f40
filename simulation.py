"""Frame-by-frame simulation of a run through a chart.

The engine owns the mutable RunState. Each frame it advances music time,
updates the shield from input and classifies every live projectile. It
never talks to audio or rendering directly: every side effect is returned
as a command for the collaborators to apply after the frame.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Iterator, List, NamedTuple, Optional, Tuple, Union

from chart_parser import Chart, Event
from game_constants import (
    APPROACH_SPEED_RAMP,
    CAMERA_SHAKE_DECAY,
    CAMERA_SHAKE_IMPULSE,
    DIRECTION_INPUT_ORDER,
    EXPLOSION_ANGLE_SPREAD,
    EXPLOSION_ANGULAR_VELOCITY_RANGE,
    EXPLOSION_LIFE_TIME_S,
    EXPLOSION_PARTICLE_COUNT,
    EXPLOSION_PARTICLE_SIZE,
    EXPLOSION_ROTATION_RANGE,
    EXPLOSION_SPEED_RANGE,
    HURT_RADIUS,
    INITIAL_APPROACH_SPEED,
    SHIELD_RADIUS,
    Direction,
    SoundId,
)
from music_timing import MusicTiming

logger = logging.getLogger(__name__)

Vec2 = Tuple[float, float]
Range = Tuple[float, float]


class Outcome(Enum):
    """Per-frame classification of a live projectile."""
    PENDING = auto()
    BLOCKED = auto()  # Shield caught it: scores and removes it
    HIT = auto()      # Reached the heart: starts the death sequence


class FrameInput(NamedTuple):
    """Inputs freshly pressed during one frame."""
    directions: FrozenSet[Direction] = frozenset()
    restart: bool = False


@dataclass(frozen=True)
class ExplosionRequest:
    origin_position: Vec2
    angle_range: Range
    speed_range: Range
    particle_count: int
    life_time: float
    rotation_range: Range
    angular_velocity_range: Range
    size: float = EXPLOSION_PARTICLE_SIZE


@dataclass(frozen=True)
class PlaySound:
    sound_id: SoundId


@dataclass(frozen=True)
class StopSound:
    sound_id: SoundId


@dataclass(frozen=True)
class SpawnExplosion:
    request: ExplosionRequest


Command = Union[PlaySound, StopSound, SpawnExplosion]


class FrameOutput(NamedTuple):
    """Result of advancing one frame.

    Attributes:
        effective_dt: Gameplay seconds that passed this frame (slowed while dying)
        commands: Side effects for audio and particle collaborators, in order
    """
    effective_dt: float
    commands: List[Command]


@dataclass
class RunState:
    elapsed_time: float = 0.0
    approach_speed: float = INITIAL_APPROACH_SPEED
    shield_direction: Optional[Direction] = None
    score: int = 0
    death_progress: Optional[float] = None
    live_events: List[Event] = field(default_factory=list)
    camera_shake: float = 0.0

    @classmethod
    def from_chart(cls, chart: Chart) -> "RunState":
        """Fresh state for a new run of ``chart``."""
        return cls(live_events=list(chart.events))

    @property
    def is_dying(self) -> bool:
        return self.death_progress is not None


def slow_motion_factor(death_progress: Optional[float]) -> float:
    """Fraction of real time that passes in gameplay.

    1.0 while alive, ramping linearly down to 0.0 one second after death.
    """
    return max(0.0, 1.0 - (death_progress or 0.0))


class SimulationEngine:
    """Runs one session of a chart.

    The chart is shared read-only; the RunState belongs to this engine and
    is replaced wholesale on restart.
    """

    def __init__(self, chart: Chart) -> None:
        self.chart = chart
        self.state = RunState.from_chart(chart)

    def distance(self, event: Event) -> float:
        """Signed distance of ``event`` from the heart.

        Crosses the shield ring exactly at the event's arrival time and keeps
        shrinking (past zero) afterwards.
        """
        return ((event.arrival_time - self.state.elapsed_time)
                * self.state.approach_speed
                * MusicTiming.beats_per_second(self.chart.tempo)
                + SHIELD_RADIUS)

    def position(self, event: Event) -> Vec2:
        """Screen-space offset of ``event`` from the heart."""
        angle = event.direction.angle
        distance = self.distance(event)
        return (math.cos(angle) * distance, math.sin(angle) * distance)

    def classify(self, event: Event) -> Outcome:
        distance = self.distance(event)
        blocking = self.state.shield_direction == event.direction

        if blocking and distance < SHIELD_RADIUS:
            return Outcome.BLOCKED
        if distance <= HURT_RADIUS:
            return Outcome.HIT
        return Outcome.PENDING

    def projectile_positions(self) -> Iterator[Tuple[Event, Vec2, float]]:
        """Yield (event, position, angle) for every live projectile."""
        for event in self.state.live_events:
            yield event, self.position(event), event.direction.angle

    def start(self) -> List[Command]:
        return [PlaySound(SoundId.SONG)]

    def stop(self) -> List[Command]:
        return [StopSound(SoundId.SONG)]

    def restart(self) -> List[Command]:
        """Discard the run and start over from the chart."""
        self.state = RunState.from_chart(self.chart)
        logger.info(f"Restarting run with {len(self.state.live_events)} events")
        return self.stop() + self.start()

    def update(self, frame_dt: float, frame_input: FrameInput = FrameInput()) -> FrameOutput:
        """Advance the run by one rendered frame.

        Args:
            frame_dt: Real seconds since the previous frame
            frame_input: Directions and restart pressed this frame

        Returns:
            FrameOutput with the gameplay time step and the frame's commands
        """
        state = self.state
        commands: List[Command] = []

        effective_dt = frame_dt * slow_motion_factor(state.death_progress)
        state.elapsed_time += effective_dt

        if state.is_dying:
            # The death timer runs in real time while gameplay freezes
            state.death_progress += frame_dt
        else:
            self._update_shield(frame_input.directions)
            self._resolve_events(commands)
            state.camera_shake *= CAMERA_SHAKE_DECAY
            state.approach_speed += frame_dt * APPROACH_SPEED_RAMP

        if frame_input.restart:
            commands.extend(self.restart())

        return FrameOutput(effective_dt, commands)

    def _update_shield(self, pressed: FrozenSet[Direction]) -> None:
        for direction in DIRECTION_INPUT_ORDER:
            if direction in pressed:
                self.state.shield_direction = direction

    def _resolve_events(self, commands: List[Command]) -> None:
        state = self.state
        remaining: List[Event] = []

        for event in state.live_events:
            outcome = self.classify(event)

            if outcome == Outcome.BLOCKED:
                state.score += 1
                state.camera_shake += CAMERA_SHAKE_IMPULSE
                commands.append(PlaySound(SoundId.KICK))
                commands.append(SpawnExplosion(self._explosion_for(event)))
                continue

            if outcome == Outcome.HIT and not state.is_dying:
                self._begin_death(event, commands)

            # Hit projectiles stay live and keep approaching during the death sequence
            remaining.append(event)

        state.live_events = remaining

    def _begin_death(self, event: Event, commands: List[Command]) -> None:
        state = self.state
        state.death_progress = 0.0
        state.camera_shake = 0.0
        commands.append(StopSound(SoundId.SONG))
        commands.append(PlaySound(SoundId.DEATH))
        logger.info(f"Hit by {event.direction.name} projectile at {state.elapsed_time:.3f}s, "
                    f"score {state.score}")

    def _explosion_for(self, event: Event) -> ExplosionRequest:
        angle = event.direction.angle
        return ExplosionRequest(
            origin_position=self.position(event),
            angle_range=(angle - EXPLOSION_ANGLE_SPREAD, angle + EXPLOSION_ANGLE_SPREAD),
            speed_range=EXPLOSION_SPEED_RANGE,
            particle_count=EXPLOSION_PARTICLE_COUNT,
            life_time=EXPLOSION_LIFE_TIME_S,
            rotation_range=EXPLOSION_ROTATION_RANGE,
            angular_velocity_range=EXPLOSION_ANGULAR_VELOCITY_RANGE,
        )
