"""Keyboard input handling for the shield rhythm game."""

from typing import Dict, Iterable, NamedTuple, Set
import pygame

from game_constants import BACK_KEY, DIRECTION_KEYS, RESTART_KEY, Direction
from simulation import FrameInput


class ControlState(NamedTuple):
    """Everything pressed during one frame.

    Attributes:
        frame_input: Gameplay input handed to the simulation
        back: Escape was pressed (leave the level)
        quit: The window was closed
    """
    frame_input: FrameInput
    back: bool
    quit: bool


class InputHandler:
    """Turns pygame events into per-frame fresh presses.

    Only KEYDOWN events count, so holding a key does not press it again on
    the next frame.
    """

    # Static mapping of keys to directions for fast lookups
    KEY_TO_DIRECTION: Dict[int, Direction] = {
        key: direction
        for direction, keys in DIRECTION_KEYS.items()
        for key in keys
    }

    def collect(self, events: Iterable[pygame.event.Event]) -> ControlState:
        """Collect fresh presses from this frame's events.

        Args:
            events: Events drained from the pygame queue this frame

        Returns:
            ControlState for the frame
        """
        directions: Set[Direction] = set()
        restart = False
        back = False
        quit_requested = False

        for event in events:
            if event.type == pygame.QUIT:
                quit_requested = True
            elif event.type == pygame.KEYDOWN:
                direction = self.KEY_TO_DIRECTION.get(event.key)
                if direction is not None:
                    directions.add(direction)
                elif event.key == RESTART_KEY:
                    restart = True
                elif event.key == BACK_KEY:
                    back = True

        return ControlState(
            frame_input=FrameInput(directions=frozenset(directions), restart=restart),
            back=back,
            quit=quit_requested,
        )

    def poll(self) -> ControlState:
        """Drain the pygame event queue and collect this frame's presses."""
        return self.collect(pygame.event.get())
