#!/usr/bin/env python3

import asyncio
import argparse
import logging
from typing import Iterable, Optional

import pygame

from audio_manager import AudioManager
from chart_errors import ChartError
from chart_parser import load_chart
from display_manager import DisplayManager
from input_handler import InputHandler
from level_menu import Level, LevelMenu
from particles import ParticleSystem
from simulation import Command, FrameInput, SimulationEngine, SpawnExplosion

from game_constants import *

logger = logging.getLogger('shield_game')

MS_PER_SEC = 1000.0


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Shield rhythm game')
    parser.add_argument('--songs-dir', default=SONGS_DIR,
                        help=f'Directory holding one folder per level (default: {SONGS_DIR})')
    parser.add_argument('--level',
                        help='Start this level directly instead of showing the menu')
    parser.add_argument('--fps', type=int, default=DEFAULT_FPS,
                        help=f'Frame rate cap (default: {DEFAULT_FPS})')

    debug_group = parser.add_argument_group('Debug options')
    debug_group.add_argument('--log-file', default='shield_game.log',
                             help='Log file path (default: shield_game.log)')
    debug_group.add_argument('--verbose', action='store_true',
                             help='Log at DEBUG level')

    return parser.parse_args()


# Define default values to use when the script is imported (not run directly)
default_args = argparse.Namespace(
    songs_dir=SONGS_DIR,
    level=None,
    fps=DEFAULT_FPS,
    log_file='shield_game.log',
    verbose=False,
)

if __name__ == "__main__":
    args = parse_args()
else:
    args = default_args


class GameSession:
    """One level being played: the simulation plus its collaborators."""

    def __init__(self, level: Level, engine: SimulationEngine, audio_manager: AudioManager) -> None:
        self.level = level
        self.engine = engine
        self.audio_manager = audio_manager
        self.particles = ParticleSystem()
        self.input_handler = InputHandler()

    @classmethod
    def load(cls, level: Level) -> "GameSession":
        """Load the level's chart and song.

        Raises:
            ChartError: if the chart does not compile
            OSError, pygame.error: if a file cannot be read
        """
        chart = load_chart(level.chart_path)
        audio_manager = AudioManager(level.song_path)
        return cls(level, SimulationEngine(chart), audio_manager)

    def apply(self, commands: Iterable[Command]) -> None:
        commands = list(commands)
        self.audio_manager.apply(commands)
        for command in commands:
            if isinstance(command, SpawnExplosion):
                self.particles.spawn(command.request)

    def start(self) -> None:
        logger.info(f"Starting level {self.level.name}")
        self.apply(self.engine.start())

    def stop(self) -> None:
        self.apply(self.engine.stop())

    def update(self, frame_dt: float, frame_input: FrameInput) -> None:
        """Advance the run one frame and hand its commands to the collaborators."""
        output = self.engine.update(frame_dt, frame_input)
        self.apply(output.commands)
        self.particles.update(output.effective_dt)
        if frame_input.restart:
            self.particles.clear()


def open_level(level: Level, menu: LevelMenu) -> Optional[GameSession]:
    """Load and start a level; on failure leave a message on the menu."""
    try:
        session = GameSession.load(level)
    except ChartError as e:
        logger.error(f"Chart for {level.name} failed to load: {e}")
        menu.message = f"{level.name}: {e}"
        return None
    except (OSError, pygame.error) as e:
        logger.error(f"Level {level.name} failed to load: {e}")
        menu.message = f"{level.name}: {e}"
        return None
    menu.message = None
    session.start()
    return session


async def run_game() -> None:
    """Main loop switching between the level menu and a running level."""
    logging.basicConfig(filename=args.log_file, filemode='w',
                        level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(message)s')

    pygame.init()
    clock = pygame.time.Clock()
    display = DisplayManager()
    menu = LevelMenu(args.songs_dir)
    session: Optional[GameSession] = None

    if args.level:
        session = open_level(Level(args.level, menu.songs_dir / args.level), menu)

    frame_dt = 0.0
    while True:
        if session is not None:
            controls = session.input_handler.poll()
            if controls.quit:
                session.stop()
                return
            session.update(frame_dt, controls.frame_input)
            display.draw_game(session.engine, session.particles)

            if controls.back:
                session.stop()
                logger.info(f"Left level {session.level.name} with score {session.engine.state.score}")
                session = None
                menu.refresh()
        else:
            events = pygame.event.get()
            if any(event.type == pygame.QUIT for event in events):
                return
            level = menu.handle_events(events)
            if level is not None:
                session = open_level(level, menu)
            display.draw_menu(menu.level_names, menu.selected, menu.message)

        frame_dt = clock.tick(args.fps) / MS_PER_SEC
        await asyncio.sleep(0)


async def main() -> None:
    await run_game()
    pygame.quit()


if __name__ == "__main__":
    asyncio.run(main())
