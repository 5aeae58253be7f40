"""Audio playback for the shield rhythm game."""

import logging
from pathlib import Path
from typing import Dict, Iterable, Union

import pygame

from game_constants import DEATH_SOUND, KICK_SOUND, SoundId
from simulation import Command, PlaySound, StopSound

logger = logging.getLogger(__name__)


class AudioManager:
    """Plays the sounds requested by the simulation.

    This class handles all audio-related functionality including:
    - Loading the level's song and the shared sound effects
    - Applying PlaySound / StopSound commands after each frame
    """

    def __init__(self, song_file: Union[str, Path],
                 kick_file: str = KICK_SOUND,
                 death_file: str = DEATH_SOUND) -> None:
        """Initialize the audio manager.

        Args:
            song_file: Path to the level's song
            kick_file: Path to the block sound effect
            death_file: Path to the death sound effect
        """
        self.sounds: Dict[SoundId, pygame.mixer.Sound] = {
            SoundId.SONG: pygame.mixer.Sound(str(song_file)),
            SoundId.KICK: pygame.mixer.Sound(kick_file),
            SoundId.DEATH: pygame.mixer.Sound(death_file),
        }
        logger.info(f"Loaded song {song_file}")

    def play(self, sound_id: SoundId) -> None:
        """Play a sound once from the start."""
        self.sounds[sound_id].play()

    def stop(self, sound_id: SoundId) -> None:
        self.sounds[sound_id].stop()

    def apply(self, commands: Iterable[Command]) -> None:
        """Execute the sound commands from a frame, ignoring all others.

        Args:
            commands: Commands returned by the simulation, in order
        """
        for command in commands:
            if isinstance(command, PlaySound):
                self.play(command.sound_id)
            elif isinstance(command, StopSound):
                self.stop(command.sound_id)
