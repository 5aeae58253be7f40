"""Music timing: relative bar/beat offsets and their length in seconds."""
import re
from dataclasses import dataclass
from typing import Optional

from chart_errors import UnrecognizedAtom

SECONDS_PER_MINUTE = 60.0
FOURTHS_PER_BEAT = 4
BEATS_PER_BAR = 4

_UINT = re.compile(r"\+?[0-9]+")


def _parse_uint(segment: str) -> int:
    if not _UINT.fullmatch(segment):
        raise UnrecognizedAtom(segment)
    return int(segment)


@dataclass(frozen=True)
class TimeOffset:
    """A relative duration written as ``[fourths;]beats[|bars]``.

    ``fourths`` and ``bars`` are None when the atom had no ``;`` or ``|``
    separator; they count as zero in every calculation.
    """
    fourths: Optional[int]
    beats: int
    bars: Optional[int]

    @classmethod
    def parse(cls, atom: str) -> "TimeOffset":
        """Parse a time-offset atom.

        Raises:
            UnrecognizedAtom: if any present segment is not a non-negative integer
        """
        rest = atom
        fourths = None
        if ";" in rest:
            head, rest = rest.split(";", 1)
            fourths = _parse_uint(head)

        bars = None
        if "|" in rest:
            rest, tail = rest.split("|", 1)
            bars = _parse_uint(tail)

        return cls(fourths=fourths, beats=_parse_uint(rest), bars=bars)

    @property
    def is_bare_integer(self) -> bool:
        """True when the atom was a plain integer with no separators."""
        return self.fourths is None and self.bars is None

    def to_seconds(self, tempo: float) -> float:
        """Length of this offset in seconds at ``tempo`` beats per minute.

        Args:
            tempo: Beats per minute, must be > 0

        Returns:
            Duration in seconds
        """
        beat_s = MusicTiming.beat_seconds(tempo)
        return ((self.fourths or 0) * beat_s / FOURTHS_PER_BEAT
                + self.beats * beat_s
                + (self.bars or 0) * beat_s * BEATS_PER_BAR)

    def __str__(self) -> str:
        text = str(self.beats)
        if self.fourths is not None:
            text = f"{self.fourths};{text}"
        if self.bars is not None:
            text = f"{text}|{self.bars}"
        return text


class MusicTiming:
    """Handles tempo conversions for the chart and the HUD."""

    @staticmethod
    def beat_seconds(tempo: float) -> float:
        """Seconds per beat at ``tempo`` beats per minute."""
        return SECONDS_PER_MINUTE / tempo

    @staticmethod
    def beats_per_second(tempo: float) -> float:
        return tempo / SECONDS_PER_MINUTE

    @staticmethod
    def beat_label(elapsed_time_s: float, tempo: float) -> str:
        """Format the current musical position as ``fourth;beat|bar``.

        Args:
            elapsed_time_s: Music time in seconds
            tempo: Beats per minute

        Returns:
            Label in the same notation charts use for offsets
        """
        fourths = int(elapsed_time_s * MusicTiming.beats_per_second(tempo) * FOURTHS_PER_BEAT)
        fourths = max(0, fourths)
        fourth_in_beat = fourths % FOURTHS_PER_BEAT
        beat_in_bar = (fourths // FOURTHS_PER_BEAT) % BEATS_PER_BAR
        bar = fourths // (FOURTHS_PER_BEAT * BEATS_PER_BAR)
        return f"{fourth_in_beat};{beat_in_bar}|{bar}"
