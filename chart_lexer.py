"""Chart lexer: splits chart source into typed tokens."""

from enum import Enum, auto
from typing import Any, List, NamedTuple, Optional

from chart_errors import UnrecognizedAtom
from game_constants import Direction, EventKind
from music_timing import TimeOffset


class TokenKind(Enum):
    TEMPO_MARKER = auto()
    OFFSET_MARKER = auto()
    TIME_OFFSET = auto()
    DIRECTION = auto()
    NUMBER = auto()
    EVENT_TYPE = auto()


class Token(NamedTuple):
    """One lexed atom.

    Attributes:
        kind: Token category
        value: TimeOffset, Direction, float or EventKind depending on kind;
            None for the header markers
    """
    kind: TokenKind
    value: Any = None

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.name
        return f"{self.kind.name}({self.value})"


KEYWORDS = {
    "#bpm": Token(TokenKind.TEMPO_MARKER),
    "#offset": Token(TokenKind.OFFSET_MARKER),
    "U": Token(TokenKind.DIRECTION, Direction.UP),
    "D": Token(TokenKind.DIRECTION, Direction.DOWN),
    "L": Token(TokenKind.DIRECTION, Direction.LEFT),
    "R": Token(TokenKind.DIRECTION, Direction.RIGHT),
    "norm": Token(TokenKind.EVENT_TYPE, EventKind.NORMAL),
}


def _parse_number(atom: str) -> Optional[float]:
    # float() also takes digit separators and non-ASCII digits, which charts never use
    if "_" in atom or not atom.isascii():
        return None
    try:
        return float(atom)
    except ValueError:
        return None


def classify_atom(atom: str) -> Token:
    """Classify a single atom.

    Time-offset syntax is tried first, then a float literal, then the
    keyword table. The first interpretation that succeeds wins.

    Raises:
        UnrecognizedAtom: if the atom matches no token grammar
    """
    try:
        return Token(TokenKind.TIME_OFFSET, TimeOffset.parse(atom))
    except UnrecognizedAtom:
        pass

    number = _parse_number(atom)
    if number is not None:
        return Token(TokenKind.NUMBER, number)

    token = KEYWORDS.get(atom)
    if token is None:
        raise UnrecognizedAtom(atom)
    return token


def tokenize(source: str) -> List[Token]:
    """Split chart source on whitespace and classify every atom in order."""
    return [classify_atom(atom) for atom in source.split()]
