"""Chart parser: compiles chart source into an immutable Chart.

Chart format::

    #bpm <number>
    #offset <number>
    norm <U|D|L|R> <[fourths;]beats[|bars]>
    ...

Every event's offset is relative to the previous event's arrival time (the
first one is relative to ``#offset``). Ordering of the resulting arrival
times is the chart author's responsibility and is not checked here.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple, Union

from chart_errors import UnexpectedEof, UnexpectedToken
from chart_lexer import Token, TokenKind, tokenize
from game_constants import Direction, EventKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    """A single projectile approaching the heart.

    Attributes:
        arrival_time: Absolute seconds from chart start at which the
            projectile crosses the shield ring
        direction: Side the projectile comes from
        kind: Projectile type
    """
    arrival_time: float
    direction: Direction
    kind: EventKind = EventKind.NORMAL


@dataclass(frozen=True)
class Chart:
    tempo: float
    start_offset: float
    events: Tuple[Event, ...] = ()


class TokenStream:
    """Single-pass cursor over a token list."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._remaining = len(tokens)

    def is_exhausted(self) -> bool:
        return self._remaining == 0

    def next_token(self) -> Token:
        """Consume the next token.

        Raises:
            UnexpectedEof: if no tokens remain
        """
        if self._remaining == 0:
            raise UnexpectedEof()
        self._remaining -= 1
        return next(self._tokens)

    def expect(self, kind: TokenKind) -> Token:
        """Consume the next token and require it to be of ``kind``."""
        token = self.next_token()
        if token.kind != kind:
            raise UnexpectedToken(token)
        return token

    def expect_number(self) -> float:
        """Consume a numeric literal.

        Bare integers lex as time offsets, so a time offset written without
        separators is also accepted as a number.
        """
        token = self.next_token()
        if token.kind == TokenKind.NUMBER:
            return float(token.value)
        if token.kind == TokenKind.TIME_OFFSET and token.value.is_bare_integer:
            return float(token.value.beats)
        raise UnexpectedToken(token)


def _parse_tempo(tokens: TokenStream) -> float:
    tokens.expect(TokenKind.TEMPO_MARKER)
    tempo = tokens.expect_number()
    if not tempo > 0:
        # Reject here; every later duration divides by the tempo
        raise UnexpectedToken(Token(TokenKind.NUMBER, tempo))
    return tempo


def _parse_offset(tokens: TokenStream) -> float:
    tokens.expect(TokenKind.OFFSET_MARKER)
    return tokens.expect_number()


def _parse_event(tokens: TokenStream, tempo: float, cursor_time: float) -> Event:
    kind = tokens.expect(TokenKind.EVENT_TYPE).value
    direction = tokens.expect(TokenKind.DIRECTION).value
    time_offset = tokens.expect(TokenKind.TIME_OFFSET).value
    return Event(
        arrival_time=cursor_time + time_offset.to_seconds(tempo),
        direction=direction,
        kind=kind,
    )


def parse_tokens(tokens: Sequence[Token]) -> Chart:
    """Build a Chart from an already lexed token sequence.

    Raises:
        UnexpectedToken: a token of the wrong kind for its grammar position
        UnexpectedEof: the stream ended mid-rule
    """
    stream = TokenStream(tokens)
    tempo = _parse_tempo(stream)
    start_offset = _parse_offset(stream)

    events: List[Event] = []
    cursor_time = start_offset
    while not stream.is_exhausted():
        event = _parse_event(stream, tempo, cursor_time)
        cursor_time = event.arrival_time
        events.append(event)

    return Chart(tempo=tempo, start_offset=start_offset, events=tuple(events))


def parse_chart(source: str) -> Chart:
    """Compile chart source text.

    Raises:
        ChartError: on any lexing or grammar error; nothing partial is returned
    """
    return parse_tokens(tokenize(source))


def load_chart(path: Union[str, Path]) -> Chart:
    """Read and compile a chart file."""
    source = Path(path).read_text(encoding="utf-8")
    chart = parse_chart(source)
    logger.info(f"Loaded chart {path}: {len(chart.events)} events at {chart.tempo} bpm")
    return chart
