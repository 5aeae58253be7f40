"""Unit tests for chart parsing."""

import dataclasses

import pytest

from chart_errors import ChartError, UnexpectedEof, UnexpectedToken, UnrecognizedAtom
from chart_lexer import TokenKind
from chart_parser import Chart, Event, load_chart, parse_chart
from game_constants import Direction, EventKind
from music_timing import TimeOffset

def test_single_event_chart():
    chart = parse_chart("#bpm 120 #offset 0 norm U 1|0")

    assert chart.tempo == 120.0
    assert chart.start_offset == 0.0
    assert chart.events == (Event(arrival_time=0.5, direction=Direction.UP, kind=EventKind.NORMAL),)

def test_offsets_chain_from_previous_event():
    """Each offset is measured from the previous event's arrival time."""
    chart = parse_chart("#bpm 140\n#offset 2.0\nnorm U 1|0\nnorm R 2|0\n")
    beat = 60.0 / 140.0

    assert chart.events[0].arrival_time == pytest.approx(2.0 + beat)
    assert chart.events[1].arrival_time == pytest.approx(2.0 + 3 * beat)
    assert chart.events[1].direction == Direction.RIGHT

def test_arrival_is_offset_plus_running_sum():
    offsets = ["1", "2;0", "0|1", "3;2|1", "0"]
    body = " ".join(f"norm L {offset}" for offset in offsets)
    chart = parse_chart(f"#bpm 97 #offset 1.5 {body}")

    expected = 1.5
    for event, offset in zip(chart.events, offsets):
        expected += TimeOffset.parse(offset).to_seconds(97.0)
        assert event.arrival_time == pytest.approx(expected)

def test_zero_offsets_share_arrival_time():
    """Ordering is not validated; equal arrival times are allowed."""
    chart = parse_chart("#bpm 120 #offset 1 norm U 0 norm D 0")
    assert chart.events[0].arrival_time == chart.events[1].arrival_time == 1.0

def test_header_only_chart_has_no_events():
    chart = parse_chart("#bpm 128.5 #offset -0.25")
    assert chart == Chart(tempo=128.5, start_offset=-0.25, events=())

def test_missing_offset_clause():
    with pytest.raises(UnexpectedEof):
        parse_chart("#bpm 120")

def test_empty_chart():
    with pytest.raises(UnexpectedEof):
        parse_chart("")

def test_swapped_header():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_chart("#offset 0 #bpm 120 norm U 1|0")
    assert excinfo.value.token.kind == TokenKind.OFFSET_MARKER

def test_marker_without_number():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_chart("#bpm #offset 0")
    assert excinfo.value.token.kind == TokenKind.OFFSET_MARKER

def test_header_number_with_separators_is_rejected():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_chart("#bpm 1;0 #offset 0")
    assert excinfo.value.token.kind == TokenKind.TIME_OFFSET

@pytest.mark.parametrize("tempo", ["0", "-120", "0.0"])
def test_non_positive_tempo_is_rejected(tempo):
    with pytest.raises(UnexpectedToken):
        parse_chart(f"#bpm {tempo} #offset 0 norm U 1")

def test_truncated_triple():
    with pytest.raises(UnexpectedEof):
        parse_chart("#bpm 120 #offset 0 norm U")

@pytest.mark.parametrize("body, bad_kind", [
    ("norm 1|0 U", TokenKind.TIME_OFFSET),
    ("U norm 1|0", TokenKind.DIRECTION),
    ("norm U R", TokenKind.DIRECTION),
    ("norm U 1.5", TokenKind.NUMBER),
])
def test_wrong_token_in_triple(body, bad_kind):
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_chart(f"#bpm 120 #offset 0 {body}")
    assert excinfo.value.token.kind == bad_kind

def test_unrecognized_atom_fails_whole_chart():
    with pytest.raises(UnrecognizedAtom):
        parse_chart("#bpm 120 #offset 0 norm U 1 norm X 1")

def test_errors_share_a_base_class():
    for source in ("", "#offset 0", "#bpm 120 #offset 0 nope"):
        with pytest.raises(ChartError):
            parse_chart(source)
    assert issubclass(ChartError, ValueError)

def test_chart_is_immutable():
    chart = parse_chart("#bpm 120 #offset 0 norm U 1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        chart.tempo = 60.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        chart.events[0].arrival_time = 0.0

def test_load_chart(tmp_path):
    path = tmp_path / "sheet.sht"
    path.write_text("#bpm 60\n#offset 1\nnorm D 2\n", encoding="utf-8")

    chart = load_chart(path)

    assert chart.tempo == 60.0
    assert chart.events == (Event(arrival_time=3.0, direction=Direction.DOWN),)

def test_plus_signed_offsets():
    chart = parse_chart("#bpm 120 #offset 0 norm U +1 norm D +1;+0|+2")
    beat = 0.5

    assert chart.events[0] == Event(arrival_time=0.5, direction=Direction.UP)
    assert chart.events[1].arrival_time == pytest.approx(0.5 + beat / 4 + 8 * beat)

def test_plus_signed_header_integer():
    chart = parse_chart("#bpm +120 #offset +0 norm U 1")
    assert chart.tempo == 120.0
    assert chart.start_offset == 0.0
