"""Unit tests for the chart lexer."""

import unittest

from chart_errors import UnrecognizedAtom
from chart_lexer import Token, TokenKind, classify_atom, tokenize
from game_constants import Direction, EventKind
from music_timing import TimeOffset

class ChartLexerTest(unittest.TestCase):
    def test_integer_is_a_time_offset(self):
        """Time-offset syntax is tried before numbers."""
        token = classify_atom("120")
        self.assertEqual(token.kind, TokenKind.TIME_OFFSET)
        self.assertEqual(token.value, TimeOffset(fourths=None, beats=120, bars=None))

    def test_numbers(self):
        self.assertEqual(classify_atom("2.0"), Token(TokenKind.NUMBER, 2.0))
        self.assertEqual(classify_atom("-1"), Token(TokenKind.NUMBER, -1.0))
        self.assertEqual(classify_atom("1e3"), Token(TokenKind.NUMBER, 1000.0))

    def test_plus_signed_integer_is_a_time_offset(self):
        self.assertEqual(classify_atom("+1"), Token(TokenKind.TIME_OFFSET, TimeOffset(fourths=None, beats=1, bars=None)))
        self.assertEqual(classify_atom("+1;+0|+2"), Token(TokenKind.TIME_OFFSET, TimeOffset(fourths=1, beats=0, bars=2)))
        self.assertEqual(classify_atom("+1.5"), Token(TokenKind.NUMBER, 1.5))

    def test_keywords(self):
        self.assertEqual(classify_atom("#bpm"), Token(TokenKind.TEMPO_MARKER))
        self.assertEqual(classify_atom("#offset"), Token(TokenKind.OFFSET_MARKER))
        self.assertEqual(classify_atom("U"), Token(TokenKind.DIRECTION, Direction.UP))
        self.assertEqual(classify_atom("D"), Token(TokenKind.DIRECTION, Direction.DOWN))
        self.assertEqual(classify_atom("L"), Token(TokenKind.DIRECTION, Direction.LEFT))
        self.assertEqual(classify_atom("R"), Token(TokenKind.DIRECTION, Direction.RIGHT))
        self.assertEqual(classify_atom("norm"), Token(TokenKind.EVENT_TYPE, EventKind.NORMAL))

    def test_unrecognized_atoms(self):
        for atom in ("foo", "u", "1|", "1_0", "#BPM", "\u0663", "1\u0663"):
            with self.subTest(atom=atom):
                with self.assertRaises(UnrecognizedAtom) as context:
                    classify_atom(atom)
                self.assertEqual(context.exception.text, atom)

    def test_tokenize_preserves_order(self):
        tokens = tokenize("#bpm 140\n#offset 2.0\n  norm U 1|0\tnorm R 2;0\n")
        self.assertEqual([token.kind for token in tokens], [
            TokenKind.TEMPO_MARKER, TokenKind.TIME_OFFSET,
            TokenKind.OFFSET_MARKER, TokenKind.NUMBER,
            TokenKind.EVENT_TYPE, TokenKind.DIRECTION, TokenKind.TIME_OFFSET,
            TokenKind.EVENT_TYPE, TokenKind.DIRECTION, TokenKind.TIME_OFFSET,
        ])
        self.assertEqual(tokens[-1].value, TimeOffset(fourths=2, beats=0, bars=None))

    def test_tokenize_empty_source(self):
        self.assertEqual(tokenize(""), [])
        self.assertEqual(tokenize("  \n\t "), [])

    def test_tokenize_stops_at_bad_atom(self):
        with self.assertRaises(UnrecognizedAtom):
            tokenize("#bpm 120 ??? norm")

if __name__ == '__main__':
    unittest.main()
