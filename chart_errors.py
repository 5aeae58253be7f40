"""Errors raised while compiling a chart."""


class ChartError(ValueError):
    """Base class for every chart compile error.

    Any ChartError means the whole chart failed to load; no partial chart
    is ever produced.
    """


class UnrecognizedAtom(ChartError):
    """An atom matched none of the token grammars."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Unrecognized atom: {text!r}")
        self.text = text


class UnexpectedToken(ChartError):
    """The grammar expected a different kind of token here."""

    def __init__(self, token) -> None:
        super().__init__(f"Unexpected token: {token}")
        self.token = token


class UnexpectedEof(ChartError):
    """The token stream ended in the middle of a grammar rule."""

    def __init__(self) -> None:
        super().__init__("Unexpected end of chart")
