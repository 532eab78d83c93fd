"""
Grammar errors raised by the recognizer.

A string that is not in the language is never an error: the recognizer
answers ``False``. These exceptions only describe a malformed grammar.
"""

from typing import Optional


class GrammarError(ValueError):
    """Raised when the grammar is invalid in some way."""


class UnknownNonterminal(GrammarError):
    """A rule body refers to a nonterminal id that has no productions."""

    def __init__(self, nonterminal: int):
        self.nonterminal = nonterminal
        super().__init__(f"No rule defines nonterminal {nonterminal}.")


class NoStartRule(GrammarError):
    """The grammar never registered the start symbol 0."""

    def __init__(self):
        super().__init__("Grammar has no rule for start symbol 0.")


class EmptyRuleError(GrammarError):
    """Empty right-hand sides (epsilon productions) are not supported."""

    def __init__(self, nonterminal: int):
        self.nonterminal = nonterminal
        super().__init__(f"Empty production for nonterminal {nonterminal} is not supported.")


class RuleSyntaxError(GrammarError):
    """A grammar text line matches neither the terminal nor the sequence form."""

    def __init__(self, line: str, lineno: Optional[int] = None):
        self.line = line
        self.lineno = lineno
        where = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{where}cannot parse rule {line!r}")


__all__ = [
    "GrammarError",
    "UnknownNonterminal",
    "NoStartRule",
    "EmptyRuleError",
    "RuleSyntaxError",
]
