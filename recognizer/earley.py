"""
Earley Recognizer
-----------------
Decides whether a string is derivable from a GrammarTable.

For every chart column p (0 <= p <= n):
    - predictor: a state waiting on nonterminal B adds (B-alternative, 0, p)
    - completer: a finished state for B that began at s advances every state
      in column s that was waiting on B, into column p
  both run to a fixed point over a worklist of newly added states, then
    - scanner: a state waiting on character c advances into column p + 1
      when input[p] == c

The input is accepted when column n holds a finished start-symbol state
that began at column 0. Rejection is a plain False; only a malformed grammar
raises (see errors.py).
"""

import logging
from collections import deque
from typing import Iterable, List, Sequence

from .chart import Chart, ParseState
from .grammar import START_SYMBOL, GrammarTable

logger = logging.getLogger(__name__)


class EarleyEngine:
    """Runs predictor/completer/scanner closure over a chart for one grammar."""

    def __init__(self, grammar: GrammarTable):
        grammar.validate()
        self.grammar = grammar

    # -------------------------------------------------------
    # Closure steps
    # -------------------------------------------------------

    def seed(self, chart: Chart) -> None:
        for rule in self.grammar.start_rules():
            chart.add(0, ParseState(rule.index, 0, 0))

    def close_column(self, chart: Chart, position: int) -> int:
        """Apply predictor and completer to column `position` until nothing new appears.

        Returns the number of states added.
        """
        grammar = self.grammar
        worklist = deque(chart.column(position))
        added = 0

        while worklist:
            state = worklist.popleft()
            symbol = state.next_symbol(grammar)

            if symbol is None:
                # completer
                finished = grammar.rule(state.rule).nonterminal
                for waiting in chart.waiting(state.start, finished):
                    advanced = waiting.advance()
                    if chart.add(position, advanced):
                        worklist.append(advanced)
                        added += 1
            elif isinstance(symbol, int):
                # predictor
                for rule in grammar.rules_for(symbol):
                    predicted = ParseState(rule.index, 0, position)
                    if chart.add(position, predicted):
                        worklist.append(predicted)
                        added += 1
            # terminals wait for the scanner

        return added

    def scan(self, chart: Chart, text: Sequence[str], position: int) -> int:
        """Advance states waiting on input[position] into the next column."""
        if position >= len(text):
            return 0
        added = 0
        for state in chart.waiting(position, text[position]):
            if chart.add(position + 1, state.advance()):
                added += 1
        return added

    # -------------------------------------------------------
    # Driver
    # -------------------------------------------------------

    def build_chart(self, text: Sequence[str]) -> Chart:
        n = len(text)
        chart = Chart(n, self.grammar)
        self.seed(chart)

        for position in range(n + 1):
            self.close_column(chart, position)
            if position == n:
                break
            if self.scan(chart, text, position) == 0:
                # nothing consumed input[position]; later columns stay empty
                logger.debug("no state matched %r at position %d", text[position], position)
                break

        logger.debug("chart for %d characters holds %d states", n, chart.state_count())
        return chart

    def is_accepting(self, chart: Chart) -> bool:
        grammar = self.grammar
        for state in chart.column(chart.length):
            if state.start != 0:
                continue
            if grammar.rule(state.rule).nonterminal == START_SYMBOL and state.is_complete(grammar):
                return True
        return False

    def accepts(self, text: Sequence[str]) -> bool:
        return self.is_accepting(self.build_chart(text))


def accepts(grammar: GrammarTable, text: Sequence[str]) -> bool:
    """Return True if `text` is derivable from nonterminal 0 of `grammar`."""
    return EarleyEngine(grammar).accepts(text)


def match_all(grammar: GrammarTable, messages: Iterable[Sequence[str]]) -> List[bool]:
    """One boolean per message. A malformed grammar aborts before any message is tried."""
    engine = EarleyEngine(grammar)
    return [engine.accepts(message) for message in messages]


def count_matches(grammar: GrammarTable, messages: Iterable[Sequence[str]]) -> int:
    return sum(match_all(grammar, messages))


__all__ = ["EarleyEngine", "accepts", "match_all", "count_matches"]
