"""
Chart data structures for Earley recognition.

A ParseState is three plain values: the index of one rule alternative in the
GrammarTable, how many symbols of its body have been matched, and the column
where the attempt began. The Chart is one insertion-ordered, deduplicated
state set per input position (n + 1 columns for n characters).
"""

from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple, Union

from .grammar import GrammarTable


class ParseState(NamedTuple):
    rule: int
    dot: int
    start: int

    def is_complete(self, grammar: GrammarTable) -> bool:
        return self.dot >= grammar.rule(self.rule).size

    def next_symbol(self, grammar: GrammarTable) -> Optional[Union[int, str]]:
        """Nonterminal id or terminal character after the dot, None when complete."""
        rule = grammar.rule(self.rule)
        if self.dot >= rule.size:
            return None
        if rule.is_terminal:
            return rule.body
        return rule.body[self.dot]

    def advance(self) -> "ParseState":
        return ParseState(self.rule, self.dot + 1, self.start)

    def describe(self, grammar: GrammarTable) -> str:
        rule = grammar.rule(self.rule)
        symbols = [f'"{rule.body}"'] if rule.is_terminal else [str(s) for s in rule.body]
        symbols.insert(self.dot, "•")
        return f"{rule.nonterminal} -> {' '.join(symbols)} ({self.start})"


class Chart:
    """Per-position state sets. States are only ever added.

    With a grammar, every column also indexes its incomplete states by the
    symbol after the dot (nonterminal id or terminal character), so the
    completer and scanner only visit states that can advance.
    """

    def __init__(self, length: int, grammar: Optional[GrammarTable] = None):
        if length < 0:
            raise ValueError(f"Input length must be non-negative (found {length}).")
        self.grammar = grammar
        # dicts keep insertion order and give O(1) membership
        self._columns: List[Dict[ParseState, None]] = [{} for _ in range(length + 1)]
        self._waiting: List[Dict[Union[int, str], List[ParseState]]] = [{} for _ in range(length + 1)]

    @property
    def length(self) -> int:
        """Number of input characters the chart covers."""
        return len(self._columns) - 1

    def add(self, position: int, state: ParseState) -> bool:
        """Insert `state` into column `position`; True only if it was new."""
        if state.start > position:
            raise ValueError(f"State starting at {state.start} cannot live in column {position}.")
        column = self._columns[position]
        if state in column:
            return False
        column[state] = None
        if self.grammar is not None:
            symbol = state.next_symbol(self.grammar)
            if symbol is not None:
                self._waiting[position].setdefault(symbol, []).append(state)
        return True

    def waiting(self, position: int, symbol: Union[int, str]) -> Tuple[ParseState, ...]:
        """States in column `position` whose next symbol is `symbol`."""
        if self.grammar is None:
            raise ValueError("Chart was built without a grammar; no waiting index.")
        return tuple(self._waiting[position].get(symbol, ()))

    def column(self, position: int) -> List[ParseState]:
        return list(self._columns[position])

    def state_count(self) -> int:
        return sum(len(column) for column in self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[List[ParseState]]:
        for position in range(len(self._columns)):
            yield self.column(position)

    def dump(self, grammar: GrammarTable) -> str:
        lines = []
        for position, column in enumerate(self):
            lines.append(f"chart[{position}]")
            lines.extend("  " + state.describe(grammar) for state in column)
        return "\n".join(lines)


__all__ = ["ParseState", "Chart"]
