"""
Grammar Table
-------------
Holds the production rules of a grammar whose nonterminals are non-negative
integer ids and whose terminals are single characters.

Rules live in one flat list (the table's arena); a rule's position in that
list is its identity. Alternatives are grouped by nonterminal id:

    0: 4 1 5          ->  Rule(0, 0, (4, 1, 5))
    1: 2 3 | 3 2      ->  Rule(1, 1, (2, 3)), Rule(2, 1, (3, 2))
    4: "a"            ->  Rule(3, 4, "a")

Nonterminal 0 is always the start symbol.
"""

from typing import Dict, Iterable, Iterator, List, NamedTuple, Sequence, Set, Tuple, Union

from .errors import EmptyRuleError, GrammarError, NoStartRule, UnknownNonterminal

START_SYMBOL = 0

Body = Union[str, Tuple[int, ...]]


class Rule(NamedTuple):
    index: int
    nonterminal: int
    body: Body

    @property
    def is_terminal(self) -> bool:
        return isinstance(self.body, str)

    @property
    def size(self) -> int:
        # a terminal body matches exactly one input character
        return 1 if self.is_terminal else len(self.body)

    def __str__(self) -> str:
        if self.is_terminal:
            return f'{self.nonterminal}: "{self.body}"'
        return f"{self.nonterminal}: " + " ".join(str(sym) for sym in self.body)


def _check_id(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise GrammarError(f"{what} must be a non-negative integer (found {value!r}).")
    return value


def _normalize_body(nonterminal: int, body) -> Body:
    if isinstance(body, str):
        if len(body) == 0:
            raise EmptyRuleError(nonterminal)
        if len(body) != 1:
            raise GrammarError(
                f"Terminal body for {nonterminal} must be a single character (found {body!r})."
            )
        return body
    try:
        symbols = tuple(body)
    except TypeError:
        raise GrammarError(f"Unsupported body type for {nonterminal}: {type(body).__name__}") from None
    if len(symbols) == 0:
        raise EmptyRuleError(nonterminal)
    return tuple(_check_id(sym, f"Symbol in rule for {nonterminal}") for sym in symbols)


class GrammarTable:
    """Production rules grouped by nonterminal id."""

    def __init__(self):
        self._rules: List[Rule] = []
        self._by_nonterminal: Dict[int, List[int]] = {}
        self._seen: Dict[Tuple[int, Body], Rule] = {}

    @classmethod
    def from_rules(cls, pairs: Iterable[Tuple[int, Union[str, Sequence[int]]]]) -> "GrammarTable":
        table = cls()
        for nonterminal, body in pairs:
            table.add_rule(nonterminal, body)
        return table

    def add_rule(self, nonterminal: int, body: Union[str, Sequence[int]]) -> Rule:
        """
        Register one alternative for `nonterminal`.

        Repeated calls with the same id accumulate alternatives. Registering an
        alternative that already exists returns the existing rule.
        """
        nonterminal = _check_id(nonterminal, "Nonterminal id")
        body = _normalize_body(nonterminal, body)

        key = (nonterminal, body)
        if key in self._seen:
            return self._seen[key]

        rule = Rule(len(self._rules), nonterminal, body)
        self._rules.append(rule)
        self._by_nonterminal.setdefault(nonterminal, []).append(rule.index)
        self._seen[key] = rule
        return rule

    def rules_for(self, nonterminal: int) -> Tuple[Rule, ...]:
        indices = self._by_nonterminal.get(nonterminal)
        if not indices:
            raise UnknownNonterminal(nonterminal)
        return tuple(self._rules[i] for i in indices)

    def start_rules(self) -> Tuple[Rule, ...]:
        if START_SYMBOL not in self._by_nonterminal:
            raise NoStartRule()
        return self.rules_for(START_SYMBOL)

    def rule(self, index: int) -> Rule:
        return self._rules[index]

    def nonterminals(self) -> Set[int]:
        return set(self._by_nonterminal)

    def referenced(self) -> Set[int]:
        """Every nonterminal id that appears in some rule body."""
        used: Set[int] = set()
        for rule in self._rules:
            if not rule.is_terminal:
                used.update(rule.body)
        return used

    def terminals(self) -> Set[str]:
        return {rule.body for rule in self._rules if rule.is_terminal}

    def validate(self) -> None:
        """
        Check the grammar before any recognition starts.

        Raises NoStartRule when symbol 0 is missing, then UnknownNonterminal for
        the smallest id that is referenced but never defined.
        """
        if START_SYMBOL not in self._by_nonterminal:
            raise NoStartRule()
        missing = self.referenced() - self.nonterminals()
        if missing:
            raise UnknownNonterminal(min(missing))

    def to_dict(self) -> Dict[int, List[str]]:
        """JSON friendly view: {id: ['4 1 5', '"a"', ...]}."""
        out: Dict[int, List[str]] = {}
        for nonterminal in sorted(self._by_nonterminal):
            out[nonterminal] = [str(rule).split(": ", 1)[1] for rule in self.rules_for(nonterminal)]
        return out

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __contains__(self, nonterminal: int) -> bool:
        return nonterminal in self._by_nonterminal

    def __repr__(self) -> str:
        return f"<GrammarTable {len(self._by_nonterminal)} nonterminals, {len(self._rules)} rules>"


__all__ = ["START_SYMBOL", "Rule", "GrammarTable"]
