"""
generator.py

Random sample strings for a GrammarTable.

Functions:
- generate_one(grammar, symbol=0, max_depth=15, rng=None)
    Expand `symbol` by picking one alternative at random for every nonterminal.
    Terminal rules contribute their character. Returns None when the expansion
    goes deeper than `max_depth` (truncated).

- generate_strings(grammar, max_strings=10, max_attempts=50, max_depth=15, rng=None)
    Calls generate_one repeatedly and collects up to `max_strings` distinct
    strings, trying at most `max_attempts` times.

Notes:
- Pass `rng=random.Random(seed)` for reproducible output.
- Every string produced here is accepted by the recognizer for the same grammar.
"""

import random
from typing import List, Optional, Set

from .grammar import START_SYMBOL, GrammarTable


class _Truncated(Exception):
    pass


def _expand(grammar: GrammarTable, symbol: int, depth: int, max_depth: int,
            rng: random.Random, out: List[str]) -> None:
    if depth > max_depth:
        raise _Truncated()

    rule = rng.choice(grammar.rules_for(symbol))
    if rule.is_terminal:
        out.append(rule.body)
        return

    for sym in rule.body:
        _expand(grammar, sym, depth + 1, max_depth, rng, out)


def generate_one(grammar: GrammarTable, symbol: int = START_SYMBOL,
                 max_depth: int = 15, rng: Optional[random.Random] = None) -> Optional[str]:
    rng = rng or random.Random()
    out: List[str] = []
    try:
        _expand(grammar, symbol, 0, max_depth, rng, out)
    except (_Truncated, RecursionError):
        return None
    return "".join(out)


def generate_strings(grammar: GrammarTable, max_strings: int = 10, max_attempts: int = 50,
                     max_depth: int = 15, rng: Optional[random.Random] = None) -> Set[str]:
    """
    Generate up to `max_strings` distinct strings derivable from symbol 0.

    Truncated expansions are skipped; the result may hold fewer strings than
    requested when the language is small or the depth limit is tight.
    """
    grammar.validate()
    rng = rng or random.Random()

    generated: Set[str] = set()
    attempts = 0
    while attempts < max_attempts and len(generated) < max_strings:
        attempts += 1
        s = generate_one(grammar, START_SYMBOL, max_depth=max_depth, rng=rng)
        if s is not None:
            generated.add(s)

    return generated


__all__ = ["generate_one", "generate_strings"]
