"""
Grammar text parser.

Reads the line-based grammar notation:

    0: 4 1 5
    1: 2 3 | 3 2
    4: "a"

Each line is `<id>: <alternative> (| <alternative>)*` where an alternative is
either one quoted character (terminal) or a space-separated list of ids.
Puzzle files put a blank line after the rules and then one message per line.
"""

import re
from typing import List, Optional, Tuple, Union

from .errors import RuleSyntaxError
from .grammar import GrammarTable

_HEAD_RE = re.compile(r"^\s*(\d+)\s*:\s*(.*?)\s*$")
_ALT_RE = re.compile(r'"(?P<char>[^"])"|(?P<ids>\d+(?:[ \t]+\d+)*)')
_SEP_RE = re.compile(r"\s*\|\s*")

ParsedRule = Tuple[int, Union[str, Tuple[int, ...]]]


def parse_rule_line(line: str, lineno: Optional[int] = None) -> List[ParsedRule]:
    """
    Parse one rule line into (nonterminal_id, body) pairs, one per alternative.

    '1: 2 3 | 3 2' -> [(1, (2, 3)), (1, (3, 2))]
    '4: "a"'       -> [(4, 'a')]
    """
    head = _HEAD_RE.match(line)
    if not head:
        raise RuleSyntaxError(line, lineno)
    nonterminal = int(head.group(1))
    rhs = head.group(2)

    pairs: List[ParsedRule] = []
    pos = 0
    while True:
        alt = _ALT_RE.match(rhs, pos)
        if not alt:
            raise RuleSyntaxError(line, lineno)
        if alt.group("char") is not None:
            pairs.append((nonterminal, alt.group("char")))
        else:
            pairs.append((nonterminal, tuple(int(tok) for tok in alt.group("ids").split())))
        pos = alt.end()
        if pos == len(rhs):
            break
        sep = _SEP_RE.match(rhs, pos)
        if not sep or sep.end() == len(rhs):
            raise RuleSyntaxError(line, lineno)
        pos = sep.end()

    return pairs


def parse_grammar(text: str) -> GrammarTable:
    """Build a GrammarTable from grammar text. Blank lines and '#' comments are skipped."""
    table = GrammarTable()
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        for nonterminal, body in parse_rule_line(line, lineno):
            table.add_rule(nonterminal, body)
    return table


def split_puzzle_input(text: str) -> Tuple[str, List[str]]:
    """Split a puzzle file into its rules block and the list of messages below it."""
    lines = text.strip("\n").splitlines()
    for i, line in enumerate(lines):
        if not line.strip():
            rules = "\n".join(lines[:i])
            messages = [m.strip() for m in lines[i + 1:] if m.strip()]
            return rules, messages
    return "\n".join(lines), []


__all__ = ["parse_rule_line", "parse_grammar", "split_puzzle_input"]
