import pytest

from recognizer.earley import count_matches
from recognizer.errors import RuleSyntaxError, UnknownNonterminal
from recognizer.rule_parser import parse_grammar, parse_rule_line, split_puzzle_input

from conftest import EXAMPLE_RULES, EXAMPLE_TEXT


@pytest.mark.parametrize("line, expected", [
    ("0: 4 1 5", [(0, (4, 1, 5))]),
    ("1: 2 3 | 3 2", [(1, (2, 3)), (1, (3, 2))]),
    ('4: "a"', [(4, "a")]),
    ("8: 42 | 42 8", [(8, (42,)), (8, (42, 8))]),
    ('  7 :  "x"  ', [(7, "x")]),
    ('9: "|" | 3', [(9, "|"), (9, (3,))]),
])
def test_parse_rule_line(line, expected):
    assert parse_rule_line(line) == expected


@pytest.mark.parametrize("line", [
    "",
    "0 4 1 5",
    "x: 1 2",
    "0:",
    '4: "ab"',
    '4: a',
    "1: 2 3 |",
    "1: | 2 3",
    "1: 2 3 || 3 2",
    "-1: 2",
])
def test_bad_lines_rejected(line):
    with pytest.raises(RuleSyntaxError):
        parse_rule_line(line)


def test_syntax_error_carries_line_number():
    with pytest.raises(RuleSyntaxError) as info:
        parse_grammar('0: 1\n1: "a"\n2: ???\n')
    assert info.value.lineno == 3
    assert "line 3" in str(info.value)


def test_parse_grammar_matches_structured_rules(example_grammar):
    g = parse_grammar(EXAMPLE_TEXT)
    assert [(r.nonterminal, r.body) for r in g] == EXAMPLE_RULES
    assert g.to_dict() == example_grammar.to_dict()


def test_comments_and_blank_lines_skipped():
    g = parse_grammar('# start\n0: 1 1\n\n1: "q"\n')
    assert len(g) == 2


def test_split_puzzle_input():
    text = EXAMPLE_TEXT + "\nababbb\nbababa\nabbbab\naaabbb\naaaabbb\n"
    rules, messages = split_puzzle_input(text)
    assert rules.splitlines()[0] == "0: 4 1 5"
    assert messages == ["ababbb", "bababa", "abbbab", "aaabbb", "aaaabbb"]
    assert count_matches(parse_grammar(rules), messages) == 2


def test_split_puzzle_input_without_messages():
    rules, messages = split_puzzle_input('0: "a"\n')
    assert rules == '0: "a"'
    assert messages == []


def test_undefined_reference_in_text():
    g = parse_grammar('0: 4 9\n4: "a"')
    with pytest.raises(UnknownNonterminal):
        g.validate()
