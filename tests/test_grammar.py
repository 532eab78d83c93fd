import pytest

from recognizer.errors import EmptyRuleError, GrammarError, NoStartRule, UnknownNonterminal
from recognizer.grammar import START_SYMBOL, GrammarTable


def test_alternatives_accumulate(example_grammar):
    bodies = {rule.body for rule in example_grammar.rules_for(1)}
    assert bodies == {(2, 3), (3, 2)}
    assert len(example_grammar) == 9


def test_terminal_rule():
    g = GrammarTable()
    rule = g.add_rule(4, "a")
    assert rule.is_terminal
    assert rule.size == 1
    assert str(rule) == '4: "a"'


def test_rule_indices_are_stable_and_distinct(example_grammar):
    indices = [rule.index for rule in example_grammar]
    assert indices == list(range(len(example_grammar)))
    for rule in example_grammar:
        assert example_grammar.rule(rule.index) is rule


def test_duplicate_alternative_is_not_added_twice():
    g = GrammarTable()
    first = g.add_rule(0, [1, 2])
    second = g.add_rule(0, (1, 2))
    assert first is second
    assert len(g.rules_for(0)) == 1


def test_rules_for_unknown_raises():
    g = GrammarTable()
    g.add_rule(0, "x")
    with pytest.raises(UnknownNonterminal) as info:
        g.rules_for(7)
    assert info.value.nonterminal == 7


def test_validate_missing_start():
    g = GrammarTable()
    g.add_rule(1, "a")
    with pytest.raises(NoStartRule):
        g.validate()
    with pytest.raises(NoStartRule):
        g.start_rules()


def test_validate_reports_smallest_undefined_id():
    g = GrammarTable.from_rules([(0, (1, 9)), (1, (12,)), (12, "c")])
    g.add_rule(1, (8,))
    with pytest.raises(UnknownNonterminal) as info:
        g.validate()
    assert info.value.nonterminal == 8


@pytest.mark.parametrize("body", ["", [], ()])
def test_empty_body_is_flagged(body):
    with pytest.raises(EmptyRuleError):
        GrammarTable().add_rule(3, body)


@pytest.mark.parametrize("nonterminal, body", [
    (-1, "a"),
    ("0", "a"),
    (True, "a"),
    (0, "ab"),
    (0, [1, -2]),
    (0, 5),
])
def test_bad_rules_rejected(nonterminal, body):
    with pytest.raises(GrammarError):
        GrammarTable().add_rule(nonterminal, body)


def test_views(example_grammar):
    assert START_SYMBOL in example_grammar
    assert 6 not in example_grammar
    assert example_grammar.nonterminals() == {0, 1, 2, 3, 4, 5}
    assert example_grammar.referenced() == {1, 2, 3, 4, 5}
    assert example_grammar.terminals() == {"a", "b"}
    assert example_grammar.to_dict()[1] == ["2 3", "3 2"]
    assert example_grammar.to_dict()[4] == ['"a"']
