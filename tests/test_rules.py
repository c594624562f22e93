import string
from datetime import datetime

import pytest

from kochmorse.rules import (
    AnyLetterRule,
    AnyNumberRule,
    CondRule,
    ListRule,
    OneOfRule,
    OneOfZipfRule,
    OptRule,
    RefRule,
    RepeatRule,
    Rule,
    TextRule,
    VariableRule,
    default_context,
)


def test_rule_is_abstract():
    with pytest.raises(TypeError):
        Rule()


def test_text_rule_returns_text():
    assert TextRule("cq de").generate({}) == "cq de"


def test_any_letter_is_lowercase_letter():
    for _ in range(50):
        out = AnyLetterRule().generate({})
        assert len(out) == 1 and out in string.ascii_lowercase


def test_any_number_is_digit():
    for _ in range(50):
        out = AnyNumberRule().generate({})
        assert len(out) == 1 and out in string.digits


def test_opt_rule_extremes():
    assert OptRule(TextRule("x"), 0.0).generate({}) == ""
    assert OptRule(TextRule("x"), 1.0).generate({}) == "x"


def test_opt_rule_default_yields_text_or_nothing():
    results = {OptRule(TextRule("x")).generate({}) for _ in range(100)}
    assert results <= {"", "x"}


def test_one_of_respects_zero_weight():
    rule = OneOfRule()
    rule.add_rule(0.0, TextRule("never"))
    rule.add_rule(1.0, TextRule("always"))
    assert {rule.generate({}) for _ in range(30)} == {"always"}


def test_one_of_ignores_none():
    rule = OneOfRule()
    rule.add_rule(1.0, None)
    assert rule.rules == [] and rule.weights == []


def test_one_of_picks_from_options():
    rule = OneOfRule()
    for word in ("a", "b", "c"):
        rule.add_rule(1.0, TextRule(word))
    assert {rule.generate({}) for _ in range(100)} <= {"a", "b", "c"}


def test_zipf_weights_decrease_with_rank():
    rule = OneOfZipfRule(2.0)
    for word in ("a", "b", "c", "d"):
        rule.add_rule(TextRule(word))
    assert rule.weights[0] == 1.0
    assert all(x > y for x, y in zip(rule.weights, rule.weights[1:]))
    assert {rule.generate({}) for _ in range(100)} <= {"a", "b", "c", "d"}


def test_zipf_ignores_none():
    rule = OneOfZipfRule()
    rule.add_rule(None)
    assert rule.rules == []


def test_repeat_fixed_count():
    assert RepeatRule(3, 3, TextRule("ab")).generate({}) == "ab" * 3


def test_repeat_range():
    rule = RepeatRule(1, 4, TextRule("x"))
    for _ in range(50):
        assert 1 <= len(rule.generate({})) <= 4


def test_repeat_without_rule_is_empty():
    assert RepeatRule(2, 5, None).generate({}) == ""


def test_variable_sets_context_and_produces_nothing():
    ctx = {}
    assert VariableRule("call", TextRule("dl1abc")).generate(ctx) == ""
    assert ctx["call"] == "dl1abc"


def test_ref_reads_variable():
    ctx = {}
    VariableRule("name", TextRule("hannes")).generate(ctx)
    assert RefRule("name").generate(ctx) == "hannes"
    assert RefRule("other").generate(ctx) == ""


def test_cond_defined():
    rule = CondRule("x", TextRule("yes"))
    assert rule.generate({}) == ""
    assert rule.generate({"x": "anything"}) == "yes"


def test_cond_matches_value():
    rule = CondRule("ToD", TextRule("good evening"), "ge")
    assert rule.generate({"ToD": "ge"}) == "good evening"
    assert rule.generate({"ToD": "gn"}) == ""
    assert rule.generate({}) == ""


def test_list_concatenates_and_skips_none():
    rule = ListRule([TextRule("a"), None, TextRule("b")])
    assert rule.generate({}) == "ab"


def test_list_with_variable_then_reference():
    rule = ListRule([VariableRule("v", TextRule("73")), RefRule("v"), RefRule("v")])
    assert rule.generate({}) == "7373"


@pytest.mark.parametrize(
    "month,season",
    [(1, "winter"), (4, "spring"), (7, "summer"), (10, "fall"), (12, "winter")],
)
def test_default_context_season(month, season):
    assert default_context(datetime(2020, month, 1, 12))["ToY"] == season


def test_default_context_time_of_day():
    assert default_context(datetime(2020, 6, 1, 20))["ToD"] == "ge"
    assert default_context(datetime(2020, 6, 1, 23))["ToD"] == "gn"
    assert default_context(datetime(2020, 6, 1, 3))["ToD"] == "gn"


def test_default_context_without_argument_has_keys():
    ctx = default_context()
    assert set(ctx) == {"ToY", "ToD"}
    assert ctx["ToD"] in {"ge", "gn"}