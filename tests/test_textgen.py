import string

import pytest

from kochmorse.textgen import TextGen, TextGenError


def test_plain_text():
    gen = TextGen.from_string("<rules><t>cq cq de dl1abc</t></rules>")
    assert gen.generate() == "cq cq de dl1abc"


def test_whitespace_between_rules_is_ignored():
    gen = TextGen.from_string("<rules>\n  <t>a</t>\n  <t>b</t>\n</rules>")
    assert gen.generate() == "ab"


def test_prosigns_and_pauses():
    gen = TextGen.from_string("<rules><t>a<bt/>b<ar/><sk/><bk/><p/><stop/></t></rules>")
    assert gen.generate() == "a=b+\u2403\u2417\t   \n"


def test_variable_and_reference():
    gen = TextGen.from_string(
        '<rules><var id="call">dl1abc</var><t>de <ref var="call"/></t></rules>'
    )
    ctx = {}
    assert gen.generate(ctx) == "de dl1abc"
    assert ctx["call"] == "dl1abc"


def test_reference_to_undefined_variable_is_empty():
    gen = TextGen.from_string('<rules><t>x<ref var="nope"/>y</t></rules>')
    assert gen.generate() == "xy"


def test_if_matches():
    gen = TextGen.from_string('<rules><if var="x" matches="1"><t>yes</t></if></rules>')
    assert gen.generate({"x": "1"}) == "yes"
    assert gen.generate({"x": "2"}) == ""
    assert gen.generate({}) == ""


def test_if_defined():
    gen = TextGen.from_string('<rules><if var="x"><t>yes</t></if></rules>')
    assert gen.generate({"x": "anything"}) == "yes"
    assert gen.generate({}) == ""


def test_named_rule_and_apply():
    gen = TextGen.from_string(
        '<rules><rule id="g"><t>gm</t></rule><apply rule="g"/><apply rule="g"/></rules>'
    )
    assert gen.generate() == "gmgm"


def test_apply_unknown_rule_raises():
    with pytest.raises(TextGenError):
        TextGen.from_string('<rules><apply rule="missing"/></rules>')


def test_repeat_fixed_count():
    gen = TextGen.from_string('<rules><rep min="3"><t>ab</t></rep></rules>')
    assert gen.generate() == "ab" * 3


def test_repeat_range():
    gen = TextGen.from_string('<rules><rep min="2" max="4"><t>x</t></rep></rules>')
    for _ in range(30):
        out = gen.generate()
        assert 2 <= len(out) <= 4
        assert set(out) == {"x"}


def test_repeat_max_below_min_raises():
    with pytest.raises(TextGenError):
        TextGen.from_string('<rules><rep min="4" max="2"><t>x</t></rep></rules>')


def test_one_of_zero_weight_never_chosen():
    gen = TextGen.from_string(
        '<rules><one-of><t w="0">bad</t><i w="1"><t>good</t></i></one-of></rules>'
    )
    assert {gen.generate() for _ in range(30)} == {"good"}


def test_one_of_zipf_picks_an_item():
    gen = TextGen.from_string(
        '<rules><one-of-zipf exp="1.5"><t>a</t><t>b</t><i><t>c</t></i></one-of-zipf></rules>'
    )
    for _ in range(30):
        assert gen.generate() in {"a", "b", "c"}


def test_one_of_unexpected_child_raises():
    with pytest.raises(TextGenError):
        TextGen.from_string("<rules><one-of><x/></one-of></rules>")


def test_any_letter_and_number():
    gen = TextGen.from_string("<rules><t><any-letter/><any-number/></t></rules>")
    for _ in range(30):
        out = gen.generate()
        assert len(out) == 2
        assert out[0] in string.ascii_lowercase
        assert out[1] in string.digits


@pytest.mark.parametrize("p, expected", [("1", "on"), ("0", ""), ("bogus", "")])
def test_opt_probability(p, expected):
    gen = TextGen.from_string(f'<rules><opt p="{p}">on</opt></rules>')
    assert {gen.generate() for _ in range(20)} == {expected}


@pytest.mark.parametrize(
    "xml",
    [
        "<other><t>a</t></other>",
        "<rules><unknown/></rules>",
        "<rules><t><rep min='1'/></t></rules>",
        "<rules><var>x</var></rules>",
        "<rules><ref/></rules>",
        "<rules><bt><t>x</t></bt></rules>",
        "<rules><t>unclosed</rules>",
    ],
)
def test_invalid_descriptions_raise(xml):
    with pytest.raises(TextGenError):
        TextGen.from_string(xml)


def test_load_text_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("qrz de dl1abc k", encoding="utf-8")
    assert TextGen(str(path)).generate() == "qrz de dl1abc k"


def test_load_nested_relative_to_including_file(tmp_path, monkeypatch):
    rules_dir = tmp_path / "rules"
    rules_dir.mkdir()
    (rules_dir / "inc.xml").write_text("<rules><t>hello</t></rules>", encoding="utf-8")
    (rules_dir / "main.xml").write_text(
        '<rules><t>a</t><load file="inc.xml"/></rules>', encoding="utf-8"
    )
    elsewhere = tmp_path / "cwd"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    assert TextGen(rules_dir / "main.xml").generate() == "ahello"


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(TextGenError):
        TextGen(tmp_path / "missing.xml")


def test_load_element_must_be_empty(tmp_path):
    inc = tmp_path / "inc.txt"
    inc.write_text("x", encoding="utf-8")
    with pytest.raises(TextGenError):
        TextGen.from_string(f'<rules><load file="{inc}"><t>a</t></load></rules>')