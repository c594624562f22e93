"""Rule-based random text generator driven by an XML rule description.

A rule file has a ``<rules>`` document element. Its children are the rules
applied in order each time text is generated. Named rules (``<rule id=...>``)
are stored for later use with ``<apply rule=...>``. Other files, XML rule
files or plain ``.txt`` files, can be pulled in with ``<load file=...>``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path

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
)

# Fixed text produced by the prosign and pause elements.
_SYMBOLS = {
    "bt": "=",
    "bk": "\u2417",
    "ar": "+",
    "sk": "\u2403",
    "p": "\t",
    "stop": "   \n",
}


class TextGenError(Exception):
    """Raised when a rule file cannot be read or is not a valid description."""


def _float_attr(element: ET.Element, name: str, default: float, invalid: float) -> float:
    value = element.get(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return invalid


def _uint_attr(value: str) -> int:
    try:
        number = int(value.strip())
    except ValueError:
        return 0
    return number if number >= 0 else 0


def _required(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise TextGenError(f"<{element.tag}> has no '{name}' attribute")
    return value


def _require_empty(element: ET.Element) -> None:
    for child in element:
        raise TextGenError(f"unexpected element '{child.tag}' in <{element.tag}>")


class TextGen:
    """A text generator built from XML rule descriptions."""

    def __init__(self, filename: str | Path | None = None) -> None:
        self.rules: list[Rule] = []
        self.named: dict[str, ListRule] = {}
        self._path_stack: list[Path] = []
        if filename is not None:
            self.load(filename)

    @classmethod
    def from_string(cls, text: str | bytes) -> TextGen:
        """Build a generator from an XML rule description held in memory."""
        gen = cls()
        gen.parse(text)
        return gen

    def generate(self, ctx: dict[str, str] | None = None) -> str:
        """Apply all rules in order and return the generated text."""
        if ctx is None:
            ctx = {}
        return "".join(rule.generate(ctx) for rule in self.rules)

    def load(self, filename: str | Path) -> None:
        """Add the rules of an XML file, or the content of a ``.txt`` file.

        A relative name that does not exist is looked up next to the file
        currently being loaded.
        """
        path = Path(filename)
        if not path.exists() and self._path_stack:
            path = self._path_stack[-1] / path
        self._path_stack.append(path.absolute().parent)
        try:
            try:
                data = path.read_bytes()
            except OSError as exc:
                raise TextGenError(f"cannot open file {path}: {exc.strerror}") from exc
            if path.suffix == ".txt":
                self.rules.append(TextRule(data.decode("utf-8", errors="replace")))
            else:
                self.parse(data)
        finally:
            self._path_stack.pop()

    def parse(self, source: str | bytes) -> None:
        """Add the rules of the XML description ``source``."""
        try:
            root = ET.fromstring(source)
        except ET.ParseError as exc:
            raise TextGenError(f"invalid rule description: {exc}") from exc
        if root.tag != "rules":
            raise TextGenError(f"unexpected element: {root.tag}")
        self._parse_rules(root, self.rules)

    def _dispatch(
        self,
        element: ET.Element,
        rules: list[Rule],
        handlers: dict[str, Callable[[TextGen, ET.Element, list[Rule]], None]],
    ) -> None:
        handler = handlers.get(element.tag)
        if handler is None:
            raise TextGenError(f"unexpected element: {element.tag}")
        handler(self, element, rules)

    def _parse_rules(self, element: ET.Element, rules: list[Rule]) -> None:
        for child in element:
            self._dispatch(child, rules, _RULE_HANDLERS)

    def _parse_text(self, element: ET.Element, rules: list[Rule]) -> None:
        if element.text:
            rules.append(TextRule(element.text))
        for child in element:
            self._dispatch(child, rules, _TEXT_HANDLERS)
            if child.tail:
                rules.append(TextRule(child.tail))

    def _parse_rule(self, element: ET.Element, rules: list[Rule]) -> None:
        name = _required(element, "id")
        subrules: list[Rule] = []
        self._parse_rules(element, subrules)
        self.named[name] = ListRule(subrules)

    def _parse_load(self, element: ET.Element, rules: list[Rule]) -> None:
        filename = _required(element, "file")
        self.load(filename)
        _require_empty(element)

    def _parse_if(self, element: ET.Element, rules: list[Rule]) -> None:
        var = _required(element, "var")
        value = element.get("matches")
        subrules: list[Rule] = []
        self._parse_rules(element, subrules)
        rules.append(CondRule(var, ListRule(subrules), value))

    def _parse_var(self, element: ET.Element, rules: list[Rule]) -> None:
        name = _required(element, "id")
        subrules: list[Rule] = []
        self._parse_text(element, subrules)
        rules.append(VariableRule(name, ListRule(subrules)))

    def _parse_opt(self, element: ET.Element, rules: list[Rule]) -> None:
        p = _float_attr(element, "p", 0.5, 0.0)
        subrules: list[Rule] = []
        self._parse_text(element, subrules)
        rules.append(OptRule(ListRule(subrules), p))

    def _parse_one_of(self, element: ET.Element, rules: list[Rule]) -> None:
        rule = OneOfRule()
        rules.append(rule)
        for child in element:
            weight = _float_attr(child, "w", 1.0, 1.0)
            subrules: list[Rule] = []
            if child.tag == "i":
                self._parse_rules(child, subrules)
            elif child.tag == "t":
                self._parse_text(child, subrules)
            else:
                raise TextGenError(f"unexpected element: {child.tag}")
            rule.add_rule(weight, ListRule(subrules))

    def _parse_one_of_zipf(self, element: ET.Element, rules: list[Rule]) -> None:
        rule = OneOfZipfRule(_float_attr(element, "exp", 1.0, 1.0))
        rules.append(rule)
        for child in element:
            subrules: list[Rule] = []
            if child.tag == "i":
                self._parse_rules(child, subrules)
            elif child.tag == "t":
                self._parse_text(child, subrules)
            else:
                raise TextGenError(f"unexpected element: {child.tag}")
            rule.add_rule(ListRule(subrules))

    def _parse_rep(self, element: ET.Element, rules: list[Rule]) -> None:
        nmin = _uint_attr(_required(element, "min"))
        max_value = element.get("max")
        nmax = nmin if max_value is None else _uint_attr(max_value)
        if nmax < nmin:
            raise TextGenError(f"<rep> has max {nmax} below min {nmin}")
        subrules: list[Rule] = []
        self._parse_rules(element, subrules)
        rules.append(RepeatRule(nmin, nmax, ListRule(subrules)))

    def _parse_any_letter(self, element: ET.Element, rules: list[Rule]) -> None:
        rules.append(AnyLetterRule())
        _require_empty(element)

    def _parse_any_number(self, element: ET.Element, rules: list[Rule]) -> None:
        rules.append(AnyNumberRule())
        _require_empty(element)

    def _parse_symbol(self, element: ET.Element, rules: list[Rule]) -> None:
        rules.append(TextRule(_SYMBOLS[element.tag]))
        _require_empty(element)

    def _parse_ref(self, element: ET.Element, rules: list[Rule]) -> None:
        rules.append(RefRule(_required(element, "var")))
        _require_empty(element)

    def _parse_apply(self, element: ET.Element, rules: list[Rule]) -> None:
        name = _required(element, "rule")
        named = self.named.get(name)
        if named is None:
            raise TextGenError(f"unknown rule '{name}' referenced")
        rules.append(named)
        _require_empty(element)


_TEXT_HANDLERS: dict[str, Callable[[TextGen, ET.Element, list[Rule]], None]] = {
    "one-of": TextGen._parse_one_of,
    "if": TextGen._parse_if,
    "any-letter": TextGen._parse_any_letter,
    "any-number": TextGen._parse_any_number,
    "ref": TextGen._parse_ref,
    "apply": TextGen._parse_apply,
    "opt": TextGen._parse_opt,
    **{tag: TextGen._parse_symbol for tag in _SYMBOLS},
}

_RULE_HANDLERS: dict[str, Callable[[TextGen, ET.Element, list[Rule]], None]] = {
    **_TEXT_HANDLERS,
    "rule": TextGen._parse_rule,
    "load": TextGen._parse_load,
    "var": TextGen._parse_var,
    "one-of-zipf": TextGen._parse_one_of_zipf,
    "rep": TextGen._parse_rep,
    "t": TextGen._parse_text,
}