"""Building blocks of the rule-based random text generator."""

from __future__ import annotations

import random
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone


class Rule(ABC):
    """A rule that produces text, possibly reading or updating the context."""

    @abstractmethod
    def generate(self, ctx: dict[str, str]) -> str:
        """Return the text produced by this rule."""


@dataclass
class TextRule(Rule):
    """Produces a fixed text."""

    text: str

    def generate(self, ctx: dict[str, str]) -> str:
        return self.text


@dataclass
class AnyLetterRule(Rule):
    """Produces one random lower-case letter."""

    def generate(self, ctx: dict[str, str]) -> str:
        return random.choice(string.ascii_lowercase)


@dataclass
class AnyNumberRule(Rule):
    """Produces one random decimal digit."""

    def generate(self, ctx: dict[str, str]) -> str:
        return random.choice(string.digits)


@dataclass
class OptRule(Rule):
    """Produces the text of ``rule`` with probability ``p``, otherwise nothing."""

    rule: Rule
    p: float = 0.5

    def generate(self, ctx: dict[str, str]) -> str:
        if random.random() < self.p:
            return self.rule.generate(ctx)
        return ""


@dataclass
class OneOfRule(Rule):
    """Picks one sub-rule at random according to its weight."""

    weights: list[float] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)

    def add_rule(self, weight: float, rule: Rule | None) -> None:
        """Add ``rule`` with the given weight; ``None`` is ignored."""
        if rule is None:
            return
        self.weights.append(weight)
        self.rules.append(rule)

    def generate(self, ctx: dict[str, str]) -> str:
        if not self.rules:
            return ""
        chosen = random.choices(self.rules, weights=self.weights)[0]
        return chosen.generate(ctx)


@dataclass
class OneOfZipfRule(Rule):
    """Picks one sub-rule at random, weighted by rank following Zipf's law."""

    exponent: float = 1.0
    weights: list[float] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)

    def add_rule(self, rule: Rule | None) -> None:
        """Append ``rule`` with weight ``1 / rank ** exponent``; ``None`` is ignored."""
        if rule is None:
            return
        self.rules.append(rule)
        self.weights.append(1.0 / float(len(self.rules)) ** self.exponent)

    def generate(self, ctx: dict[str, str]) -> str:
        if not self.rules:
            return ""
        chosen = random.choices(self.rules, weights=self.weights)[0]
        return chosen.generate(ctx)


@dataclass
class RepeatRule(Rule):
    """Repeats ``rule`` a random number of times in ``[nmin, nmax]``."""

    nmin: int
    nmax: int
    rule: Rule | None

    def generate(self, ctx: dict[str, str]) -> str:
        if self.rule is None:
            return ""
        count = random.randint(self.nmin, self.nmax)
        return "".join(self.rule.generate(ctx) for _ in range(count))


@dataclass
class VariableRule(Rule):
    """Stores the text of ``rule`` in the context under ``name``; produces nothing."""

    name: str
    rule: Rule | None

    def generate(self, ctx: dict[str, str]) -> str:
        ctx[self.name] = self.rule.generate(ctx) if self.rule is not None else ""
        return ""


@dataclass
class CondRule(Rule):
    """Produces the text of ``rule`` if ``var`` is defined.

    When ``value`` is given, the variable must also hold exactly that value.
    """

    var: str
    rule: Rule | None
    value: str | None = None

    def generate(self, ctx: dict[str, str]) -> str:
        if self.rule is None or self.var not in ctx:
            return ""
        if self.value is not None and ctx[self.var] != self.value:
            return ""
        return self.rule.generate(ctx)


@dataclass
class RefRule(Rule):
    """Produces the value of a context variable, or nothing if it is undefined."""

    name: str

    def generate(self, ctx: dict[str, str]) -> str:
        return ctx.get(self.name, "")


@dataclass
class ListRule(Rule):
    """Concatenates the text of all sub-rules in order."""

    rules: list[Rule | None] = field(default_factory=list)

    def generate(self, ctx: dict[str, str]) -> str:
        return "".join(rule.generate(ctx) for rule in self.rules if rule is not None)


_SEASONS = {
    12: "winter", 1: "winter", 2: "winter",
    3: "spring", 4: "spring", 5: "spring",
    6: "summer", 7: "summer", 8: "summer",
    9: "fall", 10: "fall", 11: "fall",
}


def default_context(now: datetime | None = None) -> dict[str, str]:
    """Return a context with the time of year (``ToY``) and day (``ToD``) set.

    ``now`` defaults to the current UTC time.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    ctx = {"ToY": _SEASONS[now.month]}
    # Only the evening greeting is ever chosen; every other hour yields "gn".
    ctx["ToD"] = "ge" if 18 <= now.hour < 23 else "gn"
    return ctx