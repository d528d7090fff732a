"""A small first-match-wins rule engine.

Extraction cascades are declared as ordered lists of :class:`Rule` records.
Each rule pairs a cheap *predicate* with an *extractor*; the first rule whose
predicate holds and whose extractor returns a non-empty value wins.  Keeping
the rules as data makes the cascade order explicit and lets each rule be
tested on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RuleContext:
    """Read-only view of the text a cascade runs over."""

    text: str
    lower: str = field(init=False)
    words: tuple[str, ...] = field(init=False)
    is_question: bool = False
    action: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "lower", self.text.lower())
        object.__setattr__(
            self, "words", tuple(re.findall(r"[a-z][a-z'\-]*", self.text.lower()))
        )


@dataclass(frozen=True)
class Rule(Generic[T]):
    name: str
    predicate: Callable[[RuleContext], bool]
    extractor: Callable[[RuleContext], T | None]


@dataclass(frozen=True)
class RuleMatch(Generic[T]):
    rule: str
    value: T


def always(_: RuleContext) -> bool:
    return True


def apply_rules(rules: Sequence[Rule[T]], ctx: RuleContext) -> RuleMatch[T] | None:
    """Evaluate *rules* in order and return the first match, if any."""
    for rule in rules:
        if not rule.predicate(ctx):
            continue
        value = rule.extractor(ctx)
        if value:
            return RuleMatch(rule=rule.name, value=value)
    return None


def regex_rule(
    name: str,
    pattern: str | re.Pattern[str],
    transform: Callable[[re.Match[str], RuleContext], T | None],
    predicate: Callable[[RuleContext], bool] = always,
) -> Rule[T]:
    """Build a rule that searches *pattern* and hands the match to *transform*."""
    compiled = re.compile(pattern, re.IGNORECASE) if isinstance(pattern, str) else pattern

    def _extract(ctx: RuleContext) -> T | None:
        match = compiled.search(ctx.text)
        return transform(match, ctx) if match else None

    return Rule(name=name, predicate=predicate, extractor=_extract)
