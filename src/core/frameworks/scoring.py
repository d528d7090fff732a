"""Keyword scoring of frameworks against a prompt.

Each framework earns fixed bonuses (or penalties) when keyword classes occur
in the normalized prompt.  The final ranking score blends this keyword score
with a semantic score:

    score = 0.4 * semantic + 0.6 * keyword + structured_boost  (+5 for create)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.core.intent.models import StructuredPrompt
from src.core.intent.structured_parser import (
    detect_preferred_frameworks,
    strongly_prefers_roses,
)
from src.core.intent.vocabulary import ACTION_VERBS

SEMANTIC_WEIGHT = 0.4
KEYWORD_WEIGHT = 0.6
NEUTRAL_SEMANTIC_SCORE = 50.0
STRUCTURED_BOOST = 25.0
ROSES_EXTRA_BOOST = 10.0
CREATE_BONUS = 5.0
SHORT_PROMPT_WORDS = 8
LONG_PROMPT_WORDS = 40

KEYWORD_CLASSES: dict[str, re.Pattern[str]] = {
    "content": re.compile(
        r"\b(?:write|writing|article|blog|post|essay|story|content|copy|draft|"
        r"newsletter|caption|poem|script)\b",
        re.IGNORECASE,
    ),
    "report": re.compile(
        r"\b(?:report|reports|analysis|analy[sz]e|findings|summary|quarterly|metrics|"
        r"data|kpis?|dashboard)\b",
        re.IGNORECASE,
    ),
    "reasoning": re.compile(
        r"\b(?:why|how|explain|reason|reasoning|think|step[- ]by[- ]step|logic|logical|"
        r"solve|calculate|understand|prove|derive|figure out)\b",
        re.IGNORECASE,
    ),
    "math": re.compile(
        r"\b(?:math|maths|mathematics|equation|calculate|compute|formula|algebra|"
        r"probability|statistics|proof|integral|derivative)\b"
        r"|\d+\s*[-+*/^x]\s*\d+",
        re.IGNORECASE,
    ),
    "professional": re.compile(
        r"\b(?:professional|business|corporate|client|clients|stakeholders?|executives?|"
        r"formal|company|enterprise|manager|proposal|meeting|boss)\b",
        re.IGNORECASE,
    ),
    "instructional": re.compile(
        r"\b(?:guide|tutorial|teach|learn|learning|beginners?|students?|how to|"
        r"instructions?|steps|lesson|course|explain|simple terms)\b",
        re.IGNORECASE,
    ),
    "planning": re.compile(
        r"\b(?:plan|planning|strategy|strategies|options?|alternatives?|compare|"
        r"decide|decision|choose|brainstorm|approaches|trade-?offs?|pros and cons)\b",
        re.IGNORECASE,
    ),
    "goal": re.compile(
        r"\b(?:goals?|objectives?|targets?|kpis?|milestones?|achieve|measurable|"
        r"deadline|okrs?|resolution)\b",
        re.IGNORECASE,
    ),
    "creative": re.compile(
        r"\b(?:creative|story|poem|imagine|invent|fiction|character|slogan|tagline|"
        r"campaign|brainstorm|ideas?)\b",
        re.IGNORECASE,
    ),
    "style": re.compile(
        r"\b(?:tone|style|voice|engaging|casual|friendly|persuasive|witty|humorous|"
        r"not boring)\b",
        re.IGNORECASE,
    ),
}


@dataclass(frozen=True)
class PromptSignals:
    """Keyword classes present in a prompt plus its length."""

    classes: frozenset[str]
    word_count: int
    leading_verb: bool

    def has(self, name: str) -> bool:
        return name in self.classes


def detect_signals(prompt: str) -> PromptSignals:
    classes = frozenset(name for name, pattern in KEYWORD_CLASSES.items() if pattern.search(prompt))
    words = re.findall(r"[A-Za-z']+", prompt)
    leading = bool(words) and words[0].lower() in ACTION_VERBS
    return PromptSignals(classes=classes, word_count=len(words), leading_verb=leading)


def keyword_score(framework_id: str, signals: PromptSignals) -> float:
    """Sum the fixed bonuses and penalties of *framework_id* for *signals*."""
    s = signals
    score = 0.0

    if framework_id == "cot":
        if s.has("reasoning") and not s.has("content"):
            score += 35
        if s.has("math"):
            score += 30
        if s.has("content") and not s.has("reasoning"):
            score -= 20
    elif framework_id == "tot":
        if s.has("planning"):
            score += 35
        if s.has("reasoning"):
            score += 10
        if s.has("content") and not s.has("planning"):
            score -= 10
    elif framework_id == "ape":
        if s.word_count <= SHORT_PROMPT_WORDS:
            score += 20
        if s.leading_verb:
            score += 15
        if s.word_count > LONG_PROMPT_WORDS:
            score -= 10
    elif framework_id == "race":
        if s.has("professional"):
            score += 35
        if s.has("report"):
            score += 30
        if s.has("content"):
            score += 15
    elif framework_id == "roses":
        if s.has("content"):
            score += 35
        if s.has("style"):
            score += 15
        if s.has("professional"):
            score += 10
    elif framework_id == "guide":
        if s.has("instructional"):
            score += 35
        if s.has("reasoning"):
            score += 10
    elif framework_id == "smart":
        if s.has("goal"):
            score += 35
        if s.has("planning"):
            score += 10
    elif framework_id == "create":
        if s.has("creative"):
            score += 30
        if s.has("content"):
            score += 15

    return score


def structured_boost(framework_id: str, structured: StructuredPrompt | None) -> float:
    """Bonus for frameworks that suit the structured field combination."""
    if structured is None or not structured.is_structured:
        return 0.0
    boost = 0.0
    if framework_id in detect_preferred_frameworks(structured):
        boost += STRUCTURED_BOOST
    if framework_id == "roses" and strongly_prefers_roses(structured):
        boost += ROSES_EXTRA_BOOST
    return boost


def combine(framework_id: str, semantic: float, keyword: float, boost: float) -> float:
    score = SEMANTIC_WEIGHT * semantic + KEYWORD_WEIGHT * keyword + boost
    if framework_id == "create":
        score += CREATE_BONUS
    return round(score, 2)
