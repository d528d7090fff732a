"""Rule-based intent extractor.

Derives a :class:`ParsedIntent` from free text without any model.  The
function is total: every string, including empty or garbage input, yields an
intent.  Action and topic come from ordered rule cascades (see
:mod:`src.core.intent.rules`); format, audience, tone, constraints, role,
examples, context and key terms come from independent keyword checks.

Edge cases are handled in this order:

1. empty input
2. a single word
3. two words
4. very long input (only the first 5,000 of more than 10,000 words are read)
5. questions
6. statements
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from src.core.intent.models import (
    DEFAULT_ACTION,
    UNRESOLVED_TOPIC,
    IntentConstraints,
    ParsedIntent,
)
from src.core.intent.noun_phrases import noun_phrases
from src.core.intent.rules import Rule, RuleContext, apply_rules, regex_rule
from src.core.intent.vocabulary import (
    ACTION_VERBS,
    AUXILIARIES,
    FILLER_VERBS,
    INTERROGATIVES,
    LEADING_FILLER,
    LENGTH_WORDS,
    POLITENESS,
    STOPWORDS,
    SUBJECT_WORDS,
    TOPIC_PLACEHOLDERS,
)
from src.utils.logging import get_logger

logger = get_logger("intent.extractor")

MAX_WORDS = 10_000
TRUNCATED_WORDS = 5_000
ACTION_SCAN_CHARS = 100
MAX_KEY_TERMS = 8
MAX_TOPIC_WORDS = 12
MAX_PHRASE_WORDS = 6

SHORT_LENGTH = "short (around 600 words)"
LONG_LENGTH = "long (around 1500 words)"


@dataclass
class ExtractionResult:
    intent: ParsedIntent
    confidence: float
    trace: dict[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Topic cleanup
# ---------------------------------------------------------------------------

_STOP_BOUNDARY = re.compile(
    r"[,.;:!?\n\"]"
    r"|(?<!\bhow)\s+to\b"
    r"|\s+(?:for|so that|so it|because|in order to|make it|making it|"
    r"and stuff|and things|and so on|etc|not boring|help me|that is|which is|"
    r"using|in simple terms|in plain|in layman\S*|in (?:under|less than|fewer than|around|about|\d+)|"
    r"\d+\s*words?|in (?:an?|the)\s+\w+\s+(?:tone|style|way|format|voice)|"
    r"with (?:an?\s+)?\w+\s+(?:tone|style))\b",
    re.IGNORECASE,
)

_TRAILING_FILLER = re.compile(
    r"\s*\b(?:and|or|stuff|things|etc|please|thanks|thank you|ok|okay|now|"
    r"for me|help me with that|with that)\s*$",
    re.IGNORECASE,
)


def clean_topic(raw: str | None) -> str | None:
    """Trim *raw* to its subject phrase.

    Cuts at the first stop boundary, strips leading determiners and length
    adjectives, keeps at most ``MAX_TOPIC_WORDS`` words and then strips
    trailing filler.  Returns ``None`` when nothing meaningful remains.
    """
    if not raw:
        return None

    boundary = _STOP_BOUNDARY.search(raw)
    topic = raw[: boundary.start()] if boundary else raw
    topic = topic.strip(" \t'\"()[]")

    words = topic.split()
    while words and (words[0].lower() in LEADING_FILLER or words[0].lower() in LENGTH_WORDS):
        words.pop(0)
    topic = " ".join(words[:MAX_TOPIC_WORDS])

    previous = None
    while topic != previous:
        previous = topic
        topic = _TRAILING_FILLER.sub("", topic).strip()

    if len(topic) < 2 or topic.lower() in TOPIC_PLACEHOLDERS:
        return None
    return topic


def _strip_politeness(text: str) -> str:
    words = text.split()
    while words and words[0].lower().strip(",.!") in POLITENESS:
        words.pop(0)
    return " ".join(words)


def _bare(word: str) -> str:
    return word.strip(".,!?;:\"'()[]")


# ---------------------------------------------------------------------------
# Question detection
# ---------------------------------------------------------------------------

def is_question(text: str) -> bool:
    """Interrogative-led, or auxiliary-led with a subject or a trailing '?'."""
    words = re.findall(r"[a-z']+", text.lower())
    if not words:
        return False
    first = words[0].split("'")[0]
    if first in INTERROGATIVES:
        return True
    if first in AUXILIARIES:
        if text.rstrip().endswith("?"):
            return True
        return len(words) > 1 and words[1] in SUBJECT_WORDS
    return False


# ---------------------------------------------------------------------------
# Action cascades
# ---------------------------------------------------------------------------

def _verb(group: int = 1, *, known_only: bool = True):
    def _transform(match: re.Match[str], ctx: RuleContext) -> str | None:
        verb = match.group(group).lower()
        if verb in FILLER_VERBS or verb in AUXILIARIES or verb in STOPWORDS:
            return None
        if known_only and verb not in ACTION_VERBS:
            return None
        return verb

    return _transform


def _constant(value: str):
    def _transform(match: re.Match[str], ctx: RuleContext) -> str:
        return value

    return _transform


_IMPERATIVE_PREFIX = POLITENESS | {"now", "then", "just", "also", "quickly", "ok", "okay", "so"}


def _leading_imperative(ctx: RuleContext) -> str | None:
    for word in ctx.words:
        if word in _IMPERATIVE_PREFIX:
            continue
        return word if word in ACTION_VERBS else None
    return None


def _first_verb_in(words) -> str | None:
    for word in words:
        if word in ACTION_VERBS:
            return word
    return None


def _early_verb(ctx: RuleContext) -> str | None:
    head = ctx.lower[:ACTION_SCAN_CHARS]
    return _first_verb_in(re.findall(r"[a-z]+", head))


def _any_verb(ctx: RuleContext) -> str | None:
    return _first_verb_in(ctx.words)


def _starts_with_interrogative(ctx: RuleContext) -> bool:
    return bool(ctx.words) and ctx.words[0].split("'")[0] in INTERROGATIVES


STATEMENT_ACTION_RULES: list[Rule[str]] = [
    regex_rule(
        "responsibility",
        r"\b(?:it'?s|it\s+is|my\s+(?:job|responsibility|task)\s+is)\s+"
        r"(?:my\s+(?:job|responsibility|task|duty|role)\s+)?"
        r"(?:as\s+(?:an?|the)\s+[\w\s\-]+?\s+)?to\s+([a-z]+)",
        _verb(known_only=False),
    ),
    Rule("leading_imperative", lambda ctx: True, _leading_imperative),
    regex_rule(
        "want_you_to",
        r"\bi(?:'d|\s+would)?\s+(?:really\s+)?(?:want|need|like|wish)\s+(?:you\s+)?to\s+"
        r"(?:help\s+(?:me\s+)?(?:to\s+)?)?([a-z]+)",
        _verb(known_only=False),
    ),
    regex_rule(
        "help_me",
        r"\bhelp\s+(?:me|us)\s+(?:to\s+)?([a-z]+)",
        _verb(),
    ),
    Rule("early_verb", lambda ctx: True, _early_verb),
]

QUESTION_ACTION_RULES: list[Rule[str]] = [
    regex_rule(
        "polite_request",
        r"^(?:can|could|would|will)\s+you\s+(?:please\s+)?([a-z]+)",
        _verb(),
    ),
    regex_rule(
        "embedded_modal",
        r"^(?:who|what|how|which|where|when|why)\b.*?\b"
        r"(?:should|can|could|would|will|must|do|does|did|shall)\s+"
        r"(?:i|we|you|they|one|people)\s+([a-z]+)",
        _verb(),
    ),
    regex_rule("how_to", r"\bhow\s+to\s+[a-z]+", _constant("explain")),
    regex_rule(
        "knowledge_question",
        r"^(?:(?:what|why|how|who|when|where|which)\s+(?:is|are|was|were|does|do|did|has|have)\b"
        r"|(?:what|who|where|how)'s\b)",
        _constant("explain"),
        predicate=_starts_with_interrogative,
    ),
    Rule("any_verb", lambda ctx: True, _any_verb),
]


# ---------------------------------------------------------------------------
# Topic cascades
# ---------------------------------------------------------------------------

def _clean_group(group: int = 1, template: str = "{}"):
    def _transform(match: re.Match[str], ctx: RuleContext) -> str | None:
        topic = clean_topic(match.group(group))
        return template.format(topic) if topic else None

    return _transform


def _verb_object(ctx: RuleContext) -> str | None:
    if not ctx.action:
        return None
    match = re.search(rf"\b{re.escape(ctx.action)}\b\s+(.+)", ctx.text, re.IGNORECASE | re.DOTALL)
    return clean_topic(match.group(1)) if match else None


_SCAFFOLD_WORDS = (
    INTERROGATIVES | AUXILIARIES | SUBJECT_WORDS | POLITENESS | FILLER_VERBS
    | {"me", "us", "to", "tell", "explain", "know", "about"}
)


def _question_remainder(ctx: RuleContext) -> str | None:
    words = ctx.text.split()
    while words and _bare(words[0]).lower().split("'")[0] in _SCAFFOLD_WORDS:
        words.pop(0)
    return clean_topic(" ".join(words))


def _noun_phrases(ctx: RuleContext) -> str | None:
    phrases = noun_phrases(ctx.text)
    if not phrases:
        return None
    longest = max(phrases, key=lambda p: len(p.split()))
    return " ".join(longest.split()[:MAX_PHRASE_WORDS])


_ABOUT_CLAUSE = (
    r"\b(?:about|regarding|concerning|on the (?:topic|subject) of)\s+(.+)"
)
_FORMAT_ON_CLAUSE = (
    r"\b(?:article|essay|report|post|blog|guide|tutorial|paper|summary|presentation|"
    r"talk|lecture|course|lesson|thesis|story|poem|research|newsletter)\s+on\s+(.+)"
)

STATEMENT_TOPIC_RULES: list[Rule[str]] = [
    regex_rule("about_clause", _ABOUT_CLAUSE, _clean_group()),
    regex_rule("format_on_clause", _FORMAT_ON_CLAUSE, _clean_group()),
    Rule("verb_object", lambda ctx: ctx.action is not None, _verb_object),
    Rule("noun_phrases", lambda ctx: True, _noun_phrases),
]

QUESTION_TOPIC_RULES: list[Rule[str]] = [
    regex_rule("about_clause", _ABOUT_CLAUSE, _clean_group()),
    regex_rule(
        "how_does_work",
        r"^how\s+(?:does|do|did|can|could|would)\s+(.+?)\s+works?\b",
        _clean_group(template="how {} works"),
    ),
    regex_rule(
        "what_is",
        r"^(?:what|who|where|when)(?:'s|\s+(?:is|are|was|were))\s+(.+)",
        _clean_group(),
    ),
    regex_rule(
        "why_is",
        r"^why\s+(?:is|are|was|were|does|do|did|can|should|would)\s+(.+)",
        _clean_group(),
    ),
    regex_rule("how_to", r"\bhow\s+to\s+(.+)", _clean_group(template="how to {}")),
    Rule("verb_object", lambda ctx: ctx.action is not None, _verb_object),
    Rule("question_remainder", lambda ctx: True, _question_remainder),
    Rule("noun_phrases", lambda ctx: True, _noun_phrases),
]


# ---------------------------------------------------------------------------
# Attribute extraction
# ---------------------------------------------------------------------------

_FORMAT_KEYWORDS: list[tuple[str, str]] = [
    (r"\breport\b", "report"),
    (r"\bblog(?:\s*post)?\b", "blog post"),
    (r"\barticle\b", "article"),
    (r"\bessay\b", "essay"),
    (r"\be-?mail\b", "email"),
    (r"\bcover letter\b", "cover letter"),
    (r"\bnewsletter\b", "newsletter"),
    (r"\bletter\b", "letter"),
    (r"\bsummar(?:y|ise|ize)\b", "summary"),
    (r"\b(?:guide|tutorial)\b", "guide"),
    (r"\boutline\b", "outline"),
    (r"\b(?:presentation|slides?|slide deck)\b", "presentation"),
    (r"\b(?:code|function|script|program)\b", "code"),
    (r"\bstory\b", "story"),
    (r"\bpoem\b", "poem"),
    (r"\bproposal\b", "proposal"),
    (r"\b(?:list|bullet points)\b", "list"),
]

_AUDIENCE_PHRASE = re.compile(
    r"\bfor\s+(?:an?\s+|the\s+|my\s+|our\s+)?"
    r"((?:[a-z][\w\-]*\s+){0,3}?"
    r"(?:audiences?|readers|beginners|novices|students|developers|engineers|programmers|"
    r"executives|managers|leaders|professionals|marketers|kids|children|teens|teenagers|"
    r"parents|teachers|customers|clients|investors|employees|stakeholders|experts|"
    r"researchers|scientists|users|team))\b",
    re.IGNORECASE,
)

_AUDIENCE_KEYWORDS: list[tuple[str, str]] = [
    (r"\b(?:professional|business|corporate|executives?)\b", "professional audience"),
    (r"\b(?:students?|academic)\b", "students"),
    (r"\b(?:beginners?|novices?|newbies?)\b", "beginners"),
    (r"\b(?:experts?|technical)\b", "technical audience"),
    (r"\b(?:kids|children)\b", "children"),
    (r"\b(?:general|everyone|public)\b", "general readers"),
]

_TONE_PHRASE = re.compile(
    r"\b(?:in|with|using)\s+(?:an?\s+)?([a-z]+(?:\s+and\s+[a-z]+)?)\s+(?:tone|voice)\b",
    re.IGNORECASE,
)

_TONE_KEYWORDS: list[tuple[str, str]] = [
    (r"\bnot\s+boring\b|\bengaging\b|\binteresting\b|\bcaptivating\b", "clear, engaging"),
    (r"\b(?:funny|humorous|witty)\b", "humorous"),
    (r"\bformal\b", "formal and professional"),
    (r"\bprofessional\b", "professional and clear"),
    (r"\b(?:casual|friendly|conversational)\b", "friendly and accessible"),
    (r"\btechnical\b", "technical and precise"),
    (r"\bpersuasive\b", "persuasive"),
    (r"\bcreative\b", "creative and engaging"),
    (r"\bsimple terms\b|\bplain (?:english|language)\b|\bsimple\b", "simple and accessible"),
    (r"\bempathetic\b", "empathetic"),
]

_STYLE_WORDS = re.compile(
    r"\b(engaging|professional|casual|formal|academic|conversational|humorous|persuasive)\b",
    re.IGNORECASE,
)
_WORD_COUNT = re.compile(r"\b(\d{1,6})\s*-?\s*words?\b", re.IGNORECASE)
_SHORT = re.compile(r"\b(?:short|brief|concise|quick)\b", re.IGNORECASE)
_LONG = re.compile(r"\b(?:long|detailed|in-depth|comprehensive|thorough)\b", re.IGNORECASE)
_SCOPE = re.compile(
    r"\b(?:focus(?:ing|ed)?\s+on|limited\s+to|only\s+cover(?:ing)?|covering)\s+([^.;!?\n,]+)",
    re.IGNORECASE,
)

_ROLE_NOUNS = (
    r"(?:expert|specialist|professional|developer|writer|analyst|rep|representative|"
    r"manager|director|engineer|consultant|teacher|tutor|coach|marketer|strategist|"
    r"editor|copywriter|scientist|researcher|designer|assistant|advisor|adviser|"
    r"lawyer|doctor|journalist|officer|lead|architect|planner|owner)s?"
)
_ROLE_TAIL = r"(?=\s+(?:and|to|who|that|for|with|in|at|i|we)\b|[,.;:!?\n]|$)"
_ROLE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(
        r"\b(?:it'?s|it\s+is)\s+my\s+(?:job|responsibility|role|duty)\s+as\s+"
        r"((?:an?|the)\s+[\w\-]+(?:\s+[\w\-]+){0,4}?)\s+to\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(?:act|acting|pretend|pretending)\s+(?:as|to\s+be|like)\s+"
        r"((?:an?\s+|the\s+)?[\w\-]+(?:\s+[\w\-]+){0,4}?)" + _ROLE_TAIL,
        re.IGNORECASE,
    ),
    re.compile(
        r"\byou\s+are\s+((?:an?|the)\s+[\w\-]+(?:\s+[\w\-]+){0,4}?)" + _ROLE_TAIL,
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(?:role\s*:\s*|as\s+|i\s+am\s+|i'm\s+)"
        r"((?:an?\s+|the\s+)(?:[\w\-]+\s+){0,3}?" + _ROLE_NOUNS + r")\b",
        re.IGNORECASE,
    ),
]

_EXAMPLES = re.compile(
    r"(?:\bfor example|\bfor instance|\be\.g\.|\bsuch as|\bexample:)\s*,?\s*([^.!?\n]{3,200})",
    re.IGNORECASE,
)
_CONTEXT = re.compile(
    r"(?:\bcontext:|\bbackground:|\bgiven that|\bconsidering)\s*([^.!?\n]{3,300})",
    re.IGNORECASE,
)
_QUOTED = re.compile(r"[\"“]([^\"”\n]{2,60})[\"”]")
_ACRONYM = re.compile(r"\b[A-Z][A-Z0-9]{1,9}\b")
_PROPER_NAME = re.compile(r"\b[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)+\b")


def _first_keyword(text: str, table: list[tuple[str, str]]) -> str | None:
    for pattern, value in table:
        if re.search(pattern, text, re.IGNORECASE):
            return value
    return None


def extract_format(text: str) -> str | None:
    return _first_keyword(text, _FORMAT_KEYWORDS)


def extract_audience(text: str) -> str | None:
    match = _AUDIENCE_PHRASE.search(text)
    if match:
        return match.group(1).strip().lower()
    return _first_keyword(text, _AUDIENCE_KEYWORDS)


def extract_tone(text: str) -> str | None:
    match = _TONE_PHRASE.search(text)
    if match:
        return match.group(1).lower()
    return _first_keyword(text, _TONE_KEYWORDS)


def extract_constraints(text: str) -> IntentConstraints | None:
    """Word count, qualitative length, style and scope limits."""
    constraints = IntentConstraints()

    count = _WORD_COUNT.search(text)
    if count:
        constraints.word_count = int(count.group(1))
    elif _SHORT.search(text):
        constraints.length = SHORT_LENGTH
    elif _LONG.search(text):
        constraints.length = LONG_LENGTH

    style = _STYLE_WORDS.search(text)
    if style:
        constraints.style = style.group(1).lower()

    scope = _SCOPE.search(text)
    if scope:
        constraints.scope = scope.group(1).strip()

    return None if constraints.is_empty() else constraints


def extract_role(text: str) -> str | None:
    for pattern in _ROLE_PATTERNS:
        match = pattern.search(text)
        if match:
            role = match.group(1).strip(" ,.")
            if len(role) >= 3:
                return role
    return None


def extract_examples(text: str) -> list[str]:
    examples: list[str] = []
    for match in _EXAMPLES.finditer(text):
        example = match.group(1).strip(" ,;:")
        if len(example) > 3 and example not in examples:
            examples.append(example)
    return examples


def extract_context(text: str) -> str | None:
    match = _CONTEXT.search(text)
    return match.group(1).strip(" ,;:") if match else None


def extract_key_terms(text: str) -> list[str]:
    """Quoted phrases, acronyms and capitalised multi-word names."""
    found: list[tuple[int, str]] = []
    for match in _QUOTED.finditer(text):
        found.append((match.start(), match.group(1).strip()))
    for match in _ACRONYM.finditer(text):
        found.append((match.start(), match.group(0)))
    for match in _PROPER_NAME.finditer(text):
        words = match.group(0).split()
        while words and words[0].lower() in (STOPWORDS | ACTION_VERBS | POLITENESS | {"you"}):
            words.pop(0)
        if len(words) >= 2:
            found.append((match.start(), " ".join(words)))

    terms: list[str] = []
    seen: set[str] = set()
    for _, term in sorted(found, key=lambda item: item[0]):
        key = term.lower()
        if key in seen:
            continue
        if any(key in other.lower() for other in terms):
            continue
        seen.add(key)
        terms.append(term)
    return terms[:MAX_KEY_TERMS]


def _attributes(text: str) -> dict:
    return {
        "format": extract_format(text),
        "audience": extract_audience(text),
        "tone": extract_tone(text),
        "constraints": extract_constraints(text),
        "role": extract_role(text),
        "context": extract_context(text),
        "examples": extract_examples(text),
        "key_terms": extract_key_terms(text),
    }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def _confidence(action_rule: str | None, topic: str, attrs: dict) -> float:
    score = 0.3
    if action_rule:
        score += 0.3
    if topic and topic != UNRESOLVED_TOPIC:
        score += 0.3
    if attrs["format"] or attrs["audience"] or attrs["tone"]:
        score += 0.1
    return round(score, 2)


def _short_input(words: list[str]) -> tuple[str, str, str]:
    """Resolve one- and two-word input into (action, topic, rule)."""
    first = _bare(words[0])
    if len(words) == 1:
        if first.lower() in ACTION_VERBS:
            return first.lower(), "", "single_verb"
        return DEFAULT_ACTION, first, "single_topic"

    second = _bare(words[1])
    if first.lower() in ACTION_VERBS:
        return first.lower(), clean_topic(second) or second, "two_words_verb"
    return DEFAULT_ACTION, f"{first} {second}".strip(), "two_words_topic"


def extract_with_trace(text: str) -> ExtractionResult:
    """Extract an intent and report which rules produced action and topic."""
    stripped = (text or "").strip()
    if not stripped:
        return ExtractionResult(
            intent=ParsedIntent(action=DEFAULT_ACTION, topic=""),
            confidence=0.0,
            trace={"edge_case": "empty"},
        )

    trace: dict[str, str] = {}
    words = stripped.split()
    if len(words) > MAX_WORDS:
        stripped = " ".join(words[:TRUNCATED_WORDS])
        trace["truncated"] = f"{len(words)}->{TRUNCATED_WORDS}"
        logger.info("long_input_truncated", words=len(words), kept=TRUNCATED_WORDS)

    core = _strip_politeness(stripped) or stripped
    core_words = core.split()
    attrs = _attributes(stripped)

    if len(core_words) <= 2:
        action, topic, rule = _short_input(core_words)
        trace["edge_case"] = rule
        intent = ParsedIntent(action=action, topic=topic, **attrs)
        return ExtractionResult(
            intent=intent,
            confidence=_confidence(rule if rule.endswith("verb") else None, topic, attrs),
            trace=trace,
        )

    question = is_question(core)
    action_rules = QUESTION_ACTION_RULES if question else STATEMENT_ACTION_RULES
    topic_rules = QUESTION_TOPIC_RULES if question else STATEMENT_TOPIC_RULES
    trace["form"] = "question" if question else "statement"

    action_match = apply_rules(action_rules, RuleContext(core, is_question=question))
    action = action_match.value if action_match else DEFAULT_ACTION
    trace["action_rule"] = action_match.rule if action_match else "default"

    topic_ctx = RuleContext(core, is_question=question, action=action if action_match else None)
    topic_match = apply_rules(topic_rules, topic_ctx)
    topic = topic_match.value if topic_match else UNRESOLVED_TOPIC
    trace["topic_rule"] = topic_match.rule if topic_match else "default"

    intent = ParsedIntent(action=action, topic=topic, **attrs)
    confidence = _confidence(action_match.rule if action_match else None, topic, attrs)
    logger.debug("intent_extracted", action=action, topic=topic, **trace)
    return ExtractionResult(intent=intent, confidence=confidence, trace=trace)


def extract_intent(text: str) -> ParsedIntent:
    """Extract a :class:`ParsedIntent` from *text*.  Never raises."""
    return extract_with_trace(text).intent
