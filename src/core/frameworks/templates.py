"""Template engine: one pure renderer per framework.

Every renderer takes a :class:`ParsedIntent` and returns plain text made of
labelled sections separated by blank lines.  Shared rules:

* a role is prefixed with "You are" exactly once;
* "about X about X" and a doubled leading verb are collapsed;
* a framework that needs an example gets a synthesized one when the intent
  has none;
* optional sections (constraints, context, expected output) are left out when
  the intent has nothing for them;
* key terms that did not make it into the text are listed at the end.

Output depends only on the intent.
"""

from __future__ import annotations

import re
from typing import Callable

from src.core.frameworks.models import FrameworkOutput
from src.core.frameworks.registry import get_framework
from src.core.intent.models import DEFAULT_ACTION, UNRESOLVED_TOPIC, ParsedIntent
from src.core.intent.vocabulary import FORMAT_WORDS

_CONTENT_VERBS = frozenset({
    "write", "create", "draft", "compose", "prepare", "produce", "generate", "make",
})
_ABOUT_VERBS = frozenset({"write", "talk", "think", "blog", "read", "learn"})

_CONTENT_TASK = re.compile(
    r"\b(?:write|article|blog|post|essay|story|content|copy|newsletter|poem|email|"
    r"letter|draft|compose|script|caption)\b",
    re.IGNORECASE,
)

_LEADING_YOU_ARE = re.compile(r"^\s*(?:you\s+are\s+)+", re.IGNORECASE)
_REPEATED_ABOUT = re.compile(r"\babout\s+(.+?)\s+about\s+\1\b", re.IGNORECASE)
_DOUBLED_VERB = re.compile(r"^(\w+)(?:\s+\1\b)+", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def dedupe(text: str) -> str:
    """Collapse "about X about X" and a repeated leading word.

    Doubled words elsewhere are left alone, so names like "Bora Bora" survive.
    """
    text = _REPEATED_ABOUT.sub(r"about \1", text)
    return _DOUBLED_VERB.sub(r"\1", text)


def role_phrase(role: str | None) -> str | None:
    """Strip any leading "you are" so the caller can add it once."""
    if not role:
        return None
    cleaned = _LEADING_YOU_ARE.sub("", role).strip().rstrip(".")
    return cleaned or None


def you_are(role: str) -> str:
    return f"You are {role_phrase(role) or role}"


def _article(word: str) -> str:
    return "an" if word[:1].lower() in "aeiou" else "a"


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def topic_text(intent: ParsedIntent) -> str:
    return intent.topic.strip() or UNRESOLVED_TOPIC


def task_phrase(intent: ParsedIntent) -> str:
    """Imperative sentence describing the task, e.g. "Write an article about AI"."""
    action = (intent.action or DEFAULT_ACTION).strip().lower()
    verb = _capitalize(action)
    topic = topic_text(intent)
    fmt = intent.format

    first_word = topic.split()[0].lower()
    if first_word in FORMAT_WORDS or (fmt and topic.lower() == fmt.lower()):
        phrase = f"{verb} {_article(topic)} {topic}"
    elif fmt and action in _CONTENT_VERBS and fmt.lower() not in topic.lower():
        phrase = f"{verb} {_article(fmt)} {fmt} about {topic}"
    elif action in _ABOUT_VERBS:
        phrase = f"{verb} about {topic}"
    else:
        phrase = f"{verb} {topic}"
    return dedupe(phrase)


def is_content_task(intent: ParsedIntent) -> bool:
    return bool(_CONTENT_TASK.search(f"{intent.action} {intent.format or ''} {intent.topic}"))


def default_role(intent: ParsedIntent) -> str:
    text = f"{intent.action} {intent.format or ''} {intent.topic}".lower()
    if re.search(r"\b(?:report|analy[sz]e|analysis|data|metrics)\b", text):
        return "an experienced analyst"
    if re.search(r"\b(?:code|function|script|program|debug|refactor)\b", text):
        return "an experienced software developer"
    if re.search(r"\b(?:email|letter|proposal|memo)\b", text):
        return "a professional communications specialist"
    if re.search(r"\b(?:guide|explain|teach|tutorial|how to)\b", text):
        return "an expert educator"
    if is_content_task(intent):
        return "an expert content writer"
    return "a subject-matter expert"


def synthesize_example(intent: ParsedIntent) -> str:
    """Build a sample deliverable from a keyword lookup on the task."""
    text = f"{intent.action} {intent.format or ''} {intent.topic}".lower()
    topic = topic_text(intent)
    title = _capitalize(topic)

    if re.search(r"\b(?:email|letter|message|memo)\b", text):
        return (
            f"Subject: {title}. A brief greeting, the key message in two or three "
            "sentences and a clear call to action."
        )
    if re.search(r"\b(?:report|analy[sz]e|analysis|findings|metrics)\b", text):
        return (
            f'"{title} Report" with an executive summary, key findings, '
            "supporting analysis and recommendations."
        )
    if re.search(r"\b(?:code|function|script|program|api|bug)\b", text):
        return (
            f"A well-commented implementation for {topic} with input validation "
            "and a short usage example."
        )
    if re.search(r"\b(?:summary|summari[sz]e|recap|overview)\b", text):
        return f"Five bullet points capturing the main ideas of {topic}, followed by one key takeaway."
    if is_content_task(intent) or re.search(r"\b(?:content|article)\b", text):
        return (
            f'"{title}: What You Need to Know" opens with a hook, covers three key '
            "points with subheadings and closes with a clear takeaway."
        )
    return f"A clear, well-structured response on {topic} with concrete details and a short conclusion."


def constraint_items(intent: ParsedIntent) -> list[str]:
    c = intent.constraints
    if c is None:
        return []
    items = []
    if c.word_count:
        items.append(f"Length: around {c.word_count} words")
    elif c.length:
        items.append(f"Length: {c.length}")
    if c.style:
        items.append(f"Style: {c.style}")
    if c.scope:
        items.append(f"Scope: {c.scope}")
    return items


def _constraints_block(intent: ParsedIntent, label: str = "Constraints") -> str | None:
    items = constraint_items(intent)
    if not items:
        return None
    return f"{label}:\n" + "\n".join(f"- {item}" for item in items)


def deliverable(intent: ParsedIntent) -> str:
    """Describe the expected output from format, audience, tone and length."""
    fmt = intent.format or "response"
    text = f"A well-structured {fmt}"
    if intent.audience:
        text += f" for {intent.audience}"
    if intent.tone:
        text += f", written in a {intent.tone} tone"
    c = intent.constraints
    if c and c.word_count:
        text += f", around {c.word_count} words"
    elif c and c.length:
        text += f", {c.length}"
    return text + "."


def _section(label: str, value: str | None) -> str | None:
    return f"{label}: {value}" if value else None


def _role_preamble(intent: ParsedIntent) -> str | None:
    return f"{you_are(intent.role)}." if role_phrase(intent.role) else None


def _finish(blocks: list[str | None], intent: ParsedIntent) -> str:
    text = dedupe("\n\n".join(block for block in blocks if block))
    lowered = text.lower()
    missing = [term for term in intent.key_terms if term.lower() not in lowered]
    if missing:
        text += "\n\nKey Terms: " + ", ".join(missing)
    return text


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def render_cot(intent: ParsedIntent) -> str:
    topic = topic_text(intent)
    steps = "\n".join([
        "Let's think through this step by step (Chain of Thought):",
        f"1. Understand the request and identify what is being asked about {topic}.",
        "2. Break the problem into smaller parts.",
        "3. Work through each part, explaining the reasoning.",
        "4. Combine the partial results into a complete answer.",
        "5. Review the answer for accuracy and completeness.",
    ])
    return _finish([
        _role_preamble(intent),
        _section("Task", task_phrase(intent)),
        _section("Context", intent.context),
        _section("Audience", intent.audience),
        steps,
        _constraints_block(intent),
        _section("Expected Output", deliverable(intent) if intent.format else None),
    ], intent)


def render_tot(intent: ParsedIntent) -> str:
    topic = topic_text(intent)
    if is_content_task(intent):
        approaches = [
            f"Approach 1 (Narrative): Tell the story of {topic} through a relatable scenario or example.",
            f"Approach 2 (Structured): Organize {topic} into clear sections with headings and key points.",
            f"Approach 3 (Data-driven): Build the piece around facts, figures and evidence about {topic}.",
        ]
    else:
        approaches = [
            f"Approach 1 (Analytical): Break {topic} into components and reason through each logically.",
            f"Approach 2 (Creative): Look for unconventional angles or analogies that reframe {topic}.",
            f"Approach 3 (Systematic): Work through {topic} step by step, checking each stage.",
        ]
    audience = intent.audience or "the intended audience"
    evaluation = "\n".join([
        "Evaluate each approach:",
        "- How well does it achieve the goal?",
        "- What are its strengths and weaknesses?",
        f"- How suitable is it for {audience}?",
    ])
    final = (
        "Select the strongest approach, or combine the best elements of several, "
        f"and produce the final {intent.format or 'answer'}."
    )
    return _finish([
        _role_preamble(intent),
        _section("Problem", task_phrase(intent)),
        _section("Context", intent.context),
        "Explore three approaches:\n" + "\n".join(approaches),
        evaluation,
        final,
        _constraints_block(intent),
    ], intent)


def _purpose(intent: ParsedIntent) -> str:
    topic = topic_text(intent)
    if intent.context:
        return intent.context
    if intent.audience:
        return f"To give {intent.audience} a clear, useful understanding of {topic}"
    if is_content_task(intent):
        return f"To inform and engage readers about {topic}"
    return f"To deliver an accurate, practical result on {topic}"


def render_ape(intent: ParsedIntent) -> str:
    return _finish([
        _role_preamble(intent),
        _section("Action", task_phrase(intent)),
        _section("Purpose", _purpose(intent)),
        _section("Expectation", deliverable(intent)),
        _constraints_block(intent, "Additional Requirements"),
    ], intent)


def render_race(intent: ParsedIntent) -> str:
    topic = topic_text(intent)
    context = intent.context
    if not context and intent.audience:
        context = f"The output is intended for {intent.audience}."
    if not context:
        context = f"The request concerns {topic}."
    return _finish([
        _section("Role", you_are(intent.role or default_role(intent))),
        _section("Action", task_phrase(intent)),
        _section("Context", context),
        _section("Expectation", deliverable(intent)),
        _constraints_block(intent),
    ], intent)


def render_roses(intent: ParsedIntent) -> str:
    topic = topic_text(intent)
    c = intent.constraints
    style = intent.tone or (c.style if c else None) or "Clear and engaging"
    if intent.audience:
        style += f", written for {intent.audience}"

    scope_parts = [c.scope if c and c.scope else f"Cover the essential aspects of {topic}"]
    if c and c.word_count:
        scope_parts.append(f"around {c.word_count} words")
    elif c and c.length:
        scope_parts.append(c.length)
    if intent.format:
        scope_parts.append(f"delivered as {_article(intent.format)} {intent.format}")

    return _finish([
        _section("Role", you_are(intent.role or default_role(intent))),
        _section("Objective", task_phrase(intent)),
        _section("Style", _capitalize(style)),
        _section("Example", intent.examples[0] if intent.examples else synthesize_example(intent)),
        _section("Scope", "; ".join(scope_parts)),
    ], intent)


def render_guide(intent: ParsedIntent) -> str:
    topic = topic_text(intent)
    instructions = "\n".join([
        "Instructions:",
        f"1. Start with a brief overview of {topic}.",
        "2. Cover the key points in a logical order.",
        "3. Finish with a summary or clear next steps.",
    ])

    details = []
    if intent.tone:
        details.append(f"Use a {intent.tone} tone")
    if intent.format:
        details.append(f"Format it as {_article(intent.format)} {intent.format}")
    if intent.context:
        details.append(f"Context: {intent.context}")
    details += constraint_items(intent)
    if not details:
        details.append("Use clear, accessible language")

    examples = intent.examples or [synthesize_example(intent)]
    return _finish([
        _role_preamble(intent),
        _section("Goal", task_phrase(intent)),
        _section("User", f"For {intent.audience or 'a general audience'}"),
        instructions,
        _section("Details", "; ".join(details)),
        _section("Examples", "; ".join(examples)),
    ], intent)


def render_smart(intent: ParsedIntent) -> str:
    topic = topic_text(intent)
    c = intent.constraints
    if c and c.word_count:
        measurable = f"Around {c.word_count} words, covering every key point."
    elif c and c.length:
        measurable = f"Keep it {c.length} and cover every key point."
    else:
        measurable = "Covers every key point with concrete details."
    specific = f"Address {topic} directly"
    if intent.audience:
        specific += f" for {intent.audience}"

    criteria = "\n".join([
        "SMART criteria:",
        f"- Specific: {specific}.",
        f"- Measurable: {measurable}",
        "- Achievable: Rely on well-established information and realistic recommendations.",
        "- Relevant: Keep every part focused on the goal.",
        f"- Time-bound: Deliver the complete {intent.format or 'response'} in a single pass.",
    ])
    return _finish([
        _role_preamble(intent),
        _section("Goal", task_phrase(intent)),
        criteria,
        _section("Context", intent.context),
        _constraints_block(intent),
    ], intent)


def render_create(intent: ParsedIntent) -> str:
    adjustments = []
    if intent.tone:
        adjustments.append(f"Use a {intent.tone} tone")
    if intent.audience:
        adjustments.append(f"Write for {intent.audience}")
    adjustments += constraint_items(intent)
    if not adjustments:
        adjustments.append("Keep it clear, accurate and well organized")

    extras = []
    if intent.context:
        extras.append(f"Context: {intent.context}")

    return _finish([
        _section("Character", you_are(intent.role or default_role(intent))),
        _section("Request", task_phrase(intent)),
        _section("Examples", "; ".join(intent.examples) if intent.examples else synthesize_example(intent)),
        _section("Adjustments", "; ".join(adjustments)),
        _section("Type of Output", deliverable(intent)),
        _section("Extras", "; ".join(extras) if extras else None),
    ], intent)


RENDERERS: dict[str, Callable[[ParsedIntent], str]] = {
    "cot": render_cot,
    "tot": render_tot,
    "ape": render_ape,
    "race": render_race,
    "roses": render_roses,
    "guide": render_guide,
    "smart": render_smart,
    "create": render_create,
}


def render(framework_id: str, intent: ParsedIntent) -> FrameworkOutput:
    """Render *intent* with one framework.

    Raises :class:`~src.utils.exceptions.FrameworkNotFoundError` for an
    unknown id.
    """
    definition = get_framework(framework_id)
    return FrameworkOutput(
        framework=definition.id,
        name=definition.name,
        description=definition.description,
        optimized=RENDERERS[definition.id](intent),
        use_case=definition.use_case,
    )
