"""Parser for prompts written as ``Label: value`` lines.

A structured prompt skips free-text extraction: its fields are read
verbatim.  A scaffold with labels but no values ("template-only") is a
separate case that the pipeline answers with a request for more detail.
"""

from __future__ import annotations

import re

from src.core.intent.models import StructuredPrompt
from src.core.intent.vocabulary import TOPIC_PLACEHOLDERS

_FIELD_LINE = re.compile(r"^(\w+):[ \t]*(.+?)[ \t]*$", re.MULTILINE)
_LABEL_ONLY_LINE = re.compile(r"^\s*(\w+):\s*$")

# Label aliases -> StructuredPrompt attribute.
_LABELS: dict[str, str] = {
    "role": "role",
    "action": "action",
    "task": "action",
    "topic": "topic",
    "audience": "audience",
    "format": "format",
    "tone": "tone",
    "length": "length",
    "constraints": "constraints",
    "constraint": "constraints",
    "context": "context",
}


def parse_structured(text: str) -> StructuredPrompt:
    """Read recognised ``Label: value`` lines from *text*.

    Two or more distinct recognised labels make the prompt structured.  When
    a label repeats, the last value wins.
    """
    found: dict[str, str] = {}
    for match in _FIELD_LINE.finditer(text or ""):
        attr = _LABELS.get(match.group(1).lower())
        if attr is None:
            continue
        value = match.group(2).strip()
        if value:
            found[attr] = value

    if len(found) < 2:
        return StructuredPrompt(is_template_only=is_template_only(text))

    return StructuredPrompt(**found, is_structured=True)


def is_template_only(text: str) -> bool:
    """Return ``True`` when every line is a bare ``label:`` with no value."""
    lines = [line for line in (text or "").splitlines() if line.strip()]
    if not lines:
        return False

    labels = []
    for line in lines:
        match = _LABEL_ONLY_LINE.match(line)
        if match is None:
            return False
        labels.append(match.group(1).lower())
    return any(label in _LABELS for label in labels)


def convert_to_natural(structured: StructuredPrompt) -> str:
    """Rebuild a natural-language request from structured fields.

    Absent clauses are skipped, e.g. ``Role: Editor / Topic: AI`` gives
    ``"You are Editor. Write about AI."``.
    """
    parts: list[str] = []

    if structured.role:
        parts.append(f"You are {structured.role}. ")

    if structured.action and structured.topic:
        parts.append(f"{structured.action} {structured.topic}")
    elif structured.action:
        parts.append(structured.action)
    elif structured.topic:
        parts.append(f"Write about {structured.topic}")

    if structured.audience:
        parts.append(f" for {structured.audience}")
    if structured.format:
        parts.append(f" in the format of {structured.format}")
    if structured.tone:
        parts.append(f". Use a {structured.tone} tone")
    if structured.length:
        parts.append(f". Keep it {structured.length}")
    if structured.constraints:
        parts.append(f". {structured.constraints.rstrip('.')}")
    if structured.context:
        parts.append(f". Context: {structured.context.rstrip('.')}")

    sentence = "".join(parts).strip()
    if sentence and not sentence.endswith((".", "!", "?")):
        sentence += "."
    return sentence


def is_specific_topic(topic: str | None) -> bool:
    if not topic:
        return False
    cleaned = topic.strip().lower()
    return len(cleaned) > 2 and cleaned not in TOPIC_PLACEHOLDERS


def detect_preferred_frameworks(structured: StructuredPrompt) -> list[str]:
    """Return the frameworks that best suit the filled field combination.

    The list is ordered by first appearance and free of duplicates; an empty
    list means the prompt is not structured.
    """
    if not structured.is_structured:
        return []

    preferred: list[str] = []
    if structured.role:
        preferred += ["race", "roses", "create"]

    if structured.action and structured.action.strip().lower() != "write":
        preferred += ["ape", "race"]

    if is_specific_topic(structured.topic):
        if structured.format or structured.tone:
            preferred += ["roses", "create"]
        else:
            preferred += ["ape", "race"]

    if len(structured.filled_fields()) >= 4:
        preferred += ["create", "roses"]

    return list(dict.fromkeys(preferred))


def strongly_prefers_roses(structured: StructuredPrompt) -> bool:
    """Role plus format or tone is the layout ROSES was written for."""
    return bool(
        structured.is_structured
        and structured.role
        and (structured.format or structured.tone)
    )
