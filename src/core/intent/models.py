"""Data models shared by the intent pipeline.

Pydantic models here cross the API boundary; lightweight internal records
(rule matches, semantic results) are plain dataclasses in their own modules.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

UNRESOLVED_TOPIC = "the specified topic"
DEFAULT_ACTION = "write"


class IntentConstraints(BaseModel):
    """Limits the user placed on the requested output."""

    word_count: int | None = None
    length: str | None = None  # canonical phrase, e.g. "short (around 600 words)"
    style: str | None = None
    scope: str | None = None

    def is_empty(self) -> bool:
        return not any((self.word_count, self.length, self.style, self.scope))


class ParsedIntent(BaseModel):
    """Structured description of what a request asks for.

    ``action`` is never empty.  ``topic`` is the unresolved sentinel when no
    subject could be found and the empty string only for empty input or a
    lone action verb.  Every other field is ``None`` (or an empty list) when
    it was not detected.
    """

    action: str = DEFAULT_ACTION
    topic: str = UNRESOLVED_TOPIC
    format: str | None = None
    audience: str | None = None
    tone: str | None = None
    role: str | None = None
    context: str | None = None
    constraints: IntentConstraints | None = None
    examples: list[str] = Field(default_factory=list)
    key_terms: list[str] = Field(default_factory=list)


class StructuredPrompt(BaseModel):
    """Fields read from ``Label: value`` lines."""

    role: str | None = None
    action: str | None = None
    topic: str | None = None
    audience: str | None = None
    format: str | None = None
    tone: str | None = None
    length: str | None = None
    constraints: str | None = None
    context: str | None = None
    is_structured: bool = False
    is_template_only: bool = False

    def filled_fields(self) -> dict[str, str]:
        """Return the populated label/value pairs in declaration order."""
        data = self.model_dump(exclude={"is_structured", "is_template_only"})
        return {key: value for key, value in data.items() if value}


class EnhancedIntent(BaseModel):
    """A :class:`ParsedIntent` after the optional semantic pass."""

    intent: ParsedIntent
    confidence: float = 0.5
    category: str | None = None
    enhanced: bool = False


class Correction(BaseModel):
    original: str
    corrected: str
    position: int


class AnalysisResult(BaseModel):
    """Result of running the full analysis pipeline on one prompt.

    * ``status="ok"`` -- ``intent`` is usable for rendering.
    * ``status="empty"`` / ``"needs_more_detail"`` -- ``message`` holds the
      sentinel shown to the user instead of a rendered template.
    """

    status: str = "ok"  # "ok" | "empty" | "needs_more_detail"
    message: str | None = None
    original: str = ""
    corrected: str = ""
    corrections: list[Correction] = Field(default_factory=list)
    structured: StructuredPrompt = Field(default_factory=StructuredPrompt)
    intent: ParsedIntent = Field(default_factory=ParsedIntent)
    confidence: float = 0.0
    category: str | None = None
    semantic_enhanced: bool = False
    preferred_frameworks: list[str] = Field(default_factory=list)

    @property
    def is_actionable(self) -> bool:
        return self.status == "ok"
