"""Optional semantic refinement of rule-based intents.

The enhancer is fail-open: a missing service, a slow or failing call, or a
classification at or below the confidence threshold all return the
rule-based intent unchanged.  It never raises.
"""

from __future__ import annotations

from src.core.intent.models import (
    DEFAULT_ACTION,
    UNRESOLVED_TOPIC,
    EnhancedIntent,
    ParsedIntent,
    StructuredPrompt,
)
from src.core.semantic.base import ClassificationResult, SemanticService
from src.utils.deadline import with_deadline
from src.utils.logging import get_logger

logger = get_logger("intent.enhancer")

INTENT_CATEGORIES: list[str] = [
    "content creation",
    "analysis and reporting",
    "reasoning and problem solving",
    "instruction and tutorial",
    "professional communication",
    "creative writing",
    "data processing",
    "code generation",
]

# category -> (action, format, tone) suggestions used only to fill gaps.
_CATEGORY_HINTS: dict[str, tuple[str | None, str | None, str | None]] = {
    "content creation": ("write", "article", None),
    "analysis and reporting": ("analyze", "report", "professional and clear"),
    "reasoning and problem solving": ("explain", None, None),
    "instruction and tutorial": ("explain", "guide", "simple and accessible"),
    "professional communication": ("write", "email", "professional and clear"),
    "creative writing": ("write", "story", "creative and engaging"),
    "data processing": ("analyze", "table", None),
    "code generation": ("write", "code", "technical and precise"),
}


class SemanticEnhancer:
    """Refine a rule-based intent with a semantic classification.

    Parameters
    ----------
    service:
        The semantic service, or ``None`` when none is configured.
    init_timeout:
        Budget for initialising a service that is not ready yet.
    query_timeout:
        Budget for each classification call.
    confidence_threshold:
        Results with a score at or below this value are ignored.
    """

    def __init__(
        self,
        service: SemanticService | None,
        init_timeout: float = 2.0,
        query_timeout: float = 1.0,
        confidence_threshold: float = 0.6,
    ):
        self.service = service
        self.init_timeout = init_timeout
        self.query_timeout = query_timeout
        self.confidence_threshold = confidence_threshold

    async def ensure_ready(self) -> bool:
        """Initialise the service once, within the init budget."""
        if self.service is None:
            return False
        if self.service.is_ready():
            return True
        ready = await with_deadline(
            self.service.init(), self.init_timeout, False, label="semantic_init"
        )
        return bool(ready) and self.service.is_ready()

    async def try_enhance(
        self,
        text: str,
        rule_result: ParsedIntent,
        structured: StructuredPrompt | None = None,
        rule_confidence: float = 0.5,
        semantic_ready: bool | None = None,
    ) -> EnhancedIntent:
        unchanged = EnhancedIntent(intent=rule_result, confidence=rule_confidence)

        ready = semantic_ready if semantic_ready is not None else await self.ensure_ready()
        if not ready or self.service is None or not self.service.is_ready():
            return unchanged

        result: ClassificationResult | None = await with_deadline(
            self.service.classify(text, INTENT_CATEGORIES),
            self.query_timeout,
            None,
            label="semantic_classify",
        )
        if result is None:
            return unchanged

        if result.score <= self.confidence_threshold:
            logger.debug("semantic_low_confidence", label=result.label, score=result.score)
            return unchanged

        intent = self._apply_category(text, rule_result, result.label, structured)
        logger.info("intent_enhanced", category=result.label, score=round(result.score, 3))
        return EnhancedIntent(
            intent=intent,
            confidence=round(max(rule_confidence, result.score), 3),
            category=result.label,
            enhanced=True,
        )

    @staticmethod
    def _apply_category(
        text: str,
        intent: ParsedIntent,
        category: str,
        structured: StructuredPrompt | None,
    ) -> ParsedIntent:
        """Fill gaps in *intent* from the category hints.

        Only defaulted or missing fields change.  The role is never touched.
        """
        action, fmt, tone = _CATEGORY_HINTS.get(category, (None, None, None))
        updates: dict = {}

        action_defaulted = (
            intent.action == DEFAULT_ACTION and DEFAULT_ACTION not in text.lower()
        )
        if action and action_defaulted and not (structured and structured.action):
            updates["action"] = action
        if fmt and not intent.format:
            updates["format"] = fmt
        if tone and not intent.tone:
            updates["tone"] = tone
        if intent.topic == UNRESOLVED_TOPIC and intent.key_terms:
            updates["topic"] = ", ".join(intent.key_terms[:3])

        return intent.model_copy(update=updates) if updates else intent
