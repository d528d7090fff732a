"""Prompt optimizer: the end-to-end pipeline.

:class:`PromptOptimizer` ties together normalization, structured parsing,
rule-based extraction, the optional semantic enhancer, the template engine
and the ranking orchestrator behind three entry points: ``analyze``,
``apply`` and ``rank``.  None of them raises for bad input: empty prompts
and bare templates come back as sentinel results, and collaborator failures
degrade to rule-based output.
"""

from __future__ import annotations

import re

from src.core.frameworks.models import FrameworkOutput, RankingEntry
from src.core.frameworks.ranking import RankingOrchestrator
from src.core.frameworks.registry import FrameworkDefinition, get_framework, list_frameworks
from src.core.frameworks.templates import render
from src.core.intent.enhancer import SemanticEnhancer
from src.core.intent.extractor import (
    LONG_LENGTH,
    SHORT_LENGTH,
    ExtractionResult,
    clean_topic,
    extract_with_trace,
)
from src.core.intent.models import (
    AnalysisResult,
    EnhancedIntent,
    IntentConstraints,
    ParsedIntent,
    StructuredPrompt,
)
from src.core.intent.normalizer import normalize
from src.core.intent.structured_parser import (
    convert_to_natural,
    detect_preferred_frameworks,
    parse_structured,
)
from src.core.intent.vocabulary import ACTION_VERBS
from src.core.semantic.base import SemanticService
from src.utils.logging import get_logger

logger = get_logger("optimizer")

EMPTY_PROMPT_MESSAGE = "Please provide a prompt to optimize."
NEEDS_DETAIL_MESSAGE = "Please provide more details about what you want to create."

STRUCTURED_CONFIDENCE = 0.9


def _length_constraints(length: str | None, base: IntentConstraints | None) -> IntentConstraints | None:
    """Map a structured ``Length:`` value onto constraints."""
    constraints = base.model_copy() if base else IntentConstraints()
    if length:
        count = re.search(r"(\d+)", length)
        lowered = length.lower()
        if count:
            constraints.word_count = int(count.group(1))
            constraints.length = None
        elif re.search(r"\b(?:short|brief|concise)\b", lowered):
            constraints.length = SHORT_LENGTH
        elif re.search(r"\b(?:long|detailed|in-depth)\b", lowered):
            constraints.length = LONG_LENGTH
        else:
            constraints.length = length
    return None if constraints.is_empty() else constraints


def intent_from_structured(structured: StructuredPrompt) -> ExtractionResult:
    """Build an intent from structured fields.

    Explicit fields are taken verbatim; the rule-based extractor runs over the
    reconstructed sentence only to fill what the fields leave open.
    """
    natural = convert_to_natural(structured)
    base = extract_with_trace(natural)
    intent = base.intent

    action = intent.action
    remainder = ""
    action_words = (structured.action or "").split()
    if action_words and action_words[0].lower() in ACTION_VERBS:
        action = action_words[0].lower()
        remainder = " ".join(action_words[1:])

    constraints = _length_constraints(structured.length, intent.constraints)
    if structured.constraints:
        constraints = constraints or IntentConstraints()
        constraints.scope = structured.constraints

    updates = {
        "action": action,
        "topic": structured.topic or clean_topic(remainder) or intent.topic,
        "role": structured.role,
        "audience": structured.audience or intent.audience,
        "format": structured.format or intent.format,
        "tone": structured.tone or intent.tone,
        "context": structured.context or intent.context,
        "constraints": constraints,
    }
    trace = {**base.trace, "source": "structured"}
    return ExtractionResult(
        intent=intent.model_copy(update=updates),
        confidence=STRUCTURED_CONFIDENCE,
        trace=trace,
    )


def _sentinel(original: str, structured: StructuredPrompt) -> AnalysisResult | None:
    """Return the sentinel result for input that cannot be optimized."""
    if not original.strip():
        return AnalysisResult(
            status="empty",
            message=EMPTY_PROMPT_MESSAGE,
            original=original,
            intent=ParsedIntent(topic=""),
        )
    if structured.is_template_only:
        logger.info("template_only_prompt")
        return AnalysisResult(
            status="needs_more_detail",
            message=NEEDS_DETAIL_MESSAGE,
            original=original,
            structured=structured,
            intent=ParsedIntent(topic=""),
        )
    return None


class PromptOptimizer:
    """Analyze prompts, render frameworks and rank them.

    Parameters
    ----------
    semantic_service:
        Optional :class:`~src.core.semantic.base.SemanticService`.  Every
        component falls back to rule-based behaviour when it is ``None``,
        slow or failing.
    init_timeout, query_timeout:
        Budgets for service initialisation and single queries.
    confidence_threshold:
        Minimum (exclusive) classification score the enhancer accepts.
    framework_timeout, overall_timeout:
        Per-framework and overall ranking budgets.
    """

    def __init__(
        self,
        semantic_service: SemanticService | None = None,
        init_timeout: float = 2.0,
        query_timeout: float = 1.0,
        confidence_threshold: float = 0.6,
        framework_timeout: float = 1.0,
        overall_timeout: float = 8.0,
    ):
        self.enhancer = SemanticEnhancer(
            semantic_service,
            init_timeout=init_timeout,
            query_timeout=query_timeout,
            confidence_threshold=confidence_threshold,
        )
        self.orchestrator = RankingOrchestrator(
            semantic_service,
            init_timeout=init_timeout,
            query_timeout=query_timeout,
            framework_timeout=framework_timeout,
            overall_timeout=overall_timeout,
        )

    @staticmethod
    def list_frameworks() -> list[FrameworkDefinition]:
        return list_frameworks()

    async def analyze(self, text: str) -> AnalysisResult:
        """Run the analysis pipeline on *text*.

        Steps:
        1. Empty input short-circuits with the empty-prompt sentinel.
        2. A bare ``Label:`` scaffold short-circuits with the needs-detail
           sentinel.
        3. Normalize typos and whitespace.
        4. Read structured fields verbatim, or extract the intent with rules
           and try the semantic enhancer.
        """
        return await self._analyze(text, semantic_ready=None)

    async def apply(self, text: str, framework_id: str) -> FrameworkOutput:
        """Render *text* with one framework.

        Raises :class:`~src.utils.exceptions.FrameworkNotFoundError` for an
        unknown framework id.
        """
        definition = get_framework(framework_id)
        analysis = await self.analyze(text)

        if not analysis.is_actionable:
            return FrameworkOutput(
                framework=definition.id,
                name=definition.name,
                description=definition.description,
                optimized=analysis.message or EMPTY_PROMPT_MESSAGE,
                use_case=definition.use_case,
            )

        output = render(definition.id, analysis.intent)
        logger.info("framework_applied", framework=definition.id, chars=len(output.optimized))
        return output

    async def rank(self, text: str) -> list[RankingEntry]:
        """Rank every framework for *text*.  Always returns one entry each."""
        original = text or ""
        try:
            sentinel = _sentinel(original, parse_structured(original))
            if sentinel is not None:
                return self.orchestrator.keyword_only(original, placeholder=sentinel.message)

            ready = await self.enhancer.ensure_ready()
            analysis = await self._analyze(original, semantic_ready=ready)
            return await self.orchestrator.rank(
                analysis.corrected,
                analysis.intent,
                analysis.structured,
                semantic_ready=ready,
            )
        except Exception as exc:
            logger.warning("rank_failed_falling_back", error=str(exc))
            return self.orchestrator.keyword_only(original)

    # ----- internals -------------------------------------------------------

    async def _analyze(self, text: str, semantic_ready: bool | None) -> AnalysisResult:
        original = text or ""

        # 1-2. Empty input or a template-only scaffold.
        structured = parse_structured(original)
        sentinel = _sentinel(original, structured)
        if sentinel is not None:
            return sentinel

        # 3. Normalize.
        normalized = normalize(original)

        # 4. Extract.
        if structured.is_structured:
            extraction = intent_from_structured(structured)
            enhanced = EnhancedIntent(
                intent=extraction.intent, confidence=extraction.confidence
            )
        else:
            extraction = extract_with_trace(normalized.corrected)
            enhanced = await self.enhancer.try_enhance(
                normalized.corrected,
                extraction.intent,
                structured=structured,
                rule_confidence=extraction.confidence,
                semantic_ready=semantic_ready,
            )

        logger.info(
            "prompt_analyzed",
            structured=structured.is_structured,
            action=enhanced.intent.action,
            topic=enhanced.intent.topic,
            corrections=len(normalized.corrections),
            enhanced=enhanced.enhanced,
        )

        return AnalysisResult(
            status="ok",
            original=original,
            corrected=normalized.corrected,
            corrections=normalized.corrections,
            structured=structured,
            intent=enhanced.intent,
            confidence=enhanced.confidence,
            category=enhanced.category,
            semantic_enhanced=enhanced.enhanced,
            preferred_frameworks=detect_preferred_frameworks(structured),
        )
