"""Hybrid ranking of the eight frameworks.

For one prompt the orchestrator renders every framework and scores it
concurrently: a keyword score from :mod:`src.core.frameworks.scoring` and a
semantic score from the similarity between the prompt and the framework's
profile text.  Every semantic call runs under its own deadline and the whole
fan-out runs under an overall deadline; when that expires, or every
framework task fails, a keyword-only pass produces the result instead.  The
result always holds one entry per framework.
"""

from __future__ import annotations

import asyncio

import numpy as np

from src.core.frameworks.models import FrameworkOutput, RankingEntry
from src.core.frameworks.registry import FrameworkDefinition, list_frameworks
from src.core.frameworks.scoring import (
    NEUTRAL_SEMANTIC_SCORE,
    PromptSignals,
    combine,
    detect_signals,
    keyword_score,
    structured_boost,
)
from src.core.frameworks.templates import render
from src.core.intent.models import ParsedIntent, StructuredPrompt
from src.core.semantic.base import EmbeddingResult, SemanticService, cosine_similarity
from src.utils.deadline import with_deadline
from src.utils.logging import get_logger

logger = get_logger("frameworks.ranking")


def sort_entries(entries: list[RankingEntry]) -> list[RankingEntry]:
    """Sort by score, highest first; equal scores keep registry order."""
    return sorted(entries, key=lambda entry: -entry.score)


class RankingOrchestrator:
    """Rank all frameworks for a prompt.

    Parameters
    ----------
    service:
        Semantic service, or ``None`` to rank on keywords with a neutral
        semantic score.
    init_timeout:
        Budget for the single initialisation attempt made when the service
        is not ready yet.
    query_timeout:
        Budget for embedding the prompt.
    framework_timeout:
        Budget for each framework's semantic score.
    overall_timeout:
        Budget for the whole concurrent ranking.
    """

    def __init__(
        self,
        service: SemanticService | None = None,
        init_timeout: float = 2.0,
        query_timeout: float = 1.0,
        framework_timeout: float = 1.0,
        overall_timeout: float = 8.0,
    ):
        self.service = service
        self.init_timeout = init_timeout
        self.query_timeout = query_timeout
        self.framework_timeout = framework_timeout
        self.overall_timeout = overall_timeout

    async def rank(
        self,
        prompt: str,
        intent: ParsedIntent,
        structured: StructuredPrompt | None = None,
        semantic_ready: bool | None = None,
    ) -> list[RankingEntry]:
        """Return one :class:`RankingEntry` per framework, best first.

        Parameters
        ----------
        prompt:
            Normalized prompt text used for keyword and semantic scoring.
        intent:
            Intent rendered by each template.
        structured:
            Structured fields, when the prompt was written as ``Label: value``.
        semantic_ready:
            Result of an initialisation attempt the caller already made for
            this request; ``None`` lets the orchestrator make its own.
        """
        signals = detect_signals(prompt)
        entries = await with_deadline(
            self._rank_concurrently(prompt, intent, structured, signals, semantic_ready),
            self.overall_timeout,
            None,
            label="ranking",
        )
        if entries is None:
            logger.warning("ranking_falling_back_to_keywords", reason="deadline_or_failure")
            return self.keyword_only(prompt, structured)

        logger.info(
            "ranking_complete",
            top=entries[0].framework,
            top_score=entries[0].score,
        )
        return entries

    def keyword_only(
        self,
        prompt: str,
        structured: StructuredPrompt | None = None,
        placeholder: str | None = None,
    ) -> list[RankingEntry]:
        """Rank without rendering or semantic calls.

        Each entry's ``optimized`` text is *placeholder*, or the prompt itself.
        """
        signals = detect_signals(prompt)
        entries = [
            self._keyword_entry(definition, prompt, signals, structured, placeholder)
            for definition in list_frameworks()
        ]
        return sort_entries(entries)

    # ----- concurrent path -------------------------------------------------

    async def _rank_concurrently(
        self,
        prompt: str,
        intent: ParsedIntent,
        structured: StructuredPrompt | None,
        signals: PromptSignals,
        semantic_ready: bool | None,
    ) -> list[RankingEntry] | None:
        prompt_vector = await self._prompt_vector(prompt, semantic_ready)
        definitions = list_frameworks()

        results = await asyncio.gather(
            *(
                self._score_framework(definition, intent, prompt_vector, signals, structured)
                for definition in definitions
            ),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if len(failures) == len(results):
            logger.warning("all_framework_tasks_failed", error=str(failures[0]))
            return None

        entries: list[RankingEntry] = []
        for definition, result in zip(definitions, results):
            if isinstance(result, BaseException):
                logger.warning(
                    "framework_task_failed",
                    framework=definition.id,
                    error=str(result),
                )
                entries.append(self._keyword_entry(definition, prompt, signals, structured))
            else:
                entries.append(result)
        return sort_entries(entries)

    async def _prompt_vector(self, prompt: str, semantic_ready: bool | None) -> np.ndarray | None:
        if self.service is None:
            return None

        ready = semantic_ready
        if ready is None:
            ready = self.service.is_ready() or await with_deadline(
                self.service.init(), self.init_timeout, False, label="semantic_init"
            )
        if not ready or not self.service.is_ready():
            return None

        result: EmbeddingResult | None = await with_deadline(
            self.service.embed(prompt), self.query_timeout, None, label="embed_prompt"
        )
        return None if result is None else result.vector

    async def _score_framework(
        self,
        definition: FrameworkDefinition,
        intent: ParsedIntent,
        prompt_vector: np.ndarray | None,
        signals: PromptSignals,
        structured: StructuredPrompt | None,
    ) -> RankingEntry:
        output = render(definition.id, intent)

        semantic = NEUTRAL_SEMANTIC_SCORE
        semantic_known = False
        if prompt_vector is not None:
            profile: EmbeddingResult | None = await with_deadline(
                self.service.embed(definition.profile_text),
                self.framework_timeout,
                None,
                label=f"embed_{definition.id}",
            )
            if profile is not None:
                semantic = round(cosine_similarity(prompt_vector, profile.vector) * 100, 2)
                semantic_known = True

        keyword = keyword_score(definition.id, signals)
        boost = structured_boost(definition.id, structured)
        return RankingEntry(
            framework=definition.id,
            score=combine(definition.id, semantic, keyword, boost),
            output=output,
            semantic_score=semantic if semantic_known else None,
            keyword_score=keyword,
        )

    # ----- keyword-only path -----------------------------------------------

    @staticmethod
    def _keyword_entry(
        definition: FrameworkDefinition,
        prompt: str,
        signals: PromptSignals,
        structured: StructuredPrompt | None,
        placeholder: str | None = None,
    ) -> RankingEntry:
        keyword = keyword_score(definition.id, signals)
        boost = structured_boost(definition.id, structured)
        return RankingEntry(
            framework=definition.id,
            score=combine(definition.id, NEUTRAL_SEMANTIC_SCORE, keyword, boost),
            output=FrameworkOutput(
                framework=definition.id,
                name=definition.name,
                description=definition.description,
                optimized=placeholder if placeholder is not None else prompt,
                use_case=definition.use_case,
            ),
            semantic_score=None,
            keyword_score=keyword,
        )
