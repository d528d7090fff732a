"""Noun phrase extraction for the topic fallback.

Uses spaCy's dependency-based ``noun_chunks`` when the ``en_core_web_sm``
model is installed.  Without the model a word-list heuristic finds runs of
content words instead.  Either way the result is a list of phrases in order
of appearance, stripped of determiners, pronouns and generic request words.
"""

from __future__ import annotations

import re

from src.core.intent.vocabulary import (
    ACTION_VERBS,
    AUXILIARIES,
    FILLER_VERBS,
    FORMAT_WORDS,
    INTERROGATIVES,
    LENGTH_WORDS,
    POLITENESS,
    STOPWORDS,
    SUBJECT_WORDS,
    TIME_WORDS,
)
from src.utils.logging import get_logger

logger = get_logger("intent.noun_phrases")

SPACY_MODEL = "en_core_web_sm"

_NOUN_TAGS = frozenset({"NOUN", "PROPN"})
_DROPPED_TAGS = frozenset({"DET", "PRON", "PUNCT", "CCONJ", "ADP"})
_TEMPORAL_ENTITIES = frozenset({"DATE", "TIME"})

NOISE_WORDS = (
    STOPWORDS | ACTION_VERBS | FORMAT_WORDS | AUXILIARIES | INTERROGATIVES
    | SUBJECT_WORDS | POLITENESS | FILLER_VERBS | LENGTH_WORDS | TIME_WORDS
    | {"boring", "make", "please", "thanks", "want", "need", "like"}
)

# Finite verbs that commonly follow a subject in free-form complaints.
_COMMON_VERBS = frozenset({
    "keeps", "keep", "kept", "seems", "seem", "seemed", "gets", "got", "goes",
    "went", "wants", "needs", "tries", "tried", "has", "had", "does", "did",
    "says", "said", "makes", "made", "takes", "took", "looks", "looked",
    "feels", "felt", "becomes", "became", "starts", "started", "stops",
    "stopped",
})

_nlp = None
_nlp_failed = False


def get_nlp():
    """Lazy load the spaCy pipeline.  Returns ``None`` if the model is missing."""
    global _nlp, _nlp_failed

    if _nlp_failed:
        return None

    if _nlp is None:
        import spacy

        try:
            _nlp = spacy.load(SPACY_MODEL)
        except OSError as exc:
            logger.warning(
                "spacy_model_unavailable",
                model=SPACY_MODEL,
                error=str(exc),
                hint=f"python -m spacy download {SPACY_MODEL}",
            )
            _nlp_failed = True
            return None
        logger.info("spacy_model_loaded", model=SPACY_MODEL)

    return _nlp


def noun_phrases(text: str) -> list[str]:
    """Return the noun phrases of *text*, in order of appearance."""
    if not text or not text.strip():
        return []
    nlp = get_nlp()
    if nlp is None:
        return significant_phrases(text)
    return chunk_phrases(nlp(text))


def chunk_phrases(doc) -> list[str]:
    """Noun chunks headed by a noun or proper noun, minus function words.

    Chunks that are dates or times ("last month") are skipped.
    """
    phrases: list[str] = []
    for chunk in doc.noun_chunks:
        root = chunk.root
        if root.pos_ not in _NOUN_TAGS or root.ent_type_ in _TEMPORAL_ENTITIES:
            continue
        words = [token.text for token in chunk if _is_content_token(token)]
        if words:
            phrases.append(" ".join(words))
    return phrases


def _is_content_token(token) -> bool:
    if token.pos_ in _DROPPED_TAGS or token.is_stop:
        return False
    word = token.text.lower()
    return len(word) > 1 and word not in NOISE_WORDS


def significant_phrases(text: str) -> list[str]:
    """Return runs of consecutive content words, in order of appearance.

    Used when no spaCy model is installed.  Generic action, format, filler
    and time words break a run, and so do words that look like the
    predicate of a sentence: a common finite verb, an ``-ing`` word right
    after one, an ``-ed`` word following the run's head noun, and an
    ``-ly`` adverb that does not modify the next word.
    """
    tokens = re.findall(r"[A-Za-z][\w\-']*|[^\sA-Za-z]+", text)
    content = [
        token[0].isalpha() and len(token) > 2 and token.lower() not in NOISE_WORDS
        for token in tokens
    ]

    phrases: list[list[str]] = []
    current: list[str] = []
    after_verb = False
    for i, token in enumerate(tokens):
        word = token.lower()
        next_is_noun = (
            i + 1 < len(tokens)
            and content[i + 1]
            and not tokens[i + 1].lower().endswith(("ly", "ed"))
        )
        predicate = (
            word in _COMMON_VERBS
            or (after_verb and word.endswith("ing"))
            or (word.endswith("ed") and current and not next_is_noun)
            or (word.endswith("ly") and not next_is_noun)
        )
        after_verb = word in _COMMON_VERBS
        if content[i] and not predicate:
            current.append(token)
            continue
        if current:
            phrases.append(current)
            current = []
    if current:
        phrases.append(current)
    return [" ".join(p) for p in phrases]
