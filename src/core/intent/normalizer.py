"""Dictionary-based text normalizer.

Fixes known typos, text-speak and shorthand with a fixed lookup table and
tidies whitespace.  There is no fuzzy matching: distance-based correction
rewrites valid words ("form" -> "from"), so only exact dictionary hits are
replaced.

Replacements never appear as keys themselves, which keeps :func:`normalize`
idempotent.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from src.core.intent.models import Correction

_CORRECTIONS: dict[str, str] = {
    # Typos
    "teh": "the",
    "adn": "and",
    "od": "of",
    "whihc": "which",
    "yuo": "you",
    "thier": "their",
    "wierd": "weird",
    "recieve": "receive",
    "seperate": "separate",
    "seperation": "separation",
    "occured": "occurred",
    "occurence": "occurrence",
    "definately": "definitely",
    "neccessary": "necessary",
    "accomodate": "accommodate",
    "existance": "existence",
    "occassion": "occasion",
    "acheive": "achieve",
    "excersise": "exercise",
    "priviledge": "privilege",
    "maintainance": "maintenance",
    "persistant": "persistent",
    "wrte": "write",
    "wriet": "write",
    "writng": "writing",
    "contnt": "content",
    "contant": "content",
    "contnet": "content",
    # Text-speak
    "plz": "please",
    "pls": "please",
    "u": "you",
    "ur": "your",
    "thru": "through",
    "thx": "thanks",
    "ty": "thank you",
    "btw": "by the way",
    "fyi": "for your information",
    "asap": "as soon as possible",
    "imo": "in my opinion",
    "tbh": "to be honest",
    "idk": "I don't know",
    "wrt": "with regard to",
    "b4": "before",
    "gud": "good",
    "abt": "about",
    "abut": "about",
    "w/o": "without",
    "w/": "with",
    # Shorthand
    "tech": "technology",
    "ai": "AI",
    "ml": "ML",
    "info": "information",
}

# Longest keys first so "w/o" wins over "w/".  Tokens inside dotted
# abbreviations ("U.S.") are left alone.
_PATTERN = re.compile(
    r"(?<![\w/])(?<!\w\.)("
    + "|".join(re.escape(k) for k in sorted(_CORRECTIONS, key=len, reverse=True))
    + r")(?![\w/]|\.\w)",
    re.IGNORECASE,
)

_INLINE_SPACE = re.compile(r"[ \t\f\v]+")
_BLANK_LINES = re.compile(r"\n{2,}")


@dataclass
class NormalizationResult:
    corrected: str
    corrections: list[Correction] = field(default_factory=list)


def clean_whitespace(text: str) -> str:
    """Collapse space runs, trim every line and squeeze blank lines."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [_INLINE_SPACE.sub(" ", line).strip() for line in text.split("\n")]
    return _BLANK_LINES.sub("\n", "\n".join(lines)).strip()


def _match_case(token: str, replacement: str) -> str:
    if token[:1].isupper() and replacement[:1].islower():
        return replacement[0].upper() + replacement[1:]
    return replacement


def normalize(text: str) -> NormalizationResult:
    """Correct known misspellings in *text*.

    Parameters
    ----------
    text:
        Raw user input.

    Returns
    -------
    NormalizationResult
        ``corrected`` text and the list of applied corrections.  Positions
        are character offsets into the whitespace-cleaned input.
    """
    cleaned = clean_whitespace(text)
    corrections: list[Correction] = []

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        replacement = _match_case(token, _CORRECTIONS[token.lower()])
        if replacement != token:
            corrections.append(
                Correction(original=token, corrected=replacement, position=match.start())
            )
        return replacement

    corrected = _PATTERN.sub(_replace, cleaned)
    return NormalizationResult(corrected=corrected, corrections=corrections)
