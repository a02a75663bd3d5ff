"""
app/ai_engine/parser.py — Turns free-form model text into an (intent, explanation) pair.

Matchers are tried in order until one returns a value:
  1. strict      — "INTENT: <High|Medium|Low>" with an optional "REASON: ..." line
  2. label words — the bare words HIGH / MEDIUM / LOW anywhere in the text
  3. keywords    — buying-signal phrases ("ready to buy", "might", "no budget", ...)
  4. default     — Medium

Missing text is handled before any matcher runs. Nothing here raises.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from app.db.models import Intent

logger = logging.getLogger(__name__)

NO_RESPONSE_EXPLANATION = "No AI response; defaulted to Medium."
MAX_EXPLANATION_CHARS = 500

_STRICT_INTENT_RE = re.compile(r"INTENT:\s*(HIGH|MEDIUM|LOW)", re.IGNORECASE)
_REASON_RE = re.compile(r"REASON:\s*([\s\S]{1,500})", re.IGNORECASE)
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")

# Checked in this order; first hit wins.
LABEL_WORDS: list[tuple[Intent, re.Pattern]] = [
    (Intent.HIGH, re.compile(r"\bHIGH\b")),
    (Intent.MEDIUM, re.compile(r"\bMEDIUM\b")),
    (Intent.LOW, re.compile(r"\bLOW\b")),
]

INTENT_KEYWORDS: list[tuple[Intent, list[str]]] = [
    (Intent.HIGH, ["very interested", "high intent", "ready to buy", "ready to evaluate", "actively looking"]),
    (Intent.MEDIUM, ["may", "might", "consider", "curious", "explore"]),
    (Intent.LOW, ["not interested", "unlikely", "low intent", "no need", "no budget"]),
]


@dataclass(frozen=True)
class ParsedIntent:
    intent: Intent
    explanation: str


Matcher = Callable[[str], Optional[ParsedIntent]]


# ── Helpers ──────────────────────────────────────────────────────────────────

def first_sentences(text: str, count: int = 2) -> str:
    """Return the first `count` sentences of text, capped at 500 characters."""
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(text) if s]
    return " ".join(sentences[:count])[:MAX_EXPLANATION_CHARS].strip()


def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)


_KEYWORD_PATTERNS = [
    (intent, [_keyword_pattern(k) for k in keywords]) for intent, keywords in INTENT_KEYWORDS
]


# ── Matchers ─────────────────────────────────────────────────────────────────

def match_strict_format(text: str) -> Optional[ParsedIntent]:
    intent_match = _STRICT_INTENT_RE.search(text)
    if not intent_match:
        return None

    intent = Intent(intent_match.group(1).title())

    reason_match = _REASON_RE.search(text)
    if reason_match:
        explanation = reason_match.group(1).strip().split("\n")[0]
    else:
        explanation = first_sentences(text)
    return ParsedIntent(intent, explanation)


def match_label_words(text: str) -> Optional[ParsedIntent]:
    upper = text.upper()
    for intent, pattern in LABEL_WORDS:
        if pattern.search(upper):
            return ParsedIntent(intent, first_sentences(text))
    return None


def match_intent_keywords(text: str) -> Optional[ParsedIntent]:
    for intent, patterns in _KEYWORD_PATTERNS:
        if any(p.search(text) for p in patterns):
            return ParsedIntent(intent, first_sentences(text))
    return None


def match_default(text: str) -> Optional[ParsedIntent]:
    return ParsedIntent(Intent.MEDIUM, first_sentences(text))


MATCHERS: list[Matcher] = [
    match_strict_format,
    match_label_words,
    match_intent_keywords,
    match_default,
]


# ── Main function ────────────────────────────────────────────────────────────

def parse_intent(text: str | None) -> ParsedIntent:
    """
    Extract an intent label and a short explanation from model output.

    Args:
        text: Raw model text, or None when the classifier produced nothing.

    Returns:
        ParsedIntent. Absent/blank text gives Medium with NO_RESPONSE_EXPLANATION;
        any other text always resolves to one of the three intents.
    """
    normalized = (text or "").replace("\r\n", "\n").strip()
    if not normalized:
        return ParsedIntent(Intent.MEDIUM, NO_RESPONSE_EXPLANATION)

    for matcher in MATCHERS:
        parsed = matcher(normalized)
        if parsed is not None:
            logger.debug("Intent %s resolved by %s", parsed.intent.value, matcher.__name__)
            return parsed

    # match_default always returns a value; kept for type checkers
    return ParsedIntent(Intent.MEDIUM, first_sentences(normalized))
