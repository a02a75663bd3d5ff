"""
app/services/scoring.py — Deterministic lead scoring and score merging.

Rule layer (max 50 points):
  role          20 decision-maker / 10 influencer / 0
  industry      20 exact ideal-use-case match / 10 fuzzy overlap / 0
  completeness  10 when name, role, company, industry and location are all filled

AI layer: intent label → 50 / 30 / 10 points.
Final score = rule total + AI points, never above 100.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from app.db.models import Intent

logger = logging.getLogger(__name__)

MAX_SCORE = 100

DECISION_MAKER_KEYWORDS = [
    "ceo", "chief", "cto", "cfo", "coo",
    "founder", "co-founder",
    "vp", "vice president", "head of",
    "director", "owner",
]
INFLUENCER_KEYWORDS = ["manager", "lead", "principal", "senior", "growth", "product", "marketing"]

REQUIRED_FIELDS = ("name", "role", "company", "industry", "location")

INTENT_POINTS = {
    Intent.HIGH: 50,
    Intent.MEDIUM: 30,
    Intent.LOW: 10,
}


@dataclass(frozen=True)
class RuleScore:
    role: int
    industry: int
    completeness: int

    @property
    def total(self) -> int:
        return self.role + self.industry + self.completeness


# ── Rule layer ────────────────────────────────────────────────────────────────

def role_score(role: str | None) -> int:
    r = (role or "").lower()
    if any(kw in r for kw in DECISION_MAKER_KEYWORDS):
        return 20
    if any(kw in r for kw in INFLUENCER_KEYWORDS):
        return 10
    return 0


def industry_score(industry: str | None, ideal_use_cases: Iterable[str] | None) -> int:
    """
    Score how well a lead's industry fits the offer's ideal use cases.

    Exact (case-insensitive, trimmed) match scores 20. Otherwise 10 if either
    string contains the other, or a word of one appears inside the other.
    Blank use cases are ignored; a blank industry always scores 0.
    """
    ind = (industry or "").lower().strip()
    if not ind:
        return 0

    ideals = [s.lower().strip() for s in (ideal_use_cases or []) if s and s.strip()]

    if ind in ideals:
        return 20

    ind_tokens = ind.split()
    for ideal in ideals:
        if ind in ideal or ideal in ind:
            return 10
        if any(tok in ideal for tok in ind_tokens):
            return 10
        if any(tok in ind for tok in ideal.split()):
            return 10
    return 0


def completeness_score(lead: Any) -> int:
    """All-or-nothing: 10 only when every required field is non-blank."""
    for field in REQUIRED_FIELDS:
        value = getattr(lead, field, None)
        if not value or not str(value).strip():
            return 0
    return 10


def rule_score(lead: Any, ideal_use_cases: Iterable[str] | None) -> RuleScore:
    return RuleScore(
        role=role_score(getattr(lead, "role", None)),
        industry=industry_score(getattr(lead, "industry", None), ideal_use_cases),
        completeness=completeness_score(lead),
    )


# ── Merge ─────────────────────────────────────────────────────────────────────

def ai_points(intent: Intent) -> int:
    return INTENT_POINTS[intent]


def final_score(rules: RuleScore, intent: Intent) -> int:
    """Combine rule and AI points into the stored 0–100 score."""
    return max(0, min(MAX_SCORE, rules.total + ai_points(intent)))


def compose_reasoning(rules: RuleScore, explanation: str) -> str:
    return (
        f"Rule: role {rules.role}, industry {rules.industry}, "
        f"completeness {rules.completeness}. AI: {explanation}"
    )
