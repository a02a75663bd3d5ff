"""
app/services/lead_service.py — Business logic orchestrating the batch scoring pipeline.

This is the "glue" layer that coordinates, for every lead in a batch:
  - Deterministic rule scoring
  - AI intent classification (one LLM call per lead, failures contained)
  - Merging both into a final score + reasoning string
  - Upserting the LeadResult (one row per lead, re-runs overwrite)
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.ai_engine.parser import parse_intent
from app.ai_engine.processor import (
    ClassifierFailure,
    ClassifierResult,
    ClassifierSuccess,
    build_prompt_variables,
    classify_intent,
)
from app.config import settings
from app.db.models import Intent
from app.db.repository import get_batch, get_leads_for_batch, get_offer, upsert_lead_result
from app.services.scoring import compose_reasoning, final_score, rule_score

logger = logging.getLogger(__name__)

Classifier = Callable[[dict[str, str]], ClassifierResult]


# ── Errors ────────────────────────────────────────────────────────────────────

class ScoringRequestError(ValueError):
    """A scoring request that can't be processed at all (client error)."""


class MissingIdentifierError(ScoringRequestError):
    pass


class OfferNotFoundError(ScoringRequestError):
    pass


# ── Output dataclasses ────────────────────────────────────────────────────────

@dataclass
class ScoredLead:
    lead_id: int
    name: str
    role: str
    company: str
    intent: Intent
    score: int
    reasoning: str


# ── Helpers ───────────────────────────────────────────────────────────────────

def _response_text(result: ClassifierResult) -> Optional[str]:
    """Map a classifier result to the text handed to the parser."""
    if isinstance(result, ClassifierSuccess):
        return result.text
    if isinstance(result, ClassifierFailure):
        return None
    raise TypeError(f"Unexpected classifier result: {result!r}")


def _run_classifier(
    classifier: Classifier,
    prompts: list[dict[str, str]],
    max_workers: int,
) -> list[ClassifierResult]:
    """Classify every prompt, returning results in input order."""
    if max_workers <= 1 or len(prompts) <= 1:
        return [classifier(p) for p in prompts]

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(classifier, prompts))


# ── Main pipeline ─────────────────────────────────────────────────────────────

def score_batch(
    db: Session,
    batch_id: Optional[int],
    offer_id: Optional[int],
    classifier: Optional[Classifier] = None,
    max_workers: Optional[int] = None,
) -> list[ScoredLead]:
    """
    Score every lead in a batch against an offer and persist the results.

    Args:
        db:          Open session; results are flushed, the caller commits.
        batch_id:    Batch whose leads are scored.
        offer_id:    Offer the leads are scored against.
        classifier:  Callable taking prompt variables, returning a ClassifierResult.
                     Defaults to classify_intent (the LLM).
        max_workers: Concurrent classifier calls. Defaults to SCORING_MAX_WORKERS.

    Returns:
        One ScoredLead per lead, in batch order.

    Raises:
        MissingIdentifierError: batch_id or offer_id is missing.
        OfferNotFoundError:     offer_id doesn't exist.
    """
    if not batch_id or not offer_id:
        raise MissingIdentifierError("batch_id and offer_id are required")

    offer = get_offer(db, offer_id)
    if offer is None:
        raise OfferNotFoundError(f"Offer {offer_id} not found")

    if get_batch(db, batch_id) is None:
        logger.warning("Batch %s not found; nothing to score.", batch_id)
        return []

    leads = get_leads_for_batch(db, batch_id)
    if not leads:
        logger.warning("Batch %s has no leads to score.", batch_id)
        return []

    classifier = classifier or classify_intent
    workers = max_workers if max_workers is not None else settings.scoring_max_workers
    logger.info(
        "Scoring %d leads from batch %s against offer %r (workers=%d)...",
        len(leads), batch_id, offer.name, workers,
    )

    rules = [rule_score(lead, offer.ideal_use_cases) for lead in leads]
    prompts = [build_prompt_variables(offer, lead) for lead in leads]
    responses = _run_classifier(classifier, prompts, workers)

    scored: list[ScoredLead] = []
    for lead, lead_rules, response in zip(leads, rules, responses):
        if isinstance(response, ClassifierFailure):
            logger.warning("Lead %d: classifier unavailable (%s); defaulting.", lead.id, response.error)

        parsed = parse_intent(_response_text(response))
        score = final_score(lead_rules, parsed.intent)
        reasoning = compose_reasoning(lead_rules, parsed.explanation)

        upsert_lead_result(
            db,
            lead_id=lead.id,
            intent=parsed.intent,
            score=score,
            reasoning=reasoning,
        )
        scored.append(ScoredLead(
            lead_id=lead.id,
            name=lead.name,
            role=lead.role,
            company=lead.company,
            intent=parsed.intent,
            score=score,
            reasoning=reasoning,
        ))
        logger.info(
            "Scored lead %d (%s): intent=%s rules=%d score=%d",
            lead.id, lead.name, parsed.intent.value, lead_rules.total, score,
        )

    counts = Counter(s.intent.value for s in scored)
    logger.info("Batch %s scored: %d leads %s", batch_id, len(scored), dict(counts))
    return scored
