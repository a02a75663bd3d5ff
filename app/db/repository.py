"""
app/db/repository.py — All database read/write operations.

Business logic should never write raw SQL or ORM queries directly —
everything goes through this module. This keeps DB logic centralized
and easy to test/mock.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.db.models import Batch, Intent, Lead, LeadResult, Offer
from app.ingestion.normalizer import NormalizedLead

logger = logging.getLogger(__name__)


# ── Offer ─────────────────────────────────────────────────────────────────────

def create_offer(
    db: Session,
    name: str,
    value_props: list[str],
    ideal_use_cases: list[str],
) -> Offer:
    """Create and persist a new Offer."""
    offer = Offer(
        name=name,
        value_props=list(value_props),
        ideal_use_cases=list(ideal_use_cases),
    )
    db.add(offer)
    db.flush()
    logger.info("Offer created: %s (id=%d)", offer.name, offer.id)
    return offer


def get_offer(db: Session, offer_id: int) -> Optional[Offer]:
    """Fetch an Offer by ID, or None if it doesn't exist."""
    return db.query(Offer).filter(Offer.id == offer_id).first()


# ── Batch / Lead ──────────────────────────────────────────────────────────────

def create_batch(db: Session, offer: Offer) -> Batch:
    """Create an empty Batch linked to the given Offer."""
    batch = Batch(offer_id=offer.id)
    db.add(batch)
    db.flush()  # get the ID without committing
    logger.debug("Created batch %d for offer %d", batch.id, offer.id)
    return batch


def get_batch(db: Session, batch_id: int) -> Optional[Batch]:
    return db.query(Batch).filter(Batch.id == batch_id).first()


def add_leads(db: Session, batch: Batch, leads: list[NormalizedLead]) -> list[Lead]:
    """Bulk-insert normalized leads into a batch, preserving input order."""
    rows = [
        Lead(
            batch_id=batch.id,
            name=lead.name,
            role=lead.role,
            company=lead.company,
            industry=lead.industry,
            location=lead.location,
            linkedin_bio=lead.linkedin_bio,
        )
        for lead in leads
    ]
    db.add_all(rows)
    db.flush()
    logger.info("Inserted %d leads into batch %d", len(rows), batch.id)
    return rows


def get_leads_for_batch(db: Session, batch_id: int) -> list[Lead]:
    """Return every lead in a batch, in ingestion order."""
    return (
        db.query(Lead)
        .filter(Lead.batch_id == batch_id)
        .order_by(Lead.id.asc())
        .all()
    )


# ── Lead Result ───────────────────────────────────────────────────────────────

def get_lead_result(db: Session, lead_id: int) -> Optional[LeadResult]:
    return db.query(LeadResult).filter(LeadResult.lead_id == lead_id).first()


def upsert_lead_result(
    db: Session,
    lead_id: int,
    intent: Intent,
    score: int,
    reasoning: str,
) -> LeadResult:
    """
    Create the result for a lead, or overwrite the existing one.

    lead_results.lead_id is unique, so a lead never has more than one row;
    re-scoring replaces intent, score and reasoning entirely.
    """
    result = get_lead_result(db, lead_id)

    if result is None:
        result = LeadResult(lead_id=lead_id, intent=intent, score=score, reasoning=reasoning)
        db.add(result)
        logger.debug("Created result for lead %d: %s / %d", lead_id, intent.value, score)
    else:
        result.intent = intent
        result.score = score
        result.reasoning = reasoning
        logger.debug("Replaced result for lead %d: %s / %d", lead_id, intent.value, score)

    db.flush()
    return result


# ── Export / Query ────────────────────────────────────────────────────────────

def get_result_rows(
    db: Session,
    batch_id: Optional[int] = None,
    offer_id: Optional[int] = None,
) -> list[dict]:
    """
    Flatten leads and their results for export.

    Leads that have not been scored yet are included with intent "Unknown".
    """
    query = db.query(Lead, LeadResult).outerjoin(LeadResult, LeadResult.lead_id == Lead.id)
    if batch_id is not None:
        query = query.filter(Lead.batch_id == batch_id)
    if offer_id is not None:
        query = query.join(Batch, Batch.id == Lead.batch_id).filter(Batch.offer_id == offer_id)

    rows = []
    for lead, result in query.order_by(Lead.id.asc()).all():
        rows.append({
            "name": lead.name,
            "role": lead.role,
            "company": lead.company,
            "industry": lead.industry,
            "location": lead.location,
            "intent": result.intent.value if result else "Unknown",
            "score": result.score if result else None,
            "reasoning": result.reasoning if result else None,
        })
    return rows
