"""
api/endpoints/score_routes.py — Route for triggering batch scoring.

POST /score   — Score every lead in a batch against an offer
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.lead_service import (
    MissingIdentifierError,
    OfferNotFoundError,
    score_batch,
)
from api.schemas import ScoredLeadOut, ScoreRequest, ScoreResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=ScoreResponse, summary="Score a batch of leads")
def run_scoring(request: ScoreRequest, db: Session = Depends(get_db)):
    """
    Run rule scoring + AI intent classification for every lead in the batch.

    Results are upserted per lead, so calling this again for the same batch
    replaces the previous results instead of duplicating them.
    """
    try:
        scored = score_batch(db, batch_id=request.batch_id, offer_id=request.offer_id)
    except MissingIdentifierError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except OfferNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except Exception as exc:
        logger.error("Scoring failed for batch %s: %s", request.batch_id, exc)
        raise HTTPException(status_code=500, detail=str(exc))

    db.commit()
    return ScoreResponse(
        success=True,
        results=[ScoredLeadOut.model_validate(s) for s in scored],
    )
