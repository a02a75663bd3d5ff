"""
api/endpoints/offer_routes.py — Routes for managing offers.

POST /offers            — Create an offer
GET  /offers/{id}       — Get a single offer
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.repository import create_offer, get_offer
from api.schemas import OfferCreate, OfferOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=OfferOut, summary="Create an offer")
def post_offer(payload: OfferCreate, db: Session = Depends(get_db)):
    """Create the product offer that lead batches are scored against."""
    offer = create_offer(
        db,
        name=payload.name,
        value_props=payload.value_props,
        ideal_use_cases=payload.ideal_use_cases,
    )
    db.commit()
    db.refresh(offer)
    return offer


@router.get("/{offer_id}", response_model=OfferOut, summary="Get offer by ID")
def read_offer(offer_id: int, db: Session = Depends(get_db)):
    offer = get_offer(db, offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail=f"Offer {offer_id} not found.")
    return offer
