"""
api/endpoints/lead_routes.py — Routes for lead ingestion.

POST /leads/upload   — Upload a CSV of leads as a new batch for an offer
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.repository import add_leads, create_batch, get_offer
from app.ingestion.normalizer import parse_leads_csv
from api.schemas import UploadResult

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/upload", response_model=UploadResult, summary="Upload a lead CSV")
async def upload_leads(
    offer_id: int = Form(..., description="Offer the uploaded leads will be scored against"),
    file: UploadFile = File(..., description="CSV with name, role, company, industry, location, linkedin_bio"),
    db: Session = Depends(get_db),
):
    """
    Parse the uploaded CSV, create a Batch for the offer and insert every lead.
    Returns the new batch ID and how many leads were inserted.
    """
    offer = get_offer(db, offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail=f"Offer {offer_id} not found.")

    content = await file.read()
    try:
        leads = parse_leads_csv(content)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    batch = create_batch(db, offer)
    add_leads(db, batch, leads)
    db.commit()

    logger.info("Uploaded %d leads from %s into batch %d.", len(leads), file.filename, batch.id)
    return UploadResult(batch_id=batch.id, inserted_count=len(leads))
