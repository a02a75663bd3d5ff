"""
api/endpoints/result_routes.py — Routes for reviewing and exporting scored leads.

GET /results       — Lead results as JSON (filterable by batch / offer)
GET /results/csv   — Same rows as a CSV download
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional

import pandas as pd
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.repository import get_result_rows
from api.schemas import ResultRow

logger = logging.getLogger(__name__)
router = APIRouter()

CSV_COLUMNS = ["name", "role", "company", "industry", "location", "intent", "score", "reasoning"]


@dataclass
class ResultFilter:
    batch_id: Optional[int] = None
    offer_id: Optional[int] = None


def result_filter(
    batch_id: Optional[int] = Query(default=None),
    offer_id: Optional[int] = Query(default=None),
    batch_id_camel: Optional[int] = Query(default=None, alias="batchId", include_in_schema=False),
    offer_id_camel: Optional[int] = Query(default=None, alias="offerId", include_in_schema=False),
) -> ResultFilter:
    """Accept both batch_id/offer_id and batchId/offerId, snake_case winning."""
    return ResultFilter(
        batch_id=batch_id if batch_id is not None else batch_id_camel,
        offer_id=offer_id if offer_id is not None else offer_id_camel,
    )


@router.get("", response_model=list[ResultRow], summary="List lead results")
def list_results(
    filters: ResultFilter = Depends(result_filter),
    db: Session = Depends(get_db),
):
    """Return every lead (optionally filtered) with its intent, score and reasoning."""
    return get_result_rows(db, batch_id=filters.batch_id, offer_id=filters.offer_id)


@router.get("/csv", summary="Export lead results as CSV")
def export_results_csv(
    filters: ResultFilter = Depends(result_filter),
    db: Session = Depends(get_db),
):
    rows = get_result_rows(db, batch_id=filters.batch_id, offer_id=filters.offer_id)
    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    # Nullable ints would otherwise render as floats ("80.0")
    df["score"] = df["score"].astype("Int64")

    buf = io.StringIO()
    df.to_csv(buf, index=False)
    logger.info("Exported %d result rows as CSV.", len(df))

    headers = {"Content-Disposition": 'attachment; filename="results.csv"'}
    return StreamingResponse(iter([buf.getvalue()]), media_type="text/csv", headers=headers)
