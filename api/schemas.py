"""
api/schemas.py — Pydantic request/response models for all API endpoints.

These are the API contract — separate from DB ORM models so we can
control exactly what data is exposed over HTTP.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.db.models import Intent


# ── Offer ─────────────────────────────────────────────────────────────────────

class OfferCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Product / offer name")
    value_props: list[str] = Field(default_factory=list)
    ideal_use_cases: list[str] = Field(
        default_factory=list,
        description="Industries the offer is built for, e.g. ['saas', 'fintech']",
    )


class OfferOut(BaseModel):
    id: int
    name: str
    value_props: list[str]
    ideal_use_cases: list[str]
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ── Lead upload ───────────────────────────────────────────────────────────────

class UploadResult(BaseModel):
    batch_id: int
    inserted_count: int


# ── Scoring ───────────────────────────────────────────────────────────────────

class ScoreRequest(BaseModel):
    # Both are optional here so a missing id is reported as a 400, not a 422
    batch_id: Optional[int] = Field(default=None, alias="batchId")
    offer_id: Optional[int] = Field(default=None, alias="offerId")

    model_config = ConfigDict(populate_by_name=True)


class ScoredLeadOut(BaseModel):
    lead_id: int
    name: str
    role: str
    company: str
    intent: Intent
    score: int
    reasoning: str

    model_config = {"from_attributes": True}


class ScoreResponse(BaseModel):
    success: bool = True
    results: list[ScoredLeadOut]


# ── Results export ────────────────────────────────────────────────────────────

class ResultRow(BaseModel):
    name: str
    role: str
    company: str
    industry: str
    location: str
    intent: str                      # High / Medium / Low, or "Unknown" if never scored
    score: Optional[int] = None
    reasoning: Optional[str] = None
