"""
tests/conftest.py — Shared pytest configuration and fixtures.

Sets dummy environment variables BEFORE any app module is imported,
so that pydantic-settings doesn't fail on missing required fields.
"""

import os
import pytest

# ── Set dummy env vars before any app module is imported ─────────────────────
# This runs at collection time, before tests execute.
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")
os.environ.setdefault("OPENROUTER_MODEL", "test-model")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.models import Base
from app.db.repository import add_leads, create_batch, create_offer
from app.ingestion.normalizer import NormalizedLead


# ── In-memory DB Fixture ──────────────────────────────────────────────────────

@pytest.fixture
def db():
    """Provide a fresh in-memory SQLite session for each test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, expire_on_commit=False)
    session = Session()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


# ── Factories ─────────────────────────────────────────────────────────────────

@pytest.fixture
def make_offer(db):
    def _make(name="Acme CRM", value_props=None, ideal_use_cases=None):
        return create_offer(
            db,
            name=name,
            value_props=value_props if value_props is not None else ["Close deals faster"],
            ideal_use_cases=ideal_use_cases if ideal_use_cases is not None else ["saas", "fintech"],
        )
    return _make


@pytest.fixture
def make_batch(db):
    """Create a batch for an offer holding the given lead dicts."""
    def _make(offer, leads):
        batch = create_batch(db, offer)
        add_leads(db, batch, [NormalizedLead(**lead) for lead in leads])
        return batch
    return _make


def lead_data(**overrides) -> dict:
    data = {
        "name": "Ava Patel",
        "role": "VP Sales",
        "company": "FlowMetrics",
        "industry": "FinTech",
        "location": "Austin",
        "linkedin_bio": "Scaling revenue teams at fintech startups.",
    }
    data.update(overrides)
    return data


@pytest.fixture
def sample_lead():
    """Factory for complete lead dicts; pass keyword overrides."""
    return lead_data
