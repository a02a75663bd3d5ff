"""
api/main.py — FastAPI application entry point.

Run with:
    uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from app.db.session import engine
from api.endpoints.lead_routes import router as lead_router
from api.endpoints.offer_routes import router as offer_router
from api.endpoints.result_routes import router as result_router
from api.endpoints.score_routes import router as score_router

logger = logging.getLogger(__name__)


# ── Lifespan ─────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown logic."""
    # Verify DB is reachable on startup
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connection verified.")
    yield
    logger.info("Application shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="Lead Qualifier",
    description=(
        "Scores uploaded prospect lists against a product offer by combining "
        "rule-based points with an LLM intent classification."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(offer_router, prefix="/offers", tags=["Offers"])
app.include_router(lead_router, prefix="/leads", tags=["Leads"])
app.include_router(score_router, prefix="/score", tags=["Scoring"])
app.include_router(result_router, prefix="/results", tags=["Results"])


# ── Health check ─────────────────────────────────────────────────────────────

@app.get("/health", tags=["System"])
def health_check():
    """Returns service liveness status."""
    return {"status": "ok", "service": "lead-qualifier"}


@app.get("/", tags=["System"])
def root():
    return {
        "message": "Lead Qualifier is running.",
        "docs": "/docs",
    }
