"""
app/ingestion/normalizer.py — Parses uploaded lead CSVs into clean lead records.

Takes the raw bytes of an uploaded CSV and returns typed Pydantic models
ready for bulk insertion into a Batch.
"""

import io
import logging
from typing import Any

import pandas as pd
from pydantic import BaseModel

logger = logging.getLogger(__name__)

LEAD_COLUMNS = ["name", "role", "company", "industry", "location"]

# Header spellings accepted for the optional bio column
BIO_COLUMNS = ("linkedin_bio", "bio")


# ── Output schema ────────────────────────────────────────────────────────────

class NormalizedLead(BaseModel):
    """Clean, structured prospect row ready for DB storage."""

    name: str = ""
    role: str = ""
    company: str = ""
    industry: str = ""
    location: str = ""
    linkedin_bio: str | None = None


# ── Helpers ──────────────────────────────────────────────────────────────────

def _clean(value: Any) -> str:
    """Coerce a CSV cell to a trimmed string ('' for missing values)."""
    if value is None:
        return ""
    return str(value).strip()


def _normalize_header(column: Any) -> str:
    return str(column).strip().lower().replace(" ", "_")


def normalize_row(row: dict[str, Any]) -> NormalizedLead | None:
    """
    Normalize one CSV row (keys already lower-cased).

    Returns None for rows where every lead field is blank.
    """
    fields = {col: _clean(row.get(col)) for col in LEAD_COLUMNS}

    bio = ""
    for col in BIO_COLUMNS:
        bio = _clean(row.get(col))
        if bio:
            break

    if not any(fields.values()) and not bio:
        return None

    return NormalizedLead(**fields, linkedin_bio=bio or None)


# ── Main function ────────────────────────────────────────────────────────────

def parse_leads_csv(content: bytes) -> list[NormalizedLead]:
    """
    Parse an uploaded CSV into NormalizedLead records.

    Missing columns are treated as blank; the scorer decides what blank means.

    Raises:
        ValueError: If the file can't be read or contains no lead rows.
    """
    try:
        df = pd.read_csv(
            io.BytesIO(content),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        logger.warning("Could not parse uploaded CSV: %s", e)
        raise ValueError("CSV file is empty or invalid") from e

    df.columns = [_normalize_header(c) for c in df.columns]

    leads = []
    for row in df.to_dict(orient="records"):
        lead = normalize_row(row)
        if lead:
            leads.append(lead)

    if not leads:
        raise ValueError("CSV file is empty or invalid")

    logger.info("Parsed %d / %d CSV rows into leads.", len(leads), len(df))
    return leads
