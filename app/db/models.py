"""
app/db/models.py — SQLAlchemy ORM models for the lead qualification system.

Tables:
  - Offer       → the product being sold (value props + ideal use cases)
  - Batch       → a group of leads uploaded together for one Offer
  - Lead        → a prospect record, belongs to one Batch
  - LeadResult  → the latest score for a Lead (exactly one per Lead)
"""

import enum

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, relationship


# ── Base ─────────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


# ── Enums ────────────────────────────────────────────────────────────────────

class Intent(str, enum.Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# ── Models ───────────────────────────────────────────────────────────────────

class Offer(Base):
    __tablename__ = "offers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    value_props = Column(JSON, nullable=False, default=list)       # ordered list[str]
    ideal_use_cases = Column(JSON, nullable=False, default=list)   # ordered list[str]
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    # Relationships
    batches = relationship("Batch", back_populates="offer", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Offer id={self.id} name={self.name!r}>"


class Batch(Base):
    __tablename__ = "batches"

    id = Column(Integer, primary_key=True, autoincrement=True)
    offer_id = Column(Integer, ForeignKey("offers.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    # Relationships
    offer = relationship("Offer", back_populates="batches")
    leads = relationship("Lead", back_populates="batch", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Batch id={self.id} offer_id={self.offer_id}>"


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    batch_id = Column(Integer, ForeignKey("batches.id", ondelete="CASCADE"), nullable=False)

    name = Column(String(255), nullable=False, default="")
    role = Column(String(255), nullable=False, default="")
    company = Column(String(255), nullable=False, default="")
    industry = Column(String(255), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")
    linkedin_bio = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    # Relationships
    batch = relationship("Batch", back_populates="leads")
    result = relationship(
        "LeadResult", back_populates="lead", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Lead id={self.id} name={self.name!r} batch_id={self.batch_id}>"


class LeadResult(Base):
    __tablename__ = "lead_results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lead_id = Column(
        Integer, ForeignKey("leads.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    intent = Column(Enum(Intent, name="intent_label"), nullable=False)
    score = Column(Integer, nullable=False)               # 0 – 100
    reasoning = Column(Text, nullable=False)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    lead = relationship("Lead", back_populates="result")

    def __repr__(self) -> str:
        return f"<LeadResult lead_id={self.lead_id} intent={self.intent} score={self.score}>"
