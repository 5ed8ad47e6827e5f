# backend/homelist/models/apartment.py
"""SQLAlchemy model for an apartment listing."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    JSON,
    Numeric,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY

from homelist.db.orm_registry import Base

# TEXT[] on PostgreSQL, JSON elsewhere (sqlite in tests)
StringList = JSON().with_variant(ARRAY(Text), "postgresql")


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Apartment(Base):
    __tablename__ = "apartments"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_apartments_price_nonneg"),
        CheckConstraint("area > 0", name="ck_apartments_area_pos"),
        CheckConstraint("bedrooms >= 0 AND bathrooms >= 0", name="ck_apartments_rooms_nonneg"),
    )

    id = Column(Text, primary_key=True, default=_new_id)

    name = Column(Text, nullable=False)
    unit_number = Column(Text, nullable=False)
    project = Column(Text, nullable=False, index=True)

    bedrooms = Column(Integer, nullable=False)
    bathrooms = Column(Integer, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)        # fixed-point, serialized as float
    area = Column(Float, nullable=False)                  # sqm

    address = Column(Text, nullable=False)
    city = Column(Text, nullable=False)
    country = Column(Text, nullable=False)
    description = Column(Text, nullable=False)

    images = Column(StringList, nullable=False, default=list)
    amenities = Column(StringList, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow, server_default=func.now())

    def __repr__(self) -> str:
        return f"<Apartment {self.id} {self.project}/{self.unit_number}>"


# Unit numbers are unique per project, ignoring case. Enforced by the engine so
# two concurrent inserts cannot both pass the application-level check.
Index(
    "uq_apartments_project_unit_ci",
    func.lower(Apartment.project),
    func.lower(Apartment.unit_number),
    unique=True,
)
Index("ix_apartments_created_at_id", Apartment.created_at.desc(), Apartment.id.desc())
