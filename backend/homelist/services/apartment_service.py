# backend/homelist/services/apartment_service.py
from __future__ import annotations

import asyncio
import logging
import math
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from homelist.exceptions import ApartmentConflictError
from homelist.models import Apartment
from homelist.schemas.apartment import (
    DEFAULT_PAGE_SIZE,
    ApartmentCreate,
    ApartmentListResponse,
    ApartmentOut,
    PageMeta,
)

logger = logging.getLogger(__name__)

SessionFactory = async_sessionmaker[AsyncSession]

CONFLICT_MESSAGE = "Apartment with the same unit number already exists in this project"


def serialize_apartment(apartment: Apartment) -> ApartmentOut:
    return ApartmentOut.model_validate(apartment)


def build_filters(search: Optional[str] = None, project: Optional[str] = None) -> list:
    """
    WHERE conditions for the listing query.
    - search: name OR unit_number OR project contains the text (case-insensitive)
    - project: project contains the text (case-insensitive), AND-ed with search
    LIKE wildcards in user input are escaped and match literally.
    """
    conditions = []
    if search:
        conditions.append(or_(
            Apartment.name.icontains(search, autoescape=True),
            Apartment.unit_number.icontains(search, autoescape=True),
            Apartment.project.icontains(search, autoescape=True),
        ))
    if project:
        conditions.append(Apartment.project.icontains(project, autoescape=True))
    return conditions


async def list_apartments(
    session_factory: SessionFactory,
    *,
    search: Optional[str] = None,
    project: Optional[str] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ApartmentListResponse:
    """
    One page of apartments, newest first, plus pagination meta.
    The page fetch and the count are independent reads and run concurrently,
    each on its own session.
    """
    conditions = build_filters(search, project)
    skip = (page - 1) * page_size

    async def fetch_page() -> List[Apartment]:
        stmt = (
            select(Apartment)
            .where(*conditions)
            # id breaks ties between equal created_at values
            .order_by(Apartment.created_at.desc(), Apartment.id.desc())
            .offset(skip)
            .limit(page_size)
        )
        async with session_factory() as session:
            return list((await session.scalars(stmt)).all())

    async def count() -> int:
        stmt = select(func.count()).select_from(Apartment).where(*conditions)
        async with session_factory() as session:
            return int(await session.scalar(stmt) or 0)

    items, total = await asyncio.gather(fetch_page(), count())

    return ApartmentListResponse(
        items=[serialize_apartment(a) for a in items],
        meta=PageMeta(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=math.ceil(total / page_size),
        ),
    )


async def list_projects(session_factory: SessionFactory) -> List[str]:
    """Every distinct project name, sorted ascending, regardless of filters."""
    stmt = select(Apartment.project).distinct()
    async with session_factory() as session:
        rows = (await session.scalars(stmt)).all()
    return sorted({p for p in rows if p})


async def get_apartment(session_factory: SessionFactory, apartment_id: str) -> Optional[ApartmentOut]:
    async with session_factory() as session:
        apartment = await session.get(Apartment, apartment_id)
    return serialize_apartment(apartment) if apartment else None


async def _find_existing(session: AsyncSession, project: str, unit_number: str) -> Optional[str]:
    stmt = (
        select(Apartment.id)
        .where(
            func.lower(Apartment.project) == func.lower(project),
            func.lower(Apartment.unit_number) == func.lower(unit_number),
        )
        .limit(1)
    )
    return await session.scalar(stmt)


async def create_apartment(session_factory: SessionFactory, payload: ApartmentCreate) -> ApartmentOut:
    """
    Insert a new listing.
    - Duplicate (project, unit_number), ignoring case -> ApartmentConflictError, no write.
    - The unique index catches a duplicate that slipped past the check
      (concurrent request); that IntegrityError maps to the same conflict.
    """
    async with session_factory() as session:
        existing = await _find_existing(session, payload.project, payload.unit_number)
        if existing:
            raise ApartmentConflictError(CONFLICT_MESSAGE)

        apartment = Apartment(
            name=payload.name,
            unit_number=payload.unit_number,
            project=payload.project,
            bedrooms=payload.bedrooms,
            bathrooms=payload.bathrooms,
            price=Decimal(str(payload.price)),
            area=payload.area,
            address=payload.address,
            city=payload.city,
            country=payload.country,
            description=payload.description,
            images=list(payload.images),
            amenities=list(payload.amenities),
        )
        session.add(apartment)
        try:
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            logger.info("insert rejected by unique index: %s/%s", payload.project, payload.unit_number)
            raise ApartmentConflictError(CONFLICT_MESSAGE) from exc
        # serialize what the database holds, not the pending object
        await session.refresh(apartment)

        logger.info("created apartment %s (%s/%s)", apartment.id, apartment.project, apartment.unit_number)
        return serialize_apartment(apartment)
