"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable, List

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from homelist.db import Base, get_session_factory, import_all_models
from homelist.main import app
from homelist.models import Apartment
from homelist.schemas.apartment import ApartmentOut

BASE_TIME = datetime(2025, 11, 1, 12, 0, 0, tzinfo=timezone.utc)


def apartment_row(**overrides) -> dict:
    """Column values for one Apartment row."""
    row = dict(
        name="Sunset View Apartment",
        unit_number="A-1205",
        project="Sunset Residences",
        bedrooms=3,
        bathrooms=2,
        price=Decimal("225000.00"),
        area=140.0,
        address="1205 Palm Street",
        city="Cairo",
        country="Egypt",
        description="Spacious apartment with panoramic city views.",
        images=["https://images.example.com/a.jpg"],
        amenities=["Pool Access"],
    )
    row.update(overrides)
    return row


def create_payload(**overrides) -> dict:
    """camelCase JSON body for POST /api/apartments."""
    body = {
        "name": "Nile Breeze Loft",
        "unitNumber": "B-903",
        "project": "Nile Towers",
        "bedrooms": 2,
        "bathrooms": 2,
        "price": 185000,
        "area": 115,
        "address": "903 River Lane",
        "city": "Giza",
        "country": "Egypt",
        "description": "Open-plan loft with river views.",
    }
    body.update(overrides)
    return body


def apartment_out(apartment_id: str, updated_at: datetime = BASE_TIME, **overrides) -> ApartmentOut:
    """Client-side ApartmentOut without touching the database."""
    row = apartment_row(**overrides)
    row.update(id=apartment_id, created_at=BASE_TIME, updated_at=updated_at)
    return ApartmentOut.model_validate(row)


async def insert_rows(session_factory, rows: Iterable[dict]) -> List[Apartment]:
    """Insert rows one second apart, first row oldest."""
    created = []
    async with session_factory() as session:
        for i, row in enumerate(rows):
            row = dict(row)
            row.setdefault("created_at", BASE_TIME + timedelta(seconds=i))
            row.setdefault("updated_at", row["created_at"])
            apartment = Apartment(**row)
            session.add(apartment)
            created.append(apartment)
        await session.commit()
    return created


@pytest.fixture
async def engine(tmp_path):
    import_all_models()
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'homelist.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def client(session_factory):
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def seeded(session_factory) -> List[Apartment]:
    """Three Sunset Residences units, two Nile Towers units, one Green Meadows."""
    rows = [
        apartment_row(name="Sunset View Apartment", unit_number="A-1205", project="Sunset Residences"),
        apartment_row(name="Sunset Corner Suite", unit_number="A-1502", project="Sunset Residences"),
        apartment_row(name="Sunset Family Home", unit_number="A-2008", project="Sunset Residences"),
        apartment_row(name="Nile Breeze Loft", unit_number="B-903", project="Nile Towers", city="Giza"),
        apartment_row(name="Riverside Penthouse", unit_number="B-PH15", project="Nile Towers", city="Giza"),
        apartment_row(name="Gardenia Residence", unit_number="C-704", project="Green Meadows"),
    ]
    return await insert_rows(session_factory, rows)
