"""Service-layer tests that need more control than the HTTP surface gives."""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from conftest import apartment_row, create_payload, insert_rows
from homelist.exceptions import ApartmentConflictError
from homelist.models import Apartment
from homelist.schemas.apartment import ApartmentCreate
from homelist.services import apartment_service


def test_build_filters_without_input():
    assert apartment_service.build_filters() == []
    assert apartment_service.build_filters("", "") == []


def test_build_filters_with_both():
    assert len(apartment_service.build_filters("sun", "nile")) == 2


async def test_unique_index_catches_duplicate_that_skipped_the_check(session_factory, monkeypatch):
    """Two requests racing past the existence check: the second insert must still conflict."""
    await insert_rows(session_factory, [apartment_row(unit_number="B-903", project="Nile Towers")])

    async def no_existing(session, project, unit_number):
        return None

    monkeypatch.setattr(apartment_service, "_find_existing", no_existing)

    payload = ApartmentCreate.model_validate(create_payload(unitNumber="b-903", project="nile towers"))
    with pytest.raises(ApartmentConflictError):
        await apartment_service.create_apartment(session_factory, payload)

    async with session_factory() as session:
        assert await session.scalar(select(func.count()).select_from(Apartment)) == 1


async def test_create_stores_fixed_point_price(session_factory):
    payload = ApartmentCreate.model_validate(create_payload(price=199999.99))
    created = await apartment_service.create_apartment(session_factory, payload)
    assert created.price == pytest.approx(199999.99)

    async with session_factory() as session:
        stored = await session.get(Apartment, created.id)
    assert Decimal(stored.price) == Decimal("199999.99")


async def test_list_projects_skips_empty_names(session_factory):
    await insert_rows(session_factory, [
        apartment_row(unit_number="1", project="Zeta"),
        apartment_row(unit_number="2", project="Alpha"),
        apartment_row(unit_number="3", project="Zeta"),
    ])
    assert await apartment_service.list_projects(session_factory) == ["Alpha", "Zeta"]


async def test_get_apartment_missing(session_factory):
    assert await apartment_service.get_apartment(session_factory, "nope") is None


async def test_list_apartments_returns_typed_page(session_factory, seeded):
    result = await apartment_service.list_apartments(session_factory, project="sunset", page=1, page_size=2)
    assert result.meta.total == 3
    assert result.meta.total_pages == 2
    assert len(result.items) == 2
    assert all(isinstance(item.price, float) for item in result.items)
