# backend/homelist/routers/apartment.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from homelist.db import get_session_factory
from homelist.exceptions import ApartmentConflictError
from homelist.schemas.apartment import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    ApartmentCreate,
    ApartmentListResponse,
    ApartmentOut,
)
from homelist.services import apartment_service
from homelist.services.apartment_service import SessionFactory

router = APIRouter(
    prefix="/api/apartments",
    tags=["apartments"]
)

@router.get("", response_model=ApartmentListResponse)
async def list_apartments(
    search: Optional[str] = Query(None, description="name / unit number / project contains (case-insensitive)"),
    project: Optional[str] = Query(None, description="project contains (case-insensitive)"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    session_factory: SessionFactory = Depends(get_session_factory),
):
    """
    Searchable, paginated apartment list (newest first).
    A page past the last one is not an error: items is empty, meta is accurate.
    """
    return await apartment_service.list_apartments(
        session_factory,
        search=search,
        project=project,
        page=page,
        page_size=page_size,
    )

@router.get("/projects", response_model=List[str])
async def list_projects(session_factory: SessionFactory = Depends(get_session_factory)):
    """All project names for the filter dropdown, independent of current filters."""
    return await apartment_service.list_projects(session_factory)

@router.get("/{apartment_id}", response_model=ApartmentOut)
async def get_apartment(apartment_id: str, session_factory: SessionFactory = Depends(get_session_factory)):
    apartment = await apartment_service.get_apartment(session_factory, apartment_id)
    if apartment is None:
        raise HTTPException(status_code=404, detail="Apartment not found")
    return apartment

@router.post("", response_model=ApartmentOut, status_code=status.HTTP_201_CREATED)
async def create_apartment(
    payload: ApartmentCreate,
    session_factory: SessionFactory = Depends(get_session_factory),
):
    try:
        return await apartment_service.create_apartment(session_factory, payload)
    except ApartmentConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
