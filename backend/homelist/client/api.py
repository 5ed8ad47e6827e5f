# backend/homelist/client/api.py
"""Async HTTP client for the apartments API."""
from __future__ import annotations

import logging
import os
from typing import Any, List, Literal, Mapping, Optional, Union

import httpx

from homelist.exceptions import ApartmentNotFoundError, ApiError
from homelist.schemas.apartment import ApartmentCreate, ApartmentListResponse, ApartmentOut

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:4000"

Context = Literal["server", "browser"]


def resolve_api_base_url(context: Context = "server") -> str:
    """
    Base URL of the API for the caller's execution context.
    - server:  HOMELIST_API_BASE_URL -> HOMELIST_PUBLIC_API_BASE_URL
    - browser: HOMELIST_PUBLIC_API_BASE_URL -> HOMELIST_API_BASE_URL
    Both fall back to localhost.
    """
    private = os.getenv("HOMELIST_API_BASE_URL", "").strip()
    public = os.getenv("HOMELIST_PUBLIC_API_BASE_URL", "").strip()
    order = (private, public) if context == "server" else (public, private)
    for candidate in order:
        if candidate:
            return candidate
    return DEFAULT_API_BASE_URL


def _clean_params(params: Optional[Mapping[str, Any]]) -> dict:
    """Drop None / empty-string values so they never reach the query string."""
    if not params:
        return {}
    return {k: str(v) for k, v in params.items() if v is not None and v != ""}


def _handle_response(response: httpx.Response) -> Any:
    if response.is_error:
        message = response.text or f"Request failed with status {response.status_code}"
        if response.status_code == 404:
            raise ApartmentNotFoundError(message, response.status_code)
        raise ApiError(message, response.status_code)
    return response.json()


class ApartmentsApi:
    """Thin wrapper around the four /api/apartments endpoints.

    Pass an existing ``httpx.AsyncClient`` to share a connection pool (or a
    mock transport in tests); otherwise one is created for ``base_url`` and
    closed by ``aclose()`` / the async context manager.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        base_url: Optional[str] = None,
        context: Context = "server",
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or resolve_api_base_url(context),
            timeout=timeout,
        )

    async def __aenter__(self) -> "ApartmentsApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        response = await self._client.get(
            path,
            params=_clean_params(params),
            headers={"Cache-Control": "no-store"},
        )
        return _handle_response(response)

    async def fetch_apartments(self, params: Optional[Mapping[str, Any]] = None) -> ApartmentListResponse:
        data = await self._get("/api/apartments", params)
        return ApartmentListResponse.model_validate(data)

    async def fetch_apartment(self, apartment_id: str) -> ApartmentOut:
        data = await self._get(f"/api/apartments/{apartment_id}")
        return ApartmentOut.model_validate(data)

    async def fetch_projects(self) -> List[str]:
        return list(await self._get("/api/apartments/projects"))

    async def create_apartment(self, payload: Union[ApartmentCreate, Mapping[str, Any]]) -> ApartmentOut:
        if isinstance(payload, ApartmentCreate):
            body = payload.model_dump(mode="json", by_alias=True)
        else:
            body = dict(payload)
        response = await self._client.post("/api/apartments", json=body)
        return ApartmentOut.model_validate(_handle_response(response))
