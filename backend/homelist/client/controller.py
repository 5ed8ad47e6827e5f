# backend/homelist/client/controller.py
"""Listing state and data freshness for the apartment browser.

The controller owns the filter/pagination state, fetches pages through
:class:`ApartmentsApi`, keeps the last successful response around while a new
one is loading (or after a failure) and puts the viewport back where it was
once new data is applied.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Protocol
from urllib.parse import parse_qsl, urlencode

import httpx

from homelist.client.api import ApartmentsApi
from homelist.exceptions import ApiError
from homelist.schemas.apartment import MAX_PAGE_SIZE, ApartmentListResponse, ApartmentOut, PageMeta

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 9


@dataclass(frozen=True)
class ListingState:
    """Everything that decides which page is shown.

    Kept as one serializable value so it can be mirrored into a URL or a
    history entry (``to_query`` / ``from_query``) without the fetch logic
    knowing about it.
    """

    search: str = ""
    project: str = ""
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.search:
            params["search"] = self.search
        if self.project:
            params["project"] = self.project
        params["page"] = str(self.page)
        params["pageSize"] = str(self.page_size)
        return params

    def to_query(self) -> str:
        return urlencode(self.to_params())

    @classmethod
    def from_query(cls, query: str) -> "ListingState":
        raw = dict(parse_qsl(query.lstrip("?")))
        return cls(
            search=raw.get("search", ""),
            project=raw.get("project", ""),
            page=max(1, _to_int(raw.get("page"), 1)),
            page_size=clamp_page_size(_to_int(raw.get("pageSize"), DEFAULT_PAGE_SIZE)),
        )


def clamp_page_size(page_size: int) -> int:
    """Keep a page size inside what the API accepts."""
    return min(max(1, page_size), MAX_PAGE_SIZE)


def _to_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


class Viewport(Protocol):
    def scroll_y(self) -> float: ...

    def scroll_to(self, top: float) -> None: ...


class NullViewport:
    """Used when there is nothing to scroll (scripts, tests, CLI)."""

    def scroll_y(self) -> float:
        return 0.0

    def scroll_to(self, top: float) -> None:
        return None


def empty_response(page_size: int = DEFAULT_PAGE_SIZE) -> ApartmentListResponse:
    return ApartmentListResponse(
        items=[],
        meta=PageMeta(page=1, page_size=page_size, total=0, total_pages=1),
    )


def items_key(items: List[ApartmentOut]) -> str:
    """(id, updatedAt) pairs; two responses with the same key render the same grid."""
    return "|".join(f"{a.id}:{a.updated_at.isoformat()}" for a in items)


ItemsListener = Callable[[List[ApartmentOut]], None]


class ApartmentsController:
    def __init__(
        self,
        api: ApartmentsApi,
        *,
        state: Optional[ListingState] = None,
        viewport: Optional[Viewport] = None,
    ) -> None:
        self.api = api
        self.state = state or ListingState()
        self.viewport = viewport or NullViewport()

        self.is_loading = False
        self.error: Optional[Exception] = None

        self._cache: Dict[str, ApartmentListResponse] = {}
        self._data: Optional[ApartmentListResponse] = None       # response for the current key
        self._last_data: Optional[ApartmentListResponse] = None  # last known good
        self._request_token = 0
        self._scroll_pos = 0.0

        self._items: List[ApartmentOut] = []
        self._items_key = ""
        self._listeners: List[ItemsListener] = []

        self._projects: Optional[List[str]] = None

    # ───── derived values ─────
    @property
    def cache_key(self) -> str:
        return f"/api/apartments?{self.state.to_query()}"

    @property
    def data(self) -> Optional[ApartmentListResponse]:
        return self._data

    @property
    def render_data(self) -> ApartmentListResponse:
        # current -> previous -> empty
        return self._data or self._last_data or empty_response(self.state.page_size)

    @property
    def meta(self) -> PageMeta:
        return self.render_data.meta

    @property
    def items(self) -> List[ApartmentOut]:
        """Same list object until the (id, updatedAt) pairs change."""
        return self._items

    def on_items_changed(self, listener: ItemsListener) -> None:
        self._listeners.append(listener)

    # ───── fetching ─────
    async def refresh(self) -> ApartmentListResponse:
        """
        Fetch the page for the current state.
        A cached response for the key is shown immediately and revalidated.
        Only the newest request may apply its result; older ones are dropped.
        """
        key = self.cache_key
        self._request_token += 1
        token = self._request_token

        cached = self._cache.get(key)
        if cached is not None:
            self._apply(cached)
        self.is_loading = cached is None

        try:
            data = await self.api.fetch_apartments(self.state.to_params())
        except (ApiError, httpx.HTTPError) as exc:
            if token == self._request_token:
                self.error = exc
                self.is_loading = False
            logger.warning("fetch failed for %s: %s", key, exc)
            return self.render_data

        if token != self._request_token:
            logger.debug("discarding stale response for %s", key)
            return self.render_data

        self._cache[key] = data
        self.error = None
        self.is_loading = False
        self._apply(data)
        return self.render_data

    async def load_projects(self) -> List[str]:
        """Project names are cached apart from listing pages."""
        if self._projects is None:
            self._projects = await self.api.fetch_projects()
        return self._projects

    # ───── state changes ─────
    async def apply_filter(self, search: str, project: str) -> ApartmentListResponse:
        """New search/project always starts from page 1."""
        return await self._transition(replace(self.state, search=search, project=project, page=1))

    async def next_page(self) -> ApartmentListResponse:
        return await self.go_to_page(self.state.page + 1)

    async def prev_page(self) -> ApartmentListResponse:
        return await self.go_to_page(self.state.page - 1)

    async def go_to_page(self, page: int) -> ApartmentListResponse:
        total_pages = max(1, self.meta.total_pages)
        page = min(max(1, page), total_pages)
        return await self._transition(replace(self.state, page=page))

    async def set_page_size(self, page_size: int) -> ApartmentListResponse:
        return await self._transition(replace(self.state, page_size=clamp_page_size(page_size), page=1))

    async def _transition(self, new_state: ListingState) -> ApartmentListResponse:
        if new_state == self.state:
            return self.render_data
        self._capture_scroll()
        self.state = new_state
        self._data = None
        return await self.refresh()

    # ───── internals ─────
    def _apply(self, data: ApartmentListResponse) -> None:
        self._data = data
        self._last_data = data
        self._update_items(data.items)
        self._restore_scroll()

    def _update_items(self, items: List[ApartmentOut]) -> None:
        key = items_key(items)
        if key == self._items_key:
            return
        self._items_key = key
        self._items = items
        for listener in self._listeners:
            listener(items)

    def _capture_scroll(self) -> None:
        self._scroll_pos = self.viewport.scroll_y() or 0.0

    def _restore_scroll(self) -> None:
        self.viewport.scroll_to(self._scroll_pos)
