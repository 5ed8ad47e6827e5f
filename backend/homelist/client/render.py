# backend/homelist/client/render.py
"""Plain-text views of listings (used by the CLI)."""
from __future__ import annotations

from typing import List

from homelist.schemas.apartment import ApartmentOut, PageMeta

EMPTY_MESSAGE = "No apartments found. Try adjusting your search or filters."


def format_currency(value: float) -> str:
    return f"${value:,.0f}"


def render_card(apartment: ApartmentOut) -> str:
    return "\n".join([
        f"{apartment.name}  [{apartment.project} · Unit {apartment.unit_number}]",
        f"  {format_currency(apartment.price)} · {apartment.bedrooms} bd · "
        f"{apartment.bathrooms} ba · {apartment.area:g} sqm",
        f"  {apartment.city}, {apartment.country}",
        f"  id: {apartment.id}",
    ])


def render_grid(items: List[ApartmentOut]) -> str:
    if not items:
        return EMPTY_MESSAGE
    return "\n\n".join(render_card(a) for a in items)


def pagination_summary(meta: PageMeta) -> str:
    shown = min(meta.page * meta.page_size, meta.total)
    return f"Showing {shown} of {meta.total} apartments · Page {meta.page} of {meta.total_pages}"


def render_detail(apartment: ApartmentOut) -> str:
    lines = [
        apartment.name,
        f"{apartment.address}, {apartment.city}, {apartment.country}",
        f"{apartment.project} · Unit {apartment.unit_number}",
        f"Listing price: {format_currency(apartment.price)}",
        f"Bedrooms: {apartment.bedrooms}  Bathrooms: {apartment.bathrooms}  Area: {apartment.area:g} sqm",
        f"Updated: {apartment.updated_at:%b %d, %Y}",
        "",
        apartment.description,
    ]
    if apartment.amenities:
        lines += ["", "Amenities: " + ", ".join(apartment.amenities)]
    if apartment.images:
        lines += ["Images:"] + [f"  {url}" for url in apartment.images]
    lines += ["", f"Listing ID: {apartment.id}"]
    return "\n".join(lines)
