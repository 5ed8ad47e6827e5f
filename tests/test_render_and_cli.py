"""Text rendering, the browse CLI and the seed data."""

import httpx

from conftest import apartment_out
from homelist import cli
from homelist.client.api import ApartmentsApi
from homelist.client.render import (
    EMPTY_MESSAGE,
    format_currency,
    pagination_summary,
    render_detail,
    render_grid,
)
from homelist.schemas.apartment import PageMeta

import seed_apartments


def test_format_currency():
    assert format_currency(225000) == "$225,000"
    assert format_currency(199999.6) == "$200,000"


def test_pagination_summary_caps_at_total():
    meta = PageMeta(page=3, page_size=9, total=21, total_pages=3)
    assert pagination_summary(meta) == "Showing 21 of 21 apartments · Page 3 of 3"


def test_empty_grid():
    assert render_grid([]) == EMPTY_MESSAGE


def test_detail_lists_amenities():
    text = render_detail(apartment_out("abc", amenities=["Gym", "Pool"]))
    assert "Amenities: Gym, Pool" in text
    assert "Listing ID: abc" in text


def _patch_api(monkeypatch, handler):
    def factory(*args, **kwargs):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api.test")
        return ApartmentsApi(client)

    monkeypatch.setattr(cli, "ApartmentsApi", factory)


def test_cli_detail_not_found(monkeypatch, capsys):
    _patch_api(monkeypatch, lambda request: httpx.Response(404, json={"message": "Apartment not found"}))
    assert cli.main(["--id", "missing"]) == 1
    assert "Apartment not found" in capsys.readouterr().out


def test_cli_lists_page(monkeypatch, capsys):
    item = apartment_out("abc").model_dump(mode="json", by_alias=True)
    seen = []

    def handler(request):
        seen.append(dict(request.url.params))
        return httpx.Response(200, json={
            "items": [item],
            "meta": {"page": 1, "pageSize": 9, "total": 1, "totalPages": 1},
        })

    _patch_api(monkeypatch, handler)
    assert cli.main(["--project", "sunset"]) == 0

    out = capsys.readouterr().out
    assert "Sunset View Apartment" in out
    assert "Showing 1 of 1 apartments" in out
    assert seen == [{"project": "sunset", "page": "1", "pageSize": "9"}]


def test_cli_caps_page_size(monkeypatch, capsys):
    seen = []

    def handler(request):
        seen.append(request.url.params["pageSize"])
        return httpx.Response(200, json={
            "items": [],
            "meta": {"page": 1, "pageSize": 100, "total": 0, "totalPages": 0},
        })

    _patch_api(monkeypatch, handler)
    assert cli.main(["--page-size", "1000"]) == 0
    assert seen == ["100"]


def test_seed_rows_are_unique_per_project():
    rows = seed_apartments.build_rows()
    keys = {(r["project"].lower(), r["unit_number"].lower()) for r in rows}
    assert len(keys) == len(rows)
    assert all(url.endswith("auto=format&fit=crop&w=1600&q=80") for r in rows for url in r["images"])
