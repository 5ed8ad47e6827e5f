# backend/homelist/cli.py
"""Browse listings from the terminal against a running API.

    homelist-browse --search sunset --page 2
    homelist-browse --id <apartment id>
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional

from homelist.client.api import ApartmentsApi, resolve_api_base_url
from homelist.client.controller import DEFAULT_PAGE_SIZE, ApartmentsController, ListingState, clamp_page_size
from homelist.client.render import pagination_summary, render_detail, render_grid
from homelist.core.logging_setup import setup_logging
from homelist.exceptions import ApiError

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="homelist-browse")
    ap.add_argument("--base-url", default=None, help="API base URL (default: from env, then localhost:4000)")
    ap.add_argument("--search", default="", help="name / unit number / project contains")
    ap.add_argument("--project", default="", help="project contains")
    ap.add_argument("--page", type=int, default=1)
    ap.add_argument("--page-size", type=int, default=DEFAULT_PAGE_SIZE)
    ap.add_argument("--projects", action="store_true", help="list project names and exit")
    ap.add_argument("--id", dest="apartment_id", default=None, help="show one apartment")
    ap.add_argument("--log-level", default="WARNING")
    return ap


async def browse(args: argparse.Namespace) -> int:
    base_url = args.base_url or resolve_api_base_url("server")
    async with ApartmentsApi(base_url=base_url) as api:
        if args.apartment_id:
            try:
                apartment = await api.fetch_apartment(args.apartment_id)
            except ApiError as exc:
                LOGGER.info("lookup failed: %s", exc)
                print("Apartment not found")
                return 1
            print(render_detail(apartment))
            return 0

        state = ListingState(search=args.search, project=args.project, page_size=clamp_page_size(args.page_size))
        controller = ApartmentsController(api, state=state)
        if args.projects:
            for name in await controller.load_projects():
                print(name)
            return 0

        await controller.refresh()
        # the requested page is clamped against the first page's meta
        if args.page != 1:
            await controller.go_to_page(args.page)

        if controller.error is not None and controller.data is None:
            print(f"Request failed: {controller.error}")
            return 1
        print(render_grid(controller.items))
        print()
        print(pagination_summary(controller.meta))
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    return asyncio.run(browse(args))


if __name__ == "__main__":
    raise SystemExit(main())
