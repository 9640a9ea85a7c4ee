"""Route handlers for the landing page and static files."""

from __future__ import annotations

import asyncio
import os
import stat
from pathlib import Path

from config import ENTRY_PAGES
from request import HTTPRequest
from response import HTTPResponse, plain_text
from utils import get_content_type

LANDING_TITLE = "CDS528 Frontend"


def _render_landing_page() -> str:
    links = "".join(f'<li><a href="/{name}">{name}</a></li>' for name in ENTRY_PAGES.values())
    return (
        '<!doctype html><html><head><meta charset="utf-8">'
        f"<title>{LANDING_TITLE}</title></head>"
        f"<body><h1>{LANDING_TITLE}</h1><ul>{links}</ul></body></html>"
    )


LANDING_PAGE_HTML = _render_landing_page()


def landing_page(request: HTTPRequest) -> HTTPResponse:
    _ = request
    return HTTPResponse(
        status_code=200,
        headers={"Content-Type": "text/html; charset=utf-8"},
        body=LANDING_PAGE_HTML,
    )


def _stat_servable(file_path: Path, base_dir: Path) -> tuple[Path, os.stat_result] | None:
    """Return the canonical path and stat of a regular file inside ``base_dir``."""
    try:
        canonical = file_path.resolve(strict=True)
        canonical.relative_to(base_dir)
        file_stat = canonical.stat()
    except (OSError, RuntimeError, ValueError):
        return None

    if not stat.S_ISREG(file_stat.st_mode):
        return None
    return canonical, file_stat


async def serve_file(file_path: Path, base_dir: Path) -> HTTPResponse:
    """Check ``file_path`` off the event loop and describe the response for it.

    The body is not read here; the connection writer streams ``file_path``
    in chunks once the head has been sent.
    """
    loop = asyncio.get_running_loop()
    servable = await loop.run_in_executor(None, _stat_servable, file_path, base_dir)
    if servable is None:
        return plain_text(404)

    canonical, file_stat = servable
    return HTTPResponse(
        status_code=200,
        headers={"Content-Type": get_content_type(file_path)},
        file_path=canonical,
        content_length=file_stat.st_size,
    )
