"""Path and content-type helpers shared across server modules."""

import posixpath
from pathlib import Path, PurePath
from urllib.parse import unquote

DEFAULT_CONTENT_TYPE = "application/octet-stream"

MIME_TYPES: dict[str, str] = {
    ".html": "text/html; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
}


def get_content_type(file_path: PurePath | str) -> str:
    extension = PurePath(file_path).suffix.lower()
    return MIME_TYPES.get(extension, DEFAULT_CONTENT_TYPE)


def resolve_path(base_dir: Path, request_path: str) -> Path:
    """Map a URL path onto ``base_dir`` without ever leaving it.

    The path is decoded and normalized as an absolute POSIX path first, so
    ``..`` segments collapse against the root before anything is joined.
    """
    decoded_path = unquote(request_path)
    normalized = posixpath.normpath("/" + decoded_path)
    relative_path = normalized.lstrip("/")
    return Path(base_dir) / relative_path
