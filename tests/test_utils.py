"""Unit tests for path confinement and content-type lookup."""

from pathlib import Path

import pytest

from utils import DEFAULT_CONTENT_TYPE, get_content_type, resolve_path

BASE_DIR = Path("/srv/frontend")


def _is_within_base(candidate: Path) -> bool:
    try:
        candidate.relative_to(BASE_DIR)
    except ValueError:
        return False
    return True


def test_resolve_plain_file() -> None:
    assert resolve_path(BASE_DIR, "/style.css") == BASE_DIR / "style.css"


def test_resolve_nested_file_collapses_dot_segments() -> None:
    resolved = resolve_path(BASE_DIR, "/js/./vendor/../app.js")

    assert resolved == BASE_DIR / "js" / "app.js"


def test_resolve_root_is_base_dir() -> None:
    assert resolve_path(BASE_DIR, "/") == BASE_DIR
    assert resolve_path(BASE_DIR, "") == BASE_DIR


@pytest.mark.parametrize(
    "request_path",
    [
        "/../secret",
        "/../../etc/passwd",
        "/a/../../b",
        "../../etc/passwd",
        "//../etc/passwd",
        "/%2e%2e/%2e%2e/etc/passwd",
        "/%2E%2E%2Fsecret",
        "/a/%2e%2e/%2e%2e/%2e%2e/b",
        "/..",
    ],
)
def test_traversal_never_escapes_base_dir(request_path: str) -> None:
    resolved = resolve_path(BASE_DIR, request_path)

    assert _is_within_base(resolved)
    assert ".." not in resolved.parts


def test_traversal_lands_on_in_tree_path() -> None:
    assert resolve_path(BASE_DIR, "/../../etc/passwd") == BASE_DIR / "etc" / "passwd"


def test_resolve_decodes_percent_escapes() -> None:
    assert resolve_path(BASE_DIR, "/my%20page.html") == BASE_DIR / "my page.html"


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("index.html", "text/html; charset=utf-8"),
        ("app.js", "application/javascript; charset=utf-8"),
        ("style.css", "text/css; charset=utf-8"),
        ("abi.json", "application/json; charset=utf-8"),
        ("logo.png", "image/png"),
        ("photo.jpg", "image/jpeg"),
        ("photo.jpeg", "image/jpeg"),
        ("icon.svg", "image/svg+xml"),
        ("favicon.ico", "image/x-icon"),
    ],
)
def test_known_extensions(file_name: str, expected: str) -> None:
    assert get_content_type(BASE_DIR / file_name) == expected


def test_extension_lookup_is_case_insensitive() -> None:
    assert get_content_type("LOGO.PNG") == "image/png"
    assert get_content_type("Page.HTML") == "text/html; charset=utf-8"


def test_unknown_or_missing_extension_defaults_to_octet_stream() -> None:
    assert get_content_type("firmware.bin") == DEFAULT_CONTENT_TYPE
    assert get_content_type("LICENSE") == DEFAULT_CONTENT_TYPE
    assert get_content_type("archive.tar.gz") == "application/octet-stream"


def test_only_final_segment_extension_counts() -> None:
    assert get_content_type("/assets.css/README") == DEFAULT_CONTENT_TYPE
