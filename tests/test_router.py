"""Unit tests for method/path router behavior."""

from request import HTTPRequest
from response import HTTPResponse
from router import Router


def _handler_ok(_request: HTTPRequest) -> HTTPResponse:
    return HTTPResponse(status_code=200, body="ok")


def test_router_resolves_exact_method_and_path() -> None:
    router = Router()
    router.add_route("get", "/", _handler_ok)

    assert router.resolve("GET", "/") is _handler_ok


def test_head_falls_back_to_get_route() -> None:
    router = Router()
    router.add_route("GET", "/", _handler_ok)

    assert router.resolve("HEAD", "/") is _handler_ok


def test_empty_path_resolves_as_root() -> None:
    router = Router()
    router.add_route("GET", "/", _handler_ok)

    assert router.resolve("GET", "") is _handler_ok


def test_router_returns_none_for_unknown_path() -> None:
    router = Router()
    router.add_route("GET", "/", _handler_ok)

    assert router.resolve("GET", "/missing") is None
    assert router.resolve("POST", "/") is None


def test_router_rejects_invalid_path() -> None:
    router = Router()

    try:
        router.add_route("GET", "missing-slash", _handler_ok)
    except ValueError as exc:
        assert "path must start" in str(exc)
    else:
        raise AssertionError("Expected ValueError for invalid route path")
