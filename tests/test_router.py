from http import HTTPStatus

import pytest

from minihttpd.exceptions import UnsupportedRouteError
from minihttpd.http_request import HTTPRequest
from minihttpd.route_handler import EchoHandler, RootHandler
from minihttpd.router import Route, Router


def servable_only(*paths):
    return lambda path: path in paths


@pytest.mark.parametrize(
    "method, path, route",
    [
        ("GET", "", Route.PING),
        ("GET", "echo/abc", Route.ECHO),
        ("GET", "echo/", Route.ECHO),
        ("GET", "echo", Route.NOT_FOUND),
        ("GET", "user-agent", Route.USER_AGENT),
        ("GET", "user-agentish", Route.USER_AGENT),
        ("GET", "files/report.pdf", Route.CONFIGURED_DIR_FILE),
        ("GET", "files/user-agent", Route.CONFIGURED_DIR_FILE),
        ("GET", "files/echo/x", Route.CONFIGURED_DIR_FILE),
        ("GET", "static/index.html", Route.RELATIVE_FILE),
        ("GET", "static/missing.html", Route.NOT_FOUND),
        ("POST", "files/note.txt", Route.STORE_FILE),
        ("POST", "echo/abc", Route.UNSUPPORTED),
        ("POST", "", Route.UNSUPPORTED),
        ("PUT", "files/note.txt", Route.UNSUPPORTED),
        ("HEAD", "", Route.UNSUPPORTED),
        ("get", "", Route.UNSUPPORTED),
    ],
)
def test_resolve(method, path, route):
    router = Router(is_servable=servable_only("static/index.html"))
    assert router.resolve(method, path) is route


def test_prefix_routes_win_over_servable_files():
    router = Router(is_servable=lambda path: True)
    assert router.resolve("GET", "echo/a/b") is Route.ECHO
    assert router.resolve("GET", "files/a/b") is Route.CONFIGURED_DIR_FILE


def test_default_router_serves_no_relative_files():
    assert Router().resolve("GET", "static/index.html") is Route.NOT_FOUND


def test_dispatch_uses_registered_handler():
    router = Router()
    router.register(Route.PING, RootHandler())
    router.register(Route.ECHO, EchoHandler())

    assert router.dispatch(HTTPRequest("GET", "echo/hi")).body == b"hi"
    assert router.dispatch(HTTPRequest("GET", "")).status is HTTPStatus.OK
    assert router.dispatch(HTTPRequest("POST", "files/x")).status is HTTPStatus.NOT_FOUND


def test_dispatch_without_handler_is_not_found():
    response = Router().dispatch(HTTPRequest("GET", "files/x"))
    assert response.status is HTTPStatus.NOT_FOUND
    assert response.body is None


def test_dispatch_unsupported_raises():
    with pytest.raises(UnsupportedRouteError):
        Router().dispatch(HTTPRequest("DELETE", "files/x"))
