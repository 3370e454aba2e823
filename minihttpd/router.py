"""Route resolution and dispatch using a handler registry."""

from enum import Enum
from http import HTTPStatus
from typing import Callable, Dict

from minihttpd.exceptions import UnsupportedRouteError
from minihttpd.http_constants import HTTPMethod, RoutePrefix
from minihttpd.http_request import HTTPRequest
from minihttpd.http_response import HttpResponse
from minihttpd.route_handler import RouteHandler


class Route(Enum):
    PING = "ping"
    ECHO = "echo"
    USER_AGENT = "user-agent"
    CONFIGURED_DIR_FILE = "configured-dir-file"
    RELATIVE_FILE = "relative-file"
    NOT_FOUND = "not-found"
    STORE_FILE = "store-file"
    UNSUPPORTED = "unsupported"


def _never_servable(path: str) -> bool:
    return False


class Router:
    """
    Route dispatcher using handler registry.

    Routes are decided by method and path prefix, checked in a fixed
    order where the first match wins, then dispatched to the handler
    registered for that route.
    """

    def __init__(self, is_servable: Callable[[str], bool] = _never_servable):
        """
        Initialize router with empty handler registry.

        Args:
            is_servable: Predicate telling whether a GET path names a file
                that may be served relative to the working directory
        """
        self._handlers: Dict[Route, RouteHandler] = {}
        self._is_servable = is_servable

    def register(self, route: Route, handler: RouteHandler) -> None:
        """
        Register a handler for a route.

        Args:
            route: Route the handler serves
            handler: Handler instance implementing RouteHandler protocol
        """
        self._handlers[route] = handler

    def resolve(self, method: str, path: str) -> Route:
        """
        Decide which route a request takes.

        Args:
            method: Request method, matched exactly
            path: Request target without its leading slash

        Returns:
            The first matching route
        """
        if method == HTTPMethod.GET.value:
            if path == RoutePrefix.ROOT.value:
                return Route.PING
            if path.startswith(RoutePrefix.ECHO.value):
                return Route.ECHO
            if path.startswith(RoutePrefix.USER_AGENT.value):
                return Route.USER_AGENT
            if path.startswith(RoutePrefix.FILES.value):
                return Route.CONFIGURED_DIR_FILE
            if self._is_servable(path):
                return Route.RELATIVE_FILE
            return Route.NOT_FOUND

        if method == HTTPMethod.POST.value and path.startswith(RoutePrefix.FILES.value):
            return Route.STORE_FILE

        return Route.UNSUPPORTED

    def dispatch(self, request: HTTPRequest) -> HttpResponse:
        """
        Dispatch request to appropriate handler.

        Args:
            request: Parsed HTTP request

        Returns:
            HTTP response from handler, or 404 if no handler registered

        Raises:
            UnsupportedRouteError: If the method/path combination is not implemented
        """
        route = self.resolve(request.method, request.path)

        if route is Route.UNSUPPORTED:
            raise UnsupportedRouteError(f"{request.method} /{request.path}")

        handler = self._handlers.get(route)

        if handler is None:
            return HttpResponse.empty(HTTPStatus.NOT_FOUND)

        return handler.handle(request)
