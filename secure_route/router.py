"""Match request paths against a table of bracket-placeholder routes.

Routes are tried in the order they were added and the first one whose
method and pattern both match wins::

    router = Router(base_path="/myapp")
    router.map("GET|POST", "/users/[i:id]", show_user, "user")
    router.match("/myapp/users/42", "GET").params  # {"id": "42"}
    router.generate("user", {"id": 42})            # "/myapp/users/42"

"""

import logging
import re
import sys
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Union,
)
from urllib.parse import unquote

from secure_route.errors import DuplicateRouteName, PatternError, UnknownRoute
from secure_route.gateway import RequestPath
from secure_route.matchtypes import MatchTypes
from secure_route.routing import RouteEntry, compile_route, generate_path
from secure_route.types import Match, Response, StatusCode


class Router:
    """Router."""

    FORMAT_STRING = "[%(name)s] - [%(levelname)s] - %(message)s"

    def __init__(
        self,
        routes: Optional[Iterable[Sequence[Any]]] = None,
        base_path: str = "",
        match_types: Optional[Mapping[str, str]] = None,
        name: str = "secure_route",
        configure_logs: bool = True,
        debug: bool = False,
    ) -> None:
        """Initialize Router object."""
        self.name: str = name
        self.debug: bool = debug
        self.base_path: str = ""
        self.match_types = MatchTypes()
        self._routes: List[RouteEntry] = []
        self._named_routes: Dict[str, str] = {}
        self._compiled: Dict[str, re.Pattern[str]] = {}
        self.log = logging.getLogger(self.name)
        if configure_logs:
            self._configure_logging()

        self.set_base_path(base_path)
        if match_types:
            self.add_match_types(match_types)
        if routes:
            self.add_routes(routes)

    @property
    def routes(self) -> List[RouteEntry]:
        """Return registered routes in match order."""
        return list(self._routes)

    @property
    def named_routes(self) -> Dict[str, str]:
        """Return a copy of the route name -> raw pattern index."""
        return dict(self._named_routes)

    def _configure_logging(self) -> None:
        if self._already_configured(self.log):
            return

        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(self.FORMAT_STRING)
        handler.setFormatter(formatter)
        self.log.propagate = False
        if self.debug:
            level = logging.DEBUG
        else:
            level = logging.ERROR
        self.log.setLevel(level)
        self.log.addHandler(handler)

    def _already_configured(self, log) -> bool:
        if not log.handlers:
            return False

        for handler in log.handlers:
            if isinstance(handler, logging.StreamHandler):
                if handler.stream == sys.stdout:
                    return True

        return False

    def set_base_path(self, base_path: str) -> None:
        """Set the prefix stripped before matching and added by generate()."""
        self.base_path = base_path.rstrip("/")

    def add_match_types(self, match_types: Mapping[str, str]) -> None:
        """Register placeholder types, overriding existing tags.

        Raises ``PatternError`` and keeps the previous types if a fragment
        is not a valid regex or breaks an already registered route.
        """
        previous = dict(self.match_types)
        self.match_types.update(match_types)
        # compiled routes may embed an overridden fragment
        self._compiled.clear()
        try:
            for route in self._routes:
                if route.is_parametrized:
                    self._compile(route)
        except PatternError:
            self.match_types = MatchTypes(previous)
            self._compiled.clear()
            raise
        self.log.debug(f"Match types updated: {', '.join(map(repr, match_types))}")

    def add_routes(self, routes: Iterable[Sequence[Any]]) -> None:
        """Register routes given as ``(methods, pattern, handler[, name])``."""
        for route in routes:
            self.map(*route)

    def map(
        self,
        methods: Union[str, Sequence[str]],
        pattern: str,
        handler: Callable,
        name: Optional[str] = None,
    ) -> RouteEntry:
        """Register a route.

        ``methods`` is a ``|`` separated string such as ``"GET|POST"`` or
        a list of method names. Raises ``DuplicateRouteName`` if ``name``
        is taken and ``PatternError`` if the pattern is malformed; the
        table is left unchanged in both cases.
        """
        if name and name in self._named_routes:
            raise DuplicateRouteName(name)

        route = RouteEntry(methods, pattern, handler, name)
        if route.is_parametrized or route.is_regex:
            self._compile(route)

        self._routes.append(route)
        if name:
            self._named_routes[name] = pattern

        self.log.debug(f"Route added: {route.methods} {pattern} ({name or '-'})")
        return route

    def route(
        self,
        pattern: str,
        methods: Union[str, Sequence[str]] = "GET",
        name: Optional[str] = None,
    ) -> Callable:
        """Decorator: register the decorated function as a route handler."""

        def _register_view(handler):
            self.map(methods, pattern, handler, name)
            return handler

        return _register_view

    def _compile(self, route: RouteEntry) -> re.Pattern[str]:
        compiled = self._compiled.get(route.pattern)
        if compiled is None:
            for placeholder in route.placeholders:
                resolution = self.match_types.resolve(placeholder.type_tag)
                if not resolution.registered:
                    self.log.debug(
                        f"Type {resolution.tag!r} of [{placeholder.name}] used as regex"
                    )
            compiled = compile_route(route.pattern, self.match_types)
            self._compiled[route.pattern] = compiled
        return compiled

    def _normalize_path(self, path: str) -> str:
        path = unquote(path)
        if self.base_path and path.startswith(self.base_path):
            path = path[len(self.base_path) :]
        return "/" + path.lstrip("/")

    def _match_route(
        self, route: RouteEntry, path: str
    ) -> Optional[Dict[str, Optional[str]]]:
        if route.is_catch_all:
            return {}

        if route.is_regex:
            found = self._compile(route).match(path)
            return found.groupdict() if found else None

        if not route.is_parametrized:
            return {} if path == route.pattern else None

        if not route.prefilter(path):
            return None

        found = self._compile(route).match(path)
        return found.groupdict() if found else None

    def match(self, path: str, method: Optional[str] = None) -> Optional[Match]:
        """Find the first route matching the request.

        Returns a ``Match`` or None when no route matches. Optional
        placeholders that did not participate are left out of the params.
        """
        method = (method or "GET").upper()
        path = self._normalize_path(path)

        for route in self._routes:
            if not route.accepts_method(method):
                continue

            groups = self._match_route(route, path)
            if groups is None:
                continue

            arguments = [
                (key, value) for key, value in groups.items() if value is not None
            ]
            self.log.debug(f"{method} {path} matched {route.pattern}")
            return Match(
                handler=route.handler,
                params=dict(arguments),
                name=route.name,
                arguments=arguments,
                route=route,
            )

        self.log.debug(f"No route for: {method} - {path}")
        return None

    def generate(self, name: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Build the path of a named route.

        Values are not URL encoded; that is up to the caller.
        """
        if name not in self._named_routes:
            raise UnknownRoute(name)

        return generate_path(self._named_routes[name], params, self.base_path)

    def dispatch(self, path: str, method: Optional[str] = None) -> Response:
        """Match the request and call its handler.

        The handler gets the captured values as positional arguments in
        declaration order. Anything it returns other than a ``Response``
        becomes the body of a 200 response.
        """
        match = self.match(path, method)
        if match is None:
            return Response(
                status_code=StatusCode.NOT_FOUND,
                content_type="text/plain",
                body="404 Not Found",
            )

        try:
            result = match.handler(*[value for _, value in match.arguments])
        except Exception as err:
            self.log.error(str(err))
            return Response(
                status_code=StatusCode.INTERNAL_SERVER_ERROR,
                content_type="text/plain",
                body="500 Internal Server Error",
            )

        if isinstance(result, Response):
            return result
        if result is None:
            result = ""
        elif not isinstance(result, (str, bytes)):
            result = str(result)
        return Response(
            status_code=StatusCode.OK,
            content_type="text/html; charset=utf-8",
            body=result,
        )

    def __call__(self, environ, start_response):
        """WSGI entry point."""
        request = RequestPath(environ)
        if request.path is None:
            response = Response(
                status_code=StatusCode.BAD_REQUEST,
                content_type="text/plain",
                body="Missing or invalid path",
            )
        else:
            response = self.dispatch(request.path, request.method)

        body = response.body
        if isinstance(body, str):
            body = body.encode("utf-8")

        headers = dict(response.headers or {})
        headers["Content-Type"] = response.content_type
        headers["Content-Length"] = str(len(body))
        start_response(response.status_code.status_line, list(headers.items()))
        return [body]
