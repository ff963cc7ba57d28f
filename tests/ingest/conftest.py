from typing import Any

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_none

NO_WAIT_RETRY = retry(
    stop=stop_after_attempt(3),
    wait=wait_none(),
    retry=retry_if_exception_type((httpx.TransportError, httpx.HTTPStatusError)),
    reraise=True,
)


class FakeDataSource:
    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self._rows = rows
        self.last_params: dict[str, Any] | None = None

    @property
    def source_type(self) -> str:
        return "test"

    @property
    def source_detail(self) -> str:
        return "fake"

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        self.last_params = params
        return self._rows


class ErrorDataSource:
    @property
    def source_type(self) -> str:
        return "test"

    @property
    def source_detail(self) -> str:
        return "error"

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        raise RuntimeError("fetch failed")


class RouteTransport(httpx.BaseTransport):
    """Answers each request from a table keyed by URL path.

    A key of the form ``path?query`` matches that exact query first. Unknown
    paths get a 404.
    """

    def __init__(self, routes: dict[str, httpx.Response | object]) -> None:
        self._routes = routes
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get(f"{request.url.path}?{request.url.query.decode()}")
        if route is None:
            route = self._routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


class FailNTransport(httpx.BaseTransport):
    """Returns error responses for the first N requests, then succeeds."""

    def __init__(self, fail_count: int, success_response: httpx.Response, *, status: int = 503) -> None:
        self._fail_count = fail_count
        self._success_response = success_response
        self._status = status
        self._call_count = 0

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self._call_count += 1
        if self._call_count <= self._fail_count:
            return httpx.Response(self._status, content=b"Service Unavailable")
        return self._success_response

    @property
    def call_count(self) -> int:
        return self._call_count
