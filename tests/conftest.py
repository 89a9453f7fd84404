"""Pytest configuration and shared fixtures for the htmlstitch test suite.

Fragment sources are served by ``httpx.MockTransport``; no test touches the
network.
"""

from __future__ import annotations

from typing import Callable, Generator, Union

import httpx
import pytest

Route = Union[tuple[int, str], type[httpx.RequestError], Callable[[httpx.Request], httpx.Response]]


class FragmentServer:
    """In-memory fragment sources keyed by absolute URL.

    A route is either a ``(status, body)`` tuple, an ``httpx.RequestError``
    subclass to raise, or a handler returning an ``httpx.Response``. Unknown
    URLs answer 404. Every requested URL is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Route] = {}
        self.requests: list[str] = []
        self.client = httpx.Client(transport=httpx.MockTransport(self._handle))

    def add(self, url: str, route: Route) -> str:
        self.routes[url] = route
        return url

    def _handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404)
        if isinstance(route, tuple):
            status, body = route
            return httpx.Response(status, text=body)
        if isinstance(route, type) and issubclass(route, httpx.RequestError):
            raise route("simulated failure", request=request)
        return route(request)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "e2e: End-to-end tests running the installed command")


@pytest.fixture
def fragment_server() -> Generator[FragmentServer, None, None]:
    """Provide an in-memory fragment server and its client."""
    server = FragmentServer()
    try:
        yield server
    finally:
        server.client.close()
