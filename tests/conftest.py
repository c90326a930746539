# -*- coding: utf-8 -*-
"""conftest

Shared testing utilities for SchoolAdmin test-suite fixtures.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import asyncio
import inspect
import json
from typing import Any, Callable

import httpx
import pytest

from schooladmin.conf import SchoolAdminSettings

API_BASE_URL = "http://school.test/api"
MENUS_PATH = "/api/Menus/hierarchy"
REFRESH_PATH = "/api/Auth/refresh"

MENU_PAYLOAD: list[dict[str, Any]] = [
    {
        "id": "5",
        "name": "settings",
        "displayName": "Settings",
        "icon": "unknown-glyph",
        "route": "/settings",
        "parentMenuId": None,
        "displayOrder": 9,
    },
    {
        "id": "3",
        "name": "student-list",
        "displayName": "Student List",
        "icon": "list",
        "route": "/students/list",
        "parentMenuId": "2",
        "sortOrder": 1,
    },
    {
        "id": "1",
        "name": "dashboard",
        "displayName": "Dashboard",
        "icon": "layout-dashboard",
        "route": "/dashboard",
        "parentMenuId": None,
        "sortOrder": 1,
    },
    {
        "id": "4",
        "name": "admissions",
        "displayName": "Admissions",
        "icon": "user-plus",
        "route": "/students/admissions",
        "parentMenuId": "2",
        "sortOrder": 2,
        "subMenus": [],
    },
    {
        "id": "2",
        "name": "students",
        "displayName": "Students",
        "icon": "users",
        "route": None,
        "parentMenuId": None,
        "sortOrder": 2,
    },
]

Responder = Callable[[httpx.Request], httpx.Response]


class BackendStub:
    """Scripted school backend served through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        """Start with no scripted responses and an empty request log."""

        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[Responder]] = {}

    def add(self, method: str, path: str, *responders: Responder) -> None:
        """Queue ``responders`` answering ``method path`` in order.

        The last responder keeps answering once the queue is exhausted.
        """

        self._routes.setdefault((method.upper(), path), []).extend(responders)

    def add_json(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        """Queue a JSON response for ``method path``."""

        self.add(method, path, lambda request: httpx.Response(status_code, json=payload))

    def add_status(self, method: str, path: str, status_code: int) -> None:
        """Queue an empty response with ``status_code``."""

        self.add(method, path, lambda request: httpx.Response(status_code))

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        """Return the recorded requests for ``method path``."""

        return [
            request
            for request in self.requests
            if request.method == method.upper() and request.url.path == path
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, text="not scripted")
        responder = queue.pop(0) if len(queue) > 1 else queue[0]
        return responder(request)

    def client(self) -> httpx.AsyncClient:
        """Return an async client routed to this stub."""

        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @staticmethod
    def json_body(request: httpx.Request) -> Any:
        """Decode the JSON body sent with ``request``."""

        return json.loads(request.content.decode("utf-8"))


class AsyncioTestPlugin:
    """Minimal asyncio runner enabling ``async def`` tests without extras."""

    def __init__(self) -> None:
        """Configure the event-loop factory used for async test execution."""

        self._loop_factory = asyncio.new_event_loop

    def pytest_pyfunc_call(self, pyfuncitem: pytest.Function) -> bool | None:
        """Execute coroutine test functions inside a dedicated event loop."""

        if not inspect.iscoroutinefunction(pyfuncitem.obj):
            return None
        signature = inspect.signature(pyfuncitem.obj)
        kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in signature.parameters
            if name in pyfuncitem.funcargs
        }
        loop = self._loop_factory()
        try:
            loop.run_until_complete(pyfuncitem.obj(**kwargs))
            pending = [task for task in asyncio.all_tasks(loop) if not task.done()]
            if pending:
                for task in pending:
                    task.cancel()
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            loop.close()
        return True


class PytestPluginRegistrar:
    """Register custom pytest plugins following project conventions."""

    def __init__(self) -> None:
        """Instantiate and expose plugin objects for registration."""

        self.asyncio_plugin = AsyncioTestPlugin()

    def configure(self, config: pytest.Config) -> None:
        """Register required plugins with the pytest plugin manager."""

        config.addinivalue_line(
            "markers", "asyncio: execute test using the built-in asyncio loop"
        )
        config.pluginmanager.register(self.asyncio_plugin, "schooladmin-asyncio-plugin")


_plugin_registrar = PytestPluginRegistrar()


def pytest_configure(config: pytest.Config) -> None:
    """Integrate custom plugins with pytest's plugin manager."""

    _plugin_registrar.configure(config)


@pytest.fixture
def settings() -> SchoolAdminSettings:
    """Return settings pointing at the stubbed backend."""

    return SchoolAdminSettings(api_base_url=API_BASE_URL, secret_key="test-secret")


@pytest.fixture
def backend() -> BackendStub:
    """Return a fresh scripted backend."""

    return BackendStub()


__all__ = ["API_BASE_URL", "BackendStub", "MENUS_PATH", "MENU_PAYLOAD", "REFRESH_PATH"]


# The End
