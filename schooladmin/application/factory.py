# -*- coding: utf-8 -*-
"""
application.factory

Factories for assembling the SchoolAdmin FastAPI application.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware
from starlette.staticfiles import StaticFiles

from ..conf import SchoolAdminSettings, current_settings
from ..core.exceptions import SessionExpired
from ..core.templates.service import TemplateService
from ..router import NavigationRouter

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

LifecycleHook = Callable[[], Awaitable[None] | None]


class ApplicationFactory:
    """Create configured FastAPI applications serving the school sidebar."""

    def __init__(
        self,
        *,
        settings: SchoolAdminSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        template_service: TemplateService | None = None,
    ) -> None:
        """Persist configuration and supporting services for application builds."""

        self._settings = settings
        self._http_client = http_client
        self._template_service = template_service
        self._startup_hooks: list[LifecycleHook] = []
        self._shutdown_hooks: list[LifecycleHook] = []

    def register_startup_hook(self, hook: LifecycleHook) -> None:
        """Store a coroutine or callable to execute during application startup."""

        self._startup_hooks.append(hook)

    def register_shutdown_hook(self, hook: LifecycleHook) -> None:
        """Store a coroutine or callable to execute during application shutdown."""

        self._shutdown_hooks.append(hook)

    def build(self, *, settings: SchoolAdminSettings | None = None) -> FastAPI:
        """Return a FastAPI instance wired with the navigation routes."""

        if settings is not None:
            self._settings = settings
        resolved = self._settings or current_settings()
        navigation = NavigationRouter(
            settings=resolved,
            http_client=self._http_client,
            template_service=self._template_service,
        )

        app = FastAPI(title=resolved.site_title, lifespan=self._lifespan(navigation))
        app.state.settings = resolved
        app.state.navigation = navigation
        app.add_middleware(
            SessionMiddleware,
            secret_key=resolved.session_secret,
            session_cookie=resolved.session_cookie,
        )
        app.add_exception_handler(SessionExpired, self._handle_session_expired)
        app.include_router(navigation.build_router())
        app.mount(
            resolved.static_url,
            StaticFiles(directory=str(STATIC_DIR)),
            name="schooladmin-static",
        )
        return app

    def _lifespan(self, navigation: NavigationRouter):
        """Return the lifespan context running hooks and closing the HTTP client."""

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[None]:
            for hook in self._startup_hooks:
                await self._call(hook)
            try:
                yield
            finally:
                for hook in self._shutdown_hooks:
                    await self._call(hook)
                await navigation.aclose()

        return lifespan

    @staticmethod
    async def _call(hook: LifecycleHook) -> None:
        result = hook()
        if result is not None:
            await result

    @staticmethod
    async def _handle_session_expired(request: Request, exc: SessionExpired) -> RedirectResponse:
        """Drop the stored credentials and send the browser to the login page."""

        navigation: NavigationRouter = request.app.state.navigation
        navigation.session_for(request).clear()
        return RedirectResponse(exc.login_path, status_code=303)


__all__ = ["ApplicationFactory", "LifecycleHook", "STATIC_DIR"]


# The End
