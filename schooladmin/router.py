# -*- coding: utf-8 -*-
"""
router

HTTP endpoints serving the sidebar navigation.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from pydantic import BaseModel, ConfigDict, Field as PField

from .conf import SchoolAdminSettings, current_settings
from .core.exceptions import ConfigurationError, GatewayError, SessionExpired, UnknownNavigation
from .core.navigation import NavigationBuilder
from .core.services.gateway import ApiClient, MenuGateway
from .core.services.menus import MenuService, NavigationMount, NavigationMountRegistry
from .core.services.session import RefreshCoordinator, SessionContext, UserProfile
from .core.templates.rendering import NavigationRenderer
from .core.templates.service import TemplateService


class SessionPayload(BaseModel):
    """Credentials handed over by the login page."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = PField(alias="accessToken", min_length=1)
    refresh_token: str | None = PField(default=None, alias="refreshToken")
    user: dict[str, Any] | None = None


class NavigationRouter:
    """Mount, toggle and render sidebar navigations for browser sessions."""

    menu_unavailable_message = "Menus are unavailable right now."

    def __init__(
        self,
        *,
        settings: SchoolAdminSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        template_service: TemplateService | None = None,
        prefix: str = "/navigation",
    ) -> None:
        """Store configuration and the shared collaborators of every request."""

        self._settings = settings or current_settings()
        self._prefix = prefix.rstrip("/")
        self._owns_client = http_client is None
        self._http_client = http_client
        self._coordinator = RefreshCoordinator()
        self._mounts = NavigationMountRegistry(
            self._settings.nav_mount_limit,
            per_owner=self._settings.nav_mounts_per_session,
        )
        self._builder = NavigationBuilder(
            deep_match=self._settings.nav_deep_match,
            max_depth=self._settings.nav_max_depth,
        )
        self._owns_templates = template_service is None
        self._template_service = template_service or TemplateService(settings=self._settings)
        self._renderer = NavigationRenderer(
            self._template_service,
            toggle_prefix=self._prefix,
        )
        self.logger = logging.getLogger(__name__)

    @property
    def mounts(self) -> NavigationMountRegistry:
        return self._mounts

    def get_http_client(self) -> httpx.AsyncClient:
        """Return the shared HTTP client, creating it on first use."""

        if self._http_client is None:
            self._http_client = httpx.AsyncClient()
        return self._http_client

    async def aclose(self) -> None:
        """Release the HTTP client and template service this router created."""

        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
        if self._owns_templates:
            self._template_service.close()

    def session_for(self, request: Request) -> SessionContext:
        """Return the credential context stored in the request session."""

        return SessionContext(
            request.session,
            settings=self._settings,
            coordinator=self._coordinator,
        )

    def menu_service_for(self, session: SessionContext) -> MenuService:
        """Return the menu pipeline bound to ``session``."""

        client = ApiClient(session, client=self.get_http_client(), settings=self._settings)
        return MenuService(MenuGateway(client, settings=self._settings))

    async def mount_navigation(self, session: SessionContext) -> NavigationMount:
        """Fetch the menu tree for ``session`` and register a new mount."""

        owner = session.navigation_owner()
        try:
            tree = await self.menu_service_for(session).load_tree()
        except SessionExpired:
            raise
        except (GatewayError, ConfigurationError):
            self.logger.exception("Failed to load menus")
            return self._mounts.mount(
                [], owner=owner, error=self.menu_unavailable_message
            )
        return self._mounts.mount(tree, owner=owner)

    def render_mount(
        self,
        mount: NavigationMount,
        *,
        location: str,
        collapsed: bool,
        user: UserProfile | None,
    ) -> str:
        """Return the sidebar markup of ``mount`` for ``location``."""

        nodes = self._builder.build(mount.tree, location, mount.state)
        return self._renderer.render(
            nodes,
            location=location,
            collapsed=collapsed,
            user=user,
            mount_id=mount.id,
            error=mount.error,
        )

    def build_router(self) -> APIRouter:
        """Construct the navigation routes."""

        router = APIRouter()

        @router.get(self._prefix, response_class=HTMLResponse)
        async def navigation(
            request: Request,
            path: str = "/",
            collapsed: bool = False,
            loading: bool = False,
        ):
            session = self.session_for(request)
            user = session.user
            if user is None:
                return HTMLResponse("")
            if loading:
                return HTMLResponse(
                    self._renderer.render(
                        [], location=path, collapsed=collapsed, user=user, loading=True
                    )
                )
            mount = await self.mount_navigation(session)
            return HTMLResponse(
                self.render_mount(mount, location=path, collapsed=collapsed, user=user)
            )

        @router.post(
            self._prefix + "/{mount_id}/toggle/{item_id}",
            response_class=HTMLResponse,
        )
        async def toggle(
            request: Request,
            mount_id: str,
            item_id: str,
            path: str = "/",
            collapsed: bool = False,
        ):
            session = self.session_for(request)
            user = session.user
            if user is None:
                return HTMLResponse("")
            try:
                mount = self._mounts.get(mount_id, owner=session.navigation_owner())
            except UnknownNavigation:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from None
            mount.state.toggle(item_id)
            return HTMLResponse(
                self.render_mount(mount, location=path, collapsed=collapsed, user=user)
            )

        @router.post("/session", status_code=status.HTTP_204_NO_CONTENT)
        async def store_session(request: Request, payload: SessionPayload):
            self.session_for(request).login(
                payload.access_token,
                payload.refresh_token,
                UserProfile.from_payload(payload.user),
            )
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        @router.post("/logout")
        async def logout(request: Request):
            session = self.session_for(request)
            self._mounts.unmount_owner(session.navigation_owner())
            session.clear()
            return RedirectResponse(self._settings.login_path, status_code=303)

        return router


__all__ = ["NavigationRouter", "SessionPayload"]


# The End
