# -*- coding: utf-8 -*-
"""
core.templates.rendering

Render the sidebar navigation with the packaged templates.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Sequence
from urllib.parse import quote, urlencode

from ..navigation import NavNode
from ..services.session import UserProfile
from .service import TemplateService


class NavigationRenderer:
    """Produce sidebar HTML for a list of :class:`NavNode` roots."""

    template_name = "partials/sidebar.html"

    def __init__(
        self,
        service: TemplateService | None = None,
        *,
        toggle_prefix: str = "/navigation",
    ) -> None:
        self._service = service or TemplateService()
        self._toggle_prefix = toggle_prefix.rstrip("/")

    @property
    def service(self) -> TemplateService:
        return self._service

    def render(
        self,
        nodes: Sequence[NavNode],
        *,
        location: str = "/",
        collapsed: bool = False,
        user: UserProfile | None = None,
        mount_id: str | None = None,
        loading: bool = False,
        error: str | None = None,
    ) -> str:
        """Return the sidebar markup for ``nodes`` at ``location``.

        ``loading`` renders the placeholder an embedding shell shows while the
        menus are being fetched; ``nodes`` are ignored in that state.
        """

        context = self.build_context(
            nodes,
            location=location,
            collapsed=collapsed,
            user=user,
            mount_id=mount_id,
            loading=loading,
            error=error,
        )
        template = self._service.get_templates().get_template(self.template_name)
        return template.render(context)

    def build_context(
        self,
        nodes: Sequence[NavNode],
        *,
        location: str,
        collapsed: bool,
        user: UserProfile | None,
        mount_id: str | None,
        loading: bool,
        error: str | None,
    ) -> Dict[str, Any]:
        """Return the template context for the sidebar partial."""

        settings = self._service.settings
        return {
            "nodes": list(nodes),
            "location": location,
            "collapsed": collapsed,
            "user": user,
            "mount_id": mount_id,
            "loading": loading,
            "error": error,
            "site_title": settings.site_title,
            "site_subtitle": settings.site_subtitle,
            "static_url": settings.static_url,
            "toggle_url": self._toggle_url_factory(mount_id, location, collapsed),
        }

    def _toggle_url_factory(
        self,
        mount_id: str | None,
        location: str,
        collapsed: bool,
    ) -> Callable[[NavNode], str | None]:
        def toggle_url(node: NavNode) -> str | None:
            if mount_id is None:
                return None
            query = urlencode({"path": location, "collapsed": str(collapsed).lower()})
            return (
                f"{self._toggle_prefix}/{quote(mount_id, safe='')}"
                f"/toggle/{quote(node.id, safe='')}?{query}"
            )

        return toggle_url


__all__ = ["NavigationRenderer"]


# The End
