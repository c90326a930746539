# -*- coding: utf-8 -*-
"""
core.templates.service

Shared template service owning the Jinja2 environment.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from fastapi.templating import Jinja2Templates

from ...conf import (
    SchoolAdminSettings,
    current_settings,
    register_settings_observer,
    unregister_settings_observer,
)


TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"


class TemplateService:
    """Manage template search paths and the cached ``Jinja2Templates``."""

    def __init__(
        self,
        *,
        templates_dir: str | Path | Iterable[str | Path] | None = None,
        settings: SchoolAdminSettings | None = None,
    ) -> None:
        """Configure the service with template locations and settings."""

        self._template_dirs = self._coerce_template_dirs(
            templates_dir or TEMPLATES_DIR
        )
        self._settings = settings or current_settings()
        self._templates: Jinja2Templates | None = None
        self._observing = settings is None
        if self._observing:
            register_settings_observer(self._apply_settings)

    @property
    def settings(self) -> SchoolAdminSettings:
        """Return the settings exposed to templates."""

        return self._settings

    def get_templates(self) -> Jinja2Templates:
        """Return the cached ``Jinja2Templates`` environment."""

        if self._templates is None:
            templates = Jinja2Templates(directory=list(self._template_dirs))
            templates.env.globals["settings"] = self._settings
            self._templates = templates
        return self._templates

    def close(self) -> None:
        """Stop following global settings changes."""

        if self._observing:
            unregister_settings_observer(self._apply_settings)
            self._observing = False

    def _apply_settings(self, settings: SchoolAdminSettings) -> None:
        """Update cached configuration when global settings change."""

        self._settings = settings
        if self._templates is not None:
            self._templates.env.globals["settings"] = settings

    def add_template_directory(self, directory: str | Path) -> None:
        """Ensure ``directory`` is part of the template search path."""

        normalized = str(directory)
        if normalized in self._template_dirs:
            return
        self._template_dirs.append(normalized)
        if self._templates is not None:
            loader = self._templates.env.loader
            if hasattr(loader, "searchpath"):
                search_paths = list(getattr(loader, "searchpath", []))
                if normalized not in search_paths:
                    search_paths.append(normalized)
                    loader.searchpath = search_paths  # type: ignore[attr-defined]

    @staticmethod
    def _coerce_template_dirs(
        templates_dir: str | Path | Iterable[str | Path]
    ) -> list[str]:
        """Normalise ``templates_dir`` into a mutable list of search paths."""

        if isinstance(templates_dir, (str, Path)):
            return [str(templates_dir)]
        return [str(path) for path in templates_dir]


__all__ = ["TEMPLATES_DIR", "TemplateService"]


# The End
