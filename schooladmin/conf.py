# -*- coding: utf-8 -*-
"""
conf

Runtime configuration utilities for the SchoolAdmin package.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from threading import RLock
from typing import Callable, Mapping


@dataclass
class SchoolAdminSettings:
    """Container for front-end configuration derived from environment variables."""

    secret_key: str = "change-me"
    session_secret: str | None = None
    session_cookie: str = "schooladmin_session"
    api_base_url: str | None = None
    request_timeout: float = 10.0
    menu_endpoint: str = "/Menus/hierarchy"
    refresh_endpoint: str = "/Auth/refresh"
    login_path: str = "/login"
    token_key: str = "sms_token"
    refresh_token_key: str = "sms_refresh_token"
    user_key: str = "sms_user"
    site_title: str = "EduManage"
    site_subtitle: str = "School Management"
    nav_deep_match: bool = False
    nav_max_depth: int = 16
    nav_mount_limit: int = 256
    nav_mounts_per_session: int = 8
    nav_owner_key: str = "sms_nav_owner"
    static_url: str = "/static/schooladmin"

    def __post_init__(self) -> None:
        """Finalize defaults and normalise path-like values."""
        if not self.session_secret:
            self.session_secret = self.secret_key
        if self.api_base_url is not None:
            cleaned = self.api_base_url.strip().rstrip("/")
            self.api_base_url = cleaned or None
        self.menu_endpoint = self._normalize_endpoint(self.menu_endpoint)
        self.refresh_endpoint = self._normalize_endpoint(self.refresh_endpoint)
        self.login_path = self._normalize_endpoint(self.login_path)
        if self.request_timeout <= 0:
            self.request_timeout = 10.0
        if self.nav_max_depth < 1:
            self.nav_max_depth = 1
        self.static_url = self._normalize_endpoint(self.static_url)
        if self.nav_mounts_per_session < 1:
            self.nav_mounts_per_session = 1
        if self.nav_mount_limit < 1:
            self.nav_mount_limit = 1

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        prefix: str = "SCHOOLADMIN_",
    ) -> "SchoolAdminSettings":
        """Build a settings instance from environment variables."""
        source = os.environ if env is None else env
        data = {key[len(prefix) :]: value for key, value in source.items() if key.startswith(prefix)}
        secret_key = data.get("SECRET_KEY") or source.get("SECRET_KEY") or "change-me"
        api_base_url = data.get("API_BASE_URL") or source.get("API_BASE_URL")
        return cls(
            secret_key=secret_key,
            session_secret=data.get("SESSION_SECRET"),
            session_cookie=data.get("SESSION_COOKIE") or "schooladmin_session",
            api_base_url=api_base_url,
            request_timeout=cls._to_float(data.get("REQUEST_TIMEOUT"), default=10.0),
            menu_endpoint=data.get("MENU_ENDPOINT") or "/Menus/hierarchy",
            refresh_endpoint=data.get("REFRESH_ENDPOINT") or "/Auth/refresh",
            login_path=data.get("LOGIN_PATH") or "/login",
            token_key=data.get("TOKEN_KEY") or "sms_token",
            refresh_token_key=data.get("REFRESH_TOKEN_KEY") or "sms_refresh_token",
            user_key=data.get("USER_KEY") or "sms_user",
            site_title=data.get("SITE_TITLE") or "EduManage",
            site_subtitle=data.get("SITE_SUBTITLE") or "School Management",
            nav_deep_match=cls._to_bool(data.get("NAV_DEEP_MATCH")),
            nav_max_depth=cls._to_int(data.get("NAV_MAX_DEPTH"), default=16),
            nav_mount_limit=cls._to_int(data.get("NAV_MOUNT_LIMIT"), default=256),
            nav_mounts_per_session=cls._to_int(data.get("NAV_MOUNTS_PER_SESSION"), default=8),
            nav_owner_key=data.get("NAV_OWNER_KEY") or "sms_nav_owner",
            static_url=data.get("STATIC_URL") or "/static/schooladmin",
        )

    @staticmethod
    def _to_int(value: str | None, *, default: int) -> int:
        """Return an integer from ``value`` or ``default`` when conversion fails."""
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    @staticmethod
    def _to_float(value: str | None, *, default: float) -> float:
        """Return a float from ``value`` or ``default`` when conversion fails."""
        if value is None:
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    @staticmethod
    def _to_bool(value: str | None, *, default: bool = False) -> bool:
        """Return a boolean parsed from ``value`` with a ``default`` fallback."""

        if value is None:
            return default
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        return default

    @staticmethod
    def _normalize_endpoint(value: str) -> str:
        """Ensure endpoints contain a single leading slash and no trailing one."""
        stripped = (value or "").strip().strip("/")
        return "/" + stripped


class SettingsManager:
    """Central storage for the active ``SchoolAdminSettings`` instance."""

    def __init__(self, initial: SchoolAdminSettings | None = None) -> None:
        """Prepare storage with an optional preconfigured ``initial`` settings."""

        self._lock = RLock()
        self._settings = initial
        self._callbacks: list[Callable[[SchoolAdminSettings], None]] = []

    def configure(self, settings: SchoolAdminSettings) -> None:
        """Install a new settings instance and notify observers."""
        with self._lock:
            self._settings = settings
            for callback in list(self._callbacks):
                callback(settings)

    def current(self) -> SchoolAdminSettings:
        """Return the active settings, lazily initializing from the environment."""
        with self._lock:
            if self._settings is None:
                self._settings = SchoolAdminSettings.from_env()
            return self._settings

    def register(self, callback: Callable[[SchoolAdminSettings], None]) -> None:
        """Register a callback invoked whenever settings change."""
        with self._lock:
            self._callbacks.append(callback)

    def unregister(self, callback: Callable[[SchoolAdminSettings], None]) -> None:
        """Remove a previously registered settings change callback if present."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)


_settings_manager = SettingsManager()


def configure(settings: SchoolAdminSettings) -> None:
    """Public entry point to install application specific settings."""
    _settings_manager.configure(settings)


def current_settings() -> SchoolAdminSettings:
    """Return the active settings instance used by SchoolAdmin components."""
    return _settings_manager.current()


def register_settings_observer(callback: Callable[[SchoolAdminSettings], None]) -> None:
    """Subscribe to configuration changes for global singletons."""
    _settings_manager.register(callback)


def unregister_settings_observer(callback: Callable[[SchoolAdminSettings], None]) -> None:
    """Unsubscribe from configuration changes previously registered."""
    _settings_manager.unregister(callback)


__all__ = [
    "SchoolAdminSettings",
    "SettingsManager",
    "configure",
    "current_settings",
    "register_settings_observer",
    "unregister_settings_observer",
]


# The End
