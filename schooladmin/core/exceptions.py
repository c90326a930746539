# -*- coding: utf-8 -*-
"""
exceptions

Custom domain exceptions for the navigation core.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations


class SchoolAdminError(Exception):
    """Base class for SchoolAdmin specific exceptions."""

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or "")
        self.detail = detail


class ConfigurationError(SchoolAdminError):
    """Raised when required configuration is missing."""


class UnknownNavigation(SchoolAdminError):
    """Raised when a navigation mount is not registered."""


# --- Gateway errors ----------------------------------------------------------

class GatewayError(SchoolAdminError):
    """Base class for failures talking to the school backend."""


class TransportError(GatewayError):
    """Raised when the backend cannot be reached."""


class RequestTimeout(TransportError):
    """Raised when the backend does not answer within the configured timeout."""

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or "Request timed out. Please try again.")


class ResponseDecodeError(GatewayError):
    """Raised when a backend response body is not valid JSON."""


class ApiError(GatewayError):
    """Raised when the backend answers with an unsuccessful status code."""

    def __init__(self, status_code: int, detail: str | None = None) -> None:
        super().__init__(f"API error: {status_code} - {detail or ''}")
        self.status_code = status_code
        self.body = detail


class SessionExpired(GatewayError):
    """Raised when authorization failed even after a credential refresh."""

    status_code: int = 401

    def __init__(self, login_path: str = "/login", detail: str | None = None) -> None:
        super().__init__(detail or "Unauthorized - Redirecting to login")
        self.login_path = login_path


__all__ = [
    "ApiError",
    "ConfigurationError",
    "GatewayError",
    "RequestTimeout",
    "ResponseDecodeError",
    "SchoolAdminError",
    "SessionExpired",
    "TransportError",
    "UnknownNavigation",
]


# The End
