# -*- coding: utf-8 -*-
"""
gateway

Authenticated HTTP access to the school backend.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

import httpx

from ...conf import SchoolAdminSettings, current_settings
from ..exceptions import (
    ApiError,
    ConfigurationError,
    RequestTimeout,
    ResponseDecodeError,
    SessionExpired,
    TransportError,
)
from .session import SessionContext, TokenPair


class ApiClient:
    """Send bearer-authenticated JSON requests with one refresh-and-retry."""

    def __init__(
        self,
        session: SessionContext,
        *,
        client: httpx.AsyncClient | None = None,
        settings: SchoolAdminSettings | None = None,
    ) -> None:
        """Bind the client to ``session`` and an optional shared ``client``."""

        self._session = session
        self._settings = settings or current_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()
        self.logger = logging.getLogger(__name__)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client when this instance created it."""

        if self._owns_client:
            await self._client.aclose()

    async def get(self, endpoint: str, **kwargs: Any) -> Any:
        """Issue a ``GET`` request for ``endpoint``."""

        return await self.request("GET", endpoint, **kwargs)

    async def post(self, endpoint: str, **kwargs: Any) -> Any:
        """Issue a ``POST`` request for ``endpoint``."""

        return await self.request("POST", endpoint, **kwargs)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        headers: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Send the request and return the decoded JSON body.

        A ``401`` triggers exactly one credential refresh followed by exactly
        one retry. When the retry is still unauthorized, or the refresh fails,
        the session is cleared and :class:`SessionExpired` is raised.
        """

        url = self._build_url(endpoint)
        request_headers: Dict[str, str] = {"Content-Type": "application/json"}
        request_headers.update(headers or {})
        sent_token = self._session.access_token
        if sent_token:
            request_headers["Authorization"] = f"Bearer {sent_token}"

        response = await self._send(method, url, request_headers, kwargs)

        if response.status_code == httpx.codes.UNAUTHORIZED:
            refreshed = await self._session.refresh(
                self._refresh_tokens, sent_token=sent_token
            )
            if refreshed:
                new_token = self._session.access_token
                if new_token:
                    request_headers["Authorization"] = f"Bearer {new_token}"
                response = await self._send(method, url, request_headers, kwargs)

            if response.status_code == httpx.codes.UNAUTHORIZED:
                self.logger.warning("Session expired. Redirecting to login...")
                self._session.clear()
                raise SessionExpired(self._settings.login_path)

        if not response.is_success:
            raise ApiError(response.status_code, response.text)

        return self._decode(response)

    async def _send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        options: Mapping[str, Any],
    ) -> httpx.Response:
        """Perform one HTTP exchange translating transport failures."""

        try:
            return await self._client.request(
                method,
                url,
                headers=dict(headers),
                timeout=self._settings.request_timeout,
                **options,
            )
        except httpx.TimeoutException as exc:
            raise RequestTimeout() from exc
        except httpx.TransportError as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

    async def _refresh_tokens(self, refresh_token: str) -> TokenPair | None:
        """Exchange ``refresh_token`` for a new credential pair."""

        url = self._build_url(self._settings.refresh_endpoint)
        try:
            response = await self._client.post(
                url,
                json={"refreshToken": refresh_token},
                headers={"Content-Type": "application/json"},
                timeout=self._settings.request_timeout,
            )
        except httpx.HTTPError as exc:
            self.logger.error("Token refresh failed: %s", exc)
            return None
        if not response.is_success:
            return None
        try:
            result = response.json()
        except ValueError:
            self.logger.error("Token refresh returned an invalid body")
            return None
        data = result.get("data") if isinstance(result, Mapping) else None
        access_token = data.get("accessToken") if isinstance(data, Mapping) else None
        if not access_token:
            return None
        return TokenPair(
            access_token=str(access_token),
            refresh_token=data.get("refreshToken") or refresh_token,
        )

    def _build_url(self, endpoint: str) -> str:
        """Join ``endpoint`` onto the configured API base URL."""

        base_url = self._settings.api_base_url
        if not base_url:
            raise ConfigurationError(
                "Missing SCHOOLADMIN_API_BASE_URL in environment configuration"
            )
        path = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        return f"{base_url}{path}"

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Return the JSON body of ``response`` or ``None`` when it is empty."""

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseDecodeError(
                f"Invalid JSON in response from {response.request.url}"
            ) from exc


class MenuGateway:
    """Fetch the role-scoped flat menu list for the signed-in user."""

    def __init__(
        self,
        client: ApiClient,
        *,
        settings: SchoolAdminSettings | None = None,
    ) -> None:
        self._client = client
        self._settings = settings or current_settings()
        self.logger = logging.getLogger(__name__)

    async def fetch_menus(self) -> List[Any]:
        """Return the raw menu records, or ``[]`` for a non-list body."""

        payload = await self._client.get(self._settings.menu_endpoint)
        if not isinstance(payload, list):
            self.logger.error("Invalid API response for menus: %r", payload)
            return []
        return payload


__all__ = ["ApiClient", "MenuGateway"]


# The End
