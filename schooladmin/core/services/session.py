# -*- coding: utf-8 -*-
"""
session

Session credential storage and single-flight token refresh.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, MutableMapping

from ...conf import SchoolAdminSettings, current_settings


@dataclass
class TokenPair:
    """Access and refresh credentials issued by the backend."""

    access_token: str
    refresh_token: str | None = None


@dataclass
class UserProfile:
    """Signed-in user details displayed in the sidebar footer."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    roles: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> "UserProfile | None":
        """Return a profile for ``payload`` or ``None`` when it is not a mapping."""

        if not isinstance(payload, Mapping):
            return None
        roles = payload.get("roles")
        return cls(
            first_name=str(payload.get("firstName") or ""),
            last_name=str(payload.get("lastName") or ""),
            email=str(payload.get("email") or ""),
            roles=[str(role) for role in roles] if isinstance(roles, list) else [],
        )

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-compatible representation stored in the session."""

        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "roles": list(self.roles),
        }

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def primary_role(self) -> str:
        return self.roles[0] if self.roles else "User"


RefreshCallable = Callable[[str], Awaitable["TokenPair | None"]]


class RefreshCoordinator:
    """Run at most one refresh per refresh token at a time."""

    def __init__(self) -> None:
        self._inflight: Dict[str, asyncio.Task[TokenPair | None]] = {}

    @property
    def pending(self) -> int:
        """Return the number of refreshes currently in flight."""
        return len(self._inflight)

    async def run(self, key: str, refresher: RefreshCallable) -> TokenPair | None:
        """Await the in-flight refresh for ``key`` or start one with ``refresher``."""

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(refresher(key))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task[TokenPair | None]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]


class SessionContext:
    """Own the persisted credential triple of one client session.

    ``storage`` is any mutable mapping; the web layer passes the signed
    Starlette session, tests pass a plain ``dict``.
    """

    def __init__(
        self,
        storage: MutableMapping[str, Any],
        *,
        settings: SchoolAdminSettings | None = None,
        coordinator: RefreshCoordinator | None = None,
    ) -> None:
        self._storage = storage
        self._settings = settings or current_settings()
        self._coordinator = coordinator or RefreshCoordinator()
        self.logger = logging.getLogger(__name__)

    @property
    def access_token(self) -> str | None:
        return self._storage.get(self._settings.token_key) or None

    @property
    def refresh_token(self) -> str | None:
        return self._storage.get(self._settings.refresh_token_key) or None

    @property
    def user(self) -> UserProfile | None:
        return UserProfile.from_payload(self._storage.get(self._settings.user_key))

    def navigation_owner(self) -> str:
        """Return the nonce identifying this session's navigation mounts."""

        owner = self._storage.get(self._settings.nav_owner_key)
        if not owner:
            owner = uuid.uuid4().hex
            self._storage[self._settings.nav_owner_key] = owner
        return owner

    def login(
        self,
        access_token: str,
        refresh_token: str | None = None,
        user: UserProfile | None = None,
    ) -> None:
        """Persist a freshly issued credential pair and optional profile."""

        self._storage.pop(self._settings.nav_owner_key, None)
        self.store_tokens(TokenPair(access_token=access_token, refresh_token=refresh_token))
        if user is not None:
            self._storage[self._settings.user_key] = user.to_payload()

    def store_tokens(self, tokens: TokenPair) -> None:
        """Replace the stored access and refresh tokens with ``tokens``."""

        self._storage[self._settings.token_key] = tokens.access_token
        if tokens.refresh_token:
            self._storage[self._settings.refresh_token_key] = tokens.refresh_token
        else:
            self._storage.pop(self._settings.refresh_token_key, None)

    def clear(self) -> None:
        """Remove tokens, profile and the navigation owner together."""

        for key in (
            self._settings.user_key,
            self._settings.token_key,
            self._settings.refresh_token_key,
            self._settings.nav_owner_key,
        ):
            self._storage.pop(key, None)

    async def refresh(self, refresher: RefreshCallable, *, sent_token: str | None) -> bool:
        """Refresh credentials after the backend rejected ``sent_token``.

        Returns ``True`` when a usable access token is stored afterwards. If the
        stored token already differs from ``sent_token`` another caller has
        refreshed in the meantime and no new refresh is issued.
        """

        current = self.access_token
        if current is not None and current != sent_token:
            return True
        refresh_token = self.refresh_token
        if not refresh_token:
            return False
        tokens = await self._coordinator.run(refresh_token, refresher)
        if tokens is None:
            self.logger.warning("Credential refresh was rejected")
            return False
        self.store_tokens(tokens)
        return True


__all__ = [
    "RefreshCoordinator",
    "SessionContext",
    "TokenPair",
    "UserProfile",
]


# The End
