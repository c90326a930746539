# -*- coding: utf-8 -*-
"""
test_session

Credential storage and single-flight refresh behaviour.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import asyncio

from schooladmin.conf import SchoolAdminSettings
from schooladmin.core.services.session import (
    RefreshCoordinator,
    SessionContext,
    TokenPair,
    UserProfile,
)


class CountingRefresher:
    """Refresh callable recording how often it was awaited."""

    def __init__(self, result: TokenPair | None, delay: float = 0.01) -> None:
        self.result = result
        self.delay = delay
        self.calls: list[str] = []

    async def __call__(self, refresh_token: str) -> TokenPair | None:
        self.calls.append(refresh_token)
        await asyncio.sleep(self.delay)
        return self.result


def test_login_and_clear_manage_all_keys(settings: SchoolAdminSettings) -> None:
    storage: dict = {}
    session = SessionContext(storage, settings=settings)

    session.login("access", "refresh", UserProfile(first_name="Ada", roles=["admin"]))

    assert storage["sms_token"] == "access"
    assert storage["sms_refresh_token"] == "refresh"
    assert session.user.first_name == "Ada"

    session.clear()

    assert storage == {}
    assert session.access_token is None
    assert session.refresh_token is None
    assert session.user is None


def test_storing_tokens_without_refresh_drops_old_refresh(settings: SchoolAdminSettings) -> None:
    storage = {"sms_token": "a", "sms_refresh_token": "r"}
    session = SessionContext(storage, settings=settings)

    session.store_tokens(TokenPair(access_token="b"))

    assert storage == {"sms_token": "b"}


class TestUserProfile:
    """Parsing and presentation of the stored user profile."""

    def test_from_payload(self) -> None:
        user = UserProfile.from_payload(
            {"firstName": "Grace", "lastName": "Hopper", "email": "g@school.test", "roles": ["Principal"]}
        )

        assert user.full_name == "Grace Hopper"
        assert user.initials == "GH"
        assert user.primary_role == "Principal"
        assert UserProfile.from_payload(user.to_payload()) == user

    def test_non_mapping_payload(self) -> None:
        assert UserProfile.from_payload("Grace") is None
        assert UserProfile.from_payload(None) is None

    def test_role_defaults_to_user(self) -> None:
        user = UserProfile.from_payload({"firstName": "Grace", "roles": "admin"})

        assert user.roles == []
        assert user.primary_role == "User"
        assert user.initials == "G"


async def test_refresh_stores_new_tokens(settings: SchoolAdminSettings) -> None:
    storage = {"sms_token": "old", "sms_refresh_token": "r1"}
    session = SessionContext(storage, settings=settings)
    refresher = CountingRefresher(TokenPair("new", "r2"))

    assert await session.refresh(refresher, sent_token="old") is True

    assert refresher.calls == ["r1"]
    assert storage == {"sms_token": "new", "sms_refresh_token": "r2"}


async def test_refresh_without_refresh_token_fails(settings: SchoolAdminSettings) -> None:
    session = SessionContext({"sms_token": "old"}, settings=settings)
    refresher = CountingRefresher(TokenPair("new"))

    assert await session.refresh(refresher, sent_token="old") is False
    assert refresher.calls == []


async def test_rejected_refresh_keeps_storage(settings: SchoolAdminSettings) -> None:
    storage = {"sms_token": "old", "sms_refresh_token": "r1"}
    session = SessionContext(storage, settings=settings)

    assert await session.refresh(CountingRefresher(None), sent_token="old") is False
    assert storage == {"sms_token": "old", "sms_refresh_token": "r1"}


async def test_stale_token_skips_refresh(settings: SchoolAdminSettings) -> None:
    """A caller whose token was already replaced reuses the stored credentials."""

    session = SessionContext({"sms_token": "new", "sms_refresh_token": "r2"}, settings=settings)
    refresher = CountingRefresher(TokenPair("newer"))

    assert await session.refresh(refresher, sent_token="old") is True
    assert refresher.calls == []
    assert session.access_token == "new"


async def test_concurrent_refreshes_share_one_call(settings: SchoolAdminSettings) -> None:
    coordinator = RefreshCoordinator()
    storage = {"sms_token": "old", "sms_refresh_token": "r1"}
    sessions = [
        SessionContext(storage, settings=settings, coordinator=coordinator) for _ in range(5)
    ]
    refresher = CountingRefresher(TokenPair("new", "r2"), delay=0.05)

    results = await asyncio.gather(
        *(session.refresh(refresher, sent_token="old") for session in sessions)
    )

    assert results == [True] * 5
    assert refresher.calls == ["r1"]
    assert storage["sms_token"] == "new"
    assert coordinator.pending == 0


async def test_coordinator_starts_new_refresh_after_completion() -> None:
    coordinator = RefreshCoordinator()
    refresher = CountingRefresher(TokenPair("new"))

    await coordinator.run("r1", refresher)
    await coordinator.run("r1", refresher)

    assert refresher.calls == ["r1", "r1"]


def test_navigation_owner_is_stable_until_cleared(settings: SchoolAdminSettings) -> None:
    storage: dict = {}
    session = SessionContext(storage, settings=settings)

    owner = session.navigation_owner()

    assert owner == session.navigation_owner()
    assert storage["sms_nav_owner"] == owner
    session.clear()
    assert "sms_nav_owner" not in storage
    assert session.navigation_owner() != owner


def test_login_starts_a_new_navigation_owner(settings: SchoolAdminSettings) -> None:
    session = SessionContext({}, settings=settings)
    owner = session.navigation_owner()

    session.login("access", "refresh")

    assert session.navigation_owner() != owner


# The End
