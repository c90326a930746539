# -*- coding: utf-8 -*-
"""
menus

Menu pipeline service and the registry of mounted navigations.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import List

from ..exceptions import UnknownNavigation
from ..menu import MenuTreeBuilder
from ..navigation import NavigationState
from ..normalizer import MenuNormalizer, NormalizedMenuItem
from .gateway import MenuGateway


class MenuService:
    """Run fetch, normalize, sort and tree construction for one request."""

    def __init__(
        self,
        gateway: MenuGateway,
        *,
        normalizer: MenuNormalizer | None = None,
        builder: MenuTreeBuilder | None = None,
    ) -> None:
        self._gateway = gateway
        self._normalizer = normalizer or MenuNormalizer()
        self._builder = builder or MenuTreeBuilder()

    async def load_tree(self) -> List[NormalizedMenuItem]:
        """Return the freshly built menu forest for the current session."""

        payload = await self._gateway.fetch_menus()
        items = self._normalizer.sort(self._normalizer.normalize(payload))
        return self._builder.build(items)


@dataclass
class NavigationMount:
    """A rendered navigation instance: its tree and its node states."""

    id: str
    tree: List[NormalizedMenuItem]
    owner: str = ""
    state: NavigationState = field(default_factory=NavigationState)
    error: str | None = None


class NavigationMountRegistry:
    """Keep the most recent navigation mounts of every session.

    Each owner keeps at most ``per_owner`` mounts; ``limit`` caps the whole
    registry. The least recently used mount is evicted first.
    """

    def __init__(self, limit: int = 256, *, per_owner: int = 8) -> None:
        self._limit = max(1, limit)
        self._per_owner = max(1, per_owner)
        self._mounts: "OrderedDict[str, NavigationMount]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._mounts)

    def __contains__(self, mount_id: object) -> bool:
        return mount_id in self._mounts

    def mount(
        self,
        tree: List[NormalizedMenuItem],
        *,
        owner: str = "",
        error: str | None = None,
    ) -> NavigationMount:
        """Register a new mount for ``tree`` owned by ``owner`` with every node closed."""

        mount = NavigationMount(id=uuid.uuid4().hex, tree=tree, owner=owner, error=error)
        self._mounts[mount.id] = mount
        owned = [key for key, item in self._mounts.items() if item.owner == owner]
        for key in owned[: max(0, len(owned) - self._per_owner)]:
            del self._mounts[key]
        while len(self._mounts) > self._limit:
            self._mounts.popitem(last=False)
        return mount

    def get(self, mount_id: str, *, owner: str = "") -> NavigationMount:
        """Return the mount registered under ``mount_id`` for ``owner``.

        A mount belonging to another owner is reported as unknown.
        """

        mount = self._mounts.get(mount_id)
        if mount is None or mount.owner != owner:
            raise UnknownNavigation(f"Unknown navigation mount: {mount_id}")
        self._mounts.move_to_end(mount_id)
        return mount

    def unmount(self, mount_id: str) -> None:
        """Forget ``mount_id`` if it is registered."""

        self._mounts.pop(mount_id, None)

    def unmount_owner(self, owner: str) -> int:
        """Forget every mount of ``owner`` and return how many were dropped."""

        owned = [key for key, item in self._mounts.items() if item.owner == owner]
        for key in owned:
            del self._mounts[key]
        return len(owned)


__all__ = [
    "MenuService",
    "NavigationMount",
    "NavigationMountRegistry",
]


# The End
