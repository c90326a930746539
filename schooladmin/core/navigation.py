# -*- coding: utf-8 -*-
"""
navigation

Stateful view model for the sidebar navigation tree.

Every branch node is either ``Closed`` (initial) or ``Open``. Users flip the
state with :meth:`NavigationState.toggle`; a branch whose child route matches
the current location is opened automatically and stays open while the match
holds. Nothing ever closes a node except a toggle.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from ..utils.icons import IconRegistry, icon_registry
from .normalizer import NormalizedMenuItem


class NavigationState:
    """Open/closed flags of the branch nodes of one mounted navigation."""

    def __init__(self, open_ids: Iterable[str] = ()) -> None:
        self._open: set[str] = set(open_ids)

    @property
    def open_ids(self) -> frozenset[str]:
        """Return the identifiers of every open node."""
        return frozenset(self._open)

    def is_open(self, node_id: str) -> bool:
        """Return ``True`` when ``node_id`` is open."""
        return node_id in self._open

    def open(self, node_id: str) -> None:
        """Move ``node_id`` to the open state."""
        self._open.add(node_id)

    def close(self, node_id: str) -> None:
        """Move ``node_id`` to the closed state."""
        self._open.discard(node_id)

    def toggle(self, node_id: str) -> bool:
        """Flip ``node_id`` and return its new open flag."""
        if node_id in self._open:
            self._open.discard(node_id)
            return False
        self._open.add(node_id)
        return True

    def reset(self) -> None:
        """Close every node."""
        self._open.clear()


@dataclass
class NavNode:
    """Render-ready projection of a menu item for one location."""

    id: str
    display_name: str
    route: str | None
    icon: str
    level: int = 0
    is_active: bool = False
    is_child_active: bool = False
    is_open: bool = False
    children: List["NavNode"] = field(default_factory=list)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def is_highlighted(self) -> bool:
        return self.is_active or self.is_child_active

    @property
    def href(self) -> str:
        return self.route or "#"


class NavigationBuilder:
    """Project a menu tree onto the current location and navigation state."""

    def __init__(
        self,
        *,
        icons: IconRegistry | None = None,
        deep_match: bool = False,
        max_depth: int = 16,
    ) -> None:
        """Configure icon resolution, active matching depth and recursion bound."""

        self._icons = icons or icon_registry
        self._deep_match = deep_match
        self._max_depth = max(1, max_depth)
        self.logger = logging.getLogger(__name__)

    def build(
        self,
        roots: Sequence[NormalizedMenuItem],
        location: str,
        state: NavigationState,
    ) -> List[NavNode]:
        """Return the view nodes for ``roots`` and open active branches in ``state``."""

        return [self._build_node(item, location, state, 0) for item in roots]

    @staticmethod
    def is_self_active(item: NormalizedMenuItem, location: str) -> bool:
        """Return ``True`` when the route of ``item`` equals ``location``."""

        return item.route is not None and item.route == location

    def is_descendant_active(self, item: NormalizedMenuItem, location: str) -> bool:
        """Return ``True`` when a child route is a prefix of ``location``.

        Only direct children are inspected unless deep matching is enabled.
        """

        for child in item.children:
            if child.route and location.startswith(child.route):
                return True
            if self._deep_match and self.is_descendant_active(child, location):
                return True
        return False

    def _build_node(
        self,
        item: NormalizedMenuItem,
        location: str,
        state: NavigationState,
        level: int,
    ) -> NavNode:
        is_active = self.is_self_active(item, location)
        is_child_active = self.is_descendant_active(item, location)
        if item.children and (is_active or is_child_active):
            state.open(item.id)

        children: List[NavNode] = []
        if item.children:
            if level + 1 < self._max_depth:
                children = [
                    self._build_node(child, location, state, level + 1)
                    for child in item.children
                ]
            else:
                self.logger.warning(
                    "Navigation depth limit %s reached below menu %r",
                    self._max_depth,
                    item.id,
                )

        return NavNode(
            id=item.id,
            display_name=item.display_name,
            route=item.route,
            icon=self._icons.css_class(item.icon),
            level=level,
            is_active=is_active,
            is_child_active=is_child_active,
            is_open=bool(children) and state.is_open(item.id),
            children=children,
        )


__all__ = ["NavNode", "NavigationBuilder", "NavigationState"]


# The End
