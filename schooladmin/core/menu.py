# -*- coding: utf-8 -*-
"""
menu

Menu tree builder turning flat normalized menus into an ordered forest.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, Iterator, List

from .normalizer import NormalizedMenuItem, menu_sort_key


class MenuTreeBuilder:
    """Assemble parent-linked menu trees from normalized flat lists."""

    def __init__(self) -> None:
        """Initialize the builder logger."""

        self.logger = logging.getLogger(__name__)

    def build(self, items: Iterable[NormalizedMenuItem]) -> List[NormalizedMenuItem]:
        """Return the sorted root items with children attached.

        Input items are copied, never mutated. An item whose parent is missing
        from the batch, or points at itself, is promoted to the root list.
        """

        nodes = [replace(item, children=[]) for item in items]
        lookup: Dict[str, NormalizedMenuItem] = {}
        for node in nodes:
            if node.id in lookup:
                self.logger.warning(
                    "Duplicate menu identifier %r, the last entry wins", node.id
                )
            lookup[node.id] = node

        roots: List[NormalizedMenuItem] = []
        for node in nodes:
            parent = lookup.get(node.parent_id) if node.parent_id is not None else None
            if parent is None or parent is node:
                roots.append(node)
            else:
                parent.children.append(node)

        roots.sort(key=menu_sort_key)
        for node in nodes:
            if node.children:
                node.children.sort(key=menu_sort_key)
        return roots

    @staticmethod
    def flatten(roots: Iterable[NormalizedMenuItem]) -> Iterator[NormalizedMenuItem]:
        """Yield every node of the forest depth-first in sibling order."""

        stack = list(reversed(list(roots)))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


__all__ = ["MenuTreeBuilder"]


# The End
