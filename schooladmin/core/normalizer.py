# -*- coding: utf-8 -*-
"""
normalizer

Conversion of raw menu payloads into canonical navigation items.

The backend returns menus with ``parentMenuId``/``sortOrder`` while several
older endpoints expose ``parentId``, ``displayOrder`` or ``order`` instead.
Everything downstream of this module only sees :class:`NormalizedMenuItem`.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List

from pydantic import BaseModel, ConfigDict, Field as PField, ValidationError, field_validator


class MenuRecord(BaseModel):
    """Raw menu entry as received from ``GET /Menus/hierarchy``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str | None = None
    display_name: str | None = PField(default=None, alias="displayName")
    description: str | None = None
    icon: str | None = None
    route: str | None = None
    parent_menu_id: str | None = PField(default=None, alias="parentMenuId")
    parent_id: str | None = PField(default=None, alias="parentId")
    sort_order: int | None = PField(default=None, alias="sortOrder")
    display_order: int | None = PField(default=None, alias="displayOrder")
    order: int | None = None
    sub_menus: list[Any] = PField(default_factory=list, alias="subMenus")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("identifier must be a string or a number")
        if isinstance(value, int):
            value = str(value)
        if isinstance(value, str) and not value.strip():
            raise ValueError("identifier must not be empty")
        return value

    @field_validator("parent_menu_id", "parent_id", mode="before")
    @classmethod
    def _coerce_parent(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("sub_menus", mode="before")
    @classmethod
    def _coerce_sub_menus(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []


@dataclass
class NormalizedMenuItem:
    """Canonical menu entry consumed by the tree builder and the sidebar."""

    id: str
    display_name: str
    name: str | None = None
    description: str | None = None
    icon: str | None = None
    route: str | None = None
    parent_id: str | None = None
    order: int = 0
    children: List["NormalizedMenuItem"] = field(default_factory=list)

    @property
    def has_children(self) -> bool:
        """Return ``True`` when the item owns at least one child."""
        return bool(self.children)


def menu_sort_key(item: NormalizedMenuItem) -> tuple[int, str]:
    """Return the sibling ordering key: order first, then display name."""
    return (item.order, item.display_name.casefold())


class MenuNormalizer:
    """Turn heterogeneous menu payloads into :class:`NormalizedMenuItem` lists."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(__name__)

    def normalize(self, payload: Any) -> List[NormalizedMenuItem]:
        """Return normalized items for ``payload``.

        A payload that is not a list is logged and treated as an empty batch.
        Entries failing validation are skipped individually.
        """

        if not isinstance(payload, (list, tuple)):
            self.logger.warning(
                "Invalid menu payload, expected a list but got %s",
                type(payload).__name__,
            )
            return []
        items: List[NormalizedMenuItem] = []
        for position, raw in enumerate(payload):
            try:
                record = MenuRecord.model_validate(raw)
            except ValidationError as exc:
                self.logger.warning(
                    "Skipping malformed menu entry at index %s: %s",
                    position,
                    exc.errors(include_url=False),
                )
                continue
            items.append(self.normalize_record(record))
        return items

    def normalize_record(self, record: MenuRecord) -> NormalizedMenuItem:
        """Return the canonical form of a single validated ``record``."""

        route = record.route or None
        return NormalizedMenuItem(
            id=record.id,
            display_name=record.display_name or record.name or record.id,
            name=record.name,
            description=record.description,
            icon=record.icon or None,
            route=route,
            parent_id=self.resolve_parent(record),
            order=self.resolve_order(record),
        )

    @staticmethod
    def resolve_order(record: MenuRecord) -> int:
        """Return the first populated ordering hint or ``0``."""

        for candidate in (record.sort_order, record.display_order, record.order):
            if candidate is not None:
                return candidate
        return 0

    @staticmethod
    def resolve_parent(record: MenuRecord) -> str | None:
        """Return the canonical parent identifier for ``record``."""

        if record.parent_menu_id is not None:
            return record.parent_menu_id
        return record.parent_id

    @staticmethod
    def sort(items: Iterable[NormalizedMenuItem]) -> List[NormalizedMenuItem]:
        """Return ``items`` ordered by :func:`menu_sort_key`."""

        return sorted(items, key=menu_sort_key)


__all__ = ["MenuNormalizer", "MenuRecord", "NormalizedMenuItem", "menu_sort_key"]


# The End
