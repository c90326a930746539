# -*- coding: utf-8 -*-
"""
icons

Resolve menu icon tokens to Bootstrap Icons glyph classes.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Final, Mapping


class Icon(str, Enum):
    """Glyphs available to the sidebar (Bootstrap 5 icon classes)."""

    CIRCLE = "bi-circle"
    CHEVRON_DOWN = "bi-chevron-down"
    CHEVRON_RIGHT = "bi-chevron-right"
    GRADUATION_CAP = "bi-mortarboard"
    DASHBOARD = "bi-speedometer2"
    HOME = "bi-house"
    USER = "bi-person"
    USERS = "bi-people"
    USER_PLUS = "bi-person-plus"
    USER_CHECK = "bi-person-check"
    SHIELD = "bi-shield-check"
    LOCK = "bi-lock"
    KEY = "bi-key"
    MENU = "bi-list"
    SETTINGS = "bi-gear"
    BOOK = "bi-book"
    BOOK_OPEN = "bi-journal-bookmark"
    LIBRARY = "bi-bookshelf"
    SCHOOL = "bi-building"
    CALENDAR = "bi-calendar"
    CALENDAR_CHECK = "bi-calendar-check"
    CLOCK = "bi-clock"
    CLIPBOARD = "bi-clipboard"
    CLIPBOARD_LIST = "bi-clipboard-data"
    FILE_TEXT = "bi-file-earmark-text"
    FOLDER = "bi-folder"
    CHART = "bi-bar-chart"
    PIE_CHART = "bi-pie-chart"
    AWARD = "bi-award"
    BELL = "bi-bell"
    MAIL = "bi-envelope"
    MESSAGE = "bi-chat-dots"
    WALLET = "bi-wallet2"
    CREDIT_CARD = "bi-credit-card"
    DOLLAR = "bi-currency-dollar"
    RECEIPT = "bi-receipt"
    BUS = "bi-bus-front"
    LAYERS = "bi-layers"
    LIST_CHECKS = "bi-list-check"
    LOG_OUT = "bi-box-arrow-right"


ICON_NAMES: Final[Mapping[str, Icon]] = {
    "Circle": Icon.CIRCLE,
    "ChevronDown": Icon.CHEVRON_DOWN,
    "ChevronRight": Icon.CHEVRON_RIGHT,
    "GraduationCap": Icon.GRADUATION_CAP,
    "LayoutDashboard": Icon.DASHBOARD,
    "Dashboard": Icon.DASHBOARD,
    "Gauge": Icon.DASHBOARD,
    "Home": Icon.HOME,
    "House": Icon.HOME,
    "User": Icon.USER,
    "UserCircle": Icon.USER,
    "Users": Icon.USERS,
    "UserPlus": Icon.USER_PLUS,
    "UserCheck": Icon.USER_CHECK,
    "Shield": Icon.SHIELD,
    "ShieldCheck": Icon.SHIELD,
    "Lock": Icon.LOCK,
    "Key": Icon.KEY,
    "Menu": Icon.MENU,
    "List": Icon.MENU,
    "Settings": Icon.SETTINGS,
    "Cog": Icon.SETTINGS,
    "Book": Icon.BOOK,
    "BookOpen": Icon.BOOK_OPEN,
    "Library": Icon.LIBRARY,
    "School": Icon.SCHOOL,
    "Building": Icon.SCHOOL,
    "Calendar": Icon.CALENDAR,
    "CalendarDays": Icon.CALENDAR,
    "CalendarCheck": Icon.CALENDAR_CHECK,
    "Clock": Icon.CLOCK,
    "Clipboard": Icon.CLIPBOARD,
    "ClipboardList": Icon.CLIPBOARD_LIST,
    "FileText": Icon.FILE_TEXT,
    "Folder": Icon.FOLDER,
    "BarChart": Icon.CHART,
    "BarChart3": Icon.CHART,
    "ChartBar": Icon.CHART,
    "PieChart": Icon.PIE_CHART,
    "Award": Icon.AWARD,
    "Bell": Icon.BELL,
    "Mail": Icon.MAIL,
    "MessageSquare": Icon.MESSAGE,
    "Wallet": Icon.WALLET,
    "CreditCard": Icon.CREDIT_CARD,
    "DollarSign": Icon.DOLLAR,
    "Receipt": Icon.RECEIPT,
    "Bus": Icon.BUS,
    "Layers": Icon.LAYERS,
    "ListChecks": Icon.LIST_CHECKS,
    "LogOut": Icon.LOG_OUT,
}

_SEPARATED_PART = re.compile(r"[-_ ](\w)")


class IconRegistry:
    """Map free-text icon tokens to glyphs, falling back to a neutral circle."""

    def __init__(
        self,
        names: Mapping[str, Icon] | None = None,
        *,
        fallback: Icon = Icon.CIRCLE,
    ) -> None:
        self._names = dict(ICON_NAMES if names is None else names)
        self._fallback = fallback

    @property
    def fallback(self) -> Icon:
        """Return the glyph used for unknown tokens."""
        return self._fallback

    @staticmethod
    def format_name(token: str) -> str:
        """Return ``token`` joined into its capitalized form (``user-plus`` -> ``UserPlus``)."""

        joined = _SEPARATED_PART.sub(lambda match: match.group(1).upper(), token.strip())
        return joined[:1].upper() + joined[1:]

    def resolve(self, token: str | None) -> Icon:
        """Return the glyph registered for ``token`` or the fallback."""

        if not token or not token.strip():
            return self._fallback
        return self._names.get(self.format_name(token), self._fallback)

    def css_class(self, token: str | None) -> str:
        """Return the full CSS class list for the glyph of ``token``."""

        return f"bi {self.resolve(token).value}"


icon_registry = IconRegistry()

__all__ = ["ICON_NAMES", "Icon", "IconRegistry", "icon_registry"]


# The End
