# -*- coding: utf-8 -*-
"""
services

Gateway, session and menu pipeline services.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .gateway import ApiClient, MenuGateway
from .menus import MenuService, NavigationMount, NavigationMountRegistry
from .session import RefreshCoordinator, SessionContext, TokenPair, UserProfile

__all__ = [
    "ApiClient",
    "MenuGateway",
    "MenuService",
    "NavigationMount",
    "NavigationMountRegistry",
    "RefreshCoordinator",
    "SessionContext",
    "TokenPair",
    "UserProfile",
]


# The End
