# -*- coding: utf-8 -*-
"""
core

Menu normalization, tree construction and navigation state.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .menu import MenuTreeBuilder
from .navigation import NavigationBuilder, NavigationState, NavNode
from .normalizer import MenuNormalizer, MenuRecord, NormalizedMenuItem, menu_sort_key

__all__ = [
    "MenuNormalizer",
    "MenuRecord",
    "MenuTreeBuilder",
    "NavNode",
    "NavigationBuilder",
    "NavigationState",
    "NormalizedMenuItem",
    "menu_sort_key",
]


# The End
