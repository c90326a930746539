# -*- coding: utf-8 -*-
"""
utils

Shared helpers.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .icons import Icon, IconRegistry, icon_registry

__all__ = ["Icon", "IconRegistry", "icon_registry"]


# The End
