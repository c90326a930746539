# -*- coding: utf-8 -*-
"""
__init__

SchoolAdmin navigation package entry point.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .application import ApplicationFactory, create_app
from .conf import SchoolAdminSettings, configure, current_settings
from .meta import __version__

__all__ = [
    "ApplicationFactory",
    "SchoolAdminSettings",
    "__version__",
    "configure",
    "create_app",
    "current_settings",
]


# The End
