# -*- coding: utf-8 -*-
"""
application

Application assembly helpers.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from fastapi import FastAPI

from ..conf import SchoolAdminSettings
from .factory import ApplicationFactory, LifecycleHook


def create_app(settings: SchoolAdminSettings | None = None) -> FastAPI:
    """Return an application built by a default :class:`ApplicationFactory`."""

    return ApplicationFactory(settings=settings).build()


__all__ = ["ApplicationFactory", "LifecycleHook", "create_app"]


# The End
