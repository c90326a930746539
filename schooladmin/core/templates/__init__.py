# -*- coding: utf-8 -*-
"""
templates

Template service and sidebar renderer.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .rendering import NavigationRenderer
from .service import TEMPLATES_DIR, TemplateService

__all__ = ["NavigationRenderer", "TEMPLATES_DIR", "TemplateService"]


# The End
