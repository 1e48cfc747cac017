# -*- coding: utf-8 -*-
"""
Tenant Preferences Application Core Module
"""

from .config import Config

__all__ = ["Config"]
