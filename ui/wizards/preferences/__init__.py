# -*- coding: utf-8 -*-
"""
Tenant Preferences Wizard Package.

This package contains:
- PREFERENCE_FIELDS: field specs and option sets
- PREFERENCE_STEPS: the 16 wizard pages
- PREFERENCE_RULES / PREFERENCE_PAIR_RULES: client-side validation
- build_preferences_schema / open_preferences_wizard: entry points
"""

from .preference_rules import PREFERENCE_PAIR_RULES, PREFERENCE_RULES
from .preference_schema import PREFERENCE_FIELDS
from .preference_steps import PREFERENCE_STEPS
from .preferences_wizard import build_preferences_schema, open_preferences_wizard

__all__ = [
    'PREFERENCE_FIELDS',
    'PREFERENCE_PAIR_RULES',
    'PREFERENCE_RULES',
    'PREFERENCE_STEPS',
    'build_preferences_schema',
    'open_preferences_wizard',
]
