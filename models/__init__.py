# -*- coding: utf-8 -*-
"""
Tenant Preferences Data Models
"""

from .field_value import (
    ABSENT,
    NO_PREFERENCE,
    DateRange,
    FieldKind,
    NumberRange,
)
from .field_spec import FieldSpec

__all__ = [
    "ABSENT",
    "NO_PREFERENCE",
    "DateRange",
    "FieldKind",
    "FieldSpec",
    "NumberRange",
]
