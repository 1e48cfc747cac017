# -*- coding: utf-8 -*-
"""
Wizard field value types.

Every wizard field holds one of these kinds of value:
- TEXT: str (or None)
- NUMBER: int/float (or None)
- NUMBER_RANGE: NumberRange(min, max)
- DATE_RANGE: DateRange(start, end)
- ENUM: one option code (str) or None
- STRING_SET: frozenset of option codes
- BOOLEAN: bool
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Union


class FieldKind(Enum):
    """Kind of value a wizard field holds."""
    TEXT = "text"
    NUMBER = "number"
    NUMBER_RANGE = "number_range"
    DATE_RANGE = "date_range"
    ENUM = "enum"
    STRING_SET = "string_set"
    BOOLEAN = "boolean"

    @property
    def is_range(self) -> bool:
        return self in (FieldKind.NUMBER_RANGE, FieldKind.DATE_RANGE)


Number = Union[int, float]


@dataclass(frozen=True)
class NumberRange:
    """Inclusive numeric range; either bound may be open."""
    min: Optional[Number] = None
    max: Optional[Number] = None

    @property
    def is_inverted(self) -> bool:
        return self.min is not None and self.max is not None and self.min > self.max


@dataclass(frozen=True)
class DateRange:
    """Date range; a range without an end is a single date."""
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_inverted(self) -> bool:
        return self.start is not None and self.end is not None and self.start > self.end


class _Absent:
    """Explicit "no value" marker sent to the preference store as null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "ABSENT"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()

# UI literal for "no preference" options; never transmitted as-is
NO_PREFERENCE = "no-preference"

FieldValue = Union[str, Number, NumberRange, DateRange, frozenset, bool, None]
