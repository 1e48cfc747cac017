# -*- coding: utf-8 -*-
"""
Field specification - one named, typed slot in a wizard schema.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Tuple

from models.field_value import FieldKind, NumberRange, DateRange
from services.exceptions import TypeMismatchError


@dataclass(frozen=True)
class FieldSpec:
    """
    Schema entry for a wizard field.

    Range fields travel as two keys on the wire (``wire_keys``); every
    other field travels under its own name.
    """

    name: str
    kind: FieldKind
    default: Any = None
    label: str = ""
    # Allowed option codes (ENUM / STRING_SET); opaque to the engine
    options: Tuple[str, ...] = ()
    wire_keys: Tuple[str, ...] = field(default=())

    def __post_init__(self):
        if self.kind.is_range and len(self.wire_keys) != 2:
            raise ValueError(f"Range field {self.name!r} needs exactly two wire keys")
        if not self.kind.is_range and not self.wire_keys:
            object.__setattr__(self, "wire_keys", (self.name,))
        object.__setattr__(self, "default", self.coerce(self.default))

    @property
    def display_label(self) -> str:
        return self.label or self.name.replace("_", " ").capitalize()

    def coerce(self, value: Any) -> Any:
        """
        Bring a value into the canonical form for this field's kind.

        Raises:
            TypeMismatchError: the value cannot represent this kind
        """
        kind = self.kind

        if kind == FieldKind.STRING_SET:
            if value is None:
                return frozenset()
            if isinstance(value, (str, bytes)) or not _is_iterable(value):
                raise TypeMismatchError(self.name, kind, f"expected a set of codes, got {type(value).__name__}")
            codes = frozenset(value)
            if not all(isinstance(code, str) for code in codes):
                raise TypeMismatchError(self.name, kind, "option codes must be strings")
            return codes

        if kind == FieldKind.BOOLEAN:
            if value is None:
                return False
            if not isinstance(value, bool):
                raise TypeMismatchError(self.name, kind, f"expected bool, got {type(value).__name__}")
            return value

        if kind == FieldKind.NUMBER_RANGE:
            if value is None:
                return NumberRange()
            if isinstance(value, (tuple, list)) and len(value) == 2:
                value = NumberRange(*value)
            if not isinstance(value, NumberRange):
                raise TypeMismatchError(self.name, kind, f"expected NumberRange, got {type(value).__name__}")
            for bound in (value.min, value.max):
                if bound is not None and not _is_number(bound):
                    raise TypeMismatchError(self.name, kind, f"range bound {bound!r} is not a number")
            return value

        if kind == FieldKind.DATE_RANGE:
            if value is None:
                return DateRange()
            if isinstance(value, (tuple, list)) and len(value) == 2:
                value = DateRange(*value)
            if not isinstance(value, DateRange):
                raise TypeMismatchError(self.name, kind, f"expected DateRange, got {type(value).__name__}")
            for bound in (value.start, value.end):
                if bound is not None and not isinstance(bound, date):
                    raise TypeMismatchError(self.name, kind, f"range bound {bound!r} is not a date")
            return value

        if value is None:
            return None

        if kind == FieldKind.NUMBER:
            if not _is_number(value):
                raise TypeMismatchError(self.name, kind, f"expected a number, got {type(value).__name__}")
            return value

        # TEXT / ENUM
        if not isinstance(value, str):
            raise TypeMismatchError(self.name, kind, f"expected str, got {type(value).__name__}")
        return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_iterable(value: Any) -> bool:
    try:
        iter(value)
    except TypeError:
        return False
    return True

