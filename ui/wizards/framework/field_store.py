# -*- coding: utf-8 -*-
"""
Field Store - current value of every wizard field.

Values are kept in canonical immutable form (see FieldSpec.coerce): string
sets are frozensets and ranges are frozen dataclasses, so a snapshot never
aliases live state.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

from models.field_spec import FieldSpec
from models.field_value import FieldKind
from services.exceptions import TypeMismatchError, UnknownFieldError
from utils.logger import get_logger

logger = get_logger(__name__)


class FieldStore:
    """
    Holds field values by name and tracks which ones differ from the last
    saved (or loaded) value.
    """

    def __init__(self, specs: Iterable[FieldSpec], values: Optional[Mapping[str, Any]] = None):
        self._specs: Dict[str, FieldSpec] = {spec.name: spec for spec in specs}
        self._values: Dict[str, Any] = {name: spec.default for name, spec in self._specs.items()}
        # Value each field had at the last load or save
        self._saved: Dict[str, Any] = dict(self._values)
        self._dirty: set = set()

        if values:
            self.load(values)

    # =========================================================================
    # Schema
    # =========================================================================

    @property
    def names(self):
        return tuple(self._specs)

    def spec(self, name: str) -> FieldSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise UnknownFieldError(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    # =========================================================================
    # Access & mutation
    # =========================================================================

    def get(self, name: str) -> Any:
        """Get the current value of a field."""
        self.spec(name)
        return self._values[name]

    def set(self, name: str, value: Any) -> bool:
        """
        Replace a field's value.

        Returns:
            True if the value changed

        Raises:
            UnknownFieldError: name is not in the schema
            TypeMismatchError: value does not fit the field's kind
        """
        spec = self.spec(name)
        value = spec.coerce(value)
        if self._values[name] == value:
            return False

        self._values[name] = value
        self._track(name)
        logger.debug(f"Field {name} set to {value!r}")
        return True

    def toggle(self, name: str, code: str) -> bool:
        """
        Add ``code`` to a string-set field if absent, remove it if present.

        Returns:
            True if the code is now selected
        """
        spec = self.spec(name)
        if spec.kind != FieldKind.STRING_SET:
            raise TypeMismatchError(name, spec.kind, "toggle requires a string-set field")
        if not isinstance(code, str):
            raise TypeMismatchError(name, spec.kind, f"option code must be str, got {type(code).__name__}")

        current = self._values[name]
        selected = code not in current
        self._values[name] = current | {code} if selected else current - {code}
        self._track(name)
        logger.debug(f"Field {name} toggled {code!r} -> {'on' if selected else 'off'}")
        return selected

    def load(self, values: Mapping[str, Any]):
        """Overwrite values without marking them dirty (hydration from a stored draft)."""
        for name, value in values.items():
            value = self.spec(name).coerce(value)
            self._values[name] = value
            self._saved[name] = value
            self._dirty.discard(name)

    # =========================================================================
    # Dirty tracking
    # =========================================================================

    @property
    def dirty_fields(self) -> frozenset:
        return frozenset(self._dirty)

    def is_dirty(self, name: str) -> bool:
        return name in self._dirty

    def _track(self, name: str):
        if self._values[name] == self._saved[name]:
            self._dirty.discard(name)
        else:
            self._dirty.add(name)

    def mark_saved(self, sent_values: Mapping[str, Any]) -> frozenset:
        """
        Record ``sent_values`` as the saved state and re-derive dirty flags.

        Fields edited while the save was in flight stay dirty.

        Returns:
            Names that were cleared
        """
        before = set(self._dirty)
        for name, value in sent_values.items():
            self._saved[name] = self.spec(name).coerce(value)
            self._track(name)
        return frozenset(before - self._dirty)

    def snapshot(self) -> Mapping[str, Any]:
        """Immutable copy of all current values."""
        return MappingProxyType(dict(self._values))
