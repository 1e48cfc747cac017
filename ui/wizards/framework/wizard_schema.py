# -*- coding: utf-8 -*-
"""
Wizard Schema - static definition of a wizard variant.

Bundles the field specs, the ordered steps and the validation rules. The
engine treats option sets as opaque; it only relies on each field's kind.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from models.field_spec import FieldSpec
from services.exceptions import UnknownFieldError
from services.wizard.validation_engine import FieldRule, RangePairRule, ValidationEngine

from .base_step import WizardStep


@dataclass(frozen=True)
class WizardSchema:
    """Fields, steps and rules of one wizard variant."""

    name: str
    fields: Tuple[FieldSpec, ...]
    steps: Tuple[WizardStep, ...]
    rules: Tuple[FieldRule, ...] = ()
    pair_rules: Tuple[RangePairRule, ...] = ()

    def __post_init__(self):
        names = [spec.name for spec in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate field names in schema {self.name!r}")
        if not self.steps:
            raise ValueError(f"Schema {self.name!r} has no steps")

        known = set(names)
        owner: Dict[str, str] = {}
        for step in self.steps:
            for name in step.fields:
                if name not in known:
                    raise UnknownFieldError(name)
                if name in owner:
                    raise ValueError(f"Field {name!r} appears on steps {owner[name]!r} and {step.key!r}")
                owner[name] = step.key

        wire: Dict[str, str] = {}
        for spec in self.fields:
            for key in spec.wire_keys:
                if key in wire:
                    raise ValueError(f"Wire key {key!r} used by {wire[key]!r} and {spec.name!r}")
                wire[key] = spec.name
        object.__setattr__(self, "_wire_index", wire)

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def spec(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise UnknownFieldError(name)

    def field_for_wire_key(self, key: str) -> Optional[str]:
        """Field name that travels under ``key`` on the wire, or None."""
        return self._wire_index.get(key)

    def defaults(self) -> Dict[str, object]:
        return {spec.name: spec.default for spec in self.fields}

    def build_validator(self) -> ValidationEngine:
        return ValidationEngine(self.fields, self.rules, self.pair_rules)
