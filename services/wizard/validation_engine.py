# -*- coding: utf-8 -*-
"""
Validation engine for wizard fields.

Validates field values from a snapshot without UI coupling. Rules are
declarative; the engine returns a field -> message map containing only
failing fields. Validation problems are data, never exceptions.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Set

from models.field_spec import FieldSpec
from models.field_value import FieldKind, NumberRange, DateRange, NO_PREFERENCE
from services.exceptions import UnknownFieldError
from ui.wizards.framework.base_step import StepValidationResult, WizardStep


@dataclass(frozen=True)
class FieldRule:
    """
    Constraint on one field.

    ``min``/``max`` bound a number (or each end of a number range), a date
    range's dates, a text's length or a string set's selection count.
    """
    field: str
    required: bool = False
    min: Any = None
    max: Any = None
    pattern: Optional[str] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class RangePairRule:
    """Two number fields that form a min/max pair; min > max is a blocking error."""
    min_field: str
    max_field: str
    message: str = "Minimum must not be greater than maximum"


def is_empty(value: Any) -> bool:
    """True if a value counts as "not answered"."""
    if value is None or value == "" or value == NO_PREFERENCE:
        return True
    if isinstance(value, frozenset):
        return len(value) == 0
    if isinstance(value, NumberRange):
        return value.min is None and value.max is None
    if isinstance(value, DateRange):
        return value.start is None
    return False


class ValidationEngine:
    """Evaluates field rules and merges client errors with server errors."""

    REQUIRED_MESSAGE = "This field is required"

    def __init__(
        self,
        specs: Iterable[FieldSpec],
        rules: Sequence[FieldRule] = (),
        pair_rules: Sequence[RangePairRule] = (),
    ):
        self._specs: Dict[str, FieldSpec] = {spec.name: spec for spec in specs}
        self.rules = tuple(rules)
        self.pair_rules = tuple(pair_rules)

        for name in self._rule_fields():
            if name not in self._specs:
                raise UnknownFieldError(name)

        self.required_fields: frozenset = frozenset(r.field for r in self.rules if r.required)

    def _rule_fields(self):
        for rule in self.rules:
            yield rule.field
        for pair in self.pair_rules:
            yield pair.min_field
            yield pair.max_field

    # =========================================================================
    # Client-side validation
    # =========================================================================

    def validate(self, fields: Mapping[str, Any]) -> Dict[str, str]:
        """
        Evaluate all rules against a field snapshot.

        Returns:
            {field: message} for failing fields only (first failure wins)
        """
        errors, _ = self._evaluate(fields)
        return errors

    def blocking_fields(self, fields: Mapping[str, Any]) -> Set[str]:
        """Fields whose current client error blocks submission."""
        _, blocking = self._evaluate(fields)
        return blocking

    def _evaluate(self, fields: Mapping[str, Any]):
        errors: Dict[str, str] = {}
        blocking: Set[str] = set()

        # Inverted ranges are never auto-corrected
        for name, spec in self._specs.items():
            value = fields.get(name)
            if isinstance(value, NumberRange) and value.is_inverted:
                errors[name] = "Minimum must not be greater than maximum"
                blocking.add(name)
            elif isinstance(value, DateRange) and value.is_inverted:
                errors[name] = "End date must not be before start date"
                blocking.add(name)

        for pair in self.pair_rules:
            low, high = fields.get(pair.min_field), fields.get(pair.max_field)
            if low is not None and high is not None and low > high:
                for name in (pair.min_field, pair.max_field):
                    errors.setdefault(name, pair.message)
                    blocking.add(name)

        for rule in self.rules:
            if rule.field in errors:
                continue
            message = self._check_rule(rule, fields.get(rule.field))
            if message:
                errors[rule.field] = message
                if rule.required:
                    blocking.add(rule.field)

        for name, spec in self._specs.items():
            if name in errors or not spec.options:
                continue
            message = self._check_options(spec, fields.get(name))
            if message:
                errors[name] = message

        return errors, blocking

    def _check_rule(self, rule: FieldRule, value: Any) -> Optional[str]:
        if is_empty(value):
            return (rule.message or self.REQUIRED_MESSAGE) if rule.required else None

        spec = self._specs[rule.field]
        kind = spec.kind

        if kind == FieldKind.NUMBER:
            return self._check_bounds(rule, value, "Must be at least {}", "Must be at most {}")

        if kind == FieldKind.NUMBER_RANGE:
            for bound in (value.min, value.max):
                if bound is not None:
                    message = self._check_bounds(rule, bound, "Must be at least {}", "Must be at most {}")
                    if message:
                        return message
            return None

        if kind == FieldKind.DATE_RANGE:
            for bound in (value.start, value.end):
                if bound is not None:
                    message = self._check_bounds(rule, bound, "Date must be on or after {}", "Date must be on or before {}")
                    if message:
                        return message
            return None

        if kind == FieldKind.STRING_SET:
            return self._check_bounds(rule, len(value), "Select at least {}", "Select at most {}")

        if kind in (FieldKind.TEXT, FieldKind.ENUM):
            message = self._check_bounds(rule, len(value), "Must be at least {} characters", "Must be at most {} characters")
            if message:
                return message
            if rule.pattern and not re.fullmatch(rule.pattern, value):
                return rule.message or "Invalid format"

        return None

    @staticmethod
    def _check_bounds(rule: FieldRule, value: Any, low_text: str, high_text: str) -> Optional[str]:
        if rule.min is not None and value < rule.min:
            return rule.message or low_text.format(_format_bound(rule.min))
        if rule.max is not None and value > rule.max:
            return rule.message or high_text.format(_format_bound(rule.max))
        return None

    @staticmethod
    def _check_options(spec: FieldSpec, value: Any) -> Optional[str]:
        if spec.kind == FieldKind.ENUM and value not in (None, "") and value not in spec.options:
            return f"Unknown option: {value}"
        if spec.kind == FieldKind.STRING_SET:
            unknown = sorted(value - set(spec.options))
            if unknown:
                return f"Unknown option(s): {', '.join(unknown)}"
        return None

    # =========================================================================
    # Server errors
    # =========================================================================

    @staticmethod
    def merge_server_errors(
        client_errors: Mapping[str, str],
        server_errors: Optional[Mapping[str, str]],
    ) -> Dict[str, str]:
        """Combine both error maps; a server message wins for its field."""
        merged = dict(client_errors)
        if server_errors:
            merged.update(server_errors)
        return merged

    # =========================================================================
    # Predicates
    # =========================================================================

    def is_blocking(self, name: str, client_blocking: Set[str]) -> bool:
        return name in self.required_fields or name in client_blocking

    def can_submit(
        self,
        fields: Mapping[str, Any],
        server_errors: Optional[Mapping[str, str]] = None,
    ) -> bool:
        """True when no blocking error remains (required fields, inverted ranges)."""
        errors, client_blocking = self._evaluate(fields)
        merged = self.merge_server_errors(errors, server_errors)
        return not any(self.is_blocking(name, client_blocking) for name in merged)

    def validate_step(
        self,
        step: WizardStep,
        fields: Mapping[str, Any],
        server_errors: Optional[Mapping[str, str]] = None,
    ) -> StepValidationResult:
        """
        Validate only the fields owned by one step.

        Blocking problems become errors; the rest become warnings.
        """
        errors, client_blocking = self._evaluate(fields)
        merged = self.merge_server_errors(errors, server_errors)

        result = StepValidationResult(is_valid=True, errors=[], warnings=[])
        for name in step.fields:
            if name not in merged:
                continue
            label = self._specs[name].display_label
            if self.is_blocking(name, client_blocking):
                result.add_error(f"{label}: {merged[name]}", field_name=name)
            else:
                result.add_warning(f"{label}: {merged[name]}")
        return result

    def can_advance(
        self,
        step: WizardStep,
        fields: Mapping[str, Any],
        server_errors: Optional[Mapping[str, str]] = None,
    ) -> bool:
        return self.validate_step(step, fields, server_errors).is_valid


def _format_bound(bound: Any) -> str:
    if isinstance(bound, date):
        return bound.isoformat()
    return str(bound)
