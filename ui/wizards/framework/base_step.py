# -*- coding: utf-8 -*-
"""
Base Step - description of one wizard page.

A step groups a subset of the wizard's fields. Rendering the step's widgets
belongs to the presentation layer; the engine only needs the step's identity
and the fields it owns (for per-step validation and progress display).
"""

from typing import Dict, List, Tuple
from dataclasses import dataclass, field


@dataclass
class StepValidationResult:
    """Result of step validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str] = None
    field_errors: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.warnings is None:
            self.warnings = []

    def add_error(self, message: str, field_name: str = None):
        """Add an error message, optionally bound to a field."""
        self.errors.append(message)
        if field_name:
            self.field_errors[field_name] = message
        self.is_valid = False

    def add_warning(self, message: str):
        """Add a warning message."""
        self.warnings.append(message)


@dataclass(frozen=True)
class WizardStep:
    """
    One page of the wizard.

    Attributes:
        key: Stable identifier (used in logs and by the presentation layer)
        title: Heading shown to the user
        fields: Names of the fields edited on this step
        description: Optional subtitle
        optional: Step can be left untouched
    """
    key: str
    title: str
    fields: Tuple[str, ...] = ()
    description: str = ""
    optional: bool = True
