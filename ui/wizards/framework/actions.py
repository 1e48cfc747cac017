# -*- coding: utf-8 -*-
"""
Wizard actions - the user intents WizardController.apply() accepts.
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class SetField:
    name: str
    value: Any


@dataclass(frozen=True)
class ToggleField:
    """Add or remove one option code of a string-set field."""
    name: str
    code: str


@dataclass(frozen=True)
class NextStep:
    pass


@dataclass(frozen=True)
class PrevStep:
    pass


@dataclass(frozen=True)
class JumpStep:
    """Go to a step by index; out-of-range indexes are clamped."""
    index: int


@dataclass(frozen=True)
class SaveDraft:
    pass


@dataclass(frozen=True)
class Submit:
    pass


WizardAction = Union[SetField, ToggleField, NextStep, PrevStep, JumpStep, SaveDraft, Submit]
