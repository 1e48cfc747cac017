# -*- coding: utf-8 -*-
"""
Wizard Context - immutable snapshot of one user's wizard session.

A WizardSession is what the presentation layer renders. It is rebuilt by
WizardController after every action; nothing in it aliases the controller's
live state.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from models.field_value import DateRange, NumberRange

from .base_step import WizardStep


class SubmissionState(Enum):
    """Persistence state of a wizard session."""
    IDLE = "idle"
    SAVING = "saving"
    SUBMITTING = "submitting"
    SAVED = "saved"
    FAILED = "failed"


@dataclass(frozen=True)
class WizardSession:
    """
    Snapshot of a wizard session.

    Invariants:
        0 <= step_index <= total_steps - 1
        set(field_errors) <= set(fields)
    """

    session_id: Optional[str]
    fields: Mapping[str, Any]
    step_index: int
    total_steps: int
    current_step: WizardStep
    dirty_fields: frozenset = frozenset()
    field_errors: Mapping[str, str] = field(default_factory=dict)
    submission_state: SubmissionState = SubmissionState.IDLE
    general_error: Optional[str] = None
    can_submit: bool = False
    has_stored_draft: bool = False
    is_submitted: bool = False
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not 0 <= self.step_index < self.total_steps:
            raise ValueError(f"step_index {self.step_index} outside 0..{self.total_steps - 1}")
        unknown = set(self.field_errors) - set(self.fields)
        if unknown:
            raise ValueError(f"Errors for unknown fields: {sorted(unknown)}")
        # Freeze incoming mappings
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "field_errors", MappingProxyType(dict(self.field_errors)))
        object.__setattr__(self, "dirty_fields", frozenset(self.dirty_fields))

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def is_first_step(self) -> bool:
        return self.step_index == 0

    @property
    def is_last_step(self) -> bool:
        return self.step_index == self.total_steps - 1

    @property
    def is_dirty(self) -> bool:
        return bool(self.dirty_fields)

    @property
    def is_busy(self) -> bool:
        return self.submission_state in (SubmissionState.SAVING, SubmissionState.SUBMITTING)

    @property
    def progress_percentage(self) -> float:
        """Progress through the wizard (0.0 to 100.0)."""
        if self.total_steps == 1:
            return 100.0
        return (self.step_index / (self.total_steps - 1)) * 100.0

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def evolve(self, **changes) -> "WizardSession":
        """Copy of this snapshot with some attributes replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the snapshot to plain data (for logs and debugging).

        Sets become sorted lists, ranges become two-element lists and dates
        become ISO strings.
        """
        return {
            "session_id": self.session_id,
            "step_index": self.step_index,
            "total_steps": self.total_steps,
            "step_key": self.current_step.key,
            "submission_state": self.submission_state.value,
            "dirty_fields": sorted(self.dirty_fields),
            "field_errors": dict(self.field_errors),
            "general_error": self.general_error,
            "can_submit": self.can_submit,
            "has_stored_draft": self.has_stored_draft,
            "is_submitted": self.is_submitted,
            "updated_at": self.updated_at.isoformat(),
            "fields": {name: _plain(value) for name, value in self.fields.items()},
        }


def _plain(value: Any) -> Any:
    if isinstance(value, frozenset):
        return sorted(value)
    if isinstance(value, NumberRange):
        return [value.min, value.max]
    if isinstance(value, DateRange):
        return [
            value.start.isoformat() if value.start else None,
            value.end.isoformat() if value.end else None,
        ]
    return value
