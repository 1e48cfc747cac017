# -*- coding: utf-8 -*-
"""
Step Navigator - Manages navigation between wizard steps.

Handles:
- Step progression (next/previous/jump)
- Clamping into the valid step range

The navigator never gates a move on validity; WizardController decides
whether a move is allowed before calling it.
"""

from typing import List, Sequence

from PyQt5.QtCore import QObject, pyqtSignal

from .base_step import WizardStep
from utils.logger import get_logger

logger = get_logger(__name__)


class StepNavigator(QObject):
    """
    Owns the ordered step list and the current step index.

    Invariant: 0 <= current_index <= step_count - 1
    """

    # Signals
    step_changed = pyqtSignal(int, int)  # old_index, new_index

    def __init__(self, steps: Sequence[WizardStep], start_index: int = 0):
        """
        Initialize the navigator.

        Args:
            steps: Ordered wizard steps (at least one)
            start_index: Initial step, clamped into range
        """
        super().__init__()
        if not steps:
            raise ValueError("A wizard needs at least one step")
        self.steps: List[WizardStep] = list(steps)
        self.current_index = self._clamp(start_index)

    def _clamp(self, index: int) -> int:
        return max(0, min(int(index), len(self.steps) - 1))

    def get_current_step(self) -> WizardStep:
        """Get the current step."""
        return self.steps[self.current_index]

    def get_step_count(self) -> int:
        """Get total number of steps."""
        return len(self.steps)

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index == len(self.steps) - 1

    def can_go_next(self) -> bool:
        """Check if there is a step after the current one."""
        return not self.is_last

    def can_go_previous(self) -> bool:
        """Check if there is a step before the current one."""
        return not self.is_first

    def next_step(self) -> bool:
        """
        Move one step forward (clamped at the last step).

        Returns:
            True if the step changed
        """
        if not self.can_go_next():
            logger.debug(f"Cannot go next: already at last step ({self.current_index})")
            return False
        return self._navigate_to(self.current_index + 1)

    def previous_step(self) -> bool:
        """Move one step back (clamped at the first step)."""
        if not self.can_go_previous():
            logger.debug(f"Cannot go previous: already at first step ({self.current_index})")
            return False
        return self._navigate_to(self.current_index - 1)

    def goto_step(self, index: int) -> bool:
        """
        Jump to a step; out-of-range targets are clamped.

        Returns:
            True if the step changed
        """
        target = self._clamp(index)
        if target != index:
            logger.info(f"Step {index} out of range, clamped to {target}")
        return self._navigate_to(target)

    def _navigate_to(self, new_index: int) -> bool:
        old_index = self.current_index
        if new_index == old_index:
            return False

        self.current_index = new_index
        logger.info(
            f"Navigation: step {old_index} → {new_index} ({self.get_current_step().key})"
        )
        self.step_changed.emit(old_index, new_index)
        return True

