# -*- coding: utf-8 -*-
"""
Step progress store.

Remembers the last visited wizard step per session so that reopening the
wizard resumes where the user left off. Entries live in a small JSON file
under the data directory and are removed once the wizard is submitted.
"""

import json
from pathlib import Path
from typing import Dict, Optional

from utils.logger import get_logger

logger = get_logger(__name__)

_ANONYMOUS = "_anonymous"


class StepProgressStore:
    """JSON-file backed map of session id -> last step index."""

    def __init__(self, path: Path = None):
        if path is None:
            from app.config import Config
            path = Config.STEP_PROGRESS_PATH
        self.path = Path(path)

    def get(self, session_id: Optional[str]) -> Optional[int]:
        """Last stored step index, or None."""
        value = self._read().get(session_id or _ANONYMOUS)
        return value if isinstance(value, int) else None

    def set(self, session_id: Optional[str], step_index: int):
        entries = self._read()
        entries[session_id or _ANONYMOUS] = int(step_index)
        self._write(entries)

    def clear(self, session_id: Optional[str]):
        entries = self._read()
        if entries.pop(session_id or _ANONYMOUS, None) is not None:
            self._write(entries)
            logger.debug(f"Cleared stored step for session {session_id}")

    def _read(self) -> Dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read step progress from {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, entries: Dict[str, int]):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(entries, f, indent=2, ensure_ascii=False)
        except OSError as e:
            # Resume position is best-effort
            logger.warning(f"Could not write step progress to {self.path}: {e}")
