# -*- coding: utf-8 -*-
"""
Tests for StepProgressStore.
"""

from services.step_progress_store import StepProgressStore


class TestStepProgressStore:
    """Test resume-step bookkeeping."""

    def test_missing_file(self, progress_store):
        assert progress_store.get("user-1") is None

    def test_set_and_get(self, progress_store):
        progress_store.set("user-1", 4)
        progress_store.set("user-2", 9)
        assert progress_store.get("user-1") == 4
        assert progress_store.get("user-2") == 9

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "progress.json"
        StepProgressStore(path).set("user-1", 3)
        assert StepProgressStore(path).get("user-1") == 3

    def test_clear(self, progress_store):
        progress_store.set("user-1", 4)
        progress_store.clear("user-1")
        assert progress_store.get("user-1") is None

    def test_anonymous_session(self, progress_store):
        progress_store.set(None, 2)
        assert progress_store.get(None) == 2

    def test_corrupt_file(self, tmp_path):
        """Test an unreadable file means no stored step."""
        path = tmp_path / "progress.json"
        path.write_text("{not json", encoding="utf-8")
        assert StepProgressStore(path).get("user-1") is None
