# -*- coding: utf-8 -*-
"""
Shared fixtures for the wizard engine tests.
"""
import os

# Headless Qt for CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from services.exceptions import NotFoundError
from services.step_progress_store import StepProgressStore
from services.wizard.draft_persistence import DraftPersistence
from ui.wizards.framework.wizard_controller import WizardController
from ui.wizards.framework.workers import ImmediateDispatcher
from ui.wizards.preferences import build_preferences_schema


class FakePreferencesClient:
    """In-memory stand-in for PreferencesApiClient."""

    def __init__(self, stored=None):
        self.stored = dict(stored) if stored is not None else None
        self.calls = []
        self.load_error = None
        # Exceptions raised by the next save calls, in order
        self.failures = []

    @property
    def save_calls(self):
        return [call for call in self.calls if call[0] != "GET"]

    def get_preferences(self):
        self.calls.append(("GET", None, False))
        if self.load_error is not None:
            raise self.load_error
        if self.stored is None:
            raise NotFoundError("No stored preferences", status_code=404)
        return dict(self.stored)

    def create_preferences(self, payload, complete=False):
        return self._save("POST", payload, complete)

    def update_preferences(self, payload, complete=False):
        return self._save("PUT", payload, complete)

    def _save(self, method, payload, complete):
        self.calls.append((method, dict(payload), complete))
        if self.failures:
            raise self.failures.pop(0)
        self.stored = {**(self.stored or {}), **payload}
        return dict(self.stored, id=1, user_id="user-1")


class ManualDispatcher:
    """Holds jobs until the test completes them, in any order."""

    def __init__(self):
        self.jobs = []

    @property
    def pending(self):
        return len(self.jobs)

    def dispatch(self, job, on_result, on_error=None):
        self.jobs.append((job, on_result, on_error))

    def complete(self, index=0):
        job, on_result, on_error = self.jobs.pop(index)
        try:
            result = job()
        except Exception as e:
            if on_error is None:
                raise
            on_error(e)
            return
        on_result(result)

    def complete_all(self):
        while self.jobs:
            self.complete(0)


@pytest.fixture
def schema():
    """The 16-step tenant preference schema."""
    return build_preferences_schema()


@pytest.fixture
def fake_client():
    return FakePreferencesClient()


@pytest.fixture
def make_client():
    """Factory for fake clients with a stored draft."""
    return FakePreferencesClient


@pytest.fixture
def persistence(schema, fake_client):
    return DraftPersistence(fake_client, schema, partial_updates=False)


@pytest.fixture
def manual_dispatcher():
    return ManualDispatcher()


@pytest.fixture
def progress_store(tmp_path):
    return StepProgressStore(tmp_path / "progress.json")


@pytest.fixture
def make_controller(qapp, schema, fake_client):
    """Factory for controllers over the fake client."""
    created = []

    def _make(dispatcher=None, client=None, **options):
        options.setdefault("autosave_on_advance", True)
        options.setdefault("block_next_on_errors", True)
        persistence = DraftPersistence(client or fake_client, schema, partial_updates=False)
        controller = WizardController(
            schema, persistence,
            dispatcher=dispatcher or ImmediateDispatcher(),
            **options
        )
        created.append(controller)
        return controller

    yield _make
    for controller in created:
        controller.close()


@pytest.fixture
def controller(make_controller):
    """Controller with synchronous persistence."""
    return make_controller()
