# -*- coding: utf-8 -*-
"""
Tenant Preferences Wizard - wiring of the preference schema to the engine.

Usage:
    client = PreferencesApiClient()
    client.set_access_token(token)
    controller = open_preferences_wizard(client, session_id=user_id)
    controller.session_changed.connect(view.render)
"""

from typing import Optional

from services.api_client import PreferencesApiClient
from services.step_progress_store import StepProgressStore
from ui.wizards.framework.wizard_controller import WizardController
from ui.wizards.framework.wizard_schema import WizardSchema
from utils.logger import get_logger

from .preference_rules import PREFERENCE_PAIR_RULES, PREFERENCE_RULES
from .preference_schema import PREFERENCE_FIELDS
from .preference_steps import PREFERENCE_STEPS

logger = get_logger(__name__)


def build_preferences_schema() -> WizardSchema:
    """The 16-step tenant preference wizard."""
    return WizardSchema(
        name="tenant_preferences",
        fields=PREFERENCE_FIELDS,
        steps=PREFERENCE_STEPS,
        rules=PREFERENCE_RULES,
        pair_rules=PREFERENCE_PAIR_RULES,
    )


def open_preferences_wizard(
    client: Optional[PreferencesApiClient] = None,
    session_id: Optional[str] = None,
    progress_store: Optional[StepProgressStore] = None,
    **options
) -> WizardController:
    """
    Open a tenant preference session, resuming the stored draft if any.

    Args:
        client: Authenticated API client (a default one is created if omitted)
        session_id: Identifier of the user's session (keys the resume step)
        progress_store: Resume-step store (defaults to the configured JSON file)
        **options: Passed to WizardController (dispatcher, autosave_on_advance, ...)
    """
    schema = build_preferences_schema()
    client = client or PreferencesApiClient()
    progress_store = progress_store or StepProgressStore()

    logger.info(f"Opening preference wizard for session {session_id}")
    return WizardController.open(
        schema, client, session_id=session_id, progress_store=progress_store, **options
    )
