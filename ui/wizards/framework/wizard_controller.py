# -*- coding: utf-8 -*-
"""
Wizard Controller - the single interface the presentation layer binds to.

Every user action goes through apply(). Store and navigator updates happen
synchronously; saves run on a dispatcher and report back through
_on_save_result(). After each change a fresh WizardSession snapshot is
published via session_changed.

Session states:
    IDLE -> (save issued) -> SAVING -> SAVED | FAILED
    SAVED | FAILED -> (edit) -> IDLE
    IDLE | SAVED, last step + can_submit -> SUBMITTING -> SAVED (terminal) | FAILED
"""

from typing import Dict, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from services.error_mapper import map_exception
from services.exceptions import (
    AlreadySubmittingError, NetworkException, NotFoundError, SessionClosedError,
    SubmitNotAllowedError, SubmitRejectedError, UnauthorizedError,
)
from services.wizard.draft_persistence import DraftPersistence, SaveResult, SaveTicket
from utils.logger import get_logger

from .actions import JumpStep, NextStep, PrevStep, SaveDraft, SetField, Submit, ToggleField
from .field_store import FieldStore
from .step_navigator import StepNavigator
from .wizard_context import SubmissionState, WizardSession
from .wizard_schema import WizardSchema
from .workers import ThreadDispatcher

logger = get_logger(__name__)


def fresh_session(schema: WizardSchema, session_id: Optional[str] = None,
                  general_error: Optional[str] = None) -> WizardSession:
    """A new session with every field at its default."""
    return WizardSession(
        session_id=session_id,
        fields=schema.defaults(),
        step_index=0,
        total_steps=schema.total_steps,
        current_step=schema.steps[0],
        general_error=general_error,
    )


class WizardController(QObject):
    """
    Orchestrates FieldStore, StepNavigator, ValidationEngine and
    DraftPersistence for one wizard session.
    """

    # Signals
    session_changed = pyqtSignal(object)  # WizardSession
    save_finished = pyqtSignal(object)  # SaveResult
    action_rejected = pyqtSignal(str)  # reason
    unauthorized = pyqtSignal()
    submitted = pyqtSignal(object)  # WizardSession

    def __init__(
        self,
        schema: WizardSchema,
        persistence: DraftPersistence,
        session: Optional[WizardSession] = None,
        dispatcher=None,
        progress_store=None,
        autosave_on_advance: bool = None,
        block_next_on_errors: bool = None,
        parent=None,
    ):
        super().__init__(parent)
        from app.config import Config

        session = session or fresh_session(schema)

        self.schema = schema
        self.persistence = persistence
        self.dispatcher = dispatcher if dispatcher is not None else ThreadDispatcher(self)
        self.progress_store = progress_store
        self.autosave_on_advance = (
            Config.AUTOSAVE_ON_ADVANCE if autosave_on_advance is None else autosave_on_advance
        )
        self.block_next_on_errors = (
            Config.BLOCK_NEXT_ON_ERRORS if block_next_on_errors is None else block_next_on_errors
        )

        self.session_id = session.session_id
        self.store = FieldStore(schema.fields, session.fields)
        self.navigator = StepNavigator(schema.steps, session.step_index)
        self.validator = schema.build_validator()

        self._server_errors: Dict[str, str] = {}
        self._general_error: Optional[str] = session.general_error
        self._state = SubmissionState.IDLE
        self._submitting = False
        self._submitted = False
        self._closed = False

        self.navigator.step_changed.connect(self._on_step_changed)
        self._session = self._build_session()

    # =========================================================================
    # Factory
    # =========================================================================

    @classmethod
    def open(cls, schema: WizardSchema, client, session_id: Optional[str] = None,
             persistence: DraftPersistence = None, progress_store=None, **options) -> "WizardController":
        """
        Start a session: hydrate from the stored draft when there is one,
        otherwise start fresh, then restore the remembered step.
        """
        persistence = persistence or DraftPersistence(client, schema)

        try:
            session = persistence.load(session_id)
        except NotFoundError:
            logger.info(f"No stored draft for session {session_id}; starting fresh")
            session = fresh_session(schema, session_id)
        except UnauthorizedError as e:
            logger.warning(f"Draft load unauthorized for session {session_id}: {e}")
            session = fresh_session(schema, session_id)
        except NetworkException as e:
            logger.warning(f"Draft load failed for session {session_id}: {e}")
            session = fresh_session(schema, session_id, map_exception(e, "load_preferences"))

        if progress_store is not None:
            step = progress_store.get(session_id)
            if step is not None and 0 <= step < schema.total_steps:
                logger.info(f"Resuming session {session_id} at step {step}")
                session = session.evolve(step_index=step, current_step=schema.steps[step])

        return cls(schema, persistence, session=session, progress_store=progress_store, **options)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def session(self) -> WizardSession:
        """Latest published snapshot."""
        return self._session

    @property
    def is_closed(self) -> bool:
        return self._closed

    def close(self):
        """
        Discard the session (navigation away or completed submit).

        Saves already in flight still complete; their responses are ignored.
        """
        if not self._closed:
            self._closed = True
            logger.info(f"Wizard session {self.session_id} closed")

    # =========================================================================
    # Actions
    # =========================================================================

    def apply(self, action) -> WizardSession:
        """
        Process one user action and return the resulting snapshot.

        Raises:
            SessionClosedError: the session was closed
            UnknownFieldError / TypeMismatchError: programmer errors
        """
        self._ensure_open()

        if isinstance(action, SetField):
            if self.store.set(action.name, action.value):
                self._on_field_edited(action.name)

        elif isinstance(action, ToggleField):
            self.store.toggle(action.name, action.code)
            self._on_field_edited(action.name)

        elif isinstance(action, NextStep):
            self._next_step()

        elif isinstance(action, PrevStep):
            self.navigator.previous_step()

        elif isinstance(action, JumpStep):
            self.navigator.goto_step(action.index)

        elif isinstance(action, (SaveDraft, Submit)):
            try:
                if isinstance(action, Submit):
                    self.submit()
                else:
                    self.save_draft()
            except SubmitRejectedError as e:
                logger.info(f"{type(action).__name__} rejected: {e.reason}")
                self.action_rejected.emit(e.reason)
            return self._session

        else:
            raise TypeError(f"Unsupported wizard action: {action!r}")

        self._publish()
        return self._session

    def save_draft(self):
        """
        Issue an explicit save of the full snapshot.

        Raises:
            AlreadySubmittingError: a submit is in flight
        """
        self._ensure_open()
        if self._submitting:
            raise AlreadySubmittingError("Cannot save while submitting")
        self._issue_save(submit=False)

    def submit(self):
        """
        Issue the final submission.

        Raises:
            AlreadySubmittingError: a submit is already in flight
            SubmitNotAllowedError: a draft save is in flight, not on the last
                step, or blocking errors remain
        """
        self._ensure_open()
        if self._submitting:
            raise AlreadySubmittingError("A submit is already in flight")
        if self._state == SubmissionState.SAVING:
            raise SubmitNotAllowedError("Cannot submit while a draft save is in flight")
        if not self.navigator.is_last:
            raise SubmitNotAllowedError("Submit is only allowed on the last step")
        if not self.validator.can_submit(self.store.snapshot(), self._server_errors):
            raise SubmitNotAllowedError("Blocking validation errors remain")
        self._issue_save(submit=True)

    # =========================================================================
    # Internals
    # =========================================================================

    def _ensure_open(self):
        if self._closed:
            raise SessionClosedError(f"Wizard session {self.session_id} is closed")

    def _on_field_edited(self, name: str):
        # A local change invalidates the server's verdict on that field
        if self._server_errors.pop(name, None) is not None:
            logger.debug(f"Cleared server error for {name}")
        if self._state in (SubmissionState.SAVED, SubmissionState.FAILED):
            self._state = SubmissionState.IDLE

    def _next_step(self):
        step = self.navigator.get_current_step()
        if self.block_next_on_errors and not self.validator.can_advance(
                step, self.store.snapshot(), self._server_errors):
            logger.info(f"Next blocked on step {step.key}: blocking errors")
            self.action_rejected.emit("step_invalid")
            return

        moved = self.navigator.next_step()
        if (moved and self.autosave_on_advance and not self._submitting
                and self.persistence.has_changes(self.store.snapshot())):
            self._issue_save(submit=False)

    def _issue_save(self, submit: bool):
        ticket = self.persistence.begin(self.store.snapshot(), submit=submit)
        self._general_error = None
        if submit:
            self._submitting = True
            self._state = SubmissionState.SUBMITTING
        else:
            self._state = SubmissionState.SAVING
        self._publish()

        persistence = self.persistence
        self.dispatcher.dispatch(
            lambda: persistence.execute(ticket),
            self._on_save_result,
            lambda error: self._on_save_error(ticket, error),
        )

    def _on_save_result(self, result: SaveResult):
        if self._closed:
            logger.info(f"Ignoring response for save #{result.seq}: session closed")
            return
        if not self.persistence.accept(result):
            return

        if result.submit:
            self._submitting = False

        if result.ok:
            self.store.mark_saved(result.sent_values)
            echoed = {
                name: value for name, value in result.echo.items()
                if not self.store.is_dirty(name)
            }
            self.store.load(echoed)
            self._server_errors.clear()
            self._general_error = None
            self._state = SubmissionState.SAVED
        else:
            snapshot = self.store.snapshot()
            # Keep only errors that still describe the current value
            self._server_errors = {
                name: message for name, message in result.field_errors.items()
                if snapshot.get(name) == result.sent_values.get(name)
            }
            self._general_error = result.general_error
            self._state = SubmissionState.FAILED

        if result.ok and result.submit:
            self._submitted = True
            if self.progress_store is not None:
                self.progress_store.clear(self.session_id)

        self._publish()
        self.save_finished.emit(result)

        if result.unauthorized:
            self.unauthorized.emit()
        if self._submitted:
            logger.info(f"Wizard session {self.session_id} submitted")
            self.submitted.emit(self._session)
            self.close()

    def _on_save_error(self, ticket: SaveTicket, error: Exception):
        logger.error(f"Save #{ticket.seq} job failed: {error}", exc_info=error)
        if self._closed:
            return
        if ticket.seq < self.persistence.sequence:
            logger.info(f"Ignoring failure of stale save #{ticket.seq}")
            return

        if ticket.submit:
            self._submitting = False
        self._state = SubmissionState.FAILED
        self._general_error = map_exception(error, "save_preferences")
        self._publish()

    def _on_step_changed(self, old_index: int, new_index: int):
        if self.progress_store is not None:
            self.progress_store.set(self.session_id, new_index)

    def _build_session(self) -> WizardSession:
        fields = self.store.snapshot()
        client_errors = self.validator.validate(fields)
        can_submit = (
            self.navigator.is_last
            and not self._submitting
            and not self._submitted
            and self._state != SubmissionState.SAVING
            and self.validator.can_submit(fields, self._server_errors)
        )
        return WizardSession(
            session_id=self.session_id,
            fields=fields,
            step_index=self.navigator.current_index,
            total_steps=self.navigator.get_step_count(),
            current_step=self.navigator.get_current_step(),
            dirty_fields=self.store.dirty_fields,
            field_errors=self.validator.merge_server_errors(client_errors, self._server_errors),
            submission_state=self._state,
            general_error=self._general_error,
            can_submit=can_submit,
            has_stored_draft=self.persistence.has_stored_draft,
            is_submitted=self._submitted,
        )

    def _publish(self):
        self._session = self._build_session()
        self.session_changed.emit(self._session)
