# -*- coding: utf-8 -*-
"""
Draft persistence for wizard sessions.

Converts field snapshots to the preference store's JSON shape and back, and
runs the save/submit protocol:

    begin(fields)    -> SaveTicket   (caller's thread: sequence number, payload)
    execute(ticket)  -> SaveResult   (any thread: the HTTP round trip)
    accept(result)   -> bool         (caller's thread: stale responses dropped)

save() and submit() chain the three steps for synchronous callers.
Transport failures never escape execute(); they come back as a failed
SaveResult so the caller keeps the user's data and can retry.
"""

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from models.field_spec import FieldSpec
from models.field_value import ABSENT, NO_PREFERENCE, DateRange, FieldKind, NumberRange
from services.error_mapper import extract_field_errors, map_exception
from services.exceptions import (
    ApiException, NetworkException, SubmitNotAllowedError, UnauthorizedError,
)
from ui.wizards.framework.wizard_context import WizardSession
from ui.wizards.framework.wizard_schema import WizardSchema
from utils.logger import get_logger

logger = get_logger(__name__)

# Server bookkeeping columns that are not wizard fields
_BOOKKEEPING_KEYS = frozenset({"id", "user_id", "user", "created_at", "updated_at"})


@dataclass(frozen=True)
class SaveTicket:
    """One issued save request."""
    seq: int
    method: str
    payload: Dict[str, Any]
    sent_values: Mapping[str, Any]
    submit: bool = False


@dataclass(frozen=True)
class SaveResult:
    """Outcome of one save request."""
    seq: int
    ok: bool
    submit: bool = False
    sent_values: Mapping[str, Any] = field(default_factory=dict)
    # Field values decoded from the server's echo of the stored draft
    echo: Mapping[str, Any] = field(default_factory=dict)
    echo_data: Mapping[str, Any] = field(default_factory=dict)
    field_errors: Mapping[str, str] = field(default_factory=dict)
    general_error: Optional[str] = None
    unauthorized: bool = False
    status_code: Optional[int] = None

    def __post_init__(self):
        for name in ("sent_values", "echo", "echo_data", "field_errors"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))


class DraftPersistence:
    """
    Load, save and submit preference drafts.

    The last saved wire representation (the baseline) is remembered so that
    unchanged drafts are not re-sent and, with partial updates enabled, only
    the changed keys are PUT.
    """

    def __init__(self, client, schema: WizardSchema, partial_updates: bool = None):
        if partial_updates is None:
            from app.config import Config
            partial_updates = Config.PREFERENCES_PARTIAL_UPDATES

        self.client = client
        self.schema = schema
        self.partial_updates = partial_updates
        self._validator = schema.build_validator()
        self._baseline: Optional[Dict[str, Any]] = None
        self._issued = 0

    # =========================================================================
    # State
    # =========================================================================

    @property
    def has_stored_draft(self) -> bool:
        return self._baseline is not None

    @property
    def sequence(self) -> int:
        """Sequence number of the latest issued save."""
        return self._issued

    # =========================================================================
    # Load
    # =========================================================================

    def load(self, session_id: Optional[str]) -> WizardSession:
        """
        Fetch the stored draft and build a session from it.

        Raises:
            NotFoundError: nothing stored yet (caller starts fresh)
            UnauthorizedError: token missing or rejected
            NetworkException: store unreachable
        """
        data = self.client.get_preferences()
        values = self.schema.defaults()
        values.update(self.hydrate(data))
        self._baseline = self._wire_view(data)
        logger.info(f"Loaded stored draft for session {session_id} ({len(values)} fields)")

        return WizardSession(
            session_id=session_id,
            fields=values,
            step_index=0,
            total_steps=self.schema.total_steps,
            current_step=self.schema.steps[0],
            has_stored_draft=True,
        )

    def hydrate(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Decode a stored draft into field values.

        Keys that are null, bookkeeping columns or unknown to the schema are
        skipped; skipped fields keep their defaults.
        """
        values: Dict[str, Any] = {}
        for spec in self.schema.fields:
            try:
                value = self._decode(spec, data)
            except (TypeError, ValueError) as e:
                logger.warning(f"Ignoring stored value for {spec.name}: {e}")
                continue
            if value is not None:
                values[spec.name] = spec.coerce(value)

        unknown = [
            key for key in data
            if key not in _BOOKKEEPING_KEYS and self.schema.field_for_wire_key(key) is None
        ]
        if unknown:
            logger.debug(f"Ignoring unknown draft keys: {sorted(unknown)}")
        return values

    def _decode(self, spec: FieldSpec, data: Mapping[str, Any]) -> Any:
        kind = spec.kind

        if kind == FieldKind.NUMBER_RANGE:
            low, high = (_parse_number(data.get(key)) for key in spec.wire_keys)
            if low is None and high is None:
                return None
            return NumberRange(low, high)

        if kind == FieldKind.DATE_RANGE:
            start, end = (_parse_date(data.get(key)) for key in spec.wire_keys)
            if start is None:
                return None
            # Same day on both ends is a single-date selection
            if end == start:
                end = None
            return DateRange(start, end)

        raw = data.get(spec.wire_keys[0])
        if raw is None:
            return None

        if kind == FieldKind.STRING_SET:
            if isinstance(raw, str):
                return frozenset(part.strip() for part in raw.split(",") if part.strip())
            return frozenset(str(code) for code in raw)

        if kind == FieldKind.BOOLEAN:
            return raw is True or raw == "true" or raw == 1

        if kind == FieldKind.NUMBER:
            return _parse_number(raw)

        return str(raw)

    # =========================================================================
    # Wire format
    # =========================================================================

    @staticmethod
    def normalize(value: Any) -> Any:
        """Map UI sentinels ("no-preference", "", None) to ABSENT."""
        if value is ABSENT or value is None:
            return ABSENT
        if isinstance(value, str) and value in ("", NO_PREFERENCE):
            return ABSENT
        return value

    def serialize(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Encode field values as the store's JSON body.

        Absent values are sent as null; an empty set is sent as [] (the user
        cleared the selection).
        """
        payload: Dict[str, Any] = {}
        for spec in self.schema.fields:
            value = fields.get(spec.name, spec.default)
            kind = spec.kind

            if kind == FieldKind.NUMBER_RANGE:
                low_key, high_key = spec.wire_keys
                payload[low_key] = _wire(self.normalize(value.min))
                payload[high_key] = _wire(self.normalize(value.max))
            elif kind == FieldKind.DATE_RANGE:
                start_key, end_key = spec.wire_keys
                payload[start_key] = value.start.isoformat() if value.start else None
                payload[end_key] = value.end.isoformat() if value.end else None
            elif kind == FieldKind.STRING_SET:
                payload[spec.wire_keys[0]] = sorted(value)
            elif kind == FieldKind.BOOLEAN:
                payload[spec.wire_keys[0]] = bool(value)
            else:
                payload[spec.wire_keys[0]] = _wire(self.normalize(value))
        return payload

    def _wire_view(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Known wire keys of a stored draft, dates trimmed to the day."""
        view = {}
        for spec in self.schema.fields:
            for key in spec.wire_keys:
                value = data.get(key)
                if spec.kind == FieldKind.DATE_RANGE and isinstance(value, str):
                    value = value.split("T")[0]
                view[key] = value
        return view

    # =========================================================================
    # Diff
    # =========================================================================

    def compute_changes(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Keys of ``payload`` that differ from the stored draft.

        Lists compare as sets. When either half of a range changes, both
        halves are included. Without a stored draft everything is a change.
        """
        if self._baseline is None:
            return dict(payload)

        changes = {
            key: value for key, value in payload.items()
            if not _same(value, self._baseline.get(key))
        }
        for spec in self.schema.fields:
            if spec.kind.is_range and any(key in changes for key in spec.wire_keys):
                for key in spec.wire_keys:
                    if key in payload:
                        changes[key] = payload[key]
        return changes

    def has_changes(self, fields: Mapping[str, Any]) -> bool:
        """True if saving ``fields`` would change the stored draft."""
        return bool(self.compute_changes(self.serialize(fields)))

    # =========================================================================
    # Save protocol
    # =========================================================================

    def begin(self, fields: Mapping[str, Any], submit: bool = False) -> SaveTicket:
        """Issue the next save: assign a sequence number and build the body."""
        self._issued += 1
        payload = self.serialize(fields)

        if self.partial_updates and self.has_stored_draft:
            method, body = "PUT", self.compute_changes(payload)
        else:
            method, body = "POST", payload

        logger.info(
            f"Save #{self._issued} issued ({method}, {len(body)} keys"
            f"{', complete' if submit else ''})"
        )
        return SaveTicket(
            seq=self._issued,
            method=method,
            payload=body,
            sent_values=MappingProxyType(dict(fields)),
            submit=submit,
        )

    def execute(self, ticket: SaveTicket) -> SaveResult:
        """
        Perform the HTTP round trip for a ticket.

        Safe to call off the caller's thread: only the client is touched.
        """
        common = dict(seq=ticket.seq, submit=ticket.submit, sent_values=ticket.sent_values)
        try:
            if ticket.method == "PUT":
                data = self.client.update_preferences(ticket.payload, complete=ticket.submit)
            else:
                data = self.client.create_preferences(ticket.payload, complete=ticket.submit)

        except UnauthorizedError as e:
            logger.warning(f"Save #{ticket.seq} unauthorized")
            return SaveResult(ok=False, unauthorized=True, status_code=e.status_code,
                              general_error=map_exception(e, "save_preferences"), **common)

        except ApiException as e:
            field_errors, general_error = self.map_server_errors(e.response_data)
            if not field_errors and not general_error:
                general_error = map_exception(e, "save_preferences")
            logger.warning(f"Save #{ticket.seq} rejected ({e.status_code}): {len(field_errors)} field errors")
            return SaveResult(ok=False, status_code=e.status_code, field_errors=field_errors,
                              general_error=general_error, **common)

        except NetworkException as e:
            logger.warning(f"Save #{ticket.seq} failed: {e}")
            return SaveResult(ok=False, general_error=map_exception(e, "save_preferences"), **common)

        if data is None:
            data = {}
        elif not isinstance(data, Mapping):
            logger.warning(f"Save #{ticket.seq} stored; ignoring non-object response body ({type(data).__name__})")
            data = {}
        logger.info(f"Save #{ticket.seq} stored")
        return SaveResult(ok=True, echo=self.hydrate(data), echo_data=data, **common)

    def accept(self, result: SaveResult) -> bool:
        """
        Apply a result unless a newer save has been issued since.

        Returns:
            False for a stale result (its data must be ignored)
        """
        if result.seq < self._issued:
            logger.info(f"Discarding stale response for save #{result.seq} (latest is #{self._issued})")
            return False

        if result.ok:
            sent = self.serialize(result.sent_values)
            baseline = self._wire_view(result.echo_data) if result.echo_data else {}
            if not any(value is not None for value in baseline.values()):
                baseline = dict(self._baseline or {})
                baseline.update(sent)
            self._baseline = baseline
        return True

    def save(self, fields: Mapping[str, Any]) -> SaveResult:
        """Save a draft synchronously."""
        result = self.execute(self.begin(fields))
        self.accept(result)
        return result

    def submit(self, fields: Mapping[str, Any]) -> SaveResult:
        """
        Save with terminal intent synchronously.

        Raises:
            SubmitNotAllowedError: blocking validation errors remain
        """
        if not self._validator.can_submit(fields):
            raise SubmitNotAllowedError("Blocking validation errors remain")
        result = self.execute(self.begin(fields, submit=True))
        self.accept(result)
        return result

    # =========================================================================
    # Server errors
    # =========================================================================

    def map_server_errors(self, response_data: Mapping[str, Any]) -> Tuple[Dict[str, str], Optional[str]]:
        """
        Split an error body into field errors (keyed by field name) and a
        general message for keys the schema does not know.
        """
        def resolve(key: str) -> Optional[str]:
            if key in self.schema.field_names:
                return key
            return self.schema.field_for_wire_key(key)

        return extract_field_errors(dict(response_data or {}), resolve)


def _wire(value: Any) -> Any:
    return None if value is ABSENT else value


def _parse_number(value: Any):
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        number = float(text)
        return int(number) if number.is_integer() else number


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).split("T")[0])


def _same(current: Any, stored: Any) -> bool:
    if isinstance(current, list):
        stored_list = stored if isinstance(stored, list) else []
        return sorted(map(str, current)) == sorted(map(str, stored_list))
    if isinstance(current, (int, float)) and not isinstance(current, bool) and isinstance(stored, str):
        try:
            return float(stored) == current
        except ValueError:
            return False
    return current == stored
