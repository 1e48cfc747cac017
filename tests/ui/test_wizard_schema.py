# -*- coding: utf-8 -*-
"""
Tests for WizardSchema and WizardSession snapshots.
"""

from datetime import date

import pytest

from models.field_spec import FieldSpec
from models.field_value import DateRange, FieldKind
from services.exceptions import UnknownFieldError
from ui.wizards.framework.base_step import WizardStep
from ui.wizards.framework.wizard_context import SubmissionState, WizardSession
from ui.wizards.framework.wizard_schema import WizardSchema

PRICE = FieldSpec("price", FieldKind.NUMBER)
DATES = FieldSpec("dates", FieldKind.DATE_RANGE, wire_keys=("date_from", "date_to"))


class TestWizardSchema:
    """Test schema consistency checks."""

    def test_wire_key_lookup(self, schema):
        assert schema.field_for_wire_key("min_square_meters") == "square_meters"
        assert schema.field_for_wire_key("building_types") == "building_style"
        assert schema.field_for_wire_key("min_price") == "min_price"
        assert schema.field_for_wire_key("bogus") is None

    def test_duplicate_field(self):
        with pytest.raises(ValueError):
            WizardSchema("x", (PRICE, PRICE), (WizardStep("a", "A", ("price",)),))

    def test_step_with_unknown_field(self):
        with pytest.raises(UnknownFieldError):
            WizardSchema("x", (PRICE,), (WizardStep("a", "A", ("cost",)),))

    def test_field_on_two_steps(self):
        with pytest.raises(ValueError):
            WizardSchema("x", (PRICE,), (
                WizardStep("a", "A", ("price",)),
                WizardStep("b", "B", ("price",)),
            ))

    def test_wire_key_collision(self):
        clash = FieldSpec("date_from", FieldKind.TEXT)
        with pytest.raises(ValueError):
            WizardSchema("x", (DATES, clash), (WizardStep("a", "A", ("dates", "date_from")),))

    def test_range_field_needs_two_wire_keys(self):
        with pytest.raises(ValueError):
            FieldSpec("dates", FieldKind.DATE_RANGE)

    def test_no_steps(self):
        with pytest.raises(ValueError):
            WizardSchema("x", (PRICE,), ())


class TestWizardSession:
    """Test snapshot invariants."""

    def make(self, schema, **changes):
        values = dict(
            session_id="user-1",
            fields=schema.defaults(),
            step_index=0,
            total_steps=schema.total_steps,
            current_step=schema.steps[0],
        )
        values.update(changes)
        return WizardSession(**values)

    def test_step_index_bounds(self, schema):
        with pytest.raises(ValueError):
            self.make(schema, step_index=16)
        with pytest.raises(ValueError):
            self.make(schema, step_index=-1)

    def test_error_keys_subset_of_fields(self, schema):
        with pytest.raises(ValueError):
            self.make(schema, field_errors={"shoe_size": "unknown"})

    def test_derived_state(self, schema):
        session = self.make(schema, step_index=15, submission_state=SubmissionState.SAVING)
        assert session.is_last_step
        assert not session.is_first_step
        assert session.is_busy
        assert session.progress_percentage == 100.0

    def test_fields_read_only(self, schema):
        session = self.make(schema)
        with pytest.raises(TypeError):
            session.fields["min_price"] = 1

    def test_to_dict(self, schema):
        fields = schema.defaults()
        fields["hobbies"] = frozenset({"yoga", "art"})
        fields["move_dates"] = DateRange(date(2025, 3, 1))
        data = self.make(schema, fields=fields).to_dict()

        assert data["step_key"] == "location"
        assert data["submission_state"] == "idle"
        assert data["fields"]["hobbies"] == ["art", "yoga"]
        assert data["fields"]["move_dates"] == ["2025-03-01", None]
        assert data["fields"]["square_meters"] == [15, 45]

    def test_default_errors(self, schema):
        """Test each snapshot gets its own empty, read-only error mapping."""
        first, second = self.make(schema), self.make(schema)
        assert first.field_errors == {}
        assert first.field_errors is not second.field_errors
        with pytest.raises(TypeError):
            first.field_errors["min_price"] = "x"
