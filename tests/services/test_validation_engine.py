# -*- coding: utf-8 -*-
"""
Tests for ValidationEngine.

Tests cover:
- Declarative field rules
- Cross-field min/max pairs and inverted ranges
- Server error precedence
- Submit and advance predicates
"""

from datetime import date

import pytest

from models.field_value import DateRange, NumberRange
from services.exceptions import UnknownFieldError
from services.wizard.validation_engine import FieldRule, ValidationEngine
from ui.wizards.preferences import PREFERENCE_FIELDS


@pytest.fixture
def engine(schema):
    return schema.build_validator()


@pytest.fixture
def fields(schema):
    return schema.defaults()


class TestFieldRules:
    """Test per-field rules."""

    def test_defaults_are_valid(self, engine, fields):
        """Test a fresh session has no errors."""
        assert engine.validate(fields) == {}
        assert engine.can_submit(fields)

    def test_required_field_missing(self, engine, fields):
        fields["min_price"] = None
        errors = engine.validate(fields)
        assert errors == {"min_price": "This field is required"}
        assert not engine.can_submit(fields)

    def test_number_bounds(self, engine, fields):
        """Test out-of-range numbers are reported but do not block submit."""
        fields["commute_time_walk"] = 150
        fields["max_bedrooms"] = 11
        errors = engine.validate(fields)
        assert errors["commute_time_walk"] == "Must be at most 120"
        assert errors["max_bedrooms"] == "Must be at most 10"
        assert engine.can_submit(fields)

    def test_negative_price(self, engine, fields):
        fields["min_price"] = -1
        assert engine.validate(fields)["min_price"] == "Must be at least 0"

    def test_text_length_and_pattern(self, engine, fields):
        fields["additional_info"] = "x" * 2001
        fields["preferred_address"] = "SW1A\x001AA"
        errors = engine.validate(fields)
        assert errors["additional_info"] == "Must be at most 2000 characters"
        assert errors["preferred_address"] == "Invalid format"

    def test_postcode_is_valid(self, engine, fields):
        fields["preferred_address"] = "SW1A 1AA"
        assert "preferred_address" not in engine.validate(fields)

    def test_unknown_option(self, engine, fields):
        """Test codes outside the option set are flagged."""
        fields["lifestyle_features"] = frozenset({"gym", "helipad"})
        fields["furnishing"] = "semi"
        errors = engine.validate(fields)
        assert errors["lifestyle_features"] == "Unknown option(s): helipad"
        assert errors["furnishing"] == "Unknown option: semi"

    def test_rule_for_unknown_field(self):
        with pytest.raises(UnknownFieldError):
            ValidationEngine(PREFERENCE_FIELDS, [FieldRule("shoe_size", required=True)])


class TestRanges:
    """Test min/max pairs and range values."""

    def test_min_greater_than_max_price(self, engine, fields):
        """Test an inverted pair errors on both fields and blocks submit."""
        fields["min_price"] = 6000
        errors = engine.validate(fields)
        assert errors["min_price"] == errors["max_price"]
        assert fields["min_price"] == 6000
        assert not engine.can_submit(fields)

    def test_inverted_bedrooms_block(self, engine, fields):
        fields["min_bedrooms"] = 4
        fields["max_bedrooms"] = 2
        assert engine.blocking_fields(fields) == {"min_bedrooms", "max_bedrooms"}

    def test_inverted_number_range(self, engine, fields):
        """Test an inverted range is reported, not swapped."""
        fields["square_meters"] = NumberRange(60, 20)
        errors = engine.validate(fields)
        assert errors["square_meters"] == "Minimum must not be greater than maximum"
        assert fields["square_meters"] == NumberRange(60, 20)
        assert not engine.can_submit(fields)

    def test_inverted_date_range(self, engine, fields):
        fields["move_dates"] = DateRange(date(2025, 3, 1), date(2025, 2, 1))
        assert engine.validate(fields)["move_dates"] == "End date must not be before start date"

    def test_single_date_is_valid(self, engine, fields):
        fields["move_dates"] = DateRange(date(2025, 3, 1))
        assert "move_dates" not in engine.validate(fields)


class TestServerErrors:
    """Test merging of server-returned errors."""

    def test_server_error_wins(self, engine):
        merged = engine.merge_server_errors(
            {"min_price": "Must be at least 0", "max_bedrooms": "Must be at most 10"},
            {"min_price": "must be a positive number"},
        )
        assert merged == {
            "min_price": "must be a positive number",
            "max_bedrooms": "Must be at most 10",
        }

    def test_server_error_on_required_field_blocks_submit(self, engine, fields):
        assert not engine.can_submit(fields, {"max_price": "too high"})

    def test_server_error_on_optional_field_does_not_block(self, engine, fields):
        assert engine.can_submit(fields, {"commute_time_walk": "must be ≤ 120"})


class TestStepValidation:
    """Test per-step results."""

    def test_blocking_error_fails_step(self, engine, schema, fields):
        fields["max_price"] = None
        budget = schema.steps[2]
        result = engine.validate_step(budget, fields)
        assert not result.is_valid
        assert "max_price" in result.field_errors
        assert not engine.can_advance(budget, fields)

    def test_non_blocking_error_is_warning(self, engine, schema, fields):
        commute = schema.steps[1]
        result = engine.validate_step(commute, fields, {"commute_time_walk": "must be ≤ 120"})
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_other_steps_ignored(self, engine, schema, fields):
        """Test a step only looks at its own fields."""
        fields["max_price"] = None
        assert engine.can_advance(schema.steps[0], fields)
