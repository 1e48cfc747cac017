# -*- coding: utf-8 -*-
"""
Tenant preference validation rules.

Bounds mirror the preference API's own checks so most problems are caught
before a save is issued.
"""

from services.wizard.validation_engine import FieldRule, RangePairRule

# Printable characters only (postcode or free-text address)
_PRINTABLE = r"[^\x00-\x1f\x7f]*"

PREFERENCE_RULES = (
    FieldRule("preferred_address", max=200, pattern=_PRINTABLE),
    FieldRule("commute_time_walk", min=0, max=120),
    FieldRule("commute_time_cycle", min=0, max=120),
    FieldRule("commute_time_tube", min=0, max=120),
    FieldRule("min_price", required=True, min=0),
    FieldRule("max_price", required=True, min=0),
    FieldRule("min_bedrooms", min=0, max=10),
    FieldRule("max_bedrooms", min=0, max=10),
    FieldRule("min_bathrooms", min=0, max=10),
    FieldRule("max_bathrooms", min=0, max=10),
    FieldRule("square_meters", min=0),
    FieldRule("number_of_pets", min=0),
    FieldRule("additional_info", max=2000),
)

PREFERENCE_PAIR_RULES = (
    RangePairRule("min_price", "max_price", "Minimum price must not exceed maximum price"),
    RangePairRule("min_bedrooms", "max_bedrooms", "Minimum bedrooms must not exceed maximum bedrooms"),
    RangePairRule("min_bathrooms", "max_bathrooms", "Minimum bathrooms must not exceed maximum bathrooms"),
)
