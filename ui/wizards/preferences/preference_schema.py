# -*- coding: utf-8 -*-
"""
Tenant preference fields.

Option codes are the values stored by the preference API. Labels are only
used for error messages and the presentation layer.
"""

from models.field_spec import FieldSpec
from models.field_value import NO_PREFERENCE, FieldKind, NumberRange

# =============================================================================
# Option sets
# =============================================================================

LIFESTYLE_OPTIONS = ("gym", "pool", "garden", "spa", "cinema", "library")
SOCIAL_OPTIONS = ("communal-space", "rooftop", "events", "bbq", "games-room")
WORK_OPTIONS = ("co-working", "meeting-rooms", "high-speed-wifi", "business-center")
CONVENIENCE_OPTIONS = ("parking", "storage", "laundry", "concierge", "security")
PET_OPTIONS = ("pet-park", "pet-washing", "pet-sitting", "pet-friendly")
LUXURY_OPTIONS = ("concierge", "valet", "spa", "wine-cellar", "private-dining")
BUILDING_STYLE_OPTIONS = (
    "btr", "co-living", "new-builds", "period-homes",
    "luxury-apartments", "serviced-apartments",
)
AMENITY_OPTIONS = (
    "lift", "balcony", "terrace", "bike-storage", "dishwasher",
    "washing-machine", "air-conditioning", "smoking-area",
)

PROPERTY_TYPE_OPTIONS = ("flats", "houses", "studio", "room-in-shared-house")
FURNISHING_OPTIONS = ("furnished", "unfurnished", "part-furnished", NO_PREFERENCE)
DEPOSIT_OPTIONS = ("yes", "no")
LET_DURATION_OPTIONS = ("short-term", "6-months", "12-months", "long-term", "flexible")
BILLS_OPTIONS = ("included", "not-included", NO_PREFERENCE)

OCCUPATION_OPTIONS = (
    "student", "young-professional", "freelancer-remote-worker",
    "business-owner", "family-professional", "other",
)
FAMILY_STATUS_OPTIONS = (
    "just-me", "couple", "couple-with-children", "single-parent", "friends-flatmates",
)
SMOKER_OPTIONS = ("no", "yes", "no-but-okay", "no-prefer-non-smoking", NO_PREFERENCE)
HOBBY_OPTIONS = (
    "reading", "cooking", "fitness", "music", "travel", "photography",
    "gaming", "art", "sports", "dancing", "writing", "gardening", "yoga",
    "cycling", "running", "swimming", "hiking", "movies", "fashion",
    "technology", "languages", "volunteering", "shopping", "socializing",
)
IDEAL_LIVING_OPTIONS = (
    "quiet-professional", "social-friendly", "family-oriented",
    "student-lifestyle", "creative-artistic", NO_PREFERENCE,
)
TENANT_TYPE_OPTIONS = ("students", "professionals", "families", "couples", "sharers")


def _set(name, label, options=(), wire_key=None):
    return FieldSpec(
        name, FieldKind.STRING_SET, label=label, options=options,
        wire_keys=(wire_key,) if wire_key else (),
    )


# =============================================================================
# Fields
# =============================================================================

PREFERENCE_FIELDS = (
    # Location
    FieldSpec("preferred_address", FieldKind.TEXT, label="Preferred address or postcode"),
    _set("preferred_areas", "Preferred areas"),
    _set("preferred_districts", "Preferred districts"),
    _set("preferred_metro_stations", "Preferred stations"),

    # Commute
    FieldSpec("commute_location", FieldKind.TEXT, default=NO_PREFERENCE, label="Commute destination"),
    FieldSpec("commute_time_walk", FieldKind.NUMBER, default=15, label="Walking time (minutes)"),
    FieldSpec("commute_time_cycle", FieldKind.NUMBER, default=20, label="Cycling time (minutes)"),
    FieldSpec("commute_time_tube", FieldKind.NUMBER, default=30, label="Tube time (minutes)"),

    # Budget
    FieldSpec("move_dates", FieldKind.DATE_RANGE, label="Move-in dates",
              wire_keys=("move_in_date", "move_out_date")),
    FieldSpec("min_price", FieldKind.NUMBER, default=1000, label="Minimum price"),
    FieldSpec("max_price", FieldKind.NUMBER, default=5000, label="Maximum price"),
    FieldSpec("flexible_budget", FieldKind.BOOLEAN, default=False, label="Flexible budget"),
    FieldSpec("deposit_preference", FieldKind.ENUM, label="Deposit", options=DEPOSIT_OPTIONS),

    # Property type
    _set("property_types", "Property types", PROPERTY_TYPE_OPTIONS),
    FieldSpec("furnishing", FieldKind.ENUM, default=NO_PREFERENCE, label="Furnishing",
              options=FURNISHING_OPTIONS),

    # Apartment
    FieldSpec("min_bedrooms", FieldKind.NUMBER, default=1, label="Minimum bedrooms"),
    FieldSpec("max_bedrooms", FieldKind.NUMBER, default=3, label="Maximum bedrooms"),
    FieldSpec("min_bathrooms", FieldKind.NUMBER, default=1, label="Minimum bathrooms"),
    FieldSpec("max_bathrooms", FieldKind.NUMBER, default=2, label="Maximum bathrooms"),
    FieldSpec("square_meters", FieldKind.NUMBER_RANGE, default=NumberRange(15, 45),
              label="Size (m²)", wire_keys=("min_square_meters", "max_square_meters")),
    FieldSpec("outdoor_space", FieldKind.BOOLEAN, default=False, label="Outdoor space"),

    # Building
    _set("building_style", "Building style", BUILDING_STYLE_OPTIONS, wire_key="building_types"),
    FieldSpec("let_duration", FieldKind.ENUM, label="Let duration", options=LET_DURATION_OPTIONS),
    FieldSpec("bills", FieldKind.ENUM, label="Bills", options=BILLS_OPTIONS),

    # Feature categories
    _set("lifestyle_features", "Lifestyle & wellness", LIFESTYLE_OPTIONS),
    _set("social_features", "Social & community", SOCIAL_OPTIONS),
    _set("work_features", "Work & study", WORK_OPTIONS),
    _set("convenience_features", "Convenience", CONVENIENCE_OPTIONS),

    # Pets
    FieldSpec("pet_policy", FieldKind.BOOLEAN, default=False, label="I have pets"),
    FieldSpec("number_of_pets", FieldKind.NUMBER, label="Number of pets"),
    _set("pet_friendly_features", "Pet-friendly features", PET_OPTIONS),

    _set("luxury_features", "Luxury & premium", LUXURY_OPTIONS),
    _set("amenities", "Amenities", AMENITY_OPTIONS),

    # About you
    FieldSpec("occupation", FieldKind.ENUM, label="Occupation", options=OCCUPATION_OPTIONS),
    FieldSpec("family_status", FieldKind.ENUM, label="Who will live with you",
              options=FAMILY_STATUS_OPTIONS),
    FieldSpec("smoker", FieldKind.ENUM, default=NO_PREFERENCE, label="Smoking", options=SMOKER_OPTIONS),
    _set("hobbies", "Hobbies", HOBBY_OPTIONS),

    # Living environment
    _set("ideal_living_environment", "Ideal living environment", IDEAL_LIVING_OPTIONS),
    _set("tenant_types", "Sharing with", TENANT_TYPE_OPTIONS),

    FieldSpec("additional_info", FieldKind.TEXT, label="About you"),
)
