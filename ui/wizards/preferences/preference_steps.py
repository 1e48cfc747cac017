# -*- coding: utf-8 -*-
"""
Tenant preference wizard steps (16 pages).
"""

from ui.wizards.framework.base_step import WizardStep

PREFERENCE_STEPS = (
    WizardStep(
        "location", "Location",
        ("preferred_address", "preferred_areas", "preferred_districts", "preferred_metro_stations"),
        description="Where you want to live",
    ),
    WizardStep(
        "commute", "Commute",
        ("commute_location", "commute_time_walk", "commute_time_cycle", "commute_time_tube"),
        description="How far you are happy to travel",
    ),
    WizardStep(
        "budget", "Budget & Move-in",
        ("move_dates", "min_price", "max_price", "flexible_budget", "deposit_preference"),
        description="Your budget and when you want to move",
        optional=False,
    ),
    WizardStep(
        "property_type", "Property Type",
        ("property_types", "furnishing"),
    ),
    WizardStep(
        "apartment", "Apartment Details",
        ("min_bedrooms", "max_bedrooms", "min_bathrooms", "max_bathrooms",
         "square_meters", "outdoor_space"),
        description="Rooms and space you need",
    ),
    WizardStep(
        "building_style", "Building Style Preferences",
        ("building_style", "let_duration", "bills"),
        description="Choose your preferred building types",
    ),
    WizardStep(
        "lifestyle", "Lifestyle & Wellness", ("lifestyle_features",),
        description="Select wellness and fitness amenities that matter to you",
    ),
    WizardStep(
        "social", "Social & Community", ("social_features",),
        description="Choose social spaces and community features you'd enjoy",
    ),
    WizardStep(
        "work", "Work & Study", ("work_features",),
        description="Select work and study facilities you need for productivity",
    ),
    WizardStep(
        "convenience", "Convenience", ("convenience_features",),
        description="Choose convenience features that make daily life easier",
    ),
    WizardStep(
        "pets", "Pet-Friendly",
        ("pet_policy", "number_of_pets", "pet_friendly_features"),
        description="Select pet-friendly amenities if you have or plan to get pets",
    ),
    WizardStep(
        "luxury", "Luxury & Premium", ("luxury_features",),
        description="Choose luxury amenities and premium services you value",
    ),
    WizardStep("amenities", "Amenities", ("amenities",)),
    WizardStep(
        "about_you", "About You",
        ("occupation", "family_status", "smoker", "hobbies"),
    ),
    WizardStep(
        "living_environment", "Living Environment",
        ("ideal_living_environment", "tenant_types"),
    ),
    WizardStep(
        "complete_profile", "Complete Your Profile", ("additional_info",),
        description="Anything else landlords should know",
    ),
)
