# -*- coding: utf-8 -*-
"""
Tenant Preferences Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "PreferencesApiClient",
    "StepProgressStore",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "PreferencesApiClient":
        from .api_client import PreferencesApiClient
        return PreferencesApiClient
    elif name == "StepProgressStore":
        from .step_progress_store import StepProgressStore
        return StepProgressStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
