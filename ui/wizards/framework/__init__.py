# -*- coding: utf-8 -*-
"""
Wizard Framework - generic multi-step wizard engine.

Provides the field store, step navigation, session snapshots and the
controller that drives validation and draft persistence.
"""

# Lazy imports to avoid circular dependencies with services.wizard
__all__ = [
    'FieldStore',
    'StepNavigator',
    'StepValidationResult',
    'SubmissionState',
    'WizardController',
    'WizardSchema',
    'WizardSession',
    'WizardStep',
]

_EXPORTS = {
    'FieldStore': '.field_store',
    'StepNavigator': '.step_navigator',
    'StepValidationResult': '.base_step',
    'SubmissionState': '.wizard_context',
    'WizardController': '.wizard_controller',
    'WizardSchema': '.wizard_schema',
    'WizardSession': '.wizard_context',
    'WizardStep': '.base_step',
}


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module
    return getattr(import_module(module_name, __name__), name)
