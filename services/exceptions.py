# -*- coding: utf-8 -*-
"""Custom exceptions for the application."""


class ApiException(Exception):
    """Exception raised for API errors."""

    def __init__(self, message: str, status_code: int = None,
                 response_data: dict = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}
        self.context = context

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message

    @property
    def is_validation_error(self) -> bool:
        """True for 400/422 responses that carry field errors."""
        return self.status_code in (400, 422) and isinstance(
            self.response_data.get("errors"), (dict, list)
        )


class UnauthorizedError(ApiException):
    """The preference store rejected the bearer token (401/403)."""


class NotFoundError(ApiException):
    """No stored draft exists yet (404)."""


class NetworkException(Exception):
    """Exception raised for network/connection errors."""

    def __init__(self, message: str, original_error: Exception = None,
                 context: str = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = context


# =============================================================================
# Wizard engine errors
# =============================================================================

class WizardError(Exception):
    """Base class for wizard engine errors."""


class UnknownFieldError(WizardError, KeyError):
    """A field name outside the wizard schema was used."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Unknown wizard field: {self.name!r}"


class TypeMismatchError(WizardError, TypeError):
    """An operation or value does not fit the field's kind."""

    def __init__(self, name: str, kind, detail: str = ""):
        self.name = name
        self.kind = kind
        self.detail = detail
        message = f"Field {name!r} of kind {getattr(kind, 'value', kind)}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class SubmitRejectedError(WizardError):
    """Submit was refused before any request was issued."""

    reason = "rejected"


class AlreadySubmittingError(SubmitRejectedError):
    """A submit is already in flight."""

    reason = "already_submitting"


class SubmitNotAllowedError(SubmitRejectedError):
    """Not on the last step, or blocking validation errors remain."""

    reason = "submit_not_allowed"


class SessionClosedError(WizardError):
    """The wizard session was discarded and accepts no more actions."""
