# -*- coding: utf-8 -*-
"""Centralized error message mapper."""

from typing import Callable, Dict, Optional, Tuple

from services.exceptions import ApiException, NetworkException, UnauthorizedError
from utils.logger import get_logger

logger = get_logger(__name__)

MSG_CONNECTION = "Could not reach the server. Your answers are kept; please try again."
MSG_TIMEOUT = "The server took too long to respond. Your answers are kept; please try again."
MSG_SESSION_EXPIRED = "Your session has expired. Please sign in again."
MSG_VALIDATION = "Some answers need attention before they can be saved."
MSG_GENERIC = "Failed to save preferences. Please try again."


def map_api_error(error: ApiException) -> str:
    """Map API exception to a user-friendly message.

    Technical details are logged only - never shown to the user, except a
    plain-text message the server itself produced for a 4xx response.
    """
    status = error.status_code

    if isinstance(error, UnauthorizedError):
        return MSG_SESSION_EXPIRED

    if error.is_validation_error:
        details = _describe_validation_details(error.response_data)
        if details:
            logger.warning(f"API validation error ({status}): {details}")
        return MSG_VALIDATION

    if status:
        logger.warning(f"API error ({status}): {error}")

    server_message = error.response_data.get("message")
    if status and 400 <= status < 500 and isinstance(server_message, str) and server_message:
        return server_message
    return MSG_GENERIC


def map_network_error(error: NetworkException) -> str:
    """Map network exception to user-friendly message."""
    msg = str(error.original_error) if error.original_error else error.message
    if "timeout" in msg.lower() or "timed out" in msg.lower():
        return MSG_TIMEOUT
    return MSG_CONNECTION


def map_exception(error: Exception, context: str = None) -> str:
    """Map any exception to a user-friendly message."""
    if isinstance(error, ApiException):
        if not error.context and context:
            error.context = context
        return map_api_error(error)

    if isinstance(error, NetworkException):
        return map_network_error(error)

    # Log unexpected errors
    logger.warning(f"Unexpected error: {error}")
    return MSG_GENERIC


def extract_field_errors(
    response_data: dict,
    resolve_key: Optional[Callable[[str], Optional[str]]] = None,
) -> Tuple[Dict[str, str], Optional[str]]:
    """Extract field-keyed errors from an error response body.

    Understands ``{"errors": {field: message | [messages]}}`` and the
    class-validator style ``{"message": ["field must be ...", ...]}``.

    Args:
        response_data: Parsed error body
        resolve_key: Maps a wire key to a wizard field name (None = unknown)

    Returns:
        (field errors keyed by resolved name, leftover message for the banner)
    """
    resolve = resolve_key or (lambda key: key)
    field_errors: Dict[str, str] = {}
    leftovers = []

    if not response_data:
        return field_errors, None

    errors = response_data.get("errors")
    if isinstance(errors, dict):
        for key, messages in errors.items():
            message = messages[0] if isinstance(messages, list) and messages else messages
            name = resolve(key)
            if name is None:
                leftovers.append(f"{key}: {message}")
            else:
                field_errors.setdefault(name, str(message))
    elif isinstance(errors, list):
        leftovers.extend(str(e) for e in errors)

    messages = response_data.get("message")
    if not errors and isinstance(messages, list):
        for message in messages:
            text = str(message)
            key = text.split(" ", 1)[0]
            name = resolve(key) if resolve_key else None
            if name is None:
                leftovers.append(text)
            else:
                field_errors.setdefault(name, text)

    return field_errors, ("; ".join(leftovers) or None)


def _describe_validation_details(response_data: dict) -> str:
    """Render validation error details from an API response for the log."""
    errors = response_data.get("errors", {})
    if isinstance(errors, dict):
        return "\n".join(f"• {field}: {messages}" for field, messages in errors.items())
    if isinstance(errors, list):
        return "\n".join(f"• {e}" for e in errors)
    return str(response_data.get("message", ""))
