"""Exceptions raised by the ClawdNet SDK."""

from __future__ import annotations


class ClawdNetError(Exception):
    """Base class for all ClawdNet SDK errors."""


class AuthenticationRequiredError(ClawdNetError):
    """Raised when an operation needs an API key and none is configured."""


class ClawdNetAPIError(ClawdNetError):
    """Raised when the ClawdNet API returns a non-2xx response."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ClawdNetConnectionError(ClawdNetError):
    """Raised when the ClawdNet API cannot be reached."""


class WebhookSignatureError(ClawdNetError):
    """Raised by construct_event when a webhook signature does not verify."""


class WebhookPayloadError(ClawdNetError):
    """Raised when a verified webhook body is not a JSON object."""
