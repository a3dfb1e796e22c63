"""
errors.py

Exceptions raised by the webhook client.

Every failure of a webhook call ends up as one of these, so the
session controller can catch MootClientError at the action boundary
and turn it into a single message for the user.
"""

from typing import Optional


class MootClientError(Exception):
    """Base class for all webhook call failures."""


class WebhookTransportError(MootClientError):
    """Network failure, timeout, or a body that is not JSON."""


class WebhookStatusError(MootClientError):
    """The webhook answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(MootClientError):
    """A required field is missing from the response, or has the wrong type."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
