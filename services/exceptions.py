"""Exceptions shared by the compose assistant, the form and the generation service."""

from typing import Optional


class EmailWriterError(Exception):
    """Base exception for email writer errors."""

    pass


class ElementNotFound(EmailWriterError):
    """A toolbar, editable field or email-content element is absent.

    Handled inside the operation that raised it; never shown to the user.
    """

    pass


class RequestFailed(EmailWriterError):
    """The generation request failed (network error or non-2xx response).

    Attributes:
        status_code: HTTP status of the failed response, None for transport errors.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GenerationError(EmailWriterError):
    """The LLM provider could not produce a reply."""

    pass
