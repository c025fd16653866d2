# -*- coding: utf-8 -*-

"""
Error kinds for the task client.

Validation errors keep the form open; remote errors are shown as a
transient message. Every error carries a message suitable for direct
display to the user.
"""

from typing import Optional


class TaskboardError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ==================================================================================================
# Validation errors (recoverable, re-prompt the same form)
# ==================================================================================================

class TaskValidationError(TaskboardError):
    """Form input rejected before reaching the store."""
    field: str = ""


class MissingTitle(TaskValidationError):
    field = "title"

    def __init__(self, message: str = "Title is required"):
        super().__init__(message)


class MissingDeadline(TaskValidationError):
    field = "deadline"

    def __init__(self, message: str = "Deadline is required"):
        super().__init__(message)


class InvalidDeadline(TaskValidationError):
    field = "deadline"

    def __init__(self, message: str = "Invalid deadline date"):
        super().__init__(message)


class InvalidField(TaskValidationError):
    """Status, priority or length constraint violated."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


# ==================================================================================================
# Store and remote-operation errors (recoverable, previous state preserved)
# ==================================================================================================

class StoreError(TaskboardError):
    """
    Failure talking to the remote task store.

    Raised by the store layer. status_code is None for transport failures
    (connection refused, timeout); detail is the server-provided message,
    when the response body carried one.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class RemoteOperationError(TaskboardError):
    """A view-level operation failed because the store call failed."""

    def __init__(self, message: str, cause: Optional[StoreError] = None):
        super().__init__(message)
        self.cause = cause


class FetchError(RemoteOperationError):
    pass


class DeleteError(RemoteOperationError):
    pass


class UpdateError(RemoteOperationError):
    pass


class SubmitError(RemoteOperationError):
    pass
