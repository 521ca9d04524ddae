"""Exceptions raised by Poised PMS."""

from __future__ import annotations


class InputRejected(ValueError):
    """Raised by a parser when raw console text does not satisfy its contract.

    The message is the diagnostic shown to the user before re-prompting.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class StoreError(Exception):
    """Raised when the record store fails to execute a statement."""

    pass


class CascadeDeletionError(StoreError):
    """Raised when the cascade delete fails and has been rolled back."""

    def __init__(self, project_number: int, cause: BaseException):
        super().__init__(
            f"Deleting project {project_number} failed and was rolled back: {cause}"
        )
        self.project_number = project_number
        self.cause = cause
