"""Failures surfaced to the caller of a top-level operation."""


class HistoryError(Exception):
    """Base class for hard failures. ``str(exc)`` is the caller-facing message."""

    message = "History operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class HomeDirectoryNotFound(HistoryError):
    message = "Could not find home directory"


class ProjectNotFound(HistoryError):
    message = "Project path does not exist"


class SessionNotFound(HistoryError):
    message = "Session file does not exist"
