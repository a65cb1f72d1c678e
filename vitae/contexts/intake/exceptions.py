"""Custom exceptions for intake context."""

from vitae.exceptions import VitaeError


class DataLoadError(VitaeError):
    """
    Raised when the résumé data file is missing, unreadable, or not valid JSON.

    Fatal to the current build. Never retried.
    """
