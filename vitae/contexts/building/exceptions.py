"""Custom exceptions for building context."""

from vitae.exceptions import VitaeError


class AssetCopyError(VitaeError):
    """
    Raised when a static asset cannot be copied into the output directory.

    A missing source is not an error (it is skipped); this covers I/O
    failures such as permissions or a full disk.
    """
