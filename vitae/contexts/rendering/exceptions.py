"""Custom exceptions for rendering context."""

from vitae.exceptions import VitaeError


class PdfRenderError(VitaeError):
    """
    Raised when the headless browser fails to print the document to PDF.

    Covers launch failures, navigation timeouts, crashes and failures to
    persist the PDF bytes.
    """
