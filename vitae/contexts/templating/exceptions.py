"""Custom exceptions for templating context."""

from pathlib import Path
from typing import Optional

from vitae.exceptions import VitaeError


class RenderError(VitaeError):
    """
    Exception raised when a document cannot be rendered from résumé data.

    Covers both a missing or mis-shaped field in the data document and a
    failure inside a Jinja2 template.

    Attributes:
        message: Error description
        field_path: Dotted path of the offending field (e.g., 'experience[0].companyUrl')
        template_name: Template being rendered when the error occurred
        original_error: The original error (e.g., a Jinja2 UndefinedError)
    """

    def __init__(
        self,
        message: str,
        field_path: Optional[str] = None,
        template_name: Optional[str] = None,
        path: Optional[Path] = None,
        original_error: Optional[BaseException] = None,
    ):
        self.field_path = field_path
        self.template_name = template_name

        if field_path:
            message = f"{message}\nField: {field_path}"
        if template_name:
            message = f"{message}\nTemplate: {template_name}"

        super().__init__(message, path=path, original_error=original_error)
