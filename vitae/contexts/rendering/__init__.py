"""
Rendering Context

Responsibilities:
- Prints the print HTML document to PDF through headless Chromium
- Writes the PDF to its output path
- Releases the browser on every exit path

Owns: Headless browser lifecycle, PDF output
Never: Modifies document content
"""

from vitae.contexts.rendering.exceptions import PdfRenderError
from vitae.contexts.rendering.pdf_renderer import (
    ChromiumLauncher,
    PdfRenderResult,
    render_pdf,
    render_pdf_from_file,
)

__all__ = [
    "ChromiumLauncher",
    "PdfRenderError",
    "PdfRenderResult",
    "render_pdf",
    "render_pdf_from_file",
]
