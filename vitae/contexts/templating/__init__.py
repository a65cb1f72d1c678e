"""
Templating Context

Responsibilities:
- Owns the typed résumé data model (ResumeData)
- Renders the website, print document and web manifest from ResumeData
- Manages the HTML template system (vitae/contexts/templating/template/)
- Makes every escaping decision explicit per field

Owns: Résumé data model, HTML/manifest generation
Never: Prints PDFs or copies static assets
"""

from vitae.contexts.templating.exceptions import RenderError
from vitae.contexts.templating.renderer import (
    DocumentOutputs,
    GeneratedDocuments,
    generate_all,
    initials_of,
    render_manifest,
    render_print_document,
    render_website,
    years_of_experience,
)
from vitae.contexts.templating.resume_data_structure import ResumeData

__all__ = [
    # Rendering
    "render_website",
    "render_print_document",
    "render_manifest",
    "generate_all",
    "initials_of",
    "years_of_experience",
    "DocumentOutputs",
    "GeneratedDocuments",
    # Data structure
    "ResumeData",
    "RenderError",
]
