"""
Document Renderer

Maps ResumeData to the three generated documents:
- website HTML (index.html)
- print HTML for the ATS-optimized PDF (resume-template.html)
- web app manifest (site.webmanifest)

The render_* functions are pure: output depends only on the data passed in.
generate_all() is the only function here that touches the filesystem.
"""

import asyncio
import json
import re
import time
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import TemplateError

from vitae.contexts.templating.exceptions import RenderError
from vitae.contexts.templating.logger import (
    log_document_written,
    log_generation_result,
    log_generation_start,
)
from vitae.contexts.templating.registries import TemplateRegistry
from vitae.contexts.templating.resume_data_structure import ResumeData

DEFAULT_YEARS_OF_EXPERIENCE = "15+"
YEARS_PATTERN = re.compile(r"(\d+)\+?\s*years", re.IGNORECASE)

THEME_COLOR = "#2E86AB"
BACKGROUND_COLOR = "#ffffff"
MANIFEST_ICONS = [
    {"src": "/android-chrome-192x192.png", "sizes": "192x192", "type": "image/png"},
    {"src": "/android-chrome-512x512.png", "sizes": "512x512", "type": "image/png"},
]


@dataclass
class DocumentOutputs:
    """Destination paths for generate_all(). No manifest is written when manifest_path is None."""

    website_path: Path
    print_path: Path
    manifest_path: Optional[Path] = None


@dataclass
class GeneratedDocuments:
    """Rendered document strings returned by generate_all()."""

    website: str
    print_document: str
    manifest: Optional[str] = None


@lru_cache(maxsize=1)
def _default_registry() -> TemplateRegistry:
    return TemplateRegistry()


def initials_of(full_name: str) -> str:
    """
    Initials for the compact navigation badge.

    First letter of the first token, plus first letter of the last token when
    the name has more than one token. Middle names are ignored.

    Examples:
        initials_of("Alvaro Ruano")        # "AR"
        initials_of("Madonna")             # "M"
        initials_of("Jean Paul Gaultier")  # "JG"
    """
    tokens = full_name.split()
    if not tokens:
        return ""
    if len(tokens) == 1:
        return tokens[0][0].upper()
    return tokens[0][0].upper() + tokens[-1][0].upper()


def years_of_experience(text: str) -> str:
    """
    Best-effort "N+" years of experience from free text.

    Matches the first "<number> years" (optionally "<number>+ years"); falls back
    to DEFAULT_YEARS_OF_EXPERIENCE when nothing matches.
    """
    match = YEARS_PATTERN.search(text)
    if match is None:
        return DEFAULT_YEARS_OF_EXPERIENCE
    return f"{match.group(1)}+"


def build_structured_data(data: ResumeData) -> Dict[str, Any]:
    """Schema.org Person record embedded in the website as JSON-LD."""
    personal = data.personal
    canonical = data.meta.canonical

    person: Dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "Person",
        "name": personal.name,
        "url": canonical,
        "image": f"{canonical}/{personal.profile_image}",
    }

    if data.experience:
        current = data.experience[0]
        person["jobTitle"] = current.title
        person["worksFor"] = {
            "@type": "Organization",
            "name": current.company,
            "url": current.company_url,
        }

    person["address"] = {"@type": "PostalAddress", "addressLocality": personal.location}
    person["email"] = personal.email
    person["telephone"] = personal.phone
    person["sameAs"] = [personal.linkedin, personal.github] + [s.url for s in data.social]
    person["knowsAbout"] = list(data.skills.leadership) + list(data.skills.technical)
    person["alumniOf"] = [
        {"@type": "EducationalOrganization", "name": edu.institution} for edu in data.education
    ]
    person["hasCredential"] = [
        {
            "@type": "EducationalOccupationalCredential",
            "name": cert.name,
            "credentialCategory": "certification",
            "recognizedBy": {"@type": "Organization", "name": cert.issuer},
        }
        for cert in data.certifications
    ]
    return person


def _script_json(value: Any) -> str:
    # "</" would close the surrounding <script> element early
    return json.dumps(value, indent=2, ensure_ascii=False).replace("</", "<\\/")


def _render(name: str, registry: Optional[TemplateRegistry], **context) -> str:
    registry = registry or _default_registry()
    try:
        return registry.get_template(name).render(**context)
    except TemplateError as e:
        raise RenderError(
            f"Failed to render {name} document", template_name=name, original_error=e
        ) from e


def render_website(data: ResumeData, registry: Optional[TemplateRegistry] = None) -> str:
    """
    Render the website HTML document.

    Args:
        data: Résumé data
        registry: Template registry (default: packaged templates)

    Returns:
        Complete HTML document

    Raises:
        RenderError: If the template fails to render
    """
    return _render(
        "website",
        registry,
        r=data,
        headline=data.headline,
        initials=initials_of(data.personal.name),
        structured_data=_script_json(build_structured_data(data)),
    )


def render_print_document(data: ResumeData, registry: Optional[TemplateRegistry] = None) -> str:
    """
    Render the print HTML document that is printed to the ATS-optimized PDF.

    Single column, black on white, explicit Letter page margins, no decorative
    elements, so that text extraction sees the content in reading order.
    """
    return _render("print", registry, r=data, headline=data.headline)


def render_manifest(data: ResumeData) -> str:
    """
    Render the web app manifest as JSON.

    Args:
        data: Résumé data

    Returns:
        JSON string (2-space indent)
    """
    personal = data.personal
    short_name = f"{personal.first_name} {personal.last_name}"
    years = years_of_experience(data.summary.detailed)

    manifest = {
        "name": f"{short_name} - {data.headline}",
        "short_name": short_name,
        "description": (
            f"Professional resume of {personal.name} - {data.headline} "
            f"with {years} years of experience."
        ),
        "start_url": "/",
        "scope": "/",
        "icons": MANIFEST_ICONS,
        "theme_color": THEME_COLOR,
        "background_color": BACKGROUND_COLOR,
        "display": "standalone",
        "categories": ["business", "productivity"],
        "lang": "en",
    }
    return json.dumps(manifest, indent=2, ensure_ascii=False)


def _write_document(kind: str, path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    log_document_written(kind, path, len(content))


async def generate_all(data: ResumeData, outputs: DocumentOutputs) -> GeneratedDocuments:
    """
    Render and write the website, print document and (optionally) manifest.

    All documents are rendered first; the writes are independent and run
    concurrently.

    Args:
        data: Résumé data
        outputs: Destination paths

    Returns:
        GeneratedDocuments with the rendered strings

    Raises:
        RenderError: If any document fails to render
        OSError: If a document cannot be written
    """
    log_generation_start(outputs)
    start_time = time.time()

    try:
        documents = GeneratedDocuments(
            website=render_website(data),
            print_document=render_print_document(data),
            manifest=render_manifest(data) if outputs.manifest_path else None,
        )

        writes = [
            asyncio.to_thread(_write_document, "Website", outputs.website_path, documents.website),
            asyncio.to_thread(
                _write_document, "Print document", outputs.print_path, documents.print_document
            ),
        ]
        if outputs.manifest_path:
            writes.append(
                asyncio.to_thread(
                    _write_document, "Web manifest", outputs.manifest_path, documents.manifest
                )
            )
        await asyncio.gather(*writes)
    except Exception as e:
        log_generation_result(False, time.time() - start_time, error=e)
        raise

    log_generation_result(True, time.time() - start_time)
    return documents
