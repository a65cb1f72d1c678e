"""
Build Pipeline

One full build: stage assets -> load data -> render documents -> print PDF.
Stages run strictly in that order; the document writes inside generate_all()
run concurrently.
"""

import asyncio
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from vitae.contexts.building.asset_stager import AssetManifest, StagingResult, stage_assets_async
from vitae.contexts.building.logger import (
    _log_info,
    log_build_failure,
    log_build_result,
    log_build_start,
    log_stage_start,
)
from vitae.contexts.intake import load_resume_data
from vitae.contexts.rendering import PdfRenderResult, render_pdf, render_pdf_from_file
from vitae.contexts.rendering.pdf_renderer import BrowserLauncher
from vitae.contexts.templating import (
    DocumentOutputs,
    GeneratedDocuments,
    ResumeData,
    generate_all,
    render_print_document,
)
from vitae.utils.event_logging import log_build_event

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", "."))
RESUME_DATA_FILE = Path(os.getenv("RESUME_DATA_FILE", "data/resume-data.json"))
DIST_PATH = Path(os.getenv("DIST_PATH", "dist"))
PDF_FILENAME = os.getenv("PDF_FILENAME") or None

DEFAULT_PDF_FILENAME = "Resume.pdf"


def pdf_filename_for(name: str) -> str:
    """PDF file name derived from the person's name, e.g. "Jane Doe" -> "JaneDoe_Resume.pdf"."""
    compact = "".join(name.split())
    return f"{compact}_Resume.pdf" if compact else DEFAULT_PDF_FILENAME


@dataclass
class BuildPaths:
    """
    Input and output locations for a build.

    Attributes:
        project_root: Directory that static asset entries are relative to
        data_file: Résumé JSON data file
        dist_dir: Output directory
        pdf_filename: Fixed PDF file name (None derives it from the person's name)
    """

    project_root: Path
    data_file: Path
    dist_dir: Path
    pdf_filename: Optional[str] = None

    @classmethod
    def from_env(cls, project_root: Union[str, Path, None] = None) -> "BuildPaths":
        """Resolve paths from PROJECT_ROOT, RESUME_DATA_FILE, DIST_PATH and PDF_FILENAME."""
        root = Path(project_root or PROJECT_ROOT).resolve()
        return cls(
            project_root=root,
            data_file=root / RESUME_DATA_FILE,
            dist_dir=root / DIST_PATH,
            pdf_filename=PDF_FILENAME,
        )

    @property
    def website_path(self) -> Path:
        return self.dist_dir / "index.html"

    @property
    def print_path(self) -> Path:
        return self.dist_dir / "resume-template.html"

    @property
    def manifest_path(self) -> Path:
        return self.dist_dir / "site.webmanifest"

    @property
    def pdf_dir(self) -> Path:
        return self.dist_dir / "generated-pdf"

    def document_outputs(self) -> DocumentOutputs:
        return DocumentOutputs(
            website_path=self.website_path,
            print_path=self.print_path,
            manifest_path=self.manifest_path,
        )

    def pdf_path_for(self, data: Optional[ResumeData] = None) -> Path:
        """Output PDF path: configured file name, else derived from the person's name."""
        if self.pdf_filename:
            return self.pdf_dir / self.pdf_filename
        if data is not None:
            return self.pdf_dir / pdf_filename_for(data.personal.name)
        return self.pdf_dir / DEFAULT_PDF_FILENAME


@dataclass
class BuildResult:
    """Everything a successful build produced."""

    website_path: Path
    print_path: Path
    manifest_path: Path
    staging: StagingResult
    documents: GeneratedDocuments
    pdf: PdfRenderResult
    time_s: float = 0.0


async def build_site(
    paths: BuildPaths,
    launcher: Optional[BrowserLauncher] = None,
    manifest: Optional[AssetManifest] = None,
) -> BuildResult:
    """
    Run the full build pipeline once.

    Args:
        paths: Build input/output locations
        launcher: Browser launcher for PDF printing (default: headless Chromium)
        manifest: Asset lists (default: packaged assets.yaml)

    Returns:
        BuildResult

    Raises:
        AssetCopyError, DataLoadError, RenderError, PdfRenderError: Fatal stage failures
    """
    log_build_start(paths.data_file, paths.dist_dir)
    log_build_event("build_started", source="pipeline", data_file=str(paths.data_file))
    start_time = time.time()

    try:
        await asyncio.to_thread(paths.dist_dir.mkdir, parents=True, exist_ok=True)

        log_stage_start("Staging static assets")
        staging = await stage_assets_async(paths.project_root, paths.dist_dir, manifest)

        log_stage_start("Loading resume data")
        data = ResumeData.from_dict(await load_resume_data(paths.data_file))

        log_stage_start("Generating documents from resume data")
        documents = await generate_all(data, paths.document_outputs())

        log_stage_start("Generating PDF")
        pdf = await render_pdf(documents.print_document, paths.pdf_path_for(data), launcher=launcher)
    except Exception as e:
        elapsed = time.time() - start_time
        log_build_failure(e, elapsed)
        log_build_event(
            "build_failed",
            source="pipeline",
            error_type=type(e).__name__,
            error=str(e),
            elapsed_s=round(elapsed, 2),
        )
        raise

    result = BuildResult(
        website_path=paths.website_path,
        print_path=paths.print_path,
        manifest_path=paths.manifest_path,
        staging=staging,
        documents=documents,
        pdf=pdf,
        time_s=time.time() - start_time,
    )
    log_build_result(result, result.time_s)
    log_build_event(
        "build_completed",
        source="pipeline",
        elapsed_s=round(result.time_s, 2),
        pdf_path=str(pdf.pdf_path),
        page_count=pdf.page_count,
    )
    return result


async def build_pdf_only(
    paths: BuildPaths,
    html_path: Union[str, Path, None] = None,
    output_path: Union[str, Path, None] = None,
    launcher: Optional[BrowserLauncher] = None,
) -> PdfRenderResult:
    """
    Print the PDF without a full build.

    With html_path, that HTML file is printed as-is. Without it, the print
    document is regenerated from the data file (and written to its usual
    location) before printing.

    Args:
        paths: Build input/output locations
        html_path: Existing HTML document to print (optional)
        output_path: PDF destination (default: paths.pdf_path_for(...))
        launcher: Browser launcher for PDF printing (default: headless Chromium)

    Returns:
        PdfRenderResult
    """
    if html_path is not None:
        _log_info(f"Printing existing HTML template: {html_path}")
        return await render_pdf_from_file(
            html_path, Path(output_path) if output_path else paths.pdf_path_for(), launcher=launcher
        )

    _log_info("No HTML template given; regenerating print document from data file")
    data = ResumeData.from_dict(await load_resume_data(paths.data_file))
    html = render_print_document(data)
    await asyncio.to_thread(paths.print_path.parent.mkdir, parents=True, exist_ok=True)
    await asyncio.to_thread(paths.print_path.write_text, html, encoding="utf-8")

    return await render_pdf(
        html, Path(output_path) if output_path else paths.pdf_path_for(data), launcher=launcher
    )
