"""
PDF Rendering Module

Prints the print HTML document to an ATS-optimized PDF using headless Chromium
(playwright).
"""

import asyncio
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence, Union

from dotenv import load_dotenv
from playwright.async_api import async_playwright

from vitae.contexts.rendering.exceptions import PdfRenderError
from vitae.contexts.rendering.logger import _log_debug, _log_warning, log_pdf_result, log_pdf_start
from vitae.utils.pdf_processing import page_count, size_kb

load_dotenv()
PDF_RENDER_TIMEOUT_MS = int(os.getenv("PDF_RENDER_TIMEOUT_MS", "30000"))

CHROMIUM_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--disable-gpu",
)

# Consistent layout before printing
VIEWPORT = {"width": 1200, "height": 1600}
DEVICE_SCALE_FACTOR = 2

# US Letter, no chrome, white background, tagged for text extraction
PDF_OPTIONS = {
    "format": "Letter",
    "margin": {"top": "0.5in", "right": "0.5in", "bottom": "0.5in", "left": "0.5in"},
    "prefer_css_page_size": True,
    "display_header_footer": False,
    "print_background": False,
    "outline": False,
    "tagged": True,
}


class BrowserLauncher(Protocol):
    """Acquires and releases a browser handle for one PDF render."""

    async def launch(self) -> Any: ...

    async def release(self, browser: Any) -> None: ...


class ChromiumLauncher:
    """Launches headless Chromium through playwright; release() also stops playwright."""

    def __init__(self, args: Sequence[str] = CHROMIUM_ARGS, headless: bool = True):
        self.args = list(args)
        self.headless = headless
        self._playwright = None

    async def launch(self):
        _log_debug("Launching headless Chromium")
        self._playwright = await async_playwright().start()
        try:
            return await self._playwright.chromium.launch(headless=self.headless, args=self.args)
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

    async def release(self, browser) -> None:
        try:
            await browser.close()
            _log_debug("Browser closed")
        finally:
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None


@dataclass
class PdfRenderResult:
    """
    Result of PDF rendering.

    Attributes:
        pdf_path: Path of the written PDF
        size_kb: File size in kilobytes
        page_count: Number of pages (None if the PDF could not be read back)
    """

    pdf_path: Path
    size_kb: int
    page_count: Optional[int] = None


async def _print_to_pdf(browser, html: str, timeout_ms: int) -> bytes:
    page = await browser.new_page(viewport=VIEWPORT, device_scale_factor=DEVICE_SCALE_FACTOR)
    await page.set_content(html, wait_until="networkidle", timeout=timeout_ms)
    return await page.pdf(**PDF_OPTIONS)


def _write_pdf(output_path: Path, pdf_bytes: bytes) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pdf_bytes)


async def _release(launcher: BrowserLauncher, browser, output_path: Path, render_failed: bool) -> None:
    # After a render failure the render error wins; a release error is only logged
    try:
        await launcher.release(browser)
    except Exception as e:
        if render_failed:
            _log_warning(f"Browser release also failed: {type(e).__name__}: {e}")
            return
        raise PdfRenderError(
            "Failed to release headless browser", path=output_path, original_error=e
        ) from e


async def render_pdf(
    html: str,
    output_path: Union[str, Path],
    launcher: Optional[BrowserLauncher] = None,
    timeout_ms: int = PDF_RENDER_TIMEOUT_MS,
) -> PdfRenderResult:
    """
    Print a self-contained HTML document to PDF and write it to disk.

    The launcher's release() is awaited exactly once after a successful
    launch, whether printing succeeds or fails.

    Args:
        html: Complete HTML document
        output_path: Where to write the PDF (parent directories are created)
        launcher: Browser launcher (default: ChromiumLauncher)
        timeout_ms: Navigation timeout for loading the document

    Returns:
        PdfRenderResult with path, size and page count

    Raises:
        PdfRenderError: If launching, printing or writing fails
    """
    output_path = Path(output_path)
    launcher = launcher or ChromiumLauncher()

    log_pdf_start(output_path, len(html))
    start_time = time.time()

    try:
        browser = await launcher.launch()
    except Exception as e:
        error = PdfRenderError("Failed to launch headless browser", original_error=e)
        log_pdf_result(output_path, success=False, elapsed_time=time.time() - start_time, error=error)
        raise error from e

    render_failed = True
    try:
        pdf_bytes = await _print_to_pdf(browser, html, timeout_ms)
        await asyncio.to_thread(_write_pdf, output_path, pdf_bytes)
        render_failed = False
    except Exception as e:
        error = PdfRenderError("Failed to render PDF", path=output_path, original_error=e)
        log_pdf_result(output_path, success=False, elapsed_time=time.time() - start_time, error=error)
        raise error from e
    finally:
        await _release(launcher, browser, output_path, render_failed)

    result = PdfRenderResult(
        pdf_path=output_path, size_kb=size_kb(output_path), page_count=page_count(output_path)
    )
    log_pdf_result(
        output_path,
        success=True,
        elapsed_time=time.time() - start_time,
        size_kb=result.size_kb,
        page_count=result.page_count,
    )
    return result


async def render_pdf_from_file(
    html_path: Union[str, Path],
    output_path: Union[str, Path],
    launcher: Optional[BrowserLauncher] = None,
) -> PdfRenderResult:
    """
    Print an HTML file on disk to PDF.

    Raises:
        PdfRenderError: If the HTML file cannot be read, or rendering fails
    """
    html_path = Path(html_path)
    try:
        html = await asyncio.to_thread(html_path.read_text, encoding="utf-8")
    except OSError as e:
        raise PdfRenderError("Failed to read HTML template", path=html_path, original_error=e) from e

    return await render_pdf(html, output_path, launcher=launcher)
