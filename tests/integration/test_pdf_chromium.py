"""
Integration tests for PDF rendering - prints through real headless Chromium.
"""

import asyncio
from pathlib import Path

import pytest
from playwright.sync_api import sync_playwright

from vitae.contexts.rendering import render_pdf
from vitae.contexts.templating import render_print_document


def _chromium_available() -> bool:
    try:
        with sync_playwright() as p:
            return Path(p.chromium.executable_path).exists()
    except Exception:
        return False


# Check if playwright's Chromium is installed
CHROMIUM_AVAILABLE = _chromium_available()
skip_if_no_chromium = pytest.mark.skipif(
    not CHROMIUM_AVAILABLE,
    reason="Chromium not installed - run `playwright install chromium`",
)


@pytest.mark.integration
@pytest.mark.browser
@skip_if_no_chromium
def test_print_document_to_pdf(resume_data, tmp_path):
    """The ATS print document prints to a readable Letter PDF."""
    from PyPDF2 import PdfReader

    output = tmp_path / "generated-pdf" / "JaneDoe_Resume.pdf"

    result = asyncio.run(render_pdf(render_print_document(resume_data), output))

    assert output.exists()
    assert result.page_count is not None and result.page_count >= 1
    assert result.size_kb >= 1

    reader = PdfReader(str(output))
    page = reader.pages[0]
    # US Letter in points
    assert round(float(page.mediabox.width)) == 612
    assert round(float(page.mediabox.height)) == 792

    text = "".join(p.extract_text() for p in reader.pages)
    assert "Jane Doe" in text
    assert "Professional Experience" in text
