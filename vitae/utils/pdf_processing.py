"""PDF inspection helpers for generated résumé PDFs."""

from pathlib import Path
from typing import Optional

from PyPDF2 import PdfReader


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def size_kb(pdf_path: Path) -> int:
    """File size rounded to the nearest kilobyte."""
    return round(pdf_path.stat().st_size / 1024)
