"""
PDF processing utilities for inspecting generated documents.

Helper functions:
    page_count: Quick page count without full extraction.
    page_text: Plain text of every page, in page order.
    normalize_for_matching: Text normalization for fuzzy matching.
"""

from pathlib import Path
from typing import List, Optional

import pdfplumber
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except (OSError, PdfReadError):
        return None


def page_text(pdf_path: Path) -> List[str]:
    """Extract the text of each page (empty string for pages without text)."""
    with pdfplumber.open(str(pdf_path)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())
