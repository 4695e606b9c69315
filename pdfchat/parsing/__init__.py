"""PDF parsing utilities for document grounding.

Responsibilities:
    - Payload validation (size, PDF header)
    - Page-by-page text extraction with pypdf
    - Flattening pages into a page-marked context blob

The file-type check on the declared MIME type lives with the caller;
this package only sees bytes.
"""

from pdfchat.parsing.pdf_parser import (
    MAX_FILE_SIZE,
    PDF_MIME_TYPE,
    PageSource,
    PypdfPageSource,
    extract_pdf,
    extract_text,
    open_pdf,
    read_pages,
)

__all__ = [
    "MAX_FILE_SIZE",
    "PDF_MIME_TYPE",
    "PageSource",
    "PypdfPageSource",
    "extract_pdf",
    "extract_text",
    "open_pdf",
    "read_pages",
]
