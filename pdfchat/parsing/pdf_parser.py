"""PDF text extraction using pypdf.

Turns an uploaded PDF into the page-marked context blob used to ground
chat requests. Pages are read one at a time through a narrow PageSource
interface so the rest of the system never touches pypdf objects.
"""

import asyncio
import io
import logging
from typing import Protocol

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from pdfchat.errors import ExtractionError, UnsupportedDocumentError
from pdfchat.models.conversation import ExtractedDocument

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
PDF_MIME_TYPE = "application/pdf"


class PageSource(Protocol):
    """Read-only access to a paginated document.

    Pages are 1-indexed.
    """

    @property
    def page_count(self) -> int: ...

    async def get_page_text(self, index: int) -> str: ...


class PypdfPageSource:
    """PageSource backed by a pypdf reader."""

    def __init__(self, reader: PdfReader) -> None:
        self._reader = reader

    @property
    def page_count(self) -> int:
        return len(self._reader.pages)

    async def get_page_text(self, index: int) -> str:
        """Extract one page's text in a worker thread.

        Args:
            index: 1-based page number.

        Returns:
            The page's plain text (empty for image-only pages).
        """
        page = self._reader.pages[index - 1]
        text = await asyncio.to_thread(page.extract_text)
        return text or ""


def _validate_pdf_bytes(file_content: bytes, max_size: int = MAX_FILE_SIZE) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.
        max_size: Largest accepted payload in bytes.

    Raises:
        UnsupportedDocumentError: If validation fails.
    """
    if not file_content:
        raise UnsupportedDocumentError("Empty file provided")

    if len(file_content) > max_size:
        size_mb = len(file_content) / (1024 * 1024)
        limit_mb = max_size / (1024 * 1024)
        raise UnsupportedDocumentError(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)"
        )

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise UnsupportedDocumentError("Invalid PDF: file does not start with PDF header")


def open_pdf(file_content: bytes, max_size: int = MAX_FILE_SIZE) -> PypdfPageSource:
    """Validate raw bytes and open them as a page source.

    Args:
        file_content: Raw bytes of the PDF file.
        max_size: Largest accepted payload in bytes.

    Returns:
        A PageSource over the document.

    Raises:
        ExtractionError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content, max_size)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        page_count = len(reader.pages)
    except PdfReadError as e:
        raise ExtractionError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise ExtractionError(f"Failed to read PDF: {e}") from e

    if page_count == 0:
        logger.warning("PDF contains no pages")

    return PypdfPageSource(reader)


async def read_pages(source: PageSource) -> ExtractedDocument:
    """Read every page of a source in ascending page order.

    Args:
        source: The document to read.

    Returns:
        ExtractedDocument with one entry per page.

    Raises:
        ExtractionError: If any page fails; no partial result is returned.
    """
    page_texts: list[str] = []
    for index in range(1, source.page_count + 1):
        try:
            page_texts.append(await source.get_page_text(index))
        except Exception as e:
            raise ExtractionError(f"Failed to extract text from page {index}: {e}") from e

    if not any(text.strip() for text in page_texts):
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return ExtractedDocument(page_texts=page_texts)


async def extract_text(source: PageSource) -> str:
    """Extract a source into a single page-marked text blob."""
    document = await read_pages(source)
    return document.flatten()


async def extract_pdf(file_content: bytes, max_size: int = MAX_FILE_SIZE) -> str:
    """Validate, open and extract a PDF payload in one step.

    Args:
        file_content: Raw bytes of the PDF file.
        max_size: Largest accepted payload in bytes.

    Returns:
        The page-marked context blob.

    Raises:
        ExtractionError: If validation, parsing or any page extraction fails.
    """
    source = open_pdf(file_content, max_size)
    text = await extract_text(source)
    logger.info(f"Extracted {source.page_count} pages ({len(text)} characters)")
    return text
