"""Unit tests for PDF extraction."""

from collections.abc import Callable
from unittest.mock import MagicMock, patch

import pytest
import pytest_check as check

from pdfchat.errors import ExtractionError, UnsupportedDocumentError
from pdfchat.models.conversation import ExtractedDocument
from pdfchat.parsing.pdf_parser import (
    MAX_FILE_SIZE,
    PypdfPageSource,
    extract_pdf,
    extract_text,
    open_pdf,
    read_pages,
)


class FakePageSource:
    """PageSource over in-memory page texts."""

    def __init__(self, pages: list[str], failing_page: int | None = None) -> None:
        self._pages = pages
        self._failing_page = failing_page
        self.requested: list[int] = []

    @property
    def page_count(self) -> int:
        return len(self._pages)

    async def get_page_text(self, index: int) -> str:
        self.requested.append(index)
        if index == self._failing_page:
            raise RuntimeError("bad font encoding")
        return self._pages[index - 1]


class TestExtractText:
    """Tests for page-ordered extraction."""

    async def test_three_pages_in_order_with_markers(self) -> None:
        source = FakePageSource(["A", "B", "C"])

        text = await extract_text(source)

        check.equal(text, "\n\nPage 1:\nA\n\nPage 2:\nB\n\nPage 3:\nC")
        check.less(text.index("Page 1:\nA"), text.index("Page 2:\nB"))
        check.less(text.index("Page 2:\nB"), text.index("Page 3:\nC"))
        check.equal(source.requested, [1, 2, 3])

    async def test_page_failure_fails_whole_extraction(self) -> None:
        source = FakePageSource(["A", "B", "C"], failing_page=2)

        with pytest.raises(ExtractionError, match="page 2"):
            await extract_text(source)

    async def test_read_pages_returns_page_structure(self) -> None:
        document = await read_pages(FakePageSource(["one", "two"]))

        assert document == ExtractedDocument(page_texts=["one", "two"])
        assert document.page_count == 2

    async def test_pypdf_source_uses_one_based_pages(self) -> None:
        first, second = MagicMock(), MagicMock()
        first.extract_text.return_value = "first page"
        second.extract_text.return_value = None
        reader = MagicMock(pages=[first, second])

        source = PypdfPageSource(reader)

        check.equal(source.page_count, 2)
        check.equal(await source.get_page_text(1), "first page")
        check.equal(await source.get_page_text(2), "")


class TestOpenPdf:
    """Tests for payload validation and real pypdf parsing."""

    async def test_blank_pdf_extracts_page_markers(self, make_pdf: Callable[[int], bytes]) -> None:
        text = await extract_pdf(make_pdf(2))

        assert text == "\n\nPage 1:\n\n\nPage 2:\n"

    async def test_zero_page_pdf_extracts_empty_blob(self) -> None:
        with patch("pdfchat.parsing.pdf_parser.PdfReader", return_value=MagicMock(pages=[])):
            source = open_pdf(b"%PDF-1.4 empty document")
            text = await extract_text(source)

        assert source.page_count == 0
        assert text == ""

    def test_counts_pages(self, make_pdf: Callable[[int], bytes]) -> None:
        assert open_pdf(make_pdf(3)).page_count == 3

    def test_rejects_empty_bytes(self) -> None:
        with pytest.raises(UnsupportedDocumentError, match="Empty file"):
            open_pdf(b"")

    def test_rejects_non_pdf_payload(self) -> None:
        with pytest.raises(UnsupportedDocumentError, match="Invalid PDF"):
            open_pdf(b"This is a plain text file, not a PDF.")

    def test_rejects_oversized_file(self) -> None:
        oversized = b"%PDF-1.4" + b"\x00" * (MAX_FILE_SIZE + 1)

        with pytest.raises(UnsupportedDocumentError, match="exceeds maximum"):
            open_pdf(oversized)

    def test_respects_custom_size_limit(self, make_pdf: Callable[[int], bytes]) -> None:
        with pytest.raises(UnsupportedDocumentError, match="exceeds maximum"):
            open_pdf(make_pdf(1), max_size=16)

    def test_rejects_truncated_pdf(self) -> None:
        with pytest.raises(ExtractionError, match="Corrupt|Failed"):
            open_pdf(b"%PDF-1.4\n1 0 obj\n<<")
