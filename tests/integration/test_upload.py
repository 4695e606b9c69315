"""Integration tests for the PDF upload endpoint.

Uses PDFs generated with pypdf; validates type checks, extraction and
the resulting conversation state.
"""

from collections.abc import Callable

from httpx import AsyncClient

from pdfchat.conversation.composer import context_section
from pdfchat.conversation.controller import ConversationController
from pdfchat.models.schemas import HistoryResponse, PDFUploadResponse
from tests.conftest import FakeBackend


class TestPDFUpload:
    """Integration tests for POST /upload/pdf."""

    async def test_upload_pdf_success(
        self,
        async_client: AsyncClient,
        controller: ConversationController,
        make_pdf: Callable[[int], bytes],
    ) -> None:
        response = await async_client.post(
            "/upload/pdf",
            files={"file": ("sample.pdf", make_pdf(3), "application/pdf")},
        )

        assert response.status_code == 200
        data = PDFUploadResponse.model_validate(response.json())
        assert data.success is True
        assert data.filename == "sample.pdf"
        assert data.notification.text == "📎 PDF uploaded: **sample.pdf**"
        assert data.error is None
        assert "Page 3:" in controller.state.context_blob

    async def test_upload_shows_in_history(
        self, async_client: AsyncClient, make_pdf: Callable[[int], bytes]
    ) -> None:
        await async_client.post(
            "/upload/pdf",
            files={"file": ("sample.pdf", make_pdf(1), "application/pdf")},
        )

        history = HistoryResponse.model_validate(
            (await async_client.get("/chat/history")).json()
        )

        assert history.context_loaded is True
        assert [m.role for m in history.messages] == ["system"]
        assert history.latest_notification == history.messages[0]

    async def test_reject_non_pdf_type(
        self, async_client: AsyncClient, controller: ConversationController
    ) -> None:
        response = await async_client.post(
            "/upload/pdf",
            files={"file": ("document.txt", b"plain text", "text/plain")},
        )

        assert response.status_code == 400
        assert "Only PDF files are accepted" in response.json()["detail"]
        assert controller.history() == ()
        assert controller.state.context_blob == ""

    async def test_reject_corrupt_pdf(
        self, async_client: AsyncClient, controller: ConversationController
    ) -> None:
        response = await async_client.post(
            "/upload/pdf",
            files={"file": ("broken.pdf", b"not really a pdf", "application/pdf")},
        )

        assert response.status_code == 400
        assert "Invalid PDF" in response.json()["detail"]
        assert controller.history() == ()

    async def test_chat_after_upload_sends_context(
        self,
        async_client: AsyncClient,
        backend: FakeBackend,
        make_pdf: Callable[[int], bytes],
    ) -> None:
        await async_client.post(
            "/upload/pdf",
            files={"file": ("sample.pdf", make_pdf(1), "application/pdf")},
        )
        await async_client.post("/chat", json={"message": "What does it say?"})

        turns = backend.calls[0][2]
        assert len(turns) == 1
        assert turns[0].text == "What does it say?" + context_section("\n\nPage 1:\n")
