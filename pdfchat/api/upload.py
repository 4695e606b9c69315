"""PDF upload endpoint for document grounding.

Handles file upload, type validation and context extraction.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from pdfchat.api.deps import get_controller
from pdfchat.conversation.controller import ConversationController
from pdfchat.errors import ExtractionError
from pdfchat.models.schemas import MessageOut, PDFUploadResponse
from pdfchat.parsing.pdf_parser import PDF_MIME_TYPE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


def _validate_filename(filename: str | None) -> str:
    """Validate that an uploaded file carries a name.

    Raises:
        HTTPException: 400 if the name is missing.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )
    return filename


@router.post("/pdf", response_model=PDFUploadResponse)
async def upload_pdf(
    file: UploadFile,
    controller: ConversationController = Depends(get_controller),
) -> PDFUploadResponse:
    """Upload a PDF and use its text as conversation context.

    Replaces any previously uploaded document.

    Args:
        file: The uploaded PDF file (multipart/form-data).

    Returns:
        PDFUploadResponse with the notification added to the conversation.

    Raises:
        400: Missing filename, non-PDF type, or unreadable document.
    """
    filename = _validate_filename(file.filename)
    declared_type = file.content_type or ""
    content = await file.read()

    try:
        notification = await controller.upload_document(content, declared_type, filename)
    except ExtractionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only PDF files are accepted ({PDF_MIME_TYPE})",
        )

    logger.info(f"Successfully loaded PDF context: {filename}")
    return PDFUploadResponse(
        filename=filename,
        success=True,
        notification=MessageOut.from_message(notification),
    )
