"""Pydantic models for the conversation domain and the HTTP API.

Models:
    - Message, Role: Entries in the visible conversation log
    - Turn, BackendRequest: Payload sent to the language-model backend
    - ExtractedDocument: Page-ordered document text
    - ConversationState: Snapshot of history, context and pending flag
    - ChatRequest, StreamChunk, HistoryResponse, PDFUploadResponse: API schemas
"""

from pdfchat.models.conversation import (
    BackendRequest,
    ConversationState,
    ExtractedDocument,
    Message,
    Role,
    SendResult,
    Turn,
)
from pdfchat.models.schemas import (
    ChatRequest,
    HistoryResponse,
    MessageOut,
    PDFUploadResponse,
    StreamChunk,
    StreamStatus,
)

__all__ = [
    "BackendRequest",
    "ChatRequest",
    "ConversationState",
    "ExtractedDocument",
    "HistoryResponse",
    "Message",
    "MessageOut",
    "PDFUploadResponse",
    "Role",
    "SendResult",
    "StreamChunk",
    "StreamStatus",
    "Turn",
]
