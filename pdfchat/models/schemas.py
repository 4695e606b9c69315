"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from pdfchat.models.conversation import Message, Role


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    RECEIVED = "received"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class ChatRequest(BaseModel):
    """Request payload for chat endpoints.

    Attributes:
        message: User's question or prompt.
    """

    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class MessageOut(BaseModel):
    """A conversation message as returned to clients."""

    id: str
    role: Role
    text: str

    @classmethod
    def from_message(cls, message: Message) -> "MessageOut":
        return cls(id=message.id, role=message.role, text=message.text)


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: Text of this chunk. On the final chunk, the stored message text.
        done: Whether this is the final chunk.
        status: Current processing status.
        message_id: Identifier of the stored assistant message (final chunk only).
        error: Error message if the request was rejected.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    message_id: str | None = None
    error: str | None = None


class HistoryResponse(BaseModel):
    """Current conversation log and request state."""

    messages: list[MessageOut]
    pending: bool
    context_loaded: bool
    latest_notification: MessageOut | None = None


class PDFUploadResponse(BaseModel):
    """Response after PDF upload processing.

    Attributes:
        filename: Name of the uploaded file.
        success: Whether the upload was successful.
        notification: The system message added to the conversation.
        error: Error message if upload failed.
    """

    filename: str
    success: bool
    notification: MessageOut | None = None
    error: str | None = None
