"""Domain records for the conversation pipeline.

Messages are frozen once created; corrections are new messages.
Backend requests are built per send and never stored.
"""

import uuid
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a message in the visible conversation log."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Message(BaseModel):
    """A single entry in the conversation log.

    Attributes:
        id: Opaque unique identifier.
        role: Who produced the message.
        text: The message text as shown to the user.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    text: str


class Turn(BaseModel):
    """One role-tagged unit of text sent to the backend."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"]
    text: str


class BackendRequest(BaseModel):
    """Payload for one backend call.

    Attributes:
        turns: Prior turns followed by the combined user turn.
        user_text: The raw text the user typed.
        context: The context blob snapshot used for this request.
    """

    model_config = ConfigDict(frozen=True)

    turns: tuple[Turn, ...]
    user_text: str
    context: str

    @property
    def combined_user_text(self) -> str:
        """Text of the final user turn, including the context section."""
        return self.turns[-1].text


class ExtractedDocument(BaseModel):
    """Page-ordered text pulled from a document."""

    page_texts: list[str] = Field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.page_texts)

    def flatten(self) -> str:
        """Join pages into a single blob, each preceded by its page marker."""
        return "".join(
            f"\n\nPage {number}:\n{text}"
            for number, text in enumerate(self.page_texts, start=1)
        )


class ConversationState(BaseModel):
    """Snapshot of the conversation as seen by the display layer."""

    model_config = ConfigDict(frozen=True)

    history: tuple[Message, ...] = ()
    context_blob: str = ""
    pending: bool = False


class SendResult(BaseModel):
    """Outcome of one send.

    Attributes:
        message: The stored assistant message.
        failed: True when generation failed and message holds the fixed error text.
    """

    model_config = ConfigDict(frozen=True)

    message: Message
    failed: bool = False
