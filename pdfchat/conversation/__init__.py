"""Conversation pipeline.

Responsibilities:
    - ConversationStore: append-only message log and context blob
    - compose: history + new text + context -> backend request
    - StreamAccumulator: streamed chunks -> one finalized text
    - ConversationController: send/upload orchestration with a single-flight guard
"""

from pdfchat.conversation.accumulator import StreamAccumulator
from pdfchat.conversation.composer import (
    CONTEXT_HEADER,
    compose,
    context_section,
    strip_context,
)
from pdfchat.conversation.controller import (
    ERROR_MESSAGE,
    ConversationController,
    get_conversation_controller,
)
from pdfchat.conversation.store import ConversationStore

__all__ = [
    "CONTEXT_HEADER",
    "ERROR_MESSAGE",
    "ConversationController",
    "ConversationStore",
    "StreamAccumulator",
    "compose",
    "context_section",
    "get_conversation_controller",
    "strip_context",
]
