"""Append-only conversation log with a single context blob."""

import logging

from pdfchat.models.conversation import Message, Role

logger = logging.getLogger(__name__)


class ConversationStore:
    """Ordered log of messages plus the current document context.

    Messages are only ever appended. history() hands out a snapshot, so a
    request composed from it is unaffected by later appends.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._context = ""

    def append(self, message: Message) -> Message:
        self._messages.append(message)
        logger.debug(f"Appended {message.role.value} message {message.id}")
        return message

    def history(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def latest(self, role: Role) -> Message | None:
        """Return the most recent message with the given role, if any."""
        for message in reversed(self._messages):
            if message.role is role:
                return message
        return None

    def set_context(self, text: str) -> None:
        """Replace the context blob."""
        self._context = text

    def get_context(self) -> str:
        return self._context

    def __len__(self) -> int:
        return len(self._messages)
