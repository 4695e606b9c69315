"""Build backend requests from history, new input and document context.

System messages are UI-only and never reach the model. The new user text
is sent with the context section appended; only the raw text is stored
in history.
"""

from collections.abc import Iterable

from pdfchat.models.conversation import BackendRequest, Message, Role, Turn

CONTEXT_HEADER = "\n\n[PDF Content Context]:\n"

_TURN_ROLES = {Role.USER: "user", Role.ASSISTANT: "model"}


def context_section(context_blob: str) -> str:
    """Return the exact suffix appended to the user text for a context blob.

    The header is always present, even for an empty blob.
    """
    return f"{CONTEXT_HEADER}{context_blob}"


def strip_context(combined_text: str, context_blob: str) -> str:
    """Remove the trailing context section from a combined user turn."""
    return combined_text.removesuffix(context_section(context_blob))


def compose(
    history: Iterable[Message],
    new_user_text: str,
    context_blob: str,
) -> BackendRequest:
    """Compose the backend payload for one send.

    Args:
        history: Conversation log before the new user message.
        new_user_text: What the user just typed.
        context_blob: Snapshot of the document context at send time.

    Returns:
        BackendRequest whose last turn is the context-augmented user text.
    """
    turns = [
        Turn(role=_TURN_ROLES[message.role], text=message.text)
        for message in history
        if message.role is not Role.SYSTEM
    ]
    turns.append(Turn(role="user", text=new_user_text + context_section(context_blob)))

    return BackendRequest(
        turns=tuple(turns),
        user_text=new_user_text,
        context=context_blob,
    )
