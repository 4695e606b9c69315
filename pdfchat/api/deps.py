"""FastAPI dependencies shared by the routers."""

from pdfchat.conversation.controller import (
    ConversationController,
    get_conversation_controller,
)


def get_controller() -> ConversationController:
    """Provide the conversation controller.

    Tests override this through app.dependency_overrides.
    """
    return get_conversation_controller()
