"""Error taxonomy for the conversation pipeline.

Every failure the pipeline raises derives from ChatError so the HTTP
surface can catch the whole family in one place.
"""


class ChatError(Exception):
    """Base class for conversation pipeline errors."""

    pass


class ConversationBusyError(ChatError):
    """Raised when a message is sent while a response is still pending."""

    pass


class ExtractionError(ChatError):
    """Raised when document text cannot be extracted."""

    pass


class UnsupportedDocumentError(ExtractionError):
    """Raised when the payload is not a readable PDF document."""

    pass


class BackendError(ChatError):
    """Raised when the language-model backend fails to start or generate."""

    pass


class StreamError(ChatError):
    """Raised when a response stream breaks before completion."""

    pass
