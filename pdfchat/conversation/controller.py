"""Conversation orchestration: send, stream, upload.

The controller is the only writer of conversation state. It moves between
two states, idle and awaiting a response, and allows one request in
flight at a time. Backend and stream failures never escape send_message;
they are recorded as a fixed assistant message instead.
"""

import logging
from collections.abc import Callable

from pdfchat.agent.backend import AgnoBackend, LanguageModelBackend
from pdfchat.agent.config import AgentConfig, get_agent_config
from pdfchat.conversation.accumulator import StreamAccumulator
from pdfchat.conversation.composer import compose
from pdfchat.conversation.store import ConversationStore
from pdfchat.errors import ConversationBusyError, ExtractionError
from pdfchat.models.conversation import ConversationState, Message, Role, SendResult
from pdfchat.parsing.pdf_parser import PDF_MIME_TYPE, extract_pdf

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Something went wrong. Please try again."
UPLOAD_NOTICE = "📎 PDF uploaded: **{name}**"


class ConversationController:
    """Drive the request/response cycle for a single conversation.

    Args:
        backend: Streaming language-model client.
        config: Model id, response format and upload limits.
        store: Conversation log; a fresh one is created when omitted.
    """

    def __init__(
        self,
        backend: LanguageModelBackend,
        config: AgentConfig,
        store: ConversationStore | None = None,
    ) -> None:
        self._backend = backend
        self._config = config
        self._store = store or ConversationStore()
        self._pending = False
        self._accumulator: StreamAccumulator | None = None

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def state(self) -> ConversationState:
        return ConversationState(
            history=self._store.history(),
            context_blob=self._store.get_context(),
            pending=self._pending,
        )

    def history(self) -> tuple[Message, ...]:
        return self._store.history()

    @property
    def latest_notification(self) -> Message | None:
        return self._store.latest(Role.SYSTEM)

    @property
    def partial_response(self) -> str:
        """Text streamed so far for the in-flight request."""
        if self._pending and self._accumulator is not None:
            return self._accumulator.partial
        return ""

    async def send_message(
        self,
        text: str,
        on_chunk: Callable[[str], None] | None = None,
    ) -> SendResult | None:
        """Send user text and record the assistant's reply.

        Args:
            text: Raw user input.
            on_chunk: Optional callback receiving each streamed chunk.

        Returns:
            SendResult with the stored assistant message, flagged as failed
            when it holds the fixed error text. None if the input was empty.

        Raises:
            ConversationBusyError: If a previous send is still pending.
        """
        text = text.strip()
        if not text:
            logger.debug("Ignoring empty message")
            return None

        if self._pending:
            logger.warning("Rejected message: a response is already pending")
            raise ConversationBusyError("A response is still being generated")

        # Snapshot before appending: the new text goes in as the final turn
        history = self._store.history()
        context = self._store.get_context()

        self._store.append(Message(role=Role.USER, text=text))
        self._pending = True
        failed = False
        try:
            reply = await self._generate(history, text, context, on_chunk)
        except Exception:
            logger.exception("Failed to generate a response")
            reply = ERROR_MESSAGE
            failed = True
        finally:
            self._pending = False
            self._accumulator = None

        message = self._store.append(Message(role=Role.ASSISTANT, text=reply))
        return SendResult(message=message, failed=failed)

    async def _generate(
        self,
        history: tuple[Message, ...],
        text: str,
        context: str,
        on_chunk: Callable[[str], None] | None,
    ) -> str:
        request = compose(history, text, context)
        logger.info(
            f"Sending {len(request.turns)} turns to {self._config.model_name} "
            f"(context: {len(context)} characters)"
        )

        self._accumulator = StreamAccumulator(on_chunk=on_chunk)
        chunks = self._backend.stream(
            self._config.model_name,
            self._config.response_format,
            request.turns,
        )
        return await self._accumulator.consume(chunks)

    async def upload_document(
        self,
        data: bytes,
        declared_type: str,
        name: str,
    ) -> Message | None:
        """Extract a document into the context blob.

        Accepted whether or not a response is pending. The blob is replaced
        only after the whole document has been extracted.

        Args:
            data: Raw document bytes.
            declared_type: MIME type reported by the client.
            name: File name shown in the notification.

        Returns:
            The system notification message, or None if the declared type
            is not a PDF.

        Raises:
            ExtractionError: If the document cannot be read.
        """
        if declared_type != PDF_MIME_TYPE:
            logger.debug(f"Ignoring upload {name!r} with type {declared_type!r}")
            return None

        try:
            text = await extract_pdf(data, self._config.max_upload_bytes)
        except ExtractionError as e:
            logger.warning(f"PDF extraction failed for {name}: {e}")
            raise

        self._store.set_context(text)
        logger.info(f"Loaded context from {name} ({len(text)} characters)")
        return self._store.append(Message(role=Role.SYSTEM, text=UPLOAD_NOTICE.format(name=name)))


# Module-level singleton instance
_controller: ConversationController | None = None


def get_conversation_controller() -> ConversationController:
    """Get or create the process-wide conversation controller.

    Returns:
        ConversationController wired to the Agno backend.
    """
    global _controller
    if _controller is None:
        config = get_agent_config()
        _controller = ConversationController(backend=AgnoBackend(config), config=config)
    return _controller
