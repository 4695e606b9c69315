"""Chat endpoints: send, stream, and read history.

The streaming endpoint relays partial chunks as Server-Sent Events and
finishes with one done=true chunk carrying the stored message text.
Clients must replace any partial text with that final content.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from pdfchat.api.deps import get_controller
from pdfchat.conversation.controller import ConversationController
from pdfchat.errors import ConversationBusyError
from pdfchat.models.schemas import (
    ChatRequest,
    HistoryResponse,
    MessageOut,
    StreamChunk,
    StreamStatus,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


def _busy() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="A response is still being generated",
    )


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    controller: ConversationController = Depends(get_controller),
) -> HistoryResponse:
    """Return the conversation log and whether a reply is pending."""
    state = controller.state
    notification = controller.latest_notification
    return HistoryResponse(
        messages=[MessageOut.from_message(m) for m in state.history],
        pending=state.pending,
        context_loaded=bool(state.context_blob),
        latest_notification=MessageOut.from_message(notification) if notification else None,
    )


@router.post("", response_model=MessageOut)
async def send_message(
    request: ChatRequest,
    controller: ConversationController = Depends(get_controller),
) -> MessageOut:
    """Send a message and wait for the complete reply.

    Raises:
        409: Another reply is still pending.
    """
    try:
        result = await controller.send_message(request.message)
    except ConversationBusyError as e:
        raise _busy() from e

    if result is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message is empty",
        )
    return MessageOut.from_message(result.message)


async def _event_stream(
    controller: ConversationController,
    text: str,
) -> AsyncGenerator[str]:
    """Run one send in the background and relay its chunks."""
    queue: asyncio.Queue[str | None] = asyncio.Queue()
    task = asyncio.create_task(controller.send_message(text, on_chunk=queue.put_nowait))
    task.add_done_callback(lambda _: queue.put_nowait(None))

    yield _sse(StreamChunk(content="", done=False, status=StreamStatus.RECEIVED))

    while (content := await queue.get()) is not None:
        yield _sse(StreamChunk(content=content, done=False, status=StreamStatus.GENERATING))

    try:
        result = task.result()
    except ConversationBusyError as e:
        yield _sse(StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=str(e)))
        return

    if result is None:
        yield _sse(StreamChunk(content="", done=True, status=StreamStatus.ERROR, error="Message is empty"))
        return

    final_status = StreamStatus.ERROR if result.failed else StreamStatus.COMPLETE
    yield _sse(
        StreamChunk(
            content=result.message.text,
            done=True,
            status=final_status,
            message_id=result.message.id,
        )
    )


@router.post("/stream")
async def stream_message(
    request: ChatRequest,
    controller: ConversationController = Depends(get_controller),
) -> StreamingResponse:
    """Send a message and stream the reply as Server-Sent Events.

    Raises:
        409: Another reply is still pending.
    """
    if controller.pending:
        raise _busy()

    logger.info(f"Streaming reply for message ({len(request.message)} characters)")
    return StreamingResponse(
        _event_stream(controller, request.message),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
