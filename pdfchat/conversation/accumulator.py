"""Buffer a streamed response into one finalized text.

Partial text is observable while the stream runs but is never handed out
as a result: either the whole stream completes or StreamError is raised
and the buffer is discarded.
"""

from collections.abc import AsyncIterable, Callable, Iterable

from pdfchat.errors import StreamError


class StreamAccumulator:
    """Concatenate chunks in arrival order.

    Attributes:
        partial: Text received so far.
        chunk_count: Number of chunks received, including empty ones.
        done: Whether the stream completed successfully.
    """

    def __init__(self, on_chunk: Callable[[str], None] | None = None) -> None:
        self._on_chunk = on_chunk
        self._parts: list[str] = []
        self.chunk_count = 0
        self.done = False

    @property
    def partial(self) -> str:
        return "".join(self._parts)

    def _add(self, chunk: str) -> None:
        self.chunk_count += 1
        if not chunk:
            return
        self._parts.append(chunk)
        if self._on_chunk is not None:
            self._on_chunk(chunk)

    async def consume(self, chunks: AsyncIterable[str] | Iterable[str]) -> str:
        """Drain a chunk stream and return the full text.

        Args:
            chunks: Async or plain iterable of text fragments.

        Returns:
            All chunks joined with no separator ("" for an empty stream).

        Raises:
            StreamError: If the stream fails before completion.
        """
        try:
            if isinstance(chunks, AsyncIterable):
                async for chunk in chunks:
                    self._add(chunk)
            else:
                for chunk in chunks:
                    self._add(chunk)
        except Exception as e:
            self._parts.clear()
            raise StreamError(f"Stream failed after {self.chunk_count} chunks: {e}") from e

        self.done = True
        return self.partial
