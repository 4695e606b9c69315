"""Pytest fixtures and shared test configuration.

Fixtures:
    - agent_config: Config with a dummy API key
    - backend: Scripted streaming backend
    - controller: ConversationController wired to the scripted backend
    - async_client: HTTPX client for API testing
    - make_pdf: Builder for blank PDF payloads
"""

import asyncio
import io
from collections.abc import AsyncGenerator, AsyncIterator, Callable, Sequence

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from pdfchat.agent.config import AgentConfig
from pdfchat.api import app
from pdfchat.api.deps import get_controller
from pdfchat.conversation.controller import ConversationController
from pdfchat.errors import BackendError
from pdfchat.models.conversation import Turn


class FakeBackend:
    """Backend that replays scripted chunks.

    Attributes:
        chunks: Chunks yielded for every call.
        fail: Raise BackendError after the chunks are yielded.
        gate: When set, each call waits on this event before yielding.
        calls: (model, response_format, turns) for every call made.
    """

    def __init__(self, chunks: Sequence[str] = ("Hello", " there")) -> None:
        self.chunks = list(chunks)
        self.fail = False
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[str, str, list[Turn]]] = []

    async def stream(
        self,
        model: str,
        response_format: str,
        turns: Sequence[Turn],
    ) -> AsyncIterator[str]:
        self.calls.append((model, response_format, list(turns)))
        if self.gate is not None:
            await self.gate.wait()
        for chunk in self.chunks:
            yield chunk
        if self.fail:
            raise BackendError("connection reset by peer")


@pytest.fixture
def agent_config() -> AgentConfig:
    return AgentConfig(api_key="sk-test-key", model_name="test-model")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def controller(backend: FakeBackend, agent_config: AgentConfig) -> ConversationController:
    return ConversationController(backend=backend, config=agent_config)


@pytest.fixture
async def async_client(
    controller: ConversationController,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient whose requests hit the test controller.
    """
    app.dependency_overrides[get_controller] = lambda: controller
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_pdf() -> Callable[[int], bytes]:
    """Return a builder for PDFs made of blank pages."""

    def build(pages: int = 1) -> bytes:
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=612, height=792)
        buffer = io.BytesIO()
        writer.write(buffer)
        return buffer.getvalue()

    return build
