"""Streaming language-model client built on Agno.

The conversation controller only knows the LanguageModelBackend protocol:
give it a model id, a response format and an ordered list of turns, get
back an async stream of text chunks. AgnoBackend is the production
implementation; tests substitute a scripted fake.

Each call is stateless. History lives in the ConversationStore and is
replayed as turns, so the Agno agent runs without storage or
history of its own.
"""

import logging
from collections.abc import AsyncIterator, Sequence
from typing import Protocol

from agno.agent import Agent
from agno.models.message import Message as AgnoMessage
from agno.models.openai import OpenAIChat
from agno.run.agent import RunEvent

from pdfchat.agent.config import AgentConfig
from pdfchat.errors import BackendError
from pdfchat.models.conversation import Turn

logger = logging.getLogger(__name__)

# Turn roles use the "model" name; OpenAI-style chat APIs call it "assistant"
_ROLE_MAP = {"user": "user", "model": "assistant"}


class LanguageModelBackend(Protocol):
    """Black-box streaming text generator."""

    def stream(
        self,
        model: str,
        response_format: str,
        turns: Sequence[Turn],
    ) -> AsyncIterator[str]: ...


class AgnoBackend:
    """LanguageModelBackend backed by an Agno agent over OpenAIChat.

    Agents are built lazily per (model, response format) pair and reused.
    """

    def __init__(self, config: AgentConfig) -> None:
        """Initialize the backend.

        Args:
            config: Credentials and sampling settings.
        """
        self._config = config
        self._agents: dict[tuple[str, str], Agent] = {}

    def _create_agent(self, model: str, response_format: str) -> Agent:
        """Create an Agno agent for one model and response format.

        Returns:
            Agent with no storage, knowledge or history of its own.
        """
        chat_model = OpenAIChat(
            id=model,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        return Agent(
            model=chat_model,
            description="A helpful assistant that answers questions about an uploaded PDF.",
            instructions=[
                "Provide helpful and accurate responses.",
                "When the user message includes PDF content context, ground your answer in it.",
                "If the context is empty, answer from general knowledge.",
            ],
            markdown=response_format == "text/markdown",
        )

    def _get_agent(self, model: str, response_format: str) -> Agent:
        key = (model, response_format)
        if key not in self._agents:
            self._agents[key] = self._create_agent(model, response_format)
        return self._agents[key]

    async def stream(
        self,
        model: str,
        response_format: str,
        turns: Sequence[Turn],
    ) -> AsyncIterator[str]:
        """Stream response chunks for a list of turns.

        Args:
            model: Model identifier.
            response_format: "text/plain" or "text/markdown".
            turns: Conversation turns, ending with the user turn to answer.

        Yields:
            Response text chunks as they arrive.

        Raises:
            BackendError: On any SDK failure or error event.
        """
        messages = [AgnoMessage(role=_ROLE_MAP[turn.role], content=turn.text) for turn in turns]

        try:
            agent = self._get_agent(model, response_format)
            response_stream = agent.arun(messages, stream=True)

            async for chunk in response_stream:
                event = getattr(chunk, "event", None)
                if event == RunEvent.run_error:
                    raise BackendError(f"Model run failed: {getattr(chunk, 'content', '')}")
                if event == RunEvent.run_content and chunk.content:
                    yield chunk.content

        except BackendError:
            raise
        except Exception as e:
            logger.error(f"Backend stream failed for model {model}: {e}")
            raise BackendError(str(e)) from e
