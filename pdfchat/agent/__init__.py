"""Language-model backend access.

Responsibilities:
    - Backend configuration loaded from the environment
    - Streaming client that turns composed turns into text chunks

Leverages the Agno framework for model access. The conversation layer
depends only on the LanguageModelBackend protocol.
"""

from pdfchat.agent.backend import AgnoBackend, LanguageModelBackend
from pdfchat.agent.config import AgentConfig, get_agent_config

__all__ = ["AgentConfig", "AgnoBackend", "LanguageModelBackend", "get_agent_config"]
