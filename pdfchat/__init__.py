"""PDF Chat Assistant - conversational Q&A grounded in an uploaded document.

Combines FastAPI for HTTP streaming, Agno for model access,
pypdf for text extraction, NiceGUI for the chat page, and Pydantic
for data validation.

Components:
    - conversation: history store, request composition, stream accumulation
    - agent: backend configuration and the streaming model client
    - parsing: PDF page-by-page text extraction
    - api: HTTP endpoints and streaming responses
    - ui: Web interface for chat interactions
    - models: Domain records and request/response schemas
"""

__version__ = "0.1.0"
