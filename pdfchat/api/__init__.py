"""FastAPI endpoints for the PDF chat assistant.

Endpoints:
    - GET /health: Service health status
    - GET /chat/history: Conversation log and pending flag
    - POST /chat: Send a message, wait for the full reply
    - POST /chat/stream: Send a message, stream the reply over SSE
    - POST /upload/pdf: Load a PDF as conversation context
"""

from pdfchat.api.app import app, create_app

__all__ = ["app", "create_app"]
