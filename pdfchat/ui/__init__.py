"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Conversation display for user, assistant and system messages
    - Streaming reply display over SSE
    - PDF upload control

Contains no business logic. Delegates all operations to the API.
"""
