"""FastAPI application factory.

Registers the chat and upload routers. The conversation controller is
resolved per request through pdfchat.api.deps.get_controller.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdfchat import __version__
from pdfchat.api.chat import router as chat_router
from pdfchat.api.upload import router as upload_router


def create_app() -> FastAPI:
    """Build the API application.

    Returns:
        FastAPI app with chat, upload and health routes.
    """
    application = FastAPI(
        title="PDF Chat API",
        description="Chat with a language model grounded in one uploaded PDF.",
        version=__version__,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(chat_router)
    application.include_router(upload_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": "pdf-chat"}

    return application


app = create_app()
