"""NiceGUI chat interface with SSE streaming and PDF upload."""

import html
import json
import os
from collections.abc import Callable

import httpx
from nicegui import events, ui

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #0f0c29; min-height: 100vh; }

    .app-container {
        background: #1e1e2f;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.4);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #111827 0%, #1f2937 100%); }

    .message-user {
        background: linear-gradient(90deg, #3b82f6 0%, #8b5cf6 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #2a2a40;
        color: #dbeafe;
        border-radius: 18px 18px 18px 4px;
    }

    .message-system {
        background: #3d3d5c;
        color: #fef08a;
        border-radius: 12px;
    }

    .input-box {
        background: #2a2a40;
        border: 1px solid #4b5563;
        border-radius: 12px;
    }
</style>
"""


def render_text(text: str) -> str:
    """Escape message text and keep its line breaks."""
    return html.escape(text).replace("\n", "<br>")


async def fetch_history() -> dict:
    """Load the conversation log from the API."""
    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.get(f"{API_BASE_URL}/chat/history")
        response.raise_for_status()
        return response.json()


async def upload_document(name: str, content_type: str, data: bytes) -> str | None:
    """Send a document to the upload endpoint.

    Returns:
        An error description, or None on success.
    """
    async with httpx.AsyncClient(timeout=120.0) as client:
        try:
            response = await client.post(
                f"{API_BASE_URL}/upload/pdf",
                files={"file": (name, data, content_type)},
            )
        except httpx.RequestError as e:
            return f"Connection failed: {e}"
    if response.status_code != 200:
        return response.json().get("detail", f"HTTP {response.status_code}")
    return None


async def stream_chat_response(
    message: str,
    on_chunk: Callable[[str], None],
    on_complete: Callable[[str], None],
    on_error: Callable[[str], None],
) -> None:
    """Consume SSE stream from /chat/stream endpoint."""
    async with httpx.AsyncClient(timeout=120.0) as client:
        try:
            async with client.stream(
                "POST",
                f"{API_BASE_URL}/chat/stream",
                json={"message": message},
                headers={"Accept": "text/event-stream"},
            ) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line.startswith("data: "):
                        continue
                    data = json.loads(line[6:])
                    if data.get("error"):
                        on_error(data["error"])
                        return
                    if data.get("done"):
                        on_complete(data["content"])
                        return
                    if content := data.get("content"):
                        on_chunk(content)
        except httpx.HTTPStatusError as e:
            on_error(f"HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            on_error(f"Connection failed: {e}")


@ui.page("/")
async def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button
    busy = False

    def render_message(msg: dict) -> None:
        role = msg["role"]
        if role == "system":
            with ui.row().classes("w-full justify-center"):
                with ui.element("div").classes("px-4 py-2 message-system"):
                    ui.html(render_text(msg["text"]), sanitize=False).classes("text-sm")
            return

        is_user = role == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"max-w-[75%] px-4 py-3 {bubble}"):
                ui.html(render_text(msg["text"]), sanitize=False).classes(
                    "text-sm leading-relaxed"
                )

    async def refresh_messages() -> None:
        try:
            history = await fetch_history()
        except httpx.HTTPError as e:
            ui.notify(f"Could not load conversation: {e}", type="negative")
            return

        messages_container.clear()
        with messages_container:
            if not history["messages"]:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-500")
                    ui.label("Start a conversation").classes("text-lg text-gray-400")
            for msg in history["messages"]:
                render_message(msg)

    async def send_message() -> None:
        nonlocal busy
        text = input_field.value.strip()
        if not text or busy:
            return

        input_field.value = ""
        busy = True
        send_btn.disable()

        with messages_container:
            render_message({"role": "user", "text": text})
            with ui.row().classes("w-full justify-start"):
                with ui.element("div").classes("max-w-[75%] px-4 py-3 message-assistant"):
                    response_label = ui.html("Typing...", sanitize=False).classes(
                        "text-sm leading-relaxed italic"
                    )

        accumulated = ""

        def on_chunk(content: str) -> None:
            nonlocal accumulated
            accumulated += content
            response_label.classes(remove="italic")
            response_label.set_content(render_text(accumulated))

        def on_complete(final_text: str) -> None:
            # The stored text replaces whatever was streamed
            response_label.set_content(render_text(final_text))

        def on_error(error: str) -> None:
            ui.notify(error, type="negative")

        try:
            await stream_chat_response(text, on_chunk, on_complete, on_error)
        finally:
            busy = False
            send_btn.enable()
            await refresh_messages()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        error = await upload_document(e.file.name, e.file.content_type, data)
        if error:
            ui.notify(error, type="warning")
        e.sender.reset()
        await refresh_messages()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center"):
            ui.icon("rocket_launch").classes("text-white text-3xl")
            ui.label("PDF Chat").classes("text-lg font-semibold text-white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-3")

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end border-t border-gray-700"):
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow borderless dense rows=1 dark")
                    .classes("w-full")
                    .on("keydown.enter.prevent", send_message)
                )
            send_btn = ui.button(icon="send", on_click=send_message).props(
                "round unelevated color=indigo"
            )
            ui.upload(on_upload=handle_upload, auto_upload=True).props(
                "accept=application/pdf flat dense color=grey-8"
            ).classes("w-40")

    await refresh_messages()

