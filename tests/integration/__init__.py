"""Integration tests for the HTTP surface.

Drives the real FastAPI app over httpx's ASGI transport with the
controller wired to a scripted backend. No network access required.
"""
