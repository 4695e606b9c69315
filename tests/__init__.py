"""Test package for the PDF chat assistant.

Structure:
    - unit/: Individual function and class tests
    - integration/: API workflow tests through the ASGI app

The language-model backend is replaced by a scripted fake; PDFs are
generated on the fly with pypdf.
Leverages pytest with pytest-check for soft assertions.
"""
