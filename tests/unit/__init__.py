"""Unit tests for individual components in isolation.

Coverage:
    - conversation/: store, composer, accumulator, controller
    - parsing/: page-by-page extraction and payload validation
    - agent/: configuration and the Agno streaming client

Uses mocks for external services when needed.
"""
